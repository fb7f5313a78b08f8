"""
Module: builder.layout.footers

Purpose:
    Second layout phase: once the page count is known, compute the
    chrome for every page (page-number text and the corner logo).

Key Functions:
    - stamp_footers(): One FooterStamp per page of a plan
"""

from __future__ import annotations

from .models import FooterStamp, PageLayoutPlan

DEFAULT_FOOTER_TEMPLATE = "Page {page} / {total}"


def stamp_footers(
    plan: PageLayoutPlan,
    *,
    template: str = DEFAULT_FOOTER_TEMPLATE,
) -> tuple[FooterStamp, ...]:
    """
    Build the footer stamps for a finished plan.

    Page 1 carries the centered logo inline, so only pages 2+ get the
    corner logo.

    Args:
        plan: Completed layout plan
        template: Footer text with ``{page}`` and ``{total}`` fields

    Returns:
        Tuple of FooterStamps, one per page, in page order

    Example:
        >>> [s.text for s in stamp_footers(plan)]
        ['Page 1 / 2', 'Page 2 / 2']
    """
    total = plan.page_count
    return tuple(
        FooterStamp(
            page_number=page,
            page_count=total,
            text=template.format(page=page, total=total),
            corner_logo=plan.has_logo and page > 1,
        )
        for page in range(1, total + 1)
    )
