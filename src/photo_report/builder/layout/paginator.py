"""
Module: builder.layout.paginator

Purpose:
    Flow report sections onto pages.
    Each section contributes one info block followed by one photo unit per
    record; page breaks are driven by per-page capacity and vertical room.

Key Functions:
    - plan_layout(): Main pagination function

Algorithm:
    One LayoutCursor walks the sections in order:
    1. Page 1 starts with the logo (optional) and the title.
    2. Before an info block, break when the room left on the page is
       smaller than header_height, the page is already at capacity, or
       the info block and its first unit would cross the footer line.
    3. Sections after the first add a section gap, then the info block.
       An info block is never split.
    4. Before each photo unit, break when the page is at capacity, or
       the unit would cross the footer line on a page that already
       holds a unit.
    5. Records missing an image become placeholders; they still use a
       capacity slot.

Dependencies:
    - builder.layout.models: LayoutCursor, Placement, PageLayoutPlan
    - builder.layout.config: LayoutConfig

Used By:
    - builder.controller: Report assembly
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from photo_report.core.models import PhotoRecord, ReportSection

from .config import LayoutConfig
from .models import LayoutCursor, PageCapacities, PageLayoutPlan, Placement, PlacementKind

logger = logging.getLogger(__name__)


def plan_layout(
    sections: Sequence[ReportSection],
    capacities: PageCapacities,
    header_height: float,
    *,
    layout: Optional[LayoutConfig] = None,
    has_logo: bool = False,
    title: str = "",
) -> PageLayoutPlan:
    """
    Arrange sections onto pages.

    Args:
        sections: Report sections in display order
        capacities: Photo units allowed on page 1 and on later pages
        header_height: Minimum room (mm) below the cursor for a section
            header to start on the current page
        layout: Page geometry (defaults to A4)
        has_logo: Reserve the centered logo above the title on page 1
        title: Report title text (payload of the TITLE placement)

    Returns:
        PageLayoutPlan with placements in drawing order

    Raises:
        ValueError: If header_height is not positive

    Example:
        >>> plan = plan_layout(sections, PageCapacities(3, 4), 57.0)
        >>> plan.page_count
        2
    """
    if header_height <= 0:
        raise ValueError(f"header_height must be positive: {header_height}")
    layout = layout or LayoutConfig()

    placements: List[Placement] = []
    warnings: List[str] = []
    cursor = LayoutCursor(offset=layout.margin_top)

    # Page-1 chrome, consumed once
    if has_logo:
        placements.append(Placement(
            page_number=1,
            offset=cursor.offset,
            height=layout.logo_height + layout.logo_gap,
            kind=PlacementKind.LOGO,
        ))
        cursor.advance(layout.logo_height + layout.logo_gap)

    placements.append(Placement(
        page_number=1,
        offset=cursor.offset,
        height=layout.title_advance,
        kind=PlacementKind.TITLE,
        payload=title,
    ))
    cursor.advance(layout.title_advance)

    for index, section in enumerate(sections):
        room_left = layout.page_height - cursor.offset
        gap = layout.section_gap if index > 0 else 0.0
        # The info block stays on the page of its first unit
        first_drawn = _unit_dimensions(section.records[0], layout)[2]
        header_bottom = cursor.offset + gap + layout.info_block_height + first_drawn
        if room_left < header_height:
            _break_page(cursor, layout, f"section {index} header needs {header_height}mm, {room_left:.1f}mm left")
        elif cursor.is_full(capacities):
            _break_page(cursor, layout, f"page full before section {index}")
        elif header_bottom > layout.content_bottom:
            _break_page(cursor, layout, f"section {index} header and first unit would cross the footer")

        if index > 0:
            cursor.advance(layout.section_gap)

        placements.append(Placement(
            page_number=cursor.page_number,
            offset=cursor.offset,
            height=layout.info_block_height,
            kind=PlacementKind.INFO_BLOCK,
            section_index=index,
            payload=section,
        ))
        cursor.advance(layout.info_block_height)

        for record in section.records:
            kind, block_height, drawn_height = _unit_dimensions(record, layout)

            if cursor.is_full(capacities):
                _break_page(cursor, layout, f"capacity {cursor.capacity(capacities)} reached")
            elif cursor.offset + drawn_height > layout.content_bottom:
                if cursor.photos_on_page > 0:
                    _break_page(cursor, layout, f"record {record.id} would cross the footer")
                else:
                    logger.warning(
                        f"Record {record.id} overflows page {cursor.page_number}: "
                        f"bottom at {cursor.offset + drawn_height:.1f}mm, footer at {layout.content_bottom:.1f}mm"
                    )

            if kind is PlacementKind.PLACEHOLDER:
                warnings.append(f"Record {record.id} is missing an image; placed as placeholder")

            placements.append(Placement(
                page_number=cursor.page_number,
                offset=cursor.offset,
                height=block_height,
                kind=kind,
                section_index=index,
                payload=record,
            ))
            cursor.place_unit(block_height, capacities)

    logger.info(
        f"Planned {len(sections)} sections "
        f"({sum(s.record_count for s in sections)} photo units) onto {cursor.page_number} pages"
    )

    return PageLayoutPlan(
        placements=tuple(placements),
        page_count=cursor.page_number,
        has_logo=has_logo,
        warnings=tuple(warnings),
    )


def _unit_dimensions(record: PhotoRecord, layout: LayoutConfig) -> tuple[PlacementKind, float, float]:
    """Return (kind, consumed height, drawn height) for one record."""
    if record.is_complete:
        return PlacementKind.PHOTO_PAIR, layout.pair_block_height, layout.image_height
    return PlacementKind.PLACEHOLDER, layout.placeholder_block_height, layout.placeholder_height


def _break_page(cursor: LayoutCursor, layout: LayoutConfig, reason: str) -> None:
    """Start a new page below the corner logo."""
    cursor.break_page(layout.continuation_top)
    logger.debug(f"Page break to page {cursor.page_number}: {reason}")
