"""
Module: builder.output.renderer

Purpose:
    Translate a PageLayoutPlan into draw instructions.
    Each placement becomes text, image, line and shape instructions on its
    page; footer stamps add page numbers and the corner logo afterwards.

Key Functions:
    - render_report(): Main rendering function

Dependencies:
    - reportlab: Font metrics for centering and fitting text
    - builder.images.encoder: Embeddability check
    - builder.layout.models: PageLayoutPlan, Placement, FooterStamp

Used By:
    - builder.controller: Report assembly
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth

from photo_report.core.errors import AssetError
from photo_report.core.models import ImageAsset, PhotoRecord, ReportSection
from photo_report.builder.images.encoder import probe_image
from photo_report.builder.layout.config import LayoutConfig
from photo_report.builder.layout.models import FooterStamp, PageLayoutPlan, Placement, PlacementKind

from .locale import ReportLabels, format_date, labels_for
from .models import DrawOp, ExportedReport, ImageOp, LineOp, PolygonOp, RenderedPage, RoundedRectOp, TextOp

logger = logging.getLogger(__name__)

# Fonts
TITLE_FONT = "Times-Bold"
BOLD_FONT = "Helvetica-Bold"
REGULAR_FONT = "Helvetica"
MIN_FONT_SIZE = 6.0
UNDERLINE_WIDTH = 0.5


def render_report(
    plan: PageLayoutPlan,
    footers: Sequence[FooterStamp],
    *,
    name: str,
    report_id: int,
    layout: Optional[LayoutConfig] = None,
    locale: str = "fr-FR",
    logo: Optional[ImageAsset] = None,
) -> ExportedReport:
    """
    Render a layout plan to draw instructions.

    Image blocks that cannot be embedded degrade to a text placeholder
    and a warning; the export always completes.

    Args:
        plan: Layout plan from the paginator
        footers: Stamps from stamp_footers(plan)
        name: Artifact name
        report_id: Report being exported
        layout: Page geometry (must match the one used for planning)
        locale: Locale for labels and dates
        logo: Logo drawn at LOGO placements and in the corner of pages 2+

    Returns:
        ExportedReport with one RenderedPage per planned page

    Example:
        >>> report = render_report(plan, stamp_footers(plan), name="report-4-2024-05-02", report_id=4)
        >>> report.page_count == plan.page_count
        True
    """
    layout = layout or LayoutConfig()
    labels = labels_for(locale)
    warnings: List[str] = list(plan.warnings)
    pages: Dict[int, List[DrawOp]] = {n: [] for n in range(1, plan.page_count + 1)}

    for placement in plan.placements:
        ops = pages[placement.page_number]
        if placement.kind is PlacementKind.LOGO:
            _draw_logo(ops, placement, layout, logo, warnings)
        elif placement.kind is PlacementKind.TITLE:
            _draw_title(ops, placement, layout)
        elif placement.kind is PlacementKind.INFO_BLOCK:
            _draw_info_block(ops, placement, layout, labels, locale)
        elif placement.kind is PlacementKind.PHOTO_PAIR:
            _draw_photo_pair(ops, placement, layout, labels, warnings)
        elif placement.kind is PlacementKind.PLACEHOLDER:
            _draw_placeholder(ops, placement, layout, labels)

    for stamp in footers:
        _draw_footer(pages[stamp.page_number], stamp, layout, logo, labels, warnings)

    logger.info(f"Rendered {plan.page_count} pages for report {report_id}")

    return ExportedReport(
        name=name,
        report_id=report_id,
        pages=tuple(RenderedPage(number=n, ops=tuple(ops)) for n, ops in sorted(pages.items())),
        warnings=tuple(warnings),
    )


def _draw_logo(
    ops: List[DrawOp],
    placement: Placement,
    layout: LayoutConfig,
    logo: Optional[ImageAsset],
    warnings: List[str],
) -> None:
    """Centered logo on page 1."""
    if logo is None:
        logger.warning("Logo placement planned but no logo supplied")
        return
    x = (layout.page_width - layout.logo_width) / 2
    ops.append(
        _image_block(logo.data, x, placement.offset, layout.logo_width, layout.logo_height,
                     "logo", None, warnings)
    )


def _draw_title(ops: List[DrawOp], placement: Placement, layout: LayoutConfig) -> None:
    """Centered, underlined title; the placement offset is the baseline."""
    text = str(placement.payload or "")
    if not text:
        return
    usable = layout.page_width - 2 * layout.before_x
    size = _fit_font_size(text, TITLE_FONT, layout.title_font_size, usable)
    width = _text_width_mm(text, TITLE_FONT, size)
    center = layout.page_width / 2
    baseline = placement.offset
    ops.append(TextOp(text, center, baseline, TITLE_FONT, size, align="center"))
    underline_y = baseline + layout.title_underline_offset
    ops.append(LineOp(center - width / 2, underline_y, center + width / 2, underline_y, UNDERLINE_WIDTH))


def _draw_info_block(
    ops: List[DrawOp],
    placement: Placement,
    layout: LayoutConfig,
    labels: ReportLabels,
    locale: str,
) -> None:
    """
    Rounded container with one text row per line.

    Rows: company/city/building (bold, upper case), mission, date range.
    """
    section = placement.payload
    if not isinstance(section, ReportSection):
        raise TypeError(f"INFO_BLOCK payload must be a ReportSection, got {type(section).__name__}")
    key = section.key
    x = layout.info_x
    top = placement.offset
    row = layout.info_row_height

    ops.append(RoundedRectOp(x, top, layout.info_width, layout.info_height, layout.info_radius))
    for i in range(1, layout.info_rows):
        ops.append(LineOp(x, top + row * i, x + layout.info_width, top + row * i))

    start = format_date(key.start_date, locale)
    if key.end_date is not None:
        dates = labels.date_range.format(start=start, end=format_date(key.end_date, locale))
    else:
        dates = labels.single_date.format(start=start)

    rows = [
        (labels.company_city.format(company=key.company.upper(), city=key.city.upper()), BOLD_FONT),
        (labels.mission.format(task=key.task), REGULAR_FONT),
        (dates, REGULAR_FONT),
    ]
    usable = layout.info_width - 2 * layout.info_text_inset
    for i, (text, font) in enumerate(rows[: layout.info_rows]):
        size = _fit_font_size(text, font, layout.info_font_size, usable)
        ops.append(TextOp(
            text,
            x + layout.info_text_inset,
            top + row * i + layout.info_text_baseline,
            font,
            size,
        ))


def _draw_photo_pair(
    ops: List[DrawOp],
    placement: Placement,
    layout: LayoutConfig,
    labels: ReportLabels,
    warnings: List[str],
) -> None:
    """Labelled before/after images joined by an arrow at their midpoint."""
    record = placement.payload
    if not isinstance(record, PhotoRecord):
        raise TypeError(f"PHOTO_PAIR payload must be a PhotoRecord, got {type(record).__name__}")
    top = placement.offset
    label_y = top - layout.label_rise

    for text, x, data, side in (
        (labels.before, layout.before_x, record.before_image, "before"),
        (labels.after, layout.after_x, record.after_image, "after"),
    ):
        ops.append(TextOp(text, x + layout.image_width / 2, label_y, BOLD_FONT, layout.label_font_size, align="center"))
        ops.append(_image_block(
            data or b"", x, top, layout.image_width, layout.image_height,
            f"record {record.id} {side} image", labels, warnings,
        ))

    arrow_y = top + layout.image_height / 2
    shaft_end = layout.arrow_end_x - layout.arrow_head_length
    ops.append(LineOp(layout.arrow_start_x, arrow_y, shaft_end, arrow_y, layout.arrow_line_width))
    ops.append(PolygonOp((
        (layout.arrow_end_x, arrow_y),
        (shaft_end, arrow_y - layout.arrow_head_half_width),
        (shaft_end, arrow_y + layout.arrow_head_half_width),
    )))


def _draw_placeholder(
    ops: List[DrawOp],
    placement: Placement,
    layout: LayoutConfig,
    labels: ReportLabels,
) -> None:
    """Text line standing in for a record that lacks an image."""
    ops.append(TextOp(labels.images_unavailable, layout.before_x, placement.offset, REGULAR_FONT, layout.label_font_size))


def _draw_footer(
    ops: List[DrawOp],
    stamp: FooterStamp,
    layout: LayoutConfig,
    logo: Optional[ImageAsset],
    labels: ReportLabels,
    warnings: List[str],
) -> None:
    """Corner logo (pages 2+) and centered page number."""
    if stamp.corner_logo and logo is not None:
        ops.append(_image_block(
            logo.data,
            layout.corner_logo_x,
            layout.corner_logo_y,
            layout.corner_logo_width,
            layout.corner_logo_height,
            f"corner logo on page {stamp.page_number}",
            None,
            warnings,
        ))
    ops.append(TextOp(
        stamp.text,
        layout.page_width / 2,
        layout.content_bottom,
        REGULAR_FONT,
        layout.footer_font_size,
        align="center",
    ))


def _image_block(
    data: bytes,
    x: float,
    y: float,
    width: float,
    height: float,
    what: str,
    labels: Optional[ReportLabels],
    warnings: List[str],
) -> DrawOp:
    """
    ImageOp for embeddable data, otherwise a centered text placeholder.

    Args:
        data: Encoded image bytes
        x, y: Top-left corner (mm)
        width, height: Box size (mm)
        what: Description used in the warning
        labels: Labels for the placeholder text (None -> English)
        warnings: Collected warnings (appended on failure)
    """
    try:
        probe_image(data)
    except AssetError as e:
        message = f"Cannot embed {what}: {e}"
        logger.warning(message)
        warnings.append(message)
        text = labels.image_unavailable if labels else "Image unavailable"
        return TextOp(text, x + width / 2, y + height / 2, REGULAR_FONT, 9.0, align="center")
    return ImageOp(data, x, y, width, height)


def _text_width_mm(text: str, font: str, size: float) -> float:
    """Rendered text width in millimetres."""
    return stringWidth(text, font, size) / mm


def _fit_font_size(text: str, font: str, base_size: float, max_width_mm: float) -> float:
    """
    Shrink the font until text fits the width.

    Returns base_size when it already fits, never less than MIN_FONT_SIZE.
    """
    size = float(base_size)
    while size > MIN_FONT_SIZE and _text_width_mm(text, font, size) > max_width_mm:
        size -= 0.5
    return max(size, MIN_FONT_SIZE)
