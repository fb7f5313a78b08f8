"""
Module: builder.output.pdf_writer

Purpose:
    Execute an ExportedReport's draw instructions on a ReportLab canvas.
    One RenderedPage becomes one PDF page.

Key Functions:
    - write_pdf(): Write report to a path or binary stream
    - pdf_bytes(): Render report to bytes

Dependencies:
    - reportlab: PDF generation

Used By:
    - builder.controller: export_report()
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO, List, Optional, Tuple, Union

from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from photo_report.builder.layout.config import LayoutConfig

from .models import DrawOp, ExportedReport, ImageOp, LineOp, PolygonOp, RoundedRectOp, TextOp

logger = logging.getLogger(__name__)

# ImageReader/drawImage failures on undecodable data
_EMBED_ERRORS = (OSError, ValueError, TypeError, SyntaxError)


def write_pdf(
    report: ExportedReport,
    target: Union[Path, BinaryIO],
    *,
    layout: Optional[LayoutConfig] = None,
) -> Tuple[str, ...]:
    """
    Write the report as a PDF.

    Args:
        report: Rendered report
        target: Output path (parent directories are created) or binary stream
        layout: Page geometry used for rendering

    Returns:
        Warnings for image blocks that could not be embedded

    Raises:
        OSError: If the file cannot be written
    """
    layout = layout or LayoutConfig()
    if isinstance(target, Path):
        target.parent.mkdir(parents=True, exist_ok=True)
        filename: Union[str, BinaryIO] = str(target)
    else:
        filename = target

    page_height = layout.page_height
    c = canvas.Canvas(filename, pagesize=(layout.page_width * mm, page_height * mm), invariant=1)
    c.setTitle(report.name)
    c.setAuthor("btp-photo-report")

    warnings: List[str] = []
    for page in report.pages:
        for op in page.ops:
            _draw_op(c, op, page_height, page.number, warnings)
        c.showPage()
    c.save()

    logger.info(f"Wrote {report.page_count} pages for {report.filename}")
    return tuple(warnings)


def pdf_bytes(report: ExportedReport, *, layout: Optional[LayoutConfig] = None) -> bytes:
    """Render the report to PDF bytes."""
    buf = io.BytesIO()
    write_pdf(report, buf, layout=layout)
    return buf.getvalue()


def _draw_op(
    c: canvas.Canvas,
    op: DrawOp,
    page_height: float,
    page_number: int,
    warnings: List[str],
) -> None:
    """Dispatch one instruction; top-down mm to bottom-up points."""
    if isinstance(op, TextOp):
        c.setFillColorRGB(0, 0, 0)
        c.setFont(op.font, op.size)
        y = _flip(page_height, op.y)
        if op.align == "center":
            c.drawCentredString(op.x * mm, y, op.text)
        else:
            c.drawString(op.x * mm, y, op.text)
    elif isinstance(op, ImageOp):
        _draw_image(c, op, page_height, page_number, warnings)
    elif isinstance(op, LineOp):
        c.setStrokeColorRGB(0, 0, 0)
        c.setLineWidth(op.width * mm)
        c.line(op.x1 * mm, _flip(page_height, op.y1), op.x2 * mm, _flip(page_height, op.y2))
    elif isinstance(op, RoundedRectOp):
        _draw_rounded_rect(c, op, page_height)
    elif isinstance(op, PolygonOp):
        _draw_polygon(c, op, page_height)
    else:
        raise TypeError(f"Unknown draw instruction: {type(op).__name__}")


def _draw_image(
    c: canvas.Canvas,
    op: ImageOp,
    page_height: float,
    page_number: int,
    warnings: List[str],
) -> None:
    """Draw an image, or a placeholder line if ReportLab rejects it."""
    try:
        reader = ImageReader(io.BytesIO(op.data))
        c.drawImage(
            reader,
            op.x * mm,
            _flip(page_height, op.y + op.height),
            width=op.width * mm,
            height=op.height * mm,
        )
    except _EMBED_ERRORS as e:
        message = f"Could not embed image on page {page_number}: {e}"
        logger.warning(message)
        warnings.append(message)
        c.setFont("Helvetica", 9)
        c.drawCentredString((op.x + op.width / 2) * mm, _flip(page_height, op.y + op.height / 2), "Image unavailable")


def _draw_rounded_rect(c: canvas.Canvas, op: RoundedRectOp, page_height: float) -> None:
    """Rounded rectangle, falling back to a plain one."""
    c.setStrokeColorRGB(0, 0, 0)
    c.setLineWidth(op.line_width * mm)
    x = op.x * mm
    y = _flip(page_height, op.y + op.height)
    if hasattr(c, "roundRect"):
        c.roundRect(x, y, op.width * mm, op.height * mm, op.radius * mm, stroke=1, fill=0)
    else:
        c.rect(x, y, op.width * mm, op.height * mm, stroke=1, fill=0)


def _draw_polygon(c: canvas.Canvas, op: PolygonOp, page_height: float) -> None:
    c.setFillColorRGB(0, 0, 0)
    path = c.beginPath()
    first_x, first_y = op.points[0]
    path.moveTo(first_x * mm, _flip(page_height, first_y))
    for x, y in op.points[1:]:
        path.lineTo(x * mm, _flip(page_height, y))
    path.close()
    c.drawPath(path, stroke=0, fill=1 if op.fill else 0)


def _flip(page_height_mm: float, y_mm: float) -> float:
    """
    Convert a top-down mm coordinate to bottom-up PDF points.

    Example:
        >>> _flip(297.0, 10.0) / mm
        287.0
    """
    return (page_height_mm - y_mm) * mm
