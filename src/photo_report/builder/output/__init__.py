"""
Module: builder.output

Purpose:
    Rendering and PDF output for photo reports.
    Converts PageLayoutPlan to draw instructions, then to PDF with ReportLab.

Key Functions:
    - render_report(): Plan -> ExportedReport (draw instructions)
    - write_pdf() / pdf_bytes(): ExportedReport -> PDF

Dependencies:
    - reportlab: PDF generation and font metrics
    - PIL: Embeddability checks
"""

from .models import (
    DrawOp,
    ExportedReport,
    ImageOp,
    LineOp,
    PolygonOp,
    RenderedPage,
    RoundedRectOp,
    TextOp,
)
from .renderer import render_report
from .pdf_writer import pdf_bytes, write_pdf

__all__ = [
    "DrawOp",
    "TextOp",
    "ImageOp",
    "LineOp",
    "RoundedRectOp",
    "PolygonOp",
    "RenderedPage",
    "ExportedReport",
    "render_report",
    "write_pdf",
    "pdf_bytes",
]
