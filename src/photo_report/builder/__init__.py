"""
Module: builder

Purpose:
    Report building pipeline for site photo intervention reports.
    Groups a report's photo records into sections, paginates them,
    renders draw instructions and writes the PDF.

Key Functions:
    - group_records(): Records to ordered sections
    - plan_layout(): Sections to a paginated layout plan
    - render_report(): Plan to draw instructions
    - assemble() / export_report(): Main entry points

Key Classes:
    - ReportConfig: Configuration for exporting
    - LayoutConfig: Page geometry
    - ExportResult: Paths and statistics of a written report

Dependencies:
    - reportlab: PDF output and font metrics
    - PIL: Image encoding and probing
    - photo_report.core.models: PhotoRecord, ReportSection, ImageAsset

Used By:
    - photo_report.cli: Command line interface
"""

from .config import ReportConfig, load_config
from .layout import LayoutConfig, PageCapacities, plan_layout, stamp_footers
from .grouping import group_records
from .output import ExportedReport, render_report, write_pdf
from .controller import ExportResult, assemble, export_report, report_name

__all__ = [
    # Config
    "ReportConfig",
    "LayoutConfig",
    "PageCapacities",
    "load_config",
    # Pipeline
    "group_records",
    "plan_layout",
    "stamp_footers",
    "render_report",
    "write_pdf",
    # Controller
    "assemble",
    "export_report",
    "report_name",
    "ExportResult",
    "ExportedReport",
]
