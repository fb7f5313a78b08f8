"""
Module: builder.controller

Purpose:
    Orchestrate the complete report export pipeline.
    Validate → Group → Plan → Stamp footers → Render → Write

Key Functions:
    - assemble(): Records to an in-memory ExportedReport
    - export_report(): assemble() plus PDF and metadata files

Key Classes:
    - ExportResult: Paths and statistics of a written report

Dependencies:
    - builder.grouping: Section grouping
    - builder.layout: Pagination and footer stamps
    - builder.output: Rendering and PDF writing

Used By:
    - photo_report.cli: export command
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, replace
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from photo_report import __version__
from photo_report.core.errors import AssetError, NotFoundError, ReportError
from photo_report.core.models import ImageAsset, PhotoRecord, ReportSection
from photo_report.core.schemas import validate_records

from .config import ReportConfig
from .grouping import group_records
from .images import probe_image
from .layout import PageLayoutPlan, plan_layout, stamp_footers
from .output import ExportedReport, render_report, write_pdf
from .output.locale import labels_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportResult:
    """
    Written report (immutable).

    Attributes:
        pdf_path: Path to the generated PDF
        metadata_path: Path to the metadata JSON (None if disabled)
        page_count: Number of pages generated
        warnings: Degraded units and other non-fatal issues
        report: Rendered report the PDF was written from

    Example:
        >>> result = export_report(records, 4, Path("output"))
        >>> result.pdf_path.name
        'report-4-2024-05-02.pdf'
    """

    pdf_path: Path
    metadata_path: Optional[Path]
    page_count: int
    warnings: tuple[str, ...]
    report: ExportedReport


def report_name(report_id: int, today: date) -> str:
    """Deterministic artifact name, e.g. "report-4-2024-05-02"."""
    return f"report-{report_id}-{today.isoformat()}"


def assemble(
    records: Sequence[PhotoRecord],
    report_id: int,
    logo: Optional[ImageAsset] = None,
    *,
    config: Optional[ReportConfig] = None,
    today: Optional[date] = None,
) -> ExportedReport:
    """
    Build one report from its records.

    Pipeline:
    1. Check the report exists among the records
    2. Validate report metadata
    3. Group into sections
    4. Plan pages and stamp footers
    5. Render draw instructions

    Args:
        records: Fetched records (may include other reports)
        report_id: Report to export
        logo: Optional company logo
        config: Export configuration (defaults to ReportConfig())
        today: Date used in the artifact name (defaults to today)

    Returns:
        ExportedReport ready for write_pdf()

    Raises:
        NotFoundError: If records exist but none belong to report_id
        ValidationError: If no records are given or metadata is missing

    Example:
        >>> report = assemble(records, 4, today=date(2024, 5, 2))
        >>> report.filename
        'report-4-2024-05-02.pdf'
    """
    report, _, _ = _build(records, report_id, logo, config or ReportConfig(), today or date.today())
    return report


def export_report(
    records: Sequence[PhotoRecord],
    report_id: int,
    output_dir: Path,
    logo: Optional[ImageAsset] = None,
    *,
    config: Optional[ReportConfig] = None,
    today: Optional[date] = None,
) -> ExportResult:
    """
    Export a report to ``output_dir``.

    Writes ``{name}.pdf`` and, unless disabled, ``{name}.metadata.json``
    next to it.

    Args:
        records: Fetched records (may include other reports)
        report_id: Report to export
        output_dir: Destination directory (created if missing)
        logo: Optional company logo
        config: Export configuration (defaults to ReportConfig())
        today: Date used in the artifact name (defaults to today)

    Returns:
        ExportResult with paths, page count and warnings

    Raises:
        NotFoundError: If records exist but none belong to report_id
        ValidationError: If no records are given or metadata is missing
        ReportError: If an output file cannot be written
    """
    config = config or ReportConfig()
    start_time = time.perf_counter()
    logger.info(f"Starting export of report {report_id}")

    report, sections, plan = _build(records, report_id, logo, config, today or date.today())

    pdf_path = output_dir / report.filename
    try:
        write_warnings = write_pdf(report, pdf_path, layout=config.layout)
    except OSError as e:
        raise ReportError(f"Failed to write {pdf_path}: {e}") from e
    warnings = report.warnings + write_warnings

    metadata_path: Optional[Path] = None
    if config.write_metadata:
        metadata_path = output_dir / f"{report.name}.metadata.json"
        _write_metadata(metadata_path, _build_metadata(config, report, sections, plan, warnings))

    elapsed = time.perf_counter() - start_time
    logger.info(f"Exported {pdf_path.name} ({report.page_count} pages) in {elapsed:.2f}s")

    return ExportResult(
        pdf_path=pdf_path,
        metadata_path=metadata_path,
        page_count=report.page_count,
        warnings=warnings,
        report=report,
    )


def _build(
    records: Sequence[PhotoRecord],
    report_id: int,
    logo: Optional[ImageAsset],
    config: ReportConfig,
    today: date,
) -> Tuple[ExportedReport, List[ReportSection], PageLayoutPlan]:
    """Run the pipeline; returns the report with its sections and plan."""
    if records and not any(r.report_id == report_id for r in records):
        raise NotFoundError(f"Report {report_id} not found among {len(records)} records")

    validate_records(r for r in records if r.report_id == report_id)
    sections = group_records(records, report_id)

    warnings: List[str] = []
    if logo is not None:
        try:
            probe_image(logo.data)
        except AssetError as e:
            message = f"Logo dropped: {e}"
            logger.warning(message)
            warnings.append(message)
            logo = None

    labels = labels_for(config.locale)
    plan = plan_layout(
        sections,
        config.capacities,
        config.header_height,
        layout=config.layout,
        has_logo=logo is not None,
        title=f"{labels.title} - {sections[0].site_name}",
    )
    footers = stamp_footers(plan, template=labels.footer)

    report = render_report(
        plan,
        footers,
        name=report_name(report_id, today),
        report_id=report_id,
        layout=config.layout,
        locale=config.locale,
        logo=logo,
    )
    if warnings:
        report = replace(report, warnings=tuple(warnings) + report.warnings)
    return report, sections, plan


def _build_metadata(
    config: ReportConfig,
    report: ExportedReport,
    sections: Sequence[ReportSection],
    plan: PageLayoutPlan,
    warnings: Sequence[str],
) -> dict:
    """
    Build metadata dictionary for an exported report.

    Contains:
    - Export configuration
    - Section and page statistics
    - Per-placement manifest
    - Timestamp

    Returns:
        Metadata dictionary ready for JSON serialization
    """
    section_details = [
        {
            "index": index,
            "site_name": section.site_name,
            "city": section.key.city,
            "building": section.key.building,
            "task": section.key.task,
            "company": section.key.company,
            "start_date": section.key.start_date.isoformat(),
            "end_date": section.key.end_date.isoformat() if section.key.end_date else None,
            "record_ids": [r.id for r in section.records],
            "complete_count": section.complete_count,
        }
        for index, section in enumerate(sections)
    ]

    manifest = [
        {
            "page": p.page_number,
            "kind": str(p.kind),
            "offset": round(p.offset, 2),
            "height": round(p.height, 2),
            "section": p.section_index,
            "record_id": p.payload.id if isinstance(p.payload, PhotoRecord) else None,
        }
        for p in plan.placements
    ]

    return {
        "generated_at": datetime.now().isoformat(),
        "report_id": report.report_id,
        "name": report.name,
        "page_count": report.page_count,
        "section_count": len(sections),
        "record_count": sum(s.record_count for s in sections),
        "config": config.to_dict(),
        "builder_version": __version__,
        "sections": section_details,
        "manifest": manifest,
        "warnings": list(warnings),
    }


def _write_metadata(metadata_path: Path, metadata: dict) -> None:
    """
    Write metadata JSON file.

    Raises:
        ReportError: If writing fails

    Example:
        >>> _write_metadata(Path("output/report-4-2024-05-02.metadata.json"), metadata)
    """
    try:
        metadata_path.parent.mkdir(parents=True, exist_ok=True)
        with open(metadata_path, "w", encoding="utf-8") as f:
            json.dump(metadata, f, indent=2, ensure_ascii=False)
        logger.debug(f"Wrote metadata to {metadata_path}")
    except OSError as e:
        raise ReportError(f"Failed to write metadata: {e}") from e
