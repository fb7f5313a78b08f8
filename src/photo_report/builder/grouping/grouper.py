"""
Module: builder.grouping.grouper

Purpose:
    Partition a flat list of photo records into ordered report sections.

Key Functions:
    - group_records(): Records of one report -> ReportSections
    - available_report_ids(): Distinct report numbers present
    - next_report_id(): Number to give the next new report

Algorithm:
    Records are filtered by report_id, then bucketed by their structural
    SectionKey. Section order is the order in which each key is first
    seen; records keep their input order inside a section.

Used By:
    - builder.controller: Report assembly
    - cli: Report listing
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence

from photo_report.core.errors import ValidationError
from photo_report.core.models import PhotoRecord, ReportSection, SectionKey

logger = logging.getLogger(__name__)


def group_records(records: Sequence[PhotoRecord], report_id: int) -> List[ReportSection]:
    """
    Group one report's records into sections.

    Args:
        records: Records in fetch order (any reports)
        report_id: Report to export

    Returns:
        Sections in first-seen key order

    Raises:
        ValidationError: If no record belongs to report_id

    Example:
        >>> sections = group_records(records, 4)
        >>> [s.key.task for s in sections]
        ['Peinture', 'Carrelage']
    """
    buckets: Dict[SectionKey, List[PhotoRecord]] = {}
    for record in records:
        if record.report_id != report_id:
            continue
        buckets.setdefault(record.section_key, []).append(record)

    if not buckets:
        raise ValidationError(
            f"No photo records found for report {report_id}",
            path="records",
        )

    # dict preserves insertion order, i.e. first-seen key order
    sections = [
        ReportSection(
            report_id=report_id,
            key=key,
            site_name=bucket[0].site_name,
            records=tuple(bucket),
        )
        for key, bucket in buckets.items()
    ]
    logger.info(
        f"Grouped {sum(s.record_count for s in sections)} records of report {report_id} "
        f"into {len(sections)} sections"
    )
    return sections


def available_report_ids(records: Iterable[PhotoRecord]) -> List[int]:
    """Distinct report numbers, ascending."""
    return sorted({record.report_id for record in records})


def next_report_id(records: Iterable[PhotoRecord]) -> int:
    """
    Report number for the next new report.

    Returns:
        Highest existing report number + 1, or 1 when there are none
    """
    ids = available_report_ids(records)
    return ids[-1] + 1 if ids else 1
