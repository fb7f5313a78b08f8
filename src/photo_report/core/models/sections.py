"""
Module: sections

Purpose:
    Provides SectionKey (the structural grouping key) and ReportSection
    (one distinct site/task/company/date combination inside a report).

Key Classes:
    - SectionKey: Frozen six-field key with field-wise equality
    - ReportSection: Non-empty, key-homogeneous run of PhotoRecords

Dependencies:
    - dataclasses (std)
    - datetime (std)

Used By:
    - core.models.records.PhotoRecord.section_key
    - builder.grouping.grouper
    - builder.layout.paginator
    - builder.output.renderer

Design Note:
    The key is a value type, not a separator-joined string, so free text
    containing "|" (or any other character) never merges two sections.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .records import PhotoRecord


@dataclass(frozen=True)
class SectionKey:
    """
    Composite grouping key (immutable, hashable).

    Attributes:
        city: City of the site
        building: Building within the site
        task: Mission performed
        company: Company responsible
        start_date: Intervention start date
        end_date: Intervention end date, None when single-day
    """

    city: str
    building: str
    task: str
    company: str
    start_date: date
    end_date: Optional[date] = None

    def as_tuple(self) -> tuple[str, str, str, str, date, Optional[date]]:
        """Return the six key fields in declaration order."""
        return (self.city, self.building, self.task, self.company, self.start_date, self.end_date)


@dataclass(frozen=True)
class ReportSection:
    """
    One report section: records sharing a SectionKey (immutable).

    Attributes:
        report_id: Report the section belongs to
        key: Grouping key shared by every record
        site_name: Site name shown in the info block (first record's)
        records: Records in fetch order

    Invariants:
        - records is never empty
        - every record's section_key equals key and report_id matches
    """

    report_id: int
    key: SectionKey
    site_name: str
    records: tuple["PhotoRecord", ...]

    def __post_init__(self) -> None:
        """Validate section on construction."""
        if not self.records:
            raise ValueError("ReportSection must contain at least one record")
        for record in self.records:
            if record.section_key != self.key:
                raise ValueError(f"Record {record.id} does not match section key {self.key.as_tuple()}")
            if record.report_id != self.report_id:
                raise ValueError(
                    f"Record {record.id} belongs to report {record.report_id}, not {self.report_id}"
                )

    @property
    def record_count(self) -> int:
        """Number of photo records in this section."""
        return len(self.records)

    @property
    def complete_count(self) -> int:
        """Number of records carrying both images."""
        return sum(1 for r in self.records if r.is_complete)
