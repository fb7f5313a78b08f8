"""
Module: records

Purpose:
    Provides the PhotoRecord dataclass - one before/after photo pair
    attached to a site report. This is the unit fetched from the record
    store and the atomic drawable unit of an exported report.

Key Functions:
    - PhotoRecord.is_complete: Both images present
    - PhotoRecord.section_key: Structural grouping key
    - PhotoRecord.to_dict() / PhotoRecord.from_dict(): Serialization

Dependencies:
    - dataclasses (std)
    - datetime (std)
    - core.utils.datauri: Image payload encoding

Used By:
    - core.models.sections.ReportSection
    - core.utils.serialization
    - builder.grouping, builder.layout, builder.output
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..utils.datauri import decode_data_url, encode_data_url
from .sections import SectionKey


@dataclass(frozen=True)
class PhotoRecord:
    """
    One before/after photo pair (immutable).

    Records are created when a user submits a photo pair and are never
    edited in place; an edit produces a new record.

    Attributes:
        id: Unique record identifier
        report_id: Report (folder) number this pair belongs to
        site_name: Construction site name ("chantier")
        city: City of the site
        building: Building within the site
        task: Mission performed
        company: Company / developer responsible
        start_date: Intervention date (or first day of a range)
        end_date: Last day of the intervention range, if any
        before_image: Encoded raster bytes of the "before" photo
        after_image: Encoded raster bytes of the "after" photo

    Example:
        >>> record = PhotoRecord(
        ...     id="r1", report_id=3, site_name="Les Jardins", city="Lyon",
        ...     building="A", task="Peinture", company="Batir",
        ...     start_date=date(2024, 5, 2),
        ... )
        >>> record.is_complete
        False
    """

    id: str
    report_id: int
    site_name: str
    city: str
    building: str
    task: str
    company: str
    start_date: date
    end_date: Optional[date] = None
    before_image: Optional[bytes] = None
    after_image: Optional[bytes] = None

    def __post_init__(self) -> None:
        """Validate record on construction."""
        if self.report_id < 0:
            raise ValueError(f"report_id must be non-negative: {self.report_id}")
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError(
                f"end_date {self.end_date.isoformat()} precedes start_date {self.start_date.isoformat()}"
            )

    @property
    def is_complete(self) -> bool:
        """True when both the before and after images are present."""
        return bool(self.before_image) and bool(self.after_image)

    @property
    def section_key(self) -> SectionKey:
        """Grouping key shared by every record of the same report section."""
        return SectionKey(
            city=self.city,
            building=self.building,
            task=self.task,
            company=self.company,
            start_date=self.start_date,
            end_date=self.end_date,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-ready dictionary (images as data URLs)."""
        return {
            "id": self.id,
            "report_id": self.report_id,
            "site_name": self.site_name,
            "city": self.city,
            "building": self.building,
            "task": self.task,
            "company": self.company,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "before_image": encode_data_url(self.before_image) if self.before_image else None,
            "after_image": encode_data_url(self.after_image) if self.after_image else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PhotoRecord":
        """
        Deserialize from a dictionary produced by ``to_dict``.

        Raises:
            KeyError: If a required field is missing
            ValueError: If dates or image payloads are malformed
        """
        end_date = data.get("end_date")
        before = data.get("before_image")
        after = data.get("after_image")
        return cls(
            id=str(data["id"]),
            report_id=int(data["report_id"]),
            site_name=data["site_name"],
            city=data["city"],
            building=data["building"],
            task=data["task"],
            company=data["company"],
            start_date=date.fromisoformat(data["start_date"][:10]),
            end_date=date.fromisoformat(end_date[:10]) if end_date else None,
            before_image=decode_data_url(before) if before else None,
            after_image=decode_data_url(after) if after else None,
        )
