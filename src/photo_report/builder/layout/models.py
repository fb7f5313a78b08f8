"""
Module: builder.layout.models

Purpose:
    Data models for page layout.
    Immutable dataclasses for capacities, placements and plans, plus the
    mutable cursor threaded through a single planning run.

Key Classes:
    - PageCapacities: Photo pairs allowed on page 1 vs. later pages
    - LayoutCursor: Current page, pairs on it, vertical offset
    - PlacementKind: What a placement draws
    - Placement: One unit positioned on a page
    - PageLayoutPlan: Flat placement list plus page count
    - FooterStamp: Per-page chrome computed after pagination

Dependencies:
    - dataclasses (std)
    - core.models: PhotoRecord, ReportSection

Used By:
    - builder.layout.paginator: Creates plans
    - builder.layout.footers: Stamps pages
    - builder.output.renderer: Consumes plans
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from photo_report.core.models import PhotoRecord, ReportSection


@dataclass(frozen=True)
class PageCapacities:
    """
    Maximum photo pairs per page (immutable).

    Page 1 holds fewer pairs because the logo and title take room.

    Example:
        >>> PageCapacities().for_page(1), PageCapacities().for_page(2)
        (3, 4)
    """

    first_page: int = 3
    other_pages: int = 4

    def __post_init__(self) -> None:
        if self.first_page < 1:
            raise ValueError(f"first_page capacity must be at least 1: {self.first_page}")
        if self.other_pages < 1:
            raise ValueError(f"other_pages capacity must be at least 1: {self.other_pages}")

    def for_page(self, page_number: int) -> int:
        """Capacity of a 1-indexed page."""
        return self.first_page if page_number == 1 else self.other_pages


@dataclass
class LayoutCursor:
    """
    Mutable pagination state for one planning run.

    Attributes:
        page_number: Current page (1-indexed)
        photos_on_page: Photo units already placed on the current page
        offset: Current vertical position from the page top (mm)

    Invariant:
        photos_on_page never exceeds the current page's capacity.
    """

    page_number: int = 1
    photos_on_page: int = 0
    offset: float = 0.0

    def capacity(self, capacities: PageCapacities) -> int:
        return capacities.for_page(self.page_number)

    def is_full(self, capacities: PageCapacities) -> bool:
        """True when no more photo units fit on the current page."""
        return self.photos_on_page >= self.capacity(capacities)

    def break_page(self, top: float) -> None:
        """Move to the next page, restarting the counter and offset."""
        self.page_number += 1
        self.photos_on_page = 0
        self.offset = top

    def place_unit(self, height: float, capacities: PageCapacities) -> None:
        """Consume one capacity slot and ``height`` of vertical space."""
        if self.is_full(capacities):
            raise RuntimeError(
                f"Page {self.page_number} already holds {self.photos_on_page} photo units"
            )
        self.photos_on_page += 1
        self.offset += height

    def advance(self, height: float) -> None:
        """Consume vertical space without using a capacity slot."""
        self.offset += height


class PlacementKind(str, Enum):
    """Type of positioned unit."""
    LOGO = "logo"                # Centered page-1 logo
    TITLE = "title"              # Underlined report title
    INFO_BLOCK = "info_block"    # Section metadata container
    PHOTO_PAIR = "photo_pair"    # Before/after images + connector
    PLACEHOLDER = "placeholder"  # Record missing an image

    def __str__(self) -> str:
        return self.value


Payload = Union[str, ReportSection, PhotoRecord, None]


@dataclass(frozen=True)
class Placement:
    """
    A unit positioned on a page.

    Attributes:
        page_number: Page the unit is drawn on (1-indexed)
        offset: Top of the unit from the page top (mm); for TITLE and
            PLACEHOLDER this is the text baseline
        height: Vertical space consumed, spacing included (mm)
        kind: What to draw
        section_index: Index of the owning section, -1 for page chrome
        payload: Title text, ReportSection or PhotoRecord
    """

    page_number: int
    offset: float
    height: float
    kind: PlacementKind
    section_index: int = -1
    payload: Payload = None

    @property
    def bottom(self) -> float:
        """Offset after this unit (offset + height)."""
        return self.offset + self.height

    @property
    def counts_toward_capacity(self) -> bool:
        return self.kind in (PlacementKind.PHOTO_PAIR, PlacementKind.PLACEHOLDER)


@dataclass(frozen=True)
class PageLayoutPlan:
    """
    Complete layout plan for a report.

    Attributes:
        placements: Every placement in drawing order
        page_count: Number of pages
        has_logo: Whether a logo was planned on page 1
        warnings: Non-fatal issues found while planning

    Example:
        >>> plan.page_count
        2
        >>> [p.kind for p in plan.on_page(2)]
        [<PlacementKind.PHOTO_PAIR: 'photo_pair'>, ...]
    """

    placements: tuple[Placement, ...]
    page_count: int
    has_logo: bool = False
    warnings: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        highest = max((p.page_number for p in self.placements), default=0)
        if self.page_count != highest:
            raise ValueError(f"page_count {self.page_count} does not match placements (max page {highest})")

    def on_page(self, page_number: int) -> tuple[Placement, ...]:
        """Placements drawn on one page, in order."""
        return tuple(p for p in self.placements if p.page_number == page_number)

    def units_on_page(self, page_number: int) -> int:
        """Photo units (pairs and placeholders) on one page."""
        return sum(1 for p in self.on_page(page_number) if p.counts_toward_capacity)

    @property
    def section_count(self) -> int:
        return sum(1 for p in self.placements if p.kind is PlacementKind.INFO_BLOCK)

    @property
    def unit_count(self) -> int:
        return sum(1 for p in self.placements if p.counts_toward_capacity)


@dataclass(frozen=True)
class FooterStamp:
    """
    Chrome stamped on one page after pagination.

    Attributes:
        page_number: Page (1-indexed)
        page_count: Total pages in the report
        text: Centered footer text ("Page i / N")
        corner_logo: Whether the small corner logo is drawn
    """

    page_number: int
    page_count: int
    text: str
    corner_logo: bool = False
