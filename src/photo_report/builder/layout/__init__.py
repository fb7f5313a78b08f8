"""
Module: builder.layout

Purpose:
    Page layout for photo reports.
    Converts ordered report sections into positioned page placements,
    then stamps per-page footers once the page count is known.

Key Functions:
    - plan_layout(): Arrange sections onto pages
    - stamp_footers(): Page numbers and corner logos

Key Classes:
    - LayoutConfig: Page geometry
    - PageCapacities: Photo units per page
    - PageLayoutPlan: Flat placement list plus page count

Used By:
    - builder.controller: Report assembly
"""

from .config import LayoutConfig
from .models import (
    FooterStamp,
    LayoutCursor,
    PageCapacities,
    PageLayoutPlan,
    Placement,
    PlacementKind,
)
from .paginator import plan_layout
from .footers import stamp_footers

__all__ = [
    # Config
    "LayoutConfig",
    # Models
    "PageCapacities",
    "LayoutCursor",
    "PlacementKind",
    "Placement",
    "PageLayoutPlan",
    "FooterStamp",
    # Functions
    "plan_layout",
    "stamp_footers",
]
