"""
Core Models Package

Immutable, validated data models shared by the report engine.

**DESIGN RATIONALE:**

All models in this package are frozen dataclasses. This ensures:
1. No accidental mutation while a report is being planned or rendered
2. Identical inputs compare equal, so plans are reproducible
3. Keys can be used as dict keys or in sets
4. Concurrent exports never share mutable state

| Model | Role |
|-------|------|
| `PhotoRecord` | One before/after pair fetched from the record store |
| `SectionKey` | Structural six-field grouping key |
| `ReportSection` | Records sharing a key within one report |
| `ImageAsset` | Encoded image with pixel size (logos, encoder output) |
"""

from .sections import SectionKey, ReportSection
from .records import PhotoRecord
from .images import ImageAsset

__all__ = [
    "PhotoRecord",
    "SectionKey",
    "ReportSection",
    "ImageAsset",
]
