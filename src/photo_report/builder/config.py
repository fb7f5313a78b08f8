"""
Module: builder.config

Purpose:
    Configuration dataclass for report export. Immutable configuration
    with validation on construction; loadable from JSON.

Key Classes:
    - ReportConfig: Capacities, header threshold, locale, geometry

Key Functions:
    - load_config(): Read a ReportConfig from a JSON file

Dependencies:
    - dataclasses (std)
    - builder.layout.config: LayoutConfig

Used By:
    - builder.controller: Report assembly
    - cli: --config option
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict

from photo_report.core.errors import ValidationError

from .layout.config import LayoutConfig
from .layout.models import PageCapacities
from .output.locale import resolve_locale


@dataclass(frozen=True)
class ReportConfig:
    """
    Configuration for exporting a report (immutable).

    Attributes:
        first_page_capacity: Photo units allowed on page 1
        other_pages_capacity: Photo units allowed on pages 2+
        header_height: Minimum room (mm) left on a page for a section
            header to start there; 57 reproduces a break below y=240 on A4
        locale: Locale for labels and dates ("fr-FR", "en-US", ...)
        layout: Page geometry
        write_metadata: Write a metadata JSON next to the PDF

    Example:
        >>> config = ReportConfig(locale="en-US")
        >>> config.capacities
        PageCapacities(first_page=3, other_pages=4)
    """

    first_page_capacity: int = 3
    other_pages_capacity: int = 4
    header_height: float = 57.0
    locale: str = "fr-FR"
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    write_metadata: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.first_page_capacity < 1:
            raise ValueError(f"first_page_capacity must be at least 1: {self.first_page_capacity}")
        if self.other_pages_capacity < 1:
            raise ValueError(f"other_pages_capacity must be at least 1: {self.other_pages_capacity}")
        if not (0 < self.header_height <= self.layout.page_height):
            raise ValueError(f"header_height must be within the page: {self.header_height}")
        resolve_locale(self.locale)

    @property
    def capacities(self) -> PageCapacities:
        return PageCapacities(self.first_page_capacity, self.other_pages_capacity)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "first_page_capacity": self.first_page_capacity,
            "other_pages_capacity": self.other_pages_capacity,
            "header_height": self.header_height,
            "locale": self.locale,
            "layout": asdict(self.layout),
            "write_metadata": self.write_metadata,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReportConfig":
        """
        Build a config from a dictionary.

        A nested ``layout`` object overrides LayoutConfig fields.

        Raises:
            ValidationError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValidationError(f"Unknown config keys: {unknown}", path="config")

        values = dict(data)
        try:
            if "layout" in values:
                layout_data = values["layout"]
                layout_known = {f.name for f in fields(LayoutConfig)}
                bad = sorted(set(layout_data) - layout_known)
                if bad:
                    raise ValidationError(f"Unknown layout keys: {bad}", path="config.layout")
                values["layout"] = LayoutConfig(**layout_data)
            return cls(**values)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid config: {e}", path="config") from e


def load_config(path: Path) -> ReportConfig:
    """
    Load a ReportConfig from a JSON file.

    Raises:
        ValidationError: If the file is not valid JSON or has bad values
        FileNotFoundError: If the file does not exist
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON in config {path.name}: {e}", path="config") from e
    if not isinstance(data, dict):
        raise ValidationError("Config file must contain an object", path="config")
    return ReportConfig.from_dict(data)
