"""
Module: builder.output.models

Purpose:
    Draw instructions and the exported report artifact.
    Coordinates are millimetres, top-down from the page's top-left corner,
    so instructions stay independent of the PDF backend.

Key Classes:
    - TextOp, ImageOp, LineOp, RoundedRectOp, PolygonOp: Draw instructions
    - RenderedPage: Ordered instructions of one page
    - ExportedReport: Terminal, write-once report artifact
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class TextOp:
    """Single line of text; ``y`` is the baseline."""

    text: str
    x: float
    y: float
    font: str = "Helvetica"
    size: float = 10.0
    align: str = "left"  # left | center


@dataclass(frozen=True)
class ImageOp:
    """Encoded image drawn into a box; ``y`` is the top edge."""

    data: bytes
    x: float
    y: float
    width: float
    height: float

    def __repr__(self) -> str:
        return (
            f"ImageOp(<{len(self.data)} bytes>, x={self.x}, y={self.y}, "
            f"width={self.width}, height={self.height})"
        )


@dataclass(frozen=True)
class LineOp:
    x1: float
    y1: float
    x2: float
    y2: float
    width: float = 0.5


@dataclass(frozen=True)
class RoundedRectOp:
    """Stroked rectangle with rounded corners; ``y`` is the top edge."""

    x: float
    y: float
    width: float
    height: float
    radius: float
    line_width: float = 0.5


@dataclass(frozen=True)
class PolygonOp:
    """Closed polygon, filled black by default."""

    points: Tuple[Tuple[float, float], ...]
    fill: bool = True


DrawOp = Union[TextOp, ImageOp, LineOp, RoundedRectOp, PolygonOp]


@dataclass(frozen=True)
class RenderedPage:
    """
    Draw instructions of one page, in painting order.

    Attributes:
        number: Page number (1-indexed)
        ops: Instructions
    """

    number: int
    ops: Tuple[DrawOp, ...]

    def ops_of(self, op_type: type) -> Tuple[DrawOp, ...]:
        """Instructions of one type, in order."""
        return tuple(op for op in self.ops if isinstance(op, op_type))


@dataclass(frozen=True)
class ExportedReport:
    """
    Rendered report artifact (immutable).

    Attributes:
        name: Deterministic artifact name "report-{id}-{YYYY-MM-DD}"
        report_id: Exported report number
        pages: Rendered pages in order
        warnings: Degraded units and other non-fatal issues

    Example:
        >>> report.filename
        'report-4-2024-05-02.pdf'
    """

    name: str
    report_id: int
    pages: Tuple[RenderedPage, ...]
    warnings: Tuple[str, ...] = ()
    extension: str = "pdf"

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def filename(self) -> str:
        return f"{self.name}.{self.extension}"
