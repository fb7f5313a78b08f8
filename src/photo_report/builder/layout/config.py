"""
Module: builder.layout.config

Purpose:
    Geometry for the report page layout.
    All values are millimetres on an A4 page, measured top-down from the
    top-left corner.

Key Classes:
    - LayoutConfig: Immutable layout geometry

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.paginator: Vertical flow and page breaks
    - builder.output.renderer: Horizontal positions and block sizes
    - builder.output.pdf_writer: Page size
"""

from __future__ import annotations

from dataclasses import dataclass


# A4 portrait in millimetres
DEFAULT_PAGE_WIDTH_MM = 210.0
DEFAULT_PAGE_HEIGHT_MM = 297.0


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for page layout (immutable).

    Attributes:
        page_width: Page width (mm)
        page_height: Page height (mm)
        margin_top: First content row on page 1 (mm)
        continuation_top: First content row on pages 2+, below the corner logo
        logo_width / logo_height: Centered logo on page 1
        logo_gap: Space between the page-1 logo and the title
        title_font_size: Title size in points
        title_advance: Vertical space consumed by the title line
        title_underline_offset: Underline distance below the title baseline
        corner_logo_*: Small logo drawn on pages 2+
        section_gap: Extra space before every section after the first
        info_*: Rounded info block (rows of text)
        image_width / image_height: Size of each before/after image
        before_x / after_x: Left edge of the before and after images
        label_rise: Label baseline distance above the image top
        pair_advance: Vertical advance after a photo pair (image + gap)
        unit_spacing: Spacing after every photo unit
        arrow_*: Connector between the images
        placeholder_height: Height of the "images unavailable" line
        footer_offset: Page-number baseline distance from the page bottom
        footer_font_size: Page-number size in points

    Example:
        >>> config = LayoutConfig()
        >>> config.pair_block_height
        65.0
    """

    # Page
    page_width: float = DEFAULT_PAGE_WIDTH_MM
    page_height: float = DEFAULT_PAGE_HEIGHT_MM
    margin_top: float = 10.0
    continuation_top: float = 30.0  # corner logo 10 + 15 + 5

    # Page-1 chrome
    logo_width: float = 60.0
    logo_height: float = 30.0
    logo_gap: float = 10.0
    title_font_size: float = 20.0
    title_advance: float = 15.0
    title_underline_offset: float = 2.0

    # Pages 2+ chrome
    corner_logo_x: float = 10.0
    corner_logo_y: float = 10.0
    corner_logo_width: float = 30.0
    corner_logo_height: float = 15.0

    # Sections
    section_gap: float = 10.0
    info_width: float = 160.0
    info_row_height: float = 10.0
    info_rows: int = 3
    info_radius: float = 3.0
    info_gap: float = 10.0
    info_text_inset: float = 2.0
    info_text_baseline: float = 7.0
    info_font_size: float = 9.0

    # Photo pairs
    image_width: float = 70.0
    image_height: float = 50.0
    before_x: float = 20.0
    after_x: float = 110.0
    label_rise: float = 2.0
    label_font_size: float = 10.0
    pair_advance: float = 55.0
    unit_spacing: float = 10.0

    # Connector
    arrow_start_x: float = 92.0
    arrow_end_x: float = 108.0
    arrow_head_length: float = 3.0
    arrow_head_half_width: float = 2.0
    arrow_line_width: float = 1.5

    # Degraded unit
    placeholder_height: float = 10.0

    # Footer
    footer_offset: float = 10.0
    footer_font_size: float = 10.0

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if self.info_rows < 1:
            raise ValueError(f"info_rows must be at least 1: {self.info_rows}")
        if self.after_x + self.image_width > self.page_width:
            raise ValueError("Photo pair exceeds page width")
        if self.info_width > self.page_width:
            raise ValueError("Info block exceeds page width")
        if not (0 <= self.continuation_top < self.content_bottom):
            raise ValueError("continuation_top must lie above the footer line")
        if not (0 <= self.margin_top < self.content_bottom):
            raise ValueError("margin_top must lie above the footer line")
        if self.arrow_end_x - self.arrow_head_length < self.arrow_start_x:
            raise ValueError("Arrow head longer than connector")

    @property
    def content_bottom(self) -> float:
        """Lowest y that content may reach (the footer baseline)."""
        return self.page_height - self.footer_offset

    @property
    def info_height(self) -> float:
        """Drawn height of the info block container."""
        return self.info_row_height * self.info_rows

    @property
    def info_block_height(self) -> float:
        """Vertical space consumed by an info block, gap included."""
        return self.info_height + self.info_gap

    @property
    def pair_block_height(self) -> float:
        """Vertical space consumed by one photo pair."""
        return self.pair_advance + self.unit_spacing

    @property
    def placeholder_block_height(self) -> float:
        """Vertical space consumed by one degraded unit."""
        return self.placeholder_height + self.unit_spacing

    @property
    def info_x(self) -> float:
        """Left edge of the centered info block."""
        return (self.page_width - self.info_width) / 2
