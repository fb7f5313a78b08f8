"""
Module: images

Purpose:
    Provides ImageAsset - an encoded raster image with known pixel size.
    Produced by the image encoder and used for logos.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ImageAsset:
    """
    Encoded image bytes plus dimensions (immutable).

    Attributes:
        data: Encoded bytes (JPEG or PNG)
        width: Width in pixels
        height: Height in pixels
        mime: MIME type of ``data``
    """

    data: bytes
    width: int
    height: int
    mime: str = "image/jpeg"

    def __post_init__(self) -> None:
        if not self.data:
            raise ValueError("ImageAsset data must not be empty")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"ImageAsset dimensions must be positive: {self.width}x{self.height}")

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height

    @property
    def size_bytes(self) -> int:
        return len(self.data)
