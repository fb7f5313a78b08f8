"""
Module: builder.images.encoder

Purpose:
    Bound raw image files before they reach the report engine, and check
    that encoded data can be embedded.

Key Functions:
    - encode_image(): Raw file -> JPEG ImageAsset within 800x600
    - load_logo(): Logo file -> ImageAsset
    - probe_image(): Decode-check encoded bytes, return pixel size

Dependencies:
    - PIL: Decoding, resizing and JPEG encoding
    - core.models.ImageAsset

Used By:
    - builder.output.renderer: Embeddability check per image block
    - builder.controller: Logo validation
    - cli: ``encode`` command
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO, Tuple, Union

from PIL import Image, ImageOps, UnidentifiedImageError

from photo_report.core.errors import AssetError
from photo_report.core.models import ImageAsset

logger = logging.getLogger(__name__)

# Constants
MAX_INPUT_BYTES = 5 * 1024 * 1024
MAX_OUTPUT_SIZE = (800, 600)
JPEG_QUALITY = 80

# Upper bound on encoded data accepted for embedding
MAX_EMBED_BYTES = MAX_INPUT_BYTES

ImageSource = Union[Path, bytes, BinaryIO]

_DECODE_ERRORS = (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError)


def _read_source(source: ImageSource, max_bytes: int) -> bytes:
    if isinstance(source, Path):
        if not source.exists():
            raise AssetError(f"Image not found: {source}")
        size = source.stat().st_size
        if size > max_bytes:
            raise AssetError(f"Image is too large ({size} bytes, max {max_bytes}): {source.name}")
        return source.read_bytes()
    if isinstance(source, (bytes, bytearray)):
        data = bytes(source)
    else:
        data = source.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise AssetError(f"Image is too large (more than {max_bytes} bytes)")
    return data


def _flatten(img: Image.Image) -> Image.Image:
    """Convert to RGB, compositing transparency onto white."""
    if img.mode in ("RGBA", "LA", "P"):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, "white")
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    return img.convert("RGB")


def encode_image(
    source: ImageSource,
    *,
    max_bytes: int = MAX_INPUT_BYTES,
    max_size: Tuple[int, int] = MAX_OUTPUT_SIZE,
    quality: int = JPEG_QUALITY,
) -> ImageAsset:
    """
    Encode a raw image file for storage in a photo record.

    The image is rotated per its EXIF orientation, downsized to fit
    within ``max_size`` (aspect ratio kept, never enlarged) and written
    as JPEG.

    Args:
        source: File path, raw bytes or binary stream
        max_bytes: Largest accepted input size
        max_size: Largest output (width, height) in pixels
        quality: JPEG quality (1-95)

    Returns:
        ImageAsset with JPEG bytes and final pixel size

    Raises:
        AssetError: If the input is too large or cannot be decoded

    Example:
        >>> asset = encode_image(Path("before.png"))
        >>> asset.width <= 800 and asset.height <= 600
        True
    """
    data = _read_source(source, max_bytes)
    try:
        with Image.open(io.BytesIO(data)) as opened:
            img = ImageOps.exif_transpose(opened)
            img = _flatten(img)
    except _DECODE_ERRORS as e:
        raise AssetError(f"Cannot decode image: {e}") from e

    original_size = img.size
    img.thumbnail(max_size, Image.Resampling.LANCZOS)

    buf = io.BytesIO()
    img.save(buf, format="JPEG", quality=quality, optimize=True)
    logger.debug(f"Encoded image {original_size[0]}x{original_size[1]} -> {img.width}x{img.height}")
    return ImageAsset(data=buf.getvalue(), width=img.width, height=img.height, mime="image/jpeg")


def load_logo(path: Path) -> ImageAsset:
    """
    Load a logo file as an ImageAsset.

    Raises:
        AssetError: If the file is missing, too large or undecodable
    """
    return encode_image(path)


def probe_image(data: bytes, *, max_bytes: int = MAX_EMBED_BYTES) -> Tuple[int, int]:
    """
    Check that encoded image bytes can be embedded.

    Args:
        data: Encoded image bytes
        max_bytes: Largest accepted payload

    Returns:
        (width, height) in pixels

    Raises:
        AssetError: If data is empty, oversized or corrupt
    """
    if not data:
        raise AssetError("Image data is empty")
    if len(data) > max_bytes:
        raise AssetError(f"Image data is too large ({len(data)} bytes, max {max_bytes})")
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return img.size
    except _DECODE_ERRORS as e:
        raise AssetError(f"Corrupt image data: {e}") from e
