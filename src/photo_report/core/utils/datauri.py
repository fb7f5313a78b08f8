"""
Module: core.utils.datauri

Purpose:
    Convert encoded image bytes to and from ``data:`` URLs, the form the
    record store uses for image payloads. Raw base64 strings are accepted
    on input as well.

Key Functions:
    - encode_data_url(): bytes -> "data:image/jpeg;base64,..."
    - decode_data_url(): data URL or raw base64 -> bytes
    - sniff_mime(): Guess the image MIME type from magic bytes
"""

from __future__ import annotations

import base64
import binascii
import re

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<params>(;[^,;]*)*?);base64,(?P<payload>.*)$", re.DOTALL)

_MAGIC = (
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
)


def sniff_mime(data: bytes, default: str = "application/octet-stream") -> str:
    """Return the MIME type implied by the leading bytes of ``data``."""
    for magic, mime in _MAGIC:
        if data.startswith(magic):
            return mime
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return default


def encode_data_url(data: bytes, mime: str | None = None) -> str:
    """
    Encode bytes as a base64 data URL.

    Args:
        data: Encoded image bytes
        mime: MIME type; sniffed from the bytes when omitted

    Returns:
        String like ``data:image/jpeg;base64,/9j/4AAQ...``
    """
    mime = mime or sniff_mime(data)
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


def decode_data_url(value: str) -> bytes:
    """
    Decode a data URL (or bare base64 string) into bytes.

    Raises:
        ValueError: If the payload is not valid base64
    """
    match = _DATA_URL_RE.match(value.strip())
    payload = match.group("payload") if match else value
    payload = "".join(payload.split())
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 image payload: {e}") from e
