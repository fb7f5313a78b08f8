"""
Module: builder.images

Purpose:
    Image encoding and embeddability checks (PIL).
"""

from .encoder import (
    MAX_INPUT_BYTES,
    MAX_OUTPUT_SIZE,
    encode_image,
    load_logo,
    probe_image,
)

__all__ = [
    "MAX_INPUT_BYTES",
    "MAX_OUTPUT_SIZE",
    "encode_image",
    "load_logo",
    "probe_image",
]
