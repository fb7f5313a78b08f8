"""
Core package: models, errors, schema validation and serialization
shared by the builder and the CLI.
"""

from .errors import AssetError, LoaderError, NotFoundError, ReportError, ValidationError

__all__ = [
    "ReportError",
    "ValidationError",
    "AssetError",
    "NotFoundError",
    "LoaderError",
]
