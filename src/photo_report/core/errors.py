"""
Module: core.errors

Purpose:
    Error taxonomy shared by every stage of report export.

Key Classes:
    - ReportError: Base class, always carries a human-readable message
    - ValidationError: Bad input (no matching records, missing metadata)
    - AssetError: Image too large, corrupt or unembeddable
    - NotFoundError: Requested report/group or file absent
    - LoaderError: Records file unreadable or malformed

Used By:
    - core.schemas.validator
    - builder.grouping, builder.images, builder.loading
    - builder.controller, cli
"""

from __future__ import annotations


class ReportError(Exception):
    """Base error for report export. ``str(error)`` is user-facing."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ReportError):
    """Raised when records or configuration fail validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


class AssetError(ReportError):
    """Image data that cannot be encoded or embedded."""
    pass


class NotFoundError(ReportError):
    """Requested report, group or file does not exist."""
    pass


class LoaderError(ReportError):
    """Error reading records from an export file."""
    pass


__all__ = [
    "ReportError",
    "ValidationError",
    "AssetError",
    "NotFoundError",
    "LoaderError",
]
