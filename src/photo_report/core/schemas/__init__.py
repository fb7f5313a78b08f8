"""Record schema validation."""

from .validator import (
    REQUIRED_FIELDS,
    REQUIRED_TEXT_FIELDS,
    validate_record_data,
    validate_records,
)

__all__ = [
    "REQUIRED_FIELDS",
    "REQUIRED_TEXT_FIELDS",
    "validate_record_data",
    "validate_records",
]
