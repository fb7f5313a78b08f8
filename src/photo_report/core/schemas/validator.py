"""
Schema Validation Utilities

Validates record payloads and record metadata before any layout work.

Two levels:
- ``validate_record_data()`` checks a raw dict from the record store
  (required fields, non-empty text, ISO dates, end >= start) and, in
  strict mode, the full JSON Schema via ``jsonschema``.
- ``validate_records()`` checks already-built PhotoRecords for the
  metadata every exported section needs.

Both raise ``ValidationError`` with the offending path.
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Any, Iterable

import jsonschema

from ..errors import ValidationError
from ..models.records import PhotoRecord

# Text fields every record must carry for its info block
REQUIRED_TEXT_FIELDS = ("site_name", "city", "building", "task", "company")
REQUIRED_FIELDS = ("id", "report_id") + REQUIRED_TEXT_FIELDS + ("start_date",)

_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


def _parse_iso_date(value: Any, path: str) -> date:
    if not isinstance(value, str):
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)", path=path)
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)", path=path)


def validate_record_data(data: dict[str, Any], *, strict: bool = False, path: str = "") -> None:
    """
    Validate a raw record dictionary.

    Args:
        data: Record dictionary as stored (images as data URLs)
        strict: If True, also validate against record.schema.json
        path: Prefix for error paths (e.g. "records[3]")

    Raises:
        ValidationError: If data is invalid
    """
    prefix = f"{path}." if path else ""

    if not isinstance(data, dict):
        raise ValidationError(f"Record must be an object, got {type(data).__name__}", path=path)

    missing = [f for f in REQUIRED_FIELDS if f not in data or data[f] is None]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing],
        )

    report_id = data["report_id"]
    if isinstance(report_id, bool) or not isinstance(report_id, int) or report_id < 0:
        raise ValidationError(
            f"Invalid report_id: {report_id!r} (must be a non-negative integer)",
            path=f"{prefix}report_id",
        )

    not_text = [f for f in REQUIRED_TEXT_FIELDS if not isinstance(data[f], str)]
    if not_text:
        raise ValidationError(
            f"Text fields must be strings: {not_text}",
            path=f"{prefix}{not_text[0]}",
            errors=[f"Not a string: {f} = {data[f]!r}" for f in not_text],
        )

    blank = [f for f in REQUIRED_TEXT_FIELDS if not data[f].strip()]
    if blank:
        raise ValidationError(
            f"Empty required fields: {blank}",
            path=path,
            errors=[f"Empty field: {f}" for f in blank],
        )

    start = _parse_iso_date(data["start_date"], f"{prefix}start_date")
    if data.get("end_date"):
        end = _parse_iso_date(data["end_date"], f"{prefix}end_date")
        if end < start:
            raise ValidationError(
                f"end_date {end.isoformat()} precedes start_date {start.isoformat()}",
                path=f"{prefix}end_date",
            )

    if strict:
        schema = _load_schema("record")
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=prefix + ".".join(str(p) for p in e.absolute_path),
                errors=[e.message],
            ) from e


def validate_records(records: Iterable[PhotoRecord]) -> None:
    """
    Check that every record carries the metadata its info block needs.

    Raises:
        ValidationError: Listing every record/field that is blank
    """
    errors: list[str] = []
    for record in records:
        for field_name in REQUIRED_TEXT_FIELDS:
            value = getattr(record, field_name)
            if not isinstance(value, str):
                errors.append(f"record {record.id}: {field_name} is not text ({value!r})")
            elif not value.strip():
                errors.append(f"record {record.id}: missing {field_name}")
    if errors:
        raise ValidationError(
            f"Missing required report metadata ({len(errors)} problem(s)): {errors[0]}",
            path="records",
            errors=errors,
        )
