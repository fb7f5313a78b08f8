"""
Serialization Utilities

Provides to/from JSON utilities for PhotoRecord.

Formats:
- JSON: a list of record objects, or an object with a ``records`` list
  (the shape the record store returns for a listing)
- JSONL: one record object per line

Images travel as data URLs; raw base64 strings are accepted on input.
Every record is validated before deserialization.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

from ..errors import ValidationError
from ..models.records import PhotoRecord
from ..schemas.validator import validate_record_data


# ─────────────────────────────────────────────────────────────────────────────
# Record Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_record(record: PhotoRecord) -> dict[str, Any]:
    """
    Serialize a PhotoRecord to a dictionary.

    The output can be written to JSON and will pass validation.
    """
    return record.to_dict()


def deserialize_record(
    data: dict[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
    path: str = "",
) -> PhotoRecord:
    """
    Deserialize a PhotoRecord from a dictionary.

    Args:
        data: Dictionary from JSON
        validate: Whether to validate fields first
        strict: Also validate against the JSON Schema
        path: Location of the record for error messages

    Returns:
        PhotoRecord instance

    Raises:
        ValidationError: If data is invalid or cannot be parsed
    """
    if validate:
        validate_record_data(data, strict=strict, path=path)
    try:
        return PhotoRecord.from_dict(data)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Cannot parse record: {e}", path=path) from e


# ─────────────────────────────────────────────────────────────────────────────
# File I/O
# ─────────────────────────────────────────────────────────────────────────────

def _records_from_payload(payload: Any) -> list[Any]:
    if isinstance(payload, dict) and "records" in payload:
        payload = payload["records"]
    if not isinstance(payload, list):
        raise ValidationError("Records file must contain a list or an object with a 'records' list")
    return payload


def load_records_json(path: Path, *, strict: bool = False) -> list[PhotoRecord]:
    """
    Load records from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValidationError: If the content or any record is invalid
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON in {path.name}: {e}") from e
    return [
        deserialize_record(item, strict=strict, path=f"records[{i}]")
        for i, item in enumerate(_records_from_payload(payload))
    ]


def save_records_json(records: Iterable[PhotoRecord], path: Path) -> None:
    """Write records as ``{"records": [...]}`` JSON."""
    payload = {"records": [serialize_record(r) for r in records]}
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)


def load_records_jsonl(path: Path, *, strict: bool = False) -> list[PhotoRecord]:
    """
    Load records from a JSONL file (blank lines ignored).

    Raises:
        FileNotFoundError: If the file does not exist
        ValidationError: If a line is not valid JSON or not a valid record
    """
    records: list[PhotoRecord] = []
    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                item = json.loads(line)
            except json.JSONDecodeError as e:
                raise ValidationError(f"Invalid JSON on line {line_no}: {e}", path=f"line {line_no}") from e
            records.append(deserialize_record(item, strict=strict, path=f"line {line_no}"))
    return records


def save_records_jsonl(records: Iterable[PhotoRecord], path: Path) -> None:
    """Write one record per line."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        for record in records:
            f.write(json.dumps(serialize_record(record), ensure_ascii=False))
            f.write("\n")
