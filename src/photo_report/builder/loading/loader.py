"""
Module: builder.loading.loader

Purpose:
    Read photo records from an export of the record store.
    Stands in for the store's "fetch records for report" call when the
    engine runs offline (CLI, tests, batch exports).

Key Functions:
    - load_records(): All records from a .json or .jsonl file
    - fetch_records_for_report(): Records of one report

Dependencies:
    - core.utils.serialization: JSON / JSONL parsing and validation

Used By:
    - cli: export and list commands
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from photo_report.core.errors import LoaderError, NotFoundError, ValidationError
from photo_report.core.models import PhotoRecord
from photo_report.core.utils.serialization import load_records_json, load_records_jsonl

logger = logging.getLogger(__name__)

JSONL_SUFFIXES = {".jsonl", ".ndjson"}


def load_records(path: Path, *, strict: bool = False) -> List[PhotoRecord]:
    """
    Load every record from a records file.

    Args:
        path: .json (list or {"records": [...]}) or .jsonl file
        strict: Also validate each record against the JSON Schema

    Returns:
        Records in file order

    Raises:
        NotFoundError: If the file does not exist
        LoaderError: If the file cannot be read or a record is invalid

    Example:
        >>> records = load_records(Path("exports/records.json"))
        >>> len(records)
        12
    """
    if not path.exists():
        raise NotFoundError(f"Records file does not exist: {path}")

    reader = load_records_jsonl if path.suffix.lower() in JSONL_SUFFIXES else load_records_json
    try:
        records = reader(path, strict=strict)
    except ValidationError as e:
        location = f" at {e.path}" if e.path else ""
        raise LoaderError(f"Invalid records file {path.name}{location}: {e.message}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise LoaderError(f"Cannot read records file {path}: {e}") from e

    logger.info(f"Loaded {len(records)} records from {path}")
    return records


def fetch_records_for_report(path: Path, report_id: int, *, strict: bool = False) -> List[PhotoRecord]:
    """
    Records of one report, in file order.

    Returns an empty list when the report has no records; the caller
    decides whether that is fatal.
    """
    records = [r for r in load_records(path, strict=strict) if r.report_id == report_id]
    logger.debug(f"Report {report_id}: {len(records)} records")
    return records
