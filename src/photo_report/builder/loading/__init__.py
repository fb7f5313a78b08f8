"""
Module: builder.loading

Purpose:
    Load photo records from record-store exports.
"""

from .loader import fetch_records_for_report, load_records

__all__ = [
    "load_records",
    "fetch_records_for_report",
]
