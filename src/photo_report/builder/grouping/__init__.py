"""
Module: builder.grouping

Purpose:
    Turn flat photo records into ordered report sections.
"""

from .grouper import available_report_ids, group_records, next_report_id

__all__ = [
    "group_records",
    "available_report_ids",
    "next_report_id",
]
