"""Presentation of comparison reports."""

from .formatter import format_json, format_text, report_payload, truncate_value
from .summary import ChangeSummary, ModifiedRow, RowRef, build_summary

__all__ = [
    "format_json",
    "format_text",
    "report_payload",
    "truncate_value",
    "ChangeSummary",
    "ModifiedRow",
    "RowRef",
    "build_summary",
]
