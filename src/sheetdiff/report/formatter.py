"""Text and JSON rendering of comparison reports."""

import json
from typing import Any, Optional

from ..engine.models import ComparisonReport
from .summary import ChangeSummary, RowRef


def truncate_value(value: Any, max_chars: int) -> str:
    """Render a value for display, shortening long text with "..."."""
    text = "" if value is None else str(value)
    if max_chars > 3 and len(text) > max_chars:
        return text[: max_chars - 3] + "..."
    return text


def _format_labels(labels: dict) -> str:
    return ", ".join(f"{name}: {value}" for name, value in labels.items())


def _format_row_ref(row: RowRef) -> str:
    line = f"  [{row.sheet}] Key: {row.key_value} (row {row.row_number})"
    if row.labels:
        line += f", {_format_labels(row.labels)}"
    return line


def format_text(
    report: ComparisonReport,
    summary: ChangeSummary,
    max_chars: Optional[int] = None,
) -> str:
    """Render a report as plain text for terminal output."""
    if max_chars is None:
        from ..config import settings

        max_chars = settings.max_value_display_chars

    lines = [
        "Comparison Results:",
        f"Comparing {report.file1_name} and {report.file2_name}",
    ]

    for warning in report.warnings:
        lines.append(f"Warning: {warning}")

    if not report.has_differences:
        lines.append("No differences found. Files are identical.")
        return "\n".join(lines)

    lines.append(f"Found {len(report.differences)} differences:")

    for number, diff in enumerate(report.differences, start=1):
        lines.extend(
            [
                "",
                f"Difference #{number}:",
                f"Sheet: {diff.sheet}",
                f"Key Value: {diff.key_value}",
                f"Column: {diff.column}",
                f"Cell in File 1: {diff.cell1}",
                f"Cell in File 2: {diff.cell2}",
                f"File 1 value: {truncate_value(diff.value1, max_chars)}",
                f"File 2 value: {truncate_value(diff.value2, max_chars)}",
            ]
        )

    if summary.added_rows:
        lines.extend(["", "ADDED ROWS:"])
        lines.extend(_format_row_ref(row) for row in summary.added_rows)

    if summary.removed_rows:
        lines.extend(["", "REMOVED ROWS:"])
        lines.extend(_format_row_ref(row) for row in summary.removed_rows)

    if summary.modified_rows:
        lines.extend(["", "MODIFIED ROWS:"])
        for row in summary.modified_rows:
            header = f"  [{row.sheet}] Key: {row.key_value}"
            if row.labels:
                header += f", {_format_labels(row.labels)}"
            lines.append(header)
            lines.append(f"  Changes ({len(row.changes)}):")
            for change in row.changes:
                old = truncate_value(change.old_value, max_chars)
                new = truncate_value(change.new_value, max_chars)
                lines.append(f'    - {change.field}: "{old}" -> "{new}"')

    counts = summary.counts()
    lines.extend(["", "SUMMARY OF CHANGES:"])
    if summary.old_row_total is not None:
        lines.append(f"- Total rows in old file: {summary.old_row_total}")
    if summary.new_row_total is not None:
        lines.append(f"- Total rows in new file: {summary.new_row_total}")
    lines.extend(
        [
            f"- Total differences: {counts['total_differences']}",
            f"- Sheets added: {counts['sheets_added']}",
            f"- Sheets removed: {counts['sheets_removed']}",
            f"- Added rows: {counts['added_rows']}",
            f"- Removed rows: {counts['removed_rows']}",
            f"- Modified rows: {counts['modified_rows']}",
            f"- Cell changes: {counts['cell_changes']}",
        ]
    )
    return "\n".join(lines)


def report_payload(report: ComparisonReport, summary: ChangeSummary) -> dict:
    """Report in its camelCase output form, with the summary attached."""
    payload = report.to_dict()
    payload["summary"] = summary.model_dump(mode="json")
    return payload


def format_json(report: ComparisonReport, summary: ChangeSummary) -> str:
    """Render a report and its summary as indented JSON."""
    return json.dumps(report_payload(report, summary), indent=2)
