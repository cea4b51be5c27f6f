"""Aggregation of a flat difference list into row-level changes."""

import logging
from typing import Any, Optional

from pydantic import BaseModel, Field

from ..engine.models import (
    ENTIRE_ROW_COLUMN,
    NOT_APPLICABLE,
    ROW_EXISTS,
    SHEET_COLUMN,
    SHEET_EXISTS,
    ComparisonReport,
    Difference,
)
from ..sheets.cells import cell_at, parse_cell_notation
from ..sheets.models import Workbook

logger = logging.getLogger(__name__)


class FieldChange(BaseModel):
    """A changed value within a modified row."""

    field: str
    cell1: str
    cell2: str
    old_value: Any = None
    new_value: Any = None


class RowRef(BaseModel):
    """A row that exists in only one of the workbooks."""

    sheet: str
    key_value: str
    row_number: int
    labels: dict[str, Any] = Field(default_factory=dict)


class ModifiedRow(BaseModel):
    """A keyed row present in both workbooks with at least one changed cell."""

    sheet: str
    key_value: str
    labels: dict[str, Any] = Field(default_factory=dict)
    changes: list[FieldChange] = Field(default_factory=list)


class ChangeSummary(BaseModel):
    """Row and sheet level view of a comparison report."""

    total_differences: int = 0
    sheets_added: list[str] = Field(default_factory=list)
    sheets_removed: list[str] = Field(default_factory=list)
    added_rows: list[RowRef] = Field(default_factory=list)
    removed_rows: list[RowRef] = Field(default_factory=list)
    modified_rows: list[ModifiedRow] = Field(default_factory=list)
    cell_changes: int = 0  # Positional differences
    old_row_total: Optional[int] = None  # Data rows in the compared sheets
    new_row_total: Optional[int] = None

    def counts(self) -> dict:
        return {
            "total_differences": self.total_differences,
            "sheets_added": len(self.sheets_added),
            "sheets_removed": len(self.sheets_removed),
            "added_rows": len(self.added_rows),
            "removed_rows": len(self.removed_rows),
            "modified_rows": len(self.modified_rows),
            "cell_changes": self.cell_changes,
        }


def _row_number(location: str) -> Optional[int]:
    """Row number from an A1 reference or a "Row N" location."""
    if location == NOT_APPLICABLE:
        return None
    if location.startswith("Row "):
        return int(location[4:])
    _, row_number = parse_cell_notation(location)
    return row_number


def data_row_total(workbook: Optional[Workbook], sheet_names: list[str]) -> Optional[int]:
    """Rows below the header row, summed over the given sheets."""
    if workbook is None:
        return None
    stats = workbook.get_statistics()
    return sum(max(stats[name]["rows"] - 1, 0) for name in sheet_names if name in stats)


def is_sheet_difference(diff: Difference) -> bool:
    return (
        diff.column == SHEET_COLUMN
        and diff.cell1 == NOT_APPLICABLE
        and diff.cell2 == NOT_APPLICABLE
    )


def is_row_difference(diff: Difference) -> bool:
    return diff.column == ENTIRE_ROW_COLUMN and NOT_APPLICABLE in (diff.cell1, diff.cell2)


class RowLabeler:
    """Reads label cells (e.g. Name, Title) from the rows of a workbook."""

    def __init__(self, workbook: Optional[Workbook], label_columns: list[str]):
        self.workbook = workbook
        self.label_columns = label_columns
        self._indexes: dict[str, dict[str, int]] = {}

    def _label_indexes(self, sheet: str) -> dict[str, int]:
        if sheet not in self._indexes:
            indexes: dict[str, int] = {}
            rows = self.workbook.sheets.get(sheet) or []
            header_row = rows[0] if rows else []
            for label in self.label_columns:
                for index, header in enumerate(header_row):
                    if header is not None and label in str(header):
                        indexes[label] = index
                        break
            self._indexes[sheet] = indexes
        return self._indexes[sheet]

    def labels(self, sheet: str, row_number: Optional[int]) -> dict[str, Any]:
        """Label values of a row, keyed by label name; missing labels are omitted."""
        if self.workbook is None or row_number is None:
            return {}
        rows = self.workbook.sheets.get(sheet) or []
        if row_number < 1 or row_number > len(rows):
            return {}
        row = rows[row_number - 1]
        result = {}
        for label, index in self._label_indexes(sheet).items():
            value = cell_at(row, index)
            if value:
                result[label] = value
        return result


def build_summary(
    report: ComparisonReport,
    workbook1: Optional[Workbook] = None,
    workbook2: Optional[Workbook] = None,
    label_columns: Optional[list[str]] = None,
) -> ChangeSummary:
    """
    Group the differences of a report into added, removed and modified rows.

    Column differences of key-matched sheets that share a key value become
    one ModifiedRow, in the order their keys first appear. Differences of
    sheets compared by position are only counted. When the workbooks
    are given, rows are labeled from the columns named in label_columns,
    preferring the value in the second workbook.
    """
    if label_columns is None:
        from ..config import settings

        label_columns = settings.label_columns

    old_labels = RowLabeler(workbook1, label_columns)
    new_labels = RowLabeler(workbook2, label_columns)

    summary = ChangeSummary(
        total_differences=len(report.differences),
        old_row_total=data_row_total(workbook1, report.compared_sheets),
        new_row_total=data_row_total(workbook2, report.compared_sheets),
    )
    keyed_sheets = set(report.keyed_sheets)
    modified: dict[tuple[str, str], ModifiedRow] = {}

    for diff in report.differences:
        if is_sheet_difference(diff):
            if diff.value1 == SHEET_EXISTS:
                summary.sheets_removed.append(diff.sheet)
            else:
                summary.sheets_added.append(diff.sheet)
        elif is_row_difference(diff):
            if diff.value1 == ROW_EXISTS:
                row_number = _row_number(diff.cell1)
                labels = old_labels.labels(diff.sheet, row_number)
                target = summary.removed_rows
            else:
                row_number = _row_number(diff.cell2)
                labels = new_labels.labels(diff.sheet, row_number)
                target = summary.added_rows
            target.append(
                RowRef(
                    sheet=diff.sheet,
                    key_value=diff.key_value,
                    row_number=row_number,
                    labels=labels,
                )
            )
        elif diff.sheet in keyed_sheets:
            group_key = (diff.sheet, diff.key_value)
            if group_key not in modified:
                labels = old_labels.labels(diff.sheet, _row_number(diff.cell1))
                labels.update(new_labels.labels(diff.sheet, _row_number(diff.cell2)))
                modified[group_key] = ModifiedRow(
                    sheet=diff.sheet, key_value=diff.key_value, labels=labels
                )
            modified[group_key].changes.append(
                FieldChange(
                    field=diff.column,
                    cell1=diff.cell1,
                    cell2=diff.cell2,
                    old_value=diff.value1,
                    new_value=diff.value2,
                )
            )
        else:
            summary.cell_changes += 1

    summary.modified_rows = list(modified.values())
    logger.debug(f"Summary: {summary.counts()}")
    return summary
