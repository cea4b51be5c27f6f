"""Workbook comparison engine."""

import logging
from typing import Optional

from ..errors import ComparisonError, SheetDiffError, SheetNotFoundError
from ..sheets.cells import (
    cell_at,
    cell_reference,
    cells_differ,
    key_to_string,
    synthetic_column_label,
)
from ..sheets.models import Grid, Row, Workbook
from .models import (
    ENTIRE_ROW_COLUMN,
    NOT_APPLICABLE,
    ROW_EXISTS,
    ROW_MISSING,
    SHEET_COLUMN,
    SHEET_EXISTS,
    SHEET_MISSING,
    ColumnInfo,
    ColumnSelector,
    ComparisonReport,
    Difference,
    MatchConfig,
    SelectorKind,
    row_location,
)

logger = logging.getLogger(__name__)


def column_label(header_row: Optional[Row], col: int) -> str:
    """Header text for a column, or a synthetic "Column X" label."""
    header = cell_at(header_row, col)
    if not header:
        return synthetic_column_label(col)
    return str(header)


def resolve_key_index(rows: Grid, selector: ColumnSelector) -> int:
    """
    Find the key column of a sheet.

    Returns:
        The 0-based column index, or -1 when the sheet has no such column
    """
    if not rows:
        return -1
    if selector.kind == SelectorKind.INDEX:
        return selector.value if selector.value >= 0 else -1
    for index, header in enumerate(rows[0] or []):
        if header == selector.value:
            return index
    return -1


def build_row_map(rows: Grid, key_index: int) -> dict[str, tuple[Row, int]]:
    """Map key strings to (row, 1-based row number), skipping the header row."""
    row_map: dict[str, tuple[Row, int]] = {}
    for i in range(1, len(rows)):
        row = rows[i] or []
        value = cell_at(row, key_index)
        if value is None:
            continue
        row_map[key_to_string(value)] = (row, i + 1)
    return row_map


def extract_columns(header_row: Optional[Row]) -> list[ColumnInfo]:
    """Describe the columns of a header row for key column selection."""
    return [
        ColumnInfo(name=column_label(header_row, index), index=index)
        for index in range(len(header_row or []))
    ]


class WorkbookComparator:
    """Compares two workbooks sheet by sheet.

    An instance holds the result state of a single comparison and is not
    reused; use compare() rather than constructing one directly.
    """

    def __init__(
        self,
        workbook1: Workbook,
        workbook2: Workbook,
        config: Optional[MatchConfig] = None,
    ):
        self.workbook1 = workbook1
        self.workbook2 = workbook2
        self.config = config or MatchConfig()
        self.differences: list[Difference] = []
        self.warnings: list[str] = []
        self.keyed_sheets: list[str] = []

    def run(self) -> ComparisonReport:
        sheets1 = self.workbook1.sheet_names
        sheets2 = self.workbook2.sheet_names
        logger.info(f"{self.workbook1.name} sheets: {sheets1}")
        logger.info(f"{self.workbook2.name} sheets: {sheets2}")

        if self.config.sheet is not None:
            common_sheets = self._select_sheet(self.config.sheet)
            only_in_1: list[str] = []
            only_in_2: list[str] = []
        else:
            names2 = set(sheets2)
            names1 = set(sheets1)
            common_sheets = [name for name in sheets1 if name in names2]
            only_in_1 = [name for name in sheets1 if name not in names2]
            only_in_2 = [name for name in sheets2 if name not in names1]

        for sheet_name in common_sheets:
            self.compare_sheet(sheet_name)

        for sheet_name in only_in_1:
            self._add_sheet_difference(sheet_name, SHEET_EXISTS, SHEET_MISSING)
        for sheet_name in only_in_2:
            self._add_sheet_difference(sheet_name, SHEET_MISSING, SHEET_EXISTS)

        columns = None
        if common_sheets:
            rows = self.workbook1.get_sheet(common_sheets[0])
            columns = extract_columns(rows[0] if rows else None)

        logger.info(
            f"Compared {len(common_sheets)} common sheet(s): "
            f"{len(self.differences)} difference(s)"
        )

        return ComparisonReport(
            differences=self.differences,
            file1_name=self.workbook1.name,
            file2_name=self.workbook2.name,
            columns=columns,
            compared_sheets=common_sheets,
            keyed_sheets=self.keyed_sheets,
            warnings=self.warnings,
        )

    def _select_sheet(self, sheet_name: str) -> list[str]:
        for workbook in (self.workbook1, self.workbook2):
            if not workbook.has_sheet(sheet_name):
                raise SheetNotFoundError(sheet_name, workbook.name)
        return [sheet_name]

    def compare_sheet(self, sheet_name: str):
        """Compare one sheet present in both workbooks."""
        rows1 = self.workbook1.get_sheet(sheet_name)
        rows2 = self.workbook2.get_sheet(sheet_name)
        logger.info(
            f"Sheet '{sheet_name}': {len(rows1)} row(s) vs {len(rows2)} row(s)"
        )

        selector = self.config.key_column
        if selector is None:
            self.compare_directly(sheet_name, rows1, rows2)
            return

        key_index1 = resolve_key_index(rows1, selector)
        key_index2 = resolve_key_index(rows2, selector)
        if key_index1 < 0 or key_index2 < 0:
            message = (
                f'Key column "{selector}" not found in one or both files for '
                f'sheet "{sheet_name}". Using direct comparison instead.'
            )
            logger.warning(message)
            self.warnings.append(message)
            self.compare_directly(sheet_name, rows1, rows2)
            return

        self.keyed_sheets.append(sheet_name)
        self.compare_by_key(sheet_name, rows1, rows2, key_index1, key_index2)

    def compare_directly(self, sheet_name: str, rows1: Grid, rows2: Grid):
        """Compare two sheets cell by cell at the same coordinates."""
        header_row = rows1[0] if rows1 else None
        max_rows = max(len(rows1), len(rows2))

        for r in range(max_rows):
            row1 = rows1[r] if r < len(rows1) else None
            row2 = rows2[r] if r < len(rows2) else None
            max_cols = max(len(row1 or []), len(row2 or []))

            for col in range(max_cols):
                value1 = cell_at(row1, col)
                value2 = cell_at(row2, col)
                if not cells_differ(value1, value2):
                    continue
                ref = cell_reference(col, r + 1)
                self.differences.append(
                    Difference(
                        sheet=sheet_name,
                        key_value=NOT_APPLICABLE,
                        column=column_label(header_row, col),
                        cell1=ref,
                        cell2=ref,
                        value1=value1,
                        value2=value2,
                    )
                )

    def compare_by_key(
        self,
        sheet_name: str,
        rows1: Grid,
        rows2: Grid,
        key_index1: int,
        key_index2: int,
    ):
        """Match rows on their key column value and compare matched rows."""
        header_row = rows1[0]
        row_map1 = build_row_map(rows1, key_index1)
        row_map2 = build_row_map(rows2, key_index2)

        common_keys = [key for key in row_map1 if key in row_map2]
        only_in_1 = [key for key in row_map1 if key not in row_map2]
        only_in_2 = [key for key in row_map2 if key not in row_map1]
        logger.info(
            f"Sheet '{sheet_name}': {len(common_keys)} matched, "
            f"{len(only_in_1)} only in {self.workbook1.name}, "
            f"{len(only_in_2)} only in {self.workbook2.name}"
        )

        for key in common_keys:
            row1, row_number1 = row_map1[key]
            row2, row_number2 = row_map2[key]
            max_cols = max(len(row1), len(row2))

            for col in range(max_cols):
                value1 = cell_at(row1, col)
                value2 = cell_at(row2, col)
                if not cells_differ(value1, value2):
                    continue
                self.differences.append(
                    Difference(
                        sheet=sheet_name,
                        key_value=key,
                        column=column_label(header_row, col),
                        cell1=cell_reference(col, row_number1),
                        cell2=cell_reference(col, row_number2),
                        value1=value1,
                        value2=value2,
                    )
                )

        for key in only_in_1:
            _, row_number = row_map1[key]
            self.differences.append(
                Difference(
                    sheet=sheet_name,
                    key_value=key,
                    column=ENTIRE_ROW_COLUMN,
                    cell1=row_location(row_number),
                    cell2=NOT_APPLICABLE,
                    value1=ROW_EXISTS,
                    value2=ROW_MISSING,
                )
            )

        for key in only_in_2:
            _, row_number = row_map2[key]
            self.differences.append(
                Difference(
                    sheet=sheet_name,
                    key_value=key,
                    column=ENTIRE_ROW_COLUMN,
                    cell1=NOT_APPLICABLE,
                    cell2=row_location(row_number),
                    value1=ROW_MISSING,
                    value2=ROW_EXISTS,
                )
            )

    def _add_sheet_difference(self, sheet_name: str, value1: str, value2: str):
        self.differences.append(
            Difference(
                sheet=sheet_name,
                key_value=NOT_APPLICABLE,
                column=SHEET_COLUMN,
                cell1=NOT_APPLICABLE,
                cell2=NOT_APPLICABLE,
                value1=value1,
                value2=value2,
            )
        )


def compare(
    workbook1: Workbook,
    workbook2: Workbook,
    config: Optional[MatchConfig] = None,
) -> ComparisonReport:
    """
    Compare two workbooks and report their differences.

    Args:
        workbook1: The first (old) workbook
        workbook2: The second (new) workbook
        config: Key column and sheet selection; positional when omitted

    Returns:
        ComparisonReport listing content differences of common sheets in
        the first workbook's order, followed by sheet-level differences

    Raises:
        SheetNotFoundError: If config.sheet is missing from either workbook
        ComparisonError: If the workbooks cannot be compared
    """
    comparator = WorkbookComparator(workbook1, workbook2, config)
    try:
        return comparator.run()
    except SheetNotFoundError:
        raise
    except SheetDiffError as e:
        raise ComparisonError(f"Failed to compare workbooks: {e}") from e
    except (TypeError, ValueError, AttributeError, IndexError) as e:
        logger.error(f"Error comparing workbooks: {e}")
        raise ComparisonError(f"Failed to compare workbooks: {e}") from e
