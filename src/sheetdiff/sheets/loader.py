"""Workbook loading from .xlsx and legacy .xls files."""

import logging
import zipfile
from pathlib import Path
from typing import Optional, Union
from xml.etree.ElementTree import ParseError

import openpyxl
import xlrd
from openpyxl.utils.exceptions import InvalidFileException
from xlrd.compdoc import CompDocError

from ..errors import WorkbookLoadError, WorkbookNotFoundError
from .models import Grid, Workbook

logger = logging.getLogger(__name__)

OPENXML_EXTENSIONS = (".xlsx", ".xlsm", ".xltx", ".xltm")
LEGACY_EXTENSIONS = (".xls",)
SUPPORTED_EXTENSIONS = OPENXML_EXTENSIONS + LEGACY_EXTENSIONS


def _trim_row(row) -> list:
    """Drop trailing empty cells so ragged rows keep their real length."""
    values = list(row)
    while values and values[-1] is None:
        values.pop()
    return values


def _trim_rows(rows: Grid) -> Grid:
    # Formatted but empty rows at the bottom of a sheet are reported as rows
    while rows and not rows[-1]:
        rows.pop()
    return rows


def _read_rows(worksheet) -> Grid:
    return _trim_rows([_trim_row(row) for row in worksheet.iter_rows(values_only=True)])


def _xls_cell_value(cell, datemode: int):
    """Convert an xlrd cell to the value openpyxl would give for it."""
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
        return None
    if cell.ctype == xlrd.XL_CELL_NUMBER:
        # .xls stores every number as a float
        return int(cell.value) if float(cell.value).is_integer() else cell.value
    if cell.ctype == xlrd.XL_CELL_DATE:
        return xlrd.xldate_as_datetime(cell.value, datemode)
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return bool(cell.value)
    if cell.ctype == xlrd.XL_CELL_ERROR:
        return xlrd.error_text_from_code.get(cell.value, "#N/A")
    return cell.value


def _read_xls_rows(sheet, datemode: int) -> Grid:
    return _trim_rows(
        [
            _trim_row(_xls_cell_value(cell, datemode) for cell in sheet.row(r))
            for r in range(sheet.nrows)
        ]
    )


def _load_openxml(path: Path) -> dict[str, Grid]:
    try:
        wb = openpyxl.load_workbook(str(path), read_only=True, data_only=True)
        try:
            # Read-only worksheets parse their XML while rows are iterated
            return {ws.title: _read_rows(ws) for ws in wb.worksheets}
        finally:
            wb.close()
    except (
        InvalidFileException,
        zipfile.BadZipFile,
        ParseError,
        KeyError,
        ValueError,
        OSError,
    ) as e:
        raise WorkbookLoadError(str(path), str(e)) from e


def _load_legacy(path: Path) -> dict[str, Grid]:
    try:
        book = xlrd.open_workbook(str(path), on_demand=True)
        try:
            return {
                sheet.name: _read_xls_rows(sheet, book.datemode)
                for sheet in (book.sheet_by_index(i) for i in range(book.nsheets))
            }
        finally:
            book.release_resources()
    except (xlrd.XLRDError, CompDocError, ValueError, OSError) as e:
        raise WorkbookLoadError(str(path), str(e)) from e


def load_workbook(path: Union[str, Path], name: Optional[str] = None) -> Workbook:
    """
    Load a workbook file into a Workbook of cell value grids.

    Args:
        path: Path to the workbook file
        name: Display name, defaults to the file name

    Returns:
        Workbook with one grid per worksheet, in listing order

    Raises:
        WorkbookNotFoundError: If the path does not exist
        WorkbookLoadError: If the file is not a readable workbook
    """
    path = Path(path)
    if not path.is_file():
        raise WorkbookNotFoundError(str(path))

    suffix = path.suffix.lower()
    if suffix in OPENXML_EXTENSIONS:
        sheets = _load_openxml(path)
    elif suffix in LEGACY_EXTENSIONS:
        sheets = _load_legacy(path)
    else:
        raise WorkbookLoadError(
            str(path), f"unsupported file type '{path.suffix or '(none)'}'"
        )

    workbook = Workbook(name=name or path.name, sheets=sheets)
    logger.info(f"Loaded {workbook.name}: sheets {workbook.sheet_names}")
    return workbook
