"""Pytest configuration and shared fixtures."""

from pathlib import Path

import openpyxl
import pytest

from sheetdiff.config import Settings
from sheetdiff.sheets import Workbook


def write_xlsx(path: Path, sheets: dict[str, list[list]]) -> Path:
    """Write sheets of row data to an .xlsx file."""
    wb = openpyxl.Workbook()
    wb.remove(wb.active)
    for sheet_name, rows in sheets.items():
        ws = wb.create_sheet(title=sheet_name)
        for row in rows:
            ws.append(row)
    wb.save(path)
    return path


@pytest.fixture
def mock_settings() -> Settings:
    """Create settings with test values."""
    return Settings(
        default_key_column=None,
        max_value_display_chars=20,
        label_columns=["Name", "Title"],
        log_level="DEBUG",
        host="127.0.0.1",
        port=8000,
        debug=False,
        cors_allow_origins=["*"],
    )


@pytest.fixture
def people_workbooks() -> tuple[Workbook, Workbook]:
    """Two versions of a staff list keyed by ID."""
    old = Workbook(
        name="old.xlsx",
        sheets={
            "Staff": [
                ["ID", "Name", "Title"],
                [1, "Alice", "Engineer"],
                [2, "Bob", "Manager"],
                [4, "Dana", "Analyst"],
            ],
        },
    )
    new = Workbook(
        name="new.xlsx",
        sheets={
            "Staff": [
                ["ID", "Name", "Title"],
                [1, "Alicia", "Engineer"],
                [4, "Dana", "Lead Analyst"],
                [3, "Carol", "Designer"],
            ],
        },
    )
    return old, new


@pytest.fixture
def xlsx_factory(tmp_path: Path):
    """Return a function that writes a named .xlsx file into tmp_path."""

    def _factory(file_name: str, sheets: dict[str, list[list]]) -> Path:
        return write_xlsx(tmp_path / file_name, sheets)

    return _factory
