"""Data models for loaded workbooks."""

from typing import Any

from pydantic import BaseModel, Field

from ..errors import SheetNotFoundError

Row = list[Any]
Grid = list[Row]


class Workbook(BaseModel):
    """A named, ordered collection of sheets.

    Each sheet is a grid of rows and each row an ordered list of raw cell
    values. Rows may have different lengths.
    """

    name: str
    sheets: dict[str, Grid] = Field(default_factory=dict)

    @property
    def sheet_names(self) -> list[str]:
        """Sheet names in listing order."""
        return list(self.sheets)

    def has_sheet(self, sheet_name: str) -> bool:
        return sheet_name in self.sheets

    def get_sheet(self, sheet_name: str) -> Grid:
        """Return the rows of a sheet."""
        if sheet_name not in self.sheets:
            raise SheetNotFoundError(sheet_name, self.name)
        return self.sheets[sheet_name]

    def get_statistics(self) -> dict:
        """Row and column counts per sheet."""
        return {
            sheet_name: {
                "rows": len(rows),
                "columns": max((len(row) for row in rows), default=0),
            }
            for sheet_name, rows in self.sheets.items()
        }
