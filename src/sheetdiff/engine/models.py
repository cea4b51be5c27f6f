"""Data models for workbook comparison."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

NOT_APPLICABLE = "N/A"
SHEET_COLUMN = "Sheet"
SHEET_EXISTS = "Sheet exists"
SHEET_MISSING = "Sheet missing"
ENTIRE_ROW_COLUMN = "Entire Row"
ROW_EXISTS = "Row exists"
ROW_MISSING = "Row missing"


def row_location(row_number: int) -> str:
    """Location label for a whole row, e.g. "Row 5"."""
    return f"Row {row_number}"


class SelectorKind(str, Enum):
    """How a key column is identified."""

    INDEX = "index"
    HEADER = "header"


class ColumnSelector(BaseModel):
    """Identifies a column by 0-based index or by header row text."""

    kind: SelectorKind
    value: int | str

    @model_validator(mode="after")
    def check_value_matches_kind(self) -> "ColumnSelector":
        if self.kind == SelectorKind.INDEX and not isinstance(self.value, int):
            raise ValueError(f"Index selector needs an integer value, got {self.value!r}")
        if self.kind == SelectorKind.HEADER and not isinstance(self.value, str):
            raise ValueError(f"Header selector needs a string value, got {self.value!r}")
        return self

    @classmethod
    def index(cls, value: int) -> "ColumnSelector":
        return cls(kind=SelectorKind.INDEX, value=value)

    @classmethod
    def header(cls, value: str) -> "ColumnSelector":
        return cls(kind=SelectorKind.HEADER, value=value)

    @classmethod
    def parse(cls, text: str) -> "ColumnSelector":
        """Parse user input: integer literals select by index, anything else by header."""
        stripped = text.strip()
        try:
            return cls.index(int(stripped))
        except ValueError:
            return cls.header(text)

    def __str__(self) -> str:
        return str(self.value)


class MatchConfig(BaseModel):
    """Options that select how two workbooks are compared."""

    key_column: Optional[ColumnSelector] = None  # None means positional
    sheet: Optional[str] = None  # Restrict comparison to one sheet


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Difference(_CamelModel):
    """One discrepancy between the two workbooks."""

    sheet: str
    key_value: str = NOT_APPLICABLE
    column: str
    cell1: str
    cell2: str
    value1: Any = None
    value2: Any = None


class ColumnInfo(_CamelModel):
    """A header column offered for key selection."""

    name: str
    index: int


class ComparisonReport(_CamelModel):
    """Result of comparing two workbooks."""

    differences: list[Difference] = Field(default_factory=list)
    file1_name: str
    file2_name: str
    columns: Optional[list[ColumnInfo]] = None
    compared_sheets: list[str] = Field(default_factory=list)
    keyed_sheets: list[str] = Field(default_factory=list)  # Sheets matched by key column
    warnings: list[str] = Field(default_factory=list)

    @property
    def has_differences(self) -> bool:
        return bool(self.differences)

    def to_dict(self) -> dict:
        """Serialize using the camelCase output field names."""
        return self.model_dump(mode="json", by_alias=True)
