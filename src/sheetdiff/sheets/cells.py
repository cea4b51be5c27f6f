"""Cell value kinds, equality rules and A1 notation helpers."""

import re
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from ..errors import UnsupportedCellValueError


class CellKind(str, Enum):
    """Kinds of value a spreadsheet cell can hold."""

    EMPTY = "empty"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"


def cell_kind(value: Any) -> CellKind:
    """Classify a raw cell value."""
    if value is None:
        return CellKind.EMPTY
    # bool is a subclass of int, so it must be checked first
    if isinstance(value, bool):
        return CellKind.BOOLEAN
    if isinstance(value, (int, float, Decimal)):
        return CellKind.NUMBER
    if isinstance(value, str):
        return CellKind.STRING
    if isinstance(value, (date, datetime, time, timedelta)):
        return CellKind.DATE
    raise UnsupportedCellValueError(value)


def cells_differ(value1: Any, value2: Any) -> bool:
    """
    Return True when two cell values count as a difference.

    Values are equal only when they have the same kind and compare equal.
    Empty and absent cells are both None and therefore never differ from
    each other, while None and "" do.
    """
    kind1 = cell_kind(value1)
    kind2 = cell_kind(value2)
    if kind1 != kind2:
        return True
    if kind1 == CellKind.EMPTY:
        return False
    return value1 != value2


def cell_at(row: Optional[list], index: int) -> Any:
    """Return the value at index, or None past the end of a ragged row."""
    if row is None or index >= len(row):
        return None
    return row[index]


def key_to_string(value: Any) -> str:
    """Render a key cell as the string used to match rows."""
    kind = cell_kind(value)
    if kind == CellKind.BOOLEAN:
        return "true" if value else "false"
    if kind == CellKind.NUMBER and isinstance(value, float) and value.is_integer():
        return str(int(value))
    if kind == CellKind.DATE and hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def index_to_col_letter(index: int) -> str:
    """Convert 0-based index to column letter(s)."""
    if index < 0:
        raise ValueError(f"Column index must be non-negative: {index}")
    result = ""
    index += 1
    while index > 0:
        index -= 1
        result = chr(ord("A") + (index % 26)) + result
        index //= 26
    return result


def cell_reference(col: int, row_number: int) -> str:
    """Build an A1 reference from a 0-based column and 1-based row number."""
    return f"{index_to_col_letter(col)}{row_number}"


def parse_cell_notation(cell: str) -> tuple[str, int]:
    """Parse A1 notation into column letters and row number."""
    match = re.match(r"([A-Za-z]+)(\d+)", cell)
    if not match:
        raise ValueError(f"Invalid cell notation: {cell}")
    return match.group(1).upper(), int(match.group(2))


def synthetic_column_label(index: int) -> str:
    """Label used for a column with no header text."""
    return f"Column {index_to_col_letter(index)}"
