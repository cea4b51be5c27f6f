"""Workbook loading and cell value handling."""

from .cells import (
    CellKind,
    cell_kind,
    cells_differ,
    index_to_col_letter,
    parse_cell_notation,
)
from .loader import load_workbook
from .models import Workbook

__all__ = [
    "CellKind",
    "cell_kind",
    "cells_differ",
    "index_to_col_letter",
    "parse_cell_notation",
    "load_workbook",
    "Workbook",
]
