"""Workbook comparison engine."""

from .comparator import WorkbookComparator, compare
from .models import (
    ColumnInfo,
    ColumnSelector,
    ComparisonReport,
    Difference,
    MatchConfig,
    SelectorKind,
)

__all__ = [
    "WorkbookComparator",
    "compare",
    "ColumnInfo",
    "ColumnSelector",
    "ComparisonReport",
    "Difference",
    "MatchConfig",
    "SelectorKind",
]
