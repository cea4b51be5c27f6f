"""Error types raised while loading and comparing workbooks."""


class SheetDiffError(Exception):
    """Base class for all SheetDiff failures."""

    pass


class WorkbookNotFoundError(SheetDiffError):
    """Exception raised when a workbook path does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"File not found: {path}")


class WorkbookLoadError(SheetDiffError):
    """Exception raised when a workbook file cannot be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read workbook '{path}': {reason}")


class SheetNotFoundError(SheetDiffError):
    """Exception raised when a requested sheet is absent from a workbook."""

    def __init__(self, sheet: str, workbook: str):
        self.sheet = sheet
        self.workbook = workbook
        super().__init__(f"Sheet '{sheet}' not found in {workbook}")


class UnsupportedCellValueError(SheetDiffError):
    """Exception raised when a cell holds a value of an unknown type."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Unsupported cell value type: {type(value).__name__}")


class ComparisonError(SheetDiffError):
    """Exception raised when the comparison cannot produce a complete report."""

    pass
