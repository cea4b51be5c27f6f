"""API routes for SheetDiff."""

import logging
from typing import Any, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ..engine import ColumnSelector, MatchConfig, compare
from ..errors import (
    ComparisonError,
    SheetNotFoundError,
    WorkbookLoadError,
    WorkbookNotFoundError,
)
from ..report import build_summary, report_payload
from ..sheets import Workbook, load_workbook

logger = logging.getLogger(__name__)

router = APIRouter()


class WorkbookPayload(BaseModel):
    """An already-parsed workbook sent inline."""

    name: str
    sheets: dict[str, list[list[Any]]] = Field(default_factory=dict)


class CompareRequest(BaseModel):
    """Request to compare two inline workbooks."""

    workbook1: WorkbookPayload
    workbook2: WorkbookPayload
    key_column: Optional[str] = None
    sheet: Optional[str] = None


class CompareFilesRequest(BaseModel):
    """Request to compare two workbook files on the server's filesystem."""

    file1_path: str
    file2_path: str
    key_column: Optional[str] = None
    sheet: Optional[str] = None


def _match_config(key_column: Optional[str], sheet: Optional[str]) -> MatchConfig:
    return MatchConfig(
        key_column=ColumnSelector.parse(key_column) if key_column else None,
        sheet=sheet,
    )


def _run_comparison(
    workbook1: Workbook, workbook2: Workbook, config: MatchConfig
) -> dict:
    try:
        report = compare(workbook1, workbook2, config)
    except SheetNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ComparisonError as e:
        logger.error(f"Comparison failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    summary = build_summary(report, workbook1, workbook2)
    return report_payload(report, summary)


@router.get("/health")
def health_check():
    """Health check endpoint with non-secret configuration."""
    from ..config import settings

    return {
        "status": "ok",
        "service": "sheetdiff",
        "config": {
            "default_key_column": settings.default_key_column,
            "label_columns": settings.label_columns,
            "max_value_display_chars": settings.max_value_display_chars,
        },
    }


@router.post("/compare")
def compare_workbooks(request: CompareRequest):
    """Compare two workbooks supplied in the request body."""
    workbook1 = Workbook(name=request.workbook1.name, sheets=request.workbook1.sheets)
    workbook2 = Workbook(name=request.workbook2.name, sheets=request.workbook2.sheets)
    config = _match_config(request.key_column, request.sheet)
    return _run_comparison(workbook1, workbook2, config)


@router.post("/compare/files")
def compare_files(request: CompareFilesRequest):
    """Load two workbook files and compare them."""
    try:
        workbook1 = load_workbook(request.file1_path)
        workbook2 = load_workbook(request.file2_path)
    except WorkbookNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except WorkbookLoadError as e:
        raise HTTPException(status_code=400, detail=str(e))

    config = _match_config(request.key_column, request.sheet)
    return _run_comparison(workbook1, workbook2, config)
