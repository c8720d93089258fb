"""
Credit Report Analyzer - Reports API Router

Handles XML report upload, listing, lookup, deletion, search and statistics.
"""
from __future__ import annotations
import logging
import math
import os
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..database import get_db
from ..services.parsing import CreditReportError, parse_experian_xml
from ..services.report_store import CreditReportStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])

MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))


# =============================================================================
# PYDANTIC MODELS FOR API
# =============================================================================

class ReportResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: dict


class ReportListResponse(BaseModel):
    success: bool = True
    count: int
    total: int
    totalPages: int
    currentPage: int
    data: List[dict]


class SearchResponse(BaseModel):
    success: bool = True
    count: int
    data: List[dict]


class StatisticsResponse(BaseModel):
    success: bool = True
    data: dict


def get_store(db: Session = Depends(get_db)) -> CreditReportStore:
    return CreditReportStore(db)


# =============================================================================
# API ENDPOINTS
# =============================================================================

@router.post("/upload", response_model=ReportResponse, status_code=201)
async def upload_report(
    file: UploadFile = File(..., alias="xmlFile"),
    store: CreditReportStore = Depends(get_store),
):
    """
    Upload and process an Experian XML credit report.
    The upload is always closed (and its spool file removed) before returning.
    """
    try:
        if not file.filename or not file.filename.lower().endswith(".xml"):
            raise HTTPException(status_code=400, detail="Only XML files are supported")

        logger.info(f"File received: {file.filename}")
        xml_data = await file.read(MAX_UPLOAD_BYTES + 1)
        if len(xml_data) > MAX_UPLOAD_BYTES:
            raise HTTPException(status_code=413, detail=f"File exceeds {MAX_UPLOAD_BYTES} bytes")

        report = parse_experian_xml(xml_data, file.filename)
        report_id = store.insert(report)

        return ReportResponse(
            message="File uploaded and processed successfully",
            data=store.find_by_id(report_id),
        )

    except HTTPException:
        raise
    except CreditReportError as e:
        logger.warning(f"Rejected report {file.filename}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error processing report: {e}")
        raise HTTPException(status_code=500, detail=f"Error processing file: {e}")
    finally:
        await file.close()


@router.get("/creditreports", response_model=ReportListResponse)
async def list_reports(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort_by: str = Query("uploadDate", alias="sortBy"),
    order: str = Query("desc"),
    store: CreditReportStore = Depends(get_store),
):
    """List reports, newest first by default."""
    try:
        reports, total = store.find_all(page=page, limit=limit, sort_by=sort_by, order=order)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ReportListResponse(
        count=len(reports),
        total=total,
        totalPages=math.ceil(total / limit),
        currentPage=page,
        data=reports,
    )


@router.get("/creditreports/search", response_model=SearchResponse)
async def search_reports(
    query: Optional[str] = None,
    store: CreditReportStore = Depends(get_store),
):
    """Search reports by name, PAN or mobile number."""
    if not query or not query.strip():
        raise HTTPException(status_code=400, detail="Search query is required")

    reports = store.search(query)
    return SearchResponse(count=len(reports), data=reports)


@router.get("/creditreports/{report_id}", response_model=ReportResponse)
async def get_report(report_id: str, store: CreditReportStore = Depends(get_store)):
    """Get a single report by ID."""
    report = store.find_by_id(report_id)
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    return ReportResponse(data=report)


@router.delete("/creditreports/{report_id}", response_model=ReportResponse)
async def delete_report(report_id: str, store: CreditReportStore = Depends(get_store)):
    """Delete a report and return what was deleted."""
    report = store.delete(report_id)
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    return ReportResponse(message="Report deleted successfully", data=report)


@router.get("/statistics", response_model=StatisticsResponse)
async def get_statistics(store: CreditReportStore = Depends(get_store)):
    """Aggregate statistics across all stored reports."""
    return StatisticsResponse(data=store.statistics())
