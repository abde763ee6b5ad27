from typing import Optional
from datetime import date
from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.postgres import get_db
from app.db.models import ComplaintStatus
from app.reports.repository import ReportsRepository
from app.reports.schemas import ComplaintReportSummary, ReportFormat
from app.reports.service import ReportsService
from app.auth.models import Principal
from app.auth.middleware import check_permission, get_principal
from app.utils.exceptions import ValidationException
from app.utils.responses import ApiResponse, success_response


def get_reports_service(db: AsyncSession = Depends(get_db)) -> ReportsService:
    """Dependency to get ReportsService"""
    return ReportsService(ReportsRepository(db))


router = APIRouter(
    prefix="/reports",
    tags=["reports"],
)


def _validate_range(start_date: Optional[date], end_date: Optional[date]):
    if start_date and end_date and start_date > end_date:
        raise ValidationException("start_date must not be after end_date")


def _period_label(start_date: Optional[date], end_date: Optional[date]) -> str:
    if not start_date and not end_date:
        return "all"
    return f"{start_date or 'start'}_to_{end_date or 'now'}"


@router.get("/complaints/summary", response_model=ApiResponse[ComplaintReportSummary])
async def get_complaint_summary(
    start_date: Optional[date] = Query(None, description="Start date (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, description="End date (YYYY-MM-DD)"),
    service: ReportsService = Depends(get_reports_service),
    principal: Principal = Depends(get_principal),
):
    """
    Complaint counts per status, priority and category for a period.

    Required permission: complaint:report (Manager, Admin)
    """
    check_permission(principal, "complaint:report")
    _validate_range(start_date, end_date)

    summary = await service.get_summary(start_date, end_date)
    return success_response(summary, "Complaint summary fetched successfully")


@router.get("/complaints/download")
async def download_complaint_report(
    start_date: Optional[date] = Query(None, description="Start date (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, description="End date (YYYY-MM-DD)"),
    complaint_status: Optional[ComplaintStatus] = Query(None, alias="status"),
    format: ReportFormat = Query(ReportFormat.CSV),
    service: ReportsService = Depends(get_reports_service),
    principal: Principal = Depends(get_principal),
):
    """
    Download the complaints filed in a period as CSV or PDF.

    Required permission: complaint:report (Manager, Admin)
    """
    check_permission(principal, "complaint:report")
    _validate_range(start_date, end_date)

    rows = await service.get_complaint_rows(
        start_date, end_date, complaint_status.value if complaint_status else None
    )
    filename = f"complaints_{_period_label(start_date, end_date)}"

    if format == ReportFormat.PDF:
        title = "Complaints Report"
        if start_date or end_date:
            title = f"{title} - {start_date or 'start'} to {end_date or 'now'}"
        return StreamingResponse(
            service.generate_pdf(rows, title),
            media_type="application/pdf",
            headers={"Content-Disposition": f"attachment; filename={filename}.pdf"},
        )
    return StreamingResponse(
        service.generate_csv(rows),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}.csv"},
    )
