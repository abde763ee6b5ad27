import logging
from typing import List, Optional
from datetime import date
from io import BytesIO
import pandas as pd
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas
from app.db.models import ComplaintPriority, ComplaintStatus
from app.reports.repository import ReportsRepository
from app.reports.schemas import ComplaintReportRow, ComplaintReportSummary
from app.utils.timezone import to_display_tz

logger = logging.getLogger(__name__)

CSV_COLUMNS = {
    "complaint_id": "Complaint ID",
    "customer_id": "Customer ID",
    "customer_name": "Customer",
    "category": "Category",
    "status": "Status",
    "priority": "Priority",
    "assigned_staff": "Assigned Staff ID",
    "assigned_staff_name": "Assigned Staff",
    "description": "Description",
    "created_at": "Created At",
    "updated_at": "Updated At",
}


def _counts(series: pd.Series, keys: Optional[List[str]] = None) -> dict:
    counts = series.value_counts()
    if keys is not None:
        counts = counts.reindex(keys, fill_value=0)
    return {str(key): int(value) for key, value in counts.items()}


class ReportsService:
    """Complaint reports: period summaries plus CSV and PDF exports"""

    def __init__(self, repository: ReportsRepository):
        self.repository = repository

    async def get_complaint_rows(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[str] = None,
    ) -> List[ComplaintReportRow]:
        rows = await self.repository.get_complaints_in_period(start_date, end_date, status)
        return [
            ComplaintReportRow(
                complaint_id=complaint.complaint_id,
                customer_id=complaint.user_id,
                customer_name=customer_name,
                category=complaint.category,
                status=complaint.status,
                priority=complaint.priority,
                assigned_staff=complaint.assigned_staff,
                assigned_staff_name=assignee_name,
                description=complaint.description,
                created_at=to_display_tz(complaint.created_at),
                updated_at=to_display_tz(complaint.updated_at),
            )
            for complaint, customer_name, assignee_name in rows
        ]

    def _to_frame(self, rows: List[ComplaintReportRow]) -> pd.DataFrame:
        return pd.DataFrame([row.model_dump() for row in rows], columns=list(CSV_COLUMNS))

    async def get_summary(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> ComplaintReportSummary:
        """Counts per status, priority and category; every status and priority is listed"""
        df = self._to_frame(await self.get_complaint_rows(start_date, end_date))
        logger.info(f"Complaint summary built over {len(df)} complaints")
        return ComplaintReportSummary(
            start_date=start_date,
            end_date=end_date,
            total_complaints=len(df),
            unassigned=int(df["assigned_staff"].isna().sum()),
            by_status=_counts(df["status"], [s.value for s in ComplaintStatus]),
            by_priority=_counts(df["priority"], [p.value for p in ComplaintPriority]),
            by_category=_counts(df["category"]),
        )

    def generate_csv(self, rows: List[ComplaintReportRow]) -> BytesIO:
        """Generate CSV file from complaint rows"""
        df = self._to_frame(rows)
        for column in ("created_at", "updated_at"):
            df[column] = df[column].map(lambda value: value.isoformat() if value is not None else "")
        df = df.fillna("").rename(columns=CSV_COLUMNS)

        buffer = BytesIO()
        df.to_csv(buffer, index=False)
        buffer.seek(0)
        return buffer

    def generate_pdf(self, rows: List[ComplaintReportRow], title: str) -> BytesIO:
        """Generate PDF file from complaint rows"""
        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=letter)
        width, height = letter
        line_x1 = 50
        line_x2 = width - 50

        c.setFont("Helvetica-Bold", 16)
        c.drawString(50, height - 50, title)

        y = height - 80
        c.setFont("Helvetica", 10)
        if not rows:
            c.drawString(50, y, "No complaints in this period.")

        for row in rows:
            if y < 120:
                c.showPage()
                y = height - 50
                c.setFont("Helvetica", 10)

            c.drawString(50, y, f"Complaint #{row.complaint_id} - {row.category}")
            c.drawString(50, y - 15, f"Customer: {row.customer_name or row.customer_id}")
            c.drawString(50, y - 30, f"Status: {row.status}    Priority: {row.priority}")
            c.drawString(50, y - 45, f"Assigned to: {row.assigned_staff_name or row.assigned_staff or 'Unassigned'}")
            c.drawString(50, y - 60, f"Filed: {row.created_at:%Y-%m-%d %H:%M}")
            c.drawString(50, y - 75, f"Description: {row.description[:90]}")
            c.setLineWidth(0.5)
            c.line(line_x1, y - 85, line_x2, y - 85)
            y -= 105

        c.save()
        buffer.seek(0)
        return buffer
