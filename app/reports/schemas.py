from datetime import date, datetime
from enum import Enum
from typing import Dict, Optional
from pydantic import BaseModel


class ReportFormat(str, Enum):
    CSV = "csv"
    PDF = "pdf"


class ComplaintReportRow(BaseModel):
    """One complaint as it appears in an exported report"""
    complaint_id: int
    customer_id: str
    customer_name: Optional[str] = None
    category: str
    status: str
    priority: str
    assigned_staff: Optional[str] = None
    assigned_staff_name: Optional[str] = None
    description: str
    created_at: datetime
    updated_at: datetime


class ComplaintReportSummary(BaseModel):
    """Complaint counts over a period"""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    total_complaints: int
    unassigned: int
    by_status: Dict[str, int]
    by_priority: Dict[str, int]
    by_category: Dict[str, int]
