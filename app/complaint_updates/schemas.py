"""Complaint update Pydantic schemas"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, StrictInt
from app.db.models import ComplaintStatus


class CreateComplaintUpdateRequest(BaseModel):
    """Request to append a status note to a complaint"""
    complaint_id: StrictInt
    updated_by: str = Field(..., min_length=1)
    status: ComplaintStatus
    comment: str


class ComplaintUpdateResponse(BaseModel):
    update_id: int
    complaint_id: int
    updated_by: str
    updated_by_name: Optional[str] = None
    status: str
    comment: str
    updated_at: datetime


class DeleteComplaintUpdateResponse(BaseModel):
    """Status the complaint was re-derived to after the delete"""
    update_id: int
    complaint_id: int
    complaint_status: str
