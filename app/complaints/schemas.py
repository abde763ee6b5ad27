from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from app.db.models import ComplaintPriority, ComplaintStatus


class CreateComplaintRequest(BaseModel):
    """Request to file a new complaint"""
    user_id: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1)
    priority: Optional[ComplaintPriority] = None


class UpdateComplaintRequest(BaseModel):
    """Partial update; omitted fields are left untouched"""
    status: Optional[ComplaintStatus] = None
    priority: Optional[ComplaintPriority] = None
    assigned_staff: Optional[str] = Field(None, min_length=1)


class ComplaintResponse(BaseModel):
    complaint_id: int
    user_id: str
    category: str
    description: str
    status: str  # Pending | In Progress | Resolved | Closed
    priority: str  # Low | Medium | High
    assigned_staff: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ComplaintListResponse(BaseModel):
    """Paginated list of complaints"""
    model_config = ConfigDict(populate_by_name=True)

    complaints: List[ComplaintResponse]
    total: int
    page: int
    page_size: int = Field(..., alias="pageSize")
    total_pages: int = Field(..., alias="totalPages")
