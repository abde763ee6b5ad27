from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.postgres import get_db
from app.db.models import Complaint, ComplaintPriority, ComplaintStatus
from app.complaints.service import ComplaintService
from app.complaints.schemas import (
    ComplaintListResponse,
    ComplaintResponse,
    CreateComplaintRequest,
    UpdateComplaintRequest,
)
from app.auth.models import Principal
from app.auth.middleware import check_permission, ensure_self_or_permission, get_principal
from app.utils.pagination import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, coerce_positive_int, total_pages
from app.utils.responses import ApiResponse, success_response
from app.utils.timezone import to_display_tz

router = APIRouter(
    prefix="/complaints",
    tags=["complaints"],
)


def to_response(complaint: Complaint) -> ComplaintResponse:
    return ComplaintResponse(
        complaint_id=complaint.complaint_id,
        user_id=complaint.user_id,
        category=complaint.category,
        description=complaint.description,
        status=complaint.status,
        priority=complaint.priority,
        assigned_staff=complaint.assigned_staff,
        created_at=to_display_tz(complaint.created_at),
        updated_at=to_display_tz(complaint.updated_at),
    )


@router.post("", response_model=ApiResponse[ComplaintResponse], status_code=status.HTTP_201_CREATED)
async def create_complaint(
    request: CreateComplaintRequest,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_principal),
):
    """
    File a complaint.

    Required permission: complaint:create; filing for another user
    additionally needs complaint:create:any (Admin).
    """
    check_permission(principal, "complaint:create")
    ensure_self_or_permission(principal, request.user_id, "complaint:create:any")

    service = ComplaintService(db)
    complaint = await service.create_complaint(
        user_id=request.user_id,
        category=request.category,
        description=request.description,
        priority=request.priority,
    )
    return success_response(to_response(complaint), "Complaint created successfully")


@router.get("", response_model=ApiResponse[ComplaintListResponse])
async def list_complaints(
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    complaint_status: Optional[ComplaintStatus] = Query(None, alias="status"),
    priority: Optional[ComplaintPriority] = Query(None),
    assigned_staff: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_principal),
):
    """
    List complaints across all customers.

    Required permission: complaint:read:any (Staff, Manager, Admin)
    """
    check_permission(principal, "complaint:read:any")

    page_number = coerce_positive_int(page, DEFAULT_PAGE)
    size = coerce_positive_int(page_size, DEFAULT_PAGE_SIZE)
    filters = {
        "status": complaint_status.value if complaint_status else None,
        "priority": priority.value if priority else None,
        "assigned_staff": assigned_staff,
        "category": category,
    }

    service = ComplaintService(db)
    complaints, total = await service.list_complaints(page=page_number, page_size=size, filters=filters)

    return success_response(
        ComplaintListResponse(
            complaints=[to_response(c) for c in complaints],
            total=total,
            page=page_number,
            page_size=size,
            total_pages=total_pages(total, size),
        ),
        "Complaints fetched successfully",
    )


@router.get("/user/{user_id}", response_model=ApiResponse[List[ComplaintResponse]])
async def list_user_complaints(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_principal),
):
    """A user's own complaints, newest first"""
    ensure_self_or_permission(principal, user_id, "complaint:read:any")

    service = ComplaintService(db)
    complaints = await service.list_user_complaints(user_id)
    return success_response([to_response(c) for c in complaints], "Complaints fetched successfully")


@router.get("/{complaint_id}", response_model=ApiResponse[ComplaintResponse])
async def get_complaint(
    complaint_id: int,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_principal),
):
    """Owner, or complaint:read:any"""
    service = ComplaintService(db)
    complaint = await service.get_complaint(complaint_id)
    ensure_self_or_permission(principal, complaint.user_id, "complaint:read:any")

    return success_response(to_response(complaint), "Complaint fetched successfully")


@router.api_route("/{complaint_id}", methods=["PUT", "PATCH"], response_model=ApiResponse[ComplaintResponse])
async def update_complaint(
    complaint_id: int,
    request: UpdateComplaintRequest,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_principal),
):
    """
    Partially update status, priority or assigned_staff.

    Required permission: complaint:update (Staff, Manager, Admin)
    """
    check_permission(principal, "complaint:update")

    changes = request.model_dump(exclude_none=True, mode="json")

    service = ComplaintService(db)
    complaint = await service.update_complaint(complaint_id, changes)
    return success_response(to_response(complaint), "Complaint updated successfully")


@router.delete("/{complaint_id}", response_model=ApiResponse[None])
async def delete_complaint(
    complaint_id: int,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_principal),
):
    """
    Delete a complaint with its updates, attachments and feedback.

    Owner, or complaint:delete:any (Manager, Admin)
    """
    service = ComplaintService(db)
    complaint = await service.get_complaint(complaint_id)
    ensure_self_or_permission(principal, complaint.user_id, "complaint:delete:any")

    await service.delete_complaint(complaint_id)
    return success_response(None, "Complaint deleted successfully")
