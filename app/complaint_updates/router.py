"""Complaint update REST API endpoints"""
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.postgres import get_db
from app.db.models import ComplaintUpdate
from app.complaint_updates.service import ComplaintUpdateService
from app.complaint_updates.schemas import (
    ComplaintUpdateResponse,
    CreateComplaintUpdateRequest,
    DeleteComplaintUpdateResponse,
)
from app.complaints.service import ComplaintService
from app.auth.models import Principal
from app.auth.middleware import check_permission, ensure_self_or_permission, get_principal
from app.utils.responses import ApiResponse, success_response
from app.utils.timezone import to_display_tz

router = APIRouter(
    prefix="/complaint-updates",
    tags=["complaint-updates"],
)


def to_response(complaint_update: ComplaintUpdate, author_name: Optional[str] = None) -> ComplaintUpdateResponse:
    return ComplaintUpdateResponse(
        update_id=complaint_update.update_id,
        complaint_id=complaint_update.complaint_id,
        updated_by=complaint_update.updated_by,
        updated_by_name=author_name,
        status=complaint_update.status,
        comment=complaint_update.comment,
        updated_at=to_display_tz(complaint_update.updated_at),
    )


async def _ensure_complaint_access(db: AsyncSession, principal: Principal, complaint_id: int):
    complaint = await ComplaintService(db).get_complaint(complaint_id)
    ensure_self_or_permission(principal, complaint.user_id, "complaint:read:any")


@router.post("", response_model=ApiResponse[ComplaintUpdateResponse], status_code=status.HTTP_201_CREATED)
async def create_complaint_update(
    request: CreateComplaintUpdateRequest,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_principal),
):
    """
    Add a status note to a complaint. The complaint's status is moved to the
    note's status in the same transaction.

    Required permission: complaint-update:create (Staff, Manager, Admin);
    authoring on behalf of someone else needs complaint-update:create:any.
    """
    check_permission(principal, "complaint-update:create")
    ensure_self_or_permission(principal, request.updated_by, "complaint-update:create:any")

    service = ComplaintUpdateService(db)
    complaint_update = await service.create_update(
        complaint_id=request.complaint_id,
        updated_by=request.updated_by,
        status=request.status,
        comment=request.comment,
    )
    return success_response(to_response(complaint_update), "Complaint update created successfully")


@router.get("/{complaint_id}", response_model=ApiResponse[List[ComplaintUpdateResponse]])
async def list_complaint_updates(
    complaint_id: int,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_principal),
):
    """Audit trail of a complaint, newest first, with author names"""
    await _ensure_complaint_access(db, principal, complaint_id)

    service = ComplaintUpdateService(db)
    updates = await service.list_updates(complaint_id)
    return success_response(
        [to_response(update, name) for update, name in updates],
        "Complaint updates fetched successfully",
    )


@router.get("/{complaint_id}/latest", response_model=ApiResponse[ComplaintUpdateResponse])
async def get_latest_complaint_update(
    complaint_id: int,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_principal),
):
    """Most recent update of a complaint; 404 when there is none"""
    await _ensure_complaint_access(db, principal, complaint_id)

    service = ComplaintUpdateService(db)
    latest, name = await service.get_latest_update(complaint_id)
    return success_response(to_response(latest, name), "Latest update fetched successfully")


@router.delete("/{update_id}", response_model=ApiResponse[DeleteComplaintUpdateResponse])
async def delete_complaint_update(
    update_id: int,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_principal),
):
    """
    Delete an update. The complaint's status is re-derived from the
    remaining updates (Pending when none remain).

    Author, or complaint-update:delete:any (Admin)
    """
    service = ComplaintUpdateService(db)
    complaint_update = await service.get_update(update_id)
    ensure_self_or_permission(principal, complaint_update.updated_by, "complaint-update:delete:any")

    complaint_id = complaint_update.complaint_id
    complaint_status = await service.delete_update(complaint_update)
    return success_response(
        DeleteComplaintUpdateResponse(
            update_id=update_id,
            complaint_id=complaint_id,
            complaint_status=complaint_status,
        ),
        "Update deleted successfully",
    )
