"""Attachment REST API endpoints"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.postgres import get_db
from app.db.models import Attachment
from app.attachments.service import AttachmentService
from app.attachments.schemas import AttachmentResponse, CreateAttachmentRequest
from app.complaints.service import ComplaintService
from app.auth.models import Principal
from app.auth.middleware import check_permission, ensure_self_or_permission, get_principal
from app.utils.responses import ApiResponse, success_response
from app.utils.timezone import to_display_tz

router = APIRouter(
    prefix="/attachments",
    tags=["attachments"],
)


def to_response(attachment: Attachment) -> AttachmentResponse:
    return AttachmentResponse(
        attachment_id=attachment.attachment_id,
        complaint_id=attachment.complaint_id,
        file_name=attachment.file_name,
        file_url=attachment.file_url,
        file_type=attachment.file_type,
        file_size=attachment.file_size,
        uploaded_at=to_display_tz(attachment.uploaded_at),
    )


@router.post("", response_model=ApiResponse[AttachmentResponse], status_code=status.HTTP_201_CREATED)
async def create_attachment(
    request: CreateAttachmentRequest,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_principal),
):
    """
    Register an uploaded file against a complaint.

    Required permission: attachment:create, plus complaint owner or complaint:read:any
    """
    check_permission(principal, "attachment:create")
    complaint = await ComplaintService(db).get_complaint(request.complaint_id)
    ensure_self_or_permission(principal, complaint.user_id, "complaint:read:any")

    service = AttachmentService(db)
    attachment = await service.create_attachment(
        complaint_id=request.complaint_id,
        file_name=request.file_name,
        file_url=request.file_url,
        file_type=request.file_type,
        file_size=request.file_size,
    )
    return success_response(to_response(attachment), "Attachment created successfully")


@router.get("/{complaint_id}", response_model=ApiResponse[List[AttachmentResponse]])
async def list_attachments(
    complaint_id: int,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_principal),
):
    """Attachments of a complaint, newest first"""
    complaint = await ComplaintService(db).get_complaint(complaint_id)
    ensure_self_or_permission(principal, complaint.user_id, "complaint:read:any")

    service = AttachmentService(db)
    attachments = await service.list_attachments(complaint_id)
    return success_response([to_response(a) for a in attachments], "Attachments fetched successfully")


@router.delete("/{attachment_id}", response_model=ApiResponse[None])
async def delete_attachment(
    attachment_id: int,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_principal),
):
    """Complaint owner, or attachment:delete:any (Staff, Manager, Admin)"""
    service = AttachmentService(db)
    attachment = await service.get_attachment(attachment_id)
    complaint = await ComplaintService(db).get_complaint(attachment.complaint_id)
    ensure_self_or_permission(principal, complaint.user_id, "attachment:delete:any")

    await service.delete_attachment(attachment_id)
    return success_response(None, "Attachment deleted successfully")
