"""Feedback REST API endpoints"""
from typing import Optional
from datetime import date
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.postgres import get_db
from app.db.models import Feedback
from app.feedback.service import FeedbackService
from app.feedback.schemas import (
    CreateFeedbackRequest,
    FeedbackMetrics,
    FeedbackResponse,
    FeedbackSummaryResponse,
)
from app.feedback.satisfaction import get_satisfaction_level
from app.complaints.service import ComplaintService
from app.auth.models import Principal
from app.auth.middleware import check_permission, ensure_self_or_permission, get_principal
from app.utils.exceptions import ValidationException
from app.utils.responses import ApiResponse, success_response
from app.utils.timezone import to_display_tz


router = APIRouter(
    prefix="/feedback",
    tags=["feedback"],
)


def to_response(feedback: Feedback) -> FeedbackResponse:
    """Convert Feedback model to response schema"""
    return FeedbackResponse(
        feedback_id=feedback.feedback_id,
        complaint_id=feedback.complaint_id,
        rating=feedback.rating,
        comments=feedback.comments,
        satisfaction_level=get_satisfaction_level(feedback.rating).value,
        submitted_at=to_display_tz(feedback.submitted_at),
    )


@router.post("", response_model=ApiResponse[FeedbackResponse], status_code=status.HTTP_201_CREATED)
async def create_feedback(
    request: CreateFeedbackRequest,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_principal),
):
    """
    Rate how a complaint was handled.

    Business rules:
    - Only the complaint's owner can leave feedback (or feedback:create:any)
    - One feedback per complaint; a second submission is a 409
    - Rating: 1-5 stars

    Required permission: feedback:create (Customer role)
    """
    check_permission(principal, "feedback:create")
    complaint = await ComplaintService(db).get_complaint(request.complaint_id)
    ensure_self_or_permission(principal, complaint.user_id, "feedback:create:any")

    service = FeedbackService(db)
    feedback = await service.create_feedback(
        complaint_id=request.complaint_id,
        rating=request.rating,
        comments=request.comments,
    )
    return success_response(to_response(feedback), "Feedback submitted successfully")


@router.get("/analytics/summary", response_model=ApiResponse[FeedbackSummaryResponse])
async def get_feedback_summary(
    start_date: Optional[date] = Query(None, description="Start date (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, description="End date (YYYY-MM-DD)"),
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_principal),
):
    """
    Average rating, satisfaction index and rating distribution.

    Required permission: feedback:analytics (Manager, Admin)
    """
    check_permission(principal, "feedback:analytics")
    if start_date and end_date and start_date > end_date:
        raise ValidationException("start_date must not be after end_date")

    service = FeedbackService(db)
    metrics = await service.get_summary(start_date, end_date)
    return success_response(
        FeedbackSummaryResponse(
            start_date=start_date,
            end_date=end_date,
            metrics=FeedbackMetrics(**metrics),
        ),
        "Feedback summary fetched successfully",
    )


@router.get("/{complaint_id}", response_model=ApiResponse[FeedbackResponse])
async def get_feedback(
    complaint_id: int,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_principal),
):
    """Feedback of a complaint; 404 when none was left"""
    complaint = await ComplaintService(db).get_complaint(complaint_id)
    ensure_self_or_permission(principal, complaint.user_id, "complaint:read:any")

    service = FeedbackService(db)
    feedback = await service.get_feedback(complaint_id)
    return success_response(to_response(feedback), "Feedback fetched successfully")
