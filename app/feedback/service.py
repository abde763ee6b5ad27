"""Feedback service layer for business logic"""
import logging
from typing import Dict, Optional
from datetime import date
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.models import Feedback
from app.feedback.repository import FeedbackRepository
from app.feedback.exceptions import (
    FeedbackAlreadyExistsException,
    FeedbackNotFoundException,
)
from app.feedback.satisfaction import compute_metrics
from app.complaints.repository import ComplaintRepository
from app.complaints.exceptions import ComplaintNotFoundException

logger = logging.getLogger(__name__)


class FeedbackService:
    """Service layer for feedback business logic"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = FeedbackRepository(db)
        self.complaint_repository = ComplaintRepository(db)

    async def create_feedback(
        self,
        complaint_id: int,
        rating: int,
        comments: Optional[str] = None,
    ) -> Feedback:
        """
        Create feedback for a complaint.

        Business rules:
        - One feedback per complaint (pre-checked, and backed by a unique
          constraint so a concurrent double submission still yields a conflict)
        - Rating must be between 1-5
        """
        if not await self.complaint_repository.get_by_id(complaint_id):
            raise ComplaintNotFoundException(complaint_id)

        if await self.repository.get_by_complaint_id(complaint_id):
            logger.warning(f"Feedback already exists for complaint {complaint_id}")
            raise FeedbackAlreadyExistsException(complaint_id)

        feedback = Feedback(complaint_id=complaint_id, rating=rating, comments=comments)
        try:
            feedback = await self.repository.create(feedback)
        except IntegrityError:
            await self.db.rollback()
            logger.warning(f"Concurrent feedback submission rejected for complaint {complaint_id}")
            raise FeedbackAlreadyExistsException(complaint_id)

        logger.info(f"Feedback created - id: {feedback.feedback_id}, complaint: {complaint_id}")
        return feedback

    async def get_feedback(self, complaint_id: int) -> Feedback:
        feedback = await self.repository.get_by_complaint_id(complaint_id)
        if not feedback:
            raise FeedbackNotFoundException(complaint_id)
        return feedback

    async def get_summary(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Dict:
        """Satisfaction metrics over all feedback, optionally within a date range"""
        ratings = await self.repository.list_ratings(start_date, end_date)
        return compute_metrics(ratings)
