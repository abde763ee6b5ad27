"""Feedback repository for database operations"""
from typing import List, Optional
from datetime import date, datetime, time, timedelta
from sqlalchemy import select, and_
from app.db.models import Feedback
from app.db.repository import BaseRepository


class FeedbackRepository(BaseRepository):
    """Repository for feedback database operations"""

    async def create(self, feedback: Feedback) -> Feedback:
        """Create new feedback; the unique complaint_id constraint may raise IntegrityError"""
        return await self._save(feedback)

    async def get_by_complaint_id(self, complaint_id: int) -> Optional[Feedback]:
        stmt = select(Feedback).where(Feedback.complaint_id == complaint_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_ratings(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[int]:
        """Ratings submitted within an optional inclusive date range (UTC days)"""
        conditions = []
        if start_date:
            conditions.append(Feedback.submitted_at >= datetime.combine(start_date, time.min))
        if end_date:
            conditions.append(Feedback.submitted_at < datetime.combine(end_date + timedelta(days=1), time.min))

        stmt = select(Feedback.rating)
        if conditions:
            stmt = stmt.where(and_(*conditions))
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
