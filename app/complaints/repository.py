"""Complaint Repository Layer"""
from typing import Dict, List, Optional, Tuple
from sqlalchemy import select, update, delete
from app.db.models import Attachment, Complaint, ComplaintUpdate, Feedback
from app.db.repository import BaseRepository
from app.utils.timezone import utc_now


class ComplaintRepository(BaseRepository):
    """Repository for complaint database operations"""

    FILTERABLE = ("status", "priority", "assigned_staff", "category", "user_id")
    UPDATABLE = ("status", "priority", "assigned_staff")

    async def create(self, complaint: Complaint) -> Complaint:
        """Create a new complaint"""
        return await self._save(complaint)

    async def get_by_id(self, complaint_id: int, refresh: bool = False) -> Optional[Complaint]:
        """Get complaint by ID; refresh overwrites any copy already held by the session"""
        if not self._storable_id(complaint_id):
            return None
        stmt = select(Complaint).where(Complaint.complaint_id == complaint_id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_user(self, user_id: str) -> List[Complaint]:
        """Get complaints owned by a user, newest first"""
        stmt = select(Complaint).where(
            Complaint.user_id == user_id
        ).order_by(Complaint.created_at.desc(), Complaint.complaint_id.desc())
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def find_all(
        self,
        page: int = 1,
        page_size: int = 10,
        filters: Optional[Dict[str, str]] = None,
    ) -> Tuple[List[Complaint], int]:
        """
        List complaints with pagination and equality filters.

        Returns:
            Tuple of (complaints, total_count)
        """
        return await self._paginate(
            Complaint,
            page,
            page_size,
            filters or {},
            self.FILTERABLE,
            order_by=(Complaint.created_at.desc(), Complaint.complaint_id.desc()),
        )

    async def update(self, complaint_id: int, changes: Dict[str, str]) -> Optional[Complaint]:
        """
        Write only the supplied fields, then re-read the complaint.

        Returns None without touching the database when nothing was supplied.
        """
        values = {field: value for field, value in changes.items() if field in self.UPDATABLE}
        if not values:
            return None
        if not self._storable_id(complaint_id):
            return None

        values["updated_at"] = utc_now()
        stmt = update(Complaint).where(Complaint.complaint_id == complaint_id).values(**values)
        await self.db.execute(stmt)
        await self.db.commit()

        return await self.get_by_id(complaint_id, refresh=True)

    async def delete(self, complaint_id: int) -> None:
        """Hard delete a complaint together with its updates, attachments and feedback"""
        await self.db.execute(delete(ComplaintUpdate).where(ComplaintUpdate.complaint_id == complaint_id))
        await self.db.execute(delete(Attachment).where(Attachment.complaint_id == complaint_id))
        await self.db.execute(delete(Feedback).where(Feedback.complaint_id == complaint_id))
        await self.db.execute(delete(Complaint).where(Complaint.complaint_id == complaint_id))
        await self.db.commit()
