"""Complaint update (audit trail) repository"""
from typing import List, Optional, Tuple
from sqlalchemy import select, update
from app.db.models import Complaint, ComplaintStatus, ComplaintUpdate, User
from app.db.repository import BaseRepository
from app.utils.timezone import utc_now


class ComplaintUpdateRepository(BaseRepository):
    """Repository for complaint update database operations"""

    def _newest_first(self, stmt):
        return stmt.order_by(ComplaintUpdate.updated_at.desc(), ComplaintUpdate.update_id.desc())

    async def _set_complaint_status(self, complaint_id: int, status: str) -> None:
        stmt = update(Complaint).where(
            Complaint.complaint_id == complaint_id
        ).values(status=status, updated_at=utc_now())
        await self.db.execute(stmt)

    async def create_with_status_sync(self, complaint_update: ComplaintUpdate) -> ComplaintUpdate:
        """
        Append an update and set the complaint's status to the update's status.

        Both writes are committed together.
        """
        self.db.add(complaint_update)
        await self.db.flush()
        await self._set_complaint_status(complaint_update.complaint_id, complaint_update.status)
        await self.db.commit()
        await self.db.refresh(complaint_update)
        return complaint_update

    async def get_by_id(self, update_id: int) -> Optional[ComplaintUpdate]:
        if not self._storable_id(update_id):
            return None
        stmt = select(ComplaintUpdate).where(ComplaintUpdate.update_id == update_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_complaint(self, complaint_id: int) -> List[Tuple[ComplaintUpdate, Optional[str]]]:
        """Updates of a complaint, newest first, with the author's full name"""
        stmt = select(ComplaintUpdate, User.full_name).outerjoin(
            User, ComplaintUpdate.updated_by == User.user_id
        ).where(ComplaintUpdate.complaint_id == complaint_id)
        result = await self.db.execute(self._newest_first(stmt))
        return [(row[0], row[1]) for row in result.all()]

    async def get_latest(self, complaint_id: int) -> Optional[Tuple[ComplaintUpdate, Optional[str]]]:
        stmt = select(ComplaintUpdate, User.full_name).outerjoin(
            User, ComplaintUpdate.updated_by == User.user_id
        ).where(ComplaintUpdate.complaint_id == complaint_id)
        result = await self.db.execute(self._newest_first(stmt).limit(1))
        row = result.first()
        return (row[0], row[1]) if row else None

    async def delete_and_resync(self, complaint_update: ComplaintUpdate) -> str:
        """
        Delete an update and re-derive the complaint's status from what remains:
        the newest remaining update's status, or Pending when none remain.

        Returns the complaint's resulting status.
        """
        complaint_id = complaint_update.complaint_id
        await self.db.delete(complaint_update)
        await self.db.flush()

        stmt = self._newest_first(
            select(ComplaintUpdate.status).where(ComplaintUpdate.complaint_id == complaint_id)
        ).limit(1)
        result = await self.db.execute(stmt)
        status = result.scalar_one_or_none() or ComplaintStatus.PENDING.value

        await self._set_complaint_status(complaint_id, status)
        await self.db.commit()
        return status
