"""Complaint update service layer"""
import logging
from typing import List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.models import ComplaintStatus, ComplaintUpdate
from app.complaint_updates.repository import ComplaintUpdateRepository
from app.complaint_updates.exceptions import (
    ComplaintUpdateNotFoundException,
    NoUpdatesFoundException,
)
from app.complaints.repository import ComplaintRepository
from app.complaints.exceptions import ComplaintNotFoundException

logger = logging.getLogger(__name__)


class ComplaintUpdateService:
    """Service layer for the complaint audit trail"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = ComplaintUpdateRepository(db)
        self.complaint_repository = ComplaintRepository(db)

    async def create_update(
        self,
        complaint_id: int,
        updated_by: str,
        status: ComplaintStatus,
        comment: str,
    ) -> ComplaintUpdate:
        """
        Record a status note and move the complaint to that status.

        The audit row and the complaint's status are written in one commit.
        """
        if not await self.complaint_repository.get_by_id(complaint_id):
            raise ComplaintNotFoundException(complaint_id)

        complaint_update = ComplaintUpdate(
            complaint_id=complaint_id,
            updated_by=updated_by,
            status=ComplaintStatus(status).value,
            comment=comment,
        )
        complaint_update = await self.repository.create_with_status_sync(complaint_update)
        logger.info(
            f"Complaint update created - id: {complaint_update.update_id}, "
            f"complaint: {complaint_id}, status: {complaint_update.status}"
        )
        return complaint_update

    async def get_update(self, update_id: int) -> ComplaintUpdate:
        complaint_update = await self.repository.get_by_id(update_id)
        if not complaint_update:
            raise ComplaintUpdateNotFoundException(update_id)
        return complaint_update

    async def list_updates(self, complaint_id: int) -> List[Tuple[ComplaintUpdate, Optional[str]]]:
        return await self.repository.list_by_complaint(complaint_id)

    async def get_latest_update(self, complaint_id: int) -> Tuple[ComplaintUpdate, Optional[str]]:
        latest = await self.repository.get_latest(complaint_id)
        if not latest:
            raise NoUpdatesFoundException(complaint_id)
        return latest

    async def delete_update(self, complaint_update: ComplaintUpdate) -> str:
        """Delete an update; returns the complaint's re-derived status"""
        update_id = complaint_update.update_id
        status = await self.repository.delete_and_resync(complaint_update)
        logger.info(f"Complaint update deleted - id: {update_id}, complaint status now: {status}")
        return status
