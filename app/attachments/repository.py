"""Attachment repository for database operations"""
from typing import List, Optional
from sqlalchemy import select, delete
from app.db.models import Attachment
from app.db.repository import BaseRepository


class AttachmentRepository(BaseRepository):
    """Repository for attachment metadata"""

    async def create(self, attachment: Attachment) -> Attachment:
        return await self._save(attachment)

    async def get_by_id(self, attachment_id: int) -> Optional[Attachment]:
        if not self._storable_id(attachment_id):
            return None
        stmt = select(Attachment).where(Attachment.attachment_id == attachment_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_complaint(self, complaint_id: int) -> List[Attachment]:
        """Attachments of a complaint, newest first"""
        stmt = select(Attachment).where(
            Attachment.complaint_id == complaint_id
        ).order_by(Attachment.uploaded_at.desc(), Attachment.attachment_id.desc())
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def delete(self, attachment_id: int) -> None:
        await self.db.execute(delete(Attachment).where(Attachment.attachment_id == attachment_id))
        await self.db.commit()
