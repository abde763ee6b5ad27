import logging
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.models import Attachment
from app.attachments.repository import AttachmentRepository
from app.attachments.exceptions import AttachmentNotFoundException
from app.complaints.repository import ComplaintRepository
from app.complaints.exceptions import ComplaintNotFoundException

logger = logging.getLogger(__name__)


class AttachmentService:
    """Service layer for attachment metadata"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = AttachmentRepository(db)
        self.complaint_repository = ComplaintRepository(db)

    async def create_attachment(
        self,
        complaint_id: int,
        file_name: str,
        file_url: str,
        file_type: str,
        file_size: int,
    ) -> Attachment:
        if not await self.complaint_repository.get_by_id(complaint_id):
            raise ComplaintNotFoundException(complaint_id)

        attachment = Attachment(
            complaint_id=complaint_id,
            file_name=file_name,
            file_url=file_url,
            file_type=file_type,
            file_size=file_size,
        )
        attachment = await self.repository.create(attachment)
        logger.info(f"Attachment registered - id: {attachment.attachment_id}, complaint: {complaint_id}")
        return attachment

    async def get_attachment(self, attachment_id: int) -> Attachment:
        attachment = await self.repository.get_by_id(attachment_id)
        if not attachment:
            raise AttachmentNotFoundException(attachment_id)
        return attachment

    async def list_attachments(self, complaint_id: int) -> List[Attachment]:
        return await self.repository.list_by_complaint(complaint_id)

    async def delete_attachment(self, attachment_id: int) -> None:
        await self.repository.delete(attachment_id)
        logger.info(f"Attachment deleted - id: {attachment_id}")
