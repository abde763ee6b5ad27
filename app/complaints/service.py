import logging
from typing import Dict, List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.models import Complaint, ComplaintPriority, ComplaintStatus, STAFF_ROLES
from app.complaints.repository import ComplaintRepository
from app.complaints.exceptions import (
    ComplaintNotFoundException,
    InvalidAssigneeException,
    NothingToUpdateException,
)
from app.users.repository import UserRepository
from app.users.exceptions import UserNotFoundException

logger = logging.getLogger(__name__)


class ComplaintService:
    """Service layer for complaint business logic"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = ComplaintRepository(db)
        self.user_repository = UserRepository(db)

    async def create_complaint(
        self,
        user_id: str,
        category: str,
        description: str,
        priority: Optional[ComplaintPriority] = None,
    ) -> Complaint:
        """
        File a complaint. Status always starts as Pending; priority defaults to Medium.
        """
        if not await self.user_repository.get_by_id(user_id):
            raise UserNotFoundException(user_id)

        complaint = Complaint(
            user_id=user_id,
            category=category,
            description=description,
            status=ComplaintStatus.PENDING.value,
            priority=ComplaintPriority(priority or ComplaintPriority.MEDIUM).value,
        )
        complaint = await self.repository.create(complaint)
        logger.info(f"Complaint created - id: {complaint.complaint_id}, user: {user_id}")
        return complaint

    async def get_complaint(self, complaint_id: int) -> Complaint:
        complaint = await self.repository.get_by_id(complaint_id)
        if not complaint:
            raise ComplaintNotFoundException(complaint_id)
        return complaint

    async def list_complaints(
        self,
        page: int = 1,
        page_size: int = 10,
        filters: Optional[Dict[str, str]] = None,
    ) -> Tuple[List[Complaint], int]:
        return await self.repository.find_all(page=page, page_size=page_size, filters=filters)

    async def list_user_complaints(self, user_id: str) -> List[Complaint]:
        return await self.repository.get_by_user(user_id)

    async def update_complaint(self, complaint_id: int, changes: Dict[str, str]) -> Complaint:
        """
        Partially update status / priority / assigned_staff.

        An empty change set performs no write and is reported as not found.
        """
        if not changes:
            raise NothingToUpdateException(complaint_id)

        assignee_id = changes.get("assigned_staff")
        if assignee_id:
            assignee = await self.user_repository.get_by_id(assignee_id)
            if not assignee or assignee.role not in STAFF_ROLES:
                raise InvalidAssigneeException(assignee_id)

        complaint = await self.repository.update(complaint_id, changes)
        if not complaint:
            raise ComplaintNotFoundException(complaint_id)

        logger.info(f"Complaint updated - id: {complaint_id}, changes: {changes}")
        return complaint

    async def delete_complaint(self, complaint_id: int) -> None:
        await self.repository.delete(complaint_id)
        logger.info(f"Complaint deleted - id: {complaint_id}")
