"""User service layer for business logic"""
import logging
from typing import Dict, List, Optional, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.models import User, UserRole
from app.users.repository import UserRepository
from app.users.exceptions import (
    SelfRoleChangeException,
    UserAlreadyExistsException,
    UserNotFoundException,
)

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for user business logic"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = UserRepository(db)

    async def register_user(
        self,
        user_id: str,
        full_name: str,
        email: str,
        role: UserRole = UserRole.CUSTOMER,
    ) -> User:
        """
        Register a user account.

        Business rules:
        - user_id and email are both unique
        - role defaults to Customer
        """
        if await self.repository.get_by_id(user_id):
            logger.warning(f"User already exists - id: {user_id}")
            raise UserAlreadyExistsException("id", user_id)
        if await self.repository.get_by_email(email):
            logger.warning(f"User already exists - email: {email}")
            raise UserAlreadyExistsException("email", email)

        user = User(user_id=user_id, full_name=full_name, email=email, role=UserRole(role).value)
        try:
            user = await self.repository.create(user)
        except IntegrityError:
            await self.db.rollback()
            raise UserAlreadyExistsException("id or email", email)

        logger.info(f"User registered - id: {user.user_id}, role: {user.role}")
        return user

    async def get_user(self, user_id: str) -> User:
        user = await self.repository.get_by_id(user_id)
        if not user:
            raise UserNotFoundException(user_id)
        return user

    async def list_users(
        self,
        page: int = 1,
        page_size: int = 10,
        filters: Optional[Dict[str, str]] = None,
    ) -> Tuple[List[User], int]:
        return await self.repository.find_all(page=page, page_size=page_size, filters=filters)

    async def list_staff(self) -> List[User]:
        return await self.repository.list_staff()

    async def update_role(self, user_id: str, role: UserRole, acting_user_id: str) -> User:
        """
        Change a user's role.

        Business rules:
        - Nobody can change their own role
        """
        if user_id == acting_user_id:
            logger.warning(f"Self role change rejected - id: {user_id}")
            raise SelfRoleChangeException()

        user = await self.get_user(user_id)
        user = await self.repository.update_role(user, UserRole(role).value)
        logger.info(f"User role updated - id: {user_id}, role: {user.role}, by: {acting_user_id}")
        return user
