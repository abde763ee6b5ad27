"""User repository for database operations"""
from typing import Dict, List, Optional, Tuple
from sqlalchemy import select
from app.db.models import User, STAFF_ROLES
from app.db.repository import BaseRepository


class UserRepository(BaseRepository):
    """Repository for user database operations"""

    FILTERABLE = ("role",)

    async def create(self, user: User) -> User:
        """Create a new user"""
        return await self._save(user)

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.user_id == user_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_staff(self) -> List[User]:
        """Staff, Manager and Admin accounts"""
        stmt = select(User).where(User.role.in_(STAFF_ROLES)).order_by(User.full_name)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def find_all(
        self,
        page: int = 1,
        page_size: int = 10,
        filters: Optional[Dict[str, str]] = None,
    ) -> Tuple[List[User], int]:
        return await self._paginate(
            User,
            page,
            page_size,
            filters or {},
            self.FILTERABLE,
            order_by=(User.created_at.desc(), User.user_id.desc()),
        )

    async def update_role(self, user: User, role: str) -> User:
        user.role = role
        return await self._save(user)
