"""Shared repository base helpers."""
from typing import Any, Dict, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, and_

# Largest value an INTEGER primary key can hold
MAX_ID = 2**31 - 1


class BaseRepository:
    """Base repository with common DB helpers."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def _storable_id(value: int) -> bool:
        """Ids outside the INTEGER range cannot match a row"""
        return 1 <= value <= MAX_ID

    async def _save(self, instance):
        """Insert or flush pending changes of one instance and return it refreshed."""
        self.db.add(instance)
        await self.db.commit()
        await self.db.refresh(instance)
        return instance

    async def _paginate(
        self,
        model,
        page: int,
        page_size: int,
        filters: Dict[str, Any],
        filterable: Tuple[str, ...],
        order_by,
    ) -> Tuple[list, int]:
        """
        Equality-filtered, offset-paginated listing.

        Only non-empty values of whitelisted columns are applied and ANDed.

        Returns:
            Tuple of (items, total_count)
        """
        conditions = [
            getattr(model, field) == value
            for field, value in filters.items()
            if field in filterable and value not in (None, "")
        ]

        stmt = select(model)
        count_stmt = select(func.count()).select_from(model)
        if conditions:
            stmt = stmt.where(and_(*conditions))
            count_stmt = count_stmt.where(and_(*conditions))

        total_result = await self.db.execute(count_stmt)
        total = total_result.scalar()

        offset = (page - 1) * page_size
        if offset >= total:
            return [], total

        stmt = stmt.order_by(*order_by)
        stmt = stmt.offset(offset).limit(min(page_size, total - offset))

        result = await self.db.execute(stmt)
        return list(result.scalars().all()), total
