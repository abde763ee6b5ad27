from typing import List, Optional, Tuple
from datetime import date, datetime, time, timedelta
from sqlalchemy import select, and_
from sqlalchemy.orm import aliased
from app.db.models import Complaint, User
from app.db.repository import BaseRepository


class ReportsRepository(BaseRepository):
    """Read-only queries backing complaint reports"""

    async def get_complaints_in_period(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[str] = None,
    ) -> List[Tuple[Complaint, Optional[str], Optional[str]]]:
        """
        Complaints filed within an optional inclusive date range, oldest first.

        Returns:
            List of (complaint, customer_name, assignee_name)
        """
        customer = aliased(User)
        assignee = aliased(User)

        conditions = []
        if start_date:
            conditions.append(Complaint.created_at >= datetime.combine(start_date, time.min))
        if end_date:
            conditions.append(Complaint.created_at < datetime.combine(end_date + timedelta(days=1), time.min))
        if status:
            conditions.append(Complaint.status == status)

        stmt = select(Complaint, customer.full_name, assignee.full_name).outerjoin(
            customer, Complaint.user_id == customer.user_id
        ).outerjoin(
            assignee, Complaint.assigned_staff == assignee.user_id
        )
        if conditions:
            stmt = stmt.where(and_(*conditions))
        stmt = stmt.order_by(Complaint.created_at.asc(), Complaint.complaint_id.asc())

        result = await self.db.execute(stmt)
        return [(row[0], row[1], row[2]) for row in result.all()]
