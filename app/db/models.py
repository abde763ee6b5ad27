from enum import Enum
from sqlalchemy import Column, String, DateTime, Text, Integer, BigInteger, ForeignKey
from app.db.base import Base
from app.utils.timezone import utc_now


class UserRole(str, Enum):
    ADMIN = "Admin"
    MANAGER = "Manager"
    STAFF = "Staff"
    CUSTOMER = "Customer"


class ComplaintStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"


class ComplaintPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


STAFF_ROLES = (UserRole.STAFF.value, UserRole.MANAGER.value, UserRole.ADMIN.value)


class User(Base):
    """
    Application user. user_id is the identity provider's subject.
    """
    __tablename__ = "users"

    user_id = Column(String(128), primary_key=True)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    role = Column(String(20), nullable=False, default=UserRole.CUSTOMER.value, index=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)


class Complaint(Base):
    """Customer complaint; status/priority/assigned_staff are mutated by staff"""
    __tablename__ = "complaints"

    complaint_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(128), ForeignKey("users.user_id"), nullable=False, index=True)
    category = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default=ComplaintStatus.PENDING.value, index=True)
    priority = Column(String(10), nullable=False, default=ComplaintPriority.MEDIUM.value, index=True)
    assigned_staff = Column(String(128), ForeignKey("users.user_id"), nullable=True, index=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)


class ComplaintUpdate(Base):
    """Append-only audit entry for a complaint"""
    __tablename__ = "complaint_updates"

    update_id = Column(Integer, primary_key=True, autoincrement=True)
    complaint_id = Column(Integer, ForeignKey("complaints.complaint_id"), nullable=False, index=True)
    updated_by = Column(String(128), ForeignKey("users.user_id"), nullable=False)
    status = Column(String(20), nullable=False)
    comment = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=utc_now, nullable=False)


class Attachment(Base):
    """Metadata of a file uploaded to external blob storage"""
    __tablename__ = "attachments"

    attachment_id = Column(Integer, primary_key=True, autoincrement=True)
    complaint_id = Column(Integer, ForeignKey("complaints.complaint_id"), nullable=False, index=True)
    file_name = Column(String(255), nullable=False)
    file_url = Column(String(2048), nullable=False)
    file_type = Column(String(100), nullable=False)
    file_size = Column(BigInteger, nullable=False)
    uploaded_at = Column(DateTime, default=utc_now, nullable=False)


class Feedback(Base):
    """Customer feedback, at most one per complaint"""
    __tablename__ = "feedback"

    feedback_id = Column(Integer, primary_key=True, autoincrement=True)
    complaint_id = Column(Integer, ForeignKey("complaints.complaint_id"), unique=True, nullable=False)
    rating = Column(Integer, nullable=False)  # 1-5 stars
    comments = Column(Text, nullable=True)
    submitted_at = Column(DateTime, default=utc_now, nullable=False)
