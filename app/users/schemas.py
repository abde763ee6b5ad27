"""User Pydantic schemas"""
from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from app.db.models import UserRole


class RegisterUserRequest(BaseModel):
    """Request to register the caller's account"""
    user_id: str = Field(..., min_length=1, max_length=128)
    full_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    role: UserRole = UserRole.CUSTOMER


class UpdateRoleRequest(BaseModel):
    role: UserRole


class UserResponse(BaseModel):
    user_id: str
    full_name: str
    email: str
    role: str
    created_at: datetime


class UserListResponse(BaseModel):
    """Paginated list of users"""
    model_config = ConfigDict(populate_by_name=True)

    users: List[UserResponse]
    total: int
    page: int
    page_size: int = Field(..., alias="pageSize")
    total_pages: int = Field(..., alias="totalPages")
