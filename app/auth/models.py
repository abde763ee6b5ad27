"""Caller identity models"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime


class Identity(BaseModel):
    """Verified bearer token subject"""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="sub")
    email: str = ""
    iat: Optional[datetime] = None
    exp: Optional[datetime] = None


class Principal(BaseModel):
    """Registered caller with the permissions granted to their role"""
    user_id: str
    email: str
    role: str
    permissions: list[str] = []

    def has(self, permission: str) -> bool:
        return permission in self.permissions
