"""Uniform JSON envelope for every API response"""
from datetime import datetime
from typing import Any, Generic, Optional, TypeVar
from pydantic import BaseModel, Field
import pytz

T = TypeVar("T")


def _timestamp() -> str:
    return datetime.now(pytz.utc).isoformat()


class ApiError(BaseModel):
    code: str
    message: str
    details: Optional[Any] = None


class ApiResponse(BaseModel, Generic[T]):
    """Envelope: clients can branch on `success` alone"""
    success: bool
    data: Optional[T] = None
    error: Optional[ApiError] = None
    message: Optional[str] = None
    timestamp: str = Field(default_factory=_timestamp)


def success_response(data: Any = None, message: Optional[str] = None) -> dict:
    return {
        "success": True,
        "data": data,
        "message": message,
        "timestamp": _timestamp(),
    }


def error_response(code: str, message: str, details: Any = None) -> dict:
    return {
        "success": False,
        "data": None,
        "error": {"code": code, "message": message, "details": details},
        "message": None,
        "timestamp": _timestamp(),
    }
