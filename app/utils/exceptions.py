"""Base exception carrying an envelope error code"""
from enum import Enum
from typing import Any
from fastapi import HTTPException, status


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    AUTHORIZATION_ERROR = "AUTHORIZATION_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    RESOURCE_CONFLICT = "RESOURCE_CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


STATUS_TO_CODE = {
    status.HTTP_400_BAD_REQUEST: ErrorCode.VALIDATION_ERROR,
    status.HTTP_401_UNAUTHORIZED: ErrorCode.AUTHENTICATION_ERROR,
    status.HTTP_403_FORBIDDEN: ErrorCode.AUTHORIZATION_ERROR,
    status.HTTP_404_NOT_FOUND: ErrorCode.RESOURCE_NOT_FOUND,
    status.HTTP_409_CONFLICT: ErrorCode.RESOURCE_CONFLICT,
}


def code_for_status(status_code: int) -> ErrorCode:
    if status_code >= 500:
        return ErrorCode.INTERNAL_ERROR
    return STATUS_TO_CODE.get(status_code, ErrorCode.VALIDATION_ERROR)


class AppException(HTTPException):
    """HTTPException that knows its error code and optional details"""
    def __init__(self, status_code: int, detail: str, code: ErrorCode = None, details: Any = None):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code or code_for_status(status_code)
        self.details = details


class ValidationException(AppException):
    """Raised when input passes schema validation but is semantically invalid"""
    def __init__(self, detail: str, details: Any = None):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail, ErrorCode.VALIDATION_ERROR, details)


class AuthenticationException(AppException):
    """Raised when the bearer token is missing or cannot be verified"""
    def __init__(self, detail: str = "Invalid or missing token"):
        super().__init__(status.HTTP_401_UNAUTHORIZED, detail, ErrorCode.AUTHENTICATION_ERROR)


class AuthorizationException(AppException):
    """Raised when the caller is not allowed to perform the operation"""
    def __init__(self, detail: str = "You are not authorized to perform this action"):
        super().__init__(status.HTTP_403_FORBIDDEN, detail, ErrorCode.AUTHORIZATION_ERROR)


class NotFoundException(AppException):
    def __init__(self, detail: str):
        super().__init__(status.HTTP_404_NOT_FOUND, detail, ErrorCode.RESOURCE_NOT_FOUND)


class ConflictException(AppException):
    def __init__(self, detail: str):
        super().__init__(status.HTTP_409_CONFLICT, detail, ErrorCode.RESOURCE_CONFLICT)
