"""Custom exceptions for complaints"""
from app.utils.exceptions import NotFoundException, ValidationException


class ComplaintNotFoundException(NotFoundException):
    """Raised when a complaint is not found"""
    def __init__(self, complaint_id: int = None):
        detail = "Complaint not found"
        if complaint_id is not None:
            detail = f"Complaint {complaint_id} not found"
        super().__init__(detail)


class NothingToUpdateException(NotFoundException):
    """Raised when a partial update carries no fields; nothing is written"""
    def __init__(self, complaint_id: int):
        super().__init__(f"Complaint {complaint_id} not updated: no fields supplied")


class InvalidAssigneeException(ValidationException):
    """Raised when assigned_staff is not a Staff, Manager or Admin account"""
    def __init__(self, user_id: str):
        super().__init__(f"User {user_id} cannot be assigned to complaints")
