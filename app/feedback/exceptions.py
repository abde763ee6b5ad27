"""Feedback custom exceptions"""
from app.utils.exceptions import ConflictException, NotFoundException


class FeedbackNotFoundException(NotFoundException):
    """Raised when a complaint has no feedback"""
    def __init__(self, complaint_id: int):
        super().__init__(f"No feedback found for complaint {complaint_id}")


class FeedbackAlreadyExistsException(ConflictException):
    """Raised when feedback already exists for a complaint"""
    def __init__(self, complaint_id: int = None):
        super().__init__("Feedback already exists for this complaint")
        self.complaint_id = complaint_id
