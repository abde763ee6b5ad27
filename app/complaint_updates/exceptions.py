"""Complaint update custom exceptions"""
from app.utils.exceptions import NotFoundException


class ComplaintUpdateNotFoundException(NotFoundException):
    """Raised when a complaint update is not found"""
    def __init__(self, update_id: int):
        super().__init__(f"Complaint update {update_id} not found")


class NoUpdatesFoundException(NotFoundException):
    """Raised when a complaint has no updates yet"""
    def __init__(self, complaint_id: int):
        super().__init__(f"No updates found for complaint {complaint_id}")
