from app.utils.exceptions import NotFoundException


class AttachmentNotFoundException(NotFoundException):
    """Raised when an attachment is not found"""
    def __init__(self, attachment_id: int):
        super().__init__(f"Attachment {attachment_id} not found")
