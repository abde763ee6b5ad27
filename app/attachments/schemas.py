from datetime import datetime
from pydantic import BaseModel, Field, HttpUrl, StrictInt, TypeAdapter, ValidationError, field_validator

_http_url = TypeAdapter(HttpUrl)


class CreateAttachmentRequest(BaseModel):
    """Metadata of a file already uploaded to blob storage"""
    complaint_id: StrictInt
    file_name: str = Field(..., min_length=1, max_length=255)
    file_url: str
    file_type: str = Field(..., min_length=1, max_length=100)
    file_size: StrictInt = Field(..., ge=0, description="Size in bytes")

    @field_validator("file_url")
    @classmethod
    def validate_file_url(cls, value: str) -> str:
        """Must parse as an http(s) URL; the original string is kept as sent"""
        try:
            _http_url.validate_python(value)
        except ValidationError:
            raise ValueError("file_url must be a valid http or https URL")
        return value


class AttachmentResponse(BaseModel):
    attachment_id: int
    complaint_id: int
    file_name: str
    file_url: str
    file_type: str
    file_size: int
    uploaded_at: datetime
