"""
Schemas for sending operations.

Optional fields left as None are omitted from the request body.
"""

from typing import Any

from pydantic import Field

from .base import SDKWAModel, SDKWAResponse


class SendMessageRequest(SDKWAModel):
    chat_id: str = Field(..., min_length=1, description="Personal or group chat ID")
    message: str = Field(..., min_length=1, max_length=20000)
    quoted_message_id: str | None = None
    archive_chat: bool | None = None
    link_preview: bool | None = None


class Contact(SDKWAModel):
    phone_contact: int = Field(..., gt=0)
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    company: str | None = None


class SendContactRequest(SDKWAModel):
    chat_id: str = Field(..., min_length=1)
    contact: Contact
    quoted_message_id: str | None = None


class SendFileByUploadRequest(SDKWAModel):
    """Upload-and-send request; ``file`` is sent as the multipart ``file`` part."""

    chat_id: str = Field(..., min_length=1)
    file: Any = Field(..., exclude=True, description="Bytes or binary file object")
    file_name: str = Field(..., min_length=1)
    content_type: str = Field("application/octet-stream", exclude=True)
    caption: str | None = None
    quoted_message_id: str | None = None


class SendFileByUrlRequest(SDKWAModel):
    chat_id: str = Field(..., min_length=1)
    url_file: str = Field(..., min_length=1)
    file_name: str = Field(..., min_length=1)
    caption: str | None = None
    quoted_message_id: str | None = None
    archive_chat: bool | None = None


class SendLocationRequest(SDKWAModel):
    chat_id: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    name_location: str | None = None
    address: str | None = None
    quoted_message_id: str | None = None


class SentMessageResult(SDKWAResponse):
    id_message: str = ""


class UploadFileResult(SDKWAResponse):
    url_file: str = ""
