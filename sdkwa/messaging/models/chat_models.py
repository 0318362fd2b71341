"""Schemas for chat and contact operations."""

from pydantic import Field

from .base import SDKWAModel, SDKWAResponse


class ReadChatRequest(SDKWAModel):
    chat_id: str = Field(..., min_length=1)
    id_message: str | None = Field(
        None, description="Mark messages up to this one; all messages if omitted"
    )


class ReadChatResult(SDKWAResponse):
    set_read: bool = False


class SetProfilePictureResult(SDKWAResponse):
    set_profile_picture: bool = False
    url_avatar: str = ""
    reason: str = ""


class CheckWhatsAppResult(SDKWAResponse):
    exists_whatsapp: bool = False
