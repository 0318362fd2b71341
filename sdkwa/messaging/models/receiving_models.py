"""Schemas for receiving operations."""

from pydantic import Field

from .base import SDKWAModel, SDKWAResponse


class DeleteNotificationResult(SDKWAResponse):
    result: bool = False


class ChatHistoryRequest(SDKWAModel):
    chat_id: str = Field(..., min_length=1)
    count: int | None = Field(None, gt=0)
