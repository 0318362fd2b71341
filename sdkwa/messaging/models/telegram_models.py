"""Schemas for Telegram-only operations."""

from pydantic import Field

from .base import SDKWAModel, SDKWAResponse


class CreateAppRequest(SDKWAModel):
    title: str = Field(..., min_length=1)
    short_name: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    description: str | None = None


class CreateAppData(SDKWAResponse):
    app_id: str = ""


class CreateAppResult(SDKWAResponse):
    result: bool = False
    data: CreateAppData = Field(default_factory=CreateAppData)


class ConfirmationCodeRequest(SDKWAModel):
    phone_number: int = Field(..., gt=0)


class SignInRequest(SDKWAModel):
    code: str = Field(..., min_length=1)


class TelegramAuthResult(SDKWAResponse):
    result: bool = False
    message: str = ""
