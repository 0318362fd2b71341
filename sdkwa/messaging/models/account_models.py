"""Schemas for account operations."""

from typing import Literal

from pydantic import Field

from .base import SDKWAModel, SDKWAResponse


class SetSettingsResult(SDKWAResponse):
    save_settings: bool = False


class StateInstanceResult(SDKWAResponse):
    state_instance: str = ""


class RebootResult(SDKWAResponse):
    is_reboot: bool = False


class LogoutResult(SDKWAResponse):
    is_logout: bool = False


class QRResult(SDKWAResponse):
    """QR code for authorizing the account.

    ``type`` is ``qrCode`` (``message`` holds base64 image data),
    ``alreadyLogged`` or ``error``.
    """

    type: str = ""
    message: str = ""


class AuthorizationCodeRequest(SDKWAModel):
    phone_number: int = Field(..., gt=0, description="Phone number in international format")


class AuthorizationCodeResult(SDKWAResponse):
    status: bool = False
    code: str = ""


class RegistrationCodeRequest(SDKWAModel):
    phone_number: int = Field(..., gt=0)
    method: Literal["sms", "voice"] = "sms"


class SendRegistrationCodeRequest(SDKWAModel):
    code: str = Field(..., min_length=1)
