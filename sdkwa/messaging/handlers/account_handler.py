"""
Account handler.

Instance settings, state, authorization and registration operations.
"""

from typing import Any

from sdkwa.client.sdkwa_client import SDKWAClient
from sdkwa.core.logging.logger import get_logger
from sdkwa.core.types import RequestOptions
from sdkwa.messaging.models.account_models import (
    AuthorizationCodeRequest,
    AuthorizationCodeResult,
    LogoutResult,
    QRResult,
    RebootResult,
    RegistrationCodeRequest,
    SendRegistrationCodeRequest,
    SetSettingsResult,
    StateInstanceResult,
)
from sdkwa.messaging.models.base import parse_object, parse_response


class AccountHandler:
    """Handler for account-level operations of one instance."""

    def __init__(self, client: SDKWAClient):
        self.client = client
        self.logger = get_logger(__name__)

    async def get_settings(self, options: RequestOptions | None = None) -> dict[str, Any]:
        """Get the current account settings."""
        data = await self.client.request("GET", "getSettings", options=options)
        return parse_object(data)

    async def set_settings(
        self, settings: dict[str, Any], options: RequestOptions | None = None
    ) -> SetSettingsResult:
        """Update account settings.

        Args:
            settings: Settings to change, using the provider's camelCase keys
                (e.g. ``{"webhookUrl": "...", "delaySendMessagesMilliseconds": 1000}``)
        """
        data = await self.client.request(
            "POST", "setSettings", body=settings, options=options
        )
        self.logger.info(f"Settings updated: {sorted(settings)}")
        return parse_response(SetSettingsResult, data)

    async def get_state_instance(
        self, options: RequestOptions | None = None
    ) -> StateInstanceResult:
        data = await self.client.request("GET", "getStateInstance", options=options)
        return parse_response(StateInstanceResult, data)

    async def get_warming_phone_status(
        self, options: RequestOptions | None = None
    ) -> dict[str, Any]:
        data = await self.client.request(
            "GET", "getWarmingPhoneStatus", options=options
        )
        return parse_object(data)

    async def reboot(self, options: RequestOptions | None = None) -> RebootResult:
        data = await self.client.request("GET", "reboot", options=options)
        return parse_response(RebootResult, data)

    async def logout(self, options: RequestOptions | None = None) -> LogoutResult:
        data = await self.client.request("GET", "logout", options=options)
        return parse_response(LogoutResult, data)

    async def get_qr(self, options: RequestOptions | None = None) -> QRResult:
        data = await self.client.request("GET", "qr", options=options)
        return parse_response(QRResult, data)

    async def get_authorization_code(
        self, phone_number: int, options: RequestOptions | None = None
    ) -> AuthorizationCodeResult:
        """Get a code to link the account by phone number instead of QR."""
        body = AuthorizationCodeRequest(phone_number=phone_number)
        data = await self.client.request(
            "POST", "getAuthorizationCode", body=body, options=options
        )
        return parse_response(AuthorizationCodeResult, data)

    async def request_registration_code(
        self,
        phone_number: int,
        method: str = "sms",
        options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """Request a registration code by SMS or voice call."""
        body = RegistrationCodeRequest(phone_number=phone_number, method=method)
        data = await self.client.request(
            "POST", "requestRegistrationCode", body=body, options=options
        )
        return parse_object(data)

    async def send_registration_code(
        self, code: str, options: RequestOptions | None = None
    ) -> dict[str, Any]:
        body = SendRegistrationCodeRequest(code=code)
        data = await self.client.request(
            "POST", "sendRegistrationCode", body=body, options=options
        )
        return parse_object(data)
