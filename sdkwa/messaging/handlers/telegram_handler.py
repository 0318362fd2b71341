"""
Telegram handler.

Telegram-only app creation and sign-in flow. Calls default to the Telegram
messenger; pass ``options`` to target another one explicitly.
"""

from sdkwa.client.sdkwa_client import SDKWAClient
from sdkwa.core.logging.logger import get_logger
from sdkwa.core.types import MessengerType, RequestOptions
from sdkwa.messaging.models.base import parse_response
from sdkwa.messaging.models.telegram_models import (
    ConfirmationCodeRequest,
    CreateAppRequest,
    CreateAppResult,
    SignInRequest,
    TelegramAuthResult,
)

_TELEGRAM = RequestOptions(messenger_type=MessengerType.TELEGRAM)


class TelegramHandler:
    """Handler for Telegram account authorization."""

    def __init__(self, client: SDKWAClient):
        self.client = client
        self.logger = get_logger(__name__)

    async def create_app(
        self, app: CreateAppRequest, options: RequestOptions | None = None
    ) -> CreateAppResult:
        data = await self.client.request(
            "POST", "createApp", body=app, options=options or _TELEGRAM
        )
        return parse_response(CreateAppResult, data)

    async def send_confirmation_code(
        self, phone_number: int, options: RequestOptions | None = None
    ) -> TelegramAuthResult:
        """Send a confirmation code to the Telegram account's phone."""
        body = ConfirmationCodeRequest(phone_number=phone_number)
        data = await self.client.request(
            "POST", "sendConfirmationCode", body=body, options=options or _TELEGRAM
        )
        return parse_response(TelegramAuthResult, data)

    async def sign_in_with_confirmation_code(
        self, code: str, options: RequestOptions | None = None
    ) -> TelegramAuthResult:
        body = SignInRequest(code=code)
        data = await self.client.request(
            "POST",
            "signInWithConfirmationCode",
            body=body,
            options=options or _TELEGRAM,
        )
        result = parse_response(TelegramAuthResult, data)
        if not result.result:
            self.logger.warning(f"Telegram sign-in rejected: {result.message}")
        return result
