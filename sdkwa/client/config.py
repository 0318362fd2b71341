"""
Client configuration.

Immutable after construction: per-call overrides go through ``RequestOptions``.
"""

from pydantic import BaseModel, Field, field_validator

from sdkwa.core.config.settings import settings
from sdkwa.core.errors import SDKWAConfigError
from sdkwa.core.types import MessengerType

DEFAULT_API_HOST = "https://api.sdkwa.pro"


class ClientConfig(BaseModel):
    """Session state shared by every call made through one client."""

    id_instance: str = Field(..., min_length=1, description="Instance identifier")
    api_token_instance: str = Field(
        ..., min_length=1, description="Bearer token for the instance"
    )
    api_host: str = Field(DEFAULT_API_HOST, description="HTTP API host")
    messenger_type: MessengerType = Field(
        MessengerType.WHATSAPP, description="Default messenger for every call"
    )
    user_id: str | None = Field(None, description="User ID for instance management")
    user_token: str | None = Field(
        None, description="User token for instance management"
    )
    timeout: float = Field(30.0, gt=0, description="HTTP timeout in seconds")
    verify_ssl: bool = Field(True, description="Verify TLS certificates")

    class Config:
        frozen = True

    @field_validator("api_host")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        value = value.strip()
        if not value:
            return DEFAULT_API_HOST
        return value.rstrip("/")

    @classmethod
    def from_settings(cls) -> "ClientConfig":
        """Build a configuration from the environment settings.

        Raises:
            SDKWAConfigError: If instance credentials are not configured
        """
        try:
            settings.validate_credentials()
        except ValueError as e:
            raise SDKWAConfigError(str(e)) from e

        return cls(
            id_instance=settings.id_instance,
            api_token_instance=settings.api_token_instance,
            api_host=settings.api_host,
            messenger_type=MessengerType(settings.messenger_type),
            user_id=settings.user_id,
            user_token=settings.user_token,
            timeout=settings.timeout,
        )
