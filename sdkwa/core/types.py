"""
Shared types for the SDKWA client.
"""

from enum import Enum

from pydantic import BaseModel


class MessengerType(str, Enum):
    """Messaging network a call targets."""

    WHATSAPP = "whatsapp"
    TELEGRAM = "telegram"


class RequestOptions(BaseModel):
    """Per-call overrides.

    A value set here wins over the client's session default for that call only;
    the client itself is never mutated.
    """

    messenger_type: MessengerType | None = None

    class Config:
        frozen = True


def resolve_messenger_type(
    default: MessengerType, options: RequestOptions | None
) -> MessengerType:
    """Merge a per-call override with the session default."""
    if options is not None and options.messenger_type is not None:
        return options.messenger_type
    return default
