"""
SDKWA - async Python client for the SDKWA WhatsApp/Telegram gateway API.

Request wrappers for every endpoint group, plus notification delivery by
queue polling, websocket push or inbound webhook, all routed through one
callback registry.
"""

from .client import ClientConfig, SDKWAClient, open_client
from .core.config.settings import settings
from .core.errors import (
    NotificationError,
    SDKWAApiError,
    SDKWAConfigError,
    SDKWAConnectionError,
    SDKWADecodeError,
    SDKWAError,
    SDKWAStreamError,
    SDKWATransportError,
)
from .core.types import MessengerType, RequestOptions
from .messaging import SDKWA
from .notifications import (
    CallbackRegistry,
    EventKind,
    Notification,
    NotificationDispatcher,
    NotificationPoller,
    RealtimeChannel,
    classify,
    run_realtime_listener,
)

__version__ = settings.version

__all__ = [
    "SDKWA",
    "CallbackRegistry",
    "ClientConfig",
    "EventKind",
    "MessengerType",
    "Notification",
    "NotificationDispatcher",
    "NotificationError",
    "NotificationPoller",
    "RealtimeChannel",
    "RequestOptions",
    "SDKWAApiError",
    "SDKWAClient",
    "SDKWAConfigError",
    "SDKWAConnectionError",
    "SDKWADecodeError",
    "SDKWAError",
    "SDKWAStreamError",
    "SDKWATransportError",
    "classify",
    "open_client",
    "run_realtime_listener",
]
