"""
SDKWA core components: configuration, logging, errors and shared types.
"""

from .config.settings import settings
from .errors import (
    DeliveryStage,
    NotificationError,
    SDKWAApiError,
    SDKWAConfigError,
    SDKWAConnectionError,
    SDKWADecodeError,
    SDKWAError,
    SDKWAStreamError,
    SDKWATransportError,
)
from .logging import get_logger, setup_app_logging, setup_logging
from .types import MessengerType, RequestOptions

__all__ = [
    "settings",
    "get_logger",
    "setup_app_logging",
    "setup_logging",
    "DeliveryStage",
    "NotificationError",
    "SDKWAApiError",
    "SDKWAConfigError",
    "SDKWAConnectionError",
    "SDKWADecodeError",
    "SDKWAError",
    "SDKWAStreamError",
    "SDKWATransportError",
    "MessengerType",
    "RequestOptions",
]
