"""
Exception hierarchy for the SDKWA client.

Every request-level call raises one of these; the notification loops wrap
per-cycle failures in ``NotificationError`` and report them instead of raising.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sdkwa.notifications.models import Notification


class SDKWAError(Exception):
    """Base exception for all SDKWA client errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class SDKWAConfigError(SDKWAError):
    """Raised when client configuration or credentials are missing or invalid."""


class SDKWATransportError(SDKWAError):
    """Raised on network failure, timeout or refused connection."""

    def __init__(self, message: str, method: str | None = None, url: str | None = None):
        self.method = method
        self.url = url
        super().__init__(message)


class SDKWAApiError(SDKWAError):
    """Raised when the provider answers with a non-2xx status."""

    def __init__(
        self,
        status_code: int,
        message: str,
        timestamp: str | None = None,
        path: str | None = None,
        body: str | None = None,
    ):
        self.status_code = status_code
        self.timestamp = timestamp
        self.path = path
        self.body = body
        super().__init__(message)

    def __str__(self) -> str:
        return f"API error {self.status_code}: {self.message}"

    @property
    def is_authentication_error(self) -> bool:
        return self.status_code in (401, 403)

    @classmethod
    def from_response(cls, status: int, body: str) -> SDKWAApiError:
        """Build an error from a raw response body.

        Structured bodies look like ``{statusCode, timestamp, path, message}``;
        anything else falls back to the raw text plus the HTTP status.
        """
        try:
            data = json.loads(body)
        except ValueError:
            data = None

        if not isinstance(data, dict):
            return cls(status_code=status, message=f"HTTP {status}: {body}", body=body)

        status_code = data.get("statusCode")
        message = data.get("message")
        if isinstance(message, list):
            message = "; ".join(str(item) for item in message)
        return cls(
            status_code=status_code if isinstance(status_code, int) else status,
            message=str(message) if message is not None else "",
            timestamp=data.get("timestamp"),
            path=data.get("path"),
            body=body,
        )


class SDKWADecodeError(SDKWAError):
    """Raised when a response body does not match the expected shape."""

    def __init__(self, message: str, body: Any = None):
        self.body = body
        super().__init__(message)


class SDKWAConnectionError(SDKWAError):
    """Raised when the realtime channel cannot be opened or is used unopened."""


class SDKWAStreamError(SDKWAError):
    """Raised when the realtime stream closes abnormally."""

    def __init__(self, message: str, close_code: int | None = None):
        self.close_code = close_code
        super().__init__(message)


class DeliveryStage(str, Enum):
    """Stage of notification delivery where a failure happened."""

    FETCH = "fetch"
    DECODE = "decode"
    DISPATCH = "dispatch"
    ACKNOWLEDGE = "acknowledge"


class NotificationError(SDKWAError):
    """A delivery failure reported through a loop's error side channel."""

    def __init__(
        self,
        stage: DeliveryStage,
        cause: BaseException,
        notification: Notification | None = None,
    ):
        self.stage = stage
        self.cause = cause
        self.notification = notification
        super().__init__(f"{stage.value} failed: {cause}")
        self.__cause__ = cause
