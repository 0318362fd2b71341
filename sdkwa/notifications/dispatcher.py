"""
Notification dispatcher: classification plus registry lookup, written once and
shared by the poller, the realtime channel and the inbound webhook router.
"""

import inspect
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

from sdkwa.core.errors import DeliveryStage, NotificationError
from sdkwa.core.logging.context import set_delivery_context
from sdkwa.core.logging.logger import get_logger

from .models import Notification
from .registry import CallbackRegistry

# Side channel for errors absorbed by the delivery loops
ErrorCallback = Callable[[NotificationError], Awaitable[None] | None]


class DispatchOutcome(str, Enum):
    NO_HANDLER = "no_handler"
    HANDLED = "handled"
    FAILED = "failed"


class NotificationDispatcher:
    """
    Routes notifications to the callbacks of a ``CallbackRegistry``.

    The dispatcher owns no callbacks itself; the registry is injected by
    whichever component builds the poller or channel.
    """

    def __init__(
        self,
        registry: CallbackRegistry,
        on_error: ErrorCallback | None = None,
        logger: Any | None = None,
    ):
        """
        Args:
            registry: Callback registry to dispatch into
            on_error: Optional side channel receiving every absorbed failure
            logger: Pre-configured logger instance
        """
        self.registry = registry
        self.on_error = on_error
        self.logger = logger or get_logger(__name__)

    async def dispatch(self, notification: Notification) -> bool:
        """
        Classify and dispatch, propagating callback errors.

        Returns:
            True if a callback was invoked
        """
        kind = notification.kind
        set_delivery_context(chat_id=notification.chat_id or "")

        invoked = await self.registry.dispatch(kind, notification.payload)
        if invoked:
            self.logger.debug(f"Dispatched {kind}")
        else:
            self.logger.debug(f"No callback for {kind or '<unclassified>'}, dropped")
        return invoked

    async def handle(self, notification: Notification) -> DispatchOutcome:
        """Dispatch, reporting a callback failure instead of raising it."""
        try:
            invoked = await self.dispatch(notification)
        except Exception as e:
            await self.report(
                NotificationError(DeliveryStage.DISPATCH, e, notification)
            )
            return DispatchOutcome.FAILED

        return DispatchOutcome.HANDLED if invoked else DispatchOutcome.NO_HANDLER

    async def report(self, error: NotificationError) -> None:
        """Log an absorbed failure and forward it to the side channel."""
        kind = error.notification.kind if error.notification else None
        self.logger.error(
            f"Notification {error.stage.value} error"
            f"{f' ({kind})' if kind else ''}: {error.cause}"
        )

        if self.on_error is None:
            return

        try:
            result = self.on_error(error)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            self.logger.exception(f"Error callback failed: {e}")
