"""
Notification Poller - pulls the provider's notification queue on an interval.

Each cycle is strictly sequential: wait → fetch one → dispatch → acknowledge.
The next fetch never starts before the current acknowledgement attempt has
completed, so at most one notification is in flight.

Failure policy:
    - fetch errors are reported and the loop moves on to the next interval
    - callback errors are reported and do NOT prevent the acknowledgement
    - acknowledgement errors are reported; the provider may redeliver the
      notification, so callbacks must tolerate duplicates
    - stopping (stop event or task cancellation) is not a failure
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sdkwa.core.config.settings import settings
from sdkwa.core.errors import (
    DeliveryStage,
    NotificationError,
    SDKWADecodeError,
    SDKWAError,
)
from sdkwa.core.logging.context import set_delivery_context
from sdkwa.core.logging.logger import get_logger

from .dispatcher import DispatchOutcome, NotificationDispatcher
from .models import Notification
from .source import NotificationSource, process_notification

if TYPE_CHECKING:
    from sdkwa.client.sdkwa_client import SDKWAClient
    from sdkwa.messaging.handlers.receiving_handler import ReceivingHandler

    from .dispatcher import ErrorCallback
    from .registry import CallbackRegistry

DEFAULT_POLL_INTERVAL = 5.0


@dataclass
class PollCycle:
    """Outcome of one fetch → dispatch → acknowledge cycle."""

    notification: Notification | None = None
    outcome: DispatchOutcome | None = None
    acknowledged: bool = False
    fetch_failed: bool = False

    @property
    def kind(self) -> str | None:
        return self.notification.kind if self.notification else None

    @property
    def dispatched(self) -> bool:
        return self.outcome is not None


class NotificationPoller(NotificationSource):
    """
    Polling notification source and its run loop.

    Usage:
        registry = CallbackRegistry()
        registry.on_incoming_message_text(handle_text)

        poller = NotificationPoller.from_client(client, registry)
        stop = asyncio.Event()
        task = asyncio.create_task(poller.run(stop), name="sdkwa_poller")
        ...
        stop.set()
        await task
    """

    def __init__(
        self,
        receiving: ReceivingHandler,
        dispatcher: NotificationDispatcher,
        interval: float = DEFAULT_POLL_INTERVAL,
        logger: Any | None = None,
    ):
        """
        Args:
            receiving: Queue access (receive/delete notification calls)
            dispatcher: Classifier + registry pairing
            interval: Seconds to wait before each fetch
            logger: Pre-configured logger instance
        """
        if interval <= 0:
            raise ValueError("Polling interval must be positive")

        self.receiving = receiving
        self.dispatcher = dispatcher
        self.interval = interval
        self.logger = logger or get_logger(__name__)
        self._stop_event: asyncio.Event | None = None

    @classmethod
    def from_client(
        cls,
        client: SDKWAClient,
        registry: CallbackRegistry,
        interval: float | None = None,
        on_error: ErrorCallback | None = None,
    ) -> NotificationPoller:
        """Build a poller for ``client`` dispatching into ``registry``."""
        from sdkwa.messaging.handlers.receiving_handler import ReceivingHandler

        return cls(
            receiving=ReceivingHandler(client),
            dispatcher=NotificationDispatcher(registry, on_error=on_error),
            interval=interval if interval is not None else settings.poll_interval,
        )

    async def run(self, stop_event: asyncio.Event | None = None) -> None:
        """
        Poll until ``stop_event`` is set or the task is cancelled.

        Returns normally when stopped through the event. Task cancellation
        propagates as ``asyncio.CancelledError`` after logging.

        Raises:
            Exception: Only for unexpected (non-SDKWA) errors, which are
                treated as unrecoverable
        """
        set_delivery_context(id_instance=self._instance_id)
        self.logger.info(f"Notification poller started (interval={self.interval}s)")
        try:
            while not await self._wait(stop_event):
                await self.poll_once()
        except asyncio.CancelledError:
            self.logger.info("Notification poller cancelled, shutting down")
            raise

        self.logger.info("Notification poller stopped")

    async def poll_once(self) -> PollCycle:
        """Run a single fetch → dispatch → acknowledge cycle."""
        notification = await self.fetch()
        if notification is None:
            return PollCycle(fetch_failed=True)
        if notification.is_empty:
            return PollCycle(notification=notification)

        outcome, acknowledged = await process_notification(
            self, self.dispatcher, notification
        )
        return PollCycle(
            notification=notification, outcome=outcome, acknowledged=acknowledged
        )

    async def fetch(self) -> Notification | None:
        """
        Fetch one pending notification.

        Returns:
            The notification (possibly empty), or None if the fetch failed
            and was reported
        """
        try:
            notification = await self.receiving.receive_notification()
        except SDKWAError as e:
            stage = (
                DeliveryStage.DECODE
                if isinstance(e, SDKWADecodeError)
                else DeliveryStage.FETCH
            )
            await self.dispatcher.report(NotificationError(stage, e))
            return None

        if not notification.is_empty:
            self.logger.debug(
                f"Received {notification.kind or '<unclassified>'} "
                f"(receiptId={notification.receipt_id})"
            )
        return notification

    async def acknowledge(self, notification: Notification) -> bool:
        """Delete the notification from the queue if it carries a receipt ID."""
        receipt_id = notification.receipt_id
        if receipt_id is None:
            return False

        try:
            await self.receiving.delete_notification(receipt_id)
        except SDKWAError as e:
            await self.dispatcher.report(
                NotificationError(DeliveryStage.ACKNOWLEDGE, e, notification)
            )
            return False

        self.logger.debug(f"Acknowledged notification {receipt_id}")
        return True

    async def __aiter__(self) -> AsyncIterator[Notification]:
        """Yield non-empty notifications, one per interval at most."""
        while not await self._wait(self._stop_event):
            notification = await self.fetch()
            if notification is not None and not notification.is_empty:
                yield notification

    def bind_stop_event(self, stop_event: asyncio.Event | None) -> None:
        """Set the stop signal observed when the poller is used as a source."""
        self._stop_event = stop_event

    async def _wait(self, stop_event: asyncio.Event | None) -> bool:
        """
        Block for one interval or until stopped.

        Returns:
            True if the stop signal was raised
        """
        if stop_event is None:
            await asyncio.sleep(self.interval)
            return False
        if stop_event.is_set():
            return True

        try:
            await asyncio.wait_for(stop_event.wait(), timeout=self.interval)
        except asyncio.TimeoutError:
            return False
        return True

    @property
    def _instance_id(self) -> str | None:
        client = getattr(self.receiving, "client", None)
        id_instance = getattr(client, "id_instance", None)
        return id_instance if isinstance(id_instance, str) else None
