"""
Notification sources.

Polling and push are two implementations of one capability: an async
sequence of notifications plus an acknowledgement hook. ``deliver`` pairs any
source with a dispatcher.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from .dispatcher import DispatchOutcome, NotificationDispatcher
from .models import Notification


class NotificationSource(ABC):
    """Produces notifications one at a time, in arrival order."""

    @abstractmethod
    def __aiter__(self) -> AsyncIterator[Notification]:
        """Yield notifications until the source is stopped or exhausted."""

    async def acknowledge(self, notification: Notification) -> bool:
        """Acknowledge a processed notification.

        Sources without a queue to drain have nothing to acknowledge.

        Returns:
            True if an acknowledgement was issued and succeeded
        """
        return False


async def process_notification(
    source: NotificationSource,
    dispatcher: NotificationDispatcher,
    notification: Notification,
) -> tuple[DispatchOutcome, bool]:
    """
    Dispatch one notification, then acknowledge it.

    The acknowledgement is attempted whatever the dispatch outcome: draining
    the queue takes priority over redelivering to a failing callback.
    """
    outcome = await dispatcher.handle(notification)
    acknowledged = await source.acknowledge(notification)
    return outcome, acknowledged


async def deliver(source: NotificationSource, dispatcher: NotificationDispatcher) -> None:
    """Pump ``source`` into ``dispatcher`` until the source stops."""
    async for notification in source:
        await process_notification(source, dispatcher, notification)
