import inspect
import threading
from collections.abc import Awaitable, Callable
from typing import Any

from sdkwa.core.logging.logger import get_logger

from .models import EventKind, kind_key

logger = get_logger(__name__)

# Callbacks receive the full raw payload; they may be plain or async functions
NotificationCallback = Callable[[dict[str, Any]], Awaitable[None] | None]


class CallbackRegistry:
    """
    Mapping from event kind to at most one callback.

    Registration replaces any previous callback for the same kind
    (last write wins). Lookups and writes are guarded by a lock so one registry
    can be shared by a poller, a realtime listener and a webhook router
    running side by side.

    Example:
        registry = CallbackRegistry()

        @registry.on(EventKind.INCOMING_MESSAGE_TEXT)
        async def on_text(payload: dict) -> None:
            print(payload["messageData"]["textMessageData"]["textMessage"])
    """

    def __init__(self):
        self._callbacks: dict[str, NotificationCallback] = {}
        self._lock = threading.Lock()

    def register(self, kind: EventKind | str, callback: NotificationCallback) -> None:
        """Register ``callback`` for ``kind``, replacing any existing one."""
        key = kind_key(kind)
        if not key:
            # The empty kind is the "unclassifiable" sentinel and never dispatches
            logger.warning(
                f"Ignoring callback {getattr(callback, '__name__', callback)!r} "
                f"registered for the empty event kind"
            )
            return

        with self._lock:
            replaced = self._callbacks.get(key)
            self._callbacks[key] = callback

        if replaced is not None and replaced is not callback:
            logger.debug(f"Replaced callback for {key}")
        logger.debug(
            f"Registered callback: {key} → {getattr(callback, '__name__', callback)}"
        )

    def on(
        self, kind: EventKind | str
    ) -> Callable[[NotificationCallback], NotificationCallback]:
        """Decorator form of ``register``."""

        def decorator(fn: NotificationCallback) -> NotificationCallback:
            self.register(kind, fn)
            return fn

        return decorator

    def unregister(self, kind: EventKind | str) -> NotificationCallback | None:
        with self._lock:
            return self._callbacks.pop(kind_key(kind), None)

    def get(self, kind: EventKind | str) -> NotificationCallback | None:
        key = kind_key(kind)
        if not key:
            return None
        with self._lock:
            return self._callbacks.get(key)

    def kinds(self) -> list[str]:
        with self._lock:
            return sorted(self._callbacks)

    def __contains__(self, kind: object) -> bool:
        if not isinstance(kind, str):
            return False
        return self.get(kind) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._callbacks)

    async def dispatch(self, kind: EventKind | str, payload: dict[str, Any]) -> bool:
        """
        Invoke the callback registered for ``kind``.

        Errors raised by the callback propagate to the caller untouched;
        reporting them is the caller's concern.

        Returns:
            True if a callback was invoked, False if none is registered
        """
        callback = self.get(kind)
        if callback is None:
            return False

        result = callback(payload)
        if inspect.isawaitable(result):
            await result
        return True

    # Named helpers for the common event kinds

    def on_state_instance(self, callback: NotificationCallback) -> None:
        self.register(EventKind.STATE_INSTANCE_CHANGED, callback)

    def on_outgoing_message_status(self, callback: NotificationCallback) -> None:
        self.register(EventKind.OUTGOING_MESSAGE_STATUS, callback)

    def on_incoming_message_text(self, callback: NotificationCallback) -> None:
        self.register(EventKind.INCOMING_MESSAGE_TEXT, callback)

    def on_incoming_message_file(self, callback: NotificationCallback) -> None:
        self.register(EventKind.INCOMING_MESSAGE_IMAGE, callback)

    def on_incoming_message_location(self, callback: NotificationCallback) -> None:
        self.register(EventKind.INCOMING_MESSAGE_LOCATION, callback)

    def on_incoming_message_contact(self, callback: NotificationCallback) -> None:
        self.register(EventKind.INCOMING_MESSAGE_CONTACT, callback)

    def on_incoming_message_extended_text(
        self, callback: NotificationCallback
    ) -> None:
        self.register(EventKind.INCOMING_MESSAGE_EXTENDED_TEXT, callback)

    def on_device_info(self, callback: NotificationCallback) -> None:
        self.register(EventKind.DEVICE_INFO, callback)
