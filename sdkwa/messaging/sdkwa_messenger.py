"""
SDKWA facade.

Aggregates the endpoint handlers around one client and builds the
notification delivery components for it.
"""

from sdkwa.client.sdkwa_client import SDKWAClient
from sdkwa.messaging.handlers.account_handler import AccountHandler
from sdkwa.messaging.handlers.chat_handler import ChatHandler
from sdkwa.messaging.handlers.group_handler import GroupHandler
from sdkwa.messaging.handlers.instance_handler import InstanceHandler
from sdkwa.messaging.handlers.queue_handler import QueueHandler
from sdkwa.messaging.handlers.receiving_handler import ReceivingHandler
from sdkwa.messaging.handlers.sending_handler import SendingHandler
from sdkwa.messaging.handlers.telegram_handler import TelegramHandler
from sdkwa.notifications.dispatcher import ErrorCallback, NotificationDispatcher
from sdkwa.notifications.polling import NotificationPoller
from sdkwa.notifications.realtime import RealtimeChannel
from sdkwa.notifications.registry import CallbackRegistry


class SDKWA:
    """
    Entry point bundling every endpoint group for one instance.

    Example:
        async with open_client(ClientConfig.from_settings()) as client:
            sdkwa = SDKWA(client)
            await sdkwa.sending.send_message(
                SendMessageRequest(chat_id="79001234567@c.us", message="Hello")
            )
    """

    def __init__(self, client: SDKWAClient):
        self.client = client
        self.account = AccountHandler(client)
        self.chat = ChatHandler(client)
        self.group = GroupHandler(client)
        self.sending = SendingHandler(client)
        self.receiving = ReceivingHandler(client)
        self.queue = QueueHandler(client)
        self.telegram = TelegramHandler(client)
        self.instances = InstanceHandler(client)

    def create_poller(
        self,
        registry: CallbackRegistry,
        interval: float | None = None,
        on_error: ErrorCallback | None = None,
    ) -> NotificationPoller:
        """Build a poller draining this instance's notification queue."""
        return NotificationPoller.from_client(
            self.client, registry, interval=interval, on_error=on_error
        )

    def create_realtime_channel(
        self,
        registry: CallbackRegistry,
        on_error: ErrorCallback | None = None,
        handshake_timeout: float | None = None,
    ) -> RealtimeChannel:
        """Build a websocket channel for this instance (not yet connected)."""
        return RealtimeChannel(
            self.client,
            NotificationDispatcher(registry, on_error=on_error),
            handshake_timeout=handshake_timeout,
        )
