"""Sending-queue handler."""

from typing import Any

from sdkwa.client.sdkwa_client import SDKWAClient
from sdkwa.core.logging.logger import get_logger
from sdkwa.core.types import RequestOptions
from sdkwa.messaging.models.base import parse_object_list, parse_response
from sdkwa.messaging.models.queue_models import ClearMessagesQueueResult


class QueueHandler:
    def __init__(self, client: SDKWAClient):
        self.client = client
        self.logger = get_logger(__name__)

    async def show_messages_queue(
        self, options: RequestOptions | None = None
    ) -> list[dict[str, Any]]:
        """List messages waiting in the outgoing queue."""
        data = await self.client.request("GET", "showMessagesQueue", options=options)
        return parse_object_list(data)

    async def clear_messages_queue(
        self, options: RequestOptions | None = None
    ) -> ClearMessagesQueueResult:
        """Drop every message waiting in the outgoing queue."""
        data = await self.client.request("GET", "clearMessagesQueue", options=options)
        result = parse_response(ClearMessagesQueueResult, data)
        if result.is_cleared:
            self.logger.info("Outgoing messages queue cleared")
        return result
