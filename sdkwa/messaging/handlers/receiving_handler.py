"""
Receiving handler.

Notification queue access and chat history.
"""

from typing import Any

from sdkwa.client.sdkwa_client import SDKWAClient
from sdkwa.core.logging.logger import get_logger
from sdkwa.core.types import RequestOptions
from sdkwa.messaging.models.base import (
    parse_object,
    parse_object_list,
    parse_response,
)
from sdkwa.messaging.models.receiving_models import (
    ChatHistoryRequest,
    DeleteNotificationResult,
)
from sdkwa.notifications.models import Notification


class ReceivingHandler:
    """Handler for the incoming notification queue."""

    def __init__(self, client: SDKWAClient):
        self.client = client
        self.logger = get_logger(__name__)

    async def receive_notification(
        self, options: RequestOptions | None = None
    ) -> Notification:
        """Fetch one pending notification from the queue.

        The notification stays queued until deleted with
        ``delete_notification``.

        Returns:
            The notification; empty when nothing is pending
        """
        data = await self.client.request("GET", "receiveNotification", options=options)
        return Notification.from_payload(parse_object(data))

    async def delete_notification(
        self, receipt_id: int, options: RequestOptions | None = None
    ) -> DeleteNotificationResult:
        """Delete a processed notification from the queue by its receipt ID."""
        data = await self.client.request(
            "DELETE", f"deleteNotification/{receipt_id}", options=options
        )
        return parse_response(DeleteNotificationResult, data)

    async def get_chat_history(
        self,
        chat_id: str,
        count: int | None = None,
        options: RequestOptions | None = None,
    ) -> list[dict[str, Any]]:
        body = ChatHistoryRequest(chat_id=chat_id, count=count)
        data = await self.client.request(
            "POST", "getChatHistory", body=body, options=options
        )
        return parse_object_list(data)
