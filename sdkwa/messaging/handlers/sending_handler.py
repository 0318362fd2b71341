"""
Sending handler.

Text, contact, location and file messages.
"""

from sdkwa.client.sdkwa_client import FileInput, SDKWAClient
from sdkwa.core.logging.logger import get_logger
from sdkwa.core.types import RequestOptions
from sdkwa.messaging.models.base import parse_response
from sdkwa.messaging.models.sending_models import (
    SendContactRequest,
    SendFileByUploadRequest,
    SendFileByUrlRequest,
    SendLocationRequest,
    SendMessageRequest,
    SentMessageResult,
    UploadFileResult,
)


class SendingHandler:
    """Handler for outgoing message operations."""

    def __init__(self, client: SDKWAClient):
        self.client = client
        self.logger = get_logger(__name__)

    async def send_message(
        self, message: SendMessageRequest, options: RequestOptions | None = None
    ) -> SentMessageResult:
        """Send a text message to a personal or group chat.

        Args:
            message: Text message request
            options: Per-call overrides

        Returns:
            SentMessageResult with the provider message ID
        """
        data = await self.client.request(
            "POST", "sendMessage", body=message, options=options
        )
        result = parse_response(SentMessageResult, data)
        self.logger.debug(f"Text message sent to {message.chat_id}: {result.id_message}")
        return result

    async def send_contact(
        self, message: SendContactRequest, options: RequestOptions | None = None
    ) -> SentMessageResult:
        data = await self.client.request(
            "POST", "sendContact", body=message, options=options
        )
        return parse_response(SentMessageResult, data)

    async def send_location(
        self, message: SendLocationRequest, options: RequestOptions | None = None
    ) -> SentMessageResult:
        data = await self.client.request(
            "POST", "sendLocation", body=message, options=options
        )
        return parse_response(SentMessageResult, data)

    async def send_file_by_url(
        self, message: SendFileByUrlRequest, options: RequestOptions | None = None
    ) -> SentMessageResult:
        data = await self.client.request(
            "POST", "sendFileByUrl", body=message, options=options
        )
        return parse_response(SentMessageResult, data)

    async def send_file_by_upload(
        self, message: SendFileByUploadRequest, options: RequestOptions | None = None
    ) -> SentMessageResult:
        """Upload a file and send it in one multipart request.

        Text fields (``chatId``, ``fileName`` and the optional ``caption`` and
        ``quotedMessageId``) travel next to the ``file`` part.
        """
        fields = message.model_dump(by_alias=True, exclude_none=True)
        files = {"file": (message.file_name, message.file, message.content_type)}
        data = await self.client.multipart_request(
            "POST", "sendFileByUpload", fields=fields, files=files, options=options
        )
        result = parse_response(SentMessageResult, data)
        self.logger.debug(
            f"File '{message.file_name}' sent to {message.chat_id}: {result.id_message}"
        )
        return result

    async def upload_file(
        self, file: FileInput, options: RequestOptions | None = None
    ) -> UploadFileResult:
        """Upload a file to storage for sending later with ``send_file_by_url``."""
        data = await self.client.multipart_request(
            "POST", "uploadFile", files={"file": file}, options=options
        )
        return parse_response(UploadFileResult, data)
