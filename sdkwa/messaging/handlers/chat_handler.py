"""
Chat handler.

Contacts, chats, profile and per-chat operations.
"""

from typing import Any

from sdkwa.client.sdkwa_client import FileInput, SDKWAClient
from sdkwa.core.logging.logger import get_logger
from sdkwa.core.types import RequestOptions
from sdkwa.messaging.models.base import (
    parse_object,
    parse_object_list,
    parse_response,
)
from sdkwa.messaging.models.chat_models import (
    CheckWhatsAppResult,
    ReadChatRequest,
    ReadChatResult,
    SetProfilePictureResult,
)


class ChatHandler:
    """Handler for chat and contact operations."""

    def __init__(self, client: SDKWAClient):
        self.client = client
        self.logger = get_logger(__name__)

    async def get_contacts(
        self, options: RequestOptions | None = None
    ) -> list[dict[str, Any]]:
        data = await self.client.request("GET", "getContacts", options=options)
        return parse_object_list(data)

    async def get_chats(
        self, options: RequestOptions | None = None
    ) -> list[dict[str, Any]]:
        data = await self.client.request("GET", "getChats", options=options)
        return parse_object_list(data)

    async def get_contact_info(
        self, chat_id: str, options: RequestOptions | None = None
    ) -> dict[str, Any]:
        data = await self.client.request(
            "GET", "getContactInfo", body={"chatId": chat_id}, options=options
        )
        return parse_object(data)

    async def set_profile_picture(
        self, file: FileInput, options: RequestOptions | None = None
    ) -> SetProfilePictureResult:
        """Set the account profile picture.

        Args:
            file: Image bytes, a binary file object or a
                ``(filename, content, content_type)`` tuple
        """
        data = await self.client.multipart_request(
            "POST", "setProfilePicture", files={"file": file}, options=options
        )
        return parse_response(SetProfilePictureResult, data)

    async def set_profile_name(
        self, name: str, options: RequestOptions | None = None
    ) -> None:
        await self.client.request(
            "POST", "setProfileName", body={"name": name}, options=options
        )

    async def set_profile_status(
        self, status: str, options: RequestOptions | None = None
    ) -> None:
        await self.client.request(
            "POST", "setProfileStatus", body={"status": status}, options=options
        )

    async def get_avatar(
        self, chat_id: str, options: RequestOptions | None = None
    ) -> dict[str, Any]:
        """Get the avatar URL of a user or group chat."""
        data = await self.client.request(
            "POST", "getAvatar", body={"chatId": chat_id}, options=options
        )
        return parse_object(data)

    async def check_whatsapp(
        self, phone_number: int, options: RequestOptions | None = None
    ) -> CheckWhatsAppResult:
        """Check whether a WhatsApp account exists for ``phone_number``."""
        data = await self.client.request(
            "POST", "checkWhatsapp", body={"phoneNumber": phone_number}, options=options
        )
        return parse_response(CheckWhatsAppResult, data)

    async def read_chat(
        self,
        chat_id: str,
        id_message: str | None = None,
        options: RequestOptions | None = None,
    ) -> ReadChatResult:
        body = ReadChatRequest(chat_id=chat_id, id_message=id_message)
        data = await self.client.request("POST", "readChat", body=body, options=options)
        return parse_response(ReadChatResult, data)

    async def archive_chat(
        self, chat_id: str, options: RequestOptions | None = None
    ) -> None:
        await self.client.request(
            "POST", "archiveChat", body={"chatId": chat_id}, options=options
        )

    async def unarchive_chat(
        self, chat_id: str, options: RequestOptions | None = None
    ) -> None:
        await self.client.request(
            "POST", "unarchiveChat", body={"chatId": chat_id}, options=options
        )

    async def delete_message(
        self, chat_id: str, id_message: str, options: RequestOptions | None = None
    ) -> None:
        await self.client.request(
            "POST",
            "deleteMessage",
            body={"chatId": chat_id, "idMessage": id_message},
            options=options,
        )
