"""
Group handler.

Group chat creation, membership and administration.
"""

from typing import Any

from sdkwa.client.sdkwa_client import FileInput, SDKWAClient
from sdkwa.core.logging.logger import get_logger
from sdkwa.core.types import RequestOptions
from sdkwa.messaging.models.base import parse_object, parse_response
from sdkwa.messaging.models.group_models import (
    AddGroupParticipantResult,
    CreateGroupRequest,
    CreateGroupResult,
    GroupParticipantRequest,
    LeaveGroupResult,
    RemoveAdminResult,
    RemoveGroupParticipantResult,
    SetGroupAdminResult,
    SetGroupPictureResult,
    UpdateGroupNameResult,
)


class GroupHandler:
    """Handler for group chat operations."""

    def __init__(self, client: SDKWAClient):
        self.client = client
        self.logger = get_logger(__name__)

    async def create_group(
        self,
        group_name: str,
        chat_ids: list[str],
        options: RequestOptions | None = None,
    ) -> CreateGroupResult:
        """Create a group chat.

        Args:
            group_name: Name of the new group
            chat_ids: Chat IDs of the initial participants

        Returns:
            CreateGroupResult with the group chat ID and invite link
        """
        body = CreateGroupRequest(group_name=group_name, chat_ids=chat_ids)
        data = await self.client.request("POST", "createGroup", body=body, options=options)
        result = parse_response(CreateGroupResult, data)
        if result.created:
            self.logger.info(f"Group '{group_name}' created: {result.chat_id}")
        return result

    async def update_group_name(
        self, group_id: str, group_name: str, options: RequestOptions | None = None
    ) -> UpdateGroupNameResult:
        data = await self.client.request(
            "POST",
            "updateGroupName",
            body={"groupId": group_id, "groupName": group_name},
            options=options,
        )
        return parse_response(UpdateGroupNameResult, data)

    async def get_group_data(
        self, group_id: str, options: RequestOptions | None = None
    ) -> dict[str, Any]:
        data = await self.client.request(
            "POST", "getGroupData", body={"groupId": group_id}, options=options
        )
        return parse_object(data)

    async def leave_group(
        self, group_id: str, options: RequestOptions | None = None
    ) -> LeaveGroupResult:
        data = await self.client.request(
            "POST", "leaveGroup", body={"groupId": group_id}, options=options
        )
        return parse_response(LeaveGroupResult, data)

    async def _participant_call(
        self,
        endpoint: str,
        group_id: str,
        participant_chat_id: str,
        options: RequestOptions | None,
    ) -> Any:
        body = GroupParticipantRequest(
            group_id=group_id, participant_chat_id=participant_chat_id
        )
        return await self.client.request("POST", endpoint, body=body, options=options)

    async def add_group_participant(
        self,
        group_id: str,
        participant_chat_id: str,
        options: RequestOptions | None = None,
    ) -> AddGroupParticipantResult:
        data = await self._participant_call(
            "addGroupParticipant", group_id, participant_chat_id, options
        )
        return parse_response(AddGroupParticipantResult, data)

    async def remove_group_participant(
        self,
        group_id: str,
        participant_chat_id: str,
        options: RequestOptions | None = None,
    ) -> RemoveGroupParticipantResult:
        data = await self._participant_call(
            "removeGroupParticipant", group_id, participant_chat_id, options
        )
        return parse_response(RemoveGroupParticipantResult, data)

    async def set_group_admin(
        self,
        group_id: str,
        participant_chat_id: str,
        options: RequestOptions | None = None,
    ) -> SetGroupAdminResult:
        data = await self._participant_call(
            "setGroupAdmin", group_id, participant_chat_id, options
        )
        return parse_response(SetGroupAdminResult, data)

    async def remove_admin(
        self,
        group_id: str,
        participant_chat_id: str,
        options: RequestOptions | None = None,
    ) -> RemoveAdminResult:
        data = await self._participant_call(
            "removeAdmin", group_id, participant_chat_id, options
        )
        return parse_response(RemoveAdminResult, data)

    async def set_group_picture(
        self,
        group_id: str,
        file: FileInput,
        options: RequestOptions | None = None,
    ) -> SetGroupPictureResult:
        data = await self.client.multipart_request(
            "POST",
            "setGroupPicture",
            fields={"groupId": group_id},
            files={"file": file},
            options=options,
        )
        return parse_response(SetGroupPictureResult, data)
