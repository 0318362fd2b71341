"""Schemas for group chat operations."""

from pydantic import Field

from .base import SDKWAModel, SDKWAResponse


class CreateGroupRequest(SDKWAModel):
    group_name: str = Field(..., min_length=1)
    chat_ids: list[str] = Field(..., min_length=1)


class GroupParticipantRequest(SDKWAModel):
    group_id: str = Field(..., min_length=1)
    participant_chat_id: str = Field(..., min_length=1)


class UpdateGroupNameResult(SDKWAResponse):
    update_group_name: bool = False


class LeaveGroupResult(SDKWAResponse):
    leave_group: bool = False


class SetGroupAdminResult(SDKWAResponse):
    set_group_admin: bool = False


class RemoveGroupParticipantResult(SDKWAResponse):
    remove_participant: bool = False


class RemoveAdminResult(SDKWAResponse):
    remove_admin: bool = False


class CreateGroupResult(SDKWAResponse):
    created: bool = False
    chat_id: str = ""
    group_invite_link: str = ""


class AddGroupParticipantResult(SDKWAResponse):
    add_participant: bool = False


class SetGroupPictureResult(SDKWAResponse):
    set_group_picture: bool = False
    url_avatar: str = ""
    reason: str = ""
