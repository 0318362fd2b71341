"""Request and response schemas for the SDKWA endpoints."""

from .account_models import (
    AuthorizationCodeResult,
    LogoutResult,
    QRResult,
    RebootResult,
    SetSettingsResult,
    StateInstanceResult,
)
from .chat_models import CheckWhatsAppResult, ReadChatResult, SetProfilePictureResult
from .group_models import CreateGroupResult
from .instance_models import CreateInstanceRequest, ExtendInstanceRequest
from .receiving_models import DeleteNotificationResult
from .sending_models import (
    Contact,
    SendContactRequest,
    SendFileByUploadRequest,
    SendFileByUrlRequest,
    SendLocationRequest,
    SendMessageRequest,
    SentMessageResult,
    UploadFileResult,
)
from .telegram_models import CreateAppRequest, CreateAppResult, TelegramAuthResult

__all__ = [
    "AuthorizationCodeResult",
    "CheckWhatsAppResult",
    "Contact",
    "CreateAppRequest",
    "CreateAppResult",
    "CreateGroupResult",
    "CreateInstanceRequest",
    "DeleteNotificationResult",
    "ExtendInstanceRequest",
    "LogoutResult",
    "QRResult",
    "ReadChatResult",
    "RebootResult",
    "SendContactRequest",
    "SendFileByUploadRequest",
    "SendFileByUrlRequest",
    "SendLocationRequest",
    "SendMessageRequest",
    "SentMessageResult",
    "SetProfilePictureResult",
    "SetSettingsResult",
    "StateInstanceResult",
    "TelegramAuthResult",
    "UploadFileResult",
]
