"""
Notification payloads and event classification.

Payloads arrive untyped (polled queue, websocket push or inbound webhook) and
are classified into a dispatch key by combining the outer ``typeWebhook``
category with the optional nested ``messageData.typeMessage`` subtype.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

CATEGORY_FIELD = "typeWebhook"
MESSAGE_DATA_FIELD = "messageData"
SUBTYPE_FIELD = "typeMessage"
RECEIPT_ID_FIELD = "receiptId"


class EventKind(str, Enum):
    """Known notification kinds.

    Dispatch itself is keyed by the derived string, so kinds the provider adds
    later still reach callbacks registered under their raw tag; ``parse``
    folds those into ``UNKNOWN``.
    """

    UNKNOWN = ""

    STATE_INSTANCE_CHANGED = "stateInstanceChanged"
    OUTGOING_MESSAGE_STATUS = "outgoingMessageStatus"
    DEVICE_INFO = "deviceInfo"
    INCOMING_CALL = "incomingCall"

    INCOMING_MESSAGE_TEXT = "incomingMessageReceived_textMessage"
    INCOMING_MESSAGE_EXTENDED_TEXT = "incomingMessageReceived_extendedTextMessage"
    INCOMING_MESSAGE_IMAGE = "incomingMessageReceived_imageMessage"
    INCOMING_MESSAGE_VIDEO = "incomingMessageReceived_videoMessage"
    INCOMING_MESSAGE_AUDIO = "incomingMessageReceived_audioMessage"
    INCOMING_MESSAGE_DOCUMENT = "incomingMessageReceived_documentMessage"
    INCOMING_MESSAGE_LOCATION = "incomingMessageReceived_locationMessage"
    INCOMING_MESSAGE_CONTACT = "incomingMessageReceived_contactMessage"

    OUTGOING_MESSAGE_TEXT = "outgoingMessageReceived_textMessage"
    OUTGOING_API_MESSAGE_TEXT = "outgoingAPIMessageReceived_textMessage"

    @classmethod
    def parse(cls, tag: str) -> EventKind:
        """Map a derived tag into the closed enumeration."""
        try:
            return cls(tag)
        except ValueError:
            return cls.UNKNOWN


def kind_key(kind: EventKind | str) -> str:
    """Normalize an EventKind or raw tag into the registry key."""
    if isinstance(kind, EventKind):
        return kind.value
    return str(kind)


def classify(payload: Any) -> str:
    """Derive the dispatch key of a payload.

    Returns ``category`` alone, or ``category_subtype`` when the payload carries
    a nested message object with a subtype. Never fails: a missing or malformed
    category yields the empty tag, which matches no callback.

    Example:
        >>> classify({"typeWebhook": "incomingMessageReceived",
        ...           "messageData": {"typeMessage": "textMessage"}})
        'incomingMessageReceived_textMessage'
    """
    if not isinstance(payload, Mapping):
        return EventKind.UNKNOWN.value

    category = payload.get(CATEGORY_FIELD)
    if not isinstance(category, str) or not category:
        return EventKind.UNKNOWN.value

    message_data = payload.get(MESSAGE_DATA_FIELD)
    if isinstance(message_data, Mapping):
        subtype = message_data.get(SUBTYPE_FIELD)
        if isinstance(subtype, str) and subtype:
            return f"{category}_{subtype}"

    return category


def _coerce_receipt_id(value: Any) -> int | None:
    # bool is an int subclass but never a valid id
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


@dataclass(frozen=True)
class Notification:
    """A single provider-delivered event record."""

    payload: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> Notification:
        """Wrap a decoded JSON value; anything but an object is empty."""
        if not isinstance(payload, Mapping):
            return cls()
        return cls(payload=dict(payload))

    @property
    def is_empty(self) -> bool:
        return not self.payload

    @property
    def category(self) -> str | None:
        category = self.payload.get(CATEGORY_FIELD)
        return category if isinstance(category, str) and category else None

    @property
    def subtype(self) -> str | None:
        message_data = self.payload.get(MESSAGE_DATA_FIELD)
        if not isinstance(message_data, Mapping):
            return None
        subtype = message_data.get(SUBTYPE_FIELD)
        return subtype if isinstance(subtype, str) and subtype else None

    @property
    def receipt_id(self) -> int | None:
        """Acknowledgement id; present only on notifications from the queue."""
        return _coerce_receipt_id(self.payload.get(RECEIPT_ID_FIELD))

    @property
    def kind(self) -> str:
        return classify(self.payload)

    @property
    def event_kind(self) -> EventKind:
        return EventKind.parse(self.kind)

    @property
    def chat_id(self) -> str | None:
        sender = self.payload.get("senderData")
        if isinstance(sender, Mapping):
            chat_id = sender.get("chatId")
            if isinstance(chat_id, str):
                return chat_id
        return None
