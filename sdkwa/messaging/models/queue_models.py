"""Schemas for sending-queue operations."""

from .base import SDKWAResponse


class ClearMessagesQueueResult(SDKWAResponse):
    is_cleared: bool = False
