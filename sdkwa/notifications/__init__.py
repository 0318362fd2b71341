"""
Notification delivery: classification, callback registry and the polling,
realtime and webhook delivery paths.
"""

from .dispatcher import DispatchOutcome, NotificationDispatcher
from .listener import run_realtime_listener
from .models import EventKind, Notification, classify
from .polling import NotificationPoller, PollCycle
from .realtime import RealtimeChannel
from .reconnection import ReconnectionConfig, ReconnectionStrategy
from .registry import CallbackRegistry
from .source import NotificationSource, deliver

__all__ = [
    "CallbackRegistry",
    "DispatchOutcome",
    "EventKind",
    "Notification",
    "NotificationDispatcher",
    "NotificationPoller",
    "NotificationSource",
    "PollCycle",
    "RealtimeChannel",
    "ReconnectionConfig",
    "ReconnectionStrategy",
    "classify",
    "deliver",
    "run_realtime_listener",
]
