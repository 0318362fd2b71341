from .account_handler import AccountHandler
from .chat_handler import ChatHandler
from .group_handler import GroupHandler
from .instance_handler import InstanceHandler
from .queue_handler import QueueHandler
from .receiving_handler import ReceivingHandler
from .sending_handler import SendingHandler
from .telegram_handler import TelegramHandler

__all__ = [
    "AccountHandler",
    "ChatHandler",
    "GroupHandler",
    "InstanceHandler",
    "QueueHandler",
    "ReceivingHandler",
    "SendingHandler",
    "TelegramHandler",
]
