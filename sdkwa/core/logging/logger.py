"""
Rich-based logger with instance and chat context support for the SDKWA client.

Provides context-aware logging so that output from concurrent pollers and
realtime listeners can be told apart by instance.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from sdkwa.core.config.settings import settings


class CompactFormatter(logging.Formatter):
    """Custom formatter that shortens long module names for better readability."""

    def format(self, record):
        if record.name.startswith("sdkwa."):
            # sdkwa.notifications.polling -> notifications.polling
            parts = record.name.split(".")
            if len(parts) > 2:
                if "handlers" in parts:
                    record.name = f"handlers.{parts[-1].replace('_handler', '')}"
                else:
                    record.name = ".".join(parts[-2:])

        return super().format(record)


_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "debug": "dim white",
    }
)
_console = Console(theme=_theme)


class ContextLogger:
    """
    Logger wrapper that adds instance and chat context to messages.

    Context is added as a message prefix instead of through the format string,
    so third-party handlers keep working with plain formats.
    """

    def __init__(
        self,
        logger: logging.Logger,
        id_instance: str | None = None,
        chat_id: str | None = None,
    ):
        self.logger = logger
        self.id_instance = id_instance or "---"
        self.chat_id = chat_id or "---"

    def _format_message(self, message: str) -> str:
        """Add context prefix to message."""
        from .context import get_current_chat_context, get_current_instance_context

        current_instance = get_current_instance_context() or self.id_instance
        current_chat = get_current_chat_context() or self.chat_id

        if current_instance and current_instance != "---":
            if current_chat and current_chat != "---":
                return f"[I:{current_instance}][C:{current_chat}] {message}"
            return f"[I:{current_instance}] {message}"
        elif current_chat and current_chat != "---":
            return f"[C:{current_chat}] {message}"
        return message

    def debug(self, message: str, *args, **kwargs) -> None:
        self.logger.debug(self._format_message(message), *args, **kwargs)

    def info(self, message: str, *args, **kwargs) -> None:
        self.logger.info(self._format_message(message), *args, **kwargs)

    def warning(self, message: str, *args, **kwargs) -> None:
        self.logger.warning(self._format_message(message), *args, **kwargs)

    def error(self, message: str, *args, **kwargs) -> None:
        self.logger.error(self._format_message(message), *args, **kwargs)

    def critical(self, message: str, *args, **kwargs) -> None:
        self.logger.critical(self._format_message(message), *args, **kwargs)

    def exception(self, message: str, *args, **kwargs) -> None:
        self.logger.exception(self._format_message(message), *args, **kwargs)

    def bind(self, **kwargs) -> ContextLogger:
        """
        Create a new ContextLogger with additional or updated context.

        Args:
            **kwargs: ``id_instance`` and/or ``chat_id``

        Returns:
            New ContextLogger instance with updated context

        Example:
            logger = get_logger(__name__).bind(id_instance="1101000001")
        """
        return ContextLogger(
            self.logger,
            id_instance=kwargs.get("id_instance", self.id_instance),
            chat_id=kwargs.get("chat_id", self.chat_id),
        )


def setup_logging(
    *,
    level: str = "INFO",
    mode: str = "PROD",
    log_dir: str | None = None,
    console_fmt: str | None = None,
    file_fmt: str | None = None,
) -> None:
    """
    Initialize the root logger with Rich formatting.

    Parameters
    ----------
    level : str
        Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
    mode : str
        "DEV" creates daily log files + console; anything else → console only
    log_dir : str, optional
        Directory for log files (DEV mode only)
    console_fmt : str, optional
        Console format string
    file_fmt : str, optional
        File format string
    """
    lvl = level.upper()
    lvl = lvl if lvl in ("DEBUG", "INFO", "WARNING", "ERROR") else "INFO"

    # RichHandler already shows level and time
    console_format = console_fmt or "[%(name)s] %(message)s"
    file_format = file_fmt or "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

    rich_handler = RichHandler(
        console=_console,
        rich_tracebacks=True,
        show_time=True,
        show_level=True,
        markup=False,
    )
    rich_handler.setFormatter(CompactFormatter(console_format))

    handlers: list[logging.Handler] = [rich_handler]

    if mode.upper() == "DEV" and log_dir:
        os.makedirs(log_dir, exist_ok=True)
        logfile = os.path.join(log_dir, f"sdkwa_{datetime.now():%Y%m%d}.log")
        file_handler = logging.FileHandler(logfile, encoding="utf-8")
        file_handler.setFormatter(CompactFormatter(file_format))
        handlers.append(file_handler)

    logging.basicConfig(level=lvl, handlers=handlers, force=True)

    logging.getLogger("sdkwa.setup").info(f"Logging initialized ({lvl})")


def setup_app_logging() -> None:
    """Initialize logging from the environment settings."""
    setup_logging(
        level=settings.log_level,
        mode="DEV" if settings.is_development else "PROD",
        log_dir=settings.log_dir if settings.is_development else None,
    )


def get_logger(name: str) -> ContextLogger:
    """
    Get a logger that automatically uses the delivery context variables.

    Args:
        name: Logger name (usually __name__)

    Returns:
        ContextLogger instance with automatic context from context variables
    """
    from .context import get_current_chat_context, get_current_instance_context

    return ContextLogger(
        logging.getLogger(name),
        id_instance=get_current_instance_context(),
        chat_id=get_current_chat_context(),
    )
