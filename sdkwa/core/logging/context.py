"""
Delivery context management using contextvars for automatic propagation.

The instance context is set by the client or a notification loop and picked up
by every logger created through ``get_logger`` without manual parameter passing.
"""

from contextvars import ContextVar

_instance_context: ContextVar[str | None] = ContextVar("id_instance", default=None)
_chat_context: ContextVar[str | None] = ContextVar("chat_id", default=None)


def set_delivery_context(
    id_instance: str | None = None,
    chat_id: str | None = None,
) -> None:
    """
    Set the delivery context for the current async context.

    Args:
        id_instance: Provider instance identifier
        chat_id: Chat the current notification belongs to; an empty string
            clears it
    """
    if id_instance is not None:
        _instance_context.set(id_instance)
    if chat_id is not None:
        _chat_context.set(chat_id or None)


def get_current_instance_context() -> str | None:
    """Get the current instance ID from context variables."""
    return _instance_context.get()


def get_current_chat_context() -> str | None:
    """Get the current chat ID from context variables."""
    return _chat_context.get()


def clear_delivery_context() -> None:
    """
    Clear the delivery context.

    Context is isolated per task, so this is mostly useful for testing.
    """
    _instance_context.set(None)
    _chat_context.set(None)


def get_context_info() -> dict[str, str | None]:
    """Get current context information for debugging."""
    return {
        "id_instance": get_current_instance_context(),
        "chat_id": get_current_chat_context(),
    }
