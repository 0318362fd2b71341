"""
Realtime listener - long-running websocket delivery with reconnection.

The channel itself never retries; this is the caller-side policy that
reconnects with exponential backoff until stopped.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from sdkwa.core.logging.logger import get_logger

from .dispatcher import NotificationDispatcher
from .realtime import RealtimeChannel
from .reconnection import ReconnectionConfig, ReconnectionStrategy

if TYPE_CHECKING:
    from sdkwa.client.sdkwa_client import SDKWAClient

logger = get_logger(__name__)


async def run_realtime_listener(
    client: SDKWAClient,
    dispatcher: NotificationDispatcher,
    *,
    stop_event: asyncio.Event | None = None,
    reconnect_delay: float = 5.0,
    max_reconnect_attempts: int | None = None,
) -> None:
    """
    Run a long-running realtime listener task.

    Args:
        client: Client to connect with
        dispatcher: Dispatcher receiving pushed notifications
        stop_event: Stops the listener when set
        reconnect_delay: Base seconds to wait before reconnecting
        max_reconnect_attempts: Max consecutive failed attempts (None = infinite)

    Lifecycle:
        1. Connect a fresh RealtimeChannel
        2. Listen until the stream ends
        3. Reconnect on failure (exponential backoff) or after a server close
        4. Exit when stopped, cancelled or out of attempts

    Example:
        listener_task = asyncio.create_task(
            run_realtime_listener(client, NotificationDispatcher(registry)),
            name="sdkwa_realtime_listener",
        )
    """
    reconnection = ReconnectionStrategy(
        config=ReconnectionConfig(
            base_delay=reconnect_delay,
            max_attempts=max_reconnect_attempts,
        )
    )

    logger.info(f"Starting realtime listener for instance {client.id_instance}")

    while reconnection.should_retry():
        if stop_event is not None and stop_event.is_set():
            break

        channel = RealtimeChannel(client, dispatcher)
        try:
            await channel.connect()
            reconnection.reset()
            await channel.listen(stop_event)

        except asyncio.CancelledError:
            logger.info("Realtime listener cancelled, shutting down")
            raise

        except Exception as e:
            reconnection.record_failure()
            logger.error(
                f"Realtime listener error (attempt {reconnection.attempt_count}): {e}",
                exc_info=True,
            )

            if not reconnection.should_retry():
                logger.critical(
                    f"Max reconnection attempts reached "
                    f"({reconnection.config.max_attempts}), exiting listener"
                )
                break

        finally:
            await channel.close()

        if stop_event is not None and stop_event.is_set():
            break

        if await reconnection.wait(stop_event):
            break

    logger.info("Realtime listener terminated")
