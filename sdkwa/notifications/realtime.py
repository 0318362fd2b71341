"""
Realtime Push Channel - receives notifications over a websocket.

The same payloads the queue would hold are pushed by the server and fed to
the same dispatcher as the poller, without an acknowledgement step.

Ownership:
    One channel owns one connection, read by a single ``listen`` loop.
    ``close`` may be called from any task (or, through ``close_threadsafe``,
    any thread) and is idempotent.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import json
import threading
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any

import aiohttp

from sdkwa.core.config.settings import settings
from sdkwa.core.errors import (
    DeliveryStage,
    NotificationError,
    SDKWAConnectionError,
    SDKWADecodeError,
    SDKWAStreamError,
)
from sdkwa.core.logging.context import set_delivery_context
from sdkwa.core.logging.logger import get_logger

from .dispatcher import NotificationDispatcher
from .models import Notification
from .source import NotificationSource, deliver

if TYPE_CHECKING:
    from sdkwa.client.sdkwa_client import SDKWAClient

# Closes that end the stream without an error
EXPECTED_CLOSE_CODES = frozenset(
    {
        aiohttp.WSCloseCode.OK,
        aiohttp.WSCloseCode.GOING_AWAY,
        aiohttp.WSCloseCode.ABNORMAL_CLOSURE,
    }
)

_CLOSE_TYPES = (
    aiohttp.WSMsgType.CLOSE,
    aiohttp.WSMsgType.CLOSING,
    aiohttp.WSMsgType.CLOSED,
)


class RealtimeChannel(NotificationSource):
    """
    Websocket notification source.

    Usage:
        async with RealtimeChannel(client, NotificationDispatcher(registry)) as channel:
            await channel.listen(stop_event)
    """

    def __init__(
        self,
        client: SDKWAClient,
        dispatcher: NotificationDispatcher,
        handshake_timeout: float | None = None,
        logger: Any | None = None,
    ):
        """
        Args:
            client: Client providing host, instance, token and the shared session
            dispatcher: Classifier + registry pairing
            handshake_timeout: Seconds allowed for the websocket handshake
            logger: Pre-configured logger instance
        """
        self.client = client
        self.dispatcher = dispatcher
        self.handshake_timeout = (
            handshake_timeout
            if handshake_timeout is not None
            else settings.ws_handshake_timeout
        )
        self.logger = logger or get_logger(__name__).bind(
            id_instance=client.id_instance
        )

        self._ws: aiohttp.ClientWebSocketResponse | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._closed = False
        self._close_lock = threading.Lock()

    @property
    def connected(self) -> bool:
        return self._ws is not None and not self._ws.closed

    @property
    def closed(self) -> bool:
        return self._closed

    async def connect(self) -> None:
        """
        Open the websocket.

        No retry here: reconnecting is the caller's policy
        (see ``run_realtime_listener``).

        Raises:
            SDKWAConnectionError: If the channel was closed or the handshake
                fails or times out
        """
        if self._closed:
            raise SDKWAConnectionError("Realtime channel is closed")
        if self.connected:
            return

        url = self.client.url_builder.get_websocket_url()

        async def _open() -> aiohttp.ClientWebSocketResponse:
            return await self.client.session.ws_connect(
                url,
                params={"token": self.client.config.api_token_instance},
                ssl=self.client.config.verify_ssl,
            )

        try:
            ws = await asyncio.wait_for(_open(), timeout=self.handshake_timeout)
        except asyncio.TimeoutError as e:
            raise SDKWAConnectionError(
                f"WebSocket handshake timed out after {self.handshake_timeout}s"
            ) from e
        except aiohttp.ClientError as e:
            raise SDKWAConnectionError(f"Failed to connect to WebSocket: {e}") from e

        # close() may have run while the handshake was in flight
        with self._close_lock:
            closed_during_handshake = self._closed
            if not closed_during_handshake:
                self._ws = ws
        if closed_during_handshake:
            await ws.close()
            raise SDKWAConnectionError("Realtime channel closed during handshake")

        self._loop = asyncio.get_running_loop()
        # The token travels in the query string, so only the bare URL is logged
        self.logger.info(f"Realtime channel connected: {url}")

    async def listen(self, stop_event: asyncio.Event | None = None) -> None:
        """
        Dispatch pushed notifications until the stream ends.

        Ends without error on a local close, a set ``stop_event`` or a
        normal/going-away/abnormal-closure close from the server. The
        connection is closed on return.

        Raises:
            SDKWAConnectionError: If ``connect`` was not called first
            SDKWAStreamError: If the server closes with any other code
        """
        if self._ws is None:
            raise SDKWAConnectionError("WebSocket connection not established")

        set_delivery_context(id_instance=self.client.id_instance)
        watcher = None
        if stop_event is not None:
            watcher = asyncio.create_task(self._close_when_set(stop_event))

        try:
            await deliver(self, self.dispatcher)
        finally:
            if watcher is not None:
                watcher.cancel()
                try:
                    await watcher
                except asyncio.CancelledError:
                    pass
            await self.close()

        self.logger.info("Realtime channel stopped listening")

    async def close(self) -> None:
        """Stop the listen loop and close the connection. Idempotent."""
        with self._close_lock:
            self._closed = True
            ws = self._ws

        if ws is not None and not ws.closed:
            await ws.close()
            self.logger.debug("Realtime channel closed")

    def close_threadsafe(self) -> concurrent.futures.Future | None:
        """
        Schedule ``close`` from a thread other than the channel's event loop.

        Do not block on the returned future from the loop's own thread.
        """
        loop = self._loop
        if loop is None or loop.is_closed():
            with self._close_lock:
                self._closed = True
            return None
        return asyncio.run_coroutine_threadsafe(self.close(), loop)

    async def __aiter__(self) -> AsyncIterator[Notification]:
        """Yield pushed notifications in arrival order."""
        ws = self._ws
        if ws is None:
            raise SDKWAConnectionError("WebSocket connection not established")

        while True:
            msg = await ws.receive()

            if msg.type in (aiohttp.WSMsgType.TEXT, aiohttp.WSMsgType.BINARY):
                notification = await self._decode(msg.data)
                if notification is not None:
                    yield notification
                continue

            if msg.type == aiohttp.WSMsgType.ERROR:
                if not self._closed:
                    self.logger.warning(f"WebSocket read error: {ws.exception()}")
                return

            if msg.type in _CLOSE_TYPES:
                self._check_close(ws, msg)
                return

    def _check_close(
        self, ws: aiohttp.ClientWebSocketResponse, msg: aiohttp.WSMessage
    ) -> None:
        if self._closed:
            return

        code = msg.data if msg.type == aiohttp.WSMsgType.CLOSE else ws.close_code
        if code is None or code in EXPECTED_CLOSE_CODES:
            self.logger.info(f"Realtime channel closed by server ({code})")
            return

        raise SDKWAStreamError(
            f"WebSocket closed unexpectedly ({code}): {msg.extra or ''}".rstrip(": "),
            close_code=code,
        )

    async def _decode(self, data: str | bytes) -> Notification | None:
        try:
            if isinstance(data, bytes):
                data = data.decode("utf-8")
            payload = json.loads(data)
        except ValueError as e:
            await self.dispatcher.report(
                NotificationError(
                    DeliveryStage.DECODE,
                    SDKWADecodeError(f"Invalid websocket message: {e}", body=data),
                )
            )
            return None

        if not isinstance(payload, dict):
            await self.dispatcher.report(
                NotificationError(
                    DeliveryStage.DECODE,
                    SDKWADecodeError("Websocket message is not a JSON object", body=payload),
                )
            )
            return None

        return Notification.from_payload(payload)

    async def _close_when_set(self, stop_event: asyncio.Event) -> None:
        await stop_event.wait()
        await self.close()

    async def __aenter__(self) -> RealtimeChannel:
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
