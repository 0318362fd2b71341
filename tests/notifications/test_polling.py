"""
Tests for the notification poller.

Most cases drive the poller with a mocked ReceivingHandler; the last class
runs it against the fake provider over HTTP.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from sdkwa.core.errors import (
    DeliveryStage,
    SDKWAApiError,
    SDKWADecodeError,
    SDKWATransportError,
)
from sdkwa.notifications.dispatcher import DispatchOutcome, NotificationDispatcher
from sdkwa.notifications.models import EventKind, Notification
from sdkwa.notifications.polling import NotificationPoller, PollCycle
from sdkwa.notifications.registry import CallbackRegistry

ID_INSTANCE = "1101000001"

STATE_PAYLOAD = {
    "receiptId": 42,
    "body": {"typeWebhook": "stateInstanceChanged"},
    "typeWebhook": "stateInstanceChanged",
    "stateInstance": "authorized",
}


def make_receiving(*notifications):
    receiving = MagicMock()
    receiving.client.id_instance = ID_INSTANCE
    receiving.receive_notification = AsyncMock(
        side_effect=[Notification.from_payload(n) for n in notifications]
    )
    receiving.delete_notification = AsyncMock()
    return receiving


def make_poller(receiving, registry=None, on_error=None, interval=0.01):
    dispatcher = NotificationDispatcher(registry or CallbackRegistry(), on_error=on_error)
    return NotificationPoller(receiving, dispatcher, interval=interval)


class TestPollerConstruction:
    """Test poller configuration."""

    @pytest.mark.parametrize("interval", [0, -1])
    def test_rejects_non_positive_interval(self, interval):
        with pytest.raises(ValueError):
            make_poller(make_receiving(), interval=interval)

    def test_from_client_uses_settings_interval(self):
        client = MagicMock()
        client.id_instance = ID_INSTANCE
        poller = NotificationPoller.from_client(client, CallbackRegistry())
        assert poller.interval == 5.0
        assert poller.receiving.client is client


@pytest.mark.asyncio
class TestPollOnce:
    """Test a single fetch, dispatch and acknowledge cycle."""

    async def test_dispatch_then_acknowledge(self):
        registry = CallbackRegistry()
        callback = AsyncMock()
        registry.register(EventKind.STATE_INSTANCE_CHANGED, callback)
        receiving = make_receiving(STATE_PAYLOAD)
        poller = make_poller(receiving, registry)

        cycle = await poller.poll_once()

        callback.assert_awaited_once_with(STATE_PAYLOAD)
        receiving.delete_notification.assert_awaited_once_with(42)
        assert cycle.outcome is DispatchOutcome.HANDLED
        assert cycle.acknowledged is True
        assert cycle.kind == "stateInstanceChanged"

    async def test_empty_fetch_does_nothing(self):
        registry = CallbackRegistry()
        callback = AsyncMock()
        registry.register(EventKind.STATE_INSTANCE_CHANGED, callback)
        receiving = make_receiving({})
        poller = make_poller(receiving, registry)

        cycle = await poller.poll_once()

        assert cycle == PollCycle(notification=Notification())
        assert not cycle.dispatched
        callback.assert_not_awaited()
        receiving.delete_notification.assert_not_awaited()

    async def test_callback_error_still_acknowledged(self):
        registry = CallbackRegistry()
        registry.register(
            EventKind.STATE_INSTANCE_CHANGED, AsyncMock(side_effect=RuntimeError("boom"))
        )
        on_error = MagicMock()
        receiving = make_receiving(STATE_PAYLOAD)
        poller = make_poller(receiving, registry, on_error=on_error)

        cycle = await poller.poll_once()

        assert cycle.outcome is DispatchOutcome.FAILED
        assert cycle.acknowledged is True
        receiving.delete_notification.assert_awaited_once_with(42)
        assert on_error.call_args.args[0].stage is DeliveryStage.DISPATCH

    async def test_unregistered_kind_is_acknowledged(self):
        receiving = make_receiving(STATE_PAYLOAD)
        poller = make_poller(receiving)

        cycle = await poller.poll_once()

        assert cycle.outcome is DispatchOutcome.NO_HANDLER
        receiving.delete_notification.assert_awaited_once_with(42)

    async def test_missing_receipt_id_skips_acknowledge(self):
        payload = {"typeWebhook": "deviceInfo"}
        receiving = make_receiving(payload)
        poller = make_poller(receiving)

        cycle = await poller.poll_once()

        assert cycle.dispatched
        assert cycle.acknowledged is False
        receiving.delete_notification.assert_not_awaited()

    @pytest.mark.parametrize(
        "error,stage",
        [
            (SDKWATransportError("timed out"), DeliveryStage.FETCH),
            (SDKWAApiError(500, "server error"), DeliveryStage.FETCH),
            (SDKWADecodeError("not json"), DeliveryStage.DECODE),
        ],
    )
    async def test_fetch_error_is_reported(self, error, stage):
        receiving = make_receiving()
        receiving.receive_notification.side_effect = error
        on_error = MagicMock()
        poller = make_poller(receiving, on_error=on_error)

        cycle = await poller.poll_once()

        assert cycle.fetch_failed
        reported = on_error.call_args.args[0]
        assert reported.stage is stage
        assert reported.cause is error
        receiving.delete_notification.assert_not_awaited()

    async def test_acknowledge_error_is_reported(self):
        receiving = make_receiving(STATE_PAYLOAD)
        receiving.delete_notification.side_effect = SDKWAApiError(404, "not found")
        on_error = MagicMock()
        poller = make_poller(receiving, on_error=on_error)

        cycle = await poller.poll_once()

        assert cycle.acknowledged is False
        assert on_error.call_args.args[0].stage is DeliveryStage.ACKNOWLEDGE


@pytest.mark.asyncio
class TestPollerRun:
    """Test the run loop lifecycle."""

    async def test_stop_before_first_wait_ends_without_fetch(self):
        receiving = make_receiving()
        poller = make_poller(receiving, interval=10)
        stop = asyncio.Event()
        stop.set()

        await asyncio.wait_for(poller.run(stop), timeout=1)

        receiving.receive_notification.assert_not_awaited()

    async def test_stop_during_wait_ends_promptly(self):
        receiving = make_receiving()
        poller = make_poller(receiving, interval=10)
        stop = asyncio.Event()

        task = asyncio.create_task(poller.run(stop))
        await asyncio.sleep(0.05)
        stop.set()
        await asyncio.wait_for(task, timeout=1)

        receiving.receive_notification.assert_not_awaited()

    async def test_cancellation_propagates(self):
        receiving = make_receiving()
        poller = make_poller(receiving, interval=10)

        task = asyncio.create_task(poller.run())
        await asyncio.sleep(0.05)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

    async def test_cycles_are_sequential(self):
        registry = CallbackRegistry()
        order = []
        stop = asyncio.Event()

        async def on_state(payload):
            order.append(("dispatch", payload["receiptId"]))

        registry.register(EventKind.STATE_INSTANCE_CHANGED, on_state)
        receiving = make_receiving(
            {**STATE_PAYLOAD, "receiptId": 1}, {**STATE_PAYLOAD, "receiptId": 2}
        )

        async def delete(receipt_id):
            order.append(("delete", receipt_id))
            if receipt_id == 2:
                stop.set()

        receiving.delete_notification.side_effect = delete
        poller = make_poller(receiving, registry)

        await asyncio.wait_for(poller.run(stop), timeout=2)

        assert order == [
            ("dispatch", 1),
            ("delete", 1),
            ("dispatch", 2),
            ("delete", 2),
        ]

    async def test_fetch_errors_do_not_stop_the_loop(self):
        receiving = make_receiving()
        stop = asyncio.Event()
        calls = 0

        async def flaky(*args, **kwargs):
            nonlocal calls
            calls += 1
            if calls >= 3:
                stop.set()
            raise SDKWATransportError("connection refused")

        receiving.receive_notification.side_effect = flaky
        poller = make_poller(receiving)

        await asyncio.wait_for(poller.run(stop), timeout=2)

        assert calls == 3


@pytest.mark.asyncio
class TestPollerAgainstProvider:
    """Run the poller over HTTP against the fake provider."""

    async def test_receipt_is_deleted_exactly_once(self, client, provider):
        base = f"/whatsapp/{ID_INSTANCE}"
        provider.add_response("GET", f"{base}/receiveNotification", STATE_PAYLOAD)
        provider.add_response("GET", f"{base}/receiveNotification", None)
        provider.add_response(
            "DELETE", f"{base}/deleteNotification/42", {"result": True}
        )

        received = []
        registry = CallbackRegistry()
        registry.on_state_instance(received.append)
        poller = NotificationPoller.from_client(client, registry, interval=0.01)

        first = await poller.poll_once()
        second = await poller.poll_once()

        assert received == [STATE_PAYLOAD]
        assert first.acknowledged is True
        assert second.notification.is_empty
        deletes = [r for r in provider.requests if r["method"] == "DELETE"]
        assert [r["path"] for r in deletes] == [f"{base}/deleteNotification/42"]
        assert provider.requests[0]["headers"]["Authorization"] == "Bearer test_token"

    async def test_text_message_dispatched_by_subtype_and_deleted_once(
        self, client, provider
    ):
        base = f"/whatsapp/{ID_INSTANCE}"
        payload = {
            "typeWebhook": "incomingMessageReceived",
            "messageData": {"typeMessage": "textMessage"},
            "receiptId": 42,
        }
        provider.add_response("GET", f"{base}/receiveNotification", payload)
        provider.add_response("GET", f"{base}/receiveNotification", {})
        provider.add_response(
            "DELETE", f"{base}/deleteNotification/42", {"result": True}
        )

        registry = CallbackRegistry()
        handler = AsyncMock()
        registry.register("incomingMessageReceived_textMessage", handler)
        poller = NotificationPoller.from_client(client, registry, interval=0.01)

        first = await poller.poll_once()
        second = await poller.poll_once()

        handler.assert_awaited_once_with(payload)
        assert first.kind == "incomingMessageReceived_textMessage"
        assert first.acknowledged is True
        assert second.notification.is_empty
        deletes = [r["path"] for r in provider.requests if r["method"] == "DELETE"]
        assert deletes == [f"{base}/deleteNotification/42"]

    async def test_undecodable_body_does_not_stop_the_loop(self, client, provider):
        base = f"/whatsapp/{ID_INSTANCE}"
        provider.add_response(
            "GET", f"{base}/receiveNotification", raw=b'{"typeWebhook": "\xff\xfe"}'
        )
        stop = asyncio.Event()
        errors = []

        def on_error(error):
            errors.append(error)
            if len(errors) == 2:
                stop.set()

        poller = NotificationPoller.from_client(
            client, CallbackRegistry(), interval=0.01, on_error=on_error
        )

        await asyncio.wait_for(poller.run(stop), timeout=2)

        assert [e.stage for e in errors] == [DeliveryStage.DECODE, DeliveryStage.DECODE]
        assert all(isinstance(e.cause, SDKWADecodeError) for e in errors)
