"""
Tests for the inbound webhook router.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from sdkwa.api.routes.webhooks import create_webhook_app, create_webhook_router
from sdkwa.core.errors import DeliveryStage
from sdkwa.notifications.dispatcher import NotificationDispatcher
from sdkwa.notifications.models import EventKind
from sdkwa.notifications.registry import CallbackRegistry

TEXT_PAYLOAD = {
    "typeWebhook": "incomingMessageReceived",
    "instanceData": {"idInstance": 1101000001},
    "senderData": {"chatId": "79001234567@c.us"},
    "messageData": {
        "typeMessage": "textMessage",
        "textMessageData": {"textMessage": "hi"},
    },
}


@pytest.fixture
def registry():
    return CallbackRegistry()


@pytest.fixture
def on_error():
    return MagicMock()


@pytest.fixture
def http(registry, on_error):
    app = create_webhook_app(NotificationDispatcher(registry, on_error=on_error))
    return TestClient(app)


class TestWebhookRoute:
    """Test request handling on the webhook endpoint."""

    def test_dispatches_payload(self, http, registry):
        callback = AsyncMock()
        registry.register(EventKind.INCOMING_MESSAGE_TEXT, callback)

        response = http.post("/webhook", json=TEXT_PAYLOAD)

        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "kind": "incomingMessageReceived_textMessage",
            "handled": True,
        }
        callback.assert_awaited_once_with(TEXT_PAYLOAD)

    def test_unhandled_kind_still_ok(self, http):
        response = http.post("/webhook", json={"typeWebhook": "deviceInfo"})

        assert response.status_code == 200
        assert response.json()["handled"] is False

    def test_method_not_allowed(self, http):
        assert http.get("/webhook").status_code == 405

    def test_invalid_json(self, http, registry):
        callback = MagicMock()
        registry.register(EventKind.INCOMING_MESSAGE_TEXT, callback)

        response = http.post(
            "/webhook", content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        callback.assert_not_called()

    def test_non_object_body(self, http):
        response = http.post("/webhook", json=[TEXT_PAYLOAD])
        assert response.status_code == 400

    def test_callback_failure(self, http, registry, on_error):
        registry.register(
            EventKind.INCOMING_MESSAGE_TEXT, MagicMock(side_effect=RuntimeError("boom"))
        )

        response = http.post("/webhook", json=TEXT_PAYLOAD)

        assert response.status_code == 500
        error = on_error.call_args.args[0]
        assert error.stage is DeliveryStage.DISPATCH
        assert str(error.cause) == "boom"


class TestWebhookRouter:
    """Test mounting the router into an existing application."""

    def test_custom_path(self, registry):
        app = FastAPI()
        app.include_router(
            create_webhook_router(NotificationDispatcher(registry), path="/hooks/sdkwa"),
            prefix="/api",
        )
        http = TestClient(app)

        assert http.post("/api/hooks/sdkwa", json={"typeWebhook": "x"}).status_code == 200
        assert http.post("/webhook", json={"typeWebhook": "x"}).status_code == 404
