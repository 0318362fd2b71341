"""
Pytest configuration and common fixtures for SDKWA tests.

Provides a fake provider built on aiohttp's test server (HTTP endpoints plus
the websocket stream) and helpers to build clients against it.
"""

from collections.abc import AsyncIterator
from typing import Any

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from sdkwa.client.config import ClientConfig
from sdkwa.client.sdkwa_client import SDKWAClient

ID_INSTANCE = "1101000001"
API_TOKEN = "test_token"


class FakeProvider:
    """Records requests and answers with queued or fixed responses."""

    def __init__(self):
        self.requests: list[dict[str, Any]] = []
        self.responses: dict[tuple[str, str], list[web.StreamResponse]] = {}
        self.ws_messages: list[Any] = []
        self.ws_close_code: int = aiohttp.WSCloseCode.OK
        self.ws_hold_open = False
        self.ws_query: dict[str, str] = {}
        self.ws_connections = 0

    def add_response(
        self,
        method: str,
        path: str,
        body: Any = None,
        status: int = 200,
        text: str | None = None,
        raw: bytes | None = None,
    ) -> None:
        if raw is not None:
            response = web.Response(
                status=status,
                body=raw,
                content_type="application/json",
                charset="utf-8",
            )
        elif text is not None:
            response = web.Response(status=status, text=text)
        else:
            response = web.json_response(body, status=status)
        self.responses.setdefault((method, path), []).append(response)

    async def handle(self, request: web.Request) -> web.StreamResponse:
        record: dict[str, Any] = {
            "method": request.method,
            "path": request.path,
            "headers": request.headers,
        }
        if request.content_type == "multipart/form-data":
            form = await request.post()
            record["form"] = {
                key: (
                    {"filename": value.filename, "content": value.file.read()}
                    if isinstance(value, web.FileField)
                    else value
                )
                for key, value in form.items()
            }
        elif request.can_read_body:
            record["json"] = await request.json()
        self.requests.append(record)

        queued = self.responses.get((request.method, request.path))
        if queued:
            # The last queued response is sticky
            return queued.pop(0) if len(queued) > 1 else _clone(queued[0])
        return web.json_response({"message": "not found"}, status=404)

    async def handle_ws(self, request: web.Request) -> web.WebSocketResponse:
        self.ws_query = dict(request.query)
        self.ws_connections += 1
        if request.query.get("token") != API_TOKEN:
            return web.Response(status=401)

        ws = web.WebSocketResponse()
        await ws.prepare(request)
        for message in self.ws_messages:
            if isinstance(message, (dict, list)):
                await ws.send_json(message)
            else:
                await ws.send_str(message)

        if self.ws_hold_open:
            async for _ in ws:
                pass
        else:
            await ws.close(code=self.ws_close_code)
        return ws


def _clone(response: web.Response) -> web.Response:
    return web.Response(
        status=response.status,
        body=response.body,
        content_type=response.content_type,
    )


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest_asyncio.fixture
async def provider_server(provider: FakeProvider) -> AsyncIterator[TestServer]:
    app = web.Application()
    app.router.add_route("GET", f"/ws/{ID_INSTANCE}", provider.handle_ws)
    app.router.add_route("*", "/{tail:.*}", provider.handle)
    server = TestServer(app)
    await server.start_server()
    yield server
    await server.close()


@pytest_asyncio.fixture
async def http_session() -> AsyncIterator[aiohttp.ClientSession]:
    async with aiohttp.ClientSession() as session:
        yield session


def make_config(server: TestServer, **overrides: Any) -> ClientConfig:
    values: dict[str, Any] = {
        "id_instance": ID_INSTANCE,
        "api_token_instance": API_TOKEN,
        "api_host": str(server.make_url("")),
        "timeout": 5,
    }
    values.update(overrides)
    return ClientConfig(**values)


@pytest.fixture
def client(provider_server: TestServer, http_session: aiohttp.ClientSession) -> SDKWAClient:
    return SDKWAClient(http_session, make_config(provider_server))


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch):
    """Set up test environment variables."""
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("SDKWA_ID_INSTANCE", ID_INSTANCE)
    monkeypatch.setenv("SDKWA_API_TOKEN_INSTANCE", API_TOKEN)


@pytest.fixture
def make_client(provider_server: TestServer, http_session: aiohttp.ClientSession):
    """Factory for clients against the fake provider with config overrides."""

    def _make(**overrides: Any) -> SDKWAClient:
        return SDKWAClient(http_session, make_config(provider_server, **overrides))

    return _make
