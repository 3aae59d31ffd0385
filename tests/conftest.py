"""Pytest configuration and fixtures for the status relay.

HTTP tests run against the relay/ingestion apps over httpx ASGITransport
(no lifespan, so fixtures put the shared objects on app.state themselves).
WebSocket round-trips use Starlette's TestClient, which does run lifespan.
"""

import os

os.environ.setdefault("TELEMETRY_ENABLED", "false")

import asyncio
from collections.abc import Callable

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from starlette.websockets import WebSocketState

from status_relay.api.websocket import ConnectionManager
from status_relay.core.config import get_settings
from status_relay.infrastructure.messaging import RelayNotifier
from status_relay.ingest import create_ingest_app
from status_relay.main import create_app

STATUS_PAYLOAD = '{"callId":"call-1","status":2,"message":"Дозвонился"}'.encode("utf-8")


class FakeWebSocket:
    """Stand-in for a Starlette WebSocket: records frames, can fail or stall on send."""

    def __init__(
        self,
        fail_with: Exception | None = None,
        delay: float = 0.0,
        fail_accept: bool = False,
    ) -> None:
        self.application_state = WebSocketState.CONNECTING
        self.client_state = WebSocketState.CONNECTING
        self.headers: dict[str, str] = {}
        self.sent: list[str | bytes] = []
        self.closed_with: int | None = None
        self._fail_with = fail_with
        self._delay = delay
        self._fail_accept = fail_accept

    async def accept(self) -> None:
        if self._fail_accept:
            raise RuntimeError("handshake failed")
        self.application_state = WebSocketState.CONNECTED
        self.client_state = WebSocketState.CONNECTED

    async def _send(self, frame: str | bytes) -> None:
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._fail_with is not None:
            raise self._fail_with
        self.sent.append(frame)

    async def send_text(self, data: str) -> None:
        await self._send(data)

    async def send_bytes(self, data: bytes) -> None:
        await self._send(data)

    async def close(self, code: int = 1000, reason: str | None = None) -> None:
        self.application_state = WebSocketState.DISCONNECTED
        self.closed_with = code

    def drop(self) -> None:
        """Simulate the client going away without the server noticing yet."""
        self.client_state = WebSocketState.DISCONNECTED


@pytest.fixture
def fake_ws() -> type[FakeWebSocket]:
    """The FakeWebSocket class; call it to build subscribers."""
    return FakeWebSocket


@pytest.fixture
def status_payload() -> bytes:
    """The status update the bot backend sends for call-1 / status 2."""
    return STATUS_PAYLOAD


@pytest.fixture
def settings_env(monkeypatch: pytest.MonkeyPatch) -> Callable[..., None]:
    """Override settings via env for one test; the settings cache is cleared before and after."""

    def _apply(**values: str) -> None:
        for key, value in values.items():
            monkeypatch.setenv(key.upper(), value)
        get_settings.cache_clear()

    yield _apply
    get_settings.cache_clear()


@pytest.fixture
async def manager() -> ConnectionManager:
    """Registry with its dispatcher running, as the lifespan would leave it."""
    manager = ConnectionManager(send_timeout=1.0)
    manager.start()
    yield manager
    await manager.stop(drain_timeout=2.0)


@pytest.fixture
def relay_app(manager: ConnectionManager) -> FastAPI:
    """Relay app with a registry already installed (ASGITransport skips lifespan)."""
    get_settings.cache_clear()
    app = create_app()
    app.state.ws_manager = manager
    return app


@pytest.fixture
async def client(relay_app: FastAPI) -> AsyncClient:
    """Async HTTP client against the relay app (ASGI)."""
    transport = ASGITransport(app=relay_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def ws_client() -> TestClient:
    """Sync client with lifespan running, for real WebSocket subscribers."""
    get_settings.cache_clear()
    with TestClient(create_app()) as tc:
        yield tc


@pytest.fixture
def relay_requests() -> list[httpx.Request]:
    """Requests the mocked relay received from the ingestion service."""
    return []


@pytest.fixture
def relay_handler(relay_requests: list[httpx.Request]) -> Callable[[httpx.Request], httpx.Response]:
    """Default mocked relay: records the request and acks with 200."""

    def handler(request: httpx.Request) -> httpx.Response:
        relay_requests.append(request)
        return httpx.Response(200, json={"message": "ok"})

    return handler


@pytest.fixture
async def ingest_client(relay_handler: Callable) -> AsyncClient:
    """Async client against the ingestion app, whose relay is an httpx MockTransport."""
    get_settings.cache_clear()
    app = create_ingest_app()
    relay_http = httpx.AsyncClient(transport=httpx.MockTransport(relay_handler))
    app.state.relay_notifier = RelayNotifier(
        client=relay_http, url="http://relay.test/update-status", timeout=1.0
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    await relay_http.aclose()
