"""Tests for RelayNotifier (notify, tolerate unreachable)."""

import httpx

from status_relay.infrastructure.messaging import RelayNotifier

URL = "http://relay.test/update-status"


def _notifier(handler) -> RelayNotifier:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RelayNotifier(client=client, url=URL, timeout=0.5)


async def test_returns_true_on_2xx() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"message": "ok"})

    assert await _notifier(handler).notify(b'{"a":1}') is True
    assert seen[0].content == b'{"a":1}'
    assert str(seen[0].url) == URL


async def test_returns_false_when_relay_unreachable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    assert await _notifier(handler).notify(b"{}") is False


async def test_returns_false_on_timeout() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    assert await _notifier(handler).notify(b"{}") is False


async def test_returns_false_on_error_status() -> None:
    assert await _notifier(lambda request: httpx.Response(500)).notify(b"{}") is False


async def test_sends_once_without_retry() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(502)

    await _notifier(handler).notify(b"{}")
    assert calls == 1
