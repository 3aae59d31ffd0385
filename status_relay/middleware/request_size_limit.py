"""Request body size limit middleware.

Rejects notification bodies larger than max_bytes with 413. Enforces the
limit for both Content-Length and Transfer-Encoding: chunked. Only the
listed paths are limited; every other request passes through untouched.
Uses raw ASGI (no BaseHTTPMiddleware).
"""

import json
from collections.abc import Iterable
from typing import Any, Callable


def _get_header(scope: dict, name: str) -> str | None:
    """Return first header value for name (case-insensitive)."""
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("utf-8", errors="replace")
    return None


async def _send_413(send: Callable, max_bytes: int, actual: int | None = None) -> None:
    """Send 413 Payload Too Large response."""
    details: dict[str, Any] = {"max_bytes": max_bytes}
    if actual is not None:
        details["content_length"] = actual
    body = json.dumps(
        {
            "error": "PAYLOAD_TOO_LARGE",
            "message": f"Request body must be at most {max_bytes} bytes",
            "details": details,
        }
    ).encode()
    await send({
        "type": "http.response.start",
        "status": 413,
        "headers": [(b"content-type", b"application/json")],
    })
    await send({
        "type": "http.response.body",
        "body": body,
        "more_body": False,
    })


def RequestSizeLimitMiddleware(
    app: Callable, max_bytes: int, paths: Iterable[str] | None = None
) -> Callable:
    """Reject bodies over max_bytes on the given paths (all paths if None). Raw ASGI."""
    limited = frozenset(paths) if paths is not None else None

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http" or (
            limited is not None and scope.get("path") not in limited
        ):
            await app(scope, receive, send)
            return

        content_length_str = _get_header(scope, "content-length")
        if content_length_str:
            try:
                length = int(content_length_str)
                if length > max_bytes:
                    await _send_413(send, max_bytes, length)
                    return
            except ValueError:
                pass
            await app(scope, receive, send)
            return

        # No Content-Length (chunked): buffer and count. A client disconnect
        # is replayed to the app after the buffered chunks so it can fail the read.
        messages: list[dict] = []
        total = 0
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                messages.append(message)
                break
            if message["type"] != "http.request":
                continue
            body = message.get("body", b"")
            total += len(body)
            if total > max_bytes:
                await _send_413(send, max_bytes, total)
                return
            messages.append(message)
            if not message.get("more_body", False):
                break

        class ReplayReceive:
            """Replay collected messages to the app one at a time."""

            def __init__(self) -> None:
                self._index = 0

            async def __call__(self) -> dict:
                if self._index < len(messages):
                    i = self._index
                    self._index += 1
                    return messages[i]
                return await receive()

        await app(scope, ReplayReceive(), send)

    return asgi_app
