"""WebSocket subscriber registry and broadcast fan-out.

Holds the set of connected subscribers and delivers each status event to
every open one. Use via app.state.ws_manager (set in lifespan).

Membership changes only through add/remove, and snapshot() is the only
read path. All three run under one asyncio.Lock. Sends happen outside
that lock, so a slow subscriber never blocks connects or disconnects.

The notification endpoint only publish()es; a single dispatcher task
(started and stopped by the lifespan) drains the queue in FIFO order, so
acks never wait on subscriber sends.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from fastapi import WebSocket
from starlette.websockets import WebSocketState

from status_relay.core.constants import WS_CLOSE_GOING_AWAY, WS_CLOSE_INTERNAL_ERROR
from status_relay.domain.events import StatusEvent
from status_relay.domain.exceptions import SubscriberLimitExceeded
from status_relay.shared.telemetry.tracing import TracedOperation, add_span_attributes

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Subscriber:
    """A live WebSocket connection awaiting status broadcasts.

    Identity is the handle itself (eq=False keeps default hashing).
    """

    websocket: WebSocket
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    connected_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_open(self) -> bool:
        """True while both sides of the connection are still connected."""
        return (
            self.websocket.application_state == WebSocketState.CONNECTED
            and self.websocket.client_state == WebSocketState.CONNECTED
        )

    async def send(self, frame: str | bytes) -> None:
        """Send one frame (text for str, binary for bytes)."""
        if isinstance(frame, bytes):
            await self.websocket.send_bytes(frame)
        else:
            await self.websocket.send_text(frame)


@dataclass(frozen=True)
class BroadcastResult:
    """Outcome of one fan-out; used for logging and tests, never for the HTTP ack."""

    delivered: int = 0
    skipped: int = 0
    failed: int = 0

    @property
    def attempted(self) -> int:
        return self.delivered + self.failed


class ConnectionManager:
    """Registry of subscribers plus the broadcast fan-out.

    - add/remove/snapshot are lock-protected; remove is idempotent.
    - publish() queues an event and returns; the dispatcher task fans events
      out one at a time in arrival order, so each subscriber sees them in
      the order the notification endpoint received them.
    - broadcast() snapshots under the lock, then sends outside it.
    - A failed or timed-out send deregisters and closes that subscriber only.
    """

    def __init__(self, send_timeout: float = 5.0, max_subscribers: int = 0) -> None:
        """Initialize an empty registry.

        Args:
            send_timeout: Seconds a single send may take before the subscriber
                is treated as unreachable.
            max_subscribers: Cap on concurrent subscribers; 0 means unlimited.
        """
        self._subscribers: dict[str, Subscriber] = {}
        self._lock = asyncio.Lock()
        self._fanout_lock = asyncio.Lock()
        self._send_timeout = send_timeout
        self._max_subscribers = max_subscribers
        self._queue: asyncio.Queue[StatusEvent] = asyncio.Queue()
        self._dispatcher: asyncio.Task | None = None

    # ---- Registry ----

    async def add(self, subscriber: Subscriber) -> int:
        """Register a subscriber and return the new subscriber count.

        Raises:
            SubscriberLimitExceeded: If the registry is already at capacity.
        """
        async with self._lock:
            if subscriber.id in self._subscribers:
                return len(self._subscribers)
            if self._at_capacity():
                raise SubscriberLimitExceeded(self._max_subscribers)
            self._subscribers[subscriber.id] = subscriber
            return len(self._subscribers)

    async def remove(self, subscriber: Subscriber) -> bool:
        """Deregister a subscriber. Returns False if it was already gone."""
        async with self._lock:
            return self._subscribers.pop(subscriber.id, None) is not None

    async def snapshot(self) -> list[Subscriber]:
        """Return a point-in-time copy of current subscribers (connection order)."""
        async with self._lock:
            return list(self._subscribers.values())

    async def get_connection_count(self) -> int:
        """Return the number of registered subscribers (lock-safe)."""
        async with self._lock:
            return len(self._subscribers)

    def _at_capacity(self) -> bool:
        return 0 < self._max_subscribers <= len(self._subscribers)

    # ---- Connection lifecycle ----

    async def connect(self, websocket: WebSocket) -> Subscriber:
        """Complete the handshake and register the connection.

        Capacity is checked after accept so the caller can close a refused
        connection with a real close code (an unaccepted refusal reaches
        browsers as a bare HTTP 403). If accept() itself fails nothing is
        registered.

        Raises:
            SubscriberLimitExceeded: Relay is full; the connection is accepted
                but not registered.
        """
        await websocket.accept()
        subscriber = Subscriber(websocket=websocket)
        total = await self.add(subscriber)
        logger.info("Subscriber %s connected (%d total)", subscriber.id, total)
        return subscriber

    async def disconnect(self, subscriber: Subscriber) -> None:
        """Deregister a subscriber on client close or transport error (idempotent)."""
        if await self.remove(subscriber):
            total = await self.get_connection_count()
            logger.info("Subscriber %s disconnected (%d total)", subscriber.id, total)

    async def close_all(self, code: int = WS_CLOSE_GOING_AWAY) -> int:
        """Deregister and close every subscriber (shutdown). Returns how many were closed."""
        async with self._lock:
            subscribers = list(self._subscribers.values())
            self._subscribers.clear()
        await asyncio.gather(
            *(self._close_quietly(s, code) for s in subscribers if s.is_open)
        )
        if subscribers:
            logger.info("Closed %d subscriber(s) on shutdown", len(subscribers))
        return len(subscribers)

    async def _close_quietly(self, subscriber: Subscriber, code: int) -> None:
        """Best-effort close, bounded by the send timeout."""
        try:
            await asyncio.wait_for(
                subscriber.websocket.close(code=code), timeout=self._send_timeout
            )
        except Exception as e:
            logger.debug("Close failed for subscriber %s: %r", subscriber.id, e)

    # ---- Dispatch ----

    def publish(self, event: StatusEvent) -> int:
        """Queue an event for fan-out and return at once. Returns the queue depth."""
        self._queue.put_nowait(event)
        return self._queue.qsize()

    def start(self) -> None:
        """Start the dispatcher task (idempotent)."""
        if self._dispatcher is None or self._dispatcher.done():
            self._dispatcher = asyncio.create_task(
                self._run_dispatcher(), name="status-relay-dispatcher"
            )

    async def wait_idle(self) -> None:
        """Wait until every published event has been fanned out."""
        await self._queue.join()

    async def stop(self, drain_timeout: float | None = None) -> None:
        """Fan out what is already queued (up to drain_timeout), then stop the dispatcher."""
        if self._dispatcher is None:
            return
        try:
            await asyncio.wait_for(self._queue.join(), timeout=drain_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Dispatcher stopped with %d status update(s) undelivered",
                self._queue.qsize(),
            )
        self._dispatcher.cancel()
        try:
            await self._dispatcher
        except asyncio.CancelledError:
            pass
        self._dispatcher = None
        logger.info("Broadcast dispatcher stopped")

    async def _run_dispatcher(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                await self.broadcast(event)
            except Exception:
                logger.exception("Fan-out of a %d-byte status update failed", len(event))
            finally:
                self._queue.task_done()

    # ---- Fan-out ----

    async def broadcast(self, event: StatusEvent) -> BroadcastResult:
        """Deliver one event to every subscriber that is open right now.

        Subscribers that are not open are skipped. Send failures are
        contained here: the failing subscribers are deregistered, closed
        with 1011, and the rest still receive the event. Never raises for
        per-subscriber errors.
        """
        frame = event.as_frame()
        async with self._fanout_lock:
            async with TracedOperation("relay.broadcast", {"event.size": len(event)}):
                snapshot = await self.snapshot()
                targets = [s for s in snapshot if s.is_open]
                skipped = len(snapshot) - len(targets)

                results = await asyncio.gather(
                    *(self._send_one(s, frame) for s in targets),
                    return_exceptions=True,
                )
                dead: list[Subscriber] = []
                for subscriber, outcome in zip(targets, results):
                    if isinstance(outcome, Exception):
                        logger.warning(
                            "Send to subscriber %s failed: %r", subscriber.id, outcome
                        )
                        dead.append(subscriber)
                for subscriber in dead:
                    await self.disconnect(subscriber)
                await asyncio.gather(
                    *(self._close_quietly(s, WS_CLOSE_INTERNAL_ERROR) for s in dead)
                )

                result = BroadcastResult(
                    delivered=len(targets) - len(dead),
                    skipped=skipped,
                    failed=len(dead),
                )
                add_span_attributes(
                    **{
                        "broadcast.delivered": result.delivered,
                        "broadcast.skipped": result.skipped,
                        "broadcast.failed": result.failed,
                    }
                )
        logger.debug(
            "Broadcast %d bytes: delivered=%d skipped=%d failed=%d",
            len(event),
            result.delivered,
            result.skipped,
            result.failed,
        )
        return result

    async def _send_one(self, subscriber: Subscriber, frame: str | bytes) -> None:
        """Send to a single subscriber, bounded by the send timeout."""
        await asyncio.wait_for(subscriber.send(frame), timeout=self._send_timeout)
