"""SSE broadcaster — pushes reload notifications to connected browsers.

Every browser tab showing a served page holds one SSE connection.  When the
output tree changes, the broadcaster enqueues a ``reload`` event on every
connection's queue; the SSE endpoint drains the queue into chirp's
``EventStream``.
"""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from inkwell._types import ClientID

RELOAD_EVENT = "reload"


def _reload_queue() -> asyncio.Queue[Any]:
    return asyncio.Queue(maxsize=1)


@dataclass(frozen=True, slots=True)
class ReloadConnection:
    """A connected SSE client.

    Attributes:
        client_id: Unique identifier for this connection.
        queue: Holds at most one pending reload for the client's generator.

    """

    client_id: ClientID
    queue: asyncio.Queue[Any] = field(default_factory=_reload_queue, compare=False, hash=False)


class Broadcaster:
    """Manages SSE connections and pushes reload signals.

    Thread-safe: the connection set is protected by a lock.

    """

    def __init__(self) -> None:
        self._connections: set[ReloadConnection] = set()
        self._lock = threading.Lock()

    @property
    def subscriber_count(self) -> int:
        """Number of active SSE connections."""
        with self._lock:
            return len(self._connections)

    def subscribe(self, conn: ReloadConnection) -> None:
        """Register an SSE client."""
        with self._lock:
            self._connections.add(conn)

    def unsubscribe(self, conn: ReloadConnection) -> None:
        """Remove an SSE client."""
        with self._lock:
            self._connections.discard(conn)

    def get_subscribers(self) -> frozenset[ReloadConnection]:
        """Snapshot of connected clients (no lock held on return)."""
        with self._lock:
            return frozenset(self._connections)

    async def push_reload(self, path: str = "") -> int:
        """Signal every connected client to reload the page.

        Args:
            path: The changed output file, sent as the event payload.

        Returns:
            Number of clients notified.  Clients that still have an unread
            reload are skipped.

        """
        from chirp import SSEEvent

        event = SSEEvent(data=path or RELOAD_EVENT, event=RELOAD_EVENT)

        count = 0
        for conn in self.get_subscribers():
            try:
                conn.queue.put_nowait(event)
                count += 1
            except asyncio.QueueFull:
                pass  # Client already has a reload pending

        return count

    async def client_generator(self, conn: ReloadConnection) -> AsyncIterator[Any]:
        """Async generator that yields events from a connection's queue.

        Used as the generator for chirp's ``EventStream``.  Catches
        ``CancelledError`` (client disconnect) and ``GeneratorExit``
        (generator cleanup) so the stream ends quietly.

        """
        try:
            while True:
                event = await conn.queue.get()
                yield event
        except (asyncio.CancelledError, GeneratorExit):
            return
