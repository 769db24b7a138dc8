"""Tests for inkwell.reactive.broadcaster — SSE connection management."""

from __future__ import annotations

import asyncio

import pytest

from inkwell.reactive.broadcaster import RELOAD_EVENT, Broadcaster, ReloadConnection


def _conn(client_id: str) -> ReloadConnection:
    return ReloadConnection(client_id=client_id)


class TestReloadConnection:
    """Verify ReloadConnection dataclass."""

    def test_frozen(self) -> None:
        conn = _conn("c1")
        with pytest.raises(AttributeError):
            conn.client_id = "other"  # type: ignore[misc]

    def test_has_single_slot_queue(self) -> None:
        queue = _conn("c1").queue
        assert isinstance(queue, asyncio.Queue)
        assert queue.maxsize == 1

    def test_equality_by_id(self) -> None:
        """Queue is excluded from comparison (compare=False)."""
        assert _conn("c1") == _conn("c1")


class TestBroadcasterSubscriptions:
    """Tests for subscribe/unsubscribe."""

    def test_subscribe(self) -> None:
        b = Broadcaster()
        conn = _conn("c1")
        b.subscribe(conn)
        assert conn in b.get_subscribers()
        assert b.subscriber_count == 1

    def test_unsubscribe(self) -> None:
        b = Broadcaster()
        conn = _conn("c1")
        b.subscribe(conn)
        b.unsubscribe(conn)
        assert b.subscriber_count == 0

    def test_unsubscribe_unknown_is_noop(self) -> None:
        b = Broadcaster()
        b.unsubscribe(_conn("ghost"))
        assert b.subscriber_count == 0


class TestPushReload:
    """Tests for push_reload."""

    @pytest.mark.asyncio
    async def test_every_client_notified(self) -> None:
        b = Broadcaster()
        conns = [_conn("a"), _conn("b")]
        for conn in conns:
            b.subscribe(conn)

        count = await b.push_reload("/out/a.html")
        assert count == 2
        for conn in conns:
            event = conn.queue.get_nowait()
            assert event.event == RELOAD_EVENT
            assert event.data == "/out/a.html"

    @pytest.mark.asyncio
    async def test_no_clients(self) -> None:
        assert await Broadcaster().push_reload() == 0

    @pytest.mark.asyncio
    async def test_default_payload(self) -> None:
        b = Broadcaster()
        conn = _conn("a")
        b.subscribe(conn)
        await b.push_reload()
        assert conn.queue.get_nowait().data == RELOAD_EVENT

    @pytest.mark.asyncio
    async def test_pending_reload_not_doubled(self) -> None:
        b = Broadcaster()
        conn = _conn("slow")
        b.subscribe(conn)
        assert await b.push_reload("/out/a.html") == 1
        assert await b.push_reload("/out/b.html") == 0
        assert conn.queue.qsize() == 1
        assert conn.queue.get_nowait().data == "/out/a.html"

    @pytest.mark.asyncio
    async def test_next_reload_after_delivery(self) -> None:
        b = Broadcaster()
        conn = _conn("c1")
        b.subscribe(conn)
        await b.push_reload()
        conn.queue.get_nowait()
        assert await b.push_reload() == 1


class TestClientGenerator:
    """Tests for the async generator used by EventStream."""

    @pytest.mark.asyncio
    async def test_yields_from_queue(self) -> None:
        b = Broadcaster()
        conn = _conn("c1")
        conn.queue.put_nowait("test-event")

        gen = b.client_generator(conn)
        assert await gen.__anext__() == "test-event"

    @pytest.mark.asyncio
    async def test_cancellation_stops_generator(self) -> None:
        b = Broadcaster()
        gen = b.client_generator(_conn("c1"))

        task = asyncio.create_task(gen.__anext__())
        await asyncio.sleep(0.01)
        task.cancel()

        with pytest.raises((asyncio.CancelledError, StopAsyncIteration)):
            await task
