"""Tests for InMemoryEventSource."""

import asyncio

import pytest

from cachepurge.core.entities import ChangeEvent
from cachepurge.infrastructure.event_sources.memory import InMemoryEventSource


class TestInMemoryEventSource:
    """Tests for InMemoryEventSource."""

    async def test_delivers_in_publish_order(self) -> None:
        source = InMemoryEventSource()
        received: list[tuple[str, str, str]] = []

        async def callback(kind: str, path: str, identifier: str) -> None:
            received.append((kind, path, identifier))

        source.publish(ChangeEvent(kind="a", path="/1"))
        source.publish(ChangeEvent(kind="b", identifier="u2"))
        await source.close()
        await source.subscribe(callback)

        assert received == [("a", "/1", ""), ("b", "", "u2")]
        assert source.pending == 0

    async def test_close_stops_waiting_subscription(self) -> None:
        source = InMemoryEventSource()
        calls: list[str] = []

        async def callback(kind: str, path: str, identifier: str) -> None:
            calls.append(path)

        task = asyncio.create_task(source.subscribe(callback))
        source.publish(ChangeEvent(kind="a", path="/1"))
        await asyncio.sleep(0)
        await source.close()
        await asyncio.wait_for(task, timeout=1)

        assert calls == ["/1"]

    async def test_failing_callback_does_not_stop_delivery(self) -> None:
        source = InMemoryEventSource()
        calls: list[str] = []

        async def callback(kind: str, path: str, identifier: str) -> None:
            calls.append(path)
            if path == "/bad":
                raise RuntimeError("boom")

        source.publish(ChangeEvent(kind="a", path="/bad"))
        source.publish(ChangeEvent(kind="a", path="/good"))
        await source.close()
        await source.subscribe(callback)

        assert calls == ["/bad", "/good"]

    async def test_publish_after_close(self) -> None:
        source = InMemoryEventSource()
        await source.close()
        await source.close()

        with pytest.raises(RuntimeError):
            source.publish(ChangeEvent(kind="a", path="/1"))
