"""Tests for RedisEventSource."""

import asyncio
import json
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

redis = pytest.importorskip("redis")

from cachepurge.core.entities import ChangeEvent  # noqa: E402
from cachepurge.core.exceptions import InvalidEventError  # noqa: E402
from cachepurge.infrastructure.event_sources.redis import RedisEventSource  # noqa: E402


class FakePubSub:
    """Stands in for ``redis.asyncio.client.PubSub``."""

    def __init__(self, messages: list[dict]) -> None:
        self.messages = list(messages)
        self.channels: list[str] = []
        self.unsubscribed = False
        self.closed = False

    async def subscribe(self, *channels: str) -> None:
        self.channels.extend(channels)

    async def get_message(self, ignore_subscribe_messages: bool, timeout: float):
        if self.messages:
            return self.messages.pop(0)
        await asyncio.sleep(timeout)
        return None

    async def unsubscribe(self) -> None:
        self.unsubscribed = True

    async def aclose(self) -> None:
        self.closed = True


def message(body: dict | str, channel: bytes = b"irods.fs") -> dict:
    data = body if isinstance(body, str) else json.dumps(body)
    return {"type": "message", "channel": channel, "data": data.encode()}


def create_source(messages: list[dict]) -> tuple[RedisEventSource, FakePubSub, MagicMock]:
    pubsub = FakePubSub(messages)
    client = MagicMock()
    client.pubsub.return_value = pubsub
    client.aclose = AsyncMock()
    source = RedisEventSource(client=client, channels=("irods.fs",), poll_interval=0.01)
    return source, pubsub, client


async def wait_for(predicate, timeout: float = 1.0) -> None:
    async def poll() -> None:
        while not predicate():
            await asyncio.sleep(0.005)

    await asyncio.wait_for(poll(), timeout)


class TestDecodeMessage:
    """Tests for RedisEventSource.decode_message."""

    def test_decodes_json_body(self) -> None:
        event = RedisEventSource.decode_message(
            b'{"kind": "data-object.mod", "path": "/zone/a"}', "irods.fs"
        )

        assert event == ChangeEvent(kind="data-object.mod", path="/zone/a")

    def test_channel_is_default_kind(self) -> None:
        event = RedisEventSource.decode_message('{"uuid": "u1"}', "irods.fs")

        assert event == ChangeEvent(kind="irods.fs", identifier="u1")

    @pytest.mark.parametrize("data", [b"not json", b"\xff\xfe", b"[1, 2]", b'{"path": 1}'])
    def test_invalid_body(self, data: bytes) -> None:
        with pytest.raises(InvalidEventError):
            RedisEventSource.decode_message(data)


class TestSubscribe:
    """Tests for RedisEventSource.subscribe."""

    async def test_delivers_messages(self) -> None:
        source, pubsub, client = create_source(
            [
                message({"kind": "data-object.mod", "path": "/zone/a"}),
                message({"uuid": "u1"}),
            ]
        )
        received: list[tuple[str, str, str]] = []

        async def callback(kind: str, path: str, identifier: str) -> None:
            received.append((kind, path, identifier))

        task = asyncio.create_task(source.subscribe(callback))
        await wait_for(lambda: len(received) == 2)
        await source.close()
        await asyncio.wait_for(task, timeout=1)

        assert sorted(received) == [
            ("data-object.mod", "/zone/a", ""),
            ("irods.fs", "", "u1"),
        ]
        assert pubsub.channels == ["irods.fs"]
        assert pubsub.unsubscribed
        assert pubsub.closed
        client.aclose.assert_awaited_once()

    async def test_skips_invalid_messages(self, caplog: pytest.LogCaptureFixture) -> None:
        source, _, _ = create_source(
            [message("garbage"), message({"path": "/zone/b"})]
        )
        received: list[str] = []

        async def callback(kind: str, path: str, identifier: str) -> None:
            received.append(path)

        with caplog.at_level(logging.WARNING):
            task = asyncio.create_task(source.subscribe(callback))
            await wait_for(lambda: received == ["/zone/b"])
            await source.close()
            await asyncio.wait_for(task, timeout=1)

        assert "Skipping a message" in caplog.text

    async def test_messages_handled_concurrently(self) -> None:
        """A slow handler does not hold up the next message."""
        source, _, _ = create_source(
            [message({"path": "/slow"}), message({"path": "/fast"})]
        )
        release = asyncio.Event()
        finished: list[str] = []

        async def callback(kind: str, path: str, identifier: str) -> None:
            if path == "/slow":
                await release.wait()
            finished.append(path)

        task = asyncio.create_task(source.subscribe(callback))
        await wait_for(lambda: finished == ["/fast"])
        release.set()
        await source.close()
        await asyncio.wait_for(task, timeout=1)

        # close() waited for the in-flight handler
        assert finished == ["/fast", "/slow"]

    async def test_failing_callback_keeps_subscription(self) -> None:
        source, _, _ = create_source(
            [message({"path": "/bad"}), message({"path": "/good"})]
        )
        seen: list[str] = []

        async def callback(kind: str, path: str, identifier: str) -> None:
            seen.append(path)
            if path == "/bad":
                raise RuntimeError("boom")

        task = asyncio.create_task(source.subscribe(callback))
        await wait_for(lambda: len(seen) == 2)
        await source.close()
        await asyncio.wait_for(task, timeout=1)

        assert sorted(seen) == ["/bad", "/good"]

    async def test_lost_connection_does_not_block_close(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A dead connection fails subscribe() but close() still returns."""
        source, pubsub, client = create_source([])

        async def lost(**kwargs):
            raise redis.ConnectionError("connection lost")

        async def unsubscribe_lost() -> None:
            raise redis.ConnectionError("connection lost")

        pubsub.get_message = lost  # type: ignore[method-assign]
        pubsub.unsubscribe = unsubscribe_lost  # type: ignore[method-assign]

        async def callback(kind: str, path: str, identifier: str) -> None:
            pass

        with caplog.at_level(logging.ERROR):
            with pytest.raises(redis.ConnectionError):
                await source.subscribe(callback)
            await asyncio.wait_for(source.close(), timeout=1)

        assert pubsub.closed
        assert "Failed to unsubscribe" in caplog.text
        client.aclose.assert_awaited_once()

    async def test_close_without_subscribe(self) -> None:
        source, _, client = create_source([])

        await source.close()
        await source.close()

        client.aclose.assert_awaited_once()
