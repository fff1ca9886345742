"""Redis pub/sub event source implementation."""

import asyncio
import json
import logging
from collections.abc import Sequence
from typing import Any

import redis.asyncio as redis

from cachepurge.core.entities.change_event import ChangeEvent
from cachepurge.core.exceptions import InvalidEventError
from cachepurge.core.interfaces.event_source import EventCallback

logger = logging.getLogger(__name__)


class RedisEventSource:
    """Subscribes to change notifications published on Redis channels.

    Each message body is a JSON object with ``path`` and/or ``uuid``
    (or ``identifier``) and an optional ``kind``; without a kind, the
    channel name is used. Every message is handled on its own task, so
    a slow purge never holds up the next message.
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379",
        channels: Sequence[str] = ("irods.fs",),
        client: redis.Redis | None = None,
        poll_interval: float = 1.0,
    ) -> None:
        """Initialize the event source.

        Args:
            url: Redis connection URL, used when no client is given.
            channels: Channels to subscribe to.
            client: Optional Redis client. Closed by ``close()``.
            poll_interval: Seconds to wait for a message before checking
                whether the source was closed.
        """
        self._redis: redis.Redis = client or redis.from_url(url)  # type: ignore
        self._channels = tuple(channels)
        self._poll_interval = poll_interval
        self._pending: set[asyncio.Task[None]] = set()
        self._closed = False
        self._subscribed = False
        self._stopped = asyncio.Event()

    @property
    def channels(self) -> tuple[str, ...]:
        """Get the subscribed channel names."""
        return self._channels

    async def subscribe(self, callback: EventCallback) -> None:
        """Deliver published events until the source is closed.

        Args:
            callback: Invoked with ``(kind, path, identifier)``.
        """
        pubsub = self._redis.pubsub()
        await pubsub.subscribe(*self._channels)
        self._subscribed = True
        logger.info("Subscribed to %s", ", ".join(self._channels))

        try:
            while not self._closed:
                message = await pubsub.get_message(
                    ignore_subscribe_messages=True,
                    timeout=self._poll_interval,
                )
                if message is None:
                    continue
                self._dispatch(message, callback)
        finally:
            try:
                if self._pending:
                    await asyncio.gather(*self._pending, return_exceptions=True)
                await self._release(pubsub)
            finally:
                self._stopped.set()

    async def _release(self, pubsub: Any) -> None:
        """Unsubscribe and close the pub/sub connection, logging failures."""
        try:
            await pubsub.unsubscribe()
        except Exception:
            logger.exception("Failed to unsubscribe from %s", ", ".join(self._channels))
        try:
            await pubsub.aclose()
        except Exception:
            logger.exception("Failed to close the pub/sub connection")

    def _dispatch(self, message: dict[str, Any], callback: EventCallback) -> None:
        channel = _text(message.get("channel", ""))
        try:
            event = self.decode_message(message.get("data", b""), channel)
        except InvalidEventError as e:
            logger.warning("Skipping a message on %s: %s", channel, e)
            return

        task = asyncio.create_task(self._deliver(event, callback))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _deliver(self, event: ChangeEvent, callback: EventCallback) -> None:
        try:
            await callback(event.kind, event.path, event.identifier)
        except Exception:
            logger.exception("Failed to handle a %s event", event.kind)

    @staticmethod
    def decode_message(data: bytes | str, channel: str = "") -> ChangeEvent:
        """Decode a message body into a ChangeEvent.

        Args:
            data: The raw message body (JSON).
            channel: The channel the message arrived on; the default kind.

        Returns:
            The decoded event.

        Raises:
            InvalidEventError: If the body is not a valid JSON event.
        """
        try:
            payload = json.loads(_text(data))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise InvalidEventError(f"Invalid JSON message: {e}") from e

        return ChangeEvent.from_message(payload, default_kind=channel)

    async def close(self) -> None:
        """Stop the subscription, wait for in-flight events, disconnect."""
        if self._closed:
            return
        self._closed = True

        if self._subscribed:
            await self._stopped.wait()
        await self._redis.aclose()


def _text(value: bytes | str) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value
