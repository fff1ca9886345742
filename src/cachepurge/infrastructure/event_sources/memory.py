"""In-memory event source implementation."""

import asyncio
import logging

from cachepurge.core.entities.change_event import ChangeEvent
from cachepurge.core.interfaces.event_source import EventCallback

logger = logging.getLogger(__name__)


class InMemoryEventSource:
    """Event source fed by ``publish()`` calls.

    Events are delivered in publish order, one at a time. Suitable for
    tests and for embedding the purge service in another process.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[ChangeEvent | None] = asyncio.Queue()
        self._closed = False

    def publish(self, event: ChangeEvent) -> None:
        """Queue an event for delivery.

        Args:
            event: The change event to deliver.

        Raises:
            RuntimeError: If the source has been closed.
        """
        if self._closed:
            raise RuntimeError("Event source is closed")
        self._queue.put_nowait(event)

    async def subscribe(self, callback: EventCallback) -> None:
        """Deliver queued events until the source is closed.

        Events published before ``close()`` are still delivered.

        Args:
            callback: Invoked with ``(kind, path, identifier)``.
        """
        while True:
            event = await self._queue.get()
            if event is None:
                break
            try:
                await callback(event.kind, event.path, event.identifier)
            except Exception:
                logger.exception("Failed to handle a %s event", event.kind)

    async def close(self) -> None:
        """Stop the subscription after the queued events."""
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(None)

    @property
    def pending(self) -> int:
        """Return the number of events waiting for delivery."""
        return self._queue.qsize()
