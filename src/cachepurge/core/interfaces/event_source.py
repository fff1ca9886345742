"""Event source interface."""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

# handle(kind, path, identifier); the return value is ignored
EventCallback = Callable[[str, str, str], Awaitable[Any]]


class IEventSource(Protocol):
    """Contract for change-notification subscriptions.

    A source pushes every received message to the callback, passing
    the raw fields through without interpretation. Delivery may be
    concurrent across messages and there is no backpressure.
    """

    async def subscribe(self, callback: EventCallback) -> None:
        """Deliver events to the callback until the source is closed.

        Args:
            callback: Invoked once per received event with
                ``(kind, path, identifier)``.
        """
        ...

    async def close(self) -> None:
        """Stop the subscription and release the connection."""
        ...
