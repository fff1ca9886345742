"""Purge transport interface."""

from typing import Protocol

from cachepurge.core.entities.purge_request import PurgeRequest


class IPurgeTransport(Protocol):
    """Contract for delivering PURGE requests to cache nodes.

    Transports must be safe to call concurrently: the dispatcher
    sends to every cache target at the same time.
    """

    async def send(self, request: PurgeRequest) -> int:
        """Send a PURGE request and wait for the response.

        Args:
            request: The request to deliver.

        Returns:
            The HTTP status code of the response.

        Raises:
            PurgeTransportError: If the request cannot be built or
                the round trip fails.
        """
        ...

    async def close(self) -> None:
        """Release any pooled connections."""
        ...
