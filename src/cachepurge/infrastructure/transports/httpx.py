"""httpx-based PURGE transport."""

import httpx

from cachepurge.core.entities.purge_request import PurgeRequest
from cachepurge.core.exceptions import PurgeTransportError


class HttpxPurgeTransport:
    """Delivers PURGE requests with an ``httpx.AsyncClient``.

    The client is shared by all concurrent requests and pools
    connections per cache node.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            client: Optional client to use. A client passed in is not
                closed by ``close()``.
            timeout: Request timeout in seconds for a client created here.
                If None, httpx's default timeout applies.
        """
        self._owns_client = client is None
        if client is None:
            if timeout is None:
                client = httpx.AsyncClient()
            else:
                client = httpx.AsyncClient(timeout=timeout)
        self._client = client

    async def send(self, request: PurgeRequest) -> int:
        """Send a PURGE request and wait for the response.

        Args:
            request: The request to deliver.

        Returns:
            The HTTP status code of the response.

        Raises:
            PurgeTransportError: If the URL is invalid or the round
                trip fails.
        """
        auth = None
        if request.credentials is not None:
            auth = httpx.BasicAuth(
                request.credentials.username,
                request.credentials.password,
            )

        try:
            response = await self._client.request(
                request.METHOD,
                request.url,
                headers=request.headers(),
                auth=auth,
            )
        except httpx.InvalidURL as e:
            raise PurgeTransportError(f"Failed to create a request: {e}") from e
        except httpx.HTTPError as e:
            raise PurgeTransportError(f"{type(e).__name__}: {e}") from e

        return response.status_code

    async def close(self) -> None:
        """Close the underlying client if it was created here."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpxPurgeTransport":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.close()
