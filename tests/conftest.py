"""Pytest configuration for cachepurge tests."""

import asyncio

import pytest

from cachepurge.core.entities.purge_request import PurgeRequest


class RecordingTransport:
    """Fake PURGE transport that records every request.

    ``responses`` maps a request URL to a status code or to an exception
    instance to raise; unknown URLs answer ``default_status``. ``delays``
    maps a URL to seconds to sleep before answering.
    """

    def __init__(
        self,
        responses: dict[str, int | BaseException] | None = None,
        default_status: int = 200,
        delays: dict[str, float] | None = None,
    ) -> None:
        self.responses = responses or {}
        self.default_status = default_status
        self.delays = delays or {}
        self.requests: list[PurgeRequest] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    async def send(self, request: PurgeRequest) -> int:
        self.requests.append(request)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(request.url, 0))
            response = self.responses.get(request.url, self.default_status)
            if isinstance(response, BaseException):
                raise response
            return response
        finally:
            self.in_flight -= 1

    async def close(self) -> None:
        self.closed = True

    @property
    def urls(self) -> list[str]:
        return [request.url for request in self.requests]


@pytest.fixture
def transport() -> RecordingTransport:
    """Create a transport that accepts every purge."""
    return RecordingTransport()
