"""PURGE transport implementations."""

from cachepurge.infrastructure.transports.httpx import HttpxPurgeTransport

__all__ = ["HttpxPurgeTransport"]
