"""Infrastructure layer implementations for cachepurge."""

from cachepurge.infrastructure.event_sources import InMemoryEventSource
from cachepurge.infrastructure.metadata import InMemoryMetadataIndex
from cachepurge.infrastructure.transports import HttpxPurgeTransport

__all__ = [
    "HttpxPurgeTransport",
    "InMemoryEventSource",
    "InMemoryMetadataIndex",
]
