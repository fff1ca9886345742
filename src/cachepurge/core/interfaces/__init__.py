"""Core interfaces (Protocol classes) for cachepurge."""

from cachepurge.core.interfaces.event_source import EventCallback, IEventSource
from cachepurge.core.interfaces.metadata_index import IMetadataIndex
from cachepurge.core.interfaces.purge_transport import IPurgeTransport

__all__ = [
    "EventCallback",
    "IEventSource",
    "IMetadataIndex",
    "IPurgeTransport",
]
