"""cachepurge - Propagate storage change events to reverse-proxy caches.

Listens for filesystem-change notifications from a storage backend,
resolves each one to a canonical path and sends an HTTP ``PURGE`` to
every configured cache node concurrently. One node failing never
affects the others.

Example:
    from cachepurge import (
        CacheTarget,
        ChangeEvent,
        PurgeConfig,
        PurgeService,
        HttpxPurgeTransport,
        InMemoryEventSource,
        InMemoryMetadataIndex,
    )

    config = PurgeConfig(
        targets=CacheTarget.pair(
            ["http://cache1/", "http://cache2/"],
            ["edge.example"],  # Host override for cache1 only
        ),
    )
    source = InMemoryEventSource()
    service = PurgeService(
        config=config,
        metadata_index=InMemoryMetadataIndex(),
        event_source=source,
        transport=HttpxPurgeTransport(),
    )

    source.publish(ChangeEvent(kind="data-object.mod", path="/zone/home/a.txt"))
    await source.close()  # run() returns once the queue is drained
    async with service:
        await service.run()

Purging directly:
    outcomes = await service.dispatcher.purge("/zone/home/a.txt")
    failed = [o for o in outcomes if not o.succeeded]
"""

from cachepurge.core.entities import (
    BasicCredentials,
    CacheTarget,
    ChangeEvent,
    MetadataEntry,
    PurgeConfig,
    PurgeOutcome,
    PurgeRequest,
    QueueConfig,
    StorageConfig,
)
from cachepurge.core.exceptions import (
    CachePurgeError,
    ConfigurationError,
    InvalidEventError,
    InvalidTargetURLError,
    MetadataQueryError,
    PurgeTransportError,
    ServiceClosedError,
)
from cachepurge.core.interfaces import (
    EventCallback,
    IEventSource,
    IMetadataIndex,
    IPurgeTransport,
)
from cachepurge.core.services import (
    UNRESOLVED,
    ChangeEventHandler,
    IdentifierResolver,
    PurgeDispatcher,
    PurgeService,
    TargetResolver,
)
from cachepurge.infrastructure import (
    HttpxPurgeTransport,
    InMemoryEventSource,
    InMemoryMetadataIndex,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "ChangeEvent",
    "CacheTarget",
    "MetadataEntry",
    "BasicCredentials",
    "PurgeRequest",
    "PurgeOutcome",
    # Configuration
    "PurgeConfig",
    "StorageConfig",
    "QueueConfig",
    # Errors
    "CachePurgeError",
    "ConfigurationError",
    "InvalidEventError",
    "InvalidTargetURLError",
    "MetadataQueryError",
    "PurgeTransportError",
    "ServiceClosedError",
    # Core interfaces
    "EventCallback",
    "IEventSource",
    "IMetadataIndex",
    "IPurgeTransport",
    # Core services
    "IdentifierResolver",
    "UNRESOLVED",
    "TargetResolver",
    "PurgeDispatcher",
    "ChangeEventHandler",
    "PurgeService",
    # Infrastructure implementations
    "HttpxPurgeTransport",
    "InMemoryEventSource",
    "InMemoryMetadataIndex",
]
