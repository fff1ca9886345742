"""Core domain layer for cachepurge."""

from cachepurge.core.entities import (
    CacheTarget,
    ChangeEvent,
    PurgeConfig,
    PurgeOutcome,
    PurgeRequest,
)
from cachepurge.core.interfaces import (
    IEventSource,
    IMetadataIndex,
    IPurgeTransport,
)
from cachepurge.core.services import (
    ChangeEventHandler,
    IdentifierResolver,
    PurgeDispatcher,
    PurgeService,
    TargetResolver,
)

__all__ = [
    # Entities
    "CacheTarget",
    "ChangeEvent",
    "PurgeConfig",
    "PurgeOutcome",
    "PurgeRequest",
    # Interfaces
    "IEventSource",
    "IMetadataIndex",
    "IPurgeTransport",
    # Services
    "IdentifierResolver",
    "TargetResolver",
    "PurgeDispatcher",
    "ChangeEventHandler",
    "PurgeService",
]
