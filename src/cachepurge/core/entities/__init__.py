"""Domain entities for cachepurge."""

from cachepurge.core.entities.cache_target import CacheTarget
from cachepurge.core.entities.change_event import ChangeEvent
from cachepurge.core.entities.metadata_entry import MetadataEntry
from cachepurge.core.entities.purge_config import (
    PurgeConfig,
    QueueConfig,
    StorageConfig,
)
from cachepurge.core.entities.purge_request import (
    BasicCredentials,
    PurgeOutcome,
    PurgeRequest,
)

__all__ = [
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
]
