"""Domain services for cachepurge."""

from cachepurge.core.services.event_handler import ChangeEventHandler
from cachepurge.core.services.identifier_resolver import (
    UNRESOLVED,
    IdentifierResolver,
)
from cachepurge.core.services.purge_dispatcher import PurgeDispatcher
from cachepurge.core.services.purge_service import PurgeService
from cachepurge.core.services.target_resolver import TargetResolver

__all__ = [
    "IdentifierResolver",
    "UNRESOLVED",
    "TargetResolver",
    "PurgeDispatcher",
    "ChangeEventHandler",
    "PurgeService",
]
