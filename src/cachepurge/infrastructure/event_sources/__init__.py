"""Event source implementations.

``RedisEventSource`` lives in ``cachepurge.infrastructure.event_sources.redis``
and needs the ``redis`` extra.
"""

from cachepurge.infrastructure.event_sources.memory import InMemoryEventSource

__all__ = ["InMemoryEventSource"]
