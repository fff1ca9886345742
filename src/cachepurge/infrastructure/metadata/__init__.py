"""Metadata index implementations.

``IrodsMetadataIndex`` lives in ``cachepurge.infrastructure.metadata.irods``
and needs the ``irods`` extra.
"""

from cachepurge.infrastructure.metadata.memory import InMemoryMetadataIndex

__all__ = ["InMemoryMetadataIndex"]
