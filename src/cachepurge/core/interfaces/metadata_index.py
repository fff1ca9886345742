"""Metadata index interface."""

from typing import Protocol

from cachepurge.core.entities.metadata_entry import MetadataEntry


class IMetadataIndex(Protocol):
    """Contract for the storage backend's metadata search.

    Used to map an opaque identifier attached to a storage entry
    back to the entry's current canonical path.
    """

    async def search_by_attribute(
        self,
        name: str,
        value: str,
    ) -> list[MetadataEntry]:
        """Find entries whose metadata attribute equals a value.

        Args:
            name: The metadata attribute name (e.g. ``ipc_UUID``).
            value: The attribute value to match exactly.

        Returns:
            All matching entries, possibly empty.

        Raises:
            MetadataQueryError: If the index cannot be queried.
        """
        ...

    async def close(self) -> None:
        """Release the connection to the storage backend."""
        ...
