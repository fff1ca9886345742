"""In-memory metadata index implementation."""

from collections.abc import Mapping

from cachepurge.core.entities.metadata_entry import MetadataEntry
from cachepurge.core.exceptions import MetadataQueryError


class InMemoryMetadataIndex:
    """Metadata index backed by a dictionary.

    Maps storage paths to their metadata attributes. Suitable for
    tests and for running without a storage backend.
    """

    def __init__(
        self,
        entries: Mapping[str, Mapping[str, str]] | None = None,
    ) -> None:
        """Initialize the index.

        Args:
            entries: Optional initial mapping of path to attributes.
        """
        self._entries: dict[str, dict[str, str]] = {
            path: dict(attributes) for path, attributes in (entries or {}).items()
        }
        self._closed = False
        self._searches = 0

    def add(self, path: str, attributes: Mapping[str, str]) -> None:
        """Add or update the attributes of an entry.

        Args:
            path: The entry's canonical path.
            attributes: Attributes to set on the entry.
        """
        self._entries.setdefault(path, {}).update(attributes)

    def remove(self, path: str) -> bool:
        """Remove an entry.

        Args:
            path: The entry's canonical path.

        Returns:
            True if the entry existed, False otherwise.
        """
        return self._entries.pop(path, None) is not None

    async def search_by_attribute(
        self,
        name: str,
        value: str,
    ) -> list[MetadataEntry]:
        """Find entries whose attribute equals a value.

        Args:
            name: The attribute name.
            value: The attribute value to match exactly.

        Returns:
            Matching entries, sorted by path.

        Raises:
            MetadataQueryError: If the index has been closed.
        """
        if self._closed:
            raise MetadataQueryError("Metadata index is closed")

        self._searches += 1
        return [
            MetadataEntry(path=path)
            for path, attributes in sorted(self._entries.items())
            if attributes.get(name) == value
        ]

    async def close(self) -> None:
        """Close the index; later searches fail."""
        self._closed = True

    @property
    def searches(self) -> int:
        """Return the number of searches served."""
        return self._searches

    def __len__(self) -> int:
        """Return the number of entries in the index."""
        return len(self._entries)
