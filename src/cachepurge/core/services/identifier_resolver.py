"""Identifier resolver service."""

import logging

from cachepurge.core.entities.purge_config import DEFAULT_UUID_ATTRIBUTE
from cachepurge.core.exceptions import MetadataQueryError
from cachepurge.core.interfaces.metadata_index import IMetadataIndex

logger = logging.getLogger(__name__)

# Returned when an identifier does not map to exactly one path
UNRESOLVED = ""


class IdentifierResolver:
    """Maps opaque storage identifiers to canonical paths.

    Every call queries the metadata index; paths can be renamed, so
    mappings are never cached.
    """

    def __init__(
        self,
        index: IMetadataIndex,
        attribute: str = DEFAULT_UUID_ATTRIBUTE,
    ) -> None:
        """Initialize the resolver.

        Args:
            index: The storage metadata index to search.
            attribute: Metadata attribute holding the identifier.
        """
        self._index = index
        self._attribute = attribute

    @property
    def attribute(self) -> str:
        """Get the metadata attribute searched for identifiers."""
        return self._attribute

    async def resolve(self, identifier: str) -> str:
        """Resolve an identifier to the path of the single matching entry.

        Zero matches, several matches and query errors all yield the
        empty-string sentinel; they are not distinguished here.

        Args:
            identifier: The opaque identifier to look up.

        Returns:
            The canonical path, or ``UNRESOLVED`` ("").
        """
        try:
            entries = await self._index.search_by_attribute(self._attribute, identifier)
        except MetadataQueryError as e:
            logger.warning(
                "Metadata search for %s=%s failed: %s", self._attribute, identifier, e
            )
            return UNRESOLVED

        if len(entries) != 1:
            logger.warning(
                "Expected exactly one entry with %s=%s, found %d",
                self._attribute,
                identifier,
                len(entries),
            )
            return UNRESOLVED

        return entries[0].path
