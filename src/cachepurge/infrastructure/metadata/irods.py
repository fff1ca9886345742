"""iRODS metadata index implementation."""

import asyncio

from irods.exception import NetworkException, iRODSException
from irods.models import Collection, CollectionMeta, DataObject, DataObjectMeta
from irods.session import iRODSSession

from cachepurge.core.entities.metadata_entry import MetadataEntry
from cachepurge.core.entities.purge_config import StorageConfig
from cachepurge.core.exceptions import MetadataQueryError


class IrodsMetadataIndex:
    """Metadata index backed by iRODS AVU queries.

    Searches both data objects and collections. python-irodsclient is
    synchronous, so queries run in a worker thread.
    """

    def __init__(self, session: iRODSSession) -> None:
        """Initialize the index.

        Args:
            session: An open iRODS session. It is cleaned up by ``close()``.
        """
        self._session = session

    @classmethod
    def from_config(cls, config: StorageConfig) -> "IrodsMetadataIndex":
        """Open an iRODS session from storage configuration.

        Args:
            config: The storage backend connection parameters.

        Returns:
            A new IrodsMetadataIndex owning the session.
        """
        session = iRODSSession(
            host=config.host,
            port=config.port,
            user=config.username,
            password=config.password,
            zone=config.zone,
        )
        return cls(session)

    async def search_by_attribute(
        self,
        name: str,
        value: str,
    ) -> list[MetadataEntry]:
        """Find data objects and collections carrying an AVU.

        Args:
            name: The AVU attribute name.
            value: The AVU value to match exactly.

        Returns:
            Matching entries; data objects first, then collections.

        Raises:
            MetadataQueryError: If the query fails or the connection
                is lost.
        """
        try:
            paths = await asyncio.to_thread(self._search, name, value)
        except (iRODSException, NetworkException, OSError) as e:
            raise MetadataQueryError(f"iRODS metadata query failed: {e}") from e

        return [MetadataEntry(path=path) for path in paths]

    def _search(self, name: str, value: str) -> list[str]:
        paths = []

        data_objects = (
            self._session.query(Collection.name, DataObject.name)
            .filter(DataObjectMeta.name == name)
            .filter(DataObjectMeta.value == value)
        )
        for row in data_objects:
            paths.append(f"{row[Collection.name]}/{row[DataObject.name]}")

        collections = (
            self._session.query(Collection.name)
            .filter(CollectionMeta.name == name)
            .filter(CollectionMeta.value == value)
        )
        for row in collections:
            paths.append(row[Collection.name])

        return paths

    async def close(self) -> None:
        """Release the iRODS session."""
        await asyncio.to_thread(self._session.cleanup)
