"""Purge service - owns the collaborators and runs the subscription."""

import logging

from cachepurge.core.entities.purge_config import PurgeConfig
from cachepurge.core.exceptions import ServiceClosedError
from cachepurge.core.interfaces.event_source import IEventSource
from cachepurge.core.interfaces.metadata_index import IMetadataIndex
from cachepurge.core.interfaces.purge_transport import IPurgeTransport
from cachepurge.core.services.event_handler import ChangeEventHandler
from cachepurge.core.services.identifier_resolver import IdentifierResolver
from cachepurge.core.services.purge_dispatcher import PurgeDispatcher

logger = logging.getLogger(__name__)


class PurgeService:
    """Domain service wiring event source, resolver and dispatcher.

    The service owns its collaborators: they are acquired by the caller
    before construction and released exactly once by ``close()`` (or by
    leaving the ``async with`` block).

    Example:
        async with PurgeService(config, index, source, transport) as service:
            await service.run()
    """

    def __init__(
        self,
        config: PurgeConfig,
        metadata_index: IMetadataIndex,
        event_source: IEventSource,
        transport: IPurgeTransport,
    ) -> None:
        """Initialize the purge service.

        Args:
            config: The service configuration.
            metadata_index: Storage metadata index for identifier lookups.
            event_source: Subscription delivering change notifications.
            transport: Transport for outbound PURGE requests.
        """
        self._config = config
        self._metadata_index = metadata_index
        self._event_source = event_source
        self._transport = transport
        self._closed = False

        self._resolver = IdentifierResolver(
            metadata_index,
            attribute=config.storage.uuid_attribute,
        )
        self._dispatcher = PurgeDispatcher(
            targets=config.targets,
            transport=transport,
            credentials=config.storage.credentials,
        )
        self._handler = ChangeEventHandler(self._resolver, self._dispatcher)

    @property
    def config(self) -> PurgeConfig:
        """Get the service configuration."""
        return self._config

    @property
    def handler(self) -> ChangeEventHandler:
        """Get the change event handler."""
        return self._handler

    @property
    def dispatcher(self) -> PurgeDispatcher:
        """Get the purge dispatcher."""
        return self._dispatcher

    @property
    def closed(self) -> bool:
        """Check if the service has released its resources."""
        return self._closed

    async def run(self) -> None:
        """Deliver change events to the handler until the source stops.

        Raises:
            ServiceClosedError: If the service was already closed.
            Exception: Whatever the event source raises on a fatal
                connection error, after logging it.
        """
        if self._closed:
            raise ServiceClosedError("Purge service is closed")

        logger.info(
            "Starting the purge service for %d cache target(s)",
            len(self._config.targets),
        )
        try:
            await self._event_source.subscribe(self._handler.handle)
        except Exception:
            logger.exception("Event subscription failed")
            raise

    async def close(self) -> None:
        """Release the event source, transport and metadata index once."""
        if self._closed:
            return
        self._closed = True

        logger.info("Closing the purge service")
        for name, resource in (
            ("event source", self._event_source),
            ("transport", self._transport),
            ("metadata index", self._metadata_index),
        ):
            try:
                await resource.close()
            except Exception:
                logger.exception("Failed to close the %s", name)

    async def __aenter__(self) -> "PurgeService":
        """Async context manager entry."""
        if self._closed:
            raise ServiceClosedError("Purge service is closed")
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.close()
