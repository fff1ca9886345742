"""Builds a production PurgeService from configuration."""

import logging

from cachepurge.core.entities.purge_config import PurgeConfig
from cachepurge.core.services.purge_service import PurgeService
from cachepurge.infrastructure.transports.httpx import HttpxPurgeTransport

logger = logging.getLogger(__name__)


def build_service(config: PurgeConfig) -> PurgeService:
    """Connect to iRODS and Redis and assemble the purge service.

    The iRODS and Redis adapters are imported here so the core package
    works without the optional extras installed.

    Args:
        config: The service configuration.

    Returns:
        A PurgeService owning its connections.
    """
    from cachepurge.infrastructure.event_sources.redis import RedisEventSource
    from cachepurge.infrastructure.metadata.irods import IrodsMetadataIndex

    logger.info(
        "Connecting to iRODS at %s:%d", config.storage.host, config.storage.port
    )
    metadata_index = IrodsMetadataIndex.from_config(config.storage)

    logger.info("Connecting to the message queue at %s", config.queue.url)
    event_source = RedisEventSource(
        url=config.queue.url,
        channels=config.queue.channels,
    )

    transport = HttpxPurgeTransport(timeout=config.request_timeout)

    return PurgeService(
        config=config,
        metadata_index=metadata_index,
        event_source=event_source,
        transport=transport,
    )
