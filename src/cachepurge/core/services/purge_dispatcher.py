"""Purge dispatcher - fans a purge out to every cache target.

Each target is purged on its own asyncio task. Failures are isolated
per target: a malformed URL, a transport error or a non-2xx response
on one node never delays or cancels the others, and ``purge`` itself
never raises. Per-target results are logged and returned as
``PurgeOutcome`` records in target order.
"""

import asyncio
import logging
from collections.abc import Sequence

from cachepurge.core.entities.cache_target import CacheTarget
from cachepurge.core.entities.purge_request import BasicCredentials, PurgeOutcome
from cachepurge.core.exceptions import InvalidTargetURLError, PurgeTransportError
from cachepurge.core.interfaces.purge_transport import IPurgeTransport
from cachepurge.core.services.target_resolver import TargetResolver

logger = logging.getLogger(__name__)


class PurgeDispatcher:
    """Propagates cache invalidations to all configured cache nodes.

    The dispatcher is reentrant: targets and credentials are read-only
    after construction, and all per-purge state is local to the call.
    """

    def __init__(
        self,
        targets: Sequence[CacheTarget],
        transport: IPurgeTransport,
        credentials: BasicCredentials | None = None,
        target_resolver: TargetResolver | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            targets: The cache targets, in configuration order.
            transport: Transport used to deliver PURGE requests.
            credentials: Optional Basic auth credentials for every request.
            target_resolver: Resolver for request URLs and hosts.
        """
        self._targets = tuple(targets)
        self._transport = transport
        self._credentials = credentials
        self._target_resolver = target_resolver or TargetResolver()

    @property
    def targets(self) -> tuple[CacheTarget, ...]:
        """Get the configured cache targets."""
        return self._targets

    async def purge(self, path: str) -> list[PurgeOutcome]:
        """Purge a path on every cache target concurrently.

        An empty path is not guarded against: the bare prefixes are
        purged.

        Args:
            path: The canonical storage path.

        Returns:
            One outcome per target, in target order.
        """
        logger.info("Purging a cache for %s", path)

        results = await asyncio.gather(
            *(self._purge_target(target, path) for target in self._targets),
            return_exceptions=True,
        )

        outcomes: list[PurgeOutcome] = []
        for target, result in zip(self._targets, results):
            if isinstance(result, PurgeOutcome):
                outcomes.append(result)
                continue
            if not isinstance(result, Exception):
                # CancelledError and other non-Exception signals
                raise result

            url = target.request_url(path)
            logger.error(
                "Unexpected error purging url '%s'",
                url,
                exc_info=result,
            )
            outcomes.append(
                PurgeOutcome(
                    target=target,
                    url=url,
                    error=f"{type(result).__name__}: {result}",
                )
            )

        return outcomes

    async def _purge_target(self, target: CacheTarget, path: str) -> PurgeOutcome:
        """Send the PURGE for one target and record its outcome."""
        try:
            request = self._target_resolver.build_request(
                target, path, self._credentials
            )
        except InvalidTargetURLError as e:
            logger.error("Failed to parse a request '%s': %s", e.url, e.reason)
            return PurgeOutcome(target=target, url=e.url, error=str(e))

        logger.info(
            "Sending a PURGE request to '%s' for host '%s'", request.url, request.host
        )

        try:
            status_code = await self._transport.send(request)
        except PurgeTransportError as e:
            logger.error(
                "Failed to make a PURGE request to url '%s' for host '%s': %s",
                request.url,
                request.host,
                e,
            )
            return PurgeOutcome(
                target=target, url=request.url, host=request.host, error=str(e)
            )

        outcome = PurgeOutcome(
            target=target,
            url=request.url,
            host=request.host,
            status_code=status_code,
        )
        if not outcome.succeeded:
            logger.error(
                "Unexpected response for a PURGE request to url '%s' "
                "for host '%s' - %d",
                request.url,
                request.host,
                status_code,
            )
            return outcome

        logger.info("PURGE accepted by '%s' (status %d)", request.url, status_code)
        return outcome
