"""Change event handler - the callback handed to event sources."""

import logging

from cachepurge.core.entities.change_event import ChangeEvent
from cachepurge.core.entities.purge_request import PurgeOutcome
from cachepurge.core.services.identifier_resolver import IdentifierResolver
from cachepurge.core.services.purge_dispatcher import PurgeDispatcher

logger = logging.getLogger(__name__)


class ChangeEventHandler:
    """Turns change notifications into cache purges.

    Events carrying a path are purged directly. Events carrying only an
    identifier are resolved through the metadata index first; a failed
    resolution still purges, with an empty path. Events with neither
    are dropped.
    """

    def __init__(
        self,
        resolver: IdentifierResolver,
        dispatcher: PurgeDispatcher,
    ) -> None:
        self._resolver = resolver
        self._dispatcher = dispatcher

    async def handle(self, kind: str, path: str, identifier: str) -> list[PurgeOutcome]:
        """Handle one change notification.

        Matches the ``EventCallback`` signature; event sources ignore
        the returned outcomes.

        Args:
            kind: The event kind (e.g. ``data-object.mod``).
            path: The changed entry's path, or "".
            identifier: The changed entry's identifier, or "".

        Returns:
            The per-target purge outcomes, empty if the event was dropped.
        """
        return await self.handle_event(
            ChangeEvent(kind=kind, path=path, identifier=identifier)
        )

    async def handle_event(self, event: ChangeEvent) -> list[PurgeOutcome]:
        """Handle a ChangeEvent. See ``handle``."""
        if not event.is_usable:
            logger.debug("Dropping a %s event without path or identifier", event.kind)
            return []

        path = event.path
        if event.needs_resolution:
            path = await self._resolver.resolve(event.identifier)

        logger.info("Received a %s event on file %s", event.kind, path)
        return await self._dispatcher.purge(path)
