"""Change event entity."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from cachepurge.core.exceptions import InvalidEventError


@dataclass(frozen=True)
class ChangeEvent:
    """A filesystem change notification emitted by the storage backend.

    An event names the changed entry either directly by ``path`` or by an
    opaque ``identifier`` that must be resolved through the metadata index.
    Events are consumed once and never persisted.
    """

    kind: str
    path: str = ""
    identifier: str = ""

    @property
    def is_usable(self) -> bool:
        """Check if the event carries a path or an identifier."""
        return bool(self.path) or bool(self.identifier)

    @property
    def needs_resolution(self) -> bool:
        """Check if the path must be looked up from the identifier."""
        return not self.path and bool(self.identifier)

    @classmethod
    def from_message(
        cls,
        message: Mapping[str, Any],
        default_kind: str = "",
    ) -> "ChangeEvent":
        """Create a ChangeEvent from a decoded queue message.

        Accepts ``kind`` or ``event`` for the event kind and
        ``identifier`` or ``uuid`` for the identifier.

        Args:
            message: The decoded message body.
            default_kind: Kind to use when the message does not carry one
                (e.g. the channel or routing key it arrived on).

        Returns:
            A new ChangeEvent instance.

        Raises:
            InvalidEventError: If the message is not a mapping or one of
                its fields is not a string.
        """
        if not isinstance(message, Mapping):
            raise InvalidEventError(
                f"Expected a JSON object, got {type(message).__name__}"
            )

        kind = _field(message, "kind", "event", default=default_kind)
        path = _field(message, "path")
        identifier = _field(message, "identifier", "uuid")

        return cls(kind=kind, path=path, identifier=identifier)


def _field(message: Mapping[str, Any], *names: str, default: str = "") -> str:
    for name in names:
        value = message.get(name)
        if value is None:
            continue
        if not isinstance(value, str):
            raise InvalidEventError(
                f"Field '{name}' must be a string, got {type(value).__name__}"
            )
        return value
    return default
