"""Purge request and outcome entities."""

from dataclasses import dataclass, field
from typing import ClassVar

from cachepurge.core.entities.cache_target import CacheTarget


@dataclass(frozen=True)
class BasicCredentials:
    """HTTP Basic credentials presented to the cache nodes."""

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class PurgeRequest:
    """A single outbound PURGE call.

    Ephemeral: exists only for the duration of one request to one
    cache target.

    Attributes:
        url: The full request URL (normalized prefix + path).
        host: The host the request is addressed to.
        host_override: True if ``host`` came from the target's override
            rather than from the URL.
        credentials: Optional Basic auth credentials.
    """

    METHOD: ClassVar[str] = "PURGE"

    url: str
    host: str
    host_override: bool = False
    credentials: BasicCredentials | None = None

    def headers(self) -> dict[str, str]:
        """Get the extra headers to send with the request.

        ``Host`` is always set explicitly so the wire header matches
        ``host`` verbatim, case and explicit port included.
        """
        return {"Host": self.host}


@dataclass(frozen=True)
class PurgeOutcome:
    """Result of purging one path on one cache target."""

    target: CacheTarget
    url: str
    host: str | None = None
    status_code: int | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        """Check if the target accepted the purge with a 2xx status."""
        if self.error is not None or self.status_code is None:
            return False
        return 200 <= self.status_code < 300
