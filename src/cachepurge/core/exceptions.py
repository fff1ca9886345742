"""Exception hierarchy for cachepurge."""


class CachePurgeError(Exception):
    """Base class for all cachepurge errors."""

    pass


class ConfigurationError(CachePurgeError):
    """Raised when the process configuration is invalid or incomplete."""

    pass


class InvalidEventError(CachePurgeError):
    """Raised when a queue message cannot be turned into a ChangeEvent."""

    pass


class MetadataQueryError(CachePurgeError):
    """Raised when the storage metadata index cannot be queried."""

    pass


class InvalidTargetURLError(CachePurgeError):
    """Raised when a purge request URL cannot be parsed into a host."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Invalid purge URL '{url}': {reason}")
        self.url = url
        self.reason = reason


class PurgeTransportError(CachePurgeError):
    """Raised when a PURGE request cannot be built or delivered."""

    pass


class ServiceClosedError(CachePurgeError):
    """Raised when a closed PurgeService is used again."""

    pass
