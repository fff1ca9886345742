"""Cache target entity."""

from collections.abc import Sequence
from dataclasses import dataclass

from cachepurge.core.exceptions import ConfigurationError


@dataclass(frozen=True)
class CacheTarget:
    """One reverse-proxy cache node.

    Addressed by a URL prefix and an optional virtual-host name that is
    sent verbatim as the ``Host`` header instead of the URL's own host.
    """

    url_prefix: str
    host_override: str | None = None

    @property
    def normalized_prefix(self) -> str:
        """Get the URL prefix with all trailing slashes stripped."""
        return self.url_prefix.rstrip("/")

    def request_url(self, path: str) -> str:
        """Build the purge URL for a storage path.

        The path is appended unmodified: no slash is inserted and no
        other normalization happens.

        Args:
            path: The canonical storage path (may be empty).

        Returns:
            The full request URL.
        """
        return self.normalized_prefix + path

    @classmethod
    def pair(
        cls,
        url_prefixes: Sequence[str],
        host_overrides: Sequence[str] | None = None,
    ) -> tuple["CacheTarget", ...]:
        """Build targets from parallel prefix and override lists.

        Override ``i`` applies to prefix ``i``. The override list may be
        shorter than the prefix list; missing or empty overrides mean the
        host is derived from the URL.

        Args:
            url_prefixes: Ordered cache URL prefixes.
            host_overrides: Ordered, possibly shorter, host overrides.

        Returns:
            A tuple of CacheTarget records, in prefix order.

        Raises:
            ConfigurationError: If there are more overrides than prefixes.
        """
        overrides = list(host_overrides or [])
        if len(overrides) > len(url_prefixes):
            raise ConfigurationError(
                f"Got {len(overrides)} host overrides for "
                f"{len(url_prefixes)} cache URL prefixes"
            )

        targets = []
        for index, prefix in enumerate(url_prefixes):
            override = overrides[index] if index < len(overrides) else None
            targets.append(cls(url_prefix=prefix, host_override=override or None))
        return tuple(targets)
