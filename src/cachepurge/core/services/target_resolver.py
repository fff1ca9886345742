"""Target resolver service.

Decides how each cache target is addressed: which URL a PURGE goes
to and which ``Host`` the request presents.
"""

from urllib.parse import urlsplit

from cachepurge.core.entities.cache_target import CacheTarget
from cachepurge.core.entities.purge_request import BasicCredentials, PurgeRequest
from cachepurge.core.exceptions import InvalidTargetURLError


class TargetResolver:
    """Resolves request URLs and host names for cache targets."""

    def resolve_host(self, target: CacheTarget, request_url: str) -> str:
        """Determine the host a purge request is addressed to.

        A configured override is returned verbatim and bypasses the
        URL's own host. Otherwise the host component (including an
        explicit port) is parsed from the request URL.

        Args:
            target: The cache target.
            request_url: The fully formed request URL (prefix + path).

        Returns:
            The host name to present.

        Raises:
            InvalidTargetURLError: If there is no override and the URL
                cannot be parsed or has no host.
        """
        if target.host_override:
            return target.host_override

        try:
            parts = urlsplit(request_url)
            # Accessing port validates it
            parts.port
        except ValueError as e:
            raise InvalidTargetURLError(request_url, str(e)) from e

        host = parts.netloc.rpartition("@")[2]
        if not host:
            raise InvalidTargetURLError(request_url, "no host component")
        return host

    def build_request(
        self,
        target: CacheTarget,
        path: str,
        credentials: BasicCredentials | None = None,
    ) -> PurgeRequest:
        """Build the PURGE request for one target and path.

        Args:
            target: The cache target.
            path: The canonical storage path, appended unmodified.
            credentials: Optional Basic auth credentials.

        Returns:
            The request to send.

        Raises:
            InvalidTargetURLError: If the host cannot be determined.
        """
        url = target.request_url(path)
        host = self.resolve_host(target, url)
        return PurgeRequest(
            url=url,
            host=host,
            host_override=bool(target.host_override),
            credentials=credentials,
        )
