"""Purge service configuration entities."""

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from cachepurge.core.entities.cache_target import CacheTarget
from cachepurge.core.entities.purge_request import BasicCredentials
from cachepurge.core.exceptions import ConfigurationError

DEFAULT_UUID_ATTRIBUTE = "ipc_UUID"
DEFAULT_IRODS_PORT = 1247


@dataclass
class StorageConfig:
    """Connection parameters of the storage backend (iRODS).

    The username and password double as the Basic auth credentials
    presented to the cache nodes.
    """

    host: str = ""
    port: int = DEFAULT_IRODS_PORT
    zone: str = ""
    username: str = ""
    password: str = field(default="", repr=False)
    uuid_attribute: str = DEFAULT_UUID_ATTRIBUTE

    @property
    def credentials(self) -> BasicCredentials:
        """Get Basic auth credentials for the storage account."""
        return BasicCredentials(username=self.username, password=self.password)


@dataclass
class QueueConfig:
    """Message queue subscription parameters."""

    url: str = "redis://localhost:6379"
    channels: tuple[str, ...] = ("irods.fs",)

    def __post_init__(self) -> None:
        """Normalize channels to a tuple."""
        if isinstance(self.channels, str):
            self.channels = (self.channels,)
        self.channels = tuple(self.channels)
        if not self.channels:
            raise ConfigurationError("At least one queue channel is required")


@dataclass
class PurgeConfig:
    """Purge service configuration.

    Targets are configured once at startup and never change for the
    lifetime of the process.
    """

    targets: tuple[CacheTarget, ...] = ()
    storage: StorageConfig = field(default_factory=StorageConfig)
    queue: QueueConfig = field(default_factory=QueueConfig)

    # Seconds; None keeps the HTTP transport's default
    request_timeout: float | None = None

    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Freeze the target list and validate it."""
        self.targets = tuple(self.targets)
        if not self.targets:
            raise ConfigurationError("At least one cache target is required")
        for target in self.targets:
            if not target.url_prefix:
                raise ConfigurationError("Cache target URL prefix must not be empty")
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise ConfigurationError("Request timeout must be positive")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "PurgeConfig":
        """Load configuration from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            A new PurgeConfig instance.

        Raises:
            ConfigurationError: If a value is missing or malformed.
        """
        env = os.environ if environ is None else environ

        targets = CacheTarget.pair(
            _split(env.get("PURGE_CACHE_URLS", "")),
            _split(env.get("PURGE_CACHE_HOSTS", ""), keep_empty=True),
        )

        storage = StorageConfig(
            host=env.get("IRODS_HOST", ""),
            port=_to_int(env.get("IRODS_PORT"), DEFAULT_IRODS_PORT, "IRODS_PORT"),
            zone=env.get("IRODS_ZONE", ""),
            username=env.get("IRODS_USERNAME", ""),
            password=env.get("IRODS_PASSWORD", ""),
            uuid_attribute=env.get("IRODS_UUID_ATTRIBUTE") or DEFAULT_UUID_ATTRIBUTE,
        )

        queue = QueueConfig()
        if env.get("REDIS_URL"):
            queue.url = env["REDIS_URL"]
        channels = _split(env.get("PURGE_CHANNELS", ""))
        if channels:
            queue.channels = tuple(channels)

        return cls(
            targets=targets,
            storage=storage,
            queue=queue,
            request_timeout=_to_float(
                env.get("PURGE_REQUEST_TIMEOUT"), "PURGE_REQUEST_TIMEOUT"
            ),
            log_level=env.get("LOG_LEVEL") or "INFO",
        )

    @classmethod
    def from_file(cls, path: str | Path) -> "PurgeConfig":
        """Load configuration from a TOML file.

        Targets are read from ``[[targets]]`` tables (``url_prefix`` and
        optional ``host``) or from the ``url_prefixes`` and
        ``host_overrides`` lists.

        Args:
            path: Path to the TOML file.

        Returns:
            A new PurgeConfig instance.

        Raises:
            ConfigurationError: If the file cannot be read or is invalid.
        """
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(f"Failed to read config file {path}: {e}") from e

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PurgeConfig":
        """Create configuration from a parsed mapping.

        Args:
            data: Parsed configuration (e.g. a TOML document).

        Returns:
            A new PurgeConfig instance.

        Raises:
            ConfigurationError: If a value is missing or malformed.
        """
        if "targets" in data:
            targets = tuple(_target_from_table(table) for table in data["targets"])
        else:
            targets = CacheTarget.pair(
                list(data.get("url_prefixes", [])),
                list(data.get("host_overrides", [])),
            )

        storage_data = dict(data.get("storage", {}))
        try:
            storage = StorageConfig(**storage_data)
            queue = QueueConfig(**dict(data.get("queue", {})))
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration section: {e}") from e
        if not isinstance(storage.port, int):
            raise ConfigurationError("storage.port must be an integer")

        timeout = data.get("request_timeout")
        return cls(
            targets=targets,
            storage=storage,
            queue=queue,
            request_timeout=_to_float(
                str(timeout) if timeout is not None else None, "request_timeout"
            ),
            log_level=data.get("log_level", "INFO"),
        )


def _target_from_table(table: Mapping[str, Any]) -> CacheTarget:
    if "url_prefix" not in table:
        raise ConfigurationError("Each [[targets]] entry needs a url_prefix")
    return CacheTarget(
        url_prefix=table["url_prefix"],
        host_override=table.get("host") or None,
    )


def _split(value: str, keep_empty: bool = False) -> list[str]:
    if not value.strip():
        return []
    items = [item.strip() for item in value.split(",")]
    if keep_empty:
        return items
    return [item for item in items if item]


def _to_int(value: str | None, default: int, name: str) -> int:
    if not value:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got '{value}'") from e


def _to_float(value: str | None, name: str) -> float | None:
    if not value:
        return None
    try:
        return float(value)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got '{value}'") from e
