"""Metadata entry entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MetadataEntry:
    """A storage entry matched by a metadata search."""

    path: str
