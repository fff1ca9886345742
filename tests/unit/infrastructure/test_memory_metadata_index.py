"""Tests for InMemoryMetadataIndex."""

import pytest

from cachepurge.core.entities import MetadataEntry
from cachepurge.core.exceptions import MetadataQueryError
from cachepurge.infrastructure.metadata.memory import InMemoryMetadataIndex


class TestInMemoryMetadataIndex:
    """Tests for InMemoryMetadataIndex."""

    @pytest.fixture
    def index(self) -> InMemoryMetadataIndex:
        return InMemoryMetadataIndex(
            {
                "/zone/b": {"ipc_UUID": "u1", "owner": "alice"},
                "/zone/a": {"ipc_UUID": "u1"},
                "/zone/c": {"ipc_UUID": "u2"},
            }
        )

    @pytest.mark.asyncio
    async def test_search_exact_match(self, index: InMemoryMetadataIndex) -> None:
        assert await index.search_by_attribute("ipc_UUID", "u2") == [
            MetadataEntry(path="/zone/c")
        ]

    @pytest.mark.asyncio
    async def test_search_sorted_by_path(self, index: InMemoryMetadataIndex) -> None:
        entries = await index.search_by_attribute("ipc_UUID", "u1")

        assert [entry.path for entry in entries] == ["/zone/a", "/zone/b"]

    @pytest.mark.asyncio
    async def test_search_no_match(self, index: InMemoryMetadataIndex) -> None:
        assert await index.search_by_attribute("ipc_UUID", "u") == []
        assert await index.search_by_attribute("missing", "u1") == []

    @pytest.mark.asyncio
    async def test_add_and_remove(self, index: InMemoryMetadataIndex) -> None:
        index.add("/zone/d", {"ipc_UUID": "u3"})
        assert len(index) == 4
        assert await index.search_by_attribute("ipc_UUID", "u3") == [
            MetadataEntry(path="/zone/d")
        ]

        assert index.remove("/zone/d") is True
        assert index.remove("/zone/d") is False
        assert await index.search_by_attribute("ipc_UUID", "u3") == []

    @pytest.mark.asyncio
    async def test_add_updates_attributes(self, index: InMemoryMetadataIndex) -> None:
        index.add("/zone/c", {"ipc_UUID": "u9"})

        assert await index.search_by_attribute("ipc_UUID", "u2") == []
        assert await index.search_by_attribute("ipc_UUID", "u9") == [
            MetadataEntry(path="/zone/c")
        ]

    @pytest.mark.asyncio
    async def test_search_after_close(self, index: InMemoryMetadataIndex) -> None:
        await index.close()

        with pytest.raises(MetadataQueryError):
            await index.search_by_attribute("ipc_UUID", "u1")
