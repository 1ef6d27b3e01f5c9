"""Tests for the SQLite catalog store."""

import pytest

from mod_block_catalog.core.errors import PersistenceError
from mod_block_catalog.core.types import BlockRecord
from mod_block_catalog.store import CatalogStore


def make_record(block_id: str, mod_id: str = "m1", texture64: str | None = "AAAA", **kwargs) -> BlockRecord:
    record = BlockRecord(
        blockId=block_id,
        modId=mod_id,
        blockName=None,
        jarSlug="mod",
        texture64=texture64,
        entryName=f"assets/{mod_id}/blockstates/{block_id}.json",
        variants=[],
    )
    record.update(kwargs)  # type: ignore[typeddict-item]
    return record


@pytest.fixture
def store(tmp_path):
    store = CatalogStore(tmp_path / "catalog.db")
    yield store
    store.close()


class TestReplaceAll:
    """Test whole-catalog replacement."""

    def test_round_trips_variants(self, store: CatalogStore) -> None:
        """Test that variant specs survive storage unchanged."""
        variants = [
            {"key": "facing", "type": "string", "values": ["north", "south"]},
            {"key": "age", "type": "number", "values": [0, 1.5]},
            {"key": "open", "type": "boolean"},
        ]
        store.replace_all([make_record("door", variants=variants, blockName="Door")])

        stored = store.get("door")

        assert stored is not None
        assert stored["variants"] == variants
        assert stored["blockName"] == "Door"

    def test_replaces_previous_contents(self, store: CatalogStore) -> None:
        """Test that a second batch fully replaces the first."""
        store.replace_all([make_record("a"), make_record("b")])
        committed = store.replace_all([make_record("c")])

        assert committed == 1
        assert store.count() == 1
        assert store.get("a") is None

    def test_failure_keeps_previous_catalog(self, store: CatalogStore) -> None:
        """Test that a failing row rolls back every chunk of the batch."""
        store.replace_all([make_record("old")])
        batch = [make_record("a"), make_record("b"), make_record("c"), make_record("bad", jarSlug=None)]

        with pytest.raises(PersistenceError):
            store.replace_all(batch, chunk_size=2)

        assert [r["blockId"] for r in store.all()] == ["old"]

    def test_store_usable_after_failure(self, store: CatalogStore) -> None:
        """Test that the connection is not left inside a transaction."""
        with pytest.raises(PersistenceError):
            store.replace_all([make_record("x", jarSlug=None)])

        assert store.replace_all([make_record("y")]) == 1

    def test_rejects_bad_chunk_size(self, store: CatalogStore) -> None:
        """Test that a non-positive chunk size is refused."""
        with pytest.raises(ValueError):
            store.replace_all([], chunk_size=0)

    def test_same_block_in_two_mods(self, store: CatalogStore) -> None:
        """Test that (blockId, modId) is the key, not blockId alone."""
        store.replace_all([make_record("door", "m1"), make_record("door", "m2")])

        assert store.count() == 2
        assert store.get("door", "m2")["modId"] == "m2"
        assert store.get("door")["modId"] == "m1"


class TestQueries:
    """Test read queries."""

    def test_find_by_prefix(self, store: CatalogStore) -> None:
        """Test case-insensitive prefix lookup."""
        store.replace_all([make_record("door"), make_record("doorframe"), make_record("window")])

        assert [r["blockId"] for r in store.find_by_prefix("DOOR")] == ["door", "doorframe"]
        assert store.find_by_prefix("door", limit=1)[0]["blockId"] == "door"

    def test_prefix_wildcards_are_literal(self, store: CatalogStore) -> None:
        """Test that % and _ in the prefix match only themselves."""
        store.replace_all([make_record("oak_log"), make_record("oakxlog"), make_record("stone")])

        assert [r["blockId"] for r in store.find_by_prefix("oak_")] == ["oak_log"]
        assert store.find_by_prefix("%") == []

    def test_textured_only(self, store: CatalogStore) -> None:
        """Test that listing skips blocks without a texture and keeps order."""
        store.replace_all(
            [make_record("c"), make_record("a", texture64=None), make_record("b")]
        )

        assert [r["blockId"] for r in store.textured()] == ["c", "b"]
        assert [r["blockId"] for r in store.textured(limit=1)] == ["c"]

    def test_persists_across_connections(self, tmp_path) -> None:
        """Test that a committed catalog survives reopening."""
        path = tmp_path / "catalog.db"
        first = CatalogStore(path)
        first.replace_all([make_record("door")])
        first.close()

        second = CatalogStore(path)
        try:
            assert second.get("door") is not None
        finally:
            second.close()
