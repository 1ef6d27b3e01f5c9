"""Tests for the fuzzy search index."""

from mod_block_catalog.core.types import BlockRecord
from mod_block_catalog.search import SearchIndex


def record(block_id: str, name: str | None = None) -> BlockRecord:
    return BlockRecord(
        blockId=block_id,
        modId="m1",
        blockName=name,
        jarSlug="mod",
        texture64="AAAA",
        entryName=f"assets/m1/blockstates/{block_id}.json",
        variants=[],
    )


class TestSearchIndex:
    """Test ranking and rebuild behavior."""

    def test_matches_display_name(self) -> None:
        """Test that a typo still finds the block by name."""
        index = SearchIndex()
        index.rebuild([record("door", "Wooden Door"), record("cobblestone", "Cobblestone")])

        results = index.search("woden door")

        assert results[0]["blockId"] == "door"

    def test_matches_block_id(self) -> None:
        """Test that blocks without a name are found by id."""
        index = SearchIndex()
        index.rebuild([record("oak_trapdoor"), record("granite")])

        assert [r["blockId"] for r in index.search("trapdoor")] == ["oak_trapdoor"]

    def test_block_listed_once(self) -> None:
        """Test that matching on both name and id does not duplicate a block."""
        index = SearchIndex()
        index.rebuild([record("door", "Door")])

        assert len(index.search("door")) == 1

    def test_limit(self) -> None:
        """Test that results are capped."""
        index = SearchIndex()
        index.rebuild([record(f"door_{i}") for i in range(10)])

        assert len(index.search("door", limit=3)) == 3

    def test_no_match(self) -> None:
        """Test that unrelated queries return nothing."""
        index = SearchIndex()
        index.rebuild([record("door", "Wooden Door")])

        assert index.search("qqqqzzzz") == []

    def test_rebuild_replaces(self) -> None:
        """Test that a rebuild drops previously indexed blocks."""
        index = SearchIndex()
        index.rebuild([record("door")])
        index.rebuild([record("window")])

        assert len(index) == 1
        assert index.search("door") == []

    def test_clear(self) -> None:
        """Test that clearing empties the index."""
        index = SearchIndex()
        index.add_many([record("door")])
        index.clear()

        assert len(index) == 0
