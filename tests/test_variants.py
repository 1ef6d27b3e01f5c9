"""Tests for variant dimension resolution."""

import pytest

from mod_block_catalog.core.errors import UnresolvableVariantError
from mod_block_catalog.core.types import (
    BlockStateDescriptor,
    SingleVariant,
    VariantValue,
    WeightedVariants,
)
from mod_block_catalog.core.variants import (
    classify_dimension,
    collect_dimensions,
    resolve_variants,
    split_state_key,
)


def single(model: str) -> SingleVariant:
    return SingleVariant(VariantValue(model=model))


class TestSplitStateKey:
    """Test state key decomposition."""

    def test_pairs_in_order(self) -> None:
        """Test that name=value pairs keep key order."""
        assert split_state_key("facing=north,open=true") == [("facing", "north"), ("open", "true")]

    def test_part_without_value(self) -> None:
        """Test that a bare name yields an empty value and empty parts drop."""
        assert split_state_key("normal") == [("normal", "")]
        assert split_state_key("age=1,") == [("age", "1")]


class TestClassifyDimension:
    """Test dimension type inference."""

    def test_boolean(self) -> None:
        """Test that true/false dimensions are boolean."""
        assert classify_dimension("open", ["false", "true"]) == {"key": "open", "type": "boolean"}

    def test_single_boolean_value_is_boolean(self) -> None:
        """Test that a lone 'true' is still boolean, never string."""
        assert classify_dimension("lit", ["true"])["type"] == "boolean"

    def test_numbers(self) -> None:
        """Test that numeric dimensions convert and keep observed order."""
        spec = classify_dimension("age", ["3", "0", "1.5", "3.0"])
        assert spec == {"key": "age", "type": "number", "values": [3, 0, 1.5]}

    def test_mixed_values_are_strings(self) -> None:
        """Test that any non-numeric value makes the dimension a string."""
        spec = classify_dimension("mode", ["1", "two", "true"])
        assert spec == {"key": "mode", "type": "string", "values": ["1", "two", "true"]}

    def test_non_finite_is_string(self) -> None:
        """Test that nan/inf-like values are not treated as numbers."""
        assert classify_dimension("x", ["nan", "1"])["type"] == "string"
        assert classify_dimension("x", ["1e999"])["type"] == "string"


class TestCollectDimensions:
    """Test dimension union across state keys."""

    def test_union_and_dedup(self) -> None:
        """Test that each dimension appears once with all distinct values."""
        specs = collect_dimensions(
            [
                "facing=north,half=lower,open=false",
                "facing=south,half=lower,open=true",
                "facing=north,half=upper,open=true",
            ]
        )

        assert [s["key"] for s in specs] == ["facing", "half", "open"]
        assert specs[0] == {"key": "facing", "type": "string", "values": ["north", "south"]}
        assert specs[1] == {"key": "half", "type": "string", "values": ["lower", "upper"]}
        assert specs[2] == {"key": "open", "type": "boolean"}

    def test_dimension_missing_from_some_keys(self) -> None:
        """Test that dimensions appearing in only some keys are still collected."""
        specs = collect_dimensions(["age=0", "age=1,waterlogged=true"])
        assert [s["key"] for s in specs] == ["age", "waterlogged"]


class TestResolveVariants:
    """Test representative variant selection."""

    def test_empty_key_wins(self) -> None:
        """Test that the "" key is the representative and yields no specs."""
        descriptor = BlockStateDescriptor(
            variants={"facing=north": single("a"), "": single("b")}
        )

        specs, representative = resolve_variants(descriptor)

        assert specs == []
        assert representative.model == "b"

    def test_empty_key_weighted_list(self) -> None:
        """Test that a weighted "" entry yields its first option."""
        descriptor = BlockStateDescriptor(
            variants={
                "": WeightedVariants(
                    (VariantValue(model="first"), VariantValue(model="second", weight=5))
                )
            }
        )

        specs, representative = resolve_variants(descriptor)

        assert specs == []
        assert representative.model == "first"

    def test_first_key_is_representative(self) -> None:
        """Test that the first key in descriptor order drives resolution."""
        descriptor = BlockStateDescriptor(
            variants={
                "facing=south": single("south_model"),
                "facing=north": single("north_model"),
            }
        )

        specs, representative = resolve_variants(descriptor)

        assert representative.model == "south_model"
        assert specs == [{"key": "facing", "type": "string", "values": ["south", "north"]}]

    def test_missing_variants_raises(self) -> None:
        """Test that multipart-only descriptors cannot be resolved."""
        descriptor = BlockStateDescriptor(variants=None, has_multipart=True)

        with pytest.raises(UnresolvableVariantError, match="multipart"):
            resolve_variants(descriptor, "assets/m1/blockstates/fence.json")

    def test_empty_variants_raises(self) -> None:
        """Test that an empty variants mapping cannot be resolved."""
        with pytest.raises(UnresolvableVariantError, match="empty"):
            resolve_variants(BlockStateDescriptor(variants={}))
