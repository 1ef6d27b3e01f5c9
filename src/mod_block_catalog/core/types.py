"""Type definitions for the block catalog.

Catalog-facing shapes (``BlockRecord``, ``VariantSpec``) are TypedDicts that
mirror the persisted row layout and its JSON-encoded ``variants`` column.
Parsed descriptor shapes are dataclasses built from schema-validated JSON.
"""

from dataclasses import dataclass, field
from typing import Literal, TypedDict, Union


class BooleanVariantSpec(TypedDict):
    """State dimension whose domain is {true, false}."""

    key: str
    type: Literal["boolean"]


class NumberVariantSpec(TypedDict):
    """State dimension with an ordered set of numeric values."""

    key: str
    type: Literal["number"]
    values: list[int | float]


class StringVariantSpec(TypedDict):
    """State dimension with an ordered set of string values."""

    key: str
    type: Literal["string"]
    values: list[str]


VariantSpec = Union[BooleanVariantSpec, NumberVariantSpec, StringVariantSpec]


class BlockRecord(TypedDict):
    """One catalog row, identified by (blockId, modId)."""

    blockId: str
    modId: str
    blockName: str | None  # Display name from the archive's lang file
    jarSlug: str  # Archive file name without its suffix
    texture64: str | None  # Base64-encoded PNG bytes
    entryName: str  # Archive path of the block-state descriptor
    variants: list[VariantSpec]


@dataclass(frozen=True)
class VariantValue:
    """One model binding inside a block-state descriptor."""

    model: str
    x: float | None = None
    y: float | None = None
    uvlock: bool = False
    weight: float = 1


@dataclass(frozen=True)
class SingleVariant:
    """A state combination bound to exactly one model."""

    value: VariantValue


@dataclass(frozen=True)
class WeightedVariants:
    """A state combination bound to a weighted list of alternative models."""

    options: tuple[VariantValue, ...]


VariantEntry = Union[SingleVariant, WeightedVariants]


@dataclass
class BlockStateDescriptor:
    """Parsed ``assets/<mod>/blockstates/<block>.json``.

    ``variants`` keeps the descriptor's key order; it is ``None`` when the
    document has no variants mapping at all.
    """

    variants: dict[str, VariantEntry] | None = None
    has_multipart: bool = False


@dataclass
class ModelDescriptor:
    """Parsed ``assets/<mod>/models/<path>.json``.

    Only ``loader`` and ``textures`` drive texture resolution; the rest is
    carried for callers that want it.
    """

    loader: str | None = None
    render_type: str = "minecraft:solid"
    parent: str | None = None
    ambientocclusion: bool = True
    display: dict[str, dict] | None = None
    textures: dict[str, str] | None = None
    elements: list[dict] | None = None


@dataclass
class BlockDetails:
    """A single block re-resolved directly from its source archive."""

    jar_slug: str
    entry_name: str
    mod_id: str
    block_id: str
    variants: list[VariantSpec] = field(default_factory=list)
    model: str | None = None
    texture64: str | None = None
