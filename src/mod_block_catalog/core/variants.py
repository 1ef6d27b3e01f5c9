"""Variant dimension resolution for block-state descriptors.

A block-state key such as ``facing=north,open=true`` names one point in the
block's state space. Collecting every key of a descriptor gives the full set
of state dimensions and the values each one takes.
"""

import math
import re

from .errors import UnresolvableVariantError
from .types import (
    BlockStateDescriptor,
    SingleVariant,
    VariantEntry,
    VariantSpec,
    VariantValue,
    WeightedVariants,
)

BOOLEAN_VALUES = frozenset({"true", "false"})

# Finite decimal literals only: "3", "-1", "0.5", "1e3"
NUMBER_REGEX = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")


def split_state_key(state_key: str) -> list[tuple[str, str]]:
    """Decompose ``name=value,name=value`` into ordered pairs.

    A part without ``=`` yields an empty value; empty parts are dropped.

    Example:
        "facing=north,open=true" -> [("facing", "north"), ("open", "true")]
    """
    pairs: list[tuple[str, str]] = []
    for part in state_key.split(","):
        if not part:
            continue
        name, _, value = part.partition("=")
        pairs.append((name, value))
    return pairs


def _to_number(value: str) -> int | float | None:
    if not NUMBER_REGEX.match(value):
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def classify_dimension(key: str, values: list[str]) -> VariantSpec:
    """Build the VariantSpec for one dimension from its observed values.

    Boolean wins whenever every value is "true" or "false", even for a single
    observed value. Numbers are deduplicated after conversion, so "1" and
    "1.0" collapse into one entry.
    """
    if all(v in BOOLEAN_VALUES for v in values):
        return {"key": key, "type": "boolean"}

    numbers = [_to_number(v) for v in values]
    if all(n is not None for n in numbers):
        unique: list[int | float] = []
        for n in numbers:
            if n not in unique:
                unique.append(n)  # type: ignore[arg-type]
        return {"key": key, "type": "number", "values": unique}

    return {"key": key, "type": "string", "values": list(values)}


def collect_dimensions(state_keys: list[str]) -> list[VariantSpec]:
    """Union the values of every dimension across all state keys.

    Dimensions and their values keep first-observed order.
    """
    observed: dict[str, list[str]] = {}
    for state_key in state_keys:
        for name, value in split_state_key(state_key):
            values = observed.setdefault(name, [])
            if value not in values:
                values.append(value)

    return [classify_dimension(name, values) for name, values in observed.items()]


def first_option(entry: VariantEntry) -> VariantValue:
    """The representative model binding of one variant entry."""
    if isinstance(entry, SingleVariant):
        return entry.value
    if isinstance(entry, WeightedVariants):
        return entry.options[0]
    raise TypeError(f"Unknown variant entry: {entry!r}")


def resolve_variants(
    descriptor: BlockStateDescriptor,
    entry_name: str = "",
) -> tuple[list[VariantSpec], VariantValue]:
    """Resolve state dimensions and the representative variant.

    If the descriptor has the empty "no variation" key, that entry is the
    representative and no dimensions are reported. Otherwise the
    representative is the entry under the first key in descriptor order.
    That choice is positional, not a semantic default state.

    Args:
        descriptor: Validated block-state descriptor
        entry_name: Archive path, used for error reporting

    Returns:
        Tuple of (variant specs, representative variant value)

    Raises:
        UnresolvableVariantError: If the descriptor has no usable variants
    """
    variants = descriptor.variants
    if variants is None:
        reason = "multipart-only descriptor" if descriptor.has_multipart else "no variants mapping"
        raise UnresolvableVariantError(reason, entry_name)

    if not variants:
        raise UnresolvableVariantError("empty variants mapping", entry_name)

    if "" in variants:
        return [], first_option(variants[""])

    specs = collect_dimensions(list(variants))
    first_key = next(iter(variants))
    return specs, first_option(variants[first_key])
