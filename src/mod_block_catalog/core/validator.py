"""JSON Schema validation for block-state and model descriptors.

The formal schemas live next to this module in ``schemas/``. Validation never
raises for bad input: every check returns either ``Valid`` carrying the typed
descriptor or ``Invalid`` carrying a readable reason, so a single malformed
entry can be skipped without disturbing the batch.
"""

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Generic, TypeVar, Union

from jsonschema import Draft7Validator
from jsonschema.exceptions import best_match

from .errors import DescriptorValidationError
from .types import (
    BlockStateDescriptor,
    ModelDescriptor,
    SingleVariant,
    VariantEntry,
    VariantValue,
    WeightedVariants,
)

SCHEMA_DIR = Path(__file__).parent / "schemas"
BLOCKSTATE_SCHEMA = "blockstate.schema.json"
MODEL_SCHEMA = "model.schema.json"

T = TypeVar("T")


@dataclass(frozen=True)
class Valid(Generic[T]):
    """Successful validation carrying the parsed value."""

    value: T


@dataclass(frozen=True)
class Invalid:
    """Failed validation.

    Attributes:
        reason: Human-readable description of the first relevant problem
        path: Location of the problem inside the document ("root" if none)
    """

    reason: str
    path: str = "root"

    def __str__(self) -> str:
        return f"Validation error at {self.path}: {self.reason}"


ValidationResult = Union[Valid[T], Invalid]


def load_schema(name: str) -> dict[str, Any]:
    """Load a JSON schema from the package's schema directory.

    Args:
        name: File name inside ``schemas/``

    Returns:
        Dictionary containing the JSON Schema.

    Raises:
        FileNotFoundError: If schema file doesn't exist
        json.JSONDecodeError: If schema is invalid JSON
    """
    schema_path = SCHEMA_DIR / name
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema file not found: {schema_path}")

    with schema_path.open("r", encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


@lru_cache(maxsize=None)
def _validator(name: str) -> Draft7Validator:
    return Draft7Validator(load_schema(name))


def _check(name: str, instance: Any) -> Invalid | None:
    error = best_match(_validator(name).iter_errors(instance))
    if error is None:
        return None
    error_path = " -> ".join(str(p) for p in error.absolute_path) or "root"
    return Invalid(reason=error.message, path=error_path)


def decode_json(data: bytes) -> ValidationResult[Any]:
    """Decode raw entry bytes as JSON.

    A UTF-8 byte order mark is tolerated since some mod tooling writes one.
    """
    try:
        return Valid(json.loads(data.decode("utf-8-sig")))
    except UnicodeDecodeError as e:
        return Invalid(reason=f"not UTF-8 text: {e}")
    except json.JSONDecodeError as e:
        return Invalid(reason=f"malformed JSON: {e.msg} (line {e.lineno})")
    except (ValueError, RecursionError) as e:
        # Oversized integer literals and pathological nesting
        return Invalid(reason=f"undecodable JSON: {e}")


def _build_variant_value(raw: dict[str, Any]) -> VariantValue:
    return VariantValue(
        model=raw["model"],
        x=raw.get("x"),
        y=raw.get("y"),
        uvlock=raw.get("uvlock", False),
        weight=raw.get("weight", 1),
    )


def _build_variant_entry(raw: dict[str, Any] | list[dict[str, Any]]) -> VariantEntry:
    if isinstance(raw, list):
        return WeightedVariants(options=tuple(_build_variant_value(v) for v in raw))
    return SingleVariant(value=_build_variant_value(raw))


def validate_blockstate(raw: Any) -> ValidationResult[BlockStateDescriptor]:
    """Validate a decoded block-state document and build its descriptor.

    Args:
        raw: Decoded JSON document

    Returns:
        Valid(BlockStateDescriptor) or Invalid with the reason
    """
    invalid = _check(BLOCKSTATE_SCHEMA, raw)
    if invalid is not None:
        return invalid

    variants = raw.get("variants")
    return Valid(
        BlockStateDescriptor(
            variants=(
                {key: _build_variant_entry(value) for key, value in variants.items()}
                if variants is not None
                else None
            ),
            has_multipart="multipart" in raw,
        )
    )


def validate_model(raw: Any) -> ValidationResult[ModelDescriptor]:
    """Validate a decoded model document and build its descriptor.

    Args:
        raw: Decoded JSON document

    Returns:
        Valid(ModelDescriptor) or Invalid with the reason
    """
    invalid = _check(MODEL_SCHEMA, raw)
    if invalid is not None:
        return invalid

    return Valid(
        ModelDescriptor(
            loader=raw.get("loader"),
            render_type=raw.get("render_type", "minecraft:solid"),
            parent=raw.get("parent"),
            ambientocclusion=raw.get("ambientocclusion", True),
            display=raw.get("display"),
            textures=raw.get("textures"),
            elements=raw.get("elements"),
        )
    )


def parse_blockstate(data: bytes, entry_name: str = "") -> BlockStateDescriptor:
    """Decode and validate block-state bytes, raising on failure.

    Raises:
        DescriptorValidationError: If the bytes are not a valid descriptor
    """
    decoded = decode_json(data)
    if isinstance(decoded, Invalid):
        raise DescriptorValidationError(str(decoded), entry_name)
    result = validate_blockstate(decoded.value)
    if isinstance(result, Invalid):
        raise DescriptorValidationError(str(result), entry_name)
    return result.value


def parse_model(data: bytes) -> ValidationResult[ModelDescriptor]:
    """Decode and validate model bytes without raising."""
    decoded = decode_json(data)
    if isinstance(decoded, Invalid):
        return decoded
    return validate_model(decoded.value)
