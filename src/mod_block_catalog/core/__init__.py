"""Core utilities for block resolution.

This package contains schema validation, type definitions, path
conventions and the variant/asset/localization resolvers used by the
ingestion pipeline.
"""

from .assets import ResolvedAssets, resolve_assets, select_texture_ref
from .errors import (
    ArchiveReadError,
    CatalogError,
    DescriptorValidationError,
    IndexSyncError,
    IngestionInProgressError,
    MissingEntryError,
    PersistenceError,
    SkippableEntryError,
    UnresolvableVariantError,
)
from .lang import block_name, load_lang
from .paths import match_blockstate_path, match_lang_path
from .types import (
    BlockDetails,
    BlockRecord,
    BlockStateDescriptor,
    ModelDescriptor,
    SingleVariant,
    VariantSpec,
    VariantValue,
    WeightedVariants,
)
from .validator import Invalid, Valid, validate_blockstate, validate_model
from .variants import resolve_variants

__all__ = [
    "ArchiveReadError",
    "BlockDetails",
    "BlockRecord",
    "BlockStateDescriptor",
    "CatalogError",
    "DescriptorValidationError",
    "IndexSyncError",
    "IngestionInProgressError",
    "Invalid",
    "MissingEntryError",
    "ModelDescriptor",
    "PersistenceError",
    "ResolvedAssets",
    "SingleVariant",
    "SkippableEntryError",
    "UnresolvableVariantError",
    "Valid",
    "VariantSpec",
    "VariantValue",
    "WeightedVariants",
    "block_name",
    "load_lang",
    "match_blockstate_path",
    "match_lang_path",
    "resolve_assets",
    "resolve_variants",
    "select_texture_ref",
    "validate_blockstate",
    "validate_model",
]
