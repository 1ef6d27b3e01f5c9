"""Mod Block Catalog.

This package ingests mod archives, resolves the blocks they define (state
dimensions, representative texture, display name) and keeps a persistent,
searchable catalog of them.
"""

# Core library interface
from .config import CatalogConfig
from .pipeline import IngestionPipeline, IngestionReport
from .registry import ArchiveRegistry
from .service import CatalogService
from .sources.base import ArchiveSource

# Core utilities
from .core import (
    BlockDetails,
    BlockRecord,
    CatalogError,
    IndexSyncError,
    PersistenceError,
    VariantSpec,
    resolve_assets,
    resolve_variants,
    validate_blockstate,
    validate_model,
)
from .search import SearchIndex
from .store import CatalogStore

# CLI
from .cli import main

__version__ = "0.1.0"

# Auto-discover and register all platforms
ArchiveRegistry.discover_platforms()

__all__ = [
    # Primary library interface
    "CatalogService",
    "CatalogConfig",
    "IngestionPipeline",
    "IngestionReport",
    "ArchiveRegistry",
    "ArchiveSource",
    "CatalogStore",
    "SearchIndex",
    # Core utilities
    "BlockDetails",
    "BlockRecord",
    "VariantSpec",
    "CatalogError",
    "PersistenceError",
    "IndexSyncError",
    "resolve_assets",
    "resolve_variants",
    "validate_blockstate",
    "validate_model",
    "main",
]
