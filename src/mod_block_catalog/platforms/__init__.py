"""Archive platform implementations for the ingestion pipeline.

This package contains self-contained platform modules that provide archive
sources for different container formats.

Each platform module auto-registers itself with the ArchiveRegistry
when imported.
"""

# Platform modules are imported dynamically by ArchiveRegistry.discover_platforms()
# to handle missing dependencies gracefully
