"""Archive source adapters for the ingestion pipeline.

This package contains the base interface for archive readers.
Format-specific implementations live in the platforms/ directory.
"""

from .base import ArchiveSource

__all__ = ["ArchiveSource"]
