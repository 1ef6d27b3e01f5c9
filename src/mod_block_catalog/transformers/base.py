"""Base transformer class for converting archive entries to catalog records.

This module defines the interface for transformers that turn one matched
archive entry into a ``BlockRecord``.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.types import BlockRecord
    from ..sources.base import ArchiveSource


class Transformer(ABC):
    """Abstract base class for entry transformers."""

    @abstractmethod
    def matches(self, entry_name: str) -> bool:
        """Whether this transformer handles the given archive entry."""
        pass

    @abstractmethod
    def transform(
        self,
        archive: "ArchiveSource",
        entry_name: str,
        lang: dict[str, str] | None = None,
        diagnostics: list[str] | None = None,
    ) -> "BlockRecord":
        """Transform one archive entry into a catalog record.

        Args:
            archive: Open archive the entry belongs to
            entry_name: Archive-internal path of the entry
            lang: Merged localization of the archive
            diagnostics: Optional list that receives non-fatal notes

        Returns:
            BlockRecord for the entry

        Raises:
            SkippableEntryError: If the entry cannot produce a record
        """
        pass
