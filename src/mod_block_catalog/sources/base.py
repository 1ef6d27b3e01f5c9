"""Base abstractions for archive sources.

This module defines the read-only interface the ingestion pipeline uses to
look inside a mod archive. Any container that can list its entry names and
return an entry's bytes by name can act as a source.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from types import TracebackType


class ArchiveSource(ABC):
    """Abstract base class for read-only archive readers.

    A source is opened for one ingestion pass over one archive file and must
    be closed afterwards; use it as a context manager.

    Attributes:
        path: Filesystem path of the archive
        slug: Archive identifier stored on catalog rows (file name without
            its suffix)
    """

    def __init__(self, path: Path):
        self.path = path
        self.slug = path.stem

    @abstractmethod
    def list_entries(self) -> list[str]:
        """List entry names in archive order.

        Directory entries are not included.
        """
        pass

    @abstractmethod
    def read_entry(self, name: str) -> bytes | None:
        """Return the bytes of an entry, or None if it does not exist.

        Args:
            name: Archive-internal path

        Raises:
            Exception: If the entry exists but cannot be decompressed
        """
        pass

    def has_entry(self, name: str) -> bool:
        return name in self.list_entries()

    @abstractmethod
    def close(self) -> None:
        """Release the underlying file handle."""
        pass

    def __enter__(self) -> "ArchiveSource":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.path)!r})"
