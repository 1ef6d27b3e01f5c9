"""Template for supporting a custom archive format.

This example demonstrates the pattern for adding an archive platform:
- ArchiveSource implementation over the new format
- Registration with ArchiveRegistry under a file suffix

Once registered, archives with that suffix are picked up by directory scans
exactly like .jar files.
"""

import sys
import tarfile
from pathlib import Path

from mod_block_catalog import ArchiveRegistry, CatalogConfig, CatalogService
from mod_block_catalog.core.errors import ArchiveReadError
from mod_block_catalog.sources.base import ArchiveSource


# Step 1: Implement the ArchiveSource interface
class TarSource(ArchiveSource):
    """Resource packs distributed as .tar archives."""

    def __init__(self, path: Path):
        super().__init__(path)
        try:
            self._tar = tarfile.open(path)
        except (tarfile.TarError, OSError) as e:
            raise ArchiveReadError(f"Cannot open archive {path}: {e}", archive=self.slug) from e
        self._members = {m.name: m for m in self._tar.getmembers() if m.isfile()}

    def list_entries(self) -> list[str]:
        return list(self._members)

    def read_entry(self, name: str) -> bytes | None:
        member = self._members.get(name)
        if member is None:
            return None
        handle = self._tar.extractfile(member)
        return handle.read() if handle is not None else None

    def close(self) -> None:
        self._tar.close()


# Step 2: Register the factory for the suffix
ArchiveRegistry.register_factory('.tar', TarSource)


# Step 3: Ingest as usual
def main():
    if len(sys.argv) != 2:
        print("Usage: custom_archive.py <directory with .tar packs>", file=sys.stderr)
        return

    with CatalogService(CatalogConfig(home=Path("catalog-example"))) as service:
        report = service.ingest_directory(sys.argv[1])
        print(f"Committed {report.committed} blocks from {len(report.archives)} archives")


if __name__ == '__main__':
    main()
