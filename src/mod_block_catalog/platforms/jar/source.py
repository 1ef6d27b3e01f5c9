"""Zip-based archive source for mod jars.

Mod jars are plain zip files, so ``.jar`` and ``.zip`` archives share this
reader.
"""

import zipfile
from pathlib import Path

from ...core.errors import ArchiveReadError
from ...sources.base import ArchiveSource


class JarSource(ArchiveSource):
    """Source adapter for ``.jar`` / ``.zip`` mod archives.

    Example:
        >>> with JarSource(Path('mods/doors-1.2.jar')) as archive:
        ...     names = archive.list_entries()
        ...     data = archive.read_entry('assets/doors/lang/en_us.json')
    """

    def __init__(self, path: Path):
        """Open the archive.

        Args:
            path: Archive file on disk

        Raises:
            ArchiveReadError: If the file is missing or not a readable zip
        """
        super().__init__(path)

        try:
            self._zip = zipfile.ZipFile(path)
        except (zipfile.BadZipFile, OSError) as e:
            raise ArchiveReadError(f"Cannot open archive {path}: {e}", archive=self.slug) from e

        self._names = [info.filename for info in self._zip.infolist() if not info.is_dir()]
        self._name_set = set(self._names)

    def list_entries(self) -> list[str]:
        return list(self._names)

    def has_entry(self, name: str) -> bool:
        return name in self._name_set

    def read_entry(self, name: str) -> bytes | None:
        if name not in self._name_set:
            return None
        return self._zip.read(name)

    def close(self) -> None:
        self._zip.close()
