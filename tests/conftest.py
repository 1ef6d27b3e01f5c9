"""Shared fixtures: in-memory and on-disk mod archives."""

import base64
import json
import zipfile
from pathlib import Path
from typing import Any, Callable

import pytest

from mod_block_catalog.sources.base import ArchiveSource

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + bytes(range(24))
PNG_BASE64 = base64.b64encode(PNG_BYTES).decode("ascii")


def _encode(content: Any) -> bytes:
    if isinstance(content, bytes):
        return content
    if isinstance(content, str):
        return content.encode("utf-8")
    return json.dumps(content).encode("utf-8")


class MemoryArchive(ArchiveSource):
    """ArchiveSource over a dict, for tests that don't need a real zip."""

    def __init__(self, entries: dict[str, Any], slug: str = "memory"):
        super().__init__(Path(f"{slug}.jar"))
        self._entries = {name: _encode(content) for name, content in entries.items()}
        self.closed = False

    def list_entries(self) -> list[str]:
        return list(self._entries)

    def read_entry(self, name: str) -> bytes | None:
        return self._entries.get(name)

    def close(self) -> None:
        self.closed = True


def door_entries() -> dict[str, Any]:
    """A mod with one door block: two-state variants, a model and a texture."""
    return {
        "assets/m1/blockstates/door.json": {
            "variants": {
                "facing=north,open=false": {"model": "m1:block/door"},
                "facing=south,open=true": {"model": "m1:block/door"},
            }
        },
        "assets/m1/models/block/door.json": {
            "parent": "block/cube",
            "textures": {"front": "block/door_front"},
        },
        "assets/m1/textures/block/door_front.png": PNG_BYTES,
    }


@pytest.fixture
def memory_archive() -> Callable[..., MemoryArchive]:
    """Factory for in-memory archives."""
    return MemoryArchive


@pytest.fixture
def door() -> dict[str, Any]:
    return door_entries()


@pytest.fixture
def make_archive(mods_dir: Path) -> Callable[..., Path]:
    """Factory writing a real zip archive into a mods directory."""

    def _make(name: str, entries: dict[str, Any], directory: Path | None = None) -> Path:
        target_dir = directory or mods_dir
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name
        with zipfile.ZipFile(path, "w") as zf:
            for entry_name, content in entries.items():
                zf.writestr(entry_name, _encode(content))
        return path

    return _make


@pytest.fixture
def mods_dir(tmp_path: Path) -> Path:
    """The directory ``make_archive`` writes into by default."""
    path = tmp_path / "mods"
    path.mkdir(exist_ok=True)
    return path
