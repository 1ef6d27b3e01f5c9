"""Runtime configuration for the block catalog."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .search import DEFAULT_SCORE_CUTOFF, DEFAULT_SEARCH_LIMIT
from .store import DEFAULT_CHUNK_SIZE

HOME_ENV_VAR = "MOD_BLOCK_CATALOG_HOME"
WORKERS_ENV_VAR = "MOD_BLOCK_CATALOG_WORKERS"
DEFAULT_HOME = Path.home() / ".mod-block-catalog"


@dataclass
class CatalogConfig:
    """Where the catalog lives and how batches run.

    Layout under ``home``::

        mods/        downloaded archives, one file per mod
        catalog.db   SQLite catalog
    """

    home: Path = field(default_factory=lambda: DEFAULT_HOME)
    chunk_size: int = DEFAULT_CHUNK_SIZE
    search_limit: int = DEFAULT_SEARCH_LIMIT
    score_cutoff: float = DEFAULT_SCORE_CUTOFF
    workers: int = 1

    @property
    def mods_dir(self) -> Path:
        return self.home / "mods"

    @property
    def db_path(self) -> Path:
        return self.home / "catalog.db"

    def ensure_dirs(self) -> None:
        self.mods_dir.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CatalogConfig":
        """Convenience constructor from a plain dict."""
        return cls(
            home=Path(data.get("home", DEFAULT_HOME)).expanduser(),
            chunk_size=int(data.get("chunk_size", DEFAULT_CHUNK_SIZE)),
            search_limit=int(data.get("search_limit", DEFAULT_SEARCH_LIMIT)),
            score_cutoff=float(data.get("score_cutoff", DEFAULT_SCORE_CUTOFF)),
            workers=int(data.get("workers", 1)),
        )

    @classmethod
    def from_env(cls) -> "CatalogConfig":
        """Defaults overridden by ``MOD_BLOCK_CATALOG_*`` environment variables."""
        data: dict[str, Any] = {}
        if os.environ.get(HOME_ENV_VAR):
            data["home"] = os.environ[HOME_ENV_VAR]
        if os.environ.get(WORKERS_ENV_VAR):
            data["workers"] = os.environ[WORKERS_ENV_VAR]
        return cls.from_dict(data)
