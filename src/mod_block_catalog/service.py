"""Catalog service: the boundary the surrounding application talks to.

``CatalogService`` owns the catalog store and the search index for its whole
lifetime. It serializes ingestion batches, commits their results, keeps the
index in sync with the committed catalog and answers block queries.
"""

import io
import os
import logging
import shutil
import tempfile
import threading
import zipfile
from pathlib import Path
from types import TracebackType

from .config import CatalogConfig
from .core.errors import (
    ArchiveReadError,
    IndexSyncError,
    IngestionInProgressError,
    PersistenceError,
    SkippableEntryError,
)
from .core.types import BlockDetails, BlockRecord
from .pipeline import IngestionPipeline, IngestionReport
from .registry import ArchiveRegistry
from .scanner import archive_path, archive_slug, scan_archives
from .search import SearchIndex
from .store import CatalogStore
from .transformers.blockstate import BlockStateTransformer

logger = logging.getLogger(__name__)

# Queries starting with this marker are exact id-prefix lookups
PREFIX_QUERY_MARKER = "@"


class CatalogService:
    """Ingestion and query service over one catalog.

    The store and index are opened at construction and released by
    ``close()``; use the service as a context manager.

    Example:
        >>> with CatalogService(CatalogConfig(home=Path('/tmp/catalog'))) as service:
        ...     report = service.ingest_directory()
        ...     service.search_blocks('oak door')
    """

    def __init__(
        self,
        config: CatalogConfig | None = None,
        store: CatalogStore | None = None,
        index: SearchIndex | None = None,
        pipeline: IngestionPipeline | None = None,
    ):
        """Open the catalog and load the search index from it.

        Args:
            config: Catalog location and tuning (defaults to environment)
            store: Pre-built catalog store (defaults to SQLite at config.db_path)
            index: Pre-built search index
            pipeline: Pre-built ingestion pipeline
        """
        self.config = config or CatalogConfig.from_env()
        self.config.ensure_dirs()
        self.store = store or CatalogStore(self.config.db_path)
        self.index = index or SearchIndex(self.config.score_cutoff)
        self.pipeline = pipeline or IngestionPipeline(workers=self.config.workers)
        self._details = BlockStateTransformer()
        self._run_lock = threading.Lock()

        try:
            self.refresh_index()
        except IndexSyncError as e:
            logger.error("%s; fuzzy search is empty until the next batch", e)

    def close(self) -> None:
        self.index.clear()
        self.store.close()

    def __enter__(self) -> "CatalogService":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def ingest_directory(self, directory: Path | str | None = None, wait: bool = True) -> IngestionReport:
        """Ingest every archive in a directory and replace the catalog.

        Only one batch runs at a time. A second call waits for the running
        batch, or with ``wait=False`` is rejected.

        Args:
            directory: Archive directory (defaults to the configured mods dir)
            wait: Queue behind a running batch instead of failing

        Returns:
            IngestionReport with ``committed`` set. ``index_error`` is set if
            the catalog committed but the search index could not be rebuilt.

        Raises:
            IngestionInProgressError: If ``wait`` is False and a batch is running
            PersistenceError: If the commit failed; the catalog is unchanged
            ValueError: If directory is not a directory
        """
        directory = Path(directory) if directory is not None else self.config.mods_dir

        if not self._run_lock.acquire(blocking=wait):
            raise IngestionInProgressError("An ingestion batch is already running")

        try:
            report = self.pipeline.run(directory)

            try:
                report.committed = self.store.replace_all(
                    report.records.values(), chunk_size=self.config.chunk_size
                )
            except PersistenceError as e:
                logger.error("%s", e)
                raise

            try:
                self.refresh_index()
            except IndexSyncError as e:
                logger.error("%s; search results are stale", e)
                report.index_error = str(e)

            return report
        finally:
            self._run_lock.release()

    def refresh_index(self) -> None:
        """Rebuild the search index from the textured rows of the catalog.

        Raises:
            IndexSyncError: If the rebuild failed
        """
        try:
            self.index.rebuild(self.store.textured())
        except Exception as e:
            raise IndexSyncError(f"Search index rebuild failed: {e}") from e

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_block(self, block_id: str, mod_id: str | None = None) -> BlockRecord | None:
        return self.store.get(block_id, mod_id)

    def search_blocks(self, query: str | None) -> list[BlockRecord]:
        """Search the catalog.

        - empty query: textured blocks in catalog order
        - ``@prefix``: blocks whose id starts with ``prefix``
        - anything else: fuzzy match on display name and id

        Each form returns at most ``config.search_limit`` blocks.
        """
        limit = self.config.search_limit
        query = (query or "").strip()

        if not query:
            return self.store.textured(limit=limit)

        if query.startswith(PREFIX_QUERY_MARKER):
            return self.store.find_by_prefix(query[len(PREFIX_QUERY_MARKER):], limit=limit)

        return self.index.search(query, limit=limit)

    def get_block_details(self, jar_slug: str, entry_name: str) -> BlockDetails | None:
        """Re-resolve one block straight from its stored archive.

        Returns:
            BlockDetails, or None if the archive or entry cannot be resolved
        """
        try:
            path = archive_path(self.config.mods_dir, archive_slug(jar_slug))
            with ArchiveRegistry.open_archive(path) as archive:
                return self._details.details(archive, entry_name)
        except (ArchiveReadError, SkippableEntryError, ValueError) as e:
            logger.info("No details for %s in %s: %s", entry_name, jar_slug, e)
            return None

    # ------------------------------------------------------------------
    # Stored archives
    # ------------------------------------------------------------------

    def list_archives(self) -> list[str]:
        """Slugs of the archives in the mods directory."""
        return [p.stem for p in scan_archives(self.config.mods_dir)]

    def add_archive(self, data: bytes, name: str, ingest: bool = True) -> IngestionReport | None:
        """Store an already-downloaded archive and optionally re-ingest.

        Args:
            data: Raw archive bytes
            name: Archive name; sanitized into the slug
            ingest: Run a full batch afterwards

        Returns:
            The batch report when ``ingest`` is True

        Raises:
            ArchiveReadError: If ``data`` is not a zip archive
            ValueError: If ``name`` cannot be turned into a safe slug
        """
        slug = archive_slug(name)
        if not zipfile.is_zipfile(io.BytesIO(data)):
            raise ArchiveReadError(f"Not a zip archive: {name}", archive=slug)

        path = archive_path(self.config.mods_dir, slug)

        # Hidden .part file: scans skip it until it is renamed into place
        fd, tmp_name = tempfile.mkstemp(dir=self.config.mods_dir, prefix=f".{slug}.", suffix=".part")
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            tmp_path.replace(path)
        except Exception:
            tmp_path.unlink(missing_ok=True)
            raise

        logger.info("Stored archive %s (%d bytes)", path.name, len(data))

        if ingest:
            return self.ingest_directory()
        return None

    def remove_archive(self, slug: str) -> None:
        """Delete a stored archive. The catalog changes on the next batch.

        Raises:
            KeyError: If no archive has this slug
        """
        path = archive_path(self.config.mods_dir, archive_slug(slug))
        if not path.is_file():
            raise KeyError(f"No archive found with slug: {slug}")
        path.unlink()
        logger.info("Removed archive %s", path.name)

    def clear_cache(self) -> None:
        """Delete every stored archive and empty the catalog and index."""
        with self._run_lock:
            shutil.rmtree(self.config.mods_dir, ignore_errors=True)
            self.config.ensure_dirs()
            self.store.replace_all([])
            self.index.clear()
        logger.info("Cleared catalog cache at %s", self.config.home)
