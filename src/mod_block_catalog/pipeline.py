"""Ingestion pipeline for the block catalog.

This module drives a full batch: every archive in a directory is opened
through the archive registry, its block-state entries are transformed into
catalog records, and the records are accumulated by block id. The pipeline
does not persist anything; ``CatalogService`` commits the report it returns.
"""

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from .core.errors import ArchiveReadError, SkippableEntryError
from .core.lang import load_lang
from .core.types import BlockRecord
from .registry import ArchiveRegistry
from .scanner import scan_archives
from .transformers.base import Transformer
from .transformers.blockstate import BlockStateTransformer

logger = logging.getLogger(__name__)


@dataclass
class SkippedEntry:
    """An archive entry that produced no record."""

    archive: str
    entry: str
    reason: str


@dataclass
class FailedArchive:
    """An archive that could not be read at all."""

    archive: str
    reason: str


@dataclass
class ArchiveResult:
    """Everything one archive contributed to a batch."""

    archive: str
    records: dict[str, BlockRecord] = field(default_factory=dict)
    skipped: list[SkippedEntry] = field(default_factory=list)
    diagnostics: list[str] = field(default_factory=list)
    failure: FailedArchive | None = None


@dataclass
class IngestionReport:
    """Outcome of one ingestion batch.

    Attributes:
        archives: Slugs of the archives scanned, in processing order
        records: Accumulated records keyed by block id (last write wins)
        skipped: Entries that produced no record, with reasons
        failed_archives: Archives that could not be read
        diagnostics: Non-fatal notes, such as blocks left without a texture
        committed: Number of rows written to the catalog
        index_error: Set when the search index rebuild failed after commit
    """

    archives: list[str] = field(default_factory=list)
    records: dict[str, BlockRecord] = field(default_factory=dict)
    skipped: list[SkippedEntry] = field(default_factory=list)
    failed_archives: list[FailedArchive] = field(default_factory=list)
    diagnostics: list[str] = field(default_factory=list)
    committed: int = 0
    index_error: str | None = None

    @property
    def skip_count(self) -> int:
        return len(self.skipped)

    @property
    def index_stale(self) -> bool:
        return self.index_error is not None

    def skip_reasons(self) -> dict[str, int]:
        """Count skipped entries per reason."""
        return dict(Counter(s.reason for s in self.skipped))

    def summary(self) -> dict[str, object]:
        return {
            "archives": len(self.archives),
            "blocks": len(self.records),
            "committed": self.committed,
            "skipped": self.skip_count,
            "failed_archives": [f.archive for f in self.failed_archives],
            "skip_reasons": self.skip_reasons(),
            "index_error": self.index_error,
        }


class IngestionPipeline:
    """Batch ingestor for a directory of mod archives.

    Archives are processed in file-name order. With ``workers > 1`` they are
    read on a thread pool, but results are still merged in file-name order,
    so a later archive overrides an earlier one exactly as in a sequential
    run.

    Example:
        >>> pipeline = IngestionPipeline(workers=4)
        >>> report = pipeline.run(Path('~/.mod-block-catalog/mods').expanduser())
        >>> len(report.records)
        1342
    """

    def __init__(self, transformer: Transformer | None = None, workers: int = 1):
        """Initialize the pipeline.

        Args:
            transformer: Entry transformer (defaults to BlockStateTransformer)
            workers: Number of archives processed concurrently
        """
        self.transformer = transformer or BlockStateTransformer()
        self.workers = max(1, workers)

    def process_archive(self, path: Path) -> ArchiveResult:
        """Transform every matching entry of one archive.

        Never raises: an unreadable archive is reported as a failure and
        every per-entry problem as a skip.
        """
        result = ArchiveResult(archive=path.stem)

        try:
            with ArchiveRegistry.open_archive(path) as archive:
                lang = load_lang(archive)

                for entry_name in archive.list_entries():
                    if not self.transformer.matches(entry_name):
                        continue

                    try:
                        record = self.transformer.transform(
                            archive, entry_name, lang, result.diagnostics
                        )
                    except SkippableEntryError as e:
                        logger.debug("Skipping %s in %s: %s", entry_name, result.archive, e)
                        result.skipped.append(SkippedEntry(result.archive, entry_name, str(e)))
                        continue
                    except Exception as e:
                        logger.warning("Failed to process %s in %s: %s", entry_name, result.archive, e)
                        result.skipped.append(SkippedEntry(result.archive, entry_name, str(e)))
                        continue

                    result.records[record["blockId"]] = record

        except ArchiveReadError as e:
            logger.warning("Skipping archive %s: %s", path.name, e)
            result.failure = FailedArchive(result.archive, str(e))
        except Exception as e:
            logger.warning("Skipping archive %s: %s", path.name, e)
            result.failure = FailedArchive(result.archive, f"archive read failed: {e}")

        return result

    def run(self, directory: Path) -> IngestionReport:
        """Scan every archive in a directory and accumulate block records.

        Args:
            directory: Directory holding the archives

        Returns:
            IngestionReport with the accumulated records (not yet committed)

        Raises:
            ValueError: If directory is not a directory
        """
        paths = scan_archives(directory)
        logger.info("Ingesting %d archives from %s", len(paths), directory)

        report = IngestionReport()

        if self.workers > 1 and len(paths) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                results = list(executor.map(self.process_archive, paths))
        else:
            results = [self.process_archive(path) for path in paths]

        for result in results:
            report.archives.append(result.archive)
            report.skipped.extend(result.skipped)
            report.diagnostics.extend(result.diagnostics)
            if result.failure is not None:
                report.failed_archives.append(result.failure)
            report.records.update(result.records)

        logger.info(
            "Resolved %d blocks (%d entries skipped, %d archives failed)",
            len(report.records),
            report.skip_count,
            len(report.failed_archives),
        )
        return report
