"""Exception hierarchy for the block catalog pipeline.

Errors fall into two groups. Entry and archive errors are recoverable inside
a batch: the pipeline records them on the ingestion report and moves on.
Persistence and index errors are surfaced to whoever started the batch.
"""


class CatalogError(RuntimeError):
    """Base class for every error raised by this package."""


class SkippableEntryError(CatalogError):
    """A single archive entry cannot produce a block record.

    Attributes:
        entry_name: Archive path of the offending entry (may be empty)
    """

    def __init__(self, message: str, entry_name: str = ""):
        super().__init__(message)
        self.entry_name = entry_name


class DescriptorValidationError(SkippableEntryError):
    """A descriptor is not valid JSON or does not match its schema."""


class UnresolvableVariantError(SkippableEntryError):
    """A block-state descriptor has no variant to drive model resolution."""


class MissingEntryError(SkippableEntryError):
    """A referenced entry does not exist in the archive."""


class ArchiveReadError(CatalogError):
    """An archive file is unreadable or corrupt; the whole archive is skipped."""

    def __init__(self, message: str, archive: str = ""):
        super().__init__(message)
        self.archive = archive


class PersistenceError(CatalogError):
    """The catalog transaction failed and was rolled back."""


class IndexSyncError(CatalogError):
    """The search index could not be rebuilt after a committed batch."""


class IngestionInProgressError(CatalogError):
    """Another ingestion batch is already running against the catalog."""
