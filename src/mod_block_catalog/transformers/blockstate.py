"""Block-state transformer.

This module turns ``assets/<mod>/blockstates/<block>.json`` entries into
catalog records: validate the descriptor, resolve its variant dimensions,
then resolve the representative model's texture.
"""

import logging

from ..core.assets import resolve_assets
from ..core.errors import MissingEntryError, SkippableEntryError
from ..core.lang import block_name
from ..core.paths import match_blockstate_path
from ..core.types import BlockDetails, BlockRecord
from ..core.validator import parse_blockstate
from ..core.variants import resolve_variants
from ..sources.base import ArchiveSource
from .base import Transformer

logger = logging.getLogger(__name__)


class BlockStateTransformer(Transformer):
    """Transformer for block-state descriptors.

    Example:
        >>> transformer = BlockStateTransformer()
        >>> with JarSource(Path('mods/doors.jar')) as archive:
        ...     record = transformer.transform(archive, 'assets/doors/blockstates/oak.json')
    """

    def matches(self, entry_name: str) -> bool:
        return match_blockstate_path(entry_name) is not None

    def transform(
        self,
        archive: ArchiveSource,
        entry_name: str,
        lang: dict[str, str] | None = None,
        diagnostics: list[str] | None = None,
    ) -> BlockRecord:
        """Resolve one block-state entry into a catalog record.

        Texture and name are best-effort: the record is produced even when
        neither resolves.

        Raises:
            SkippableEntryError: If the path does not match, the entry is
                missing, the descriptor is invalid or has no usable variant
        """
        details = self.details(archive, entry_name, diagnostics)

        return BlockRecord(
            blockId=details.block_id,
            modId=details.mod_id,
            blockName=block_name(lang or {}, details.mod_id, details.block_id),
            jarSlug=archive.slug,
            texture64=details.texture64,
            entryName=entry_name,
            variants=details.variants,
        )

    def details(
        self,
        archive: ArchiveSource,
        entry_name: str,
        diagnostics: list[str] | None = None,
    ) -> BlockDetails:
        """Re-resolve a block-state entry without building a catalog row."""
        path = match_blockstate_path(entry_name)
        if path is None:
            raise SkippableEntryError("not a block-state path", entry_name)

        data = archive.read_entry(entry_name)
        if data is None:
            raise MissingEntryError("entry not found in archive", entry_name)

        descriptor = parse_blockstate(data, entry_name)
        variants, representative = resolve_variants(descriptor, entry_name)

        assets = resolve_assets(archive, path.mod_id, representative.model)
        if assets.diagnostic:
            note = f"{archive.slug}:{entry_name}: {assets.diagnostic}"
            logger.debug("%s", note)
            if diagnostics is not None:
                diagnostics.append(note)

        return BlockDetails(
            jar_slug=archive.slug,
            entry_name=entry_name,
            mod_id=path.mod_id,
            block_id=path.block_id,
            variants=variants,
            model=representative.model,
            texture64=assets.texture64,
        )
