"""Localization lookup for block display names."""

import logging

from ..sources.base import ArchiveSource
from .paths import match_lang_path
from .validator import Invalid, decode_json

logger = logging.getLogger(__name__)


def load_lang(archive: ArchiveSource) -> dict[str, str]:
    """Merge every ``assets/<mod>/lang/en_us.json`` in an archive.

    Keys are namespaced (``block.<mod>.<block>``), so archives that bundle
    several mods keep the names of all of them. Non-string values are
    dropped; an unreadable lang file is logged and ignored.

    Args:
        archive: Open archive

    Returns:
        Flat translation-key to display-name mapping (possibly empty)
    """
    lang: dict[str, str] = {}

    for entry_name in archive.list_entries():
        if match_lang_path(entry_name) is None:
            continue

        try:
            data = archive.read_entry(entry_name)
        except Exception as e:
            logger.warning("Cannot read lang file %s in %s: %s", entry_name, archive.slug, e)
            continue
        if data is None:
            continue

        decoded = decode_json(data)
        if isinstance(decoded, Invalid) or not isinstance(decoded.value, dict):
            logger.warning("Ignoring malformed lang file %s in %s", entry_name, archive.slug)
            continue

        lang.update({k: v for k, v in decoded.value.items() if isinstance(v, str)})

    return lang


def block_name(lang: dict[str, str], mod_id: str, block_id: str) -> str | None:
    """Display name of a block, or None if the lang file has no entry."""
    return lang.get(f"block.{mod_id}.{block_id}")
