"""Archive path conventions.

Mod archives follow the resource-pack layout::

    assets/<modId>/blockstates/<blockId>.json
    assets/<modId>/lang/en_us.json
    assets/<modId>/models/<path>.json
    assets/<modId>/textures/<path>.png
"""

import re
from typing import NamedTuple

BLOCKSTATE_PATH_REGEX = re.compile(
    r"^assets/(?P<modId>[^/]+)/blockstates/(?P<blockId>.+)\.json$"
)
LANG_PATH_REGEX = re.compile(r"^assets/(?P<modId>[^/]+)/lang/en_us\.json$")


class BlockStatePath(NamedTuple):
    mod_id: str
    block_id: str


def match_blockstate_path(entry_name: str) -> BlockStatePath | None:
    """Recognize a block-state descriptor path.

    Args:
        entry_name: Archive-internal path

    Returns:
        (mod_id, block_id) or None if the path is not a block-state descriptor
    """
    match = BLOCKSTATE_PATH_REGEX.match(entry_name)
    if match is None:
        return None

    mod_id = match.group("modId")
    block_id = match.group("blockId")
    if not mod_id.strip() or not block_id.strip():
        return None

    return BlockStatePath(mod_id, block_id)


def match_lang_path(entry_name: str) -> str | None:
    """Return the mod id owning an ``en_us.json`` lang file, or None."""
    match = LANG_PATH_REGEX.match(entry_name)
    if match is None:
        return None
    mod_id = match.group("modId")
    return mod_id if mod_id.strip() else None


def strip_namespace(reference: str, mod_id: str) -> str:
    """Drop a leading ``<mod_id>:`` namespace from a resource reference."""
    prefix = f"{mod_id}:"
    if reference.startswith(prefix):
        return reference[len(prefix):]
    return reference


def model_entry_path(mod_id: str, model_ref: str) -> str:
    """Archive path of the model a block-state variant points at."""
    return f"assets/{mod_id}/models/{strip_namespace(model_ref, mod_id)}.json"


def texture_entry_path(mod_id: str, texture_ref: str) -> str:
    """Archive path of the PNG a model texture slot points at."""
    return f"assets/{mod_id}/textures/{strip_namespace(texture_ref, mod_id)}.png"
