"""Model and texture resolution inside a mod archive.

Given the representative model reference of a block, this module finds the
model descriptor in the archive and picks one texture to represent the block
in the catalog. Every failure degrades to "no texture"; nothing raised while
reading the archive escapes ``resolve_assets``.
"""

import base64
import logging
from dataclasses import dataclass

from ..sources.base import ArchiveSource
from .paths import model_entry_path, strip_namespace, texture_entry_path
from .types import ModelDescriptor
from .validator import Invalid, parse_model

logger = logging.getLogger(__name__)

# Texture slots tried in order before falling back to the first slot
TEXTURE_PRIORITY = ("all", "texture", "front", "side")

# Bound on "#slot" indirections followed inside one texture map
MAX_TEXTURE_ALIAS_DEPTH = 8


@dataclass
class ResolvedAssets:
    """Outcome of model/texture resolution for one block.

    Attributes:
        model_path: Archive path of the model descriptor that was looked up
        model: Parsed model, if it existed and validated
        texture_path: Archive path of the chosen texture, if one was chosen
        texture64: Base64 texture bytes, if the texture existed
        diagnostic: Why no texture was produced (None on success)
    """

    model_path: str
    model: ModelDescriptor | None = None
    texture_path: str | None = None
    texture64: str | None = None
    diagnostic: str | None = None


def select_texture_ref(textures: dict[str, str]) -> str | None:
    """Pick the representative texture reference from a model's texture map.

    Slots are tried in the order ``all``, ``texture``, ``front``, ``side``;
    otherwise the first slot in map order wins. ``#slot`` references are
    followed through the same map.

    Returns:
        The texture reference, or None if the map is empty or an alias
        cannot be followed
    """
    if not textures:
        return None

    chosen = next(
        (textures[slot] for slot in TEXTURE_PRIORITY if textures.get(slot)),
        next(iter(textures.values())),
    )

    for _ in range(MAX_TEXTURE_ALIAS_DEPTH):
        if not chosen.startswith("#"):
            return chosen
        target = textures.get(chosen[1:])
        if target is None:
            return None
        chosen = target

    return None


def count_loader_textures(archive: ArchiveSource, mod_id: str, loader: str) -> int:
    """Count texture entries that plausibly belong to a custom loader."""
    prefix = f"assets/{mod_id}/textures/block/{strip_namespace(loader, mod_id)}"
    return sum(1 for name in archive.list_entries() if name.startswith(prefix))


def _resolve(archive: ArchiveSource, mod_id: str, model_ref: str) -> ResolvedAssets:
    resolved = ResolvedAssets(model_path=model_entry_path(mod_id, model_ref))

    data = archive.read_entry(resolved.model_path)
    if data is None:
        resolved.diagnostic = f"model not found: {resolved.model_path}"
        return resolved

    parsed = parse_model(data)
    if isinstance(parsed, Invalid):
        resolved.diagnostic = f"invalid model {resolved.model_path}: {parsed}"
        return resolved

    model = resolved.model = parsed.value

    if model.loader:
        candidates = count_loader_textures(archive, mod_id, model.loader)
        resolved.diagnostic = (
            f"model uses custom loader '{model.loader}' "
            f"({candidates} candidate texture entries); texture not resolved"
        )
        return resolved

    texture_ref = select_texture_ref(model.textures or {})
    if texture_ref is None:
        resolved.diagnostic = f"model has no usable texture slot: {resolved.model_path}"
        return resolved

    resolved.texture_path = texture_entry_path(mod_id, texture_ref)
    texture = archive.read_entry(resolved.texture_path)
    if texture is None:
        resolved.diagnostic = f"texture not found: {resolved.texture_path}"
        return resolved

    resolved.texture64 = base64.b64encode(texture).decode("ascii")
    return resolved


def resolve_assets(archive: ArchiveSource, mod_id: str, model_ref: str) -> ResolvedAssets:
    """Resolve the model and representative texture for a model reference.

    Args:
        archive: Open archive containing the block
        mod_id: Namespace of the block
        model_ref: Model reference from the representative variant, possibly
            namespaced as ``<mod_id>:<path>``

    Returns:
        ResolvedAssets; ``texture64`` is None whenever resolution failed
    """
    try:
        return _resolve(archive, mod_id, model_ref)
    except Exception as e:
        logger.warning("Asset resolution failed for %s in %s: %s", model_ref, archive.slug, e)
        return ResolvedAssets(
            model_path=model_entry_path(mod_id, model_ref),
            diagnostic=f"asset resolution failed: {e}",
        )
