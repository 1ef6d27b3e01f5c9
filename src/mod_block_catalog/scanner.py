"""Mods directory scanning and archive naming.

This module finds the archives the pipeline should ingest and turns
user-supplied archive names into safe slugs inside the mods directory.
"""

import re
from pathlib import Path

from .registry import ArchiveRegistry

# Dangerous characters to remove from filenames
DANGEROUS_FILENAME_CHARS = r'[<>:"|?*\x00-\x1f]'

DEFAULT_ARCHIVE_SUFFIX = ".jar"


def sanitize_filename(filename: str) -> str:
    """Sanitize filename by removing dangerous characters.

    Args:
        filename: Original filename

    Returns:
        Sanitized filename safe for storage
    """
    # Remove dangerous characters
    sanitized = re.sub(DANGEROUS_FILENAME_CHARS, "", filename)
    # Remove path separators
    sanitized = sanitized.replace("/", "").replace("\\", "")
    return sanitized


def validate_path_safety(path: Path, base_dir: Path) -> None:
    """Validate that a path stays within the base directory.

    This prevents path traversal attacks.

    Args:
        path: Path to validate
        base_dir: Base directory that path must be within

    Raises:
        ValueError: If path escapes the base directory
    """
    resolved_path = path.resolve()
    resolved_base = base_dir.resolve()

    if not resolved_path.is_relative_to(resolved_base):
        raise ValueError(f"Path {path} escapes base directory {base_dir}")


def archive_slug(name: str) -> str:
    """Derive the archive slug stored on catalog rows.

    Example:
        "doors-1.2.jar" -> "doors-1.2"

    Raises:
        ValueError: If nothing usable is left after sanitizing
    """
    slug = sanitize_filename(name.strip())
    suffix = Path(slug).suffix.lower()
    if suffix in ArchiveRegistry.list_suffixes():
        slug = slug[: -len(suffix)]
    slug = slug.strip(". ")
    if not slug:
        raise ValueError(f"Invalid archive name: {name!r}")
    return slug


def archive_path(mods_dir: Path, slug: str) -> Path:
    """Location of an archive inside the mods directory.

    An existing file with any registered suffix is preferred; new archives
    are stored as ``<slug>.jar``.

    Raises:
        ValueError: If the slug escapes the mods directory
    """
    for suffix in ArchiveRegistry.list_suffixes():
        candidate = mods_dir / f"{slug}{suffix}"
        if candidate.is_file():
            validate_path_safety(candidate, mods_dir)
            return candidate

    path = mods_dir / f"{slug}{DEFAULT_ARCHIVE_SUFFIX}"
    validate_path_safety(path, mods_dir)
    return path


def scan_archives(directory: Path) -> list[Path]:
    """List supported archive files in a directory, sorted by file name.

    Hidden files and unsupported suffixes are ignored.

    Raises:
        ValueError: If directory doesn't exist or isn't a directory
    """
    if not directory.exists():
        raise ValueError(f"Path does not exist: {directory}")

    if not directory.is_dir():
        raise ValueError(f"Path is not a directory: {directory}")

    return sorted(
        (
            p
            for p in directory.iterdir()
            if p.is_file() and not p.name.startswith(".") and ArchiveRegistry.supports(p)
        ),
        key=lambda p: p.name,
    )
