"""Archive registry for suffix-based source creation.

This module provides a central registry of archive source factories keyed by
file suffix, so the pipeline can open any supported archive without knowing
which platform implements it. Platforms register themselves when imported,
and the registry can discover all available platforms automatically.
"""

import importlib
from pathlib import Path
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .sources.base import ArchiveSource


class ArchiveRegistry:
    """Central registry for archive source factories.

    Factories are keyed by lowercase file suffix including the dot
    (``".jar"``).
    """

    _factories: dict[str, Callable[..., "ArchiveSource"]] = {}

    @classmethod
    def register_factory(cls, suffix: str, factory: Callable[..., "ArchiveSource"]) -> None:
        """Register a factory function for an archive suffix.

        Args:
            suffix: File suffix such as ".jar"
            factory: Callable taking the archive path and returning a source

        Example:
            >>> ArchiveRegistry.register_factory('.jar', lambda path: JarSource(path))
        """
        cls._factories[suffix.lower()] = factory

    @classmethod
    def supports(cls, path: Path) -> bool:
        """Whether a registered platform can open this file."""
        return path.suffix.lower() in cls._factories

    @classmethod
    def open_archive(cls, path: Path, **kwargs) -> "ArchiveSource":
        """Open an archive with the factory registered for its suffix.

        Args:
            path: Archive file on disk
            **kwargs: Arguments passed to the factory

        Returns:
            An open ArchiveSource; the caller must close it

        Raises:
            ValueError: If no platform handles the suffix
            ArchiveReadError: If the platform cannot read the file
        """
        suffix = path.suffix.lower()
        if suffix not in cls._factories:
            available = ', '.join(cls._factories.keys()) or 'none'
            raise ValueError(
                f"Unsupported archive type: '{suffix}'. Supported types: {available}"
            )

        return cls._factories[suffix](path, **kwargs)

    @classmethod
    def list_suffixes(cls) -> list[str]:
        """List all registered archive suffixes.

        Example:
            >>> ArchiveRegistry.list_suffixes()
            ['.jar', '.zip']
        """
        return list(cls._factories.keys())

    @classmethod
    def discover_platforms(cls) -> None:
        """Auto-discover and import all platforms.

        This method iterates through the platforms/ directory and
        attempts to import each platform module. Platforms with
        missing dependencies are gracefully skipped.

        Platforms automatically register themselves when imported
        via their __init__.py files.
        """
        platforms_dir = Path(__file__).parent / 'platforms'

        if not platforms_dir.exists():
            return

        for platform_path in sorted(platforms_dir.iterdir()):
            if not platform_path.is_dir():
                continue

            if not (platform_path / '__init__.py').exists():
                continue

            try:
                # This triggers auto-registration via the platform's __init__.py
                importlib.import_module(
                    f'.platforms.{platform_path.name}',
                    package=__package__,
                )
            except ImportError:
                # Platform dependencies not installed, skip silently
                pass
