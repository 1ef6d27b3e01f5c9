"""Jar platform for the ingestion pipeline.

This platform reads zip-packaged mod archives (``.jar`` and ``.zip``).
"""

from pathlib import Path

from .source import JarSource

# Auto-register with the registry
from ...registry import ArchiveRegistry


def _create_jar_source(path: Path, **kwargs) -> JarSource:
    """Factory function for creating jar sources.

    Args:
        path: Archive file to open
        **kwargs: Additional parameters (unused for jars)

    Returns:
        JarSource instance
    """
    return JarSource(path)


# Auto-register at module import
ArchiveRegistry.register_factory(".jar", _create_jar_source)
ArchiveRegistry.register_factory(".zip", _create_jar_source)

__all__ = ["JarSource"]
