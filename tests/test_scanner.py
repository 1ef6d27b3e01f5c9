"""Tests for scanner module."""

from pathlib import Path

import pytest

from mod_block_catalog.registry import ArchiveRegistry
from mod_block_catalog.scanner import (
    archive_path,
    archive_slug,
    sanitize_filename,
    scan_archives,
    validate_path_safety,
)


class TestSanitizeFilename:
    """Test filename sanitization."""

    def test_removes_dangerous_characters(self) -> None:
        """Test that dangerous characters are removed."""
        assert sanitize_filename("mod<test>.jar") == "modtest.jar"
        assert sanitize_filename('mod"test".jar') == "modtest.jar"
        assert sanitize_filename("mod|test.jar") == "modtest.jar"

    def test_removes_path_separators(self) -> None:
        """Test that path separators are removed."""
        assert sanitize_filename("../../../etc/passwd") == "......etcpasswd"
        assert sanitize_filename("..\\..\\..\\windows\\system32") == "......windowssystem32"

    def test_safe_filenames_unchanged(self) -> None:
        """Test that safe filenames pass through unchanged."""
        assert sanitize_filename("create-0.5.1.jar") == "create-0.5.1.jar"


class TestValidatePathSafety:
    """Test path traversal prevention."""

    def test_allows_paths_within_base(self, tmp_path: Path) -> None:
        """Test that paths within base directory are allowed."""
        # Should not raise
        validate_path_safety(tmp_path / "mods" / "doors.jar", tmp_path)

    def test_rejects_path_traversal(self, tmp_path: Path) -> None:
        """Test that path traversal attempts are rejected."""
        dangerous_path = tmp_path / ".." / ".." / "etc" / "passwd"

        with pytest.raises(ValueError, match="escapes base directory"):
            validate_path_safety(dangerous_path, tmp_path)

    def test_allows_symlinks_within_base(self, tmp_path: Path) -> None:
        """Test that symlinks within base directory are allowed."""
        target = tmp_path / "target.jar"
        link = tmp_path / "link.jar"
        target.touch()
        link.symlink_to(target)

        # Should not raise since link resolves within base
        validate_path_safety(link, tmp_path)


class TestArchiveSlug:
    """Test archive naming."""

    def test_strips_registered_suffix(self) -> None:
        """Test that .jar/.zip suffixes are dropped, any case."""
        assert archive_slug("doors-1.2.jar") == "doors-1.2"
        assert archive_slug("Pack.ZIP") == "Pack"

    def test_keeps_unknown_suffix(self) -> None:
        """Test that other suffixes are part of the slug."""
        assert archive_slug("doors.tar") == "doors.tar"

    def test_neutralizes_traversal(self) -> None:
        """Test that separators and leading dots are removed."""
        assert archive_slug("../../evil.jar") == "evil"

    def test_rejects_empty(self) -> None:
        """Test that names with nothing usable left are rejected."""
        with pytest.raises(ValueError):
            archive_slug("  ")
        with pytest.raises(ValueError):
            archive_slug("<>|")


class TestArchivePath:
    """Test archive location inside the mods directory."""

    def test_new_archive_defaults_to_jar(self, tmp_path: Path) -> None:
        """Test that unknown slugs map to <slug>.jar."""
        assert archive_path(tmp_path, "doors") == tmp_path / "doors.jar"

    def test_prefers_existing_file(self, tmp_path: Path) -> None:
        """Test that an existing .zip is found under its slug."""
        existing = tmp_path / "pack.zip"
        existing.write_bytes(b"")

        assert archive_path(tmp_path, "pack") == existing


class TestScanArchives:
    """Test mods directory scanning."""

    def test_sorted_supported_files(self, tmp_path: Path) -> None:
        """Test that archives come back sorted and filtered."""
        for name in ("b.jar", "a.zip", "c.JAR", "readme.txt", ".hidden.jar"):
            (tmp_path / name).write_bytes(b"")
        (tmp_path / "sub.jar").mkdir()

        assert [p.name for p in scan_archives(tmp_path)] == ["a.zip", "b.jar", "c.JAR"]

    def test_rejects_missing_directory(self, tmp_path: Path) -> None:
        """Test that a missing directory raises ValueError."""
        with pytest.raises(ValueError, match="does not exist"):
            scan_archives(tmp_path / "missing")

    def test_rejects_file(self, tmp_path: Path) -> None:
        """Test that a file path raises ValueError."""
        path = tmp_path / "doors.jar"
        path.write_bytes(b"")

        with pytest.raises(ValueError, match="not a directory"):
            scan_archives(path)


class TestArchiveRegistry:
    """Test suffix-based source creation."""

    def test_jar_platform_registered(self) -> None:
        """Test that importing the package registers the jar platform."""
        assert ".jar" in ArchiveRegistry.list_suffixes()
        assert ".zip" in ArchiveRegistry.list_suffixes()

    def test_unsupported_suffix(self, tmp_path: Path) -> None:
        """Test that unknown suffixes are refused."""
        with pytest.raises(ValueError, match="Unsupported archive type"):
            ArchiveRegistry.open_archive(tmp_path / "mod.rar")

    def test_opens_jar(self, make_archive, door) -> None:
        """Test that a registered jar opens and lists its entries."""
        path = make_archive("doors.jar", door)

        with ArchiveRegistry.open_archive(path) as archive:
            assert archive.slug == "doors"
            assert archive.has_entry("assets/m1/blockstates/door.json")
            assert archive.read_entry("assets/m1/missing.json") is None
