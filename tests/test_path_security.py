"""Test path security and traversal prevention."""

import pytest

from file_manager.utils import humanize_size, safe_target, to_posix


class TestPathSecurity:
    """Test path traversal prevention."""

    def test_reject_absolute_paths(self, tmp_path):
        """Test that absolute paths are rejected."""
        with pytest.raises(ValueError, match="Unsafe path"):
            safe_target(tmp_path, "/etc/passwd")

        with pytest.raises(ValueError, match="Unsafe path"):
            safe_target(tmp_path, "\\windows\\system32\\config")

    def test_reject_parent_traversal(self, tmp_path):
        """Test that parent directory traversal is blocked."""
        for rel in ["../etc/passwd", "../../secret.txt", "some/../../path", "foo/../../../bar"]:
            with pytest.raises(ValueError, match="Unsafe path"):
                safe_target(tmp_path, rel)

    def test_reject_windows_traversal(self, tmp_path):
        """Test that Windows-style traversal is blocked."""
        with pytest.raises(ValueError, match="Unsafe path"):
            safe_target(tmp_path, "..\\..\\windows")

        with pytest.raises(ValueError, match="Unsafe path"):
            safe_target(tmp_path, "dir\\..\\..\\etc")

    def test_accept_safe_paths(self, tmp_path):
        """Test that safe paths are accepted."""
        safe_paths = [
            "file.txt",
            "dir/file.txt",
            "deep/nested/dir/file.txt",
            ".hidden/file.txt",
            "file.multiple.dots.txt",
            "..dots-in-name.txt",
        ]

        for path in safe_paths:
            result = safe_target(tmp_path, path)
            assert result.is_absolute()
            assert result.is_relative_to(tmp_path.resolve())

    def test_safe_path_normalization(self, tmp_path):
        """Test that safe paths are properly normalized."""
        root = tmp_path.resolve()
        assert safe_target(tmp_path, "dir//file.txt") == root / "dir" / "file.txt"
        assert safe_target(tmp_path, "./file.txt") == root / "file.txt"
        assert safe_target(tmp_path, "dir/./file.txt") == root / "dir" / "file.txt"

    def test_empty_path(self, tmp_path):
        """Test handling of empty paths."""
        for rel in ["", "   ", ".", "./"]:
            with pytest.raises(ValueError, match="Unsafe path"):
                safe_target(tmp_path, rel)

    def test_symlink_escape(self, tmp_path):
        """A symlinked directory pointing outside the root is rejected."""
        root = tmp_path / "root"
        root.mkdir()
        outside = tmp_path / "outside"
        outside.mkdir()
        (root / "link").symlink_to(outside)

        with pytest.raises(ValueError, match="escapes destination root"):
            safe_target(root, "link/file.txt")


class TestHelpers:
    """Small path and formatting helpers."""

    def test_to_posix(self):
        assert to_posix("a\\b\\c.txt") == "a/b/c.txt"
        assert to_posix("./a/./b.txt") == "a/b.txt"

    def test_humanize_size(self):
        assert humanize_size(0) == "0.0 B"
        assert humanize_size(2048) == "2.0 KB"
        assert humanize_size(5 * 1024 ** 3) == "5.0 GB"
