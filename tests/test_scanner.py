"""Tests for source tree traversal."""

import os
import sys

import pytest

from file_manager.errors import (
    FileManagerErrorType,
    SourceDirectoryNotFoundError,
    SourceDirectoryNotSetError,
)
from file_manager.scanner import check_source_dir, scan_files


def _paths(entries):
    return [e.relative_path for e in entries]


class TestCheckSourceDir:
    """Precondition checks that run before any walk."""

    def test_not_set(self):
        with pytest.raises(SourceDirectoryNotSetError) as exc_info:
            check_source_dir(None)
        assert exc_info.value.kind == FileManagerErrorType.SOURCE_DIR_NOT_SET

        with pytest.raises(SourceDirectoryNotSetError):
            check_source_dir("")

    def test_missing(self, tmp_path):
        missing = tmp_path / "nonexistent"
        with pytest.raises(SourceDirectoryNotFoundError) as exc_info:
            check_source_dir(missing)
        assert str(exc_info.value).startswith(f"Source directory not found: {missing}")
        assert isinstance(exc_info.value.cause, FileNotFoundError)

    def test_file_is_not_a_source(self, tmp_path):
        f = tmp_path / "file.txt"
        f.write_text("x")
        with pytest.raises(SourceDirectoryNotFoundError):
            check_source_dir(f)

    def test_returns_absolute(self, source_dir, monkeypatch):
        monkeypatch.chdir(source_dir.parent)
        root = check_source_dir("source")
        assert root.is_absolute()
        assert root.resolve() == source_dir.resolve()


class TestScanFiles:
    """Traversal and filtering."""

    def test_finds_nested_files(self, source_dir, test_files):
        files = test_files()
        entries = scan_files(source_dir)

        assert _paths(entries) == sorted(files)
        for entry in entries:
            assert entry.absolute_path == files[entry.relative_path]
            assert entry.size == files[entry.relative_path].stat().st_size

    def test_directories_not_returned(self, source_dir, write_file):
        write_file("a/b/c.txt")
        (source_dir / "empty").mkdir()

        assert _paths(scan_files(source_dir)) == ["a/b/c.txt"]

    def test_relative_paths_are_posix_and_contained(self, source_dir, write_file):
        write_file("deep/nested/dir/file.txt")
        write_file("top.txt")

        for path in _paths(scan_files(source_dir)):
            assert not path.startswith("/")
            assert "\\" not in path
            assert ".." not in path.split("/")

    def test_defaults_excluded(self, source_dir, write_file):
        write_file(".git/config")
        write_file("pkg/.git/HEAD")
        write_file("node_modules/lib/index.js")
        write_file("site/node_modules/lib/index.js")
        write_file("index.html")

        assert _paths(scan_files(source_dir)) == ["index.html"]

    def test_dotfiles_included(self, source_dir, write_file):
        write_file(".env")
        write_file(".github/workflows/ci.yml")
        write_file("docs/.nojekyll")

        assert _paths(scan_files(source_dir)) == [
            ".env",
            ".github/workflows/ci.yml",
            "docs/.nojekyll",
        ]

    def test_user_patterns(self, source_dir, write_file):
        write_file("file1.txt")
        write_file("file2.md")
        write_file("docs/guide.md")
        write_file("build/out.js")
        write_file("notes.tmp")
        write_file("site/cache.tmp")

        entries = scan_files(source_dir, ["*.md", "build/", "**/*.tmp"])
        assert _paths(entries) == ["docs/guide.md", "file1.txt"]

    def test_recursive_user_patterns(self, source_dir, write_file):
        write_file("file1.txt")
        write_file("file2.md")
        write_file("docs/guide.md")
        write_file("site/build/out.js")

        entries = scan_files(source_dir, ["**/*.md", "**/build/"])
        assert _paths(entries) == ["file1.txt"]

    def test_deterministic_order(self, source_dir, write_file):
        for name in ["z.txt", "a.txt", "m/b.txt", "m/a.txt", "B.txt"]:
            write_file(name)

        first = _paths(scan_files(source_dir))
        assert first == sorted(first)
        assert first == _paths(scan_files(source_dir))

    def test_empty_source(self, source_dir):
        assert scan_files(source_dir) == []

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_symlinks(self, source_dir, tmp_path, write_file):
        target = write_file("real.txt", "real")
        os.symlink(target, source_dir / "link.txt")
        os.symlink(source_dir / "missing.txt", source_dir / "broken.txt")

        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "secret.txt").write_text("secret")
        os.symlink(outside, source_dir / "linked_dir")

        # File and directory links are followed; broken links are skipped
        assert _paths(scan_files(source_dir)) == [
            "link.txt",
            "linked_dir/secret.txt",
            "real.txt",
        ]

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_symlink_cycle_walked_once(self, source_dir, write_file):
        write_file("a/file.txt")
        write_file("b/other.txt")
        os.symlink(source_dir, source_dir / "a" / "loop")
        os.symlink(source_dir / "a", source_dir / "b" / "back")

        assert _paths(scan_files(source_dir)) == ["a/file.txt", "b/other.txt"]

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_linked_directory_is_filtered(self, source_dir, tmp_path, write_file):
        shared = tmp_path / "shared"
        shared.mkdir()
        (shared / "logo.png").write_bytes(b"\x89PNG")
        (shared / "notes.md").write_text("notes")
        os.symlink(shared, source_dir / "assets")
        write_file("index.html")

        entries = scan_files(source_dir, ["assets/*.md"])
        assert _paths(entries) == ["assets/logo.png", "index.html"]
