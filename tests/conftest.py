"""Shared test fixtures and utilities."""

import pytest

from file_manager import FileManager


@pytest.fixture
def source_dir(tmp_path):
    """Empty source directory."""
    d = tmp_path / "source"
    d.mkdir()
    return d


@pytest.fixture
def dest_dir(tmp_path):
    """Empty destination directory."""
    d = tmp_path / "dest"
    d.mkdir()
    return d


@pytest.fixture
def manager(source_dir, dest_dir):
    """FileManager pointed at source_dir and dest_dir."""
    fm = FileManager()
    fm.set_source_dir(source_dir)
    fm.set_dest_dir(dest_dir)
    return fm


@pytest.fixture
def write_file(source_dir):
    """Factory fixture to write files relative to source_dir."""
    def _write(path: str, content="test content"):
        file_path = source_dir / path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            file_path.write_bytes(content)
        else:
            file_path.write_text(content)
        return file_path
    return _write


@pytest.fixture
def test_files(write_file):
    """Create a small mixed tree in source_dir."""
    def make_files():
        return {
            "file1.txt": write_file("file1.txt", "content1"),
            "file2.txt": write_file("file2.txt", "content2"),
            "src/main.py": write_file("src/main.py", "print('hello')"),
            "data/data.csv": write_file("data/data.csv", "a,b,c\n1,2,3"),
        }
    return make_files
