"""Utility functions for file-manager."""

from pathlib import Path, PurePosixPath
from typing import Union


def humanize_size(size: float) -> str:
    """Convert bytes to human-readable format."""
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024.:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"


def to_posix(path: Union[str, Path]) -> str:
    """Normalize a relative path to a POSIX string.

    Backslashes are treated as separators and ``.`` segments are dropped,
    so ``"dir\\.\\file.txt"`` becomes ``"dir/file.txt"``.
    """
    if isinstance(path, Path):
        path = path.as_posix()
    return PurePosixPath(path.replace("\\", "/")).as_posix()


def safe_target(root: Path, rel_path: str) -> Path:
    """Validate a relative path and join it onto ``root``.

    Args:
        root: Destination root directory
        rel_path: Relative path from a file collection

    Returns:
        Absolute target path inside ``root``

    Raises:
        ValueError: If the path is empty, absolute, contains ``..``, or
            resolves outside ``root``
    """
    if not rel_path or not rel_path.strip():
        raise ValueError("Unsafe path: empty path")

    # Check both forward and backslash for cross-platform safety
    if (rel_path.startswith(("/", "\\")) or
        Path(rel_path).is_absolute() or
        ".." in rel_path.replace("\\", "/").split("/")):
        raise ValueError(f"Unsafe path: {rel_path}")

    root_resolved = root.resolve()
    target = (root_resolved / to_posix(rel_path)).resolve()

    try:
        target.relative_to(root_resolved)
    except ValueError:
        raise ValueError(f"Path escapes destination root: {rel_path}")

    if target == root_resolved:
        raise ValueError(f"Unsafe path: {rel_path}")

    return target
