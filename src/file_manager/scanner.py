"""Source tree traversal with ignore-pattern filtering."""

import logging
import os
import stat
from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple, Union

from .errors import SourceDirectoryNotFoundError, SourceDirectoryNotSetError
from .ignore import IgnoreSpec
from .models import FileEntry

logger = logging.getLogger(__name__)


def check_source_dir(source_dir: Optional[Union[str, Path]]) -> Path:
    """Validate the configured source root before walking it.

    Returns:
        The source root as an absolute path

    Raises:
        SourceDirectoryNotSetError: If no source root is configured
        SourceDirectoryNotFoundError: If the root is missing, unreadable,
            or not a directory
    """
    if not source_dir:
        logger.info("Source directory not set")
        raise SourceDirectoryNotSetError()

    root = Path(source_dir)
    logger.debug("Verifying source directory exists: %s", root)
    try:
        st = root.stat()
    except OSError as e:
        logger.info("Source directory not found: %s", root)
        raise SourceDirectoryNotFoundError(str(source_dir), cause=e) from e

    if not os.path.isdir(root) or not os.access(root, os.R_OK | os.X_OK):
        logger.info("Source directory not accessible: %s (mode %o)", root, st.st_mode)
        raise SourceDirectoryNotFoundError(str(source_dir))

    return root.absolute()


def _dir_key(path: Path) -> Tuple[int, int]:
    """Identity of a directory, following symlinks."""
    st = path.stat()
    return st.st_dev, st.st_ino


def scan_files(root: Path, patterns: Iterable[str] = ()) -> List[FileEntry]:
    """Walk ``root`` and return every regular file not matched by ``patterns``.

    Dotfiles are included unless a pattern excludes them. Excluded
    directories are pruned rather than walked. Symlinks to files and
    directories are followed; a directory reached a second time (a symlink
    cycle, or two links to the same target) is walked only once.

    Args:
        root: Absolute source root (see ``check_source_dir``)
        patterns: Exclusion globs; the built-in defaults are always applied

    Returns:
        Entries sorted by relative path
    """
    ignore = IgnoreSpec(patterns)
    logger.debug("Scanning %s with %d ignore patterns", root, len(ignore.patterns))

    visited: Set[Tuple[int, int]] = {_dir_key(root)}
    entries: List[FileEntry] = []
    for dirpath, dirnames, filenames in os.walk(root, topdown=True, followlinks=True):
        current = Path(dirpath)
        rel_dir = current.relative_to(root)

        # Prune ignored and already-visited directories in place
        kept_dirs = []
        for d in sorted(dirnames):
            rel = (rel_dir / d).as_posix()
            if not ignore.should_traverse(rel):
                logger.debug("Skipping ignored directory: %s", rel)
                continue
            try:
                key = _dir_key(current / d)
            except OSError as e:
                logger.debug("Skipping unreadable directory %s: %s", rel, e)
                continue
            if key in visited:
                logger.debug("Skipping already visited directory: %s", rel)
                continue
            visited.add(key)
            kept_dirs.append(d)
        dirnames[:] = kept_dirs

        for name in filenames:
            abs_path = current / name
            rel = (rel_dir / name).as_posix()
            if ignore.is_ignored(rel):
                continue

            try:
                stats = abs_path.stat()
            except OSError as e:
                # Broken symlinks and files removed mid-walk
                logger.debug("Skipping unreadable entry %s: %s", rel, e)
                continue

            if not stat.S_ISREG(stats.st_mode):
                continue

            entries.append(FileEntry(relative_path=rel, absolute_path=abs_path, stats=stats))

    entries.sort(key=lambda entry: entry.relative_path)
    logger.debug("Found %d files under %s", len(entries), root)
    return entries
