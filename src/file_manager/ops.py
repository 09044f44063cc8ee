"""Core batch operations for file-manager.

Reads, writes and the destination clean all run blocking filesystem calls on
worker threads (``asyncio.to_thread``) and fan back in with
``asyncio.gather``. Batches are all-or-nothing from the caller's point of
view: the first failure is raised as a typed error. Work already finished by
other files in the batch is not rolled back.
"""

import asyncio
import logging
import os
import shutil
import stat
import tempfile
from pathlib import Path
from typing import Awaitable, Iterable, List, Optional, TypeVar, Union

from .errors import CleanError, FileReadError, FileWriteError
from .models import FileData, FileDataCollection, FileEntry, ReadResult, WritableCollection
from .utils import safe_target

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ============= Concurrency Helpers =============

async def _gather(aws: Iterable[Awaitable[T]], max_concurrency: Optional[int] = None) -> List[T]:
    """Await all ``aws`` concurrently, optionally at most ``max_concurrency`` at a time.

    The first exception propagates to the caller.
    """
    if max_concurrency is None:
        return await asyncio.gather(*aws)

    semaphore = asyncio.Semaphore(max_concurrency)

    async def bounded(aw: Awaitable[T]) -> T:
        async with semaphore:
            return await aw

    return await asyncio.gather(*(bounded(aw) for aw in aws))


# ============= Blocking Primitives =============

def _read_bytes(path: Path) -> bytes:
    """Read a whole file into memory."""
    with open(path, "rb") as f:
        return f.read()


def _ensure_parent(path: Path) -> None:
    """Create missing parent directories (idempotent)."""
    path.parent.mkdir(parents=True, exist_ok=True)


def _new_file_mode() -> int:
    """Permission bits for newly created files: 0o666 masked by the umask."""
    # The umask can only be read by setting it
    umask = os.umask(0o022)
    os.umask(umask)
    return 0o666 & ~umask


def _atomic_write_bytes(path: Path, contents: bytes, mode: Optional[int] = None) -> None:
    """Atomically write bytes to a file, replacing any existing file.

    Writes to a temp file in the same directory, fsyncs it, then renames it
    over the target so readers never see a half-written file.

    Args:
        path: Target file
        contents: Bytes to write
        mode: Permission bits for a new file. An existing target keeps its
            own mode. None leaves the temp file's private 0o600.
    """
    with tempfile.NamedTemporaryFile(
        mode="wb",
        delete=False,
        dir=path.parent,
        prefix=f".{path.name}.tmp-",
        suffix=""
    ) as f:
        f.write(contents)
        f.flush()
        os.fsync(f.fileno())
        tmp = Path(f.name)

    try:
        try:
            mode = stat.S_IMODE(path.stat().st_mode)
        except FileNotFoundError:
            pass
        if mode is not None:
            os.chmod(tmp, mode)
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise


def _remove_entry(path: Path) -> None:
    """Remove a file, symlink, or directory tree. Symlinks are never followed."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


# ============= Batch Reader =============

async def read_entry(entry: FileEntry) -> ReadResult:
    """Read one entry's contents.

    Raises:
        FileReadError: If the read fails, naming the absolute path
    """
    logger.debug("Reading file: %s", entry.absolute_path)
    try:
        contents = await asyncio.to_thread(_read_bytes, entry.absolute_path)
    except OSError as e:
        logger.info("Failed to read file: %s (%s)", entry.absolute_path, e)
        raise FileReadError(str(entry.absolute_path), cause=e) from e
    logger.debug("Successfully read file: %s", entry.relative_path)
    return ReadResult(entry=entry, contents=contents)


async def read_entries(
    entries: List[FileEntry], max_concurrency: Optional[int] = None
) -> FileDataCollection:
    """Read every entry concurrently into a collection keyed by relative path.

    All-or-nothing: if any read fails the whole call raises ``FileReadError``
    and no collection is returned.
    """
    results = await _gather((read_entry(entry) for entry in entries), max_concurrency)
    logger.debug("Finished reading all files")

    files: FileDataCollection = {}
    for result in results:
        files[result.entry.relative_path] = FileData(contents=result.contents)
    return files


# ============= Destination Cleaner =============

def _clean_directory_sync(dest: Path) -> bool:
    try:
        st = dest.stat()
    except FileNotFoundError:
        logger.info("Destination directory does not exist, nothing to clean: %s", dest)
        return False
    except OSError as e:
        raise CleanError(str(dest), cause=e) from e

    if not stat.S_ISDIR(st.st_mode):
        err = NotADirectoryError(f"Not a directory: {dest}")
        raise CleanError(str(dest), cause=err) from err

    try:
        for name in sorted(os.listdir(dest)):
            _remove_entry(dest / name)
    except OSError as e:
        raise CleanError(str(dest), cause=e) from e
    return True


async def clean_directory(dest: Union[str, Path]) -> bool:
    """Remove everything inside ``dest``, keeping ``dest`` itself.

    A missing ``dest`` is not an error; nothing is removed.

    Returns:
        True if a clean was performed, False if ``dest`` did not exist

    Raises:
        CleanError: If ``dest`` cannot be inspected, is not a directory,
            or any entry cannot be removed
    """
    dest = Path(dest)
    logger.debug("Cleaning directory: %s", dest)
    try:
        cleaned = await asyncio.to_thread(_clean_directory_sync, dest)
    except CleanError as e:
        logger.info("Failed to clean directory: %s (%s)", dest, e.cause)
        raise
    if cleaned:
        logger.debug("Successfully cleaned directory: %s", dest)
    return cleaned


# ============= Batch Writer =============

def _write_file_sync(dest: Path, rel_path: str, contents: bytes, mode: Optional[int]) -> None:
    target = safe_target(dest, rel_path)
    _ensure_parent(target)
    _atomic_write_bytes(target, contents, mode)


async def write_file(dest: Path, rel_path: str, contents: bytes, mode: Optional[int] = None) -> None:
    """Write one file under ``dest``, creating parent directories.

    ``mode`` applies to a newly created file; an overwritten file keeps its
    existing permissions.

    Raises:
        FileWriteError: If the path is unsafe, or directory creation or the
            write itself fails
    """
    display_path = dest / rel_path
    logger.debug("Writing file: %s", display_path)
    try:
        await asyncio.to_thread(_write_file_sync, dest, rel_path, contents, mode)
    except (OSError, ValueError) as e:
        logger.info("Failed to write file: %s (%s)", display_path, e)
        raise FileWriteError(str(display_path), cause=e) from e
    logger.debug("Successfully wrote file: %s", display_path)


async def write_collection(
    dest: Union[str, Path],
    files: WritableCollection,
    max_concurrency: Optional[int] = None,
) -> None:
    """Write every file in ``files`` concurrently under ``dest``.

    The first failure is raised as ``FileWriteError``. Files written before
    the failure was detected remain on disk. New files get 0o666 masked by
    the process umask.
    """
    dest = Path(dest)
    # Read once, before any worker thread creates files
    mode = _new_file_mode()
    pending = [
        (rel_path, data.contents if isinstance(data, FileData) else bytes(data))
        for rel_path, data in files.items()
    ]
    await _gather(
        (write_file(dest, rel_path, contents, mode) for rel_path, contents in pending),
        max_concurrency,
    )
