"""FileManager: configure once, then read a source tree and write it back out.

Typical use::

    manager = FileManager()
    manager.set_source_dir("./content")
    manager.set_dest_dir("./dist")
    manager.set_should_clean(True)
    manager.set_ignore_patterns(["*.tmp", "*.log"])

    files = await manager.read_files()
    # transform files in memory...
    await manager.write_files(files)

Configuration is held as a validated ``FileManagerConfig``; each setter
replaces it with a new validated instance. Finish configuring before
starting any read or write.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from .config import FileManagerConfig
from .errors import DestDirectoryNotSetError, SourceDirectoryNotSetError
from .ignore import combine_patterns
from .models import FileDataCollection, FileEntry, WritableCollection
from .ops import clean_directory, read_entries, write_collection
from .scanner import check_source_dir, scan_files

logger = logging.getLogger(__name__)


class FileManager:
    """Reads files from a source directory and writes them to a destination."""

    def __init__(self, config: Optional[FileManagerConfig] = None):
        self._config = config.model_copy() if config else FileManagerConfig()

    @classmethod
    def from_config(cls, config: FileManagerConfig) -> "FileManager":
        return cls(config)

    @property
    def config(self) -> FileManagerConfig:
        """Snapshot of the current configuration."""
        return self._config.model_copy(deep=True)

    def _update(self, **changes: Any) -> None:
        self._config = FileManagerConfig.model_validate({**self._config.model_dump(), **changes})

    # ============= Configuration =============

    def set_source_dir(self, path: Union[str, Path]) -> None:
        """Set the source directory.

        Raises:
            SourceDirectoryNotSetError: If ``path`` is empty
        """
        logger.debug("Setting source directory: %s", path)
        if not path:
            logger.info("Source directory is required")
            raise SourceDirectoryNotSetError("Source directory is required")
        self._update(source_dir=Path(path))
        logger.info("Source directory set to: %s", path)

    def get_source_dir(self) -> Optional[Path]:
        return self._config.source_dir

    def set_dest_dir(self, path: Optional[Union[str, Path]] = None) -> None:
        """Set (or clear) the destination directory. Checked at write time."""
        self._update(dest_dir=Path(path) if path else None)
        logger.info("Destination directory set to: %s", path or "none")

    def get_dest_dir(self) -> Optional[Path]:
        return self._config.dest_dir

    def set_should_clean(self, clean: bool) -> None:
        self._update(should_clean=clean)
        logger.info("Clean mode set to: %s", clean)

    def get_should_clean(self) -> bool:
        return self._config.should_clean

    def set_ignore_patterns(self, patterns: List[str]) -> None:
        """Replace user ignore patterns; the built-in defaults always stay first.

        Each pattern is stripped of surrounding whitespace. Blank patterns
        and copies of the built-in defaults are dropped. Patterns match the
        root-relative path; ``*.md`` only matches at the root, ``**/*.md``
        at any depth.
        """
        self._update(ignore_patterns=combine_patterns(patterns))
        logger.info("Ignore patterns updated, total patterns: %d", len(self._config.ignore_patterns))
        logger.debug("Full ignore patterns: %s", self._config.ignore_patterns)

    def get_ignore_patterns(self) -> List[str]:
        return list(self._config.ignore_patterns)

    def set_max_concurrency(self, limit: Optional[int]) -> None:
        """Bound concurrent file operations per batch (None for unbounded)."""
        self._update(max_concurrency=limit)

    # ============= Operations =============

    async def list_files(self) -> List[FileEntry]:
        """Discover the files ``read_files`` would read, without reading them.

        Raises:
            SourceDirectoryNotSetError: If no source directory is set
            SourceDirectoryNotFoundError: If the source directory is inaccessible
        """
        root = await asyncio.to_thread(check_source_dir, self._config.source_dir)
        logger.debug("Finding files in source directory")
        return await asyncio.to_thread(scan_files, root, self._config.ignore_patterns)

    async def read_files(self) -> FileDataCollection:
        """Read every non-ignored file under the source directory.

        Raises:
            SourceDirectoryNotSetError: If no source directory is set
            SourceDirectoryNotFoundError: If the source directory is inaccessible
            FileReadError: If any file cannot be read; no partial result
        """
        logger.debug("Starting read_files operation")
        entries = await self.list_files()
        logger.info("Found files: %d", len(entries))

        files = await read_entries(entries, self._config.max_concurrency)
        logger.info("Successfully read all files, total count: %d", len(files))
        return files

    async def write_files(self, files: WritableCollection) -> None:
        """Write a collection under the destination directory.

        Cleans the destination first when ``should_clean`` is set.

        Raises:
            DestDirectoryNotSetError: If no destination directory is set
            CleanError: If the destination cannot be cleaned
            FileWriteError: If any file cannot be written
        """
        logger.debug("Starting write_files operation")
        dest = self._config.dest_dir
        if not dest:
            logger.info("Destination directory not set")
            raise DestDirectoryNotSetError()

        if self._config.should_clean:
            logger.info("Cleaning destination directory: %s", dest)
            await clean_directory(dest)

        logger.info("Writing files, total count: %d", len(files))
        await write_collection(dest, files, self._config.max_concurrency)
        logger.info("Successfully wrote all files")

    async def copy(self) -> FileDataCollection:
        """Read the source tree and write it to the destination unchanged."""
        files = await self.read_files()
        await self.write_files(files)
        return files
