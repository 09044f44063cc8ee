"""file-manager: filtered copy of a file tree through memory.

Reads every non-ignored file under a source directory into a
``FileDataCollection``, lets the caller transform it, then writes it to a
destination directory (optionally cleaning it first).
"""

from .config import FileManagerConfig, load_config
from .constants import DEFAULT_IGNORE_PATTERNS, FILE_MANAGER_VERSION
from .errors import (
    CleanError,
    ConfigError,
    DestDirectoryNotSetError,
    FileManagerError,
    FileManagerErrorType,
    FileReadError,
    FileWriteError,
    SourceDirectoryNotFoundError,
    SourceDirectoryNotSetError,
)
from .manager import FileManager
from .models import FileData, FileDataCollection, FileEntry, ReadResult

__version__ = FILE_MANAGER_VERSION
__all__ = [
    "CleanError",
    "ConfigError",
    "DEFAULT_IGNORE_PATTERNS",
    "DestDirectoryNotSetError",
    "FileData",
    "FileDataCollection",
    "FileEntry",
    "FileManager",
    "FileManagerConfig",
    "FileManagerError",
    "FileManagerErrorType",
    "FileReadError",
    "FileWriteError",
    "ReadResult",
    "SourceDirectoryNotFoundError",
    "SourceDirectoryNotSetError",
    "load_config",
]
