"""Custom exceptions for file-manager.

Every error raised by the read/write/clean operations is a
``FileManagerError`` carrying a machine-readable ``kind``, a human-readable
message, the offending path (when there is one) and the underlying cause.
One subclass exists per kind so callers can catch either the base class and
switch on ``kind``, or catch the specific subclass.
"""

from enum import Enum
from typing import Optional


class FileManagerErrorType(str, Enum):
    """Kinds of failure a file operation can report."""

    SOURCE_DIR_NOT_SET = "SOURCE_DIR_NOT_SET"
    SOURCE_DIR_NOT_FOUND = "SOURCE_DIR_NOT_FOUND"
    DEST_DIR_NOT_SET = "DEST_DIR_NOT_SET"
    FILE_READ_ERROR = "FILE_READ_ERROR"
    FILE_WRITE_ERROR = "FILE_WRITE_ERROR"
    CLEAN_ERROR = "CLEAN_ERROR"
    CONFIG_ERROR = "CONFIG_ERROR"


class FileManagerError(RuntimeError):
    """Base class for all file-manager errors."""

    kind: FileManagerErrorType

    def __init__(
        self,
        kind: FileManagerErrorType,
        message: str,
        path: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        self.kind = kind
        self.message = message
        self.path = path
        self.cause = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message} ({self.cause})"
        return self.message


# Configuration Errors
class SourceDirectoryNotSetError(FileManagerError):
    """No source directory configured (or an empty one was given)."""

    def __init__(self, message: str = "Source directory must be set before reading files"):
        super().__init__(FileManagerErrorType.SOURCE_DIR_NOT_SET, message)


class SourceDirectoryNotFoundError(FileManagerError):
    """Configured source directory is missing or inaccessible."""

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        super().__init__(
            FileManagerErrorType.SOURCE_DIR_NOT_FOUND,
            f"Source directory not found: {path}",
            path=path,
            cause=cause,
        )


class DestDirectoryNotSetError(FileManagerError):
    """No destination directory configured."""

    def __init__(self):
        super().__init__(
            FileManagerErrorType.DEST_DIR_NOT_SET,
            "Destination directory must be set before writing files",
        )


class ConfigError(FileManagerError):
    """Configuration file missing or invalid."""

    def __init__(self, message: str, path: Optional[str] = None, cause: Optional[BaseException] = None):
        super().__init__(FileManagerErrorType.CONFIG_ERROR, message, path=path, cause=cause)


# I/O Errors
class FileReadError(FileManagerError):
    """A single file in a batch read failed."""

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        super().__init__(
            FileManagerErrorType.FILE_READ_ERROR,
            f"Failed to read file: {path}",
            path=path,
            cause=cause,
        )


class FileWriteError(FileManagerError):
    """A single file in a batch write (or its directory creation) failed."""

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        super().__init__(
            FileManagerErrorType.FILE_WRITE_ERROR,
            f"Failed to write file: {path}",
            path=path,
            cause=cause,
        )


class CleanError(FileManagerError):
    """Clearing the destination directory failed."""

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        super().__init__(
            FileManagerErrorType.CLEAN_ERROR,
            f"Failed to clean directory: {path}",
            path=path,
            cause=cause,
        )
