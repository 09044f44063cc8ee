"""Core data models for file-manager."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel


# ============= Discovery =============

@dataclass(frozen=True)
class FileEntry:
    """A regular file discovered under the source root.

    ``relative_path`` is always a POSIX string relative to the source root,
    with no leading separator and no ``..`` segments.
    """

    relative_path: str
    absolute_path: Path
    stats: os.stat_result

    @property
    def size(self) -> int:
        return self.stats.st_size


# ============= File Contents =============

class FileData(BaseModel):
    """In-memory contents of one file.

    ``metadata`` is free-form and reserved for downstream transformation
    stages; the read pass never populates it.
    """

    contents: bytes
    metadata: Optional[Dict[str, Any]] = None

    @property
    def size(self) -> int:
        return len(self.contents)


# Collection of files, keyed by relative path
FileDataCollection = Dict[str, FileData]

# What write_files accepts: FileData or raw bytes per path
WritableCollection = Dict[str, Union[FileData, bytes]]


@dataclass(frozen=True)
class ReadResult:
    """Result of reading a single entry."""

    entry: FileEntry
    contents: bytes


def total_size(files: FileDataCollection) -> int:
    """Sum of content sizes in a collection."""
    return sum(data.size for data in files.values())
