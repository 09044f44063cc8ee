"""File manager configuration model and YAML loading."""

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError
from .ignore import DEFAULTS, combine_patterns


class FileManagerConfig(BaseModel):
    """
    Configuration for one file manager.

    ``ignore_patterns`` always starts with the built-in defaults; any list
    assigned to it is re-combined with them on validation.
    """

    source_dir: Optional[Path] = None
    dest_dir: Optional[Path] = None
    should_clean: bool = False
    ignore_patterns: List[str] = Field(default_factory=lambda: list(DEFAULTS))
    # None means unbounded fan-out
    max_concurrency: Optional[int] = Field(None, ge=1)

    @field_validator("ignore_patterns")
    @classmethod
    def _with_defaults(cls, value: List[str]) -> List[str]:
        return combine_patterns(value)

    @property
    def user_patterns(self) -> List[str]:
        """Patterns beyond the built-in defaults."""
        return self.ignore_patterns[len(DEFAULTS):]


def load_config(path: Path) -> FileManagerConfig:
    """Load configuration from a YAML file.

    Recognised keys: ``source_dir``, ``dest_dir``, ``clean``, ``ignore``
    and ``max_concurrency``. Relative directories resolve against the
    directory containing the file.

    Raises:
        ConfigError: If the file is missing, is not valid YAML, or holds
            invalid values
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"Config file '{path}' does not exist", path=str(path))

    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not read config file '{path}'", path=str(path), cause=e) from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{path}' must contain a mapping", path=str(path))

    base = path.parent

    def _resolve(value: Optional[str]) -> Optional[Path]:
        if not value:
            return None
        p = Path(value).expanduser()
        return p if p.is_absolute() else base / p

    ignore = data.get("ignore", [])
    if isinstance(ignore, str):
        ignore = [ignore]

    try:
        return FileManagerConfig(
            source_dir=_resolve(data.get("source_dir")),
            dest_dir=_resolve(data.get("dest_dir")),
            should_clean=data.get("clean", False),
            ignore_patterns=ignore,
            max_concurrency=data.get("max_concurrency"),
        )
    except (ValidationError, TypeError) as e:
        raise ConfigError(f"Invalid config file '{path}'", path=str(path), cause=e) from e
