"""Constants for file-manager."""

# Version-control metadata, excluded at any depth
VCS_IGNORE_PATTERN = "**/.git/**"

# Dependency cache, excluded at any depth
DEPENDENCY_CACHE_IGNORE_PATTERN = "**/node_modules/**"

# Built-in patterns, always first in every ignore list
DEFAULT_IGNORE_PATTERNS = (DEPENDENCY_CACHE_IGNORE_PATTERN, VCS_IGNORE_PATTERN)

# Configuration file looked up by the CLI when --config is not given
CONFIG_FILE = "file-manager.yaml"

# Version
FILE_MANAGER_VERSION = "0.1.0"
