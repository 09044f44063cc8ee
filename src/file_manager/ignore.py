"""Gitignore-style pattern matching for file-manager.

Every pattern is matched against the whole root-relative POSIX path. A
pattern without a leading ``**`` is anchored at the source root, so ``*.md``
matches ``README.md`` but not ``docs/guide.md``; write ``**/*.md`` to match
at any depth. ``*`` never crosses a ``/``.
"""

from typing import Iterable, List

from pathspec import PathSpec

from .constants import DEFAULT_IGNORE_PATTERNS


# Default patterns to always ignore
DEFAULTS: List[str] = list(DEFAULT_IGNORE_PATTERNS)


def combine_patterns(extra: Iterable[str] = ()) -> List[str]:
    """Return the built-in defaults followed by ``extra``.

    Surrounding whitespace is stripped and blank entries are dropped.
    Defaults are never duplicated, so combining an already-combined list
    yields the same list.
    """
    patterns = list(DEFAULTS)
    for pattern in extra:
        pattern = pattern.strip()
        if not pattern or pattern in DEFAULTS:
            continue
        patterns.append(pattern)
    return patterns


def anchor_pattern(pattern: str) -> str:
    """Anchor a pattern at the root unless it already starts with ``/`` or ``**``.

    A leading ``!`` (re-include) is preserved in front of the anchor.
    """
    negated = pattern.startswith("!")
    body = pattern[1:] if negated else pattern
    if not body.startswith(("/", "**")):
        body = "/" + body
    return "!" + body if negated else body


class IgnoreSpec:
    """Compiled exclusion patterns for one traversal."""

    def __init__(self, patterns: Iterable[str] = ()):
        """Compile ignore patterns.

        Args:
            patterns: Root-relative globs (gitignore syntax). The built-in
                defaults are always included. A leading ``!`` re-includes
                paths matched by an earlier pattern, but cannot bring back
                files under a directory that was pruned.
        """
        self.patterns = combine_patterns(patterns)
        self.spec = PathSpec.from_lines("gitignore", [anchor_pattern(p) for p in self.patterns])

    def is_ignored(self, relpath: str) -> bool:
        """Check if a root-relative POSIX path should be excluded."""
        return self.spec.match_file(relpath)

    def should_traverse(self, dirpath: str) -> bool:
        """Check if a directory should be descended into during a walk.

        Args:
            dirpath: Root-relative directory path in POSIX format

        Returns:
            False when the directory itself is excluded
        """
        # Trailing slash so directory-only patterns match
        if not dirpath.endswith("/"):
            dirpath = dirpath + "/"

        return not self.spec.match_file(dirpath)
