#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/cli/ignore.py
"""Gitignore-style ignore rules for directory traversal.

Rules come from ``.gitignore`` and ``.dapperignore`` in the root of a
directory scan, after the built-in :data:`~dapper.constants.DEFAULT_IGNORE_PATTERNS`.
Patterns are matched with :mod:`fnmatch`:

- blank lines and lines starting with ``#`` are skipped
- ``!pattern`` re-includes paths matched by an earlier rule
- ``pattern/`` only matches directories
- a pattern containing ``/`` is matched against the path relative to the
  root; any other pattern is matched against each path component

When several rules match a path, the last one wins.
"""

from __future__ import annotations

import fnmatch
import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Iterable, Optional, Union

from dapper.constants import DEFAULT_IGNORE_PATTERNS, IGNORE_FILENAMES, IGNORED_DIRECTORIES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IgnorePattern:
    """A single parsed ignore pattern.

    Parameters
    ----------
    pattern : str
        The glob, without ``!``, leading ``/`` or trailing ``/``
    negated : bool
        Whether the line started with ``!``
    directory_only : bool
        Whether the line ended with ``/``
    anchored : bool
        Whether the pattern is matched against the whole relative path

    """

    pattern: str
    negated: bool = False
    directory_only: bool = False
    anchored: bool = False

    @classmethod
    def parse(cls, line: str) -> Optional["IgnorePattern"]:
        """Parse one line of an ignore file, or return None for blanks and comments."""
        text = line.strip()
        if not text or text.startswith("#"):
            return None

        negated = text.startswith("!")
        if negated:
            text = text[1:]

        directory_only = text.endswith("/")
        text = text.rstrip("/")

        anchored = "/" in text
        text = text.lstrip("/")
        if not text:
            return None

        return cls(pattern=text, negated=negated, directory_only=directory_only, anchored=anchored)

    def matches(self, relative_path: str, is_dir: bool) -> bool:
        """Return True if this pattern matches ``relative_path`` (POSIX, root-relative)."""
        if self.directory_only and not is_dir:
            return False
        if self.anchored:
            return fnmatch.fnmatchcase(relative_path, self.pattern)
        return fnmatch.fnmatchcase(PurePosixPath(relative_path).name, self.pattern)


@dataclass
class IgnoreRules:
    """Ordered ignore patterns relative to a root directory.

    Parameters
    ----------
    root : Path
        Directory that anchored patterns are relative to
    patterns : list of IgnorePattern
        Patterns in file order; later patterns override earlier ones

    Examples
    --------
        >>> rules = IgnoreRules.from_lines(Path("."), ["build/", "*.md", "!README.md"])
        >>> rules.is_ignored(Path("docs/guide.md"))
        True
        >>> rules.is_ignored(Path("README.md"))
        False

    """

    root: Path
    patterns: list[IgnorePattern] = field(default_factory=list)

    @classmethod
    def from_lines(cls, root: Path, lines: Iterable[str]) -> "IgnoreRules":
        """Build rules from ignore-file lines, after the default patterns."""
        patterns = []
        for line in list(DEFAULT_IGNORE_PATTERNS) + list(lines):
            pattern = IgnorePattern.parse(line)
            if pattern is not None:
                patterns.append(pattern)
        return cls(root=root, patterns=patterns)

    @classmethod
    def load(cls, root: Union[str, Path]) -> "IgnoreRules":
        """Load ``.gitignore`` then ``.dapperignore`` from ``root``.

        Unreadable ignore files are logged and skipped.
        """
        root_path = Path(root)
        lines: list[str] = []
        for filename in IGNORE_FILENAMES:
            ignore_file = root_path / filename
            if not ignore_file.is_file():
                continue
            try:
                lines.extend(ignore_file.read_text(encoding="utf-8").splitlines())
                logger.debug("Loaded ignore rules from %s", ignore_file)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Could not read %s: %s", ignore_file, e)
        return cls.from_lines(root_path, lines)

    def _relative(self, path: Path) -> Optional[str]:
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return None

    def _match(self, relative_path: str, is_dir: bool) -> bool:
        ignored = False
        for pattern in self.patterns:
            if pattern.matches(relative_path, is_dir):
                ignored = not pattern.negated
        return ignored

    def is_ignored(self, path: Path, is_dir: Optional[bool] = None) -> bool:
        """Return True if ``path`` or one of its parent directories is ignored.

        Parameters
        ----------
        path : Path
            Path under :attr:`root` (absolute, or relative to the same base
            as ``root``)
        is_dir : bool, optional
            Whether ``path`` is a directory; looked up on disk when omitted

        Returns
        -------
        bool
            True when the path is excluded from formatting. Paths outside
            the root are never ignored by patterns.

        """
        if is_dir is None:
            is_dir = path.is_dir()

        if is_dir and path.name in IGNORED_DIRECTORIES:
            return True

        relative = self._relative(path)
        if relative is None or relative == ".":
            return False

        parts = relative.split("/")
        for depth in range(1, len(parts)):
            parent = "/".join(parts[:depth])
            if parts[depth - 1] in IGNORED_DIRECTORIES or self._match(parent, True):
                return True

        return self._match(relative, is_dir)


__all__ = ["IgnorePattern", "IgnoreRules"]
