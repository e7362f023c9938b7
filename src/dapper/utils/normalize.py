#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/utils/normalize.py
"""Canonical spellings of individual Markdown constructs.

The Markdown renderer builds its output from these helpers so that each
construct has exactly one canonical form: ATX headings, ``---`` rules,
bullet glyphs, ordered list content columns and backtick code fences.
"""

from __future__ import annotations

import re

from dapper.constants import BULLET_GLYPHS


def normalize_heading(level: int, content: str) -> str:
    """Return an ATX heading line.

    Parameters
    ----------
    level : int
        Heading level; clamped to the range 1-6
    content : str
        Heading text; surrounding whitespace is trimmed

    Returns
    -------
    str
        ``'#' * level + ' ' + content``, or only the hashes when the
        content is empty

    Examples
    --------
        >>> normalize_heading(2, "  Setup  ")
        '## Setup'
        >>> normalize_heading(9, "Deep")
        '###### Deep'

    """
    hashes = "#" * min(max(level, 1), 6)
    text = content.strip()
    return f"{hashes} {text}" if text else hashes


def normalize_horizontal_rule() -> str:
    """Return the canonical thematic break."""
    return "---"


def normalize_unordered_list_marker(style: str) -> str:
    """Return the bullet glyph for a bullet style name ('dash', 'asterisk', 'plus')."""
    try:
        return BULLET_GLYPHS[style]
    except KeyError:
        raise ValueError(f"Unknown unordered list bullet style: {style!r}") from None


def ordered_list_content_indent(max_number: int) -> int:
    """Return the content column for an ordered list whose largest number is ``max_number``.

    The marker is the number, a period and a space, so content starts
    ``digits + 2`` columns in.

    Examples
    --------
        >>> ordered_list_content_indent(9)
        3
        >>> ordered_list_content_indent(10)
        4

    """
    return len(str(max(max_number, 0))) + 2


def code_fence_for(content: str, minimum: int = 3) -> str:
    """Return a backtick fence longer than any backtick run inside ``content``."""
    longest = max((len(run) for run in re.findall(r"`+", content)), default=0)
    return "`" * max(minimum, longest + 1)


__all__ = [
    "normalize_heading",
    "normalize_horizontal_rule",
    "normalize_unordered_list_marker",
    "ordered_list_content_indent",
    "code_fence_for",
]
