#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/utils/text.py
"""Text processing utilities shared by the Markdown and YAML printers.

This module provides the small, pure string helpers the printers are built
from: greedy word wrapping, whitespace normalization, indentation and the
single-trailing-newline rule every formatter output obeys.

Functions
---------
wrap_text : Greedy word wrap at a maximum width
normalize_whitespace : Collapse runs of spaces and tabs
ensure_trailing_newline : Enforce exactly one trailing newline
indent : Build an indentation string
display_width : Terminal column width of a string
normalize_line_endings : Convert CRLF/CR line endings to LF

Examples
--------
Wrapping prose:

    >>> from dapper.utils.text import wrap_text
    >>> wrap_text("the quick brown fox", 9)
    ['the quick', 'brown fox']

Finalizing printer output:

    >>> ensure_trailing_newline("# Title\\n\\n\\n")
    '# Title\\n'

"""

from __future__ import annotations

import re
import unicodedata

_WHITESPACE_RUN = re.compile(r"\s+")
_BLANK_RUN = re.compile(r"[ \t]+")


def wrap_text(text: str, width: int) -> list[str]:
    """Greedily wrap text so no line exceeds ``width`` where possible.

    Words are split on runs of whitespace. A single word longer than
    ``width`` is placed on its own line and left overlong.

    Parameters
    ----------
    text : str
        Text to wrap
    width : int
        Maximum line width in characters

    Returns
    -------
    list[str]
        Wrapped lines. Empty text yields a single empty line.

    Raises
    ------
    ValueError
        If width is not positive

    Examples
    --------
        >>> wrap_text("aaa bbb ccc", 7)
        ['aaa bbb', 'ccc']
        >>> wrap_text("", 10)
        ['']

    """
    if width <= 0:
        raise ValueError(f"width must be positive, got {width}")

    words = [word for word in _WHITESPACE_RUN.split(text) if word]
    if not words:
        return [""]

    lines: list[str] = []
    current = words[0]
    for word in words[1:]:
        if len(current) + 1 + len(word) <= width:
            current = f"{current} {word}"
        else:
            lines.append(current)
            current = word
    lines.append(current)
    return lines


def normalize_whitespace(text: str) -> str:
    """Collapse runs of spaces and tabs to a single space and trim the ends."""
    return _BLANK_RUN.sub(" ", text).strip()


def ensure_trailing_newline(text: str) -> str:
    """Trim trailing whitespace and append exactly one newline.

    Parameters
    ----------
    text : str
        Printer output

    Returns
    -------
    str
        ``text`` ending in a single ``\\n``, or ``""`` when ``text`` is
        empty or whitespace only

    """
    trimmed = text.rstrip()
    if not trimmed:
        return ""
    return trimmed + "\n"


def indent(width: int, use_tabs: bool = False, tab_width: int = 2) -> str:
    """Build an indentation string ``width`` columns wide.

    Parameters
    ----------
    width : int
        Indentation width in columns. Non-positive widths yield ``""``.
    use_tabs : bool, default False
        Emit tabs for every full ``tab_width`` columns
    tab_width : int, default 2
        Columns per tab when ``use_tabs`` is set

    Returns
    -------
    str
        The indentation string

    """
    if width <= 0:
        return ""
    if use_tabs and tab_width > 0:
        tabs, spaces = divmod(width, tab_width)
        return "\t" * tabs + " " * spaces
    return " " * width


def display_width(text: str) -> int:
    """Return the number of terminal columns ``text`` occupies.

    East Asian wide and fullwidth characters count as two columns and
    combining marks count as zero, so table columns line up in editors.
    """
    width = 0
    for char in text:
        if unicodedata.combining(char):
            continue
        width += 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1
    return width


def normalize_line_endings(text: str) -> str:
    """Convert Windows (CRLF) and old Mac (CR) line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


__all__ = [
    "wrap_text",
    "normalize_whitespace",
    "ensure_trailing_newline",
    "indent",
    "display_width",
    "normalize_line_endings",
]
