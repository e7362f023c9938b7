#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/options/base.py
"""Formatting options shared by the Markdown and YAML formatters.

This module defines the immutable ``FormatOptions`` value that every
formatter call receives, together with the helpers used to coerce loosely
spelled option values coming from configuration files and the command line.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from dapper.constants import (
    BULLET_GLYPHS,
    BULLET_STYLE_ALIASES,
    DEFAULT_PRINT_WIDTH,
    DEFAULT_PROSE_WRAP,
    DEFAULT_TAB_WIDTH,
    DEFAULT_UL_STYLE,
    PROSE_WRAP_MODES,
    ProseWrap,
    UnorderedListBulletStyle,
)
from dapper.exceptions import InvalidOptionsError
from dapper.utils.normalize import normalize_unordered_list_marker


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class FormatOptions(CloneFrozenMixin):
    """Style options controlling how documents are re-emitted.

    Instances are immutable and compare and hash by value, so they can be
    shared freely between concurrent formatter calls.

    Parameters
    ----------
    print_width : int, default 80
        Maximum line width used when prose is wrapped
    tab_width : int, default 2
        Columns per indentation level in YAML output
    prose_wrap : {'always', 'never', 'preserve'}, default 'preserve'
        How Markdown paragraph text is wrapped:
        'always' rewraps to ``print_width``, 'never' joins each paragraph
        onto one line and 'preserve' keeps the author's line breaks
    ul_style : {'dash', 'asterisk', 'plus'}, default 'dash'
        Bullet glyph for unordered Markdown lists

    Examples
    --------
        >>> options = FormatOptions(print_width=100)
        >>> options.create_updated(prose_wrap="always").prose_wrap
        'always'

    """

    print_width: int = field(
        default=DEFAULT_PRINT_WIDTH,
        metadata={"help": "Maximum line width for wrapped prose", "type": int, "importance": "core"},
    )
    tab_width: int = field(
        default=DEFAULT_TAB_WIDTH,
        metadata={"help": "Spaces per indentation level", "type": int, "importance": "core"},
    )
    prose_wrap: ProseWrap = field(
        default=DEFAULT_PROSE_WRAP,
        metadata={
            "help": "How to wrap Markdown prose",
            "choices": ["always", "never", "preserve"],
            "importance": "core",
        },
    )
    ul_style: UnorderedListBulletStyle = field(
        default=DEFAULT_UL_STYLE,
        metadata={
            "help": "Bullet glyph for unordered Markdown lists",
            "choices": ["dash", "asterisk", "plus"],
            "importance": "core",
        },
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if isinstance(self.print_width, bool) or not isinstance(self.print_width, int) or self.print_width <= 0:
            raise ValueError(f"print_width must be a positive integer, got {self.print_width!r}")
        if isinstance(self.tab_width, bool) or not isinstance(self.tab_width, int) or self.tab_width <= 0:
            raise ValueError(f"tab_width must be a positive integer, got {self.tab_width!r}")
        if self.prose_wrap not in PROSE_WRAP_MODES:
            raise ValueError(f"prose_wrap must be one of {', '.join(PROSE_WRAP_MODES)}, got {self.prose_wrap!r}")
        if self.ul_style not in BULLET_GLYPHS:
            raise ValueError(f"ul_style must be one of {', '.join(BULLET_GLYPHS)}, got {self.ul_style!r}")

    @property
    def bullet(self) -> str:
        """Return the bullet glyph for unordered lists."""
        return normalize_unordered_list_marker(self.ul_style)

    @classmethod
    def field_names(cls) -> list[str]:
        """Return the names of all option fields."""
        return [f.name for f in fields(cls)]


def parse_bullet_style(value: str) -> UnorderedListBulletStyle:
    """Coerce a bullet style name or glyph to a canonical style.

    Parameters
    ----------
    value : str
        One of 'dash', '-', 'asterisk', 'star', '*', 'plus' or '+'
        (case-insensitive)

    Returns
    -------
    str
        'dash', 'asterisk' or 'plus'

    Raises
    ------
    ValueError
        If ``value`` is not a recognized style

    """
    style = BULLET_STYLE_ALIASES.get(str(value).strip().lower())
    if style is None:
        raise ValueError(f"Unknown unordered list bullet style: {value!r}")
    return style


def parse_prose_wrap(value: str) -> ProseWrap:
    """Coerce a prose-wrap mode name (case-insensitive) to its canonical form."""
    mode = str(value).strip().lower()
    if mode not in PROSE_WRAP_MODES:
        raise ValueError(f"Unknown prose wrap mode: {value!r}")
    return mode  # type: ignore[return-value]


def resolve_format_options(options: Any, formatter_name: str) -> FormatOptions:
    """Return ``options``, or the defaults when it is None.

    Parameters
    ----------
    options : FormatOptions or None
        Options passed to a formatter
    formatter_name : str
        Formatter name used in the error message

    Returns
    -------
    FormatOptions
        The options to format with

    Raises
    ------
    InvalidOptionsError
        If ``options`` is neither None nor a FormatOptions instance

    """
    if options is None:
        return FormatOptions()
    if not isinstance(options, FormatOptions):
        raise InvalidOptionsError(
            formatter_name=formatter_name,
            expected_type=FormatOptions,
            received_type=type(options),
        )
    return options
