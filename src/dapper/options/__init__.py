#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/options/__init__.py
"""Formatting options for dapper."""

from dapper.options.base import (
    CloneFrozenMixin,
    FormatOptions,
    parse_bullet_style,
    parse_prose_wrap,
    resolve_format_options,
)

__all__ = [
    "CloneFrozenMixin",
    "FormatOptions",
    "parse_bullet_style",
    "parse_prose_wrap",
    "resolve_format_options",
]
