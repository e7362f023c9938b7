#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/utils/__init__.py
"""Utility modules for the dapper package.

This package contains the text helpers shared by both printers, the
canonical spellings of Markdown constructs, and dependency checking.
"""

from dapper.utils.text import (
    display_width,
    ensure_trailing_newline,
    indent,
    normalize_line_endings,
    normalize_whitespace,
    wrap_text,
)

__all__ = [
    "display_width",
    "ensure_trailing_newline",
    "indent",
    "normalize_line_endings",
    "normalize_whitespace",
    "wrap_text",
]
