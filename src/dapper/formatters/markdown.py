#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/formatters/markdown.py
"""Markdown formatting pipeline.

The pipeline is:

1. Normalize line endings
2. Split off front matter, which is reattached verbatim at the end
3. Cut top-level definition lists out of the body, since the Markdown
   parser has no such construct
4. Parse and print each remaining Markdown segment
5. Join the segments, separated by one blank line
"""

from __future__ import annotations

import logging

from dapper.options import FormatOptions, resolve_format_options
from dapper.parsers.definition_list import (
    DefinitionListSegment,
    MarkdownSegment,
    format_definition_list,
    has_definition_lists,
    parse_document_segments,
)
from dapper.parsers.front_matter import extract_front_matter, with_front_matter
from dapper.parsers.markdown import MarkdownParser
from dapper.renderers.markdown import MarkdownRenderer
from dapper.utils.decorators import debug_timer
from dapper.utils.text import ensure_trailing_newline, normalize_line_endings

logger = logging.getLogger(__name__)


class MarkdownFormatter:
    """Format Markdown documents.

    Parameters
    ----------
    options : FormatOptions or None, default = None
        Formatting options; defaults are used when None

    Examples
    --------
        >>> MarkdownFormatter().format("*hello*")
        '_hello_\\n'

    """

    def __init__(self, options: FormatOptions | None = None):
        """Initialize the formatter with options."""
        self.options = resolve_format_options(options, "MarkdownFormatter")
        self._parser = MarkdownParser()

    def format(self, source: str) -> str:
        """Format a Markdown document.

        Parameters
        ----------
        source : str
            Markdown text, with any line-ending convention

        Returns
        -------
        str
            Canonical Markdown ending in exactly one newline, or ``""`` when
            the input holds only whitespace

        """
        source = normalize_line_endings(source)
        if not source.strip():
            return ""

        split = extract_front_matter(source)
        body = self._format_body(split.content)
        return with_front_matter(split.front_matter, body)

    def _format_body(self, content: str) -> str:
        if not content.strip():
            return ""

        if not has_definition_lists(content):
            return self._format_segment(content)

        output = ""
        for segment in parse_document_segments(content):
            if isinstance(segment, MarkdownSegment):
                formatted = self._format_segment(segment.content)
                if not formatted:
                    continue
                output = _separate(output) + formatted
            elif isinstance(segment, DefinitionListSegment):
                output = _separate(output) + format_definition_list(segment.definition_list)
        return ensure_trailing_newline(output)

    def _format_segment(self, content: str) -> str:
        if not content.strip():
            return ""
        with debug_timer(logger, "Parsing (markdown)"):
            document = self._parser.parse(content)
        with debug_timer(logger, "Rendering (markdown)"):
            return MarkdownRenderer(self.options).render_to_string(document)


def _separate(output: str) -> str:
    """Return ``output`` ending in one blank line, or ``""`` when empty."""
    if not output:
        return output
    return output.rstrip("\n") + "\n\n"


def format_markdown(source: str, options: FormatOptions | None = None) -> str:
    """Format Markdown text.

    Parameters
    ----------
    source : str
        Markdown text
    options : FormatOptions or None, default = None
        Formatting options

    Returns
    -------
    str
        Formatted Markdown

    Examples
    --------
        >>> format_markdown("- item 1\\n- item 2")
        '- item 1\\n- item 2\\n'

    """
    return MarkdownFormatter(options).format(source)


__all__ = ["MarkdownFormatter", "format_markdown"]
