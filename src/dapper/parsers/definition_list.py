#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/parsers/definition_list.py
"""Definition list segmentation for Markdown documents.

Definition lists are written as a term line followed by one or more
definition lines::

    Term 1
    : Definition 1

    Term 2
    : Definition 2a
    : Definition 2b

CommonMark has no such construct, so top-level definition lists are cut
out of the document before it reaches the Markdown parser. The document is
split into alternating ordinary Markdown segments and definition list
segments; each kind is formatted separately and the results are joined
back together by the Markdown formatter.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional, Union

_DEFINITION_PATTERN = re.compile(r"^:\s+(.+)$")
_ORDERED_LIST_PATTERN = re.compile(r"^\d+\.")
_FENCE_PATTERN = re.compile(r"^ {0,3}(`{3,}|~{3,})")

_NON_TERM_PREFIXES = (":", "#", "-", "*", ">", "`", "|", " ", "\t")


@dataclass
class DefinitionItem:
    """A term together with its definitions.

    Parameters
    ----------
    term : str
        The term line, trimmed
    definitions : list of str
        Definition texts without the leading ``:`` marker

    """

    term: str
    definitions: list[str] = field(default_factory=list)


@dataclass
class DefinitionList:
    """An ordered run of definition items."""

    items: list[DefinitionItem] = field(default_factory=list)


@dataclass
class MarkdownSegment:
    """A slice of ordinary Markdown destined for the Markdown parser."""

    content: str


@dataclass
class DefinitionListSegment:
    """A definition list cut out of the document."""

    definition_list: DefinitionList


DocumentSegment = Union[MarkdownSegment, DefinitionListSegment]


def _is_potential_term(line: str) -> bool:
    return bool(line) and not line.startswith(_NON_TERM_PREFIXES) and not _ORDERED_LIST_PATTERN.match(line)


def _definition_match(line: str) -> Optional[str]:
    match = _DEFINITION_PATTERN.match(line)
    if match is None:
        return None
    return match.group(1).rstrip()


class _FenceTracker:
    """Track whether a line sits inside a fenced code block."""

    def __init__(self) -> None:
        self._fence: Optional[str] = None

    def update(self, line: str) -> bool:
        """Consume ``line`` and return True if it is inside (or delimits) a fence."""
        match = _FENCE_PATTERN.match(line)
        if self._fence is None:
            if match:
                self._fence = match.group(1)
                return True
            return False
        if match and match.group(1)[0] == self._fence[0] and len(match.group(1)) >= len(self._fence):
            if not line.strip().lstrip(self._fence[0]):
                self._fence = None
        return True


def _collect_definitions(lines: list[str], start: int, allow_blank: bool) -> tuple[list[str], int]:
    """Collect definition lines starting at ``start``.

    Returns the definitions found and the index of the first line after them.
    With ``allow_blank``, a single blank line between two definitions does
    not end the run.
    """
    definitions: list[str] = []
    index = start
    while index < len(lines):
        definition = _definition_match(lines[index])
        if definition is not None:
            definitions.append(definition)
            index += 1
        elif allow_blank and definitions and not lines[index].strip() and index + 1 < len(lines):
            if _definition_match(lines[index + 1]) is None:
                break
            index += 1
        else:
            break
    return definitions, index


def parse_document_segments(markdown: str) -> list[DocumentSegment]:
    """Split a Markdown document into Markdown and definition list segments.

    Parameters
    ----------
    markdown : str
        Document body (front matter already removed)

    Returns
    -------
    list of DocumentSegment
        Segments in document order. Lines that are not part of a definition
        list are grouped into ``MarkdownSegment`` objects.

    Examples
    --------
        >>> segments = parse_document_segments("Intro\\n\\nTerm\\n: Meaning")
        >>> [type(s).__name__ for s in segments]
        ['MarkdownSegment', 'DefinitionListSegment']

    """
    lines = markdown.split("\n")
    segments: list[DocumentSegment] = []
    buffer: list[str] = []
    fences = _FenceTracker()

    def flush() -> None:
        if buffer:
            segments.append(MarkdownSegment("\n".join(buffer)))
            buffer.clear()

    index = 0
    while index < len(lines):
        line = lines[index]
        if not fences.update(line) and _is_potential_term(line) and index + 1 < len(lines):
            definitions, end = _collect_definitions(lines, index + 1, allow_blank=True)
            if definitions:
                flush()
                items = [DefinitionItem(line.strip(), definitions)]

                while end < len(lines):
                    while end < len(lines) and not lines[end].strip():
                        end += 1
                    if end >= len(lines):
                        break
                    term = lines[end]
                    if not (_is_potential_term(term) and end + 1 < len(lines)):
                        break
                    more, after = _collect_definitions(lines, end + 1, allow_blank=False)
                    if not more:
                        break
                    items.append(DefinitionItem(term.strip(), more))
                    end = after

                segments.append(DefinitionListSegment(DefinitionList(items)))
                index = end
                continue

        buffer.append(line)
        index += 1

    flush()
    return segments


def has_definition_lists(markdown: str) -> bool:
    """Return True if the document contains at least one definition list.

    A cheap pre-check used to skip segmentation entirely: some line must be
    a potential term directly followed by a ``: definition`` line.
    """
    lines = markdown.split("\n")
    fences = _FenceTracker()
    for current, following in zip(lines, lines[1:]):
        if fences.update(current):
            continue
        if _is_potential_term(current) and _definition_match(following) is not None:
            return True
    return False


def format_definition_list(definition_list: DefinitionList) -> str:
    """Render a definition list as Markdown.

    Each item is the term line followed by one ``: definition`` line per
    definition; items are separated by a blank line. The result ends with a
    single newline and no trailing blank line.
    """
    blocks = []
    for item in definition_list.items:
        lines = [item.term] + [f": {definition}" for definition in item.definitions]
        blocks.append("\n".join(lines) + "\n")
    return "\n".join(blocks)


__all__ = [
    "DefinitionItem",
    "DefinitionList",
    "MarkdownSegment",
    "DefinitionListSegment",
    "DocumentSegment",
    "parse_document_segments",
    "has_definition_lists",
    "format_definition_list",
]
