#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/renderers/yaml.py
"""YAML rendering from composed nodes and their source text.

The composed tree drops comments and blank lines, so the printer reads them
back from the source. It keeps a cursor (``last_offset``) into the source
and, before emitting each node, prints the *gap* between the cursor and the
node's start offset: comments are re-emitted at the current indentation and
blank lines are collapsed.

Layout rules:

- mappings print ``key: value`` in source order, nesting block values by
  ``tab_width`` columns
- flow collections are expanded to block style; empty ones stay ``{}`` and
  ``[]``
- sequence items are ``- item``; mapping items put their first key after
  the dash and align later keys under it
- scalars keep their quoting style, plain scalars that would be misread are
  double-quoted, and block scalars get a re-derived header

"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Generator, Optional

from dapper.exceptions import UnsupportedSyntaxError
from dapper.options import FormatOptions
from dapper.parsers.yaml import is_implicit_null, scalar_kind
from dapper.utils.text import ensure_trailing_newline, indent

logger = logging.getLogger(__name__)

_QUOTE_FIRST_CHARS = frozenset(" \t-?:[]{}#&*!|>'\"%@`")
_RESERVED_WORDS = frozenset({"true", "false", "null", "yes", "no", "on", "off", "~"})
_NUMERIC_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_NON_PRINTABLE = re.compile(r"[^\t\n\r\x20-\x7e\x85\xa0-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")

_DOUBLE_QUOTE_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\0": "\\0",
    "\a": "\\a",
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\v": "\\v",
    "\f": "\\f",
    "\r": "\\r",
    "\x1b": "\\e",
    "\x85": "\\N",
    "\N{LINE SEPARATOR}": "\\L",
    "\N{PARAGRAPH SEPARATOR}": "\\P",
}

_BLOCK_HEADER = re.compile(r"^[|>][-+0-9]*[ \t]*(#.*)?$")
_DOCUMENT_LINE = re.compile(r"^(?:(?:---|\.\.\.)(?=[ \t]|$)|%)")
_COMMENT_START = re.compile(r"(?:^|(?<=\s))#")
_ENTRY_DASH = re.compile(r"(?<!\S)-(?=\s|$)")


def needs_quoting(value: str) -> bool:
    """Return True if a plain scalar must be quoted to keep its string value.

    Parameters
    ----------
    value : str
        Scalar string value

    Returns
    -------
    bool
        True when the value is empty, starts with an indicator character,
        contains a line break or tab, is a reserved word, looks like a
        number, or could be read as a mapping key

    Examples
    --------
        >>> needs_quoting(":unsafe")
        True
        >>> needs_quoting("1.0.0")
        False

    """
    if not value:
        return True
    if value[0] in _QUOTE_FIRST_CHARS:
        return True
    if "\n" in value or "\r" in value or "\t" in value:
        return True
    if value.lower() in _RESERVED_WORDS:
        return True
    if _NUMERIC_PATTERN.match(value):
        return True
    return ": " in value or value.endswith(":")


def quote_double(value: str) -> str:
    """Render ``value`` as a double-quoted scalar."""
    parts = ['"']
    for char in value:
        escaped = _DOUBLE_QUOTE_ESCAPES.get(char)
        if escaped is not None:
            parts.append(escaped)
        elif ord(char) < 0x20 or 0x7F <= ord(char) <= 0x9F:
            parts.append(f"\\x{ord(char):02X}")
        elif _NON_PRINTABLE.match(char):
            code = ord(char)
            parts.append(f"\\u{code:04X}" if code <= 0xFFFF else f"\\U{code:08X}")
        else:
            parts.append(char)
    parts.append('"')
    return "".join(parts)


def quote_single(value: str) -> str:
    """Render ``value`` as a single-quoted scalar.

    Values holding line breaks or non-printable characters cannot be
    written in single quotes and are double-quoted instead.
    """
    if "\n" in value or "\r" in value or _NON_PRINTABLE.search(value):
        return quote_double(value)
    return "'" + value.replace("'", "''") + "'"


def _folded_source_lines(lines: list[str]) -> list[str]:
    """Return the body lines that fold back to ``lines`` in a ``>`` scalar.

    A line break between two non-empty lines that are not more indented is
    folded into a space, so each such pair needs one extra empty line.
    """
    result: list[str] = []
    previous_normal = False
    seen_text = False
    for line in lines:
        if line:
            normal = not line.startswith((" ", "\t"))
            if seen_text and previous_normal and normal:
                result.append("")
            result.append(line)
            previous_normal = normal
            seen_text = True
        else:
            result.append(line)
    return result


def _document_line(line: str) -> str:
    """Normalize a document marker or directive line."""
    stripped = line.strip()
    if stripped.startswith("%"):
        return stripped
    marker, rest = stripped[:3], stripped[3:].strip()
    if rest.startswith("#"):
        return f"{marker} {rest}"
    return marker


def _is_empty_collection(node: Any) -> bool:
    return node.id in ("mapping", "sequence") and not node.value


class _YamlOutput:
    """Append-only output buffer that tracks its own tail."""

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._last_char = ""
        self.trailing_newlines = 0

    def write(self, text: str) -> None:
        if not text:
            return
        self._parts.append(text)
        stripped = text.rstrip("\n")
        if stripped:
            self.trailing_newlines = len(text) - len(stripped)
        else:
            self.trailing_newlines += len(text)
        self._last_char = text[-1]

    @property
    def at_line_start(self) -> bool:
        return not self._parts or self._last_char == "\n"

    def endswith_space(self) -> bool:
        return self._last_char == " "

    def getvalue(self) -> str:
        return "".join(self._parts)


@dataclass
class _YamlPrinterState:
    """Mutable state of a single render call."""

    source: str
    out: _YamlOutput = field(default_factory=_YamlOutput)
    indent: int = 0
    last_offset: int = 0


class YamlRenderer:
    """Print composed YAML documents in canonical block style.

    Parameters
    ----------
    options : FormatOptions or None, default = None
        Formatting options; only ``tab_width`` applies to YAML

    Examples
    --------
        >>> from dapper.parsers.yaml import compose_documents
        >>> source = "name:   myapp\\nversion: 1.0.0"
        >>> YamlRenderer().render(source, compose_documents(source))
        'name: myapp\\nversion: 1.0.0\\n'

    """

    def __init__(self, options: FormatOptions | None = None):
        """Initialize the renderer with formatting options."""
        self.options = options or FormatOptions()
        self._state = _YamlPrinterState(source="")

    def render(self, source: str, documents: list[Any]) -> str:
        """Render composed documents back to YAML text.

        Parameters
        ----------
        source : str
            The source the documents were composed from, with ``\\n`` line
            endings
        documents : list of yaml.Node
            Root node of every document in ``source``

        Returns
        -------
        str
            Formatted YAML ending in exactly one newline, or ``""``

        Raises
        ------
        UnsupportedSyntaxError
            If a mapping uses a collection as a key

        """
        self._state = _YamlPrinterState(source=source)
        state = self._state

        if not documents:
            self._print_gap(0, len(source), indent=0, trim_leading_newlines=True, document_level=True)
        else:
            for i, root in enumerate(documents):
                self._print_gap(
                    state.last_offset,
                    root.start_mark.index,
                    indent=0,
                    trim_leading_newlines=i == 0,
                    document_level=True,
                )
                self._print_root(root)
            self._print_gap(state.last_offset, len(source), indent=0, document_level=True)

        result = state.out.getvalue().lstrip("\n")
        self._state = _YamlPrinterState(source="")
        return ensure_trailing_newline(result)

    @contextmanager
    def _indented(self, column: int) -> Generator[None, None, None]:
        saved = self._state.indent
        self._state.indent = column
        try:
            yield
        finally:
            self._state.indent = saved

    def _start_line(self) -> None:
        out = self._state.out
        if not out.at_line_start:
            out.write("\n")
        out.write(indent(self._state.indent))

    def _comment_column(self, original: int, target: int) -> int:
        """Column for an own-line comment found at ``original`` in the source.

        Comments at or right of the target indentation move to it; comments
        left of it snap to the nearest multiple of ``tab_width``.
        """
        if original >= target:
            return target
        tab_width = self.options.tab_width
        return min(target, int(original / tab_width + 0.5) * tab_width)

    def _print_gap(
        self,
        start: int,
        end: int,
        indent: Optional[int] = None,
        trim_leading_newlines: bool = False,
        max_blank_lines: int = 1,
        document_level: bool = False,
    ) -> None:
        """Print the comments and blank lines in ``source[start:end]``.

        Parameters
        ----------
        start, end : int
            Source offsets of the gap
        indent : int, optional
            Column for own-line comments; defaults to the current indent
        trim_leading_newlines : bool, default False
            Drop blank lines until the first comment
        max_blank_lines : int, default 1
            Maximum number of consecutive blank lines to emit
        document_level : bool, default False
            Also emit ``---``/``...`` markers and ``%`` directives

        """
        state = self._state
        out = state.out
        if end <= start:
            return

        target = state.indent if indent is None else indent
        lines = state.source[start:end].split("\n")
        trimming = trim_leading_newlines

        for i, line in enumerate(lines):
            if document_level and _DOCUMENT_LINE.match(line):
                if not out.at_line_start:
                    out.write("\n")
                out.write(_document_line(line))
                trimming = False
            else:
                hash_index = line.find("#")
                if hash_index != -1:
                    comment = line[hash_index:].rstrip()
                    if i == 0 and not out.at_line_start:
                        out.write(comment if out.endswith_space() else " " + comment)
                    else:
                        if not out.at_line_start:
                            out.write("\n")
                        out.write(" " * self._comment_column(hash_index, target) + comment)
                    trimming = False
                elif trimming:
                    continue

            if i < len(lines) - 1 and out.trailing_newlines < max_blank_lines + 1:
                out.write("\n")

        state.last_offset = max(state.last_offset, end)

    def _print_root(self, root: Any) -> None:
        state = self._state
        out = state.out

        if is_implicit_null(root):
            state.last_offset = max(state.last_offset, root.end_mark.index)
        elif root.id == "scalar" or _is_empty_collection(root):
            if not out.at_line_start:
                out.write(" ")
            self._print_leaf(root)
        else:
            if not out.at_line_start:
                out.write("\n")
            self._print_collection(root)

    def _print_collection(self, node: Any, inline: bool = False) -> None:
        if node.id == "mapping":
            self._print_mapping(node, inline=inline)
        else:
            self._print_sequence(node)

    def _print_leaf(self, node: Any) -> None:
        """Print a scalar or an empty collection at the cursor."""
        state = self._state
        if node.id == "scalar":
            self._print_scalar(node)
            return
        state.out.write("{}" if node.id == "mapping" else "[]")
        state.last_offset = max(state.last_offset, node.end_mark.index)

    def _key_text(self, key: Any) -> str:
        if key.id != "scalar":
            raise UnsupportedSyntaxError("Collection mapping keys cannot be reformatted", construct="complex key")
        raw = self._state.source[key.start_mark.index : key.end_mark.index]
        if "\n" not in raw:
            return raw
        return quote_double(key.value) if needs_quoting(key.value) else key.value

    def _print_mapping(self, node: Any, inline: bool = False) -> None:
        """Print a mapping, one ``key: value`` pair per line.

        With ``inline``, the first key continues the current line (used for
        mappings that are sequence items).
        """
        state = self._state
        out = state.out

        pairs = sorted(node.value, key=lambda pair: pair[0].start_mark.index)
        for i, (key, value) in enumerate(pairs):
            key_text = self._key_text(key)
            self._print_gap(state.last_offset, key.start_mark.index, trim_leading_newlines=i == 0)

            if (not inline or i > 0) and not out.at_line_start:
                out.write("\n")
            if out.at_line_start:
                out.write(indent(state.indent))
            elif not out.endswith_space():
                out.write(" ")

            out.write(key_text)
            out.write(":")
            state.last_offset = max(state.last_offset, key.end_mark.index)
            self._print_mapping_value(value)

        self._print_gap(state.last_offset, node.end_mark.index)

    def _print_mapping_value(self, value: Any) -> None:
        state = self._state
        out = state.out
        child_indent = state.indent + self.options.tab_width

        if is_implicit_null(value):
            state.last_offset = max(state.last_offset, value.end_mark.index)
            return

        if value.id == "scalar" or _is_empty_collection(value):
            self._print_gap(state.last_offset, value.start_mark.index, indent=child_indent)
            if out.at_line_start:
                out.write(indent(child_indent))
            elif not out.endswith_space():
                out.write(" ")
            self._print_leaf(value)
            return

        # no blank line between a key and its block value
        self._print_gap(state.last_offset, value.start_mark.index, indent=child_indent, max_blank_lines=0)
        if not out.at_line_start:
            out.write("\n")
        with self._indented(child_indent):
            self._print_collection(value)

    def _find_entry_dash(self, start: int, end: int) -> Optional[int]:
        """Offset of the ``-`` entry indicator in ``source[start:end]``, if any."""
        found = None
        offset = start
        for line in self._state.source[start:end].split("\n"):
            comment = _COMMENT_START.search(line)
            code = line[: comment.start()] if comment else line
            for match in _ENTRY_DASH.finditer(code):
                found = offset + match.start()
            offset += len(line) + 1
        return found

    def _print_sequence(self, node: Any) -> None:
        """Print a sequence as ``- item`` lines at the current indent."""
        state = self._state
        out = state.out
        content_column = state.indent + 2

        for i, item in enumerate(node.value):
            item_start = item.start_mark.index
            dash = self._find_entry_dash(state.last_offset, item_start)

            if dash is not None:
                self._print_gap(state.last_offset, dash, trim_leading_newlines=i == 0)
                self._start_line()
                out.write("-")
                self._print_gap(dash + 1, item_start, indent=content_column, max_blank_lines=0)
            else:
                # flow sequence: no dash in the source
                self._print_gap(state.last_offset, item_start, trim_leading_newlines=i == 0)
                self._start_line()
                out.write("-")

            state.last_offset = max(state.last_offset, item_start)
            self._print_sequence_item(item, content_column)

        self._print_gap(state.last_offset, node.end_mark.index)

    def _print_sequence_item(self, item: Any, content_column: int) -> None:
        state = self._state
        out = state.out

        if is_implicit_null(item):
            state.last_offset = max(state.last_offset, item.end_mark.index)
        elif item.id == "scalar" or _is_empty_collection(item):
            out.write(indent(content_column) if out.at_line_start else " ")
            self._print_leaf(item)
        elif item.id == "mapping":
            with self._indented(content_column):
                self._print_mapping(item, inline=True)
        else:
            if not out.at_line_start:
                out.write("\n")
            with self._indented(state.indent + self.options.tab_width):
                self._print_sequence(item)

    def _print_scalar(self, node: Any) -> None:
        state = self._state

        if node.style in ("|", ">"):
            self._print_block_scalar(node)
            return

        kind = scalar_kind(node)
        if kind == "null":
            text = "null"
        elif kind == "bool":
            text = node.value.lower()
        elif kind in ("int", "float"):
            text = node.value
        elif node.style == "'":
            text = quote_single(node.value)
        elif node.style == '"':
            text = quote_double(node.value)
        elif needs_quoting(node.value):
            text = quote_double(node.value)
        else:
            text = node.value

        state.out.write(text)
        state.last_offset = max(state.last_offset, node.end_mark.index)

    def _print_block_scalar(self, node: Any) -> None:
        """Print a literal or folded block scalar.

        The chomping indicator is derived from the value: ``-`` without a
        trailing newline, clip with one, ``+`` with more. An indentation
        indicator is added when the first line starts with a space.
        """
        state = self._state
        out = state.out
        tab_width = self.options.tab_width
        start = node.start_mark.index
        end = node.end_mark.index
        value = node.value

        if "\r" in value or _NON_PRINTABLE.search(value) or (value and not value.strip("\n")) or tab_width > 9:
            out.write(quote_double(value))
            state.last_offset = max(state.last_offset, end)
            return

        span = state.source[start:end]
        header = _BLOCK_HEADER.match(span.split("\n", 1)[0])
        comment = header.group(1) if header else None

        body = value.rstrip("\n")
        trailing = len(value) - len(body)
        at_document_tail = not state.source[end:].strip()
        if trailing == 0:
            chomping = "-"
        elif trailing == 1 or at_document_tail:
            chomping = ""
        else:
            chomping = "+"

        lines = body.split("\n") if body else []
        if node.style == ">":
            lines = _folded_source_lines(lines)

        first_text = next((line for line in lines if line), "")
        indicator = str(tab_width) if first_text.startswith(" ") else ""

        out.write(f"{node.style}{indicator}{chomping}")
        if comment:
            out.write(" " + comment.rstrip())

        column = state.indent + tab_width
        for line in lines:
            out.write("\n")
            if line:
                out.write(indent(column) + line)

        if chomping == "+":
            out.write("\n" * trailing)
            state.last_offset = max(state.last_offset, end)
        else:
            # resume before the scalar's trailing line breaks
            state.last_offset = max(state.last_offset, start + len(span.rstrip()))


__all__ = ["YamlRenderer", "needs_quoting", "quote_double", "quote_single"]
