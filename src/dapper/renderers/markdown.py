#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/renderers/markdown.py
"""Markdown rendering from AST.

This module provides the MarkdownRenderer class which prints AST nodes as
canonical Markdown: ATX headings, ``_emphasis_``, ``**strong**``, backtick
fences, ``---`` rules, one configurable bullet glyph and padded tables.

Block nodes are rendered to lists of lines. Containers (list items and
block quotes) render their children with a fresh printer state and then
prefix the resulting lines, so nested content never has to know how deep
it sits. The state tracks the indentation column (which narrows the wrap
width), whether a blank line is pending before the next block, the list
nesting depth, and the marker of a directly preceding list.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from dapper.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    DefinitionDescription,
    DefinitionList,
    DefinitionTerm,
    Document,
    Emphasis,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
    Unknown,
)
from dapper.ast.visitors import NodeVisitor
from dapper.constants import ALTERNATE_BULLET_GLYPHS, MIN_TABLE_COLUMN_WIDTH
from dapper.options import FormatOptions
from dapper.utils.normalize import (
    code_fence_for,
    normalize_heading,
    normalize_horizontal_rule,
    ordered_list_content_indent,
)
from dapper.utils.text import display_width, ensure_trailing_newline, indent, normalize_whitespace, wrap_text

logger = logging.getLogger(__name__)

HARD_BREAK = "  \n"

_LINE_START_MARKER = re.compile(r"^(?:#{1,6}(?:[ \t]|$)|>|[-+*](?:[ \t]|$)|=+[ \t]*$|-+[ \t]*$|~{3,})")
_ORDERED_MARKER = re.compile(r"^(\d{1,9})([.)])(?:[ \t]|$)")
_HEADING_CLOSING = re.compile(r"(^|[ \t])(#+)$")
_SOFT_BREAK_SPACES = re.compile(r"[ \t]*\n[ \t]*")
_HTML_START = re.compile(r"<(?=[A-Za-z/!?])")
_UNESCAPED_PIPE = re.compile(r"(?<!\\)\|")
_URI_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]{1,31}:[^\s<>]*$")
_TILDE_RUN = re.compile(r"~{2,}")


@dataclass
class _PrinterState:
    """Mutable state of one block-rendering pass."""

    parts: list[str] = field(default_factory=list)
    indent: int = 0
    needs_blank: bool = False
    list_depth: int = 0
    tight: bool = False
    hanging: int = 0
    previous_list_marker: Optional[tuple[bool, str]] = None
    previous_block: Optional[Node] = None


def _escape_line_start(line: str) -> str:
    """Backslash-escape a line start that would be read as block syntax."""
    if _LINE_START_MARKER.match(line):
        return "\\" + line
    match = _ORDERED_MARKER.match(line)
    if match:
        return f"{match.group(1)}\\{line[match.end(1):]}"
    return line


def _single_line(text: str) -> str:
    """Collapse soft and hard breaks in rendered inline text to spaces."""
    return _SOFT_BREAK_SPACES.sub(" ", text.replace(HARD_BREAK, "\n")).strip()


def _prefix_lines(lines: list[str], first: str, rest: str) -> list[str]:
    """Prefix the first line with ``first`` and other non-blank lines with ``rest``."""
    if not lines:
        return [first.rstrip()]
    prefixed = [(first + lines[0]) if lines[0] else first.rstrip()]
    prefixed.extend(rest + line if line else "" for line in lines[1:])
    return prefixed


class MarkdownRenderer(NodeVisitor):
    """Render an AST document as canonical Markdown.

    Parameters
    ----------
    options : FormatOptions or None, default = None
        Formatting options (print width, prose wrap mode and bullet style)

    Examples
    --------
        >>> from dapper.ast import Document, Paragraph, Emphasis, Text
        >>> doc = Document(children=[Paragraph(content=[Emphasis(content=[Text("hello")])])])
        >>> MarkdownRenderer().render_to_string(doc)
        '_hello_\\n'

    """

    def __init__(self, options: FormatOptions | None = None):
        """Initialize the Markdown renderer with options."""
        self.options = options or FormatOptions()
        self._bullet = self.options.bullet
        self._state = _PrinterState()

    def render_to_string(self, document: Document) -> str:
        """Render a document AST to a Markdown string.

        Parameters
        ----------
        document : Document
            The document node to render

        Returns
        -------
        str
            Markdown text ending in exactly one newline, or ``""`` for an
            empty document

        """
        self._state = _PrinterState()
        document.accept(self)
        result = "".join(self._state.parts)
        self._state = _PrinterState()
        return ensure_trailing_newline(result)

    # ------------------------------------------------------------------
    # Block plumbing
    # ------------------------------------------------------------------

    def _width(self, extra: int = 0) -> int:
        return max(1, self.options.print_width - self._state.indent - extra)

    def _emit_block(self, node: Node, lines: list[str], blank_before: bool = True) -> None:
        """Append a block's lines, preceded by a blank line when one is pending."""
        state = self._state
        if state.parts and state.needs_blank and blank_before and not state.tight:
            state.parts.append("\n")
        for line in lines:
            state.parts.append(line + "\n")
        state.needs_blank = True
        state.hanging = 0
        state.previous_list_marker = None
        state.previous_block = node

    def _render_blocks(
        self,
        nodes: list[Node],
        indent: int,
        tight: bool = False,
        list_depth: int = 0,
        hanging: int = 0,
    ) -> list[str]:
        """Render block nodes with a fresh state and return their lines."""
        saved = self._state
        self._state = _PrinterState(indent=indent, tight=tight, list_depth=list_depth, hanging=hanging)
        try:
            for node in nodes:
                node.accept(self)
            text = "".join(self._state.parts)
        finally:
            self._state = saved

        if not text:
            return []
        return text[:-1].split("\n") if text.endswith("\n") else text.split("\n")

    def _render_inline(self, nodes: list[Node]) -> str:
        """Render inline nodes to a string.

        Soft breaks are ``\\n`` and hard breaks are two spaces plus ``\\n``;
        the enclosing block decides how to lay them out.
        """
        saved = self._state.parts
        self._state.parts = []
        try:
            for index, node in enumerate(nodes):
                if isinstance(node, Emphasis):
                    self._state.parts.append(self._render_emphasis(node, self._is_intraword(nodes, index)))
                else:
                    node.accept(self)
            return "".join(self._state.parts)
        finally:
            self._state.parts = saved

    @staticmethod
    def _is_intraword(nodes: list[Node], index: int) -> bool:
        before = nodes[index - 1] if index > 0 else None
        after = nodes[index + 1] if index + 1 < len(nodes) else None
        if isinstance(before, Text) and before.content and before.content[-1].isalnum():
            return True
        return isinstance(after, Text) and bool(after.content) and after.content[0].isalnum()

    def _paragraph_lines(self, text: str, width: int) -> list[str]:
        """Lay out rendered inline text according to the prose wrap mode.

        Parameters
        ----------
        text : str
            Rendered inline content
        width : int
            Available width for ``always`` wrapping

        Returns
        -------
        list of str
            Paragraph lines; every line but the last of a hard-broken
            segment ends with two spaces

        """
        mode = self.options.prose_wrap
        segments = text.split(HARD_BREAK)
        lines: list[str] = []

        for index, segment in enumerate(segments):
            if mode == "preserve":
                segment_lines = [line.strip() for line in segment.split("\n")]
                segment_lines = [line for line in segment_lines if line]
            elif mode == "never":
                joined = _SOFT_BREAK_SPACES.sub(" ", segment).strip()
                segment_lines = [joined] if joined else []
            else:
                segment_lines = [line for line in wrap_text(normalize_whitespace(segment), width) if line]

            if not segment_lines:
                continue
            if index < len(segments) - 1:
                segment_lines[-1] += "  "
            lines.extend(segment_lines)

        if lines:
            lines[-1] = lines[-1].rstrip()
        return [_escape_line_start(line) for line in lines] or [""]

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        """Render a Document node."""
        for child in node.children:
            child.accept(self)

    def visit_heading(self, node: Heading) -> None:
        """Render a Heading node as an ATX heading."""
        text = _single_line(self._render_inline(node.content))
        # a trailing run of '#' would be read as a closing sequence
        text = _HEADING_CLOSING.sub(lambda m: f"{m.group(1)}\\{m.group(2)}", text)
        self._emit_block(node, [normalize_heading(node.level, text)])

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a Paragraph node.

        Parameters
        ----------
        node : Paragraph
            Paragraph to render

        """
        hanging = self._state.hanging
        lines = self._paragraph_lines(self._render_inline(node.content), self._width(hanging))
        if hanging:
            lines = _prefix_lines(lines, "", indent(hanging))
        self._emit_block(node, lines)

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a CodeBlock node as a fenced code block.

        Parameters
        ----------
        node : CodeBlock
            Code block to render

        """
        content = node.content[:-1] if node.content.endswith("\n") else node.content
        info = " ".join(part for part in (node.language, node.info) if part)

        if "`" in info:
            longest = max((len(run) for run in re.findall(r"~+", content)), default=0)
            fence = "~" * max(3, longest + 1)
        else:
            fence = code_fence_for(content)

        lines = [fence + info]
        if content or node.content:
            lines.extend(content.split("\n"))
        lines.append(fence)
        self._emit_block(node, lines)

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Render a BlockQuote node.

        Children render with two fewer columns and every line is prefixed
        with ``> `` (bare ``>`` for blank lines).
        """
        inner = self._render_blocks(node.children, self._state.indent + 2)
        lines = [f"> {line}" if line else ">" for line in inner] or [">"]
        self._emit_block(node, lines)

    def visit_list(self, node: List) -> None:
        """Render a List node.

        Parameters
        ----------
        node : List
            List to render

        """
        state = self._state
        previous = state.previous_list_marker

        if node.ordered:
            delimiter = ")" if previous == (True, ".") else "."
            last_number = node.start + max(len(node.items) - 1, 0)
            number_width = ordered_list_content_indent(max(last_number, node.start)) - 2
            markers = [f"{str(node.start + i).rjust(number_width)}{delimiter} " for i in range(len(node.items))]
            glyph = delimiter
        else:
            glyph = self._bullet
            if previous == (False, glyph):
                glyph = ALTERNATE_BULLET_GLYPHS[glyph]
            markers = [f"{glyph} "] * len(node.items)

        lines: list[str] = []
        for i, (item, marker) in enumerate(zip(node.items, markers)):
            if i > 0 and not node.tight:
                lines.append("")
            lines.extend(self._render_list_item(item, marker, node.tight))

        # nested lists never get a forced blank line
        self._emit_block(node, lines, blank_before=state.list_depth == 0)
        state.previous_list_marker = (node.ordered, glyph)

    def _render_list_item(self, node: ListItem, marker: str, tight: bool) -> list[str]:
        """Render one list item under ``marker``.

        The first block goes on the marker line and later lines are indented
        to the content column. A task checkbox shifts the first paragraph's
        continuation lines under the text after the checkbox.
        """
        content_indent = len(marker)
        checkbox = ""
        if node.task_status is not None:
            checkbox = "[x] " if node.task_status == "checked" else "[ ] "

        hanging = len(checkbox) if node.children and isinstance(node.children[0], Paragraph) else 0
        lines = self._render_blocks(
            node.children,
            self._state.indent + content_indent,
            tight=tight,
            list_depth=self._state.list_depth + 1,
            hanging=hanging,
        )
        if lines and marker.strip() == "-" and lines[0] == normalize_horizontal_rule():
            # '- ---' is itself a thematic break
            lines[0] = "***"
        if checkbox:
            lines = [checkbox + lines[0]] + lines[1:] if lines else [checkbox.rstrip()]
        return _prefix_lines(lines, marker, indent(content_indent))

    def visit_list_item(self, node: ListItem) -> None:
        """Render a ListItem node outside a list with the configured bullet."""
        self._emit_block(node, self._render_list_item(node, f"{self._bullet} ", tight=True))

    def _render_cell(self, cell: TableCell) -> str:
        text = _single_line(self._render_inline(cell.content))
        return _UNESCAPED_PIPE.sub(r"\\|", text)

    def visit_table(self, node: Table) -> None:
        """Render a Table node as a padded pipe table.

        Parameters
        ----------
        node : Table
            Table to render

        """
        rows = ([node.header] if node.header is not None else []) + list(node.rows)
        if not rows:
            return

        grid = [[self._render_cell(cell) for cell in row.cells] for row in rows]
        num_cols = max(len(row) for row in grid)
        if num_cols == 0:
            return
        for row in grid:
            row.extend([""] * (num_cols - len(row)))

        widths = [
            max(MIN_TABLE_COLUMN_WIDTH, max(display_width(row[col]) for row in grid)) for col in range(num_cols)
        ]

        alignments = list(node.alignments)
        if not any(alignments) and node.header is not None:
            alignments = [cell.alignment for cell in node.header.cells]
        alignments.extend([None] * (num_cols - len(alignments)))

        def format_row(cells: list[str]) -> str:
            padded = [cell + " " * (width - display_width(cell)) for cell, width in zip(cells, widths)]
            return "| " + " | ".join(padded) + " |"

        separator_cells = []
        for width, alignment in zip(widths, alignments):
            dashes = "-" * width
            if alignment == "center":
                separator_cells.append(f":{dashes}:")
            elif alignment == "right":
                separator_cells.append(f" {dashes}:")
            elif alignment == "left":
                separator_cells.append(f":{dashes} ")
            else:
                separator_cells.append(f" {dashes} ")

        lines = [format_row(grid[0]), "|" + "|".join(separator_cells) + "|"]
        lines.extend(format_row(row) for row in grid[1:])
        self._emit_block(node, lines)

    def visit_table_row(self, node: TableRow) -> None:
        """Render a TableRow node on its own as a pipe-delimited line."""
        cells = [self._render_cell(cell) for cell in node.cells]
        self._emit_block(node, ["| " + " | ".join(cells) + " |"])

    def visit_table_cell(self, node: TableCell) -> None:
        """Render a TableCell node's inline content."""
        self._state.parts.append(self._render_cell(node))

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Render a ThematicBreak node."""
        rule = normalize_horizontal_rule()
        if self._state.tight and isinstance(self._state.previous_block, Paragraph):
            # without a blank line, '---' would turn the paragraph into a heading
            rule = "***"
        self._emit_block(node, [rule])

    def visit_html_block(self, node: HTMLBlock) -> None:
        """Render an HTMLBlock node verbatim."""
        content = node.content.rstrip("\n")
        self._emit_block(node, content.split("\n"))

    def visit_definition_list(self, node: DefinitionList) -> None:
        """Render a DefinitionList node.

        Each term is followed by its descriptions as ``: text`` lines with
        two-space continuation; items are separated by a blank line.
        """
        lines: list[str] = []
        for i, (term, descriptions) in enumerate(node.items):
            if i > 0:
                lines.append("")
            lines.append(self._render_definition_term(term))
            for description in descriptions:
                lines.extend(self._render_definition_description(description))
        self._emit_block(node, lines)

    def _render_definition_term(self, node: DefinitionTerm) -> str:
        return _escape_line_start(_single_line(self._render_inline(node.content)))

    def _render_definition_description(self, node: DefinitionDescription) -> list[str]:
        if all(isinstance(child, _INLINE_NODES) for child in node.content):
            text = self._render_inline(node.content)
            lines = self._paragraph_lines(text, self._width(2))
        else:
            lines = self._render_blocks(node.content, self._state.indent + 2)
        return _prefix_lines(lines, ": ", "  ")

    def visit_definition_term(self, node: DefinitionTerm) -> None:
        """Render a DefinitionTerm node."""
        self._emit_block(node, [self._render_definition_term(node)])

    def visit_definition_description(self, node: DefinitionDescription) -> None:
        """Render a DefinitionDescription node."""
        self._emit_block(node, self._render_definition_description(node))

    def visit_unknown(self, node: Unknown) -> None:
        """Render an Unknown node's children, or its raw text when it has none."""
        if node.children:
            super().visit_unknown(node)
        elif node.raw:
            self._emit_block(node, node.raw.rstrip("\n").split("\n"))

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        """Render a Text node with Markdown syntax characters escaped.

        Backslashes, backticks, asterisks and brackets are always
        escaped. Underscores are escaped only at word boundaries, so
        ``snake_case`` stays readable. ``<`` is escaped where it would open
        an HTML tag and ``~~`` where it would open strikethrough.
        """
        text = node.content
        escaped: list[str] = []
        for i, char in enumerate(text):
            if char in "\\`*[]":
                escaped.append("\\" + char)
            elif char == "_":
                prev_alnum = i > 0 and text[i - 1].isalnum()
                next_alnum = i < len(text) - 1 and text[i + 1].isalnum()
                escaped.append("_" if prev_alnum and next_alnum else "\\_")
            else:
                escaped.append(char)

        result = "".join(escaped)
        result = _HTML_START.sub(r"\\<", result)
        result = _TILDE_RUN.sub(lambda m: "\\~" * len(m.group(0)), result)
        self._state.parts.append(result)

    def _render_emphasis(self, node: Emphasis, intraword: bool) -> str:
        content = self._render_inline(node.content)
        # underscores cannot open or close emphasis inside a word
        marker = "*" if intraword or content.startswith("_") or content.endswith("_") else "_"
        return f"{marker}{content}{marker}"

    def visit_emphasis(self, node: Emphasis) -> None:
        """Render an Emphasis node as ``_text_``."""
        self._state.parts.append(self._render_emphasis(node, intraword=False))

    def visit_strong(self, node: Strong) -> None:
        """Render a Strong node as ``**text**``."""
        self._state.parts.append(f"**{self._render_inline(node.content)}**")

    def visit_code(self, node: Code) -> None:
        """Render a Code node.

        The fence is one backtick longer than the longest backtick run in
        the content; content touching the fence with a backtick or wrapped
        in spaces is padded with one space on each side.
        """
        content = node.content.replace("\n", " ")
        longest = max((len(run) for run in re.findall(r"`+", content)), default=0)
        fence = "`" * (longest + 1)
        needs_padding = (
            content.startswith("`")
            or content.endswith("`")
            or (content.startswith(" ") and content.endswith(" ") and content.strip() != "")
        )
        if needs_padding:
            content = f" {content} "
        self._state.parts.append(f"{fence}{content}{fence}")

    def visit_strikethrough(self, node: Strikethrough) -> None:
        """Render a Strikethrough node as ``~~text~~``."""
        self._state.parts.append(f"~~{self._render_inline(node.content)}~~")

    @staticmethod
    def _format_destination(url: str) -> str:
        if not url:
            return ""
        if any(char in url for char in " <>\n") or url.count("(") != url.count(")"):
            return "<" + url.replace("<", "\\<").replace(">", "\\>") + ">"
        return url

    @staticmethod
    def _format_title(title: Optional[str]) -> str:
        if not title:
            return ""
        escaped = title.replace("\\", "\\\\").replace('"', '\\"')
        return f' "{escaped}"'

    def visit_link(self, node: Link) -> None:
        """Render a Link node.

        Links whose text is their own URL become autolinks ``<url>``;
        everything else is an inline link ``[text](url "title")``.
        """
        if not node.title and len(node.content) == 1 and isinstance(node.content[0], Text):
            label = node.content[0].content
            is_email = node.url.startswith("mailto:") and "@" in label and node.url == f"mailto:{label}"
            if _URI_SCHEME.match(node.url) and (label == node.url or is_email):
                self._state.parts.append(f"<{label}>")
                return

        content = self._render_inline(node.content)
        destination = self._format_destination(node.url)
        self._state.parts.append(f"[{content}]({destination}{self._format_title(node.title)})")

    def visit_image(self, node: Image) -> None:
        """Render an Image node as ``![alt](src "title")``."""
        alt = node.alt_text.replace("\\", "\\\\").replace("[", "\\[").replace("]", "\\]")
        destination = self._format_destination(node.url)
        self._state.parts.append(f"![{alt}]({destination}{self._format_title(node.title)})")

    def visit_line_break(self, node: LineBreak) -> None:
        """Render a LineBreak node.

        Parameters
        ----------
        node : LineBreak
            Line break to render

        """
        self._state.parts.append("\n" if node.soft else HARD_BREAK)

    def visit_html_inline(self, node: HTMLInline) -> None:
        """Render an HTMLInline node verbatim."""
        self._state.parts.append(node.content)


_INLINE_NODES = (Text, Emphasis, Strong, Code, Strikethrough, Link, Image, LineBreak, HTMLInline)


def render_markdown(document: Document, options: FormatOptions | None = None) -> str:
    """Render ``document`` with a new MarkdownRenderer."""
    return MarkdownRenderer(options).render_to_string(document)


__all__ = ["MarkdownRenderer", "render_markdown"]
