#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/parsers/markdown.py
"""Markdown to AST converter.

This module converts Markdown text into the dapper AST using mistune's
token stream. The converter keeps what the printer needs to reproduce the
document faithfully: soft line breaks (so the author's line breaks can be
preserved), list tightness and start numbers, task list checkboxes, table
alignment and code block info strings.

"""

from __future__ import annotations

import logging
from typing import Any, Literal

from dapper.ast import (
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
    extract_text,
)
from dapper.constants import DEPS_MARKDOWN, MISTUNE_PLUGINS
from dapper.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)

_IGNORED_BLOCK_TOKENS = frozenset({"blank_line"})


class MarkdownParser:
    """Convert Markdown text to an AST document.

    The parser is lenient: every input produces a document. Tokens mistune
    emits that the node set does not model become ``Unknown`` nodes that
    keep their children.

    Parameters
    ----------
    plugins : list of str, optional
        mistune plugins to enable. Defaults to strikethrough, tables, task
        lists and definition lists.

    Examples
    --------
        >>> parser = MarkdownParser()
        >>> doc = parser.parse("# Title\\n\\nSome *text*.")
        >>> type(doc.children[0]).__name__
        'Heading'

    """

    def __init__(self, plugins: list[str] | None = None):
        """Initialize the parser with the mistune plugins to enable."""
        self.plugins = list(MISTUNE_PLUGINS if plugins is None else plugins)

    @requires_dependencies("markdown", DEPS_MARKDOWN)
    def parse(self, text: str) -> Document:
        """Parse Markdown text into an AST document.

        Parameters
        ----------
        text : str
            Markdown source with ``\\n`` line endings

        Returns
        -------
        Document
            AST document node

        """
        import mistune

        markdown = mistune.create_markdown(plugins=self.plugins, renderer=None)
        tokens, _state = markdown.parse(text)

        if isinstance(tokens, list):
            children = self._process_tokens(tokens)
        else:
            logger.warning("mistune returned %s instead of a token list", type(tokens).__name__)
            children = []

        return Document(children=children)

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process a list of block tokens into AST nodes."""
        nodes: list[Node] = []

        for token in tokens:
            node = self._process_token(token)
            if node is not None:
                nodes.append(node)

        return nodes

    def _process_token(self, token: dict[str, Any]) -> Node | None:
        """Process a single mistune block token into an AST node.

        Parameters
        ----------
        token : dict
            Mistune token dictionary with 'type' and other fields

        Returns
        -------
        Node or None
            Resulting AST node, or None for tokens that carry no content

        """
        token_type = token.get("type", "")

        if token_type == "heading":
            return self._process_heading(token)
        elif token_type in ("paragraph", "block_text"):
            # block_text is used for tight list items - treat like paragraph
            return self._process_paragraph(token)
        elif token_type == "block_code":
            return self._process_code_block(token)
        elif token_type == "block_quote":
            return BlockQuote(children=self._process_tokens(token.get("children", [])))
        elif token_type == "list":
            return self._process_list(token)
        elif token_type == "table":
            return self._process_table(token)
        elif token_type == "thematic_break":
            return ThematicBreak()
        elif token_type == "block_html":
            return HTMLBlock(content=token.get("raw", ""))
        elif token_type == "def_list":
            return self._process_definition_list(token)
        elif token_type in _IGNORED_BLOCK_TOKENS:
            return None

        return self._process_unknown(token)

    def _process_unknown(self, token: dict[str, Any]) -> Unknown:
        """Wrap an unmodeled token so its content is still rendered."""
        token_type = token.get("type", "")
        logger.debug("Unmodeled mistune token %r; rendering its children", token_type)
        children = token.get("children")
        if isinstance(children, list):
            if any(child.get("type") in _INLINE_TOKEN_TYPES for child in children if isinstance(child, dict)):
                return Unknown(kind=token_type, children=[Paragraph(content=self._process_inline_tokens(children))])
            return Unknown(kind=token_type, children=self._process_tokens(children))
        return Unknown(kind=token_type, raw=token.get("raw", "") or token.get("text", ""))

    def _process_heading(self, token: dict[str, Any]) -> Heading:
        """Process heading token.

        Parameters
        ----------
        token : dict
            Heading token with 'attrs' (level) and 'children'

        Returns
        -------
        Heading
            Heading AST node

        """
        attrs = token.get("attrs") or {}
        level = attrs.get("level", 1)

        if not isinstance(level, int) or level < 1 or level > 6:
            level = 1

        return Heading(level=level, content=self._process_inline_tokens(token.get("children", [])))

    def _process_paragraph(self, token: dict[str, Any]) -> Paragraph:
        """Process paragraph or block_text token."""
        return Paragraph(content=self._process_inline_tokens(token.get("children", [])))

    def _process_code_block(self, token: dict[str, Any]) -> CodeBlock:
        """Process code block token.

        The info string is split into the language (first word) and the
        remaining attributes, both of which the renderer writes back.

        Parameters
        ----------
        token : dict
            Code block token with 'raw' and optional 'attrs'

        Returns
        -------
        CodeBlock
            Code block AST node

        """
        attrs = token.get("attrs") or {}
        info_string = (attrs.get("info") or "").strip()

        language = None
        info = None
        if info_string:
            parts = info_string.split(maxsplit=1)
            language = parts[0]
            if len(parts) > 1:
                info = parts[1]

        return CodeBlock(
            content=token.get("raw", ""),
            language=language,
            info=info,
            metadata={"style": token.get("style", "fenced")},
        )

    def _process_list(self, token: dict[str, Any]) -> List:
        """Process list token.

        Parameters
        ----------
        token : dict
            List token with 'children', 'tight' and 'attrs' (ordered, start)

        Returns
        -------
        List
            List AST node

        """
        attrs = token.get("attrs") or {}

        ordered = bool(attrs.get("ordered", False))
        start = attrs.get("start", 1)
        if not isinstance(start, int):
            start = 1
        tight = token.get("tight", attrs.get("tight", True))

        children = token.get("children", [])
        items = [self._process_list_item(child) for child in children if isinstance(child, dict)]

        return List(ordered=ordered, items=items, start=start, tight=bool(tight))

    def _process_list_item(self, token: dict[str, Any]) -> ListItem:
        """Process list_item or task_list_item token."""
        task_status: Literal["checked", "unchecked"] | None = None
        attrs = token.get("attrs") or {}
        if "checked" in attrs:
            task_status = "checked" if attrs["checked"] else "unchecked"

        return ListItem(children=self._process_tokens(token.get("children", [])), task_status=task_status)

    def _process_table(self, token: dict[str, Any]) -> Table:
        """Process table token.

        Parameters
        ----------
        token : dict
            Table token with 'table_head' and 'table_body' children

        Returns
        -------
        Table
            Table AST node

        """
        header = None
        rows = []
        alignments: list[Any] = []

        for row_token in token.get("children", []):
            row_type = row_token.get("type", "")
            if row_type == "table_head":
                # Header cells are direct children of table_head
                cells = self._process_table_cells(row_token.get("children", []))
                header = TableRow(cells=cells, is_header=True)
                alignments = [cell.alignment for cell in cells]
            elif row_type == "table_body":
                for body_row in row_token.get("children", []):
                    rows.append(TableRow(cells=self._process_table_cells(body_row.get("children", []))))

        return Table(header=header, rows=rows, alignments=alignments)

    def _process_table_cells(self, cell_tokens: list[dict[str, Any]]) -> list[TableCell]:
        """Process the cell tokens of one table row."""
        cells = []
        for cell_token in cell_tokens:
            attrs = cell_token.get("attrs") or {}
            cells.append(
                TableCell(
                    content=self._process_inline_tokens(cell_token.get("children", [])),
                    alignment=attrs.get("align"),
                )
            )
        return cells

    def _process_definition_list(self, token: dict[str, Any]) -> DefinitionList:
        """Process definition list token.

        Parameters
        ----------
        token : dict
            Definition list token with 'def_list_head' and
            'def_list_item' (or 'def_list_content') children

        Returns
        -------
        DefinitionList
            Definition list AST node

        """
        items: list[tuple[DefinitionTerm, list[DefinitionDescription]]] = []

        current_term: DefinitionTerm | None = None
        current_descriptions: list[DefinitionDescription] = []

        for child in token.get("children", []):
            child_type = child.get("type", "")
            if child_type == "def_list_head":
                if current_term is not None:
                    items.append((current_term, current_descriptions))
                current_term = DefinitionTerm(content=self._process_inline_tokens(child.get("children", [])))
                current_descriptions = []

            elif child_type in ("def_list_item", "def_list_content"):
                desc_children = child.get("children", [])
                if desc_children and all(c.get("type") in _INLINE_TOKEN_TYPES for c in desc_children):
                    content: list[Node] = self._process_inline_tokens(desc_children)
                else:
                    content = self._process_tokens(desc_children)
                current_descriptions.append(DefinitionDescription(content=content))

        if current_term is not None:
            items.append((current_term, current_descriptions))

        return DefinitionList(items=items)

    def _process_inline_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process inline tokens, merging adjacent text runs.

        mistune emits a separate text token for every backslash escape, so
        merging keeps each run of literal text in a single ``Text`` node.

        Parameters
        ----------
        tokens : list of dict
            Inline token dictionaries

        Returns
        -------
        list of Node
            Inline AST nodes

        """
        nodes: list[Node] = []

        for token in tokens:
            node = self._process_inline_token(token)
            if node is None:
                continue
            if isinstance(node, Text) and nodes and isinstance(nodes[-1], Text):
                nodes[-1] = Text(content=nodes[-1].content + node.content)
            else:
                nodes.append(node)

        return nodes

    def _handle_text_token(self, token: dict[str, Any]) -> Text:
        """Handle text token."""
        return Text(content=token.get("raw", ""))

    def _handle_strong_token(self, token: dict[str, Any]) -> Strong:
        """Handle strong token."""
        return Strong(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_emphasis_token(self, token: dict[str, Any]) -> Emphasis:
        """Handle emphasis token."""
        return Emphasis(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_codespan_token(self, token: dict[str, Any]) -> Code:
        """Handle codespan token."""
        return Code(content=token.get("raw", ""))

    def _handle_link_token(self, token: dict[str, Any]) -> Link:
        """Handle link token."""
        attrs = token.get("attrs") or {}
        return Link(
            url=attrs.get("url", ""),
            content=self._process_inline_tokens(token.get("children", [])),
            title=attrs.get("title"),
        )

    def _handle_image_token(self, token: dict[str, Any]) -> Image:
        """Handle image token; the alt text is the plain text of its children."""
        attrs = token.get("attrs") or {}
        alt_text = extract_text(self._process_inline_tokens(token.get("children", [])))
        return Image(url=attrs.get("url", ""), alt_text=alt_text, title=attrs.get("title"))

    def _handle_linebreak_token(self, token: dict[str, Any]) -> LineBreak:
        """Handle hard linebreak token."""
        return LineBreak(soft=False)

    def _handle_softbreak_token(self, token: dict[str, Any]) -> LineBreak:
        """Handle softbreak token."""
        return LineBreak(soft=True)

    def _handle_strikethrough_token(self, token: dict[str, Any]) -> Strikethrough:
        """Handle strikethrough token."""
        return Strikethrough(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_inline_html_token(self, token: dict[str, Any]) -> HTMLInline:
        """Handle inline_html token."""
        return HTMLInline(content=token.get("raw", ""))

    def _process_inline_token(self, token: dict[str, Any]) -> Node | None:
        """Process a single inline token.

        Parameters
        ----------
        token : dict
            Inline token dictionary

        Returns
        -------
        Node or None
            Inline AST node

        """
        token_type = token.get("type", "")

        handler_map: dict[str, Any] = {
            "text": self._handle_text_token,
            "strong": self._handle_strong_token,
            "emphasis": self._handle_emphasis_token,
            "codespan": self._handle_codespan_token,
            "link": self._handle_link_token,
            "image": self._handle_image_token,
            "linebreak": self._handle_linebreak_token,
            "softbreak": self._handle_softbreak_token,
            "strikethrough": self._handle_strikethrough_token,
            "inline_html": self._handle_inline_html_token,
        }

        handler = handler_map.get(token_type)
        if handler:
            return handler(token)

        logger.debug("Unmodeled inline token %r; keeping its text", token_type)
        children = token.get("children")
        if isinstance(children, list):
            return Unknown(kind=token_type, children=self._process_inline_tokens(children))
        raw = token.get("raw")
        return Text(content=raw) if raw else None


_INLINE_TOKEN_TYPES = frozenset(
    {
        "text",
        "strong",
        "emphasis",
        "codespan",
        "link",
        "image",
        "linebreak",
        "softbreak",
        "strikethrough",
        "inline_html",
    }
)


def parse_markdown(text: str) -> Document:
    """Parse Markdown text into an AST document with the default plugins."""
    return MarkdownParser().parse(text)


__all__ = ["MarkdownParser", "parse_markdown"]
