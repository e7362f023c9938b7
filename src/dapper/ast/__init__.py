#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/ast/__init__.py
"""Markdown abstract syntax tree for dapper.

The Markdown parser converts mistune tokens into these nodes and the
Markdown renderer prints them back as canonical Markdown.
"""

from dapper.ast.nodes import (
    Alignment,
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
    get_node_children,
)
from dapper.ast.visitors import NodeVisitor, extract_text, walk

__all__ = [
    "Alignment",
    "BlockQuote",
    "Code",
    "CodeBlock",
    "DefinitionDescription",
    "DefinitionList",
    "DefinitionTerm",
    "Document",
    "Emphasis",
    "Heading",
    "HTMLBlock",
    "HTMLInline",
    "Image",
    "LineBreak",
    "Link",
    "List",
    "ListItem",
    "Node",
    "NodeVisitor",
    "Paragraph",
    "Strikethrough",
    "Strong",
    "Table",
    "TableCell",
    "TableRow",
    "Text",
    "ThematicBreak",
    "Unknown",
    "extract_text",
    "get_node_children",
    "walk",
]
