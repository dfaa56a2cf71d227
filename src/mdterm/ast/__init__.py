#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/ast/__init__.py
"""Abstract Syntax Tree (AST) module for document representation.

This module provides the read-only tree the terminal renderer consumes. The
tree is produced by a parser (see :mod:`mdterm.parsers.markdown`) or built by
hand, and walked with enter/exit events by :func:`walk`.

- nodes: AST node classes representing document structure
- walk: depth-first traversal with explicit enter/exit events

Examples
--------
Basic usage:

    >>> from mdterm.ast import Document, Heading, Paragraph, Text
    >>> from mdterm.renderers.terminal import TerminalRenderer
    >>>
    >>> doc = Document(children=[
    ...     Heading(level=1, content=[Text(content="Title")]),
    ...     Paragraph(content=[Text(content="Hello world")])
    ... ])
    >>> output = TerminalRenderer().render_to_string(doc)

"""

from __future__ import annotations

from mdterm.ast.nodes import (
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
    Underline,
    get_node_children,
    is_container,
)
from mdterm.ast.walk import WalkCallback, WalkEvent, WalkStatus, walk

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
    "Paragraph",
    "Strikethrough",
    "Strong",
    "Table",
    "TableCell",
    "TableRow",
    "Text",
    "ThematicBreak",
    "Underline",
    "WalkCallback",
    "WalkEvent",
    "WalkStatus",
    "get_node_children",
    "is_container",
    "walk",
]
