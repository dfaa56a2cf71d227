#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/ast/nodes.py
"""AST node classes for document representation.

This module defines the closed node hierarchy the terminal renderer walks.
Each node represents a structural or inline element of a parsed markdown
document. Nodes are plain dataclasses: the tree is built once by a parser and
only read afterwards.

Node Hierarchy
--------------
Block-level nodes represent structural document elements:
    - Document, Heading, Paragraph, CodeBlock, BlockQuote
    - List, ListItem, Table, TableRow, TableCell
    - ThematicBreak, HTMLBlock
    - DefinitionList, DefinitionTerm, DefinitionDescription

Inline nodes represent text formatting:
    - Text, Emphasis, Strong, Strikethrough, Underline, Code
    - Link, Image, LineBreak, HTMLInline

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

Alignment = Literal["left", "center", "right"]


class Node:
    """Base class for all AST nodes.

    The set of subclasses is closed: renderers dispatch on the concrete node
    type and treat any other type as a defect of the input tree.
    """


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root document node containing all other nodes.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the document

    """

    children: list[Node] = field(default_factory=list)


@dataclass
class Heading(Node):
    """Heading node (h1-h6).

    Represents a document heading with a level from 1 to 6 and inline content.

    Parameters
    ----------
    level : int
        Heading level (1-6, where 1 is most important)
    content : list of Node, default = empty list
        Inline nodes representing heading text

    """

    level: int
    content: list[Node] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate heading level is between 1 and 6."""
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")


@dataclass
class Paragraph(Node):
    """Paragraph node containing inline content.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline nodes representing paragraph content

    """

    content: list[Node] = field(default_factory=list)


@dataclass
class CodeBlock(Node):
    """Code block node with optional language specification.

    Represents a fenced or indented code block.

    Parameters
    ----------
    content : str
        Code content (not parsed as markdown)
    language : str or None, default = None
        Language named in the fence info string

    """

    content: str
    language: Optional[str] = None


@dataclass
class BlockQuote(Node):
    """Block quote node containing other block elements.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the quote

    """

    children: list[Node] = field(default_factory=list)


@dataclass
class List(Node):
    """List node (ordered or unordered).

    Parameters
    ----------
    ordered : bool
        True for ordered lists, False for unordered
    items : list of ListItem, default = empty list
        List items
    start : int, default = 1
        Starting number written in the source for ordered lists
    tight : bool, default = True
        Whether list is tight (no blank lines between items)

    """

    ordered: bool
    items: list[ListItem] = field(default_factory=list)
    start: int = 1
    tight: bool = True


@dataclass
class ListItem(Node):
    """List item node containing block content.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the list item
    task_status : {'checked', 'unchecked'} or None, default = None
        For task lists (GFM extension)

    """

    children: list[Node] = field(default_factory=list)
    task_status: Optional[Literal["checked", "unchecked"]] = None


@dataclass
class Table(Node):
    """Table node with optional header and alignment.

    Parameters
    ----------
    rows : list of TableRow, default = empty list
        Table rows (excluding header)
    header : TableRow or None, default = None
        Optional header row
    alignments : list, default = empty list
        Column alignments ('left', 'center', 'right', or None)

    """

    rows: list[TableRow] = field(default_factory=list)
    header: Optional[TableRow] = None
    alignments: list[Alignment | None] = field(default_factory=list)


@dataclass
class TableRow(Node):
    """Table row node containing cells.

    Parameters
    ----------
    cells : list of TableCell, default = empty list
        Cells in this row
    is_header : bool, default = False
        Whether this is a header row

    """

    cells: list[TableCell] = field(default_factory=list)
    is_header: bool = False


@dataclass
class TableCell(Node):
    """Table cell node with optional alignment.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline content of the cell
    alignment : {'left', 'center', 'right'} or None, default = None
        Cell alignment

    """

    content: list[Node] = field(default_factory=list)
    alignment: Alignment | None = None


@dataclass
class ThematicBreak(Node):
    """Thematic break node (horizontal rule)."""


@dataclass
class HTMLBlock(Node):
    """Raw HTML block node.

    The HTML is shown verbatim; it is never interpreted.

    Parameters
    ----------
    content : str
        Raw HTML content

    """

    content: str


@dataclass
class DefinitionList(Node):
    """Definition list node (block).

    Parameters
    ----------
    items : list of tuple, default = empty list
        List of (DefinitionTerm, list[DefinitionDescription]) tuples

    """

    items: list[tuple[DefinitionTerm, list[DefinitionDescription]]] = field(default_factory=list)


@dataclass
class DefinitionTerm(Node):
    """Definition term node holding the inline content of the term."""

    content: list[Node] = field(default_factory=list)


@dataclass
class DefinitionDescription(Node):
    """Definition description node holding block-level content."""

    content: list[Node] = field(default_factory=list)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Plain text node.

    Parameters
    ----------
    content : str
        Text content; may contain newlines when built by hand

    """

    content: str


@dataclass
class Emphasis(Node):
    """Emphasis (italic) node."""

    content: list[Node] = field(default_factory=list)


@dataclass
class Strong(Node):
    """Strong (bold) node."""

    content: list[Node] = field(default_factory=list)


@dataclass
class Strikethrough(Node):
    """Strikethrough node (GFM extension)."""

    content: list[Node] = field(default_factory=list)


@dataclass
class Underline(Node):
    """Underline node."""

    content: list[Node] = field(default_factory=list)


@dataclass
class Code(Node):
    """Inline code node.

    Parameters
    ----------
    content : str
        Code content

    """

    content: str


@dataclass
class Link(Node):
    """Link node.

    Parameters
    ----------
    url : str
        Link destination URL
    content : list of Node, default = empty list
        Inline nodes representing link text
    title : str or None, default = None
        Optional link title (tooltip)

    """

    url: str
    content: list[Node] = field(default_factory=list)
    title: Optional[str] = None


@dataclass
class Image(Node):
    """Image node.

    Parameters
    ----------
    url : str
        Image path or URL
    alt_text : str, default = ''
        Alternative text description
    title : str or None, default = None
        Optional image title

    """

    url: str
    alt_text: str = ""
    title: Optional[str] = None


@dataclass
class LineBreak(Node):
    """Line break node.

    Parameters
    ----------
    soft : bool, default = False
        True for soft breaks (newline in source), False for hard breaks

    """

    soft: bool = False


@dataclass
class HTMLInline(Node):
    """Inline HTML node shown verbatim.

    Parameters
    ----------
    content : str
        Raw HTML content

    """

    content: str


_CONTAINER_TYPES = (
    Document,
    Heading,
    Paragraph,
    BlockQuote,
    List,
    ListItem,
    Table,
    TableRow,
    TableCell,
    DefinitionList,
    DefinitionTerm,
    DefinitionDescription,
    Emphasis,
    Strong,
    Strikethrough,
    Underline,
    Link,
)


def is_container(node: Node) -> bool:
    """Tell whether a node is visited on both entry and exit.

    Parameters
    ----------
    node : Node
        Node to classify

    Returns
    -------
    bool
        True for container kinds, False for leaf kinds (Text, Code,
        CodeBlock, HTMLBlock, HTMLInline, ThematicBreak, Image, LineBreak)

    """
    return isinstance(node, _CONTAINER_TYPES)


def get_node_children(node: Node) -> list[Node]:
    """Get all child nodes from a node, in document order.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        List of child nodes (empty list if node has no children)

    Examples
    --------
    >>> heading = Heading(level=1, content=[Text("Hello"), Strong(content=[Text("world")])])
    >>> len(get_node_children(heading))
    2

    """
    # Block nodes with 'children' attribute
    if isinstance(node, (Document, BlockQuote, ListItem)):
        return list(node.children)

    # Nodes with 'content' attribute holding nodes
    if isinstance(
        node,
        (
            Heading,
            Paragraph,
            Emphasis,
            Strong,
            Strikethrough,
            Underline,
            Link,
            TableCell,
            DefinitionTerm,
            DefinitionDescription,
        ),
    ):
        return list(node.content)

    if isinstance(node, List):
        return list(node.items)

    # Table has header and rows
    if isinstance(node, Table):
        children: list[Node] = []
        if node.header:
            children.append(node.header)
        children.extend(node.rows)
        return children

    if isinstance(node, TableRow):
        return list(node.cells)

    # DefinitionList has terms and descriptions
    if isinstance(node, DefinitionList):
        dl_children: list[Node] = []
        for term, descriptions in node.items:
            dl_children.append(term)
            dl_children.extend(descriptions)
        return dl_children

    # Leaf nodes (no children)
    return []
