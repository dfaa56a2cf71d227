#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/ast/walk.py
"""Depth-first traversal of the AST with explicit enter/exit events.

Renderers that need to keep nested state (padding, counters, builders) find
it easier to react to "entering" and "exiting" a container than to recurse
themselves. :func:`walk` delivers those events in document order:

- container nodes (see :func:`~mdterm.ast.nodes.is_container`) are visited
  once on entry and once on exit
- leaf nodes are visited once, with ``entering=True``

The callback controls the traversal through the :class:`WalkStatus` it
returns. Skipping children still delivers the exit event of the container,
so every push made on entry can be matched by a pop on exit.

Examples
--------
    >>> from mdterm.ast import Document, Paragraph, Text, walk, WalkStatus
    >>> doc = Document(children=[Paragraph(content=[Text("hi")])])
    >>> seen = []
    >>> def record(event):
    ...     seen.append((type(event.node).__name__, event.entering))
    ...     return WalkStatus.GO_TO_NEXT
    >>> walk(doc, record)
    <WalkStatus.GO_TO_NEXT: 'go_to_next'>
    >>> seen
    [('Document', True), ('Paragraph', True), ('Text', True), ('Paragraph', False), ('Document', False)]

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from mdterm.ast.nodes import Node, get_node_children, is_container


class WalkStatus(Enum):
    """Traversal instruction returned by a walk callback."""

    GO_TO_NEXT = "go_to_next"
    SKIP_CHILDREN = "skip_children"
    TERMINATE = "terminate"


@dataclass(frozen=True)
class WalkEvent:
    """A single visitation of a node.

    Parameters
    ----------
    node : Node
        Node being visited
    entering : bool
        True on entry, False on exit (leaf nodes are only entered)
    ancestors : tuple of Node
        Chain of enclosing nodes, root first and direct parent last
    siblings : tuple of Node
        Children of the parent, including ``node`` itself
    index : int
        Position of ``node`` within ``siblings``

    """

    node: Node
    entering: bool
    ancestors: tuple[Node, ...] = ()
    siblings: tuple[Node, ...] = ()
    index: int = 0

    @property
    def parent(self) -> Optional[Node]:
        """Return the direct parent, or None for the root."""
        return self.ancestors[-1] if self.ancestors else None

    @property
    def next_sibling(self) -> Optional[Node]:
        """Return the node following this one under the same parent."""
        if self.index + 1 < len(self.siblings):
            return self.siblings[self.index + 1]
        return None


WalkCallback = Callable[[WalkEvent], WalkStatus]


def walk(root: Node, callback: WalkCallback) -> WalkStatus:
    """Walk ``root`` and its descendants, calling ``callback`` for each event.

    Parameters
    ----------
    root : Node
        Node to start from
    callback : callable
        Receives each :class:`WalkEvent` and returns a :class:`WalkStatus`

    Returns
    -------
    WalkStatus
        ``TERMINATE`` if the callback stopped the walk, otherwise ``GO_TO_NEXT``

    """
    return _walk(root, (), (root,), 0, callback)


def _walk(
    node: Node,
    ancestors: tuple[Node, ...],
    siblings: tuple[Node, ...],
    index: int,
    callback: WalkCallback,
) -> WalkStatus:
    container = is_container(node)
    status = callback(WalkEvent(node, True, ancestors, siblings, index))

    if status is WalkStatus.TERMINATE:
        # even when terminating, close the container
        if container:
            callback(WalkEvent(node, False, ancestors, siblings, index))
        return status

    if container and status is not WalkStatus.SKIP_CHILDREN:
        children = tuple(get_node_children(node))
        child_ancestors = ancestors + (node,)
        for child_index, child in enumerate(children):
            if _walk(child, child_ancestors, children, child_index, callback) is WalkStatus.TERMINATE:
                return WalkStatus.TERMINATE

    if container:
        if callback(WalkEvent(node, False, ancestors, siblings, index)) is WalkStatus.TERMINATE:
            return WalkStatus.TERMINATE

    return WalkStatus.GO_TO_NEXT
