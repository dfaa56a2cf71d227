#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/ast/test_walk.py
"""Unit tests for the enter/exit AST walker.

Tests cover:
- Event order for containers and leaves
- Ancestors, siblings and index of events
- Skipping children still delivers the exit event
- Terminating the walk early
- Children of list, table and definition list nodes

"""

import pytest

from mdterm.ast import (
    BlockQuote,
    DefinitionDescription,
    DefinitionList,
    DefinitionTerm,
    Document,
    Emphasis,
    List,
    ListItem,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
    WalkEvent,
    WalkStatus,
    get_node_children,
    is_container,
    walk,
)


def _record(root, decide=None):
    events: list[WalkEvent] = []

    def callback(event: WalkEvent) -> WalkStatus:
        events.append(event)
        if decide is not None:
            return decide(event)
        return WalkStatus.GO_TO_NEXT

    status = walk(root, callback)
    return events, status


def _names(events: list[WalkEvent]) -> list[tuple[str, bool]]:
    return [(type(event.node).__name__, event.entering) for event in events]


@pytest.mark.unit
class TestWalkOrder:
    """Test the order of walk events."""

    def test_nested_containers(self) -> None:
        """Test that containers are entered and exited around their children."""
        doc = Document(
            children=[
                Paragraph(content=[Text("a"), Emphasis(content=[Text("b")])]),
                ThematicBreak(),
            ]
        )

        events, status = _record(doc)

        assert status is WalkStatus.GO_TO_NEXT
        assert _names(events) == [
            ("Document", True),
            ("Paragraph", True),
            ("Text", True),
            ("Emphasis", True),
            ("Text", True),
            ("Emphasis", False),
            ("Paragraph", False),
            ("ThematicBreak", True),
            ("Document", False),
        ]

    def test_leaves_visited_once(self) -> None:
        """Test that leaf nodes only get an entering event."""
        doc = Document(children=[ThematicBreak()])

        events, _ = _record(doc)

        assert [e.entering for e in events if isinstance(e.node, ThematicBreak)] == [True]

    def test_ancestors_and_siblings(self) -> None:
        """Test the context carried by each event."""
        first = Paragraph(content=[Text("one")])
        second = Paragraph(content=[Text("two")])
        quote = BlockQuote(children=[first, second])
        doc = Document(children=[quote])

        events, _ = _record(doc)

        first_entry = next(e for e in events if e.node is first and e.entering)
        assert first_entry.ancestors == (doc, quote)
        assert first_entry.parent is quote
        assert first_entry.index == 0
        assert first_entry.next_sibling is second

        second_entry = next(e for e in events if e.node is second and e.entering)
        assert second_entry.index == 1
        assert second_entry.next_sibling is None

        root_entry = events[0]
        assert root_entry.parent is None
        assert root_entry.next_sibling is None


@pytest.mark.unit
class TestWalkControl:
    """Test traversal control through WalkStatus."""

    def test_skip_children_still_exits(self) -> None:
        """Test that skipping children keeps the container exit event."""
        doc = Document(children=[Paragraph(content=[Text("hidden")])])

        def decide(event: WalkEvent) -> WalkStatus:
            if isinstance(event.node, Paragraph):
                return WalkStatus.SKIP_CHILDREN
            return WalkStatus.GO_TO_NEXT

        events, status = _record(doc, decide)

        assert status is WalkStatus.GO_TO_NEXT
        assert _names(events) == [
            ("Document", True),
            ("Paragraph", True),
            ("Paragraph", False),
            ("Document", False),
        ]

    def test_terminate_stops_walk(self) -> None:
        """Test that terminating stops before later siblings."""
        doc = Document(children=[Paragraph(content=[Text("a")]), Paragraph(content=[Text("b")])])

        def decide(event: WalkEvent) -> WalkStatus:
            if isinstance(event.node, Text):
                return WalkStatus.TERMINATE
            return WalkStatus.GO_TO_NEXT

        events, status = _record(doc, decide)

        assert status is WalkStatus.TERMINATE
        texts = [e.node for e in events if isinstance(e.node, Text)]
        assert [t.content for t in texts] == ["a"]


@pytest.mark.unit
class TestNodeChildren:
    """Test child enumeration of structured containers."""

    def test_list_children_are_items(self) -> None:
        """Test that a list yields its items."""
        items = [ListItem(children=[Paragraph(content=[Text("x")])]), ListItem()]
        node = List(ordered=False, items=items)

        assert is_container(node)
        assert list(get_node_children(node)) == items

    def test_table_header_comes_first(self) -> None:
        """Test that the header row precedes body rows."""
        header = TableRow(cells=[TableCell(content=[Text("h")])], is_header=True)
        body = TableRow(cells=[TableCell(content=[Text("b")])])
        table = Table(header=header, rows=[body])

        assert list(get_node_children(table)) == [header, body]

    def test_definition_list_flattens_terms_and_descriptions(self) -> None:
        """Test that terms are followed by their descriptions."""
        term = DefinitionTerm(content=[Text("term")])
        first = DefinitionDescription(content=[Paragraph(content=[Text("one")])])
        second = DefinitionDescription(content=[Paragraph(content=[Text("two")])])
        node = DefinitionList(items=[(term, [first, second])])

        assert list(get_node_children(node)) == [term, first, second]

    def test_leaf_is_not_container(self) -> None:
        """Test that leaves report no children."""
        assert not is_container(Text("x"))
        assert list(get_node_children(Text("x"))) == []
