#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/renderers/terminal.py
"""Terminal rendering from AST.

This module provides the TerminalRenderer class which turns a document tree
into ANSI-styled text laid out for a fixed terminal width.

The renderer walks the tree with enter/exit events (:func:`mdterm.ast.walk`)
and keeps three kinds of state while doing so:

- a padding stack: the left margins of the open containers (block quote
  bars, list item indents)
- an inline accumulator: the styled text of the block being visited, wrapped
  and written when the block closes
- a one-shot indent: the list marker used as the margin of the first line of
  the next wrapped block

Containers only push and pop state; paragraphs, headings, code blocks and
table cells are the blocks that actually write text.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Callable, Optional, Sequence, Union

from mdterm.ast import (
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
    WalkEvent,
    WalkStatus,
    get_node_children,
    walk,
)
from mdterm.constants import (
    BAR_GLYPH,
    BULLET_GLYPH,
    DEFINITION_INDENT,
    RULE_GLYPH,
    TASK_CHECKED_GLYPH,
    TASK_UNCHECKED_GLYPH,
)
from mdterm.exceptions import ImageFetchError, InvalidTreeError, RenderingError, UnknownNodeError
from mdterm.options.terminal import TerminalRendererOptions
from mdterm.renderers._state import RenderState
from mdterm.renderers._table import CellAlign, TableLayout
from mdterm.renderers.base import BaseRenderer
from mdterm.utils.ansi import (
    BOLD_ON,
    COLOR_OFF,
    CROSSED_OUT_OFF,
    CROSSED_OUT_ON,
    DEFAULT_HEADING_SHADES,
    DEFAULT_QUOTE_SHADES,
    GREEN_ON,
    ITALIC_OFF,
    ITALIC_ON,
    RESET,
    UNDERLINE_OFF,
    UNDERLINE_ON,
    EscapeState,
    blue,
    blue_bg_italic,
    bold,
    green,
    green_bold,
    red,
    shade,
)
from mdterm.utils.images import ImageRenderer, PillowImageRenderer, fetch_image
from mdterm.utils.text import collapse_line_breaks, visual_width, wrap_with_pad, wrap_with_pad_indent

logger = logging.getLogger(__name__)

# Blocks preceded by a blank line when they follow a paragraph
_SEPARATED_BLOCKS = (Paragraph, Heading, ThematicBreak, CodeBlock, HTMLBlock, Table)

# Nearest ancestor deciding whether embedded line breaks are collapsed
_CLEANING_ANCESTORS = (Heading, Image, Link, TableCell, Document, ListItem)

_ALIGNMENTS = {"left": CellAlign.LEFT, "center": CellAlign.CENTER, "right": CellAlign.RIGHT}

Handler = Callable[[WalkEvent], Optional[WalkStatus]]


def should_clean_text(ancestors: Sequence[Node]) -> bool:
    """Tell whether embedded line breaks of inline text are collapsed.

    Text whose nearest deciding ancestor is a block quote keeps the author's
    line breaks; text under a heading, image, link, table cell, list item or
    directly under the document has them collapsed to spaces.

    Raises
    ------
    InvalidTreeError
        If no ancestor decides, which only happens for detached inline nodes

    """
    for ancestor in reversed(ancestors):
        if isinstance(ancestor, BlockQuote):
            return False
        if isinstance(ancestor, _CLEANING_ANCESTORS):
            return True
    raise InvalidTreeError("Inline node outside of any block", rendering_stage="walk")


def _plain_text(nodes: Sequence[Node]) -> str:
    """Concatenate the literal text below ``nodes``, dropping formatting."""
    parts = []
    for node in nodes:
        if isinstance(node, (Text, Code, HTMLInline)):
            parts.append(node.content)
        elif isinstance(node, Image):
            parts.append(node.alt_text)
        elif isinstance(node, LineBreak):
            parts.append("\n")
        else:
            parts.append(_plain_text(get_node_children(node)))
    return "".join(parts)


class TerminalRenderer(BaseRenderer):
    """Render AST nodes to ANSI-styled terminal text.

    Parameters
    ----------
    options : TerminalRendererOptions or None, default = None
        Terminal rendering options
    image_renderer : ImageRenderer or None, default = None
        Converts fetched image bytes to terminal text when images are enabled;
        a :class:`~mdterm.utils.images.PillowImageRenderer` when None

    Examples
    --------
    Basic usage:

        >>> from mdterm.ast import Document, Paragraph, Text
        >>> renderer = TerminalRenderer()
        >>> renderer.render_to_string(Document(children=[Paragraph(content=[Text("Hello")])]))
        'Hello\\n'

    Narrow output with a margin:

        >>> options = TerminalRendererOptions(line_width=40, left_pad=2)
        >>> renderer = TerminalRenderer(options)

    """

    def __init__(
        self,
        options: TerminalRendererOptions | None = None,
        image_renderer: ImageRenderer | None = None,
    ):
        """Initialize the terminal renderer with options."""
        BaseRenderer._validate_options_type(options, TerminalRendererOptions, "terminal")
        options = options or TerminalRendererOptions()
        super().__init__(options)
        self.options: TerminalRendererOptions = options
        self.image_renderer: ImageRenderer = image_renderer or PillowImageRenderer()

        self._heading_shade = shade(options.heading_shades or DEFAULT_HEADING_SHADES)
        self._quote_shade = shade(options.blockquote_shades or DEFAULT_QUOTE_SHADES)
        self._state = RenderState.fresh(options.left_pad)

        self._handlers: dict[type, Handler] = {
            Document: self._visit_document,
            BlockQuote: self._visit_block_quote,
            List: self._visit_list,
            ListItem: self._visit_list_item,
            DefinitionList: self._visit_definition_list,
            DefinitionTerm: self._visit_definition_term,
            DefinitionDescription: self._visit_definition_description,
            Paragraph: self._visit_paragraph,
            Heading: self._visit_heading,
            ThematicBreak: self._visit_thematic_break,
            CodeBlock: self._visit_code_block,
            HTMLBlock: self._visit_html_block,
            Table: self._visit_table,
            TableRow: self._visit_table_row,
            TableCell: self._visit_table_cell,
            Text: self._visit_text,
            Emphasis: self._visit_emphasis,
            Strong: self._visit_strong,
            Strikethrough: self._visit_strikethrough,
            Underline: self._visit_underline,
            Code: self._visit_code,
            HTMLInline: self._visit_html_inline,
            Link: self._visit_link,
            Image: self._visit_image,
            LineBreak: self._visit_line_break,
        }

    def render_to_string(self, document: Document) -> str:
        """Render a document AST to terminal text.

        Parameters
        ----------
        document : Document
            The document node to render

        Returns
        -------
        str
            Styled text; blank lines between blocks are part of the output

        Raises
        ------
        InvalidTreeError
            If the root is not a Document or the tree is malformed
        UnknownNodeError
            If the tree holds a node kind the renderer does not know

        """
        if not isinstance(document, Document):
            raise InvalidTreeError(
                f"Expected a Document root, got {type(document).__name__}", rendering_stage="walk"
            )

        self._state = RenderState.fresh(self.options.left_pad)
        walk(document, self._dispatch)
        return self._state.out.getvalue()

    def render(self, doc: Document, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render AST to terminal text and write to output.

        Parameters
        ----------
        doc : Document
            AST Document node to render
        output : str, Path, IO[bytes], or IO[str]
            Output destination (file path or file-like object)

        """
        self.write_text_output(self.render_to_string(doc), output)

    def _dispatch(self, event: WalkEvent) -> WalkStatus:
        handler = self._handlers.get(type(event.node))
        if handler is None:
            raise UnknownNodeError(event.node)
        return handler(event) or WalkStatus.GO_TO_NEXT

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _write(self, text: str) -> None:
        self._state.out.write(text)

    def _pad(self) -> str:
        return self._state.padding.current()

    def _rule(self) -> str:
        pad = self._pad()
        return pad + RULE_GLYPH * max(self.options.line_width - visual_width(pad), 0)

    def _active_styles(self) -> EscapeState:
        """Return the attributes active at the end of the accumulated inline content."""
        snapshot = EscapeState()
        snapshot.witness(self._state.base_style + "".join(self._state.inline))
        return snapshot

    def _append_styled(self, styled: str) -> None:
        """Append text ending in a full reset, then restore the surrounding styles."""
        snapshot = self._active_styles()
        self._state.inline.append(styled)
        self._state.inline.append(snapshot.format())

    def _wrap_block(self, content: str) -> str:
        """Wrap accumulated content, consuming the one-shot indent if set."""
        state = self._state
        if state.indent:
            wrapped = wrap_with_pad_indent(content, self.options.line_width, state.indent, self._pad())
            state.indent = ""
            return wrapped
        return wrap_with_pad(content, self.options.line_width, self._pad())

    # ------------------------------------------------------------------
    # Containers
    # ------------------------------------------------------------------

    def _visit_document(self, event: WalkEvent) -> None:
        if event.entering:
            return

        state = self._state
        if len(state.padding):
            raise InvalidTreeError(
                f"Unbalanced padding: {len(state.padding)} fragment(s) left at document end",
                rendering_stage="padding",
            )
        if state.inline:
            raise InvalidTreeError("Inline content outside of any block", rendering_stage="walk")
        if state.table is not None:
            raise InvalidTreeError("Table left open at document end", rendering_stage="table")

    def _visit_block_quote(self, event: WalkEvent) -> None:
        state = self._state
        if event.entering:
            state.blockquote_level += 1
            state.padding.push(self._quote_shade(state.blockquote_level)(BAR_GLYPH))
            return

        state.blockquote_level -= 1
        state.padding.pop()
        if event.next_sibling is not None:
            self._write("\n")

    def _visit_list(self, event: WalkEvent) -> None:
        if event.entering:
            return

        # one blank line after a list, unless another list or the parent item follows up
        next_node = event.next_sibling
        if next_node is not None and not isinstance(next_node, List) and not isinstance(event.parent, ListItem):
            self._write("\n")

    def _visit_list_item(self, event: WalkEvent) -> None:
        state = self._state
        if not event.entering:
            state.padding.pop()
            state.indent = ""
            return

        node = event.node
        assert isinstance(node, ListItem)
        parent = event.parent

        task_marker = ""
        if node.task_status is not None:
            task_marker = TASK_CHECKED_GLYPH if node.task_status == "checked" else TASK_UNCHECKED_GLYPH

        if isinstance(parent, List) and parent.ordered:
            prefix = f"{event.index + 1}. {task_marker}"
        else:
            prefix = task_marker or BULLET_GLYPH

        state.indent = self._pad() + green(prefix)
        state.padding.push(" " * visual_width(prefix))

    def _visit_definition_list(self, event: WalkEvent) -> None:
        """Definition lists only hold terms and descriptions."""

    def _visit_definition_term(self, event: WalkEvent) -> None:
        state = self._state
        if event.entering:
            state.inline.append(GREEN_ON)
            return

        state.inline.append(COLOR_OFF)
        self._write(self._wrap_block(state.drain_inline()) + "\n")

    def _visit_definition_description(self, event: WalkEvent) -> None:
        if event.entering:
            self._state.padding.push(DEFINITION_INDENT)
            return

        self._state.padding.pop()
        self._write("\n")

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def _visit_paragraph(self, event: WalkEvent) -> None:
        if event.entering:
            return

        self._write(self._wrap_block(self._state.drain_inline()) + "\n")
        if isinstance(event.next_sibling, _SEPARATED_BLOCKS):
            self._write("\n")

    def _visit_heading(self, event: WalkEvent) -> None:
        node = event.node
        assert isinstance(node, Heading)
        state = self._state
        style = self._heading_shade(node.level)

        if event.entering:
            # inline resets inside the heading re-open its shade
            state.base_style = style("").removesuffix(RESET)
            return

        state.base_style = ""
        state.numbering.observe(node.level)
        content = style(f"{state.numbering.render()} {state.drain_inline()}")

        self._write(wrap_with_pad(content, self.options.line_width, self._pad()) + "\n")
        if node.level == 1:
            self._write(self._rule() + "\n")
        self._write("\n")

    def _visit_thematic_break(self, event: WalkEvent) -> None:
        self._write(self._rule() + "\n\n")

    def _visit_code_block(self, event: WalkEvent) -> None:
        node = event.node
        assert isinstance(node, CodeBlock)
        self._write_barred_block(node.content)

    def _visit_html_block(self, event: WalkEvent) -> None:
        node = event.node
        assert isinstance(node, HTMLBlock)
        self._write_barred_block(node.content)

    def _write_barred_block(self, literal: str) -> None:
        """Write a literal block verbatim behind a bar, without styling it."""
        padding = self._state.padding
        padding.push(green_bold(BAR_GLYPH))
        output = wrap_with_pad(literal.rstrip("\n"), self.options.line_width, padding.current())
        padding.pop()
        self._write(output + "\n\n")

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def _visit_table(self, event: WalkEvent) -> None:
        state = self._state
        if event.entering:
            state.table = TableLayout()
            return

        if state.table is None:
            raise InvalidTreeError("Table closed without being opened", rendering_stage="table")
        state.table.render(state.out, self.options.left_pad, self.options.line_width)
        state.table = None
        self._write("\n")

    def _visit_table_row(self, event: WalkEvent) -> None:
        node = event.node
        assert isinstance(node, TableRow)
        if event.entering and not node.is_header:
            self._require_table().next_body_row()

    def _visit_table_cell(self, event: WalkEvent) -> None:
        if event.entering:
            return

        node = event.node
        assert isinstance(node, TableCell)
        table = self._require_table()
        content = self._state.drain_inline()

        row = event.parent
        if isinstance(row, TableRow) and row.is_header:
            table.add_header_cell(bold(content), _ALIGNMENTS.get(node.alignment or "left", CellAlign.LEFT))
        else:
            table.add_body_cell(content, _ALIGNMENTS.get(node.alignment or "", CellAlign.COPY_HEADER))

    def _require_table(self) -> TableLayout:
        if self._state.table is None:
            raise InvalidTreeError("Table row or cell outside of a table", rendering_stage="table")
        return self._state.table

    # ------------------------------------------------------------------
    # Inline content
    # ------------------------------------------------------------------

    def _visit_text(self, event: WalkEvent) -> None:
        node = event.node
        assert isinstance(node, Text)
        if node.content == "\n":
            return

        content = node.content
        if should_clean_text(event.ancestors):
            content = collapse_line_breaks(content)
        self._state.inline.append(content)

    def _visit_emphasis(self, event: WalkEvent) -> None:
        self._state.inline.append(ITALIC_ON if event.entering else ITALIC_OFF)

    def _visit_strikethrough(self, event: WalkEvent) -> None:
        self._state.inline.append(CROSSED_OUT_ON if event.entering else CROSSED_OUT_OFF)

    def _visit_underline(self, event: WalkEvent) -> None:
        self._state.inline.append(UNDERLINE_ON if event.entering else UNDERLINE_OFF)

    def _visit_strong(self, event: WalkEvent) -> None:
        inline = self._state.inline
        if event.entering:
            inline.append(BOLD_ON)
            return

        # SGR 21 means "double underline" on some terminals: reset everything
        # and re-apply what was active, minus bold unless the heading is bold
        snapshot = self._active_styles()
        enclosing = EscapeState()
        enclosing.witness(self._state.base_style)
        if not enclosing.bold:
            snapshot.clear("bold")
        inline.append(RESET)
        inline.append(snapshot.format())

    def _visit_code(self, event: WalkEvent) -> None:
        node = event.node
        assert isinstance(node, Code)
        self._append_styled(blue_bg_italic(node.content))

    def _visit_html_inline(self, event: WalkEvent) -> None:
        node = event.node
        assert isinstance(node, HTMLInline)
        self._append_styled(red(node.content))

    def _visit_link(self, event: WalkEvent) -> Optional[WalkStatus]:
        if not event.entering:
            return None

        node = event.node
        assert isinstance(node, Link)
        label = collapse_line_breaks(_plain_text(node.content))

        inline = self._state.inline
        inline.append(f"[{label}](")
        self._append_styled(blue(node.url))
        if node.title:
            inline.append(f" {node.title}")
        inline.append(")")
        return WalkStatus.SKIP_CHILDREN

    def _visit_image(self, event: WalkEvent) -> None:
        node = event.node
        assert isinstance(node, Image)
        alt = node.alt_text.replace("\n", "").strip()
        destination = node.url.replace("\n", "").strip()

        if self.options.image_mode != "none":
            visual = self._render_image(destination)
            if visual is not None:
                self._state.inline.append(f"\n{visual}\n")
                return

        self._state.inline.append(f"![{alt}](")
        self._append_styled(blue(destination))
        self._state.inline.append(")")

    def _render_image(self, destination: str) -> Optional[str]:
        """Fetch and draw an image, or return None to use the textual form."""
        try:
            data = fetch_image(
                destination,
                timeout=self.options.image_fetch_timeout,
                max_size_bytes=self.options.max_asset_size_bytes,
            )
        except ImageFetchError as e:
            if self.options.fail_on_resource_errors:
                raise RenderingError(
                    f"Failed to load image {destination}: {e}", rendering_stage="image", original_error=e
                ) from e
            logger.warning(f"Failed to load image {destination}, showing it as text: {e}")
            return None

        width = max(self.options.line_width - visual_width(self._pad()), 1)
        visual, rendered = self.image_renderer.render(data, width, self.options.image_mode)
        if not rendered:
            logger.warning(f"Could not draw image {destination}, showing it as text")
            return None
        return visual

    def _visit_line_break(self, event: WalkEvent) -> None:
        node = event.node
        assert isinstance(node, LineBreak)
        if node.soft and should_clean_text(event.ancestors):
            self._state.inline.append(" ")
        else:
            self._state.inline.append("\n")
