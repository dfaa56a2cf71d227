#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/parsers/markdown.py
"""Markdown to AST converter.

This module provides conversion from Markdown documents to AST representation
using the mistune parser. Mistune produces a token stream (``renderer=None``),
which is mapped node by node onto :mod:`mdterm.ast`.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Any, Literal, Union

import mistune

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
)
from mdterm.exceptions import ParsingError
from mdterm.options.markdown import MarkdownParserOptions
from mdterm.parsers.base import BaseParser

logger = logging.getLogger(__name__)

# Token types that carry block content rather than inline content
_BLOCK_TOKEN_TYPES = frozenset(
    {
        "heading",
        "paragraph",
        "block_text",
        "block_code",
        "block_quote",
        "list",
        "table",
        "thematic_break",
        "block_html",
        "def_list",
        "blank_line",
    }
)


class MarkdownToAstConverter(BaseParser):
    r"""Convert Markdown to AST representation.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> converter = MarkdownToAstConverter()
        >>> doc = converter.parse("# Hello\n\nThis is **bold**.")

    With options:

        >>> options = MarkdownParserOptions(parse_tables=False)
        >>> converter = MarkdownToAstConverter(options)

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the Markdown parser with options."""
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown")
        options = options or MarkdownParserOptions()
        super().__init__(options)
        self.options: MarkdownParserOptions = options

    def parse(self, input_data: Union[str, Path, IO[bytes], IO[str], bytes]) -> Document:
        """Parse Markdown input into AST Document.

        Parameters
        ----------
        input_data : str, Path, IO[bytes], IO[str], or bytes
            Markdown input to parse. Can be:
            - File path (str or Path)
            - File-like object
            - Raw markdown bytes
            - Markdown string

        Returns
        -------
        Document
            AST document node

        Raises
        ------
        ParsingError
            If the input cannot be read or tokenized

        """
        markdown_content = self._load_text_content(input_data)

        plugins = []
        if self.options.parse_strikethrough:
            plugins.append("strikethrough")
        if self.options.parse_tables:
            plugins.append("table")
        if self.options.parse_task_lists:
            plugins.append("task_lists")
        if self.options.parse_definition_lists:
            plugins.append("def_list")

        markdown = mistune.create_markdown(plugins=plugins, renderer=None)

        try:
            tokens, _state = markdown.parse(markdown_content)
        except (ValueError, TypeError, RecursionError) as e:
            raise ParsingError(f"Failed to tokenize markdown: {e}", parsing_stage="tokenize", original_error=e) from e

        children = self._process_tokens(tokens) if isinstance(tokens, list) else []
        logger.debug(f"Parsed markdown into {len(children)} top-level blocks")
        return Document(children=children)

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process a list of mistune block tokens into AST nodes."""
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
            Resulting AST node, None for tokens with no visible output

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

        if token_type != "blank_line":
            logger.debug(f"Ignoring unsupported markdown token: {token_type}")
        return None

    def _process_heading(self, token: dict[str, Any]) -> Heading:
        """Process heading token."""
        attrs = token.get("attrs") or {}
        level = attrs.get("level", 1) if isinstance(attrs, dict) else 1

        if not isinstance(level, int) or level < 1 or level > 6:
            level = 1

        return Heading(level=level, content=self._process_inline_tokens(token.get("children", [])))

    def _process_paragraph(self, token: dict[str, Any]) -> Paragraph:
        """Process paragraph token."""
        return Paragraph(content=self._process_inline_tokens(token.get("children", [])))

    def _process_code_block(self, token: dict[str, Any]) -> CodeBlock:
        """Process code block token.

        Only the first word of the info string is kept, as the language.
        """
        code_content = token.get("raw", "")
        info_string = (token.get("attrs") or {}).get("info")

        language = None
        if info_string:
            parts = info_string.strip().split(maxsplit=1)
            if parts:
                language = parts[0]

        return CodeBlock(content=code_content, language=language)

    def _process_list(self, token: dict[str, Any]) -> List:
        """Process list token.

        Parameters
        ----------
        token : dict
            List token with 'children', 'attrs' (ordered, start) and 'tight'

        Returns
        -------
        List
            List AST node

        """
        attrs = token.get("attrs") or {}
        if not isinstance(attrs, dict):
            attrs = {}

        ordered = bool(attrs.get("ordered", False))
        start = attrs.get("start", 1)
        tight = token.get("tight", attrs.get("tight", True))

        children = token.get("children", [])
        items = [self._process_list_item(child) for child in children if isinstance(child, dict)]

        return List(ordered=ordered, items=items, start=start, tight=tight)

    def _process_list_item(self, token: dict[str, Any]) -> ListItem:
        """Process list item token, including task list checkboxes."""
        content = self._process_tokens(token.get("children", []))

        task_status: Literal["checked", "unchecked"] | None = None
        attrs = token.get("attrs") or {}
        if token.get("type") == "task_list_item" or "checked" in attrs:
            task_status = "checked" if attrs.get("checked") else "unchecked"

        return ListItem(children=content, task_status=task_status)

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
        alignments = []

        for row_token in token.get("children", []):
            row_type = row_token.get("type", "")
            if row_type == "table_head":
                # header cells are direct children of table_head
                cells = self._process_table_row_cells(row_token)
                header = TableRow(cells=cells, is_header=True)
                alignments = [cell.alignment for cell in cells]

            elif row_type == "table_body":
                for body_row_token in row_token.get("children", []):
                    rows.append(TableRow(cells=self._process_table_row_cells(body_row_token), is_header=False))

        return Table(header=header, rows=rows, alignments=alignments)

    def _process_table_row_cells(self, row_token: dict[str, Any]) -> list[TableCell]:
        """Process the cells of a table row."""
        cells = []

        for cell_token in row_token.get("children", []):
            if cell_token.get("type") != "table_cell":
                continue
            content = self._process_inline_tokens(cell_token.get("children", []))
            alignment = (cell_token.get("attrs") or {}).get("align")
            cells.append(TableCell(content=content, alignment=alignment))

        return cells

    def _process_definition_list(self, token: dict[str, Any]) -> DefinitionList:
        """Process definition list token.

        Parameters
        ----------
        token : dict
            Definition list token with 'def_list_head' and 'def_list_item' children

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
                description = DefinitionDescription(content=self._process_mixed_tokens(child.get("children", [])))
                if current_term is None:
                    current_term = DefinitionTerm()
                current_descriptions.append(description)

        if current_term is not None:
            items.append((current_term, current_descriptions))

        return DefinitionList(items=items)

    def _process_mixed_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process children that may be block tokens or bare inline tokens.

        Runs of inline tokens are gathered into paragraphs so the result is
        always block content.
        """
        nodes: list[Node] = []
        inline_run: list[dict[str, Any]] = []

        for token in tokens:
            if token.get("type") in _BLOCK_TOKEN_TYPES:
                if inline_run:
                    nodes.append(Paragraph(content=self._process_inline_tokens(inline_run)))
                    inline_run = []
                node = self._process_token(token)
                if node is not None:
                    nodes.append(node)
            else:
                inline_run.append(token)

        if inline_run:
            nodes.append(Paragraph(content=self._process_inline_tokens(inline_run)))

        return nodes

    def _process_inline_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process inline tokens.

        A `<u>` inline HTML tag and its matching `</u>` become an
        :class:`Underline` around the tokens between them; unmatched tags stay
        :class:`HTMLInline`.

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

        i = 0
        while i < len(tokens):
            token = tokens[i]
            if _html_tag(token) == "<u>":
                close = _find_closing_underline(tokens, i + 1)
                if close is not None:
                    nodes.append(Underline(content=self._process_inline_tokens(tokens[i + 1 : close])))
                    i = close + 1
                    continue

            node = self._process_inline_token(token)
            if node is not None:
                nodes.append(node)
            i += 1

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
        if not isinstance(attrs, dict):
            attrs = {}
        url = attrs.get("url", "")
        title = attrs.get("title", None)
        content = self._process_inline_tokens(token.get("children", []))
        return Link(url=url, content=content, title=title)

    def _handle_image_token(self, token: dict[str, Any]) -> Image:
        """Handle image token."""
        attrs = token.get("attrs") or {}
        if not isinstance(attrs, dict):
            attrs = {}
        url = attrs.get("url", "")
        title = attrs.get("title", None)
        # Alt text is in children, not attrs
        alt_parts = [
            child.get("raw", "")
            for child in token.get("children", [])
            if isinstance(child, dict) and child.get("type") in ("text", "codespan")
        ]
        return Image(url=url, alt_text="".join(alt_parts), title=title)

    def _handle_linebreak_token(self, token: dict[str, Any]) -> LineBreak:
        """Handle hard linebreak token."""
        return LineBreak(soft=False)

    def _handle_softbreak_token(self, token: dict[str, Any]) -> LineBreak:
        """Handle softbreak token (a newline inside a paragraph)."""
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
            Inline AST node, None for unsupported tokens

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

        logger.debug(f"Ignoring unsupported inline token: {token_type}")
        return None


def _html_tag(token: dict[str, Any]) -> str:
    """Return the normalized raw HTML of an inline_html token, or an empty string."""
    if token.get("type") != "inline_html":
        return ""
    return str(token.get("raw", "")).strip().lower().replace(" ", "")


def _find_closing_underline(tokens: list[dict[str, Any]], start: int) -> int | None:
    """Return the index of the `</u>` matching an opening tag, honouring nesting."""
    depth = 1
    for index in range(start, len(tokens)):
        tag = _html_tag(tokens[index])
        if tag == "<u>":
            depth += 1
        elif tag == "</u>":
            depth -= 1
            if depth == 0:
                return index
    return None


def markdown_to_ast(markdown_content: str, options: MarkdownParserOptions | None = None) -> Document:
    r"""Convert Markdown string to AST.

    This is a convenience function that creates a converter and parses
    the markdown in one step.

    Parameters
    ----------
    markdown_content : str
        Markdown text to parse
    options : MarkdownParserOptions or None, default = None
        Parser configuration

    Returns
    -------
    Document
        AST document node

    Examples
    --------
    >>> from mdterm.parsers.markdown import markdown_to_ast
    >>> doc = markdown_to_ast("# Hello\n\nWorld")
    >>> len(doc.children)
    2

    """
    converter = MarkdownToAstConverter(options)
    return converter.parse(markdown_content)
