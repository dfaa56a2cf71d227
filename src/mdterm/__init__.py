#  Copyright (c) 2025 Tom Villani, Ph.D.
"""mdterm - render markdown for the terminal.

mdterm parses markdown into a small document tree and renders that tree as
ANSI-styled text laid out for a fixed terminal width: numbered and shaded
headings, barred block quotes and code blocks, bulleted and numbered lists,
box-drawn tables and, optionally, images drawn with block or character art.

Examples
--------
    >>> import mdterm
    >>> text = mdterm.render("# Hello\\n\\nWorld", line_width=60)

"""

from mdterm.api import render, render_document
from mdterm.ast import Document
from mdterm.exceptions import (
    ImageFetchError,
    InvalidOptionsError,
    InvalidTreeError,
    MdTermError,
    ParsingError,
    RenderingError,
    UnknownNodeError,
    ValidationError,
)
from mdterm.options import MarkdownParserOptions, TerminalRendererOptions
from mdterm.parsers.markdown import MarkdownToAstConverter, markdown_to_ast
from mdterm.renderers.terminal import TerminalRenderer

__version__ = "0.1.0"

__all__ = [
    "Document",
    "ImageFetchError",
    "InvalidOptionsError",
    "InvalidTreeError",
    "MarkdownParserOptions",
    "MarkdownToAstConverter",
    "MdTermError",
    "ParsingError",
    "RenderingError",
    "TerminalRenderer",
    "TerminalRendererOptions",
    "UnknownNodeError",
    "ValidationError",
    "markdown_to_ast",
    "render",
    "render_document",
]
