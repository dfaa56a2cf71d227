#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/api.py
"""High-level entry points: render markdown source or a document tree.

Examples
--------
    >>> from mdterm import render
    >>> print(render("# Title\\n\\nSome *text*.", line_width=60), end="")  # doctest: +SKIP

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Optional, Union

from mdterm.ast import Document
from mdterm.options import MarkdownParserOptions, TerminalRendererOptions
from mdterm.parsers.markdown import MarkdownToAstConverter
from mdterm.renderers.terminal import TerminalRenderer

logger = logging.getLogger(__name__)


def _resolve_options(
    options: Optional[TerminalRendererOptions], line_width: Optional[int], left_pad: Optional[int]
) -> TerminalRendererOptions:
    options = options or TerminalRendererOptions()
    updates = {}
    if line_width is not None:
        updates["line_width"] = line_width
    if left_pad is not None:
        updates["left_pad"] = left_pad
    return options.create_updated(**updates) if updates else options


def render(
    source: Union[str, Path, IO[bytes], IO[str], bytes],
    line_width: Optional[int] = None,
    left_pad: Optional[int] = None,
    options: Optional[TerminalRendererOptions] = None,
    parser_options: Optional[MarkdownParserOptions] = None,
) -> str:
    """Parse markdown and render it for a terminal.

    Parameters
    ----------
    source : str, Path, IO[bytes], IO[str], or bytes
        Markdown text, or a file path or stream holding it
    line_width : int, optional
        Total terminal columns; overrides ``options.line_width`` (default 80)
    left_pad : int, optional
        Fixed left margin; overrides ``options.left_pad`` (default 0)
    options : TerminalRendererOptions, optional
        Rendering options
    parser_options : MarkdownParserOptions, optional
        Parsing options

    Returns
    -------
    str
        ANSI-styled text

    Raises
    ------
    ValueError
        If the resulting options are out of range
    ParsingError
        If the source cannot be read or parsed
    RenderingError
        If the parsed tree cannot be rendered

    """
    resolved = _resolve_options(options, line_width, left_pad)
    document = MarkdownToAstConverter(parser_options).parse(source)
    logger.debug(f"Rendering markdown at width {resolved.line_width} with left pad {resolved.left_pad}")
    return TerminalRenderer(resolved).render_to_string(document)


def render_document(document: Document, options: Optional[TerminalRendererOptions] = None) -> str:
    """Render an already built document tree for a terminal.

    Parameters
    ----------
    document : Document
        Root of the tree
    options : TerminalRendererOptions, optional
        Rendering options

    Returns
    -------
    str
        ANSI-styled text

    """
    return TerminalRenderer(options).render_to_string(document)
