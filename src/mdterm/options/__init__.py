#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the markdown parser and the terminal renderer.

Options are frozen dataclasses: build a modified copy with
``create_updated`` instead of mutating an instance.
"""

from __future__ import annotations

from mdterm.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from mdterm.options.markdown import MarkdownParserOptions
from mdterm.options.terminal import TerminalRendererOptions

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "MarkdownParserOptions",
    "TerminalRendererOptions",
]
