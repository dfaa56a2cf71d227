#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/utils/__init__.py
"""Utility modules for mdterm package.

This package contains the ANSI style primitives, the width-aware wrapping
engine, image fetching and rendering, and I/O helpers.
"""

from mdterm.utils.ansi import EscapeState, StyleFn, shade
from mdterm.utils.text import strip_escapes, visual_width, wrap_with_pad, wrap_with_pad_indent

__all__ = [
    "EscapeState",
    "StyleFn",
    "shade",
    "strip_escapes",
    "visual_width",
    "wrap_with_pad",
    "wrap_with_pad_indent",
]
