#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/renderers/__init__.py
"""Renderers turning the mdterm AST into output text."""

from mdterm.renderers.base import BaseRenderer
from mdterm.renderers.terminal import TerminalRenderer

__all__ = ["BaseRenderer", "TerminalRenderer"]
