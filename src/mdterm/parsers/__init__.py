#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/parsers/__init__.py
"""Parsers turning source documents into the mdterm AST."""

from mdterm.parsers.base import BaseParser
from mdterm.parsers.markdown import MarkdownToAstConverter, markdown_to_ast

__all__ = ["BaseParser", "MarkdownToAstConverter", "markdown_to_ast"]
