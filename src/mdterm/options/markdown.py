#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for Markdown parsing.

This module defines which markdown extensions the parser recognizes.
"""
# src/mdterm/options/markdown.py


from __future__ import annotations

from dataclasses import dataclass, field

from mdterm.options.base import BaseParserOptions


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for Markdown-to-AST parsing.

    CommonMark is always parsed; each flag enables one GFM-style extension.

    Parameters
    ----------
    parse_tables : bool, default True
        Whether to parse table syntax (GFM pipe tables).
    parse_strikethrough : bool, default True
        Whether to parse strikethrough syntax (~~text~~).
    parse_task_lists : bool, default True
        Whether to parse task list checkboxes (- [ ] and - [x]).
    parse_definition_lists : bool, default True
        Whether to parse definition lists (term : definition).

    """

    parse_tables: bool = field(
        default=True,
        metadata={"help": "Parse table syntax (GFM pipe tables)", "cli_name": "no-parse-tables", "importance": "core"},
    )
    parse_strikethrough: bool = field(
        default=True,
        metadata={
            "help": "Parse strikethrough syntax (~~text~~)",
            "cli_name": "no-parse-strikethrough",
            "importance": "core",
        },
    )
    parse_task_lists: bool = field(
        default=True,
        metadata={
            "help": "Parse task list checkboxes (- [ ] and - [x])",
            "cli_name": "no-parse-task-lists",
            "importance": "core",
        },
    )
    parse_definition_lists: bool = field(
        default=True,
        metadata={
            "help": "Parse definition lists (term : definition)",
            "cli_name": "no-parse-definition-lists",
            "importance": "core",
        },
    )

    def __post_init__(self) -> None:
        """Validate options by calling parent validation."""
        super().__post_init__()
