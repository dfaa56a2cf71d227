#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for terminal rendering.

This module defines the layout, palette and image options of the terminal
renderer.
"""
# src/mdterm/options/terminal.py


from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from mdterm.constants import (
    DEFAULT_IMAGE_FETCH_TIMEOUT,
    DEFAULT_IMAGE_MODE,
    DEFAULT_LEFT_PAD,
    DEFAULT_LINE_WIDTH,
    DitheringMode,
)
from mdterm.options.base import BaseRendererOptions
from mdterm.utils.ansi import StyleFn

IMAGE_MODES = ("none", "blocks", "chars")


@dataclass(frozen=True)
class TerminalRendererOptions(BaseRendererOptions):
    """Configuration options for AST-to-terminal rendering.

    Parameters
    ----------
    line_width : int, default 80
        Total number of terminal columns available, left pad included.
    left_pad : int, default 0
        Fixed margin, in columns, written before every line.
    heading_shades : tuple of StyleFn or None, default None
        Palette indexed by heading level; the default green palette when None.
    blockquote_shades : tuple of StyleFn or None, default None
        Palette indexed by block quote depth; the default green palette when None.
    image_mode : {"none", "blocks", "chars"}, default "none"
        How images are drawn. With "none" images are never fetched and always
        shown as ``![alt](destination)``.
    image_fetch_timeout : float, default 5.0
        Seconds allowed to fetch one remote image.

    Examples
    --------
    Narrow output with a margin:
        >>> options = TerminalRendererOptions(line_width=60, left_pad=4)

    """

    line_width: int = field(
        default=DEFAULT_LINE_WIDTH,
        metadata={"help": "Total terminal columns available", "type": int, "importance": "core"},
    )
    left_pad: int = field(
        default=DEFAULT_LEFT_PAD,
        metadata={"help": "Fixed left margin in columns", "type": int, "importance": "core"},
    )
    heading_shades: Optional[tuple[StyleFn, ...]] = field(
        default=None,
        metadata={"help": "Style functions cycled through by heading level", "exclude_from_cli": True},
    )
    blockquote_shades: Optional[tuple[StyleFn, ...]] = field(
        default=None,
        metadata={"help": "Style functions cycled through by block quote depth", "exclude_from_cli": True},
    )
    image_mode: DitheringMode = field(
        default=DEFAULT_IMAGE_MODE,
        metadata={"help": "How images are drawn", "choices": list(IMAGE_MODES), "importance": "core"},
    )
    image_fetch_timeout: float = field(
        default=DEFAULT_IMAGE_FETCH_TIMEOUT,
        metadata={"help": "Seconds allowed to fetch one remote image", "type": float, "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges and palettes.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        super().__post_init__()

        if self.line_width <= 0:
            raise ValueError(f"line_width must be positive, got {self.line_width}")

        if not 0 <= self.left_pad < self.line_width:
            raise ValueError(f"left_pad must be in [0, {self.line_width}), got {self.left_pad}")

        for name in ("heading_shades", "blockquote_shades"):
            shades = getattr(self, name)
            if shades is not None and len(shades) == 0:
                raise ValueError(f"{name} must contain at least one style function")

        if self.image_mode not in IMAGE_MODES:
            raise ValueError(f"image_mode must be one of {IMAGE_MODES}, got {self.image_mode!r}")

        if self.image_fetch_timeout <= 0:
            raise ValueError(f"image_fetch_timeout must be positive, got {self.image_fetch_timeout}")
