#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the mdterm library.

This module centralizes the hardcoded values used across mdterm: layout
defaults, the glyphs used to draw bars, bullets, rules and table borders,
and the limits applied when fetching images.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Layout Defaults - Line width, padding and heading limits
3. Glyphs - Characters drawn by the terminal renderer
4. Table Layout - Border glyphs and column floors
5. Images - Fetch limits and rendering ramps
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

# Image rendering strategies understood by the image renderer
DitheringMode = Literal["none", "blocks", "chars"]

# Horizontal alignment of table cells
CellAlignment = Literal["left", "center", "right"]

# =============================================================================
# Layout Defaults
# =============================================================================

DEFAULT_LINE_WIDTH = 80
DEFAULT_LEFT_PAD = 0
MAX_HEADING_LEVEL = 6

# Tabs are expanded before wrapping
TAB_WIDTH = 4

# =============================================================================
# Glyphs
# =============================================================================

BAR_GLYPH = "┃ "
BULLET_GLYPH = "• "
TASK_CHECKED_GLYPH = "☑ "
TASK_UNCHECKED_GLYPH = "☐ "
RULE_GLYPH = "─"
DEFINITION_INDENT = "  "

# =============================================================================
# Table Layout
# =============================================================================

TABLE_TOP = ("┌", "┬", "┐")
TABLE_HEADER_SEPARATOR = ("╞", "╪", "╡")
TABLE_ROW_SEPARATOR = ("├", "┼", "┤")
TABLE_BOTTOM = ("└", "┴", "┘")
TABLE_HORIZONTAL = "─"
TABLE_HEADER_HORIZONTAL = "═"
TABLE_VERTICAL = "│"

# Preferred minimum column width when the table must shrink
TABLE_MIN_COLUMN_WIDTH = 3
# Absolute floor when even the preferred minimum does not fit
TABLE_HARD_MIN_COLUMN_WIDTH = 1

# =============================================================================
# Images
# =============================================================================

DEFAULT_IMAGE_MODE: DitheringMode = "none"
DEFAULT_IMAGE_FETCH_TIMEOUT = 5.0  # seconds
DEFAULT_MAX_ASSET_SIZE_BYTES = 20 * 1024 * 1024  # 20MB maximum per image
DEFAULT_USER_AGENT = "mdterm-fetcher/1.0"

# Darkest to brightest
CHARACTER_RAMP = " .:-=+*#%@"
HALF_BLOCK_GLYPH = "▀"

# Terminal cells are roughly twice as tall as they are wide
CELL_ASPECT_RATIO = 0.5
