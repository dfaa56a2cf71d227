#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/utils/test_ansi.py
"""Unit tests for ANSI style primitives.

Tests cover:
- Style functions wrap text in an SGR sequence and a reset
- EscapeState replays sequences, including resets and extended colours
- EscapeState.clear and format
- Shade palettes cycle by depth

"""

import pytest

from mdterm.utils.ansi import (
    RESET,
    EscapeState,
    blue_bg_italic,
    bold,
    green,
    green_bold,
    hi_green,
    rgb_background,
    rgb_foreground,
    shade,
)


@pytest.mark.unit
class TestStyleFunctions:
    """Test the style function helpers."""

    def test_green(self) -> None:
        """Test a single-code style."""
        assert green("ok") == "\x1b[32mok\x1b[0m"

    def test_combined_codes(self) -> None:
        """Test styles combining several codes in one sequence."""
        assert green_bold("x") == "\x1b[1;32mx\x1b[0m"
        assert blue_bg_italic("x") == "\x1b[3;44mx\x1b[0m"

    def test_true_colour(self) -> None:
        """Test true-colour sequences."""
        assert rgb_foreground(1, 2, 3) == "\x1b[38;2;1;2;3m"
        assert rgb_background(4, 5, 6) == "\x1b[48;2;4;5;6m"


@pytest.mark.unit
class TestEscapeState:
    """Test SGR state tracking."""

    def test_empty_state(self) -> None:
        """Test that a new state is zero and formats to nothing."""
        state = EscapeState()
        assert state.is_zero()
        assert state.format() == ""

    def test_witness_flags(self) -> None:
        """Test that flags are turned on in order."""
        state = EscapeState()
        state.witness("\x1b[1mbold \x1b[3mitalic")
        assert state.bold
        assert state.italic
        assert state.format() == "\x1b[1;3m"

    def test_reset_clears_everything(self) -> None:
        """Test that a reset, explicit or implicit, clears all attributes."""
        state = EscapeState()
        state.witness("\x1b[1;32mtext" + RESET)
        assert state.is_zero()

        state.witness("\x1b[4m\x1b[m")
        assert state.is_zero()

    def test_clear_codes(self) -> None:
        """Test the attribute-specific clearing codes."""
        state = EscapeState()
        state.witness("\x1b[1;2;3;4;9m")
        state.witness("\x1b[22;23m")
        assert not state.bold
        assert not state.dim
        assert not state.italic
        assert state.underline
        assert state.crossed_out

    def test_colours(self) -> None:
        """Test basic, bright and extended colours."""
        state = EscapeState()
        state.witness("\x1b[92m\x1b[44m")
        assert state.fg_color == "92"
        assert state.bg_color == "44"

        state.witness("\x1b[38;5;208m\x1b[48;2;10;20;30m")
        assert state.fg_color == "38;5;208"
        assert state.bg_color == "48;2;10;20;30"
        assert state.format() == "\x1b[38;5;208;48;2;10;20;30m"

        state.witness("\x1b[39;49m")
        assert state.is_zero()

    def test_clear_attribute(self) -> None:
        """Test turning a single attribute off."""
        state = EscapeState()
        state.witness("\x1b[1m\x1b[32m")
        state.clear("bold")
        assert state.format() == "\x1b[32m"

        state.clear("fg_color")
        assert state.is_zero()

    def test_clear_unknown_attribute(self) -> None:
        """Test that unknown attribute names are rejected."""
        with pytest.raises(ValueError, match="Unknown escape attribute"):
            EscapeState().clear("sparkle")

    def test_format_round_trips(self) -> None:
        """Test that replaying a formatted state gives the same state."""
        state = EscapeState()
        state.witness("\x1b[1;4;31;46m")

        replayed = EscapeState()
        replayed.witness(state.format())
        assert replayed == state


@pytest.mark.unit
class TestShade:
    """Test depth-indexed palettes."""

    def test_cycles_by_modulo(self) -> None:
        """Test that depths wrap around the palette."""
        level_shade = shade([green, hi_green])
        assert level_shade(0) is green
        assert level_shade(1) is hi_green
        assert level_shade(2) is green
        assert level_shade(7) is hi_green

    def test_single_entry(self) -> None:
        """Test that a one-style palette applies at every depth."""
        level_shade = shade([bold])
        assert all(level_shade(level) is bold for level in range(10))

    def test_empty_palette(self) -> None:
        """Test that an empty palette is rejected."""
        with pytest.raises(ValueError):
            shade([])
