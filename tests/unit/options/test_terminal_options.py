#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/options/test_terminal_options.py
"""Unit tests for parser and renderer options.

Tests cover:
- Defaults
- Range validation in __post_init__
- Immutability and create_updated
- CLI metadata of the markdown switches

"""

from dataclasses import FrozenInstanceError, fields

import pytest

from mdterm.options import MarkdownParserOptions, TerminalRendererOptions
from mdterm.utils.ansi import bold


@pytest.mark.unit
class TestTerminalRendererOptions:
    """Test terminal renderer options."""

    def test_defaults(self) -> None:
        """Test the default values."""
        options = TerminalRendererOptions()

        assert options.line_width == 80
        assert options.left_pad == 0
        assert options.heading_shades is None
        assert options.blockquote_shades is None
        assert options.image_mode == "none"
        assert options.image_fetch_timeout == 5.0
        assert options.fail_on_resource_errors is False

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"line_width": 0},
            {"line_width": -5},
            {"left_pad": -1},
            {"line_width": 10, "left_pad": 10},
            {"heading_shades": ()},
            {"blockquote_shades": ()},
            {"image_mode": "sixel"},
            {"image_fetch_timeout": 0},
            {"max_asset_size_bytes": 0},
        ],
    )
    def test_invalid_values(self, kwargs: dict) -> None:
        """Test that out-of-range values are rejected."""
        with pytest.raises(ValueError):
            TerminalRendererOptions(**kwargs)

    def test_custom_palettes(self) -> None:
        """Test that non-empty palettes are accepted."""
        options = TerminalRendererOptions(heading_shades=(bold,), blockquote_shades=(bold, bold))
        assert options.heading_shades == (bold,)

    def test_frozen(self) -> None:
        """Test that options cannot be mutated."""
        options = TerminalRendererOptions()
        with pytest.raises(FrozenInstanceError):
            options.line_width = 100  # type: ignore[misc]

    def test_create_updated(self) -> None:
        """Test cloning with changes."""
        options = TerminalRendererOptions(line_width=60)
        updated = options.create_updated(left_pad=4)

        assert updated is not options
        assert updated.line_width == 60
        assert updated.left_pad == 4
        assert options.left_pad == 0

    def test_create_updated_validates(self) -> None:
        """Test that clones are validated too."""
        with pytest.raises(ValueError):
            TerminalRendererOptions(line_width=20).create_updated(left_pad=30)


@pytest.mark.unit
class TestMarkdownParserOptions:
    """Test markdown parser options."""

    def test_defaults_enable_everything(self) -> None:
        """Test that every extension is on by default."""
        options = MarkdownParserOptions()
        assert all(getattr(options, f.name) is True for f in fields(options))

    def test_cli_names(self) -> None:
        """Test the CLI switch metadata."""
        names = {f.name: f.metadata["cli_name"] for f in fields(MarkdownParserOptions)}
        assert names["parse_tables"] == "no-parse-tables"
        assert names["parse_definition_lists"] == "no-parse-definition-lists"
