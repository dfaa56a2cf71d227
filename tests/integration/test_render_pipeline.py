#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_render_pipeline.py
"""Integration tests for markdown to terminal rendering.

Tests cover:
- The public render and render_document functions
- Every block kind in one document
- Width guarantees across widths and margins
- Parser options flowing through the pipeline
- Images drawn from local files

"""

import io
from pathlib import Path

import pytest
from PIL import Image

from mdterm import render, render_document
from mdterm.ast import Document, Paragraph, Text
from mdterm.options import MarkdownParserOptions, TerminalRendererOptions
from mdterm.utils.text import strip_escapes, visual_width


@pytest.mark.integration
class TestRenderFunction:
    """Test the high-level render function."""

    def test_full_document(self, sample_markdown: str) -> None:
        """Test that every block kind shows up in the output."""
        plain = strip_escapes(render(sample_markdown, line_width=100))

        assert plain.startswith("1 Getting started\n" + "─" * 100 + "\n\n")
        assert "Install the package and run it on a file. Lines of a paragraph are joined.\n" in plain
        assert "1.1 Options\n" in plain
        assert "• width: total columns\n" in plain
        assert "┃ Quoted lines\n┃ keep their breaks.\n" in plain
        assert '┃ print("hello")\n' in plain
        assert "│ width  │      80 │" in plain
        assert "\n\n" + "─" * 100 + "\n\n" in plain
        assert "[the docs](https://example.com/docs)" in plain

    @pytest.mark.parametrize("line_width,left_pad", [(30, 0), (45, 4), (80, 2), (120, 10)])
    def test_lines_fit(self, sample_markdown: str, line_width: int, left_pad: int) -> None:
        """Test that no line exceeds the line width."""
        output = render(sample_markdown, line_width=line_width, left_pad=left_pad)

        for line in output.split("\n"):
            assert visual_width(line) <= line_width, line

    def test_left_pad_on_every_line(self, sample_markdown: str) -> None:
        """Test that the fixed margin starts every non-empty line."""
        output = strip_escapes(render(sample_markdown, line_width=70, left_pad=3))
        assert all(line.startswith("   ") for line in output.split("\n") if line)

    def test_arguments_override_options(self) -> None:
        """Test that explicit layout arguments win over options."""
        options = TerminalRendererOptions(line_width=40, left_pad=5)
        assert render("text", left_pad=1, options=options) == " text\n"

    def test_invalid_layout(self) -> None:
        """Test that a margin as wide as the line is rejected."""
        with pytest.raises(ValueError):
            render("text", line_width=10, left_pad=10)

    def test_sources(self, sample_markdown_file: Path) -> None:
        """Test that paths, bytes and streams render like strings."""
        expected = render(sample_markdown_file.read_text(encoding="utf-8"))

        assert render(sample_markdown_file) == expected
        assert render(sample_markdown_file.read_bytes()) == expected
        assert render(io.BytesIO(sample_markdown_file.read_bytes())) == expected

    def test_parser_options(self) -> None:
        """Test that parser options reach the parser."""
        output = render("~~old~~", parser_options=MarkdownParserOptions(parse_strikethrough=False))
        assert "\x1b[9m" not in output
        assert "~~old~~" in output

    def test_underline_tags(self) -> None:
        """Test that <u> markup is drawn underlined instead of as raw HTML."""
        assert render("a <u>key</u> word") == "a \x1b[4mkey\x1b[24m word\n"

    def test_heading_keeps_shade_after_code(self) -> None:
        """Test that heading text after inline code keeps the heading colour."""
        first_line = render("## run `ls` now").split("\n")[0]
        assert first_line.endswith("\x1b[0m\x1b[92m now\x1b[0m")

    def test_wide_characters(self) -> None:
        """Test wrapping of East Asian text."""
        output = render("漢字 " * 20, line_width=21)
        assert all(visual_width(line) <= 21 for line in output.split("\n"))

    def test_render_document(self) -> None:
        """Test rendering a prebuilt tree."""
        document = Document(children=[Paragraph(content=[Text("built")])])
        assert render_document(document, TerminalRendererOptions(left_pad=2)) == "  built\n"


@pytest.mark.integration
class TestImages:
    """Test drawing images end to end."""

    def test_local_image_blocks(self, tmp_path: Path) -> None:
        """Test that a local image is drawn with half blocks."""
        path = tmp_path / "dot.png"
        Image.new("RGB", (4, 4), (0, 128, 255)).save(path)

        options = TerminalRendererOptions(line_width=40, image_mode="blocks")
        output = render(f"![dot]({path})", options=options)

        assert "▀" in output
        assert "![dot]" not in output

    def test_missing_image_falls_back(self, tmp_path: Path) -> None:
        """Test the textual form for an image that cannot be loaded."""
        options = TerminalRendererOptions(line_width=200, image_mode="chars")
        output = strip_escapes(render(f"![gone]({tmp_path / 'gone.png'})", options=options))

        assert output == f"![gone]({tmp_path / 'gone.png'})\n"
