#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/parsers/test_markdown_parser.py
"""Unit tests for the Markdown to AST converter.

Tests cover:
- Block structure: headings, paragraphs, code, quotes, lists, tables
- Extensions: strikethrough, tables, task lists, definition lists
- Inline content: emphasis, code spans, links, images, breaks, HTML, <u> underline
- Input types: strings, paths, bytes and streams
- Option validation and read errors

"""

import io
from pathlib import Path

import pytest

from mdterm.ast import (
    BlockQuote,
    Code,
    CodeBlock,
    DefinitionList,
    Document,
    Emphasis,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    LineBreak,
    Link,
    List,
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    Text,
    ThematicBreak,
    Underline,
    get_node_children,
)
from mdterm.exceptions import InvalidOptionsError, ParsingError
from mdterm.options import MarkdownParserOptions, TerminalRendererOptions
from mdterm.parsers.markdown import MarkdownToAstConverter, markdown_to_ast


def _plain_text(nodes) -> str:
    """Concatenate the text of inline nodes."""
    parts = []
    for node in nodes:
        if isinstance(node, Text):
            parts.append(node.content)
        else:
            parts.append(_plain_text(get_node_children(node)))
    return "".join(parts)


@pytest.mark.unit
class TestBlocks:
    """Test block-level parsing."""

    def test_heading_levels(self) -> None:
        """Test all six heading levels."""
        doc = markdown_to_ast("# H1\n## H2\n### H3\n#### H4\n##### H5\n###### H6")

        assert [child.level for child in doc.children] == [1, 2, 3, 4, 5, 6]
        assert all(isinstance(child, Heading) for child in doc.children)

    def test_paragraphs(self) -> None:
        """Test paragraph separation."""
        doc = markdown_to_ast("First paragraph.\n\nSecond paragraph.")

        assert len(doc.children) == 2
        assert all(isinstance(child, Paragraph) for child in doc.children)
        assert doc.children[0].content == [Text("First paragraph.")]

    def test_fenced_code_language(self) -> None:
        """Test that only the first word of the info string is kept."""
        doc = markdown_to_ast("```python title=x\nprint(1)\n```")

        code = doc.children[0]
        assert isinstance(code, CodeBlock)
        assert code.language == "python"
        assert code.content == "print(1)\n"

    def test_block_quote(self) -> None:
        """Test quoted paragraphs."""
        doc = markdown_to_ast("> quoted\n> text")

        quote = doc.children[0]
        assert isinstance(quote, BlockQuote)
        assert isinstance(quote.children[0], Paragraph)

    def test_thematic_break_and_html_block(self) -> None:
        """Test rules and raw HTML blocks."""
        doc = markdown_to_ast("---\n\n<div>\nhi\n</div>\n")

        assert isinstance(doc.children[0], ThematicBreak)
        assert isinstance(doc.children[1], HTMLBlock)
        assert "<div>" in doc.children[1].content

    def test_ordered_list_start(self) -> None:
        """Test the start number of an ordered list."""
        doc = markdown_to_ast("3. a\n4. b")

        node = doc.children[0]
        assert isinstance(node, List)
        assert node.ordered is True
        assert node.start == 3
        assert len(node.items) == 2

    def test_nested_list(self) -> None:
        """Test that nested lists stay inside their item."""
        doc = markdown_to_ast("- Item 1\n  - Nested 1\n  - Nested 2\n- Item 2")

        outer = doc.children[0]
        nested = [child for child in outer.items[0].children if isinstance(child, List)]
        assert len(nested) == 1
        assert len(nested[0].items) == 2

    def test_empty_input(self) -> None:
        """Test that empty input gives an empty document."""
        assert markdown_to_ast("") == Document(children=[])


@pytest.mark.unit
class TestExtensions:
    """Test markdown extensions and their switches."""

    TABLE = "| Name | Qty |\n|:-----|----:|\n| apple | 3 |\n| kiwi | 12 |"

    def test_table(self) -> None:
        """Test header, body rows and alignments."""
        table = markdown_to_ast(self.TABLE).children[0]

        assert isinstance(table, Table)
        assert table.header is not None and table.header.is_header
        assert [_plain_text(cell.content) for cell in table.header.cells] == ["Name", "Qty"]
        assert len(table.rows) == 2
        assert table.alignments == ["left", "right"]

    def test_tables_disabled(self) -> None:
        """Test that table syntax stays a paragraph when disabled."""
        doc = markdown_to_ast(self.TABLE, MarkdownParserOptions(parse_tables=False))
        assert isinstance(doc.children[0], Paragraph)

    def test_strikethrough(self) -> None:
        """Test crossed out text."""
        para = markdown_to_ast("~~gone~~").children[0]
        assert isinstance(para.content[0], Strikethrough)

    def test_strikethrough_disabled(self) -> None:
        """Test that tildes stay literal when disabled."""
        para = markdown_to_ast("~~gone~~", MarkdownParserOptions(parse_strikethrough=False)).children[0]
        assert not any(isinstance(node, Strikethrough) for node in para.content)

    def test_task_list(self) -> None:
        """Test checkbox items."""
        node = markdown_to_ast("- [ ] Unchecked\n- [x] Checked").children[0]

        assert node.items[0].task_status == "unchecked"
        assert node.items[1].task_status == "checked"

    def test_task_list_disabled(self) -> None:
        """Test that checkboxes stay text when disabled."""
        node = markdown_to_ast("- [x] Checked", MarkdownParserOptions(parse_task_lists=False)).children[0]
        assert node.items[0].task_status is None

    def test_definition_list(self) -> None:
        """Test a term with its description."""
        node = markdown_to_ast("Term\n: Definition").children[0]

        assert isinstance(node, DefinitionList)
        assert len(node.items) == 1
        term, descriptions = node.items[0]
        assert _plain_text(term.content) == "Term"
        assert len(descriptions) == 1
        assert "Definition" in _plain_text(descriptions[0].content)


@pytest.mark.unit
class TestInline:
    """Test inline parsing."""

    def test_emphasis_and_strong(self) -> None:
        """Test nested formatting."""
        para = markdown_to_ast("*a* and **b**").children[0]

        assert isinstance(para.content[0], Emphasis)
        assert isinstance(para.content[-1], Strong)

    def test_code_span(self) -> None:
        """Test inline code."""
        para = markdown_to_ast("run `ls -la`").children[0]
        assert para.content[-1] == Code(content="ls -la")

    def test_link(self) -> None:
        """Test link destination, title and label."""
        para = markdown_to_ast('[docs](https://example.com "Home")').children[0]

        link = para.content[0]
        assert isinstance(link, Link)
        assert link.url == "https://example.com"
        assert link.title == "Home"
        assert _plain_text(link.content) == "docs"

    def test_image(self) -> None:
        """Test image destination and alt text."""
        para = markdown_to_ast("![a cat](cat.png)").children[0]

        image = para.content[0]
        assert isinstance(image, Image)
        assert image.url == "cat.png"
        assert image.alt_text == "a cat"

    def test_soft_and_hard_breaks(self) -> None:
        """Test the two kinds of line breaks."""
        soft = markdown_to_ast("a\nb").children[0]
        hard = markdown_to_ast("a  \nb").children[0]

        assert LineBreak(soft=True) in soft.content
        assert LineBreak(soft=False) in hard.content

    def test_inline_html(self) -> None:
        """Test raw inline HTML."""
        para = markdown_to_ast("press <kbd>q</kbd>").children[0]
        assert any(isinstance(node, HTMLInline) for node in para.content)

    def test_underline_tags(self) -> None:
        """Test that a <u> pair becomes an underline around its content."""
        para = markdown_to_ast("some <u>under **lined**</u> text").children[0]

        underline = next(node for node in para.content if isinstance(node, Underline))
        assert _plain_text(underline.content) == "under lined"
        assert any(isinstance(node, Strong) for node in underline.content)
        assert not any(isinstance(node, HTMLInline) for node in para.content)
        assert _plain_text(para.content) == "some under lined text"

    def test_underline_tags_case_insensitive(self) -> None:
        """Test upper-case tags."""
        para = markdown_to_ast("<U>loud</U>").children[0]
        assert para.content == [Underline(content=[Text("loud")])]

    def test_nested_underline_tags(self) -> None:
        """Test that nested pairs match innermost first."""
        para = markdown_to_ast("<u>a <u>b</u> c</u>").children[0]

        outer = para.content[0]
        assert isinstance(outer, Underline)
        assert any(isinstance(node, Underline) for node in outer.content)
        assert _plain_text(outer.content) == "a b c"

    def test_unmatched_underline_tag_kept(self) -> None:
        """Test that an opening tag without a closing one stays raw HTML."""
        para = markdown_to_ast("<u>never closed").children[0]
        assert para.content[0] == HTMLInline(content="<u>")


@pytest.mark.unit
class TestInputs:
    """Test the accepted input types."""

    def test_path(self, tmp_path: Path) -> None:
        """Test reading from a Path."""
        path = tmp_path / "doc.md"
        path.write_text("# From file", encoding="utf-8")

        doc = MarkdownToAstConverter().parse(path)
        assert isinstance(doc.children[0], Heading)

    def test_path_string(self, tmp_path: Path) -> None:
        """Test that an existing path given as a string is read."""
        path = tmp_path / "doc.md"
        path.write_text("# From file", encoding="utf-8")

        doc = MarkdownToAstConverter().parse(str(path))
        assert isinstance(doc.children[0], Heading)

    def test_missing_path_is_content(self) -> None:
        """Test that a string naming no file is parsed as markdown."""
        doc = MarkdownToAstConverter().parse("missing.md")
        assert doc.children[0].content == [Text("missing.md")]

    def test_bytes(self) -> None:
        """Test decoding raw bytes."""
        doc = MarkdownToAstConverter().parse("café".encode("utf-8"))
        assert doc.children[0].content == [Text("café")]

    def test_binary_stream(self) -> None:
        """Test reading a binary stream."""
        doc = MarkdownToAstConverter().parse(io.BytesIO(b"> quote"))
        assert isinstance(doc.children[0], BlockQuote)

    def test_text_stream(self) -> None:
        """Test reading a text stream."""
        doc = MarkdownToAstConverter().parse(io.StringIO("plain"))
        assert doc.children[0].content == [Text("plain")]

    def test_unreadable_stream(self) -> None:
        """Test that read failures become parsing errors."""

        class BrokenStream(io.BytesIO):
            def read(self, *args):
                raise OSError("disk on fire")

        with pytest.raises(ParsingError) as exc_info:
            MarkdownToAstConverter().parse(BrokenStream())
        assert exc_info.value.parsing_stage == "input"

    def test_wrong_options_type(self) -> None:
        """Test that renderer options are rejected."""
        with pytest.raises(InvalidOptionsError):
            MarkdownToAstConverter(TerminalRendererOptions())
