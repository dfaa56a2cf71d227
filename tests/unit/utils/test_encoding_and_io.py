#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/utils/test_encoding_and_io.py
"""Unit tests for input decoding and output writing.

Tests cover:
- UTF-8 with and without BOM
- Legacy encodings decoded through detection or fallbacks
- Reading binary and text streams
- Writing to paths, text streams and binary streams

"""

import io

import pytest

from mdterm.utils.encoding import (
    detect_encoding,
    normalize_stream_to_text,
    read_text_with_encoding_detection,
)
from mdterm.utils.io_utils import write_content


@pytest.mark.unit
class TestDecoding:
    """Test decoding of markdown bytes."""

    def test_utf8(self) -> None:
        """Test plain UTF-8."""
        assert read_text_with_encoding_detection("naïve ┃".encode("utf-8")) == "naïve ┃"

    def test_utf8_bom_removed(self) -> None:
        """Test that the byte order mark is dropped."""
        assert read_text_with_encoding_detection(b"\xef\xbb\xbf# Title") == "# Title"

    def test_latin1_fallback(self) -> None:
        """Test that non UTF-8 bytes still decode."""
        text = read_text_with_encoding_detection("café crème".encode("latin-1"))
        assert text.startswith("caf")
        assert "�" not in text

    def test_detect_empty(self) -> None:
        """Test that nothing is detected in empty input."""
        assert detect_encoding(b"") is None

    def test_binary_stream(self) -> None:
        """Test reading a binary stream."""
        assert normalize_stream_to_text(io.BytesIO("ok ✓".encode("utf-8"))) == "ok ✓"

    def test_text_stream(self) -> None:
        """Test reading a text stream."""
        assert normalize_stream_to_text(io.StringIO("ok")) == "ok"


@pytest.mark.unit
class TestWriteContent:
    """Test writing rendered output."""

    def test_path(self, tmp_path) -> None:
        """Test writing to a path as UTF-8."""
        target = tmp_path / "out.txt"
        write_content("┃ quote", str(target))
        assert target.read_text(encoding="utf-8") == "┃ quote"

    def test_text_stream(self) -> None:
        """Test writing to a text stream."""
        buffer = io.StringIO()
        write_content("┃ quote", buffer)
        assert buffer.getvalue() == "┃ quote"

    def test_binary_stream(self) -> None:
        """Test that binary streams receive UTF-8 bytes."""
        buffer = io.BytesIO()
        write_content("┃ quote", buffer)
        assert buffer.getvalue() == "┃ quote".encode("utf-8")

    def test_unsupported_output(self) -> None:
        """Test that objects without write are rejected."""
        with pytest.raises(TypeError):
            write_content("x", 42)  # type: ignore[arg-type]
