#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/utils/io_utils.py
"""I/O utilities for handling output destinations.

Rendered terminal text can go to a file path or to an already open stream,
in text or binary mode.

"""

from __future__ import annotations

import io
from io import BytesIO, StringIO
from pathlib import Path
from typing import IO, Union, cast


def write_content(content: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
    """Write rendered text to an output destination.

    Parameters
    ----------
    content : str
        Text to write
    output : str, Path, IO[bytes], or IO[str]
        Output destination. Can be:
        - str or Path: Writes content to file at that path, as UTF-8
        - IO[bytes]: Writes UTF-8 encoded content to a binary stream
        - IO[str]: Writes content to a text stream

    Raises
    ------
    TypeError
        If output type is not supported

    Examples
    --------
        >>> buffer = BytesIO()
        >>> write_content("┃ quote", buffer)
        >>> buffer.getvalue().decode("utf-8")
        '┃ quote'

    """
    if isinstance(output, (str, Path)):
        Path(output).write_text(content, encoding="utf-8")
        return

    if not hasattr(output, "write"):
        raise TypeError(f"Unsupported output type: {type(output)}")

    # Detect binary or text mode, concrete types first
    if isinstance(output, BytesIO):
        is_binary_mode = True
    elif isinstance(output, StringIO):
        is_binary_mode = False
    elif isinstance(output, io.TextIOBase):
        is_binary_mode = False
    elif isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
        is_binary_mode = True
    elif hasattr(output, "mode"):
        mode = getattr(output, "mode", "")
        is_binary_mode = isinstance(mode, str) and "b" in mode
    else:
        is_binary_mode = False

    if is_binary_mode:
        cast(IO[bytes], output).write(content.encode("utf-8"))
    else:
        cast(IO[str], output).write(content)


__all__ = ["write_content"]
