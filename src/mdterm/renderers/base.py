#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/renderers/base.py
"""Base classes for AST renderers.

This module defines the abstract base class renderers inherit from. A
renderer turns the mdterm AST into an output format, here text for a
terminal.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from mdterm.ast import Document
from mdterm.exceptions import InvalidOptionsError
from mdterm.options.base import BaseRendererOptions
from mdterm.utils.io_utils import write_content


class BaseRenderer(ABC):
    """Abstract base class for all AST renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration.

        Parameters
        ----------
        options : BaseRendererOptions or None, default = None
            Format-specific rendering options. If None, default options will be used.

        """
        self.options = options

    @abstractmethod
    def render(self, doc: Document, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render the AST to the specified output.

        Parameters
        ----------
        doc : Document
            AST Document node to render
        output : str, Path, IO[bytes], or IO[str]
            Output destination. Can be:
            - File path (str or Path)
            - File-like object in binary or text mode

        Raises
        ------
        RenderingError
            If rendering fails
        IOError
            If output cannot be written

        """
        ...

    def render_to_string(self, doc: Document) -> str:
        """Render the AST to a string (if applicable).

        Raises
        ------
        NotImplementedError
            If the renderer does not support string output

        """
        raise NotImplementedError(f"{self.__class__.__name__} does not support rendering to a string.")

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Parameters
        ----------
        options : BaseRendererOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        renderer_name : str
            Name of the renderer (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Write text output to file or IO stream.

        Parameters
        ----------
        text : str
            Rendered text to write
        output : str, Path, IO[bytes], or IO[str]
            Output destination

        Examples
        --------
        Write to StringIO:
            >>> from io import StringIO
            >>> buffer = StringIO()
            >>> BaseRenderer.write_text_output("┃ quote", buffer)
            >>> print(buffer.getvalue())
            ┃ quote

        """
        write_content(text, output)
