#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/parsers/base.py
"""Base classes for document parsers.

This module defines the abstract base class parsers inherit from. A parser
turns source text into the mdterm AST consumed by the terminal renderer.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from mdterm.ast import Document
from mdterm.exceptions import InvalidOptionsError, ParsingError
from mdterm.options.base import BaseParserOptions
from mdterm.utils.encoding import normalize_stream_to_text, read_text_with_encoding_detection

logger = logging.getLogger(__name__)


class BaseParser(ABC):
    """Abstract base class for all document parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    Notes
    -----
    The parse() method should handle all supported input types:
    - str: Source text, or a path to a file holding it
    - Path: File path to read
    - IO[bytes] or IO[str]: File-like object
    - bytes: Raw document bytes

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Parameters
        ----------
        options : BaseParserOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        parser_name : str
            Name of the parser (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: Union[str, Path, IO[bytes], IO[str], bytes]) -> Document:
        """Parse the input document into an AST.

        Parameters
        ----------
        input_data : str, Path, IO[bytes], IO[str], or bytes
            The input document to parse

        Returns
        -------
        Document
            AST Document node

        Raises
        ------
        ParsingError
            If the input cannot be read or parsed

        """
        ...

    @staticmethod
    def _load_text_content(input_data: Union[str, Path, IO[bytes], IO[str], bytes]) -> str:
        """Load content from various input types with encoding detection.

        Parameters
        ----------
        input_data : str, Path, IO[bytes], IO[str], or bytes
            Input data to load

        Returns
        -------
        str
            Source text

        Raises
        ------
        ParsingError
            If a file or stream cannot be read

        """
        try:
            if isinstance(input_data, bytes):
                return read_text_with_encoding_detection(input_data)
            elif isinstance(input_data, Path):
                return read_text_with_encoding_detection(input_data.read_bytes())
            elif isinstance(input_data, str):
                # Could be file path or content; path components are limited in length
                if len(input_data) <= 260 and "\n" not in input_data:
                    try:
                        path = Path(input_data)
                        if path.is_file():
                            return read_text_with_encoding_detection(path.read_bytes())
                    except OSError:
                        logger.debug("Input string is not a readable path, treating it as content")
                return input_data
            else:
                return normalize_stream_to_text(input_data)
        except OSError as e:
            raise ParsingError(f"Could not read input: {e}", parsing_stage="input", original_error=e) from e
