#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the mdterm library.

This module defines specialized exception classes for the error conditions
that can occur while parsing markdown and rendering it for a terminal.

Exception Hierarchy
-------------------
- MdTermError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for a parser or renderer)

  - ParsingError (markdown parsing failures)

  - RenderingError (output generation failures)
    - InvalidTreeError (unbalanced or malformed document tree)
    - UnknownNodeError (node kind the renderer does not handle)

  - ImageFetchError (image source failures, recovered by the renderer)
    - ImageNotFoundError (local file missing or HTTP 404)
    - ImageNetworkError (connection or HTTP failures)
    - ImageTimeoutError (bounded wait exceeded)

"""

from typing import Any


class MdTermError(Exception):
    """Base exception class for all mdterm-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(MdTermError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an incorrect options class is provided.

    For example, passing MarkdownParserOptions to the terminal renderer.

    Parameters
    ----------
    converter_name : str
        Name of the parser or renderer that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        converter_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{converter_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.converter_name = converter_name
        self.expected_type = expected_type
        self.received_type = received_type


class ParsingError(MdTermError):
    """Exception raised when markdown input cannot be parsed.

    Parameters
    ----------
    message : str
        Description of the parsing error
    parsing_stage : str, optional
        Stage of parsing where the error occurred (e.g., "decoding", "tokenizing")
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error=original_error)
        self.parsing_stage = parsing_stage


class RenderingError(MdTermError):
    """Exception raised when terminal output cannot be produced.

    Parameters
    ----------
    message : str
        Description of the rendering error
    rendering_stage : str, optional
        Stage of rendering where the error occurred (e.g., "table", "walk")
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error=original_error)
        self.rendering_stage = rendering_stage


class InvalidTreeError(RenderingError):
    """Exception raised when the document tree breaks a renderer precondition.

    Raised for unbalanced container state (padding popped more often than
    pushed, inline content left over at document exit), table rows whose cell
    count differs from the header, and roots that are not a Document. These
    indicate a defective input tree and are never recovered from.

    """


class UnknownNodeError(RenderingError):
    """Exception raised when the renderer meets a node kind it does not handle.

    Parameters
    ----------
    node : Any
        The offending node

    """

    def __init__(self, node: Any):
        """Initialize the error from the offending node."""
        super().__init__(f"Unknown node type {type(node).__name__}", rendering_stage="walk")
        self.node = node


class ImageFetchError(MdTermError):
    """Base exception for failures while loading image bytes.

    Parameters
    ----------
    message : str
        Description of the failure
    destination : str, optional
        Image path or URL that was requested
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, destination: str | None = None, original_error: Exception | None = None):
        """Initialize the image fetch error."""
        super().__init__(message, original_error=original_error)
        self.destination = destination


class ImageNotFoundError(ImageFetchError):
    """Exception raised when a local image file or remote resource does not exist."""


class ImageNetworkError(ImageFetchError):
    """Exception raised for connection errors and non-success HTTP responses."""


class ImageTimeoutError(ImageFetchError):
    """Exception raised when fetching a remote image exceeds its timeout."""
