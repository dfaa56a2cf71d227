#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/cli.py
"""Command-line interface for mdterm.

Render a markdown file (or standard input) to the terminal::

    mdterm README.md
    cat README.md | mdterm - --width 60 --left-pad 2
    mdterm notes.md --image-mode blocks

Exit codes
----------
0 on success, 1 for unexpected errors, 3 for invalid arguments, 4 when the
input cannot be read or the output cannot be written, 6 for parsing errors
and 7 for rendering errors.
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from dataclasses import fields
from pathlib import Path
from typing import Optional

from mdterm import __version__
from mdterm.constants import DEFAULT_IMAGE_FETCH_TIMEOUT, DEFAULT_LEFT_PAD, DEFAULT_LINE_WIDTH
from mdterm.exceptions import MdTermError, ParsingError, RenderingError, ValidationError
from mdterm.logging_utils import configure_logging
from mdterm.options import MarkdownParserOptions, TerminalRendererOptions
from mdterm.options.terminal import IMAGE_MODES
from mdterm.parsers.markdown import MarkdownToAstConverter
from mdterm.renderers.terminal import TerminalRenderer

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (ValidationError, ValueError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, OSError):
        return EXIT_FILE_ERROR

    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR

    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR

    return EXIT_ERROR


def _default_width() -> int:
    return shutil.get_terminal_size((DEFAULT_LINE_WIDTH, 24)).columns


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Markdown extension switches are generated from the ``cli_name`` metadata
    of :class:`~mdterm.options.MarkdownParserOptions`.
    """
    parser = argparse.ArgumentParser(
        prog="mdterm",
        description="Render markdown as styled text for the terminal.",
    )
    parser.add_argument("input", help="Markdown file to render, or '-' for standard input")
    parser.add_argument("-o", "--output", metavar="PATH", help="Write to a file instead of standard output")
    parser.add_argument(
        "-w",
        "--width",
        type=int,
        default=None,
        help="Total line width in columns (default: terminal width)",
    )
    parser.add_argument(
        "--left-pad",
        type=int,
        default=DEFAULT_LEFT_PAD,
        help=f"Fixed left margin in columns (default: {DEFAULT_LEFT_PAD})",
    )
    parser.add_argument(
        "--image-mode",
        choices=list(IMAGE_MODES),
        default="none",
        help="How to draw images; 'none' shows them as links (default: none)",
    )
    parser.add_argument(
        "--image-timeout",
        type=float,
        default=DEFAULT_IMAGE_FETCH_TIMEOUT,
        metavar="SECONDS",
        help=f"Timeout for fetching one remote image (default: {DEFAULT_IMAGE_FETCH_TIMEOUT})",
    )
    parser.add_argument(
        "--fail-on-resource-errors",
        action="store_true",
        help="Exit with an error when an image cannot be loaded instead of showing it as a link",
    )

    extensions = parser.add_argument_group("markdown extensions")
    for field_info in fields(MarkdownParserOptions):
        cli_name = field_info.metadata.get("cli_name")
        if cli_name:
            extensions.add_argument(
                f"--{cli_name}",
                dest=field_info.name,
                action="store_false",
                help=f"Do not {field_info.metadata['help'][0].lower()}{field_info.metadata['help'][1:]}",
            )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output with detailed logging (equivalent to --log-level DEBUG)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level for debugging (default: WARNING). Overrides --verbose if both are specified.",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help="Write log messages to specified file in addition to console output",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace mode with very verbose logging",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    """
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _read_input(source: str) -> bytes:
    if source == "-":
        return sys.stdin.buffer.read()
    return Path(source).read_bytes()


def main(args: Optional[list[str]] = None) -> int:
    """Execute the CLI and return its exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    try:
        renderer_options = TerminalRendererOptions(
            line_width=parsed_args.width if parsed_args.width is not None else _default_width(),
            left_pad=parsed_args.left_pad,
            image_mode=parsed_args.image_mode,
            image_fetch_timeout=parsed_args.image_timeout,
            fail_on_resource_errors=parsed_args.fail_on_resource_errors,
        )
        parser_options = MarkdownParserOptions(
            **{
                field_info.name: getattr(parsed_args, field_info.name)
                for field_info in fields(MarkdownParserOptions)
                if hasattr(parsed_args, field_info.name)
            }
        )

        document = MarkdownToAstConverter(parser_options).parse(_read_input(parsed_args.input))
        renderer = TerminalRenderer(renderer_options)

        if parsed_args.output:
            renderer.render(document, parsed_args.output)
        else:
            sys.stdout.write(renderer.render_to_string(document))
            sys.stdout.flush()
    except (MdTermError, ValueError, OSError) as e:
        logger.debug("Rendering failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        print(f"Unexpected error: {e}", file=sys.stderr)
        return EXIT_ERROR

    return EXIT_SUCCESS
