#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/utils/text.py
"""Width measurement and word wrapping for styled terminal text.

All functions here operate on text that may already contain SGR escape
sequences. Those sequences occupy no columns, wide (East Asian) characters
occupy two and combining marks none; widths are measured with ``wcwidth``.

The wrapping functions return the wrapped block without a trailing newline.
Every output line starts with a left margin (the "pad"), and any style that
is still open at the end of a line is closed with a reset and re-opened right
after the pad of the next line, so each printed line is self-contained.
"""

from __future__ import annotations

import re

from wcwidth import wcwidth

from mdterm.constants import TAB_WIDTH
from mdterm.utils.ansi import RESET, EscapeState

# CSI sequences (including SGR) and OSC sequences such as hyperlinks
ANSI_ESCAPE_PATTERN = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)")

# Runs of plain spaces separate words; other whitespace (e.g. NBSP) does not
_SPACE_RUN = re.compile(r"( +)")

# Smallest units a word can be hard-broken into
_BREAK_UNIT = re.compile(r"\x1b\[[0-9;]*m|.", re.DOTALL)

# Trailing spaces of a pad, possibly followed by closing escapes
_PAD_TRAILING_SPACES = re.compile(r" +((?:\x1b\[[0-9;]*m)*)$")


def strip_escapes(text: str) -> str:
    """Remove all ANSI escape sequences from ``text``."""
    return ANSI_ESCAPE_PATTERN.sub("", text)


def visual_width(text: str) -> int:
    """Return the number of terminal columns ``text`` occupies.

    Parameters
    ----------
    text : str
        Text, possibly containing escape sequences

    Returns
    -------
    int
        Column count; escapes and non-printable characters count as zero

    Examples
    --------
        >>> visual_width("\\x1b[1mbold\\x1b[0m")
        4
        >>> visual_width("日本")
        4

    """
    return sum(max(wcwidth(char), 0) for char in strip_escapes(text))


def collapse_line_breaks(text: str) -> str:
    """Join the lines of ``text`` into one, separated by single spaces.

    The first line loses its trailing whitespace, the last line its leading
    whitespace and every interior line both.

    Examples
    --------
        >>> collapse_line_breaks("Hello\\nWorld")
        'Hello World'
        >>> collapse_line_breaks("  a  \\n  b  \\n  c  ")
        '  a b c  '

    """
    parts = text.split("\n")
    if len(parts) == 1:
        return text

    cleaned = []
    last = len(parts) - 1
    for i, part in enumerate(parts):
        if i == 0:
            cleaned.append(part.rstrip())
        elif i == last:
            cleaned.append(part.lstrip())
        else:
            cleaned.append(part.strip())
    return " ".join(cleaned)


def wrap_with_pad(text: str, line_width: int, pad: str) -> str:
    """Wrap ``text`` so every line, pad included, fits in ``line_width`` columns.

    Parameters
    ----------
    text : str
        Text to wrap; embedded newlines are kept as line boundaries
    line_width : int
        Total number of columns available
    pad : str
        Left margin written before every line; may be styled

    Returns
    -------
    str
        Wrapped lines joined with newlines, without a trailing newline

    """
    return _wrap(text, line_width, pad, pad)


def wrap_with_pad_indent(text: str, line_width: int, indent: str, pad: str) -> str:
    """Wrap ``text`` using ``indent`` as the margin of the first line only.

    Subsequent lines use ``pad``. This is how list markers are laid out: the
    marker is part of the first line's margin and continuation lines are
    aligned under the item text.

    Parameters
    ----------
    text : str
        Text to wrap
    line_width : int
        Total number of columns available
    indent : str
        Margin of the first line
    pad : str
        Margin of every other line

    Returns
    -------
    str
        Wrapped lines joined with newlines, without a trailing newline

    """
    return _wrap(text, line_width, indent, pad)


def _wrap(text: str, line_width: int, first_margin: str, margin: str) -> str:
    text = text.replace("\t", " " * TAB_WIDTH)
    first_width = max(line_width - visual_width(first_margin), 1)
    width = max(line_width - visual_width(margin), 1)

    fragments: list[str] = []
    for source_line in text.split("\n"):
        fragments.extend(_wrap_line(source_line, width if fragments else first_width, width))

    state = EscapeState()
    lines = []
    for i, fragment in enumerate(fragments):
        lead = first_margin if i == 0 else margin
        if not strip_escapes(fragment).strip(" "):
            # blank lines only keep the visible part of the margin
            lines.append(_PAD_TRAILING_SPACES.sub(r"\1", lead))
            state.witness(fragment)
            continue

        reopen = state.format()
        state.witness(fragment)
        line = f"{lead}{reopen}{fragment}"
        if not state.is_zero():
            line += RESET
        lines.append(line)

    return "\n".join(lines)


def _wrap_line(line: str, first_width: int, width: int) -> list[str]:
    """Greedily break a single source line into fragments."""
    lines: list[str] = []
    current = ""
    current_width = 0
    limit = first_width
    pending = ""
    has_word = False

    for token in _SPACE_RUN.split(line):
        if not token:
            continue

        if token[0] == " ":
            if has_word:
                pending = token
            else:
                # leading indentation, kept up to the point where text still fits
                keep = min(len(token), max(limit - current_width - 1, 0))
                current += token[:keep]
                current_width += keep
            continue

        token_width = visual_width(token)
        gap = len(pending) if has_word else 0
        pending = ""

        if current_width + gap + token_width <= limit:
            current += " " * gap + token
            current_width += gap + token_width
        else:
            if has_word:
                lines.append(current)
                current, current_width, limit = "", 0, width
            if current_width + token_width <= limit:
                current += token
                current_width += token_width
            else:
                for unit in _BREAK_UNIT.findall(token):
                    unit_width = visual_width(unit)
                    if current_width > 0 and current_width + unit_width > limit:
                        lines.append(current)
                        current, current_width, limit = "", 0, width
                    current += unit
                    current_width += unit_width
        has_word = True

    lines.append(current)
    return lines
