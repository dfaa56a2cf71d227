#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/utils/ansi.py
"""ANSI style primitives for terminal output.

This module turns semantic style requests (bold, italic, a foreground colour)
into SGR escape sequences, and tracks which attributes are active after a
piece of already-styled text.

Style functions
---------------
A style function (``StyleFn``) takes text and returns it wrapped in an
opening SGR sequence and a full reset, e.g. ``green("ok")`` gives
``"\\x1b[32mok\\x1b[0m"``. Because the reset clears every attribute, callers
embedding styled text inside an already styled run re-apply the surrounding
state afterwards with :class:`EscapeState`.

Escape state
------------
:class:`EscapeState` replays the SGR sequences found in a string and knows
which attributes are on at its end. It backs two behaviours of the renderer:

- leaving bold without SGR 21, which some terminals show as double underline
- closing and re-opening styles around wrapped line breaks

Shade palettes
--------------
:func:`shade` builds a depth-indexed style lookup that cycles through a
palette, used for heading levels and block quote nesting.

"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from typing import Callable, Optional, Sequence

StyleFn = Callable[[str], str]
LevelShadeFn = Callable[[int], StyleFn]

ESC = "\x1b"
RESET = f"{ESC}[0m"

BOLD_ON = f"{ESC}[1m"
ITALIC_ON = f"{ESC}[3m"
ITALIC_OFF = f"{ESC}[23m"
UNDERLINE_ON = f"{ESC}[4m"
UNDERLINE_OFF = f"{ESC}[24m"
CROSSED_OUT_ON = f"{ESC}[9m"
CROSSED_OUT_OFF = f"{ESC}[29m"
GREEN_ON = f"{ESC}[32m"
COLOR_OFF = f"{ESC}[39m"

SGR_PATTERN = re.compile(r"\x1b\[([0-9;]*)m")


def _styler(*codes: str) -> StyleFn:
    prefix = f"{ESC}[{';'.join(codes)}m"

    def style(text: str) -> str:
        return f"{prefix}{text}{RESET}"

    return style


bold = _styler("1")
green = _styler("32")
green_bold = _styler("1", "32")
hi_green = _styler("92")
blue = _styler("34")
red = _styler("31")
blue_bg_italic = _styler("3", "44")


def rgb_foreground(r: int, g: int, b: int) -> str:
    """Return the SGR sequence selecting a true-colour foreground."""
    return f"{ESC}[38;2;{r};{g};{b}m"


def rgb_background(r: int, g: int, b: int) -> str:
    """Return the SGR sequence selecting a true-colour background."""
    return f"{ESC}[48;2;{r};{g};{b}m"


# Boolean attributes in SGR order: (field name, code that sets it)
_FLAG_CODES = (
    ("bold", "1"),
    ("dim", "2"),
    ("italic", "3"),
    ("underline", "4"),
    ("blink", "5"),
    ("reverse", "7"),
    ("hidden", "8"),
    ("crossed_out", "9"),
)
_SET_FLAGS = {code: name for name, code in _FLAG_CODES}
_SET_FLAGS["6"] = "blink"
_CLEAR_FLAGS = {
    "21": ("bold",),
    "22": ("bold", "dim"),
    "23": ("italic",),
    "24": ("underline",),
    "25": ("blink",),
    "27": ("reverse",),
    "28": ("hidden",),
    "29": ("crossed_out",),
}


@dataclass
class EscapeState:
    """Set of SGR attributes active at some point of a styled string.

    Attributes
    ----------
    bold, dim, italic, underline, blink, reverse, hidden, crossed_out : bool
        Boolean text attributes
    fg_color, bg_color : str or None
        SGR parameters of the active colours, e.g. ``"32"``, ``"38;5;208"``
        or ``"48;2;10;20;30"``; None when the terminal default applies

    Examples
    --------
        >>> state = EscapeState()
        >>> state.witness("\\x1b[1m\\x1b[3mbold italic")
        >>> state.clear("bold")
        >>> state.format()
        '\\x1b[3m'

    """

    bold: bool = False
    dim: bool = False
    italic: bool = False
    underline: bool = False
    blink: bool = False
    reverse: bool = False
    hidden: bool = False
    crossed_out: bool = False
    fg_color: Optional[str] = None
    bg_color: Optional[str] = None

    def witness(self, text: str) -> None:
        """Apply every SGR sequence found in ``text``, in order."""
        for match in SGR_PATTERN.finditer(text):
            self._apply(match.group(1))

    def clear(self, attribute: str) -> None:
        """Turn a single attribute off.

        Parameters
        ----------
        attribute : str
            Name of one of the dataclass fields, e.g. ``"bold"`` or ``"fg_color"``

        Raises
        ------
        ValueError
            If ``attribute`` is not a tracked attribute

        """
        if attribute in ("fg_color", "bg_color"):
            setattr(self, attribute, None)
        elif attribute in _SET_FLAGS.values():
            setattr(self, attribute, False)
        else:
            raise ValueError(f"Unknown escape attribute: {attribute}")

    def reset(self) -> None:
        """Turn every attribute off."""
        for f in fields(self):
            self.clear(f.name)

    def is_zero(self) -> bool:
        """Return True when no attribute is active."""
        return self == EscapeState()

    def format(self) -> str:
        """Return one SGR sequence re-creating this state from a reset terminal.

        Returns
        -------
        str
            The sequence, or an empty string when nothing is active

        """
        codes = [code for name, code in _FLAG_CODES if getattr(self, name)]
        if self.fg_color:
            codes.append(self.fg_color)
        if self.bg_color:
            codes.append(self.bg_color)
        if not codes:
            return ""
        return f"{ESC}[{';'.join(codes)}m"

    def _apply(self, params: str) -> None:
        codes = params.split(";") if params else ["0"]
        i = 0
        while i < len(codes):
            code = codes[i] or "0"
            if code == "0":
                self.reset()
            elif code in _SET_FLAGS:
                setattr(self, _SET_FLAGS[code], True)
            elif code in _CLEAR_FLAGS:
                for name in _CLEAR_FLAGS[code]:
                    setattr(self, name, False)
            elif code in ("38", "48"):
                consumed = self._extended_color(codes, i)
                color = ";".join(codes[i : i + consumed])
                if code == "38":
                    self.fg_color = color
                else:
                    self.bg_color = color
                i += consumed
                continue
            elif code == "39":
                self.fg_color = None
            elif code == "49":
                self.bg_color = None
            elif code.isdigit():
                value = int(code)
                if 30 <= value <= 37 or 90 <= value <= 97:
                    self.fg_color = code
                elif 40 <= value <= 47 or 100 <= value <= 107:
                    self.bg_color = code
            i += 1

    @staticmethod
    def _extended_color(codes: list[str], i: int) -> int:
        """Return how many parameters a 38/48 colour selection spans."""
        if i + 1 < len(codes):
            if codes[i + 1] == "5":
                return min(3, len(codes) - i)
            if codes[i + 1] == "2":
                return min(5, len(codes) - i)
        return 1


def shade(shades: Sequence[StyleFn]) -> LevelShadeFn:
    """Build a depth-indexed style lookup cycling through ``shades``.

    Parameters
    ----------
    shades : sequence of StyleFn
        Ordered palette; must not be empty

    Returns
    -------
    callable
        Maps any integer depth to a palette entry, using ``depth % len(shades)``

    Raises
    ------
    ValueError
        If the palette is empty

    """
    palette = tuple(shades)
    if not palette:
        raise ValueError("A shade palette needs at least one style")

    def level_shade(level: int) -> StyleFn:
        return palette[level % len(palette)]

    return level_shade


DEFAULT_HEADING_SHADES: tuple[StyleFn, ...] = (green_bold, green_bold, hi_green, green)
DEFAULT_QUOTE_SHADES: tuple[StyleFn, ...] = (green_bold, green_bold, hi_green, green)
