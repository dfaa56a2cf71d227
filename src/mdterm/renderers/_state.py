#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/renderers/_state.py
"""Mutable state owned by one terminal render call.

A fresh :class:`RenderState` is built for every call, so nothing leaks from
one render into the next and renders can run concurrently on separate
renderer instances.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from io import StringIO
from typing import Optional

from mdterm.constants import MAX_HEADING_LEVEL
from mdterm.exceptions import InvalidTreeError
from mdterm.renderers._table import TableLayout


class PaddingStack:
    """Left margin contributions of the containers currently open.

    Parameters
    ----------
    left_pad : int, default 0
        Fixed margin, in spaces, always written before the pushed fragments

    Examples
    --------
        >>> stack = PaddingStack(2)
        >>> stack.push("┃ ")
        >>> stack.current()
        '  ┃ '
        >>> stack.pop()
        '┃ '

    """

    def __init__(self, left_pad: int = 0):
        self._margin = " " * left_pad
        self._fragments: list[str] = []

    def push(self, fragment: str) -> None:
        """Append an already styled margin fragment."""
        self._fragments.append(fragment)

    def pop(self) -> str:
        """Remove and return the most recently pushed fragment.

        Raises
        ------
        InvalidTreeError
            If nothing was pushed

        """
        if not self._fragments:
            raise InvalidTreeError("Unbalanced padding: pop on an empty stack", rendering_stage="padding")
        return self._fragments.pop()

    def peek(self) -> Optional[str]:
        """Return the most recently pushed fragment, or None."""
        return self._fragments[-1] if self._fragments else None

    def current(self) -> str:
        """Return the full left margin: fixed margin then fragments in push order."""
        return self._margin + "".join(self._fragments)

    def __len__(self) -> int:
        return len(self._fragments)


class HeadingNumbering:
    """Hierarchical heading counters producing labels such as ``1.2``.

    Examples
    --------
        >>> numbering = HeadingNumbering()
        >>> labels = []
        >>> for level in (1, 2, 2, 1, 3):
        ...     numbering.observe(level)
        ...     labels.append(numbering.render())
        >>> labels
        ['1', '1.1', '1.2', '2', '2.1']

    """

    def __init__(self, max_level: int = MAX_HEADING_LEVEL):
        self._counters = [0] * max_level

    def observe(self, level: int) -> None:
        """Count a heading of ``level`` and reset every deeper counter."""
        if not 1 <= level <= len(self._counters):
            raise ValueError(f"Heading level must be 1-{len(self._counters)}, got {level}")
        self._counters[level - 1] += 1
        for i in range(level, len(self._counters)):
            self._counters[i] = 0

    def render(self) -> str:
        """Join the nonzero counters with dots."""
        return ".".join(str(counter) for counter in self._counters if counter)


@dataclass
class RenderState:
    """Everything a single render call mutates.

    Attributes
    ----------
    padding : PaddingStack
        Margins of the open containers
    out : StringIO
        Sink receiving the rendered text
    inline : list of str
        Inline content accumulated until the enclosing block closes
    numbering : HeadingNumbering
        Heading counters
    blockquote_level : int
        Current block quote nesting depth
    table : TableLayout or None
        Layout being filled while inside a table
    indent : str
        One-shot margin for the first line of the next wrapped block
    base_style : str
        Opening SGR sequence of the enclosing heading, re-applied after
        inline resets

    """

    padding: PaddingStack
    out: StringIO = field(default_factory=StringIO)
    inline: list[str] = field(default_factory=list)
    numbering: HeadingNumbering = field(default_factory=HeadingNumbering)
    blockquote_level: int = 0
    table: Optional[TableLayout] = None
    indent: str = ""
    base_style: str = ""

    @classmethod
    def fresh(cls, left_pad: int) -> RenderState:
        """Build the state of a new render call."""
        return cls(padding=PaddingStack(left_pad))

    def drain_inline(self) -> str:
        """Return the accumulated inline content and clear it."""
        content = "".join(self.inline)
        self.inline.clear()
        return content
