#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/renderers/_table.py
"""Box-drawn table layout for the terminal renderer.

The renderer fills a :class:`TableLayout` cell by cell while walking a table
node and asks it to render once the table closes. Layout happens in two
steps:

1. Column widths. Each column wants the width of its widest cell. When the
   total does not fit, every column first gets a floor (3 columns, or its
   natural width if smaller, dropping to 1 when even that does not fit) and
   the rest of the budget is shared in proportion to what each column still
   misses.
2. Rows. Cells wider than their column are wrapped; the tallest cell sets the
   height of the row. Shorter cells are padded with blank lines.

A table with ``n`` columns spends ``3n + 1`` columns on borders and cell
padding: ``│ a │ b │``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from mdterm.constants import (
    TABLE_BOTTOM,
    TABLE_HARD_MIN_COLUMN_WIDTH,
    TABLE_HEADER_HORIZONTAL,
    TABLE_HEADER_SEPARATOR,
    TABLE_HORIZONTAL,
    TABLE_MIN_COLUMN_WIDTH,
    TABLE_ROW_SEPARATOR,
    TABLE_TOP,
    TABLE_VERTICAL,
)
from mdterm.exceptions import InvalidTreeError
from mdterm.utils.text import visual_width, wrap_with_pad

logger = logging.getLogger(__name__)


class CellAlign(Enum):
    """Horizontal alignment of a table cell."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    # body cells only: use the alignment of the header cell above
    COPY_HEADER = "copy_header"


@dataclass
class _Cell:
    content: str
    align: CellAlign


def border_overhead(columns: int) -> int:
    """Return the columns spent on borders and cell padding."""
    return 3 * columns + 1 if columns else 0


class TableLayout:
    """Accumulates table cells and renders them with box-drawing borders.

    Examples
    --------
        >>> from io import StringIO
        >>> layout = TableLayout()
        >>> layout.add_header_cell("Name")
        >>> layout.add_header_cell("Qty", CellAlign.RIGHT)
        >>> layout.next_body_row()
        >>> layout.add_body_cell("apple")
        >>> layout.add_body_cell("3")
        >>> out = StringIO()
        >>> layout.render(out, left_pad=0, line_width=80)
        >>> print(out.getvalue(), end="")
        ┌───────┬─────┐
        │ Name  │ Qty │
        ╞═══════╪═════╡
        │ apple │   3 │
        └───────┴─────┘

    """

    def __init__(self) -> None:
        self.header: list[_Cell] = []
        self.rows: list[list[_Cell]] = []
        self._current: list[_Cell] | None = None

    @property
    def column_count(self) -> int:
        """Number of columns, set by the header (or the first row without one)."""
        if self.header:
            return len(self.header)
        if self.rows:
            return len(self.rows[0])
        return len(self._current or [])

    def add_header_cell(self, content: str, align: CellAlign = CellAlign.LEFT) -> None:
        """Append a cell to the header row.

        Raises
        ------
        InvalidTreeError
            If a body row was already started

        """
        if self.rows or self._current is not None:
            raise InvalidTreeError("Header cells must come before body rows", rendering_stage="table")
        if align is CellAlign.COPY_HEADER:
            align = CellAlign.LEFT
        self.header.append(_Cell(content, align))

    def next_body_row(self) -> None:
        """Close the current body row, if any, and start a new one."""
        self._close_row()
        self._current = []

    def add_body_cell(self, content: str, align: CellAlign = CellAlign.COPY_HEADER) -> None:
        """Append a cell to the current body row.

        Parameters
        ----------
        content : str
            Rendered cell text; may contain escape sequences
        align : CellAlign, default COPY_HEADER
            Alignment; COPY_HEADER inherits the header cell of the same column

        Raises
        ------
        InvalidTreeError
            If no body row is open or the row already has a cell per column

        """
        if self._current is None:
            raise InvalidTreeError("Table body cell outside of a body row", rendering_stage="table")

        index = len(self._current)
        if self.header and index >= len(self.header):
            raise InvalidTreeError(
                f"Table row has more cells than the header ({len(self.header)})", rendering_stage="table"
            )

        if align is CellAlign.COPY_HEADER:
            align = self.header[index].align if self.header else CellAlign.LEFT
        self._current.append(_Cell(content, align))

    def _close_row(self) -> None:
        if self._current is None:
            return
        expected = self.column_count if (self.header or self.rows) else len(self._current)
        if len(self._current) != expected:
            raise InvalidTreeError(
                f"Table row has {len(self._current)} cells, expected {expected}", rendering_stage="table"
            )
        self.rows.append(self._current)
        self._current = None

    def natural_widths(self) -> list[int]:
        """Return the widest cell of each column, at least 1.

        The body row still being filled counts too.
        """
        widths = [TABLE_HARD_MIN_COLUMN_WIDTH] * self.column_count
        for row in [self.header, *self.rows, self._current or []]:
            for i, cell in enumerate(row[: len(widths)]):
                widths[i] = max(widths[i], visual_width(cell.content))
        return widths

    def compute_column_widths(self, available: int) -> list[int]:
        """Fit the columns into ``available`` columns of content.

        Parameters
        ----------
        available : int
            Columns left once borders and padding are accounted for

        Returns
        -------
        list of int
            Width of each column. The sum only exceeds ``available`` when
            even one column per table column does not fit.

        Examples
        --------
            >>> layout = TableLayout()
            >>> for text in ("abc", "x" * 40, "12345"):
            ...     layout.add_header_cell(text)
            >>> layout.compute_column_widths(10)
            [3, 4, 3]

        """
        natural = self.natural_widths()
        if sum(natural) <= available:
            return natural

        floors = [min(TABLE_MIN_COLUMN_WIDTH, width) for width in natural]
        if sum(floors) > available:
            floors = [TABLE_HARD_MIN_COLUMN_WIDTH] * len(natural)

        remaining = available - sum(floors)
        if remaining <= 0:
            return floors

        unmet = [width - floor for width, floor in zip(natural, floors)]
        total_unmet = sum(unmet)

        # proportional share, leftover columns go to the largest remainders
        shares = [divmod(remaining * missing, total_unmet) for missing in unmet]
        widths = [floor + share for floor, (share, _) in zip(floors, shares)]
        leftover = remaining - sum(share for share, _ in shares)
        by_remainder = sorted(range(len(shares)), key=lambda i: (-shares[i][1], i))
        for i in by_remainder[:leftover]:
            widths[i] += 1

        return widths

    def render(self, out: TextIO, left_pad: int, line_width: int) -> None:
        """Write the table to ``out``.

        Parameters
        ----------
        out : TextIO
            Sink for the rendered lines; every line ends with a newline
        left_pad : int
            Spaces written before every line
        line_width : int
            Total columns available, ``left_pad`` included

        """
        self._close_row()
        columns = self.column_count
        if columns == 0:
            return

        for row in self.rows:
            if len(row) != columns:
                raise InvalidTreeError(f"Table row has {len(row)} cells, expected {columns}", rendering_stage="table")

        available = line_width - left_pad - border_overhead(columns)
        widths = self.compute_column_widths(available)
        logger.debug(f"Table layout: {columns} columns in {available} columns of content, widths {widths}")

        pad = " " * left_pad
        out.write(pad + self._border(TABLE_TOP, TABLE_HORIZONTAL, widths) + "\n")

        if self.header:
            self._write_row(out, pad, self.header, widths)
            if self.rows:
                out.write(pad + self._border(TABLE_HEADER_SEPARATOR, TABLE_HEADER_HORIZONTAL, widths) + "\n")

        for i, row in enumerate(self.rows):
            if i > 0:
                out.write(pad + self._border(TABLE_ROW_SEPARATOR, TABLE_HORIZONTAL, widths) + "\n")
            self._write_row(out, pad, row, widths)

        out.write(pad + self._border(TABLE_BOTTOM, TABLE_HORIZONTAL, widths) + "\n")

    @staticmethod
    def _border(glyphs: tuple[str, str, str], horizontal: str, widths: list[int]) -> str:
        left, middle, right = glyphs
        return left + middle.join(horizontal * (width + 2) for width in widths) + right

    @staticmethod
    def _write_row(out: TextIO, pad: str, row: list[_Cell], widths: list[int]) -> None:
        wrapped = [wrap_with_pad(cell.content, width, "").split("\n") for cell, width in zip(row, widths)]
        height = max(len(lines) for lines in wrapped)

        for line_index in range(height):
            parts = []
            for cell, width, lines in zip(row, widths, wrapped):
                text = lines[line_index] if line_index < len(lines) else ""
                parts.append(f" {_align(text, width, cell.align)} ")
            out.write(pad + TABLE_VERTICAL + TABLE_VERTICAL.join(parts) + TABLE_VERTICAL + "\n")


def _align(text: str, width: int, align: CellAlign) -> str:
    fill = max(width - visual_width(text), 0)
    if align is CellAlign.RIGHT:
        return " " * fill + text
    if align is CellAlign.CENTER:
        left = fill // 2
        return " " * left + text + " " * (fill - left)
    return text + " " * fill
