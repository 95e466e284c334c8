#!/usr/bin/env python

"""
grid.py

===============================================================================

    Copyright (C) 2019-2022 Rudolf Cardinal (rudolf@pobox.com).

    This is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    This software is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
    GNU General Public License for more details.

    You should have received a copy of the GNU General Public License
    along with this software. If not, see <http://www.gnu.org/licenses/>.

===============================================================================

**The Sudoku board.**

A :class:`Grid` is a 9x9 matrix of ints, with 0 meaning "empty". It keeps the
set of digits already placed in every row, column and 3x3 box up to date as
cells change, so that "which digits are still legal here?" is cheap to answer.

It also keeps an undo log. Take a mark with :meth:`Grid.snapshot`, change
things, and :meth:`Grid.restore` puts back every cell changed since the mark.
That is how the backtracking search recovers from a bad guess.

Text format, one row per line:

.. code-block:: none

    # Comment lines start with a hash; blank lines are ignored.
    5,3,0,0,7,0,0,0,0
    6,0,0,1,9,5,0,0,0
    ...

"""

import logging
from typing import AbstractSet, Generator, List, Sequence, Tuple

from sudokusolver.common import (
    COMMA,
    DIGITS,
    EMPTY,
    HASH,
    N,
    NEWLINE,
    PuzzleFormatError,
    RANK,
)

log = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

DISPLAY_EMPTY = "."
SPACE = " "


# =============================================================================
# Box
# =============================================================================

def box_number(row_zb: int, col_zb: int) -> int:
    """
    Zero-based number of the 3x3 box containing a cell, numbered left to right
    then top to bottom.
    """
    return (row_zb // RANK) * RANK + col_zb // RANK


class Box(object):
    """
    Represents a 3x3 box within the Sudoku grid.
    """
    def __init__(self, box_zb: int) -> None:
        """
        Boxes are numbered 0 to 8.

        Args:
            box_zb: box number, as above; zero-based
        """
        assert 0 <= box_zb < N, (
            f"box_zb was {box_zb}; must be in range 0 to {N - 1} inclusive"
        )
        self.box_zb = box_zb

    def __str__(self) -> str:
        """
        Coordinate-based description for a 3x3 box.
        """
        return f"{{{self.boxrow + 1},{self.boxcol + 1}}}"

    def __repr__(self) -> str:
        return self.__str__()

    def __eq__(self, other: "Box") -> bool:
        return self.box_zb == other.box_zb

    @property
    def boxrow(self) -> int:
        """
        Zero-based row number of the box (not its cells).
        """
        return self.box_zb // RANK

    @property
    def boxcol(self) -> int:
        """
        Zero-based column number of the box (not its cells).
        """
        return self.box_zb % RANK

    def top_left_cell(self) -> Tuple[int, int]:
        """
        Returns ``row_zb, col_zb`` for the top-left cell in the 3x3 box.
        """
        return self.boxrow * RANK, self.boxcol * RANK

    @classmethod
    def containing(cls, row_zb: int, col_zb: int) -> "Box":
        """
        Returns the box containing this cell.

        Args:
            row_zb: zero-based row number
            col_zb: zero-based column number
        """
        assert 0 <= row_zb < N
        assert 0 <= col_zb < N
        return cls(box_number(row_zb, col_zb))

    def gen_cells(self) -> Generator[Tuple[int, int], None, None]:
        """
        Generates ``(row_zb, col_zb)`` tuples for all the cells in this box.
        """
        row_min, col_min = self.top_left_cell()
        for r in range(row_min, row_min + RANK):
            for c in range(col_min, col_min + RANK):
                yield r, c


# =============================================================================
# Grid
# =============================================================================

class Grid(object):
    """
    A 9x9 Sudoku board of ints; 0 is empty.
    """

    def __init__(self, values: Sequence[Sequence[int]] = None) -> None:
        """
        Args:
            values:
                optional 9 rows of 9 ints in the range 0-9. If omitted, the
                grid starts empty.

        Raises:
            ValueError: wrong shape, bad values, or a digit repeated within a
                row, column, or box
        """
        self._cells = [
            [
                EMPTY for _col_zb in range(N)
            ] for _row_zb in range(N)
        ]  # type: List[List[int]]
        # ... index as: self._cells[row_zb][col_zb]
        self._row_digits = [set() for _ in range(N)]  # type: List[set]
        self._col_digits = [set() for _ in range(N)]  # type: List[set]
        self._box_digits = [set() for _ in range(N)]  # type: List[set]
        self._undo = []  # type: List[Tuple[int, int, int]]
        # ... entries are (row_zb, col_zb, previous_value)

        if values is None:
            return
        if len(values) != N:
            raise ValueError(f"Must have {N} rows; found {len(values)}")
        for r, row in enumerate(values):
            if len(row) != N:
                raise ValueError(
                    f"Row {r} must have {N} values; found {len(row)}")
            for c, value in enumerate(row):
                if value != EMPTY:
                    self.set(r, c, value)
        self._undo.clear()

    # -------------------------------------------------------------------------
    # Comparison and copying
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._cells == other._cells

    __hash__ = None  # mutable

    def copy(self) -> "Grid":
        """
        Independent copy of the cell values (without the undo log).
        """
        return self.__class__(self._cells)

    def rows(self) -> List[List[int]]:
        """
        The cell values as a fresh list of lists.
        """
        return [list(row) for row in self._cells]

    # -------------------------------------------------------------------------
    # String representations
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        """
        One row per line, comma-separated: the same format as puzzle files.
        """
        return NEWLINE.join(
            COMMA.join(str(v) for v in row) for row in self._cells
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._cells!r})"

    def pretty_str(self) -> str:
        """
        A more human-friendly picture, with empty cells shown as dots and gaps
        between the 3x3 boxes.
        """
        x = ""
        for row_zb in range(N):
            for col_zb in range(N):
                value = self._cells[row_zb][col_zb]
                x += str(value) if value != EMPTY else DISPLAY_EMPTY
                if col_zb % RANK == RANK - 1 and col_zb < N - 1:
                    x += SPACE
            if row_zb < N - 1:
                x += NEWLINE
                if row_zb % RANK == RANK - 1:
                    x += NEWLINE
        return x

    # -------------------------------------------------------------------------
    # Reading cells
    # -------------------------------------------------------------------------

    def __getitem__(self, rowcol: Tuple[int, int]) -> int:
        row_zb, col_zb = rowcol
        return self._cells[row_zb][col_zb]

    def get(self, row_zb: int, col_zb: int) -> int:
        return self._cells[row_zb][col_zb]

    def row_values(self, row_zb: int) -> AbstractSet[int]:
        """
        Digits already placed in a row. Do not modify the result.
        """
        return self._row_digits[row_zb]

    def col_values(self, col_zb: int) -> AbstractSet[int]:
        """
        Digits already placed in a column. Do not modify the result.
        """
        return self._col_digits[col_zb]

    def box_values(self, row_zb: int, col_zb: int) -> AbstractSet[int]:
        """
        Digits already placed in the 3x3 box containing a cell. Do not modify
        the result.
        """
        return self._box_digits[box_number(row_zb, col_zb)]

    def empty_cells(self) -> Generator[Tuple[int, int], None, None]:
        """
        Generates ``(row_zb, col_zb)`` for every empty cell, in row-major
        order.
        """
        for r in range(N):
            row = self._cells[r]
            for c in range(N):
                if row[c] == EMPTY:
                    yield r, c

    def n_empty(self) -> int:
        """
        Number of unfilled cells. Maximum is 81.
        """
        return sum(row.count(EMPTY) for row in self._cells)

    def is_full(self) -> bool:
        return all(EMPTY not in row for row in self._cells)

    def is_valid(self) -> bool:
        """
        Does every row, column and box avoid repeating a digit? Worked out
        from the cells themselves, not from the cached digit sets.
        """
        units = []  # type: List[List[int]]
        units.extend(self.rows())
        units.extend([self._cells[r][c] for r in range(N)] for c in range(N))
        units.extend([self._cells[r][c] for r, c in Box(b).gen_cells()]
                     for b in range(N))
        for unit in units:
            placed = [v for v in unit if v != EMPTY]
            if len(placed) != len(set(placed)):
                return False
            if not set(placed).issubset(DIGITS):
                return False
        return True

    def is_solved(self) -> bool:
        """
        Are we there yet? Full, and every unit is a permutation of 1-9.
        """
        return self.is_full() and self.is_valid()

    # -------------------------------------------------------------------------
    # Writing cells
    # -------------------------------------------------------------------------

    def set(self, row_zb: int, col_zb: int, value: int) -> None:
        """
        Writes a value (0 to clear) to a cell, recording the change in the
        undo log.

        Raises:
            IndexError: bad coordinates
            ValueError: value not in 0-9, or a digit that is already present
                in the cell's row, column, or box
        """
        if not (0 <= row_zb < N and 0 <= col_zb < N):
            raise IndexError(f"No such cell: ({row_zb}, {col_zb})")
        if value != EMPTY and value not in DIGITS:
            raise ValueError(f"Bad value {value!r} for ({row_zb}, {col_zb})")
        previous = self._cells[row_zb][col_zb]
        if previous == value:
            return
        self._write(row_zb, col_zb, EMPTY)
        if value != EMPTY and (
                value in self._row_digits[row_zb] or
                value in self._col_digits[col_zb] or
                value in self._box_digits[box_number(row_zb, col_zb)]):
            self._write(row_zb, col_zb, previous)
            raise ValueError(
                f"Digit {value} at ({row_zb}, {col_zb}) conflicts with "
                f"another in the same row, column, or box")
        self._write(row_zb, col_zb, value)
        self._undo.append((row_zb, col_zb, previous))

    def clear(self, row_zb: int, col_zb: int) -> None:
        self.set(row_zb, col_zb, EMPTY)

    def _write(self, row_zb: int, col_zb: int, value: int) -> None:
        """
        Writes a cell and keeps the digit sets in step. No checks, no undo.
        """
        b = box_number(row_zb, col_zb)
        previous = self._cells[row_zb][col_zb]
        if previous != EMPTY:
            self._row_digits[row_zb].discard(previous)
            self._col_digits[col_zb].discard(previous)
            self._box_digits[b].discard(previous)
        if value != EMPTY:
            self._row_digits[row_zb].add(value)
            self._col_digits[col_zb].add(value)
            self._box_digits[b].add(value)
        self._cells[row_zb][col_zb] = value

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def snapshot(self) -> int:
        """
        Returns a mark to pass to :meth:`restore` later. Marks nest.
        """
        return len(self._undo)

    def restore(self, mark: int) -> int:
        """
        Reverts every change made since ``mark`` was taken, newest first.

        Returns: the number of cells reverted.
        """
        assert 0 <= mark <= len(self._undo), f"Bad snapshot mark {mark}"
        n_reverted = 0
        while len(self._undo) > mark:
            row_zb, col_zb, previous = self._undo.pop()
            self._write(row_zb, col_zb, previous)
            n_reverted += 1
        return n_reverted


# =============================================================================
# Reading puzzles
# =============================================================================

def read_grid(string_version: str) -> Grid:
    """
    Creates a :class:`Grid` from text.

    - Lines starting with ``#`` are comments.
    - Blank lines are ignored.
    - There must be 9 remaining lines, each with 9 comma-separated integers
      from 0 to 9 (0 meaning "empty").

    Raises:
        PuzzleFormatError: if the text doesn't follow those rules, or the
            givens already break the rules of Sudoku
    """
    lines = string_version.splitlines()
    if not lines:
        raise PuzzleFormatError("No data")

    # Remove comments and blank lines
    lines = [line.rstrip() for line in lines if not line.startswith(HASH)]
    lines = [line for line in lines if line.strip()]
    if len(lines) != N:
        raise PuzzleFormatError(
            f"Incorrect number of rows {len(lines)}, expected {N}")

    values = []  # type: List[List[int]]
    for row_zb, line in enumerate(lines):
        fields = line.split(COMMA)
        if len(fields) != N:
            raise PuzzleFormatError(
                f"Incorrect row {row_zb} length {len(fields)} != {N}")
        row = []  # type: List[int]
        for field in fields:
            try:
                value = int(field)
            except ValueError:
                raise PuzzleFormatError(
                    f"Row {row_zb}: field {field!r} is not an integer")
            if value != EMPTY and value not in DIGITS:
                raise PuzzleFormatError(
                    f"Row {row_zb}: value {value} is not in the range "
                    f"0 to {N}")
            row.append(value)
        values.append(row)

    try:
        grid = Grid(values)
    except ValueError as e:
        raise PuzzleFormatError(f"Not a valid Sudoku: {e}")

    n_distinct = len(set(v for row in values for v in row if v != EMPTY))
    if n_distinct < N - 1:
        log.warning(
            f"Not a well-formed Sudoku: {n_distinct} distinct initial "
            f"values given, but need {N - 1} to be well-formed.")
        # http://pi.math.cornell.edu/~mec/Summer2009/Mahmood/More.html
    return grid


def read_grid_file(filename: str) -> Grid:
    """
    Reads a puzzle file; see :func:`read_grid`.
    """
    log.info(f"Parsing board from file {filename}")
    with open(filename, "rt") as f:
        string_version = f.read()
    return read_grid(string_version)
