#!/usr/bin/env python

"""
solver.py

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

**Solves Sudoku puzzles by deduction, then guessing.**

Strategy:

1.  Scan the empty cells in row-major order. The first one that has exactly
    one legal digit (a "naked single") gets it. Start again from the top,
    since that placement changes what is legal elsewhere.

2.  If no cell is forced, guess. Pick the empty cell with the fewest
    candidates, try each candidate in ascending order, and carry on solving
    (deducing and, if need be, guessing again). If that leads to a cell with
    no legal digit, put the board back as it was before the guess and try the
    next candidate.

3.  If every candidate for the guess cell fails, the guess one level up was
    wrong (or, at the top level, the puzzle has no solution).

"""

from enum import Enum
import logging
from typing import AbstractSet, List, Optional, Tuple

from sudokusolver.common import (
    BacktrackExhaustedError,
    DIGITS,
    SearchBudgetExceededError,
    SolutionFailure,
    ZeroCandidateError,
)
from sudokusolver.grid import Grid

log = logging.getLogger(__name__)


# =============================================================================
# Candidates
# =============================================================================

def _free_digits(grid: Grid, row_zb: int, col_zb: int) -> AbstractSet[int]:
    used = (
        grid.row_values(row_zb) |
        grid.col_values(col_zb) |
        grid.box_values(row_zb, col_zb)
    )
    return DIGITS - used


def candidates(grid: Grid, row_zb: int, col_zb: int) -> List[int]:
    """
    Digits that could legally go in an (empty) cell: those not already in its
    row, column, or 3x3 box. Always returned in ascending order.
    """
    return sorted(_free_digits(grid, row_zb, col_zb))


def unique_candidate(grid: Grid, row_zb: int, col_zb: int) -> Optional[int]:
    """
    The only legal digit for a cell, or ``None`` if there are several.

    Raises:
        ZeroCandidateError: if there are none
    """
    options = _free_digits(grid, row_zb, col_zb)
    if not options:
        raise ZeroCandidateError(row_zb, col_zb)
    if len(options) == 1:
        return next(iter(options))
    return None


# =============================================================================
# Deduction
# =============================================================================

class Progress(Enum):
    """
    Outcome of one pass of :func:`propagate_once`.
    """
    PLACED = "placed"  # one forced digit was written
    STALLED = "stalled"  # empty cells remain, none forced
    SOLVED = "solved"  # no empty cells


def propagate_once(grid: Grid) -> Progress:
    """
    Finds the first empty cell (in row-major order) with a single candidate,
    and fills it in. Only one cell is filled per call.

    Raises:
        ZeroCandidateError: if an empty cell met along the way has no legal
            digit
    """
    any_empty = False
    for r, c in grid.empty_cells():
        any_empty = True
        digit = unique_candidate(grid, r, c)
        if digit is not None:
            log.info(f"Solved {r}, {c} = {digit}")
            grid.set(r, c, digit)
            return Progress.PLACED
    return Progress.STALLED if any_empty else Progress.SOLVED


# =============================================================================
# SearchStats
# =============================================================================

class SearchStats(object):
    """
    Counts what the solver did.
    """
    def __init__(self) -> None:
        self.steps = 0  # calls to SudokuSolver.step()
        self.placements = 0  # digits placed by deduction
        self.backtracks = 0  # calls to SudokuSolver.backtrack()
        self.guesses = 0  # candidate digits tried by backtracking
        self.reverts = 0  # guesses undone
        self.max_depth = 0  # deepest nesting of guesses

    def __str__(self) -> str:
        return (
            f"steps={self.steps}, placements={self.placements}, "
            f"backtracks={self.backtracks}, guesses={self.guesses}, "
            f"reverts={self.reverts}, max_depth={self.max_depth}"
        )

    def __repr__(self) -> str:
        return f"SearchStats({self})"


# =============================================================================
# SudokuSolver
# =============================================================================

class SudokuSolver(object):
    """
    Solves a :class:`Grid` in place, by deduction and backtracking.
    """

    def __init__(self, grid: Grid, max_steps: int = None) -> None:
        """
        Args:
            grid:
                the board; it is modified in place
            max_steps:
                optional limit on the number of solving steps (deductions plus
                guesses); exceeding it raises
                :exc:`SearchBudgetExceededError`
        """
        self.grid = grid
        self.max_steps = max_steps
        self.stats = SearchStats()
        self.guess_level = 0
        self.working = []  # type: List[str]

    # -------------------------------------------------------------------------
    # Show your working
    # -------------------------------------------------------------------------

    def note(self, msg: str) -> None:
        """
        Save some working.
        """
        self.working.append(msg)
        log.info(msg)

    # -------------------------------------------------------------------------
    # Strategy
    # -------------------------------------------------------------------------

    def solve(self) -> Grid:
        """
        Solves to completion, or raises.

        Returns: the (now solved) grid

        Raises:
            ZeroCandidateError: if the puzzle itself has an empty cell with no
                legal digit
            BacktrackExhaustedError: if guessing could not find a solution
            SearchBudgetExceededError: if ``max_steps`` was exceeded
        """
        log.debug(f"Solving:\n{self.grid.pretty_str()}")
        while not self.step():
            pass
        assert self.grid.is_solved(), "Solver finished with an invalid grid"
        log.info(f"Solved; {self.stats}")
        return self.grid

    def step(self) -> bool:
        """
        Fills in one forced cell; if there isn't one, guesses (which solves
        the rest of the puzzle, or fails).

        Returns: solved?
        """
        self.stats.steps += 1
        if self.max_steps is not None and self.stats.steps > self.max_steps:
            raise SearchBudgetExceededError(
                f"Search budget of {self.max_steps} steps exceeded")
        progress = propagate_once(self.grid)
        if progress == Progress.SOLVED:
            return True
        if progress == Progress.PLACED:
            self.stats.placements += 1
            return False
        return self.backtrack()

    # -------------------------------------------------------------------------
    # Guessing
    # -------------------------------------------------------------------------

    def options(self) -> List[Tuple[int, int, List[int]]]:
        """
        Returns ``row_zb, col_zb, candidates`` for every empty cell, those
        with fewest candidates first (ties in row-major order).
        """
        cells = [
            (r, c, candidates(self.grid, r, c))
            for r, c in self.grid.empty_cells()
        ]
        cells.sort(key=lambda cell: len(cell[2]))
        return cells

    def backtrack(self) -> bool:
        """
        Guesses each candidate for the most constrained empty cell in turn,
        solving onwards from each, and undoing the guess if it fails.

        Returns: ``True`` (solved); failure is always an exception.

        Raises:
            ZeroCandidateError: if an empty cell has no legal digit before any
                guess is made
            BacktrackExhaustedError: if every candidate failed
        """
        self.stats.backtracks += 1
        options = self.options()
        assert options, "Nothing to guess: grid is full"
        row, col, digits = options[0]
        if not digits:
            raise ZeroCandidateError(row, col)
        log.debug(f"Backtrack with board:\n{self.grid}")

        n_empty_before = self.grid.n_empty()
        self.guess_level += 1
        self.stats.max_depth = max(self.stats.max_depth, self.guess_level)
        try:
            for i, digit in enumerate(digits):
                self.note(
                    f"Guess level {self.guess_level}: backtracking on "
                    f"{row}, {col} options[{i}]: {digit}")
                self.stats.guesses += 1
                mark = self.grid.snapshot()
                self.grid.set(row, col, digit)
                assert self.grid.n_empty() < n_empty_before
                try:
                    while not self.step():
                        pass
                    log.info(f"Guess level {self.guess_level} was good")
                    return True
                except SolutionFailure as e:
                    log.debug(f"Reverting board:\n{self.grid}")
                    n_reverted = self.grid.restore(mark)
                    self.stats.reverts += 1
                    self.note(
                        f"Reverting {n_reverted} cell(s) at guess level "
                        f"{self.guess_level} due to: {e}")
        finally:
            self.guess_level -= 1
        raise BacktrackExhaustedError()


# =============================================================================
# Convenience function
# =============================================================================

def solve(grid: Grid, max_steps: int = None) -> SearchStats:
    """
    Solves a grid in place.

    Returns: statistics about the search

    Raises:
        SolutionFailure: if there is no solution
        SearchBudgetExceededError: if ``max_steps`` was exceeded
    """
    solver = SudokuSolver(grid, max_steps=max_steps)
    solver.solve()
    return solver.stats
