#!/usr/bin/env python

"""
common.py

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

Common constants, exceptions and functions for the Sudoku solver.

"""

import logging
import sys
import traceback
from typing import Callable

log = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

RANK = 3  # box size
N = RANK ** 2  # 9
DIGITS = frozenset(range(1, N + 1))
EMPTY = 0

NEWLINE = "\n"
COMMA = ","
HASH = "#"

EXIT_FAILURE = 1
EXIT_SUCCESS = 0


# =============================================================================
# Exceptions
# =============================================================================

class SudokuError(Exception):
    """
    Base class for all errors raised deliberately by this package.
    """
    pass


class PuzzleFormatError(SudokuError):
    """
    The puzzle text is malformed (wrong row/field count, bad field, or givens
    that already break the rules). Always fatal.
    """
    pass


class SolutionFailure(SudokuError):
    """
    The current board state cannot lead to a solution. Recoverable within a
    backtracking frame (revert and try the next guess); fatal if it reaches
    the top level.
    """
    pass


class ZeroCandidateError(SolutionFailure):
    """
    An empty cell has no legal digit.
    """
    def __init__(self, row_zb: int, col_zb: int) -> None:
        self.row = row_zb
        self.col = col_zb
        super().__init__(f"No candidates for {row_zb}, {col_zb}")


class BacktrackExhaustedError(SolutionFailure):
    """
    Every candidate of the chosen guess cell failed.
    """
    def __init__(self, msg: str = "Not solved with backtracking") -> None:
        super().__init__(msg)


class SearchBudgetExceededError(SudokuError):
    """
    The search took more steps than permitted. Not recoverable by
    backtracking; aborts the solve.
    """
    pass


# =============================================================================
# Generic helper functions
# =============================================================================

def run_guard(function: Callable[[], None]) -> None:
    """
    Runs ``function``; any exception is reported and becomes a failure exit
    code. This is the only place the program terminates abnormally.
    """
    try:
        function()
    except Exception as e:
        log.critical(str(e))
        traceback.print_exc()
        sys.exit(EXIT_FAILURE)
