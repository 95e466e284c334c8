#!/usr/bin/env python

"""
sudoku.py

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

**Solves Sudoku puzzles from a file.**

Reads the puzzle, prints it, solves it (logging each placement, guess and
revert as it goes), and prints the answer.

"""

import argparse
import logging
import os
import sys
from typing import List

from cardinal_pythonlib.argparse_func import RawDescriptionArgumentDefaultsHelpFormatter  # noqa
from cardinal_pythonlib.logs import main_only_quicksetup_rootlogger

from sudokusolver.common import EXIT_SUCCESS, run_guard
from sudokusolver.grid import read_grid_file
from sudokusolver.solver import SudokuSolver

log = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

THIS_DIR = os.path.abspath(os.path.dirname(__file__))
PUZZLE_DIR = os.path.join(THIS_DIR, "puzzles")
DEFAULT_PUZZLE_FILE = os.path.join(PUZZLE_DIR, "sudoku-com-evil.txt")

FORMAT_HELP = """
Puzzle files have 9 rows of 9 comma-separated digits, 0 meaning "empty".
Lines starting with # are comments; blank lines are ignored. For example:

# Wikipedia
5,3,0,0,7,0,0,0,0
6,0,0,1,9,5,0,0,0
0,9,8,0,0,0,0,6,0
8,0,0,0,6,0,0,0,3
4,0,0,8,0,3,0,0,1
7,0,0,0,2,0,0,0,6
0,6,0,0,0,0,2,8,0
0,0,0,4,1,9,0,0,5
0,0,0,0,8,0,0,7,9
"""


# =============================================================================
# main
# =============================================================================

def main(args: List[str] = None) -> None:
    """
    Command-line entry point.

    Args:
        args: command-line arguments; ``None`` means ``sys.argv[1:]``
    """
    parser = argparse.ArgumentParser(
        formatter_class=RawDescriptionArgumentDefaultsHelpFormatter,
        description=f"Solve Sudoku puzzles.\n{FORMAT_HELP}"
    )
    parser.add_argument(
        "--file", type=str, default=DEFAULT_PUZZLE_FILE,
        help="Puzzle filename to read. Must contain text in format as above.")
    parsed_args = parser.parse_args(args)

    grid = read_grid_file(parsed_args.file)
    print("Starting Board:")
    print(grid)
    print("Solving...")
    solver = SudokuSolver(grid)
    solver.solve()
    print("Solved Board:")
    print(grid)
    log.info(f"Search: {solver.stats}")
    sys.exit(EXIT_SUCCESS)


def cli() -> None:
    """
    Console-script entry point: sets up logging, then runs :func:`main`
    under :func:`run_guard`.
    """
    main_only_quicksetup_rootlogger(level=logging.INFO)
    run_guard(main)


# =============================================================================
# Command-line entry point
# =============================================================================

if __name__ == "__main__":
    cli()
