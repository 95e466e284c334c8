"""
Shared fixtures: sample puzzles with their known solutions.
"""

import os
from typing import List

import pytest

from sudokusolver.common import N
from sudokusolver.grid import Box, Grid, read_grid_file
from sudokusolver.sudoku import PUZZLE_DIR

EASY_FILE = os.path.join(PUZZLE_DIR, "easy.txt")
EVIL_FILE = os.path.join(PUZZLE_DIR, "sudoku-com-evil.txt")

EASY_SOLUTION = [
    [5, 3, 4, 6, 7, 8, 9, 1, 2],
    [6, 7, 2, 1, 9, 5, 3, 4, 8],
    [1, 9, 8, 3, 4, 2, 5, 6, 7],
    [8, 5, 9, 7, 6, 1, 4, 2, 3],
    [4, 2, 6, 8, 5, 3, 7, 9, 1],
    [7, 1, 3, 9, 2, 4, 8, 5, 6],
    [9, 6, 1, 5, 3, 7, 2, 8, 4],
    [2, 8, 7, 4, 1, 9, 6, 3, 5],
    [3, 4, 5, 2, 8, 6, 1, 7, 9],
]

EVIL_SOLUTION = [
    [8, 1, 2, 7, 5, 3, 6, 4, 9],
    [9, 4, 3, 6, 8, 2, 1, 7, 5],
    [6, 7, 5, 4, 9, 1, 2, 8, 3],
    [1, 5, 4, 2, 3, 7, 8, 9, 6],
    [3, 6, 9, 8, 4, 5, 7, 2, 1],
    [2, 8, 7, 1, 6, 9, 5, 3, 4],
    [5, 2, 1, 9, 7, 4, 3, 6, 8],
    [4, 3, 8, 5, 2, 6, 9, 1, 7],
    [7, 9, 6, 3, 1, 8, 4, 5, 2],
]

# Row 0 needs 1, 2 and 3 in its first three cells, but box 0 already has a 3.
# No cell is forced and none is empty of candidates, so only guessing can show
# that there is no solution.
UNSOLVABLE = [
    [0, 0, 0, 4, 5, 6, 7, 8, 9],
    [3, 0, 0, 0, 0, 0, 0, 0, 0],
    [0] * N,
    [0] * N,
    [0] * N,
    [0] * N,
    [0] * N,
    [0] * N,
    [0] * N,
]

# Cell (0, 8) can't be 1-8 (its row) or 9 (its column).
ZERO_CANDIDATE = [
    [1, 2, 3, 4, 5, 6, 7, 8, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 9],
    [0] * N,
    [0] * N,
    [0] * N,
    [0] * N,
    [0] * N,
    [0] * N,
    [0] * N,
]


def is_permutation_grid(rows: List[List[int]]) -> bool:
    """
    Every row, column and box is exactly {1, ..., 9}. Deliberately
    independent of :meth:`Grid.is_solved`.
    """
    digits = set(range(1, N + 1))
    units = [list(row) for row in rows]
    units += [[rows[r][c] for r in range(N)] for c in range(N)]
    units += [[rows[r][c] for r, c in Box(b).gen_cells()] for b in range(N)]
    return all(len(u) == N and set(u) == digits for u in units)


@pytest.fixture
def easy_grid() -> Grid:
    return read_grid_file(EASY_FILE)


@pytest.fixture
def evil_grid() -> Grid:
    return read_grid_file(EVIL_FILE)


@pytest.fixture
def unsolvable_grid() -> Grid:
    return Grid(UNSOLVABLE)


@pytest.fixture
def zero_candidate_grid() -> Grid:
    return Grid(ZERO_CANDIDATE)
