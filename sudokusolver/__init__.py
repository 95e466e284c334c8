"""
Sudoku solver: naked-single deduction plus backtracking.
"""
