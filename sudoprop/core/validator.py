"""Validation utilities for solved Sudoku boards."""

from __future__ import annotations
import numpy as np
from typing import TYPE_CHECKING, List, Tuple

from .neighbors import UnitKind, get_neighborhood_table

if TYPE_CHECKING:
    from .board import SudokuBoard


def is_correct(board: SudokuBoard) -> bool:
    """
    Check that every row, column and box is a permutation of 1..size.

    This looks only at the final values, independently of whatever
    bookkeeping produced them.

    Args:
        board: The board to check.

    Returns:
        True if every unit holds each value exactly once.
    """
    table = get_neighborhood_table(board.box_size)
    values = board.grid.ravel()
    expected = np.arange(1, board.size + 1)

    for _kind, _number, unit in table.all_units():
        if not np.array_equal(np.sort(values[list(unit)]), expected):
            return False
    return True


def find_conflicts(board: SudokuBoard) -> List[Tuple[UnitKind, int, int]]:
    """
    List values that appear more than once among the filled cells of a unit.

    Returns:
        (unit kind, unit number, repeated value) triples, in unit order.
    """
    table = get_neighborhood_table(board.box_size)
    values = board.grid.ravel()
    conflicts = []

    for kind, number, unit in table.all_units():
        unit_values = values[list(unit)]
        counts = np.bincount(unit_values, minlength=board.size + 1)
        for value in np.flatnonzero(counts[1:] > 1) + 1:
            conflicts.append((kind, number, int(value)))
    return conflicts


def validate_solution(puzzle: SudokuBoard, solution: SudokuBoard) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Args:
        puzzle: The original puzzle.
        solution: The proposed solution.

    Returns:
        True if solution is valid and matches puzzle clues.
    """
    if puzzle.size != solution.size:
        return False

    clues = puzzle.grid != 0
    if not np.array_equal(puzzle.grid[clues], solution.grid[clues]):
        return False

    return is_correct(solution)
