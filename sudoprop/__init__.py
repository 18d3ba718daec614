"""Generalized Sudoku solver: candidate propagation with backtracking search."""

from .core import SudokuBoard, CandidateGrid, is_correct, validate_solution, ParseError
from .solvers import PropagationSolver, SolverStats

__version__ = "1.0.0"

__all__ = [
    "SudokuBoard",
    "CandidateGrid",
    "PropagationSolver",
    "SolverStats",
    "is_correct",
    "validate_solution",
    "ParseError",
]
