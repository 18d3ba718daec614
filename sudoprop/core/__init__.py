"""Core module for Sudoku board representation, candidate tracking and validation."""

from .board import SudokuBoard
from .cell import Cell
from .errors import SudokuError, ParseError, ContractViolationError, SolveTimeoutError
from .grid import CandidateGrid
from .neighbors import UnitKind, NeighborhoodTable, get_neighborhood_table
from .validator import is_correct, find_conflicts, validate_solution

__all__ = [
    "SudokuBoard",
    "Cell",
    "CandidateGrid",
    "UnitKind",
    "NeighborhoodTable",
    "get_neighborhood_table",
    "is_correct",
    "find_conflicts",
    "validate_solution",
    "SudokuError",
    "ParseError",
    "ContractViolationError",
    "SolveTimeoutError",
]
