"""Sudoku board representation: parsing and rendering of value grids."""

from __future__ import annotations
import numpy as np
from typing import List, Optional, Sequence

from .errors import ParseError

EMPTY_SYMBOLS = ("0", ".")


def symbol_to_value(symbol: str) -> int:
    """
    Convert one grid symbol to its value.

    0 or . for empty, 1-9 for digits, A.. for 10 and up.
    """
    if symbol in EMPTY_SYMBOLS:
        return 0
    if symbol.isascii() and symbol.isdigit():
        return int(symbol)
    if symbol.isalpha() and symbol.isascii():
        return ord(symbol.upper()) - ord("A") + 10
    raise ParseError(f"Invalid symbol {symbol!r}")


def value_to_symbol(value: int, empty: str = "0") -> str:
    """Inverse of ``symbol_to_value``."""
    if value == 0:
        return empty
    if value <= 9:
        return str(value)
    return chr(ord("A") + value - 10)


class SudokuBoard:
    """
    Represents a Sudoku board of configurable size.

    Standard Sudoku is 9x9 with 3x3 boxes.
    Supports any square box size: 4x4 (2x2 boxes), 16x16 (4x4 boxes),
    25x25 (5x5 boxes).
    """

    def __init__(self, size: int = 9, grid: Optional[np.ndarray] = None):
        """
        Initialize a Sudoku board.

        Args:
            size: Board size (4, 9, 16, 25, ...). Must be a perfect square.
            grid: Optional initial grid. If None, creates empty board.
        """
        box_size = int(round(np.sqrt(size)))
        if size < 1 or box_size * box_size != size:
            raise ValueError(f"Size must be a perfect square, got {size}")

        self.size = size
        self.box_size = box_size

        if grid is not None:
            if grid.shape != (size, size):
                raise ValueError(f"Grid shape must be ({size}, {size})")
            self.grid = grid.copy().astype(np.int32)
        else:
            self.grid = np.zeros((size, size), dtype=np.int32)

    def copy(self) -> SudokuBoard:
        """Create a deep copy of the board."""
        new_board = SudokuBoard(self.size)
        new_board.grid = self.grid.copy()
        return new_board

    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col). 0 means empty."""
        return int(self.grid[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        """Set value at position (row, col). Use 0 to clear."""
        if value < 0 or value > self.size:
            raise ValueError(f"Value must be 0-{self.size}, got {value}")
        self.grid[row, col] = value

    def is_empty(self, row: int, col: int) -> bool:
        """Check if cell is empty (value is 0)."""
        return self.grid[row, col] == 0

    def get_row(self, row: int) -> np.ndarray:
        """Get all values in a row."""
        return self.grid[row, :]

    def get_col(self, col: int) -> np.ndarray:
        """Get all values in a column."""
        return self.grid[:, col]

    def get_box(self, row: int, col: int) -> np.ndarray:
        """Get all values in the box containing (row, col)."""
        box_row = (row // self.box_size) * self.box_size
        box_col = (col // self.box_size) * self.box_size
        return self.grid[box_row:box_row + self.box_size,
                         box_col:box_col + self.box_size].flatten()

    def values(self) -> List[int]:
        """Row-major list of all cell values, 0 for empty cells."""
        return [int(v) for v in self.grid.ravel()]

    def count_empty(self) -> int:
        """Count the number of empty cells."""
        return int(np.sum(self.grid == 0))

    def count_filled(self) -> int:
        """Count the number of filled cells."""
        return int(np.sum(self.grid != 0))

    def is_complete(self) -> bool:
        """Check if all cells are filled."""
        return self.count_empty() == 0

    def is_valid(self) -> bool:
        """
        Check if the current board state is valid.
        Does not check if solution is complete, only if no conflicts exist.
        """
        units = [self.get_row(i) for i in range(self.size)]
        units += [self.get_col(j) for j in range(self.size)]
        units += [
            self.get_box(box_row, box_col)
            for box_row in range(0, self.size, self.box_size)
            for box_col in range(0, self.size, self.box_size)
        ]

        for unit in units:
            non_zero = unit[unit != 0]
            if len(non_zero) != len(set(non_zero.tolist())):
                return False

        return True

    def is_solved(self) -> bool:
        """Check if the puzzle is completely and correctly solved."""
        return self.is_complete() and self.is_valid()

    def to_string(self) -> str:
        """
        Convert board to a compact string representation.
        Uses 0 for empty cells, 1-9 for digits, A.. for 10 and up.
        """
        return "".join(value_to_symbol(int(v)) for v in self.grid.ravel())

    @classmethod
    def from_values(cls, values: Sequence[int], size: Optional[int] = None) -> SudokuBoard:
        """Create a board from a flat row-major sequence of values."""
        size = size if size is not None else _infer_size(len(values))
        if len(values) != size * size:
            raise ParseError(f"Expected {size * size} cells, got {len(values)}")

        for value in values:
            if value < 0 or value > size:
                raise ParseError(f"Value {value} out of range 0-{size}")

        return cls(size, np.array(values, dtype=np.int32).reshape(size, size))

    @classmethod
    def from_string(cls, s: str, size: Optional[int] = None) -> SudokuBoard:
        """
        Create a board from a string representation.

        Args:
            s: Cell symbols in row-major order. Whitespace is ignored.
               0 or . for empty, 1-9 for values, A-G for 10-16 and so on.
            size: Board size. Inferred from the number of symbols if omitted.
        """
        symbols = "".join(s.split())
        return cls.from_values([symbol_to_value(c) for c in symbols], size)

    @classmethod
    def from_file(cls, path: str, size: Optional[int] = None) -> SudokuBoard:
        """Read a board written in the ``from_string`` format."""
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_string(f.read(), size)

    @classmethod
    def from_2d_list(cls, data: List[List[int]]) -> SudokuBoard:
        """Create a board from a 2D list."""
        arr = np.array(data, dtype=np.int32)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
            raise ParseError(f"Expected a square grid, got shape {arr.shape}")
        return cls.from_values([int(v) for v in arr.ravel()], arr.shape[0])

    def __str__(self) -> str:
        """Pretty-print the board."""
        lines = []
        horizontal_sep = '+' + (('-' * (self.box_size * 2 + 1)) + '+') * self.box_size

        for i in range(self.size):
            if i % self.box_size == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for j in range(self.size):
                row_str += ' ' + value_to_symbol(int(self.grid[i, j]), empty='.')

                if (j + 1) % self.box_size == 0:
                    row_str += ' |'

            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"SudokuBoard(size={self.size}, filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SudokuBoard):
            return False
        return self.size == other.size and np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash(self.to_string())


def _infer_size(cell_count: int) -> int:
    """Board side for a cell count, which must be a fourth power."""
    size = int(round(np.sqrt(cell_count)))
    box_size = int(round(np.sqrt(size)))
    if cell_count == 0 or size * size != cell_count or box_size * box_size != size:
        raise ParseError(f"Cannot build a square board from {cell_count} cells")
    return size
