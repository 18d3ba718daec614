"""Single grid cell holding either a fixed value or a set of candidates."""

from __future__ import annotations
from typing import List, Optional, Set

from .errors import ContractViolationError


class Cell:
    """
    A cell is either fixed to one value or open with a candidate set.

    Candidates only ever shrink. Once a value is set the cell is fixed
    and stays fixed; an open cell with no candidates left is inconsistent.
    """

    __slots__ = ("size", "_value", "_candidates")

    def __init__(self, size: int, value: int = 0, candidates: Optional[Set[int]] = None):
        """
        Create a cell.

        Args:
            size: Largest allowed value (9 for classic Sudoku).
            value: Fixed value, or 0 for an open cell.
            candidates: Candidate set of an open cell. Defaults to 1..size.
        """
        if value < 0 or value > size:
            raise ValueError(f"Value must be 0-{size}, got {value}")

        self.size = size
        self._value = value
        if value:
            self._candidates: Set[int] = set()
        elif candidates is None:
            self._candidates = set(range(1, size + 1))
        else:
            self._candidates = set(candidates)

    @classmethod
    def open(cls, size: int) -> Cell:
        """Create an open cell where every value is still possible."""
        return cls(size)

    @classmethod
    def fixed(cls, value: int, size: int) -> Cell:
        """Create a cell fixed to value."""
        if value < 1:
            raise ValueError(f"Fixed value must be 1-{size}, got {value}")
        return cls(size, value)

    @classmethod
    def from_value(cls, value: int, size: int) -> Cell:
        """Create a cell from a grid value, 0 meaning open."""
        return cls(size, int(value))

    def is_empty(self) -> bool:
        """True while the cell has no fixed value."""
        return self._value == 0

    def number(self) -> int:
        """Return the fixed value. Only valid for a non-empty cell."""
        if self._value == 0:
            raise ContractViolationError("number() called on an open cell")
        return self._value

    def possibilities(self) -> List[int]:
        """Remaining candidates in ascending order."""
        return sorted(self._candidates)

    def is_possible(self, value: int) -> bool:
        return value in self._candidates

    def is_only_one(self) -> bool:
        return len(self._candidates) == 1

    def is_inconsistent(self) -> bool:
        """An open cell that ran out of candidates."""
        return self._value == 0 and not self._candidates

    def disable(self, value: int) -> None:
        """Remove value from the candidates. No-op for fixed cells."""
        self._candidates.discard(value)

    def set_number(self, value: int) -> None:
        """Fix the cell to value, which must still be a candidate."""
        if self._value:
            raise ContractViolationError(
                f"cell already fixed to {self._value}, cannot set {value}"
            )
        if value not in self._candidates:
            raise ContractViolationError(
                f"{value} is not a candidate (candidates: {self.possibilities()})"
            )
        self._value = value
        self._candidates = set()

    def copy(self) -> Cell:
        return Cell(self.size, self._value, self._candidates)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return (
            self.size == other.size
            and self._value == other._value
            and self._candidates == other._candidates
        )

    def __repr__(self) -> str:
        if self._value:
            return f"Cell(fixed={self._value})"
        return f"Cell(open={self.possibilities()})"
