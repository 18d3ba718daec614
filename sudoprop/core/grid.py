"""Candidate grid: the propagation engine and its consistency checks."""

from __future__ import annotations
from typing import List, Optional, Sequence, Tuple

from .board import SudokuBoard
from .cell import Cell
from .neighbors import NeighborhoodTable, Unit, get_neighborhood_table

Snapshot = Tuple[List[Cell], bool]


class CandidateGrid:
    """
    The cells of one puzzle together with their candidate sets.

    Propagation only ever commits values that are logically forced:
    naked singles (one candidate left) and hidden singles (no other open
    cell in the row, column or box can take the value).
    """

    def __init__(self, cells: List[Cell], table: NeighborhoodTable):
        if len(cells) != table.cell_count:
            raise ValueError(f"Expected {table.cell_count} cells, got {len(cells)}")
        self.cells = cells
        self.table = table
        self.size = table.size
        self.box_size = table.box_size
        self._conflict = False

    @classmethod
    def from_values(cls, values: Sequence[int], box_size: int) -> CandidateGrid:
        """
        Load a row-major value sequence, 0 meaning empty.

        Every clue eliminates its value from its neighbors once all cells
        are in place.
        """
        table = get_neighborhood_table(box_size)
        cells = [Cell.from_value(v, table.size) for v in values]
        grid = cls(cells, table)
        for index, cell in enumerate(cells):
            if not cell.is_empty():
                grid.update_possibilities(index)
        return grid

    @classmethod
    def from_board(cls, board: SudokuBoard) -> CandidateGrid:
        return cls.from_values(board.values(), board.box_size)

    def values(self) -> List[int]:
        return [0 if cell.is_empty() else cell.number() for cell in self.cells]

    def to_board(self) -> SudokuBoard:
        return SudokuBoard.from_values(self.values(), self.size)

    # --- propagation -----------------------------------------------------

    def update_possibilities(self, index: int) -> None:
        """Remove the value of a fixed cell from its row, column and box."""
        number = self.cells[index].number()

        for unit in self.table.units_of(index):
            for nbi in unit:
                neighbor = self.cells[nbi]
                if nbi != index and not neighbor.is_empty() and neighbor.number() == number:
                    self._conflict = True
                neighbor.disable(number)

    def assign(self, index: int, value: int) -> None:
        """Fix a cell to one of its candidates and propagate the elimination."""
        self.cells[index].set_number(value)
        self.update_possibilities(index)

    def _is_hidden_in(self, unit: Unit, index: int, number: int) -> bool:
        """True if no other open cell of the unit can take number."""
        for nbi in unit:
            cell = self.cells[nbi]
            if nbi != index and cell.is_empty() and cell.is_possible(number):
                return False
        return True

    def restrict(self) -> bool:
        """
        Run one pass of naked and hidden singles over the open cells.

        Cells are visited in index order and candidates in ascending order;
        the first forced candidate of a cell is committed.

        Returns:
            True if any cell was committed during the pass.
        """
        result = False
        for index, cell in enumerate(self.cells):
            if not cell.is_empty():
                continue

            row, col, box = self.table.units_of(index)
            for number in cell.possibilities():
                if (cell.is_only_one()
                        or self._is_hidden_in(row, index, number)
                        or self._is_hidden_in(col, index, number)
                        or self._is_hidden_in(box, index, number)):
                    self.assign(index, number)
                    result = True
                    break

        return result

    # --- checks ----------------------------------------------------------

    def is_filled(self) -> bool:
        return not any(cell.is_empty() for cell in self.cells)

    def is_solvable(self) -> bool:
        """False once an open cell ran out of candidates or two clues clash."""
        if self._conflict:
            return False
        return not any(cell.is_inconsistent() for cell in self.cells)

    def first_empty(self) -> Optional[int]:
        for index, cell in enumerate(self.cells):
            if cell.is_empty():
                return index
        return None

    # --- snapshots -------------------------------------------------------

    def snapshot(self) -> Snapshot:
        """Full copy of the grid state for a later ``restore``."""
        return [cell.copy() for cell in self.cells], self._conflict

    def restore(self, snapshot: Snapshot) -> None:
        cells, conflict = snapshot
        self.cells = [cell.copy() for cell in cells]
        self._conflict = conflict

    def __str__(self) -> str:
        return str(self.to_board())

    def __repr__(self) -> str:
        open_cells = sum(1 for cell in self.cells if cell.is_empty())
        return f"CandidateGrid(size={self.size}, open={open_cells})"
