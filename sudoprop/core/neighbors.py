"""Precomputed row, column and box index groupings for a board size."""

from __future__ import annotations
from enum import Enum
from functools import lru_cache
from typing import Iterator, Tuple

import numpy as np


class UnitKind(Enum):
    """The three kinds of unit every cell belongs to."""
    ROW = "row"
    COL = "col"
    BOX = "box"


Unit = Tuple[int, ...]


class NeighborhoodTable:
    """
    Linear cell indices grouped by row, column and box.

    For a board with boxes of ``box_size`` x ``box_size`` cells the grid is
    ``size = box_size ** 2`` cells wide, and each unit lists the ``size``
    indices (row-major) of the cells it contains, the cell itself included.
    Tables are read-only once built; use ``get_neighborhood_table`` to share
    one instance per box size.
    """

    def __init__(self, box_size: int):
        if box_size < 1:
            raise ValueError(f"Box size must be positive, got {box_size}")

        self.box_size = box_size
        self.size = box_size * box_size
        self.cell_count = self.size * self.size

        indices = np.arange(self.cell_count).reshape(self.size, self.size)
        boxes = (
            indices.reshape(box_size, box_size, box_size, box_size)
            .transpose(0, 2, 1, 3)
            .reshape(self.size, self.size)
        )

        self._units = {
            UnitKind.ROW: self._freeze(indices),
            UnitKind.COL: self._freeze(indices.T),
            UnitKind.BOX: self._freeze(boxes),
        }

    @staticmethod
    def _freeze(table: np.ndarray) -> Tuple[Unit, ...]:
        return tuple(tuple(int(i) for i in unit) for unit in table)

    def row(self, index: int) -> int:
        """Row number of a linear cell index."""
        return index // self.size

    def col(self, index: int) -> int:
        """Column number of a linear cell index."""
        return index % self.size

    def box(self, index: int) -> int:
        """Box number of a linear cell index, counted row-major over boxes."""
        return (
            self.row(index) // self.box_size * self.box_size
            + self.col(index) // self.box_size
        )

    def unit(self, kind: UnitKind, number: int) -> Unit:
        """Indices of the given row, column or box."""
        return self._units[kind][number]

    def units_of(self, index: int) -> Tuple[Unit, Unit, Unit]:
        """The row, column and box containing a cell, in that order."""
        return (
            self._units[UnitKind.ROW][self.row(index)],
            self._units[UnitKind.COL][self.col(index)],
            self._units[UnitKind.BOX][self.box(index)],
        )

    def all_units(self) -> Iterator[Tuple[UnitKind, int, Unit]]:
        """Yield (kind, number, indices) for every unit on the board."""
        for kind in UnitKind:
            for number, unit in enumerate(self._units[kind]):
                yield kind, number, unit

    def __repr__(self) -> str:
        return f"NeighborhoodTable(box_size={self.box_size})"


@lru_cache(maxsize=None)
def get_neighborhood_table(box_size: int) -> NeighborhoodTable:
    """Shared table for a box size, built on first use."""
    return NeighborhoodTable(box_size)
