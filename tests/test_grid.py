"""Tests for candidate propagation and the consistency checks."""

import pytest
from sudoprop.core.board import SudokuBoard
from sudoprop.core.errors import ContractViolationError
from sudoprop.core.grid import CandidateGrid
from sudoprop.core.validator import is_correct

from puzzles import (
    TEST_PUZZLE,
    TEST_SOLUTION,
    MINIMAL_PUZZLE,
    SINGLES_PUZZLE,
    DUPLICATE_CLUE_PUZZLE,
    DEAD_CELL_PUZZLE,
    EMPTY_4X4,
)


def load(text: str) -> CandidateGrid:
    return CandidateGrid.from_board(SudokuBoard.from_string(text))


def candidate_view(grid: CandidateGrid):
    """Per-cell set of values still possible, fixed cells included."""
    return [
        set(cell.possibilities()) if cell.is_empty() else {cell.number()}
        for cell in grid.cells
    ]


class TestLoading:
    """Tests for building a grid from clues."""

    def test_clues_eliminate_neighbors(self):
        grid = load(TEST_PUZZLE)
        # Row 0 holds 5, 3 and 7; column 2 holds 8; box 0 holds 6 and 9
        assert grid.cells[2].possibilities() == [1, 2, 4]

    def test_values_round_trip(self):
        grid = load(TEST_PUZZLE)
        assert grid.to_board().to_string() == TEST_PUZZLE

    def test_wrong_cell_count(self):
        with pytest.raises(ValueError):
            CandidateGrid.from_values([0] * 80, 3)


class TestChecks:
    """Tests for is_filled, is_solvable and first_empty."""

    def test_filled_grid(self):
        grid = load(TEST_SOLUTION)
        assert grid.is_filled()
        assert grid.is_solvable()
        assert grid.first_empty() is None

    def test_duplicate_clues_are_a_contradiction(self):
        grid = load(DUPLICATE_CLUE_PUZZLE)
        assert not grid.is_solvable()

    def test_cell_without_candidates_is_a_contradiction(self):
        grid = load(DEAD_CELL_PUZZLE)
        assert grid.cells[8].is_inconsistent()
        assert not grid.is_solvable()

    def test_first_empty(self):
        assert load(TEST_PUZZLE).first_empty() == 2


class TestRestrict:
    """Tests for one propagation pass."""

    def test_naked_single(self):
        grid = load("0" + TEST_SOLUTION[1:])
        assert grid.cells[0].is_only_one()

        assert grid.restrict()
        assert grid.is_filled()
        assert grid.to_board().to_string() == TEST_SOLUTION

    def test_hidden_single(self):
        grid = CandidateGrid.from_values([0] * 16, 2)
        grid.cells[0].disable(4)
        for index in (1, 2, 3):
            grid.cells[index].disable(3)
        assert grid.cells[0].possibilities() == [1, 2, 3]

        assert grid.restrict()
        assert grid.cells[0].number() == 3

    def test_hidden_single_checks_column_and_box(self):
        grid = CandidateGrid.from_values([0] * 16, 2)
        # Only cell 5 of column 1 can take 4; its row stays fully open
        for index in (1, 9, 13):
            grid.cells[index].disable(4)
        grid.restrict()
        assert grid.cells[5].number() == 4

    def test_hidden_single_in_box_only(self):
        grid = CandidateGrid.from_values([0] * 16, 2)
        for index in (0, 1, 4):
            grid.cells[index].disable(4)
        # Row 1 and column 1 still offer 4 elsewhere, so only box 0 forces it
        assert all(grid.cells[index].is_possible(4) for index in (6, 7, 9, 13))

        assert grid.restrict()
        assert grid.cells[5].number() == 4
        assert all(grid.cells[index].is_empty() for index in range(5))

    def test_stable_grid_is_unchanged(self):
        grid = load(EMPTY_4X4)
        before = grid.snapshot()

        assert not grid.restrict()
        assert grid.cells == before[0]

    def test_candidates_only_shrink(self):
        grid = load(MINIMAL_PUZZLE)
        previous = candidate_view(grid)

        while grid.is_solvable() and grid.restrict():
            current = candidate_view(grid)
            for before, after in zip(previous, current):
                assert after <= before
            previous = current

    def test_singles_alone_can_finish_a_puzzle(self):
        grid = load(SINGLES_PUZZLE)
        while grid.restrict():
            pass
        assert grid.is_filled()
        assert is_correct(grid.to_board())


class TestSnapshots:
    """Tests for snapshot and restore."""

    def test_restore_is_exact(self):
        grid = load(MINIMAL_PUZZLE)
        snapshot = grid.snapshot()
        before = [cell.copy() for cell in grid.cells]

        index = grid.first_empty()
        grid.assign(index, grid.cells[index].possibilities()[0])
        while grid.is_solvable() and grid.restrict():
            pass
        assert grid.cells != before

        grid.restore(snapshot)
        assert grid.cells == before
        assert grid.is_solvable()

    def test_snapshot_is_independent(self):
        grid = load(EMPTY_4X4)
        snapshot = grid.snapshot()
        grid.assign(0, 1)
        assert snapshot[0][0].is_empty()
        assert snapshot[0][1].is_possible(1)

    def test_assign_requires_candidate(self):
        grid = load(TEST_PUZZLE)
        with pytest.raises(ContractViolationError):
            grid.assign(2, 5)
