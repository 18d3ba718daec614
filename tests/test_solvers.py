"""Unit tests for the propagation solver."""

import logging
import time

import pytest
from sudoprop.core.board import SudokuBoard
from sudoprop.core.validator import is_correct, validate_solution
from sudoprop.solvers import PropagationSolver

from puzzles import (
    TEST_PUZZLE,
    TEST_SOLUTION,
    SINGLES_PUZZLE,
    MINIMAL_PUZZLE,
    MINIMAL_SOLUTION,
    SEARCH_17_PUZZLE,
    HARD_PUZZLE,
    DUPLICATE_CLUE_PUZZLE,
    DEAD_CELL_PUZZLE,
    EMPTY_4X4,
    pattern_solution,
)


@pytest.fixture(params=[False, True], ids=["recursive", "explicit-stack"])
def solver(request):
    return PropagationSolver(use_explicit_stack=request.param)


class TestPropagationSolver:
    """Tests for solving outcomes in both search modes."""

    def test_filled_grid_needs_no_work(self, solver):
        board = SudokuBoard.from_string(TEST_SOLUTION)
        solution, stats = solver.solve(board)

        assert stats.solved
        assert solution == board
        assert stats.nodes_explored == 0
        assert stats.extra["propagation_passes"] == 0

    def test_solve_puzzle(self, solver):
        """Test solving a known puzzle."""
        board = SudokuBoard.from_string(TEST_PUZZLE)
        solution, stats = solver.solve(board)

        assert stats.solved
        assert solution.to_string() == TEST_SOLUTION
        assert board.to_string() == TEST_PUZZLE  # input untouched

    def test_single_empty_cell(self, solver):
        board = SudokuBoard.from_string("0" + TEST_SOLUTION[1:])
        solution, stats = solver.solve(board)

        assert solution.to_string() == TEST_SOLUTION
        assert stats.extra["propagation_passes"] == 1
        assert stats.nodes_explored == 0

    def test_singles_puzzle_without_search(self, solver):
        board = SudokuBoard.from_string(SINGLES_PUZZLE)
        solution, stats = solver.solve(board)

        assert stats.solved
        assert stats.nodes_explored == 0
        assert validate_solution(board, solution)

    def test_minimal_puzzle_by_singles(self, solver):
        board = SudokuBoard.from_string(MINIMAL_PUZZLE)
        solution, stats = solver.solve(board)

        assert stats.solved
        assert validate_solution(board, solution)
        assert solution.to_string() == MINIMAL_SOLUTION
        assert stats.nodes_explored == 0

    def test_minimal_puzzle_needs_search(self, solver):
        board = SudokuBoard.from_string(SEARCH_17_PUZZLE)
        solution, stats = solver.solve(board)

        assert stats.solved
        assert validate_solution(board, solution)
        assert stats.nodes_explored >= 1

    def test_duplicate_clues_fail_immediately(self, solver):
        board = SudokuBoard.from_string(DUPLICATE_CLUE_PUZZLE)
        solution, stats = solver.solve(board)

        assert solution is None
        assert not stats.solved
        assert stats.iterations == 1
        assert stats.nodes_explored == 0

    def test_dead_cell_fails(self, solver):
        solution, stats = solver.solve(SudokuBoard.from_string(DEAD_CELL_PUZZLE))
        assert solution is None
        assert not stats.solved

    def test_empty_4x4_grid(self, solver):
        solution, stats = solver.solve(SudokuBoard.from_string(EMPTY_4X4))

        assert stats.solved
        assert is_correct(solution)
        assert stats.nodes_explored >= 1

    def test_empty_9x9_grid(self, solver):
        solution, stats = solver.solve(SudokuBoard(9))

        assert stats.solved
        assert is_correct(solution)
        # First empty cell, smallest candidate first
        assert solution.to_string().startswith("123456789")

    def test_16x16_puzzle(self, solver):
        full = pattern_solution(4)
        puzzle = "".join("0" if i % 3 == 0 else c for i, c in enumerate(full))
        board = SudokuBoard.from_string(puzzle)

        solution, stats = solver.solve(board)

        assert stats.solved
        assert validate_solution(board, solution)

    def test_stats_collected(self, solver):
        """Test that stats are collected."""
        solution, stats = solver.solve(SudokuBoard.from_string(EMPTY_4X4))

        assert stats.time_seconds > 0
        assert stats.iterations > 0
        assert stats.memory_bytes > 0
        assert stats.extra["max_depth"] >= 1
        assert stats.to_dict()["algorithm"] == solver.name


class TestSearchModes:
    """The explicit stack must replay the recursive search exactly."""

    @pytest.mark.parametrize("puzzle", [EMPTY_4X4, HARD_PUZZLE, SEARCH_17_PUZZLE, "0" * 81])
    def test_same_result_and_trial_counts(self, puzzle):
        board = SudokuBoard.from_string(puzzle)
        recursive, rec_stats = PropagationSolver().solve(board)
        iterative, it_stats = PropagationSolver(use_explicit_stack=True).solve(board)

        assert recursive == iterative
        assert rec_stats.nodes_explored == it_stats.nodes_explored
        assert rec_stats.backtracks == it_stats.backtracks
        assert rec_stats.iterations == it_stats.iterations
        assert rec_stats.extra == it_stats.extra

    def test_names(self):
        assert PropagationSolver().stats.algorithm == "Propagation+Backtracking"
        assert PropagationSolver(use_explicit_stack=True).name == "Propagation+ExplicitStack"


class SnapshotCheckingSolver(PropagationSolver):
    """Records the grid before each trial and compares it after each rollback."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.before_trial = []
        self.rollbacks = 0

    def _assume(self, grid, index, value, depth):
        self.before_trial.append([cell.copy() for cell in grid.cells])
        super()._assume(grid, index, value, depth)

    def _reject(self, grid, snapshot):
        super()._reject(grid, snapshot)
        assert grid.cells == self.before_trial.pop()
        self.rollbacks += 1


class TestBacktracking:
    """Tests for rollback after failed trials."""

    @pytest.mark.parametrize("explicit", [False, True])
    def test_failed_trial_restores_grid(self, explicit):
        solver = SnapshotCheckingSolver(use_explicit_stack=explicit)
        solution, stats = solver.solve(SudokuBoard.from_string(HARD_PUZZLE))

        assert stats.solved
        assert stats.backtracks > 0
        assert solver.rollbacks == stats.backtracks
        assert len(solver.before_trial) == stats.nodes_explored - stats.backtracks


class TestDiagnostics:
    """Tests for the trial log."""

    def test_trials_are_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="sudoprop.solvers.propagation_solver")
        PropagationSolver().solve(SudokuBoard.from_string(EMPTY_4X4))

        messages = [r.getMessage() for r in caplog.records]
        assert any(m.endswith("assume [row=0, col=0]=1") for m in messages)
        assert messages[0].startswith("+-----+-----+")

    def test_logging_does_not_change_result(self, caplog):
        board = SudokuBoard.from_string(HARD_PUZZLE)
        quiet, quiet_stats = PropagationSolver().solve(board)

        caplog.set_level(logging.DEBUG, logger="sudoprop.solvers.propagation_solver")
        traced, traced_stats = PropagationSolver().solve(board)

        assert quiet == traced
        assert quiet_stats.backtracks == traced_stats.backtracks > 0
        assert any(r.getMessage() == "wrong assumption" for r in caplog.records)


class TestTimeout:
    """Tests for the per-solve time budget."""

    @pytest.mark.parametrize("explicit", [False, True])
    def test_gives_up_on_slow_board(self, explicit):
        solver = PropagationSolver(use_explicit_stack=explicit, timeout_seconds=0.05)

        start = time.perf_counter()
        solution, stats = solver.solve(SudokuBoard(16))
        elapsed = time.perf_counter() - start

        assert elapsed < 1.0
        assert solution is None
        assert not stats.solved
        assert stats.extra["error"] == "Timeout"

    def test_expired_budget_stops_before_first_pass(self):
        solver = PropagationSolver(timeout_seconds=0.0)
        solution, stats = solver.solve(SudokuBoard.from_string(TEST_PUZZLE))

        assert solution is None
        assert stats.iterations == 0
        assert stats.extra["error"] == "Timeout"

    def test_generous_budget_changes_nothing(self):
        solution, stats = PropagationSolver(timeout_seconds=60.0).solve(
            SudokuBoard.from_string(HARD_PUZZLE)
        )

        assert stats.solved
        assert "error" not in stats.extra

    def test_budget_is_per_solve(self):
        solver = PropagationSolver(timeout_seconds=0.0)
        solver.solve(SudokuBoard.from_string(TEST_PUZZLE))

        solver.timeout_seconds = None
        solution, stats = solver.solve(SudokuBoard.from_string(TEST_PUZZLE))

        assert solution.to_string() == TEST_SOLUTION
        assert "error" not in stats.extra


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
