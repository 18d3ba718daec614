"""Constraint propagation solver with snapshot-and-restore backtracking."""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional

from .base_solver import BaseSolver
from ..core.board import SudokuBoard
from ..core.errors import SolveTimeoutError
from ..core.grid import CandidateGrid, Snapshot

logger = logging.getLogger(__name__)


class SolveState(Enum):
    """States of the top-level solve loop."""
    PROPAGATING = "propagating"
    CONTRADICTION = "contradiction"
    FILLED = "filled"
    STUCK = "stuck"


@dataclass
class _Trial:
    """One level of the explicit search stack."""
    index: int
    candidates: Iterator[int]
    snapshot: Optional[Snapshot] = None


class PropagationSolver(BaseSolver):
    """
    Solver alternating constraint propagation and depth-first search.

    Propagation (naked and hidden singles) runs to a fixed point. When it
    stalls on a board that is neither filled nor contradictory, the first
    open cell is tried with each of its candidates in ascending order. The
    whole grid is snapshotted before every trial and restored when the
    trial fails.

    Trials are logged at DEBUG level on this module's logger.
    """

    name = "Propagation+Backtracking"

    def __init__(self, use_explicit_stack: bool = False,
                 timeout_seconds: Optional[float] = None):
        """
        Initialize the solver.

        Args:
            use_explicit_stack: Run the search on an explicit stack instead
                                of recursion. Same trial order and result,
                                but no recursion limit for large boards.
            timeout_seconds: Give up once a solve has run this long. The
                             run is reported as unsolved with
                             ``extra["error"] == "Timeout"``.
        """
        super().__init__()
        self.use_explicit_stack = use_explicit_stack
        self.timeout_seconds = timeout_seconds
        self._deadline: Optional[float] = None
        if use_explicit_stack:
            self.name = "Propagation+ExplicitStack"
            self.stats.algorithm = self.name

    def _solve(self, board: SudokuBoard) -> Optional[SudokuBoard]:
        self.stats.extra["propagation_passes"] = 0
        self.stats.extra["max_depth"] = 0

        self._deadline = None
        if self.timeout_seconds is not None:
            self._deadline = time.perf_counter() + self.timeout_seconds

        grid = CandidateGrid.from_board(board)
        try:
            if self.use_explicit_stack:
                solved = self._solve_iterative(grid)
            else:
                solved = self._solve_recursive(grid, depth=0)
        except SolveTimeoutError:
            logger.warning("%s gave up after %.2fs", self.name, self.timeout_seconds)
            self.stats.extra["error"] = "Timeout"
            return None

        if solved:
            return grid.to_board()
        return None

    def _propagate(self, grid: CandidateGrid) -> SolveState:
        """Run propagation until the grid is filled, contradictory or stuck."""
        state = SolveState.PROPAGATING
        while state is SolveState.PROPAGATING:
            self._check_deadline()
            self.stats.iterations += 1

            if not grid.is_solvable():
                state = SolveState.CONTRADICTION
            elif grid.is_filled():
                state = SolveState.FILLED
            else:
                self.stats.extra["propagation_passes"] += 1
                if not grid.restrict():
                    state = SolveState.STUCK
        return state

    def _solve_recursive(self, grid: CandidateGrid, depth: int) -> bool:
        state = self._propagate(grid)
        if state is SolveState.STUCK:
            return self._assume_number(grid, depth)
        return state is SolveState.FILLED

    def _assume_number(self, grid: CandidateGrid, depth: int) -> bool:
        """Try each candidate of the first open cell, restoring on failure."""
        index = grid.first_empty()

        for value in grid.cells[index].possibilities():
            snapshot = grid.snapshot()
            self._assume(grid, index, value, depth + 1)

            if self._solve_recursive(grid, depth + 1):
                return True

            self._reject(grid, snapshot)

        return False

    def _solve_iterative(self, grid: CandidateGrid) -> bool:
        """Same search as ``_solve_recursive`` driven by a list of trials."""
        stack: List[_Trial] = []

        while True:
            state = self._propagate(grid)
            if state is SolveState.FILLED:
                return True

            if state is SolveState.STUCK:
                index = grid.first_empty()
                stack.append(_Trial(index, iter(grid.cells[index].possibilities())))
                failed = False
            else:
                failed = True

            while stack:
                trial = stack[-1]
                if failed:
                    self._reject(grid, trial.snapshot)
                    trial.snapshot = None

                value = next(trial.candidates, None)
                if value is None:
                    # Exhausted: the parent's current trial was wrong.
                    stack.pop()
                    failed = True
                    continue

                trial.snapshot = grid.snapshot()
                self._assume(grid, trial.index, value, len(stack))
                break
            else:
                return False

    def _check_deadline(self) -> None:
        if self._deadline is not None and time.perf_counter() > self._deadline:
            raise SolveTimeoutError(f"no solution within {self.timeout_seconds}s")

    def _assume(self, grid: CandidateGrid, index: int, value: int, depth: int) -> None:
        self._check_deadline()
        self.stats.nodes_explored += 1
        self.stats.extra["max_depth"] = max(self.stats.extra["max_depth"], depth)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s\nassume [row=%d, col=%d]=%d", grid,
                         grid.table.row(index), grid.table.col(index), value)

        grid.assign(index, value)

    def _reject(self, grid: CandidateGrid, snapshot: Snapshot) -> None:
        self.stats.backtracks += 1
        logger.debug("wrong assumption")
        grid.restore(snapshot)
