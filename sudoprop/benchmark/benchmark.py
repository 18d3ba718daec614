"""Benchmarking framework for the propagation solver."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
import json
import logging
import os

from tqdm import tqdm

from ..core.board import SudokuBoard
from ..core.validator import validate_solution
from ..solvers import BaseSolver, PropagationSolver

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    puzzle_id: int
    group: str
    algorithm: str
    solved: bool
    time_seconds: float
    memory_bytes: int
    iterations: int
    backtracks: int
    nodes_explored: int
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "group": self.group,
            "algorithm": self.algorithm,
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            **self.extra
        }


def load_puzzle_file(path: str) -> List[SudokuBoard]:
    """
    Read one puzzle per line. Blank lines and lines starting with # are skipped.
    """
    puzzles = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#"):
                puzzles.append(SudokuBoard.from_string(line))
    return puzzles


class Benchmark:
    """
    Runs solvers over groups of puzzles and collects performance metrics.

    Groups are named after the puzzle file they were loaded from.
    """

    def __init__(
        self,
        puzzle_files: Optional[List[str]] = None,
        puzzles: Optional[Dict[str, List[SudokuBoard]]] = None,
        solvers: Optional[Dict[str, BaseSolver]] = None,
        timeout_seconds: float = 60.0,
    ):
        """
        Initialize the benchmark.

        Args:
            puzzle_files: Files to load puzzles from, one group per file.
            puzzles: Dict of group_name -> puzzles, merged with the files.
            solvers: Dict of solver_name -> solver_instance
                     (default: recursive and explicit-stack search).
            timeout_seconds: Maximum time per puzzle per solver.
        """
        self.timeout_seconds = timeout_seconds

        if solvers is None:
            self.solvers = {
                "Recursive": PropagationSolver(),
                "ExplicitStack": PropagationSolver(use_explicit_stack=True),
            }
        else:
            self.solvers = solvers

        self.puzzles: Dict[str, List[SudokuBoard]] = dict(puzzles or {})
        for path in puzzle_files or []:
            group = os.path.splitext(os.path.basename(path))[0]
            self.puzzles[group] = load_puzzle_file(path)
            logger.info("Loaded %d puzzles from %s", len(self.puzzles[group]), path)

        self.results: List[BenchmarkResult] = []

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark suite.

        Returns:
            List of BenchmarkResult objects.
        """
        self.results = []

        total_tests = sum(len(p) for p in self.puzzles.values()) * len(self.solvers)
        pbar = tqdm(total=total_tests, desc="Benchmarking", disable=not show_progress)

        for group, puzzles in self.puzzles.items():
            for puzzle_id, puzzle in enumerate(puzzles):
                for solver_name, solver in self.solvers.items():
                    result = self._run_single(puzzle, puzzle_id, group, solver_name, solver)
                    self.results.append(result)
                    pbar.update(1)

        pbar.close()
        return self.results

    def _run_single(
        self,
        puzzle: SudokuBoard,
        puzzle_id: int,
        group: str,
        solver_name: str,
        solver: BaseSolver
    ) -> BenchmarkResult:
        """Run a single solver on a single puzzle."""
        # The solver checks the deadline between propagation passes and trials
        solver.timeout_seconds = self.timeout_seconds
        solution, stats = solver.solve(puzzle)
        if stats.extra.get("error") == "Timeout":
            logger.warning("%s timed out on %s #%d", solver_name, group, puzzle_id)

        solved = stats.solved and validate_solution(puzzle, solution)
        return BenchmarkResult(
            puzzle_id=puzzle_id,
            group=group,
            algorithm=solver_name,
            solved=solved,
            time_seconds=stats.time_seconds,
            memory_bytes=stats.memory_bytes,
            iterations=stats.iterations,
            backtracks=stats.backtracks,
            nodes_explored=stats.nodes_explored,
            extra=dict(stats.extra)
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        summary = {
            "total_puzzles": sum(len(p) for p in self.puzzles.values()),
            "solvers_tested": list(self.solvers.keys()),
            "groups": list(self.puzzles.keys()),
            "results_by_algorithm": {},
            "results_by_group": {}
        }

        for solver_name in self.solvers:
            solver_results = [r for r in self.results if r.algorithm == solver_name]
            if solver_results:
                solved = [r for r in solver_results if r.solved]
                times = [r.time_seconds for r in solver_results]
                memory = [r.memory_bytes for r in solver_results]

                summary["results_by_algorithm"][solver_name] = {
                    "solve_rate": len(solved) / len(solver_results) * 100,
                    "avg_time_seconds": sum(times) / len(times),
                    "max_time_seconds": max(times),
                    "min_time_seconds": min(times),
                    "avg_memory_mb": sum(memory) / len(memory) / (1024 * 1024),
                    "avg_backtracks": sum(r.backtracks for r in solver_results) / len(solver_results),
                    "total_solved": len(solved),
                    "total_tested": len(solver_results)
                }

        for group in self.puzzles:
            group_results = [r for r in self.results if r.group == group]
            if group_results:
                summary["results_by_group"][group] = {}

                for solver_name in self.solvers:
                    solver_group_results = [
                        r for r in group_results if r.algorithm == solver_name
                    ]
                    if solver_group_results:
                        solved = [r for r in solver_group_results if r.solved]
                        times = [r.time_seconds for r in solver_group_results]

                        summary["results_by_group"][group][solver_name] = {
                            "solve_rate": len(solved) / len(solver_group_results) * 100,
                            "avg_time_seconds": sum(times) / len(times),
                            "solved": len(solved),
                            "tested": len(solver_group_results)
                        }

        return summary

    def save_results(self, output_dir: str) -> List[str]:
        """Save raw results and the summary as JSON files."""
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        logger.info("Results saved to %s", output_dir)
        return [results_file, summary_file]
