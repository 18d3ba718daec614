"""Command-line interface for the Sudoku solver."""

import argparse
import json
import logging
import sys

from .benchmark import Benchmark
from .benchmark.visualizer import Visualizer
from .core.board import SudokuBoard
from .core.errors import ParseError
from .core.validator import find_conflicts, is_correct
from .solvers import PropagationSolver


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Generalized Sudoku solver (constraint propagation + backtracking)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve a classic puzzle
  sudoprop solve --puzzle "530070000600195000..."

  # Solve a 16x16 puzzle from a file, printing every search trial
  sudoprop solve --file puzzle16.txt --trace

  # Check a filled grid
  sudoprop validate --file solution.txt

  # Benchmark puzzle files (one puzzle per line)
  sudoprop benchmark data/classic.txt data/small.txt --output results/
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a Sudoku puzzle")
    _add_puzzle_arguments(solve_parser)
    solve_parser.add_argument(
        "--explicit-stack", action="store_true",
        help="Run the search without recursion (for very large boards)"
    )
    solve_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Show detailed solving statistics"
    )
    solve_parser.add_argument(
        "--trace", action="store_true",
        help="Log the board and every assumption made by the search"
    )
    solve_parser.add_argument(
        "--json", action="store_true",
        help="Print the result as JSON"
    )

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Check a filled grid")
    _add_puzzle_arguments(validate_parser)

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Run solver benchmarks")
    bench_parser.add_argument(
        "files", nargs="+",
        help="Puzzle files, one puzzle per line"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--timeout", "-t", type=float, default=60.0,
        help="Seconds allowed per puzzle per solver (default: 60)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "trace", False) else logging.WARNING,
        format="%(message)s",
    )

    if args.command == "solve":
        cmd_solve(args)
    elif args.command == "validate":
        cmd_validate(args)
    elif args.command == "benchmark":
        cmd_benchmark(args)


def _add_puzzle_arguments(parser):
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--puzzle", "-p", type=str,
        help="Puzzle string (0 or . for empty cells, A.. for values above 9)"
    )
    source.add_argument(
        "--file", "-f", type=str,
        help="File holding the puzzle in the same format"
    )
    parser.add_argument(
        "--size", "-s", type=int, default=None,
        help="Board size (default: inferred from the number of cells)"
    )


def _load_board(args) -> SudokuBoard:
    try:
        if args.file:
            return SudokuBoard.from_file(args.file, args.size)
        return SudokuBoard.from_string(args.puzzle, args.size)
    except (ParseError, ValueError, OSError) as e:
        print(f"Error parsing puzzle: {e}")
        sys.exit(1)


def cmd_solve(args):
    """Handle the solve command."""
    board = _load_board(args)
    solver = PropagationSolver(use_explicit_stack=args.explicit_stack)
    solution, stats = solver.solve(board)

    if args.json:
        print(json.dumps({
            "puzzle": board.to_string(),
            "solution": solution.to_string() if solution is not None else None,
            "stats": stats.to_dict(),
        }, indent=2))
    else:
        print("Input puzzle:")
        print(board)
        print()

        if stats.solved:
            print(f"✓ Solved in {stats.time_seconds:.4f}s")
            if args.verbose:
                print(f"  Iterations: {stats.iterations:,}")
                print(f"  Trials: {stats.nodes_explored:,}")
                print(f"  Backtracks: {stats.backtracks:,}")
                print(f"  Max depth: {stats.extra['max_depth']}")
                print(f"  Memory: {stats.memory_bytes / 1024:.2f} KB")
            print(solution)
        else:
            print("✗ Failed to solve")
            if args.verbose:
                print(f"  Time: {stats.time_seconds:.4f}s")
                print(f"  Backtracks: {stats.backtracks:,}")

    if not stats.solved:
        sys.exit(2)


def cmd_validate(args):
    """Handle the validate command."""
    board = _load_board(args)
    print(board)

    if is_correct(board):
        print("✓ Every row, column and box is complete and unique")
        return

    if not board.is_complete():
        print(f"✗ {board.count_empty()} cells are still empty")
    for kind, number, value in find_conflicts(board):
        print(f"✗ {value} repeated in {kind.value} {number + 1}")
    sys.exit(2)


def cmd_benchmark(args):
    """Handle the benchmark command."""
    try:
        benchmark = Benchmark(puzzle_files=args.files, timeout_seconds=args.timeout)
    except (ParseError, ValueError, OSError) as e:
        print(f"Error loading puzzles: {e}")
        sys.exit(1)

    print("=" * 60)
    print("SUDOKU SOLVER BENCHMARK")
    print("=" * 60)
    print(f"Groups: {', '.join(f'{g} ({len(p)})' for g, p in benchmark.puzzles.items())}")
    print(f"Solvers: {', '.join(benchmark.solvers.keys())}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    results = benchmark.run()
    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)

    for algo, stats in summary["results_by_algorithm"].items():
        print(f"\n{algo}:")
        print(f"  Solved: {stats['solve_rate']:.1f}% ({stats['total_solved']}/{stats['total_tested']})")
        print(f"  Avg Time: {stats['avg_time_seconds']:.4f}s")
        print(f"  Avg Backtracks: {stats['avg_backtracks']:.1f}")
        print(f"  Avg Memory: {stats['avg_memory_mb']:.2f} MB")

    benchmark.save_results(args.output)

    if not args.no_charts:
        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        visualizer.generate_summary_table()
        print(f"Charts saved to {args.output}/")
        for chart in charts:
            print(f"  - {chart.split('/')[-1]}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")


if __name__ == "__main__":
    main()
