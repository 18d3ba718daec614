"""Benchmark module for comparing solver configurations."""

from .benchmark import Benchmark, BenchmarkResult, load_puzzle_file
from .visualizer import Visualizer

__all__ = ["Benchmark", "BenchmarkResult", "Visualizer", "load_puzzle_file"]
