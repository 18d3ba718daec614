"""Visualization utilities for benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult


class Visualizer:
    """
    Visualization generator for solver benchmark results.

    Creates charts comparing solver configurations across puzzle groups.
    """

    # Color palette for solver configurations
    COLORS = {
        "Recursive": "#2ecc71",      # Green
        "ExplicitStack": "#3498db",  # Blue
    }
    DEFAULT_COLOR = "#95a5a6"

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        # Set style
        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def _algorithms(self) -> List[str]:
        return sorted(set(r.algorithm for r in self.results))

    def _groups(self) -> List[str]:
        return sorted(set(r.group for r in self.results))

    def _save(self, name: str) -> str:
        plt.tight_layout()
        path = os.path.join(self.output_dir, name)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        return path

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_time_comparison(),
            self.plot_time_by_group(),
            self.plot_time_distribution(),
            self.plot_trials_by_group(),
        ]

    def plot_time_comparison(self) -> str:
        """Create bar chart comparing average solve times."""
        fig, ax = plt.subplots(figsize=(10, 6))

        algorithms = self._algorithms()
        avg_times = []
        colors = []

        for algo in algorithms:
            times = [r.time_seconds for r in self.results if r.algorithm == algo]
            avg_times.append(np.mean(times))
            colors.append(self.COLORS.get(algo, self.DEFAULT_COLOR))

        bars = ax.bar(algorithms, avg_times, color=colors, edgecolor='black', linewidth=0.5)

        for bar, time in zip(bars, avg_times):
            height = bar.get_height()
            ax.annotate(f'{time:.4f}s',
                        xy=(bar.get_x() + bar.get_width() / 2, height),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Solver', fontsize=12)
        ax.set_ylabel('Average Time (seconds)', fontsize=12)
        ax.set_title('Average Solve Time by Solver', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        return self._save("time_comparison.png")

    def _plot_grouped(self, metric: str, ylabel: str, title: str, filename: str,
                      log_scale: bool = False) -> str:
        """Grouped bar chart of the mean of a result attribute per group and solver."""
        fig, ax = plt.subplots(figsize=(12, 6))

        algorithms = self._algorithms()
        groups = self._groups()

        x = np.arange(len(groups))
        width = 0.8 / max(len(algorithms), 1)

        for i, algo in enumerate(algorithms):
            means = []
            for group in groups:
                values = [
                    getattr(r, metric) for r in self.results
                    if r.algorithm == algo and r.group == group
                ]
                means.append(np.mean(values) if values else 0)

            offset = (i - len(algorithms) / 2 + 0.5) * width
            ax.bar(x + offset, means, width,
                   label=algo,
                   color=self.COLORS.get(algo, self.DEFAULT_COLOR),
                   edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Puzzle Group', fontsize=12)
        ax.set_ylabel(ylabel, fontsize=12)
        ax.set_title(title, fontsize=14, fontweight='bold')
        ax.set_xticks(x)
        ax.set_xticklabels(groups)
        ax.legend(title='Solver', bbox_to_anchor=(1.05, 1), loc='upper left')

        if log_scale:
            # Trial counts span orders of magnitude and may be zero
            ax.set_yscale('symlog')
        else:
            ax.set_ylim(bottom=0)

        return self._save(filename)

    def plot_time_by_group(self) -> str:
        """Create grouped bar chart of times by puzzle group and solver."""
        return self._plot_grouped(
            "time_seconds", "Average Time (seconds)",
            "Solve Time by Puzzle Group and Solver", "time_by_group.png"
        )

    def plot_trials_by_group(self) -> str:
        """Create grouped bar chart of search trials by puzzle group and solver."""
        return self._plot_grouped(
            "nodes_explored", "Average Trials (Symlog Scale)",
            "Search Trials by Puzzle Group and Solver", "trials_by_group.png",
            log_scale=True
        )

    def plot_time_distribution(self) -> str:
        """Create box plot showing time distribution."""
        fig, ax = plt.subplots(figsize=(12, 6))

        algorithms = self._algorithms()
        data = [
            [r.time_seconds for r in self.results if r.algorithm == algo]
            for algo in algorithms
        ]

        bp = ax.boxplot(data, patch_artist=True)
        ax.set_xticks(range(1, len(algorithms) + 1))
        ax.set_xticklabels(algorithms)

        for patch, algo in zip(bp['boxes'], algorithms):
            patch.set_facecolor(self.COLORS.get(algo, self.DEFAULT_COLOR))
            patch.set_alpha(0.7)

        ax.set_xlabel('Solver', fontsize=12)
        ax.set_ylabel('Time (seconds)', fontsize=12)
        ax.set_title('Solve Time Distribution by Solver', fontsize=14, fontweight='bold')

        return self._save("time_distribution.png")

    def generate_summary_table(self) -> str:
        """Generate a markdown summary table."""
        lines = [
            "# Benchmark Summary\n",
            "| Solver | Solved | Avg Time | Avg Memory | Avg Trials | Avg Backtracks |",
            "|--------|--------|----------|------------|------------|----------------|"
        ]

        for algo in self._algorithms():
            algo_results = [r for r in self.results if r.algorithm == algo]

            solved = sum(1 for r in algo_results if r.solved)
            solve_rate = (solved / len(algo_results)) * 100

            avg_time = np.mean([r.time_seconds for r in algo_results])
            avg_memory = np.mean([r.memory_bytes / (1024 * 1024) for r in algo_results])
            avg_trials = np.mean([r.nodes_explored for r in algo_results])
            avg_backtracks = np.mean([r.backtracks for r in algo_results])

            lines.append(
                f"| {algo} | {solve_rate:.1f}% | {avg_time:.4f}s | {avg_memory:.2f} MB "
                f"| {avg_trials:,.1f} | {avg_backtracks:,.1f} |"
            )

        content = "\n".join(lines)

        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w") as f:
            f.write(content)

        return path
