"""Plotting utilities for experiments."""

from pathlib import Path
from typing import List, Sequence

import matplotlib.pyplot as plt
import numpy as np


def plot_stage_timings(
    scenario_names: Sequence[str],
    decompose: Sequence[float],
    extract: Sequence[float],
    solve: Sequence[float],
    save_to: Path,
    fontsize: int = 16,
    grid: Sequence[float] = (),
) -> None:
    """Grouped bar chart of per-stage CPU time (ms) for each scenario."""
    n = len(scenario_names)
    series: List[tuple] = [
        ("Decompose", decompose, "tab:blue"),
        ("Extract", extract, "tab:orange"),
        ("Solve", solve, "tab:green"),
    ]
    if grid and len(grid) == n:
        series.append(("Grid baseline", grid, "tab:gray"))

    fig, ax = plt.subplots(figsize=(max(8, 2 * n), 6))
    x = np.arange(n)
    width = 0.8 / len(series)

    for k, (label, values, color) in enumerate(series):
        ms = [v * 1000.0 for v in values]
        ax.bar(x + (k - (len(series) - 1) / 2) * width, ms, width, label=label, color=color)

    ax.set_xticks(x)
    ax.set_xticklabels(scenario_names, rotation=30, ha="right", fontsize=fontsize - 4)
    ax.set_ylabel("CPU time (ms)", fontsize=fontsize)
    ax.set_title("Stage timings", fontsize=fontsize + 2)
    ax.tick_params(axis="y", labelsize=fontsize - 2)
    ax.grid(True, axis="y", alpha=0.3)
    ax.legend(loc="upper left", fontsize=fontsize - 4)

    all_ms = [v * 1000.0 for _, values, _ in series for v in values]
    positive = [v for v in all_ms if v > 0]
    if positive and max(positive) / min(positive) > 100:
        ax.set_yscale("log")

    fig.tight_layout()
    fig.savefig(save_to, dpi=150, bbox_inches="tight")
    plt.close(fig)
