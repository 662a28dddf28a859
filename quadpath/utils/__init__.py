"""Utility functions for experiments, timing and plotting."""

from .timing import StageTimings, timed_plan
from .experiments import (
    ExperimentResult,
    run_experiment,
    run_all_experiments,
    save_results_csv,
    print_results_summary,
)
from .plotting import plot_stage_timings

__all__ = [
    "StageTimings",
    "timed_plan",
    "ExperimentResult",
    "run_experiment",
    "run_all_experiments",
    "save_results_csv",
    "print_results_summary",
    "plot_stage_timings",
]
