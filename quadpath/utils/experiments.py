"""Experiment utilities for running and collecting planner results."""

import csv
import logging
import math
import time
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, List, Optional

import matplotlib.pyplot as plt

from ..algorithms.dijkstra import NoPathError, shortest_path
from ..algorithms.graph import UnreachablePointError
from ..algorithms.grid_baseline import grid_graph
from ..loader import FieldParseError, load_field
from ..models import FieldValidationError
from ..planner import PlannerParams
from ..visualization import plot_field
from .plotting import plot_stage_timings
from .timing import timed_plan

logger = logging.getLogger(__name__)


@dataclass
class ExperimentResult:
    scenario_name: str
    field_size: float
    n_obstacles: int
    n_leaves: int
    n_free_leaves: int
    n_vertices: int
    n_edges: int
    found: bool
    path_length: float
    n_waypoints: int
    t_decompose: float
    t_extract: float
    t_solve: float
    t_total: float
    grid_vertices: Optional[int] = None
    grid_length: Optional[float] = None
    grid_time: Optional[float] = None


def run_experiment(
    field_path: Path,
    params: Optional[PlannerParams] = None,
    output_dir: Optional[Path] = None,
    save_plots: bool = True,
    verbose: bool = True,
) -> ExperimentResult:
    params = params or PlannerParams()
    scenario_id = field_path.stem.replace("scenario", "")

    if verbose:
        print(f"\nProcessing {field_path.name}...")

    field = load_field(field_path)

    if verbose:
        print(f"  Field: {field.size:g} x {field.size:g}")
        print(f"  Obstacles: {len(field.obstacles)}")
        print(f"  Minimum region size: {params.min_size:g}")

    result, timings = timed_plan(field, params)

    if verbose:
        print(f"  Leaves: {len(result.tree.leaves())} ({len(result.tree.free_leaves())} free)")
        print(f"  Graph: {result.graph.n_vertices} vertices, {result.graph.n_edges} edges")
        print(f"  CPU Time: {timings.total:.4f}s "
              f"(decompose {timings.decompose:.4f}s, extract {timings.extract:.4f}s, solve {timings.solve:.4f}s)")
        if result.found:
            print(f"  Path Length: {result.cost:.4f} ({len(result.path.waypoints)} waypoints)")
        else:
            print("  No path found.")

    grid_vertices = grid_length = grid_time = None
    if params.compare_grid:
        t0 = time.perf_counter()
        try:
            g = grid_graph(field, params.baseline_cell_size)
            grid_vertices = g.n_vertices
            grid_length = shortest_path(g).cost
        except (NoPathError, UnreachablePointError):
            grid_length = math.inf
        grid_time = time.perf_counter() - t0
        if verbose:
            print(f"  Grid baseline: {grid_vertices} vertices, length {grid_length:.4f}, {grid_time:.4f}s")

    if save_plots and output_dir:
        output_dir.mkdir(parents=True, exist_ok=True)

        path_plot_file = output_dir / f"scenario_{scenario_id}_quadtree_path.png"
        fig, _ = plot_field(
            field,
            tree=result.tree,
            graph=result.graph,
            path=result.waypoints,
            save_to=path_plot_file,
            show=False,
        )
        plt.close(fig)
        if verbose:
            print(f"  Saved: {path_plot_file.name}")

    return ExperimentResult(
        scenario_name=field_path.name,
        field_size=field.size,
        n_obstacles=len(field.obstacles),
        n_leaves=len(result.tree.leaves()),
        n_free_leaves=len(result.tree.free_leaves()),
        n_vertices=result.graph.n_vertices,
        n_edges=result.graph.n_edges,
        found=result.found,
        path_length=result.cost,
        n_waypoints=len(result.path.waypoints) if result.found else 0,
        t_decompose=timings.decompose,
        t_extract=timings.extract,
        t_solve=timings.solve,
        t_total=timings.total,
        grid_vertices=grid_vertices,
        grid_length=grid_length,
        grid_time=grid_time,
    )


def run_all_experiments(
    scenarios_dir: Path,
    params: Optional[PlannerParams] = None,
    output_dir: Optional[Path] = None,
    save_plots: bool = True,
    verbose: bool = True,
    errors: Optional[Dict[str, str]] = None,
) -> List[ExperimentResult]:
    """Run the planner on all scenarios in a directory.

    Args:
        scenarios_dir: Directory containing ``scenario*.txt`` field files.
        params: Planner parameters. If None, uses defaults.
        output_dir: Directory to save output files.
        save_plots: Whether to save plots.
        verbose: Whether to print progress.
        errors: If given, invalid or unreachable scenarios are recorded here
            by file name and skipped instead of aborting the batch.

    Returns:
        List of ExperimentResult for every scenario that ran.
    """
    scenario_files = sorted(scenarios_dir.glob("scenario*.txt"))

    if verbose:
        print(f"Found {len(scenario_files)} scenarios: {[f.stem for f in scenario_files]}")

    results = []
    for scenario_file in scenario_files:
        try:
            results.append(run_experiment(scenario_file, params, output_dir, save_plots, verbose))
        except (FieldParseError, FieldValidationError, UnreachablePointError) as e:
            if errors is None:
                raise
            logger.warning("Skipping %s: %s", scenario_file.name, e)
            errors[scenario_file.name] = str(e)
            if verbose:
                print(f"  Skipped: {e}")

    if save_plots and output_dir and results:
        timing_file = output_dir / "stage_timings.png"
        plot_stage_timings(
            [r.scenario_name for r in results],
            [r.t_decompose for r in results],
            [r.t_extract for r in results],
            [r.t_solve for r in results],
            timing_file,
            grid=[r.grid_time for r in results] if all(r.grid_time is not None for r in results) else (),
        )
        if verbose:
            print(f"\nSaved: {timing_file.name}")

    if verbose:
        print(f"\n{'='*60}")
        print(f"Completed {len(results)} experiments.")

    return results


def save_results_csv(
    results: List[ExperimentResult],
    output_path: Path,
) -> None:
    """Save experiment results to CSV file."""
    if not results:
        return

    fieldnames = list(asdict(results[0]).keys())

    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for r in results:
            writer.writerow(asdict(r))


def print_results_summary(results: List[ExperimentResult]) -> None:
    """Print formatted summary table of results."""
    print("\n" + "=" * 100)
    print("QUADTREE PLANNER RESULTS SUMMARY")
    print("=" * 100)

    header = (f"{'Scenario':<18} {'N':>6} {'Obs':>4} {'Leaves':>7} {'Verts':>6} {'Edges':>6} "
              f"{'PathLen':>9} {'Grid':>9} {'CPU(ms)':>8} {'Found':>5}")
    print(header)
    print("-" * len(header))

    for r in results:
        grid = f"{r.grid_length:>9.2f}" if r.grid_length is not None else f"{'-':>9}"
        print(f"{r.scenario_name:<18} {r.field_size:>6g} {r.n_obstacles:>4} {r.n_leaves:>7} "
              f"{r.n_vertices:>6} {r.n_edges:>6} {r.path_length:>9.2f} {grid} "
              f"{r.t_total * 1000:>8.2f} {'Yes' if r.found else 'No':>5}")

    print("-" * len(header))
    print(f"\nTotal scenarios: {len(results)}")
    print(f"Paths found: {sum(1 for r in results if r.found)}/{len(results)}")
    if results:
        print(f"Avg CPU time: {sum(r.t_total for r in results) / len(results) * 1000:.2f}ms")
