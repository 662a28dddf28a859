"""Command line entry point for quadpath."""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .algorithms.dijkstra import NoPathError
from .algorithms.graph import UnreachablePointError
from .algorithms.grid_baseline import grid_baseline_path
from .loader import FieldParseError, load_field
from .models import FieldValidationError
from .planner import PlannerParams, plan_path

EXIT_OK = 0
EXIT_NO_PATH = 1
EXIT_INVALID = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quadpath",
        description="Shortest obstacle-avoiding path with a quadtree region graph",
    )
    parser.add_argument("field", type=str, nargs="?", help="Path to field file (n, r, r x 'x y w h')")
    parser.add_argument("--min-size", type=float, default=1.0, help="Smallest quadtree region side")
    parser.add_argument("--grid", action="store_true", help="Also run the uniform-grid baseline")
    parser.add_argument("--grid-cell", type=float, default=None, help="Grid baseline cell size (default: --min-size)")
    parser.add_argument("--plot", type=str, default=None, help="Save a plot of the decomposition and path")
    parser.add_argument("--scenarios", type=str, default=None, help="Run every scenario*.txt in this directory")
    parser.add_argument("--output", type=str, default="output/results", help="Output directory for --scenarios")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    return parser


def _run_batch(args: argparse.Namespace, params: PlannerParams) -> int:
    from .utils.experiments import print_results_summary, run_all_experiments, save_results_csv

    output_dir = Path(args.output)
    errors = {}
    results = run_all_experiments(Path(args.scenarios), params=params, output_dir=output_dir, errors=errors)
    print_results_summary(results)
    output_dir.mkdir(parents=True, exist_ok=True)
    save_results_csv(results, output_dir / "results.csv")

    for name, message in errors.items():
        print(f"Error: {name}: {message}")
    return EXIT_INVALID if errors else EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    params = PlannerParams(
        min_size=args.min_size,
        grid_cell_size=args.grid_cell,
        compare_grid=args.grid,
    )

    if args.scenarios:
        return _run_batch(args, params)
    if not args.field:
        parser.error("a field file or --scenarios is required")

    try:
        field = load_field(args.field)
        result = plan_path(field, params)
    except (FieldParseError, FieldValidationError) as e:
        print(f"Error: invalid field: {e}")
        return EXIT_INVALID
    except UnreachablePointError as e:
        print(f"Error: unreachable point: {e}")
        return EXIT_INVALID

    print(f"Field: {field.size:g} x {field.size:g}, Obstacles: {len(field.obstacles)}")
    print(f"Free regions: {len(result.tree.free_leaves())}, Graph edges: {result.graph.n_edges}")

    if args.plot:
        from .visualization import plot_field

        plot_field(field, tree=result.tree, graph=result.graph, path=result.waypoints,
                   save_to=args.plot, show=False)
        print(f"Saved: {args.plot}")

    if params.compare_grid:
        try:
            baseline = grid_baseline_path(field, params.baseline_cell_size)
            print(f"Grid baseline length: {baseline.cost:.4f}")
        except (NoPathError, UnreachablePointError) as e:
            print(f"Grid baseline: {e}")

    if not result.found:
        print("No path found.")
        return EXIT_NO_PATH

    print(f"Path length: {result.cost:.4f}")
    for p in result.waypoints:
        print(f"{p.x:g} {p.y:g}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
