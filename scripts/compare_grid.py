import argparse
import sys
import time
from pathlib import Path

_project_root = Path(__file__).resolve().parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from quadpath.algorithms.dijkstra import NoPathError, shortest_path
from quadpath.algorithms.graph import UnreachablePointError
from quadpath.algorithms.grid_baseline import grid_graph
from quadpath.loader import load_field
from quadpath.planner import PlannerParams
from quadpath.utils.timing import timed_plan
from quadpath.visualization import plot_field

def main():
    parser = argparse.ArgumentParser(description="Compare quadtree planner against the uniform grid")
    parser.add_argument("field", type=str, help="Path to field file")
    parser.add_argument("--min-size", type=float, default=1.0, help="Smallest quadtree region side")
    parser.add_argument("--cell", type=float, default=None, help="Grid cell size (default: --min-size)")
    parser.add_argument("--out", type=str, default="quadtree_result.png", help="Output filename for plot")
    args = parser.parse_args()

    field_path = Path(args.field)
    if not field_path.exists():
        print(f"Error: Field file {field_path} not found.")
        return

    print(f"Loading field from {field_path}...")
    field = load_field(field_path)
    params = PlannerParams(min_size=args.min_size, grid_cell_size=args.cell)

    result, timings = timed_plan(field, params)
    print(f"Quadtree: {result.graph.n_vertices} vertices, {result.graph.n_edges} edges")
    print(f"  decompose {timings.decompose:.4f}s, extract {timings.extract:.4f}s, solve {timings.solve:.4f}s")
    if result.found:
        print(f"  Path found! Cost: {result.cost:.4f}")
        print(f"  Path length (nodes): {len(result.waypoints)}")
    else:
        print("  No path found.")

    start_time = time.perf_counter()
    try:
        graph = grid_graph(field, params.baseline_cell_size)
    except UnreachablePointError as e:
        print(f"Grid: {e}")
        graph = None
    if graph is not None:
        try:
            baseline = shortest_path(graph)
            cost = f"{baseline.cost:.4f}"
        except NoPathError:
            cost = "no path"
        print(f"Grid: {graph.n_vertices} vertices, {graph.n_edges} edges")
        print(f"  {time.perf_counter() - start_time:.4f}s, cost {cost}")

    plot_field(field, tree=result.tree, graph=result.graph, path=result.waypoints,
               save_to=args.out, show=False)
    print(f"Plot saved to {args.out}")

if __name__ == "__main__":
    main()
