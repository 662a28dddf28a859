"""Quadtree planning pipeline: decompose, extract, solve."""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .algorithms.dijkstra import NoPathError, ShortestPath, shortest_path
from .algorithms.graph import Graph, extract
from .algorithms.quadtree import QuadTree, decompose
from .models import Field, Point

logger = logging.getLogger(__name__)


@dataclass
class PlannerParams:
    min_size: float = 1.0                  # smallest region side the quadtree may split down to
    grid_cell_size: Optional[float] = None  # grid baseline resolution, None = min_size
    compare_grid: bool = False             # also run the uniform-grid baseline

    @property
    def baseline_cell_size(self) -> float:
        return self.grid_cell_size if self.grid_cell_size is not None else self.min_size


@dataclass
class PlanResult:
    field: Field
    start: Point
    dest: Point
    tree: QuadTree
    graph: Graph
    path: Optional[ShortestPath]

    @property
    def found(self) -> bool:
        return self.path is not None

    @property
    def waypoints(self) -> Optional[List[Point]]:
        return list(self.path.waypoints) if self.path else None

    @property
    def cost(self) -> float:
        return self.path.cost if self.path else math.inf


def resolve_endpoints(
    field: Field,
    start: Optional[Point] = None,
    dest: Optional[Point] = None,
) -> Tuple[Point, Point]:
    """Fill in the default start and destination of ``field``."""
    return start or field.start, dest or field.destination


def solve(graph: Graph) -> Optional[ShortestPath]:
    """Shortest start-to-destination path, or None if the destination is disconnected."""
    try:
        path = shortest_path(graph)
    except NoPathError as e:
        logger.info("No path: %s", e)
        return None
    logger.info("Path found: %d waypoints, length %.4f", len(path.waypoints), path.cost)
    return path


def plan_path(
    field: Field,
    params: Optional[PlannerParams] = None,
    start: Optional[Point] = None,
    dest: Optional[Point] = None,
) -> PlanResult:
    """Plan a path across ``field``.

    Start and destination default to the middle of the bottom and top edges.
    A disconnected destination is a normal outcome and yields a result with
    ``found == False``.

    Raises:
        FieldValidationError: If the planner parameters are invalid.
        UnreachablePointError: If an endpoint lies in no free region.
    """
    params = params or PlannerParams()
    start, dest = resolve_endpoints(field, start, dest)

    tree = decompose(field, params.min_size)
    graph = extract(tree, start, dest)
    path = solve(graph)

    return PlanResult(field=field, start=start, dest=dest, tree=tree, graph=graph, path=path)
