"""Naive uniform-grid planner, kept as a reference for the quadtree planner.

Every cell of a regular grid becomes a vertex, so the graph grows with the
square of the field resolution. Results are only used for validation and
comparison.
"""

import logging
import math
from typing import List, Optional

import numpy as np

from ..models import Field, FieldValidationError, Point, Rect
from .dijkstra import ShortestPath, shortest_path
from .graph import Graph, GraphBuilder, VertexKind

logger = logging.getLogger(__name__)


def occupancy_grid(field: Field, cell_size: float = 1.0) -> np.ndarray:
    """Boolean grid, ``True`` where a cell overlaps an obstacle.

    Indexed ``[row, col]`` with row 0 at y = 0. Cells touching an obstacle
    only along an edge stay free.
    """
    if not cell_size > 0:
        raise FieldValidationError(f"cell_size must be positive, got {cell_size}")
    n = int(math.ceil(field.size / cell_size))
    blocked = np.zeros((n, n), dtype=bool)
    for obs in field.obstacles:
        c0 = int(math.floor(obs.x_min / cell_size))
        c1 = int(math.ceil(obs.x_max / cell_size))
        r0 = int(math.floor(obs.y_min / cell_size))
        r1 = int(math.ceil(obs.y_max / cell_size))
        blocked[r0:r1, c0:c1] = True
    return blocked


def _host_indices(v: float, cell_size: float, n: int) -> List[int]:
    """Grid indices of the cells whose closed extent contains coordinate ``v``."""
    k = v / cell_size
    base = int(math.floor(k))
    candidates = [base - 1, base] if k == base else [base]
    return [i for i in candidates if 0 <= i < n]


def grid_graph(
    field: Field,
    cell_size: float = 1.0,
    start: Optional[Point] = None,
    dest: Optional[Point] = None,
) -> Graph:
    """Build a 4-connected graph over the free cells of a uniform grid.

    Raises:
        UnreachablePointError: If an endpoint lies in no free cell.
    """
    start = start or field.start
    dest = dest or field.destination
    blocked = occupancy_grid(field, cell_size)
    n = blocked.shape[0]

    builder = GraphBuilder()
    ids = np.full((n, n), -1, dtype=np.int64)
    for row, col in zip(*np.nonzero(~blocked)):
        row, col = int(row), int(col)
        x0, y0 = col * cell_size, row * cell_size
        bounds = Rect(x0, y0, min(cell_size, field.size - x0), min(cell_size, field.size - y0))
        ids[row, col] = builder.add_vertex(bounds.center, VertexKind.REGION, row * n + col, bounds)

    for row in range(n):
        for col in range(n):
            u = int(ids[row, col])
            if u < 0:
                continue
            if col + 1 < n and ids[row, col + 1] >= 0:
                builder.add_edge(u, int(ids[row, col + 1]))
            if row + 1 < n and ids[row + 1, col] >= 0:
                builder.add_edge(u, int(ids[row + 1, col]))

    def hosts(p: Point) -> List[int]:
        if not (0 <= p.x <= field.size and 0 <= p.y <= field.size):
            return []
        return [
            int(ids[r, c])
            for r in _host_indices(p.y, cell_size, n)
            for c in _host_indices(p.x, cell_size, n)
            if ids[r, c] >= 0
        ]

    start_id, dest_id = builder.splice_endpoints(start, dest, hosts(start), hosts(dest))
    graph = builder.freeze(start_id, dest_id)
    logger.debug("Grid graph %dx%d: %d vertices, %d edges", n, n, graph.n_vertices, graph.n_edges)
    return graph


def grid_baseline_path(
    field: Field,
    cell_size: float = 1.0,
    start: Optional[Point] = None,
    dest: Optional[Point] = None,
) -> ShortestPath:
    """Shortest path over the uniform grid graph.

    Raises:
        UnreachablePointError: If an endpoint lies in no free cell.
        NoPathError: If the free cells do not connect start and destination.
    """
    return shortest_path(grid_graph(field, cell_size, start, dest))
