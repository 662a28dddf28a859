"""Path planning algorithms."""

from .quadtree import (
    Status,
    QuadNode,
    QuadTree,
    decompose,
    max_depth_for,
)
from .graph import (
    UnreachablePointError,
    VertexKind,
    GraphVertex,
    GraphEdge,
    Graph,
    GraphBuilder,
    adjacent_pairs,
    extract,
)
from .dijkstra import (
    NoPathError,
    ShortestPath,
    shortest_path,
)
from .grid_baseline import (
    occupancy_grid,
    grid_graph,
    grid_baseline_path,
)

__all__ = [
    "Status",
    "QuadNode",
    "QuadTree",
    "decompose",
    "max_depth_for",
    "UnreachablePointError",
    "VertexKind",
    "GraphVertex",
    "GraphEdge",
    "Graph",
    "GraphBuilder",
    "adjacent_pairs",
    "extract",
    "NoPathError",
    "ShortestPath",
    "shortest_path",
    "occupancy_grid",
    "grid_graph",
    "grid_baseline_path",
]
