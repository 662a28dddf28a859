"""quadpath - Shortest paths over a quadtree region graph."""

from .models import Field, FieldValidationError, Point, Rect, make_field
from .loader import FieldParseError, load_field, parse_field
from .geometry import (
    dist,
    path_length,
    point_in_rect,
    rects_overlap,
    rect_covers,
    clip_rect,
    union_covers,
    obstacles_overlapping,
    region_is_free,
    region_is_covered,
    shared_boundary_length,
    segment_is_free,
    path_is_free,
)

# Algorithms
from .algorithms import (
    Status,
    QuadNode,
    QuadTree,
    decompose,
    UnreachablePointError,
    VertexKind,
    GraphVertex,
    GraphEdge,
    Graph,
    extract,
    NoPathError,
    ShortestPath,
    shortest_path,
    occupancy_grid,
    grid_graph,
    grid_baseline_path,
)
from .planner import PlannerParams, PlanResult, plan_path
