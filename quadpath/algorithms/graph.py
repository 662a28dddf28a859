"""Region adjacency graph extracted from a quadtree."""

import logging
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..geometry import dist
from ..models import Point, Rect
from .quadtree import QuadNode, QuadTree

logger = logging.getLogger(__name__)


class UnreachablePointError(Exception):
    """Raised when an endpoint lies in no free region.

    The point is inside an obstacle, inside a conservatively blocked cell, or
    outside the field.
    """

    def __init__(self, point: Point, role: str):
        self.point = point
        self.role = role
        super().__init__(f"{role} ({point.x}, {point.y}) is not inside any free region")


class VertexKind(str, Enum):
    REGION = "region"
    START = "start"
    DESTINATION = "destination"


@dataclass(frozen=True)
class GraphVertex:
    id: int
    position: Point
    kind: VertexKind
    region: Optional[int] = None  # handle of the originating region
    bounds: Optional[Rect] = None


@dataclass(frozen=True)
class GraphEdge:
    source: int
    target: int
    weight: float


@dataclass(frozen=True)
class Graph:
    """Immutable weighted undirected graph.

    Every undirected edge is stored twice in ``adjacency``, once per direction,
    in insertion order.
    """

    vertices: Tuple[GraphVertex, ...]
    adjacency: Mapping[int, Tuple[GraphEdge, ...]]
    start_id: int
    dest_id: int

    @property
    def n_vertices(self) -> int:
        return len(self.vertices)

    @property
    def n_edges(self) -> int:
        return sum(len(out) for out in self.adjacency.values()) // 2

    @property
    def start(self) -> GraphVertex:
        return self.vertices[self.start_id]

    @property
    def dest(self) -> GraphVertex:
        return self.vertices[self.dest_id]

    def neighbors(self, vertex_id: int) -> Tuple[GraphEdge, ...]:
        return self.adjacency[vertex_id]

    def edges(self) -> Iterator[GraphEdge]:
        """Each undirected edge once, with source < target."""
        for out in self.adjacency.values():
            for e in out:
                if e.source < e.target:
                    yield e

    def edge_weight(self, u: int, v: int) -> Optional[float]:
        for e in self.adjacency.get(u, ()):
            if e.target == v:
                return e.weight
        return None

    def has_edge(self, u: int, v: int) -> bool:
        return self.edge_weight(u, v) is not None

    def region_vertices(self) -> List[GraphVertex]:
        return [v for v in self.vertices if v.kind is VertexKind.REGION]


class GraphBuilder:
    """Accumulates vertices and edges, then freezes them into a Graph."""

    def __init__(self):
        self._vertices: List[GraphVertex] = []
        self._adjacency: Dict[int, List[GraphEdge]] = {}

    def __len__(self) -> int:
        return len(self._vertices)

    def add_vertex(
        self,
        position: Point,
        kind: VertexKind = VertexKind.REGION,
        region: Optional[int] = None,
        bounds: Optional[Rect] = None,
    ) -> int:
        vid = len(self._vertices)
        self._vertices.append(GraphVertex(vid, position, kind, region, bounds))
        self._adjacency[vid] = []
        return vid

    def add_edge(self, u: int, v: int, weight: Optional[float] = None) -> None:
        if weight is None:
            weight = dist(self._vertices[u].position, self._vertices[v].position)
        self._adjacency[u].append(GraphEdge(u, v, weight))
        self._adjacency[v].append(GraphEdge(v, u, weight))

    def position(self, vid: int) -> Point:
        return self._vertices[vid].position

    def splice_endpoints(
        self,
        start: Point,
        dest: Point,
        start_hosts: Sequence[int],
        dest_hosts: Sequence[int],
    ) -> Tuple[int, int]:
        """Add start/destination vertices and link them to their host regions.

        If both endpoints share a host region they are also joined directly;
        that edge is inserted first so it wins ties in the solver.

        Raises:
            UnreachablePointError: If an endpoint has no host region.
        """
        if not start_hosts:
            raise UnreachablePointError(start, "start")
        if not dest_hosts:
            raise UnreachablePointError(dest, "destination")

        start_id = self.add_vertex(start, VertexKind.START)
        dest_id = self.add_vertex(dest, VertexKind.DESTINATION)

        if set(start_hosts) & set(dest_hosts):
            self.add_edge(start_id, dest_id)
        for h in start_hosts:
            self.add_edge(start_id, h)
        for h in dest_hosts:
            self.add_edge(dest_id, h)
        return start_id, dest_id

    def freeze(self, start_id: int, dest_id: int) -> Graph:
        return Graph(
            vertices=tuple(self._vertices),
            adjacency=MappingProxyType({vid: tuple(out) for vid, out in self._adjacency.items()}),
            start_id=start_id,
            dest_id=dest_id,
        )


def _sweep_line(
    low_side: List[Tuple[int, int, int]],
    high_side: List[Tuple[int, int, int]],
) -> Iterator[Tuple[int, int]]:
    """Pair intervals from two sides of one boundary line.

    Each entry is ``(start, end, vertex_id)`` on the perpendicular axis.
    Intervals on one side never overlap each other, so a two-pointer merge
    over both sorted lists finds every pair overlapping with positive length.
    """
    a = sorted(low_side)
    b = sorted(high_side)
    i = j = 0
    while i < len(a) and j < len(b):
        a0, a1, u = a[i]
        b0, b1, v = b[j]
        if min(a1, b1) > max(a0, b0):
            yield u, v
        if a1 < b1:
            i += 1
        elif b1 < a1:
            j += 1
        else:
            i += 1
            j += 1


def adjacent_pairs(leaves: Sequence[Tuple[int, QuadNode]]) -> List[Tuple[int, int]]:
    """Find every pair of leaves sharing a boundary segment of positive length.

    Leaves are bucketed by edge coordinate on the integer lattice, so only
    leaves touching the same line are ever compared.

    Args:
        leaves: ``(vertex_id, node)`` pairs.

    Returns:
        ``(u, v)`` vertex id pairs, vertical boundaries first, each ordered
        by line coordinate then position along the line.
    """
    right_edges = defaultdict(list)
    left_edges = defaultdict(list)
    top_edges = defaultdict(list)
    bottom_edges = defaultdict(list)

    for vid, n in leaves:
        right_edges[n.ix + n.span].append((n.iy, n.iy + n.span, vid))
        left_edges[n.ix].append((n.iy, n.iy + n.span, vid))
        top_edges[n.iy + n.span].append((n.ix, n.ix + n.span, vid))
        bottom_edges[n.iy].append((n.ix, n.ix + n.span, vid))

    pairs: List[Tuple[int, int]] = []
    for x in sorted(right_edges.keys() & left_edges.keys()):
        pairs.extend(_sweep_line(right_edges[x], left_edges[x]))
    for y in sorted(top_edges.keys() & bottom_edges.keys()):
        pairs.extend(_sweep_line(top_edges[y], bottom_edges[y]))
    return pairs


def extract(tree: QuadTree, start: Point, dest: Point) -> Graph:
    """Build the free-region graph of ``tree`` with spliced endpoints.

    One vertex is created per free leaf, positioned at the leaf center, and an
    edge weighted by center distance joins every pair of free leaves sharing
    a boundary segment. The start and destination become two extra vertices
    linked to every free leaf whose closed bounds contain them.

    Raises:
        UnreachablePointError: If ``start`` or ``dest`` lies in no free leaf.
    """
    builder = GraphBuilder()
    vertex_of: Dict[int, int] = {}
    leaves = []
    for node in tree.free_leaves():
        vid = builder.add_vertex(node.center, VertexKind.REGION, node.handle, node.bounds)
        vertex_of[node.handle] = vid
        leaves.append((vid, node))

    for u, v in adjacent_pairs(leaves):
        builder.add_edge(u, v)

    start_hosts = [vertex_of[n.handle] for n in tree.locate(start) if n.handle in vertex_of]
    dest_hosts = [vertex_of[n.handle] for n in tree.locate(dest) if n.handle in vertex_of]
    start_id, dest_id = builder.splice_endpoints(start, dest, start_hosts, dest_hosts)

    graph = builder.freeze(start_id, dest_id)
    logger.debug(
        "Extracted graph: %d vertices, %d edges (start hosts %d, destination hosts %d)",
        graph.n_vertices, graph.n_edges, len(start_hosts), len(dest_hosts),
    )
    return graph
