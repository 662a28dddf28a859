import heapq
import itertools
import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..models import Point
from .graph import Graph

logger = logging.getLogger(__name__)


class NoPathError(Exception):
    """Raised when the destination cannot be reached from the start."""

    def __init__(self, start_id: int, dest_id: int, expanded: int):
        self.start_id = start_id
        self.dest_id = dest_id
        self.expanded = expanded
        super().__init__(
            f"No path from vertex {start_id} to vertex {dest_id} "
            f"({expanded} vertices reachable)"
        )


@dataclass(frozen=True)
class ShortestPath:
    vertex_ids: Tuple[int, ...]
    waypoints: Tuple[Point, ...]
    cost: float
    expanded: int  # vertices settled before the destination


def _reconstruct(pred: Dict[int, Optional[int]], dest_id: int) -> List[int]:
    ids = []
    cur: Optional[int] = dest_id
    while cur is not None:
        ids.append(cur)
        cur = pred[cur]
    ids.reverse()
    return ids


def shortest_path(
    graph: Graph,
    start_id: Optional[int] = None,
    dest_id: Optional[int] = None,
) -> ShortestPath:
    """Dijkstra's algorithm with a binary heap.

    Heap entries are ordered by tentative distance, then by insertion order,
    and a predecessor is only replaced on a strict improvement. Equal-cost
    alternatives therefore resolve to the first one discovered, which keeps
    results reproducible for a fixed graph. The search stops as soon as the
    destination is settled.

    Args:
        graph: Graph to search. Edge weights must be non-negative.
        start_id: Source vertex, defaults to ``graph.start_id``.
        dest_id: Target vertex, defaults to ``graph.dest_id``.

    Returns:
        ShortestPath from start to destination.

    Raises:
        KeyError: If either vertex id is not in the graph.
        NoPathError: If the destination is unreachable.
    """
    if start_id is None:
        start_id = graph.start_id
    if dest_id is None:
        dest_id = graph.dest_id
    for vid in (start_id, dest_id):
        if vid not in graph.adjacency:
            raise KeyError(f"Unknown vertex id {vid}")

    dist: Dict[int, float] = {start_id: 0.0}
    pred: Dict[int, Optional[int]] = {start_id: None}
    settled = set()
    seq = itertools.count()
    heap: List[Tuple[float, int, int]] = [(0.0, next(seq), start_id)]

    while heap:
        d, _, u = heapq.heappop(heap)
        if u in settled:
            continue
        settled.add(u)
        if u == dest_id:
            break
        for edge in graph.adjacency[u]:
            v = edge.target
            if v in settled:
                continue
            nd = d + edge.weight
            if nd < dist.get(v, math.inf):
                dist[v] = nd
                pred[v] = u
                heapq.heappush(heap, (nd, next(seq), v))

    if dest_id not in settled:
        logger.debug("Destination %d unreachable after settling %d vertices", dest_id, len(settled))
        raise NoPathError(start_id, dest_id, len(settled))

    ids = _reconstruct(pred, dest_id)
    return ShortestPath(
        vertex_ids=tuple(ids),
        waypoints=tuple(graph.vertices[i].position for i in ids),
        cost=dist[dest_id],
        expanded=len(settled),
    )
