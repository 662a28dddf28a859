"""Adaptive quadtree decomposition of a field into free and blocked regions.

The tree is stored as an arena: every node lives in ``QuadTree.nodes`` and
refers to its parent and children by integer handle. Each node also carries
integer lattice coordinates (``ix``, ``iy``, ``span``) measured in cells of
the finest level, which lets the graph extractor compare region edges exactly.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from ..geometry import obstacles_overlapping, point_in_rect, union_covers
from ..models import Field, FieldValidationError, Point, Rect

logger = logging.getLogger(__name__)


class Status(str, Enum):
    FREE = "free"
    BLOCKED = "blocked"
    MIXED = "mixed"


@dataclass(frozen=True)
class QuadNode:
    """A region of the decomposition.

    Attributes:
        handle: Index of this node in the tree arena.
        bounds: Region covered by the node.
        status: FREE and BLOCKED nodes are leaves; MIXED nodes have 4 children.
        children: Child handles in order SW, SE, NW, NE (empty for leaves).
        parent: Parent handle, None for the root.
        depth: Root is depth 0.
        ix, iy: Lower-left corner on the finest-cell lattice.
        span: Side length in finest cells (a power of two).
    """

    handle: int
    bounds: Rect
    status: Status
    children: Tuple[int, ...]
    parent: Optional[int]
    depth: int
    ix: int
    iy: int
    span: int

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def size(self) -> float:
        return self.bounds.width

    @property
    def center(self) -> Point:
        return self.bounds.center


@dataclass(frozen=True)
class QuadTree:
    """Immutable quadtree over a field."""

    nodes: Tuple[QuadNode, ...]
    field_size: float
    min_size: float
    max_depth: int

    @property
    def root(self) -> QuadNode:
        return self.nodes[0]

    @property
    def cell_size(self) -> float:
        """Side length of a cell at ``max_depth``."""
        return self.field_size / (2 ** self.max_depth)

    def node(self, handle: int) -> QuadNode:
        return self.nodes[handle]

    def children(self, node: QuadNode) -> Tuple[QuadNode, ...]:
        return tuple(self.nodes[h] for h in node.children)

    def iter_nodes(self) -> Iterator[QuadNode]:
        """Depth-first traversal from the root, children in stored order."""
        stack = [0]
        while stack:
            node = self.nodes[stack.pop()]
            yield node
            stack.extend(reversed(node.children))

    def leaves(self) -> List[QuadNode]:
        return [n for n in self.iter_nodes() if n.is_leaf]

    def free_leaves(self) -> List[QuadNode]:
        return [n for n in self.iter_nodes() if n.status is Status.FREE]

    def blocked_leaves(self) -> List[QuadNode]:
        return [n for n in self.iter_nodes() if n.status is Status.BLOCKED]

    def locate(self, p: Point) -> List[QuadNode]:
        """All leaves whose closed bounds contain ``p``.

        A point on a region boundary can belong to up to four leaves. Returns
        an empty list for points outside the field.
        """
        if not point_in_rect(p, self.root.bounds):
            return []
        found = []
        stack = [0]
        while stack:
            node = self.nodes[stack.pop()]
            if node.is_leaf:
                found.append(node)
                continue
            for h in reversed(node.children):
                if point_in_rect(p, self.nodes[h].bounds):
                    stack.append(h)
        return found

    def to_records(self) -> List[Dict[str, object]]:
        """Plain dict records of every node, in handle order."""
        return [
            {
                "handle": n.handle,
                "x": n.bounds.x,
                "y": n.bounds.y,
                "size": n.bounds.width,
                "status": n.status.value,
                "children": list(n.children),
                "parent": n.parent,
                "depth": n.depth,
            }
            for n in self.nodes
        ]


def max_depth_for(size: float, min_size: float) -> int:
    """Smallest depth d such that size / 2**d <= min_size."""
    depth = 0
    side = size
    while side > min_size:
        side /= 2.0
        depth += 1
    return depth


def _classify(field: Field, region: Rect) -> Status:
    overlapping = obstacles_overlapping(field.obstacles, region)
    if not overlapping:
        return Status.FREE
    if union_covers(region, overlapping):
        return Status.BLOCKED
    return Status.MIXED


def decompose(field: Field, min_size: float = 1.0) -> QuadTree:
    """Recursively partition ``field`` into free and blocked leaves.

    A region that overlaps no obstacle becomes a FREE leaf and a region inside
    the union of obstacles becomes a BLOCKED leaf. A partially obstructed
    region is split into four equal quadrants while its side exceeds
    ``min_size``; at or below that size it is conservatively BLOCKED.

    Raises:
        FieldValidationError: If ``min_size`` is not positive.
    """
    if not min_size > 0:
        raise FieldValidationError(f"min_size must be positive, got {min_size}")

    max_depth = max_depth_for(field.size, min_size)
    cell = field.size / (2 ** max_depth)
    nodes: List[Optional[QuadNode]] = []

    def build(ix: int, iy: int, span: int, depth: int, parent: Optional[int]) -> int:
        handle = len(nodes)
        nodes.append(None)  # reserve slot, filled once children exist
        bounds = Rect(ix * cell, iy * cell, span * cell, span * cell)
        status = _classify(field, bounds)
        children: Tuple[int, ...] = ()

        if status is Status.MIXED:
            if depth >= max_depth:
                status = Status.BLOCKED
            else:
                half = span // 2
                children = (
                    build(ix, iy, half, depth + 1, handle),                # SW
                    build(ix + half, iy, half, depth + 1, handle),         # SE
                    build(ix, iy + half, half, depth + 1, handle),         # NW
                    build(ix + half, iy + half, half, depth + 1, handle),  # NE
                )

        nodes[handle] = QuadNode(
            handle=handle,
            bounds=bounds,
            status=status,
            children=children,
            parent=parent,
            depth=depth,
            ix=ix,
            iy=iy,
            span=span,
        )
        return handle

    build(0, 0, 2 ** max_depth, 0, None)
    tree = QuadTree(nodes=tuple(nodes), field_size=field.size, min_size=min_size, max_depth=max_depth)

    if logger.isEnabledFor(logging.DEBUG):
        counts = Counter(n.status for n in tree.nodes)
        logger.debug(
            "Decomposed %gx%g field (%d obstacles): %d nodes, %d free, %d blocked, max depth %d",
            field.size, field.size, len(field.obstacles), len(tree.nodes),
            counts[Status.FREE], counts[Status.BLOCKED], max_depth,
        )
    return tree
