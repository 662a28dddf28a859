import math
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from .models import Point, Rect


# Numerical tolerance for floating point comparisons
EPS = 1e-9


def dist(a: Point, b: Point) -> float:
    return math.sqrt((b.x - a.x) ** 2 + (b.y - a.y) ** 2)


def path_length(path: Sequence[Point]) -> float:
    """Calculate total length of a path."""
    total = 0.0
    for i in range(len(path) - 1):
        total += dist(path[i], path[i + 1])
    return total


def point_in_rect(p: Point, rect: Rect) -> bool:
    """Closed containment: points on the boundary are inside."""
    return (rect.x_min <= p.x <= rect.x_max and
            rect.y_min <= p.y <= rect.y_max)


def rects_overlap(a: Rect, b: Rect) -> bool:
    """Check if two rectangles share an overlap of positive area.

    Rectangles that only touch along an edge or at a corner do not overlap.
    """
    return not (a.x_min >= b.x_max or a.x_max <= b.x_min or
                a.y_min >= b.y_max or a.y_max <= b.y_min)


def rect_covers(outer: Rect, inner: Rect) -> bool:
    return (outer.x_min <= inner.x_min and outer.x_max >= inner.x_max and
            outer.y_min <= inner.y_min and outer.y_max >= inner.y_max)


def clip_rect(rect: Rect, region: Rect) -> Optional[Rect]:
    """Return the part of ``rect`` inside ``region``, or None if they do not overlap."""
    if not rects_overlap(rect, region):
        return None
    x_min = max(rect.x_min, region.x_min)
    y_min = max(rect.y_min, region.y_min)
    x_max = min(rect.x_max, region.x_max)
    y_max = min(rect.y_max, region.y_max)
    return Rect(x_min, y_min, x_max - x_min, y_max - y_min)


def union_covers(region: Rect, rects: Iterable[Rect]) -> bool:
    """Check if the union of ``rects`` covers ``region`` completely.

    Uses coordinate compression: the clipped rectangle edges split the region
    into elementary cells, and the region is covered iff every cell is.
    """
    clipped = [c for c in (clip_rect(r, region) for r in rects) if c is not None]
    if not clipped:
        return False
    if any(rect_covers(c, region) for c in clipped):
        return True

    xs = np.unique([region.x_min, region.x_max] + [v for c in clipped for v in (c.x_min, c.x_max)])
    ys = np.unique([region.y_min, region.y_max] + [v for c in clipped for v in (c.y_min, c.y_max)])

    covered = np.zeros((len(ys) - 1, len(xs) - 1), dtype=bool)
    for c in clipped:
        i0, i1 = np.searchsorted(xs, [c.x_min, c.x_max])
        j0, j1 = np.searchsorted(ys, [c.y_min, c.y_max])
        covered[j0:j1, i0:i1] = True

    return bool(covered.all())


def obstacles_overlapping(obstacles: Iterable[Rect], region: Rect) -> Tuple[Rect, ...]:
    """Obstacles sharing a positive-area overlap with ``region``."""
    return tuple(obs for obs in obstacles if rects_overlap(obs, region))


def region_is_free(obstacles: Iterable[Rect], region: Rect) -> bool:
    return not obstacles_overlapping(obstacles, region)


def region_is_covered(obstacles: Iterable[Rect], region: Rect) -> bool:
    """True if ``region`` lies entirely within the union of ``obstacles``."""
    return union_covers(region, obstacles_overlapping(obstacles, region))


def _interval_overlap(a0: float, a1: float, b0: float, b1: float) -> float:
    return max(0.0, min(a1, b1) - max(a0, b0))


def shared_boundary_length(a: Rect, b: Rect) -> float:
    """Length of the boundary segment shared by two rectangles.

    Returns 0 when they are separated, touch only at a corner, or overlap.
    """
    if rects_overlap(a, b):
        return 0.0
    if a.x_max == b.x_min or b.x_max == a.x_min:
        return _interval_overlap(a.y_min, a.y_max, b.y_min, b.y_max)
    if a.y_max == b.y_min or b.y_max == a.y_min:
        return _interval_overlap(a.x_min, a.x_max, b.x_min, b.x_max)
    return 0.0


def segment_is_free(a: Point, b: Point, obstacles: Iterable[Rect]) -> bool:
    """Check that segment AB does not pass through any obstacle interior.

    Liang-Barsky clipping against each obstacle shrunk by EPS, so grazing an
    obstacle boundary is allowed.
    """
    dx = b.x - a.x
    dy = b.y - a.y
    for rect in obstacles:
        x_min, x_max = rect.x_min + EPS, rect.x_max - EPS
        y_min, y_max = rect.y_min + EPS, rect.y_max - EPS
        t_enter, t_exit = 0.0, 1.0
        p = [-dx, dx, -dy, dy]
        q = [a.x - x_min, x_max - a.x, a.y - y_min, y_max - a.y]
        hit = True
        for i in range(4):
            if abs(p[i]) < EPS:
                if q[i] < 0:
                    hit = False
                    break
            else:
                t = q[i] / p[i]
                if p[i] < 0:
                    t_enter = max(t_enter, t)
                else:
                    t_exit = min(t_exit, t)
        if hit and t_enter <= t_exit:
            return False
    return True


def path_is_free(path: Sequence[Point], obstacles: Sequence[Rect]) -> bool:
    """Check every segment of the path against the obstacles."""
    return all(segment_is_free(path[i], path[i + 1], obstacles) for i in range(len(path) - 1))
