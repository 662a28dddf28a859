import math

import pytest

from quadpath.geometry import (
    clip_rect,
    dist,
    path_is_free,
    path_length,
    obstacles_overlapping,
    point_in_rect,
    rect_covers,
    rects_overlap,
    region_is_covered,
    region_is_free,
    segment_is_free,
    shared_boundary_length,
    union_covers,
)
from quadpath.models import Point, Rect


def test_dist_and_path_length():
    assert dist(Point(0, 0), Point(3, 4)) == 5.0
    assert path_length([Point(0, 0), Point(3, 4), Point(3, 10)]) == 11.0
    assert path_length([Point(1, 1)]) == 0.0


def test_point_in_rect_is_closed():
    r = Rect(0, 0, 2, 2)
    assert point_in_rect(Point(0, 0), r)
    assert point_in_rect(Point(2, 1), r)
    assert not point_in_rect(Point(2.0001, 1), r)


def test_touching_rectangles_do_not_overlap():
    a = Rect(0, 0, 2, 2)
    assert not rects_overlap(a, Rect(2, 0, 2, 2))   # shared edge
    assert not rects_overlap(a, Rect(2, 2, 1, 1))   # shared corner
    assert rects_overlap(a, Rect(1.9, 1.9, 1, 1))
    assert rects_overlap(a, Rect(0.5, 0.5, 1, 1))   # contained


def test_rect_covers_and_clip():
    outer = Rect(0, 0, 4, 4)
    assert rect_covers(outer, Rect(1, 1, 2, 2))
    assert rect_covers(outer, outer)
    assert not rect_covers(outer, Rect(3, 3, 2, 2))
    assert clip_rect(Rect(3, 3, 2, 2), outer) == Rect(3, 3, 1, 1)
    assert clip_rect(Rect(4, 0, 1, 1), outer) is None


def test_union_covers():
    region = Rect(0, 0, 4, 4)
    assert not union_covers(region, [])
    assert union_covers(region, [Rect(-1, -1, 10, 10)])
    assert union_covers(region, [Rect(0, 0, 2, 4), Rect(2, 0, 2, 4)])
    # four overlapping pieces
    assert union_covers(region, [Rect(0, 0, 3, 3), Rect(1, 1, 3, 3), Rect(0, 2, 2, 2), Rect(2, 0, 2, 2)])
    # a 1x1 hole remains in the middle
    assert not union_covers(region, [Rect(0, 0, 4, 1.5), Rect(0, 2.5, 4, 1.5), Rect(0, 0, 1.5, 4)])


def test_shared_boundary_length():
    a = Rect(0, 0, 4, 4)
    assert shared_boundary_length(a, Rect(4, 1, 2, 2)) == 2
    assert shared_boundary_length(a, Rect(4, 3, 2, 2)) == 1
    assert shared_boundary_length(a, Rect(1, 4, 1, 1)) == 1
    assert shared_boundary_length(a, Rect(4, 4, 1, 1)) == 0   # corner only
    assert shared_boundary_length(a, Rect(5, 0, 1, 1)) == 0   # separated
    assert shared_boundary_length(a, Rect(3, 3, 2, 2)) == 0   # overlapping


def test_segment_is_free_allows_grazing():
    obs = [Rect(2, 2, 2, 2)]
    assert not segment_is_free(Point(0, 3), Point(6, 3), obs)
    assert segment_is_free(Point(2, 0), Point(2, 6), obs)
    assert segment_is_free(Point(0, 0), Point(2, 2), obs)
    assert segment_is_free(Point(0, 5), Point(6, 5), obs)
    assert path_is_free([Point(0, 0), Point(0, 5), Point(5, 5)], obs)
    assert not path_is_free([Point(0, 0), Point(5, 5)], obs)
    assert math.isclose(dist(Point(0, 0), Point(1, 1)), math.sqrt(2))


def test_region_predicates():
    obs = [Rect(2, 2, 2, 2)]
    assert region_is_free(obs, Rect(0, 0, 2, 2))          # touches the corner only
    assert not region_is_free(obs, Rect(0, 0, 3, 3))
    assert region_is_covered(obs, Rect(2.5, 2.5, 1, 1))
    assert not region_is_covered(obs, Rect(1, 1, 2, 2))


def test_region_covered_by_union_of_obstacles():
    obs = [Rect(0, 0, 4, 8), Rect(4, 0, 4, 8)]
    assert region_is_covered(obs, Rect(0, 0, 8, 8))
    assert obstacles_overlapping(obs, Rect(3, 3, 2, 2)) == tuple(obs)
    assert obstacles_overlapping(obs, Rect(0, 0, 2, 2)) == (obs[0],)
