import math

import pytest

from quadpath.models import Field, FieldValidationError, Point, Rect, make_field


def test_rect_edges_and_center():
    r = Rect(1, 2, 4, 6)
    assert (r.x_min, r.x_max, r.y_min, r.y_max) == (1, 5, 2, 8)
    assert r.center == Point(3, 5)
    assert r.area == 24


@pytest.mark.parametrize("w,h", [(0, 1), (1, 0), (-2, 3), (3, -1)])
def test_rect_rejects_non_positive_dimensions(w, h):
    with pytest.raises(FieldValidationError):
        Rect(0, 0, w, h)


@pytest.mark.parametrize(
    "values",
    [(math.nan, 0, 1, 1), (0, math.inf, 1, 1), (0, 0, math.inf, 1), (0, 0, 1, math.nan)],
)
def test_rect_rejects_non_finite_values(values):
    with pytest.raises(FieldValidationError, match="finite"):
        Rect(*values)


def test_field_default_endpoints():
    f = Field(32)
    assert f.start == Point(16, 0)
    assert f.destination == Point(16, 32)
    assert f.bounds == Rect(0, 0, 32, 32)


@pytest.mark.parametrize("size", [0, -1, math.inf, -math.inf, math.nan])
def test_field_rejects_invalid_size(size):
    with pytest.raises(FieldValidationError):
        Field(size)


def test_field_rejects_obstacle_outside_bounds():
    with pytest.raises(FieldValidationError, match="beyond field bounds"):
        Field(10, (Rect(8, 8, 4, 1),))
    with pytest.raises(FieldValidationError, match="negative"):
        Field(10, (Rect(-1, 0, 2, 2),))


def test_field_accepts_overlapping_obstacles_and_stores_tuple():
    f = Field(10, [Rect(1, 1, 4, 4), Rect(2, 2, 4, 4)])
    assert isinstance(f.obstacles, tuple)
    assert len(f.obstacles) == 2


def test_field_point_blocked():
    f = make_field(10, [(2, 2, 2, 2)])
    assert f.point_blocked(Point(3, 3))
    assert not f.point_blocked(Point(2, 3))      # boundary is not interior
