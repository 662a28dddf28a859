import math

import pytest

from quadpath.algorithms.quadtree import Status, decompose, max_depth_for
from quadpath.geometry import rects_overlap, region_is_free
from quadpath.models import Field, FieldValidationError, Point, Rect


def _check_tree_validity(tree):
    root_area = tree.root.bounds.area
    for node in tree.nodes:
        if node.status is Status.MIXED:
            kids = tree.children(node)
            assert len(kids) == 4
            assert math.isclose(sum(k.bounds.area for k in kids), node.bounds.area)
            for k in kids:
                assert k.parent == node.handle
                assert k.depth == node.depth + 1
                b, p = k.bounds, node.bounds
                assert p.x_min <= b.x_min and b.x_max <= p.x_max
                assert p.y_min <= b.y_min and b.y_max <= p.y_max
            for i in range(4):
                for j in range(i + 1, 4):
                    assert not rects_overlap(kids[i].bounds, kids[j].bounds)
        else:
            assert node.children == ()
            assert math.isclose(node.bounds.area, root_area / 4 ** node.depth)
            assert node.size >= tree.min_size or node.depth == tree.max_depth


def test_max_depth_for():
    assert max_depth_for(32, 1) == 5
    assert max_depth_for(1, 1) == 0
    assert max_depth_for(10, 1) == 4
    assert max_depth_for(16, 3) == 3


def test_empty_field_is_single_free_leaf(empty_field):
    tree = decompose(empty_field)
    assert len(tree.nodes) == 1
    assert tree.root.status is Status.FREE
    assert tree.root.bounds == Rect(0, 0, 32, 32)
    assert tree.free_leaves() == [tree.root]


def test_obstacle_on_partition_boundary_blocks_one_quadrant():
    field = Field(8, (Rect(4, 0, 4, 4),))
    tree = decompose(field)
    assert tree.root.status is Status.MIXED
    sw, se, nw, ne = tree.children(tree.root)
    assert sw.bounds == Rect(0, 0, 4, 4) and sw.status is Status.FREE
    assert se.bounds == Rect(4, 0, 4, 4) and se.status is Status.BLOCKED
    assert nw.status is Status.FREE
    assert ne.status is Status.FREE
    assert len(tree.nodes) == 5


def test_union_of_obstacles_blocks_without_splitting():
    tree = decompose(Field(8, (Rect(0, 0, 4, 8), Rect(4, 0, 4, 8))))
    assert len(tree.nodes) == 1
    assert tree.root.status is Status.BLOCKED


def test_partially_blocked_minimal_cell_is_blocked():
    tree = decompose(Field(4, (Rect(0.25, 0.25, 0.5, 0.5),)), min_size=1.0)
    (leaf,) = tree.locate(Point(0.5, 0.5))
    assert leaf.status is Status.BLOCKED
    assert leaf.size == 1.0
    assert leaf.depth == tree.max_depth == 2


def test_tree_validity(cluttered_field):
    tree = decompose(cluttered_field)
    _check_tree_validity(tree)


def test_tree_validity_non_power_of_two_field():
    field = Field(10, (Rect(1, 1, 3, 2), Rect(6.5, 4, 2, 5)))
    tree = decompose(field, min_size=1.0)
    assert tree.max_depth == 4
    assert tree.cell_size == 0.625
    _check_tree_validity(tree)


def test_decomposition_completeness(cluttered_field):
    tree = decompose(cluttered_field, min_size=1.0)
    cell = tree.cell_size
    cells = int(round(cluttered_field.size / cell))
    for i in range(cells):
        for j in range(cells):
            p = Point((i + 0.5) * cell, (j + 0.5) * cell)
            found = tree.locate(p)
            assert len(found) == 1
            minimal = Rect(i * cell, j * cell, cell, cell)
            assert (found[0].status is Status.FREE) == region_is_free(cluttered_field.obstacles, minimal)


def test_free_leaves_never_touch_obstacle_interiors(cluttered_field):
    tree = decompose(cluttered_field)
    for leaf in tree.free_leaves():
        assert not any(rects_overlap(leaf.bounds, o) for o in cluttered_field.obstacles)


def test_locate_boundary_and_outside_points():
    tree = decompose(Field(8, (Rect(4, 0, 4, 4),)))
    assert len(tree.locate(Point(4, 4))) == 4
    assert len(tree.locate(Point(4, 0))) == 2
    assert tree.locate(Point(-0.1, 3)) == []
    assert tree.locate(Point(3, 8.5)) == []


def test_lattice_coordinates_match_bounds(cluttered_field):
    tree = decompose(cluttered_field)
    for node in tree.nodes:
        assert node.bounds.x == node.ix * tree.cell_size
        assert node.bounds.y == node.iy * tree.cell_size
        assert node.bounds.width == node.span * tree.cell_size


def test_min_size_must_be_positive(empty_field):
    with pytest.raises(FieldValidationError):
        decompose(empty_field, min_size=0)


def test_decompose_is_deterministic(cluttered_field):
    assert decompose(cluttered_field).to_records() == decompose(cluttered_field).to_records()


def test_coarser_min_size_gives_fewer_nodes(cluttered_field):
    fine = decompose(cluttered_field, min_size=0.5)
    coarse = decompose(cluttered_field, min_size=2.0)
    assert len(coarse.nodes) < len(fine.nodes)
    assert coarse.max_depth == 3 and fine.max_depth == 5
