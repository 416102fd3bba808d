import math

import pytest

from mathkit.geometry.euclidean.oned import Vector1D
from mathkit.geometry.euclidean.twod import (
    EUCLIDEAN_2D,
    Line,
    PolygonsSet,
    Segment,
    SubLine,
    Vector2D,
)
from mathkit.geometry.partitioning.bsp_tree import BSPTree
from mathkit.geometry.partitioning.region_factory import RegionFactory
from mathkit.geometry.partitioning.side import Location, Side


@pytest.fixture
def x_axis():
    return Line(Vector2D(0.0, 0.0), Vector2D(1.0, 0.0))


@pytest.fixture
def y_axis():
    return Line(Vector2D(0.0, 0.0), Vector2D(0.0, 1.0))


class TestLine:
    def test_angle(self, x_axis, y_axis):
        assert x_axis.angle == pytest.approx(0.0)
        assert y_axis.angle == pytest.approx(math.pi / 2)

    def test_inside_is_on_the_left(self, x_axis, y_axis):
        assert x_axis.get_offset(Vector2D(3.0, 1.0)) == pytest.approx(-1.0)
        assert x_axis.get_offset(Vector2D(3.0, -2.0)) == pytest.approx(2.0)
        assert y_axis.get_offset(Vector2D(-1.0, 0.5)) == pytest.approx(-1.0)

    def test_reverse(self, x_axis):
        reverse = x_axis.reverse
        assert reverse.get_offset(Vector2D(3.0, 1.0)) == pytest.approx(1.0)
        assert not reverse.same_orientation_as(x_axis)

    def test_from_angle(self):
        line = Line.from_angle(Vector2D(0.0, 1.0), 0.0)
        assert line.contains(Vector2D(5.0, 1.0))
        assert line.distance(Vector2D(5.0, 4.0)) == pytest.approx(3.0)

    def test_line_offset(self, x_axis):
        above = Line(Vector2D(0.0, 1.0), Vector2D(1.0, 1.0))
        assert x_axis.get_line_offset(above) == pytest.approx(x_axis.get_offset(Vector2D(0.0, 1.0)))
        assert x_axis.get_line_offset(above.reverse) == pytest.approx(-1.0)

    def test_embedding(self):
        line = Line(Vector2D(0.0, 2.0), Vector2D(1.0, 2.0))
        assert line.to_sub_space(Vector2D(3.0, 5.0)).x == pytest.approx(3.0)
        point = line.to_space(Vector1D(-4.0))
        assert point.x == pytest.approx(-4.0)
        assert point.y == pytest.approx(2.0)
        projected = line.project(Vector2D(3.0, 5.0))
        assert (projected.x, projected.y) == (pytest.approx(3.0), pytest.approx(2.0))

    def test_intersection(self, x_axis):
        diagonal = Line(Vector2D(0.0, 1.0), Vector2D(1.0, 0.0))
        crossing = x_axis.intersection(diagonal)
        assert crossing.x == pytest.approx(1.0)
        assert crossing.y == pytest.approx(0.0, abs=1e-12)

    def test_parallel_lines_do_not_intersect(self, x_axis):
        parallel = Line(Vector2D(0.0, 1.0), Vector2D(1.0, 1.0))
        assert x_axis.intersection(parallel) is None
        assert x_axis.is_parallel_to(parallel)

    def test_degenerate_points(self):
        line = Line(Vector2D(1.0, 2.0), Vector2D(1.0, 2.0))
        assert line.angle == 0.0
        assert line.contains(Vector2D(7.0, 2.0))

    def test_space(self):
        assert Vector2D(1.0, 1.0).space is EUCLIDEAN_2D
        assert EUCLIDEAN_2D.dimension == 2
        assert Vector2D(0.0, 0.0).distance(Vector2D(3.0, 4.0)) == 5.0


class TestSubLine:
    def test_segments(self):
        sub = SubLine.from_points(Vector2D(0.0, 0.0), Vector2D(2.0, 0.0))
        segments = sub.segments
        assert len(segments) == 1
        assert segments[0].start.x == pytest.approx(0.0)
        assert segments[0].end.x == pytest.approx(2.0)
        assert segments[0].length == pytest.approx(2.0)
        assert sub.size == pytest.approx(2.0)

    def test_from_segment(self, x_axis):
        segment = Segment(Vector2D(1.0, 0.0), Vector2D(4.0, 0.0), x_axis)
        assert SubLine.from_segment(segment).size == pytest.approx(3.0)

    def test_crossing(self):
        first = SubLine.from_points(Vector2D(0.0, 0.0), Vector2D(2.0, 2.0))
        second = SubLine.from_points(Vector2D(0.0, 2.0), Vector2D(2.0, 0.0))
        crossing = first.intersection(second, False)
        assert crossing.x == pytest.approx(1.0)
        assert crossing.y == pytest.approx(1.0)

    def test_disjoint(self):
        first = SubLine.from_points(Vector2D(0.0, 0.0), Vector2D(1.0, 0.0))
        second = SubLine.from_points(Vector2D(2.0, -1.0), Vector2D(2.0, 1.0))
        assert first.intersection(second, True) is None

    def test_end_points(self):
        first = SubLine.from_points(Vector2D(0.0, 0.0), Vector2D(1.0, 0.0))
        second = SubLine.from_points(Vector2D(1.0, -1.0), Vector2D(1.0, 1.0))
        assert first.intersection(second, True) is not None
        assert first.intersection(second, False) is None

    def test_side(self, x_axis):
        above = SubLine.from_points(Vector2D(0.0, 1.0), Vector2D(1.0, 2.0))
        crossing = SubLine.from_points(Vector2D(0.0, -1.0), Vector2D(0.0, 1.0))
        assert above.side(x_axis) == Side.MINUS
        assert crossing.side(x_axis) == Side.BOTH

    def test_split(self, x_axis):
        sub = SubLine.from_points(Vector2D(0.0, -1.0), Vector2D(0.0, 3.0))
        split = sub.split(x_axis)
        assert split.plus.size == pytest.approx(1.0)
        assert split.minus.size == pytest.approx(3.0)

    def test_split_parallel(self, x_axis):
        sub = SubLine.from_points(Vector2D(0.0, 1.0), Vector2D(1.0, 1.0))
        split = sub.split(x_axis)
        assert split.plus is None
        assert split.minus is sub


class TestPolygonsSet:
    def test_box(self):
        box = PolygonsSet.box(0.0, 2.0, 0.0, 3.0)
        assert box.size == pytest.approx(6.0)
        assert box.barycenter.x == pytest.approx(1.0)
        assert box.barycenter.y == pytest.approx(1.5)
        assert box.boundary_size == pytest.approx(10.0)

    def test_thin_box_is_empty(self):
        assert PolygonsSet.box(0.0, 0.0, 0.0, 1.0).is_empty()

    def test_triangle(self):
        triangle = PolygonsSet.from_vertices([Vector2D(0.0, 0.0), Vector2D(1.0, 0.0),
                                              Vector2D(0.0, 1.0)])
        assert triangle.size == pytest.approx(0.5)
        assert triangle.barycenter.x == pytest.approx(1.0 / 3.0)
        assert triangle.barycenter.y == pytest.approx(1.0 / 3.0)
        assert triangle.check_point(Vector2D(0.2, 0.2)) == Location.INSIDE
        assert triangle.check_point(Vector2D(0.8, 0.8)) == Location.OUTSIDE

    def test_duplicate_vertices_are_skipped(self):
        square = PolygonsSet.from_vertices([Vector2D(0.0, 0.0), Vector2D(1.0, 0.0), Vector2D(1.0, 0.0),
                                            Vector2D(1.0, 1.0), Vector2D(0.0, 1.0)])
        assert square.size == pytest.approx(1.0)

    def test_whole_plane(self):
        plane = PolygonsSet()
        assert plane.size == math.inf
        assert math.isnan(plane.barycenter.x)

    def test_empty(self):
        assert PolygonsSet(BSPTree(attribute=False)).size == 0.0

    def test_complement_is_unbounded(self):
        complement = RegionFactory().get_complement(PolygonsSet.box(0.0, 1.0, 0.0, 1.0))
        assert complement.size == math.inf
        assert complement.check_point(Vector2D(5.0, 5.0)) == Location.INSIDE

    def test_boundary_segments(self):
        segments = PolygonsSet.box(0.0, 1.0, 0.0, 1.0).get_boundary_segments()
        assert len(segments) == 4
        assert sum(segment.length for segment in segments) == pytest.approx(4.0)

    def test_union_of_disjoint_boxes(self):
        union = RegionFactory().union(PolygonsSet.box(0.0, 1.0, 0.0, 1.0),
                                      PolygonsSet.box(3.0, 4.0, 0.0, 2.0))
        assert union.size == pytest.approx(3.0)
        assert union.barycenter.x == pytest.approx((0.5 * 1.0 + 3.5 * 2.0) / 3.0)
