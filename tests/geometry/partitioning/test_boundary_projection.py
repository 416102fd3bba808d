import math

import pytest

from mathkit.geometry.euclidean.oned import IntervalsSet, Vector1D
from mathkit.geometry.euclidean.twod import PolygonsSet, Vector2D
from mathkit.geometry.partitioning.boundary_projection import BoundaryProjection
from mathkit.geometry.partitioning.bsp_tree import BSPTree
from mathkit.geometry.partitioning.region_factory import RegionFactory


@pytest.fixture
def unit_square():
    return PolygonsSet.box(0.0, 1.0, 0.0, 1.0)


class TestPolygonProjection:
    def test_outside_corner(self, unit_square):
        projection = unit_square.project_to_boundary(Vector2D(2.0, 2.0))
        assert isinstance(projection, BoundaryProjection)
        assert projection.offset == pytest.approx(math.sqrt(2.0))
        assert projection.projected.x == pytest.approx(1.0)
        assert projection.projected.y == pytest.approx(1.0)

    def test_outside_edge(self, unit_square):
        projection = unit_square.project_to_boundary(Vector2D(0.5, -2.0))
        assert projection.offset == pytest.approx(2.0)
        assert projection.projected.x == pytest.approx(0.5)
        assert projection.projected.y == pytest.approx(0.0, abs=1e-12)

    def test_inside_is_negative(self, unit_square):
        projection = unit_square.project_to_boundary(Vector2D(0.5, 0.5))
        assert projection.offset == pytest.approx(-0.5)

    def test_inside_near_edge(self, unit_square):
        projection = unit_square.project_to_boundary(Vector2D(0.5, 0.2))
        assert projection.offset == pytest.approx(-0.2)
        assert projection.projected.x == pytest.approx(0.5)
        assert projection.projected.y == pytest.approx(0.0, abs=1e-12)

    def test_original_is_kept(self, unit_square):
        point = Vector2D(3.0, 0.5)
        assert unit_square.project_to_boundary(point).original == point

    def test_empty_region(self):
        projection = PolygonsSet(BSPTree(attribute=False)).project_to_boundary(Vector2D(1.0, 1.0))
        assert projection.offset == math.inf
        assert projection.projected is None

    def test_whole_plane(self):
        projection = PolygonsSet().project_to_boundary(Vector2D(1.0, 1.0))
        assert projection.offset == -math.inf
        assert projection.projected is None


class TestIntervalsProjection:
    @pytest.fixture
    def interval(self):
        return IntervalsSet(1.0, 3.0)

    @pytest.mark.parametrize("x, projected, offset", [
        (2.0, 1.0, -1.0),
        (2.5, 3.0, -0.5),
        (0.0, 1.0, 1.0),
        (5.0, 3.0, 2.0),
    ])
    def test_single_interval(self, interval, x, projected, offset):
        projection = interval.project_to_boundary(Vector1D(x))
        assert projection.projected.x == projected
        assert projection.offset == offset

    def test_between_intervals(self):
        union = RegionFactory().union(IntervalsSet(0.0, 1.0), IntervalsSet(4.0, 5.0))
        projection = union.project_to_boundary(Vector1D(3.0))
        assert projection.projected.x == 4.0
        assert projection.offset == 1.0

    def test_half_line(self):
        projection = IntervalsSet(upper=2.0).project_to_boundary(Vector1D(-10.0))
        assert projection.projected.x == 2.0
        assert projection.offset == -12.0

    def test_whole_line(self):
        projection = IntervalsSet().project_to_boundary(Vector1D(0.0))
        assert projection.projected is None
        assert projection.offset == -math.inf
