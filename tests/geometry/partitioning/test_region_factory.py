import logging

import pytest

from mathkit.geometry.euclidean.oned import IntervalsSet, Vector1D
from mathkit.geometry.euclidean.twod import Line, PolygonsSet, Vector2D
from mathkit.geometry.partitioning.bsp_tree import BoundaryAttribute
from mathkit.geometry.partitioning.region_factory import RegionFactory, recurse_complement
from mathkit.geometry.partitioning.side import Location


SAMPLES = [
    Vector2D(0.5, 0.5), Vector2D(1.5, 1.5), Vector2D(2.5, 2.5), Vector2D(2.5, 0.5),
    Vector2D(0.5, 2.5), Vector2D(1.5, 0.5), Vector2D(0.5, 1.5), Vector2D(4.0, 4.0),
    Vector2D(-1.0, -1.0), Vector2D(1.5, 2.5),
]


def square_a():
    return PolygonsSet.box(0.0, 2.0, 0.0, 2.0)


def square_b():
    return PolygonsSet.box(1.0, 3.0, 1.0, 3.0)


def inside(region, point):
    return region.check_point(point) == Location.INSIDE


def membership(region):
    return [inside(region, p) for p in SAMPLES]


@pytest.fixture
def factory():
    return RegionFactory()


def unit_square_hyperplanes():
    return [
        Line(Vector2D(0.0, 0.0), Vector2D(1.0, 0.0)),
        Line(Vector2D(1.0, 0.0), Vector2D(1.0, 1.0)),
        Line(Vector2D(1.0, 1.0), Vector2D(0.0, 1.0)),
        Line(Vector2D(0.0, 1.0), Vector2D(0.0, 0.0)),
    ]


class TestBuildConvex:
    def test_unit_square(self, factory):
        region = factory.build_convex(*unit_square_hyperplanes())
        assert region.check_point(Vector2D(0.5, 0.5)) == Location.INSIDE
        assert region.check_point(Vector2D(2.0, 2.0)) == Location.OUTSIDE
        assert region.check_point(Vector2D(1.0, 0.5)) == Location.BOUNDARY

    def test_empty_list(self, factory):
        assert factory.build_convex() is None

    def test_redundant_hyperplane_is_skipped(self, factory):
        hyperplanes = unit_square_hyperplanes()
        hyperplanes.append(Line(Vector2D(3.0, 0.0), Vector2D(3.0, 1.0)))
        region = factory.build_convex(*hyperplanes)
        assert region.size == pytest.approx(1.0)

    def test_half_plane(self, factory):
        region = factory.build_convex(Line(Vector2D(0.0, 0.0), Vector2D(1.0, 0.0)))
        assert inside(region, Vector2D(5.0, 1.0))
        assert not inside(region, Vector2D(5.0, -1.0))
        assert region.size == float("inf")


class TestComplement:
    def test_unit_square(self, factory):
        region = factory.build_convex(*unit_square_hyperplanes())
        complement = factory.get_complement(region)
        assert complement.check_point(Vector2D(0.5, 0.5)) == Location.OUTSIDE
        assert complement.check_point(Vector2D(2.0, 2.0)) == Location.INSIDE
        # the input is not consumed
        assert region.check_point(Vector2D(0.5, 0.5)) == Location.INSIDE

    def test_intervals(self, factory):
        complement = factory.get_complement(IntervalsSet(1.0, 3.0))
        intervals = complement.as_list()
        assert [(i.inf, i.sup) for i in intervals] == [(float("-inf"), 1.0), (3.0, float("inf"))]

    def test_boundary_attributes_swapped(self, factory):
        region = PolygonsSet.box(0.0, 1.0, 0.0, 1.0)
        tree = region.get_tree(True)
        complement = recurse_complement(tree)
        assert isinstance(complement.attribute, BoundaryAttribute)
        assert complement.attribute.plus_inside is not None
        assert complement.attribute.plus_outside is None
        assert tree.attribute.plus_outside is not None


class TestSetOperations:
    def test_union(self, factory):
        union = factory.union(square_a(), square_b())
        assert membership(union) == [inside(square_a(), p) or inside(square_b(), p) for p in SAMPLES]

    def test_union_commutes(self, factory):
        assert membership(factory.union(square_a(), square_b())) == \
            membership(factory.union(square_b(), square_a()))

    def test_intersection(self, factory):
        intersection = factory.intersection(square_a(), square_b())
        assert membership(intersection) == [inside(square_a(), p) and inside(square_b(), p)
                                            for p in SAMPLES]
        assert intersection.size == pytest.approx(1.0)

    def test_intersection_with_complement_is_empty(self, factory):
        a = square_a()
        assert factory.intersection(square_a(), factory.get_complement(a)).is_empty()

    def test_xor_with_itself_is_empty(self, factory):
        assert factory.xor(square_a(), square_a()).is_empty()

    def test_xor(self, factory):
        xor = factory.xor(square_a(), square_b())
        assert membership(xor) == [inside(square_a(), p) != inside(square_b(), p) for p in SAMPLES]
        assert xor.size == pytest.approx(6.0)

    def test_difference_matches_intersection_with_complement(self, factory):
        difference = factory.difference(square_a(), square_b())
        expected = factory.intersection(square_a(), factory.get_complement(square_b()))
        assert membership(difference) == membership(expected)
        assert difference.size == pytest.approx(3.0)

    def test_union_size(self, factory):
        assert factory.union(square_a(), square_b()).size == pytest.approx(7.0)

    def test_disjoint_union_of_intervals(self, factory):
        union = factory.union(IntervalsSet(1.0, 3.0), IntervalsSet(5.0, 7.0))
        assert [(i.inf, i.sup) for i in union.as_list()] == [(1.0, 3.0), (5.0, 7.0)]
        assert union.size == pytest.approx(4.0)

    def test_overlapping_union_of_intervals(self, factory):
        union = factory.union(IntervalsSet(1.0, 3.0), IntervalsSet(2.0, 5.0))
        assert [(i.inf, i.sup) for i in union.as_list()] == [(1.0, 5.0)]

    def test_interval_difference(self, factory):
        difference = factory.difference(IntervalsSet(0.0, 10.0), IntervalsSet(3.0, 4.0))
        assert [(i.inf, i.sup) for i in difference.as_list()] == [(0.0, 3.0), (4.0, 10.0)]
        assert difference.check_point(Vector1D(3.5)) == Location.OUTSIDE

    def test_regions_rendered_only_for_debug_logging(self, factory, monkeypatch, caplog):
        rendered = []

        def counting_repr(region):
            rendered.append(region)
            return "PolygonsSet(...)"

        monkeypatch.setattr(PolygonsSet, "__repr__", counting_repr)
        logger_name = "mathkit.geometry.partitioning.region_factory"

        with caplog.at_level(logging.INFO, logger=logger_name):
            factory.union(square_a(), square_b())
        assert rendered == []

        with caplog.at_level(logging.DEBUG, logger=logger_name):
            factory.union(square_a(), square_b())
        assert len(rendered) >= 2
        assert "Computing union of PolygonsSet(...)" in caplog.text
