"""
One-dimensional Euclidean geometry.

Hyperplanes of the real line are oriented points; regions are finite
unions of intervals. This is the base case of the dimension recursion used
by boundary projection in higher dimensions.
"""

import math
from dataclasses import dataclass
from typing import Iterator, List, Optional

from ...core.config.settings import get_geometry_config
from ..space import Point, Space
from ..partitioning.boundary_projection import BoundaryProjection
from ..partitioning.bsp_tree import BSPTree
from ..partitioning.hyperplane import Hyperplane
from ..partitioning.region import AbstractRegion
from ..partitioning.side import Side
from ..partitioning.sub_hyperplane import AbstractSubHyperplane, SplitSubHyperplane


class Euclidean1D(Space):
    """The real line."""

    @property
    def dimension(self) -> int:
        return 1

    @property
    def sub_space(self) -> Optional[Space]:
        return None


EUCLIDEAN_1D = Euclidean1D()


@dataclass(frozen=True)
class Vector1D(Point):
    """Point of the real line."""
    x: float

    @property
    def space(self) -> Space:
        return EUCLIDEAN_1D

    def distance(self, other: "Vector1D") -> float:
        return abs(self.x - other.x)

    def is_nan(self) -> bool:
        return math.isnan(self.x)


class OrientedPoint(Hyperplane):
    """Hyperplane of the real line.

    Parameters
    ----------
    location : Vector1D
        Position of the point
    direct : bool
        If True the plus side holds the abscissas larger than the location
    tolerance : float, optional
        Tolerance below which points are considered identical
    """

    def __init__(self, location: Vector1D, direct: bool, tolerance: Optional[float] = None):
        self.location = location
        self.direct = direct
        self._tolerance = get_geometry_config().tolerance if tolerance is None else tolerance

    def copy_self(self) -> "OrientedPoint":
        # instances are never modified
        return self

    def get_offset(self, point: Vector1D) -> float:
        delta = point.x - self.location.x
        return delta if self.direct else -delta

    def project(self, point: Vector1D) -> Vector1D:
        return self.location

    @property
    def tolerance(self) -> float:
        return self._tolerance

    def same_orientation_as(self, other: "OrientedPoint") -> bool:
        return self.direct == other.direct

    def whole_hyperplane(self) -> "SubOrientedPoint":
        return SubOrientedPoint(self, None)

    def whole_space(self) -> "IntervalsSet":
        return IntervalsSet(tolerance=self._tolerance)

    def __repr__(self) -> str:
        return f"OrientedPoint({self.location.x}, direct={self.direct})"


class SubOrientedPoint(AbstractSubHyperplane):
    """Sub-hyperplane of the real line.

    An oriented point has no sub-space, so there is no remaining region;
    the sub-hyperplane is never empty and has zero size.
    """

    def build_new(self, hyperplane: OrientedPoint, remaining_region) -> "SubOrientedPoint":
        return SubOrientedPoint(hyperplane, remaining_region)

    @property
    def size(self) -> float:
        return 0.0

    def is_empty(self) -> bool:
        return False

    def reunite(self, other: "SubOrientedPoint") -> "SubOrientedPoint":
        # both parts are the same point
        return self

    def _global_offset(self, hyperplane: OrientedPoint) -> float:
        return hyperplane.get_offset(self.hyperplane.location)

    def side(self, hyperplane: OrientedPoint) -> Side:
        threshold = get_geometry_config().parallel_threshold
        global_offset = self._global_offset(hyperplane)
        if global_offset < -threshold:
            return Side.MINUS
        elif global_offset > threshold:
            return Side.PLUS
        return Side.HYPER

    def split(self, hyperplane: OrientedPoint) -> SplitSubHyperplane:
        threshold = get_geometry_config().parallel_threshold
        if self._global_offset(hyperplane) < -threshold:
            return SplitSubHyperplane(None, self)
        return SplitSubHyperplane(self, None)


@dataclass(frozen=True)
class Interval:
    """Closed interval ``[inf, sup]`` of the real line."""
    inf: float
    sup: float

    @property
    def size(self) -> float:
        return self.sup - self.inf

    @property
    def barycenter(self) -> float:
        return 0.5 * (self.inf + self.sup)


class IntervalsSet(AbstractRegion):
    """Region of the real line made of disjoint intervals.

    Parameters
    ----------
    lower, upper : float
        Bounds of a single interval; the whole line by default
    tolerance : float, optional
        Tolerance below which points are considered identical
    tree : BSPTree, optional
        Tree describing the region, takes precedence over the bounds
    """

    def __init__(self, lower: float = -math.inf, upper: float = math.inf,
                 tolerance: Optional[float] = None, tree: Optional[BSPTree] = None):
        tolerance = get_geometry_config().tolerance if tolerance is None else tolerance
        if tree is None:
            tree = self._build_tree(lower, upper, tolerance)
        super().__init__(tree, tolerance)

    @staticmethod
    def _build_tree(lower: float, upper: float, tolerance: float) -> BSPTree:
        if math.isinf(lower) and lower < 0:
            if math.isinf(upper) and upper > 0:
                # the whole real line
                return BSPTree(attribute=True)
            # open on the negative infinity side
            upper_cut = OrientedPoint(Vector1D(upper), True, tolerance).whole_hyperplane()
            return BSPTree(upper_cut, BSPTree(attribute=False), BSPTree(attribute=True), None)

        lower_cut = OrientedPoint(Vector1D(lower), False, tolerance).whole_hyperplane()
        if math.isinf(upper) and upper > 0:
            # open on the positive infinity side
            return BSPTree(lower_cut, BSPTree(attribute=False), BSPTree(attribute=True), None)

        upper_cut = OrientedPoint(Vector1D(upper), True, tolerance).whole_hyperplane()
        return BSPTree(lower_cut, BSPTree(attribute=False),
                       BSPTree(upper_cut, BSPTree(attribute=False), BSPTree(attribute=True), None),
                       None)

    def build_new(self, tree: BSPTree) -> "IntervalsSet":
        return IntervalsSet(tolerance=self.tolerance, tree=tree)

    @property
    def size(self) -> float:
        return sum(interval.size for interval in self.as_list())

    @property
    def inf(self) -> float:
        """Lowest value belonging to the set, -inf if unbounded below."""
        node = self.get_tree(False)
        inf = math.inf
        while node.cut is not None:
            op = node.cut.hyperplane
            inf = op.location.x
            node = node.minus if op.direct else node.plus
        return -math.inf if node.attribute else inf

    @property
    def sup(self) -> float:
        """Highest value belonging to the set, +inf if unbounded above."""
        node = self.get_tree(False)
        sup = -math.inf
        while node.cut is not None:
            op = node.cut.hyperplane
            sup = op.location.x
            node = node.plus if op.direct else node.minus
        return math.inf if node.attribute else sup

    def as_list(self) -> List[Interval]:
        """Build an ordered list of the disjoint intervals of the set.

        Adjacent inside cells separated by a useless cut are merged.
        """
        intervals = []
        bound = -math.inf
        start = None
        for node in self._in_order(self.get_tree(False)):
            if node.cut is not None:
                bound = node.cut.hyperplane.location.x
            elif node.attribute:
                if start is None:
                    start = bound
            elif start is not None:
                intervals.append(Interval(start, bound))
                start = None

        if start is not None:
            intervals.append(Interval(start, math.inf))
        return intervals

    def __iter__(self) -> Iterator[Interval]:
        return iter(self.as_list())

    @staticmethod
    def _in_order(node: BSPTree) -> Iterator[BSPTree]:
        # nodes by increasing abscissa
        if node.cut is None:
            yield node
            return
        if node.cut.hyperplane.direct:
            before, after = node.minus, node.plus
        else:
            before, after = node.plus, node.minus
        yield from IntervalsSet._in_order(before)
        yield node
        yield from IntervalsSet._in_order(after)

    def project_to_boundary(self, point: Vector1D) -> BoundaryProjection:
        """Project a point onto the nearest interval end.

        Infinite ends are not points: the projection is then None while the
        offset is still the (possibly infinite) distance.
        """
        x = point.x
        previous = -math.inf
        for interval in self.as_list():
            if x < interval.inf:
                # between the previous and the current intervals
                previous_offset = x - previous
                current_offset = interval.inf - x
                if previous_offset < current_offset:
                    return BoundaryProjection(point, self._finite_or_none(previous), previous_offset)
                return BoundaryProjection(point, self._finite_or_none(interval.inf), current_offset)
            elif x <= interval.sup:
                # within the current interval
                offset0 = interval.inf - x
                offset1 = x - interval.sup
                if offset0 < offset1:
                    return BoundaryProjection(point, self._finite_or_none(interval.sup), offset1)
                return BoundaryProjection(point, self._finite_or_none(interval.inf), offset0)
            previous = interval.sup

        # past the last interval
        return BoundaryProjection(point, self._finite_or_none(previous), x - previous)

    @staticmethod
    def _finite_or_none(x: float) -> Optional[Vector1D]:
        return None if math.isinf(x) else Vector1D(x)

    def __repr__(self) -> str:
        return f"IntervalsSet({[(i.inf, i.sup) for i in self.as_list()]})"
