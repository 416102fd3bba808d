"""
Two-dimensional Euclidean geometry.

Hyperplanes of the plane are oriented lines embedding the real line; their
sub-hyperplanes carry an ``IntervalsSet`` describing which part of the line
they cover. Regions are polygons, possibly non-convex, with holes or
unbounded.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ...core.config.settings import get_geometry_config
from ..space import Point, Space
from ..partitioning.bsp_tree import BSPTree, BSPTreeVisitor, Order
from ..partitioning.hyperplane import Embedding, Hyperplane
from ..partitioning.region import AbstractRegion
from ..partitioning.side import Location, Side
from ..partitioning.sub_hyperplane import AbstractSubHyperplane, SplitSubHyperplane
from .oned import EUCLIDEAN_1D, IntervalsSet, OrientedPoint, Vector1D


class Euclidean2D(Space):
    """The Euclidean plane."""

    @property
    def dimension(self) -> int:
        return 2

    @property
    def sub_space(self) -> Space:
        return EUCLIDEAN_1D


EUCLIDEAN_2D = Euclidean2D()


@dataclass(frozen=True)
class Vector2D(Point):
    """Point of the plane."""
    x: float
    y: float

    @property
    def space(self) -> Space:
        return EUCLIDEAN_2D

    def distance(self, other: "Vector2D") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def is_nan(self) -> bool:
        return math.isnan(self.x) or math.isnan(self.y)


class Line(Hyperplane, Embedding):
    """Oriented line of the plane.

    The line is directed from ``p1`` to ``p2``. Its minus side is on the
    left of the direction, so counter-clockwise loops enclose their inside.
    Abscissas along the line define the embedding into the real line.

    Parameters
    ----------
    p1, p2 : Vector2D
        Two points of the line
    tolerance : float, optional
        Tolerance below which points are considered identical
    """

    def __init__(self, p1: Vector2D, p2: Vector2D, tolerance: Optional[float] = None):
        self._tolerance = get_geometry_config().tolerance if tolerance is None else tolerance
        dx = p2.x - p1.x
        dy = p2.y - p1.y
        d = math.hypot(dx, dy)
        if d == 0.0:
            self.angle = 0.0
            self.cos = 1.0
            self.sin = 0.0
            self.origin_offset = p1.y
        else:
            self.angle = math.pi + math.atan2(-dy, -dx)
            self.cos = math.cos(self.angle)
            self.sin = math.sin(self.angle)
            self.origin_offset = (p2.x * p1.y - p1.x * p2.y) / d

    @classmethod
    def from_angle(cls, point: Vector2D, angle: float, tolerance: Optional[float] = None) -> "Line":
        """Build the line through ``point`` with direction ``angle`` (radians)."""
        angle = angle % (2 * math.pi)
        cos = math.cos(angle)
        sin = math.sin(angle)
        return cls._from_parameters(angle, cos, sin, cos * point.y - sin * point.x, tolerance)

    @classmethod
    def _from_parameters(cls, angle, cos, sin, origin_offset, tolerance) -> "Line":
        line = cls.__new__(cls)
        line._tolerance = get_geometry_config().tolerance if tolerance is None else tolerance
        line.angle = angle
        line.cos = cos
        line.sin = sin
        line.origin_offset = origin_offset
        return line

    def copy_self(self) -> "Line":
        return Line._from_parameters(self.angle, self.cos, self.sin, self.origin_offset, self._tolerance)

    @property
    def reverse(self) -> "Line":
        """Line with the same points and the opposite direction."""
        angle = self.angle + math.pi if self.angle < math.pi else self.angle - math.pi
        return Line._from_parameters(angle, -self.cos, -self.sin, -self.origin_offset, self._tolerance)

    @property
    def tolerance(self) -> float:
        return self._tolerance

    def get_offset(self, point: Vector2D) -> float:
        return self.sin * point.x - self.cos * point.y + self.origin_offset

    def get_line_offset(self, line: "Line") -> float:
        """Offset of a parallel line, positive when it lies on the plus side."""
        if self.cos * line.cos + self.sin * line.sin > 0:
            return self.origin_offset - line.origin_offset
        return self.origin_offset + line.origin_offset

    def to_sub_space(self, point: Vector2D) -> Vector1D:
        return Vector1D(self.cos * point.x + self.sin * point.y)

    def to_space(self, point: Vector1D) -> Vector2D:
        abscissa = point.x
        return Vector2D(abscissa * self.cos - self.origin_offset * self.sin,
                        abscissa * self.sin + self.origin_offset * self.cos)

    def project(self, point: Vector2D) -> Vector2D:
        return self.to_space(self.to_sub_space(point))

    def intersection(self, other: "Line") -> Optional[Vector2D]:
        """Intersection point with another line, None if they are parallel."""
        d = self.sin * other.cos - other.sin * self.cos
        if abs(d) < self._tolerance:
            return None
        return Vector2D((self.cos * other.origin_offset - other.cos * self.origin_offset) / d,
                        (self.sin * other.origin_offset - other.sin * self.origin_offset) / d)

    def same_orientation_as(self, other: "Line") -> bool:
        return self.sin * other.sin + self.cos * other.cos >= 0.0

    def contains(self, point: Vector2D) -> bool:
        return abs(self.get_offset(point)) < self._tolerance

    def distance(self, point: Vector2D) -> float:
        return abs(self.get_offset(point))

    def is_parallel_to(self, line: "Line") -> bool:
        return abs(self.sin * line.cos - self.cos * line.sin) < self._tolerance

    def whole_hyperplane(self) -> "SubLine":
        return SubLine(self, IntervalsSet(tolerance=self._tolerance))

    def whole_space(self) -> "PolygonsSet":
        return PolygonsSet(tolerance=self._tolerance)

    def __repr__(self) -> str:
        return f"Line(angle={self.angle}, origin_offset={self.origin_offset})"


@dataclass(frozen=True)
class Segment:
    """Oriented segment lying on a line."""
    start: Vector2D
    end: Vector2D
    line: Line

    @property
    def length(self) -> float:
        return self.start.distance(self.end)


class SubLine(AbstractSubHyperplane):
    """Part of a line, described by an ``IntervalsSet`` of abscissas."""

    @classmethod
    def from_points(cls, start: Vector2D, end: Vector2D, tolerance: Optional[float] = None) -> "SubLine":
        """Build the segment from ``start`` to ``end``."""
        line = Line(start, end, tolerance)
        return cls(line, cls._build_intervals_set(line, start, end))

    @classmethod
    def from_segment(cls, segment: Segment) -> "SubLine":
        return cls(segment.line, cls._build_intervals_set(segment.line, segment.start, segment.end))

    @staticmethod
    def _build_intervals_set(line: Line, start: Vector2D, end: Vector2D) -> IntervalsSet:
        return IntervalsSet(line.to_sub_space(start).x, line.to_sub_space(end).x, line.tolerance)

    def build_new(self, hyperplane: Line, remaining_region: IntervalsSet) -> "SubLine":
        return SubLine(hyperplane, remaining_region)

    @property
    def segments(self) -> List[Segment]:
        """Segments covered by the sub-line, in increasing abscissa order."""
        line = self.hyperplane
        return [Segment(line.to_space(Vector1D(interval.inf)), line.to_space(Vector1D(interval.sup)), line)
                for interval in self.remaining_region.as_list()]

    def intersection(self, sub_line: "SubLine", include_end_points: bool) -> Optional[Vector2D]:
        """Intersection point with another sub-line.

        Parameters
        ----------
        sub_line : SubLine
            Other sub-line
        include_end_points : bool
            If True, an intersection at an end point of either sub-line counts

        Returns
        -------
        Vector2D or None
            Intersection point, None if the sub-lines do not meet
        """
        line1 = self.hyperplane
        line2 = sub_line.hyperplane
        crossing = line1.intersection(line2)
        if crossing is None:
            return None

        loc1 = self.remaining_region.check_point(line1.to_sub_space(crossing))
        loc2 = sub_line.remaining_region.check_point(line2.to_sub_space(crossing))
        if include_end_points:
            return crossing if loc1 != Location.OUTSIDE and loc2 != Location.OUTSIDE else None
        return crossing if loc1 == Location.INSIDE and loc2 == Location.INSIDE else None

    def side(self, hyperplane: Line) -> Side:
        this_line = self.hyperplane
        crossing = this_line.intersection(hyperplane)
        if crossing is None:
            # parallel lines
            threshold = get_geometry_config().parallel_threshold
            global_offset = hyperplane.get_line_offset(this_line)
            if global_offset < -threshold:
                return Side.MINUS
            elif global_offset > threshold:
                return Side.PLUS
            return Side.HYPER

        direct = math.sin(this_line.angle - hyperplane.angle) < 0
        x = this_line.to_sub_space(crossing)
        return self.remaining_region.side(OrientedPoint(x, direct, this_line.tolerance))

    def split(self, hyperplane: Line) -> SplitSubHyperplane:
        this_line = self.hyperplane
        crossing = this_line.intersection(hyperplane)
        tolerance = this_line.tolerance
        if crossing is None:
            threshold = get_geometry_config().parallel_threshold
            if hyperplane.get_line_offset(this_line) < -threshold:
                return SplitSubHyperplane(None, self)
            return SplitSubHyperplane(self, None)

        direct = math.sin(this_line.angle - hyperplane.angle) < 0
        x = this_line.to_sub_space(crossing)
        sub_plus = OrientedPoint(x, not direct, tolerance).whole_hyperplane()
        sub_minus = OrientedPoint(x, direct, tolerance).whole_hyperplane()

        remaining = self.remaining_region
        split_tree = remaining.get_tree(False).split(sub_minus)
        if remaining.is_empty(split_tree.plus):
            plus_tree = BSPTree(attribute=False)
        else:
            plus_tree = BSPTree(sub_plus, BSPTree(attribute=False), split_tree.plus, None)
        if remaining.is_empty(split_tree.minus):
            minus_tree = BSPTree(attribute=False)
        else:
            minus_tree = BSPTree(sub_minus, BSPTree(attribute=False), split_tree.minus, None)

        return SplitSubHyperplane(
            SubLine(this_line.copy_self(), IntervalsSet(tolerance=tolerance, tree=plus_tree)),
            SubLine(this_line.copy_self(), IntervalsSet(tolerance=tolerance, tree=minus_tree)))

    def __repr__(self) -> str:
        return f"SubLine({self.hyperplane!r}, {self.remaining_region!r})"


class PolygonsSet(AbstractRegion):
    """Region of the plane bounded by lines.

    Parameters
    ----------
    tree : BSPTree, optional
        Tree describing the region; the whole plane when omitted
    tolerance : float, optional
        Tolerance below which points are considered identical
    """

    def __init__(self, tree: Optional[BSPTree] = None, tolerance: Optional[float] = None):
        super().__init__(tree, tolerance)
        self._properties = None

    @classmethod
    def box(cls, x_min: float, x_max: float, y_min: float, y_max: float,
            tolerance: Optional[float] = None) -> "PolygonsSet":
        """Build an axis-aligned rectangle; too thin boxes give the empty region."""
        tol = get_geometry_config().tolerance if tolerance is None else tolerance
        if x_min >= x_max - tol or y_min >= y_max - tol:
            return cls.from_hyperplanes([], tolerance=tol)

        min_min = Vector2D(x_min, y_min)
        min_max = Vector2D(x_min, y_max)
        max_min = Vector2D(x_max, y_min)
        max_max = Vector2D(x_max, y_max)
        return cls.from_hyperplanes([Line(min_min, max_min, tol), Line(max_min, max_max, tol),
                                     Line(max_max, min_max, tol), Line(min_max, min_min, tol)],
                                    tolerance=tol)

    @classmethod
    def from_vertices(cls, vertices: Sequence[Vector2D], tolerance: Optional[float] = None) -> "PolygonsSet":
        """Build a polygon from a simple loop of vertices.

        The inside is on the left of the path; the loop is closed
        implicitly. Consecutive duplicate vertices are ignored and an empty
        list gives the whole plane.
        """
        tol = get_geometry_config().tolerance if tolerance is None else tolerance
        edges = []
        n = len(vertices)
        for i in range(n):
            start = vertices[i]
            end = vertices[(i + 1) % n]
            if start.distance(end) <= tol:
                continue
            edges.append(SubLine.from_points(start, end, tol))
        return cls.from_boundary(edges, tolerance=tol)

    def build_new(self, tree: BSPTree) -> "PolygonsSet":
        return PolygonsSet(tree, self.tolerance)

    @property
    def size(self) -> float:
        """Area of the region, infinite for unbounded regions."""
        return self._get_properties()[0]

    @property
    def barycenter(self) -> Vector2D:
        """Barycenter of the region, NaN coordinates for unbounded regions."""
        return self._get_properties()[1]

    def _get_properties(self):
        if self._properties is None:
            self._properties = self._compute_properties()
        return self._properties

    def _compute_properties(self):
        tree = self.get_tree(True)
        if tree.cut is None:
            if tree.attribute:
                return math.inf, Vector2D(math.nan, math.nan)
            return 0.0, Vector2D(0.0, 0.0)

        accumulator = _ShoelaceAccumulator()
        tree.visit(accumulator)
        if accumulator.unbounded or accumulator.total < 0:
            # open boundary, or a hole with nothing around it
            return math.inf, Vector2D(math.nan, math.nan)
        if accumulator.total == 0:
            return 0.0, Vector2D(0.0, 0.0)

        return (accumulator.total / 2,
                Vector2D(accumulator.sum_x / (3 * accumulator.total),
                         accumulator.sum_y / (3 * accumulator.total)))

    def get_boundary_segments(self) -> List[Segment]:
        """Boundary segments, each oriented with the inside on its left."""
        collector = _ShoelaceAccumulator()
        self.get_tree(True).visit(collector)
        return collector.segments


class _ShoelaceAccumulator(BSPTreeVisitor):
    """Collects oriented boundary segments and their shoelace sums."""

    def __init__(self):
        self.segments: List[Segment] = []
        self.unbounded = False
        self.total = 0.0
        self.sum_x = 0.0
        self.sum_y = 0.0

    def visit_order(self, node: BSPTree) -> Order:
        return Order.MINUS_SUB_PLUS

    def visit_internal_node(self, node: BSPTree) -> None:
        attribute = node.attribute
        if attribute.plus_outside is not None:
            for segment in attribute.plus_outside.segments:
                self._add(segment)
        if attribute.plus_inside is not None:
            for segment in attribute.plus_inside.segments:
                self._add(Segment(segment.end, segment.start, segment.line.reverse))

    def visit_leaf_node(self, node: BSPTree) -> None:
        pass

    def _add(self, segment: Segment) -> None:
        self.segments.append(segment)
        x0, y0 = segment.start.x, segment.start.y
        x1, y1 = segment.end.x, segment.end.y
        if not all(math.isfinite(v) for v in (x0, y0, x1, y1)):
            self.unbounded = True
            return
        factor = x0 * y1 - y0 * x1
        self.total += factor
        self.sum_x += factor * (x0 + x1)
        self.sum_y += factor * (y0 + y1)
