"""
Projection of points onto region boundaries.
"""

import math
from typing import List, Optional

from ..space import Point
from .bsp_tree import BSPTree, BSPTreeVisitor, Order
from .hyperplane import Hyperplane
from .side import Location


class BoundaryProjection:
    """Nearest boundary point of a region and the signed distance to it.

    Parameters
    ----------
    original : Point
        Point that was projected
    projected : Point or None
        Nearest boundary point, None if the region has no boundary
    offset : float
        Signed distance: negative inside the region, positive outside,
        infinite when the region is empty (+) or the whole space (-)
    """

    def __init__(self, original: Point, projected: Optional[Point], offset: float):
        self.original = original
        self.projected = projected
        self.offset = offset

    def __repr__(self) -> str:
        return (f"BoundaryProjection(original={self.original!r}, projected={self.projected!r}, "
                f"offset={self.offset})")


class BoundaryProjector(BSPTreeVisitor):
    """Visitor finding the boundary point nearest to a query point.

    The tree must carry boundary attributes. At each node the side holding
    the query point is visited first, so the first leaf reached is the
    cell containing the point and gives the sign of the offset.
    """

    def __init__(self, original: Point):
        self.original = original
        self.projected: Optional[Point] = None
        self.leaf: Optional[BSPTree] = None
        self.offset = math.inf

    def visit_order(self, node: BSPTree) -> Order:
        if node.cut.hyperplane.get_offset(self.original) <= 0:
            return Order.MINUS_SUB_PLUS
        return Order.PLUS_SUB_MINUS

    def visit_internal_node(self, node: BSPTree) -> None:
        hyperplane = node.cut.hyperplane
        signed_offset = hyperplane.get_offset(self.original)
        if abs(signed_offset) >= self.offset:
            return

        regular = hyperplane.project(self.original)
        boundary_parts = self._boundary_regions(node)

        for part in boundary_parts:
            if self._belongs_to_part(regular, hyperplane, part):
                self.projected = regular
                self.offset = abs(signed_offset)
                return

        # the regular projection misses the boundary, try its singular points
        for part in boundary_parts:
            singular = self._singular_projection(regular, hyperplane, part)
            if singular is not None:
                distance = self.original.distance(singular)
                if distance < self.offset:
                    self.projected = singular
                    self.offset = distance

    def visit_leaf_node(self, node: BSPTree) -> None:
        if self.leaf is None:
            # first leaf visited is the cell containing the point
            self.leaf = node

    def get_projection(self) -> BoundaryProjection:
        offset = math.copysign(self.offset, -1.0 if self.leaf.attribute else 1.0)
        return BoundaryProjection(self.original, self.projected, offset)

    @staticmethod
    def _boundary_regions(node: BSPTree) -> List:
        regions = []
        attribute = node.attribute
        for sub in (attribute.plus_inside, attribute.plus_outside):
            if sub is not None and sub.remaining_region is not None:
                regions.append(sub.remaining_region)
        return regions

    @staticmethod
    def _belongs_to_part(point: Point, hyperplane: Hyperplane, part) -> bool:
        return part.check_point(hyperplane.to_sub_space(point)) != Location.OUTSIDE

    @staticmethod
    def _singular_projection(point: Point, hyperplane: Hyperplane, part) -> Optional[Point]:
        projection = part.project_to_boundary(hyperplane.to_sub_space(point))
        if projection.projected is None:
            return None
        return hyperplane.to_space(projection.projected)
