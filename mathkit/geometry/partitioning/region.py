"""
Regions of a space represented by BSP trees.

A region is the set of points falling in leaves whose attribute is True.
``AbstractRegion`` implements everything that does not depend on the
concrete geometry; subclasses provide ``build_new`` and ``size``.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence

from ...core.base.exceptions import GeometryError
from ...core.config.settings import get_geometry_config
from ..space import Point
from .boundary_projection import BoundaryProjection, BoundaryProjector
from .bsp_tree import BoundaryAttribute, BSPTree, BSPTreeVisitor, Order
from .hyperplane import Hyperplane
from .region_factory import RegionFactory
from .side import Location, Side
from .sub_hyperplane import SubHyperplane


class AbstractRegion(ABC):
    """Region backed by a BSP tree with boolean leaf attributes.

    Parameters
    ----------
    tree : BSPTree, optional
        Tree describing the region; the whole space when omitted. The tree
        is used as is, not copied.
    tolerance : float, optional
        Distance below which points are considered identical; defaults to
        the configured geometry tolerance
    """

    def __init__(self, tree: Optional[BSPTree] = None, tolerance: Optional[float] = None):
        self._tree = tree if tree is not None else BSPTree(attribute=True)
        self._tolerance = get_geometry_config().tolerance if tolerance is None else tolerance

    @classmethod
    def from_boundary(cls, boundary: Iterable[SubHyperplane], tolerance: Optional[float] = None):
        """Build a region from the sub-hyperplanes bounding it.

        Each boundary element must have the inside of the region on its
        minus side. The largest elements are inserted first.
        """
        return cls(tree=build_tree_from_boundary(boundary), tolerance=tolerance)

    @classmethod
    def from_hyperplanes(cls, hyperplanes: Sequence[Hyperplane], tolerance: Optional[float] = None):
        """Build a convex region bounded by hyperplanes (inside on their minus side).

        An empty hyperplane list gives the empty region.
        """
        if not hyperplanes:
            return cls(tree=BSPTree(attribute=False), tolerance=tolerance)

        convex = RegionFactory().build_convex(*hyperplanes)
        return cls(tree=convex.get_tree(False), tolerance=tolerance)

    @abstractmethod
    def build_new(self, tree: BSPTree) -> "AbstractRegion":
        """Build a region of the same type and tolerance from a tree."""
        pass

    @property
    @abstractmethod
    def size(self) -> float:
        """Size of the region (length, area, ...)."""
        pass

    @property
    def tolerance(self) -> float:
        return self._tolerance

    def copy_self(self) -> "AbstractRegion":
        return self.build_new(self._tree.copy_self())

    def is_empty(self, node: Optional[BSPTree] = None) -> bool:
        """Check whether the region (or the sub-tree at ``node``) has no inside cell."""
        node = self._tree if node is None else node
        if node.cut is None:
            return not node.attribute
        return self.is_empty(node.minus) and self.is_empty(node.plus)

    def is_full(self, node: Optional[BSPTree] = None) -> bool:
        """Check whether the region (or the sub-tree at ``node``) has no outside cell."""
        node = self._tree if node is None else node
        if node.cut is None:
            return bool(node.attribute)
        return self.is_full(node.minus) and self.is_full(node.plus)

    def contains(self, region: "AbstractRegion") -> bool:
        """Check whether another region is entirely inside this one.

        Neither region is modified.
        """
        return RegionFactory().difference(region.copy_self(), self.copy_self()).is_empty()

    def check_point(self, point: Point, node: Optional[BSPTree] = None) -> Location:
        """Locate a point with respect to the region."""
        node = self._tree if node is None else node
        cell = node.get_cell(point, self._tolerance)
        if cell.cut is None:
            return Location.INSIDE if cell.attribute else Location.OUTSIDE

        # the point lies on a cut, it is on the boundary unless both sides agree
        minus_code = self.check_point(point, cell.minus)
        plus_code = self.check_point(point, cell.plus)
        return minus_code if minus_code == plus_code else Location.BOUNDARY

    def get_tree(self, include_boundary_attributes: bool) -> BSPTree:
        """Underlying tree, optionally with ``BoundaryAttribute`` set on internal nodes."""
        if include_boundary_attributes and self._tree.cut is not None and self._tree.attribute is None:
            self._tree.visit(BoundaryBuilder())
        return self._tree

    def project_to_boundary(self, point: Point) -> BoundaryProjection:
        """Project a point onto the boundary of the region."""
        projector = BoundaryProjector(point)
        self.get_tree(True).visit(projector)
        return projector.get_projection()

    @property
    def boundary_size(self) -> float:
        visitor = BoundarySizeVisitor()
        self.get_tree(True).visit(visitor)
        return visitor.size

    def side(self, hyperplane: Hyperplane) -> Side:
        """Position of the region with respect to a hyperplane.

        Returns HYPER only when the region has no inside cell touching
        either side of the hyperplane.
        """
        sides = _Sides()
        self._recurse_sides(self._tree, hyperplane.whole_hyperplane(), sides)
        if sides.plus_found:
            return Side.BOTH if sides.minus_found else Side.PLUS
        return Side.MINUS if sides.minus_found else Side.HYPER

    def _recurse_sides(self, node: BSPTree, sub: SubHyperplane, sides: "_Sides") -> None:
        if node.cut is None:
            if node.attribute:
                # an inside cell expanding across the hyperplane
                sides.plus_found = True
                sides.minus_found = True
            return

        hyperplane = node.cut.hyperplane
        position = sub.side(hyperplane)
        if position == Side.PLUS:
            if node.cut.side(sub.hyperplane) == Side.PLUS:
                if not self.is_empty(node.minus):
                    sides.plus_found = True
            elif not self.is_empty(node.minus):
                sides.minus_found = True
            if not sides.done():
                self._recurse_sides(node.plus, sub, sides)
        elif position == Side.MINUS:
            if node.cut.side(sub.hyperplane) == Side.PLUS:
                if not self.is_empty(node.plus):
                    sides.plus_found = True
            elif not self.is_empty(node.plus):
                sides.minus_found = True
            if not sides.done():
                self._recurse_sides(node.minus, sub, sides)
        elif position == Side.BOTH:
            split = sub.split(hyperplane)
            self._recurse_sides(node.plus, split.plus, sides)
            if not sides.done():
                self._recurse_sides(node.minus, split.minus, sides)
        else:
            # the sub-hyperplane lies on the cut hyperplane
            plus_filled = node.plus.cut is not None or bool(node.plus.attribute)
            minus_filled = node.minus.cut is not None or bool(node.minus.attribute)
            if node.cut.hyperplane.same_orientation_as(sub.hyperplane):
                sides.plus_found = sides.plus_found or plus_filled
                sides.minus_found = sides.minus_found or minus_filled
            else:
                sides.minus_found = sides.minus_found or plus_filled
                sides.plus_found = sides.plus_found or minus_filled

    def intersection(self, sub: SubHyperplane) -> Optional[SubHyperplane]:
        """Part of a sub-hyperplane lying inside the region, None if there is none."""
        return self._recurse_intersection(self._tree, sub)

    def _recurse_intersection(self, node: BSPTree, sub: Optional[SubHyperplane]) -> Optional[SubHyperplane]:
        if sub is None:
            return None
        if node.cut is None:
            return sub.copy_self() if node.attribute else None

        hyperplane = node.cut.hyperplane
        position = sub.side(hyperplane)
        if position == Side.PLUS:
            return self._recurse_intersection(node.plus, sub)
        elif position == Side.MINUS:
            return self._recurse_intersection(node.minus, sub)
        elif position == Side.BOTH:
            split = sub.split(hyperplane)
            plus = self._recurse_intersection(node.plus, split.plus)
            minus = self._recurse_intersection(node.minus, split.minus)
            if plus is None:
                return minus
            elif minus is None:
                return plus
            return plus.reunite(minus)
        return self._recurse_intersection(node.plus, self._recurse_intersection(node.minus, sub))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(tolerance={self._tolerance})"


class _Sides:
    """Flags collected while locating a region with respect to a hyperplane."""

    def __init__(self):
        self.plus_found = False
        self.minus_found = False

    def done(self) -> bool:
        return self.plus_found and self.minus_found


def build_tree_from_boundary(boundary: Iterable[SubHyperplane]) -> BSPTree:
    """Build a tree whose inside lies on the minus side of every boundary element."""
    boundary = list(boundary)
    if not boundary:
        return BSPTree(attribute=True)

    # stable sort keeps equal-size elements
    ordered = sorted(boundary, key=lambda sub: sub.size, reverse=True)
    tree = BSPTree()
    _insert_cuts(tree, ordered)
    tree.visit(_InsideMarker())
    return tree


def _insert_cuts(node: BSPTree, boundary: List[SubHyperplane]) -> None:
    index = 0
    inserted = None
    while inserted is None and index < len(boundary):
        inserted = boundary[index].hyperplane
        index += 1
        if not node.insert_cut(inserted.copy_self()):
            inserted = None

    if index >= len(boundary):
        return

    # distribute the remaining edges in the two sub-trees
    plus_list: List[SubHyperplane] = []
    minus_list: List[SubHyperplane] = []
    for other in boundary[index:]:
        position = other.side(inserted)
        if position == Side.PLUS:
            plus_list.append(other)
        elif position == Side.MINUS:
            minus_list.append(other)
        elif position == Side.BOTH:
            split = other.split(inserted)
            plus_list.append(split.plus)
            minus_list.append(split.minus)
        # elements on the cut hyperplane are already represented

    _insert_cuts(node.plus, plus_list)
    _insert_cuts(node.minus, minus_list)


class _InsideMarker(BSPTreeVisitor):
    """Flags minus-side leaves as inside after building from a boundary."""

    def visit_order(self, node: BSPTree) -> Order:
        return Order.PLUS_SUB_MINUS

    def visit_internal_node(self, node: BSPTree) -> None:
        pass

    def visit_leaf_node(self, node: BSPTree) -> None:
        node.attribute = node.parent is None or node is node.parent.minus


class BoundaryBuilder(BSPTreeVisitor):
    """Visitor computing the ``BoundaryAttribute`` of every internal node."""

    def visit_order(self, node: BSPTree) -> Order:
        return Order.PLUS_MINUS_SUB

    def visit_internal_node(self, node: BSPTree) -> None:
        plus_outside = None
        plus_inside = None

        # characterize the cut with respect to the plus sub-tree first
        plus_char = [None, None]
        self.characterize(node.plus, node.cut.copy_self(), plus_char)

        if plus_char[0] is not None and not plus_char[0].is_empty():
            # outside on the plus side, look for inside cells on the minus side
            minus_char = [None, None]
            self.characterize(node.minus, plus_char[0], minus_char)
            if minus_char[1] is not None and not minus_char[1].is_empty():
                plus_outside = minus_char[1]

        if plus_char[1] is not None and not plus_char[1].is_empty():
            # inside on the plus side, look for outside cells on the minus side
            minus_char = [None, None]
            self.characterize(node.minus, plus_char[1], minus_char)
            if minus_char[0] is not None and not minus_char[0].is_empty():
                plus_inside = minus_char[0]

        node.attribute = BoundaryAttribute(plus_outside, plus_inside)

    def visit_leaf_node(self, node: BSPTree) -> None:
        pass

    def characterize(self, node: BSPTree, sub: SubHyperplane, characterization: list) -> None:
        """Split ``sub`` into its parts facing outside (index 0) and inside (index 1) cells."""
        if node.cut is None:
            index = 1 if node.attribute else 0
            if characterization[index] is None:
                characterization[index] = sub
            else:
                characterization[index] = characterization[index].reunite(sub)
            return

        hyperplane = node.cut.hyperplane
        position = sub.side(hyperplane)
        if position == Side.PLUS:
            self.characterize(node.plus, sub, characterization)
        elif position == Side.MINUS:
            self.characterize(node.minus, sub, characterization)
        elif position == Side.BOTH:
            split = sub.split(hyperplane)
            self.characterize(node.plus, split.plus, characterization)
            self.characterize(node.minus, split.minus, characterization)
        else:
            raise GeometryError("Cut sub-hyperplane lies on an inner cut hyperplane",
                                operation="characterize")


class BoundarySizeVisitor(BSPTreeVisitor):
    """Visitor summing the sizes of all boundary parts."""

    def __init__(self):
        self.size = 0.0

    def visit_order(self, node: BSPTree) -> Order:
        return Order.MINUS_SUB_PLUS

    def visit_internal_node(self, node: BSPTree) -> None:
        attribute = node.attribute
        if attribute.plus_outside is not None:
            self.size += attribute.plus_outside.size
        if attribute.plus_inside is not None:
            self.size += attribute.plus_inside.size

    def visit_leaf_node(self, node: BSPTree) -> None:
        pass
