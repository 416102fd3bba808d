"""
Binary space partitioning trees.

Each node is either a leaf carrying an arbitrary attribute (typically a
boolean inside/outside flag), or an internal node carrying a cut
sub-hyperplane and two children. The plus child covers the plus side of the
cut hyperplane and the minus child the minus side.

Operations that restructure trees (``insert_cut``, ``merge``,
``insert_in_tree``) mutate the nodes they are given. Trees passed to
``merge`` are consumed and must not be reused by the caller.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, List, Optional

from ...core.base.exceptions import GeometryError
from ..space import Point
from .hyperplane import Hyperplane
from .side import Side


class Order(Enum):
    """Visit orders of an internal node, its plus sub-tree and its minus sub-tree."""

    PLUS_MINUS_SUB = "plus_minus_sub"
    PLUS_SUB_MINUS = "plus_sub_minus"
    MINUS_PLUS_SUB = "minus_plus_sub"
    MINUS_SUB_PLUS = "minus_sub_plus"
    SUB_PLUS_MINUS = "sub_plus_minus"
    SUB_MINUS_PLUS = "sub_minus_plus"


class BSPTreeVisitor(ABC):
    """Visitor negotiating its traversal order at each internal node."""

    @abstractmethod
    def visit_order(self, node: "BSPTree") -> Order:
        """Choose the order in which the node and its sub-trees are visited."""
        pass

    @abstractmethod
    def visit_internal_node(self, node: "BSPTree") -> None:
        pass

    @abstractmethod
    def visit_leaf_node(self, node: "BSPTree") -> None:
        pass


class LeafMerger(ABC):
    """Strategy deciding what to keep when a merge reaches a leaf."""

    @abstractmethod
    def merge(self, leaf: "BSPTree", tree: "BSPTree", parent_tree: Optional["BSPTree"],
              is_plus_child: bool, leaf_from_instance: bool) -> "BSPTree":
        """Merge a leaf node and a tree node.

        Parameters
        ----------
        leaf : BSPTree
            Leaf node (its cut is None)
        tree : BSPTree
            Node to merge with the leaf, a leaf or an internal node
        parent_tree : BSPTree or None
            Parent of the merged node, None at the root
        is_plus_child : bool
            True if the merged node is the plus child of ``parent_tree``
        leaf_from_instance : bool
            True if ``leaf`` comes from the tree ``merge`` was called on

        Returns
        -------
        BSPTree
            Merged node, already inserted below ``parent_tree``
        """
        pass


class BoundaryAttribute:
    """Boundary parts of a cut sub-hyperplane, stored on internal nodes.

    ``plus_outside`` has the outside of the region on its plus side and
    the inside on its minus side; ``plus_inside`` is the reverse. Either
    part may be None.
    """

    def __init__(self, plus_outside, plus_inside):
        self.plus_outside = plus_outside
        self.plus_inside = plus_inside

    def __repr__(self) -> str:
        return f"BoundaryAttribute(plus_outside={self.plus_outside!r}, plus_inside={self.plus_inside!r})"


class BSPTree:
    """Node of a binary space partitioning tree.

    Parameters
    ----------
    cut : SubHyperplane, optional
        Cut of an internal node; None builds a leaf
    plus, minus : BSPTree, optional
        Children of an internal node, both required when ``cut`` is given
    attribute : Any, optional
        Leaf attribute, or transient attribute of an internal node
    """

    def __init__(self, cut=None, plus: Optional["BSPTree"] = None,
                 minus: Optional["BSPTree"] = None, attribute: Any = None):
        if (cut is None) != (plus is None and minus is None) or ((plus is None) != (minus is None)):
            raise GeometryError("An internal node needs a cut and two children, a leaf needs none",
                                operation="BSPTree")
        self.cut = cut
        self.plus = plus
        self.minus = minus
        self.parent: Optional["BSPTree"] = None
        self.attribute = attribute
        if cut is not None:
            plus.parent = self
            minus.parent = self

    def is_leaf(self) -> bool:
        return self.cut is None

    def insert_cut(self, hyperplane: Hyperplane) -> bool:
        """Turn this node into an internal node cut by a hyperplane.

        The hyperplane is first restricted to the cell of the node by
        splitting it with every ancestor cut. Any previous children are
        dropped.

        Returns
        -------
        bool
            False if the hyperplane does not cross the cell; the node is then
            left as a leaf with its attribute unchanged
        """
        if self.cut is not None:
            self.plus.parent = None
            self.minus.parent = None

        chopped = self._fit_to_cell(hyperplane.whole_hyperplane())
        if chopped is None or chopped.is_empty():
            self.cut = None
            self.plus = None
            self.minus = None
            return False

        self.cut = chopped
        self.plus = BSPTree()
        self.plus.parent = self
        self.minus = BSPTree()
        self.minus.parent = self
        return True

    def copy_self(self) -> "BSPTree":
        """Deep copy of the sub-tree rooted at this node (attributes are shared)."""
        if self.cut is None:
            return BSPTree(attribute=self.attribute)
        return BSPTree(self.cut.copy_self(), self.plus.copy_self(), self.minus.copy_self(),
                       self.attribute)

    def visit(self, visitor: BSPTreeVisitor) -> None:
        """Visit the sub-tree in the orders negotiated by the visitor."""
        if self.cut is None:
            visitor.visit_leaf_node(self)
            return

        order = visitor.visit_order(self)
        if order == Order.PLUS_MINUS_SUB:
            self.plus.visit(visitor)
            self.minus.visit(visitor)
            visitor.visit_internal_node(self)
        elif order == Order.PLUS_SUB_MINUS:
            self.plus.visit(visitor)
            visitor.visit_internal_node(self)
            self.minus.visit(visitor)
        elif order == Order.MINUS_PLUS_SUB:
            self.minus.visit(visitor)
            self.plus.visit(visitor)
            visitor.visit_internal_node(self)
        elif order == Order.MINUS_SUB_PLUS:
            self.minus.visit(visitor)
            visitor.visit_internal_node(self)
            self.plus.visit(visitor)
        elif order == Order.SUB_PLUS_MINUS:
            visitor.visit_internal_node(self)
            self.plus.visit(visitor)
            self.minus.visit(visitor)
        elif order == Order.SUB_MINUS_PLUS:
            visitor.visit_internal_node(self)
            self.minus.visit(visitor)
            self.plus.visit(visitor)
        else:
            raise GeometryError(f"Unknown visit order: {order!r}", operation="visit")

    def _fit_to_cell(self, sub):
        s = sub
        tree = self
        while tree.parent is not None and s is not None:
            parts = s.split(tree.parent.cut.hyperplane)
            s = parts.plus if tree is tree.parent.plus else parts.minus
            tree = tree.parent
        return s

    def get_cell(self, point: Point, tolerance: float) -> "BSPTree":
        """Get the cell containing a point.

        Returns
        -------
        BSPTree
            Leaf containing the point, or the internal node whose cut lies
            within ``tolerance`` of the point
        """
        if self.cut is None:
            return self

        offset = self.cut.hyperplane.get_offset(point)
        if abs(offset) < tolerance:
            return self
        elif offset <= 0:
            return self.minus.get_cell(point, tolerance)
        else:
            return self.plus.get_cell(point, tolerance)

    def get_close_cuts(self, point: Point, max_offset: float) -> List["BSPTree"]:
        """Internal nodes whose cut hyperplane lies within ``max_offset`` of a point."""
        close: List[BSPTree] = []
        self._recurse_close_cuts(point, max_offset, close)
        return close

    def _recurse_close_cuts(self, point: Point, max_offset: float, close: List["BSPTree"]) -> None:
        if self.cut is None:
            return

        offset = self.cut.hyperplane.get_offset(point)
        if offset < -max_offset:
            self.minus._recurse_close_cuts(point, max_offset, close)
        elif offset > max_offset:
            self.plus._recurse_close_cuts(point, max_offset, close)
        else:
            close.append(self)
            self.minus._recurse_close_cuts(point, max_offset, close)
            self.plus._recurse_close_cuts(point, max_offset, close)

    def condense(self) -> None:
        """Collapse an internal node whose two leaf children carry the same attribute."""
        if (self.cut is not None and self.plus.cut is None and self.minus.cut is None and
                ((self.plus.attribute is None and self.minus.attribute is None) or
                 (self.plus.attribute is not None and self.plus.attribute == self.minus.attribute))):
            self.attribute = self.minus.attribute if self.plus.attribute is None else self.plus.attribute
            self.cut = None
            self.plus = None
            self.minus = None

    def merge(self, tree: "BSPTree", leaf_merger: LeafMerger) -> "BSPTree":
        """Merge this tree with another one.

        Both trees are descended in lock-step; whenever either side reaches a
        leaf, ``leaf_merger`` decides what goes into the result. Both input
        trees are consumed.
        """
        return self._merge(tree, leaf_merger, None, False)

    def _merge(self, tree: "BSPTree", leaf_merger: LeafMerger,
               parent_tree: Optional["BSPTree"], is_plus_child: bool) -> "BSPTree":
        if self.cut is None:
            # cell/tree operation
            return leaf_merger.merge(self, tree, parent_tree, is_plus_child, True)
        elif tree.cut is None:
            # tree/cell operation
            return leaf_merger.merge(tree, self, parent_tree, is_plus_child, False)

        # tree/tree operation
        merged = tree.split(self.cut)
        if parent_tree is not None:
            merged.parent = parent_tree
            if is_plus_child:
                parent_tree.plus = merged
            else:
                parent_tree.minus = merged

        self.plus._merge(merged.plus, leaf_merger, merged, True)
        self.minus._merge(merged.minus, leaf_merger, merged, False)
        merged.condense()
        if merged.cut is not None:
            merged.cut = merged._fit_to_cell(merged.cut.hyperplane.whole_hyperplane())

        return merged

    def split(self, sub) -> "BSPTree":
        """Split this tree by a sub-hyperplane.

        Returns
        -------
        BSPTree
            New tree whose root cut is ``sub``; its plus (resp. minus)
            sub-tree holds the parts of this tree on the plus (resp. minus)
            side of ``sub``. This tree is left unchanged.
        """
        if self.cut is None:
            return BSPTree(sub, self.copy_self(), BSPTree(attribute=self.attribute), None)

        c_hyperplane = self.cut.hyperplane
        s_hyperplane = sub.hyperplane
        side = sub.side(c_hyperplane)

        if side == Side.PLUS:
            # the splitting sub-hyperplane is entirely in the plus sub-tree
            split = self.plus.split(sub)
            if self.cut.side(s_hyperplane) == Side.PLUS:
                split.plus = BSPTree(self.cut.copy_self(), split.plus, self.minus.copy_self(), self.attribute)
                split.plus.condense()
                split.plus.parent = split
            else:
                split.minus = BSPTree(self.cut.copy_self(), split.minus, self.minus.copy_self(), self.attribute)
                split.minus.condense()
                split.minus.parent = split
            return split

        if side == Side.MINUS:
            # the splitting sub-hyperplane is entirely in the minus sub-tree
            split = self.minus.split(sub)
            if self.cut.side(s_hyperplane) == Side.PLUS:
                split.plus = BSPTree(self.cut.copy_self(), self.plus.copy_self(), split.plus, self.attribute)
                split.plus.condense()
                split.plus.parent = split
            else:
                split.minus = BSPTree(self.cut.copy_self(), self.plus.copy_self(), split.minus, self.attribute)
                split.minus.condense()
                split.minus.parent = split
            return split

        if side == Side.BOTH:
            cut_parts = self.cut.split(s_hyperplane)
            sub_parts = sub.split(c_hyperplane)
            split = BSPTree(sub, self.plus.split(sub_parts.plus), self.minus.split(sub_parts.minus), None)
            split.plus.cut = cut_parts.plus
            split.minus.cut = cut_parts.minus
            tmp = split.plus.minus
            split.plus.minus = split.minus.plus
            split.plus.minus.parent = split.plus
            split.minus.plus = tmp
            split.minus.plus.parent = split.minus
            split.plus.condense()
            split.minus.condense()
            return split

        # the splitting sub-hyperplane lies on the cut hyperplane
        if c_hyperplane.same_orientation_as(s_hyperplane):
            return BSPTree(sub, self.plus.copy_self(), self.minus.copy_self(), self.attribute)
        return BSPTree(sub, self.minus.copy_self(), self.plus.copy_self(), self.attribute)

    def insert_in_tree(self, parent_tree: Optional["BSPTree"], is_plus_child: bool) -> None:
        """Attach this sub-tree below ``parent_tree`` and clip it to its new cell."""
        self.parent = parent_tree
        if parent_tree is not None:
            if is_plus_child:
                parent_tree.plus = self
            else:
                parent_tree.minus = self

        if self.cut is None:
            return

        # chop off the parts lying on the wrong side of each ancestor cut
        tree = self
        while tree.parent is not None:
            hyperplane = tree.parent.cut.hyperplane
            if tree is tree.parent.plus:
                self.cut = self.cut.split(hyperplane).plus
                self.plus._chop_off_minus(hyperplane)
                self.minus._chop_off_minus(hyperplane)
            else:
                self.cut = self.cut.split(hyperplane).minus
                self.plus._chop_off_plus(hyperplane)
                self.minus._chop_off_plus(hyperplane)
            if self.cut is None:
                self._collapse_vanished_cut()
                return
            tree = tree.parent

        self.condense()

    def prune_around_convex_cell(self, cell_attribute: Any, other_leafs_attributes: Any,
                                 internal_attributes: Any) -> "BSPTree":
        """Build a tree holding only the convex cell of this leaf.

        The path from this node to the root is copied; the cell itself gets
        ``cell_attribute``, every sibling leaf ``other_leafs_attributes`` and
        every internal node ``internal_attributes``.
        """
        tree = BSPTree(attribute=cell_attribute)

        current = self
        while current.parent is not None:
            parent_cut = current.parent.cut.copy_self()
            sibling = BSPTree(attribute=other_leafs_attributes)
            if current is current.parent.plus:
                tree = BSPTree(parent_cut, tree, sibling, internal_attributes)
            else:
                tree = BSPTree(parent_cut, sibling, tree, internal_attributes)
            current = current.parent

        return tree

    def _chop_off_minus(self, hyperplane: Hyperplane) -> None:
        if self.cut is not None:
            self.cut = self.cut.split(hyperplane).plus
            self.plus._chop_off_minus(hyperplane)
            self.minus._chop_off_minus(hyperplane)
            if self.cut is None:
                self._collapse_vanished_cut()

    def _chop_off_plus(self, hyperplane: Hyperplane) -> None:
        if self.cut is not None:
            self.cut = self.cut.split(hyperplane).minus
            self.plus._chop_off_plus(hyperplane)
            self.minus._chop_off_plus(hyperplane)
            if self.cut is None:
                self._collapse_vanished_cut()

    def _collapse_vanished_cut(self) -> None:
        # the cell no longer meets the cut: only identical leaves can be merged safely
        if (self.plus.cut is None and self.minus.cut is None and
                self.plus.attribute == self.minus.attribute):
            self.attribute = self.plus.attribute
            self.plus = None
            self.minus = None
            return
        raise GeometryError("Cut sub-hyperplane vanished while clipping a sub-tree",
                            operation="insert_in_tree")

    def __repr__(self) -> str:
        if self.cut is None:
            return f"BSPTree(attribute={self.attribute!r})"
        return f"BSPTree(cut={self.cut!r}, plus={self.plus!r}, minus={self.minus!r})"
