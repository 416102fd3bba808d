"""
Set operations on regions.

Union, intersection, symmetric difference and difference are tree merges
driven by a dedicated ``LeafMerger``, followed by a pass clearing the
attributes of internal nodes. The input regions are consumed: their trees
are reused in the result and must not be used afterwards.
"""

from typing import Optional
import logging

from .bsp_tree import BoundaryAttribute, BSPTree, BSPTreeVisitor, LeafMerger, Order
from .hyperplane import Hyperplane

logger = logging.getLogger(__name__)


def recurse_complement(node: BSPTree) -> BSPTree:
    """Build the complement of a tree: leaves flipped, boundary parts swapped."""
    if node.cut is None:
        return BSPTree(attribute=not node.attribute)

    attribute = node.attribute
    if attribute is not None:
        plus_outside = None if attribute.plus_inside is None else attribute.plus_inside.copy_self()
        plus_inside = None if attribute.plus_outside is None else attribute.plus_outside.copy_self()
        attribute = BoundaryAttribute(plus_outside, plus_inside)

    return BSPTree(node.cut.copy_self(), recurse_complement(node.plus),
                   recurse_complement(node.minus), attribute)


class UnionMerger(LeafMerger):
    """Keeps whichever side is inside."""

    def merge(self, leaf, tree, parent_tree, is_plus_child, leaf_from_instance):
        if leaf.attribute:
            leaf.insert_in_tree(parent_tree, is_plus_child)
            return leaf
        tree.insert_in_tree(parent_tree, is_plus_child)
        return tree


class IntersectionMerger(LeafMerger):
    """Keeps whichever side is outside."""

    def merge(self, leaf, tree, parent_tree, is_plus_child, leaf_from_instance):
        if leaf.attribute:
            tree.insert_in_tree(parent_tree, is_plus_child)
            return tree
        leaf.insert_in_tree(parent_tree, is_plus_child)
        return leaf


class XorMerger(LeafMerger):
    """Complements the other side when the leaf is inside."""

    def merge(self, leaf, tree, parent_tree, is_plus_child, leaf_from_instance):
        result = recurse_complement(tree) if leaf.attribute else tree
        result.insert_in_tree(parent_tree, is_plus_child)
        return result


class DifferenceMerger(LeafMerger):
    """Removes the argument region from the instance region."""

    def merge(self, leaf, tree, parent_tree, is_plus_child, leaf_from_instance):
        if leaf.attribute:
            # inside cell: keep the complement of the argument side
            arg_tree = recurse_complement(tree if leaf_from_instance else leaf)
            arg_tree.insert_in_tree(parent_tree, is_plus_child)
            return arg_tree

        instance_tree = leaf if leaf_from_instance else tree
        instance_tree.insert_in_tree(parent_tree, is_plus_child)
        return instance_tree


class NodesCleaner(BSPTreeVisitor):
    """Clears the attributes of internal nodes after a merge."""

    def visit_order(self, node: BSPTree) -> Order:
        return Order.PLUS_SUB_MINUS

    def visit_internal_node(self, node: BSPTree) -> None:
        node.attribute = None

    def visit_leaf_node(self, node: BSPTree) -> None:
        pass


class RegionFactory:
    """Builds convex regions and combines regions with set operations."""

    def __init__(self):
        self.node_cleaner = NodesCleaner()

    def build_convex(self, *hyperplanes: Hyperplane):
        """Build the convex region on the minus side of every hyperplane.

        Returns
        -------
        Region or None
            The region, or None if no hyperplane is given
        """
        if not hyperplanes:
            return None

        region = hyperplanes[0].whole_space()
        node = region.get_tree(False)
        node.attribute = True
        for hyperplane in hyperplanes:
            if node.insert_cut(hyperplane):
                node.attribute = None
                node.plus.attribute = False
                node = node.minus
                node.attribute = True
        return region

    def union(self, region1, region2):
        """Union of two regions (both consumed)."""
        return self._combine(region1, region2, UnionMerger(), "union")

    def intersection(self, region1, region2):
        """Intersection of two regions (both consumed)."""
        return self._combine(region1, region2, IntersectionMerger(), "intersection")

    def xor(self, region1, region2):
        """Symmetric difference of two regions (both consumed)."""
        return self._combine(region1, region2, XorMerger(), "xor")

    def difference(self, region1, region2):
        """Points of ``region1`` not in ``region2`` (both consumed)."""
        return self._combine(region1, region2, DifferenceMerger(), "difference")

    def get_complement(self, region):
        """Complement of a region; the input tree is copied, not consumed."""
        return region.build_new(recurse_complement(region.get_tree(False)))

    def _combine(self, region1, region2, merger: LeafMerger, operation: str):
        logger.debug("Computing %s of %r and %r", operation, region1, region2)
        tree = region1.get_tree(False).merge(region2.get_tree(False), merger)
        tree.visit(self.node_cleaner)
        return region1.build_new(tree)
