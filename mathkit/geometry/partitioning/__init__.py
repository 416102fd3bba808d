"""
Binary space partitioning engine.

Regions of any space are represented by BSP trees whose cuts are
sub-hyperplanes supplied by a concrete geometry (see ``mathkit.geometry.euclidean``).
"""

from .side import Side, Location
from .hyperplane import Hyperplane, Embedding
from .bsp_tree import (
    Order,
    BSPTreeVisitor,
    LeafMerger,
    BoundaryAttribute,
    BSPTree,
)
from .region_factory import (
    RegionFactory,
    UnionMerger,
    IntersectionMerger,
    XorMerger,
    DifferenceMerger,
    NodesCleaner,
    recurse_complement,
)
from .sub_hyperplane import SplitSubHyperplane, SubHyperplane, AbstractSubHyperplane
from .boundary_projection import BoundaryProjection, BoundaryProjector
from .region import (
    AbstractRegion,
    BoundaryBuilder,
    BoundarySizeVisitor,
    build_tree_from_boundary,
)

__all__ = [
    # Enumerations
    "Side",
    "Location",
    "Order",
    # Contracts
    "Hyperplane",
    "Embedding",
    "SubHyperplane",
    "AbstractSubHyperplane",
    "SplitSubHyperplane",
    "BSPTreeVisitor",
    "LeafMerger",
    # Trees and regions
    "BSPTree",
    "BoundaryAttribute",
    "AbstractRegion",
    "build_tree_from_boundary",
    "BoundaryBuilder",
    "BoundarySizeVisitor",
    # Set operations
    "RegionFactory",
    "UnionMerger",
    "IntersectionMerger",
    "XorMerger",
    "DifferenceMerger",
    "NodesCleaner",
    "recurse_complement",
    # Projection
    "BoundaryProjection",
    "BoundaryProjector",
]
