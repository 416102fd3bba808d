"""
Geometry package: spaces, the BSP partitioning engine and its Euclidean
realizations.
"""

from .space import Space, Point
from .partitioning import (
    Side,
    Location,
    BSPTree,
    BSPTreeVisitor,
    AbstractRegion,
    RegionFactory,
    BoundaryProjection,
)
from .euclidean import (
    Vector1D,
    OrientedPoint,
    IntervalsSet,
    Vector2D,
    Line,
    SubLine,
    PolygonsSet,
)

__all__ = [
    "Space",
    "Point",
    "Side",
    "Location",
    "BSPTree",
    "BSPTreeVisitor",
    "AbstractRegion",
    "RegionFactory",
    "BoundaryProjection",
    "Vector1D",
    "OrientedPoint",
    "IntervalsSet",
    "Vector2D",
    "Line",
    "SubLine",
    "PolygonsSet",
]
