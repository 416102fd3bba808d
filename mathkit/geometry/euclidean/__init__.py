"""
Euclidean realizations of the partitioning engine.
"""

from .oned import (
    Euclidean1D,
    Vector1D,
    OrientedPoint,
    SubOrientedPoint,
    Interval,
    IntervalsSet,
)
from .twod import (
    Euclidean2D,
    Vector2D,
    Line,
    Segment,
    SubLine,
    PolygonsSet,
)

__all__ = [
    # Real line
    "Euclidean1D",
    "Vector1D",
    "OrientedPoint",
    "SubOrientedPoint",
    "Interval",
    "IntervalsSet",
    # Plane
    "Euclidean2D",
    "Vector2D",
    "Line",
    "Segment",
    "SubLine",
    "PolygonsSet",
]
