"""
Enumerations shared by the partitioning classes.
"""

from enum import Enum


class Side(Enum):
    """Position of a sub-hyperplane or a region with respect to a hyperplane."""

    PLUS = "plus"
    MINUS = "minus"
    BOTH = "both"
    HYPER = "hyper"


class Location(Enum):
    """Position of a point with respect to a region."""

    INSIDE = "inside"
    OUTSIDE = "outside"
    BOUNDARY = "boundary"
