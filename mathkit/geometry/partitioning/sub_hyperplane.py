"""
Bounded parts of hyperplanes.
"""

from abc import ABC, abstractmethod
from typing import NamedTuple, Optional

from .hyperplane import Hyperplane
from .region_factory import RegionFactory
from .side import Side


class SplitSubHyperplane(NamedTuple):
    """Parts of a sub-hyperplane on each side of a splitting hyperplane.

    Either part is None when the sub-hyperplane lies entirely on the other
    side.
    """
    plus: Optional["SubHyperplane"]
    minus: Optional["SubHyperplane"]


class SubHyperplane(ABC):
    """The part of a hyperplane that actually bounds a region."""

    @abstractmethod
    def copy_self(self) -> "SubHyperplane":
        pass

    @property
    @abstractmethod
    def hyperplane(self) -> Hyperplane:
        pass

    @abstractmethod
    def is_empty(self) -> bool:
        pass

    @property
    @abstractmethod
    def size(self) -> float:
        pass

    @abstractmethod
    def side(self, hyperplane: Hyperplane) -> Side:
        """Position of the sub-hyperplane with respect to a hyperplane."""
        pass

    @abstractmethod
    def split(self, hyperplane: Hyperplane) -> SplitSubHyperplane:
        """Split the sub-hyperplane in two parts by a hyperplane."""
        pass

    @abstractmethod
    def reunite(self, other: "SubHyperplane") -> "SubHyperplane":
        """Union with another sub-hyperplane sharing the same hyperplane."""
        pass


class AbstractSubHyperplane(SubHyperplane):
    """Sub-hyperplane described by a hyperplane and a region of its sub-space.

    Parameters
    ----------
    hyperplane : Hyperplane
        Underlying hyperplane
    remaining_region : Region or None
        Part of the sub-space covered; None when the sub-space has
        dimension 0
    """

    def __init__(self, hyperplane: Hyperplane, remaining_region):
        self._hyperplane = hyperplane
        self.remaining_region = remaining_region

    @abstractmethod
    def build_new(self, hyperplane: Hyperplane, remaining_region) -> "AbstractSubHyperplane":
        pass

    def copy_self(self) -> "AbstractSubHyperplane":
        return self.build_new(self._hyperplane.copy_self(), self.remaining_region)

    @property
    def hyperplane(self) -> Hyperplane:
        return self._hyperplane

    @property
    def size(self) -> float:
        return self.remaining_region.size

    def is_empty(self) -> bool:
        return self.remaining_region.is_empty()

    def reunite(self, other: "AbstractSubHyperplane") -> "AbstractSubHyperplane":
        # union consumes its arguments
        merged = RegionFactory().union(self.remaining_region.copy_self(),
                                       other.remaining_region.copy_self())
        return self.build_new(self._hyperplane, merged)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._hyperplane!r})"
