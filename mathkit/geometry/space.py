"""
Spaces and points handled by the partitioning engine.
"""

from abc import ABC, abstractmethod
from typing import Optional


class Space(ABC):
    """A space of fixed dimension with an optional (n-1)-dimensional sub-space."""

    @property
    @abstractmethod
    def dimension(self) -> int:
        pass

    @property
    @abstractmethod
    def sub_space(self) -> Optional["Space"]:
        """Sub-space used by hyperplanes of this space, None at dimension 1."""
        pass


class Point(ABC):
    """A point in a space."""

    @property
    @abstractmethod
    def space(self) -> Space:
        pass

    @abstractmethod
    def distance(self, other: "Point") -> float:
        """Euclidean distance to another point of the same space."""
        pass

    @abstractmethod
    def is_nan(self) -> bool:
        pass
