"""
Hyperplane and embedding contracts.

A concrete geometry supplies one ``Hyperplane`` implementation per space.
Hyperplanes of spaces with a sub-space also implement ``Embedding`` so the
partitioning algorithms can recurse one dimension down.
"""

from abc import ABC, abstractmethod

from ..space import Point


class Hyperplane(ABC):
    """An (n-1)-dimensional oriented surface cutting an n-dimensional space.

    Points with a positive offset are on the plus side, points with a
    negative offset on the minus side.
    """

    @abstractmethod
    def copy_self(self) -> "Hyperplane":
        pass

    @abstractmethod
    def get_offset(self, point: Point) -> float:
        """Signed distance of a point to the hyperplane."""
        pass

    @abstractmethod
    def project(self, point: Point) -> Point:
        """Orthogonal projection of a point onto the hyperplane."""
        pass

    @property
    @abstractmethod
    def tolerance(self) -> float:
        pass

    @abstractmethod
    def same_orientation_as(self, other: "Hyperplane") -> bool:
        """Check whether another hyperplane with the same support is oriented alike."""
        pass

    @abstractmethod
    def whole_hyperplane(self):
        """Sub-hyperplane covering the whole hyperplane."""
        pass

    @abstractmethod
    def whole_space(self):
        """Region covering the whole space this hyperplane lives in."""
        pass


class Embedding(ABC):
    """Mapping between a space and the sub-space of one of its hyperplanes."""

    @abstractmethod
    def to_sub_space(self, point: Point) -> Point:
        pass

    @abstractmethod
    def to_space(self, point: Point) -> Point:
        pass
