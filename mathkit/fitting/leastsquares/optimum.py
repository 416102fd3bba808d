"""
Results of least-squares optimizations.
"""

from abc import abstractmethod

import numpy as np

from ...core.math.linalg import SINGULARITY_THRESHOLD
from .evaluation import Evaluation


class Optimum(Evaluation):
    """Evaluation at the optimum plus the work spent reaching it."""

    @property
    @abstractmethod
    def evaluations(self) -> int:
        """Number of model evaluations performed."""
        pass

    @property
    @abstractmethod
    def iterations(self) -> int:
        """Number of optimizer iterations performed."""
        pass


class OptimumImpl(Optimum):
    """Immutable optimum delegating its evaluation data to a wrapped evaluation."""

    def __init__(self, value: Evaluation, evaluations: int, iterations: int):
        self.value = value
        self._evaluations = evaluations
        self._iterations = iterations

    @property
    def evaluations(self) -> int:
        return self._evaluations

    @property
    def iterations(self) -> int:
        return self._iterations

    @property
    def point(self) -> np.ndarray:
        return self.value.point

    @property
    def residuals(self) -> np.ndarray:
        return self.value.residuals

    @property
    def jacobian(self) -> np.ndarray:
        return self.value.jacobian

    @property
    def cost(self) -> float:
        return self.value.cost

    @property
    def rms(self) -> float:
        return self.value.rms

    def get_covariances(self, threshold: float = SINGULARITY_THRESHOLD) -> np.ndarray:
        return self.value.get_covariances(threshold)

    def get_sigma(self, threshold: float = SINGULARITY_THRESHOLD) -> np.ndarray:
        return self.value.get_sigma(threshold)

    def __repr__(self) -> str:
        return (f"OptimumImpl(point={self.point.tolist()}, cost={self.cost:.6g}, "
                f"evaluations={self._evaluations}, iterations={self._iterations})")
