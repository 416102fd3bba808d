"""
Convergence checkers for least-squares optimizers.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ...core.base.exceptions import NotStrictlyPositiveError
from ...core.config.settings import FittingConfig, get_config
from .evaluation import Evaluation
from .problem import ConvergenceChecker


@dataclass(frozen=True)
class PointVectorValuePair:
    """A point together with the vector value of a function at that point."""
    point: np.ndarray
    value: np.ndarray


class SimpleVectorValueChecker(ConvergenceChecker):
    """Element-wise checker on the vector values of two iterates.

    Two values are close when their absolute difference is below the
    absolute threshold, or below the relative threshold times the larger
    magnitude. Convergence requires every element to be close.

    Parameters
    ----------
    relative_threshold : float
        Relative tolerance
    absolute_threshold : float
        Absolute tolerance
    max_iteration_count : int, optional
        If positive, report convergence once this iteration is reached
    """

    def __init__(self, relative_threshold: float, absolute_threshold: float,
                 max_iteration_count: int = -1):
        if max_iteration_count == 0:
            raise NotStrictlyPositiveError("max_iteration_count must be positive or -1",
                                           field="max_iteration_count", value=max_iteration_count)
        self.relative_threshold = relative_threshold
        self.absolute_threshold = absolute_threshold
        self.max_iteration_count = max_iteration_count

    @classmethod
    def from_config(cls, config: Optional[FittingConfig] = None) -> "SimpleVectorValueChecker":
        """Build a checker from the thresholds of a (by default the global) configuration."""
        config = config or get_config()
        return cls(config.relative_threshold, config.absolute_threshold)

    def converged(self, iteration: int, previous: PointVectorValuePair,
                  current: PointVectorValuePair) -> bool:
        if self.max_iteration_count > 0 and iteration >= self.max_iteration_count:
            return True

        p = np.asarray(previous.value)
        c = np.asarray(current.value)
        difference = np.abs(p - c)
        size = np.maximum(np.abs(p), np.abs(c))
        return bool(np.all((difference <= size * self.relative_threshold) |
                           (difference <= self.absolute_threshold)))


class EvaluationRmsChecker(ConvergenceChecker):
    """Converges when the RMS of two successive evaluations is close."""

    def __init__(self, relative_threshold: float, absolute_threshold: float = 0.0):
        self.relative_threshold = relative_threshold
        self.absolute_threshold = absolute_threshold

    def converged(self, iteration: int, previous: Evaluation, current: Evaluation) -> bool:
        prev_rms = previous.rms
        curr_rms = current.rms
        difference = abs(prev_rms - curr_rms)
        if difference <= self.absolute_threshold:
            return True
        size = max(abs(prev_rms), abs(curr_rms))
        return difference <= self.relative_threshold * size
