"""
Least-squares problem abstractions.

A problem knows its target and start vectors, evaluates the model at
arbitrary points, and carries the counters and convergence checker used by
the optimizer that drives it.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional, Tuple, Type

import numpy as np

from ...core.base.exceptions import (
    MaxCountExceededError,
    TooManyEvaluationsError,
    TooManyIterationsError,
    validate_dimension,
    validate_positive,
)
from ...core.math.linalg import as_vector
from .evaluation import Evaluation, UnweightedEvaluation

# model(point) -> (values, jacobian)
MultivariateJacobianFunction = Callable[[np.ndarray], Tuple[np.ndarray, np.ndarray]]


class Incrementor:
    """Counter with a maximal count.

    Incrementing past ``maximal_count`` raises ``error_type``, which aborts
    whatever loop is driving the counter.
    """

    def __init__(self, maximal_count: int, error_type: Type[MaxCountExceededError] = MaxCountExceededError):
        validate_positive(maximal_count, "maximal_count")
        self.maximal_count = maximal_count
        self.error_type = error_type
        self._count = 0

    @property
    def count(self) -> int:
        return self._count

    def can_increment(self) -> bool:
        return self._count < self.maximal_count

    def increment_count(self, value: int = 1) -> None:
        """Add ``value`` to the count.

        Raises
        ------
        MaxCountExceededError
            If the count goes past the maximal count (subclass chosen at
            construction)
        """
        for _ in range(value):
            self._count += 1
            if self._count > self.maximal_count:
                raise self.error_type(self.maximal_count)

    def reset_count(self) -> None:
        self._count = 0

    def __repr__(self) -> str:
        return f"Incrementor(count={self._count}, maximal_count={self.maximal_count})"


class ConvergenceChecker(ABC):
    """Decides whether an iterative algorithm has converged."""

    @abstractmethod
    def converged(self, iteration: int, previous, current) -> bool:
        """Check convergence between two successive iterates.

        Parameters
        ----------
        iteration : int
            Current iteration count
        previous
            Iterate of the previous iteration
        current
            Iterate of the current iteration

        Returns
        -------
        bool
            True if the algorithm is considered converged
        """
        pass


class LeastSquaresProblem(ABC):
    """Interface of a least-squares problem driven by an optimizer."""

    @property
    @abstractmethod
    def start(self) -> np.ndarray:
        """Initial guess, returned as a fresh copy."""
        pass

    @property
    @abstractmethod
    def observation_size(self) -> int:
        """Number of observations (target size)."""
        pass

    @property
    @abstractmethod
    def parameter_size(self) -> int:
        """Number of parameters (start size)."""
        pass

    @abstractmethod
    def evaluate(self, point) -> Evaluation:
        """Evaluate the model at ``point``.

        Raises
        ------
        DimensionMismatchError
            If ``point`` does not have ``parameter_size`` entries
        """
        pass

    @property
    @abstractmethod
    def evaluation_counter(self) -> Incrementor:
        pass

    @property
    @abstractmethod
    def iteration_counter(self) -> Incrementor:
        pass

    @property
    @abstractmethod
    def convergence_checker(self) -> Optional[ConvergenceChecker]:
        pass


class AbstractOptimizationProblem:
    """Holds limits, counters and checker shared by optimization problems.

    The counters are created once, so every adapter wrapping the problem
    sees the same counts; they are only reset by building a new problem.
    """

    def __init__(self, max_evaluations: int, max_iterations: int,
                 checker: Optional[ConvergenceChecker]):
        validate_positive(max_evaluations, "max_evaluations")
        validate_positive(max_iterations, "max_iterations")
        self.max_evaluations = max_evaluations
        self.max_iterations = max_iterations
        self._checker = checker
        self._evaluation_counter = Incrementor(max_evaluations, TooManyEvaluationsError)
        self._iteration_counter = Incrementor(max_iterations, TooManyIterationsError)

    @property
    def evaluation_counter(self) -> Incrementor:
        return self._evaluation_counter

    @property
    def iteration_counter(self) -> Incrementor:
        return self._iteration_counter

    @property
    def convergence_checker(self) -> Optional[ConvergenceChecker]:
        return self._checker


class LocalLeastSquaresProblem(AbstractOptimizationProblem, LeastSquaresProblem):
    """Least-squares problem built from a model, a target and a start point."""

    def __init__(self, model: MultivariateJacobianFunction, target, start,
                 checker: Optional[ConvergenceChecker], max_evaluations: int, max_iterations: int):
        super().__init__(max_evaluations, max_iterations, checker)
        self.model = model
        self.target = as_vector(target, "target")
        self._start = as_vector(start, "start")

    @property
    def start(self) -> np.ndarray:
        return self._start.copy()

    @property
    def observation_size(self) -> int:
        return self.target.size

    @property
    def parameter_size(self) -> int:
        return self._start.size

    def evaluate(self, point) -> Evaluation:
        point = as_vector(point, "point")
        validate_dimension(point.size, self.parameter_size, "point")

        values, jacobian = self.model(point.copy())
        return UnweightedEvaluation(values, jacobian, self.target, point)
