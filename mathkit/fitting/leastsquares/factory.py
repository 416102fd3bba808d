"""
Factory for least-squares problems and their decorators.

Weighting and evaluation counting are implemented as independent
``LeastSquaresAdapter`` subclasses, so they can be stacked in any order.
"""

from typing import Callable, Optional
import logging

import numpy as np

from ...core.base.exceptions import DimensionMismatchError, validate_not_none
from ...core.math.linalg import as_matrix, as_vector, square_root
from .adapter import LeastSquaresAdapter
from .checkers import PointVectorValuePair
from .evaluation import DenseWeightedEvaluation, Evaluation
from .problem import (
    ConvergenceChecker,
    Incrementor,
    LeastSquaresProblem,
    LocalLeastSquaresProblem,
    MultivariateJacobianFunction,
)

logger = logging.getLogger(__name__)


class WeightedProblem(LeastSquaresAdapter):
    """Problem whose evaluations are weighted by a fixed square root matrix."""

    def __init__(self, problem: LeastSquaresProblem, weight_sqrt: np.ndarray):
        super().__init__(problem)
        self.weight_sqrt = weight_sqrt

    def evaluate(self, point) -> Evaluation:
        return DenseWeightedEvaluation(self.problem.evaluate(point), self.weight_sqrt)


class CountingProblem(LeastSquaresAdapter):
    """Problem incrementing a counter before each evaluation."""

    def __init__(self, problem: LeastSquaresProblem, counter: Incrementor):
        super().__init__(problem)
        self.counter = counter

    def evaluate(self, point) -> Evaluation:
        self.counter.increment_count()
        return self.problem.evaluate(point)


class EvaluationChecker(ConvergenceChecker):
    """View of a point/value checker as a checker over evaluations.

    Only the stored point and residuals are read; the model is never
    evaluated.
    """

    def __init__(self, checker: ConvergenceChecker):
        self.checker = checker

    def converged(self, iteration: int, previous: Evaluation, current: Evaluation) -> bool:
        return self.checker.converged(
            iteration,
            PointVectorValuePair(previous.point, previous.residuals),
            PointVectorValuePair(current.point, current.residuals),
        )


class LeastSquaresFactory:
    """Static helpers building and decorating ``LeastSquaresProblem`` objects."""

    @staticmethod
    def create(model: MultivariateJacobianFunction, observed, start,
               checker: Optional[ConvergenceChecker], max_evaluations: int,
               max_iterations: int, weight=None) -> LeastSquaresProblem:
        """Create a least-squares problem.

        Parameters
        ----------
        model : callable
            Maps a point to a ``(values, jacobian)`` pair
        observed : array_like
            Observed (target) values
        start : array_like
            Initial guess
        checker : ConvergenceChecker, optional
            Checker over evaluations
        max_evaluations : int
            Maximal number of model evaluations
        max_iterations : int
            Maximal number of optimizer iterations
        weight : array_like, optional
            Weight matrix; identity weights when omitted

        Returns
        -------
        LeastSquaresProblem
            The (possibly weighted) problem

        Raises
        ------
        NullArgumentError
            If model, observed or start is missing
        DimensionMismatchError
            If the weight matrix does not match the observation size
        NotStrictlyPositiveError
            If a limit is not positive
        """
        validate_not_none(model, "model")
        validate_not_none(observed, "observed")
        validate_not_none(start, "start")

        problem = LocalLeastSquaresProblem(model, observed, start, checker,
                                           max_evaluations, max_iterations)
        if weight is not None:
            problem = LeastSquaresFactory.weight_matrix(problem, weight)

        logger.debug(f"Created least-squares problem with {problem.observation_size} observations "
                     f"and {problem.parameter_size} parameters")
        return problem

    @staticmethod
    def weight_matrix(problem: LeastSquaresProblem, weights) -> LeastSquaresProblem:
        """Apply a dense weight matrix to a problem.

        The square root of ``weights`` is computed once here and shared by
        every evaluation of the returned problem. ``problem`` is not
        modified.
        """
        weights = as_matrix(weights, "weight")
        expected = (problem.observation_size, problem.observation_size)
        if weights.shape != expected:
            raise DimensionMismatchError(weights.shape, expected, field="weight")
        return WeightedProblem(problem, square_root(weights))

    @staticmethod
    def weight_diagonal(problem: LeastSquaresProblem, weights) -> LeastSquaresProblem:
        """Apply a diagonal weight matrix given by its diagonal."""
        return LeastSquaresFactory.weight_matrix(problem, np.diag(as_vector(weights, "weight")))

    @staticmethod
    def count_evaluations(problem: LeastSquaresProblem, counter: Incrementor) -> LeastSquaresProblem:
        """Count the evaluations of the returned problem in ``counter``."""
        return CountingProblem(problem, counter)

    @staticmethod
    def evaluation_checker(checker: ConvergenceChecker) -> ConvergenceChecker:
        """Lift a checker over ``PointVectorValuePair`` to one over evaluations."""
        return EvaluationChecker(checker)

    @staticmethod
    def model(value: Callable, jacobian: Callable) -> MultivariateJacobianFunction:
        """Combine a value function and a Jacobian function into one model."""
        def combined(point):
            return (np.asarray(value(point), dtype=float),
                    np.asarray(jacobian(point), dtype=float))
        return combined
