"""
Gauss-Newton least-squares optimizer.
"""

from enum import Enum
from typing import Optional, Union
import logging

import numpy as np

from ...core.base.exceptions import (
    ConvergenceError,
    NonPositiveDefiniteMatrixError,
    NullArgumentError,
    SingularMatrixError,
)
from ...core.config.settings import get_config
from ...core.math import linalg
from ...utils.log_manager import PerformanceLogger
from .optimum import Optimum, OptimumImpl
from .problem import LeastSquaresProblem


class Decomposition(Enum):
    """Matrix decomposition used to solve the linear step of each iteration."""

    LU = "LU"
    QR = "QR"
    CHOLESKY = "CHOLESKY"
    SVD = "SVD"

    def solve(self, jacobian: np.ndarray, residuals: np.ndarray,
              threshold: float = linalg.SINGULARITY_THRESHOLD) -> np.ndarray:
        """Solve ``J·dx ≈ r`` in the least-squares sense.

        Raises
        ------
        ConvergenceError
            If the linear system is singular
        """
        solver = {
            Decomposition.LU: linalg.solve_lu,
            Decomposition.QR: linalg.solve_qr,
            Decomposition.CHOLESKY: linalg.solve_cholesky,
            Decomposition.SVD: linalg.solve_svd,
        }[self]
        try:
            return solver(jacobian, residuals, threshold)
        except (SingularMatrixError, NonPositiveDefiniteMatrixError) as e:
            raise ConvergenceError(f"Unable to solve the Gauss-Newton step with {self.value}",
                                   details={'decomposition': self.value}, cause=e) from e


class GaussNewtonOptimizer:
    """Gauss-Newton optimizer.

    Each iteration linearizes the model at the current point and moves by
    the least-squares solution of ``J·dx = r``. Convergence is decided by
    the problem's checker; the problem's counters bound the loop.

    Parameters
    ----------
    decomposition : Decomposition or str, optional
        Decomposition of the linear step; defaults to the configured one
    singularity_threshold : float, optional
        Pivot threshold below which the step is singular; defaults to the
        configured one
    """

    def __init__(self, decomposition: Optional[Union[Decomposition, str]] = None,
                 singularity_threshold: Optional[float] = None):
        config = get_config()
        if decomposition is None:
            decomposition = config.decomposition
        if isinstance(decomposition, str):
            decomposition = Decomposition(decomposition.upper())
        self.decomposition = decomposition
        self.singularity_threshold = (config.singularity_threshold if singularity_threshold is None
                                      else singularity_threshold)
        self.logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")
        self.performance = PerformanceLogger(self.logger)

    def with_decomposition(self, decomposition: Union[Decomposition, str]) -> "GaussNewtonOptimizer":
        """Return a new optimizer using another decomposition."""
        return GaussNewtonOptimizer(decomposition, self.singularity_threshold)

    def optimize(self, problem: LeastSquaresProblem) -> Optimum:
        """Solve a least-squares problem.

        Parameters
        ----------
        problem : LeastSquaresProblem
            Problem to solve; its counters are incremented

        Returns
        -------
        Optimum
            Final evaluation with evaluation and iteration counts

        Raises
        ------
        NullArgumentError
            If the problem has no convergence checker
        ConvergenceError
            If a linear step is singular
        TooManyEvaluationsError, TooManyIterationsError
            If a counter exceeds its maximum
        """
        checker = problem.convergence_checker
        if checker is None:
            raise NullArgumentError("Gauss-Newton requires a convergence checker",
                                    field="checker")

        evaluation_counter = problem.evaluation_counter
        iteration_counter = problem.iteration_counter

        with self.performance.time_operation(f"gauss_newton_{self.decomposition.value}"):
            current_point = problem.start
            current = None
            while True:
                iteration_counter.increment_count()

                previous = current
                evaluation_counter.increment_count()
                current = problem.evaluate(current_point)
                current_point = current.point.copy()

                self.logger.debug(f"Iteration {iteration_counter.count}: cost={current.cost:.6g}",
                                  extra={'iteration': iteration_counter.count,
                                         'evaluations': evaluation_counter.count,
                                         'cost': current.cost})

                if previous is not None and checker.converged(iteration_counter.count, previous, current):
                    self.logger.info(f"Converged after {iteration_counter.count} iterations "
                                     f"({evaluation_counter.count} evaluations), cost={current.cost:.6g}")
                    return OptimumImpl(current, evaluation_counter.count, iteration_counter.count)

                dx = self.decomposition.solve(current.jacobian, current.residuals,
                                              self.singularity_threshold)
                current_point = current_point + dx

    def __repr__(self) -> str:
        return f"GaussNewtonOptimizer(decomposition={self.decomposition.value})"
