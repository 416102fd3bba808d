"""
Delegating base class for least-squares problem decorators.
"""

from typing import Optional

import numpy as np

from .evaluation import Evaluation
from .problem import ConvergenceChecker, Incrementor, LeastSquaresProblem


class LeastSquaresAdapter(LeastSquaresProblem):
    """Forwards every call to a wrapped problem.

    Subclasses override the operations they decorate, typically
    ``evaluate``, and inherit delegation for the rest.
    """

    def __init__(self, problem: LeastSquaresProblem):
        self.problem = problem

    @property
    def start(self) -> np.ndarray:
        return self.problem.start

    @property
    def observation_size(self) -> int:
        return self.problem.observation_size

    @property
    def parameter_size(self) -> int:
        return self.problem.parameter_size

    def evaluate(self, point) -> Evaluation:
        return self.problem.evaluate(point)

    @property
    def evaluation_counter(self) -> Incrementor:
        return self.problem.evaluation_counter

    @property
    def iteration_counter(self) -> Incrementor:
        return self.problem.iteration_counter

    @property
    def convergence_checker(self) -> Optional[ConvergenceChecker]:
        return self.problem.convergence_checker
