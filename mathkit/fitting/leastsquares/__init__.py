"""
Least-squares problems, evaluations and optimizers.

Problems are built with ``LeastSquaresBuilder`` or ``LeastSquaresFactory``,
decorated by weighting and counting adapters, and solved by
``GaussNewtonOptimizer``.
"""

from .evaluation import (
    Evaluation,
    AbstractEvaluation,
    UnweightedEvaluation,
    DenseWeightedEvaluation,
)
from .problem import (
    MultivariateJacobianFunction,
    Incrementor,
    ConvergenceChecker,
    LeastSquaresProblem,
    AbstractOptimizationProblem,
    LocalLeastSquaresProblem,
)
from .checkers import (
    PointVectorValuePair,
    SimpleVectorValueChecker,
    EvaluationRmsChecker,
)
from .adapter import LeastSquaresAdapter
from .factory import (
    LeastSquaresFactory,
    WeightedProblem,
    CountingProblem,
    EvaluationChecker,
)
from .builder import LeastSquaresBuilder
from .optimum import Optimum, OptimumImpl
from .gauss_newton import Decomposition, GaussNewtonOptimizer

__all__ = [
    # Evaluations
    "Evaluation",
    "AbstractEvaluation",
    "UnweightedEvaluation",
    "DenseWeightedEvaluation",
    # Problems
    "MultivariateJacobianFunction",
    "Incrementor",
    "ConvergenceChecker",
    "LeastSquaresProblem",
    "AbstractOptimizationProblem",
    "LocalLeastSquaresProblem",
    "LeastSquaresAdapter",
    # Checkers
    "PointVectorValuePair",
    "SimpleVectorValueChecker",
    "EvaluationRmsChecker",
    # Construction
    "LeastSquaresFactory",
    "WeightedProblem",
    "CountingProblem",
    "EvaluationChecker",
    "LeastSquaresBuilder",
    # Results and optimizers
    "Optimum",
    "OptimumImpl",
    "Decomposition",
    "GaussNewtonOptimizer",
]
