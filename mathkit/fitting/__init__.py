"""
Curve fitting for mathkit.
"""

from .leastsquares import (
    LeastSquaresBuilder,
    LeastSquaresFactory,
    LeastSquaresProblem,
    GaussNewtonOptimizer,
    Optimum,
)

__all__ = [
    "LeastSquaresBuilder",
    "LeastSquaresFactory",
    "LeastSquaresProblem",
    "GaussNewtonOptimizer",
    "Optimum",
]
