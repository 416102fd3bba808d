"""
Base classes with minimal dependencies.

This module provides the foundational components that other modules build
upon: the exception hierarchy and argument validation helpers.
"""

from .exceptions import (
    MathKitError,
    ValidationError,
    DimensionMismatchError,
    NullArgumentError,
    NotStrictlyPositiveError,
    ConfigurationError,
    NumericalError,
    SingularMatrixError,
    ConvergenceError,
    NonPositiveDefiniteMatrixError,
    MaxCountExceededError,
    TooManyEvaluationsError,
    TooManyIterationsError,
    GeometryError,
    validate_not_none,
    validate_positive,
    validate_dimension,
)

__all__ = [
    # Exceptions
    "MathKitError",
    "ValidationError",
    "DimensionMismatchError",
    "NullArgumentError",
    "NotStrictlyPositiveError",
    "ConfigurationError",
    "NumericalError",
    "SingularMatrixError",
    "ConvergenceError",
    "NonPositiveDefiniteMatrixError",
    "MaxCountExceededError",
    "TooManyEvaluationsError",
    "TooManyIterationsError",
    "GeometryError",
    # Helpers
    "validate_not_none",
    "validate_positive",
    "validate_dimension",
]
