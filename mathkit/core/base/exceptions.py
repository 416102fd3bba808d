"""
Exceptions raised by mathkit.

Every error derives from ``MathKitError``, which carries a message, a
dictionary of details and the exception that triggered it, if any.
Validation helpers used across the package live here too.
"""

from typing import Optional, Any, Dict, Sequence, Union

import numpy as np


class MathKitError(Exception):
    """Root of the mathkit exception hierarchy.

    Parameters
    ----------
    message : str
        What went wrong
    details : dict, optional
        Values describing the failure, rendered after the message
    cause : Exception, optional
        Lower-level exception being translated
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        text = self.message
        if self.details:
            rendered = ", ".join(f"{k}={v}" for k, v in self.details.items())
            text += f" (Details: {rendered})"
        if self.cause:
            text += f" (Caused by: {self.cause})"
        return text

    def get_detail(self, key: str, default: Any = None) -> Any:
        return self.details.get(key, default)


class ValidationError(MathKitError):
    """An argument is unusable.

    ``field`` names the argument and ``value`` holds what was passed; both
    are also copied into the details.
    """

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Optional[Any] = None, **kwargs):
        details = kwargs.pop('details', {})
        if field is not None:
            details['field'] = field
        if value is not None:
            details['value'] = value

        super().__init__(message, details=details, **kwargs)
        self.field = field
        self.value = value


class DimensionMismatchError(ValidationError):
    """Vector or matrix sizes are inconsistent.

    Used for target/start/weight/point mismatches in least-squares
    problems and for model outputs of the wrong shape.
    """

    def __init__(self, actual: Any, expected: Any, field: Optional[str] = None, **kwargs):
        message = kwargs.pop('message', None) or (
            f"Dimension mismatch{f' for {field}' if field else ''}: "
            f"got {actual}, expected {expected}"
        )
        details = kwargs.pop('details', {})
        details['actual'] = actual
        details['expected'] = expected
        super().__init__(message, field=field, details=details, **kwargs)
        self.actual = actual
        self.expected = expected


class NullArgumentError(ValidationError):
    """A required argument is None or was never set."""
    pass


class NotStrictlyPositiveError(ValidationError):
    pass


class ConfigurationError(MathKitError):
    """Configuration values or files are invalid.

    ``config_file`` is the offending file and ``parameter`` the offending
    key, when known.
    """

    def __init__(self, message: str, config_file: Optional[str] = None,
                 parameter: Optional[str] = None, **kwargs):
        details = kwargs.pop('details', {})
        if config_file is not None:
            details['config_file'] = config_file
        if parameter is not None:
            details['parameter'] = parameter

        super().__init__(message, details=details, **kwargs)
        self.config_file = config_file
        self.parameter = parameter


class NumericalError(MathKitError):
    """A computation hit a numerical degeneracy."""
    pass


class SingularMatrixError(NumericalError):
    """A matrix is singular below the requested threshold."""

    def __init__(self, message: str = "Matrix is singular",
                 threshold: Optional[float] = None, **kwargs):
        details = kwargs.pop('details', {})
        if threshold is not None:
            details['threshold'] = threshold
        super().__init__(message, details=details, **kwargs)
        self.threshold = threshold


class ConvergenceError(NumericalError):
    """An iterative algorithm cannot make progress."""
    pass


class NonPositiveDefiniteMatrixError(NumericalError):
    """A matrix expected to be symmetric positive (semi-)definite is not."""
    pass


class MaxCountExceededError(MathKitError):
    """A counter went past its maximum, aborting the loop driving it."""

    def __init__(self, max_count: int, message: Optional[str] = None, **kwargs):
        details = kwargs.pop('details', {})
        details['max_count'] = max_count
        super().__init__(message or f"Maximal count ({max_count}) exceeded",
                         details=details, **kwargs)
        self.max_count = max_count


class TooManyEvaluationsError(MaxCountExceededError):

    def __init__(self, max_count: int, **kwargs):
        super().__init__(max_count,
                         message=f"Maximal number of evaluations ({max_count}) exceeded",
                         **kwargs)


class TooManyIterationsError(MaxCountExceededError):

    def __init__(self, max_count: int, **kwargs):
        super().__init__(max_count,
                         message=f"Maximal number of iterations ({max_count}) exceeded",
                         **kwargs)


class GeometryError(MathKitError):
    """A space partitioning tree is in an inconsistent state.

    This signals a broken internal invariant rather than bad user input.
    ``operation`` names the tree operation that detected it.
    """

    def __init__(self, message: str, operation: Optional[str] = None, **kwargs):
        details = kwargs.pop('details', {})
        if operation is not None:
            details['operation'] = operation

        super().__init__(message, details=details, **kwargs)
        self.operation = operation


def validate_not_none(value: Any, name: str) -> Any:
    """Return ``value``, raising ``NullArgumentError`` if it is None."""
    if value is None:
        raise NullArgumentError(f"Parameter '{name}' cannot be None", field=name)
    return value


def validate_positive(value: Union[int, float], name: str) -> Union[int, float]:
    """Return ``value``, raising ``NotStrictlyPositiveError`` unless it is > 0."""
    if value <= 0:
        raise NotStrictlyPositiveError(f"Parameter '{name}' must be positive, got {value}",
                                       field=name, value=value)
    return value


def validate_dimension(actual: Union[int, Sequence[int]], expected: Union[int, Sequence[int]],
                       name: str) -> None:
    """Check a size or a shape against the expected one.

    Raises
    ------
    DimensionMismatchError
        If they differ
    """
    if np.ndim(actual) == 0:
        matches = actual == expected
    else:
        matches = tuple(actual) == tuple(expected)
    if not matches:
        raise DimensionMismatchError(actual, expected, field=name)
