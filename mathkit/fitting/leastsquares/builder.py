"""
Fluent builder for least-squares problems.
"""

from typing import Callable, Optional

from ...core.base.exceptions import NullArgumentError
from ...core.config.settings import get_config
from .factory import LeastSquaresFactory
from .problem import ConvergenceChecker, LeastSquaresProblem


class LeastSquaresBuilder:
    """Mutable builder accumulating the pieces of a least-squares problem.

    Every setter returns the builder itself. Limits that are never set fall
    back to the global ``FittingConfig`` when ``build`` is called.

    Examples
    --------
    ::

        problem = (LeastSquaresBuilder()
                   .model(value_fn, jacobian_fn)
                   .target([3.0, 0.0])
                   .start([0.0, 0.0])
                   .build())
    """

    def __init__(self):
        self._max_evaluations: Optional[int] = None
        self._max_iterations: Optional[int] = None
        self._checker: Optional[ConvergenceChecker] = None
        self._model = None
        self._target = None
        self._start = None
        self._weight = None

    def max_evaluations(self, new_max_evaluations: int) -> "LeastSquaresBuilder":
        self._max_evaluations = new_max_evaluations
        return self

    def max_iterations(self, new_max_iterations: int) -> "LeastSquaresBuilder":
        self._max_iterations = new_max_iterations
        return self

    def checker(self, new_checker: ConvergenceChecker) -> "LeastSquaresBuilder":
        """Set a checker over evaluations."""
        self._checker = new_checker
        return self

    def checker_pair(self, new_checker: ConvergenceChecker) -> "LeastSquaresBuilder":
        """Set a checker over ``PointVectorValuePair`` iterates."""
        return self.checker(LeastSquaresFactory.evaluation_checker(new_checker))

    def model(self, value: Callable, jacobian: Optional[Callable] = None) -> "LeastSquaresBuilder":
        """Set the model.

        With a single argument, ``value`` must return a ``(values, jacobian)``
        pair. With two, they are combined by ``LeastSquaresFactory.model``.
        """
        if jacobian is None:
            self._model = value
        else:
            self._model = LeastSquaresFactory.model(value, jacobian)
        return self

    def target(self, new_target) -> "LeastSquaresBuilder":
        self._target = new_target
        return self

    def start(self, new_start) -> "LeastSquaresBuilder":
        self._start = new_start
        return self

    def weight(self, new_weight) -> "LeastSquaresBuilder":
        self._weight = new_weight
        return self

    def build(self) -> LeastSquaresProblem:
        """Construct the problem through ``LeastSquaresFactory.create``.

        Raises
        ------
        NullArgumentError
            If the model, target or start has not been set
        """
        for name, value in (('model', self._model), ('target', self._target), ('start', self._start)):
            if value is None:
                raise NullArgumentError(f"Cannot build a least-squares problem without {name}",
                                        field=name)

        config = get_config()
        max_evaluations = self._max_evaluations if self._max_evaluations is not None else config.max_evaluations
        max_iterations = self._max_iterations if self._max_iterations is not None else config.max_iterations

        return LeastSquaresFactory.create(self._model, self._target, self._start, self._checker,
                                          max_evaluations, max_iterations, weight=self._weight)
