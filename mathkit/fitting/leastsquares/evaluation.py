"""
Evaluations of a least-squares model at a single point.

An evaluation bundles the point, the residuals (observed minus predicted)
and the Jacobian of the model. Statistics such as the cost, the RMS, the
covariance matrix and the parameter uncertainties are derived on demand
from these three stored quantities.
"""

from abc import ABC, abstractmethod

import numpy as np

from ...core.base.exceptions import DimensionMismatchError, validate_dimension
from ...core.math.linalg import SINGULARITY_THRESHOLD, as_matrix, as_vector, qr_inverse


def _frozen(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


class Evaluation(ABC):
    """Abstract result of evaluating a least-squares model at a point."""

    @property
    @abstractmethod
    def point(self) -> np.ndarray:
        """Parameter vector at which the model was evaluated."""
        pass

    @property
    @abstractmethod
    def residuals(self) -> np.ndarray:
        """Observed minus predicted values, one entry per observation."""
        pass

    @property
    @abstractmethod
    def jacobian(self) -> np.ndarray:
        """Jacobian of the model, shape (observations, parameters)."""
        pass

    @property
    @abstractmethod
    def cost(self) -> float:
        """Euclidean norm of the residuals."""
        pass

    @property
    @abstractmethod
    def rms(self) -> float:
        """Root-mean-square of the residuals."""
        pass

    @abstractmethod
    def get_covariances(self, threshold: float = SINGULARITY_THRESHOLD) -> np.ndarray:
        """Covariance matrix of the optimized parameters.

        Parameters
        ----------
        threshold : float
            Singularity threshold on the diagonal of the R factor of ``JᵀJ``

        Returns
        -------
        np.ndarray
            Inverse of ``JᵀJ``

        Raises
        ------
        SingularMatrixError
            If ``JᵀJ`` is singular below the threshold
        """
        pass

    @abstractmethod
    def get_sigma(self, threshold: float = SINGULARITY_THRESHOLD) -> np.ndarray:
        """Square roots of the diagonal of the covariance matrix."""
        pass


class AbstractEvaluation(Evaluation):
    """Evaluation deriving its statistics from point, residuals and Jacobian."""

    def __init__(self, observation_size: int):
        self._observation_size = observation_size

    @property
    def observation_size(self) -> int:
        return self._observation_size

    @property
    def cost(self) -> float:
        return float(np.linalg.norm(self.residuals))

    @property
    def rms(self) -> float:
        cost = self.cost
        return float(np.sqrt(cost * cost / self._observation_size))

    def get_covariances(self, threshold: float = SINGULARITY_THRESHOLD) -> np.ndarray:
        j = self.jacobian
        return qr_inverse(j.T @ j, threshold)

    def get_sigma(self, threshold: float = SINGULARITY_THRESHOLD) -> np.ndarray:
        return np.sqrt(np.diagonal(self.get_covariances(threshold)))

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(point={self.point.tolist()}, "
                f"cost={self.cost:.6g})")


class UnweightedEvaluation(AbstractEvaluation):
    """Evaluation of a model against a target with identity weights.

    Parameters
    ----------
    values : array_like
        Model values at ``point``
    jacobian : array_like
        Model Jacobian at ``point``
    target : array_like
        Observed values
    point : array_like
        Point of evaluation; copied so the caller may reuse its buffer
    """

    def __init__(self, values, jacobian, target, point):
        values = as_vector(values, "values")
        target = as_vector(target, "target")
        point = as_vector(point, "point")
        jacobian = as_matrix(jacobian, "jacobian")

        if values.shape != target.shape:
            raise DimensionMismatchError(values.size, target.size, field="values")
        validate_dimension(jacobian.shape, (target.size, point.size), "jacobian")

        super().__init__(target.size)
        self._point = _frozen(point)
        self._jacobian = _frozen(jacobian)
        self._residuals = _frozen(target - values)

    @property
    def point(self) -> np.ndarray:
        return self._point

    @property
    def residuals(self) -> np.ndarray:
        return self._residuals

    @property
    def jacobian(self) -> np.ndarray:
        return self._jacobian


class DenseWeightedEvaluation(AbstractEvaluation):
    """Weighted view of another evaluation.

    Residuals and Jacobian are multiplied by the weight square root ``S`` on
    every access; the wrapped evaluation is left untouched and ``S`` is
    shared, not copied.
    """

    def __init__(self, unweighted: Evaluation, weight_sqrt: np.ndarray):
        if weight_sqrt.shape != (unweighted.residuals.size,) * 2:
            raise DimensionMismatchError(weight_sqrt.shape, (unweighted.residuals.size,) * 2,
                                         field="weight")
        super().__init__(weight_sqrt.shape[0])
        self.unweighted = unweighted
        self.weight_sqrt = weight_sqrt

    @property
    def point(self) -> np.ndarray:
        return self.unweighted.point

    @property
    def residuals(self) -> np.ndarray:
        return self.weight_sqrt @ self.unweighted.residuals

    @property
    def jacobian(self) -> np.ndarray:
        return self.weight_sqrt @ self.unweighted.jacobian
