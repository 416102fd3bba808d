"""
Linear algebra helpers for least-squares problems.

Thin wrappers around numpy and scipy that apply the singularity conventions
used by the fitting framework: a decomposition is considered singular when
a pivot (or diagonal element of R) is not larger than a threshold.
"""

import logging
from typing import Tuple

import numpy as np
from scipy import linalg

from ..base.exceptions import (
    DimensionMismatchError,
    NonPositiveDefiniteMatrixError,
    SingularMatrixError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# default threshold below which a pivot is considered null
SINGULARITY_THRESHOLD = 1e-11

# relative tolerance on the symmetry of weight matrices
SYMMETRY_TOLERANCE = 1e-10


def as_vector(values, name: str = "vector") -> np.ndarray:
    """Convert input to a 1-D float array, copying it."""
    array = np.array(values, dtype=float)
    if array.ndim != 1:
        raise ValidationError(f"{name} must be one-dimensional, got shape {array.shape}",
                              field=name)
    return array


def as_matrix(values, name: str = "matrix") -> np.ndarray:
    """Convert input to a 2-D float array, copying it."""
    array = np.array(values, dtype=float)
    if array.ndim != 2:
        raise ValidationError(f"{name} must be two-dimensional, got shape {array.shape}",
                              field=name)
    return array


def is_diagonal(matrix: np.ndarray) -> bool:
    """Check whether a square matrix has only zeros off its diagonal."""
    return np.count_nonzero(matrix - np.diag(np.diagonal(matrix))) == 0


def square_root(matrix: np.ndarray) -> np.ndarray:
    """Compute the symmetric square root ``S`` of a weight matrix ``W``.

    ``S`` satisfies ``S @ S == W``. Diagonal matrices get an element-wise
    square root, general symmetric matrices go through an eigen
    decomposition.

    Parameters
    ----------
    matrix : np.ndarray
        Square, symmetric positive semi-definite matrix

    Returns
    -------
    np.ndarray
        Square root of the matrix

    Raises
    ------
    DimensionMismatchError
        If the matrix is not square
    NonPositiveDefiniteMatrixError
        If the matrix is not symmetric or has negative eigenvalues
    """
    m = as_matrix(matrix, "weight")
    if m.shape[0] != m.shape[1]:
        raise DimensionMismatchError(m.shape[1], m.shape[0], field="weight",
                                     message=f"Weight matrix must be square, got shape {m.shape}")

    if is_diagonal(m):
        diagonal = np.diagonal(m)
        if np.any(diagonal < 0):
            raise NonPositiveDefiniteMatrixError("Diagonal weight matrix has negative entries",
                                                 details={'min_entry': float(diagonal.min())})
        return np.diag(np.sqrt(diagonal))

    scale = max(np.max(np.abs(m)), 1.0)
    if not np.allclose(m, m.T, rtol=0.0, atol=SYMMETRY_TOLERANCE * scale):
        raise NonPositiveDefiniteMatrixError("Weight matrix is not symmetric")

    eigenvalues, eigenvectors = linalg.eigh(m)
    if np.any(eigenvalues < -SYMMETRY_TOLERANCE * scale):
        raise NonPositiveDefiniteMatrixError("Weight matrix has negative eigenvalues",
                                             details={'min_eigenvalue': float(eigenvalues.min())})
    eigenvalues = np.clip(eigenvalues, 0.0, None)

    logger.debug(f"Computed square root of a {m.shape[0]}x{m.shape[0]} dense weight matrix")
    return (eigenvectors * np.sqrt(eigenvalues)) @ eigenvectors.T


def qr_inverse(matrix: np.ndarray, threshold: float) -> np.ndarray:
    """Invert a square matrix through a QR decomposition.

    Raises
    ------
    SingularMatrixError
        If any diagonal element of R is not larger than ``threshold`` in
        absolute value
    """
    q, r = linalg.qr(matrix)
    if np.any(np.abs(np.diagonal(r)) <= threshold):
        raise SingularMatrixError(threshold=threshold)
    return linalg.solve_triangular(r, q.T)


def normal_equations(jacobian: np.ndarray, residuals: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Build the normal equations ``(JᵀJ, Jᵀr)``."""
    return jacobian.T @ jacobian, jacobian.T @ residuals


def solve_lu(jacobian: np.ndarray, residuals: np.ndarray,
             threshold: float = SINGULARITY_THRESHOLD) -> np.ndarray:
    """Solve the normal equations with an LU decomposition."""
    normal, j_tr = normal_equations(jacobian, residuals)
    lu, piv = linalg.lu_factor(normal, check_finite=True)
    if np.any(np.abs(np.diagonal(lu)) <= threshold):
        raise SingularMatrixError(threshold=threshold)
    return linalg.lu_solve((lu, piv), j_tr)


def solve_qr(jacobian: np.ndarray, residuals: np.ndarray,
             threshold: float = SINGULARITY_THRESHOLD) -> np.ndarray:
    """Solve the linear least-squares step with a QR decomposition of J."""
    q, r = linalg.qr(jacobian, mode='economic')
    if np.any(np.abs(np.diagonal(r)) <= threshold):
        raise SingularMatrixError(threshold=threshold)
    return linalg.solve_triangular(r, q.T @ residuals)


def solve_cholesky(jacobian: np.ndarray, residuals: np.ndarray,
                   threshold: float = SINGULARITY_THRESHOLD) -> np.ndarray:
    """Solve the normal equations with a Cholesky decomposition."""
    normal, j_tr = normal_equations(jacobian, residuals)
    try:
        factor = linalg.cho_factor(normal)
    except linalg.LinAlgError as e:
        raise NonPositiveDefiniteMatrixError("Normal matrix is not positive definite", cause=e) from e
    if np.any(np.abs(np.diagonal(factor[0])) <= threshold):
        raise SingularMatrixError(threshold=threshold)
    return linalg.cho_solve(factor, j_tr)


def solve_svd(jacobian: np.ndarray, residuals: np.ndarray,
              threshold: float = SINGULARITY_THRESHOLD) -> np.ndarray:
    """Solve the linear least-squares step with a singular value decomposition.

    Singular values below ``threshold`` relative to the largest one are
    discarded, so this solver never reports a singular problem.
    """
    return np.linalg.pinv(jacobian, rcond=threshold) @ residuals
