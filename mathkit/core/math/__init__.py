"""
Mathematical utilities for mathkit with minimal dependencies.

This module provides the linear algebra primitives consumed by the
least-squares framework, using only numpy and scipy.
"""

from .linalg import (
    SINGULARITY_THRESHOLD,
    as_vector,
    as_matrix,
    is_diagonal,
    square_root,
    qr_inverse,
    normal_equations,
    solve_lu,
    solve_qr,
    solve_cholesky,
    solve_svd,
)

__all__ = [
    "SINGULARITY_THRESHOLD",
    "as_vector",
    "as_matrix",
    "is_diagonal",
    "square_root",
    "qr_inverse",
    "normal_equations",
    "solve_lu",
    "solve_qr",
    "solve_cholesky",
    "solve_svd",
]
