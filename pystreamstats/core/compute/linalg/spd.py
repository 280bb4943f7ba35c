"""
Symmetric positive-definite linear algebra primitives.

The streaming core treats these as opaque numeric operations: a diagonal
offset (used for ridge penalties) and a Cholesky-based solve that reports
failure with NotPositiveDefiniteError instead of returning garbage.

CPU path: SciPy cho_factor / cho_solve (LAPACK potrf / potrs).
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import cho_factor, cho_solve, LinAlgError

from pystreamstats.core.exceptions import NotPositiveDefiniteError, DimensionError


def add_diagonal(
    A: NDArray[np.floating[Any]],
    d: NDArray[np.floating[Any]] | float,
) -> NDArray[np.floating[Any]]:
    """
    Return A + diag(d) without modifying A.

    Args:
        A: Square matrix, shape (p, p)
        d: Scalar or vector of length p

    Returns:
        New matrix with d added to the diagonal
    """
    A = np.asarray(A, dtype=np.float64)
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise DimensionError(f"A: expected a square matrix, got shape {A.shape}")
    out = A.copy()
    idx = np.arange(A.shape[0])
    out[idx, idx] += d
    return out


def is_positive_definite(A: NDArray[np.floating[Any]]) -> bool:
    """Check positive definiteness by attempting a Cholesky factorization."""
    try:
        cho_factor(A, lower=True, check_finite=True)
    except (LinAlgError, ValueError):
        return False
    return True


def spd_solve(
    A: NDArray[np.floating[Any]],
    b: NDArray[np.floating[Any]],
    matrix_name: str = 'A',
) -> NDArray[np.floating[Any]]:
    """
    Solve A x = b for symmetric positive-definite A.

    Only the lower triangle of A is referenced.

    Args:
        A: Symmetric matrix, shape (p, p)
        b: Right-hand side, shape (p,) or (p, k)
        matrix_name: Name used in the error message

    Returns:
        Solution x with the shape of b

    Raises:
        NotPositiveDefiniteError: If the Cholesky factorization fails
    """
    try:
        factor = cho_factor(A, lower=True, check_finite=True)
    except (LinAlgError, ValueError) as e:
        raise NotPositiveDefiniteError(
            f"{matrix_name} is not positive definite: {e}",
            matrix_name=matrix_name,
        ) from e
    return cho_solve(factor, b)
