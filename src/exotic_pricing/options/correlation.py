"""
Correlation matrix utilities.

Cholesky factorization and correlated normal generation for multi-factor
simulation. The single-asset pricers do not use these; they are exposed
for callers building correlated draws.

[T1] A = L·Lᵀ for symmetric positive-definite A, L lower triangular.
See: Glasserman (2003) Section 2.3.3
"""

import numpy as np

from exotic_pricing.config.tolerances import CORRELATION_TOLERANCE
from exotic_pricing.errors import (
    AsymmetricMatrixError,
    MatrixError,
    NonSquareMatrixError,
    NotPositiveDefiniteError,
    ParameterValidationError,
)


def _as_square_matrix(matrix) -> np.ndarray:
    """Convert to a 2-D float array, rejecting ragged or non-square input."""
    rows = [list(row) for row in matrix]
    n = len(rows)
    if n == 0 or any(len(row) != n for row in rows):
        raise NonSquareMatrixError(
            f"CRITICAL: matrix must be square, got row lengths "
            f"{[len(row) for row in rows]}"
        )
    return np.array(rows, dtype=float)


def cholesky(matrix) -> np.ndarray:
    """
    Cholesky factorization, column by column.

    [T1] L[j,j] = sqrt(A[j,j] - Σ_k L[j,k]²)
         L[i,j] = (A[i,j] - Σ_k L[i,k]·L[j,k]) / L[j,j],  i > j

    Parameters
    ----------
    matrix : array-like
        Symmetric matrix, shape (k, k)

    Returns
    -------
    np.ndarray
        Lower-triangular factor L, shape (k, k)

    Raises
    ------
    NonSquareMatrixError
        If the input is not square
    AsymmetricMatrixError
        If the input differs from its transpose beyond tolerance
    NotPositiveDefiniteError
        At the first pivot that is zero, negative, or the root of a
        negative number

    Notes
    -----
    O(k³).
    """
    a = _as_square_matrix(matrix)
    if not is_symmetric(a):
        raise AsymmetricMatrixError("CRITICAL: matrix must be symmetric")
    n = a.shape[0]
    lower = np.zeros_like(a)

    for j in range(n):
        pivot = a[j, j] - np.dot(lower[j, :j], lower[j, :j])
        if not pivot > 0.0:
            raise NotPositiveDefiniteError(j, float(pivot))
        lower[j, j] = np.sqrt(pivot)

        for i in range(j + 1, n):
            lower[i, j] = (a[i, j] - np.dot(lower[i, :j], lower[j, :j])) / lower[j, j]

    return lower


def generate_correlated_variables(correlation_matrix, independent_normals) -> np.ndarray:
    """
    Transform independent standard normals into correlated normals.

    [T1] X = L·Z has covariance L·Lᵀ = Σ.

    Parameters
    ----------
    correlation_matrix : array-like
        Correlation matrix, shape (k, k)
    independent_normals : array-like
        Independent N(0, 1) draws, shape (k,) or (k, n_samples)

    Returns
    -------
    np.ndarray
        Correlated draws, same shape as independent_normals

    Raises
    ------
    ParameterValidationError
        If the number of normals differs from the matrix dimension
    MatrixError
        If the matrix cannot be factorized
    """
    lower = cholesky(correlation_matrix)
    z = np.asarray(independent_normals, dtype=float)

    if z.ndim == 0:
        raise ParameterValidationError(
            f"CRITICAL: expected {lower.shape[0]} independent normals, got a scalar"
        )
    if z.shape[0] != lower.shape[0]:
        raise ParameterValidationError(
            f"CRITICAL: expected {lower.shape[0]} independent normals, got {z.shape[0]}"
        )

    return lower @ z


def is_symmetric(matrix, tolerance: float = CORRELATION_TOLERANCE) -> bool:
    """Check |A[i,j] - A[j,i]| <= tolerance for all i, j."""
    a = np.asarray(matrix, dtype=float)
    return bool(np.all(np.abs(a - a.T) <= tolerance))


def is_valid_correlation_matrix(matrix) -> bool:
    """
    Composite validity check for a correlation matrix.

    Checks, in order: square, symmetric, unit diagonal, entries in [-1, 1],
    and positive definiteness via a successful Cholesky factorization.

    Parameters
    ----------
    matrix : array-like
        Candidate correlation matrix

    Returns
    -------
    bool
        True if every check passes. Never raises.
    """
    try:
        a = _as_square_matrix(matrix)
    except (MatrixError, TypeError, ValueError):
        return False

    if not is_symmetric(a):
        return False
    if np.any(np.abs(np.diag(a) - 1.0) > CORRELATION_TOLERANCE):
        return False
    if np.any((a < -1.0) | (a > 1.0)):
        return False

    try:
        cholesky(a)
    except MatrixError:
        return False
    return True
