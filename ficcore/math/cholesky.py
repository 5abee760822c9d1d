"""
Cholesky decomposition tolerating semi-definite input.
"""
import math

import numpy as np

from ficcore.errors import DomainError

from ._checks import as_square_matrix

_QL_EPSILON = np.finfo(float).eps


def close_enough(x: float, y: float, n: int = 42) -> bool:
    """Relative float comparison; absolute tolerance (n*eps)^2 against zero."""
    if x == y:
        return True
    diff = abs(x - y)
    tolerance = n * _QL_EPSILON
    if x * y == 0.0:
        return diff < tolerance * tolerance
    return diff <= tolerance * abs(x) or diff <= tolerance * abs(y)


def cholesky_decomposition(matrix, flexible: bool = False) -> np.ndarray:
    """
    Lower-triangular L with L @ L.T equal to ``matrix``.

    Args:
        matrix: Symmetric matrix
        flexible: Accept positive semi-definite input, zeroing the columns
            of vanishing pivots instead of failing

    Returns:
        Lower-triangular factor
    """
    s = as_square_matrix(matrix)
    size = s.shape[0]
    result = np.zeros((size, size))
    for i in range(size):
        for j in range(i, size):
            total = s[i, j] - float(np.dot(result[i, :i], result[j, :i]))
            if i == j:
                if not (flexible or total > 0.0):
                    raise DomainError("input matrix is not positive definite")
                result[i, i] = math.sqrt(max(total, 0.0))
            else:
                result[j, i] = 0.0 if close_enough(result[i, i], 0.0) else total / result[i, i]
    return result
