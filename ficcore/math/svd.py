"""
Singular value decomposition.
"""
from typing import Tuple

import numpy as np

from ficcore.errors import InvalidArgumentError


class SVD:
    """Thin SVD ``A = U @ S @ V.T``.

    For an m x n matrix with m >= n, U is m x n and V is n x n. A wide
    matrix is decomposed through its transpose, giving an m x m U and an
    n x m V.

    Args:
        matrix: Real two-dimensional matrix
    """

    def __init__(self, matrix):
        a = np.array(matrix, dtype=float)
        if a.ndim != 2 or a.size == 0:
            raise InvalidArgumentError("SVD needs a non-empty two-dimensional matrix")
        self._m, self._n = a.shape
        self._transposed = self._m < self._n
        work = a.T if self._transposed else a
        u, s, vh = np.linalg.svd(work, full_matrices=False)
        if self._transposed:
            self._u, self._v = vh.T, u
        else:
            self._u, self._v = u, vh.T
        self._s = s

    @property
    def u(self) -> np.ndarray:
        return self._u.copy()

    @property
    def v(self) -> np.ndarray:
        return self._v.copy()

    @property
    def singular_values(self) -> np.ndarray:
        return self._s.copy()

    @property
    def s(self) -> np.ndarray:
        """Singular values as a diagonal matrix."""
        return np.diag(self._s)

    @property
    def norm2(self) -> float:
        return float(self._s[0])

    @property
    def cond(self) -> float:
        return float(self._s[0] / self._s[-1])

    def _tolerance(self) -> float:
        return max(self._m, self._n) * float(self._s[0]) * np.finfo(float).eps

    @property
    def rank(self) -> int:
        return int(np.sum(self._s > self._tolerance()))

    def solve_for(self, b) -> np.ndarray:
        """Least-squares solution of ``A x = b``; singular values below tolerance are dropped."""
        rhs = np.asarray(b, dtype=float)
        if rhs.shape[0] != self._m:
            raise InvalidArgumentError(
                f"right-hand side has {rhs.shape[0]} rows, matrix has {self._m}"
            )
        tol = self._tolerance()
        w = np.array([1.0 / x if x > tol else 0.0 for x in self._s])
        return self._v @ (w * (self._u.T @ rhs))


def svd(matrix) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return ``(u, s, v)`` with ``s`` a diagonal matrix."""
    decomposition = SVD(matrix)
    return decomposition.u, decomposition.s, decomposition.v
