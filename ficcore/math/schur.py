"""
Symmetric Schur decomposition by cyclic Jacobi rotations.
"""
import logging
from typing import Tuple

import numpy as np

from ficcore.errors import ConvergenceError

from ._checks import as_square_matrix, check_symmetry

logger = logging.getLogger(__name__)

MAX_SWEEPS = 100
_EPS_PREC = 1e-15


def _jacobi_rotate(m: np.ndarray, rot: float, dil: float, j1: int, k1: int, j2: int, k2: int) -> None:
    x1 = m[j1, k1]
    x2 = m[j2, k2]
    m[j1, k1] = x1 - dil * (x2 + x1 * rot)
    m[j2, k2] = x2 + dil * (x1 - x2 * rot)


class SymmetricSchurDecomposition:
    """Eigenvalues and eigenvectors of a real symmetric matrix.

    Eigenvalues are sorted in decreasing order, eigenvectors are the
    matching columns of ``eigenvectors`` with a non-negative first
    component. Eigenvalues negligible relative to the largest one are set
    to zero.

    Args:
        matrix: Square symmetric matrix

    Raises:
        InvalidArgumentError: Empty, non-square or non-symmetric input
        ConvergenceError: No convergence within 100 sweeps
    """

    def __init__(self, matrix):
        s = as_square_matrix(matrix)
        check_symmetry(s)
        size = s.shape[0]
        diagonal = np.diag(s).copy()
        vectors = np.eye(size)
        ss = s.copy()
        tmp_diag = diagonal.copy()
        tmp_acc = np.zeros(size)

        keep_looping = True
        ite = 1
        while True:
            off = sum(abs(ss[a, b]) for a in range(size - 1) for b in range(a + 1, size))
            if off == 0.0:
                keep_looping = False
            else:
                # small rotations are skipped during the first sweeps
                threshold = 0.2 * off / (size * size) if ite < 5 else 0.0
                for j in range(size - 1):
                    for k in range(j + 1, size):
                        small = abs(ss[j, k])
                        if (ite > 5 and small < _EPS_PREC * abs(diagonal[j])
                                and small < _EPS_PREC * abs(diagonal[k])):
                            ss[j, k] = 0.0
                        elif abs(ss[j, k]) > threshold:
                            heig = diagonal[k] - diagonal[j]
                            if small < _EPS_PREC * abs(heig):
                                tang = ss[j, k] / heig
                            else:
                                beta = 0.5 * heig / ss[j, k]
                                tang = 1.0 / (abs(beta) + np.sqrt(1.0 + beta * beta))
                                if beta < 0.0:
                                    tang = -tang
                            cosin = 1.0 / np.sqrt(1.0 + tang * tang)
                            sine = tang * cosin
                            rho = sine / (1.0 + cosin)
                            heig = tang * ss[j, k]
                            tmp_acc[j] -= heig
                            tmp_acc[k] += heig
                            diagonal[j] -= heig
                            diagonal[k] += heig
                            ss[j, k] = 0.0
                            for l in range(j):
                                _jacobi_rotate(ss, rho, sine, l, j, l, k)
                            for l in range(j + 1, k):
                                _jacobi_rotate(ss, rho, sine, j, l, l, k)
                            for l in range(k + 1, size):
                                _jacobi_rotate(ss, rho, sine, j, l, k, l)
                            for l in range(size):
                                _jacobi_rotate(vectors, rho, sine, l, j, l, k)
                tmp_diag += tmp_acc
                diagonal = tmp_diag.copy()
                tmp_acc[:] = 0.0
            ite += 1
            if ite > MAX_SWEEPS or not keep_looping:
                break

        if ite > MAX_SWEEPS:
            raise ConvergenceError(f"Too many iterations ({MAX_SWEEPS}) reached")
        logger.debug("Jacobi converged after %s sweeps", ite - 1)

        pairs = sorted(
            ((diagonal[c], tuple(vectors[:, c])) for c in range(size)),
            reverse=True,
        )
        max_ev = pairs[0][0]
        self._eigenvalues = np.empty(size)
        self._eigenvectors = np.empty((size, size))
        for col, (value, vector) in enumerate(pairs):
            # round-off
            self._eigenvalues[col] = 0.0 if max_ev != 0.0 and abs(value / max_ev) < 1e-16 else value
            sign = -1.0 if vector[0] < 0.0 else 1.0
            self._eigenvectors[:, col] = sign * np.array(vector)

    @property
    def eigenvalues(self) -> np.ndarray:
        return self._eigenvalues.copy()

    @property
    def eigenvectors(self) -> np.ndarray:
        return self._eigenvectors.copy()


def eigen(matrix) -> Tuple[np.ndarray, np.ndarray]:
    """Return ``(eigenvalues, eigenvectors)`` of a symmetric matrix."""
    decomposition = SymmetricSchurDecomposition(matrix)
    return decomposition.eigenvalues, decomposition.eigenvectors
