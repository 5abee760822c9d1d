"""
Pseudo square roots of (possibly not positive semi-definite) matrices.

The salvaging algorithms turn a covariance or correlation matrix with
negative eigenvalues into a usable root:

- NONE: the input must be positive semi-definite; Cholesky factor
- SPECTRAL: negative eigenvalues floored at zero, rows rescaled
- HYPERSPHERE / LOWER_DIAGONAL: spectral root refined by optimising the
  row angles of a hypersphere parametrisation
- HIGHAM: nearest correlation matrix by alternating projections
"""
import logging
import math
from enum import Enum
from typing import Union

import numpy as np
from scipy import optimize

from ficcore.errors import DomainError, InvalidArgumentError

from ._checks import as_square_matrix, check_symmetry
from .cholesky import cholesky_decomposition
from .schur import SymmetricSchurDecomposition

logger = logging.getLogger(__name__)

HIGHAM_MAX_ITERATIONS = 40
HIGHAM_TOLERANCE = 1e-6
HYPERSPHERE_MAX_ITERATIONS = 100
_ANGLE_EPS = 1e-16


class SalvagingAlgorithm(Enum):
    NONE = "NONE"
    SPECTRAL = "SPECTRAL"
    HYPERSPHERE = "HYPERSPHERE"
    LOWER_DIAGONAL = "LOWER_DIAGONAL"
    HIGHAM = "HIGHAM"

    @classmethod
    def coerce(cls, value: Union["SalvagingAlgorithm", str]) -> "SalvagingAlgorithm":
        if isinstance(value, cls):
            return value
        key = str(value).strip().upper().replace(" ", "_").replace("-", "_")
        if key not in cls.__members__:
            raise InvalidArgumentError(
                f"Unknown salvaging algorithm: {value}. Available: {list(cls.__members__)}"
            )
        return cls.__members__[key]


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------
def _check_input(matrix) -> np.ndarray:
    m = as_square_matrix(matrix)
    check_symmetry(m)
    return m


def normalize_pseudo_root(matrix: np.ndarray, pseudo: np.ndarray) -> np.ndarray:
    """Rescale the rows of ``pseudo`` so that (pseudo @ pseudo.T) matches the diagonal of ``matrix``."""
    if matrix.shape[0] != pseudo.shape[0]:
        raise InvalidArgumentError(
            f"matrix/pseudo mismatch: matrix rows are {matrix.shape[0]} "
            f"while pseudo rows are {pseudo.shape[0]}"
        )
    result = pseudo.copy()
    for i in range(result.shape[0]):
        norm = float(np.dot(result[i], result[i]))
        if norm > 0.0:
            result[i] *= math.sqrt(matrix[i, i] / norm)
    return result


def _check_min_eigenvalue(eigenvalues: np.ndarray) -> None:
    # eigenvalues are sorted in decreasing order
    if eigenvalues[-1] < -1e-16:
        raise DomainError(f"negative eigenvalue(s) ({eigenvalues[-1]:e})")


# ----------------------------------------------------------------------
# Hypersphere parametrisation
# ----------------------------------------------------------------------
def _clip_unit(x: float) -> float:
    return min(max(x, -1.0 + _ANGLE_EPS), 1.0 - _ANGLE_EPS)


def _root_from_angles(theta: np.ndarray, size: int, lower_diagonal: bool) -> np.ndarray:
    root = np.ones((size, size))
    if lower_diagonal:
        for i in range(size):
            base = i * (i - 1) // 2
            for k in range(size):
                if k > i:
                    root[i, k] = 0.0
                    continue
                for j in range(k + 1):
                    if j == k and k != i:
                        root[i, k] *= math.cos(theta[base + j])
                    elif j != i:
                        root[i, k] *= math.sin(theta[base + j])
    else:
        for i in range(size):
            for k in range(size):
                for j in range(k + 1):
                    if j == k and k != size - 1:
                        root[i, k] *= math.cos(theta[j * size + i])
                    elif j != size - 1:
                        root[i, k] *= math.sin(theta[j * size + i])
    return root


def _angles_from_root(root: np.ndarray, lower_diagonal: bool) -> np.ndarray:
    size = root.shape[0]
    if lower_diagonal:
        theta = np.zeros(size * (size - 1) // 2)
        for i in range(1, size):
            base = i * (i - 1) // 2
            for j in range(i):
                value = _clip_unit(root[i, j])
                for k in range(j):
                    value = _clip_unit(value / math.sin(theta[base + k]))
                theta[base + j] = math.acos(value)
                if j == i - 1 and root[i, i] < 0.0:
                    theta[base + j] = -theta[base + j]
        return theta

    theta = np.zeros(size * (size - 1))
    for i in range(size):
        for j in range(size - 1):
            value = _clip_unit(root[i, j])
            for k in range(j):
                value = _clip_unit(value / math.sin(theta[k * size + i]))
            theta[j * size + i] = math.acos(value)
            if j == size - 2 and root[i, j + 1] < 0.0:
                theta[j * size + i] = -theta[j * size + i]
    return theta


def hypersphere_optimize(target: np.ndarray, current_root: np.ndarray, lower_diagonal: bool) -> np.ndarray:
    """
    Refine a pseudo root by minimising the Frobenius distance to ``target``.

    Each row of the root is written in spherical coordinates so that its
    norm always matches the target variance; the angles are optimised with
    conjugate gradients.

    Args:
        target: Target covariance or correlation matrix
        current_root: Starting pseudo root (typically the spectral one)
        lower_diagonal: Keep the root lower triangular

    Returns:
        Optimised pseudo root
    """
    size = target.shape[0]
    variance = np.sqrt(np.diag(target))
    if lower_diagonal:
        approx = current_root @ current_root.T
        root = cholesky_decomposition(approx, flexible=True)
        root = root / np.sqrt(np.diag(approx))[:, None]
    else:
        root = current_root / variance[:, None]

    scale = np.outer(variance, variance)

    def cost(theta: np.ndarray) -> float:
        candidate = _root_from_angles(theta, size, lower_diagonal)
        diff = (candidate @ candidate.T) * scale - target
        return float(np.sum(diff * diff))

    start = _angles_from_root(root, lower_diagonal)
    result = optimize.minimize(
        cost, start, method="CG",
        options={"maxiter": HYPERSPHERE_MAX_ITERATIONS, "gtol": 1e-8},
    )
    logger.debug("Hypersphere optimisation: cost=%s iterations=%s", result.fun, result.nit)
    theta = result.x if result.fun <= cost(start) else start
    return _root_from_angles(theta, size, lower_diagonal) * variance[:, None]


# ----------------------------------------------------------------------
# Higham nearest correlation matrix
# ----------------------------------------------------------------------
def _norm_inf(m: np.ndarray) -> float:
    return float(np.max(np.sum(np.abs(m), axis=1)))


def _project_to_unit_diagonal(m: np.ndarray) -> np.ndarray:
    result = m.copy()
    np.fill_diagonal(result, 1.0)
    return result


def _project_to_positive_semidefinite(m: np.ndarray) -> np.ndarray:
    jd = SymmetricSchurDecomposition(m)
    vectors = jd.eigenvectors
    return vectors @ np.diag(np.maximum(jd.eigenvalues, 1e-16)) @ vectors.T


def nearest_correlation_matrix(
    matrix,
    max_iterations: int = HIGHAM_MAX_ITERATIONS,
    tolerance: float = HIGHAM_TOLERANCE,
) -> np.ndarray:
    """Higham's alternating projections onto the PSD and unit-diagonal sets."""
    a = _check_input(matrix)
    y = a.copy()
    x = a.copy()
    delta_s = np.zeros_like(a)
    last_x = x.copy()
    last_y = y.copy()
    for iteration in range(max_iterations):
        r = y - delta_s
        x = _project_to_positive_semidefinite(r)
        delta_s = x - r
        y = _project_to_unit_diagonal(x)
        change = max(
            _norm_inf(x - last_x) / _norm_inf(x),
            _norm_inf(y - last_y) / _norm_inf(y),
            _norm_inf(y - x) / _norm_inf(y),
        )
        if change <= tolerance:
            logger.debug("Higham projection converged after %s iterations", iteration + 1)
            break
        last_x = x
        last_y = y
    else:
        logger.warning(
            "Higham projection stopped at %s iterations (change %.3e)", max_iterations, change
        )
    # symmetric output
    return np.triu(y) + np.triu(y, 1).T


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------
def pseudo_sqrt(
    matrix,
    algorithm: Union[SalvagingAlgorithm, str] = SalvagingAlgorithm.NONE,
) -> np.ndarray:
    """
    Pseudo square root R of a symmetric matrix, with R @ R.T close to it.

    Args:
        matrix: Symmetric covariance or correlation matrix
        algorithm: Salvaging algorithm applied when it is not PSD

    Returns:
        Square pseudo root
    """
    m = _check_input(matrix)
    sa = SalvagingAlgorithm.coerce(algorithm)
    jd = SymmetricSchurDecomposition(m)
    eigenvalues = jd.eigenvalues

    if sa == SalvagingAlgorithm.NONE:
        _check_min_eigenvalue(eigenvalues)
        return cholesky_decomposition(m, flexible=True)
    if sa == SalvagingAlgorithm.HIGHAM:
        return cholesky_decomposition(nearest_correlation_matrix(m), flexible=True)

    result = jd.eigenvectors @ np.diag(np.sqrt(np.maximum(eigenvalues, 0.0)))
    result = normalize_pseudo_root(m, result)
    if sa == SalvagingAlgorithm.SPECTRAL:
        return result
    if np.any(eigenvalues < 0.0):
        result = hypersphere_optimize(m, result, sa == SalvagingAlgorithm.LOWER_DIAGONAL)
    return result


def rank_reduced_sqrt(
    matrix,
    max_rank: int,
    component_retained_percentage: float,
    algorithm: Union[SalvagingAlgorithm, str] = SalvagingAlgorithm.NONE,
) -> np.ndarray:
    """
    Pseudo root keeping only the leading principal components.

    Args:
        matrix: Symmetric covariance or correlation matrix
        max_rank: Upper bound on the number of columns returned
        component_retained_percentage: Share of the total variance (0, 1]
            the retained factors must explain
        algorithm: NONE, SPECTRAL or HIGHAM

    Returns:
        size x rank pseudo root
    """
    m = _check_input(matrix)
    sa = SalvagingAlgorithm.coerce(algorithm)
    if component_retained_percentage <= 0.0:
        raise InvalidArgumentError("no eigenvalues retained")
    if component_retained_percentage > 1.0:
        raise InvalidArgumentError("percentage to be retained > 100%")
    if max_rank < 1:
        raise InvalidArgumentError("max rank required < 1")

    jd = SymmetricSchurDecomposition(m)
    eigenvalues = jd.eigenvalues
    if sa == SalvagingAlgorithm.NONE:
        _check_min_eigenvalue(eigenvalues)
    elif sa == SalvagingAlgorithm.SPECTRAL:
        eigenvalues = np.maximum(eigenvalues, 0.0)
    elif sa == SalvagingAlgorithm.HIGHAM:
        jd = SymmetricSchurDecomposition(nearest_correlation_matrix(m))
        eigenvalues = jd.eigenvalues
    else:
        raise InvalidArgumentError(f"salvaging algorithm {sa.name} not supported for rank reduction")

    enough = component_retained_percentage * float(np.sum(eigenvalues))
    if component_retained_percentage == 1.0:
        # rounding may otherwise drop the last factors
        enough *= 1.1
    components = eigenvalues[0]
    retained = 1
    for value in eigenvalues[1:]:
        if components >= enough:
            break
        components += value
        retained += 1
    retained = min(retained, max_rank)

    result = jd.eigenvectors[:, :retained] @ np.diag(np.sqrt(np.maximum(eigenvalues[:retained], 0.0)))
    return normalize_pseudo_root(m, result)
