"""Input validation shared by the matrix routines."""
import numpy as np

from ficcore.errors import InvalidArgumentError


def as_square_matrix(matrix) -> np.ndarray:
    m = np.array(matrix, dtype=float)
    if m.ndim != 2 or m.shape[0] == 0 or m.shape[1] == 0:
        raise InvalidArgumentError("null or non two-dimensional matrix given")
    if m.shape[0] != m.shape[1]:
        raise InvalidArgumentError(f"input matrix must be square, got {m.shape[0]}x{m.shape[1]}")
    return m


def check_symmetry(m: np.ndarray) -> None:
    scale = max(float(np.max(np.abs(m))), 1.0)
    diff = np.abs(m - m.T)
    if np.any(diff > 1e-10 * scale):
        i, j = np.unravel_index(int(np.argmax(diff)), diff.shape)
        raise InvalidArgumentError(
            f"non symmetric matrix: [{i}][{j}]={m[i, j]}, [{j}][{i}]={m[j, i]}"
        )
