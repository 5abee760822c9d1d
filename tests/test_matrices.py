import numpy as np
import pytest

from ficcore.errors import DomainError, InvalidArgumentError
from ficcore.math import (
    SVD,
    SalvagingAlgorithm,
    SymmetricSchurDecomposition,
    cholesky_decomposition,
    close_enough,
    eigen,
    nearest_correlation_matrix,
    normalize_pseudo_root,
    pseudo_sqrt,
    rank_reduced_sqrt,
    svd,
)

M1 = np.array([
    [1.0, 0.9, 0.7],
    [0.9, 1.0, 0.4],
    [0.7, 0.4, 1.0],
])

# not positive semi-definite
M2 = np.array([
    [1.0, 0.9, 0.7],
    [0.9, 1.0, 0.3],
    [0.7, 0.3, 1.0],
])

TRIDIAGONAL = np.array([
    [2.0, -1.0, 0.0, 0.0],
    [-1.0, 2.0, -1.0, 0.0],
    [0.0, -1.0, 2.0, -1.0],
    [0.0, 0.0, -1.0, 2.0],
])


def _frobenius(m):
    return float(np.sqrt(np.sum(m * m)))


# ----------------------------------------------------------------------
# Eigen decomposition
# ----------------------------------------------------------------------
@pytest.mark.parametrize("matrix", [M1, M2, TRIDIAGONAL])
def test_eigen_decomposition(matrix):
    values, vectors = eigen(matrix)
    assert np.all(np.diff(values) <= 0.0)
    assert np.all(vectors[0, :] >= 0.0)
    np.testing.assert_allclose(vectors.T @ vectors, np.eye(len(values)), atol=1e-13)
    for i, value in enumerate(values):
        np.testing.assert_allclose(matrix @ vectors[:, i], value * vectors[:, i], atol=1e-12)
    np.testing.assert_allclose(vectors @ np.diag(values) @ vectors.T, matrix, atol=1e-13)


def test_eigenvalues_match_numpy():
    jd = SymmetricSchurDecomposition(M1)
    np.testing.assert_allclose(jd.eigenvalues, np.sort(np.linalg.eigvalsh(M1))[::-1], atol=1e-13)


def test_diagonal_matrix():
    values, vectors = eigen(np.diag([1.0, 3.0, 2.0]))
    np.testing.assert_allclose(values, [3.0, 2.0, 1.0])
    np.testing.assert_allclose(np.abs(vectors), np.array([[0, 0, 1], [1, 0, 0], [0, 1, 0]]))


def test_eigen_rejects_invalid_input():
    with pytest.raises(InvalidArgumentError):
        eigen(np.ones((2, 3)))
    with pytest.raises(InvalidArgumentError):
        eigen(np.array([[1.0, 0.5], [0.4, 1.0]]))


# ----------------------------------------------------------------------
# Cholesky
# ----------------------------------------------------------------------
def test_cholesky():
    lower = cholesky_decomposition(M1)
    assert np.allclose(np.triu(lower, 1), 0.0)
    np.testing.assert_allclose(lower @ lower.T, M1, atol=1e-14)


def test_cholesky_requires_positive_definite_input():
    with pytest.raises(DomainError):
        cholesky_decomposition(M2)
    singular = np.array([[1.0, 1.0], [1.0, 1.0]])
    with pytest.raises(DomainError):
        cholesky_decomposition(singular)
    lower = cholesky_decomposition(singular, flexible=True)
    np.testing.assert_allclose(lower @ lower.T, singular)


def test_close_enough():
    assert close_enough(1.0, 1.0 + 1e-15)
    assert not close_enough(1.0, 1.0001)
    assert close_enough(0.0, 1e-30)
    assert not close_enough(0.0, 1e-10)


# ----------------------------------------------------------------------
# Pseudo square roots
# ----------------------------------------------------------------------
def test_pseudo_sqrt_of_positive_definite_matrix():
    root = pseudo_sqrt(M1)
    np.testing.assert_allclose(root @ root.T, M1, atol=1e-14)
    root = pseudo_sqrt(M1, SalvagingAlgorithm.SPECTRAL)
    np.testing.assert_allclose(root @ root.T, M1, atol=1e-12)


def test_pseudo_sqrt_rejects_negative_eigenvalues():
    with pytest.raises(DomainError):
        pseudo_sqrt(M2, SalvagingAlgorithm.NONE)


def test_spectral_salvaging():
    root = pseudo_sqrt(M2, "spectral")
    approx = root @ root.T
    np.testing.assert_allclose(np.diag(approx), np.ones(3), atol=1e-14)
    assert np.all(np.linalg.eigvalsh(approx) > -1e-12)


@pytest.mark.parametrize("algorithm", [SalvagingAlgorithm.HYPERSPHERE, SalvagingAlgorithm.LOWER_DIAGONAL])
def test_hypersphere_salvaging_improves_on_spectral(algorithm):
    spectral = pseudo_sqrt(M2, SalvagingAlgorithm.SPECTRAL)
    spectral_error = _frobenius(spectral @ spectral.T - M2)
    root = pseudo_sqrt(M2, algorithm)
    approx = root @ root.T
    np.testing.assert_allclose(np.diag(approx), np.ones(3), atol=1e-12)
    assert _frobenius(approx - M2) <= spectral_error + 1e-8
    if algorithm == SalvagingAlgorithm.LOWER_DIAGONAL:
        assert np.allclose(np.triu(root, 1), 0.0)


def test_higham_nearest_correlation():
    expected = np.array([
        [1.0, -0.8084124981, 0.1915875019, 0.106775049],
        [-0.8084124981, 1.0, -0.6562326948, 0.1915875019],
        [0.1915875019, -0.6562326948, 1.0, -0.8084124981],
        [0.106775049, 0.1915875019, -0.8084124981, 1.0],
    ])
    root = pseudo_sqrt(TRIDIAGONAL, SalvagingAlgorithm.HIGHAM)
    np.testing.assert_allclose(root @ root.T, expected, atol=1e-4)
    nearest = nearest_correlation_matrix(TRIDIAGONAL)
    np.testing.assert_allclose(nearest, nearest.T)
    np.testing.assert_allclose(nearest, expected, atol=1e-4)


def test_unknown_salvaging_algorithm():
    with pytest.raises(InvalidArgumentError, match="Unknown salvaging algorithm"):
        pseudo_sqrt(M1, "magic")


def test_rank_reduced_sqrt():
    full = rank_reduced_sqrt(M1, 3, 1.0)
    assert full.shape == (3, 3)
    np.testing.assert_allclose(full @ full.T, M1, atol=1e-12)

    one_factor = rank_reduced_sqrt(M1, 1, 1.0)
    assert one_factor.shape == (3, 1)
    np.testing.assert_allclose(np.diag(one_factor @ one_factor.T), np.ones(3), atol=1e-14)

    salvaged = rank_reduced_sqrt(M2, 3, 1.0, SalvagingAlgorithm.SPECTRAL)
    np.testing.assert_allclose(np.diag(salvaged @ salvaged.T), np.ones(3), atol=1e-14)


@pytest.mark.parametrize(
    "args",
    [
        (M1, 3, 0.0),
        (M1, 3, 1.5),
        (M1, 0, 1.0),
        (M1, 3, 1.0, SalvagingAlgorithm.HYPERSPHERE),
        (M1, 3, 1.0, SalvagingAlgorithm.LOWER_DIAGONAL),
    ],
)
def test_rank_reduced_sqrt_invalid_arguments(args):
    with pytest.raises(InvalidArgumentError):
        rank_reduced_sqrt(*args)


def test_rank_reduced_sqrt_rejects_negative_eigenvalues():
    with pytest.raises(DomainError):
        rank_reduced_sqrt(M2, 3, 1.0)


def test_normalize_pseudo_root():
    pseudo = np.array([[2.0, 0.0], [1.0, 1.0]])
    result = normalize_pseudo_root(np.eye(2), pseudo)
    np.testing.assert_allclose(np.sum(result * result, axis=1), [1.0, 1.0])
    with pytest.raises(InvalidArgumentError):
        normalize_pseudo_root(np.eye(3), pseudo)


# ----------------------------------------------------------------------
# Singular value decomposition
# ----------------------------------------------------------------------
@pytest.mark.parametrize(
    "matrix",
    [
        M1,
        np.array([[1.0, 2.0, 3.0, 4.0], [5.0, 6.0, 7.0, 8.0], [9.0, 10.0, 11.0, 13.0]]),
        np.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [7.0, 8.0, 10.0], [1.0, -1.0, 2.0]]),
    ],
)
def test_svd_reconstruction(matrix):
    u, s, v = svd(matrix)
    np.testing.assert_allclose(u @ s @ v.T, matrix, atol=1e-12)
    np.testing.assert_allclose(u.T @ u, np.eye(u.shape[1]), atol=1e-12)
    np.testing.assert_allclose(v.T @ v, np.eye(v.shape[1]), atol=1e-12)
    assert np.all(np.diff(np.diag(s)) <= 0.0)


def test_svd_inspectors():
    decomposition = SVD(np.array([[3.0, 0.0], [0.0, 1.0]]))
    assert decomposition.norm2 == pytest.approx(3.0)
    assert decomposition.cond == pytest.approx(3.0)
    assert decomposition.rank == 2
    np.testing.assert_allclose(decomposition.singular_values, [3.0, 1.0])
    assert SVD(np.array([[1.0, 2.0], [2.0, 4.0]])).rank == 1


def test_svd_least_squares():
    a = np.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [7.0, 8.0, 10.0], [1.0, -1.0, 2.0]])
    b = np.array([1.0, 2.0, 3.0, 4.0])
    expected, *_ = np.linalg.lstsq(a, b, rcond=None)
    np.testing.assert_allclose(SVD(a).solve_for(b), expected, atol=1e-12)
    with pytest.raises(InvalidArgumentError):
        SVD(a).solve_for(np.ones(3))


def test_svd_rejects_empty_input():
    with pytest.raises(InvalidArgumentError):
        SVD(np.array([1.0, 2.0]))
