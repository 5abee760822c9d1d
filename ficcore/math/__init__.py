"""Numerical utilities: root finding and dense-matrix decompositions."""

from .cholesky import cholesky_decomposition, close_enough
from .pseudosqrt import (
    SalvagingAlgorithm,
    hypersphere_optimize,
    nearest_correlation_matrix,
    normalize_pseudo_root,
    pseudo_sqrt,
    rank_reduced_sqrt,
)
from .schur import SymmetricSchurDecomposition, eigen
from .solvers import RootFindingError, RootResult, brent, brent_solve
from .svd import SVD, svd

__all__ = [
    "RootResult",
    "RootFindingError",
    "brent",
    "brent_solve",
    "SymmetricSchurDecomposition",
    "eigen",
    "cholesky_decomposition",
    "close_enough",
    "SalvagingAlgorithm",
    "pseudo_sqrt",
    "rank_reduced_sqrt",
    "nearest_correlation_matrix",
    "normalize_pseudo_root",
    "hypersphere_optimize",
    "SVD",
    "svd",
]
