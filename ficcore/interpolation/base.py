"""
Base classes for one-dimensional interpolation.

An ``Interpolator`` is a strategy object creating ``Interpolation``
instances over node arrays. Interpolations keep a reference to the arrays
they were built on (no copy), so a caller can move an ordinate in place and
call ``update()`` to refresh cached coefficients. The bootstrap relies on
this to solve one node at a time.
"""
from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np

from ficcore.errors import ExtrapolationError, InvalidArgumentError

ArrayLike = Sequence[float] | np.ndarray


def _as_array(values: ArrayLike) -> np.ndarray:
    # np.asarray returns float64 arrays unchanged, keeping in-place updates visible
    return np.asarray(values, dtype=float)


class Interpolation(ABC):
    """Interpolating function defined on strictly increasing nodes."""

    required_points = 2

    def __init__(self, x: ArrayLike, y: ArrayLike):
        self.x = _as_array(x)
        self.y = _as_array(y)
        if self.x.ndim != 1 or self.y.ndim != 1:
            raise InvalidArgumentError("interpolation nodes must be one-dimensional")
        if len(self.x) != len(self.y):
            raise InvalidArgumentError(
                f"x and y must have same length ({len(self.x)} vs {len(self.y)})"
            )
        if len(self.x) < self.required_points:
            raise InvalidArgumentError(
                f"not enough points to interpolate: at least {self.required_points} "
                f"required, {len(self.x)} provided"
            )
        if np.any(np.diff(self.x) <= 0.0):
            raise InvalidArgumentError("interpolation abscissae must be strictly increasing")
        self._extrapolate = False
        self.update()

    # ------------------------------------------------------------------
    # Range handling
    # ------------------------------------------------------------------
    @property
    def x_min(self) -> float:
        return float(self.x[0])

    @property
    def x_max(self) -> float:
        return float(self.x[-1])

    def is_in_range(self, x: float) -> bool:
        tol = 1e-12 * max(1.0, abs(x))
        return self.x_min - tol <= x <= self.x_max + tol

    def enable_extrapolation(self) -> None:
        self._extrapolate = True

    def disable_extrapolation(self) -> None:
        self._extrapolate = False

    @property
    def allows_extrapolation(self) -> bool:
        return self._extrapolate

    def _check_range(self, x: float, allow_extrapolation: bool) -> None:
        if not (allow_extrapolation or self._extrapolate or self.is_in_range(x)):
            raise ExtrapolationError(
                f"interpolation range is [{self.x_min}, {self.x_max}]: "
                f"extrapolation at {x} not allowed"
            )

    def _locate(self, x: float) -> int:
        """Index i of the segment [x_i, x_{i+1}] used for ``x``."""
        i = int(np.searchsorted(self.x, x, side="right")) - 1
        return min(max(i, 0), len(self.x) - 2)

    # ------------------------------------------------------------------
    # Public evaluation
    # ------------------------------------------------------------------
    def value(self, x: float, allow_extrapolation: bool = False) -> float:
        self._check_range(x, allow_extrapolation)
        return self._value(x)

    def __call__(self, x: float, allow_extrapolation: bool = False) -> float:
        return self.value(x, allow_extrapolation)

    def primitive(self, x: float, allow_extrapolation: bool = False) -> float:
        """Integral of the interpolant from ``x_min`` to ``x``."""
        self._check_range(x, allow_extrapolation)
        return self._primitive(x)

    def derivative(self, x: float, allow_extrapolation: bool = False) -> float:
        self._check_range(x, allow_extrapolation)
        return self._derivative(x)

    def update(self) -> None:
        """Recompute cached coefficients after the node arrays changed."""

    @abstractmethod
    def _value(self, x: float) -> float:
        ...

    @abstractmethod
    def _primitive(self, x: float) -> float:
        ...

    @abstractmethod
    def _derivative(self, x: float) -> float:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n={len(self.x)}, range=[{self.x_min}, {self.x_max}])"


class Interpolator(ABC):
    """Factory building an ``Interpolation`` of a given kind."""

    name: str = ""
    # a global interpolation moves every segment when one node moves
    is_global = False
    required_points = 2

    @abstractmethod
    def interpolate(self, x: ArrayLike, y: ArrayLike) -> Interpolation:
        ...

    def __eq__(self, other) -> bool:
        if not isinstance(other, Interpolator):
            return NotImplemented
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self).__name__)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
