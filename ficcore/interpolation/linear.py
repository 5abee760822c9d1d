"""
Linear and log-linear interpolation.
"""
import math

import numpy as np

from ficcore.errors import DomainError

from .base import ArrayLike, Interpolation, Interpolator


class LinearInterpolation(Interpolation):
    """Affine between bracketing nodes, extended linearly outside them."""

    def update(self) -> None:
        dx = np.diff(self.x)
        self._slopes = np.diff(self.y) / dx
        self._primitives = np.concatenate(
            ([0.0], np.cumsum(dx * (self.y[:-1] + 0.5 * dx * self._slopes)))
        )

    def _value(self, x: float) -> float:
        i = self._locate(x)
        return float(self.y[i] + (x - self.x[i]) * self._slopes[i])

    def _primitive(self, x: float) -> float:
        i = self._locate(x)
        dx = x - self.x[i]
        return float(self._primitives[i] + dx * (self.y[i] + 0.5 * dx * self._slopes[i]))

    def _derivative(self, x: float) -> float:
        return float(self._slopes[self._locate(x)])


class LogLinearInterpolation(Interpolation):
    """Linear in the logarithm of the ordinates.

    Keeps interpolated values positive, which makes it the usual choice
    for discount factors and survival probabilities.
    """

    def update(self) -> None:
        if np.any(self.y <= 0.0):
            bad = int(np.argmax(self.y <= 0.0))
            raise DomainError(
                f"invalid value ({self.y[bad]}) at index {bad}: "
                f"log-linear interpolation needs positive ordinates"
            )
        dx = np.diff(self.x)
        self._log_y = np.log(self.y)
        self._slopes = np.diff(self._log_y) / dx
        segments = np.where(
            np.abs(self._slopes) > 1e-14,
            (self.y[1:] - self.y[:-1]) / np.where(self._slopes == 0.0, 1.0, self._slopes),
            self.y[:-1] * dx,
        )
        self._primitives = np.concatenate(([0.0], np.cumsum(segments)))

    def _value(self, x: float) -> float:
        i = self._locate(x)
        return math.exp(self._log_y[i] + (x - self.x[i]) * self._slopes[i])

    def _primitive(self, x: float) -> float:
        i = self._locate(x)
        s = self._slopes[i]
        if abs(s) <= 1e-14:
            return float(self._primitives[i] + self.y[i] * (x - self.x[i]))
        return float(self._primitives[i] + (self._value(x) - self.y[i]) / s)

    def _derivative(self, x: float) -> float:
        return self._value(x) * float(self._slopes[self._locate(x)])


class Linear(Interpolator):
    name = "LINEAR"

    def interpolate(self, x: ArrayLike, y: ArrayLike) -> Interpolation:
        return LinearInterpolation(x, y)


class LogLinear(Interpolator):
    name = "LOGLINEAR"

    def interpolate(self, x: ArrayLike, y: ArrayLike) -> Interpolation:
        return LogLinearInterpolation(x, y)
