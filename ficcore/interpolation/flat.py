"""
Piecewise-constant (step) interpolation.
"""
import numpy as np

from .base import ArrayLike, Interpolation, Interpolator


class BackwardFlatInterpolation(Interpolation):
    """Step function taking the value of the right node.

    At a node the value is that node's ordinate; on ``(x_i, x_{i+1}]`` it
    is ``y_{i+1}``. Before the first node the first ordinate is used and
    after the last node the last one.
    """

    def update(self) -> None:
        self._primitives = np.concatenate(([0.0], np.cumsum(np.diff(self.x) * self.y[1:])))

    def _value(self, x: float) -> float:
        if x <= self.x[0]:
            return float(self.y[0])
        i = self._locate(x)
        if x == self.x[i]:
            return float(self.y[i])
        return float(self.y[i + 1])

    def _primitive(self, x: float) -> float:
        i = self._locate(x)
        return float(self._primitives[i] + (x - self.x[i]) * self.y[i + 1])

    def _derivative(self, x: float) -> float:
        return 0.0


class ForwardFlatInterpolation(Interpolation):
    """Step function holding the left node value on ``[x_i, x_{i+1})``."""

    def update(self) -> None:
        self._primitives = np.concatenate(([0.0], np.cumsum(np.diff(self.x) * self.y[:-1])))

    def _value(self, x: float) -> float:
        if x >= self.x[-1]:
            return float(self.y[-1])
        return float(self.y[self._locate(x)])

    def _primitive(self, x: float) -> float:
        i = self._locate(x)
        return float(self._primitives[i] + (x - self.x[i]) * self.y[i])

    def _derivative(self, x: float) -> float:
        return 0.0


class BackwardFlat(Interpolator):
    name = "BACKWARD_FLAT"

    def interpolate(self, x: ArrayLike, y: ArrayLike) -> Interpolation:
        return BackwardFlatInterpolation(x, y)


class ForwardFlat(Interpolator):
    name = "FORWARD_FLAT"

    def interpolate(self, x: ArrayLike, y: ArrayLike) -> Interpolation:
        return ForwardFlatInterpolation(x, y)
