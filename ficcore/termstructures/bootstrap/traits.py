"""
Bootstrap traits.

A traits class names the quantity stored at the curve nodes (discount
factors, zero rates, survival probabilities...) and supplies everything
the iterative bootstrap needs about it: the value at the reference date,
a starting guess and a bracket for each node, the iteration budget, and
how the curve is evaluated from the node interpolation, including past
the last node.

Traits functions receive the curve being built and read its ``times``,
``data`` and ``interpolation``.
"""
import math
from abc import ABC, abstractmethod

import numpy as np

from ficcore.errors import InvalidArgumentError
from ficcore.interpolation.base import Interpolator
from ficcore.interpolation.flat import BackwardFlat
from ficcore.interpolation.linear import Linear, LogLinear

AVG_RATE = 0.05
MAX_RATE = 1.0
AVG_HAZARD_RATE = 0.01
QL_EPSILON = float(np.finfo(float).eps)


class BootstrapTraits(ABC):
    """Node quantity of a bootstrapped curve."""

    max_iterations = 30

    @staticmethod
    def default_interpolator() -> Interpolator:
        return Linear()

    @staticmethod
    @abstractmethod
    def initial_value(curve) -> float:
        ...

    @classmethod
    @abstractmethod
    def guess(cls, i: int, curve, valid_data: bool) -> float:
        ...

    @staticmethod
    @abstractmethod
    def min_value_after(i: int, curve, valid_data: bool) -> float:
        ...

    @staticmethod
    @abstractmethod
    def max_value_after(i: int, curve, valid_data: bool) -> float:
        ...

    @staticmethod
    def update_guess(data: np.ndarray, value: float, i: int) -> None:
        data[i] = value

    @staticmethod
    def check_data(data: np.ndarray) -> None:
        """Validate user-supplied node values."""


class YieldTraits(BootstrapTraits):
    """Traits of interest-rate curves."""

    @staticmethod
    @abstractmethod
    def discount(curve, t: float) -> float:
        ...


class DefaultTraits(BootstrapTraits):
    """Traits of default-probability curves."""

    @staticmethod
    @abstractmethod
    def survival(curve, t: float) -> float:
        ...

    @staticmethod
    @abstractmethod
    def density(curve, t: float) -> float:
        ...

    @classmethod
    def hazard(cls, curve, t: float) -> float:
        s = cls.survival(curve, t)
        return 0.0 if s == 0.0 else cls.density(curve, t) / s


def _rate_min(curve, valid_data: bool) -> float:
    if valid_data:
        r = float(np.min(curve.data))
        return 2.0 * r if r < 0.0 else r / 2.0
    return -MAX_RATE


def _rate_max(curve, valid_data: bool) -> float:
    if valid_data:
        r = float(np.max(curve.data))
        return r / 2.0 if r < 0.0 else 2.0 * r
    return MAX_RATE


def _update_with_first(data: np.ndarray, value: float, i: int) -> None:
    data[i] = value
    if i == 1:
        # the reference-date node follows the first one
        data[0] = value


# ----------------------------------------------------------------------
# Yield curves
# ----------------------------------------------------------------------
class Discount(YieldTraits):
    """Discount factors at the nodes."""

    max_iterations = 100

    @staticmethod
    def default_interpolator() -> Interpolator:
        return LogLinear()

    @staticmethod
    def initial_value(curve) -> float:
        return 1.0

    @classmethod
    def guess(cls, i: int, curve, valid_data: bool) -> float:
        if valid_data:
            return float(curve.data[i])
        times, data = curve.times, curve.data
        if i == 1:
            return 1.0 / (1.0 + AVG_RATE * times[1])
        # flat rate extrapolation
        r = -math.log(data[i - 1]) / times[i - 1]
        return math.exp(-r * times[i])

    @staticmethod
    def min_value_after(i: int, curve, valid_data: bool) -> float:
        if valid_data:
            return float(np.min(curve.data)) / 2.0
        dt = curve.times[i] - curve.times[i - 1]
        return float(curve.data[i - 1] * math.exp(-MAX_RATE * dt))

    @staticmethod
    def max_value_after(i: int, curve, valid_data: bool) -> float:
        dt = curve.times[i] - curve.times[i - 1]
        return float(curve.data[i - 1] * math.exp(MAX_RATE * dt))

    @staticmethod
    def check_data(data: np.ndarray) -> None:
        if data[0] != 1.0:
            raise InvalidArgumentError(
                "the first discount must be == 1 to be consistent with the reference date"
            )
        if np.any(data <= 0.0):
            raise InvalidArgumentError("non-positive discount factor given")

    @staticmethod
    def discount(curve, t: float) -> float:
        times, data, interpolation = curve.times, curve.data, curve.interpolation
        if t <= times[-1]:
            return interpolation(t, True)
        # flat forward extrapolation
        t_max, d_max = times[-1], data[-1]
        forward = -interpolation.derivative(t_max, True) / d_max
        return float(d_max * math.exp(-forward * (t - t_max)))


class ZeroYield(YieldTraits):
    """Continuously compounded zero rates at the nodes."""

    @staticmethod
    def initial_value(curve) -> float:
        return AVG_RATE

    @classmethod
    def guess(cls, i: int, curve, valid_data: bool) -> float:
        if valid_data:
            return float(curve.data[i])
        if i == 1:
            return AVG_RATE
        return cls.zero(curve, curve.times[i])

    @staticmethod
    def min_value_after(i: int, curve, valid_data: bool) -> float:
        return _rate_min(curve, valid_data)

    @staticmethod
    def max_value_after(i: int, curve, valid_data: bool) -> float:
        return _rate_max(curve, valid_data)

    update_guess = staticmethod(_update_with_first)

    @staticmethod
    def zero(curve, t: float) -> float:
        times, data, interpolation = curve.times, curve.data, curve.interpolation
        if t <= times[-1]:
            return interpolation(t, True)
        # flat forward extrapolation
        t_max, z_max = times[-1], data[-1]
        forward = z_max + t_max * interpolation.derivative(t_max, True)
        return float((z_max * t_max + forward * (t - t_max)) / t)

    @classmethod
    def discount(cls, curve, t: float) -> float:
        return math.exp(-cls.zero(curve, t) * t)


class ForwardRate(YieldTraits):
    """Instantaneous forward rates at the nodes."""

    @staticmethod
    def default_interpolator() -> Interpolator:
        return BackwardFlat()

    @staticmethod
    def initial_value(curve) -> float:
        return AVG_RATE

    @classmethod
    def guess(cls, i: int, curve, valid_data: bool) -> float:
        if valid_data:
            return float(curve.data[i])
        if i == 1:
            return AVG_RATE
        return cls.forward(curve, curve.times[i])

    @staticmethod
    def min_value_after(i: int, curve, valid_data: bool) -> float:
        return _rate_min(curve, valid_data)

    @staticmethod
    def max_value_after(i: int, curve, valid_data: bool) -> float:
        return _rate_max(curve, valid_data)

    update_guess = staticmethod(_update_with_first)

    @staticmethod
    def forward(curve, t: float) -> float:
        if t <= curve.times[-1]:
            return curve.interpolation(t, True)
        return float(curve.data[-1])

    @classmethod
    def zero(cls, curve, t: float) -> float:
        if t == 0.0:
            return cls.forward(curve, 0.0)
        times, data, interpolation = curve.times, curve.data, curve.interpolation
        if t <= times[-1]:
            integral = interpolation.primitive(t, True)
        else:
            t_max = times[-1]
            integral = interpolation.primitive(t_max, True) + data[-1] * (t - t_max)
        return float(integral / t)

    @classmethod
    def discount(cls, curve, t: float) -> float:
        return math.exp(-cls.zero(curve, t) * t)


# ----------------------------------------------------------------------
# Default-probability curves
# ----------------------------------------------------------------------
class SurvivalProbability(DefaultTraits):
    """Survival probabilities at the nodes."""

    max_iterations = 50

    @staticmethod
    def default_interpolator() -> Interpolator:
        return LogLinear()

    @staticmethod
    def initial_value(curve) -> float:
        return 1.0

    @classmethod
    def guess(cls, i: int, curve, valid_data: bool) -> float:
        if valid_data:
            return float(curve.data[i])
        if i == 1:
            return 1.0 / (1.0 + AVG_HAZARD_RATE * 0.25)
        return cls.survival(curve, curve.times[i])

    @staticmethod
    def min_value_after(i: int, curve, valid_data: bool) -> float:
        if valid_data:
            return float(curve.data[-1]) / 2.0
        return QL_EPSILON

    @staticmethod
    def max_value_after(i: int, curve, valid_data: bool) -> float:
        # survival probability cannot increase
        return float(curve.data[i - 1])

    @staticmethod
    def check_data(data: np.ndarray) -> None:
        if data[0] != 1.0:
            raise InvalidArgumentError(
                "the first probability must be == 1 to be consistent with the reference date"
            )
        if np.any(data <= 0.0):
            raise InvalidArgumentError("non-positive survival probability given")
        if np.any(np.diff(data) > 0.0):
            raise InvalidArgumentError("increasing survival probabilities given")

    @staticmethod
    def _flat_hazard(curve) -> float:
        t_max, s_max = curve.times[-1], curve.data[-1]
        return -curve.interpolation.derivative(t_max, True) / s_max

    @classmethod
    def survival(cls, curve, t: float) -> float:
        times = curve.times
        if t <= times[-1]:
            return curve.interpolation(t, True)
        # flat hazard rate extrapolation
        t_max, s_max = times[-1], curve.data[-1]
        return float(s_max * math.exp(-cls._flat_hazard(curve) * (t - t_max)))

    @classmethod
    def density(cls, curve, t: float) -> float:
        times = curve.times
        if t <= times[-1]:
            return -curve.interpolation.derivative(t, True)
        t_max, s_max = times[-1], curve.data[-1]
        hazard = cls._flat_hazard(curve)
        return float(s_max * hazard * math.exp(-hazard * (t - t_max)))


class HazardRate(DefaultTraits):
    """Hazard rates at the nodes."""

    @staticmethod
    def default_interpolator() -> Interpolator:
        return BackwardFlat()

    @staticmethod
    def initial_value(curve) -> float:
        return AVG_HAZARD_RATE

    @classmethod
    def guess(cls, i: int, curve, valid_data: bool) -> float:
        if valid_data:
            return float(curve.data[i])
        if i == 1:
            return AVG_HAZARD_RATE
        return cls.hazard(curve, curve.times[i])

    @staticmethod
    def min_value_after(i: int, curve, valid_data: bool) -> float:
        if valid_data:
            return float(np.min(curve.data)) / 2.0
        return QL_EPSILON

    @staticmethod
    def max_value_after(i: int, curve, valid_data: bool) -> float:
        if valid_data:
            return float(np.max(curve.data)) * 2.0
        return MAX_RATE

    update_guess = staticmethod(_update_with_first)

    @staticmethod
    def check_data(data: np.ndarray) -> None:
        if np.any(data < 0.0):
            raise InvalidArgumentError("negative hazard rate given")

    @classmethod
    def hazard(cls, curve, t: float) -> float:
        if t <= curve.times[-1]:
            return curve.interpolation(t, True)
        return float(curve.data[-1])

    @staticmethod
    def _integral(curve, t: float) -> float:
        times = curve.times
        if t <= times[-1]:
            return curve.interpolation.primitive(t, True)
        t_max = times[-1]
        return curve.interpolation.primitive(t_max, True) + curve.data[-1] * (t - t_max)

    @classmethod
    def survival(cls, curve, t: float) -> float:
        if t == 0.0:
            return 1.0
        return math.exp(-cls._integral(curve, t))

    @classmethod
    def density(cls, curve, t: float) -> float:
        return cls.hazard(curve, t) * cls.survival(curve, t)


class DefaultDensity(DefaultTraits):
    """Default densities at the nodes."""

    @staticmethod
    def default_interpolator() -> Interpolator:
        return BackwardFlat()

    @staticmethod
    def initial_value(curve) -> float:
        return AVG_HAZARD_RATE

    @classmethod
    def guess(cls, i: int, curve, valid_data: bool) -> float:
        if valid_data:
            return float(curve.data[i])
        if i == 1:
            return AVG_HAZARD_RATE
        return cls.density(curve, curve.times[i])

    @staticmethod
    def min_value_after(i: int, curve, valid_data: bool) -> float:
        if valid_data:
            return float(np.min(curve.data)) / 2.0
        return QL_EPSILON

    @staticmethod
    def max_value_after(i: int, curve, valid_data: bool) -> float:
        if valid_data:
            return float(np.max(curve.data)) * 2.0
        return MAX_RATE

    update_guess = staticmethod(_update_with_first)

    @staticmethod
    def check_data(data: np.ndarray) -> None:
        if np.any(data < 0.0):
            raise InvalidArgumentError("negative default density given")

    @staticmethod
    def _last_node(curve):
        t_max = curve.times[-1]
        s_max = max(1.0 - curve.interpolation.primitive(t_max, True), 0.0)
        hazard = curve.data[-1] / s_max if s_max > 0.0 else 0.0
        return t_max, s_max, hazard

    @classmethod
    def survival(cls, curve, t: float) -> float:
        if t == 0.0:
            return 1.0
        if t <= curve.times[-1]:
            return max(1.0 - curve.interpolation.primitive(t, True), 0.0)
        # flat hazard rate extrapolation
        t_max, s_max, hazard = cls._last_node(curve)
        return float(s_max * math.exp(-hazard * (t - t_max)))

    @classmethod
    def density(cls, curve, t: float) -> float:
        if t <= curve.times[-1]:
            return curve.interpolation(t, True)
        t_max, s_max, hazard = cls._last_node(curve)
        return float(hazard * s_max * math.exp(-hazard * (t - t_max)))
