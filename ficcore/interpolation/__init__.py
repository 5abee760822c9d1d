"""One-dimensional interpolation strategies."""

from .base import Interpolation, Interpolator
from .factory import INTERPOLATORS, create_interpolator
from .flat import BackwardFlat, BackwardFlatInterpolation, ForwardFlat, ForwardFlatInterpolation
from .linear import Linear, LinearInterpolation, LogLinear, LogLinearInterpolation

__all__ = [
    "Interpolation",
    "Interpolator",
    "Linear",
    "LinearInterpolation",
    "LogLinear",
    "LogLinearInterpolation",
    "BackwardFlat",
    "BackwardFlatInterpolation",
    "ForwardFlat",
    "ForwardFlatInterpolation",
    "INTERPOLATORS",
    "create_interpolator",
]
