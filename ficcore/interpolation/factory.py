"""
Interpolator registry.
"""
from typing import Callable, Dict

from ficcore.errors import InvalidArgumentError

from .base import Interpolator
from .flat import BackwardFlat, ForwardFlat
from .linear import Linear, LogLinear

INTERPOLATORS: Dict[str, Callable[[], Interpolator]] = {
    "LINEAR": Linear,
    "LOGLINEAR": LogLinear,
    "LOG_LINEAR": LogLinear,  # Alias
    "BACKWARD_FLAT": BackwardFlat,
    "BACKWARDFLAT": BackwardFlat,  # Alias
    "FORWARD_FLAT": ForwardFlat,
    "FORWARDFLAT": ForwardFlat,  # Alias
    "PIECEWISE_CONSTANT": ForwardFlat,  # Alias
}


def create_interpolator(method: str) -> Interpolator:
    """
    Create an interpolator based on method name.

    Args:
        method: Interpolation method name, e.g. "LINEAR" or "BACKWARD_FLAT"

    Returns:
        Interpolator instance
    """
    key = method.strip().upper().replace("-", "_")
    if key not in INTERPOLATORS:
        raise InvalidArgumentError(
            f"Unknown interpolation method: {method}. Available: {list(INTERPOLATORS.keys())}"
        )
    return INTERPOLATORS[key]()
