"""Interest-rate term structures."""

from .base import YieldTermStructure
from .flat_forward import FlatForward
from .implied import ImpliedTermStructure
from .interpolated import (
    InterpolatedDiscountCurve,
    InterpolatedForwardCurve,
    InterpolatedZeroCurve,
)
from .spreaded import ForwardSpreadedTermStructure, ZeroSpreadedTermStructure

__all__ = [
    "YieldTermStructure",
    "FlatForward",
    "ImpliedTermStructure",
    "ZeroSpreadedTermStructure",
    "ForwardSpreadedTermStructure",
    "InterpolatedDiscountCurve",
    "InterpolatedZeroCurve",
    "InterpolatedForwardCurve",
]
