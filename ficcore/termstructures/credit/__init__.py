"""Default-probability term structures and credit default swaps."""

from .base import DefaultProbabilityTermStructure, HazardRateStructure
from .cds import CdsResults, CreditDefaultSwap, MidPointCdsEngine, ProtectionSide
from .flat_hazard import FlatHazardRate
from .interpolated import (
    InterpolatedDefaultDensityCurve,
    InterpolatedHazardRateCurve,
    InterpolatedSurvivalProbabilityCurve,
)

__all__ = [
    "DefaultProbabilityTermStructure",
    "HazardRateStructure",
    "FlatHazardRate",
    "InterpolatedHazardRateCurve",
    "InterpolatedSurvivalProbabilityCurve",
    "InterpolatedDefaultDensityCurve",
    "CreditDefaultSwap",
    "MidPointCdsEngine",
    "ProtectionSide",
    "CdsResults",
]
