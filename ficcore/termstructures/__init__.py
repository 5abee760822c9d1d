"""Yield and default-probability term structures and their bootstrap."""

from .base import TermStructure
from .bootstrap import (
    BootstrapConfig,
    DefaultDensity,
    Discount,
    ForwardRate,
    HazardRate,
    IterativeBootstrap,
    SurvivalProbability,
    ZeroYield,
)
from .credit import (
    CreditDefaultSwap,
    DefaultProbabilityTermStructure,
    FlatHazardRate,
    InterpolatedDefaultDensityCurve,
    InterpolatedHazardRateCurve,
    InterpolatedSurvivalProbabilityCurve,
    MidPointCdsEngine,
    ProtectionSide,
)
from .helpers import (
    DepositRateHelper,
    FraRateHelper,
    OisRateHelper,
    SpreadCdsHelper,
    SwapRateHelper,
    UpfrontCdsHelper,
)
from .piecewise import PiecewiseDefaultCurve, PiecewiseYieldCurve, bootstrap
from .yields import (
    FlatForward,
    ForwardSpreadedTermStructure,
    ImpliedTermStructure,
    InterpolatedDiscountCurve,
    InterpolatedForwardCurve,
    InterpolatedZeroCurve,
    YieldTermStructure,
    ZeroSpreadedTermStructure,
)

__all__ = [
    "TermStructure",
    "YieldTermStructure",
    "DefaultProbabilityTermStructure",
    "FlatForward",
    "ImpliedTermStructure",
    "ZeroSpreadedTermStructure",
    "ForwardSpreadedTermStructure",
    "InterpolatedDiscountCurve",
    "InterpolatedZeroCurve",
    "InterpolatedForwardCurve",
    "FlatHazardRate",
    "InterpolatedHazardRateCurve",
    "InterpolatedSurvivalProbabilityCurve",
    "InterpolatedDefaultDensityCurve",
    "PiecewiseYieldCurve",
    "PiecewiseDefaultCurve",
    "bootstrap",
    "BootstrapConfig",
    "IterativeBootstrap",
    "Discount",
    "ZeroYield",
    "ForwardRate",
    "SurvivalProbability",
    "HazardRate",
    "DefaultDensity",
    "DepositRateHelper",
    "FraRateHelper",
    "SwapRateHelper",
    "OisRateHelper",
    "SpreadCdsHelper",
    "UpfrontCdsHelper",
    "CreditDefaultSwap",
    "MidPointCdsEngine",
    "ProtectionSide",
]
