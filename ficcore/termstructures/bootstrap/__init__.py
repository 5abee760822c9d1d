"""Bootstrap traits, settings and the iterative bootstrap."""

from .config import BootstrapConfig
from .iterative import IterativeBootstrap
from .traits import (
    BootstrapTraits,
    DefaultDensity,
    DefaultTraits,
    Discount,
    ForwardRate,
    HazardRate,
    SurvivalProbability,
    YieldTraits,
    ZeroYield,
)

__all__ = [
    "BootstrapConfig",
    "IterativeBootstrap",
    "BootstrapTraits",
    "YieldTraits",
    "DefaultTraits",
    "Discount",
    "ZeroYield",
    "ForwardRate",
    "SurvivalProbability",
    "HazardRate",
    "DefaultDensity",
]
