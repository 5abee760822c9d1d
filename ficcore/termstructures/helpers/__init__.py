"""Bootstrap helpers for yield and default-probability curves."""

from .base import BootstrapHelper, RelativeDateBootstrapHelper
from .credit import CdsHelper, SpreadCdsHelper, UpfrontCdsHelper
from .rates import (
    DepositRateHelper,
    FraRateHelper,
    OisRateHelper,
    RateHelper,
    SwapRateHelper,
)

__all__ = [
    "BootstrapHelper",
    "RelativeDateBootstrapHelper",
    "RateHelper",
    "DepositRateHelper",
    "FraRateHelper",
    "SwapRateHelper",
    "OisRateHelper",
    "CdsHelper",
    "SpreadCdsHelper",
    "UpfrontCdsHelper",
]
