"""Fixed-income analytics core.

This package provides the building blocks shared by fixed-income pricing
code: business-day calendars and day counters, date arithmetic and
schedules, one-dimensional interpolation, yield and default-probability
curves bootstrapped from market quotes, and dense-matrix utilities.

Key modules:
- time: Dates, periods, calendars, day counters and schedules
- interpolation: Linear, log-linear and flat interpolation
- termstructures: Yield and credit curves, helpers and the bootstrap
- math: Brent solver, eigen, Cholesky, pseudo square roots and SVD
"""

__version__ = "0.1.0"

from .errors import (
    ConvergenceError,
    DomainError,
    ExtrapolationError,
    FiccoreError,
    InvalidArgumentError,
)
from .interest_rate import Compounding, InterestRate
from .quotes import SimpleQuote
from .settings import Settings, get_settings, saved_settings

__all__ = [
    "__version__",
    "FiccoreError",
    "InvalidArgumentError",
    "ExtrapolationError",
    "DomainError",
    "ConvergenceError",
    "Compounding",
    "InterestRate",
    "SimpleQuote",
    "Settings",
    "get_settings",
    "saved_settings",
    # Main modules are imported via subpackages
    "time",
    "interpolation",
    "termstructures",
    "math",
    "indexes",
]
