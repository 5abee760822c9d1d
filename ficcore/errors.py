"""Exception hierarchy shared by every ficcore module.

Each error also derives from the builtin matching its kind so that callers
catching ``ValueError`` or ``RuntimeError`` keep working.
"""


class FiccoreError(Exception):
    """Base class for all library errors."""


class InvalidArgumentError(FiccoreError, ValueError):
    """Unknown enumerant, malformed helper list or otherwise bad input."""


class ExtrapolationError(FiccoreError, ValueError):
    """Query outside the supported range without extrapolation allowed."""


class DomainError(FiccoreError, ValueError):
    """Numerically invalid input, e.g. a negative time or a non-PSD matrix."""


class ConvergenceError(FiccoreError, RuntimeError):
    """An iterative procedure did not converge within its budget."""


__all__ = [
    "FiccoreError",
    "InvalidArgumentError",
    "ExtrapolationError",
    "DomainError",
    "ConvergenceError",
]
