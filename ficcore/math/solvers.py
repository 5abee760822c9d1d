"""Root-finding utilities (Brent with automatic bracketing)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Tuple

from scipy import optimize

from ficcore.errors import ConvergenceError, InvalidArgumentError

logger = logging.getLogger(__name__)

Func = Callable[[float], float]


@dataclass
class RootResult:
    root: float
    iterations: int
    converged: bool
    method: str


class RootFindingError(ConvergenceError):
    """Raised when root-finding fails to converge."""


def _find_bracket(
    func: Func,
    guess: float,
    step: float,
    lower: float | None = None,
    upper: float | None = None,
    expansion: float = 1.6,
    max_evaluations: int = 100,
) -> Tuple[float, float, int]:
    """Grow an interval around ``guess`` until ``func`` changes sign.

    Optional ``lower``/``upper`` act as hard limits on the search.
    """
    a, b = guess, guess + step
    if upper is not None and b > upper:
        a, b = guess - step, guess
    if lower is not None:
        a = max(a, lower)
    if upper is not None:
        b = min(b, upper)
    f_a, f_b = func(a), func(b)
    evaluations = 2
    while evaluations < max_evaluations:
        if f_a * f_b <= 0.0:
            return a, b, evaluations
        if abs(f_a) < abs(f_b):
            a = a + expansion * (a - b)
            if lower is not None:
                a = max(a, lower)
            f_a = func(a)
        else:
            b = b + expansion * (b - a)
            if upper is not None:
                b = min(b, upper)
            f_b = func(b)
        evaluations += 1
    raise RootFindingError(
        f"unable to bracket root in {max_evaluations} function evaluations "
        f"(last bracket attempt: f[{a}, {b}] -> [{f_a}, {f_b}])"
    )


def brent(
    func: Func,
    accuracy: float,
    guess: float,
    lower: float | None = None,
    upper: float | None = None,
    step: float | None = None,
    max_evaluations: int = 100,
) -> RootResult:
    """Brent root finder.

    Parameters
    ----------
    func:
        Function whose root is searched.
    accuracy:
        Absolute tolerance on the root.
    guess:
        Starting point; used to grow a bracket when no bounds are given.
    lower, upper:
        Bracket. When both are given ``func`` must change sign between them.
    step:
        Initial bracket width when searching for a bracket.
    max_evaluations:
        Budget of function evaluations.
    """
    if accuracy <= 0.0:
        raise InvalidArgumentError(f"accuracy ({accuracy}) must be positive")
    if lower is not None and upper is not None:
        if lower >= upper:
            raise InvalidArgumentError(
                f"invalid range: lower bound ({lower}) >= upper bound ({upper})"
            )
        if not lower <= guess <= upper:
            raise InvalidArgumentError(
                f"guess ({guess}) not in range [{lower}, {upper}]"
            )
        a, b = lower, upper
        f_a, f_b = func(a), func(b)
        used = 2
        if f_a * f_b > 0.0:
            logger.debug("No sign change in [%s, %s]; growing bracket from %s", a, b, guess)
            a, b, used = _find_bracket(
                func, guess, step or 0.1 * (upper - lower), lower, upper,
                max_evaluations=max_evaluations,
            )
    else:
        a, b, used = _find_bracket(
            func, guess, step if step is not None else max(abs(guess) * 0.1, 1e-4),
            lower, upper, max_evaluations=max_evaluations,
        )
    if a == b:
        return RootResult(a, used, True, "brent")

    remaining = max(max_evaluations - used, 1)
    try:
        root, info = optimize.brentq(
            func, a, b, xtol=accuracy, maxiter=remaining, full_output=True, disp=False,
        )
    except ValueError as exc:
        raise RootFindingError(f"root not bracketed in [{a}, {b}]: {exc}") from exc
    logger.debug("Brent bracket [%s, %s]: root=%s iterations=%s", a, b, root, info.iterations)
    if not info.converged:
        raise RootFindingError(
            f"maximum number of function evaluations ({max_evaluations}) exceeded"
        )
    return RootResult(float(root), used + info.function_calls, True, "brent")


def brent_solve(
    func: Func,
    accuracy: float,
    guess: float,
    lower: float | None = None,
    upper: float | None = None,
    step: float | None = None,
    max_evaluations: int = 100,
) -> float:
    """Root of ``func`` by Brent's method; see ``brent`` for the arguments."""
    return brent(func, accuracy, guess, lower, upper, step, max_evaluations).root
