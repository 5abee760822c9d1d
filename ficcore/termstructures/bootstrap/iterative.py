"""
Iterative bootstrap.

Nodes are solved one at a time, left to right: node ``i`` is moved until
the ``i``-th helper (sorted by pillar date) reprices its market quote on
the curve made of the nodes solved so far. Global interpolators, whose
values depend on later nodes too, repeat the sweep until no node moves
by more than the accuracy.
"""
import logging
from typing import Optional

import numpy as np

from ficcore.errors import ConvergenceError, FiccoreError, InvalidArgumentError
from ficcore.interpolation.linear import Linear
from ficcore.math.solvers import brent_solve
from ficcore.termstructures.bootstrap.config import BootstrapConfig

logger = logging.getLogger(__name__)


def _ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


class IterativeBootstrap:
    """Fills the nodes of a piecewise curve from its helpers.

    The curve exposes ``traits``, ``interpolator``, ``helpers`` and
    ``reference_date``; the bootstrap writes its ``_dates``, ``_times``,
    ``_data`` and ``_interpolation``.

    Args:
        config: Accuracy and iteration settings
    """

    def __init__(self, config: Optional[BootstrapConfig] = None):
        self.config = config if config is not None else BootstrapConfig()
        self._curve = None
        self._valid_curve = False

    def setup(self, curve) -> None:
        self._curve = curve

    def _initialize(self):
        curve = self._curve
        helpers = sorted(curve._helpers, key=lambda h: h.pillar_date)
        if not helpers:
            raise InvalidArgumentError("no bootstrap helpers given")
        for previous, helper in zip(helpers, helpers[1:]):
            if helper.pillar_date == previous.pillar_date:
                raise InvalidArgumentError(
                    f"more than one instrument with pillar {helper.pillar_date}"
                )

        reference_date = curve.reference_date
        for i, helper in enumerate(helpers, start=1):
            if helper.pillar_date <= reference_date:
                raise InvalidArgumentError(
                    f"{_ordinal(i)} instrument (pillar: {helper.pillar_date}) expired "
                    f"on the reference date {reference_date}"
                )
        curve._helpers = helpers

        dates = [reference_date] + [h.pillar_date for h in helpers]
        if dates != curve._dates:
            self._valid_curve = False
            curve._dates = dates
            curve._times = np.array([curve.time_from_reference(d) for d in dates], dtype=float)
            curve._data = np.full(len(dates), curve.traits.initial_value(curve), dtype=float)
        return helpers

    def calculate(self) -> None:
        """Solve every node; raise ConvergenceError if a helper cannot be matched."""
        curve = self._curve
        helpers = self._initialize()
        for i, helper in enumerate(helpers, start=1):
            if not helper.quote.is_valid:
                raise InvalidArgumentError(
                    f"{_ordinal(i)} instrument (maturity: {helper.maturity_date}) "
                    f"has an invalid quote"
                )
            helper.set_term_structure(curve)

        traits = curve.traits
        interpolator = curve.interpolator
        accuracy = self.config.accuracy
        max_iterations = self.config.max_iterations or traits.max_iterations
        loop_required = (self.config.global_pass if self.config.global_pass is not None
                         else interpolator.is_global)
        times, data = curve._times, curve._data
        valid_data = self._valid_curve

        for iteration in range(max_iterations):
            previous = data.copy()
            for i, helper in enumerate(helpers, start=1):
                lower = traits.min_value_after(i, curve, valid_data)
                upper = traits.max_value_after(i, curve, valid_data)
                guess = traits.guess(i, curve, valid_data)
                if guess >= upper:
                    guess = upper - (upper - lower) / 5.0
                elif guess <= lower:
                    guess = lower + (upper - lower) / 5.0

                if not valid_data:
                    try:
                        curve._interpolation = interpolator.interpolate(times[: i + 1], data[: i + 1])
                    except FiccoreError:
                        if not interpolator.is_global:
                            raise
                        # not enough points for the global scheme yet
                        curve._interpolation = Linear().interpolate(times[: i + 1], data[: i + 1])

                def error(x, i=i, helper=helper):
                    traits.update_guess(data, x, i)
                    curve._interpolation.update()
                    return helper.quote_error()

                try:
                    root = brent_solve(error, accuracy, guess, lower, upper)
                except FiccoreError as exc:
                    if self._valid_curve:
                        # start again from scratch
                        logger.debug("Bootstrap restarting without previous data: %s", exc)
                        self._valid_curve = False
                        self.calculate()
                        return
                    raise ConvergenceError(
                        f"{_ordinal(iteration + 1)} iteration: could not bootstrap the "
                        f"{_ordinal(i)} instrument, maturity {helper.maturity_date}: {exc}"
                    ) from exc
                traits.update_guess(data, root, i)
                curve._interpolation.update()
                if self.config.verbose:
                    logger.info("Node %d (%s) bootstrapped: %.12g", i, helper.pillar_date, root)

            if not loop_required:
                break
            change = float(np.max(np.abs(data[1:] - previous[1:])))
            if change <= accuracy:
                break
            if iteration + 1 == max_iterations:
                raise ConvergenceError(
                    f"convergence not reached after {iteration + 1} iterations; "
                    f"last improvement {change}, required accuracy {accuracy}"
                )
            valid_data = True
        self._valid_curve = True
