"""
Default-probability curves interpolated over user-supplied nodes.
"""
from typing import Optional, Sequence

from ficcore.errors import InvalidArgumentError
from ficcore.interpolation.base import Interpolator
from ficcore.settings import Settings
from ficcore.termstructures.bootstrap.traits import (
    DefaultDensity,
    HazardRate,
    SurvivalProbability,
)
from ficcore.termstructures.credit.base import DefaultProbabilityTermStructure
from ficcore.termstructures.interpolated import InterpolatedCurve
from ficcore.time.calendars.base import Calendar
from ficcore.time.date import Date, DateLike
from ficcore.time.daycounters.base import DayCounter


class _InterpolatedDefaultCurve(InterpolatedCurve, DefaultProbabilityTermStructure):
    def __init__(
        self,
        dates: Sequence[DateLike],
        data: Sequence[float],
        day_counter: DayCounter,
        interpolator: Optional[Interpolator] = None,
        calendar: Optional[Calendar] = None,
        settings: Optional[Settings] = None,
    ):
        if len(dates) == 0:
            raise InvalidArgumentError("no input dates given")
        DefaultProbabilityTermStructure.__init__(
            self, day_counter, dates[0], calendar=calendar, settings=settings
        )
        self._init_nodes(interpolator)
        self._set_nodes(dates, data)

    @property
    def max_date(self) -> Date:
        return self._dates[-1]

    def _survival_impl(self, t: float) -> float:
        return self.traits.survival(self, t)

    def _default_density_impl(self, t: float) -> float:
        return self.traits.density(self, t)

    def _hazard_impl(self, t: float) -> float:
        return self.traits.hazard(self, t)


class InterpolatedHazardRateCurve(_InterpolatedDefaultCurve):
    """
    Curve interpolating hazard rates (backward-flat by default).

    With backward-flat interpolation the rate quoted at a node applies
    over the interval ending at that node; the value at the reference
    date only matters at time zero.

    Args:
        dates: Node dates; the first one is the reference date
        data: Hazard rates
        day_counter: Day counter for node times
        interpolator: Interpolation factory
        calendar: Curve calendar
        settings: Evaluation-date context
    """

    traits = HazardRate


class InterpolatedSurvivalProbabilityCurve(_InterpolatedDefaultCurve):
    """Curve interpolating survival probabilities (log-linear by default)."""

    traits = SurvivalProbability


class InterpolatedDefaultDensityCurve(_InterpolatedDefaultCurve):
    """Curve interpolating default densities (backward-flat by default)."""

    traits = DefaultDensity
