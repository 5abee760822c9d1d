"""
Yield curves interpolated over user-supplied nodes.
"""
from typing import Optional, Sequence

from ficcore.errors import InvalidArgumentError
from ficcore.interpolation.base import Interpolator
from ficcore.settings import Settings
from ficcore.termstructures.bootstrap.traits import Discount, ForwardRate, ZeroYield
from ficcore.termstructures.interpolated import InterpolatedCurve
from ficcore.termstructures.yields.base import YieldTermStructure
from ficcore.time.calendars.base import Calendar
from ficcore.time.date import Date, DateLike
from ficcore.time.daycounters.base import DayCounter


class _InterpolatedYieldCurve(InterpolatedCurve, YieldTermStructure):
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
        YieldTermStructure.__init__(
            self, day_counter, dates[0], calendar=calendar, settings=settings
        )
        self._init_nodes(interpolator)
        self._set_nodes(dates, data)

    @property
    def max_date(self) -> Date:
        return self._dates[-1]

    def _discount_impl(self, t: float) -> float:
        return self.traits.discount(self, t)


class InterpolatedDiscountCurve(_InterpolatedYieldCurve):
    """
    Curve interpolating discount factors (log-linear by default).

    Args:
        dates: Node dates; the first one is the reference date
        data: Discount factors, the first equal to 1
        day_counter: Day counter for node times
        interpolator: Interpolation factory
        calendar: Curve calendar
        settings: Evaluation-date context
    """

    traits = Discount


class InterpolatedZeroCurve(_InterpolatedYieldCurve):
    """Curve interpolating continuously compounded zero rates (linear by default)."""

    traits = ZeroYield

    def _zero_impl(self, t: float) -> float:
        return self.traits.zero(self, t)


class InterpolatedForwardCurve(_InterpolatedYieldCurve):
    """Curve interpolating instantaneous forwards (backward-flat by default)."""

    traits = ForwardRate

    def _zero_impl(self, t: float) -> float:
        return self.traits.zero(self, t)

    def _forward_impl(self, t: float) -> float:
        return self.traits.forward(self, t)
