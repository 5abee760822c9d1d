"""
Flat hazard-rate curve.
"""
from typing import Optional

from ficcore.quotes import QuoteLike, make_quote_handle
from ficcore.settings import Settings
from ficcore.termstructures.credit.base import HazardRateStructure
from ficcore.time.calendars.base import Calendar
from ficcore.time.date import Date, DateLike
from ficcore.time.daycounters.base import DayCounter


class FlatHazardRate(HazardRateStructure):
    """Constant hazard rate; ``S(t) = exp(-h t)``.

    Args:
        hazard_rate: Rate as a number, a Quote or a quote Handle
        day_counter: Day counter of curve times
        reference_date: Fixed reference date; omit for a floating curve
        settlement_days: Business days to the floating reference date
        calendar: Calendar of the floating reference date
    """

    def __init__(
        self,
        hazard_rate: QuoteLike,
        day_counter: DayCounter,
        reference_date: Optional[DateLike] = None,
        *,
        settlement_days: Optional[int] = None,
        calendar: Optional[Calendar] = None,
        settings: Optional[Settings] = None,
    ):
        super().__init__(day_counter, reference_date, settlement_days, calendar, settings)
        self._rate = make_quote_handle(hazard_rate)
        self.register_with(self._rate)

    @property
    def max_date(self) -> Date:
        return Date.max_date()

    @property
    def rate(self) -> float:
        return self._rate.current_link.value

    def _hazard_impl(self, t: float) -> float:
        return self.rate

    def _hazard_integral(self, t: float) -> float:
        return self.rate * t
