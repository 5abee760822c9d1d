"""
Flat forward curve.
"""
from typing import Optional

from ficcore.interest_rate import Compounding, InterestRate
from ficcore.quotes import QuoteLike, make_quote_handle
from ficcore.settings import Settings
from ficcore.termstructures.yields.base import YieldTermStructure
from ficcore.time.calendars.base import Calendar
from ficcore.time.date import Date, DateLike
from ficcore.time.daycounters.base import DayCounter
from ficcore.time.period import Frequency


class FlatForward(YieldTermStructure):
    """Curve with a single (possibly quoted) forward rate.

    Args:
        forward: Rate as a number, a Quote or a quote Handle
        day_counter: Day counter of the rate and of curve times
        reference_date: Fixed reference date; omit for a floating curve
        settlement_days: Business days to the floating reference date
        calendar: Calendar of the floating reference date
        compounding: Compounding of ``forward``
        frequency: Compounding frequency of ``forward``
    """

    def __init__(
        self,
        forward: QuoteLike,
        day_counter: DayCounter,
        reference_date: Optional[DateLike] = None,
        *,
        settlement_days: Optional[int] = None,
        calendar: Optional[Calendar] = None,
        compounding: Compounding = Compounding.CONTINUOUS,
        frequency: Frequency = Frequency.ANNUAL,
        settings: Optional[Settings] = None,
    ):
        super().__init__(day_counter, reference_date, settlement_days, calendar, settings)
        self._forward = make_quote_handle(forward)
        self._compounding = compounding
        self._frequency = frequency
        self.register_with(self._forward)

    @property
    def max_date(self) -> Date:
        return Date.max_date()

    @property
    def rate(self) -> InterestRate:
        return InterestRate(
            self._forward.current_link.value, self.day_counter, self._compounding, self._frequency
        )

    def _discount_impl(self, t: float) -> float:
        return self.rate.discount_factor(t)
