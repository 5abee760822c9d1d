"""Business/252 day count convention."""
from typing import Optional

import QuantLib as ql

from ficcore.time.calendars.base import Calendar
from ficcore.time.calendars.brazil import Brazil
from ficcore.time.date import Date
from ficcore.time.daycounters.quantlib import QuantLibDayCounter


class Business252(QuantLibDayCounter):
    """Business days between the dates, divided by 252.

    Holidays added to or removed from ``calendar`` at runtime are honoured:
    while the calendar carries such modifications the count is taken from the
    calendar itself rather than from QuantLib.

    Args:
        calendar: Calendar defining business days (Brazil settlement by default)
    """

    def __init__(self, calendar: Optional[Calendar] = None):
        self.calendar = calendar if calendar is not None else Brazil()
        super().__init__(
            ql.Business252(self.calendar.ql_calendar),
            f"Business/252({self.calendar.name})",
        )

    def _day_count(self, d1: Date, d2: Date) -> int:
        if self.calendar.has_modifications:
            return self.calendar.business_days_between(d1, d2)
        return super()._day_count(d1, d2)

    def _year_fraction(self, d1, d2, ref_start, ref_end) -> float:
        if self.calendar.has_modifications:
            return self._day_count(d1, d2) / 252.0
        return super()._year_fraction(d1, d2, ref_start, ref_end)

    def __repr__(self) -> str:
        return f"Business252({self.calendar!r})"
