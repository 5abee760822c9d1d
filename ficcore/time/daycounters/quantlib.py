"""
QuantLib-backed day counters.

Every convention wraps the corresponding QuantLib day counter behind the
``DayCounter`` interface. QuantLib dates carry no time of day, so intraday
fractions of a ``Date`` do not enter the count.
"""
import QuantLib as ql

from ficcore.time.calendars.quantlib import to_ql_date
from ficcore.time.daycounters.base import DayCounter


class QuantLibDayCounter(DayCounter):
    """Day counter delegating to a QuantLib implementation."""

    def __init__(self, ql_day_counter: ql.DayCounter, name: str = None):
        self._ql_day_counter = ql_day_counter
        self.name = name or ql_day_counter.name()

    def _day_count(self, d1, d2) -> int:
        return self._ql_day_counter.dayCount(to_ql_date(d1), to_ql_date(d2))

    def _year_fraction(self, d1, d2, ref_start, ref_end) -> float:
        if ref_start is None or ref_end is None:
            return self._ql_day_counter.yearFraction(to_ql_date(d1), to_ql_date(d2))
        return self._ql_day_counter.yearFraction(
            to_ql_date(d1), to_ql_date(d2), to_ql_date(ref_start), to_ql_date(ref_end)
        )
