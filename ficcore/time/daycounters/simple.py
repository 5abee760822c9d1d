"""Simple and One day counters."""
import QuantLib as ql

from ficcore.time.daycounters.quantlib import QuantLibDayCounter


class SimpleDayCounter(QuantLibDayCounter):
    """Whole-month intervals are exact multiples of 1/12.

    Intervals starting and ending on the same day of the month (or on month
    ends) count whole months; anything else falls back to 30/360 Bond Basis.
    """

    def __init__(self):
        super().__init__(ql.SimpleDayCounter(), "Simple")


class OneDayCounter(QuantLibDayCounter):
    """One unit for any non-empty interval."""

    def __init__(self):
        super().__init__(ql.OneDayCounter(), "1/1")
