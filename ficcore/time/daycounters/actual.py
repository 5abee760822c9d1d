"""
Actual/360 and Actual/365 day count conventions.
"""
import QuantLib as ql

from ficcore.time.daycounters.quantlib import QuantLibDayCounter


class Actual360(QuantLibDayCounter):
    """ACT/360 day count convention.

    Used for:
    - IBOR floating legs
    - OIS fixed legs
    - Money market instruments
    """

    def __init__(self, include_last_day: bool = False):
        self.include_last_day = include_last_day
        super().__init__(
            ql.Actual360(include_last_day),
            "ACT/360 (inc)" if include_last_day else "ACT/360",
        )

    def __repr__(self) -> str:
        return f"Actual360(include_last_day={self.include_last_day})"


class Actual365Fixed(QuantLibDayCounter):
    """ACT/365F day count convention."""

    def __init__(self):
        super().__init__(ql.Actual365Fixed(), "ACT/365F")


class Actual365NoLeap(QuantLibDayCounter):
    """ACT/365 (No Leap): February 29th is never counted."""

    def __init__(self):
        super().__init__(ql.Actual365Fixed(ql.Actual365Fixed.NoLeap), "ACT/365NL")
