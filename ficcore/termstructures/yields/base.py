"""
Interest-rate term structures.
"""
import math
from abc import abstractmethod
from typing import Optional

from ficcore.errors import InvalidArgumentError
from ficcore.interest_rate import Compounding, InterestRate
from ficcore.termstructures.base import TermStructure, TimeOrDate
from ficcore.time.date import Date
from ficcore.time.daycounters.base import DayCounter
from ficcore.time.period import Frequency

# time step used for instantaneous quantities
DT = 0.0001


class YieldTermStructure(TermStructure):
    """Discount factors, zero rates and forward rates.

    Subclasses implement ``_discount_impl``; zero and forward rates follow
    from it unless a subclass has a more direct expression.
    """

    def discount(self, x: TimeOrDate, extrapolate: bool = False) -> float:
        """
        Discount factor from the reference date.

        Args:
            x: Date or time in years
            extrapolate: Allow values past the curve's max date

        Returns:
            Discount factor
        """
        return self._discount_impl(self._time(x, extrapolate))

    def zero_rate(
        self,
        x: TimeOrDate,
        day_counter: Optional[DayCounter] = None,
        compounding: Compounding = Compounding.CONTINUOUS,
        frequency: Frequency = Frequency.ANNUAL,
        extrapolate: bool = False,
    ) -> float:
        """Zero rate to a date or time with the given conventions."""
        dc = day_counter if day_counter is not None else self.day_counter
        if isinstance(x, (int, float)):
            t = float(x) if x != 0.0 else DT
            compound = 1.0 / self.discount(t, extrapolate)
            return InterestRate.implied_rate(compound, self.day_counter, compounding, frequency, t).rate
        d = Date.coerce(x)
        if d == self.reference_date:
            compound = 1.0 / self.discount(DT, extrapolate)
            return InterestRate.implied_rate(compound, dc, compounding, frequency, DT).rate
        compound = 1.0 / self.discount(d, extrapolate)
        return InterestRate.implied_rate(
            compound, dc, compounding, frequency, self.reference_date, d
        ).rate

    def forward_rate(
        self,
        x1: TimeOrDate,
        x2: TimeOrDate,
        day_counter: Optional[DayCounter] = None,
        compounding: Compounding = Compounding.CONTINUOUS,
        frequency: Frequency = Frequency.ANNUAL,
        extrapolate: bool = False,
    ) -> float:
        """Forward rate between two dates or times.

        Equal end points give the instantaneous forward rate.
        """
        dc = day_counter if day_counter is not None else self.day_counter
        times = isinstance(x1, (int, float)) and isinstance(x2, (int, float))
        t1 = self._to_year_fraction(x1)
        t2 = self._to_year_fraction(x2)
        if t1 == t2 or (not times and Date.coerce(x1) == Date.coerce(x2)):
            t1 = max(t1 - DT / 2.0, 0.0)
            t2 = t1 + DT
            compound = self.discount(t1, extrapolate) / self.discount(t2, extrapolate)
            return InterestRate.implied_rate(compound, dc, compounding, frequency, DT).rate
        if t1 > t2:
            raise InvalidArgumentError(f"{x1} later than {x2}")
        compound = self.discount(x1, extrapolate) / self.discount(x2, extrapolate)
        if times:
            return InterestRate.implied_rate(
                compound, self.day_counter, compounding, frequency, t2 - t1
            ).rate
        return InterestRate.implied_rate(
            compound, dc, compounding, frequency, Date.coerce(x1), Date.coerce(x2)
        ).rate

    def instantaneous_forward(self, x: TimeOrDate, extrapolate: bool = False) -> float:
        """Continuously compounded instantaneous forward rate."""
        return self._forward_impl(self._time(x, extrapolate))

    def _zero_impl(self, t: float) -> float:
        if t == 0.0:
            return self._forward_impl(0.0)
        return -math.log(self._discount_impl(t)) / t

    def _forward_impl(self, t: float) -> float:
        t1 = max(t - DT / 2.0, 0.0)
        t2 = t1 + DT
        return math.log(self._discount_impl(t1) / self._discount_impl(t2)) / DT

    @abstractmethod
    def _discount_impl(self, t: float) -> float:
        ...
