"""
Curves shifted by a (quoted) spread.
"""
import math

from ficcore.interest_rate import Compounding, InterestRate
from ficcore.patterns.handle import Handle
from ficcore.quotes import QuoteLike, make_quote_handle
from ficcore.termstructures.yields.base import YieldTermStructure
from ficcore.time.date import Date
from ficcore.time.period import Frequency


class _SpreadedTermStructure(YieldTermStructure):
    """Curve following the dates of an underlying curve."""

    def __init__(self, curve: Handle, spread: QuoteLike):
        self._curve = curve
        self._spread = make_quote_handle(spread)
        super().__init__(settings=curve.current_link.settings if curve else None)
        self.register_with(curve)
        self.register_with(self._spread)

    @property
    def day_counter(self):
        return self._curve.current_link.day_counter

    @property
    def calendar(self):
        return self._curve.current_link.calendar

    @property
    def settlement_days(self):
        return self._curve.current_link.settlement_days

    @property
    def reference_date(self) -> Date:
        return self._curve.current_link.reference_date

    @property
    def max_date(self) -> Date:
        return self._curve.current_link.max_date

    @property
    def spread(self) -> float:
        return self._spread.current_link.value

    def _discount_impl(self, t: float) -> float:
        return math.exp(-self._zero_impl(t) * t)


class ZeroSpreadedTermStructure(_SpreadedTermStructure):
    """Underlying zero rates plus a spread.

    The spread is added to zero rates expressed with ``compounding`` and
    ``frequency``, then converted back to continuous compounding.

    Args:
        curve: Handle to the underlying curve
        spread: Spread as a number, a Quote or a quote Handle
        compounding: Compounding in which the spread applies
        frequency: Frequency in which the spread applies
    """

    def __init__(
        self,
        curve: Handle,
        spread: QuoteLike,
        compounding: Compounding = Compounding.CONTINUOUS,
        frequency: Frequency = Frequency.ANNUAL,
    ):
        self._compounding = compounding
        self._frequency = frequency
        super().__init__(curve, spread)

    def _zero_impl(self, t: float) -> float:
        original = self._curve.current_link
        zero = original.zero_rate(t, compounding=self._compounding, frequency=self._frequency,
                                  extrapolate=True)
        spreaded = InterestRate(zero + self.spread, original.day_counter,
                                self._compounding, self._frequency)
        if t == 0.0:
            return spreaded.equivalent_rate(Compounding.CONTINUOUS, Frequency.ANNUAL, 1e-4).rate
        return spreaded.equivalent_rate(Compounding.CONTINUOUS, Frequency.ANNUAL, t).rate


class ForwardSpreadedTermStructure(_SpreadedTermStructure):
    """Underlying instantaneous forwards plus a spread.

    Args:
        curve: Handle to the underlying curve
        spread: Spread as a number, a Quote or a quote Handle
    """

    def _zero_impl(self, t: float) -> float:
        original = self._curve.current_link
        return original.zero_rate(t, extrapolate=True) + self.spread

    def _forward_impl(self, t: float) -> float:
        return self._curve.current_link.forward_rate(t, t, extrapolate=True) + self.spread
