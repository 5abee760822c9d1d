"""
Curve implied from another one at a later reference date.
"""
from ficcore.patterns.handle import Handle
from ficcore.termstructures.yields.base import YieldTermStructure
from ficcore.time.date import Date, DateLike


class ImpliedTermStructure(YieldTermStructure):
    """Discount curve seen from a forward reference date.

    Discount factors are the ratio of the original curve's discounts, so
    ``implied.discount(t) = D(ref + t) / D(ref)``. Changes in the linked
    curve are propagated to observers.

    Args:
        curve: Handle to the original curve
        reference_date: New reference date
    """

    def __init__(self, curve: Handle, reference_date: DateLike):
        self._curve = curve
        super().__init__(
            curve.current_link.day_counter, reference_date, settings=curve.current_link.settings
        )
        self.register_with(curve)

    @property
    def day_counter(self):
        return self._curve.current_link.day_counter

    @property
    def calendar(self):
        return self._curve.current_link.calendar

    @property
    def max_date(self) -> Date:
        return self._curve.current_link.max_date

    def _discount_impl(self, t: float) -> float:
        original = self._curve.current_link
        ref = self.reference_date
        original_time = t + self.day_counter.year_fraction(original.reference_date, ref)
        return original.discount(original_time, True) / original.discount(ref, True)
