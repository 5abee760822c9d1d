"""United Kingdom settlement calendar."""
import QuantLib as ql

from ficcore.time.calendars.quantlib import QuantLibCalendar


class UnitedKingdom(QuantLibCalendar):
    """UK settlement calendar (England and Wales bank holidays)."""

    def __init__(self):
        super().__init__(ql.UnitedKingdom(ql.UnitedKingdom.Settlement), "UK settlement")