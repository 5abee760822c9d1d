"""United States settlement calendar."""
import QuantLib as ql

from ficcore.time.calendars.quantlib import QuantLibCalendar


class UnitedStates(QuantLibCalendar):
    """US settlement calendar (Federal Reserve holidays)."""

    def __init__(self):
        super().__init__(ql.UnitedStates(ql.UnitedStates.Settlement), "US settlement")