"""TARGET (Trans-European Automated Real-time Gross settlement Express Transfer) calendar."""
import QuantLib as ql

from ficcore.time.calendars.quantlib import QuantLibCalendar


class TARGET(QuantLibCalendar):
    """Euro settlement calendar.

    Holidays: Saturdays, Sundays, New Year's Day, Good Friday and Easter
    Monday (since 2000), Labour Day (since 2000), Christmas, Day of Goodwill
    (since 2000) and December 31st in 1998, 1999 and 2001.
    """

    def __init__(self):
        super().__init__(ql.TARGET(), "TARGET")