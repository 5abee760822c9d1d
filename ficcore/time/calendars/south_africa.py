"""South African calendar."""
import QuantLib as ql

from ficcore.time.calendars.quantlib import QuantLibCalendar


class SouthAfrica(QuantLibCalendar):
    """Johannesburg settlement calendar.

    Fixed holidays falling on a Sunday move to the following Monday;
    election days are one-off holidays.
    """

    def __init__(self):
        super().__init__(ql.SouthAfrica(), "South Africa")