"""
Calendar-aware date shifting with the library's default conventions.
"""
from typing import Optional, Union

from ficcore.time.calendars.base import Calendar
from ficcore.time.calendars.simple import NullCalendar
from ficcore.time.date import Date, DateLike
from ficcore.time.period import TimeUnit
from ficcore.time.types import BusinessDayConvention


def advance(
    d: DateLike,
    n: int,
    unit: TimeUnit,
    convention: Union[BusinessDayConvention, str] = BusinessDayConvention.UNADJUSTED,
    end_of_month: bool = False,
    calendar: Optional[Calendar] = None,
) -> Date:
    """
    Move a date by ``n`` units.

    Month and year shifts clamp the day to the target month's last day. With
    ``end_of_month`` set, a start on the last business day of its month lands
    on the last business day of the target month. Without a calendar every
    day is a business day.

    Args:
        d: Start date
        n: Number of units (may be negative)
        unit: Days, weeks, months or years
        convention: Business-day convention for the result (unadjusted by default)
        end_of_month: Apply the end-of-month rule
        calendar: Calendar defining business days

    Returns:
        Shifted date
    """
    cal = calendar if calendar is not None else NullCalendar()
    return cal.advance(d, n, unit, convention=convention, end_of_month=end_of_month)
