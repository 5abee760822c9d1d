"""Dates, periods, calendars, day counters and schedules."""

from .date import Date, Month, Weekday
from .period import Frequency, Period, TimeUnit
from .types import BusinessDayConvention, DateGenerationRule
from .calendars import Calendar, NullCalendar, get_calendar
from .daycounters import DayCounter, get_day_counter
from .schedule import Schedule, SchedulePeriod
from .advance import advance

__all__ = [
    "Date",
    "Month",
    "Weekday",
    "Period",
    "TimeUnit",
    "Frequency",
    "BusinessDayConvention",
    "DateGenerationRule",
    "Calendar",
    "NullCalendar",
    "get_calendar",
    "DayCounter",
    "get_day_counter",
    "Schedule",
    "SchedulePeriod",
    "advance",
]
