"""
QuantLib-backed calendars.

Market holiday rules come from QuantLib; ``QuantLibCalendar`` wraps a
QuantLib calendar behind the ``Calendar`` interface so that adjustment,
advancing and runtime holiday modifications behave the same for every market.
"""
from datetime import date, datetime
from typing import Union

import QuantLib as ql

from ficcore.time.date import Date
from ficcore.time.calendars.base import Calendar


def to_ql_date(dt: Union[Date, date, datetime, str]) -> ql.Date:
    """Convert a Date (or anything Date.coerce accepts) to a QuantLib Date."""
    d = Date.coerce(dt)
    return ql.Date(d.day, d.month, d.year)


def from_ql_date(ql_date: ql.Date) -> Date:
    """Convert a QuantLib Date to a Date."""
    return Date(ql_date.dayOfMonth(), ql_date.month(), ql_date.year())


class QuantLibCalendar(Calendar):
    """Calendar delegating the market rule to a QuantLib calendar.

    Runtime holiday modifications are handled on this side, so they are
    shared with other ficcore instances of the same market and never leak
    into QuantLib's global holiday registry.
    """

    def __init__(self, ql_calendar: ql.Calendar, name: str = None):
        self._ql_calendar = ql_calendar
        self._name = name or ql_calendar.name()

    @property
    def name(self) -> str:
        return self._name

    @property
    def ql_calendar(self) -> ql.Calendar:
        """Underlying QuantLib calendar (without runtime modifications)."""
        return self._ql_calendar

    def is_weekend(self, weekday: int) -> bool:
        return self._ql_calendar.isWeekend(int(weekday))

    def _is_business_day(self, d: Date) -> bool:
        return self._ql_calendar.isBusinessDay(to_ql_date(d))
