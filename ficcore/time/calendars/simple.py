"""Calendars without market-specific holidays, and joint calendars."""
from enum import Enum
from functools import reduce
from typing import Sequence

import QuantLib as ql

from ficcore.errors import InvalidArgumentError
from ficcore.time.date import Date
from ficcore.time.calendars.base import Calendar
from ficcore.time.calendars.quantlib import QuantLibCalendar


class NullCalendar(QuantLibCalendar):
    """Every day is a business day."""

    def __init__(self):
        super().__init__(ql.NullCalendar(), "Null")


class WeekendsOnly(QuantLibCalendar):
    """Only Saturdays and Sundays are holidays."""

    def __init__(self):
        super().__init__(ql.WeekendsOnly(), "weekends only")


class JointCalendarRule(Enum):
    JOIN_HOLIDAYS = "JOIN_HOLIDAYS"
    JOIN_BUSINESS_DAYS = "JOIN_BUSINESS_DAYS"


_QL_RULES = {
    JointCalendarRule.JOIN_HOLIDAYS: ql.JoinHolidays,
    JointCalendarRule.JOIN_BUSINESS_DAYS: ql.JoinBusinessDays,
}


class JointCalendar(Calendar):
    """Combination of calendars.

    With JOIN_HOLIDAYS a date is a holiday if it is one for any member; with
    JOIN_BUSINESS_DAYS it is a business day if it is one for any member.
    Members are queried through their own ``is_business_day`` so runtime
    holiday modifications of a member carry over.
    """

    def __init__(
        self,
        calendars: Sequence[Calendar],
        rule: JointCalendarRule = JointCalendarRule.JOIN_HOLIDAYS,
    ):
        if not calendars:
            raise InvalidArgumentError("joint calendar needs at least one calendar")
        self.calendars = tuple(calendars)
        self.rule = JointCalendarRule(rule)

    @property
    def name(self) -> str:
        verb = "holidays" if self.rule == JointCalendarRule.JOIN_HOLIDAYS else "business days"
        return f"Joint{verb.title().replace(' ', '')}({', '.join(c.name for c in self.calendars)})"

    @property
    def ql_calendar(self) -> ql.Calendar:
        """Equivalent QuantLib joint calendar (without runtime modifications)."""
        rule = _QL_RULES[self.rule]
        return reduce(
            lambda a, b: ql.JointCalendar(a, b, rule),
            (c.ql_calendar for c in self.calendars),
        )

    @property
    def has_modifications(self) -> bool:
        return super().has_modifications or any(c.has_modifications for c in self.calendars)

    def is_weekend(self, weekday: int) -> bool:
        flags = [c.is_weekend(weekday) for c in self.calendars]
        return any(flags) if self.rule == JointCalendarRule.JOIN_HOLIDAYS else all(flags)

    def _is_business_day(self, d: Date) -> bool:
        flags = [c.is_business_day(d) for c in self.calendars]
        return all(flags) if self.rule == JointCalendarRule.JOIN_HOLIDAYS else any(flags)

    def __repr__(self) -> str:
        return f"JointCalendar({list(self.calendars)!r}, {self.rule})"
