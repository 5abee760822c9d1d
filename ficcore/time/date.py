"""
Serial-number based calendar date.

Serial numbers count days from 1899-12-30, so serial 367 is 1901-01-01 and
serial 109574 is 2199-12-31; both bounds are inclusive.
"""
from __future__ import annotations

import functools
from datetime import date, datetime
from enum import IntEnum
from typing import TYPE_CHECKING, Union

from dateutil.relativedelta import relativedelta

from ficcore.errors import InvalidArgumentError

if TYPE_CHECKING:
    from ficcore.time.period import Period

_EPOCH_ORDINAL = date(1899, 12, 30).toordinal()
MIN_SERIAL = 367
MAX_SERIAL = 109574

_SECONDS_PER_DAY = 86400.0

DateLike = Union["Date", date, datetime, str]


class Weekday(IntEnum):
    SUNDAY = 1
    MONDAY = 2
    TUESDAY = 3
    WEDNESDAY = 4
    THURSDAY = 5
    FRIDAY = 6
    SATURDAY = 7


class Month(IntEnum):
    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12


@functools.total_ordering
class Date:
    """Immutable date with an optional intraday fraction.

    Args:
        day: Day of month (1-31)
        month: Month (1-12)
        year: Year (1901-2199)
        hours, minutes, seconds, milliseconds: Optional time of day
    """

    __slots__ = ("_serial", "_fraction", "_date")

    def __init__(
        self,
        day: int,
        month: int,
        year: int,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        milliseconds: int = 0,
    ):
        try:
            py_date = date(int(year), int(month), int(day))
        except ValueError as exc:
            raise InvalidArgumentError(f"invalid date {day}/{month}/{year}: {exc}") from exc
        if not (0 <= hours < 24 and 0 <= minutes < 60 and 0 <= seconds < 60
                and 0 <= milliseconds < 1000):
            raise InvalidArgumentError(
                f"invalid time of day {hours}:{minutes}:{seconds}.{milliseconds}"
            )
        self._init(py_date, (hours * 3600 + minutes * 60 + seconds + milliseconds / 1000.0)
                   / _SECONDS_PER_DAY)

    def _init(self, py_date: date, fraction: float) -> None:
        serial = py_date.toordinal() - _EPOCH_ORDINAL
        if not MIN_SERIAL <= serial <= MAX_SERIAL:
            raise InvalidArgumentError(
                f"date {py_date.isoformat()} outside allowed range "
                f"[1901-01-01, 2199-12-31]"
            )
        object.__setattr__(self, "_serial", serial)
        object.__setattr__(self, "_fraction", fraction)
        object.__setattr__(self, "_date", py_date)

    def __setattr__(self, name, value):
        raise AttributeError("Date is immutable")

    # ------------------------------------------------------------------
    # Alternative constructors
    # ------------------------------------------------------------------
    @classmethod
    def _from_parts(cls, py_date: date, fraction: float = 0.0) -> "Date":
        obj = cls.__new__(cls)
        obj._init(py_date, fraction)
        return obj

    @classmethod
    def from_serial(cls, serial: int) -> "Date":
        serial = int(serial)
        if not MIN_SERIAL <= serial <= MAX_SERIAL:
            raise InvalidArgumentError(
                f"serial number {serial} outside allowed range [{MIN_SERIAL}, {MAX_SERIAL}]"
            )
        return cls._from_parts(date.fromordinal(serial + _EPOCH_ORDINAL))

    @classmethod
    def from_date(cls, value: Union[date, datetime]) -> "Date":
        if isinstance(value, datetime):
            fraction = (value.hour * 3600 + value.minute * 60 + value.second
                        + value.microsecond // 1000 / 1000.0) / _SECONDS_PER_DAY
            return cls._from_parts(value.date(), fraction)
        return cls._from_parts(value)

    @classmethod
    def coerce(cls, value: DateLike) -> "Date":
        """Convert a Date, datetime.date/datetime or ISO string into a Date."""
        if isinstance(value, Date):
            return value
        if isinstance(value, (date, datetime)):
            return cls.from_date(value)
        if isinstance(value, str):
            for fmt in ("%Y-%m-%d", "%Y%m%d"):
                try:
                    return cls.from_date(datetime.strptime(value, fmt).date())
                except ValueError:
                    continue
            raise InvalidArgumentError(f"Unsupported date string format: {value!r}")
        raise TypeError(f"Unsupported type for date: {type(value)}")

    @classmethod
    def todays_date(cls) -> "Date":
        return cls.from_date(date.today())

    @classmethod
    def min_date(cls) -> "Date":
        return cls.from_serial(MIN_SERIAL)

    @classmethod
    def max_date(cls) -> "Date":
        return cls.from_serial(MAX_SERIAL)

    # ------------------------------------------------------------------
    # Inspectors
    # ------------------------------------------------------------------
    @property
    def serial(self) -> int:
        return self._serial

    @property
    def fraction_of_day(self) -> float:
        return self._fraction

    @property
    def day(self) -> int:
        return self._date.day

    @property
    def month(self) -> int:
        return self._date.month

    @property
    def year(self) -> int:
        return self._date.year

    @property
    def weekday(self) -> Weekday:
        return Weekday(self._date.isoweekday() % 7 + 1)

    @property
    def day_of_year(self) -> int:
        return self._date.timetuple().tm_yday

    def to_date(self) -> date:
        return self._date

    # ------------------------------------------------------------------
    # Calendar helpers
    # ------------------------------------------------------------------
    @staticmethod
    def is_leap(year: int) -> bool:
        return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)

    @staticmethod
    def end_of_month(d: "Date") -> "Date":
        last = d._date + relativedelta(day=31)
        return Date._from_parts(last)

    @staticmethod
    def is_end_of_month(d: "Date") -> bool:
        return (d._date + relativedelta(days=1)).month != d.month

    @staticmethod
    def next_weekday(d: "Date", weekday: int) -> "Date":
        """First date on or after ``d`` falling on ``weekday``."""
        wd = int(d.weekday)
        return d + ((7 if wd > weekday else 0) - wd + int(weekday))

    @staticmethod
    def nth_weekday(n: int, weekday: int, month: int, year: int) -> "Date":
        """The n-th given weekday in the given month, e.g. third Wednesday."""
        if not 1 <= n <= 5:
            raise InvalidArgumentError(f"nth weekday must be in [1, 5], got {n}")
        first = int(Date(1, month, year).weekday)
        skip = n - (1 if weekday >= first else 0)
        return Date((1 + weekday + skip * 7) - first, month, year)

    def days_between(self, other: "Date") -> float:
        """Days from ``self`` to ``other`` including intraday fractions."""
        return (other._serial - self._serial) + (other._fraction - self._fraction)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------
    def _shift_days(self, days: int) -> "Date":
        serial = self._serial + days
        if not MIN_SERIAL <= serial <= MAX_SERIAL:
            raise InvalidArgumentError(
                f"date {self} shifted by {days} days is outside the allowed range"
            )
        return Date._from_parts(date.fromordinal(serial + _EPOCH_ORDINAL), self._fraction)

    def add_period(self, length: int, unit) -> "Date":
        from ficcore.time.period import TimeUnit

        if unit == TimeUnit.DAYS:
            return self._shift_days(length)
        if unit == TimeUnit.WEEKS:
            return self._shift_days(7 * length)
        if unit == TimeUnit.MONTHS:
            delta = relativedelta(months=length)
        elif unit == TimeUnit.YEARS:
            delta = relativedelta(years=length)
        else:
            raise InvalidArgumentError(f"Unknown time unit: {unit}")
        try:
            shifted = self._date + delta
        except (ValueError, OverflowError) as exc:
            raise InvalidArgumentError(f"date {self} shifted by {length} {unit.name} "
                                       f"is outside the allowed range") from exc
        return Date._from_parts(shifted, self._fraction)

    def __add__(self, other: Union[int, "Period"]) -> "Date":
        from ficcore.time.period import Period

        if isinstance(other, Period):
            return self.add_period(other.length, other.unit)
        if isinstance(other, int):
            return self._shift_days(other)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        from ficcore.time.period import Period

        if isinstance(other, Date):
            return self._serial - other._serial
        if isinstance(other, Period):
            return self.add_period(-other.length, other.unit)
        if isinstance(other, int):
            return self._shift_days(-other)
        return NotImplemented

    # ------------------------------------------------------------------
    # Comparison and formatting
    # ------------------------------------------------------------------
    def __eq__(self, other) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._serial == other._serial and self._fraction == other._fraction

    def __lt__(self, other: "Date") -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return (self._serial, self._fraction) < (other._serial, other._fraction)

    def __hash__(self) -> int:
        return hash((self._serial, self._fraction))

    def __str__(self) -> str:
        return self._date.isoformat()

    def __repr__(self) -> str:
        return f"Date({self.day}, {self.month}, {self.year})"

    def __reduce__(self):
        return (_restore, (self._serial, self._fraction))


def _restore(serial: int, fraction: float) -> Date:
    return Date._from_parts(date.fromordinal(serial + _EPOCH_ORDINAL), fraction)
