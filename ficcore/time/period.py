"""
Periods (tenors) and coupon frequencies.
"""
from __future__ import annotations

import re
from enum import Enum, IntEnum
from typing import Tuple, Union

from ficcore.errors import InvalidArgumentError


class TimeUnit(Enum):
    DAYS = "D"
    WEEKS = "W"
    MONTHS = "M"
    YEARS = "Y"


class Frequency(IntEnum):
    """Number of events per year."""

    NO_FREQUENCY = -1
    ONCE = 0
    ANNUAL = 1
    SEMIANNUAL = 2
    EVERY_FOURTH_MONTH = 3
    QUARTERLY = 4
    BIMONTHLY = 6
    MONTHLY = 12
    EVERY_FOURTH_WEEK = 13
    BIWEEKLY = 26
    WEEKLY = 52
    DAILY = 365
    OTHER_FREQUENCY = 999


_TENOR_TOKEN = re.compile(r"([+-]?\d+)([DWMY])", re.IGNORECASE)


class Period:
    """Signed length of time, e.g. ``Period(6, TimeUnit.MONTHS)`` or ``Period("6M")``."""

    __slots__ = ("_length", "_unit")

    def __init__(self, length: Union[int, str, Frequency] = 0, unit: TimeUnit = TimeUnit.DAYS):
        if isinstance(length, str):
            length, unit = self._parse_single(length)
        elif isinstance(length, Frequency):
            length, unit = self._from_frequency(length)
        if not isinstance(unit, TimeUnit):
            raise InvalidArgumentError(f"Unknown time unit: {unit}")
        object.__setattr__(self, "_length", int(length))
        object.__setattr__(self, "_unit", unit)

    def __setattr__(self, name, value):
        raise AttributeError("Period is immutable")

    @staticmethod
    def _parse_single(text: str) -> Tuple[int, TimeUnit]:
        tokens = _TENOR_TOKEN.findall(text.strip())
        if not tokens or "".join(n + u for n, u in tokens).upper() != text.strip().upper():
            raise InvalidArgumentError(f"Unsupported tenor format: {text!r}")
        if len(tokens) == 1:
            n, u = tokens[0]
            return int(n), TimeUnit(u.upper())
        total = Period(0, TimeUnit(tokens[0][1].upper()))
        for n, u in tokens:
            total = total + Period(int(n), TimeUnit(u.upper()))
        return total.length, total.unit

    @classmethod
    def parse(cls, text: str) -> "Period":
        """Parse tenor strings like ``"3M"``, ``"10Y"`` or ``"1Y6M"``."""
        return cls(text)

    @staticmethod
    def _from_frequency(freq: Frequency) -> Tuple[int, TimeUnit]:
        if freq == Frequency.NO_FREQUENCY:
            return 0, TimeUnit.DAYS
        if freq == Frequency.ONCE:
            return 0, TimeUnit.YEARS
        if freq == Frequency.ANNUAL:
            return 1, TimeUnit.YEARS
        if freq in (Frequency.SEMIANNUAL, Frequency.EVERY_FOURTH_MONTH,
                    Frequency.QUARTERLY, Frequency.BIMONTHLY, Frequency.MONTHLY):
            return 12 // int(freq), TimeUnit.MONTHS
        if freq in (Frequency.EVERY_FOURTH_WEEK, Frequency.BIWEEKLY, Frequency.WEEKLY):
            return 52 // int(freq), TimeUnit.WEEKS
        if freq == Frequency.DAILY:
            return 1, TimeUnit.DAYS
        raise InvalidArgumentError(f"Unknown frequency: {freq}")

    @classmethod
    def from_frequency(cls, freq: Frequency) -> "Period":
        return cls(*cls._from_frequency(freq))

    @property
    def length(self) -> int:
        return self._length

    @property
    def unit(self) -> TimeUnit:
        return self._unit

    @property
    def frequency(self) -> Frequency:
        """Frequency with this period as interval, or OTHER_FREQUENCY."""
        length = abs(self._length)
        if length == 0:
            return Frequency.ONCE if self._unit == TimeUnit.YEARS else Frequency.NO_FREQUENCY
        if self._unit == TimeUnit.YEARS:
            return Frequency.ANNUAL if length == 1 else Frequency.OTHER_FREQUENCY
        if self._unit == TimeUnit.MONTHS:
            if 12 % length == 0 and length <= 12:
                return Frequency(12 // length)
            return Frequency.OTHER_FREQUENCY
        if self._unit == TimeUnit.WEEKS:
            return {1: Frequency.WEEKLY, 2: Frequency.BIWEEKLY,
                    4: Frequency.EVERY_FOURTH_WEEK}.get(length, Frequency.OTHER_FREQUENCY)
        return Frequency.DAILY if length == 1 else Frequency.OTHER_FREQUENCY

    def normalized(self) -> "Period":
        """Equivalent period in the smallest exact unit set (Y→M, W→D)."""
        if self._length == 0:
            return Period(0, TimeUnit.DAYS)
        if self._unit == TimeUnit.YEARS:
            return Period(self._length * 12, TimeUnit.MONTHS)
        if self._unit == TimeUnit.WEEKS:
            return Period(self._length * 7, TimeUnit.DAYS)
        return self

    def _days_range(self) -> Tuple[int, int]:
        n = self._length
        if self._unit == TimeUnit.DAYS:
            return n, n
        if self._unit == TimeUnit.WEEKS:
            return 7 * n, 7 * n
        if self._unit == TimeUnit.MONTHS:
            return 28 * n, 31 * n
        return 365 * n, 366 * n

    def years(self) -> float:
        """Length in years; only defined for month and year units."""
        if self._length == 0:
            return 0.0
        if self._unit == TimeUnit.YEARS:
            return float(self._length)
        if self._unit == TimeUnit.MONTHS:
            return self._length / 12.0
        raise InvalidArgumentError(f"cannot convert {self} into years")

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------
    def __neg__(self) -> "Period":
        return Period(-self._length, self._unit)

    def __mul__(self, n: int) -> "Period":
        if not isinstance(n, int):
            return NotImplemented
        return Period(self._length * n, self._unit)

    __rmul__ = __mul__

    def __add__(self, other: "Period") -> "Period":
        if not isinstance(other, Period):
            return NotImplemented
        if self._length == 0:
            return other
        if other._length == 0:
            return self
        if self._unit == other._unit:
            return Period(self._length + other._length, self._unit)
        a, b = self.normalized(), other.normalized()
        if a._unit == b._unit:
            return Period(a._length + b._length, a._unit)
        raise InvalidArgumentError(f"impossible addition between {self} and {other}")

    def __sub__(self, other: "Period") -> "Period":
        if not isinstance(other, Period):
            return NotImplemented
        return self + (-other)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------
    def __eq__(self, other) -> bool:
        if not isinstance(other, Period):
            return NotImplemented
        a, b = self.normalized(), other.normalized()
        return a._length == b._length and a._unit == b._unit

    def __hash__(self) -> int:
        n = self.normalized()
        return hash((n._length, n._unit))

    def __lt__(self, other: "Period") -> bool:
        if not isinstance(other, Period):
            return NotImplemented
        if self._length == 0:
            return other._length > 0
        if other._length == 0:
            return self._length < 0
        a, b = self.normalized(), other.normalized()
        if a._unit == b._unit:
            return a._length < b._length
        lo1, hi1 = self._days_range()
        lo2, hi2 = other._days_range()
        if hi1 < lo2:
            return True
        if lo1 > hi2:
            return False
        raise InvalidArgumentError(f"undecidable comparison between {self} and {other}")

    def __gt__(self, other: "Period") -> bool:
        if not isinstance(other, Period):
            return NotImplemented
        return other < self

    def __le__(self, other: "Period") -> bool:
        if not isinstance(other, Period):
            return NotImplemented
        return not other < self

    def __ge__(self, other: "Period") -> bool:
        if not isinstance(other, Period):
            return NotImplemented
        return not self < other

    def __str__(self) -> str:
        return f"{self._length}{self._unit.value}"

    def __repr__(self) -> str:
        return f"Period({self._length}, TimeUnit.{self._unit.name})"

    def __reduce__(self):
        return (Period, (self._length, self._unit))
