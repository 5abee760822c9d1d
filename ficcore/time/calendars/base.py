"""
Base class for business-day calendars.

Market calendars only supply the weekend and holiday rule (see
``QuantLibCalendar``); adjustment, advancing and counting rules live here.
Holidays added or removed at runtime are shared by every instance of the same
market.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Set, Tuple, Union

from ficcore.errors import InvalidArgumentError
from ficcore.time.date import Date, DateLike
from ficcore.time.period import Period, TimeUnit
from ficcore.time.types import BusinessDayConvention

_Modifications = Tuple[Set[int], Set[int]]


class Calendar(ABC):
    """Business-day calendar for a market."""

    # market name -> (added holiday serials, removed holiday serials)
    _modifications: Dict[str, _Modifications] = {}

    @property
    @abstractmethod
    def name(self) -> str:
        """Market name, used as registry key and for shared modifications."""

    @abstractmethod
    def is_weekend(self, weekday: int) -> bool:
        ...

    @abstractmethod
    def _is_business_day(self, d: Date) -> bool:
        """Market rule, ignoring runtime modifications."""

    def _added_removed(self) -> _Modifications:
        return Calendar._modifications.setdefault(self.name, (set(), set()))

    @property
    def has_modifications(self) -> bool:
        """True if holidays were added or removed at runtime."""
        added, removed = Calendar._modifications.get(self.name, ((), ()))
        return bool(added or removed)

    # ------------------------------------------------------------------
    # Inspectors
    # ------------------------------------------------------------------

    def is_business_day(self, d: DateLike) -> bool:
        d = Date.coerce(d)
        added, removed = self._added_removed()
        if d.serial in added:
            return False
        if d.serial in removed:
            return True
        return self._is_business_day(d)

    def is_holiday(self, d: DateLike) -> bool:
        return not self.is_business_day(d)

    def is_end_of_month(self, d: DateLike) -> bool:
        """True if ``d`` is on or after the last business day of its month."""
        d = Date.coerce(d)
        return d.month != self.adjust(d + 1).month

    def end_of_month(self, d: DateLike) -> Date:
        """Last business day of the month of ``d``."""
        return self.adjust(Date.end_of_month(Date.coerce(d)), BusinessDayConvention.PRECEDING)

    # ------------------------------------------------------------------
    # Modifiers
    # ------------------------------------------------------------------
    def add_holiday(self, d: DateLike) -> None:
        d = Date.coerce(d)
        added, removed = self._added_removed()
        removed.discard(d.serial)
        if self._is_business_day(d):
            added.add(d.serial)

    def remove_holiday(self, d: DateLike) -> None:
        d = Date.coerce(d)
        added, removed = self._added_removed()
        added.discard(d.serial)
        if not self._is_business_day(d):
            removed.add(d.serial)

    def reset_added_and_removed_holidays(self) -> None:
        Calendar._modifications.pop(self.name, None)

    # ------------------------------------------------------------------
    # Date arithmetic
    # ------------------------------------------------------------------
    def adjust(
        self,
        d: DateLike,
        convention: Union[BusinessDayConvention, str] = BusinessDayConvention.FOLLOWING,
    ) -> Date:
        """Roll ``d`` onto a business day according to ``convention``."""
        d = Date.coerce(d)
        c = BusinessDayConvention.coerce(convention)
        if c == BusinessDayConvention.UNADJUSTED:
            return d

        d1 = d
        if c in (BusinessDayConvention.FOLLOWING,
                 BusinessDayConvention.MODIFIED_FOLLOWING,
                 BusinessDayConvention.HALF_MONTH_MODIFIED_FOLLOWING):
            while self.is_holiday(d1):
                d1 = d1 + 1
            if c != BusinessDayConvention.FOLLOWING:
                if d1.month != d.month:
                    return self.adjust(d, BusinessDayConvention.PRECEDING)
                if (c == BusinessDayConvention.HALF_MONTH_MODIFIED_FOLLOWING
                        and d.day <= 15 and d1.day > 15):
                    return self.adjust(d, BusinessDayConvention.PRECEDING)
        elif c in (BusinessDayConvention.PRECEDING, BusinessDayConvention.MODIFIED_PRECEDING):
            while self.is_holiday(d1):
                d1 = d1 - 1
            if c == BusinessDayConvention.MODIFIED_PRECEDING and d1.month != d.month:
                return self.adjust(d, BusinessDayConvention.FOLLOWING)
        elif c == BusinessDayConvention.NEAREST:
            d2 = d
            while self.is_holiday(d1) and self.is_holiday(d2):
                d1 = d1 + 1
                d2 = d2 - 1
            return d2 if self.is_holiday(d1) else d1
        else:
            raise InvalidArgumentError(f"Unknown business-day convention: {convention}")
        return d1

    def advance(
        self,
        d: DateLike,
        n: Union[int, Period, str],
        unit: Optional[TimeUnit] = None,
        convention: Union[BusinessDayConvention, str] = BusinessDayConvention.FOLLOWING,
        end_of_month: bool = False,
    ) -> Date:
        """Move ``d`` by a period and roll the result onto a business day.

        Args:
            d: Start date
            n: Either a Period (or tenor string) or an integer count
            unit: Time unit when ``n`` is an integer
            convention: Business-day convention applied to the result
            end_of_month: Keep month-end starts on month ends (months/years only)

        Returns:
            Advanced business date
        """
        d = Date.coerce(d)
        if isinstance(n, (Period, str)):
            period = Period(n) if isinstance(n, str) else n
            length, unit = period.length, period.unit
        else:
            if unit is None:
                raise InvalidArgumentError("time unit required when advancing by an integer")
            length = int(n)

        if length == 0:
            return self.adjust(d, convention)
        if unit == TimeUnit.DAYS:
            d1 = d
            step = 1 if length > 0 else -1
            for _ in range(abs(length)):
                d1 = d1 + step
                while self.is_holiday(d1):
                    d1 = d1 + step
            return d1
        if unit == TimeUnit.WEEKS:
            return self.adjust(d + Period(length, unit), convention)

        d1 = d + Period(length, unit)
        if end_of_month and self.is_end_of_month(d):
            return self.end_of_month(d1)
        return self.adjust(d1, convention)

    def business_days_between(
        self,
        start: DateLike,
        end: DateLike,
        include_first: bool = True,
        include_last: bool = False,
    ) -> int:
        """Business days in the interval; negative when ``end`` precedes ``start``."""
        start, end = Date.coerce(start), Date.coerce(end)
        if end >= start:
            return self._days_between(start, end, include_first, include_last)
        return -self._days_between(end, start, include_last, include_first)

    def _days_between(self, start: Date, end: Date, include_first: bool, include_last: bool) -> int:
        count = 1 if include_last and self.is_business_day(end) else 0
        d = start if include_first else start + 1
        while d < end:
            if self.is_business_day(d):
                count += 1
            d = d + 1
        return count

    def holiday_list(
        self, start: DateLike, end: DateLike, include_weekends: bool = False
    ) -> List[Date]:
        """Holidays in ``[start, end]``, optionally including weekend days."""
        start, end = Date.coerce(start), Date.coerce(end)
        if end < start:
            raise InvalidArgumentError(f"'from' date ({start}) must precede 'to' date ({end})")
        result = []
        d = start
        while d <= end:
            if self.is_holiday(d) and (include_weekends or not self.is_weekend(d.weekday)):
                result.append(d)
            d = d + 1
        return result

    def business_day_list(self, start: DateLike, end: DateLike) -> List[Date]:
        start, end = Date.coerce(start), Date.coerce(end)
        if end < start:
            raise InvalidArgumentError(f"'from' date ({start}) must precede 'to' date ({end})")
        result = []
        d = start
        while d <= end:
            if self.is_business_day(d):
                result.append(d)
            d = d + 1
        return result

    def __eq__(self, other) -> bool:
        if not isinstance(other, Calendar):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
