"""
Coupon schedule generation.
"""
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Union

from ficcore.errors import InvalidArgumentError
from ficcore.time.calendars.base import Calendar
from ficcore.time.calendars.simple import NullCalendar
from ficcore.time.date import Date, DateLike
from ficcore.time.period import Frequency, Period, TimeUnit
from ficcore.time.types import BusinessDayConvention, DateGenerationRule

_TWENTIETH_RULES = (DateGenerationRule.TWENTIETH, DateGenerationRule.TWENTIETH_IMM)


@dataclass(frozen=True)
class SchedulePeriod:
    """A single accrual period of a schedule."""

    start_date: Date
    end_date: Date
    is_regular: bool = True

    @property
    def accrual_days(self) -> int:
        """Number of calendar days in the period."""
        return self.end_date - self.start_date


def next_twentieth(d: Date, rule: DateGenerationRule) -> Date:
    """Next 20th of a month on or after ``d`` (of an IMM month for TWENTIETH_IMM)."""
    result = Date(20, d.month, d.year)
    if result < d:
        result = result + Period(1, TimeUnit.MONTHS)
    if rule == DateGenerationRule.TWENTIETH_IMM and result.month % 3 != 0:
        result = result + Period(3 - result.month % 3, TimeUnit.MONTHS)
    return result


def _as_period(tenor: Union[Period, Frequency, str]) -> Period:
    if isinstance(tenor, Period):
        return tenor
    if isinstance(tenor, Frequency):
        return Period.from_frequency(tenor)
    if isinstance(tenor, str):
        return Period(tenor)
    raise InvalidArgumentError(f"Unsupported tenor: {tenor!r}")


class Schedule:
    """Sequence of coupon dates between an effective and a termination date.

    Args:
        effective_date: Start of the first period
        termination_date: End of the last period
        tenor: Period between dates (Period, Frequency or tenor string)
        calendar: Calendar used for adjustments
        convention: Adjustment of all dates but the termination date
        termination_convention: Adjustment of the termination date
        rule: Generation rule (BACKWARD from the termination date by default)
        end_of_month: Keep dates on month ends when the anchor date is one
        first_date: Optional end of an irregular first period
        next_to_last_date: Optional start of an irregular last period
    """

    def __init__(
        self,
        effective_date: DateLike,
        termination_date: DateLike,
        tenor: Union[Period, Frequency, str],
        calendar: Optional[Calendar] = None,
        convention: Union[BusinessDayConvention, str] = BusinessDayConvention.FOLLOWING,
        termination_convention: Union[BusinessDayConvention, str, None] = None,
        rule: Union[DateGenerationRule, str] = DateGenerationRule.BACKWARD,
        end_of_month: bool = False,
        first_date: Optional[DateLike] = None,
        next_to_last_date: Optional[DateLike] = None,
    ):
        effective = Date.coerce(effective_date)
        termination = Date.coerce(termination_date)
        self._tenor = _as_period(tenor)
        self._calendar = calendar if calendar is not None else NullCalendar()
        self._convention = BusinessDayConvention.coerce(convention)
        self._termination_convention = (
            self._convention if termination_convention is None
            else BusinessDayConvention.coerce(termination_convention)
        )
        self._rule = DateGenerationRule.coerce(rule)
        self._end_of_month = bool(end_of_month)
        first = Date.coerce(first_date) if first_date is not None else None
        next_to_last = Date.coerce(next_to_last_date) if next_to_last_date is not None else None

        if effective >= termination:
            raise InvalidArgumentError(
                f"effective date ({effective}) later than or equal to termination date ({termination})"
            )
        if self._tenor.length == 0:
            self._rule = DateGenerationRule.ZERO
        elif self._tenor.length < 0:
            raise InvalidArgumentError(f"non positive tenor ({self._tenor}) not allowed")
        if self._rule in _TWENTIETH_RULES and self._end_of_month:
            raise InvalidArgumentError("end-of-month rule not allowed with twentieth rules")

        if first is not None:
            if self._rule not in (DateGenerationRule.BACKWARD, DateGenerationRule.FORWARD):
                raise InvalidArgumentError(f"first date incompatible with {self._rule.name} rule")
            if not effective < first <= termination:
                raise InvalidArgumentError(
                    f"first date ({first}) out of effective-termination date range "
                    f"({effective}, {termination}]"
                )
        if next_to_last is not None:
            if self._rule not in (DateGenerationRule.BACKWARD, DateGenerationRule.FORWARD):
                raise InvalidArgumentError(
                    f"next to last date incompatible with {self._rule.name} rule"
                )
            if not effective <= next_to_last < termination:
                raise InvalidArgumentError(
                    f"next to last date ({next_to_last}) out of effective-termination date "
                    f"range [{effective}, {termination})"
                )

        self._first_date = first
        self._next_to_last_date = next_to_last
        self._dates: List[Date] = []
        self._regular: List[bool] = []
        self._generate(effective, termination)

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    def _generate(self, effective: Date, termination: Date) -> None:
        null = NullCalendar()
        cal, conv, eom = self._calendar, self._convention, self._end_of_month
        first, next_to_last = self._first_date, self._next_to_last_date
        dates, regular = self._dates, self._regular

        if self._rule == DateGenerationRule.ZERO:
            self._tenor = Period(0, TimeUnit.YEARS)
            dates.extend([effective, termination])
            regular.append(True)
            seed = effective
        elif self._rule == DateGenerationRule.BACKWARD:
            dates.append(termination)
            seed = termination
            if next_to_last is not None:
                dates.append(next_to_last)
                temp = null.advance(seed, -self._tenor, convention=conv, end_of_month=eom)
                regular.append(temp == next_to_last)
                seed = next_to_last
            exit_date = first if first is not None else effective
            periods = 1
            while True:
                temp = null.advance(seed, -(self._tenor * periods), convention=conv,
                                    end_of_month=eom)
                if temp < exit_date:
                    if first is not None and cal.adjust(dates[-1], conv) != cal.adjust(first, conv):
                        dates.append(first)
                        regular.append(False)
                    break
                if cal.adjust(dates[-1], conv) != cal.adjust(temp, conv):
                    dates.append(temp)
                    regular.append(True)
                periods += 1
            if cal.adjust(dates[-1], conv) != cal.adjust(effective, conv):
                dates.append(effective)
                regular.append(False)
            dates.reverse()
            regular.reverse()
        else:
            dates.append(effective)
            seed = effective
            if first is not None:
                dates.append(first)
                temp = null.advance(seed, self._tenor, convention=conv, end_of_month=eom)
                regular.append(temp == first)
                seed = first
            elif self._rule in _TWENTIETH_RULES:
                next20th = next_twentieth(effective, self._rule)
                if next20th != effective:
                    dates.append(next20th)
                    regular.append(False)
                    seed = next20th
            exit_date = next_to_last if next_to_last is not None else termination
            periods = 1
            while True:
                temp = null.advance(seed, self._tenor * periods, convention=conv, end_of_month=eom)
                if temp > exit_date:
                    if (next_to_last is not None
                            and cal.adjust(dates[-1], conv) != cal.adjust(next_to_last, conv)):
                        dates.append(next_to_last)
                        regular.append(False)
                    break
                if cal.adjust(dates[-1], conv) != cal.adjust(temp, conv):
                    dates.append(temp)
                    regular.append(True)
                periods += 1
            term_conv = self._termination_convention
            if cal.adjust(dates[-1], term_conv) != cal.adjust(termination, term_conv):
                if self._rule in _TWENTIETH_RULES:
                    dates.append(next_twentieth(termination, self._rule))
                    regular.append(True)
                else:
                    dates.append(termination)
                    regular.append(False)

        self._apply_adjustments(seed)
        self._remove_degenerate_stubs()
        if len(dates) < 2:
            raise InvalidArgumentError(
                f"degenerate single date ({dates[0]}) schedule generated"
            )

    def _apply_adjustments(self, seed: Date) -> None:
        cal, conv, dates = self._calendar, self._convention, self._dates
        if self._end_of_month and cal.is_end_of_month(seed):
            if conv == BusinessDayConvention.UNADJUSTED:
                for i in range(1, len(dates) - 1):
                    dates[i] = Date.end_of_month(dates[i])
            else:
                for i in range(1, len(dates) - 1):
                    dates[i] = cal.end_of_month(dates[i])
            d1, d2 = dates[0], dates[-1]
            if self._termination_convention != BusinessDayConvention.UNADJUSTED:
                d1 = cal.end_of_month(dates[0])
                d2 = cal.end_of_month(dates[-1])
            elif self._rule == DateGenerationRule.BACKWARD:
                d2 = Date.end_of_month(dates[-1])
            else:
                d1 = Date.end_of_month(dates[0])
            # a single-date schedule after the month-end roll keeps the raw dates
            if d1 != d2:
                dates[0], dates[-1] = d1, d2
        else:
            for i in range(len(dates) - 1):
                dates[i] = cal.adjust(dates[i], conv)
            if self._termination_convention != BusinessDayConvention.UNADJUSTED:
                dates[-1] = cal.adjust(dates[-1], self._termination_convention)

    def _remove_degenerate_stubs(self) -> None:
        dates, regular = self._dates, self._regular
        if len(dates) >= 2 and dates[-2] >= dates[-1]:
            if len(regular) >= 2:
                regular[-2] = dates[-2] == dates[-1]
            dates[-2] = dates[-1]
            dates.pop()
            regular.pop()
        if len(dates) >= 2 and dates[1] <= dates[0]:
            regular[1] = dates[1] == dates[0]
            dates[1] = dates[0]
            dates.pop(0)
            regular.pop(0)

    # ------------------------------------------------------------------
    # Alternative constructor
    # ------------------------------------------------------------------
    @classmethod
    def from_dates(
        cls,
        dates: Sequence[DateLike],
        calendar: Optional[Calendar] = None,
        convention: Union[BusinessDayConvention, str] = BusinessDayConvention.UNADJUSTED,
        tenor: Optional[Period] = None,
        end_of_month: bool = False,
    ) -> "Schedule":
        """Wrap an explicit, strictly increasing list of dates."""
        parsed = [Date.coerce(d) for d in dates]
        if len(parsed) < 2:
            raise InvalidArgumentError("a schedule needs at least two dates")
        if any(b <= a for a, b in zip(parsed, parsed[1:])):
            raise InvalidArgumentError("schedule dates must be strictly increasing")
        obj = cls.__new__(cls)
        obj._tenor = tenor
        obj._calendar = calendar if calendar is not None else NullCalendar()
        obj._convention = BusinessDayConvention.coerce(convention)
        obj._termination_convention = obj._convention
        obj._rule = None
        obj._end_of_month = end_of_month
        obj._first_date = None
        obj._next_to_last_date = None
        obj._dates = parsed
        obj._regular = [True] * (len(parsed) - 1)
        return obj

    # ------------------------------------------------------------------
    # Inspectors
    # ------------------------------------------------------------------
    @property
    def dates(self) -> List[Date]:
        return list(self._dates)

    @property
    def tenor(self) -> Optional[Period]:
        return self._tenor

    @property
    def calendar(self) -> Calendar:
        return self._calendar

    @property
    def convention(self) -> BusinessDayConvention:
        return self._convention

    @property
    def termination_convention(self) -> BusinessDayConvention:
        return self._termination_convention

    @property
    def rule(self) -> Optional[DateGenerationRule]:
        return self._rule

    @property
    def end_of_month(self) -> bool:
        return self._end_of_month

    @property
    def start_date(self) -> Date:
        return self._dates[0]

    @property
    def end_date(self) -> Date:
        return self._dates[-1]

    def is_regular(self, i: int) -> bool:
        """Whether period ``i`` (from ``dates[i]`` to ``dates[i + 1]``) is regular."""
        if not 0 <= i < len(self._regular):
            raise InvalidArgumentError(
                f"period index {i} out of range [0, {len(self._regular) - 1}]"
            )
        return self._regular[i]

    def periods(self) -> List[SchedulePeriod]:
        return [
            SchedulePeriod(start, end, self._regular[i])
            for i, (start, end) in enumerate(zip(self._dates, self._dates[1:]))
        ]

    def next_date(self, d: DateLike) -> Optional[Date]:
        """First schedule date on or after ``d``."""
        d = Date.coerce(d)
        for x in self._dates:
            if x >= d:
                return x
        return None

    def previous_date(self, d: DateLike) -> Optional[Date]:
        """Last schedule date strictly before ``d``."""
        d = Date.coerce(d)
        result = None
        for x in self._dates:
            if x >= d:
                break
            result = x
        return result

    def __len__(self) -> int:
        return len(self._dates)

    def __getitem__(self, i: int) -> Date:
        return self._dates[i]

    def __iter__(self) -> Iterator[Date]:
        return iter(self._dates)

    def __repr__(self) -> str:
        return f"Schedule({self._dates[0]} -> {self._dates[-1]}, {len(self._dates)} dates)"
