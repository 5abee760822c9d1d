"""
Actual/Actual day count conventions (ISDA, ISMA and AFB).
"""
from enum import Enum
from typing import Union

import QuantLib as ql

from ficcore.errors import InvalidArgumentError
from ficcore.time.calendars.quantlib import to_ql_date
from ficcore.time.daycounters.quantlib import QuantLibDayCounter
from ficcore.time.period import Period, TimeUnit
from ficcore.time.types import BusinessDayConvention


class ActualActualConvention(Enum):
    ISDA = "ISDA"
    HISTORICAL = "HISTORICAL"
    ACTUAL365 = "ACTUAL365"
    ISMA = "ISMA"
    BOND = "BOND"
    AFB = "AFB"
    EURO = "EURO"


_ISDA = (ActualActualConvention.ISDA, ActualActualConvention.HISTORICAL,
         ActualActualConvention.ACTUAL365)
_ISMA = (ActualActualConvention.ISMA, ActualActualConvention.BOND)

_QL_CONVENTIONS = {
    ActualActualConvention.ISDA: ql.ActualActual.ISDA,
    ActualActualConvention.HISTORICAL: ql.ActualActual.Historical,
    ActualActualConvention.ACTUAL365: ql.ActualActual.Actual365,
    ActualActualConvention.ISMA: ql.ActualActual.ISMA,
    ActualActualConvention.BOND: ql.ActualActual.Bond,
    ActualActualConvention.AFB: ql.ActualActual.AFB,
    ActualActualConvention.EURO: ql.ActualActual.Euro,
}

_QL_BUSINESS_DAY_CONVENTIONS = {
    BusinessDayConvention.FOLLOWING: ql.Following,
    BusinessDayConvention.MODIFIED_FOLLOWING: ql.ModifiedFollowing,
    BusinessDayConvention.PRECEDING: ql.Preceding,
    BusinessDayConvention.MODIFIED_PRECEDING: ql.ModifiedPreceding,
    BusinessDayConvention.UNADJUSTED: ql.Unadjusted,
    BusinessDayConvention.HALF_MONTH_MODIFIED_FOLLOWING: ql.HalfMonthModifiedFollowing,
    BusinessDayConvention.NEAREST: ql.Nearest,
}

_QL_UNITS = {
    TimeUnit.DAYS: ql.Days,
    TimeUnit.WEEKS: ql.Weeks,
    TimeUnit.MONTHS: ql.Months,
    TimeUnit.YEARS: ql.Years,
}


def _coupon_tenor(schedule) -> Period:
    """Schedule tenor, or the length of the first coupon for explicit date lists."""
    if schedule.tenor is not None:
        return schedule.tenor
    dates = schedule.dates
    days = dates[1] - dates[0]
    months = int(0.5 + 12 * days / 365.0)
    if months == 0:
        return Period(days, TimeUnit.DAYS)
    return Period(months, TimeUnit.MONTHS)


def _to_ql_schedule(schedule) -> ql.Schedule:
    tenor = _coupon_tenor(schedule)
    return ql.Schedule(
        [to_ql_date(d) for d in schedule.dates],
        schedule.calendar.ql_calendar,
        _QL_BUSINESS_DAY_CONVENTIONS[schedule.convention],
        _QL_BUSINESS_DAY_CONVENTIONS[schedule.termination_convention],
        ql.Period(tenor.length, _QL_UNITS[tenor.unit]),
        ql.DateGeneration.Backward,
        schedule.end_of_month,
    )


class ActualActual(QuantLibDayCounter):
    """Actual/Actual day counter.

    ISDA splits the interval at year boundaries; ISMA divides by the length
    of the reference (coupon) period, taken from an explicit reference
    period, from a coupon schedule or inferred from the dates; AFB counts
    whole years backwards from the end date.

    A schedule built from an explicit date list carries no tenor; the coupon
    frequency is then read off the first coupon period.

    Args:
        convention: Convention variant (ISDA by default)
        schedule: Coupon schedule used by ISMA to find reference periods
    """

    def __init__(
        self,
        convention: Union[ActualActualConvention, str] = ActualActualConvention.ISDA,
        schedule=None,
    ):
        try:
            self.convention = ActualActualConvention(
                convention.upper() if isinstance(convention, str) else convention
            )
        except ValueError as exc:
            raise InvalidArgumentError(
                f"Unknown ActualActual convention: {convention}. "
                f"Available: {[c.value for c in ActualActualConvention]}"
            ) from exc
        self.schedule = schedule
        if self.convention in _ISDA:
            name = "ACT/ACT (ISDA)"
        elif self.convention in _ISMA:
            name = "ACT/ACT (ISMA)"
        else:
            name = "ACT/ACT (AFB)"

        ql_convention = _QL_CONVENTIONS[self.convention]
        if schedule is not None and self.convention in _ISMA:
            ql_day_counter = ql.ActualActual(ql_convention, _to_ql_schedule(schedule))
        else:
            ql_day_counter = ql.ActualActual(ql_convention)
        super().__init__(ql_day_counter, name)

    def __repr__(self) -> str:
        return f"ActualActual({self.convention})"
