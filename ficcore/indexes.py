"""
Interest-rate indexes.

An index turns a fixing date into a rate: past fixings come from a
history shared by every index with the same name, future ones are
forecast from the index's forwarding curve.
"""
import logging
from typing import Dict, Optional, Union

from ficcore.errors import InvalidArgumentError
from ficcore.patterns.handle import Handle
from ficcore.patterns.observable import Observable, Observer
from ficcore.settings import Settings, get_settings
from ficcore.time.calendars.base import Calendar
from ficcore.time.calendars.target import TARGET
from ficcore.time.date import Date, DateLike
from ficcore.time.daycounters.actual import Actual360
from ficcore.time.daycounters.base import DayCounter
from ficcore.time.period import Period, TimeUnit
from ficcore.time.types import BusinessDayConvention

logger = logging.getLogger(__name__)


class IborIndex(Observer, Observable):
    """
    Term deposit rate index, e.g. Euribor 6M.

    Args:
        family_name: Index family, e.g. "Euribor"
        tenor: Deposit tenor
        fixing_days: Business days between fixing and value date
        fixing_calendar: Calendar for fixing and maturity dates
        convention: Business-day convention of the maturity date
        end_of_month: Month-end rule of the maturity date
        day_counter: Accrual convention of the deposit
        forwarding_curve: Handle to the curve forecasting future fixings
        settings: Evaluation-date context
    """

    # index name -> {fixing date serial: rate}
    _history: Dict[str, Dict[int, float]] = {}

    def __init__(
        self,
        family_name: str,
        tenor: Union[Period, str],
        fixing_days: int,
        fixing_calendar: Calendar,
        convention: Union[BusinessDayConvention, str],
        end_of_month: bool,
        day_counter: DayCounter,
        forwarding_curve: Optional[Handle] = None,
        settings: Optional[Settings] = None,
    ):
        self.family_name = family_name
        self.tenor = Period(tenor) if isinstance(tenor, str) else tenor
        if self.tenor.length <= 0:
            raise InvalidArgumentError(f"non-positive index tenor given: {self.tenor}")
        self.fixing_days = fixing_days
        self.fixing_calendar = fixing_calendar
        self.convention = BusinessDayConvention.coerce(convention)
        self.end_of_month = end_of_month
        self.day_counter = day_counter
        self.forwarding_curve = forwarding_curve if forwarding_curve is not None else Handle()
        self.settings = settings if settings is not None else get_settings()
        self.register_with(self.forwarding_curve)

    @property
    def name(self) -> str:
        tenor = "ON" if self.tenor == Period(1, TimeUnit.DAYS) else str(self.tenor)
        return f"{self.family_name}{tenor} {self.day_counter.name}"

    def update(self) -> None:
        self.notify_observers()

    # ------------------------------------------------------------------
    # Dates
    # ------------------------------------------------------------------
    def is_valid_fixing_date(self, d: DateLike) -> bool:
        return self.fixing_calendar.is_business_day(d)

    def fixing_date(self, value_date: DateLike) -> Date:
        return self.fixing_calendar.advance(value_date, -self.fixing_days, TimeUnit.DAYS)

    def value_date(self, fixing_date: DateLike) -> Date:
        if not self.is_valid_fixing_date(fixing_date):
            raise InvalidArgumentError(f"{fixing_date} is not a valid fixing date for {self.name}")
        return self.fixing_calendar.advance(fixing_date, self.fixing_days, TimeUnit.DAYS)

    def maturity_date(self, value_date: DateLike) -> Date:
        return self.fixing_calendar.advance(
            value_date, self.tenor, convention=self.convention, end_of_month=self.end_of_month
        )

    # ------------------------------------------------------------------
    # Fixings
    # ------------------------------------------------------------------
    def forecast_fixing(self, fixing_date: DateLike) -> float:
        """Simply compounded rate implied by the forwarding curve."""
        if self.forwarding_curve.empty:
            raise InvalidArgumentError(
                f"null term structure set to this instance of {self.name}"
            )
        start = self.value_date(fixing_date)
        end = self.maturity_date(start)
        return self._forecast(start, end)

    def _forecast(self, start: Date, end: Date) -> float:
        curve = self.forwarding_curve.current_link
        t = self.day_counter.year_fraction(start, end)
        if t <= 0.0:
            raise InvalidArgumentError(f"non-positive accrual time ({t}) from {start} to {end}")
        return (curve.discount(start) / curve.discount(end) - 1.0) / t

    def fixing(self, fixing_date: DateLike, forecast_todays_fixing: bool = False) -> float:
        """
        Rate fixed (or expected to fix) on ``fixing_date``.

        Args:
            fixing_date: Fixing date; must be a business day
            forecast_todays_fixing: Forecast today's fixing even if it is
                already stored

        Returns:
            Index fixing
        """
        fixing_date = Date.coerce(fixing_date)
        if not self.is_valid_fixing_date(fixing_date):
            raise InvalidArgumentError(f"Fixing date {fixing_date} is not valid for {self.name}")
        today = self.settings.evaluation_date
        if fixing_date > today or (fixing_date == today and forecast_todays_fixing):
            return self.forecast_fixing(fixing_date)

        past = self.fixings.get(fixing_date.serial)
        if past is not None:
            return past
        if fixing_date < today:
            raise InvalidArgumentError(f"Missing {self.name} fixing for {fixing_date}")
        # today's fixing not published yet
        return self.forecast_fixing(fixing_date)

    @property
    def fixings(self) -> Dict[int, float]:
        return IborIndex._history.setdefault(self.name, {})

    def add_fixing(self, fixing_date: DateLike, value: float, force_overwrite: bool = False) -> None:
        fixing_date = Date.coerce(fixing_date)
        if not self.is_valid_fixing_date(fixing_date):
            raise InvalidArgumentError(f"Fixing date {fixing_date} is not valid for {self.name}")
        history = self.fixings
        stored = history.get(fixing_date.serial)
        if stored is not None and stored != value and not force_overwrite:
            raise InvalidArgumentError(
                f"At least one duplicated fixing provided: {fixing_date}, {value} "
                f"while {stored} value is already present"
            )
        history[fixing_date.serial] = value
        logger.debug("Stored %s fixing %s for %s", self.name, value, fixing_date)
        self.notify_observers()

    def clear_fixings(self) -> None:
        IborIndex._history.pop(self.name, None)
        self.notify_observers()

    def clone(self, forwarding_curve: Handle) -> "IborIndex":
        """Same index forecasting on another curve."""
        return IborIndex(
            self.family_name, self.tenor, self.fixing_days, self.fixing_calendar,
            self.convention, self.end_of_month, self.day_counter, forwarding_curve,
            self.settings,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class OvernightIndex(IborIndex):
    """One-day index; compounded daily by overnight-indexed swaps."""

    def __init__(
        self,
        family_name: str,
        fixing_days: int,
        fixing_calendar: Calendar,
        day_counter: DayCounter,
        forwarding_curve: Optional[Handle] = None,
        settings: Optional[Settings] = None,
    ):
        super().__init__(
            family_name, Period(1, TimeUnit.DAYS), fixing_days, fixing_calendar,
            BusinessDayConvention.FOLLOWING, False, day_counter, forwarding_curve, settings,
        )

    def clone(self, forwarding_curve: Handle) -> "OvernightIndex":
        return OvernightIndex(
            self.family_name, self.fixing_days, self.fixing_calendar, self.day_counter,
            forwarding_curve, self.settings,
        )


# ----------------------------------------------------------------------
# Euro market indexes
# ----------------------------------------------------------------------
def _euribor_conventions(tenor: Period):
    if tenor.unit in (TimeUnit.DAYS, TimeUnit.WEEKS):
        return BusinessDayConvention.FOLLOWING, False
    return BusinessDayConvention.MODIFIED_FOLLOWING, True


class Euribor(IborIndex):
    """Euribor: TARGET, two fixing days, Actual/360."""

    def __init__(
        self,
        tenor: Union[Period, str],
        forwarding_curve: Optional[Handle] = None,
        settings: Optional[Settings] = None,
    ):
        tenor = Period(tenor) if isinstance(tenor, str) else tenor
        convention, end_of_month = _euribor_conventions(tenor)
        super().__init__(
            "Euribor", tenor, 2, TARGET(), convention, end_of_month, Actual360(),
            forwarding_curve, settings,
        )

    def clone(self, forwarding_curve: Handle) -> "Euribor":
        return Euribor(self.tenor, forwarding_curve, self.settings)


class Eonia(OvernightIndex):
    """Euro overnight index average."""

    def __init__(self, forwarding_curve: Optional[Handle] = None, settings: Optional[Settings] = None):
        super().__init__("Eonia", 0, TARGET(), Actual360(), forwarding_curve, settings)

    def clone(self, forwarding_curve: Handle) -> "Eonia":
        return Eonia(forwarding_curve, self.settings)


class Estr(OvernightIndex):
    """Euro short-term rate."""

    def __init__(self, forwarding_curve: Optional[Handle] = None, settings: Optional[Settings] = None):
        super().__init__("ESTR", 0, TARGET(), Actual360(), forwarding_curve, settings)

    def clone(self, forwarding_curve: Handle) -> "Estr":
        return Estr(forwarding_curve, self.settings)
