"""
Base class for term structures.

A term structure either has a fixed reference date or floats with the
evaluation date: ``settlement_days`` business days after it on
``calendar``. Floating structures observe their ``Settings`` object and
re-anchor when the evaluation date moves.
"""
from abc import ABC, abstractmethod
from typing import Optional, Union

from ficcore.errors import DomainError, ExtrapolationError
from ficcore.math.cholesky import close_enough
from ficcore.patterns.observable import Observable, Observer
from ficcore.settings import Settings, get_settings
from ficcore.time.calendars.base import Calendar
from ficcore.time.calendars.simple import NullCalendar
from ficcore.time.date import Date, DateLike
from ficcore.time.daycounters.actual import Actual365Fixed
from ficcore.time.daycounters.base import DayCounter
from ficcore.time.period import TimeUnit

TimeOrDate = Union[float, DateLike]


class TermStructure(Observer, Observable, ABC):
    """Reference date, day counter and range checks shared by all curves.

    Args:
        day_counter: Convention turning dates into curve times
        reference_date: Fixed reference date; omit for a floating curve
        settlement_days: Business days from the evaluation date to the
            reference date of a floating curve
        calendar: Calendar used to roll the floating reference date
        settings: Evaluation-date context (process default if omitted)
    """

    def __init__(
        self,
        day_counter: Optional[DayCounter] = None,
        reference_date: Optional[DateLike] = None,
        settlement_days: Optional[int] = None,
        calendar: Optional[Calendar] = None,
        settings: Optional[Settings] = None,
    ):
        self._day_counter = day_counter if day_counter is not None else Actual365Fixed()
        self._calendar = calendar if calendar is not None else NullCalendar()
        self._settings = settings if settings is not None else get_settings()
        self._extrapolate = False
        if reference_date is not None:
            self._moving = False
            self._reference_date: Optional[Date] = Date.coerce(reference_date)
            self._settlement_days = settlement_days
            self._updated = True
        else:
            self._moving = True
            self._reference_date = None
            self._settlement_days = settlement_days if settlement_days is not None else 0
            self._updated = False
            self.register_with(self._settings)

    # ------------------------------------------------------------------
    # Dates and times
    # ------------------------------------------------------------------
    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def day_counter(self) -> DayCounter:
        return self._day_counter

    @property
    def calendar(self) -> Calendar:
        return self._calendar

    @property
    def settlement_days(self) -> Optional[int]:
        return self._settlement_days

    @property
    def is_moving(self) -> bool:
        return self._moving

    @property
    def reference_date(self) -> Date:
        """Date at which discount is 1 (or survival probability is 1)."""
        if not self._updated:
            self._reference_date = self._calendar.advance(
                self._settings.evaluation_date, self._settlement_days, TimeUnit.DAYS
            )
            self._updated = True
        return self._reference_date

    @property
    @abstractmethod
    def max_date(self) -> Date:
        """Latest date for which the curve can return values."""

    @property
    def max_time(self) -> float:
        return self.time_from_reference(self.max_date)

    def time_from_reference(self, d: DateLike) -> float:
        return self.day_counter.year_fraction(self.reference_date, d)

    def _to_year_fraction(self, x: TimeOrDate) -> float:
        """Convert a date or datetime to the curve's year fraction basis."""
        if isinstance(x, (int, float)):
            return float(x)
        return self.time_from_reference(Date.coerce(x))

    # ------------------------------------------------------------------
    # Extrapolation
    # ------------------------------------------------------------------
    def enable_extrapolation(self) -> None:
        self._extrapolate = True

    def disable_extrapolation(self) -> None:
        self._extrapolate = False

    @property
    def allows_extrapolation(self) -> bool:
        return self._extrapolate

    def _check_range(self, t: float, extrapolate: bool) -> None:
        if t < 0.0:
            raise DomainError(f"negative time ({t}) given")
        if extrapolate or self._extrapolate:
            return
        max_time = self.max_time
        if t > max_time and not close_enough(t, max_time):
            raise ExtrapolationError(f"time ({t}) is past max curve time ({max_time})")

    def _time(self, x: TimeOrDate, extrapolate: bool) -> float:
        if not isinstance(x, (int, float)):
            d = Date.coerce(x)
            if d < self.reference_date:
                raise DomainError(f"date ({d}) before reference date ({self.reference_date})")
        t = self._to_year_fraction(x)
        self._check_range(t, extrapolate)
        return t

    # ------------------------------------------------------------------
    # Observer
    # ------------------------------------------------------------------
    def update(self) -> None:
        if self._moving:
            self._updated = False
        self.notify_observers()

    def __repr__(self) -> str:
        anchor = "floating" if self._moving else str(self._reference_date)
        return f"{type(self).__name__}(reference_date={anchor}, day_counter={self.day_counter})"
