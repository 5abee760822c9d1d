"""
Interest-rate bootstrap helpers: deposits, FRAs, swaps and OIS.
"""
from typing import List, Optional, Tuple, Union

from ficcore.errors import InvalidArgumentError
from ficcore.indexes import IborIndex, OvernightIndex
from ficcore.patterns.handle import RelinkableHandle
from ficcore.quotes import QuoteLike
from ficcore.settings import Settings
from ficcore.termstructures.helpers.base import RelativeDateBootstrapHelper
from ficcore.time.calendars.base import Calendar
from ficcore.time.calendars.target import TARGET
from ficcore.time.date import Date
from ficcore.time.daycounters.actual import Actual360
from ficcore.time.daycounters.base import DayCounter
from ficcore.time.period import Frequency, Period, TimeUnit
from ficcore.time.schedule import Schedule
from ficcore.time.types import BusinessDayConvention, DateGenerationRule


class RateHelper(RelativeDateBootstrapHelper):
    """Rate helper forecasting on the curve being bootstrapped.

    The curve is reached through a relinkable handle that does not
    observe it; the curve observes the helper, not the other way round.
    """

    def __init__(self, quote: QuoteLike, settings: Optional[Settings] = None):
        super().__init__(quote, settings)
        self._term_structure_handle = RelinkableHandle()

    def set_term_structure(self, term_structure) -> None:
        self._term_structure_handle.link_to(term_structure, register_as_observer=False)
        super().set_term_structure(term_structure)

    def _forwarding_index(self, index: IborIndex) -> IborIndex:
        """The index itself if it has its own curve, else a clone on the bootstrapped one."""
        if index.forwarding_curve.empty:
            return index.clone(self._term_structure_handle)
        self.register_with(index)
        return index


# ----------------------------------------------------------------------
# Deposits and FRAs
# ----------------------------------------------------------------------
class DepositRateHelper(RateHelper):
    """
    Deposit quoted as a simply compounded rate.

    Args:
        rate: Deposit rate
        tenor: Deposit tenor
        fixing_days: Business days from trade to start
        calendar: Calendar for start and maturity dates
        convention: Business-day convention of the maturity date
        end_of_month: Month-end rule of the maturity date
        day_counter: Accrual convention
        settings: Evaluation-date context
    """

    def __init__(
        self,
        rate: QuoteLike,
        tenor: Union[Period, str],
        fixing_days: int = 2,
        calendar: Optional[Calendar] = None,
        convention: Union[BusinessDayConvention, str] = BusinessDayConvention.MODIFIED_FOLLOWING,
        end_of_month: bool = True,
        day_counter: Optional[DayCounter] = None,
        settings: Optional[Settings] = None,
    ):
        super().__init__(rate, settings)
        self._index = IborIndex(
            "no-fix", tenor, fixing_days,
            calendar if calendar is not None else TARGET(), convention, end_of_month,
            day_counter if day_counter is not None else Actual360(),
            self._term_structure_handle, self._settings,
        )
        self._fixing_date: Optional[Date] = None
        self._initialize_dates()

    @classmethod
    def from_index(cls, rate: QuoteLike, index: IborIndex) -> "DepositRateHelper":
        """Deposit with the conventions of ``index``."""
        return cls(
            rate, index.tenor, index.fixing_days, index.fixing_calendar, index.convention,
            index.end_of_month, index.day_counter, index.settings,
        )

    def _initialize_dates(self) -> None:
        reference = self._index.fixing_calendar.adjust(self._evaluation_date)
        self._earliest_date = self._index.value_date(reference)
        self._fixing_date = self._index.fixing_date(self._earliest_date)
        self._maturity_date = self._index.maturity_date(self._earliest_date)
        self._latest_date = self._pillar_date = self._maturity_date

    @property
    def fixing_date(self) -> Date:
        return self._fixing_date

    def implied_quote(self) -> float:
        if self._term_structure is None:
            raise InvalidArgumentError("term structure not set")
        return self._index.fixing(self._fixing_date, True)


class FraRateHelper(RateHelper):
    """
    Forward rate agreement covering months ``months_to_start`` to ``months_to_end``.

    Args:
        rate: FRA rate
        months_to_start: Months from spot to the FRA start
        months_to_end: Months from spot to the FRA end
        fixing_days: Business days from trade to spot
        calendar: Calendar for the FRA dates
        convention: Business-day convention
        end_of_month: Month-end rule
        day_counter: Accrual convention
        settings: Evaluation-date context
    """

    def __init__(
        self,
        rate: QuoteLike,
        months_to_start: int,
        months_to_end: int,
        fixing_days: int = 2,
        calendar: Optional[Calendar] = None,
        convention: Union[BusinessDayConvention, str] = BusinessDayConvention.MODIFIED_FOLLOWING,
        end_of_month: bool = True,
        day_counter: Optional[DayCounter] = None,
        settings: Optional[Settings] = None,
    ):
        if months_to_end <= months_to_start:
            raise InvalidArgumentError(
                f"months to end ({months_to_end}) must be greater than "
                f"months to start ({months_to_start})"
            )
        super().__init__(rate, settings)
        self._months_to_start = months_to_start
        self._index = IborIndex(
            "no-fix", Period(months_to_end - months_to_start, TimeUnit.MONTHS), fixing_days,
            calendar if calendar is not None else TARGET(), convention, end_of_month,
            day_counter if day_counter is not None else Actual360(),
            self._term_structure_handle, self._settings,
        )
        self._fixing_date: Optional[Date] = None
        self._initialize_dates()

    def _initialize_dates(self) -> None:
        index = self._index
        calendar = index.fixing_calendar
        reference = calendar.adjust(self._evaluation_date)
        spot = calendar.advance(reference, index.fixing_days, TimeUnit.DAYS)
        self._earliest_date = calendar.advance(
            spot, Period(self._months_to_start, TimeUnit.MONTHS),
            convention=index.convention, end_of_month=index.end_of_month,
        )
        self._maturity_date = index.maturity_date(self._earliest_date)
        self._fixing_date = index.fixing_date(self._earliest_date)
        self._latest_date = self._pillar_date = self._maturity_date

    @property
    def fixing_date(self) -> Date:
        return self._fixing_date

    def implied_quote(self) -> float:
        if self._term_structure is None:
            raise InvalidArgumentError("term structure not set")
        return self._index.fixing(self._fixing_date, True)


# ----------------------------------------------------------------------
# Swaps
# ----------------------------------------------------------------------
class SwapRateHelper(RateHelper):
    """
    Par rate of a fixed-vs-ibor swap starting at spot.

    Both legs pay on their accrual end dates rolled with the index
    convention. Floating coupons use the par approximation: each one is
    forecast over its own accrual period.

    Args:
        rate: Fixed rate quote
        tenor: Swap length
        calendar: Calendar of both schedules
        fixed_frequency: Fixed-leg payment frequency
        fixed_convention: Fixed-leg schedule convention
        fixed_day_counter: Fixed-leg accrual convention
        ibor_index: Floating-leg index; if it has no forwarding curve it
            forecasts on the curve being bootstrapped
        spread: Spread over the floating leg
        forward_start: Delay of the start date after spot
        settings: Evaluation-date context
    """

    def __init__(
        self,
        rate: QuoteLike,
        tenor: Union[Period, str],
        calendar: Calendar,
        fixed_frequency: Frequency,
        fixed_convention: Union[BusinessDayConvention, str],
        fixed_day_counter: DayCounter,
        ibor_index: IborIndex,
        spread: float = 0.0,
        forward_start: Optional[Period] = None,
        settings: Optional[Settings] = None,
    ):
        super().__init__(rate, settings)
        self._tenor = Period(tenor) if isinstance(tenor, str) else tenor
        self._calendar = calendar
        self._fixed_frequency = fixed_frequency
        self._fixed_convention = BusinessDayConvention.coerce(fixed_convention)
        self._fixed_day_counter = fixed_day_counter
        self._spread = spread
        self._forward_start = forward_start if forward_start is not None else Period(0, TimeUnit.DAYS)
        self._index = self._forwarding_index(ibor_index)
        self._fixed_flows: List[Tuple[Date, float]] = []
        self._floating_periods: List[Tuple[Date, Date, Date, float]] = []
        self._initialize_dates()

    @property
    def index(self) -> IborIndex:
        return self._index

    def _initialize_dates(self) -> None:
        index, calendar = self._index, self._calendar
        reference = calendar.adjust(self._evaluation_date)
        spot = calendar.advance(reference, index.fixing_days, TimeUnit.DAYS)
        start = spot + self._forward_start
        if self._forward_start.length > 0:
            start = calendar.adjust(start, BusinessDayConvention.FOLLOWING)
        end = start + self._tenor

        payment_convention = index.convention
        fixed_schedule = Schedule(
            start, end, Period.from_frequency(self._fixed_frequency), calendar,
            self._fixed_convention, self._fixed_convention, DateGenerationRule.BACKWARD, False,
        )
        float_schedule = Schedule(
            start, end, index.tenor, calendar, index.convention, index.convention,
            DateGenerationRule.BACKWARD, False,
        )

        self._fixed_flows = [
            (calendar.adjust(d2, payment_convention),
             self._fixed_day_counter.year_fraction(d1, d2))
            for d1, d2 in zip(fixed_schedule.dates, fixed_schedule.dates[1:])
        ]

        fixing_calendar = index.fixing_calendar
        periods = []
        for d1, d2 in zip(float_schedule.dates, float_schedule.dates[1:]):
            fixing = index.fixing_date(d1)
            value = fixing_calendar.advance(fixing, index.fixing_days, TimeUnit.DAYS)
            next_fixing = fixing_calendar.advance(d2, -index.fixing_days, TimeUnit.DAYS)
            forecast_end = fixing_calendar.advance(next_fixing, index.fixing_days, TimeUnit.DAYS)
            forecast_end = max(forecast_end, value + 1)
            payment = calendar.adjust(d2, payment_convention)
            periods.append((payment, value, forecast_end, index.day_counter.year_fraction(d1, d2)))
        self._floating_periods = periods

        self._earliest_date = start
        self._maturity_date = max(fixed_schedule.dates[-1], float_schedule.dates[-1])
        relevant = [p for p, _ in self._fixed_flows]
        relevant += [d for p, _, e, _ in periods for d in (p, e)]
        self._latest_date = self._pillar_date = max([self._maturity_date] + relevant)

    def fixed_leg_annuity(self) -> float:
        curve = self._term_structure
        return sum(tau * curve.discount(pay) for pay, tau in self._fixed_flows)

    def floating_leg_npv(self) -> float:
        curve = self._term_structure
        forwarding = self._index.forwarding_curve.current_link
        npv = 0.0
        for payment, value, end, tau in self._floating_periods:
            spanning = self._index.day_counter.year_fraction(value, end)
            rate = (forwarding.discount(value) / forwarding.discount(end) - 1.0) / spanning
            npv += (rate + self._spread) * tau * curve.discount(payment)
        return npv

    def implied_quote(self) -> float:
        if self._term_structure is None:
            raise InvalidArgumentError("term structure not set")
        return self.floating_leg_npv() / self.fixed_leg_annuity()


class OisRateHelper(RateHelper):
    """
    Par rate of an overnight-indexed swap starting at spot.

    The floating leg compounds the overnight index daily, which over each
    period amounts to the ratio of forwarding discounts at its ends.

    Args:
        settlement_days: Business days from the evaluation date to spot
        tenor: Swap length
        rate: Fixed rate quote
        overnight_index: Floating index; if it has no forwarding curve it
            forecasts on the curve being bootstrapped
        payment_frequency: Fixed and floating payment frequency
        settings: Evaluation-date context
    """

    def __init__(
        self,
        settlement_days: int,
        tenor: Union[Period, str],
        rate: QuoteLike,
        overnight_index: OvernightIndex,
        payment_frequency: Frequency = Frequency.ANNUAL,
        settings: Optional[Settings] = None,
    ):
        super().__init__(rate, settings)
        self._settlement_days = settlement_days
        self._tenor = Period(tenor) if isinstance(tenor, str) else tenor
        self._payment_frequency = payment_frequency
        self._index = self._forwarding_index(overnight_index)
        self._periods: List[Tuple[Date, Date, Date, float]] = []
        self._initialize_dates()

    def _initialize_dates(self) -> None:
        index = self._index
        calendar = index.fixing_calendar
        reference = calendar.adjust(self._evaluation_date)
        start = calendar.advance(reference, self._settlement_days, TimeUnit.DAYS)
        end = start + self._tenor
        tenor = Period.from_frequency(self._payment_frequency)
        if self._tenor <= tenor:
            tenor = Period(0, TimeUnit.YEARS)
        schedule = Schedule(
            start, end, tenor, calendar, BusinessDayConvention.MODIFIED_FOLLOWING,
            BusinessDayConvention.MODIFIED_FOLLOWING, DateGenerationRule.BACKWARD, False,
        )
        self._periods = [
            (calendar.adjust(d2, BusinessDayConvention.FOLLOWING), d1, d2,
             index.day_counter.year_fraction(d1, d2))
            for d1, d2 in zip(schedule.dates, schedule.dates[1:])
        ]
        self._earliest_date = schedule.dates[0]
        self._maturity_date = schedule.dates[-1]
        self._latest_date = self._pillar_date = max(
            [self._maturity_date] + [p for p, _, _, _ in self._periods]
        )

    def implied_quote(self) -> float:
        if self._term_structure is None:
            raise InvalidArgumentError("term structure not set")
        curve = self._term_structure
        forwarding = self._index.forwarding_curve.current_link
        annuity = 0.0
        floating = 0.0
        for payment, d1, d2, tau in self._periods:
            discount = curve.discount(payment)
            annuity += tau * discount
            floating += (forwarding.discount(d1) / forwarding.discount(d2) - 1.0) * discount
        return floating / annuity
