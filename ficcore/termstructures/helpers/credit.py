"""
Default-probability bootstrap helpers quoted on credit default swaps.
"""
from abc import abstractmethod
from typing import Optional, Union

from ficcore.errors import InvalidArgumentError
from ficcore.patterns.handle import Handle, RelinkableHandle
from ficcore.quotes import QuoteLike
from ficcore.settings import Settings
from ficcore.termstructures.credit.cds import (
    CreditDefaultSwap,
    MidPointCdsEngine,
    ProtectionSide,
)
from ficcore.termstructures.helpers.base import RelativeDateBootstrapHelper
from ficcore.time.calendars.base import Calendar
from ficcore.time.daycounters.base import DayCounter
from ficcore.time.period import Frequency, Period, TimeUnit
from ficcore.time.schedule import Schedule
from ficcore.time.types import BusinessDayConvention, DateGenerationRule


class CdsHelper(RelativeDateBootstrapHelper):
    """
    Base of the CDS helpers.

    Protection starts ``settlement_days`` calendar days after the
    evaluation date and runs for ``tenor``; the premium schedule starts on
    that date rolled with ``payment_convention`` and ends unadjusted.

    Args:
        quote: Market quote
        tenor: CDS length
        settlement_days: Days from the evaluation date to protection start
        calendar: Calendar of the premium schedule
        frequency: Premium frequency
        payment_convention: Convention for schedule and payment dates
        rule: Schedule generation rule
        day_counter: Premium accrual convention
        recovery_rate: Recovery rate used by the engine
        discount_curve: Handle to the discount curve
        settles_accrual: Whether accrued premium is paid on default
        pays_at_default_time: Pay on default rather than at period end
        settings: Evaluation-date context
    """

    # upfront helpers count flows paid on the settlement date
    _include_settlement_date_flows: Optional[bool] = None

    def __init__(
        self,
        quote: QuoteLike,
        tenor: Union[Period, str],
        settlement_days: int,
        calendar: Calendar,
        frequency: Frequency,
        payment_convention: Union[BusinessDayConvention, str],
        rule: Union[DateGenerationRule, str],
        day_counter: DayCounter,
        recovery_rate: float,
        discount_curve: Handle,
        settles_accrual: bool = True,
        pays_at_default_time: bool = True,
        settings: Optional[Settings] = None,
    ):
        super().__init__(quote, settings)
        self._tenor = Period(tenor) if isinstance(tenor, str) else tenor
        self._settlement_days = settlement_days
        self._calendar = calendar
        self._frequency = frequency
        self._payment_convention = BusinessDayConvention.coerce(payment_convention)
        self._rule = DateGenerationRule.coerce(rule)
        self._day_counter = day_counter
        self._recovery_rate = recovery_rate
        self._discount_curve = discount_curve
        self._settles_accrual = settles_accrual
        self._pays_at_default_time = pays_at_default_time
        self._probability = RelinkableHandle()
        self._schedule: Optional[Schedule] = None
        self._protection_start = None
        self._swap: Optional[CreditDefaultSwap] = None
        self._engine: Optional[MidPointCdsEngine] = None
        self.register_with(discount_curve)

    def _initialize_dates(self) -> None:
        self._protection_start = self._evaluation_date + self._settlement_days
        start = self._calendar.adjust(self._protection_start, self._payment_convention)
        end = self._protection_start + self._tenor
        self._schedule = Schedule(
            start, end, Period.from_frequency(self._frequency), self._calendar,
            self._payment_convention, BusinessDayConvention.UNADJUSTED, self._rule, False,
        )
        self._earliest_date = self._schedule.dates[0]
        self._latest_date = self._calendar.adjust(self._schedule.dates[-1],
                                                  self._payment_convention)

    @property
    def swap(self) -> CreditDefaultSwap:
        return self._swap

    def set_term_structure(self, term_structure) -> None:
        super().set_term_structure(term_structure)
        self._probability.link_to(term_structure, register_as_observer=False)
        self._reset_engine()

    def update(self) -> None:
        super().update()
        self._reset_engine()

    def _reset_engine(self) -> None:
        self._swap = self._make_swap()
        self._engine = MidPointCdsEngine(
            self._probability, self._recovery_rate, self._discount_curve,
            self._include_settlement_date_flows, self._settings,
        )
        self._swap.set_pricing_engine(self._engine)

    @abstractmethod
    def _make_swap(self) -> CreditDefaultSwap:
        ...

    def _results(self):
        if self._term_structure is None:
            raise InvalidArgumentError("term structure not set")
        if self._discount_curve.empty:
            raise InvalidArgumentError("no discount term structure set")
        return self._engine.calculate(self._swap)


class SpreadCdsHelper(CdsHelper):
    """CDS quoted as a running spread (no upfront).

    Takes the arguments of CdsHelper with the running spread as quote.
    """

    def __init__(self, running_spread: QuoteLike, *args, **kwargs):
        super().__init__(running_spread, *args, **kwargs)
        self._initialize_dates()
        self._reset_engine()

    def _make_swap(self) -> CreditDefaultSwap:
        return CreditDefaultSwap(
            ProtectionSide.BUYER, 100.0, 0.01, self._schedule, self._payment_convention,
            self._day_counter, self._settles_accrual, self._pays_at_default_time,
            self._protection_start, settings=self._settings,
        )

    def implied_quote(self) -> float:
        fair_spread = self._results().fair_spread
        if fair_spread is None:
            raise InvalidArgumentError("fair spread not available")
        return fair_spread


class UpfrontCdsHelper(CdsHelper):
    """
    CDS quoted as an upfront (fractional units) over a fixed running spread.

    Args:
        upfront: Upfront quote
        running_spread: Running spread paid on top of the upfront
        tenor, settlement_days, calendar, frequency, payment_convention,
        rule, day_counter, recovery_rate, discount_curve: As CdsHelper
        upfront_settlement_days: Business days from the evaluation date
            to the upfront payment
        settles_accrual, pays_at_default_time, settings: As CdsHelper
    """

    _include_settlement_date_flows = True

    def __init__(
        self,
        upfront: QuoteLike,
        running_spread: float,
        tenor: Union[Period, str],
        settlement_days: int,
        calendar: Calendar,
        frequency: Frequency,
        payment_convention: Union[BusinessDayConvention, str],
        rule: Union[DateGenerationRule, str],
        day_counter: DayCounter,
        recovery_rate: float,
        discount_curve: Handle,
        upfront_settlement_days: int = 0,
        settles_accrual: bool = True,
        pays_at_default_time: bool = True,
        settings: Optional[Settings] = None,
    ):
        super().__init__(
            upfront, tenor, settlement_days, calendar, frequency, payment_convention, rule,
            day_counter, recovery_rate, discount_curve, settles_accrual,
            pays_at_default_time, settings,
        )
        self._running_spread = running_spread
        self._upfront_settlement_days = upfront_settlement_days
        self._upfront_date = None
        self._initialize_dates()
        self._reset_engine()

    def _initialize_dates(self) -> None:
        super()._initialize_dates()
        self._upfront_date = self._calendar.advance(
            self._evaluation_date, self._upfront_settlement_days, TimeUnit.DAYS,
            self._payment_convention,
        )

    def _make_swap(self) -> CreditDefaultSwap:
        return CreditDefaultSwap(
            ProtectionSide.BUYER, 100.0, self._running_spread, self._schedule,
            self._payment_convention, self._day_counter, self._settles_accrual,
            self._pays_at_default_time, self._protection_start, upfront=0.01,
            upfront_date=self._upfront_date, settings=self._settings,
        )

    def implied_quote(self) -> float:
        fair_upfront = self._results().fair_upfront
        if fair_upfront is None:
            raise InvalidArgumentError("fair upfront not available")
        return fair_upfront
