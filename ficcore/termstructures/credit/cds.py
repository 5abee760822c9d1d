"""
Credit default swap and its mid-point pricing engine.

The protection buyer pays a running spread (plus an optional upfront)
until maturity or default; the seller pays notional times one minus
recovery on default. The mid-point engine assumes defaults happen half
way through each coupon period.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

from ficcore.errors import InvalidArgumentError
from ficcore.math.solvers import brent_solve
from ficcore.patterns.handle import Handle
from ficcore.patterns.lazy import LazyObject
from ficcore.patterns.observable import Observable, Observer
from ficcore.quotes import SimpleQuote
from ficcore.settings import Settings, get_settings
from ficcore.termstructures.credit.flat_hazard import FlatHazardRate
from ficcore.time.calendars.simple import WeekendsOnly
from ficcore.time.date import Date, DateLike
from ficcore.time.daycounters.base import DayCounter
from ficcore.time.schedule import Schedule
from ficcore.time.types import BusinessDayConvention

logger = logging.getLogger(__name__)

BASIS_POINT = 1.0e-4


class ProtectionSide(Enum):
    BUYER = "BUYER"
    SELLER = "SELLER"


def has_occurred(event_date: Date, ref_date: Date, include_ref_date: bool) -> bool:
    """Whether an event on ``event_date`` is in the past as seen from ``ref_date``."""
    if include_ref_date:
        return event_date < ref_date
    return event_date <= ref_date


@dataclass(frozen=True)
class PremiumCoupon:
    """Fixed coupon of the premium leg."""

    payment_date: Date
    accrual_start: Date
    accrual_end: Date
    ref_start: Date
    ref_end: Date
    nominal: float
    rate: float
    day_counter: DayCounter

    @property
    def accrual_period(self) -> float:
        return self.day_counter.year_fraction(
            self.accrual_start, self.accrual_end, self.ref_start, self.ref_end
        )

    @property
    def amount(self) -> float:
        return self.nominal * self.rate * self.accrual_period

    def accrued_amount(self, d: Date) -> float:
        """Coupon accrued up to ``d``; zero outside the accrual period."""
        if d <= self.accrual_start or d > self.payment_date:
            return 0.0
        end = min(d, self.accrual_end)
        return self.nominal * self.rate * self.day_counter.year_fraction(
            self.accrual_start, end, self.ref_start, self.ref_end
        )


@dataclass
class CdsResults:
    """Values computed by a CDS engine; None where not available."""

    value: float = 0.0
    coupon_leg_npv: float = 0.0
    default_leg_npv: float = 0.0
    upfront_npv: float = 0.0
    fair_spread: Optional[float] = None
    fair_upfront: Optional[float] = None
    coupon_leg_bps: Optional[float] = None
    upfront_bps: Optional[float] = None


def _premium_leg(
    schedule: Schedule,
    notional: float,
    spread: float,
    convention: BusinessDayConvention,
    day_counter: DayCounter,
) -> List[PremiumCoupon]:
    dates = schedule.dates
    calendar = schedule.calendar
    tenor = schedule.tenor
    coupons = []
    n = len(dates) - 1
    for i, (start, end) in enumerate(zip(dates, dates[1:])):
        ref_start, ref_end = start, end
        regular = schedule.rule is None or schedule.is_regular(i)
        if not regular and tenor is not None and tenor.length > 0:
            if i == 0:
                ref_start = calendar.advance(end, -tenor, convention=schedule.convention,
                                             end_of_month=schedule.end_of_month)
            elif i == n - 1:
                ref_end = calendar.advance(start, tenor, convention=schedule.convention,
                                           end_of_month=schedule.end_of_month)
        coupons.append(PremiumCoupon(
            calendar.adjust(end, convention), start, end, ref_start, ref_end,
            notional, spread, day_counter,
        ))
    return coupons


class CreditDefaultSwap(LazyObject):
    """
    Credit default swap with a running spread and an optional upfront.

    Args:
        side: Whether protection is bought or sold
        notional: Notional amount
        spread: Running spread in fractional units
        schedule: Premium schedule
        convention: Business-day convention of payment dates
        day_counter: Accrual convention of the premium leg
        settles_accrual: Whether accrued premium is paid on default
        pays_at_default_time: Pay default-triggered amounts at default
            time rather than at the end of the coupon period
        protection_start: First date on which a default triggers the
            contract; the first schedule date by default
        upfront: Upfront in fractional units of notional
        upfront_date: Settlement date of the upfront; the first schedule
            date by default
        settings: Evaluation-date context

    Example:
        >>> cds = CreditDefaultSwap(ProtectionSide.SELLER, 10000.0, 0.012, schedule,
        ...                         "MF", Actual360())
        >>> cds.set_pricing_engine(MidPointCdsEngine(probability, 0.4, discount))
        >>> cds.npv
    """

    def __init__(
        self,
        side: Union[ProtectionSide, str],
        notional: float,
        spread: float,
        schedule: Schedule,
        convention: Union[BusinessDayConvention, str],
        day_counter: DayCounter,
        settles_accrual: bool = True,
        pays_at_default_time: bool = True,
        protection_start: Optional[DateLike] = None,
        upfront: Optional[float] = None,
        upfront_date: Optional[DateLike] = None,
        settings: Optional[Settings] = None,
    ):
        self.side = ProtectionSide(side.upper()) if isinstance(side, str) else side
        self.notional = notional
        self.running_spread = spread
        self.upfront = upfront
        self.schedule = schedule
        self.convention = BusinessDayConvention.coerce(convention)
        self.day_counter = day_counter
        self.settles_accrual = settles_accrual
        self.pays_at_default_time = pays_at_default_time
        self.settings = settings if settings is not None else get_settings()

        self.protection_start = (Date.coerce(protection_start) if protection_start is not None
                                 else schedule[0])
        if self.protection_start > schedule[0]:
            raise InvalidArgumentError("protection can not start after accrual")
        self.coupons = _premium_leg(schedule, notional, spread, self.convention, day_counter)

        self.upfront_payment_date = (Date.coerce(upfront_date) if upfront_date is not None
                                     else schedule[0])
        self.upfront_amount = notional * upfront if upfront is not None else 0.0
        if upfront is not None and self.upfront_payment_date < self.protection_start:
            raise InvalidArgumentError("upfront can not be due before contract start")

        self._engine = None
        self._results = CdsResults()
        self.register_with(self.settings)

    @property
    def protection_end(self) -> Date:
        return self.coupons[-1].accrual_end

    def claim_amount(self, recovery_rate: float) -> float:
        """Face-value claim paid by the protection seller on default."""
        return self.notional * (1.0 - recovery_rate)

    # ------------------------------------------------------------------
    # Pricing
    # ------------------------------------------------------------------
    def set_pricing_engine(self, engine: "MidPointCdsEngine") -> None:
        if self._engine is not None:
            self.unregister_with(self._engine)
        self._engine = engine
        self.register_with(engine)
        self.update()

    @property
    def is_expired(self) -> bool:
        today = self.settings.evaluation_date
        include = self.settings.include_reference_date_events
        return all(has_occurred(c.payment_date, today, include) for c in self.coupons)

    def perform_calculations(self) -> None:
        if self.is_expired:
            self._results = CdsResults(
                fair_spread=0.0, fair_upfront=0.0, coupon_leg_bps=0.0, upfront_bps=0.0
            )
            return
        if self._engine is None:
            raise InvalidArgumentError("null pricing engine")
        self._results = self._engine.calculate(self)

    def _result(self, name: str, label: str) -> float:
        self.calculate()
        value = getattr(self._results, name)
        if value is None:
            raise InvalidArgumentError(f"{label} not available")
        return value

    @property
    def npv(self) -> float:
        return self._result("value", "NPV")

    @property
    def coupon_leg_npv(self) -> float:
        return self._result("coupon_leg_npv", "coupon-leg NPV")

    @property
    def default_leg_npv(self) -> float:
        return self._result("default_leg_npv", "default-leg NPV")

    @property
    def upfront_npv(self) -> float:
        return self._result("upfront_npv", "upfront NPV")

    @property
    def fair_spread(self) -> float:
        """Running spread giving a zero NPV, ignoring any upfront."""
        return self._result("fair_spread", "fair spread")

    @property
    def fair_upfront(self) -> float:
        """Upfront giving a zero NPV with the given running spread."""
        return self._result("fair_upfront", "fair upfront")

    @property
    def coupon_leg_bps(self) -> float:
        return self._result("coupon_leg_bps", "coupon-leg BPS")

    @property
    def upfront_bps(self) -> float:
        return self._result("upfront_bps", "upfront BPS")

    # ------------------------------------------------------------------
    # Implied quantities
    # ------------------------------------------------------------------
    def implied_hazard_rate(
        self,
        target_npv: float,
        discount_curve: Handle,
        day_counter: DayCounter,
        recovery_rate: float = 0.4,
        accuracy: float = 1.0e-6,
    ) -> float:
        """
        Flat hazard rate at which the contract is worth ``target_npv``.

        Args:
            target_npv: NPV to match
            discount_curve: Handle to the discount curve
            day_counter: Day counter of the flat hazard curve
            recovery_rate: Recovery assumed by the engine
            accuracy: Solver accuracy on the hazard rate

        Returns:
            Hazard rate
        """
        flat_rate = SimpleQuote(0.0)
        probability = Handle(FlatHazardRate(
            flat_rate, day_counter, settlement_days=0, calendar=WeekendsOnly(),
            settings=self.settings,
        ))
        engine = MidPointCdsEngine(probability, recovery_rate, discount_curve,
                                   settings=self.settings)

        def objective(rate):
            flat_rate.value = rate
            return engine.calculate(self).value - target_npv

        guess = self.running_spread / (1.0 - recovery_rate) * 365.0 / 360.0
        step = 0.1 * guess if guess > 0.0 else None
        rate = brent_solve(objective, accuracy, guess, step=step)
        logger.debug("Implied hazard rate %.10g for target NPV %s", rate, target_npv)
        return rate

    def conventional_spread(
        self,
        conventional_recovery: float,
        discount_curve: Handle,
        day_counter: DayCounter,
    ) -> float:
        """Running spread quoted on a flat hazard curve matching a zero NPV."""
        hazard_rate = self.implied_hazard_rate(
            0.0, discount_curve, day_counter, conventional_recovery
        )
        probability = Handle(FlatHazardRate(
            hazard_rate, day_counter, settlement_days=0, calendar=WeekendsOnly(),
            settings=self.settings,
        ))
        engine = MidPointCdsEngine(probability, conventional_recovery, discount_curve,
                                   include_settlement_date_flows=True, settings=self.settings)
        result = engine.calculate(self).fair_spread
        if result is None:
            raise InvalidArgumentError("fair spread not available")
        return result


class MidPointCdsEngine(Observer, Observable):
    """
    Mid-point CDS engine.

    Args:
        probability: Handle to the default-probability curve
        recovery_rate: Recovery rate applied to the claim
        discount_curve: Handle to the discount curve; its reference date
            is the settlement date of the valuation
        include_settlement_date_flows: Whether flows on the settlement
            date count; the settings flag when None
        settings: Evaluation-date context
    """

    def __init__(
        self,
        probability: Handle,
        recovery_rate: float,
        discount_curve: Handle,
        include_settlement_date_flows: Optional[bool] = None,
        settings: Optional[Settings] = None,
    ):
        self.probability = probability
        self.recovery_rate = recovery_rate
        self.discount_curve = discount_curve
        self.include_settlement_date_flows = include_settlement_date_flows
        self.settings = settings if settings is not None else get_settings()
        self.register_with(probability)
        self.register_with(discount_curve)

    def update(self) -> None:
        self.notify_observers()

    def calculate(self, cds: CreditDefaultSwap) -> CdsResults:
        if self.discount_curve.empty:
            raise InvalidArgumentError("no discount term structure set")
        if self.probability.empty:
            raise InvalidArgumentError("no probability term structure set")
        discount = self.discount_curve.current_link
        probability = self.probability.current_link
        today = self.settings.evaluation_date
        settlement = discount.reference_date
        include = (self.include_settlement_date_flows
                   if self.include_settlement_date_flows is not None
                   else self.settings.include_reference_date_events)

        upfront_pv01 = 0.0
        if not has_occurred(cds.upfront_payment_date, settlement, include):
            effective_upfront_date = max(cds.protection_start, probability.reference_date)
            upfront_pv01 = (probability.survival_probability(effective_upfront_date)
                            * discount.discount(cds.upfront_payment_date))
        upfront_npv = upfront_pv01 * cds.upfront_amount

        coupon_leg_npv = 0.0
        default_leg_npv = 0.0
        claim = cds.claim_amount(self.recovery_rate)
        for i, coupon in enumerate(cds.coupons):
            if has_occurred(coupon.payment_date, settlement, include):
                continue
            payment = coupon.payment_date
            start = cds.protection_start if i == 0 else coupon.accrual_start
            end = coupon.accrual_end
            effective_start = today if start <= today <= end else start
            default_date = effective_start + (end - effective_start) // 2

            s = probability.survival_probability(payment)
            p = probability.default_probability(effective_start, end)

            coupon_leg_npv += s * coupon.amount * discount.discount(payment)
            if cds.settles_accrual:
                if cds.pays_at_default_time:
                    coupon_leg_npv += (p * coupon.accrued_amount(default_date)
                                       * discount.discount(default_date))
                else:
                    coupon_leg_npv += p * coupon.amount * discount.discount(payment)

            if cds.pays_at_default_time:
                default_leg_npv += p * claim * discount.discount(default_date)
            else:
                default_leg_npv += p * claim * discount.discount(payment)

        upfront_sign = 1.0
        if cds.side == ProtectionSide.SELLER:
            default_leg_npv = -default_leg_npv
        else:
            coupon_leg_npv = -coupon_leg_npv
            upfront_npv = -upfront_npv
            upfront_sign = -1.0

        results = CdsResults(
            value=default_leg_npv + coupon_leg_npv + upfront_npv,
            coupon_leg_npv=coupon_leg_npv,
            default_leg_npv=default_leg_npv,
            upfront_npv=upfront_npv,
        )
        if coupon_leg_npv != 0.0:
            results.fair_spread = -default_leg_npv * cds.running_spread / coupon_leg_npv
        upfront_sensitivity = upfront_pv01 * cds.notional
        if upfront_sensitivity != 0.0:
            results.fair_upfront = (-upfront_sign * (default_leg_npv + coupon_leg_npv)
                                    / upfront_sensitivity)
        if cds.running_spread != 0.0:
            results.coupon_leg_bps = coupon_leg_npv * BASIS_POINT / cds.running_spread
        if cds.upfront:
            results.upfront_bps = upfront_npv * BASIS_POINT / cds.upfront
        return results
