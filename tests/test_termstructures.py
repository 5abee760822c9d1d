import math

import pytest

from ficcore.errors import DomainError, ExtrapolationError, InvalidArgumentError
from ficcore.interest_rate import Compounding
from ficcore.interpolation import Linear
from ficcore.patterns import Handle, Observer
from ficcore.quotes import SimpleQuote
from ficcore.termstructures import (
    FlatForward,
    FlatHazardRate,
    ForwardSpreadedTermStructure,
    ImpliedTermStructure,
    InterpolatedDefaultDensityCurve,
    InterpolatedDiscountCurve,
    InterpolatedForwardCurve,
    InterpolatedHazardRateCurve,
    InterpolatedSurvivalProbabilityCurve,
    InterpolatedZeroCurve,
    ZeroSpreadedTermStructure,
)
from ficcore.time import Date, Frequency, Period
from ficcore.time.calendars import TARGET
from ficcore.time.daycounters import Actual360, Actual365Fixed

DC = Actual365Fixed()
REF = Date(15, 1, 2024)


class Flag(Observer):
    def __init__(self):
        self.count = 0

    def update(self):
        self.count += 1


def _nodes():
    return [REF, REF + Period("1Y"), REF + Period("2Y")]


# ----------------------------------------------------------------------
# Flat forward
# ----------------------------------------------------------------------
def test_flat_forward_rates(settings):
    curve = FlatForward(0.05, DC, REF, settings=settings)
    assert curve.reference_date == REF
    assert curve.discount(REF) == 1.0
    assert curve.discount(1.0) == pytest.approx(math.exp(-0.05), rel=1e-14)
    assert curve.zero_rate(3.0) == pytest.approx(0.05, rel=1e-12)
    assert curve.zero_rate(REF) == pytest.approx(0.05, rel=1e-10)
    assert curve.forward_rate(1.0, 2.0) == pytest.approx(0.05, rel=1e-12)
    assert curve.forward_rate(1.5, 1.5) == pytest.approx(0.05, rel=1e-8)
    assert curve.instantaneous_forward(4.0) == pytest.approx(0.05, rel=1e-8)
    assert curve.rate.rate == 0.05


def test_flat_forward_compounded(settings):
    curve = FlatForward(0.05, DC, REF, compounding=Compounding.COMPOUNDED,
                        frequency=Frequency.ANNUAL, settings=settings)
    assert curve.discount(2.0) == pytest.approx(1.0 / 1.05 ** 2, rel=1e-14)
    assert curve.zero_rate(2.0, compounding=Compounding.COMPOUNDED,
                           frequency=Frequency.ANNUAL) == pytest.approx(0.05, rel=1e-12)


def test_zero_rate_with_other_day_counter(settings):
    curve = FlatForward(0.05, DC, REF, settings=settings)
    d = REF + Period("1Y")
    assert curve.zero_rate(d, Actual360()) == pytest.approx(0.05 * 360.0 / 365.0, rel=1e-12)


def test_flat_forward_follows_quote(settings):
    quote = SimpleQuote(0.05)
    curve = FlatForward(quote, DC, REF, settings=settings)
    flag = Flag()
    flag.register_with(curve)
    before = curve.discount(1.0)

    quote.set_value(0.06)
    assert flag.count == 1
    assert curve.discount(1.0) == pytest.approx(math.exp(-0.06), rel=1e-14)
    assert curve.discount(1.0) < before


def test_floating_reference_date(settings):
    settings.evaluation_date = Date(15, 1, 2024)
    curve = FlatForward(0.05, DC, settlement_days=2, calendar=TARGET(), settings=settings)
    flag = Flag()
    flag.register_with(curve)
    assert curve.is_moving
    assert curve.reference_date == Date(17, 1, 2024)

    settings.evaluation_date = Date(19, 1, 2024)
    assert flag.count == 1
    assert curve.reference_date == Date(23, 1, 2024)


def test_fixed_reference_date_ignores_evaluation_date(settings):
    settings.evaluation_date = Date(15, 1, 2024)
    curve = FlatForward(0.05, DC, Date(1, 2, 2024), settings=settings)
    settings.evaluation_date = Date(19, 1, 2024)
    assert not curve.is_moving
    assert curve.reference_date == Date(1, 2, 2024)


def test_range_checks(settings):
    curve = FlatForward(0.05, DC, REF, settings=settings)
    with pytest.raises(DomainError):
        curve.discount(-0.1)
    with pytest.raises(DomainError):
        curve.discount(REF - 1)
    with pytest.raises(InvalidArgumentError):
        curve.forward_rate(2.0, 1.0)


# ----------------------------------------------------------------------
# Implied and spreaded curves
# ----------------------------------------------------------------------
def test_implied_term_structure(settings):
    flat = FlatForward(0.05, DC, REF, settings=settings)
    new_ref = REF + Period("1Y")
    implied = ImpliedTermStructure(Handle(flat), new_ref)
    assert implied.reference_date == new_ref
    assert implied.discount(new_ref) == pytest.approx(1.0, rel=1e-14)
    assert implied.discount(1.0) == pytest.approx(math.exp(-0.05), rel=1e-12)
    assert implied.zero_rate(2.0) == pytest.approx(0.05, rel=1e-10)

    d = new_ref + Period("3Y")
    assert implied.discount(d) == pytest.approx(flat.discount(d) / flat.discount(new_ref), rel=1e-12)


def test_zero_spreaded(settings):
    flat = FlatForward(0.05, DC, REF, settings=settings)
    spread = SimpleQuote(0.01)
    curve = ZeroSpreadedTermStructure(Handle(flat), spread)
    assert curve.reference_date == REF
    assert curve.discount(2.0) == pytest.approx(math.exp(-0.12), rel=1e-12)
    assert curve.zero_rate(2.0) == pytest.approx(0.06, rel=1e-10)

    flag = Flag()
    flag.register_with(curve)
    spread.set_value(0.02)
    assert flag.count == 1
    assert curve.zero_rate(2.0) == pytest.approx(0.07, rel=1e-10)


def test_forward_spreaded(settings):
    flat = FlatForward(0.05, DC, REF, settings=settings)
    curve = ForwardSpreadedTermStructure(Handle(flat), 0.01)
    assert curve.instantaneous_forward(1.0) == pytest.approx(0.06, rel=1e-8)
    assert curve.discount(3.0) == pytest.approx(math.exp(-0.18), rel=1e-10)


def test_spreaded_follows_underlying(settings):
    quote = SimpleQuote(0.05)
    flat = FlatForward(quote, DC, REF, settings=settings)
    curve = ZeroSpreadedTermStructure(Handle(flat), 0.01)
    flag = Flag()
    flag.register_with(curve)
    quote.set_value(0.04)
    assert flag.count >= 1
    assert curve.zero_rate(1.0) == pytest.approx(0.05, rel=1e-10)


# ----------------------------------------------------------------------
# Interpolated yield curves
# ----------------------------------------------------------------------
def test_interpolated_zero_curve(settings):
    dates = _nodes()
    curve = InterpolatedZeroCurve(dates, [0.03, 0.03, 0.04], DC, settings=settings)
    assert curve.reference_date == REF
    assert curve.max_date == dates[-1]
    assert curve.dates == dates
    assert len(curve.nodes) == 3

    t1, t2 = curve.times[1], curve.times[2]
    assert curve.discount(dates[1]) == pytest.approx(math.exp(-0.03 * t1), rel=1e-14)
    assert curve.zero_rate(dates[2]) == pytest.approx(0.04, rel=1e-12)
    t = 0.5 * (t1 + t2)
    assert curve.zero_rate(t) == pytest.approx(0.035, rel=1e-12)


def test_interpolated_zero_curve_extrapolation(settings):
    curve = InterpolatedZeroCurve(_nodes(), [0.03, 0.03, 0.04], DC, settings=settings)
    with pytest.raises(ExtrapolationError):
        curve.discount(5.0)
    assert curve.discount(5.0, extrapolate=True) > 0.0

    curve.enable_extrapolation()
    assert curve.allows_extrapolation
    assert curve.discount(5.0) == curve.discount(5.0, extrapolate=True)


def test_interpolated_forward_curve(settings):
    dates = _nodes()
    curve = InterpolatedForwardCurve(dates, [0.02, 0.03, 0.04], DC, settings=settings)
    t1, t2 = curve.times[1], curve.times[2]
    assert curve.instantaneous_forward(0.5 * t1) == pytest.approx(0.03, rel=1e-12)
    assert curve.instantaneous_forward(0.5 * (t1 + t2)) == pytest.approx(0.04, rel=1e-12)
    expected = math.exp(-(0.03 * t1 + 0.04 * (t2 - t1)))
    assert curve.discount(t2) == pytest.approx(expected, rel=1e-12)


def test_interpolated_discount_curve(settings):
    dates = _nodes()
    curve = InterpolatedDiscountCurve(dates, [1.0, 0.97, 0.93], DC, settings=settings)
    t1, t2 = curve.times[1], curve.times[2]
    assert curve.discount(dates[1]) == pytest.approx(0.97, rel=1e-14)
    mid = 0.5 * (t1 + t2)
    assert curve.discount(mid) == pytest.approx(math.sqrt(0.97 * 0.93), rel=1e-12)
    # log-linear discounts give a flat forward between nodes
    expected = math.log(0.97 / 0.93) / (t2 - t1)
    assert curve.instantaneous_forward(mid) == pytest.approx(expected, rel=1e-6)


def test_interpolated_discount_curve_custom_interpolator(settings):
    dates = _nodes()
    curve = InterpolatedDiscountCurve(dates, [1.0, 0.97, 0.93], DC, Linear(), settings=settings)
    mid = 0.5 * (curve.times[1] + curve.times[2])
    assert curve.discount(mid) == pytest.approx(0.95, rel=1e-12)


@pytest.mark.parametrize(
    "dates, data",
    [
        ([], []),
        ([REF], [1.0]),
        ([REF, REF + 30], [1.0]),
        ([REF, REF + 60, REF + 30], [1.0, 0.99, 0.98]),
        ([REF, REF, REF + 30], [1.0, 0.99, 0.98]),
        ([REF, REF + 30], [0.99, 0.98]),
        ([REF, REF + 30], [1.0, -0.98]),
    ],
)
def test_interpolated_discount_curve_invalid(settings, dates, data):
    with pytest.raises(InvalidArgumentError):
        InterpolatedDiscountCurve(dates, data, DC, settings=settings)


# ----------------------------------------------------------------------
# Default-probability curves
# ----------------------------------------------------------------------
def test_flat_hazard_rate(settings):
    curve = FlatHazardRate(0.02, DC, REF, settings=settings)
    assert curve.survival_probability(2.0) == pytest.approx(math.exp(-0.04), rel=1e-14)
    assert curve.default_probability(2.0) == pytest.approx(1.0 - math.exp(-0.04), rel=1e-14)
    assert curve.default_probability(1.0, 2.0) == pytest.approx(
        math.exp(-0.02) - math.exp(-0.04), rel=1e-12
    )
    assert curve.hazard_rate(3.0) == pytest.approx(0.02, rel=1e-14)
    assert curve.default_density(1.5) == pytest.approx(0.02 * math.exp(-0.03), rel=1e-14)
    with pytest.raises(InvalidArgumentError):
        curve.default_probability(2.0, 1.0)


def test_flat_hazard_rate_follows_quote(settings):
    quote = SimpleQuote(0.02)
    curve = FlatHazardRate(quote, DC, REF, settings=settings)
    flag = Flag()
    flag.register_with(curve)
    quote.set_value(0.03)
    assert flag.count == 1
    assert curve.survival_probability(1.0) == pytest.approx(math.exp(-0.03), rel=1e-14)


def test_survival_probability_curve(settings):
    dates = _nodes()
    curve = InterpolatedSurvivalProbabilityCurve(dates, [1.0, 0.98, 0.95], DC, settings=settings)
    t1, t2 = curve.times[1], curve.times[2]
    assert curve.survival_probability(dates[1]) == pytest.approx(0.98, rel=1e-14)
    assert curve.hazard_rate(0.5 * t1) == pytest.approx(-math.log(0.98) / t1, rel=1e-10)
    assert curve.hazard_rate(0.5 * (t1 + t2)) == pytest.approx(
        math.log(0.98 / 0.95) / (t2 - t1), rel=1e-10
    )
    assert curve.default_probability(dates[1], dates[2]) == pytest.approx(0.03, rel=1e-12)


def test_survival_probability_curve_invalid(settings):
    with pytest.raises(InvalidArgumentError):
        InterpolatedSurvivalProbabilityCurve(_nodes(), [1.0, 0.95, 0.98], DC, settings=settings)
    with pytest.raises(InvalidArgumentError):
        InterpolatedSurvivalProbabilityCurve(_nodes(), [0.99, 0.98, 0.95], DC, settings=settings)


def test_hazard_rate_curve(settings):
    dates = _nodes()
    curve = InterpolatedHazardRateCurve(dates, [0.01, 0.01, 0.02], DC, settings=settings)
    t1, t2 = curve.times[1], curve.times[2]
    expected = math.exp(-(0.01 * t1 + 0.02 * (t2 - t1)))
    assert curve.survival_probability(t2) == pytest.approx(expected, rel=1e-12)
    assert curve.hazard_rate(0.5 * (t1 + t2)) == pytest.approx(0.02, rel=1e-14)
    # flat past the last node
    assert curve.hazard_rate(t2 + 1.0, extrapolate=True) == pytest.approx(0.02, rel=1e-14)
    with pytest.raises(InvalidArgumentError):
        InterpolatedHazardRateCurve(dates, [0.01, -0.01, 0.02], DC, settings=settings)


def test_default_density_curve(settings):
    dates = _nodes()
    curve = InterpolatedDefaultDensityCurve(dates, [0.01, 0.01, 0.02], DC, settings=settings)
    t1, t2 = curve.times[1], curve.times[2]
    expected = 1.0 - (0.01 * t1 + 0.02 * (t2 - t1))
    assert curve.survival_probability(t2) == pytest.approx(expected, rel=1e-12)
    assert curve.default_density(0.5 * t1) == pytest.approx(0.01, rel=1e-14)
    assert curve.hazard_rate(0.5 * t1) == pytest.approx(
        0.01 / (1.0 - 0.005 * t1), rel=1e-12
    )
