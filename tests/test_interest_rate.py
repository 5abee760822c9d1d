import math

import pytest

from ficcore.errors import DomainError, InvalidArgumentError
from ficcore.interest_rate import Compounding, InterestRate
from ficcore.time import Date, Frequency
from ficcore.time.daycounters import Actual360, Actual365Fixed

DC = Actual365Fixed()


@pytest.mark.parametrize(
    "compounding, frequency, t, expected",
    [
        (Compounding.SIMPLE, Frequency.ANNUAL, 0.5, 1.0 + 0.05 * 0.5),
        (Compounding.CONTINUOUS, Frequency.ANNUAL, 2.0, math.exp(0.1)),
        (Compounding.COMPOUNDED, Frequency.SEMIANNUAL, 1.5, 1.025 ** 3),
        (Compounding.COMPOUNDED, Frequency.QUARTERLY, 2.0, 1.0125 ** 8),
        (Compounding.SIMPLE_THEN_COMPOUNDED, Frequency.SEMIANNUAL, 0.25, 1.0 + 0.05 * 0.25),
        (Compounding.SIMPLE_THEN_COMPOUNDED, Frequency.SEMIANNUAL, 2.0, 1.025 ** 4),
        (Compounding.COMPOUNDED_THEN_SIMPLE, Frequency.SEMIANNUAL, 0.25, 1.025 ** 0.5),
        (Compounding.COMPOUNDED_THEN_SIMPLE, Frequency.SEMIANNUAL, 2.0, 1.0 + 0.05 * 2.0),
    ],
)
def test_compound_factor(compounding, frequency, t, expected):
    rate = InterestRate(0.05, DC, compounding, frequency)
    assert rate.compound_factor(t) == pytest.approx(expected, rel=1e-14)
    assert rate.discount_factor(t) == pytest.approx(1.0 / expected, rel=1e-14)


@pytest.mark.parametrize(
    "compounding, frequency",
    [
        (Compounding.SIMPLE, Frequency.ANNUAL),
        (Compounding.CONTINUOUS, Frequency.ANNUAL),
        (Compounding.COMPOUNDED, Frequency.QUARTERLY),
        (Compounding.COMPOUNDED, Frequency.MONTHLY),
        (Compounding.SIMPLE_THEN_COMPOUNDED, Frequency.SEMIANNUAL),
        (Compounding.COMPOUNDED_THEN_SIMPLE, Frequency.SEMIANNUAL),
    ],
)
@pytest.mark.parametrize("t", [0.25, 3.0])
def test_implied_rate_recovers_rate(compounding, frequency, t):
    rate = InterestRate(0.0425, DC, compounding, frequency)
    implied = InterestRate.implied_rate(rate.compound_factor(t), DC, compounding, frequency, t)
    assert implied.rate == pytest.approx(0.0425, abs=1e-12)
    assert implied.compounding == compounding


def test_compound_factor_between_dates():
    rate = InterestRate(0.05, Actual360())
    d1, d2 = Date(1, 1, 2024), Date(1, 7, 2024)
    assert rate.compound_factor(d1, d2) == pytest.approx(math.exp(0.05 * 182 / 360))


def test_equivalent_rate():
    continuous = InterestRate(0.05, DC)
    annual = continuous.equivalent_rate(Compounding.COMPOUNDED, Frequency.ANNUAL, 1.0)
    assert annual.rate == pytest.approx(math.exp(0.05) - 1.0)
    semiannual = annual.equivalent_rate(Compounding.COMPOUNDED, Frequency.SEMIANNUAL, 2.0)
    assert semiannual.compound_factor(2.0) == pytest.approx(annual.compound_factor(2.0))


def test_equivalent_rate_with_other_day_counter():
    rate = InterestRate(0.05, Actual360(), Compounding.SIMPLE)
    d1, d2 = Date(1, 1, 2024), Date(1, 1, 2025)
    other = rate.equivalent_rate(Compounding.SIMPLE, Frequency.ANNUAL, d1, d2, day_counter=DC)
    assert other.day_counter == DC
    assert other.rate == pytest.approx(0.05 * 365 / 360)


def test_zero_period():
    assert InterestRate.implied_rate(1.0, DC, Compounding.CONTINUOUS, Frequency.ANNUAL, 0.0).rate == 0.0
    with pytest.raises(DomainError):
        InterestRate.implied_rate(1.01, DC, Compounding.CONTINUOUS, Frequency.ANNUAL, 0.0)


def test_invalid_rates():
    with pytest.raises(InvalidArgumentError):
        InterestRate(0.05, DC, Compounding.COMPOUNDED, Frequency.NO_FREQUENCY)
    with pytest.raises(InvalidArgumentError):
        InterestRate(0.05, DC, Compounding.SIMPLE_THEN_COMPOUNDED, Frequency.ONCE)
    with pytest.raises(DomainError):
        InterestRate(0.05, DC).compound_factor(-1.0)
    with pytest.raises(DomainError):
        InterestRate.implied_rate(-0.5, DC, Compounding.CONTINUOUS, Frequency.ANNUAL, 1.0)


def test_str():
    assert str(InterestRate(0.05, DC)) == "5.000000 % ACT/365F continuous compounding"
    text = str(InterestRate(0.05, DC, Compounding.COMPOUNDED, Frequency.SEMIANNUAL))
    assert text == "5.000000 % ACT/365F semiannual compounded compounding"
    assert float(InterestRate(0.05, DC)) == 0.05
