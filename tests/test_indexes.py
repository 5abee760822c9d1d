import pytest

from ficcore.errors import InvalidArgumentError
from ficcore.indexes import Eonia, Estr, Euribor, IborIndex
from ficcore.patterns import Handle, Observer, RelinkableHandle
from ficcore.termstructures import FlatForward
from ficcore.time import BusinessDayConvention, Date, Period, TimeUnit
from ficcore.time.calendars import TARGET
from ficcore.time.daycounters import Actual360


class Flag(Observer):
    def __init__(self):
        self.count = 0

    def update(self):
        self.count += 1


@pytest.fixture
def euribor6m(today, settings):
    index = Euribor("6M", settings=settings)
    yield index
    index.clear_fixings()


def _curve_handle(today, settings, rate=0.04):
    return Handle(FlatForward(rate, Actual360(), today, settings=settings))


# ----------------------------------------------------------------------
# Conventions and dates
# ----------------------------------------------------------------------
def test_names(settings):
    assert Euribor("6M", settings=settings).name == "Euribor6M ACT/360"
    assert Eonia(settings=settings).name == "EoniaON ACT/360"
    assert Estr(settings=settings).name == "ESTRON ACT/360"


def test_euribor_conventions(settings):
    short = Euribor("1W", settings=settings)
    assert short.convention == BusinessDayConvention.FOLLOWING
    assert not short.end_of_month
    long = Euribor("3M", settings=settings)
    assert long.convention == BusinessDayConvention.MODIFIED_FOLLOWING
    assert long.end_of_month
    assert long.fixing_days == 2
    assert long.fixing_calendar == TARGET()


def test_overnight_conventions(settings):
    eonia = Eonia(settings=settings)
    assert eonia.tenor == Period(1, TimeUnit.DAYS)
    assert eonia.fixing_days == 0
    assert eonia.value_date(Date(3, 7, 2023)) == Date(3, 7, 2023)
    assert eonia.maturity_date(Date(3, 7, 2023)) == Date(4, 7, 2023)
    assert eonia.maturity_date(Date(7, 7, 2023)) == Date(10, 7, 2023)


def test_dates(euribor6m):
    assert euribor6m.value_date(Date(3, 7, 2023)) == Date(5, 7, 2023)
    assert euribor6m.fixing_date(Date(5, 7, 2023)) == Date(3, 7, 2023)
    assert euribor6m.maturity_date(Date(5, 7, 2023)) == Date(5, 1, 2024)
    # month-end value dates stay on month ends
    assert euribor6m.maturity_date(Date(30, 6, 2023)) == Date(29, 12, 2023)
    assert Euribor("3M").maturity_date(Date(30, 6, 2023)) == Date(29, 9, 2023)


def test_invalid_fixing_date(euribor6m):
    saturday = Date(1, 7, 2023)
    assert not euribor6m.is_valid_fixing_date(saturday)
    with pytest.raises(InvalidArgumentError):
        euribor6m.value_date(saturday)
    with pytest.raises(InvalidArgumentError):
        euribor6m.fixing(saturday)
    with pytest.raises(InvalidArgumentError):
        euribor6m.add_fixing(saturday, 0.04)


def test_invalid_tenor(settings):
    with pytest.raises(InvalidArgumentError):
        IborIndex("Test", Period(0, TimeUnit.DAYS), 2, TARGET(),
                  BusinessDayConvention.FOLLOWING, False, Actual360(), settings=settings)


# ----------------------------------------------------------------------
# Fixings
# ----------------------------------------------------------------------
def test_past_fixings(euribor6m):
    euribor6m.add_fixing(Date(30, 6, 2023), 0.0405)
    assert euribor6m.fixing(Date(30, 6, 2023)) == 0.0405
    with pytest.raises(InvalidArgumentError, match="Missing"):
        euribor6m.fixing(Date(29, 6, 2023))


def test_duplicate_fixings(euribor6m):
    d = Date(30, 6, 2023)
    euribor6m.add_fixing(d, 0.0405)
    euribor6m.add_fixing(d, 0.0405)
    with pytest.raises(InvalidArgumentError, match="duplicated fixing"):
        euribor6m.add_fixing(d, 0.0410)
    euribor6m.add_fixing(d, 0.0410, force_overwrite=True)
    assert euribor6m.fixing(d) == 0.0410


def test_history_shared_by_name(euribor6m, settings):
    euribor6m.add_fixing(Date(30, 6, 2023), 0.0405)
    other = Euribor("6M", settings=settings)
    assert other.fixing(Date(30, 6, 2023)) == 0.0405
    assert Date(30, 6, 2023).serial in other.fixings

    three_months = Euribor("3M", settings=settings)
    assert three_months.fixings == {}

    euribor6m.clear_fixings()
    assert other.fixings == {}


def test_add_fixing_notifies(euribor6m):
    flag = Flag()
    flag.register_with(euribor6m)
    euribor6m.add_fixing(Date(30, 6, 2023), 0.0405)
    assert flag.count == 1


def test_forecast_fixing(today, settings):
    handle = _curve_handle(today, settings)
    index = Euribor("6M", handle, settings=settings)
    fixing_date = Date(10, 7, 2023)
    start = index.value_date(fixing_date)
    end = index.maturity_date(start)
    curve = handle.current_link
    expected = ((curve.discount(start) / curve.discount(end) - 1.0)
                / Actual360().year_fraction(start, end))
    assert index.fixing(fixing_date) == pytest.approx(expected, rel=1e-14)
    assert index.forecast_fixing(fixing_date) == index.fixing(fixing_date)


def test_todays_fixing(euribor6m, today, settings):
    forecasting = euribor6m.clone(_curve_handle(today, settings))
    forecast = forecasting.fixing(today)
    forecasting.add_fixing(today, 0.05)
    assert forecasting.fixing(today) == 0.05
    assert forecasting.fixing(today, forecast_todays_fixing=True) == pytest.approx(forecast)


def test_forecast_without_curve(euribor6m):
    with pytest.raises(InvalidArgumentError, match="null term structure"):
        euribor6m.fixing(Date(10, 7, 2023))


def test_clone(euribor6m, today, settings):
    handle = _curve_handle(today, settings)
    clone = euribor6m.clone(handle)
    assert isinstance(clone, Euribor)
    assert clone.name == euribor6m.name
    assert clone.forwarding_curve is handle
    assert euribor6m.forwarding_curve.empty

    eonia = Eonia(settings=settings).clone(handle)
    assert isinstance(eonia, Eonia)
    assert eonia.forwarding_curve is handle


def test_relinking_curve_notifies(today, settings):
    handle = RelinkableHandle()
    index = Euribor("6M", handle, settings=settings)
    flag = Flag()
    flag.register_with(index)
    handle.link_to(FlatForward(0.04, Actual360(), today, settings=settings))
    assert flag.count >= 1
    assert index.fixing(Date(10, 7, 2023)) > 0.0
