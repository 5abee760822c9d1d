import pytest

from ficcore.errors import InvalidArgumentError
from ficcore.time import BusinessDayConvention, Date, Period, TimeUnit
from ficcore.time.calendars import (
    TARGET,
    Brazil,
    BrazilMarket,
    JointCalendar,
    JointCalendarRule,
    NullCalendar,
    SouthAfrica,
    UnitedKingdom,
    UnitedStates,
    WeekendsOnly,
    get_calendar,
    to_ql_date,
)


def _dates(*triples):
    return [Date(d, m, y) for d, m, y in triples]


# ----------------------------------------------------------------------
# Holiday lists
# ----------------------------------------------------------------------
def test_target_holidays():
    expected = _dates(
        (1, 1, 1999), (31, 12, 1999),
        (21, 4, 2000), (24, 4, 2000), (1, 5, 2000), (25, 12, 2000), (26, 12, 2000),
        (1, 1, 2001), (13, 4, 2001), (16, 4, 2001), (1, 5, 2001), (25, 12, 2001),
        (26, 12, 2001), (31, 12, 2001),
        (1, 1, 2002), (29, 3, 2002), (1, 4, 2002), (1, 5, 2002), (25, 12, 2002),
        (26, 12, 2002),
        (1, 1, 2003), (18, 4, 2003), (21, 4, 2003), (1, 5, 2003), (25, 12, 2003),
        (26, 12, 2003),
        (1, 1, 2004), (9, 4, 2004), (12, 4, 2004),
        (25, 3, 2005), (28, 3, 2005), (26, 12, 2005),
        (14, 4, 2006), (17, 4, 2006), (1, 5, 2006), (25, 12, 2006), (26, 12, 2006),
    )
    assert TARGET().holiday_list(Date(1, 1, 1999), Date(31, 12, 2006)) == expected


def test_us_settlement_holidays():
    expected = _dates(
        (1, 1, 2004), (19, 1, 2004), (16, 2, 2004), (31, 5, 2004), (5, 7, 2004),
        (6, 9, 2004), (11, 10, 2004), (11, 11, 2004), (25, 11, 2004), (24, 12, 2004),
        (31, 12, 2004),
        (17, 1, 2005), (21, 2, 2005), (30, 5, 2005), (4, 7, 2005), (5, 9, 2005),
        (10, 10, 2005), (11, 11, 2005), (24, 11, 2005), (26, 12, 2005),
    )
    assert UnitedStates().holiday_list(Date(1, 1, 2004), Date(31, 12, 2005)) == expected


def test_uk_settlement_holidays():
    expected = _dates(
        (1, 1, 2004), (9, 4, 2004), (12, 4, 2004), (3, 5, 2004), (31, 5, 2004),
        (30, 8, 2004), (27, 12, 2004), (28, 12, 2004),
        (3, 1, 2005), (25, 3, 2005), (28, 3, 2005), (2, 5, 2005), (30, 5, 2005),
        (29, 8, 2005), (26, 12, 2005), (27, 12, 2005),
        (2, 1, 2006), (14, 4, 2006), (17, 4, 2006), (1, 5, 2006), (29, 5, 2006),
        (28, 8, 2006), (25, 12, 2006), (26, 12, 2006),
        (1, 1, 2007), (6, 4, 2007), (9, 4, 2007), (7, 5, 2007), (28, 5, 2007),
        (27, 8, 2007), (25, 12, 2007), (26, 12, 2007),
    )
    assert UnitedKingdom().holiday_list(Date(1, 1, 2004), Date(31, 12, 2007)) == expected


def test_holiday_list_with_weekends():
    cal = WeekendsOnly()
    assert cal.holiday_list(Date(1, 7, 2023), Date(9, 7, 2023)) == []
    assert cal.holiday_list(Date(1, 7, 2023), Date(9, 7, 2023), include_weekends=True) == _dates(
        (1, 7, 2023), (2, 7, 2023), (8, 7, 2023), (9, 7, 2023)
    )
    with pytest.raises(InvalidArgumentError):
        cal.holiday_list(Date(9, 7, 2023), Date(1, 7, 2023))


def test_brazil_calendars():
    settlement = Brazil()
    exchange = Brazil(BrazilMarket.EXCHANGE)
    for d in _dates((20, 2, 2023), (21, 2, 2023), (7, 4, 2023), (8, 6, 2023)):
        assert settlement.is_holiday(d)
        assert exchange.is_holiday(d)
    assert settlement.is_business_day(Date(20, 11, 2019))
    assert exchange.is_holiday(Date(20, 11, 2019))
    assert settlement.is_holiday(Date(20, 11, 2024))
    assert exchange.is_holiday(Date(29, 12, 2023))


def test_quantlib_backed_markets():
    japan = get_calendar("JAPAN")
    assert japan.is_holiday(Date(2, 1, 2024))
    assert japan.is_business_day(Date(4, 1, 2024))
    korea = get_calendar("korea")
    assert korea.is_holiday(Date(15, 8, 2023))
    assert korea.is_weekend(Date(5, 8, 2023).weekday)


def test_registry():
    assert get_calendar("EUR") == TARGET()
    assert get_calendar(" target ") == TARGET()
    assert get_calendar("BOVESPA").name == "BOVESPA"
    with pytest.raises(InvalidArgumentError, match="Unknown calendar"):
        get_calendar("ATLANTIS")


# ----------------------------------------------------------------------
# Adjustment and advancing
# ----------------------------------------------------------------------
@pytest.mark.parametrize(
    "convention, expected",
    [
        (BusinessDayConvention.FOLLOWING, Date(2, 5, 2023)),
        (BusinessDayConvention.MODIFIED_FOLLOWING, Date(28, 4, 2023)),
        (BusinessDayConvention.PRECEDING, Date(28, 4, 2023)),
        (BusinessDayConvention.MODIFIED_PRECEDING, Date(28, 4, 2023)),
        (BusinessDayConvention.UNADJUSTED, Date(30, 4, 2023)),
        (BusinessDayConvention.NEAREST, Date(2, 5, 2023)),
    ],
)
def test_adjust(convention, expected):
    assert TARGET().adjust(Date(30, 4, 2023), convention) == expected


def test_adjust_accepts_convention_codes():
    assert TARGET().adjust(Date(30, 4, 2023), "MF") == Date(28, 4, 2023)
    assert TARGET().adjust(Date(30, 4, 2023), "PRECEDING") == Date(28, 4, 2023)


def test_half_month_modified_following():
    target = TARGET()
    # 15 April 2023 is a Saturday; following would cross the middle of the month
    assert target.adjust(Date(15, 4, 2023), BusinessDayConvention.HALF_MONTH_MODIFIED_FOLLOWING) == Date(14, 4, 2023)
    assert target.adjust(Date(8, 4, 2023), BusinessDayConvention.HALF_MONTH_MODIFIED_FOLLOWING) == Date(11, 4, 2023)


def test_nearest_convention():
    south_africa = SouthAfrica()
    # 16 May 2015 is a Saturday
    assert south_africa.advance(Date(16, 4, 2015), "1M", convention="N") == Date(15, 5, 2015)
    assert south_africa.adjust(Date(17, 5, 2015), BusinessDayConvention.NEAREST) == Date(18, 5, 2015)


def test_advance_business_days():
    target = TARGET()
    assert target.advance(Date(28, 4, 2023), 1, TimeUnit.DAYS) == Date(2, 5, 2023)
    assert target.advance(Date(2, 5, 2023), -1, TimeUnit.DAYS) == Date(28, 4, 2023)
    assert target.advance(Date(29, 4, 2023), 0, TimeUnit.DAYS) == Date(2, 5, 2023)


def test_advance_months():
    target = TARGET()
    assert target.advance(Date(31, 3, 2023), "1M", convention="MF") == Date(28, 4, 2023)
    assert target.advance(Date(31, 3, 2023), Period(1, TimeUnit.MONTHS)) == Date(2, 5, 2023)
    assert target.advance(Date(28, 2, 2023), 1, TimeUnit.MONTHS, end_of_month=True) == Date(31, 3, 2023)
    with pytest.raises(InvalidArgumentError):
        target.advance(Date(28, 2, 2023), 1)


def test_end_of_month():
    target = TARGET()
    assert target.end_of_month(Date(10, 4, 2023)) == Date(28, 4, 2023)
    assert target.is_end_of_month(Date(28, 4, 2023))
    assert not target.is_end_of_month(Date(27, 4, 2023))


def test_business_days_between():
    target = TARGET()
    start, end = Date(1, 5, 2023), Date(8, 5, 2023)
    assert target.business_days_between(start, end) == 4
    assert target.business_days_between(start, end, include_last=True) == 5
    assert target.business_days_between(end, start, include_first=False, include_last=True) == -4
    assert target.business_days_between(start, start) == 0


def test_business_day_list():
    days = TARGET().business_day_list(Date(28, 4, 2023), Date(3, 5, 2023))
    assert days == _dates((28, 4, 2023), (2, 5, 2023), (3, 5, 2023))


# ----------------------------------------------------------------------
# Runtime modifications
# ----------------------------------------------------------------------
def test_added_holiday_is_shared_between_instances():
    first, second = TARGET(), TARGET()
    d = Date(5, 7, 2023)
    try:
        first.add_holiday(d)
        assert second.is_holiday(d)
        assert d in second.holiday_list(Date(1, 7, 2023), Date(10, 7, 2023))
        # other markets are unaffected
        assert UnitedKingdom().is_business_day(d)
    finally:
        first.reset_added_and_removed_holidays()
    assert second.is_business_day(d)


def test_removed_holiday():
    cal = TARGET()
    christmas = Date(25, 12, 2023)
    try:
        cal.remove_holiday(christmas)
        assert TARGET().is_business_day(christmas)
        cal.add_holiday(christmas)
        assert cal.is_holiday(christmas)
    finally:
        cal.reset_added_and_removed_holidays()
    assert cal.is_holiday(christmas)


# ----------------------------------------------------------------------
# Simple and joint calendars
# ----------------------------------------------------------------------
def test_null_and_weekend_calendars():
    saturday = Date(1, 7, 2023)
    assert NullCalendar().is_business_day(saturday)
    assert NullCalendar().is_business_day(Date(25, 12, 2023))
    assert WeekendsOnly().is_holiday(saturday)
    assert WeekendsOnly().is_business_day(Date(25, 12, 2023))


def test_joint_calendar():
    holidays = JointCalendar([TARGET(), UnitedKingdom()])
    business = JointCalendar([TARGET(), UnitedKingdom()], JointCalendarRule.JOIN_BUSINESS_DAYS)
    early_may = Date(3, 5, 2004)
    assert holidays.is_holiday(early_may)
    assert business.is_business_day(early_may)
    assert holidays.is_holiday(Date(25, 12, 2023))
    assert business.is_holiday(Date(25, 12, 2023))
    assert holidays.name != business.name
    with pytest.raises(InvalidArgumentError):
        JointCalendar([])


def test_joint_calendar_matches_quantlib_join():
    joint = JointCalendar([TARGET(), UnitedKingdom()])
    ql_joint = joint.ql_calendar
    d = Date(1, 1, 2004)
    while d <= Date(31, 12, 2005):
        assert joint.is_business_day(d) == ql_joint.isBusinessDay(to_ql_date(d))
        d = d + 1


def test_joint_calendar_sees_member_modifications():
    target = TARGET()
    joint = JointCalendar([target, UnitedKingdom()])
    d = Date(5, 7, 2023)
    assert not joint.has_modifications
    try:
        target.add_holiday(d)
        assert joint.has_modifications
        assert joint.is_holiday(d)
    finally:
        target.reset_added_and_removed_holidays()
    assert not joint.has_modifications
    assert joint.is_business_day(d)


def test_calendar_equality_by_market():
    assert TARGET() == TARGET()
    assert Brazil() != Brazil(BrazilMarket.EXCHANGE)
    assert len({TARGET(), TARGET(), UnitedStates()}) == 2
