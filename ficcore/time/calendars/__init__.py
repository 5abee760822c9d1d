"""Business-day calendars and the calendar registry."""
from typing import Callable, Dict

import QuantLib as ql

from ficcore.errors import InvalidArgumentError

from .base import Calendar
from .brazil import Brazil, BrazilMarket
from .quantlib import QuantLibCalendar, from_ql_date, to_ql_date
from .simple import JointCalendar, JointCalendarRule, NullCalendar, WeekendsOnly
from .south_africa import SouthAfrica
from .target import TARGET
from .united_kingdom import UnitedKingdom
from .united_states import UnitedStates

# Calendar registry; factories so each lookup returns a fresh instance
CALENDARS: Dict[str, Callable[[], Calendar]] = {
    "TARGET": TARGET,
    "EUR": TARGET,  # Alias
    "BRAZIL": Brazil,
    "BOVESPA": lambda: Brazil(BrazilMarket.EXCHANGE),
    "SOUTH_AFRICA": SouthAfrica,
    "UK": UnitedKingdom,
    "US": UnitedStates,
    "USNY": UnitedStates,
    "WEEKEND": WeekendsOnly,
    "NULL": NullCalendar,
    # markets served by QuantLib
    "JAPAN": lambda: QuantLibCalendar(ql.Japan(), "Japan"),
    "KOREA": lambda: QuantLibCalendar(ql.SouthKorea(ql.SouthKorea.Settlement), "South Korea"),
    "CANADA": lambda: QuantLibCalendar(ql.Canada(ql.Canada.Settlement), "Canada"),
    "SWITZERLAND": lambda: QuantLibCalendar(ql.Switzerland(), "Switzerland"),
}


def get_calendar(name: str) -> Calendar:
    """
    Get a calendar by name.

    Args:
        name: Registry key, e.g. "TARGET", "BRAZIL", "UK" or "KOREA"

    Returns:
        Calendar instance
    """
    key = name.strip().upper()
    if key not in CALENDARS:
        raise InvalidArgumentError(
            f"Unknown calendar: {name}. Available: {list(CALENDARS.keys())}"
        )
    return CALENDARS[key]()


__all__ = [
    "Calendar",
    "TARGET",
    "Brazil",
    "BrazilMarket",
    "SouthAfrica",
    "UnitedKingdom",
    "UnitedStates",
    "NullCalendar",
    "WeekendsOnly",
    "JointCalendar",
    "JointCalendarRule",
    "QuantLibCalendar",
    "to_ql_date",
    "from_ql_date",
    "CALENDARS",
    "get_calendar",
]
