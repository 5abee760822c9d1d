"""Day count conventions and the day counter registry."""
from typing import Callable, Dict

import QuantLib as ql

from ficcore.errors import InvalidArgumentError

from .actual import Actual360, Actual365Fixed, Actual365NoLeap
from .actual_actual import ActualActual, ActualActualConvention
from .base import DayCounter
from .business252 import Business252
from .quantlib import QuantLibDayCounter
from .simple import OneDayCounter, SimpleDayCounter
from .thirty360 import Thirty360, Thirty360Convention

# Registry
DAY_COUNTERS: Dict[str, Callable[[], DayCounter]] = {
    "ACT/360": Actual360,
    "ACTUAL/360": Actual360,
    "ACT/360 (INC)": lambda: Actual360(include_last_day=True),
    "ACT/365F": Actual365Fixed,
    "ACT/365": Actual365Fixed,
    "ACTUAL/365F": Actual365Fixed,
    "ACT/365NL": Actual365NoLeap,
    "ACT/ACT": ActualActual,
    "ACTUAL/ACTUAL": ActualActual,
    "ACT/ACT ISDA": ActualActual,
    "ACT/ACT ISMA": lambda: ActualActual(ActualActualConvention.ISMA),
    "ACT/ACT ICMA": lambda: ActualActual(ActualActualConvention.ISMA),
    "ACT/ACT AFB": lambda: ActualActual(ActualActualConvention.AFB),
    "30/360": Thirty360,
    "30U/360": lambda: Thirty360(Thirty360Convention.USA),
    "30/360 US": lambda: Thirty360(Thirty360Convention.USA),
    "30/360 BOND BASIS": Thirty360,
    "30E/360": lambda: Thirty360(Thirty360Convention.EUROBOND_BASIS),
    "30/360 EUROPEAN": lambda: Thirty360(Thirty360Convention.EUROBOND_BASIS),
    "30/360 ITALIAN": lambda: Thirty360(Thirty360Convention.ITALIAN),
    "30E/360 ISDA": lambda: Thirty360(Thirty360Convention.ISDA),
    "30/360 NASD": lambda: Thirty360(Thirty360Convention.NASD),
    "BUS/252": Business252,
    "SIMPLE": SimpleDayCounter,
    "1/1": OneDayCounter,
    # conventions served by QuantLib
    "ACT/365.25": lambda: QuantLibDayCounter(ql.Actual36525(), "ACT/365.25"),
    "ACT/366": lambda: QuantLibDayCounter(ql.Actual366(), "ACT/366"),
}


def get_day_counter(name: str) -> DayCounter:
    """Get a day counter by name, e.g. "ACT/360" or "30E/360"."""
    name_upper = name.strip().upper()
    if name_upper not in DAY_COUNTERS:
        raise InvalidArgumentError(
            f"Unknown day count convention: {name}. "
            f"Available: {list(DAY_COUNTERS.keys())}"
        )
    return DAY_COUNTERS[name_upper]()


__all__ = [
    "DayCounter",
    "Actual360",
    "Actual365Fixed",
    "Actual365NoLeap",
    "ActualActual",
    "ActualActualConvention",
    "Thirty360",
    "Thirty360Convention",
    "Business252",
    "SimpleDayCounter",
    "OneDayCounter",
    "QuantLibDayCounter",
    "DAY_COUNTERS",
    "get_day_counter",
]
