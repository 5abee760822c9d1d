"""Brazilian settlement and exchange (BOVESPA) calendars."""
from enum import Enum

import QuantLib as ql

from ficcore.time.calendars.quantlib import QuantLibCalendar


class BrazilMarket(Enum):
    SETTLEMENT = "SETTLEMENT"
    EXCHANGE = "EXCHANGE"


_QL_MARKETS = {
    BrazilMarket.SETTLEMENT: (ql.Brazil.Settlement, "Brazil"),
    BrazilMarket.EXCHANGE: (ql.Brazil.Exchange, "BOVESPA"),
}


class Brazil(QuantLibCalendar):
    """Brazilian calendars.

    Settlement holidays: New Year's Day, Tiradentes Day (April 21st), Labour
    Day, Independence Day (September 7th), Nossa Sra. Aparecida Day (October
    12th), All Souls Day (November 2nd), Republic Day (November 15th),
    Christmas, Passion of Christ, Carnival and Corpus Christi. The exchange
    adds Sao Paulo City Day, Revolution Day, Black Consciousness Day,
    Christmas Eve and the last business day of the year.
    """

    def __init__(self, market: BrazilMarket = BrazilMarket.SETTLEMENT):
        self.market = BrazilMarket(market)
        ql_market, name = _QL_MARKETS[self.market]
        super().__init__(ql.Brazil(ql_market), name)

    def __repr__(self) -> str:
        return f"Brazil({self.market})"
