"""
30/360 day count conventions.

USA: a start on the 31st or on the last day of February becomes the 30th; an
end on the 31st becomes the 30th when the start is the 30th or 31st; an end
on the last day of February becomes the 30th when the start is also one.

Bond Basis: a start on the 31st becomes the 30th; an end on the 31st becomes
the 30th when the start is the 30th or 31st.

Eurobond Basis: starts and ends on the 31st become the 30th.

Italian: as Eurobond Basis, and February days after the 27th become the 30th.

German (ISDA): as Eurobond Basis, and the last day of February becomes the
30th except when it is the termination date.

NASD: as Bond Basis, except that an end on the 31st with a start before the
30th moves to the 1st of the next month.
"""
from enum import Enum
from typing import Optional, Union

import QuantLib as ql

from ficcore.errors import InvalidArgumentError
from ficcore.time.calendars.quantlib import to_ql_date
from ficcore.time.date import Date, DateLike
from ficcore.time.daycounters.quantlib import QuantLibDayCounter


class Thirty360Convention(Enum):
    USA = "USA"
    BOND_BASIS = "BOND_BASIS"
    ISMA = "ISMA"
    EUROPEAN = "EUROPEAN"
    EUROBOND_BASIS = "EUROBOND_BASIS"
    ITALIAN = "ITALIAN"
    GERMAN = "GERMAN"
    ISDA = "ISDA"
    NASD = "NASD"


_NAMES = {
    Thirty360Convention.USA: "30/360 (US)",
    Thirty360Convention.BOND_BASIS: "30/360 (Bond Basis)",
    Thirty360Convention.ISMA: "30/360 (Bond Basis)",
    Thirty360Convention.EUROPEAN: "30E/360 (Eurobond Basis)",
    Thirty360Convention.EUROBOND_BASIS: "30E/360 (Eurobond Basis)",
    Thirty360Convention.ITALIAN: "30/360 (Italian)",
    Thirty360Convention.GERMAN: "30E/360 (ISDA)",
    Thirty360Convention.ISDA: "30E/360 (ISDA)",
    Thirty360Convention.NASD: "30/360 (NASD)",
}

_QL_CONVENTIONS = {
    Thirty360Convention.USA: ql.Thirty360.USA,
    Thirty360Convention.BOND_BASIS: ql.Thirty360.BondBasis,
    Thirty360Convention.ISMA: ql.Thirty360.ISMA,
    Thirty360Convention.EUROPEAN: ql.Thirty360.European,
    Thirty360Convention.EUROBOND_BASIS: ql.Thirty360.EurobondBasis,
    Thirty360Convention.ITALIAN: ql.Thirty360.Italian,
    Thirty360Convention.GERMAN: ql.Thirty360.German,
    Thirty360Convention.ISDA: ql.Thirty360.ISDA,
    Thirty360Convention.NASD: ql.Thirty360.NASD,
}


class Thirty360(QuantLibDayCounter):
    """30/360 day counter.

    Args:
        convention: Variant (Bond Basis by default)
        termination_date: Termination date, used by the German/ISDA variant only
    """

    def __init__(
        self,
        convention: Union[Thirty360Convention, str] = Thirty360Convention.BOND_BASIS,
        termination_date: Optional[DateLike] = None,
    ):
        try:
            self.convention = Thirty360Convention(
                convention.upper() if isinstance(convention, str) else convention
            )
        except ValueError as exc:
            raise InvalidArgumentError(
                f"Unknown 30/360 convention: {convention}. "
                f"Available: {[c.value for c in Thirty360Convention]}"
            ) from exc
        self.termination_date = (
            Date.coerce(termination_date) if termination_date is not None else None
        )
        ql_termination = (
            to_ql_date(self.termination_date) if self.termination_date is not None else ql.Date()
        )
        super().__init__(
            ql.Thirty360(_QL_CONVENTIONS[self.convention], ql_termination),
            _NAMES[self.convention],
        )

    def __repr__(self) -> str:
        return f"Thirty360({self.convention})"
