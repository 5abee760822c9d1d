"""
Base class for day count conventions.
"""
from abc import ABC, abstractmethod
from typing import Optional

from ficcore.time.date import Date, DateLike


class DayCounter(ABC):
    """Maps a date interval to a day count and a year fraction.

    Subclasses implement ``_year_fraction`` on coerced dates and override
    ``_day_count`` when the count is not the actual number of days.
    """

    name: str = ""

    def day_count(self, d1: DateLike, d2: DateLike) -> int:
        """Number of days between two dates under this convention."""
        return self._day_count(Date.coerce(d1), Date.coerce(d2))

    def year_fraction(
        self,
        d1: DateLike,
        d2: DateLike,
        ref_start: Optional[DateLike] = None,
        ref_end: Optional[DateLike] = None,
    ) -> float:
        """
        Calculate the year fraction between two dates.

        Args:
            d1: Start date
            d2: End date
            ref_start: Start of the reference period (ActualActual ISMA only)
            ref_end: End of the reference period (ActualActual ISMA only)

        Returns:
            Year fraction, negative when ``d2`` precedes ``d1``
        """
        return self._year_fraction(
            Date.coerce(d1),
            Date.coerce(d2),
            Date.coerce(ref_start) if ref_start is not None else None,
            Date.coerce(ref_end) if ref_end is not None else None,
        )

    def _day_count(self, d1: Date, d2: Date) -> int:
        return d2 - d1

    @abstractmethod
    def _year_fraction(
        self, d1: Date, d2: Date, ref_start: Optional[Date], ref_end: Optional[Date]
    ) -> float:
        ...

    def __eq__(self, other) -> bool:
        if not isinstance(other, DayCounter):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
