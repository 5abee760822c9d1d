"""
Interest rates with compounding and day-count conventions.
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ficcore.errors import DomainError, InvalidArgumentError
from ficcore.time.date import DateLike
from ficcore.time.daycounters.base import DayCounter
from ficcore.time.period import Frequency


class Compounding(Enum):
    SIMPLE = "SIMPLE"
    COMPOUNDED = "COMPOUNDED"
    CONTINUOUS = "CONTINUOUS"
    SIMPLE_THEN_COMPOUNDED = "SIMPLE_THEN_COMPOUNDED"
    COMPOUNDED_THEN_SIMPLE = "COMPOUNDED_THEN_SIMPLE"


_NEEDS_FREQUENCY = (
    Compounding.COMPOUNDED,
    Compounding.SIMPLE_THEN_COMPOUNDED,
    Compounding.COMPOUNDED_THEN_SIMPLE,
)


@dataclass(frozen=True)
class InterestRate:
    """
    Rate together with the conventions needed to turn it into a growth factor.

    Attributes:
        rate: Rate in decimal units
        day_counter: Convention turning dates into accrual times
        compounding: Compounding rule
        frequency: Compounding frequency (ignored for simple/continuous)
    """

    rate: float
    day_counter: DayCounter
    compounding: Compounding = Compounding.CONTINUOUS
    frequency: Frequency = Frequency.ANNUAL

    def __post_init__(self):
        if self.compounding in _NEEDS_FREQUENCY and self.frequency in (
            Frequency.ONCE,
            Frequency.NO_FREQUENCY,
        ):
            raise InvalidArgumentError(
                f"frequency {self.frequency.name} not allowed for {self.compounding.name} compounding"
            )

    def __float__(self) -> float:
        return self.rate

    def _time(self, t_or_d1, d2, ref_start, ref_end) -> float:
        if d2 is None:
            return float(t_or_d1)
        return self.day_counter.year_fraction(t_or_d1, d2, ref_start, ref_end)

    def compound_factor(
        self,
        t_or_d1,
        d2: Optional[DateLike] = None,
        ref_start: Optional[DateLike] = None,
        ref_end: Optional[DateLike] = None,
    ) -> float:
        """Growth factor over a time ``t`` or over the dates ``(d1, d2)``."""
        t = self._time(t_or_d1, d2, ref_start, ref_end)
        if t < 0.0:
            raise DomainError(f"negative time ({t}) not allowed")
        r = self.rate
        f = float(int(self.frequency))
        c = self.compounding
        if c == Compounding.SIMPLE:
            return 1.0 + r * t
        if c == Compounding.CONTINUOUS:
            return math.exp(r * t)
        if c == Compounding.COMPOUNDED:
            return (1.0 + r / f) ** (f * t)
        if c == Compounding.SIMPLE_THEN_COMPOUNDED:
            if t <= 1.0 / f:
                return 1.0 + r * t
            return (1.0 + r / f) ** (f * t)
        if t <= 1.0 / f:
            return (1.0 + r / f) ** (f * t)
        return 1.0 + r * t

    def discount_factor(
        self,
        t_or_d1,
        d2: Optional[DateLike] = None,
        ref_start: Optional[DateLike] = None,
        ref_end: Optional[DateLike] = None,
    ) -> float:
        return 1.0 / self.compound_factor(t_or_d1, d2, ref_start, ref_end)

    @classmethod
    def implied_rate(
        cls,
        compound: float,
        day_counter: DayCounter,
        compounding: Compounding,
        frequency: Frequency,
        t_or_d1,
        d2: Optional[DateLike] = None,
        ref_start: Optional[DateLike] = None,
        ref_end: Optional[DateLike] = None,
    ) -> "InterestRate":
        """
        Rate that produces the given compound factor.

        Args:
            compound: Growth factor over the period
            day_counter: Day counter of the returned rate
            compounding: Compounding of the returned rate
            frequency: Frequency of the returned rate
            t_or_d1: Time in years, or start date when ``d2`` is given
            d2: End date

        Returns:
            InterestRate with the requested conventions
        """
        if d2 is None:
            t = float(t_or_d1)
        else:
            t = day_counter.year_fraction(t_or_d1, d2, ref_start, ref_end)
        if compound <= 0.0:
            raise DomainError("positive compound factor required")
        f = float(int(frequency))
        if compound == 1.0:
            if t < 0.0:
                raise DomainError(f"non negative time ({t}) required")
            r = 0.0
        else:
            if t <= 0.0:
                raise DomainError(f"positive time ({t}) required")
            if compounding == Compounding.SIMPLE:
                r = (compound - 1.0) / t
            elif compounding == Compounding.CONTINUOUS:
                r = math.log(compound) / t
            elif compounding == Compounding.COMPOUNDED:
                r = (compound ** (1.0 / (f * t)) - 1.0) * f
            elif compounding == Compounding.SIMPLE_THEN_COMPOUNDED:
                if t <= 1.0 / f:
                    r = (compound - 1.0) / t
                else:
                    r = (compound ** (1.0 / (f * t)) - 1.0) * f
            else:
                if t <= 1.0 / f:
                    r = (compound ** (1.0 / (f * t)) - 1.0) * f
                else:
                    r = (compound - 1.0) / t
        return cls(r, day_counter, compounding, frequency)

    def equivalent_rate(
        self,
        compounding: Compounding,
        frequency: Frequency,
        t_or_d1,
        d2: Optional[DateLike] = None,
        day_counter: Optional[DayCounter] = None,
        ref_start: Optional[DateLike] = None,
        ref_end: Optional[DateLike] = None,
    ) -> "InterestRate":
        """Rate with other conventions giving the same growth over the period."""
        if d2 is None:
            t = float(t_or_d1)
            return self.implied_rate(
                self.compound_factor(t), self.day_counter, compounding, frequency, t
            )
        result_dc = day_counter if day_counter is not None else self.day_counter
        t1 = self.day_counter.year_fraction(t_or_d1, d2, ref_start, ref_end)
        t2 = result_dc.year_fraction(t_or_d1, d2, ref_start, ref_end)
        return self.implied_rate(self.compound_factor(t1), result_dc, compounding, frequency, t2)

    def __str__(self) -> str:
        if self.compounding == Compounding.SIMPLE:
            desc = "simple compounding"
        elif self.compounding == Compounding.CONTINUOUS:
            desc = "continuous compounding"
        else:
            desc = f"{self.frequency.name.lower()} {self.compounding.name.lower()} compounding"
        return f"{self.rate * 100:.6f} % {self.day_counter.name} {desc}"
