"""
Default-probability term structures.
"""
import math
from abc import abstractmethod
from typing import Optional

from ficcore.errors import InvalidArgumentError
from ficcore.termstructures.base import TermStructure, TimeOrDate


class DefaultProbabilityTermStructure(TermStructure):
    """Survival and default probabilities, densities and hazard rates."""

    def survival_probability(self, x: TimeOrDate, extrapolate: bool = False) -> float:
        return self._survival_impl(self._time(x, extrapolate))

    def default_probability(
        self,
        x1: TimeOrDate,
        x2: Optional[TimeOrDate] = None,
        extrapolate: bool = False,
    ) -> float:
        """
        Probability of default before ``x1``, or between ``x1`` and ``x2``.

        Args:
            x1: Date or time; the start of the interval when ``x2`` is given
            x2: Optional end of the interval
            extrapolate: Allow values past the curve's max date

        Returns:
            Default probability
        """
        if x2 is None:
            return 1.0 - self.survival_probability(x1, extrapolate)
        t1 = self._time(x1, extrapolate)
        t2 = self._time(x2, extrapolate)
        if t1 > t2:
            raise InvalidArgumentError(f"initial time ({t1}) later than final time ({t2})")
        return self._survival_impl(t1) - self._survival_impl(t2)

    def default_density(self, x: TimeOrDate, extrapolate: bool = False) -> float:
        return self._default_density_impl(self._time(x, extrapolate))

    def hazard_rate(self, x: TimeOrDate, extrapolate: bool = False) -> float:
        t = self._time(x, extrapolate)
        return self._hazard_impl(t)

    def _hazard_impl(self, t: float) -> float:
        s = self._survival_impl(t)
        return 0.0 if s == 0.0 else self._default_density_impl(t) / s

    @abstractmethod
    def _survival_impl(self, t: float) -> float:
        ...

    @abstractmethod
    def _default_density_impl(self, t: float) -> float:
        ...


class HazardRateStructure(DefaultProbabilityTermStructure):
    """Structure defined by its hazard rate; survival is exp(-integral)."""

    @abstractmethod
    def _hazard_impl(self, t: float) -> float:
        ...

    @abstractmethod
    def _hazard_integral(self, t: float) -> float:
        ...

    def _survival_impl(self, t: float) -> float:
        return math.exp(-self._hazard_integral(t))

    def _default_density_impl(self, t: float) -> float:
        return self._hazard_impl(t) * self._survival_impl(t)
