"""
Node storage shared by interpolated and bootstrapped curves.
"""
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ficcore.errors import InvalidArgumentError
from ficcore.interpolation.base import Interpolation, Interpolator
from ficcore.time.date import Date, DateLike


class InterpolatedCurve:
    """Dates, times and node values plus the interpolation over them.

    Mixed into term structures; ``traits`` names the node quantity and
    supplies the evaluation formulas.
    """

    traits = None

    def _init_nodes(self, interpolator: Optional[Interpolator]) -> None:
        self._interpolator = (interpolator if interpolator is not None
                              else self.traits.default_interpolator())
        self._dates: List[Date] = []
        self._times = np.array([], dtype=float)
        self._data = np.array([], dtype=float)
        self._interpolation: Optional[Interpolation] = None

    def _set_nodes(self, dates: Sequence[DateLike], data: Sequence[float]) -> None:
        dates = [Date.coerce(d) for d in dates]
        data = np.array(data, dtype=float)
        required = max(2, self._interpolator.required_points)
        if len(dates) < required:
            raise InvalidArgumentError(
                f"not enough input dates given: {len(dates)} (at least {required} required)"
            )
        if len(dates) != len(data):
            raise InvalidArgumentError(
                f"dates/data count mismatch: {len(dates)} dates, {len(data)} values"
            )
        for previous, current in zip(dates, dates[1:]):
            if current <= previous:
                raise InvalidArgumentError(
                    f"dates must be sorted and unique: {current} after {previous}"
                )
        self.traits.check_data(data)
        times = np.array([self.day_counter.year_fraction(dates[0], d) for d in dates], dtype=float)
        for previous, current in zip(times, times[1:]):
            if current <= previous:
                raise InvalidArgumentError(
                    "dates with equal times under the day counter "
                    f"{self.day_counter.name} given"
                )
        self._dates = dates
        self._times = times
        self._data = data
        self._interpolation = self._interpolator.interpolate(times, data)

    @property
    def interpolator(self) -> Interpolator:
        return self._interpolator

    @property
    def interpolation(self) -> Interpolation:
        return self._interpolation

    @property
    def times(self) -> np.ndarray:
        return self._times

    @property
    def dates(self) -> List[Date]:
        return list(self._dates)

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def nodes(self) -> List[Tuple[Date, float]]:
        return list(zip(self._dates, (float(v) for v in self._data)))
