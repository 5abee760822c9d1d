"""
Piecewise curves bootstrapped from market instruments.

A piecewise curve owns a list of helpers, one per node. It observes
them, so a quote change or a move of the evaluation date marks the
curve stale; the nodes are solved again on the next query.
"""
import logging
from typing import List, Optional, Sequence, Tuple, Type

import numpy as np

from ficcore.errors import InvalidArgumentError
from ficcore.interpolation.base import Interpolator
from ficcore.patterns.lazy import LazyObject
from ficcore.settings import Settings
from ficcore.termstructures.bootstrap.config import BootstrapConfig
from ficcore.termstructures.bootstrap.iterative import IterativeBootstrap
from ficcore.termstructures.bootstrap.traits import (
    BootstrapTraits,
    DefaultTraits,
    Discount,
    HazardRate,
    YieldTraits,
)
from ficcore.termstructures.credit.base import DefaultProbabilityTermStructure
from ficcore.termstructures.interpolated import InterpolatedCurve
from ficcore.termstructures.yields.base import YieldTermStructure
from ficcore.time.calendars.base import Calendar
from ficcore.time.date import Date, DateLike
from ficcore.time.daycounters.base import DayCounter

logger = logging.getLogger(__name__)


class _PiecewiseCurve(InterpolatedCurve, LazyObject):
    """Bootstrap wiring shared by the yield and default flavours."""

    def _init_piecewise(self, helpers, traits, interpolator, config) -> None:
        self.traits = traits
        self._init_nodes(interpolator)
        self._helpers = list(helpers)
        self._bootstrap = IterativeBootstrap(config)
        self._bootstrap.setup(self)
        for helper in self._helpers:
            self.register_with(helper)

    @property
    def helpers(self) -> list:
        return list(self._helpers)

    @property
    def config(self) -> BootstrapConfig:
        return self._bootstrap.config

    def perform_calculations(self) -> None:
        logger.debug("Bootstrapping %s on %d helpers", type(self).__name__, len(self._helpers))
        self._bootstrap.calculate()

    def update(self) -> None:
        if self._moving:
            self._updated = False
        LazyObject.update(self)

    @property
    def max_date(self) -> Date:
        self.calculate()
        return self._dates[-1]

    @property
    def times(self) -> np.ndarray:
        self.calculate()
        return self._times

    @property
    def dates(self) -> List[Date]:
        self.calculate()
        return list(self._dates)

    @property
    def data(self) -> np.ndarray:
        self.calculate()
        return self._data

    @property
    def nodes(self) -> List[Tuple[Date, float]]:
        self.calculate()
        return list(zip(self._dates, (float(v) for v in self._data)))


class PiecewiseYieldCurve(_PiecewiseCurve, YieldTermStructure):
    """
    Yield curve bootstrapped from rate helpers.

    Args:
        reference_date: Fixed reference date; None for a curve floating
            ``settlement_days`` business days after the evaluation date
        helpers: Rate helpers, one per node (any order)
        day_counter: Day counter for node times
        traits: Node quantity (Discount, ZeroYield or ForwardRate)
        interpolator: Interpolation factory; the traits default if None
        settlement_days: Settlement lag of a floating curve
        calendar: Calendar of a floating curve
        config: Bootstrap accuracy and iteration settings
        settings: Evaluation-date context

    Example:
        >>> curve = PiecewiseYieldCurve(None, helpers, Actual360(),
        ...                             settlement_days=2, calendar=TARGET())
        >>> curve.discount(Date(15, 6, 2010))
    """

    def __init__(
        self,
        reference_date: Optional[DateLike],
        helpers: Sequence,
        day_counter: DayCounter,
        traits: Type[YieldTraits] = Discount,
        interpolator: Optional[Interpolator] = None,
        *,
        settlement_days: Optional[int] = None,
        calendar: Optional[Calendar] = None,
        config: Optional[BootstrapConfig] = None,
        settings: Optional[Settings] = None,
    ):
        if not issubclass(traits, YieldTraits):
            raise InvalidArgumentError(f"{traits.__name__} does not describe a yield curve")
        YieldTermStructure.__init__(
            self, day_counter, reference_date, settlement_days, calendar, settings
        )
        self._init_piecewise(helpers, traits, interpolator, config)

    def _discount_impl(self, t: float) -> float:
        self.calculate()
        return self.traits.discount(self, t)


class PiecewiseDefaultCurve(_PiecewiseCurve, DefaultProbabilityTermStructure):
    """
    Default-probability curve bootstrapped from CDS helpers.

    Args:
        reference_date: Fixed reference date; None for a floating curve
        helpers: Default-probability helpers, one per node
        day_counter: Day counter for node times
        traits: Node quantity (HazardRate, SurvivalProbability or
            DefaultDensity)
        interpolator: Interpolation factory; the traits default if None
        settlement_days: Settlement lag of a floating curve
        calendar: Calendar of a floating curve
        config: Bootstrap accuracy and iteration settings
        settings: Evaluation-date context
    """

    def __init__(
        self,
        reference_date: Optional[DateLike],
        helpers: Sequence,
        day_counter: DayCounter,
        traits: Type[DefaultTraits] = HazardRate,
        interpolator: Optional[Interpolator] = None,
        *,
        settlement_days: Optional[int] = None,
        calendar: Optional[Calendar] = None,
        config: Optional[BootstrapConfig] = None,
        settings: Optional[Settings] = None,
    ):
        if not issubclass(traits, DefaultTraits):
            raise InvalidArgumentError(
                f"{traits.__name__} does not describe a default-probability curve"
            )
        DefaultProbabilityTermStructure.__init__(
            self, day_counter, reference_date, settlement_days, calendar, settings
        )
        self._init_piecewise(helpers, traits, interpolator, config)

    def _survival_impl(self, t: float) -> float:
        self.calculate()
        return self.traits.survival(self, t)

    def _default_density_impl(self, t: float) -> float:
        self.calculate()
        return self.traits.density(self, t)

    def _hazard_impl(self, t: float) -> float:
        self.calculate()
        return self.traits.hazard(self, t)


def bootstrap(
    helpers: Sequence,
    reference_date: Optional[DateLike],
    day_counter: DayCounter,
    traits: Type[BootstrapTraits] = Discount,
    interpolator: Optional[Interpolator] = None,
    **kwargs,
):
    """
    Build a piecewise curve of the kind named by ``traits``.

    Args:
        helpers: Bootstrap helpers
        reference_date: Curve reference date, or None for a floating curve
        day_counter: Day counter for node times
        traits: Node quantity; yield traits give a PiecewiseYieldCurve,
            default traits a PiecewiseDefaultCurve
        interpolator: Interpolation factory
        **kwargs: settlement_days, calendar, config, settings

    Returns:
        The curve, already bootstrapped
    """
    if issubclass(traits, YieldTraits):
        curve = PiecewiseYieldCurve(reference_date, helpers, day_counter, traits,
                                    interpolator, **kwargs)
    elif issubclass(traits, DefaultTraits):
        curve = PiecewiseDefaultCurve(reference_date, helpers, day_counter, traits,
                                      interpolator, **kwargs)
    else:
        raise InvalidArgumentError(f"Unknown bootstrap traits: {traits}")
    curve.calculate()
    return curve
