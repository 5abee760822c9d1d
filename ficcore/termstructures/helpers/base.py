"""
Bootstrap helpers.

A helper wraps one market quote and the instrument it prices. During a
bootstrap it is handed the curve under construction and reports how far
the instrument's implied quote is from the market one.
"""
from abc import ABC, abstractmethod
from typing import Optional

from ficcore.errors import InvalidArgumentError
from ficcore.patterns.handle import Handle
from ficcore.patterns.observable import Observable, Observer
from ficcore.quotes import Quote, QuoteLike, make_quote_handle
from ficcore.settings import Settings, get_settings
from ficcore.time.date import Date


class BootstrapHelper(Observer, Observable, ABC):
    """
    Quote plus instrument used to fix one curve node.

    Args:
        quote: Market quote as a number, a Quote or a quote handle
    """

    def __init__(self, quote: QuoteLike):
        self._quote = make_quote_handle(quote)
        self.register_with(self._quote)
        self._term_structure = None
        self._earliest_date: Optional[Date] = None
        self._latest_date: Optional[Date] = None
        self._pillar_date: Optional[Date] = None
        self._maturity_date: Optional[Date] = None

    @property
    def quote_handle(self) -> Handle:
        return self._quote

    @property
    def quote(self) -> Quote:
        return self._quote.current_link

    def quote_error(self) -> float:
        """Market quote minus the quote implied by the current curve."""
        return self.quote.value - self.implied_quote()

    @abstractmethod
    def implied_quote(self) -> float:
        """Quote of the instrument priced on the curve being built."""

    def set_term_structure(self, term_structure) -> None:
        if term_structure is None:
            raise InvalidArgumentError("null term structure given")
        self._term_structure = term_structure

    @property
    def earliest_date(self) -> Date:
        """First date the instrument depends on."""
        return self._earliest_date

    @property
    def latest_date(self) -> Date:
        """Last date the instrument depends on."""
        return self._latest_date

    @property
    def maturity_date(self) -> Date:
        return self._maturity_date if self._maturity_date is not None else self._latest_date

    @property
    def pillar_date(self) -> Date:
        """Curve node fixed by this helper."""
        return self._pillar_date if self._pillar_date is not None else self._latest_date

    def update(self) -> None:
        self.notify_observers()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(pillar={self.pillar_date})"


class RelativeDateBootstrapHelper(BootstrapHelper):
    """Helper whose dates are set relative to the evaluation date.

    Subclasses fill the dates in ``_initialize_dates``; they are derived
    again whenever the evaluation date moves.
    """

    def __init__(self, quote: QuoteLike, settings: Optional[Settings] = None):
        super().__init__(quote)
        self._settings = settings if settings is not None else get_settings()
        self.register_with(self._settings)
        self._evaluation_date = self._settings.evaluation_date

    @property
    def settings(self) -> Settings:
        return self._settings

    @abstractmethod
    def _initialize_dates(self) -> None:
        ...

    def update(self) -> None:
        evaluation_date = self._settings.evaluation_date
        if evaluation_date != self._evaluation_date:
            self._evaluation_date = evaluation_date
            self._initialize_dates()
        super().update()
