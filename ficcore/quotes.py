"""
Observable market quotes.
"""
from abc import ABC, abstractmethod
from typing import Optional, Union

from ficcore.errors import InvalidArgumentError
from ficcore.patterns.handle import Handle
from ficcore.patterns.observable import Observable


class Quote(Observable, ABC):
    """Market value that notifies its observers when it changes."""

    @property
    @abstractmethod
    def value(self) -> float:
        ...

    @property
    @abstractmethod
    def is_valid(self) -> bool:
        ...


class SimpleQuote(Quote):
    """Quote whose value is set by hand."""

    def __init__(self, value: Optional[float] = None):
        self._value = value

    @property
    def value(self) -> float:
        if self._value is None:
            raise InvalidArgumentError("invalid SimpleQuote")
        return self._value

    @value.setter
    def value(self, value: Optional[float]) -> None:
        self.set_value(value)

    def set_value(self, value: Optional[float]) -> float:
        """Set a new value and return the change; observers are notified if it differs."""
        diff = 0.0
        if value is not None and self._value is not None:
            diff = value - self._value
        if value != self._value:
            self._value = value
            self.notify_observers()
        return diff

    def reset(self) -> None:
        self.set_value(None)

    @property
    def is_valid(self) -> bool:
        return self._value is not None

    def __repr__(self) -> str:
        return f"SimpleQuote({self._value!r})"


QuoteLike = Union[float, Quote, Handle]


def make_quote_handle(quote: QuoteLike) -> Handle:
    """Wrap a number or a quote into a handle; handles pass through."""
    if isinstance(quote, Handle):
        return quote
    if isinstance(quote, Quote):
        return Handle(quote)
    return Handle(SimpleQuote(float(quote)))
