import gc

import pytest

from ficcore.errors import InvalidArgumentError
from ficcore.patterns import Handle, LazyObject, Observable, Observer, RelinkableHandle
from ficcore.quotes import SimpleQuote, make_quote_handle
from ficcore.settings import Settings, get_settings, saved_settings
from ficcore.time import Date


class Flag(Observer):
    def __init__(self):
        self.count = 0

    def update(self):
        self.count += 1


class Doubler(LazyObject):
    def __init__(self, quote):
        self.quote = quote
        self.calculations = 0
        self.result = None
        self.register_with(quote)

    def perform_calculations(self):
        self.calculations += 1
        self.result = 2.0 * self.quote.value

    @property
    def value(self):
        self.calculate()
        return self.result


# ----------------------------------------------------------------------
# Observer
# ----------------------------------------------------------------------
def test_notification():
    observable = Observable()
    flag = Flag()
    flag.register_with(observable)
    observable.notify_observers()
    assert flag.count == 1
    flag.unregister_with(observable)
    observable.notify_observers()
    assert flag.count == 1


def test_register_with_none_is_ignored():
    flag = Flag()
    flag.register_with(None)
    flag.unregister_with(None)


def test_observers_are_held_weakly():
    observable = Observable()
    flag = Flag()
    flag.register_with(observable)
    assert observable.observer_count == 1
    del flag
    gc.collect()
    assert observable.observer_count == 0


def test_unregister_with_all():
    first, second = Observable(), Observable()
    flag = Flag()
    flag.register_with(first)
    flag.register_with(second)
    flag.unregister_with_all()
    first.notify_observers()
    second.notify_observers()
    assert flag.count == 0


# ----------------------------------------------------------------------
# Quotes
# ----------------------------------------------------------------------
def test_simple_quote():
    quote = SimpleQuote(0.05)
    flag = Flag()
    flag.register_with(quote)
    assert quote.set_value(0.06) == pytest.approx(0.01)
    assert flag.count == 1
    quote.value = 0.06
    assert flag.count == 1
    quote.reset()
    assert not quote.is_valid
    assert flag.count == 2
    with pytest.raises(InvalidArgumentError):
        quote.value


def test_make_quote_handle():
    quote = SimpleQuote(1.0)
    handle = make_quote_handle(quote)
    assert handle.current_link is quote
    assert make_quote_handle(handle) is handle
    assert make_quote_handle(0.25).current_link.value == 0.25


# ----------------------------------------------------------------------
# Handles
# ----------------------------------------------------------------------
def test_handle_forwards_notifications():
    quote = SimpleQuote(1.0)
    handle = Handle(quote)
    flag = Flag()
    flag.register_with(handle)
    quote.value = 2.0
    assert flag.count == 1


def test_empty_handle():
    handle = Handle()
    assert handle.empty
    assert not handle
    with pytest.raises(InvalidArgumentError):
        handle.current_link


def test_relinking():
    first, second = SimpleQuote(1.0), SimpleQuote(2.0)
    handle = RelinkableHandle(first)
    flag = Flag()
    flag.register_with(handle)
    handle.link_to(second)
    assert flag.count == 1
    assert handle.current_link.value == 2.0
    # the old target no longer reaches the handle's observers
    first.value = 3.0
    assert flag.count == 1
    second.value = 4.0
    assert flag.count == 2


def test_link_without_observing():
    quote = SimpleQuote(1.0)
    handle = RelinkableHandle()
    flag = Flag()
    flag.register_with(handle)
    handle.link_to(quote, register_as_observer=False)
    assert flag.count == 1
    quote.value = 2.0
    assert flag.count == 1


# ----------------------------------------------------------------------
# Lazy objects
# ----------------------------------------------------------------------
def test_lazy_object_caches_results():
    quote = SimpleQuote(1.0)
    doubler = Doubler(quote)
    assert not doubler.is_calculated
    assert doubler.value == 2.0
    assert doubler.value == 2.0
    assert doubler.calculations == 1
    quote.value = 3.0
    assert not doubler.is_calculated
    assert doubler.value == 6.0
    assert doubler.calculations == 2


def test_lazy_object_forwards_notifications():
    quote = SimpleQuote(1.0)
    doubler = Doubler(quote)
    flag = Flag()
    flag.register_with(doubler)
    quote.value = 2.0
    assert flag.count == 1


def test_frozen_lazy_object():
    quote = SimpleQuote(1.0)
    doubler = Doubler(quote)
    flag = Flag()
    flag.register_with(doubler)
    assert doubler.value == 2.0
    doubler.freeze()
    quote.value = 5.0
    assert doubler.value == 2.0
    assert flag.count == 0
    doubler.unfreeze()
    assert flag.count == 1
    assert doubler.value == 10.0


def test_recalculate():
    quote = SimpleQuote(1.0)
    doubler = Doubler(quote)
    doubler.value
    doubler.recalculate()
    assert doubler.calculations == 2


def test_failed_calculation_is_retried():
    quote = SimpleQuote()
    doubler = Doubler(quote)
    with pytest.raises(InvalidArgumentError):
        doubler.value
    assert not doubler.is_calculated
    quote.value = 1.5
    assert doubler.value == 3.0


# ----------------------------------------------------------------------
# Settings
# ----------------------------------------------------------------------
def test_settings_notify_on_evaluation_date_change():
    settings = Settings(evaluation_date="2024-01-15")
    flag = Flag()
    flag.register_with(settings)
    settings.evaluation_date = Date(15, 1, 2024)
    assert flag.count == 0
    settings.evaluation_date = Date(16, 1, 2024)
    assert flag.count == 1
    assert settings.evaluation_date == Date(16, 1, 2024)


def test_settings_default_to_today():
    settings = Settings()
    assert settings.evaluation_date == Date.todays_date()
    settings.evaluation_date = Date(16, 1, 2024)
    settings.reset_evaluation_date()
    assert settings.evaluation_date == Date.todays_date()


def test_saved_settings_restores_state():
    settings = get_settings()
    before = settings.evaluation_date
    with saved_settings() as s:
        assert s is settings
        s.evaluation_date = Date(1, 2, 2010)
        s.include_reference_date_events = True
    assert settings.evaluation_date == before
    assert not settings.include_reference_date_events


def test_saved_settings_restores_after_error():
    settings = Settings(evaluation_date=Date(1, 2, 2010))
    with pytest.raises(RuntimeError):
        with saved_settings(settings):
            settings.evaluation_date = Date(2, 2, 2010)
            raise RuntimeError("boom")
    assert settings.evaluation_date == Date(1, 2, 2010)
