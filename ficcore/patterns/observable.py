"""
Observer pattern used to propagate market-data changes.

Observables keep their observers through weak references, so an observer
that is no longer referenced elsewhere silently drops out of the graph.
"""
import weakref
from typing import Optional


class Observable:
    """Object that notifies registered observers when it changes."""

    _observers: Optional[weakref.WeakSet] = None

    def _observer_set(self) -> weakref.WeakSet:
        if self._observers is None:
            self._observers = weakref.WeakSet()
        return self._observers

    def register_observer(self, observer: "Observer") -> None:
        self._observer_set().add(observer)

    def unregister_observer(self, observer: "Observer") -> None:
        self._observer_set().discard(observer)

    @property
    def observer_count(self) -> int:
        return len(self._observer_set())

    def notify_observers(self) -> None:
        """Call ``update()`` on every live observer."""
        # snapshot: update() may register or unregister observers
        for observer in list(self._observer_set()):
            observer.update()


class Observer:
    """Object reacting to notifications from the observables it watches."""

    _observables: Optional[list] = None

    def _observable_list(self) -> list:
        if self._observables is None:
            self._observables = []
        return self._observables

    def register_with(self, observable: Optional[Observable]) -> None:
        if observable is None:
            return
        observable.register_observer(self)
        if not any(o is observable for o in self._observable_list()):
            self._observable_list().append(observable)

    def unregister_with(self, observable: Optional[Observable]) -> None:
        if observable is None:
            return
        observable.unregister_observer(self)
        self._observables = [o for o in self._observable_list() if o is not observable]

    def unregister_with_all(self) -> None:
        for observable in self._observable_list():
            observable.unregister_observer(self)
        self._observables = []

    def update(self) -> None:
        """React to a notification. Subclasses override."""
