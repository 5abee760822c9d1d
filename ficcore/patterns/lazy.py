"""Lazy recalculation driven by observer notifications."""
from abc import ABC, abstractmethod

from ficcore.patterns.observable import Observable, Observer


class LazyObject(Observer, Observable, ABC):
    """Object whose results are computed on demand and cached.

    A notification marks the cached results stale and is forwarded to the
    object's own observers; the next ``calculate()`` recomputes them.
    While frozen, notifications are ignored and the cached results kept.
    """

    _calculated = False
    _frozen = False
    _updating = False

    def update(self) -> None:
        if self._frozen or self._updating:
            return
        self._updating = True
        try:
            self._calculated = False
            self.notify_observers()
        finally:
            self._updating = False

    def calculate(self) -> None:
        if not self._calculated and not self._frozen:
            self._calculated = True
            try:
                self.perform_calculations()
            except Exception:
                self._calculated = False
                raise

    def recalculate(self) -> None:
        """Force a recomputation regardless of the cached state."""
        was_frozen = self._frozen
        self._calculated = False
        self._frozen = False
        try:
            self.calculate()
        finally:
            self._frozen = was_frozen
        self.notify_observers()

    def freeze(self) -> None:
        self._frozen = True

    def unfreeze(self) -> None:
        if self._frozen:
            self._frozen = False
            self.update()

    @property
    def is_calculated(self) -> bool:
        return self._calculated

    @abstractmethod
    def perform_calculations(self) -> None:
        """Fill the cached results."""
