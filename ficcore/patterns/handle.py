"""
Handles: shared indirection cells pointing at an observable target.

Objects hold the handle, never the target, and dereference it on each
access; relinking a handle therefore redirects every holder at once.
"""
from typing import Generic, Optional, TypeVar

from ficcore.errors import InvalidArgumentError
from ficcore.patterns.observable import Observable, Observer

T = TypeVar("T")


class Handle(Observer, Observable, Generic[T]):
    """Read-only view of a (possibly empty) link.

    The handle registers with its target and forwards the target's
    notifications, so observers of the handle see both relinking and
    changes of the linked object.
    """

    def __init__(self, target: Optional[T] = None, register_as_observer: bool = True):
        self._target: Optional[T] = None
        self._is_observer = False
        self._link(target, register_as_observer)

    def _link(self, target: Optional[T], register_as_observer: bool = True) -> None:
        if target is self._target and register_as_observer == self._is_observer:
            return
        if self._target is not None and self._is_observer:
            self.unregister_with(self._target)
        self._target = target
        self._is_observer = register_as_observer
        if target is not None and register_as_observer and isinstance(target, Observable):
            self.register_with(target)
        self.notify_observers()

    def update(self) -> None:
        self.notify_observers()

    @property
    def empty(self) -> bool:
        return self._target is None

    @property
    def current_link(self) -> T:
        if self._target is None:
            raise InvalidArgumentError("empty handle cannot be dereferenced")
        return self._target

    def __bool__(self) -> bool:
        return self._target is not None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._target!r})"


class RelinkableHandle(Handle[T]):
    """Handle whose target can be replaced at runtime."""

    def link_to(self, target: Optional[T], register_as_observer: bool = True) -> None:
        self._link(target, register_as_observer)

    relink = link_to
