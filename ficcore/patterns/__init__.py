"""Observer, handle and lazy-object building blocks."""

from .handle import Handle, RelinkableHandle
from .lazy import LazyObject
from .observable import Observable, Observer

__all__ = [
    "Observable",
    "Observer",
    "Handle",
    "RelinkableHandle",
    "LazyObject",
]
