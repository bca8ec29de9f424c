"""Synchronous middleware pipelines attached to every node.

Each node owns one ``Dispatcher`` per hook (``init``, ``input``, ``commit``).
Middleware run in registration order; each receives the payload returned by
the previous one and the last return value goes back to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from formtree.protocols import Middleware

__all__ = ["Dispatcher", "Hooks", "create_hooks"]

T = TypeVar("T")


class Dispatcher(Generic[T]):
    """An ordered, synchronous middleware pipeline.

    Example::

        hook = Dispatcher[int]()
        hook.use(lambda n: n + 1).use(lambda n: n * 10)
        hook.dispatch(1)   # 20
    """

    def __init__(self) -> None:
        self._middleware: list[Middleware[T]] = []

    def __len__(self) -> int:
        return len(self._middleware)

    def __contains__(self, middleware: object) -> bool:
        return middleware in self._middleware

    def use(self, middleware: Middleware[T]) -> Dispatcher[T]:
        """Append ``middleware`` to the end of the pipeline."""
        self._middleware.append(middleware)
        return self

    def remove(self, middleware: Middleware[T]) -> Dispatcher[T]:
        """Drop ``middleware`` from the pipeline; unknown middleware is ignored."""
        if middleware in self._middleware:
            self._middleware.remove(middleware)
        return self

    def dispatch(self, payload: T) -> T:
        """Thread ``payload`` through every middleware and return the result."""
        # Snapshot so middleware registered mid-dispatch waits for the next call.
        for middleware in list(self._middleware):
            payload = middleware(payload)
        return payload


@dataclass(slots=True)
class Hooks:
    """The three pipelines every node carries."""

    init: Dispatcher[Any] = field(default_factory=Dispatcher)
    input: Dispatcher[Any] = field(default_factory=Dispatcher)
    commit: Dispatcher[Any] = field(default_factory=Dispatcher)


def create_hooks() -> Hooks:
    """Return a fresh, empty set of hook pipelines."""
    return Hooks()
