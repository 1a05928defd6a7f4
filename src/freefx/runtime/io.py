"""IO - a described side effect, performed only by the top-level driver.

Interpreters that give operations a *real* meaning return IO values instead
of acting inline. ``fold_map`` then sequences them into one IO, and nothing
happens until the caller invokes ``run()`` on the result.
"""

from __future__ import annotations

from abc import ABC
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from freefx.kernel.errors import TypeMismatch
from freefx.kernel.typeclasses import Done, Loop, Monad

T = TypeVar("T")
U = TypeVar("U")
A = TypeVar("A")


class IO(Monad[T], ABC):
    """Deferred action producing a ``T``.

    Three node types make up an IO value: an already-known value, a thunk,
    and a bind. ``run`` interprets them with an explicit continuation stack,
    executing each thunk once, in chain order.
    """

    @classmethod
    def pure(cls, value: U) -> IO[U]:
        return _IOPure(value)

    @staticmethod
    def delay(thunk: Callable[[], U]) -> IO[U]:
        """Describe a side effect without performing it."""
        if not callable(thunk):
            raise TypeMismatch(f"IO.delay needs a callable, got {type(thunk).__name__}", thunk)
        return _IODelay(thunk)

    def flat_map(self, f: Callable[[T], IO[U]]) -> IO[U]:
        return _IOBind(self, f)

    def map(self, f: Callable[[T], U]) -> IO[U]:
        return _IOBind(self, lambda value: _IOPure(f(value)))

    def tail_rec(self, f: Callable[[A], Monad[Loop[A] | Done[U]]]) -> IO[U]:
        def step(s: Loop[A] | Done[U]) -> IO[U]:
            if isinstance(s, Done):
                return _IOPure(s.value)
            return _expect_io(f(s.value)).flat_map(step)

        return self.flat_map(step)

    def run(self) -> T:
        """Perform the described effects and return the final value."""
        stack: list[Callable[[Any], IO[Any]]] = []
        current: IO[Any] = self
        while True:
            if isinstance(current, _IOBind):
                stack.append(current.f)
                current = current.source
                continue
            if isinstance(current, _IOPure):
                value = current.value
            else:
                value = current.thunk()  # type: ignore[attr-defined]
            if not stack:
                return value
            current = _expect_io(stack.pop()(value))


@dataclass(frozen=True)
class _IOPure(IO[T]):
    value: T

    def __repr__(self) -> str:
        return f"IO.pure({self.value!r})"


@dataclass(frozen=True)
class _IODelay(IO[T]):
    thunk: Callable[[], T]

    def __repr__(self) -> str:
        return "IO.delay(...)"


@dataclass(frozen=True)
class _IOBind(IO[T]):
    source: IO[Any]
    f: Callable[[Any], IO[T]]

    def __repr__(self) -> str:
        return f"IO.bind({self.source!r}, ...)"


def _expect_io(value: Any) -> IO[Any]:
    if not isinstance(value, IO):
        raise TypeMismatch(f"expected an IO action, got {type(value).__name__}", value)
    return value
