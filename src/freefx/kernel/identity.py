"""Identity wrapper - the minimal functor/monad holding one value."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from freefx.kernel.errors import TypeMismatch
from freefx.kernel.typeclasses import Done, Loop, Monad, ensure_monad

T = TypeVar("T")
U = TypeVar("U")
A = TypeVar("A")


@dataclass(frozen=True)
class Id(Monad[T], Generic[T]):
    """Identity monad.

    The universal lift target: whenever a function has to return
    *something* monadic but needs no extra behavior, it returns an Id.
    """

    value: T

    @classmethod
    def pure(cls, value: U) -> Id[U]:
        return Id(value)

    def map(self, f: Callable[[T], U]) -> Id[U]:
        return Id(f(self.value))

    def flat_map(self, f: Callable[[T], Monad[U]]) -> Monad[U]:
        return ensure_monad(f(self.value), "Id.flat_map callback")

    def extract(self) -> T:
        """Return the raw value."""
        return self.value

    def tail_rec(self, f: Callable[[A], Monad[Loop[A] | Done[U]]]) -> Id[U]:
        step = self.value
        while isinstance(step, Loop):
            wrapped = f(step.value)
            if not isinstance(wrapped, Id):
                raise TypeMismatch(
                    f"Id.tail_rec step must return Id, got {type(wrapped).__name__}",
                    wrapped,
                )
            step = wrapped.value
        if not isinstance(step, Done):
            raise TypeMismatch("Id.tail_rec expects Loop or Done steps", step)
        return Id(step.value)

    def __repr__(self) -> str:
        return f"Id({self.value!r})"


def lift(value: Any) -> Id[Any]:
    """Wrap a raw value in the identity monad."""
    return Id(value)
