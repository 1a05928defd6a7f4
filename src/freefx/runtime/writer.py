"""Writer - a value paired with the log lines produced while computing it."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from freefx.kernel.errors import TypeMismatch
from freefx.kernel.typeclasses import Done, Loop, Monad

T = TypeVar("T")
U = TypeVar("U")
A = TypeVar("A")


@dataclass(frozen=True)
class Writer(Monad[T], Generic[T]):
    """Log-accumulating monad.

    Mock interpreters return Writers so that everything they "did" comes
    back as data, in chain order, with no shared sink to inspect.
    """

    value: T
    logs: tuple[str, ...] = ()

    @classmethod
    def pure(cls, value: U) -> Writer[U]:
        return Writer(value)

    @staticmethod
    def tell(line: str, value: Any = None) -> Writer[Any]:
        """Writer holding ``value`` and a single log line."""
        return Writer(value, (line,))

    def map(self, f: Callable[[T], U]) -> Writer[U]:
        return Writer(f(self.value), self.logs)

    def flat_map(self, f: Callable[[T], Writer[U]]) -> Writer[U]:
        nxt = _expect_writer(f(self.value))
        return Writer(nxt.value, self.logs + nxt.logs)

    def tail_rec(self, f: Callable[[A], Monad[Loop[A] | Done[U]]]) -> Writer[U]:
        logs = list(self.logs)
        step = self.value
        while isinstance(step, Loop):
            wrapped = _expect_writer(f(step.value))
            logs.extend(wrapped.logs)
            step = wrapped.value
        if not isinstance(step, Done):
            raise TypeMismatch("Writer.tail_rec expects Loop or Done steps", step)
        return Writer(step.value, tuple(logs))

    def extract(self) -> T:
        """Return the raw value, dropping the logs."""
        return self.value


def _expect_writer(value: Any) -> Writer[Any]:
    if not isinstance(value, Writer):
        raise TypeMismatch(f"expected a Writer, got {type(value).__name__}", value)
    return value
