"""Capability interfaces shared by every wrapper.

- Functor: map a function over a wrapped value
- Monad: a functor that can also sequence (flat_map)
- ContravariantFunctor: a wrapped function whose input side can be transformed

Monads also expose ``tail_rec``, the hook drivers use to iterate over a chain
without growing the call stack. Concrete wrappers override it with a loop; the
default here is the plain recursive definition.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from freefx.kernel.errors import TypeMismatch

T = TypeVar("T")
U = TypeVar("U")
V = TypeVar("V")
A = TypeVar("A")


class Functor(ABC, Generic[T]):
    """
    A structure that supports mapping a function over the value it holds.

    Laws (for all f: a->b, g: b->c):
      1) Identity:     w.map(identity) == w
      2) Composition:  w.map(f).map(g) == w.map(compose(g, f))
    """

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> Functor[U]:
        """Map a pure function over the structure."""
        raise NotImplementedError


class Monad(Functor[T], ABC):
    """
    A functor whose chained functions themselves produce wrapped values.

    Laws (for all x and functions f: a -> m b, g: b -> m c):
      1) Left identity:  pure(x).flat_map(f) == f(x)
      2) Right identity: m.flat_map(pure)    == m
      3) Associativity:  m.flat_map(f).flat_map(g) == m.flat_map(lambda x: f(x).flat_map(g))
    """

    @classmethod
    @abstractmethod
    def pure(cls, value: U) -> Monad[U]:
        """Lift a value into the monad."""
        raise NotImplementedError

    @abstractmethod
    def flat_map(self, f: Callable[[T], Monad[U]]) -> Monad[U]:
        """Chain a function that returns a wrapped value."""
        raise NotImplementedError

    def map(self, f: Callable[[T], U]) -> Monad[U]:
        return self.flat_map(lambda a: self.__class__.pure(f(a)))

    def tail_rec(self, f: Callable[[A], Monad[Loop[A] | Done[U]]]) -> Monad[U]:
        """Iterate ``f`` starting from this wrapped step until it yields ``Done``.

        ``self`` must wrap a ``Loop`` or ``Done`` record. This default is
        recursive; wrappers meant to drive long chains override it.
        """
        def step(s: Loop[A] | Done[U]) -> Monad[U]:
            if isinstance(s, Done):
                return self.__class__.pure(s.value)
            return ensure_monad(f(s.value), "tail_rec step").tail_rec(f)

        return self.flat_map(step)

    def __rshift__(self, f: Callable[[T], Monad[U]]) -> Monad[U]:
        """Syntactic sugar: m >> f == m.flat_map(f)"""
        return self.flat_map(f)


class ContravariantFunctor(ABC, Generic[T]):
    """
    A wrapped consumer of ``T`` whose input side can be transformed.

    Laws:
      1) Identity:     w.contramap(identity) == w
      2) Composition:  w.contramap(f).contramap(g) == w.contramap(compose(f, g))
    """

    @abstractmethod
    def contramap(self, f: Callable[[U], T]) -> ContravariantFunctor[U]:
        """Pre-compose a function on the input side."""
        raise NotImplementedError


@dataclass(frozen=True)
class Loop(Generic[A]):
    """Iteration step: continue with ``value``."""

    value: A


@dataclass(frozen=True)
class Done(Generic[T]):
    """Iteration step: stop with ``value``."""

    value: T


def ensure_monad(value: Any, where: str) -> Monad[Any]:
    """Return ``value`` if it is a monad, otherwise raise TypeMismatch."""
    if not isinstance(value, Monad):
        raise TypeMismatch(
            f"{where} must return a monadic wrapper, got {type(value).__name__}",
            value,
        )
    return value


def identity(x: T) -> T:
    """Identity function."""
    return x


def compose(f: Callable[[U], V], g: Callable[[T], U]) -> Callable[[T], V]:
    """Function composition: compose(f, g)(x) == f(g(x))"""
    return lambda x: f(g(x))
