"""Executable algebraic laws.

Each check returns True when the law holds for the given arguments; the
property tests feed them generated values.

Function wrappers are compared by running both sides on a sample input,
since two distinct closures never compare equal.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from freefx.kernel.fn import FnWrapper
from freefx.kernel.typeclasses import Functor, Monad, compose, identity


def functor_identity(w: Functor[Any]) -> bool:
    """w.map(identity) == w"""
    return w.map(identity) == w


def functor_composition(w: Functor[Any], f: Callable[[Any], Any], g: Callable[[Any], Any]) -> bool:
    """w.map(f).map(g) == w.map(compose(g, f))"""
    return w.map(f).map(g) == w.map(compose(g, f))


def contravariant_identity(w: FnWrapper[Any, Any], x: Any) -> bool:
    """w.contramap(identity) behaves like w"""
    return w.contramap(identity).run(x) == w.run(x)


def contravariant_composition(
    w: FnWrapper[Any, Any], f: Callable[[Any], Any], g: Callable[[Any], Any], x: Any
) -> bool:
    """w.contramap(f).contramap(g) run on x equals w run on f(g(x))"""
    return w.contramap(f).contramap(g).run(x) == w.run(f(g(x)))


def left_identity(pure: Callable[[Any], Monad[Any]], x: Any, f: Callable[[Any], Monad[Any]]) -> bool:
    """pure(x).flat_map(f) == f(x)"""
    return pure(x).flat_map(f) == f(x)


def right_identity(m: Monad[Any]) -> bool:
    """m.flat_map(pure) == m"""
    return m.flat_map(type(m).pure) == m


def associativity(m: Monad[Any], f: Callable[[Any], Monad[Any]], g: Callable[[Any], Monad[Any]]) -> bool:
    """m.flat_map(f).flat_map(g) == m.flat_map(lambda x: f(x).flat_map(g))"""
    return m.flat_map(f).flat_map(g) == m.flat_map(lambda x: f(x).flat_map(g))
