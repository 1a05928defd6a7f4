"""Function wrappers - contravariant functor and the dependency-injection monad.

A ``FnWrapper`` holds a single-argument function and composes on both sides
of it without ever calling it. ``MFnWrapper`` adds ``flat_map``: the chained
callback receives the interim result and returns a wrapper that is run on the
*original* input, so an environment supplied once at the end of the chain is
visible to every injected step.

Example:
    >>> total = wrap(lambda cfg: 3).flat_map(
    ...     lambda qty: asks(lambda cfg: qty * cfg["price"])
    ... )
    >>> total.run({"price": 7})
    21
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from freefx.kernel.errors import ConstructionError, TypeMismatch
from freefx.kernel.typeclasses import ContravariantFunctor, Monad

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")
D = TypeVar("D")
X = TypeVar("X")


@dataclass(frozen=True)
class FnWrapper(ContravariantFunctor[A], Generic[A, B]):
    """Wrapper around a function ``A -> B``.

    Construction is side-effect free; ``fn`` only runs inside ``run``.
    """

    fn: Callable[[A], B]

    def __post_init__(self) -> None:
        if not callable(self.fn):
            raise ConstructionError(
                f"{type(self).__name__} needs a callable, got {type(self.fn).__name__}"
            )

    def _create(self, fn: Callable[[Any], Any]) -> FnWrapper[Any, Any]:
        """Create a wrapper of the same class around ``fn``."""
        return type(self)(fn)

    def map(self, f: Callable[[B], C]) -> FnWrapper[A, C]:
        """Post-compose ``f`` (output-side transform)."""
        fn = self.fn
        return self._create(lambda x: f(fn(x)))

    def contramap(self, f: Callable[[X], A]) -> FnWrapper[X, B]:
        """Pre-compose ``f`` (input-side transform)."""
        fn = self.fn
        return self._create(lambda x: fn(f(x)))

    def run(self, x: A) -> B:
        """Execute the composed function."""
        return self.fn(x)

    def __call__(self, x: A) -> B:
        return self.run(x)


@dataclass(frozen=True)
class MFnWrapper(FnWrapper[A, B], Monad[B]):
    """Function wrapper with ``flat_map`` - a Reader-style monad.

    Chains of environment-agnostic steps can ask for the environment with
    ``ask``/``asks`` and get it only when the whole chain is finally run.
    """

    @classmethod
    def pure(cls, value: C) -> MFnWrapper[Any, C]:
        """Wrapper that ignores its input and returns ``value``."""
        return cls(lambda _: value)

    def flat_map(self, g: Callable[[B], FnWrapper[A, D]]) -> MFnWrapper[A, D]:
        """Chain ``g``; the wrapper it returns runs on the same original input."""
        fn = self.fn

        def run(x: A) -> D:
            nxt = g(fn(x))
            if not isinstance(nxt, FnWrapper):
                raise TypeMismatch(
                    f"MFnWrapper.flat_map callback must return a FnWrapper, "
                    f"got {type(nxt).__name__}",
                    nxt,
                )
            return nxt.run(x)

        return type(self)(run)

    def concat(self, other: FnWrapper[A, B], op: Callable[[B, B], B]) -> MFnWrapper[A, B]:
        """Combine two wrappers over the same input with a binary operator.

        Intended for endofunctor wrappers, where input and output types match.
        """
        if not isinstance(other, FnWrapper):
            raise TypeMismatch(
                f"concat expects a FnWrapper, got {type(other).__name__}", other
            )
        fn = self.fn
        return type(self)(lambda x: op(fn(x), other.run(x)))

    def local(self, f: Callable[[X], A]) -> MFnWrapper[X, B]:
        """Run this wrapper against a modified environment."""
        return self.contramap(f)  # type: ignore[return-value]


def wrap(fn: Callable[[A], B]) -> MFnWrapper[A, B]:
    """Wrap a function so it can be mapped, contramapped and chained."""
    return MFnWrapper(fn)


def ask() -> MFnWrapper[A, A]:
    """Wrapper that returns its input (the injected environment)."""
    return MFnWrapper(lambda env: env)


def asks(f: Callable[[A], B]) -> MFnWrapper[A, B]:
    """Wrapper that projects a value out of the injected environment."""
    return MFnWrapper(f)
