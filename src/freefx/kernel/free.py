"""Free monad - a chain of reified operations kept as data.

A chain is a closed sum of two node types:

- ``Pure(value)``: terminal, holds the final value
- ``Suspend(data, next)``: one operation (or raw datum) plus the continuation
  that turns the resolved datum into the next node

Nothing in a chain runs while it is being built. ``drive`` resolves it by
feeding each datum straight into its continuation; ``fold_map`` first passes
every datum through an interpreter, so the same chain can be replayed as real
effects, as a mock log, or as a rendered string.

Both drivers are explicit loops. ``flat_map`` on a ``Suspend`` queues the
callback in an append-only tree instead of nesting closures, so chains built
from hundreds of thousands of binds resolve without growing the call stack.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, Union

from freefx.kernel.config import DEFAULT_CONFIG, DriverConfig
from freefx.kernel.errors import ConstructionError, TypeMismatch
from freefx.kernel.typeclasses import Done, Loop, Monad, ensure_monad

T = TypeVar("T")
U = TypeVar("U")
D = TypeVar("D")

logger = logging.getLogger(__name__)


class Free(Monad[T], ABC):
    """Base of the ``Pure | Suspend`` sum type."""

    @classmethod
    def pure(cls, value: U) -> Pure[U]:
        return Pure(value)

    @abstractmethod
    def run(self) -> Any:
        """Resolve one step: a Pure yields its value, a Suspend its next node."""
        raise NotImplementedError

    def drive(self, config: DriverConfig | None = None) -> Monad[T]:
        """Resolve the chain to its terminal node."""
        return drive(self, config)

    def fold_map(
        self,
        interpreter: Callable[[Any], Monad[Any]],
        unit: Callable[[Any], Monad[Any]],
        config: DriverConfig | None = None,
    ) -> Monad[Any]:
        """Interpret and sequence the chain into one monadic result."""
        return fold_map(self, interpreter, unit, config)


@dataclass(frozen=True)
class Pure(Free[T]):
    """Terminal node holding the final value."""

    value: T

    def map(self, f: Callable[[T], U]) -> Pure[U]:
        return Pure(f(self.value))

    def flat_map(self, f: Callable[[T], Monad[U]]) -> Monad[U]:
        return ensure_monad(f(self.value), "Pure.flat_map callback")

    def run(self) -> T:
        return self.value

    def extract(self) -> T:
        """Return the raw value."""
        return self.value

    def __repr__(self) -> str:
        return f"Pure({self.value!r})"


@dataclass(frozen=True, eq=False)
class _Then:
    """Queued callbacks: ``left`` runs before ``right``."""

    left: Binds
    right: Binds


@dataclass(frozen=True, eq=False)
class _Mapped:
    """A queued ``map`` callback; applied with the resumed node's own ``map``."""

    f: Callable[[Any], Any]


Binds = Union[Callable[[Any], Monad[Any]], _Mapped, _Then, None]


def _append(binds: Binds, more: Binds) -> Binds:
    if binds is None:
        return more
    if more is None:
        return binds
    return _Then(binds, more)


def _uncons(binds: Binds) -> tuple[Callable[[Any], Monad[Any]] | _Mapped, Binds]:
    """Split off the first queued callback, rotating the tree as needed."""
    while isinstance(binds, _Then) and isinstance(binds.left, _Then):
        binds = _Then(binds.left.left, _Then(binds.left.right, binds.right))
    if isinstance(binds, _Then):
        return binds.left, binds.right  # type: ignore[return-value]
    return binds, None  # type: ignore[return-value]


@dataclass(frozen=True, eq=False)
class Suspend(Free[T], Generic[D, T]):
    """Deferred operation ``data`` plus its continuation ``next``.

    Callbacks added with ``flat_map``/``map`` are queued in ``binds`` and run
    after ``next`` when the node is resumed; ``next`` itself is never called
    while the chain is being built. A queued ``map`` keeps the wrapper type
    of whatever the continuation returned, so a continuation producing ``Id``
    still ends in an ``Id``.
    """

    data: D
    next: Callable[[D], Monad[Any]]
    binds: Binds = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not callable(self.next):
            raise ConstructionError(
                f"Suspend continuation must be callable, got {type(self.next).__name__}"
            )

    def map(self, f: Callable[[T], U]) -> Suspend[D, U]:
        return Suspend(self.data, self.next, _append(self.binds, _Mapped(f)))

    def flat_map(self, f: Callable[[T], Monad[U]]) -> Suspend[D, U]:
        return Suspend(self.data, self.next, _append(self.binds, f))

    def resume(self, value: D) -> Monad[Any]:
        """Feed a resolved datum to the continuation and return the next node."""
        node = ensure_monad(self.next(value), "Suspend continuation")
        rest = self.binds
        while rest is not None:
            if isinstance(node, Suspend):
                return Suspend(node.data, node.next, _append(node.binds, rest))
            f, rest = _uncons(rest)
            if isinstance(f, _Mapped):
                node = Pure(f.f(node.value)) if isinstance(node, Pure) else node.map(f.f)
            elif isinstance(node, Pure):
                node = ensure_monad(f(node.value), "flat_map callback")
            else:
                node = node.flat_map(f)
        return node

    def run(self) -> Monad[Any]:
        return self.resume(self.data)


def lift_f(op: Any) -> Suspend[Any, Any]:
    """Wrap one reified operation in a Suspend that terminates right after it."""
    return Suspend(op, Pure)


class StepMeter:
    """Counts resolved steps, enforces ``max_steps`` and feeds the trace."""

    def __init__(self, config: DriverConfig | None, action: str) -> None:
        self.config = config or DEFAULT_CONFIG
        self.steps = 0
        self._action = action
        self._started = time.perf_counter()
        self._event_id: int | None = None
        trace = self.config.trace
        if trace is not None:
            self._event_id = trace.record(f"{action}_begin")
        logger.debug("%s started", action)

    def tick(self, data: Any) -> None:
        """Account for one Suspend node about to be resolved."""
        limit = self.config.max_steps
        if limit is not None and self.steps >= limit:
            raise ConstructionError(
                f"{self._action} did not reach a terminal node within {limit} steps"
            )
        self.steps += 1
        trace = self.config.trace
        if trace is not None:
            trace.record(
                "step",
                info={"kind": getattr(data, "kind", type(data).__name__), "index": self.steps},
                parent_id=self._event_id,
            )

    def finish(self) -> None:
        duration_ms = (time.perf_counter() - self._started) * 1000
        trace = self.config.trace
        if trace is not None:
            trace.record(
                f"{self._action}_end",
                info={"steps": self.steps},
                parent_id=self._event_id,
                duration_ms=duration_ms,
            )
        logger.debug("%s finished after %d steps", self._action, self.steps)


def drive(node: Monad[Any], config: DriverConfig | None = None) -> Monad[Any]:
    """Call ``run`` repeatedly until the node is no longer a Suspend.

    Returns the terminal node: a Pure, or whatever terminal monad a
    continuation produced (for example an Id). Use ``extract`` on it to get
    the raw value.
    """
    meter = StepMeter(config, "drive")
    while isinstance(node, Suspend):
        meter.tick(node.data)
        node = node.run()
    meter.finish()
    return node


def fold_map(
    node: Free[Any],
    interpreter: Callable[[Any], Monad[Any]],
    unit: Callable[[Any], Monad[Any]],
    config: DriverConfig | None = None,
) -> Monad[Any]:
    """Interpret every operation of the chain and sequence the results.

    For ``Pure(v)`` the result is ``unit(v)``; for ``Suspend(d, next)`` it is
    ``interpreter(d).flat_map(lambda r: fold_map(next(r), ...))``. The
    recursion is expressed through the target monad's ``tail_rec`` so it runs
    as a loop. Interpreted actions happen strictly in chain order.

    The fold starts inside ``unit(node).flat_map``, so for a deferred target
    such as IO each ``run()`` gets its own step count, ``max_steps`` budget
    and ``fold_begin``/``fold_end`` events.

    Raises:
        UnhandledOperation: propagated from the interpreter
        TypeMismatch: the interpreter, ``unit`` or a continuation returned
            something outside the expected wrapper family
    """

    def start(root: Any) -> Monad[Any]:
        meter = StepMeter(config, "fold")

        def done(value: Any) -> Done[Any]:
            meter.finish()
            return Done(value)

        def step(current: Any) -> Monad[Loop[Any] | Done[Any]]:
            if isinstance(current, Pure):
                return ensure_monad(unit(current.value), "fold_map unit").map(done)
            if isinstance(current, Suspend):
                meter.tick(current.data)
                interpreted = ensure_monad(interpreter(current.data), "interpreter")
                return interpreted.map(lambda result: Loop(_expect_free(current.resume(result))))
            raise TypeMismatch(
                f"fold_map expects a Pure or Suspend node, got {type(current).__name__}",
                current,
            )

        return step(root).tail_rec(step)

    return ensure_monad(unit(node), "fold_map unit").flat_map(start)


def _expect_free(node: Any) -> Free[Any]:
    if not isinstance(node, Free):
        raise TypeMismatch(
            f"continuation must return a Pure or Suspend node during fold_map, "
            f"got {type(node).__name__}",
            node,
        )
    return node
