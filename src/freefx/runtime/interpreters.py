"""Interpreter support - dispatch from operation kind to meaning."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Protocol

from freefx.kernel.errors import UnhandledOperation
from freefx.kernel.identity import Id
from freefx.kernel.typeclasses import Monad, ensure_monad
from freefx.runtime.writer import Writer

Handler = Callable[[Any], Monad[Any]]


class Interpreter(Protocol):
    """Gives one reified operation a meaning, wrapped in some monad."""

    def __call__(self, op: Any) -> Monad[Any]: ...


class InterpreterRegistry:
    """Interpreter built from one handler per operation kind.

    Calling the registry with an operation dispatches on ``op.kind``.
    Kinds without a handler raise UnhandledOperation; nothing falls
    through silently.
    """

    def __init__(self, handlers: dict[str, Handler] | None = None) -> None:
        self._handlers: dict[str, Handler] = dict(handlers or {})

    def register(self, kind: str, handler: Handler) -> None:
        """Register the handler for ``kind``, replacing any previous one."""
        self._handlers[kind] = handler

    def handles(self, kind: str) -> Callable[[Handler], Handler]:
        """Decorator form of ``register``."""
        def decorator(handler: Handler) -> Handler:
            self.register(kind, handler)
            return handler

        return decorator

    def with_handler(self, kind: str, handler: Handler) -> InterpreterRegistry:
        """Copy of this registry with ``kind`` handled by ``handler``."""
        return InterpreterRegistry({**self._handlers, kind: handler})

    def kinds(self) -> frozenset[str]:
        """Operation kinds this interpreter covers."""
        return frozenset(self._handlers)

    def __contains__(self, kind: object) -> bool:
        return kind in self._handlers

    def __call__(self, op: Any) -> Monad[Any]:
        kind = getattr(op, "kind", None)
        handler = self._handlers.get(kind) if isinstance(kind, str) else None
        if handler is None:
            raise UnhandledOperation(op)
        return ensure_monad(handler(op), f"handler for '{kind}'")


def identity_interpreter(op: Any) -> Id[Any]:
    """Interpret every datum as itself."""
    return Id(op)


def describe(op: Any) -> str:
    """Render an operation as ``kind(param=value, ...)``."""
    params = op.params() if hasattr(op, "params") else {}
    args = ", ".join(f"{name}={value!r}" for name, value in params.items())
    return f"{getattr(op, 'kind', type(op).__name__)}({args})"


def recording_interpreter(
    kinds: Iterable[str],
    result: Callable[[Any], Any] = lambda op: None,
    render: Callable[[Any], str] = describe,
) -> InterpreterRegistry:
    """Mock interpreter: log each operation instead of performing it.

    Every handled operation becomes ``Writer(result(op), (render(op),))``;
    fold with ``Writer.pure`` and read ``.logs`` to see what would have run.
    """
    def handler(op: Any) -> Writer[Any]:
        return Writer.tell(render(op), result(op))

    return InterpreterRegistry({kind: handler for kind in kinds})
