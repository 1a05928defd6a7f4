"""Error types raised by wrappers, drivers and interpreters."""

from __future__ import annotations

from typing import Any


class FreefxError(Exception):
    """Base class for all freefx errors."""


class UnhandledOperation(FreefxError, LookupError):
    """An interpreter was handed an operation kind it does not cover.

    Fatal to the fold that triggered it; the operation is preserved
    for debugging.
    """

    def __init__(self, operation: Any) -> None:
        self.operation = operation
        self.kind = getattr(operation, "kind", type(operation).__name__)
        super().__init__(f"No handler for operation kind '{self.kind}'")

    def __repr__(self) -> str:
        return f"UnhandledOperation(kind={self.kind!r}, operation={self.operation!r})"


class TypeMismatch(FreefxError, TypeError):
    """A callback returned a value outside the expected wrapper family.

    The offending value is kept so callers can see what came back.
    """

    def __init__(self, message: str, value: object) -> None:
        self.value = value
        super().__init__(message)

    def __repr__(self) -> str:
        return f"TypeMismatch({super().__repr__()}, value={self.value!r})"


class ConstructionError(FreefxError):
    """A chain was built or driven in a way that cannot reach a result."""
