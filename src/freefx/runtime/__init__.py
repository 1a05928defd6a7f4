"""Runtime module - interpreters and the monads they interpret into."""

from freefx.runtime.interpreters import (
    Interpreter,
    InterpreterRegistry,
    describe,
    identity_interpreter,
    recording_interpreter,
)
from freefx.runtime.io import IO
from freefx.runtime.writer import Writer

__all__ = [
    "Interpreter",
    "InterpreterRegistry",
    "identity_interpreter",
    "recording_interpreter",
    "describe",
    "IO",
    "Writer",
]
