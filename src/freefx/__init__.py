from .combinators import JustOp, NothingOp, just, nothing, run_maybe
from .kernel import (
    ConstructionError,
    DriverConfig,
    FnWrapper,
    Free,
    FreefxError,
    Id,
    MFnWrapper,
    Operation,
    Pure,
    Suspend,
    Trace,
    TypeMismatch,
    UnhandledOperation,
    ask,
    asks,
    drive,
    fold_map,
    lift,
    lift_f,
    wrap,
)
from .runtime import IO, InterpreterRegistry, Writer, identity_interpreter, recording_interpreter

__all__ = [
    # Wrappers
    "Id",
    "lift",
    "FnWrapper",
    "MFnWrapper",
    "wrap",
    "ask",
    "asks",
    # Free monad
    "Free",
    "Pure",
    "Suspend",
    "Operation",
    "lift_f",
    "drive",
    "fold_map",
    # Interpreters
    "InterpreterRegistry",
    "identity_interpreter",
    "recording_interpreter",
    "IO",
    "Writer",
    # Maybe
    "JustOp",
    "NothingOp",
    "just",
    "nothing",
    "run_maybe",
    # Errors
    "FreefxError",
    "UnhandledOperation",
    "TypeMismatch",
    "ConstructionError",
    # Config & tracing
    "DriverConfig",
    "Trace",
]
