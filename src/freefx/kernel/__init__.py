"""Kernel layer - pure wrappers, the free monad and its drivers."""

from freefx.kernel.config import DriverConfig
from freefx.kernel.errors import ConstructionError, FreefxError, TypeMismatch, UnhandledOperation
from freefx.kernel.fn import FnWrapper, MFnWrapper, ask, asks, wrap
from freefx.kernel.free import Free, Pure, Suspend, drive, fold_map, lift_f
from freefx.kernel.identity import Id, lift
from freefx.kernel.operation import Operation
from freefx.kernel.trace import Evidence, Trace
from freefx.kernel.typeclasses import (
    ContravariantFunctor,
    Done,
    Functor,
    Loop,
    Monad,
    compose,
    identity,
)

__all__ = [
    # Typeclasses
    "Functor",
    "Monad",
    "ContravariantFunctor",
    "Loop",
    "Done",
    "compose",
    "identity",
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
    "lift_f",
    "drive",
    "fold_map",
    "Operation",
    # Errors
    "FreefxError",
    "UnhandledOperation",
    "TypeMismatch",
    "ConstructionError",
    # Config & tracing
    "DriverConfig",
    "Trace",
    "Evidence",
]
