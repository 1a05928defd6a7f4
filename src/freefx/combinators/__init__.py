"""Combinators built on the kernel: simulated sum types and law checks."""

from freefx.combinators.maybe import JustOp, NothingOp, just, nothing, run_maybe

__all__ = [
    "JustOp",
    "NothingOp",
    "just",
    "nothing",
    "run_maybe",
]
