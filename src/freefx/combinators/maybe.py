"""Maybe simulated on top of the free monad.

Presence and absence are reified as ``JustOp``/``NothingOp`` records lifted
with ``lift_f``. ``run_maybe`` is the dedicated driver: the first absence
record it meets short-circuits the rest of the chain and is returned as is.

Continuations receive the record, not its payload, and must unwrap it
themselves (``lambda i: just(i.x + 1)``). Doing arithmetic on the record
raises TypeMismatch.
"""

from __future__ import annotations

from typing import Any, Literal

from freefx.kernel.config import DriverConfig
from freefx.kernel.errors import TypeMismatch
from freefx.kernel.free import Pure, StepMeter, Suspend, lift_f
from freefx.kernel.operation import Operation


class JustOp(Operation):
    """A present value."""

    kind: Literal["just"] = "just"
    x: Any


class NothingOp(Operation):
    """The absence marker."""

    kind: Literal["nothing"] = "nothing"


def just(x: Any) -> Suspend[JustOp, JustOp]:
    return lift_f(JustOp(x=x))


def nothing() -> Suspend[NothingOp, NothingOp]:
    return lift_f(NothingOp())


def run_maybe(program: Any, config: DriverConfig | None = None) -> Any:
    """Drive a maybe chain, short-circuiting on the first NothingOp.

    Returns the NothingOp record if one was reached, otherwise the value of
    the terminal Pure (normally the last JustOp).
    """
    meter = StepMeter(config, "maybe")
    node = program
    while isinstance(node, Suspend):
        if isinstance(node.data, NothingOp):
            meter.finish()
            return node.data
        meter.tick(node.data)
        node = node.run()
    meter.finish()
    if not isinstance(node, Pure):
        raise TypeMismatch(
            f"maybe chain must end in a Pure node, got {type(node).__name__}", node
        )
    return node.value
