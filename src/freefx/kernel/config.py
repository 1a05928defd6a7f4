"""Driver configuration."""

from __future__ import annotations

from dataclasses import dataclass

from freefx.kernel.trace import Trace


@dataclass(frozen=True)
class DriverConfig:
    """Options shared by ``drive``, ``fold_map`` and the maybe runner.

    Attributes:
        max_steps: Upper bound on Suspend nodes a driver will resolve.
            ``None`` means unbounded; chain termination is then the
            caller's responsibility.
        trace: Optional trace receiving one event per resolved step.
    """

    max_steps: int | None = None
    trace: Trace | None = None

    def __post_init__(self) -> None:
        if self.max_steps is not None and self.max_steps <= 0:
            raise ValueError("max_steps must be positive")


DEFAULT_CONFIG = DriverConfig()
