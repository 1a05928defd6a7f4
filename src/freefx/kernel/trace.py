"""Runtime trace of chain execution - separate from the values being computed.

Drivers record a begin event, one ``step`` event per resolved operation
(parented to the begin event), and an end event carrying the step count and
elapsed time. The interpreted values are identical with or without a trace.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True)
class Evidence:
    """A single execution event."""

    action: str
    id: int = 0
    parent_id: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    info: dict[str, Any] = field(default_factory=dict)
    duration_ms: float | None = None


class Trace:
    """Append-only event log filled by the drivers.

    Not thread-safe; the core runs on a single thread. With ``enabled=False``
    every ``record`` is a no-op returning None.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._events: list[Evidence] = []

    def record(
        self,
        action: str,
        info: dict[str, Any] | None = None,
        parent_id: int | None = None,
        duration_ms: float | None = None,
    ) -> int | None:
        """Append an event and return its id (its position in the log)."""
        if not self.enabled:
            return None
        event_id = len(self._events)
        self._events.append(
            Evidence(action, event_id, parent_id, info=info or {}, duration_ms=duration_ms)
        )
        return event_id

    def get_events(self) -> list[Evidence]:
        return list(self._events)

    def find_all(self, action: str) -> list[Evidence]:
        """Events with the given action, in recording order."""
        return [ev for ev in self._events if ev.action == action]

    def __len__(self) -> int:
        return len(self._events)
