from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from freefx import IO, Id, InterpreterRegistry, Operation, lift_f, recording_interpreter


# Arithmetic program


class Add(Operation):
    kind: Literal["add"] = "add"
    x: Any
    y: Any


class Mul(Operation):
    kind: Literal["mul"] = "mul"
    x: Any
    y: Any


class Div(Operation):
    kind: Literal["div"] = "div"
    x: Any
    y: Any


def add(x: Any, y: Any):
    return lift_f(Add(x=x, y=y))


def mul(x: Any, y: Any):
    return lift_f(Mul(x=x, y=y))


def div(x: Any, y: Any):
    return lift_f(Div(x=x, y=y))


def make_render_interpreter() -> InterpreterRegistry:
    return InterpreterRegistry(
        {
            "add": lambda op: Id(f"({op.x} + {op.y})"),
            "mul": lambda op: Id(f"({op.x} * {op.y})"),
            "div": lambda op: Id(f"({op.x} / {op.y})"),
        }
    )


def make_eval_interpreter() -> InterpreterRegistry:
    return InterpreterRegistry(
        {
            "add": lambda op: Id(op.x + op.y),
            "mul": lambda op: Id(op.x * op.y),
            "div": lambda op: Id(op.x / op.y),
        }
    )


def arithmetic_program():
    return add(5, 1).flat_map(lambda x: mul(x, 2)).flat_map(lambda x: div(x, 6))


# Drone program


class Launch(Operation):
    kind: Literal["launch"] = "launch"
    drone_id: str


class SendSamples(Operation):
    kind: Literal["send_samples"] = "send_samples"
    drone_id: str
    samples: str
    address: str


class SelfDestruct(Operation):
    kind: Literal["self_destruct"] = "self_destruct"
    drone_id: str


DRONE_KINDS = ("launch", "send_samples", "self_destruct")


def drone_program(drone_id: str = "D1"):
    return (
        lift_f(Launch(drone_id=drone_id))
        .flat_map(lambda _: lift_f(SendSamples(drone_id=drone_id, samples="{}", address="addr")))
        .flat_map(lambda _: lift_f(SelfDestruct(drone_id=drone_id)))
    )


@dataclass
class FakeDroneClient:
    """Stands in for the real drone API; records every call it receives."""

    calls: list[tuple[str, ...]] = field(default_factory=list)

    def launch(self, drone_id: str) -> str:
        self.calls.append(("launch", drone_id))
        return f"{drone_id} airborne"

    def send_samples(self, drone_id: str, samples: str, address: str) -> str:
        self.calls.append(("send_samples", drone_id, samples, address))
        return "sent"

    def self_destruct(self, drone_id: str) -> str:
        self.calls.append(("self_destruct", drone_id))
        return "gone"


def make_real_drone_interpreter(client: FakeDroneClient) -> InterpreterRegistry:
    return InterpreterRegistry(
        {
            "launch": lambda op: IO.delay(lambda: client.launch(op.drone_id)),
            "send_samples": lambda op: IO.delay(
                lambda: client.send_samples(op.drone_id, op.samples, op.address)
            ),
            "self_destruct": lambda op: IO.delay(lambda: client.self_destruct(op.drone_id)),
        }
    )


def make_mock_drone_interpreter() -> InterpreterRegistry:
    return recording_interpreter(DRONE_KINDS)
