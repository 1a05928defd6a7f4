"""A drone mission replayed against a mock and against the real client."""

from __future__ import annotations

from typing import Literal

from freefx import IO, DriverConfig, InterpreterRegistry, Operation, Trace, Writer, fold_map, lift_f
from freefx.runtime.interpreters import recording_interpreter


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


def mission(drone_id: str):
    return (
        lift_f(Launch(drone_id=drone_id))
        .flat_map(lambda _: lift_f(SendSamples(drone_id=drone_id, samples="{}", address="addr")))
        .flat_map(lambda _: lift_f(SelfDestruct(drone_id=drone_id)))
    )


class ConsoleDrone:
    """Pretend hardware client."""

    def launch(self, drone_id: str) -> str:
        print(f"[{drone_id}] launching")
        return "airborne"

    def send_samples(self, drone_id: str, samples: str, address: str) -> str:
        print(f"[{drone_id}] sending {samples} to {address}")
        return "sent"

    def self_destruct(self, drone_id: str) -> str:
        print(f"[{drone_id}] self destruct")
        return "gone"


def real_interpreter(client: ConsoleDrone) -> InterpreterRegistry:
    return InterpreterRegistry(
        {
            "launch": lambda op: IO.delay(lambda: client.launch(op.drone_id)),
            "send_samples": lambda op: IO.delay(
                lambda: client.send_samples(op.drone_id, op.samples, op.address)
            ),
            "self_destruct": lambda op: IO.delay(lambda: client.self_destruct(op.drone_id)),
        }
    )


if __name__ == "__main__":
    mock = recording_interpreter(["launch", "send_samples", "self_destruct"])
    for line in fold_map(mission("D1"), mock, Writer.pure).logs:
        print("would run:", line)

    trace = Trace()
    action = fold_map(mission("D1"), real_interpreter(ConsoleDrone()), IO.pure, DriverConfig(trace=trace))
    print("result:", action.run())
    print("steps traced:", [ev.info["kind"] for ev in trace.find_all("step")])
