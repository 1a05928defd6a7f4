"""Tests for the maybe chain simulated on top of the free monad."""

import pytest
from pydantic import ValidationError

from freefx import DriverConfig, Id, JustOp, NothingOp, Trace, TypeMismatch, just, nothing, run_maybe
from freefx.kernel.free import Suspend


def test_absence_short_circuits() -> None:
    program = (
        just(4)
        .flat_map(lambda i: just(2 * i.x))
        .flat_map(lambda i: nothing())
        .flat_map(lambda i: just(i.x + 1))
    )
    assert run_maybe(program) == NothingOp()


def test_presence_runs_to_the_end() -> None:
    program = just(4).flat_map(lambda i: just(2 * i.x)).flat_map(lambda i: just(i.x + 1))
    assert run_maybe(program) == JustOp(x=9)


def test_continuations_after_absence_never_run() -> None:
    calls: list[object] = []

    def after(i: object):
        calls.append(i)
        return just(0)

    run_maybe(nothing().flat_map(after))
    assert calls == []


def test_absence_returned_without_stepping_past_it() -> None:
    trace = Trace()
    run_maybe(just(1).flat_map(lambda i: nothing()), DriverConfig(trace=trace))
    assert [ev.info["kind"] for ev in trace.find_all("step")] == ["just"]


def test_arithmetic_on_unwrapped_record_is_flagged() -> None:
    program = just(1).flat_map(lambda res: just(res + 1))
    with pytest.raises(TypeMismatch) as exc:
        run_maybe(program)
    assert exc.value.value == JustOp(x=1)


@pytest.mark.parametrize("op", [
    lambda r: r * 2,
    lambda r: 2 * r,
    lambda r: r - 1,
    lambda r: r / 2,
    lambda r: "tag" + r,
])
def test_record_rejects_numeric_operators(op) -> None:
    with pytest.raises(TypeMismatch):
        op(JustOp(x=3))


def test_chain_must_end_in_pure() -> None:
    with pytest.raises(TypeMismatch):
        run_maybe(Suspend(JustOp(x=1), lambda r: Id(r)))


def test_records_are_immutable() -> None:
    record = JustOp(x=1)
    with pytest.raises(ValidationError):
        record.x = 2  # type: ignore[misc]
