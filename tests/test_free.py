"""Tests for the free monad nodes and drivers."""

from __future__ import annotations

import pytest

from freefx import (
    ConstructionError,
    DriverConfig,
    Id,
    Pure,
    Suspend,
    Trace,
    TypeMismatch,
    drive,
    fold_map,
    identity_interpreter,
    lift_f,
)
from fakes import Add, add


class TestPure:
    def test_map(self) -> None:
        assert Pure(2).map(lambda v: v + 1) == Pure(3)

    def test_left_identity(self) -> None:
        def g(v: int) -> Pure:
            return Pure(v * 3)

        assert Pure(4).flat_map(g) == g(4)

    def test_run_returns_value(self) -> None:
        assert Pure("x").run() == "x"
        assert Pure("x").extract() == "x"

    def test_flat_map_rejects_raw_value(self) -> None:
        with pytest.raises(TypeMismatch):
            Pure(1).flat_map(lambda v: v)


class TestSuspend:
    def test_chain_with_identity_continuations(self) -> None:
        chain = (
            Suspend(5, lambda x: Id(x + 1))
            .flat_map(lambda x: Id(x * 2))
            .flat_map(lambda x: Id(x + 1))
        )
        assert drive(chain).extract() == 13

    def test_map_keeps_continuation_wrapper(self) -> None:
        chain = Suspend(5, lambda x: Id(x + 1)).map(lambda x: x * 2)
        assert drive(chain) == Id(12)

    def test_map_after_flat_map_keeps_wrapper(self) -> None:
        chain = Suspend(1, lambda x: Id(x)).flat_map(lambda x: Id(x + 1)).map(str)
        assert drive(chain) == Id("2")

    def test_building_does_not_run_continuation(self) -> None:
        calls: list[int] = []

        def cont(x: int) -> Pure:
            calls.append(x)
            return Pure(x)

        chain = Suspend(1, cont).map(lambda v: v + 1).flat_map(lambda v: Pure(v * 2))
        assert calls == []
        assert drive(chain) == Pure(4)
        assert calls == [1]

    def test_run_is_one_step(self) -> None:
        chain = lift_f("a").flat_map(lambda a: lift_f(a + "b"))
        step = chain.run()
        assert isinstance(step, Suspend)
        assert step.data == "ab"
        assert step.run() == Pure("ab")

    def test_lift_f_terminates_after_operation(self) -> None:
        op = Add(x=1, y=2)
        node = lift_f(op)
        assert node.data == op
        assert node.run() == Pure(op)

    def test_non_callable_continuation(self) -> None:
        with pytest.raises(ConstructionError):
            Suspend(1, "not a function")  # type: ignore[arg-type]

    def test_continuation_must_return_wrapper(self) -> None:
        with pytest.raises(TypeMismatch):
            Suspend(1, lambda x: x).run()


class TestDrive:
    def test_pure_is_already_terminal(self) -> None:
        assert drive(Pure(7)) == Pure(7)

    def test_long_left_nested_chain(self) -> None:
        chain = lift_f(0)
        for _ in range(100_000):
            chain = chain.flat_map(lambda n: lift_f(n + 1))
        assert drive(chain).extract() == 100_000

    def test_long_map_chain(self) -> None:
        chain = lift_f(0)
        for _ in range(100_000):
            chain = chain.map(lambda n: n + 1)
        assert drive(chain).extract() == 100_000

    def test_max_steps_stops_runaway_chain(self) -> None:
        def forever(n: int) -> Suspend:
            return Suspend(n + 1, forever)

        with pytest.raises(ConstructionError):
            drive(Suspend(0, forever), DriverConfig(max_steps=50))

    def test_max_steps_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            DriverConfig(max_steps=0)

    def test_trace_records_each_step(self) -> None:
        trace = Trace()
        drive(add(1, 2).flat_map(lambda op: add(op.x, 3)), DriverConfig(trace=trace))
        steps = trace.find_all("step")
        assert [ev.info["kind"] for ev in steps] == ["add", "add"]
        assert trace.find_all("drive_end")[0].info["steps"] == 2
        begin = trace.find_all("drive_begin")[0]
        assert all(ev.parent_id == begin.id for ev in steps)


class TestFoldMap:
    def test_agrees_with_drive_under_identity_interpreter(self) -> None:
        chain = lift_f(3).flat_map(lambda n: lift_f(n * 4)).map(lambda n: n - 1)
        folded = fold_map(chain, identity_interpreter, Id)
        assert folded.extract() == drive(chain).extract() == 11

    def test_method_form(self) -> None:
        assert lift_f(2).fold_map(identity_interpreter, Id) == Id(2)

    def test_pure_uses_unit(self) -> None:
        assert fold_map(Pure(9), identity_interpreter, Id) == Id(9)

    def test_interpreter_result_replaces_datum(self) -> None:
        chain = lift_f(2).flat_map(lambda n: lift_f(n + 1))
        assert fold_map(chain, lambda n: Id(n * 10), Id) == Id(210)

    def test_interpreter_must_return_monad(self) -> None:
        with pytest.raises(TypeMismatch):
            fold_map(lift_f(1), lambda n: n, Id)

    def test_continuation_must_return_free_node(self) -> None:
        chain = Suspend(1, lambda x: Id(x))
        with pytest.raises(TypeMismatch):
            fold_map(chain, identity_interpreter, Id)

    def test_long_chain_is_stack_safe(self) -> None:
        chain = lift_f(0)
        for _ in range(100_000):
            chain = chain.flat_map(lambda n: lift_f(n + 1))
        assert fold_map(chain, identity_interpreter, Id).extract() == 100_000

    def test_max_steps(self) -> None:
        chain = lift_f(0).flat_map(lambda n: lift_f(n + 1))
        with pytest.raises(ConstructionError):
            fold_map(chain, identity_interpreter, Id, DriverConfig(max_steps=1))
