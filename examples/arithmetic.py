"""One arithmetic program, two meanings: rendered as text and evaluated."""

from __future__ import annotations

from typing import Any, Literal

from freefx import Id, InterpreterRegistry, Operation, fold_map, lift_f


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


render = InterpreterRegistry()


@render.handles("add")
def render_add(op: Add) -> Id[str]:
    return Id(f"({op.x} + {op.y})")


@render.handles("mul")
def render_mul(op: Mul) -> Id[str]:
    return Id(f"({op.x} * {op.y})")


@render.handles("div")
def render_div(op: Div) -> Id[str]:
    return Id(f"({op.x} / {op.y})")


evaluate = InterpreterRegistry(
    {
        "add": lambda op: Id(op.x + op.y),
        "mul": lambda op: Id(op.x * op.y),
        "div": lambda op: Id(op.x / op.y),
    }
)


def program():
    return add(5, 1).flat_map(lambda x: mul(x, 2)).flat_map(lambda x: div(x, 6))


if __name__ == "__main__":
    print(fold_map(program(), render, Id).extract())
    print(fold_map(program(), evaluate, Id).extract())
