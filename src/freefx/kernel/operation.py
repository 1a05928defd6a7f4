"""Reified operations - inert data describing an action to take later."""

from __future__ import annotations

from typing import Any, NoReturn

from pydantic import BaseModel, ConfigDict

from freefx.kernel.errors import TypeMismatch


class Operation(BaseModel):
    """Immutable record ``{kind, ...params}``.

    Subclasses pin ``kind`` with a default and declare their parameters:

        class Launch(Operation):
            kind: Literal["launch"] = "launch"
            drone_id: str

    Records carry data only. Arithmetic on a record raises TypeMismatch so a
    continuation that forgets to unwrap a payload fails loudly instead of
    producing garbage downstream.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: str

    def params(self) -> dict[str, Any]:
        """Parameters of the operation, without the kind tag."""
        return self.model_dump(exclude={"kind"})

    def _unwrapped(self, other: Any = None) -> NoReturn:
        raise TypeMismatch(
            f"Arithmetic on a '{self.kind}' record; unwrap its payload first",
            self,
        )

    __add__ = __radd__ = _unwrapped
    __sub__ = __rsub__ = _unwrapped
    __mul__ = __rmul__ = _unwrapped
    __truediv__ = __rtruediv__ = _unwrapped
    __floordiv__ = __rfloordiv__ = _unwrapped
    __mod__ = __rmod__ = _unwrapped
    __pow__ = __rpow__ = _unwrapped
