"""Continuation frames: the rest of the computation as heap data.

A continuation is either `Halt` (nothing left to do) or a frame describing one
piece of pending work together with the environment it needs and the `outer`
continuation to hand its result to. Frames are immutable, so a chain can be
captured in a Continuation value, shared by many later continuations, and
resumed any number of times.

`TryFrame` is also the marker the handler search looks for when a value is
raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from kont import KontValue
from kont.ast import Expression
from kont.types.environment import Environment


class Cont:
    """Base of every continuation node."""

    __slots__ = ()

    def frames(self):
        """Yield this node and every saved continuation outward, ending at Halt."""
        k: Optional[Cont] = self
        while k is not None:
            yield k
            k = getattr(k, "outer", None)

    def __repr__(self) -> str:
        kinds = [type(k).__name__ for k in self.frames()]
        if len(kinds) > 6:
            kinds = kinds[:5] + [f"... {len(kinds) - 6} more", kinds[-1]]
        return f"<Cont {' -> '.join(kinds)}>"


class Halt(Cont):
    """End of the computation."""

    __slots__ = ()


@dataclass(frozen=True, eq=False, repr=False)
class Frame(Cont):
    outer: Cont
    env: Environment


@dataclass(frozen=True, eq=False, repr=False)
class PrimArgsFrame(Frame):
    """Evaluating the arguments of primitive `op`; `done` already reduced."""
    op: str
    done: tuple[KontValue, ...]
    pending: tuple[Expression, ...]


@dataclass(frozen=True, eq=False, repr=False)
class CallArgsFrame(Frame):
    """Evaluating operator then operands of a call.

    `done[0]` is the operator value once it has been computed.
    """
    done: tuple[KontValue, ...]
    pending: tuple[Expression, ...]


@dataclass(frozen=True, eq=False, repr=False)
class IfFrame(Frame):
    then: Expression
    else_: Expression


@dataclass(frozen=True, eq=False, repr=False)
class LetFrame(Frame):
    names: tuple[str, ...]
    done: tuple[KontValue, ...]
    pending: tuple[Expression, ...]
    body: Expression


@dataclass(frozen=True, eq=False, repr=False)
class AssignFrame(Frame):
    name: str


@dataclass(frozen=True, eq=False, repr=False)
class SeqFrame(Frame):
    pending: tuple[Expression, ...]


@dataclass(frozen=True, eq=False, repr=False)
class TryFrame(Frame):
    value_var: str
    cont_var: str
    handler: Expression


@dataclass(frozen=True, eq=False, repr=False)
class RaiseFrame(Frame):
    pass


@dataclass(frozen=True, eq=False, repr=False)
class InvokeContFrame(Frame):
    """Continuation expression of `throw` is being evaluated."""
    value_expr: Expression


@dataclass(frozen=True, eq=False, repr=False)
class InvokeValueFrame(Frame):
    """Value of `throw` is being evaluated; `target` is where it goes."""
    target: KontValue
