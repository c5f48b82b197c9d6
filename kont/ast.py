"""Expression nodes consumed by the evaluator.

Nodes are frozen dataclasses: once the reader (or a test) builds a tree, nothing
in the evaluator or the lowering pass mutates it. Child sequences are tuples.
`ContinuationInvoke` and `EscapeBinder` are sugar; `kont.evaluation.lowering`
can rewrite them away, but the evaluator also understands them directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class NumberLiteral:
    value: int


@dataclass(frozen=True)
class BooleanLiteral:
    value: bool


@dataclass(frozen=True)
class Variable:
    name: str


@dataclass(frozen=True)
class ProcedureLiteral:
    params: tuple[str, ...]
    body: Expression


@dataclass(frozen=True)
class PrimitiveCall:
    op: str
    args: tuple[Expression, ...]


@dataclass(frozen=True)
class Call:
    operator: Expression
    operands: tuple[Expression, ...]


@dataclass(frozen=True)
class Conditional:
    test: Expression
    then: Expression
    else_: Expression


@dataclass(frozen=True)
class Let:
    bindings: tuple[tuple[str, Expression], ...]
    body: Expression


@dataclass(frozen=True)
class RecBinding:
    """One `name (params) body` clause of a letrec."""
    name: str
    params: tuple[str, ...]
    body: Expression


@dataclass(frozen=True)
class LetRec:
    bindings: tuple[RecBinding, ...]
    body: Expression


@dataclass(frozen=True)
class Assign:
    name: str
    expr: Expression


@dataclass(frozen=True)
class Sequence:
    exprs: tuple[Expression, ...]


@dataclass(frozen=True)
class RefOf:
    name: str


@dataclass(frozen=True)
class TryCatch:
    body: Expression
    value_var: str
    cont_var: str
    handler: Expression


@dataclass(frozen=True)
class Raise:
    expr: Expression


@dataclass(frozen=True)
class ContinuationInvoke:
    cont_expr: Expression
    value_expr: Expression


@dataclass(frozen=True)
class EscapeBinder:
    name: str
    body: Expression


Expression = Union[
    NumberLiteral,
    BooleanLiteral,
    Variable,
    ProcedureLiteral,
    PrimitiveCall,
    Call,
    Conditional,
    Let,
    LetRec,
    Assign,
    Sequence,
    RefOf,
    TryCatch,
    Raise,
    ContinuationInvoke,
    EscapeBinder,
]
