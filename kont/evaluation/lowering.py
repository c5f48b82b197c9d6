"""Rewrite escape-continuation sugar into primitive forms.

    (letcc k body)   =>  (callcc (lambda (k) body))
    (throw c v)      =>  (c v)

Both rewrites preserve evaluation order and store allocation, so a program
gives the same value and leaves the same store whether it is evaluated
directly or after lowering. Every rewritten form bumps the matching
process-lifetime counter in kont.runtime_context.
"""

from __future__ import annotations

from kont.ast import (
    Assign,
    BooleanLiteral,
    Call,
    Conditional,
    ContinuationInvoke,
    EscapeBinder,
    Expression,
    Let,
    LetRec,
    NumberLiteral,
    PrimitiveCall,
    ProcedureLiteral,
    Raise,
    RecBinding,
    RefOf,
    Sequence,
    TryCatch,
    Variable,
)
from kont.primitives import CALLCC
from kont.runtime_context import count_continuation_invoke, count_escape_binder


def lower(expr: Expression) -> Expression:
    """Return `expr` with every letcc and throw rewritten, recursively."""
    match expr:
        case NumberLiteral() | BooleanLiteral() | Variable() | RefOf():
            return expr
        case ProcedureLiteral(params, body):
            return ProcedureLiteral(params, lower(body))
        case PrimitiveCall(op, args):
            return PrimitiveCall(op, tuple(lower(a) for a in args))
        case Call(operator, operands):
            return Call(lower(operator), tuple(lower(o) for o in operands))
        case Conditional(test, then, else_):
            return Conditional(lower(test), lower(then), lower(else_))
        case Let(bindings, body):
            return Let(tuple((name, lower(init)) for name, init in bindings), lower(body))
        case LetRec(bindings, body):
            return LetRec(
                tuple(RecBinding(b.name, b.params, lower(b.body)) for b in bindings),
                lower(body),
            )
        case Assign(name, rhs):
            return Assign(name, lower(rhs))
        case Sequence(exprs):
            return Sequence(tuple(lower(e) for e in exprs))
        case TryCatch(body, value_var, cont_var, handler):
            return TryCatch(lower(body), value_var, cont_var, lower(handler))
        case Raise(operand):
            return Raise(lower(operand))
        case EscapeBinder(name, body):
            count_escape_binder()
            return PrimitiveCall(CALLCC, (ProcedureLiteral((name,), lower(body)),))
        case ContinuationInvoke(cont_expr, value_expr):
            count_continuation_invoke()
            return Call(lower(cont_expr), (lower(value_expr),))
    raise TypeError(f"Not an expression: {expr!r}")
