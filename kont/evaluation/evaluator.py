"""CPS evaluator and trampoline for kont.

`eval_step` handles one expression and `apply_cont` hands one value to one
continuation frame. Neither calls the other: each returns the next work item
(an `Eval` or a `Resume`) and `run` loops until a value reaches `Halt`. Host
stack depth therefore stays constant however deep the program recurses and
however many times a captured continuation is resumed.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from kont import KontValue
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
    RefOf,
    Sequence,
    TryCatch,
    Variable,
)
from kont.config import trace_enabled
from kont.errors import (
    EmptySequenceError,
    TypeMismatchError,
    UnboundVariableError,
)
from kont.evaluation.apply import apply_procedure
from kont.evaluation.handlers import search_handler
from kont.primitives import CALLCC, PRIMITIVES, expect_arity, is_primitive
from kont.runtime_context import RunContext
from kont.types.continuation import (
    AssignFrame,
    CallArgsFrame,
    Cont,
    Halt,
    IfFrame,
    InvokeContFrame,
    InvokeValueFrame,
    LetFrame,
    PrimArgsFrame,
    RaiseFrame,
    SeqFrame,
    TryFrame,
)
from kont.types.environment import Environment
from kont.types.step import Eval, Resume, Step
from kont.types.values import (
    Continuation,
    NoValue,
    Procedure,
    Reference,
    format_value,
    is_boolean,
    type_name,
)

logger = logging.getLogger(__name__)


def eval_step(expr: Expression, env: Environment, cont: Cont, ctx: RunContext) -> Step:
    """Start evaluating `expr`; return the next work item."""
    match expr:
        case NumberLiteral(value) | BooleanLiteral(value):
            return Resume(cont, value)

        case Variable(name):
            return Resume(cont, ctx.store.read(env.lookup(name)))

        case ProcedureLiteral(params, body):
            return Resume(cont, Procedure(tuple(params), body, env))

        case PrimitiveCall(op, args):
            if not is_primitive(op):
                raise UnboundVariableError(op)
            if not args:
                return apply_primitive(op, [], cont, ctx)
            return Eval(args[0], env, PrimArgsFrame(cont, env, op, (), tuple(args[1:])))

        case Call(operator, operands):
            # The operator is the first entry of the accumulated values
            return Eval(operator, env, CallArgsFrame(cont, env, (), tuple(operands)))

        case Conditional(test, then, else_):
            return Eval(test, env, IfFrame(cont, env, then, else_))

        case Let(bindings, body):
            names = tuple(name for name, _ in bindings)
            inits = tuple(init for _, init in bindings)
            if not inits:
                return Eval(body, env.extend((), ()), cont)
            # Initializers run in `env`, not in the frame being built
            return Eval(inits[0], env, LetFrame(cont, env, names, (), inits[1:], body))

        case LetRec(bindings, body):
            addresses = [ctx.store.allocate(NoValue) for _ in bindings]
            new_env = env.extend([b.name for b in bindings], addresses)
            for binding, address in zip(bindings, addresses):
                ctx.store.write(address, Procedure(tuple(binding.params), binding.body, new_env))
            return Eval(body, new_env, cont)

        case Assign(name, rhs):
            return Eval(rhs, env, AssignFrame(cont, env, name))

        case Sequence(exprs):
            if not exprs:
                raise EmptySequenceError()
            if len(exprs) == 1:
                return Eval(exprs[0], env, cont)
            return Eval(exprs[0], env, SeqFrame(cont, env, tuple(exprs[1:])))

        case RefOf(name):
            return Resume(cont, Reference(env.lookup(name)))

        case TryCatch(body, value_var, cont_var, handler):
            return Eval(body, env, TryFrame(cont, env, value_var, cont_var, handler))

        case Raise(operand):
            return Eval(operand, env, RaiseFrame(cont, env))

        case ContinuationInvoke(cont_expr, value_expr):
            return Eval(cont_expr, env, InvokeContFrame(cont, env, value_expr))

        case EscapeBinder(name, body):
            # Same allocation as applying (lambda (name) body) to the continuation
            address = ctx.store.allocate(Continuation(cont))
            return Eval(body, env.extend((name,), (address,)), cont)

    raise TypeError(f"Not an expression: {expr!r}")


def apply_cont(cont: Cont, value: KontValue, ctx: RunContext) -> Step:
    """Hand `value` to the pending work at the top of `cont`."""
    match cont:
        case PrimArgsFrame(outer=outer, env=env, op=op, done=done, pending=pending):
            done = done + (value,)
            if pending:
                return Eval(pending[0], env, PrimArgsFrame(outer, env, op, done, pending[1:]))
            return apply_primitive(op, list(done), outer, ctx)

        case CallArgsFrame(outer=outer, env=env, done=done, pending=pending):
            done = done + (value,)
            if pending:
                return Eval(pending[0], env, CallArgsFrame(outer, env, done, pending[1:]))
            return apply_procedure(done[0], list(done[1:]), outer, ctx)

        case IfFrame(outer=outer, env=env, then=then, else_=else_):
            if not is_boolean(value):
                raise TypeMismatchError(f"if expects a boolean test, got {type_name(value)}")
            return Eval(then if value else else_, env, outer)

        case LetFrame(outer=outer, env=env, names=names, done=done, pending=pending, body=body):
            done = done + (value,)
            if pending:
                return Eval(pending[0], env, LetFrame(outer, env, names, done, pending[1:], body))
            addresses = [ctx.store.allocate(v) for v in done]
            return Eval(body, env.extend(names, addresses), outer)

        case AssignFrame(outer=outer, env=env, name=name):
            ctx.store.write(env.lookup(name), value)
            return Resume(outer, NoValue)

        case SeqFrame(outer=outer, env=env, pending=pending):
            if len(pending) == 1:
                return Eval(pending[0], env, outer)
            return Eval(pending[0], env, SeqFrame(outer, env, pending[1:]))

        case TryFrame(outer=outer):
            return Resume(outer, value)

        case RaiseFrame(outer=outer):
            return search_handler(value, outer, ctx)

        case InvokeContFrame(outer=outer, env=env, value_expr=value_expr):
            if not isinstance(value, Continuation):
                raise TypeMismatchError(f"throw expects a continuation, got {type_name(value)}")
            return Eval(value_expr, env, InvokeValueFrame(outer, env, value))

        case InvokeValueFrame(target=target):
            return Resume(target.cont, value)

    raise TypeError(f"Not a continuation frame: {cont!r}")


def apply_primitive(op: str, args: list[KontValue], cont: Cont, ctx: RunContext) -> Step:
    if op == CALLCC:
        expect_arity(op, args, 1)
        return apply_procedure(args[0], [Continuation(cont)], cont, ctx)
    return Resume(cont, PRIMITIVES[op](ctx.store, args))


def run(expr: Expression, ctx: RunContext, env: Environment | None = None) -> KontValue:
    """Trampoline: drive `expr` to the terminal continuation and return its value."""
    trace = trace_enabled()
    step: Step = Eval(expr, env if env is not None else Environment(), Halt())
    while True:
        ctx.steps += 1
        match step:
            case Eval(expr=e, env=en, cont=k):
                if trace:
                    logger.debug("eval %s under %r", type(e).__name__, k)
                step = eval_step(e, en, k, ctx)
            case Resume(cont=Halt(), value=v):
                logger.info("End of computation: %s after %d steps", format_value(v), ctx.steps)
                if ctx.on_complete is not None:
                    ctx.on_complete(v)
                return v
            case Resume(cont=k, value=v):
                if trace:
                    logger.debug("resume %r with %s", k, format_value(v))
                step = apply_cont(k, v, ctx)


def evaluate(
    expr: Expression,
    ctx: RunContext | None = None,
    on_complete: Optional[Callable[[KontValue], None]] = None,
) -> KontValue:
    """Evaluate `expr` directly, in a fresh run context unless one is given."""
    if ctx is None:
        ctx = RunContext(on_complete)
    return run(expr, ctx)


def evaluate_lowered(
    expr: Expression,
    ctx: RunContext | None = None,
    on_complete: Optional[Callable[[KontValue], None]] = None,
) -> KontValue:
    """Lower letcc/throw sugar (counting each form), then evaluate."""
    from kont.evaluation.lowering import lower
    return evaluate(lower(expr), ctx, on_complete)
