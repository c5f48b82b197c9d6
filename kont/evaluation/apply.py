"""Application engine for kont.

Centralizes what happens when a value is applied to already-evaluated
arguments, whether from an ordinary call, from `callcc`, or from the
handler search:

- A Continuation takes exactly one argument and resumes its captured chain,
  dropping the continuation of the call site (the non-local jump).
- A Procedure binds fresh store cells for its parameters in a new frame over
  its closure environment and evaluates its body under the caller's
  continuation.
- Anything else is not applicable.
"""

from __future__ import annotations

from kont import KontValue
from kont.errors import ArityMismatchError, NotApplicableError
from kont.runtime_context import RunContext
from kont.types.continuation import Cont
from kont.types.step import Eval, Resume, Step
from kont.types.values import Continuation, Procedure


def apply_procedure(
    callee: KontValue,
    args: list[KontValue],
    cont: Cont,
    ctx: RunContext,
) -> Step:
    """Apply `callee` to `args`, continuing with `cont` unless it is a jump."""
    if isinstance(callee, Continuation):
        if len(args) != 1:
            raise ArityMismatchError(
                f"Continuation expects exactly 1 argument, got {len(args)}"
            )
        return Resume(callee.cont, args[0])

    if isinstance(callee, Procedure):
        if len(args) != callee.arity:
            raise ArityMismatchError(
                f"Procedure {callee!r} expects {callee.arity} argument(s), got {len(args)}"
            )
        addresses = [ctx.store.allocate(v) for v in args]
        new_env = callee.env.extend(callee.params, addresses)
        return Eval(callee.body, new_env, cont)

    raise NotApplicableError(callee)
