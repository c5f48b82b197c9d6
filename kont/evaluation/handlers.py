"""Handler search for `raise`.

The search walks outward from the continuation that was current at the raise
and stops at the first TryFrame. The handler runs in the try's own
environment, with the raised value and the *raise-time* continuation bound,
under the try's outer continuation. Because the handler gets the raise-time
continuation as an ordinary Continuation value, invoking it resumes the
computation at the raise site: the exception is resumable.
"""

from __future__ import annotations

import logging

from kont import KontValue
from kont.errors import UncaughtExceptionError
from kont.runtime_context import RunContext
from kont.types.continuation import Cont, TryFrame
from kont.types.step import Eval, Step
from kont.types.values import Continuation, format_value

logger = logging.getLogger(__name__)


def find_try_frame(cont: Cont) -> TryFrame | None:
    """Nearest enclosing TryFrame of `cont`, or None when only Halt remains."""
    for k in cont.frames():
        if isinstance(k, TryFrame):
            return k
    return None


def search_handler(raised: KontValue, raise_cont: Cont, ctx: RunContext) -> Step:
    frame = find_try_frame(raise_cont)
    if frame is None:
        raise UncaughtExceptionError(raised)

    logger.debug("raise %s caught by try binding (%s, %s)",
                 format_value(raised), frame.value_var, frame.cont_var)
    addresses = [
        ctx.store.allocate(raised),
        ctx.store.allocate(Continuation(raise_cont)),
    ]
    handler_env = frame.env.extend((frame.value_var, frame.cont_var), addresses)
    return Eval(frame.handler, handler_env, frame.outer)
