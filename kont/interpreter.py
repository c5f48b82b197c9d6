from __future__ import annotations

import logging
from typing import Callable, NamedTuple, Optional

from kont import KontValue
from kont.ast import Expression
from kont.evaluation.evaluator import run
from kont.evaluation.lowering import lower
from kont.reader.syntax import parse_program
from kont.runtime_context import LoweringCounts, RunContext, lowering_counts

logger = logging.getLogger(__name__)


class Outcome(NamedTuple):
    value: KontValue
    store: list[str]
    steps: int


class Interpreter:
    """
    Reads and evaluates kont programs.

    Each call to `run` is one top-level evaluation with its own store; nothing
    carries over between runs except the process-wide lowering counters.
    With `lower=True` the escape-continuation sugar is rewritten into `callcc`
    before evaluation.
    """

    def __init__(
        self,
        lower: bool = False,
        on_complete: Optional[Callable[[KontValue], None]] = None,
    ):
        self.lower = lower
        self.on_complete = on_complete

    def parse(self, program: str | Expression) -> Expression:
        if isinstance(program, str):
            return parse_program(program)
        return program

    def run(self, program: str | Expression) -> Outcome:
        expr = self.parse(program)
        if self.lower:
            expr = lower(expr)
        ctx = RunContext(self.on_complete)
        logger.debug("run %s (lowered=%s)", type(expr).__name__, self.lower)
        value = run(expr, ctx)
        return Outcome(value, ctx.store.snapshot(), ctx.steps)

    def eval(self, program: str | Expression) -> KontValue:
        return self.run(program).value

    @staticmethod
    def counters() -> LoweringCounts:
        return lowering_counts()
