"""Per-run state and process-lifetime counters.

A RunContext is created when a top-level evaluation starts and dropped when it
ends; it owns the Store, so addresses never leak from one run into the next.

The lowering counters are different: they live for the whole process and are
only ever incremented. They count how many escape binders and continuation
invocations the lowering pass has rewritten since start-up.
"""

from __future__ import annotations

from typing import Callable, NamedTuple, Optional

from kont import KontValue
from kont.types.store import Store


class RunContext:
    """Mutable state threaded through one top-level evaluation."""

    __slots__ = ("store", "on_complete", "steps")

    def __init__(self, on_complete: Optional[Callable[[KontValue], None]] = None):
        self.store: Store = Store()
        self.on_complete = on_complete
        self.steps: int = 0


class LoweringCounts(NamedTuple):
    escape_binders: int
    continuation_invokes: int


# NOTE: process-global on purpose; there is no reset short of a restart.
_escape_binders: int = 0
_continuation_invokes: int = 0


def count_escape_binder() -> None:
    global _escape_binders
    _escape_binders += 1


def count_continuation_invoke() -> None:
    global _continuation_invokes
    _continuation_invokes += 1


def lowering_counts() -> LoweringCounts:
    return LoweringCounts(_escape_binders, _continuation_invokes)


def format_lowering_counts() -> str:
    counts = lowering_counts()
    return (
        f"letcc forms lowered: {counts.escape_binders}, "
        f"throw forms lowered: {counts.continuation_invokes}"
    )
