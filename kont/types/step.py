"""Work items for the evaluator trampoline.

Every evaluator function returns one of these instead of calling the next
function itself; `kont.evaluation.evaluator.run` loops over them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from kont import KontValue
from kont.ast import Expression
from kont.types.continuation import Cont
from kont.types.environment import Environment


@dataclass(frozen=True, eq=False)
class Eval:
    """Evaluate `expr` in `env`, handing the result to `cont`."""
    expr: Expression
    env: Environment
    cont: Cont


@dataclass(frozen=True, eq=False)
class Resume:
    """Hand `value` to `cont`."""
    cont: Cont
    value: KontValue


Step = Union[Eval, Resume]
