from kont.types.store import Store
from kont.types.environment import Environment
from kont.types.values import (
    NoValue,
    Procedure,
    MutablePair,
    Reference,
    Continuation,
    format_value,
)
from kont.types.continuation import Cont, Halt, TryFrame
