"""Runtime values other than numbers and booleans.

Numbers are Python ints and booleans are Python bools (checked with
`is_number` / `is_boolean`, since bool is an int subclass). Pairs and
references carry store addresses rather than values; reading or mutating
their contents always goes through the Store.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from kont import Address, KontValue

if TYPE_CHECKING:
    from kont.ast import Expression
    from kont.types.continuation import Cont
    from kont.types.environment import Environment


class NoValueType:
    """Result of assignment and of the mutating primitives."""

    __slots__ = ()

    def __repr__(self):
        return "#<void>"


NoValue = NoValueType()


class Procedure:
    """A closure: parameter names, body and the environment it was built in."""

    __slots__ = ("params", "body", "env")

    def __init__(self, params: tuple[str, ...], body: Expression, env: Environment):
        self.params = params
        self.body = body
        self.env = env

    @property
    def arity(self) -> int:
        return len(self.params)

    def __repr__(self) -> str:
        return f"#<procedure ({' '.join(self.params)})>"


class MutablePair:
    __slots__ = ("left", "right")

    def __init__(self, left: Address, right: Address):
        self.left = left
        self.right = right

    def __repr__(self) -> str:
        return f"#<pair @{self.left} @{self.right}>"


class Reference:
    __slots__ = ("address",)

    def __init__(self, address: Address):
        self.address = address

    def __repr__(self) -> str:
        return f"#<reference @{self.address}>"


class Continuation:
    """A captured continuation as a first-class value.

    Wrapping does not copy or consume `cont`; the same chain may be resumed
    any number of times.
    """

    __slots__ = ("cont",)

    def __init__(self, cont: Cont):
        self.cont = cont

    def __repr__(self) -> str:
        return "#<continuation>"


def is_number(v: KontValue) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def is_boolean(v: KontValue) -> bool:
    return isinstance(v, bool)


def type_name(v: KontValue) -> str:
    if is_boolean(v):
        return "boolean"
    if is_number(v):
        return "number"
    if isinstance(v, Procedure):
        return "procedure"
    if isinstance(v, MutablePair):
        return "pair"
    if isinstance(v, Reference):
        return "reference"
    if isinstance(v, Continuation):
        return "continuation"
    if v is NoValue:
        return "void"
    return type(v).__name__


def format_value(v: KontValue) -> str:
    """Render a program result: digits, #t/#f, or an opaque marker."""
    if is_boolean(v):
        return "#t" if v else "#f"
    if is_number(v):
        return str(v)
    return f"#<{type_name(v)}>"
