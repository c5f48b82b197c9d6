"""Primitive operations.

Each primitive takes the run's Store and the list of already-evaluated
arguments and returns a value. `callcc` is listed in CONTROL_PRIMITIVES
rather than here because it needs the current continuation; the evaluator
handles it itself.
"""

from __future__ import annotations

from typing import Any, Callable

from kont import KontValue
from kont.errors import ArityMismatchError, TypeMismatchError
from kont.types.store import Store
from kont.types.values import (
    NoValue,
    MutablePair,
    Reference,
    is_boolean,
    is_number,
    type_name,
)

PrimitiveFn = Callable[[Store, list[KontValue]], KontValue]

CALLCC = "callcc"
CONTROL_PRIMITIVES = frozenset({CALLCC})


# -------------------------------
# Argument checking
# -------------------------------
def expect_arity(op: str, args: list[Any], n: int) -> None:
    if len(args) != n:
        raise ArityMismatchError(f"{op} expects {n} argument(s), got {len(args)}")


def _numbers(op: str, args: list[Any]) -> list[int]:
    for a in args:
        if not is_number(a):
            raise TypeMismatchError(f"{op} expects numbers, got {type_name(a)}")
    return args


def _pair(op: str, v: Any) -> MutablePair:
    if not isinstance(v, MutablePair):
        raise TypeMismatchError(f"{op} expects a pair, got {type_name(v)}")
    return v


def _reference(op: str, v: Any) -> Reference:
    if not isinstance(v, Reference):
        raise TypeMismatchError(f"{op} expects a reference, got {type_name(v)}")
    return v


# -------------------------------
# Arithmetic
# -------------------------------
def add(store: Store, args: list[Any]) -> int:
    return sum(_numbers("+", args))


def sub(store: Store, args: list[Any]) -> int:
    if not args:
        raise ArityMismatchError("- requires at least 1 argument")
    first, *rest = _numbers("-", args)
    if not rest:
        return -first
    for x in rest:
        first -= x
    return first


def mul(store: Store, args: list[Any]) -> int:
    result = 1
    for x in _numbers("*", args):
        result *= x
    return result


# -------------------------------
# Comparisons and predicates
# -------------------------------
def _comparison(op: str, test: Callable[[int, int], bool]) -> PrimitiveFn:
    def compare(store: Store, args: list[Any]) -> bool:
        expect_arity(op, args, 2)
        a, b = _numbers(op, args)
        return test(a, b)
    compare.__name__ = f"compare_{op}"
    return compare


def is_zero(store: Store, args: list[Any]) -> bool:
    expect_arity("zero?", args, 1)
    return _numbers("zero?", args)[0] == 0


def logical_not(store: Store, args: list[Any]) -> bool:
    expect_arity("not", args, 1)
    if not is_boolean(args[0]):
        raise TypeMismatchError(f"not expects a boolean, got {type_name(args[0])}")
    return not args[0]


# -------------------------------
# Mutable pairs
# -------------------------------
def make_pair(store: Store, args: list[Any]) -> MutablePair:
    expect_arity("pair", args, 2)
    left = store.allocate(args[0])
    right = store.allocate(args[1])
    return MutablePair(left, right)


def pair_left(store: Store, args: list[Any]) -> KontValue:
    expect_arity("left", args, 1)
    return store.read(_pair("left", args[0]).left)


def pair_right(store: Store, args: list[Any]) -> KontValue:
    expect_arity("right", args, 1)
    return store.read(_pair("right", args[0]).right)


def set_left(store: Store, args: list[Any]) -> KontValue:
    expect_arity("set-left!", args, 2)
    store.write(_pair("set-left!", args[0]).left, args[1])
    return NoValue


def set_right(store: Store, args: list[Any]) -> KontValue:
    expect_arity("set-right!", args, 2)
    store.write(_pair("set-right!", args[0]).right, args[1])
    return NoValue


def is_pair(store: Store, args: list[Any]) -> bool:
    expect_arity("pair?", args, 1)
    return isinstance(args[0], MutablePair)


# -------------------------------
# References
# -------------------------------
def deref(store: Store, args: list[Any]) -> KontValue:
    expect_arity("deref", args, 1)
    return store.read(_reference("deref", args[0]).address)


def set_ref(store: Store, args: list[Any]) -> KontValue:
    expect_arity("setref!", args, 2)
    store.write(_reference("setref!", args[0]).address, args[1])
    return NoValue


def is_reference(store: Store, args: list[Any]) -> bool:
    expect_arity("ref?", args, 1)
    return isinstance(args[0], Reference)


PRIMITIVES: dict[str, PrimitiveFn] = {
    "+": add,
    "-": sub,
    "*": mul,
    "=": _comparison("=", lambda a, b: a == b),
    "<": _comparison("<", lambda a, b: a < b),
    ">": _comparison(">", lambda a, b: a > b),
    "<=": _comparison("<=", lambda a, b: a <= b),
    ">=": _comparison(">=", lambda a, b: a >= b),
    "zero?": is_zero,
    "not": logical_not,
    "pair": make_pair,
    "left": pair_left,
    "right": pair_right,
    "set-left!": set_left,
    "set-right!": set_right,
    "pair?": is_pair,
    "deref": deref,
    "setref!": set_ref,
    "ref?": is_reference,
}


def is_primitive(op: str) -> bool:
    return op in PRIMITIVES or op in CONTROL_PRIMITIVES
