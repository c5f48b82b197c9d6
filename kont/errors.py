"""Host-level faults raised by the evaluator.

None of these are visible to the language's own try/catch: only `raise`
travels through the handler search. Everything here aborts the run and
propagates to whoever called the evaluator.
"""

from __future__ import annotations

from typing import Any


class KontError(Exception):
    """ Base class for all kont errors"""
    pass


class KontSyntaxError(KontError):
    """ Raised when source text cannot be read into an expression"""


class UnboundVariableError(KontError):
    """ Raised when a name is used that no frame binds"""

    def __init__(self, name: str):
        super().__init__(f"Unbound variable {name}")
        self.name = name


class TypeMismatchError(KontError):
    """ Raised when a value of the wrong kind reaches a primitive or control construct"""


class ArityMismatchError(KontError):
    """ Raised when a procedure, continuation or primitive gets the wrong number of arguments"""


class NotApplicableError(KontError):
    """ Raised when something other than a procedure or continuation is applied"""

    def __init__(self, value: Any):
        from kont.types.values import format_value
        super().__init__(f"Cannot apply non-procedure {format_value(value)}")
        self.value = value


class InvalidReferenceError(KontError):
    """ Raised when a store address outside the allocated range is touched"""

    def __init__(self, address: Any, size: int):
        super().__init__(f"Invalid reference {address!r} (store size {size})")
        self.address = address


class EmptySequenceError(KontError):
    """ Raised when a sequence has no sub-expressions"""

    def __init__(self):
        super().__init__("Empty sequence")


class UncaughtExceptionError(KontError):
    """ Raised when `raise` finds no enclosing try before the end of the computation"""

    def __init__(self, value: Any):
        from kont.types.values import format_value
        super().__init__(f"Uncaught exception: {format_value(value)}")
        self.value = value
