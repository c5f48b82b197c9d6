"""Build AST nodes from parsed s-expressions.

Surface forms:

    42  #t  #f  x
    (lambda (x ...) body ...)
    (if test then else)
    (let ((x init) ...) body ...)
    (letrec ((f (x ...) body ...) ...) body ...)
    (set! x e)
    (begin e ...)
    (ref x)
    (try body (catch (v k) handler ...))
    (raise e)
    (letcc k body ...)
    (throw k v)
    (op arg ...)          ; op names a primitive, e.g. + pair deref callcc
    (f arg ...)           ; anything else is a call

A body of several expressions becomes a Sequence.
"""

from __future__ import annotations

from typing import Any, Callable

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
    RecBinding,
    RefOf,
    Sequence,
    TryCatch,
    Variable,
)
from kont.errors import KontSyntaxError
from kont.primitives import is_primitive
from kont.reader.parser import Symbol, TokenStream, lex


def _name(form: Any, what: str) -> str:
    if not isinstance(form, Symbol):
        raise KontSyntaxError(f"{what} must be a name, got {form!r}")
    return form.id


def _names(form: Any, what: str) -> tuple[str, ...]:
    if not isinstance(form, list):
        raise KontSyntaxError(f"{what} must be a list of names, got {form!r}")
    return tuple(_name(f, what) for f in form)


def _expect(form: list, n: int, usage: str) -> None:
    if len(form) != n:
        raise KontSyntaxError(f"Bad syntax, expected {usage}: {form!r}")


def _body(forms: list, usage: str) -> Expression:
    if not forms:
        raise KontSyntaxError(f"Missing body in {usage}")
    if len(forms) == 1:
        return to_expression(forms[0])
    return Sequence(tuple(to_expression(f) for f in forms))


def _lambda(form: list) -> Expression:
    if len(form) < 3:
        raise KontSyntaxError(f"Bad syntax, expected (lambda (x ...) body ...): {form!r}")
    return ProcedureLiteral(_names(form[1], "lambda parameter"), _body(form[2:], "lambda"))


def _if(form: list) -> Expression:
    _expect(form, 4, "(if test then else)")
    return Conditional(to_expression(form[1]), to_expression(form[2]), to_expression(form[3]))


def _let(form: list) -> Expression:
    if len(form) < 3 or not isinstance(form[1], list):
        raise KontSyntaxError(f"Bad syntax, expected (let ((x e) ...) body ...): {form!r}")
    bindings = []
    for clause in form[1]:
        if not isinstance(clause, list) or len(clause) != 2:
            raise KontSyntaxError(f"Bad let binding: {clause!r}")
        bindings.append((_name(clause[0], "let binding"), to_expression(clause[1])))
    return Let(tuple(bindings), _body(form[2:], "let"))


def _letrec(form: list) -> Expression:
    if len(form) < 3 or not isinstance(form[1], list):
        raise KontSyntaxError(f"Bad syntax, expected (letrec ((f (x ...) body) ...) body ...): {form!r}")
    bindings = []
    for clause in form[1]:
        if not isinstance(clause, list) or len(clause) < 3:
            raise KontSyntaxError(f"Bad letrec binding: {clause!r}")
        bindings.append(RecBinding(
            _name(clause[0], "letrec binding"),
            _names(clause[1], "letrec parameter"),
            _body(clause[2:], "letrec binding"),
        ))
    return LetRec(tuple(bindings), _body(form[2:], "letrec"))


def _set(form: list) -> Expression:
    _expect(form, 3, "(set! x e)")
    return Assign(_name(form[1], "set! target"), to_expression(form[2]))


def _begin(form: list) -> Expression:
    # An empty (begin) is left for the evaluator to reject
    return Sequence(tuple(to_expression(f) for f in form[1:]))


def _ref(form: list) -> Expression:
    _expect(form, 2, "(ref x)")
    return RefOf(_name(form[1], "ref target"))


def _try(form: list) -> Expression:
    _expect(form, 3, "(try body (catch (v k) handler ...))")
    clause = form[2]
    if (not isinstance(clause, list) or len(clause) < 3
            or clause[0] != Symbol("catch") or not isinstance(clause[1], list)
            or len(clause[1]) != 2):
        raise KontSyntaxError(f"Bad catch clause: {clause!r}")
    value_var, cont_var = _names(clause[1], "catch variable")
    return TryCatch(to_expression(form[1]), value_var, cont_var, _body(clause[2:], "catch"))


def _raise(form: list) -> Expression:
    _expect(form, 2, "(raise e)")
    return Raise(to_expression(form[1]))


def _letcc(form: list) -> Expression:
    if len(form) < 3:
        raise KontSyntaxError(f"Bad syntax, expected (letcc k body ...): {form!r}")
    return EscapeBinder(_name(form[1], "letcc variable"), _body(form[2:], "letcc"))


def _throw(form: list) -> Expression:
    _expect(form, 3, "(throw k v)")
    return ContinuationInvoke(to_expression(form[1]), to_expression(form[2]))


SPECIAL_FORMS: dict[Symbol, Callable[[list], Expression]] = {
    Symbol("lambda"): _lambda,
    Symbol("if"): _if,
    Symbol("let"): _let,
    Symbol("letrec"): _letrec,
    Symbol("set!"): _set,
    Symbol("begin"): _begin,
    Symbol("ref"): _ref,
    Symbol("try"): _try,
    Symbol("raise"): _raise,
    Symbol("letcc"): _letcc,
    Symbol("throw"): _throw,
}


def to_expression(form: Any) -> Expression:
    """Convert one parsed s-expression into an AST node."""
    if isinstance(form, bool):
        return BooleanLiteral(form)
    if isinstance(form, int):
        return NumberLiteral(form)
    if isinstance(form, Symbol):
        return Variable(form.id)
    if isinstance(form, list):
        if not form:
            raise KontSyntaxError("Empty application ()")
        head = form[0]
        if isinstance(head, Symbol):
            if head in SPECIAL_FORMS:
                return SPECIAL_FORMS[head](form)
            if is_primitive(head.id):
                return PrimitiveCall(head.id, tuple(to_expression(a) for a in form[1:]))
        return Call(to_expression(head), tuple(to_expression(a) for a in form[1:]))
    raise KontSyntaxError(f"Cannot read {form!r} as an expression")


def parse_program(source: str) -> Expression:
    """Read `source` into one expression; several top-level forms become a Sequence."""
    forms = list(TokenStream(lex(source)).parse_all())
    if not forms:
        raise KontSyntaxError("No expression in source")
    return _body(forms, "program")
