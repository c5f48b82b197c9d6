import pytest
from hypothesis import given, strategies as st

from kont.ast import (
    BooleanLiteral,
    Call,
    ContinuationInvoke,
    EscapeBinder,
    Let,
    LetRec,
    NumberLiteral,
    PrimitiveCall,
    ProcedureLiteral,
    RecBinding,
    Sequence,
    TryCatch,
    Variable,
)
from kont.errors import KontSyntaxError
from kont.reader.parser import Symbol, TokenStream, lex
from kont.reader.syntax import parse_program


@pytest.mark.parametrize(
    "source,expected",
    [
        ("a", [("symbol", "a")]),
        ("(a b)", [("lparen", "("), ("symbol", "a"), ("symbol", "b"), ("rparen", ")")]),
        ("[x]", [("lparen", "["), ("symbol", "x"), ("rparen", "]")]),
        ("#t #f", [("boolean", "#t"), ("boolean", "#f")]),
        ("#true", [("symbol", "#true")]),
        ("-12", [("symbol", "-12")]),
        (" ; comment\n a b", [("symbol", "a"), ("symbol", "b")]),
        ("set-left!", [("symbol", "set-left!")]),
    ],
)
def test_lexer_basic(source, expected):
    assert list(lex(source)) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("42", 42),
        ("-45", -45),
        ("+3", 3),
        ("#t", True),
        ("#f", False),
        ("zero?", Symbol("zero?")),
        ("(a (b 1) ())", [Symbol("a"), [Symbol("b"), 1], []]),
    ],
)
def test_parser(source, expected):
    assert list(TokenStream(lex(source)).parse_all()) == [expected]


@pytest.mark.parametrize("source", ["(", "(a (b)", ")", ""])
def test_parser_rejects_unbalanced(source):
    with pytest.raises(KontSyntaxError):
        parse_program(source)


@pytest.mark.parametrize(
    "source,expected",
    [
        ("7", NumberLiteral(7)),
        ("#f", BooleanLiteral(False)),
        ("x", Variable("x")),
        ("(+ 1 x)", PrimitiveCall("+", (NumberLiteral(1), Variable("x")))),
        ("(callcc f)", PrimitiveCall("callcc", (Variable("f"),))),
        ("(f 1)", Call(Variable("f"), (NumberLiteral(1),))),
        ("((lambda () 1))", Call(ProcedureLiteral((), NumberLiteral(1)), ())),
        ("(lambda (a b) a b)", ProcedureLiteral(("a", "b"), Sequence((Variable("a"), Variable("b"))))),
        ("(let ((x 1)) x)", Let((("x", NumberLiteral(1)),), Variable("x"))),
        (
            "(letrec ((f (n) n)) (f 1))",
            LetRec((RecBinding("f", ("n",), Variable("n")),), Call(Variable("f"), (NumberLiteral(1),))),
        ),
        ("(try 1 (catch (v k) v))", TryCatch(NumberLiteral(1), "v", "k", Variable("v"))),
        ("(letcc k k)", EscapeBinder("k", Variable("k"))),
        ("(throw k 1)", ContinuationInvoke(Variable("k"), NumberLiteral(1))),
        ("(begin)", Sequence(())),
        ("1 2", Sequence((NumberLiteral(1), NumberLiteral(2)))),
    ],
)
def test_to_expression(source, expected):
    assert parse_program(source) == expected


@pytest.mark.parametrize(
    "source",
    [
        "()",
        "(if 1 2)",
        "(lambda x x)",
        "(lambda (1) x)",
        "(lambda (x))",
        "(let (x 1) x)",
        "(let ((x)) x)",
        "(letrec ((f n n)) f)",
        "(set! 1 2)",
        "(ref)",
        "(try 1 (handle (v k) v))",
        "(try 1 (catch (v) v))",
        "(raise)",
        "(letcc k)",
        "(throw k)",
    ],
)
def test_bad_syntax(source):
    with pytest.raises(KontSyntaxError):
        parse_program(source)


# --- Property-based: printed forms read back unchanged ---

atom_strat = st.one_of(
    st.integers(min_value=-10**6, max_value=10**6),
    st.booleans(),
    st.sampled_from(["a", "x", "foo", "set!", "zero?", "<=", "callcc"]).map(Symbol),
)
sexpr_strat = st.recursive(atom_strat, lambda children: st.lists(children, max_size=5), max_leaves=30)


def _to_source(form):
    if isinstance(form, list):
        return f"({' '.join(_to_source(f) for f in form)})"
    if isinstance(form, bool):
        return "#t" if form else "#f"
    return str(form)


@given(sexpr_strat)
def test_parser_reads_printed_forms(form):
    parsed = list(TokenStream(lex(_to_source(form))).parse_all())
    assert parsed == [form]
