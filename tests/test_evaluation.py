import pytest

from kont import errors
from kont.ast import (
    Assign,
    Call,
    Let,
    LetRec,
    NumberLiteral,
    PrimitiveCall,
    ProcedureLiteral,
    RecBinding,
    Sequence,
    Variable,
)
from kont.evaluation.evaluator import evaluate
from kont.runtime_context import RunContext
from kont.types.values import NoValue, MutablePair, Procedure, Reference, format_value

# -----------------------------------------------------
# Literals and primitives
# -----------------------------------------------------


@pytest.mark.parametrize(
    "source,expected",
    [
        ("42", 42),
        ("-7", -7),
        ("#t", True),
        ("#f", False),
        ("(+ 1 2 3)", 6),
        ("(+)", 0),
        ("(- 10 4)", 6),
        ("(- 5)", -5),
        ("(* 2 3 4)", 24),
        ("(= 3 3)", True),
        ("(< 1 2)", True),
        ("(>= 1 2)", False),
        ("(zero? 0)", True),
        ("(not #f)", True),
        ("(if (< 1 2) 10 20)", 10),
        ("(if #f 10 20)", 20),
        ("((lambda (a b) (- a b)) 10 3)", 7),
        ("(begin 1 2 3)", 3),
    ],
)
def test_simple_programs(itp, source, expected):
    result = itp.eval(source)
    assert result == expected
    assert type(result) is type(expected)


def test_procedure_result_is_opaque(itp):
    result = itp.eval("(lambda (x) x)")
    assert isinstance(result, Procedure)
    assert format_value(result) == "#<procedure>"


def test_only_chosen_branch_runs(itp):
    outcome = itp.run("(let ((x 0)) (begin (if #t (set! x 1) (set! x 2)) x))")
    assert outcome.value == 1


# -----------------------------------------------------
# Binding forms
# -----------------------------------------------------


def test_let_initializers_see_the_outer_scope(itp):
    # y is initialized from the outer x, not the x being introduced alongside it
    assert itp.eval("(let ((x 1)) (let ((x 2) (y x)) y))") == 1


def test_let_body_sees_all_bindings(itp):
    assert itp.eval("(let ((a 1) (b 2)) (+ a b))") == 3


def test_let_initializers_run_left_to_right(itp):
    program = """
    (let ((log 0))
      (let ((a (set! log (+ (* log 10) 1)))
            (b (set! log (+ (* log 10) 2))))
        log))
    """
    assert itp.eval(program) == 12


def test_empty_let(itp):
    assert itp.eval("(let () 5)") == 5


PARITY = """
(letrec ((even? (n) (if (zero? n) #t (odd? (- n 1))))
         (odd? (n) (if (zero? n) #f (even? (- n 1)))))
  ({which} {n}))
"""


@pytest.mark.parametrize(
    "which,n,expected",
    [
        ("even?", 0, True),
        ("odd?", 0, False),
        ("even?", 1, False),
        ("odd?", 1, True),
        ("even?", 7, False),
        ("odd?", 7, True),
        ("even?", 10, True),
    ],
)
def test_letrec_mutual_recursion(itp, which, n, expected):
    assert itp.eval(PARITY.format(which=which, n=n)) is expected


def test_letrec_recursive_factorial(itp):
    program = """
    (letrec ((fact (n) (if (zero? n) 1 (* n (fact (- n 1))))))
      (fact 10))
    """
    assert itp.eval(program) == 3628800


def test_letrec_closures_share_one_frame():
    f_body = Call(Variable("g"), ())
    g_body = NumberLiteral(9)
    expr = LetRec(
        (RecBinding("f", (), f_body), RecBinding("g", (), g_body)),
        Call(Variable("f"), ()),
    )
    ctx = RunContext()
    assert evaluate(expr, ctx) == 9
    f, g = ctx.store.read(0), ctx.store.read(1)
    assert f.env is g.env
    assert f.env.names == ("f", "g")


# -----------------------------------------------------
# Assignment and the store
# -----------------------------------------------------


def test_assignment_returns_no_value(itp):
    assert itp.eval("(let ((x 1)) (set! x 2))") is NoValue


def test_assignment_updates_the_bound_cell(itp):
    outcome = itp.run("(let ((x 1) (y 2)) (begin (set! y 5) (+ x y)))")
    assert outcome.value == 6
    assert outcome.store == ["1", "5"]


def test_closures_observe_each_others_assignments(itp):
    program = """
    (let ((counter 0))
      (let ((inc (lambda () (set! counter (+ counter 1))))
            (get (lambda () counter)))
        (begin (inc) (inc) (get))))
    """
    assert itp.eval(program) == 2


def test_procedure_arguments_get_fresh_cells(itp):
    program = """
    (let ((x 1))
      (begin ((lambda (y) (set! y 100)) x) x))
    """
    assert itp.eval(program) == 1


def test_pairs_are_mutable(itp):
    program = """
    (let ((p (pair 1 2)))
      (begin (set-left! p 10) (+ (left p) (right p))))
    """
    assert itp.eval(program) == 12


def test_pair_result_is_opaque(itp):
    outcome = itp.run("(pair 1 #t)")
    assert isinstance(outcome.value, MutablePair)
    assert outcome.store == ["1", "#t"]
    assert format_value(outcome.value) == "#<pair>"


def test_reference_aliases_variable(itp):
    program = """
    (let ((x 1))
      (let ((r (ref x)))
        (begin (setref! r 42) x)))
    """
    assert itp.eval(program) == 42


def test_reference_is_not_dereferenced(itp):
    result = itp.eval("(let ((x 7)) (ref x))")
    assert isinstance(result, Reference)
    assert result.address == 0
    assert itp.eval("(let ((x 7)) (deref (ref x)))") == 7


def test_predicates(itp):
    assert itp.eval("(let ((x 1)) (ref? (ref x)))") is True
    assert itp.eval("(pair? (pair 1 2))") is True
    assert itp.eval("(pair? 1)") is False


def test_ast_built_by_hand():
    # (let ((x 5)) (begin (set! x (+ x 1)) x))
    expr = Let(
        (("x", NumberLiteral(5)),),
        Sequence((
            Assign("x", PrimitiveCall("+", (Variable("x"), NumberLiteral(1)))),
            Variable("x"),
        )),
    )
    assert evaluate(expr) == 6


def test_procedure_literal_closes_over_definition_env():
    expr = Let(
        (("x", NumberLiteral(3)),),
        ProcedureLiteral(("y",), Variable("x")),
    )
    proc = evaluate(expr)
    assert proc.params == ("y",)
    assert proc.env.lookup("x") == 0


# -----------------------------------------------------
# Host-level faults
# -----------------------------------------------------


@pytest.mark.parametrize(
    "source,error",
    [
        ("y", errors.UnboundVariableError),
        ("(set! y 1)", errors.UnboundVariableError),
        ("(ref y)", errors.UnboundVariableError),
        ("(+ 1 #t)", errors.TypeMismatchError),
        ("(if 1 2 3)", errors.TypeMismatchError),
        ("(left 5)", errors.TypeMismatchError),
        ("(deref 5)", errors.TypeMismatchError),
        ("(not 0)", errors.TypeMismatchError),
        ("((lambda (x) x))", errors.ArityMismatchError),
        ("((lambda (x) x) 1 2)", errors.ArityMismatchError),
        ("(< 1)", errors.ArityMismatchError),
        ("(-)", errors.ArityMismatchError),
        ("(pair 1)", errors.ArityMismatchError),
        ("(5 1)", errors.NotApplicableError),
        ("(#t)", errors.NotApplicableError),
        ("(begin)", errors.EmptySequenceError),
    ],
)
def test_host_faults(itp, source, error):
    with pytest.raises(error):
        itp.eval(source)


def test_not_applicable_carries_value(itp):
    with pytest.raises(errors.NotApplicableError) as info:
        itp.eval("(let ((p (pair 1 2))) (p 3))")
    assert isinstance(info.value.value, MutablePair)


def test_unknown_primitive_is_unbound():
    with pytest.raises(errors.UnboundVariableError):
        evaluate(PrimitiveCall("frobnicate", ()))


def test_empty_sequence_node():
    with pytest.raises(errors.EmptySequenceError):
        evaluate(Sequence(()))


def test_operands_evaluated_before_arity_check(itp):
    # The set! runs before the bad call is detected
    program = """
    (let ((x 0))
      ((lambda () x) (set! x 1)))
    """
    with pytest.raises(errors.ArityMismatchError):
        itp.eval(program)
