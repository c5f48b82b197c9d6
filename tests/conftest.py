import pytest

from kont.interpreter import Interpreter

# Every test that asks for `itp` runs twice:
# 1) evaluating the AST directly, letcc/throw included ["direct"]
# 2) after rewriting letcc/throw into callcc/application ["lowered"]
# Both must agree, so the whole suite doubles as an equivalence check.


@pytest.fixture(params=["direct", "lowered"])
def evaluation_mode(request):
    return request.param


@pytest.fixture
def itp(evaluation_mode):
    return Interpreter(lower=evaluation_mode == "lowered")
