import math

import numpy as np
import pytest

from plugins.graph_studio.core import CONSTANTS, FUNCTIONS, evaluate, parse
from plugins.graph_studio.core.parser import CONSTANT_NAMES, FUNCTION_ARITY


def _eval(source: str, **binding: float) -> float:
    return evaluate(parse(source), binding)


def test_square():
    tree = parse("x*x")
    assert evaluate(tree, {"x": 3}) == 9.0
    assert evaluate(tree, {"x": -2}) == 4.0


def test_tables_match_parser_allow_list():
    assert set(FUNCTIONS) == set(FUNCTION_ARITY)
    assert set(CONSTANTS) == set(CONSTANT_NAMES)


def test_division_by_zero_follows_ieee():
    assert _eval("1/x", x=0.0) == math.inf
    assert _eval("-1/x", x=0.0) == -math.inf
    assert math.isnan(_eval("x/x", x=0.0))


@pytest.mark.parametrize(
    ("source", "binding", "expected"),
    [
        ("log(x)", {"x": 0.0}, -math.inf),
        ("exp(x)", {"x": 1000.0}, math.inf),
        ("cosh(x)", {"x": 1000.0}, math.inf),
        ("pow(x, -1)", {"x": 0.0}, math.inf),
    ],
)
def test_overflow_and_poles_return_infinity(source, binding, expected):
    assert evaluate(parse(source), binding) == expected


@pytest.mark.parametrize("source", ["log(x)", "sqrt(x)", "x ^ (1/3)"])
def test_domain_errors_return_nan(source):
    assert math.isnan(_eval(source, x=-8.0))


def test_functions_and_constants():
    assert _eval("sin(PI / 2)") == pytest.approx(1.0)
    assert _eval("cos(0) + tan(0)") == pytest.approx(1.0)
    assert _eval("log(E)") == pytest.approx(1.0)
    assert _eval("sqrt(16) + abs(-3)") == pytest.approx(7.0)
    assert _eval("tanh(0) + sinh(0) + cosh(0)") == pytest.approx(1.0)
    assert _eval("exp(1)") == pytest.approx(math.e)


def test_pow_matches_caret():
    assert _eval("pow(2, 10)") == _eval("2^10") == 1024.0
    assert _eval("2^3^2") == 512.0


def test_unary_operators():
    assert _eval("-2^2") == -4.0
    assert _eval("+x", x=5.0) == 5.0
    assert _eval("--x", x=5.0) == 5.0


def test_missing_variable_evaluates_to_nan():
    assert math.isnan(evaluate(parse("x + y"), {"x": 1.0}))


def test_result_is_always_a_float():
    value = evaluate(parse("1"), {})
    assert type(value) is float
    assert value == 1.0


def test_array_binding_evaluates_elementwise():
    xs = np.array([-1.0, 0.0, 1.0])
    values = evaluate(parse("1/x"), {"x": xs})
    assert values.tolist() == [-1.0, math.inf, 1.0]


def test_binding_is_not_mutated():
    binding = {"x": 2.0}
    evaluate(parse("x^2 + x"), binding)
    assert binding == {"x": 2.0}


def test_evaluation_is_repeatable():
    tree = parse("sin(x) * exp(-x^2)")
    first = [evaluate(tree, {"x": x / 10}) for x in range(-20, 21)]
    second = [evaluate(parse("sin(x) * exp(-x^2)"), {"x": x / 10}) for x in range(-20, 21)]
    assert first == second


def test_array_result_does_not_alias_binding():
    xs = np.array([1.0, 2.0, 3.0])
    result = evaluate(parse("+x"), {"x": xs})
    assert result is not xs
    result[0] = 99.0
    assert xs.tolist() == [1.0, 2.0, 3.0]
