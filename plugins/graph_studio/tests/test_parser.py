import pytest

from plugins.graph_studio.core import ParseError, canonicalize, free_variables, parse, parse_for_mode
from plugins.graph_studio.core.parser import BinaryOp, Call, Literal, UnaryOp, Variable, tokenize


def test_tokenize_kinds_and_positions():
    tokens = list(tokenize("pow(x, 2.5e1)"))
    assert [token.kind for token in tokens] == [
        "identifier",
        "lparen",
        "identifier",
        "comma",
        "number",
        "rparen",
        "end",
    ]
    assert tokens[4].text == "2.5e1"
    assert tokens[4].position == 7


def test_parse_builds_tree():
    tree = parse("x*x")
    assert tree == BinaryOp("*", Variable("x"), Variable("x"))


def test_multiplication_binds_tighter_than_addition():
    assert canonicalize(parse("1 + 2 * 3 - 4 / 5")) == "((1 + (2 * 3)) - (4 / 5))"


def test_power_is_right_associative():
    assert canonicalize(parse("2^3^2")) == "(2 ^ (3 ^ 2))"


def test_unary_minus_applies_after_power():
    assert parse("-x^2") == UnaryOp("-", BinaryOp("^", Variable("x"), Literal(2.0)))


def test_exponent_may_carry_sign():
    assert canonicalize(parse("2^-x")) == "(2 ^ (-x))"


def test_calls_and_constants():
    tree = parse("pow(sin(PI * x), E)")
    assert isinstance(tree, Call)
    assert tree.name == "pow"
    assert len(tree.args) == 2
    assert canonicalize(tree) == "pow(sin((PI * x)), E)"


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("1500", "1500"),
        ("1.5e3", "1500"),
        (".5", "0.5"),
        ("2E-3", "0.002"),
        ("7.", "7"),
    ],
)
def test_number_notation(source, expected):
    assert canonicalize(parse(source)) == expected


def test_whitespace_is_insignificant():
    assert parse("  sin ( x )\t+\n1 ") == parse("sin(x)+1")


@pytest.mark.parametrize(
    "source",
    [
        "",
        "   ",
        "(x",
        "x)",
        "1 2",
        "* 2",
        "x +",
        "sin()",
        "pow(1)",
        "sin(1, 2)",
        "sin(x",
        "sin",
        "foo(x)",
        "bar",
        "pi",
        "1.2.3",
        "1e",
        "2x",
        "x $ 2",
        "sin(,)",
        "()",
    ],
)
def test_malformed_formulas_raise_parse_error(source):
    with pytest.raises(ParseError):
        parse(source)


def test_parse_error_reports_position_and_reason():
    with pytest.raises(ParseError) as info:
        parse("x + foo(x)")
    assert info.value.position == 4
    assert "foo" in info.value.reason


def test_unmatched_paren_points_at_opening():
    with pytest.raises(ParseError) as info:
        parse("2 * (x + 1")
    assert info.value.position == 4
    assert "unmatched" in info.value.reason


def test_mode_restricts_variables():
    assert parse_for_mode("theta * 2", "polar") == parse("theta * 2")
    with pytest.raises(ParseError):
        parse_for_mode("t", "function")
    with pytest.raises(ParseError):
        parse_for_mode("y", "function")
    with pytest.raises(ValueError):
        parse_for_mode("x", "volume")


def test_free_variables_exclude_constants():
    assert free_variables(parse("x*y + PI - E")) == ["x", "y"]
    assert free_variables(parse("2")) == []


def test_deep_nesting_is_rejected_cleanly():
    with pytest.raises(ParseError):
        parse("(" * 200 + "x" + ")" * 200)
    with pytest.raises(ParseError):
        parse("-" * 300 + "x")


def test_overlong_formula_is_rejected():
    with pytest.raises(ParseError):
        parse("x+" * 600 + "x")


def test_reparsing_is_deterministic():
    source = "sin(x) * exp(-x^2 / 2) + pow(abs(x), 0.5)"
    assert parse(source) == parse(source)
    assert canonicalize(parse(canonicalize(parse(source)))) == canonicalize(parse(source))
