"""Tokenizer and recursive-descent parser for plot formulas.

Formulas are parsed into a small immutable tree of :class:`Literal`,
:class:`Variable`, :class:`Call`, :class:`BinaryOp` and :class:`UnaryOp`
nodes. Every identifier is resolved against a closed table while parsing,
so a tree that comes out of :func:`parse` can only ever reference the
constants, functions and mode variables listed below.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Literal as TypingLiteral, Union

CONSTANT_NAMES = frozenset({"PI", "E"})

FUNCTION_ARITY: dict[str, int] = {
    "sin": 1,
    "cos": 1,
    "tan": 1,
    "sinh": 1,
    "cosh": 1,
    "tanh": 1,
    "exp": 1,
    "log": 1,
    "sqrt": 1,
    "abs": 1,
    "pow": 2,
}

Mode = TypingLiteral["function", "parametric", "polar", "surface"]

MODE_VARIABLES: dict[str, tuple[str, ...]] = {
    "function": ("x",),
    "parametric": ("t",),
    "polar": ("theta",),
    "surface": ("x", "y"),
}

ALL_VARIABLES: tuple[str, ...] = ("x", "y", "t", "theta")

_MAX_FORMULA_LENGTH = 1024
_MAX_DEPTH = 100
_OPERATORS = "+-*/^"

TokenKind = TypingLiteral["number", "identifier", "operator", "lparen", "rparen", "comma", "end"]


class ParseError(ValueError):
    """Raised when a formula is malformed or references an unknown name."""

    def __init__(self, reason: str, position: int):
        super().__init__(f"{reason} at position {position}")
        self.reason = reason
        self.position = position


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    text: str
    position: int


@dataclass(frozen=True, slots=True)
class Literal:
    value: float


@dataclass(frozen=True, slots=True)
class Variable:
    name: str


@dataclass(frozen=True, slots=True)
class Call:
    name: str
    args: tuple[Node, ...]


@dataclass(frozen=True, slots=True)
class BinaryOp:
    op: str
    left: Node
    right: Node


@dataclass(frozen=True, slots=True)
class UnaryOp:
    op: str
    operand: Node


Node = Union[Literal, Variable, Call, BinaryOp, UnaryOp]


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _scan_number(source: str, start: int) -> int:
    """Return the end offset of the numeric literal starting at ``start``."""

    index = start
    length = len(source)
    while index < length and _is_digit(source[index]):
        index += 1
    if index < length and source[index] == ".":
        index += 1
        while index < length and _is_digit(source[index]):
            index += 1
    if index == start + 1 and source[start] == ".":
        raise ParseError("malformed number", start)
    if index < length and source[index] in "eE":
        exponent = index + 1
        if exponent < length and source[exponent] in "+-":
            exponent += 1
        if exponent >= length or not _is_digit(source[exponent]):
            raise ParseError("malformed number", start)
        index = exponent
        while index < length and _is_digit(source[index]):
            index += 1
    # A literal glued to a letter, digit or second decimal point ("1.2.3", "2x").
    if index < length and (source[index].isalnum() or source[index] in "._"):
        raise ParseError("malformed number", start)
    return index


def tokenize(source: str) -> Iterator[Token]:
    """Yield tokens for ``source`` followed by a single ``end`` token."""

    index = 0
    length = len(source)
    while index < length:
        char = source[index]
        if char.isspace():
            index += 1
            continue
        if _is_digit(char) or char == ".":
            end = _scan_number(source, index)
            yield Token("number", source[index:end], index)
            index = end
            continue
        if char.isalpha() or char == "_":
            end = index + 1
            while end < length and (source[end].isalnum() or source[end] == "_"):
                end += 1
            yield Token("identifier", source[index:end], index)
            index = end
            continue
        if char in _OPERATORS:
            yield Token("operator", char, index)
        elif char == "(":
            yield Token("lparen", char, index)
        elif char == ")":
            yield Token("rparen", char, index)
        elif char == ",":
            yield Token("comma", char, index)
        else:
            raise ParseError(f"unexpected character {char!r}", index)
        index += 1
    yield Token("end", "", length)


class _Parser:
    def __init__(self, source: str, variables: frozenset[str]):
        self.tokens = list(tokenize(source))
        self.index = 0
        self.depth = 0
        self.variables = variables

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def advance(self) -> Token:
        token = self.tokens[self.index]
        if token.kind != "end":
            self.index += 1
        return token

    def at_operator(self, symbols: str) -> bool:
        token = self.current
        return token.kind == "operator" and token.text in symbols

    def descend(self, position: int) -> None:
        self.depth += 1
        if self.depth > _MAX_DEPTH:
            raise ParseError("formula is nested too deeply", position)

    def parse(self) -> Node:
        if self.current.kind == "end":
            raise ParseError("formula is empty", 0)
        node = self.expression()
        token = self.current
        if token.kind == "rparen":
            raise ParseError("unmatched ')'", token.position)
        if token.kind != "end":
            raise ParseError(f"unexpected {token.text!r} after end of expression", token.position)
        return node

    def expression(self) -> Node:
        node = self.term()
        while self.at_operator("+-"):
            op = self.advance().text
            node = BinaryOp(op, node, self.term())
        return node

    def term(self) -> Node:
        node = self.unary()
        while self.at_operator("*/"):
            op = self.advance().text
            node = BinaryOp(op, node, self.unary())
        return node

    def unary(self) -> Node:
        if self.at_operator("+-"):
            token = self.advance()
            self.descend(token.position)
            node = UnaryOp(token.text, self.unary())
            self.depth -= 1
            return node
        return self.power()

    def power(self) -> Node:
        base = self.atom()
        if not self.at_operator("^"):
            return base
        token = self.advance()
        self.descend(token.position)
        # Right-associative; the exponent may carry its own sign (2^-1).
        exponent = self.unary()
        self.depth -= 1
        return BinaryOp("^", base, exponent)

    def atom(self) -> Node:
        token = self.current
        if token.kind == "number":
            self.advance()
            return Literal(float(token.text))
        if token.kind == "identifier":
            self.advance()
            if self.current.kind == "lparen":
                return self.call(token)
            return self.name(token)
        if token.kind == "lparen":
            self.advance()
            self.descend(token.position)
            node = self.expression()
            self.depth -= 1
            if self.current.kind != "rparen":
                raise ParseError("unmatched '('", token.position)
            self.advance()
            return node
        if token.kind == "end":
            raise ParseError("unexpected end of formula", token.position)
        raise ParseError(f"expected a value but found {token.text!r}", token.position)

    def name(self, token: Token) -> Node:
        name = token.text
        if name in CONSTANT_NAMES or name in self.variables:
            return Variable(name)
        if name in FUNCTION_ARITY:
            raise ParseError(f"function {name!r} must be called with arguments", token.position)
        raise ParseError(f"unknown identifier {name!r}", token.position)

    def call(self, token: Token) -> Node:
        name = token.text
        arity = FUNCTION_ARITY.get(name)
        if arity is None:
            raise ParseError(f"unknown function {name!r}", token.position)
        opening = self.advance()
        self.descend(opening.position)
        args: list[Node] = []
        if self.current.kind != "rparen":
            args.append(self.expression())
            while self.current.kind == "comma":
                self.advance()
                args.append(self.expression())
        if self.current.kind != "rparen":
            raise ParseError("unmatched '('", opening.position)
        self.advance()
        self.depth -= 1
        if len(args) != arity:
            plural = "argument" if arity == 1 else "arguments"
            raise ParseError(
                f"{name}() takes {arity} {plural} but {len(args)} were given",
                token.position,
            )
        return Call(name, tuple(args))


def parse(source: str, *, variables: Iterable[str] = ALL_VARIABLES) -> Node:
    """Parse ``source`` into an expression tree.

    ``variables`` lists the free variable names the formula may use; any
    other identifier outside the constant and function tables is rejected
    with :class:`ParseError`.
    """

    if not isinstance(source, str):
        raise ParseError("formula must be text", 0)
    if len(source) > _MAX_FORMULA_LENGTH:
        raise ParseError("formula is too long", _MAX_FORMULA_LENGTH)
    return _Parser(source, frozenset(variables)).parse()


def parse_for_mode(source: str, mode: Mode) -> Node:
    """Parse ``source`` with the variable set of a plot mode."""

    try:
        variables = MODE_VARIABLES[mode]
    except KeyError:
        raise ValueError(f"Unknown plot mode {mode!r}") from None
    return parse(source, variables=variables)


def _format_number(value: float) -> str:
    return f"{value:.12g}"


def canonicalize(node: Node) -> str:
    """Render ``node`` as a fully parenthesized formula."""

    if isinstance(node, Literal):
        return _format_number(node.value)
    if isinstance(node, Variable):
        return node.name
    if isinstance(node, UnaryOp):
        return f"({node.op}{canonicalize(node.operand)})"
    if isinstance(node, BinaryOp):
        return f"({canonicalize(node.left)} {node.op} {canonicalize(node.right)})"
    if isinstance(node, Call):
        args = ", ".join(canonicalize(arg) for arg in node.args)
        return f"{node.name}({args})"
    raise TypeError(f"Unsupported node {node!r}")


def walk(node: Node) -> Iterator[Node]:
    yield node
    if isinstance(node, UnaryOp):
        yield from walk(node.operand)
    elif isinstance(node, BinaryOp):
        yield from walk(node.left)
        yield from walk(node.right)
    elif isinstance(node, Call):
        for arg in node.args:
            yield from walk(arg)


def free_variables(node: Node) -> list[str]:
    """Return the sorted variable names ``node`` reads, excluding constants."""

    names = {
        child.name
        for child in walk(node)
        if isinstance(child, Variable) and child.name not in CONSTANT_NAMES
    }
    return sorted(names)


__all__ = [
    "ALL_VARIABLES",
    "BinaryOp",
    "Call",
    "CONSTANT_NAMES",
    "FUNCTION_ARITY",
    "Literal",
    "MODE_VARIABLES",
    "Mode",
    "Node",
    "ParseError",
    "Token",
    "UnaryOp",
    "Variable",
    "canonicalize",
    "free_variables",
    "parse",
    "parse_for_mode",
    "tokenize",
    "walk",
]
