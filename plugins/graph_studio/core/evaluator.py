"""Evaluation of parsed formulas with IEEE-754 semantics."""

from __future__ import annotations

from typing import Callable, Mapping, Union

import numpy as np

from .parser import BinaryOp, Call, Literal, Node, UnaryOp, Variable

Scalar = Union[float, np.ndarray]

CONSTANTS: dict[str, float] = {"PI": float(np.pi), "E": float(np.e)}

FUNCTIONS: dict[str, Callable[..., Scalar]] = {
    "sin": np.sin,
    "cos": np.cos,
    "tan": np.tan,
    "sinh": np.sinh,
    "cosh": np.cosh,
    "tanh": np.tanh,
    "exp": np.exp,
    "log": np.log,
    "sqrt": np.sqrt,
    "abs": np.abs,
    "pow": np.power,
}

_BINARY: dict[str, Callable[[Scalar, Scalar], Scalar]] = {
    "+": np.add,
    "-": np.subtract,
    "*": np.multiply,
    "/": np.divide,
    "^": np.power,
}

_NAN = np.float64("nan")


def _eval_node(node: Node, binding: Mapping[str, Scalar]) -> Scalar:
    if isinstance(node, Literal):
        return np.float64(node.value)
    if isinstance(node, Variable):
        if node.name in CONSTANTS:
            return np.float64(CONSTANTS[node.name])
        if node.name not in binding:
            return _NAN
        return np.asarray(binding[node.name], dtype=np.float64)
    if isinstance(node, UnaryOp):
        operand = _eval_node(node.operand, binding)
        return np.negative(operand) if node.op == "-" else operand
    if isinstance(node, BinaryOp):
        left = _eval_node(node.left, binding)
        right = _eval_node(node.right, binding)
        return _BINARY[node.op](left, right)
    if isinstance(node, Call):
        args = [_eval_node(arg, binding) for arg in node.args]
        return FUNCTIONS[node.name](*args)
    raise TypeError(f"Unsupported node {node!r}")


def evaluate(node: Node, binding: Mapping[str, Scalar]) -> Scalar:
    """Evaluate ``node`` under ``binding``.

    Domain errors surface as ``nan`` or ``±inf`` exactly as the floating
    point operations produce them; nothing is raised for them. Binding
    values may be floats or NumPy arrays, in which case the result is an
    array broadcast over the bound inputs. A variable missing from the
    binding evaluates to ``nan``.
    """

    with np.errstate(all="ignore"):
        value = _eval_node(node, binding)
    if np.ndim(value) == 0:
        return float(value)
    # a bare variable would otherwise hand back the caller's own array
    return np.array(value, dtype=np.float64, copy=True)


def evaluate_grid(node: Node, binding: Mapping[str, Scalar], shape: tuple[int, ...]) -> np.ndarray:
    """Evaluate ``node`` and broadcast the result to ``shape``.

    Formulas that ignore some or all of their variables (``"1"``) still
    yield one value per sample.
    """

    value = evaluate(node, binding)
    return np.broadcast_to(np.asarray(value, dtype=np.float64), shape).copy()


__all__ = ["CONSTANTS", "FUNCTIONS", "Scalar", "evaluate", "evaluate_grid"]
