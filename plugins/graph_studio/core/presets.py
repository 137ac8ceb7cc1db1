"""Bundled example formulas for each plot mode."""

from __future__ import annotations

PRESETS: dict[str, list[dict[str, str]]] = {
    "function": [
        {"label": "Parabola y = x^2", "expression": "x * x"},
        {"label": "Damped wave y = exp(-x/5) * sin(x)", "expression": "exp(-x/5) * sin(x)"},
        {"label": "Hyperbola y = 1/x", "expression": "1/x"},
    ],
    "parametric": [
        {"label": "Ellipse", "x_expression": "3 * cos(t)", "y_expression": "2 * sin(t)"},
        {"label": "Lissajous", "x_expression": "sin(3*t)", "y_expression": "sin(2*t)"},
    ],
    "polar": [
        {"label": "Unit circle r = 1", "expression": "1"},
        {"label": "Rose r = cos(4θ)", "expression": "cos(4*theta)"},
        {"label": "Spiral r = exp(0.15θ)", "expression": "exp(0.15*theta)"},
        {"label": "Four-leaf r = 2*sin(2θ)", "expression": "2*sin(2*theta)"},
        {"label": "Limaçon r = 1+0.5*cos(θ)", "expression": "1 + 0.5*cos(theta)"},
    ],
    "surface": [
        {"label": "Wave z = sin(x) * cos(y)", "expression": "sin(x) * cos(y)"},
        {"label": "Saddle z = x^2 - y^2", "expression": "x*x - y*y"},
        {"label": "Hill z = exp(-(x^2 + y^2))", "expression": "exp(-(x*x + y*y))"},
        {"label": "Ripple z = sin(sqrt(x^2 + y^2))", "expression": "sin(sqrt(x*x + y*y))"},
        {"label": "Cone z = sqrt(x^2 + y^2)", "expression": "sqrt(x*x + y*y)"},
    ],
}


def list_presets(mode: str | None = None) -> dict[str, list[dict[str, str]]]:
    if mode is None:
        return {name: [dict(item) for item in items] for name, items in PRESETS.items()}
    if mode not in PRESETS:
        raise KeyError(mode)
    return {mode: [dict(item) for item in PRESETS[mode]]}


__all__ = ["PRESETS", "list_presets"]
