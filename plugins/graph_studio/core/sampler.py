"""Domain sweeps that turn formulas into plottable point sequences."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .evaluator import evaluate_grid
from .parser import Mode, Node, canonicalize, parse_for_mode


@dataclass(frozen=True, slots=True)
class Domain:
    """Sampling of a swept parameter: ``count + 1`` values from min to max."""

    minimum: float
    maximum: float
    count: int

    @property
    def step(self) -> float:
        return (self.maximum - self.minimum) / self.count

    def values(self) -> np.ndarray:
        with np.errstate(all="ignore"):
            return self.minimum + self.step * np.arange(self.count + 1, dtype=np.float64)

    def to_dict(self) -> dict[str, float | int]:
        return {"min": self.minimum, "max": self.maximum, "count": self.count}


def make_domain(minimum: float, maximum: float, count: float | int) -> Domain:
    """Build a :class:`Domain`, clamping ``count`` to at least one interval."""

    try:
        count = int(count)
    except (TypeError, ValueError, OverflowError):
        count = 1
    return Domain(float(minimum), float(maximum), max(count, 1))


def _tree(expression: str | Node, mode: Mode) -> Node:
    if isinstance(expression, str):
        return parse_for_mode(expression, mode)
    return expression


def _series(**columns: np.ndarray) -> list[dict[str, float]]:
    names = list(columns)
    return [dict(zip(names, map(float, row))) for row in zip(*columns.values())]


def sample_function(expression: str | Node, domain: Domain) -> dict[str, object]:
    """Sample ``y = f(x)`` and return the finite points sorted by ``x``."""

    tree = _tree(expression, "function")
    xs = domain.values()
    ys = evaluate_grid(tree, {"x": xs}, xs.shape)
    keep = np.isfinite(xs) & np.isfinite(ys)
    xs, ys = xs[keep], ys[keep]
    # Line renderers need monotonically increasing x for a single-valued plot.
    order = np.argsort(xs, kind="stable")
    series = _series(x=xs[order], y=ys[order])
    return {
        "mode": "function",
        "expression": canonicalize(tree),
        "domain": domain.to_dict(),
        "points": len(series),
        "series": series,
    }


def sample_parametric(x_expression: str | Node, y_expression: str | Node, domain: Domain) -> dict[str, object]:
    """Sample ``(x(t), y(t))`` in parameter order."""

    x_tree = _tree(x_expression, "parametric")
    y_tree = _tree(y_expression, "parametric")
    ts = domain.values()
    xs = evaluate_grid(x_tree, {"t": ts}, ts.shape)
    ys = evaluate_grid(y_tree, {"t": ts}, ts.shape)
    keep = np.isfinite(xs) & np.isfinite(ys)
    series = _series(x=xs[keep], y=ys[keep])
    return {
        "mode": "parametric",
        "expression": {"x": canonicalize(x_tree), "y": canonicalize(y_tree)},
        "domain": domain.to_dict(),
        "points": len(series),
        "series": series,
    }


def sample_polar(expression: str | Node, domain: Domain) -> dict[str, object]:
    """Sample ``r = f(theta)`` and map it onto the plane in angle order."""

    tree = _tree(expression, "polar")
    thetas = domain.values()
    radii = evaluate_grid(tree, {"theta": thetas}, thetas.shape)
    with np.errstate(all="ignore"):
        xs = radii * np.cos(thetas)
        ys = radii * np.sin(thetas)
    keep = np.isfinite(radii) & np.isfinite(xs) & np.isfinite(ys)
    series = _series(x=xs[keep], y=ys[keep], theta=thetas[keep], r=radii[keep])
    return {
        "mode": "polar",
        "expression": canonicalize(tree),
        "domain": domain.to_dict(),
        "points": len(series),
        "series": series,
    }


def sample_surface(expression: str | Node, x_domain: Domain, y_domain: Domain) -> dict[str, object]:
    """Sample ``z = f(x, y)`` on a grid of rows (x) by columns (y).

    Undefined cells stay in the grid as ``nan`` so wireframe strips can
    break at them instead of joining unrelated neighbours.
    """

    tree = _tree(expression, "surface")
    xs = x_domain.values()
    ys = y_domain.values()
    shape = (xs.size, ys.size)
    z = evaluate_grid(tree, {"x": xs[:, np.newaxis], "y": ys[np.newaxis, :]}, shape)
    z[~np.isfinite(z)] = np.nan
    return {
        "mode": "surface",
        "expression": canonicalize(tree),
        "domain": {"x": x_domain.to_dict(), "y": y_domain.to_dict()},
        "points": int(np.isfinite(z).sum()),
        "shape": list(shape),
        "grid": {
            "x": xs.tolist(),
            "y": ys.tolist(),
            "z": z.tolist(),
        },
    }


def surface_cells(payload: dict[str, object]) -> list[list[dict[str, float]]]:
    """Expand a surface payload into rows of ``{x, y, z}`` records."""

    grid = payload["grid"]
    return [
        [{"x": x, "y": y, "z": z} for y, z in zip(grid["y"], row)]
        for x, row in zip(grid["x"], grid["z"])
    ]


__all__ = [
    "Domain",
    "make_domain",
    "sample_function",
    "sample_parametric",
    "sample_polar",
    "sample_surface",
    "surface_cells",
]
