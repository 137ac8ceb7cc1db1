"""API routes for the Graph Studio plugin."""

from __future__ import annotations

import math
from typing import Literal

from flask import Blueprint, Response, current_app, request

from common.errors import ParseAppError, ValidationAppError
from common.logging import get_logger
from common.responses import fail, ok
from common.validation import FiniteFloat, SchemaModel, ValidationError, parse_model

from ..core import (
    MODE_VARIABLES,
    GraphStudioSettings,
    ParseError,
    ViewParams,
    canonicalize,
    critical_line,
    evaluate,
    free_variables,
    list_presets,
    load_settings,
    make_domain,
    parse,
    parse_for_mode,
    project_axes,
    project_grid,
    sample_function,
    sample_parametric,
    sample_polar,
    sample_surface,
    wireframe_strips,
    zeta_grid,
)
from ..core.parser import ALL_VARIABLES

logger = get_logger("graph_studio")

PlotMode = Literal["function", "parametric", "polar", "surface"]


class ParsePayload(SchemaModel):
    expression: str
    mode: PlotMode | None = None


class EvaluatePayload(SchemaModel):
    expression: str
    mode: PlotMode | None = None
    variables: dict[str, float | int] | None = None


class FunctionPayload(SchemaModel):
    expression: str
    x_min: FiniteFloat = -10.0
    x_max: FiniteFloat = 10.0
    points: float | int | None = None


class ParametricPayload(SchemaModel):
    x_expression: str
    y_expression: str
    t_min: FiniteFloat = 0.0
    t_max: FiniteFloat = 2 * math.pi
    points: float | int | None = None


class PolarPayload(SchemaModel):
    expression: str
    theta_min: FiniteFloat = 0.0
    theta_max: FiniteFloat = 2 * math.pi
    steps: float | int | None = None


class SurfacePayload(SchemaModel):
    expression: str
    x_min: FiniteFloat = -6.0
    x_max: FiniteFloat = 6.0
    y_min: FiniteFloat = -6.0
    y_max: FiniteFloat = 6.0
    steps: float | int | None = None
    project: bool = True
    rotate_x: FiniteFloat = 25.0
    rotate_y: FiniteFloat = -35.0
    z_scale: FiniteFloat = 1.1
    width: FiniteFloat = 900.0
    height: FiniteFloat = 560.0


class CriticalLinePayload(SchemaModel):
    t_min: FiniteFloat = 0.0
    t_max: FiniteFloat = 40.0
    steps: float | int | None = None
    terms: float | int | None = None


class ZetaGridPayload(SchemaModel):
    re_min: FiniteFloat = -1.0
    re_max: FiniteFloat = 2.0
    im_min: FiniteFloat = -8.0
    im_max: FiniteFloat = 8.0
    steps: float | int | None = None
    terms: float | int | None = None


api_bp = Blueprint("graph_studio_api", __name__, url_prefix="/api/graph_studio")


def _settings() -> GraphStudioSettings:
    raw = current_app.config.get("PLUGIN_SETTINGS", {}).get("graph_studio", {})
    return load_settings(raw)


def _invalid_request(exc: ValidationError) -> Response:
    return fail(
        ValidationAppError(
            message=str(exc),
            code="graph_studio.invalid_request",
            details={"errors": getattr(exc, "details", None) or []},
        )
    )


def _parse_failure(exc: ParseError, field: str) -> Response:
    logger.warning("rejected formula in %s: %s at %d", field, exc.reason, exc.position)
    return fail(ParseAppError.from_parse_error(exc, field=field))


def _finite(value: float) -> float | None:
    return value if math.isfinite(value) else None


def _as_float(value: float | int) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def _points(sx, sy) -> list[list[list[float] | None]]:
    return [
        [[px, py] if math.isfinite(px) and math.isfinite(py) else None for px, py in zip(row_x, row_y)]
        for row_x, row_y in zip(sx.tolist(), sy.tolist())
    ]


@api_bp.get("/presets")
def presets() -> Response:
    mode = request.args.get("mode")
    try:
        data = list_presets(mode or None)
    except KeyError:
        return fail(ValidationAppError(message=f"Unknown plot mode '{mode}'", code="graph_studio.invalid_mode"))
    return ok({"presets": data})


@api_bp.get("/settings")
def settings() -> Response:
    return ok({"limits": _settings().to_dict()})


@api_bp.post("/parse")
def parse_endpoint() -> Response:
    try:
        payload = parse_model(ParsePayload, request.get_json(silent=True))
    except ValidationError as exc:
        return _invalid_request(exc)
    variables = MODE_VARIABLES[payload.mode] if payload.mode else ALL_VARIABLES
    try:
        tree = parse(payload.expression, variables=variables)
    except ParseError as exc:
        return _parse_failure(exc, "expression")
    return ok(
        {
            "canonical": canonicalize(tree),
            "mode": payload.mode,
            "used_variables": free_variables(tree),
        }
    )


@api_bp.post("/evaluate")
def evaluate_endpoint() -> Response:
    try:
        payload = parse_model(EvaluatePayload, request.get_json(silent=True))
    except ValidationError as exc:
        return _invalid_request(exc)
    variables = MODE_VARIABLES[payload.mode] if payload.mode else ALL_VARIABLES
    try:
        tree = parse(payload.expression, variables=variables)
    except ParseError as exc:
        return _parse_failure(exc, "expression")
    binding = {name: _as_float(value) for name, value in (payload.variables or {}).items()}
    value = evaluate(tree, binding)
    return ok(
        {
            "result": _finite(value),
            "finite": math.isfinite(value),
            "canonical": canonicalize(tree),
            "used_variables": free_variables(tree),
        }
    )


@api_bp.post("/plot/function")
def plot_function() -> Response:
    try:
        payload = parse_model(FunctionPayload, request.get_json(silent=True))
    except ValidationError as exc:
        return _invalid_request(exc)
    try:
        tree = parse_for_mode(payload.expression, "function")
    except ParseError as exc:
        return _parse_failure(exc, "expression")
    count = _settings().function_points.clamp(payload.points)
    result = sample_function(tree, make_domain(payload.x_min, payload.x_max, count))
    logger.debug("function sweep: count=%d kept=%d", count, result["points"])
    return ok(result)


@api_bp.post("/plot/parametric")
def plot_parametric() -> Response:
    try:
        payload = parse_model(ParametricPayload, request.get_json(silent=True))
    except ValidationError as exc:
        return _invalid_request(exc)
    trees = {}
    for field in ("x_expression", "y_expression"):
        try:
            trees[field] = parse_for_mode(getattr(payload, field), "parametric")
        except ParseError as exc:
            return _parse_failure(exc, field)
    count = _settings().function_points.clamp(payload.points)
    result = sample_parametric(
        trees["x_expression"],
        trees["y_expression"],
        make_domain(payload.t_min, payload.t_max, count),
    )
    logger.debug("parametric sweep: count=%d kept=%d", count, result["points"])
    return ok(result)


@api_bp.post("/plot/polar")
def plot_polar() -> Response:
    try:
        payload = parse_model(PolarPayload, request.get_json(silent=True))
    except ValidationError as exc:
        return _invalid_request(exc)
    try:
        tree = parse_for_mode(payload.expression, "polar")
    except ParseError as exc:
        return _parse_failure(exc, "expression")
    count = _settings().polar_steps.clamp(payload.steps)
    result = sample_polar(tree, make_domain(payload.theta_min, payload.theta_max, count))
    logger.debug("polar sweep: count=%d kept=%d", count, result["points"])
    return ok(result)


@api_bp.post("/plot/surface")
def plot_surface() -> Response:
    try:
        payload = parse_model(SurfacePayload, request.get_json(silent=True))
    except ValidationError as exc:
        return _invalid_request(exc)
    try:
        tree = parse_for_mode(payload.expression, "surface")
    except ParseError as exc:
        return _parse_failure(exc, "expression")
    steps = _settings().surface_steps.clamp(payload.steps)
    x_domain = make_domain(payload.x_min, payload.x_max, steps)
    y_domain = make_domain(payload.y_min, payload.y_max, steps)
    result = sample_surface(tree, x_domain, y_domain)
    logger.debug("surface sweep: steps=%d defined=%d", steps, result["points"])

    if payload.project:
        view = ViewParams.for_domains(x_domain, y_domain, width=payload.width, height=payload.height)
        rotate_x = math.radians(payload.rotate_x)
        rotate_y = math.radians(payload.rotate_y)
        grid = result["grid"]
        sx, sy = project_grid(grid["x"], grid["y"], grid["z"], rotate_x, rotate_y, payload.z_scale, view)
        result["projection"] = {
            "rotate_x": payload.rotate_x,
            "rotate_y": payload.rotate_y,
            "z_scale": payload.z_scale,
            "view": {"width": view.width, "height": view.height, "base_scale": view.base_scale},
            "axes": project_axes(x_domain, y_domain, rotate_x, rotate_y, payload.z_scale, view),
            "points": _points(sx, sy),
            "strips": wireframe_strips(sx, sy),
        }
    return ok(result)


@api_bp.post("/zeta/critical-line")
def zeta_critical_line() -> Response:
    try:
        payload = parse_model(CriticalLinePayload, request.get_json(silent=True))
    except ValidationError as exc:
        return _invalid_request(exc)
    config = _settings()
    steps = config.zeta_steps.clamp(payload.steps)
    terms = config.zeta_terms.clamp(payload.terms)
    result = critical_line(make_domain(payload.t_min, payload.t_max, steps), terms)
    logger.debug("critical line sweep: steps=%d terms=%d kept=%d", steps, terms, result["points"])
    return ok(result)


@api_bp.post("/zeta/grid")
def zeta_grid_endpoint() -> Response:
    try:
        payload = parse_model(ZetaGridPayload, request.get_json(silent=True))
    except ValidationError as exc:
        return _invalid_request(exc)
    config = _settings()
    steps = config.zeta_grid_steps.clamp(payload.steps)
    terms = config.zeta_terms.clamp(payload.terms)
    result = zeta_grid(
        make_domain(payload.re_min, payload.re_max, steps),
        make_domain(payload.im_min, payload.im_max, steps),
        terms,
    )
    logger.debug("zeta grid: steps=%d terms=%d kept=%d", steps, result["terms"], result["points"])
    return ok(result)


blueprints = [api_bp]


__all__ = [
    "blueprints",
    "evaluate_endpoint",
    "parse_endpoint",
    "plot_function",
    "plot_parametric",
    "plot_polar",
    "plot_surface",
    "presets",
    "settings",
    "zeta_critical_line",
    "zeta_grid_endpoint",
]
