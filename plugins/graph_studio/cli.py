"""Command line interface for the Graph Studio plugin."""

from __future__ import annotations

import argparse
import json
import math
import sys
from typing import Any

from common.responses import json_safe

from .core import (
    ParseError,
    ViewParams,
    canonicalize,
    critical_line,
    free_variables,
    make_domain,
    parse,
    project_axes,
    project_grid,
    sample_function,
    sample_parametric,
    sample_polar,
    sample_surface,
    surface_cells,
    wireframe_strips,
    zeta_grid,
)


def _print(payload: dict[str, Any]) -> None:
    print(json.dumps(json_safe(payload), indent=2, sort_keys=True))


def command_parse(args: argparse.Namespace) -> None:
    tree = parse(args.expression)
    _print({"canonical": canonicalize(tree), "used_variables": free_variables(tree)})


def command_function(args: argparse.Namespace) -> None:
    _print(sample_function(args.expression, make_domain(args.x_min, args.x_max, args.points)))


def command_parametric(args: argparse.Namespace) -> None:
    domain = make_domain(args.t_min, args.t_max, args.points)
    _print(sample_parametric(args.x_expression, args.y_expression, domain))


def command_polar(args: argparse.Namespace) -> None:
    _print(sample_polar(args.expression, make_domain(args.theta_min, args.theta_max, args.steps)))


def command_surface(args: argparse.Namespace) -> None:
    x_domain = make_domain(args.x_min, args.x_max, args.steps)
    y_domain = make_domain(args.y_min, args.y_max, args.steps)
    payload = sample_surface(args.expression, x_domain, y_domain)
    if args.cells:
        payload["cells"] = surface_cells(payload)
    if args.project:
        view = ViewParams.for_domains(x_domain, y_domain)
        rotate_x, rotate_y = math.radians(args.rotate_x), math.radians(args.rotate_y)
        grid = payload["grid"]
        sx, sy = project_grid(grid["x"], grid["y"], grid["z"], rotate_x, rotate_y, args.z_scale, view)
        payload["projection"] = {
            "axes": project_axes(x_domain, y_domain, rotate_x, rotate_y, args.z_scale, view),
            "strips": wireframe_strips(sx, sy),
        }
    _print(payload)


def command_zeta(args: argparse.Namespace) -> None:
    if args.action == "line":
        _print(critical_line(make_domain(args.t_min, args.t_max, args.steps), args.terms))
    elif args.action == "grid":
        _print(
            zeta_grid(
                make_domain(args.re_min, args.re_max, args.steps),
                make_domain(args.im_min, args.im_max, args.steps),
                args.terms,
            )
        )
    else:  # pragma: no cover - argparse guards
        raise SystemExit(f"Unknown zeta action: {args.action}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Graph Studio CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_parser = subparsers.add_parser("parse", help="Validate a formula and print its canonical form")
    parse_parser.add_argument("expression")
    parse_parser.set_defaults(func=command_parse)

    function_parser = subparsers.add_parser("function", help="Sample y = f(x)")
    function_parser.add_argument("expression")
    function_parser.add_argument("--x-min", type=float, default=-10.0)
    function_parser.add_argument("--x-max", type=float, default=10.0)
    function_parser.add_argument("--points", type=int, default=400)
    function_parser.set_defaults(func=command_function)

    parametric_parser = subparsers.add_parser("parametric", help="Sample (x(t), y(t))")
    parametric_parser.add_argument("x_expression")
    parametric_parser.add_argument("y_expression")
    parametric_parser.add_argument("--t-min", type=float, default=0.0)
    parametric_parser.add_argument("--t-max", type=float, default=2 * math.pi)
    parametric_parser.add_argument("--points", type=int, default=400)
    parametric_parser.set_defaults(func=command_parametric)

    polar_parser = subparsers.add_parser("polar", help="Sample r = f(theta)")
    polar_parser.add_argument("expression")
    polar_parser.add_argument("--theta-min", type=float, default=0.0)
    polar_parser.add_argument("--theta-max", type=float, default=2 * math.pi)
    polar_parser.add_argument("--steps", type=int, default=600)
    polar_parser.set_defaults(func=command_polar)

    surface_parser = subparsers.add_parser("surface", help="Sample z = f(x, y) on a grid")
    surface_parser.add_argument("expression")
    surface_parser.add_argument("--x-min", type=float, default=-6.0)
    surface_parser.add_argument("--x-max", type=float, default=6.0)
    surface_parser.add_argument("--y-min", type=float, default=-6.0)
    surface_parser.add_argument("--y-max", type=float, default=6.0)
    surface_parser.add_argument("--steps", type=int, default=60)
    surface_parser.add_argument("--project", action="store_true", help="Include the projected wireframe")
    surface_parser.add_argument("--cells", action="store_true", help="Also list every grid cell as an {x, y, z} record")
    surface_parser.add_argument("--rotate-x", type=float, default=25.0, help="Degrees")
    surface_parser.add_argument("--rotate-y", type=float, default=-35.0, help="Degrees")
    surface_parser.add_argument("--z-scale", type=float, default=1.1)
    surface_parser.set_defaults(func=command_surface)

    zeta_parser = subparsers.add_parser("zeta", help="Riemann zeta approximations")
    zeta_sub = zeta_parser.add_subparsers(dest="action", required=True)
    line_parser = zeta_sub.add_parser("line", help="Sample zeta(1/2 + it)")
    line_parser.add_argument("--t-min", type=float, default=0.0)
    line_parser.add_argument("--t-max", type=float, default=40.0)
    line_parser.add_argument("--steps", type=int, default=240)
    line_parser.add_argument("--terms", type=int, default=70)
    grid_parser = zeta_sub.add_parser("grid", help="Map a rectangle of s through zeta")
    grid_parser.add_argument("--re-min", type=float, default=-1.0)
    grid_parser.add_argument("--re-max", type=float, default=2.0)
    grid_parser.add_argument("--im-min", type=float, default=-8.0)
    grid_parser.add_argument("--im-max", type=float, default=8.0)
    grid_parser.add_argument("--steps", type=int, default=18)
    grid_parser.add_argument("--terms", type=int, default=70)
    zeta_parser.set_defaults(func=command_zeta)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except ParseError as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc


if __name__ == "__main__":
    main()
