"""Exports for the Graph Studio core."""

from .complex_math import add, cexp, div, inv_pow_real, modulus, sub
from .evaluator import CONSTANTS, FUNCTIONS, evaluate, evaluate_grid
from .parser import (
    MODE_VARIABLES,
    Node,
    ParseError,
    canonicalize,
    free_variables,
    parse,
    parse_for_mode,
)
from .presets import PRESETS, list_presets
from .projector import ViewParams, project, project_axes, project_grid, wireframe_strips
from .sampler import (
    Domain,
    make_domain,
    sample_function,
    sample_parametric,
    sample_polar,
    sample_surface,
    surface_cells,
)
from .settings import GraphStudioSettings, Limit, load_settings
from .zeta import critical_line, grid_terms, zeta_approx, zeta_grid

__all__ = [
    "CONSTANTS",
    "Domain",
    "FUNCTIONS",
    "GraphStudioSettings",
    "Limit",
    "MODE_VARIABLES",
    "Node",
    "PRESETS",
    "ParseError",
    "ViewParams",
    "add",
    "canonicalize",
    "cexp",
    "critical_line",
    "div",
    "evaluate",
    "evaluate_grid",
    "free_variables",
    "grid_terms",
    "inv_pow_real",
    "list_presets",
    "load_settings",
    "make_domain",
    "modulus",
    "parse",
    "parse_for_mode",
    "project",
    "project_axes",
    "project_grid",
    "sample_function",
    "sample_parametric",
    "sample_polar",
    "sample_surface",
    "sub",
    "surface_cells",
    "wireframe_strips",
    "zeta_approx",
    "zeta_grid",
]
