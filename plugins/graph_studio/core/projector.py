"""Weak-perspective projection of surface grids for wireframe previews."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .sampler import Domain

DEFAULT_WIDTH = 900.0
DEFAULT_HEIGHT = 560.0
VIEW_EXTENT = 260.0
DEFAULT_FOV = 4.0
DEPTH_DIVISOR = 200.0

Point3D = tuple[float, float, float]
Point2D = tuple[float, float]


@dataclass(frozen=True, slots=True)
class ViewParams:
    """Screen size and scaling for one projection."""

    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    base_scale: float = 1.0
    fov: float = DEFAULT_FOV
    depth_divisor: float = DEPTH_DIVISOR

    @classmethod
    def for_domains(
        cls,
        x_domain: Domain,
        y_domain: Domain,
        *,
        width: float = DEFAULT_WIDTH,
        height: float = DEFAULT_HEIGHT,
    ) -> "ViewParams":
        span = max(
            abs(x_domain.maximum - x_domain.minimum),
            abs(y_domain.maximum - y_domain.minimum),
        )
        base_scale = VIEW_EXTENT / span if span > 0 else 1.0
        return cls(width=float(width), height=float(height), base_scale=base_scale)

    @property
    def center(self) -> Point2D:
        return self.width / 2, self.height / 2


def project_arrays(x, y, z, rotation_x: float, rotation_y: float, z_scale: float, view: ViewParams):
    """Project coordinate arrays; angles are in radians.

    Rotates about the X axis, then about the Y axis, then divides by a
    depth factor ``fov / (fov + z' / depth_divisor)``. ``nan`` inputs map
    to ``nan`` screen coordinates.
    """

    cos_x, sin_x = np.cos(rotation_x), np.sin(rotation_x)
    cos_y, sin_y = np.cos(rotation_y), np.sin(rotation_y)
    cx, cy = view.center
    with np.errstate(all="ignore"):
        x0 = np.asarray(x, dtype=np.float64) * view.base_scale
        y0 = np.asarray(y, dtype=np.float64) * view.base_scale
        z0 = np.asarray(z, dtype=np.float64) * view.base_scale * z_scale

        y1 = y0 * cos_x - z0 * sin_x
        z1 = y0 * sin_x + z0 * cos_x
        x2 = x0 * cos_y + z1 * sin_y
        z2 = -x0 * sin_y + z1 * cos_y

        depth = view.fov / (view.fov + z2 / view.depth_divisor)
        return cx + x2 * depth, cy + y1 * depth


def project(point: Point3D | Sequence[float], rotation_x: float, rotation_y: float, z_scale: float, view: ViewParams) -> Point2D:
    """Project a single ``(x, y, z)`` point to screen coordinates."""

    x, y, z = point
    sx, sy = project_arrays(x, y, z, rotation_x, rotation_y, z_scale, view)
    return float(sx), float(sy)


def project_axes(
    x_domain: Domain,
    y_domain: Domain,
    rotation_x: float,
    rotation_y: float,
    z_scale: float,
    view: ViewParams,
) -> dict[str, Point2D]:
    """Project the origin and the X, Y and Z axis endpoints."""

    length = max(
        abs(x_domain.minimum),
        abs(x_domain.maximum),
        abs(y_domain.minimum),
        abs(y_domain.maximum),
    )
    anchors = {
        "origin": (0.0, 0.0, 0.0),
        "x": (length, 0.0, 0.0),
        "y": (0.0, length, 0.0),
        "z": (0.0, 0.0, length),
    }
    return {
        name: project(point, rotation_x, rotation_y, z_scale, view)
        for name, point in anchors.items()
    }


def project_grid(
    xs: Sequence[float],
    ys: Sequence[float],
    z,
    rotation_x: float,
    rotation_y: float,
    z_scale: float,
    view: ViewParams,
) -> tuple[np.ndarray, np.ndarray]:
    """Project a row-major surface grid (rows follow ``xs``)."""

    z = np.asarray(z, dtype=np.float64)
    gx = np.asarray(xs, dtype=np.float64)[:, np.newaxis] * np.ones_like(z)
    gy = np.asarray(ys, dtype=np.float64)[np.newaxis, :] * np.ones_like(z)
    return project_arrays(gx, gy, z, rotation_x, rotation_y, z_scale, view)


def _split_strip(sx: np.ndarray, sy: np.ndarray) -> list[list[Point2D]]:
    strips: list[list[Point2D]] = []
    current: list[Point2D] = []
    for px, py in zip(sx.tolist(), sy.tolist()):
        if np.isfinite(px) and np.isfinite(py):
            current.append((px, py))
            continue
        if current:
            strips.append(current)
            current = []
    if current:
        strips.append(current)
    return strips


def wireframe_strips(sx: np.ndarray, sy: np.ndarray) -> dict[str, list[list[Point2D]]]:
    """Cut projected rows and columns into polylines at undefined cells."""

    sx = np.asarray(sx, dtype=np.float64)
    sy = np.asarray(sy, dtype=np.float64)
    rows: list[list[Point2D]] = []
    for i in range(sx.shape[0]):
        rows.extend(_split_strip(sx[i, :], sy[i, :]))
    columns: list[list[Point2D]] = []
    for j in range(sx.shape[1]):
        columns.extend(_split_strip(sx[:, j], sy[:, j]))
    return {"rows": rows, "columns": columns}


__all__ = [
    "Point2D",
    "Point3D",
    "ViewParams",
    "project",
    "project_arrays",
    "project_axes",
    "project_grid",
    "wireframe_strips",
]
