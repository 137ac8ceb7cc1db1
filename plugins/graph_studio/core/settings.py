"""Resolution limits for the Graph Studio sweeps."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class Limit:
    minimum: int
    maximum: int
    default: int

    @classmethod
    def from_settings(cls, raw: Any, fallback: "Limit") -> "Limit":
        """Read a ``{min, max, default}`` mapping, keeping fallbacks for bad values."""

        if not isinstance(raw, Mapping):
            return fallback

        def _int(key: str, default: int) -> int:
            try:
                return int(float(raw.get(key, default)))
            except (TypeError, ValueError, OverflowError):
                return default

        minimum = max(_int("min", fallback.minimum), 1)
        maximum = max(_int("max", fallback.maximum), minimum)
        default = min(max(_int("default", fallback.default), minimum), maximum)
        return cls(minimum=minimum, maximum=maximum, default=default)

    def clamp(self, value: Any) -> int:
        """Clamp ``value`` into range; missing or non-numeric input uses the default."""

        if value is None:
            return self.default
        try:
            number = float(value)
        except OverflowError:
            return self.maximum if value > 0 else self.minimum
        except (TypeError, ValueError):
            return self.default
        if math.isnan(number):
            return self.default
        if number <= self.minimum:
            return self.minimum
        if number >= self.maximum:
            return self.maximum
        return int(number)


_DEFAULTS: dict[str, Limit] = {
    "function_points": Limit(minimum=1, maximum=5000, default=400),
    "polar_steps": Limit(minimum=1, maximum=5000, default=600),
    "surface_steps": Limit(minimum=1, maximum=200, default=60),
    "zeta_steps": Limit(minimum=1, maximum=2000, default=240),
    "zeta_terms": Limit(minimum=2, maximum=1000, default=70),
    "zeta_grid_steps": Limit(minimum=1, maximum=60, default=18),
}


@dataclass(frozen=True)
class GraphStudioSettings:
    function_points: Limit
    polar_steps: Limit
    surface_steps: Limit
    zeta_steps: Limit
    zeta_terms: Limit
    zeta_grid_steps: Limit

    def to_dict(self) -> dict[str, dict[str, int]]:
        return {
            name: {"min": limit.minimum, "max": limit.maximum, "default": limit.default}
            for name, limit in (
                (field, getattr(self, field)) for field in _DEFAULTS
            )
        }


def load_settings(raw: Mapping[str, object] | None) -> GraphStudioSettings:
    """Build settings from the ``plugins.graph_studio`` block of ``config.yml``."""

    raw = raw or {}
    limits = raw.get("limits") if isinstance(raw, Mapping) else None
    if not isinstance(limits, Mapping):
        limits = {}
    return GraphStudioSettings(
        **{name: Limit.from_settings(limits.get(name), fallback) for name, fallback in _DEFAULTS.items()}
    )


__all__ = ["GraphStudioSettings", "Limit", "load_settings"]
