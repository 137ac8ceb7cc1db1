"""Riemann zeta approximation through the alternating Dirichlet eta series.

``eta(s) = sum_{n=1}^{N} (-1)^(n+1) n^-s`` converges for ``Re(s) > 0`` and
``zeta(s) = eta(s) / (1 - 2^(1-s))``. The series is truncated at a fixed
number of terms, so accuracy falls off as ``|Im(s)|`` grows; callers pick
``terms`` to trade accuracy for cost.
"""

from __future__ import annotations

import math

import numpy as np

from .complex_math import cexp, div, inv_pow_real, modulus, sub
from .sampler import Domain

_LN2 = math.log(2.0)
MIN_GRID_TERMS = 40
GRID_TERMS_FACTOR = 0.7
CRITICAL_LINE_RE = 0.5


def zeta_approx(s: complex, terms: int) -> complex | None:
    """Approximate ``zeta(s)`` with ``terms`` eta terms.

    Returns ``None`` when ``terms < 2``, at the pole ``s = 1`` (and any
    other zero of ``1 - 2^(1-s)``), or when the result is not finite.
    """

    terms = int(terms)
    if terms < 2:
        return None
    s = complex(s)
    series = inv_pow_real(np.arange(1, terms + 1, dtype=np.float64), s)
    # Odd n enter with +, even n with -.
    eta = sub(complex(series[0::2].sum()), complex(series[1::2].sum()))
    one_minus_s = complex(1.0 - s.real, -s.imag)
    two_pow = cexp(complex(one_minus_s.real * _LN2, one_minus_s.imag * _LN2))
    denominator = sub(complex(1.0, 0.0), two_pow)
    if modulus(denominator) == 0:
        return None
    zeta = div(eta, denominator)
    if not (math.isfinite(zeta.real) and math.isfinite(zeta.imag)):
        return None
    return zeta


def grid_terms(terms: int) -> int:
    """Term count used for grid maps, which evaluate many more points."""

    return max(MIN_GRID_TERMS, math.floor(terms * GRID_TERMS_FACTOR))


def critical_line(domain: Domain, terms: int) -> dict[str, object]:
    """Sample ``zeta(1/2 + it)`` over ``t`` in ``domain``."""

    series: list[dict[str, float]] = []
    for t in domain.values():
        value = zeta_approx(complex(CRITICAL_LINE_RE, float(t)), terms)
        if value is None:
            continue
        series.append(
            {"t": float(t), "re": value.real, "im": value.imag, "mag": modulus(value)}
        )
    return {
        "mode": "zeta_critical_line",
        "domain": domain.to_dict(),
        "terms": int(terms),
        "points": len(series),
        "series": series,
    }


def zeta_grid(re_domain: Domain, im_domain: Domain, terms: int) -> dict[str, object]:
    """Map a rectangle of ``s`` values through ``zeta``.

    Points where the approximation is undefined are dropped.
    """

    grid_count = grid_terms(terms)
    points: list[dict[str, float]] = []
    for re in re_domain.values():
        for im in im_domain.values():
            value = zeta_approx(complex(float(re), float(im)), grid_count)
            if value is None:
                continue
            points.append({"re": value.real, "im": value.imag})
    return {
        "mode": "zeta_grid",
        "domain": {"re": re_domain.to_dict(), "im": im_domain.to_dict()},
        "terms": grid_count,
        "points": len(points),
        "series": points,
    }


__all__ = [
    "CRITICAL_LINE_RE",
    "critical_line",
    "grid_terms",
    "zeta_approx",
    "zeta_grid",
]
