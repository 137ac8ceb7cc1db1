import math

import numpy as np
import pytest

from plugins.graph_studio.core import (
    add,
    cexp,
    critical_line,
    div,
    grid_terms,
    inv_pow_real,
    make_domain,
    modulus,
    sub,
    zeta_approx,
    zeta_grid,
)


def test_basic_complex_operations():
    assert add(1 + 2j, 3 - 1j) == 4 + 1j
    assert sub(1 + 2j, 3 - 1j) == -2 + 3j
    assert div(1 + 2j, 3 + 4j) == pytest.approx((1 + 2j) / (3 + 4j))
    assert modulus(3 + 4j) == 5.0


def test_division_by_zero_is_nan():
    result = div(1 + 1j, 0j)
    assert math.isnan(result.real)
    assert math.isnan(result.imag)


def test_complex_exponential():
    assert cexp(complex(0, math.pi)) == pytest.approx(-1 + 0j)
    assert cexp(complex(1, 0)) == pytest.approx(math.e)
    overflow = cexp(complex(1000, 0))
    assert overflow.real == math.inf


def test_inv_pow_real():
    assert inv_pow_real(2, complex(1, 0)) == pytest.approx(0.5)
    assert inv_pow_real(4, complex(0.5, 0)) == pytest.approx(0.5)
    # |n^-it| == 1 for purely imaginary exponents
    assert abs(inv_pow_real(7, complex(0, 3))) == pytest.approx(1.0)
    values = inv_pow_real(np.array([1.0, 2.0, 4.0]), complex(1, 0))
    assert values.real.tolist() == pytest.approx([1.0, 0.5, 0.25])


def test_zeta_on_critical_line_is_finite():
    value = zeta_approx(complex(0.5, 0), 70)
    assert value is not None
    assert math.isfinite(value.real)
    assert math.isfinite(value.imag)


def test_zeta_two_approaches_basel_sum():
    value = zeta_approx(2, 2000)
    assert value.real == pytest.approx(math.pi**2 / 6, rel=1e-5)
    assert value.imag == pytest.approx(0.0, abs=1e-12)


@pytest.mark.parametrize("terms", [2, 10, 70])
def test_pole_is_undefined(terms):
    assert zeta_approx(complex(1, 0), terms) is None


@pytest.mark.parametrize("terms", [-1, 0, 1])
def test_too_few_terms_is_undefined(terms):
    assert zeta_approx(complex(0.5, 14), terms) is None


def test_grid_terms_floor_and_scale():
    assert grid_terms(20) == 40
    assert grid_terms(70) == 49
    assert grid_terms(100) == 70


def test_critical_line_samples():
    payload = critical_line(make_domain(0, 40, 240), 70)
    series = payload["series"]
    assert payload["points"] == len(series) <= 241
    assert series[0]["t"] == 0.0
    for point in series:
        assert point["mag"] == pytest.approx(math.hypot(point["re"], point["im"]))
    ts = [point["t"] for point in series]
    assert ts == sorted(ts)


def test_zeta_grid_drops_pole():
    payload = zeta_grid(make_domain(0.5, 1.5, 2), make_domain(-1, 1, 2), 70)
    assert payload["terms"] == 49
    assert payload["points"] == 8
    for point in payload["series"]:
        assert math.isfinite(point["re"]) and math.isfinite(point["im"])
