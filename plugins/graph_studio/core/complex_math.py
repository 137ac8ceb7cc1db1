"""Minimal complex arithmetic with NaN/inf propagation instead of exceptions.

Python's ``complex`` type raises on division by zero and mixes infinities
into ``nan`` on some multiplications; the helpers here keep the real and
imaginary parts separate so undefined results stay ``nan`` and overflow
stays ``inf``.
"""

from __future__ import annotations

import math
from typing import Union

import numpy as np

ComplexLike = Union[complex, np.ndarray]

NAN_COMPLEX = complex(math.nan, math.nan)


def pack(re, im) -> ComplexLike:
    """Combine real and imaginary parts without multiplying by ``1j``."""

    if np.ndim(re) == 0 and np.ndim(im) == 0:
        return complex(float(re), float(im))
    out = np.empty(np.broadcast(re, im).shape, dtype=np.complex128)
    out.real = re
    out.imag = im
    return out


def add(a: complex, b: complex) -> complex:
    return complex(a.real + b.real, a.imag + b.imag)


def sub(a: complex, b: complex) -> complex:
    return complex(a.real - b.real, a.imag - b.imag)


def div(a: complex, b: complex) -> complex:
    """Divide ``a`` by ``b``; a zero divisor yields ``nan + nan j``."""

    denominator = b.real * b.real + b.imag * b.imag
    if denominator == 0:
        return NAN_COMPLEX
    return complex(
        (a.real * b.real + a.imag * b.imag) / denominator,
        (a.imag * b.real - a.real * b.imag) / denominator,
    )


def modulus(a: complex) -> float:
    return math.hypot(a.real, a.imag)


def cexp(a: complex) -> complex:
    """``exp(re + i im) = e^re (cos im + i sin im)``."""

    with np.errstate(all="ignore"):
        scale = np.exp(np.float64(a.real))
        return pack(scale * np.cos(a.imag), scale * np.sin(a.imag))


def inv_pow_real(n, s: complex) -> ComplexLike:
    """Return ``n ** -s`` for positive real ``n`` (scalar or array).

    Uses ``exp(-s ln n)`` split into modulus and angle, so no complex
    logarithm is needed.
    """

    with np.errstate(all="ignore"):
        ln = np.log(np.asarray(n, dtype=np.float64))
        scale = np.exp(-s.real * ln)
        angle = -s.imag * ln
        return pack(scale * np.cos(angle), scale * np.sin(angle))


__all__ = [
    "ComplexLike",
    "NAN_COMPLEX",
    "add",
    "cexp",
    "div",
    "inv_pow_real",
    "modulus",
    "pack",
    "sub",
]
