"""Complex arithmetic over an immutable (re, im) pair of floats."""

from __future__ import annotations

import math
from typing import NamedTuple


class Complex(NamedTuple):
    re: float
    im: float


ZERO = Complex(0.0, 0.0)
ONE = Complex(1.0, 0.0)


def add(a: Complex, b: Complex) -> Complex:
    return Complex(a.re + b.re, a.im + b.im)


def sub(a: Complex, b: Complex) -> Complex:
    return Complex(a.re - b.re, a.im - b.im)


def mul(a: Complex, b: Complex) -> Complex:
    return Complex(a.re * b.re - a.im * b.im, a.re * b.im + a.im * b.re)


def div(a: Complex, b: Complex) -> Complex:
    """Divide ``a`` by ``b``.

    A zero denominator yields ``(inf, inf)`` instead of raising; callers
    treat the infinite magnitude as a divergence signal.
    """

    denom = b.re * b.re + b.im * b.im
    if denom == 0:
        return Complex(math.inf, math.inf)
    return Complex(
        (a.re * b.re + a.im * b.im) / denom,
        (a.im * b.re - a.re * b.im) / denom,
    )


def power(z: Complex, n: int) -> Complex:
    """Raise ``z`` to a non-negative integer power by repeated multiplication."""

    if n < 0:
        raise ValueError(f"power expects a non-negative exponent, got {n}")
    result = ONE
    for _ in range(n):
        result = mul(result, z)
    return result


def sin(z: Complex) -> Complex:
    return Complex(math.sin(z.re) * math.cosh(z.im), math.cos(z.re) * math.sinh(z.im))


def cos(z: Complex) -> Complex:
    return Complex(math.cos(z.re) * math.cosh(z.im), -math.sin(z.re) * math.sinh(z.im))


def sinh(z: Complex) -> Complex:
    return Complex(math.sinh(z.re) * math.cos(z.im), math.cosh(z.re) * math.sin(z.im))


def cosh(z: Complex) -> Complex:
    return Complex(math.cosh(z.re) * math.cos(z.im), math.sinh(z.re) * math.sin(z.im))


def exp(z: Complex) -> Complex:
    scale = math.exp(z.re)
    return Complex(scale * math.cos(z.im), scale * math.sin(z.im))


def magnitude_squared(z: Complex) -> float:
    return z.re * z.re + z.im * z.im
