"""Halley's method update and per-point convergence classification."""

from __future__ import annotations

import math

from .complexmath import Complex, ONE, div, mul, sub
from .functions import FunctionEntry

STAGNATION_EPSILON = 1e-5
DIVERGENCE_BOUND = 1e10

_TWO = Complex(2.0, 0.0)


def halley_step(z: Complex, func: FunctionEntry) -> Complex:
    """Apply one Halley update ``z - (f/f') / (1 - f f'' / (2 f'^2))``."""

    fz = func.f(z)
    dfz = func.df(z)
    d2fz = func.d2f(z)

    newton = div(fz, dfz)
    term = div(mul(fz, d2fz), mul(_TWO, mul(dfz, dfz)))
    correction = div(newton, sub(ONE, term))
    return sub(z, correction)


def iterate_point(z0: Complex, func: FunctionEntry, max_iterations: int) -> int:
    """Count Halley steps until the orbit of ``z0`` stagnates.

    Returns the step index at which the squared magnitude stopped changing by
    more than ``STAGNATION_EPSILON``. Orbits that leave ``DIVERGENCE_BOUND``,
    turn into NaN, raise a floating point error, or never settle within
    ``max_iterations`` steps return ``max_iterations``.
    """

    z = z0
    iterations = 0
    previous = 0.0

    for k in range(max_iterations):
        try:
            z = halley_step(z, func)
        except (ArithmeticError, ValueError):
            return max_iterations
        magnitude = z.re * z.re + z.im * z.im

        if k > 0 and abs(magnitude - previous) < STAGNATION_EPSILON:
            return k
        previous = magnitude
        iterations = k + 1

        if magnitude > DIVERGENCE_BOUND or math.isnan(magnitude):
            return max_iterations

    return iterations
