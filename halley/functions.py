"""Fixed catalogue of complex functions with their first two derivatives."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping

from .complexmath import Complex, ONE, add, cos, cosh, div, exp, mul, power, sin, sinh, sub
from .errors import InvalidRequestError

ComplexMap = Callable[[Complex], Complex]

# Step of the central difference used by the rational entries' second derivative.
FINITE_DIFFERENCE_STEP = 1e-4


@dataclass(frozen=True)
class FunctionEntry:
    """A named function together with its first and second derivatives."""

    key: str
    f: ComplexMap
    df: ComplexMap
    d2f: ComplexMap
    description: str


def _c(re: float, im: float = 0.0) -> Complex:
    return Complex(float(re), float(im))


def _term(coefficient: float, z: Complex, n: int) -> Complex:
    """Return ``coefficient * z**n``."""

    if n == 1:
        return mul(_c(coefficient), z)
    return mul(_c(coefficient), power(z, n))


def central_difference(g: ComplexMap, z: Complex, h: float = FINITE_DIFFERENCE_STEP) -> Complex:
    """Approximate ``g'(z)`` with a real-axis central difference."""

    forward = g(add(z, _c(h)))
    backward = g(sub(z, _c(h)))
    return div(sub(forward, backward), _c(2 * h))


def _power_offset(key: str, n: int, offset: Complex, description: str) -> FunctionEntry:
    """Entry for ``z**n + offset``."""

    return FunctionEntry(
        key=key,
        f=lambda z: add(power(z, n), offset),
        df=lambda z: _term(n, z, n - 1),
        d2f=lambda z: _term(n * (n - 1), z, n - 2),
        description=description,
    )


def _rational_1_df(z: Complex) -> Complex:
    num = add(power(z, 2), ONE)
    den = sub(power(z, 3), ONE)
    dnum = _term(2, z, 1)
    dden = _term(3, z, 2)
    return div(sub(mul(dnum, den), mul(num, dden)), mul(den, den))


def _rational_2_df(z: Complex) -> Complex:
    num = sub(power(z, 3), _c(2))
    den = sub(z, ONE)
    dnum = _term(3, z, 2)
    return div(sub(mul(dnum, den), num), mul(den, den))


def _neg(z: Complex) -> Complex:
    return mul(_c(-1), z)


def _sin_z2_d2f(z: Complex) -> Complex:
    z2 = power(z, 2)
    term1 = mul(_c(2), cos(z2))
    term2 = mul(mul(_c(-4), z2), sin(z2))
    return add(term1, term2)


_ENTRIES = (
    _power_offset("z³ - 1", 3, _c(-1), "Classic 3-fold symmetry; clean, well-defined basins"),
    _power_offset("z⁴ - 1", 4, _c(-1), "Fourfold symmetry; crisp, stable attraction basins"),
    _power_offset("z⁵ - 1", 5, _c(-1), "Fivefold star-like patterns; more intricate boundaries"),
    _power_offset("z⁶ - 1", 6, _c(-1), "Sixfold symmetry; general n-symmetric basins"),
    _power_offset("z⁷ - 1", 7, _c(-1), "Sevenfold symmetry; good for exploring scaling"),
    _power_offset("z⁸ - 1", 8, _c(-1), "Eightfold symmetry; intricate radial patterns"),
    _power_offset("z¹² - 1", 12, _c(-1), "Twelvefold symmetry; highly detailed radial structure"),
    _power_offset("z³ - 0.5", 3, _c(-0.5), "Mildly broken symmetry; produces chaotic distortions"),
    _power_offset("z⁴ - 2", 4, _c(-2), "Strong symmetry breaking; wide chaotic filaments"),
    FunctionEntry(
        key="z⁴ + z² - 1",
        f=lambda z: sub(add(power(z, 4), power(z, 2)), ONE),
        df=lambda z: add(_term(4, z, 3), _term(2, z, 1)),
        d2f=lambda z: add(_term(12, z, 2), _c(2)),
        description="Complex basin boundaries with multiple attractors",
    ),
    FunctionEntry(
        key="z⁵ + z - 1",
        f=lambda z: sub(add(power(z, 5), z), ONE),
        df=lambda z: add(_term(5, z, 4), ONE),
        d2f=lambda z: _term(20, z, 3),
        description="Multiple competing roots; tangled, intricate boundaries",
    ),
    FunctionEntry(
        key="z³ - z",
        f=lambda z: sub(power(z, 3), z),
        df=lambda z: sub(_term(3, z, 2), ONE),
        d2f=lambda z: _term(6, z, 1),
        description="Extra critical points; highly detailed dendritic structures",
    ),
    FunctionEntry(
        key="z⁵ - z²",
        f=lambda z: sub(power(z, 5), power(z, 2)),
        df=lambda z: sub(_term(5, z, 4), _term(2, z, 1)),
        d2f=lambda z: sub(_term(20, z, 3), _c(2)),
        description="Rich interactions between roots; very fine detail",
    ),
    FunctionEntry(
        key="z⁵ - z³",
        f=lambda z: sub(power(z, 5), power(z, 3)),
        df=lambda z: sub(_term(5, z, 4), _term(3, z, 2)),
        d2f=lambda z: sub(_term(20, z, 3), _term(6, z, 1)),
        description="Intricate dendritic structures with rich detail",
    ),
    FunctionEntry(
        key="z⁶ + z³ - 1",
        f=lambda z: sub(add(power(z, 6), power(z, 3)), ONE),
        df=lambda z: add(_term(6, z, 5), _term(3, z, 2)),
        d2f=lambda z: add(_term(30, z, 4), _term(6, z, 1)),
        description="Complex root layout; dense fractal features",
    ),
    _power_offset("z³ + (0.3+0.5i)", 3, _c(0.3, 0.5), "Asymmetric, Julia-like basin patterns"),
    _power_offset("z³ + (-0.2+0.8i)", 3, _c(-0.2, 0.8), "Strong asymmetry; chaotic microstructures"),
    _power_offset("z³ + (1+i)", 3, _c(1, 1), "Highly distorted basins; dramatic asymmetry"),
    _power_offset("z³ + (0.5+0.2i)", 3, _c(0.5, 0.2), "General complex-parameter form; tunable chaos"),
    _power_offset("z⁴ + (0.2+0.4i)", 4, _c(0.2, 0.4), "Four-fold symmetry with complex asymmetry"),
    FunctionEntry(
        key="(z² + 1)/(z³ - 1)",
        f=lambda z: div(add(power(z, 2), ONE), sub(power(z, 3), ONE)),
        df=_rational_1_df,
        d2f=lambda z: central_difference(_rational_1_df, z),
        description="Roots and poles compete, producing exotic tilings",
    ),
    FunctionEntry(
        key="(z³ - 2)/(z - 1)",
        f=lambda z: div(sub(power(z, 3), _c(2)), sub(z, ONE)),
        df=_rational_2_df,
        d2f=lambda z: central_difference(_rational_2_df, z),
        description="Strong singularity at z=1; chaotic filaments",
    ),
    FunctionEntry(
        key="sin(z)",
        f=sin,
        df=cos,
        d2f=lambda z: _neg(sin(z)),
        description="Infinite periodic zeros; repeating tile-like patterns",
    ),
    FunctionEntry(
        key="cos(z) - 1",
        f=lambda z: sub(cos(z), ONE),
        df=lambda z: _neg(sin(z)),
        d2f=lambda z: _neg(cos(z)),
        description="Zeros at multiples of 2π; repeating basin cells",
    ),
    FunctionEntry(
        key="exp(z) - 1",
        f=lambda z: sub(exp(z), ONE),
        df=exp,
        d2f=exp,
        description="Infinite zeros with exponential growth; self-similar structure",
    ),
    FunctionEntry(
        key="sinh(z) - 1",
        f=lambda z: sub(sinh(z), ONE),
        df=cosh,
        d2f=sinh,
        description="Hyperbolic symmetries; different structure from trig functions",
    ),
    FunctionEntry(
        key="z³ + sin(z)",
        f=lambda z: add(power(z, 3), sin(z)),
        df=lambda z: add(_term(3, z, 2), cos(z)),
        d2f=lambda z: sub(_term(6, z, 1), sin(z)),
        description="Blends polynomial basins with sinusoidal distortions",
    ),
    FunctionEntry(
        key="sin(z)·exp(z) - 1",
        f=lambda z: sub(mul(sin(z), exp(z)), ONE),
        df=lambda z: mul(add(cos(z), sin(z)), exp(z)),
        d2f=lambda z: mul(mul(_c(2), cos(z)), exp(z)),
        description="Highly organic branching patterns; complex interference structure",
    ),
    FunctionEntry(
        key="z⁴ + exp(-z)",
        f=lambda z: add(power(z, 4), exp(_neg(z))),
        df=lambda z: sub(_term(4, z, 3), exp(_neg(z))),
        d2f=lambda z: add(_term(12, z, 2), exp(_neg(z))),
        description="Polynomial growth vs. exponential decay; unusual textures",
    ),
    FunctionEntry(
        key="sin(z²) - 1",
        f=lambda z: sub(sin(power(z, 2)), ONE),
        df=lambda z: mul(_term(2, z, 1), cos(power(z, 2))),
        d2f=_sin_z2_d2f,
        description="Curved, chaotic zero sets; swirling fractal structures",
    ),
    FunctionEntry(
        key="z·exp(z) - 1",
        f=lambda z: sub(mul(z, exp(z)), ONE),
        df=lambda z: add(exp(z), mul(z, exp(z))),
        d2f=lambda z: add(_term(2, exp(z), 1), mul(z, exp(z))),
        description="Lambert W function related; exotic mixed patterns",
    ),
)

FUNCTIONS: Mapping[str, FunctionEntry] = MappingProxyType({entry.key: entry for entry in _ENTRIES})


def function_keys() -> tuple[str, ...]:
    """Return the catalogue keys in display order."""

    return tuple(FUNCTIONS)


def lookup(key: str) -> FunctionEntry:
    try:
        return FUNCTIONS[key]
    except KeyError:
        raise InvalidRequestError("function_key", f"unknown function {key!r}") from None
