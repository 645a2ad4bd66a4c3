import cmath
import math

import pytest

from halley.complexmath import (
    Complex,
    add,
    cos,
    cosh,
    div,
    exp,
    magnitude_squared,
    mul,
    power,
    sin,
    sinh,
    sub,
)

POINTS = [Complex(0.5, -1.25), Complex(-2.0, 0.3), Complex(1.0, 1.0)]


def as_builtin(z):
    return complex(z.re, z.im)


def test_basic_operations_match_builtin_complex():
    a, b = Complex(1.5, -2.0), Complex(-0.25, 3.0)
    assert as_builtin(add(a, b)) == pytest.approx(as_builtin(a) + as_builtin(b))
    assert as_builtin(sub(a, b)) == pytest.approx(as_builtin(a) - as_builtin(b))
    assert as_builtin(mul(a, b)) == pytest.approx(as_builtin(a) * as_builtin(b))
    assert as_builtin(div(a, b)) == pytest.approx(as_builtin(a) / as_builtin(b))


def test_division_by_exact_zero_returns_infinity():
    result = div(Complex(1.0, 2.0), Complex(0.0, 0.0))
    assert result == Complex(math.inf, math.inf)


def test_division_by_negative_zero_returns_infinity():
    result = div(Complex(1.0, 0.0), Complex(-0.0, 0.0))
    assert math.isinf(result.re) and math.isinf(result.im)


def test_power_is_repeated_multiplication():
    z = Complex(0.7, -0.4)
    assert power(z, 0) == Complex(1.0, 0.0)
    assert power(z, 1) == mul(Complex(1.0, 0.0), z)
    assert as_builtin(power(z, 5)) == pytest.approx(as_builtin(z) ** 5)


def test_power_rejects_negative_exponent():
    with pytest.raises(ValueError):
        power(Complex(1.0, 1.0), -1)


@pytest.mark.parametrize(
    "ours, reference",
    [(sin, cmath.sin), (cos, cmath.cos), (sinh, cmath.sinh), (cosh, cmath.cosh), (exp, cmath.exp)],
)
@pytest.mark.parametrize("z", POINTS)
def test_transcendental_functions_match_cmath(ours, reference, z):
    assert as_builtin(ours(z)) == pytest.approx(reference(as_builtin(z)))


def test_values_are_immutable():
    z = Complex(1.0, 2.0)
    with pytest.raises(AttributeError):
        z.re = 3.0
    assert magnitude_squared(z) == 5.0


def test_overflow_surfaces_as_exception():
    with pytest.raises(OverflowError):
        exp(Complex(1000.0, 0.0))
