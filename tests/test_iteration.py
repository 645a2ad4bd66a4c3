import cmath

import pytest

from halley import iterate_point, lookup
from halley.complexmath import Complex
from halley.iteration import DIVERGENCE_BOUND, STAGNATION_EPSILON, halley_step

# key -> (n, c) for entries of the form z**n = c
POWER_ENTRIES = {
    "z³ - 1": (3, 1),
    "z⁴ - 1": (4, 1),
    "z⁵ - 1": (5, 1),
    "z⁶ - 1": (6, 1),
    "z⁷ - 1": (7, 1),
    "z⁸ - 1": (8, 1),
    "z¹² - 1": (12, 1),
    "z³ - 0.5": (3, 0.5),
    "z⁴ - 2": (4, 2),
    "z³ + (0.3+0.5i)": (3, -(0.3 + 0.5j)),
    "z³ + (-0.2+0.8i)": (3, -(-0.2 + 0.8j)),
    "z³ + (1+i)": (3, -(1 + 1j)),
    "z³ + (0.5+0.2i)": (3, -(0.5 + 0.2j)),
    "z⁴ + (0.2+0.4i)": (4, -(0.2 + 0.4j)),
}


def roots_of(n, c):
    base = complex(c) ** (1 / n)
    return [base * cmath.exp(2j * cmath.pi * k / n) for k in range(n)]


def test_constants():
    assert STAGNATION_EPSILON == 1e-5
    assert DIVERGENCE_BOUND == 1e10


@pytest.mark.parametrize("key", sorted(POWER_ENTRIES))
def test_roots_are_attracting(key):
    entry = lookup(key)
    n, c = POWER_ENTRIES[key]
    for root in roots_of(n, c):
        start = root * (1 + 1e-3)
        count = iterate_point(Complex(start.real, start.imag), entry, 50)
        assert count < 10


def test_halley_step_fixes_exact_root():
    entry = lookup("z³ - 1")
    assert halley_step(Complex(1.0, 0.0), entry) == Complex(1.0, 0.0)


def test_halley_step_is_cubic_near_root():
    entry = lookup("z⁴ - 1")
    z = Complex(1.01, 0.0)
    after = halley_step(z, entry)
    assert abs(after.re - 1.0) < 1e-5
    assert abs(after.im) < 1e-12


def test_exact_root_converges_in_one_iteration():
    assert iterate_point(Complex(1.0, 0.0), lookup("z³ - 1"), 50) == 1


def test_critical_point_is_non_convergent():
    # f'(0) = 0 for z³ - 1, so the very first step divides by zero.
    assert iterate_point(Complex(0.0, 0.0), lookup("z³ - 1"), 50) == 50


def test_floating_point_errors_classify_as_divergent():
    # cosh(1000) overflows inside sinh(z) - 1.
    assert iterate_point(Complex(1000.0, 0.0), lookup("sinh(z) - 1"), 40) == 40


def test_zero_budget_returns_zero():
    assert iterate_point(Complex(0.3, 0.2), lookup("z³ - 1"), 0) == 0


def test_result_stays_within_budget():
    entry = lookup("z⁵ + z - 1")
    for re in (-1.5, -0.6, 0.0, 0.7, 1.3):
        for im in (-1.1, -0.2, 0.4, 1.2):
            count = iterate_point(Complex(re, im), entry, 25)
            assert 0 <= count <= 25


def test_is_deterministic():
    entry = lookup("sin(z²) - 1")
    z = Complex(0.12, -1.25)
    assert iterate_point(z, entry, 50) == iterate_point(z, entry, 50)
