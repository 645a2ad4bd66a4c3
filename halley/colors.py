"""Color schemes mapping iteration counts to RGB triples."""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from .errors import InvalidRequestError

RGB = tuple[int, int, int]

BLACK: RGB = (0, 0, 0)


def _clamp(value: float) -> int:
    return max(0, min(255, math.floor(value)))


def _rgb(r: float, g: float, b: float) -> RGB:
    return _clamp(r), _clamp(g), _clamp(b)


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """Convert hue in degrees and saturation/lightness in percent to RGB."""

    s /= 100.0
    l /= 100.0
    c = (1 - abs(2 * l - 1)) * s
    x = c * (1 - abs((h / 60) % 2 - 1))
    m = l - c / 2

    if h < 60:
        r, g, b = c, x, 0.0
    elif h < 120:
        r, g, b = x, c, 0.0
    elif h < 180:
        r, g, b = 0.0, c, x
    elif h < 240:
        r, g, b = 0.0, x, c
    elif h < 300:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x

    return _rgb((r + m) * 255, (g + m) * 255, (b + m) * 255)


def _rainbow(t: float) -> RGB:
    return hsl_to_rgb(t * 360, 80, 50)


def _fire(t: float) -> RGB:
    return _rgb(t * 3 * 255, (t - 0.33) * 3 * 255, (t - 0.66) * 3 * 255)


def _ocean(t: float) -> RGB:
    return _rgb(t * 100, 100 + t * 155, 150 + t * 105)


def _neon(t: float) -> RGB:
    return hsl_to_rgb((t * 180 + 180) % 360, 100, 50 + t * 30)


def _grayscale(t: float) -> RGB:
    return _rgb(t * 255, t * 255, t * 255)


def _plasma(t: float) -> RGB:
    angle = t * math.pi * 2
    return _rgb(
        128 + 127 * math.sin(angle),
        128 + 127 * math.sin(angle + 2.094),
        128 + 127 * math.sin(angle + 4.188),
    )


def _viridis(t: float) -> RGB:
    return _rgb(
        255 * (0.267 + t * (0.329 * math.sin(math.pi * t))),
        255 * (0.005 + 0.988 * t - 0.5 * t * t),
        255 * (0.329 + 0.5 * math.sin(math.pi * (t - 0.5))),
    )


def _sunset(t: float) -> RGB:
    # dusk purple, red, orange, pale gold
    if t < 0.25:
        s = t * 4
        return _rgb(80 + s * 100, 20 + s * 60, 100 - s * 50)
    if t < 0.5:
        s = (t - 0.25) * 4
        return _rgb(180 + s * 75, 80 + s * 80, 50 + s * 100)
    if t < 0.75:
        s = (t - 0.5) * 4
        return _rgb(255, 160 + s * 50, 150 - s * 50)
    s = (t - 0.75) * 4
    return _rgb(255, 210 + s * 45, 100 + s * 100)


def _copper(t: float) -> RGB:
    return _rgb(min(255, t * 320), min(200, t * 250), min(100, t * 120))


def _aurora(t: float) -> RGB:
    return hsl_to_rgb(120 + t * 180, 70 + t * 30, 40 + math.sin(t * math.pi) * 20)


def _cyberpunk(t: float) -> RGB:
    if t < 0.5:
        s = t * 2
        return _rgb(100 + s * 155, 20, 200 - s * 50)
    s = (t - 0.5) * 2
    return _rgb(255 - s * 200, 20 + s * 100, 150 + s * 105)


def _marin(t: float) -> RGB:
    # soil, dry grass, oak, meadow, fog, bay
    if t < 0.2:
        s = t * 5
        return _rgb(60 + s * 50, 30 + s * 30, 25 + s * 15)
    if t < 0.35:
        s = (t - 0.2) * 6.67
        return _rgb(110 + s * 40, 60 + s * 50, 40 + s * 30)
    if t < 0.5:
        s = (t - 0.35) * 6.67
        return _rgb(150 - s * 70, 110 + s * 50, 70 - s * 20)
    if t < 0.65:
        s = (t - 0.5) * 6.67
        return _rgb(80 + s * 130, 160 + s * 50, 50 + s * 30)
    if t < 0.8:
        s = (t - 0.65) * 6.67
        return _rgb(210 - s * 30, 210 - s * 20, 80 + s * 100)
    s = (t - 0.8) * 5
    return _rgb(180 - s * 50, 190 + s * 30, 180 + s * 75)


@dataclass(frozen=True)
class ColorScheme:
    """A continuous ramp over ``t`` or, when ``modulus`` is set, a cyclic hue band."""

    key: str
    ramp: Optional[Callable[[float], RGB]] = None
    modulus: Optional[int] = None

    def color(self, iterations: int, max_iterations: int, even_only: bool = False) -> RGB:
        if iterations >= max_iterations or (even_only and iterations % 2):
            return BLACK
        if self.modulus is not None:
            index = iterations % self.modulus
            return hsl_to_rgb(index / self.modulus * 360, 100, 50)
        return self.ramp(iterations / max_iterations)


_SCHEMES = (
    ColorScheme("rainbow", _rainbow),
    ColorScheme("fire", _fire),
    ColorScheme("ocean", _ocean),
    ColorScheme("neon", _neon),
    ColorScheme("plasma", _plasma),
    ColorScheme("viridis", _viridis),
    ColorScheme("sunset", _sunset),
    ColorScheme("copper", _copper),
    ColorScheme("aurora", _aurora),
    ColorScheme("cyberpunk", _cyberpunk),
    ColorScheme("marin", _marin),
    ColorScheme("grayscale", _grayscale),
    ColorScheme("hsv-8", modulus=8),
    ColorScheme("hsv-16", modulus=16),
    ColorScheme("hsv-32", modulus=32),
)

SCHEMES: Mapping[str, ColorScheme] = MappingProxyType({scheme.key: scheme for scheme in _SCHEMES})


def scheme_keys() -> tuple[str, ...]:
    return tuple(SCHEMES)


def lookup_scheme(key: str) -> ColorScheme:
    try:
        return SCHEMES[key]
    except KeyError:
        raise InvalidRequestError("color_scheme", f"unknown color scheme {key!r}") from None


def color_of(iterations: int, max_iterations: int, scheme_key: str, even_only: bool = False) -> RGB:
    """Color an iteration count.

    Counts at or above ``max_iterations`` are black for every scheme. With
    ``even_only`` set, odd counts are masked to black after the scheme is applied.
    """

    return lookup_scheme(scheme_key).color(iterations, max_iterations, even_only)
