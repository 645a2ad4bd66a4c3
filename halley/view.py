"""Utilities for moving a viewport around the complex plane."""

from __future__ import annotations

import math
from dataclasses import replace

import numpy as np

from .errors import InvalidRequestError
from .renderer import SamplingMetadata, Viewport

DEFAULT_VIEWPORT = Viewport(min_x=-3.0, max_x=3.0, min_y=-3.0, max_y=3.0)

ASPECT_RATIOS = ("1:1", "4:3", "16:9", "21:9", "9:16")

ASPECT_TOLERANCE = 0.01


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def canvas_dimensions(resolution: int, aspect_ratio: str) -> tuple[int, int]:
    """Return ``(width, height)`` for a resolution along the long edge."""

    if aspect_ratio not in ASPECT_RATIOS:
        raise InvalidRequestError("aspect_ratio", f"unknown aspect ratio {aspect_ratio!r}")
    across, down = (int(part) for part in aspect_ratio.split(":"))
    if down > across:
        return _round_half_up(resolution * across / down), resolution
    return resolution, _round_half_up(resolution * down / across)


def _centered(center_x: float, center_y: float, range_x: float, range_y: float) -> Viewport:
    return Viewport(
        min_x=center_x - range_x / 2,
        max_x=center_x + range_x / 2,
        min_y=center_y - range_y / 2,
        max_y=center_y + range_y / 2,
    )


def _corrected_ranges(range_x: float, range_y: float, canvas_aspect: float,
                      tolerance: float = ASPECT_TOLERANCE) -> tuple[float, float]:
    if abs(range_x / range_y - canvas_aspect) <= tolerance:
        return range_x, range_y
    # Wide canvases keep the y range, tall ones keep the x range.
    if canvas_aspect > 1:
        return range_y * canvas_aspect, range_y
    return range_x, range_x / canvas_aspect


def fit_aspect(viewport: Viewport, width: int, height: int,
               tolerance: float = ASPECT_TOLERANCE) -> Viewport:
    """Stretch ``viewport`` about its center so it matches the canvas aspect."""

    range_x, range_y = _corrected_ranges(viewport.range_x, viewport.range_y, width / height, tolerance)
    if (range_x, range_y) == (viewport.range_x, viewport.range_y):
        return viewport
    return _centered(*viewport.center, range_x, range_y)


def zoom(viewport: Viewport, factor: float, width: int, height: int, *, fine: bool = False) -> Viewport:
    """Zoom about the center; ``factor > 1`` zooms in.

    With ``fine`` the factor is replaced by 1.2 (or 1/1.2 when zooming out).
    """

    if fine:
        factor = 1.2 if factor > 1 else 1 / 1.2
    range_x = np.float64(viewport.range_x) / np.float64(factor)
    range_y = np.float64(viewport.range_y) / np.float64(factor)
    range_x, range_y = _corrected_ranges(float(range_x), float(range_y), width / height)
    return _centered(*viewport.center, range_x, range_y)


def zoom_at(viewport: Viewport, px: float, py: float, width: int, height: int) -> Viewport:
    """Recenter on canvas pixel ``(px, py)`` and halve both ranges."""

    x = viewport.min_x + (px / width) * viewport.range_x
    y = viewport.max_y - (py / height) * viewport.range_y
    return _centered(x, y, viewport.range_x / 2, viewport.range_y / 2)


def pan(viewport: Viewport, dx: float, dy: float, *, fine: bool = False) -> Viewport:
    """Shift by a quarter of the visible range per unit (a twentieth with ``fine``)."""

    amount = 0.05 if fine else 0.25
    shift_x = dx * viewport.range_x * amount
    shift_y = dy * viewport.range_y * amount
    return replace(
        viewport,
        min_x=viewport.min_x + shift_x,
        max_x=viewport.max_x + shift_x,
        min_y=viewport.min_y + shift_y,
        max_y=viewport.max_y + shift_y,
    )


def pixel_to_complex(metadata: SamplingMetadata, row: int, col: int) -> tuple[np.float64, np.float64]:
    x = np.float64(metadata.x_min) + np.float64(col) * np.float64(metadata.x_step)
    y = np.float64(metadata.y_max) - np.float64(row) * np.float64(metadata.y_step)
    return np.float64(x), np.float64(y)
