"""Shareable view state, encoded as a URL fragment.

Decoding is where untrusted input gets sanitized: every field that fails to
parse or validate falls back to its default on its own, so a damaged link
still opens a sensible view. The engine itself never substitutes defaults.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs, quote, unquote, urlencode

from .colors import SCHEMES
from .functions import FUNCTIONS
from .renderer import RenderRequest, Viewport
from .view import ASPECT_RATIOS, DEFAULT_VIEWPORT, canvas_dimensions

MIN_RESOLUTION, MAX_RESOLUTION = 100, 18000
MIN_ITERATIONS, MAX_ITERATIONS = 10, 200
MAX_BOUND = 1e10


@dataclass(frozen=True)
class ViewState:
    resolution: int
    function_key: str
    max_iterations: int
    color_scheme: str
    viewport: Viewport
    aspect_ratio: str
    even_iterations_only: bool = False

    @property
    def dimensions(self) -> tuple[int, int]:
        return canvas_dimensions(self.resolution, self.aspect_ratio)

    def to_request(self) -> RenderRequest:
        width, height = self.dimensions
        return RenderRequest(
            function_key=self.function_key,
            viewport=self.viewport,
            width=width,
            height=height,
            max_iterations=self.max_iterations,
            color_scheme=self.color_scheme,
            even_iterations_only=self.even_iterations_only,
        )


DEFAULT_STATE = ViewState(
    resolution=300,
    function_key="z³ - 1",
    max_iterations=50,
    color_scheme="rainbow",
    viewport=DEFAULT_VIEWPORT,
    aspect_ratio="1:1",
)


def encode_state(state: ViewState) -> str:
    """Serialize ``state`` into a query string suitable for a URL fragment."""

    params = {
        # The function key is escaped once more so links stay readable by older decoders.
        "f": quote(state.function_key, safe="!*'()"),
        "res": str(state.resolution),
        "aspect": state.aspect_ratio,
        "iter": str(state.max_iterations),
        "color": state.color_scheme,
    }
    if state.even_iterations_only:
        params["even"] = "true"
    viewport = state.viewport
    params["x1"] = f"{viewport.min_x:.10f}"
    params["x2"] = f"{viewport.max_x:.10f}"
    params["y1"] = f"{viewport.min_y:.10f}"
    params["y2"] = f"{viewport.max_y:.10f}"
    return urlencode(params)


def _int_in_range(raw: Optional[str], low: int, high: int, default: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if low <= value <= high else default


def _bound(raw: Optional[str], default: float) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return default
    return value if math.isfinite(value) and abs(value) < MAX_BOUND else default


def decode_state(text: str, default: ViewState = DEFAULT_STATE) -> ViewState:
    """Parse a fragment produced by :func:`encode_state`, sanitizing each field."""

    params = {key: values[0] for key, values in parse_qs(text.lstrip("#")).items()}

    function_key = unquote(params["f"]) if "f" in params else default.function_key
    if function_key not in FUNCTIONS:
        function_key = default.function_key

    color_scheme = params.get("color", default.color_scheme)
    if color_scheme not in SCHEMES:
        color_scheme = default.color_scheme

    aspect_ratio = params.get("aspect", default.aspect_ratio)
    if aspect_ratio not in ASPECT_RATIOS:
        aspect_ratio = default.aspect_ratio

    viewport = Viewport(
        min_x=_bound(params.get("x1"), default.viewport.min_x),
        max_x=_bound(params.get("x2"), default.viewport.max_x),
        min_y=_bound(params.get("y1"), default.viewport.min_y),
        max_y=_bound(params.get("y2"), default.viewport.max_y),
    )

    return ViewState(
        resolution=_int_in_range(params.get("res"), MIN_RESOLUTION, MAX_RESOLUTION, default.resolution),
        function_key=function_key,
        max_iterations=_int_in_range(params.get("iter"), MIN_ITERATIONS, MAX_ITERATIONS, default.max_iterations),
        color_scheme=color_scheme,
        viewport=viewport,
        aspect_ratio=aspect_ratio,
        even_iterations_only=params.get("even") in ("true", "1"),
    )
