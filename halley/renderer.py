"""Rendering primitives for Halley fractal frames."""

from __future__ import annotations

import math
from concurrent.futures import Executor
from dataclasses import dataclass, replace
from itertools import repeat
from typing import Callable, Iterator, Optional

import numpy as np

from .colors import ColorScheme, lookup_scheme
from .complexmath import Complex
from .errors import InvalidRequestError
from .functions import FunctionEntry, lookup
from .iteration import iterate_point

# Rows are processed in at most this many bands per frame.
BANDS_PER_FRAME = 32


@dataclass(frozen=True)
class Viewport:
    """Rectangle of the complex plane mapped onto the raster."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def center(self) -> tuple[float, float]:
        return (self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2

    @property
    def range_x(self) -> float:
        return self.max_x - self.min_x

    @property
    def range_y(self) -> float:
        return self.max_y - self.min_y


@dataclass(frozen=True)
class RenderRequest:
    """Everything a single render pass depends on."""

    function_key: str
    viewport: Viewport
    width: int
    height: int
    max_iterations: int
    color_scheme: str
    even_iterations_only: bool = False


@dataclass(frozen=True)
class SamplingMetadata:
    """Metadata describing the sampling grid for a rendered frame.

    Column ``col`` samples ``x_min + col * x_step`` and row ``row`` samples
    ``y_max - row * y_step``; row 0 is the top of the image.
    """

    x_min: float
    y_max: float
    x_step: float
    y_step: float
    width: int
    height: int


@dataclass(frozen=True)
class RenderResult:
    """Container for a committed frame."""

    pixels: np.ndarray
    iterations: np.ndarray
    metadata: SamplingMetadata
    request: RenderRequest


def validate_request(request: RenderRequest) -> tuple[FunctionEntry, ColorScheme]:
    """Reject malformed requests, naming the offending field."""

    entry = lookup(request.function_key)
    scheme = lookup_scheme(request.color_scheme)

    viewport = request.viewport
    bounds = (viewport.min_x, viewport.max_x, viewport.min_y, viewport.max_y)
    if not all(math.isfinite(value) for value in bounds):
        raise InvalidRequestError("viewport", f"bounds must be finite, got {bounds}")
    if not viewport.max_x > viewport.min_x:
        raise InvalidRequestError("viewport", f"max_x ({viewport.max_x}) must exceed min_x ({viewport.min_x})")
    if not viewport.max_y > viewport.min_y:
        raise InvalidRequestError("viewport", f"max_y ({viewport.max_y}) must exceed min_y ({viewport.min_y})")

    if request.width < 1:
        raise InvalidRequestError("width", f"must be at least 1, got {request.width}")
    if request.height < 1:
        raise InvalidRequestError("height", f"must be at least 1, got {request.height}")
    if request.max_iterations < 0:
        raise InvalidRequestError("max_iterations", f"must be non-negative, got {request.max_iterations}")

    return entry, scheme


def _compute_metadata(request: RenderRequest) -> SamplingMetadata:
    viewport = request.viewport
    return SamplingMetadata(
        x_min=float(viewport.min_x),
        y_max=float(viewport.max_y),
        x_step=float((viewport.max_x - viewport.min_x) / request.width),
        y_step=float((viewport.max_y - viewport.min_y) / request.height),
        width=int(request.width),
        height=int(request.height),
    )


def _sample_axes(request: RenderRequest) -> tuple[list[float], list[float]]:
    viewport = request.viewport
    xs = np.linspace(viewport.min_x, viewport.max_x, request.width, endpoint=False, dtype=np.float64)
    ys = np.linspace(viewport.max_y, viewport.min_y, request.height, endpoint=False, dtype=np.float64)
    # Python floats keep the per-pixel loop on the math module fast path.
    return xs.tolist(), ys.tolist()


def band_size(height: int) -> int:
    return max(1, height // BANDS_PER_FRAME)


def render_band(
    function_key: str,
    color_scheme: str,
    xs: list[float],
    ys: list[float],
    max_iterations: int,
    even_only: bool,
) -> tuple[np.ndarray, np.ndarray]:
    """Classify and color the rows sampled at ``ys``.

    Takes catalogue keys rather than entries so bands can be shipped to
    worker processes.
    """

    func = lookup(function_key)
    scheme = lookup_scheme(color_scheme)

    iterations = np.empty((len(ys), len(xs)), dtype=np.int32)
    rgb = np.empty((len(ys), len(xs), 3), dtype=np.uint8)

    for row, y in enumerate(ys):
        for col, x in enumerate(xs):
            n = iterate_point(Complex(x, y), func, max_iterations)
            iterations[row, col] = n
            rgb[row, col] = scheme.color(n, max_iterations, even_only)

    return iterations, rgb


class RenderPass:
    """One pass over a request: Idle -> Rendering -> Idle.

    Iterating the pass renders one row band per step and yields the
    percentage of rows completed. Once every band is done the frame is
    committed to ``result`` and a final ``100`` is yielded. Abandoning the
    iterator early leaves ``result`` unset.
    """

    def __init__(self, request: RenderRequest, executor: Optional[Executor] = None) -> None:
        validate_request(request)
        self.request = request
        self.executor = executor
        self.result: Optional[RenderResult] = None

    def _bands(self) -> Iterator[tuple[int, int]]:
        step = band_size(self.request.height)
        for start in range(0, self.request.height, step):
            yield start, min(start + step, self.request.height)

    def _band_results(self, xs: list[float], ys: list[float]) -> Iterator[tuple[int, int, tuple[np.ndarray, np.ndarray]]]:
        request = self.request
        bands = list(self._bands())
        rows = [ys[start:end] for start, end in bands]
        args = (
            repeat(request.function_key),
            repeat(request.color_scheme),
            repeat(xs),
            rows,
            repeat(request.max_iterations),
            repeat(request.even_iterations_only),
        )

        if self.executor is None:
            outputs = map(render_band, *args)
        else:
            # Executor.map preserves band order; closing this generator cancels pending bands.
            outputs = self.executor.map(render_band, *args)
        for (start, end), output in zip(bands, outputs):
            yield start, end, output

    def __iter__(self) -> Iterator[int]:
        request = self.request
        height, width = request.height, request.width
        metadata = _compute_metadata(request)
        xs, ys = _sample_axes(request)

        pixels = np.zeros((height, width, 4), dtype=np.uint8)
        pixels[..., 3] = 255
        iterations = np.zeros((height, width), dtype=np.int32)

        for start, end, (band_iterations, band_rgb) in self._band_results(xs, ys):
            iterations[start:end] = band_iterations
            pixels[start:end, :, :3] = band_rgb
            yield math.floor(100 * end / height)

        self.result = RenderResult(
            pixels=pixels,
            iterations=iterations,
            metadata=metadata,
            request=request,
        )
        yield 100


def render_frame(
    request: RenderRequest,
    *,
    progress: Optional[Callable[[int], None]] = None,
    executor: Optional[Executor] = None,
) -> RenderResult:
    """Render a Halley fractal frame given the supplied request."""

    render_pass = RenderPass(request, executor=executor)
    for percent in render_pass:
        if progress is not None:
            progress(percent)
    return render_pass.result


def recolor(result: RenderResult, color_scheme: str, even_iterations_only: bool = False) -> RenderResult:
    """Re-apply a color scheme to stored iteration counts without iterating again."""

    scheme = lookup_scheme(color_scheme)
    max_iterations = result.request.max_iterations
    pixels = np.zeros_like(result.pixels)
    pixels[..., 3] = 255

    for n in np.unique(result.iterations).tolist():
        pixels[result.iterations == n, :3] = scheme.color(n, max_iterations, even_iterations_only)

    request = replace(result.request, color_scheme=color_scheme, even_iterations_only=even_iterations_only)
    return RenderResult(pixels=pixels, iterations=result.iterations, metadata=result.metadata, request=request)
