"""Public API for Halley fractal rendering."""

from .colors import SCHEMES, ColorScheme, color_of, hsl_to_rgb, lookup_scheme, scheme_keys
from .complexmath import Complex
from .errors import InvalidRequestError
from .functions import FUNCTIONS, FunctionEntry, function_keys, lookup
from .iteration import halley_step, iterate_point
from .presets import PRESETS, Preset
from .renderer import (
    RenderPass,
    RenderRequest,
    RenderResult,
    SamplingMetadata,
    Viewport,
    recolor,
    render_frame,
    validate_request,
)
from .session import RenderSession
from .state import DEFAULT_STATE, ViewState, decode_state, encode_state
from .view import (
    DEFAULT_VIEWPORT,
    canvas_dimensions,
    fit_aspect,
    pan,
    pixel_to_complex,
    zoom,
    zoom_at,
)

__all__ = [
    "Complex",
    "ColorScheme",
    "DEFAULT_STATE",
    "DEFAULT_VIEWPORT",
    "FUNCTIONS",
    "FunctionEntry",
    "InvalidRequestError",
    "PRESETS",
    "Preset",
    "RenderPass",
    "RenderRequest",
    "RenderResult",
    "RenderSession",
    "SCHEMES",
    "SamplingMetadata",
    "ViewState",
    "Viewport",
    "canvas_dimensions",
    "color_of",
    "decode_state",
    "encode_state",
    "fit_aspect",
    "function_keys",
    "halley_step",
    "hsl_to_rgb",
    "iterate_point",
    "lookup",
    "lookup_scheme",
    "pan",
    "pixel_to_complex",
    "recolor",
    "render_frame",
    "scheme_keys",
    "validate_request",
    "zoom",
    "zoom_at",
]
