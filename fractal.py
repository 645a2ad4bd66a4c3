import sys
import time
from argparse import ArgumentParser
from concurrent.futures import ProcessPoolExecutor
from dataclasses import replace
from pathlib import Path

_VERBOSE_FLAGS = {"--verbose", "-v"}
VERBOSE = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


# Imports for visualization
import PIL.Image

from halley import (
    FUNCTIONS,
    PRESETS,
    SCHEMES,
    DEFAULT_STATE,
    InvalidRequestError,
    Viewport,
    decode_state,
    encode_state,
    fit_aspect,
    render_frame,
    validate_request,
)
from halley.view import ASPECT_RATIOS


def build_parser():
    parser = ArgumentParser(description="Render Halley's method fractals to an image file.")

    parser.add_argument('--function', type=str,
                        dest='function_key', help='function whose roots are searched, e.g. "z³ - 1" (see --list-functions)',
                        metavar='FUNCTION')

    parser.add_argument('--x-min', type=float, dest='x_min', metavar='X_MIN',
                        help='left edge of the viewport in the complex plane')
    parser.add_argument('--x-max', type=float, dest='x_max', metavar='X_MAX',
                        help='right edge of the viewport in the complex plane')
    parser.add_argument('--y-min', type=float, dest='y_min', metavar='Y_MIN',
                        help='bottom edge of the viewport in the complex plane')
    parser.add_argument('--y-max', type=float, dest='y_max', metavar='Y_MAX',
                        help='top edge of the viewport in the complex plane')

    parser.add_argument('--resolution', type=int,
                        dest='resolution', help='pixels along the longer edge of the image',
                        metavar='RESOLUTION')

    parser.add_argument('--aspect', type=str, choices=ASPECT_RATIOS,
                        dest='aspect_ratio', help='image aspect ratio; the viewport is stretched to match')

    parser.add_argument('--width', type=int, dest='width', metavar='WIDTH',
                        help='explicit image width, overriding --resolution/--aspect')
    parser.add_argument('--height', type=int, dest='height', metavar='HEIGHT',
                        help='explicit image height, overriding --resolution/--aspect')

    parser.add_argument('--max-iterations', type=int,
                        dest='max_iterations', help='maximum number of Halley steps per pixel',
                        metavar='MAX_ITERATIONS')

    parser.add_argument('--color-scheme', type=str,
                        dest='color_scheme', help='color scheme (see --list-schemes)',
                        metavar='SCHEME')

    parser.add_argument('--even-only', dest='even_only', action='store_true', default=None,
                        help='paint pixels with an odd iteration count black')

    parser.add_argument('--preset', type=str, dest='preset', metavar='PRESET',
                        help='start from a curated view (see --list-presets); other flags override it')

    parser.add_argument('--state', type=str, dest='state', metavar='STATE',
                        help='start from a share-link fragment such as "f=...&res=300&..."')

    parser.add_argument('--output', type=str, dest='output', default='halley.png',
                        help='destination image path. Default: "halley.png".')

    parser.add_argument('--format', type=str,
                        dest='format', help='file format for the image. Can be any extension supported by Pillow. Default: taken from --output.',
                        metavar='FORMAT')

    parser.add_argument('--workers', type=int, dest='workers', default=0,
                        help='render row bands in this many worker processes (0 renders in-process)')

    parser.add_argument('--list-functions', action='store_true', help='print the function catalogue and exit')
    parser.add_argument('--list-schemes', action='store_true', help='print the color schemes and exit')
    parser.add_argument('--list-presets', action='store_true', help='print the preset gallery and exit')
    parser.add_argument('--print-state', action='store_true',
                        help='print the share-link fragment for the resolved view after rendering '
                             '(share links carry --resolution/--aspect, not --width/--height)')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including timing and worker diagnostics.')

    return parser


def _pil_format_name(ext: str) -> str:
    upper = ext.upper()
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def write_single_image(image: PIL.Image.Image, output_path: Path, image_format: str) -> None:
    """Write a single image to ``output_path`` using the provided format."""

    pil_format = _pil_format_name(image_format)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if pil_format == "JPEG":
        image = image.convert("RGB")
    image.save(str(output_path), format=pil_format)


def resolve_state(opt, parser: ArgumentParser):
    """Layer the preset, the share-link state and explicit flags, in that order."""

    state = DEFAULT_STATE
    if opt.preset is not None:
        if opt.preset not in PRESETS:
            parser.error(f"Unknown preset '{opt.preset}'. Valid choices: {', '.join(PRESETS)}.")
        state = PRESETS[opt.preset].to_state()
    if opt.state is not None:
        state = decode_state(opt.state, default=state)

    overrides = {}
    for field in ("function_key", "resolution", "max_iterations", "color_scheme", "aspect_ratio"):
        value = getattr(opt, field)
        if value is not None:
            overrides[field] = value
    if opt.even_only is not None:
        overrides["even_iterations_only"] = opt.even_only

    bounds = (opt.x_min, opt.x_max, opt.y_min, opt.y_max)
    if any(value is not None for value in bounds):
        viewport = state.viewport
        overrides["viewport"] = Viewport(
            min_x=viewport.min_x if opt.x_min is None else opt.x_min,
            max_x=viewport.max_x if opt.x_max is None else opt.x_max,
            min_y=viewport.min_y if opt.y_min is None else opt.y_min,
            max_y=viewport.max_y if opt.y_max is None else opt.y_max,
        )

    return replace(state, **overrides)


def resolve_request(opt, parser: ArgumentParser):
    state = resolve_state(opt, parser)
    try:
        request = state.to_request()
    except InvalidRequestError as exc:
        parser.error(f"Invalid {exc.field}: {exc}")

    if opt.width is not None or opt.height is not None:
        request = replace(
            request,
            width=request.width if opt.width is None else opt.width,
            height=request.height if opt.height is None else opt.height,
        )
    try:
        validate_request(request)
    except InvalidRequestError as exc:
        parser.error(f"Invalid {exc.field}: {exc}")

    if opt.aspect_ratio is not None or opt.width is not None or opt.height is not None:
        request = replace(request, viewport=fit_aspect(request.viewport, request.width, request.height))
    return state, request


def print_catalogues(opt) -> bool:
    listed = False
    if opt.list_functions:
        for key, entry in FUNCTIONS.items():
            print(f"{key:<20} {entry.description}")
        listed = True
    if opt.list_schemes:
        for key in SCHEMES:
            print(key)
        listed = True
    if opt.list_presets:
        for key, preset in PRESETS.items():
            print(f"{key:<10} {preset.name:<13} {preset.function_key:<14} {preset.description}")
        listed = True
    return listed


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    if print_catalogues(opt):
        return

    if opt.print_state and (opt.width is not None or opt.height is not None):
        parser.error('--print-state cannot encode an explicit --width/--height; use --resolution and --aspect')

    state, request = resolve_request(opt, parser)

    output_path = Path(opt.output).expanduser()
    image_format = (opt.format or output_path.suffix or "png").lower().lstrip(".")
    if not output_path.suffix:
        output_path = output_path.with_suffix(f".{image_format}")
    output_path = output_path.resolve()

    viewport = request.viewport
    log(f"function={request.function_key!r} scheme={request.color_scheme} "
        f"size={request.width}x{request.height} max_iterations={request.max_iterations} "
        f"even_only={request.even_iterations_only}")
    log(f"viewport x=[{viewport.min_x}, {viewport.max_x}] y=[{viewport.min_y}, {viewport.max_y}]")

    def report(percent):
        print(f"rendering {percent:3d}%", end='\r')

    start = time.perf_counter()
    if opt.workers > 0:
        log(f"using {opt.workers} worker processes")
        with ProcessPoolExecutor(max_workers=opt.workers) as executor:
            result = render_frame(request, progress=report, executor=executor)
    else:
        result = render_frame(request, progress=report)
    print()
    log(f"rendered in {time.perf_counter() - start:.2f}s")

    image = PIL.Image.fromarray(result.pixels)
    write_single_image(image, output_path, image_format)
    print(f"saved {output_path}")

    if opt.print_state:
        print(encode_state(replace(state, viewport=request.viewport)))


if __name__ == '__main__':
    main()
