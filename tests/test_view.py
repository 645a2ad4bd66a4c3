import pytest

from halley import (
    DEFAULT_VIEWPORT,
    InvalidRequestError,
    RenderRequest,
    Viewport,
    canvas_dimensions,
    fit_aspect,
    pan,
    pixel_to_complex,
    render_frame,
    zoom,
    zoom_at,
)


@pytest.mark.parametrize(
    "aspect, expected",
    [
        ("1:1", (300, 300)),
        ("4:3", (300, 225)),
        ("16:9", (1100, 619)),
        ("21:9", (700, 300)),
        ("9:16", (169, 300)),
    ],
)
def test_canvas_dimensions(aspect, expected):
    resolution = expected[0] if aspect != "9:16" else expected[1]
    assert canvas_dimensions(resolution, aspect) == expected


def test_canvas_dimensions_rejects_unknown_ratio():
    with pytest.raises(InvalidRequestError) as excinfo:
        canvas_dimensions(300, "3:2")
    assert excinfo.value.field == "aspect_ratio"


def test_fit_aspect_keeps_height_for_wide_canvas():
    fitted = fit_aspect(DEFAULT_VIEWPORT, 1600, 900)
    assert fitted.range_y == pytest.approx(6.0)
    assert fitted.range_x == pytest.approx(6.0 * 16 / 9)
    assert fitted.center == pytest.approx((0.0, 0.0))


def test_fit_aspect_keeps_width_for_tall_canvas():
    fitted = fit_aspect(Viewport(0.0, 2.0, 0.0, 2.0), 900, 1600)
    assert fitted.range_x == pytest.approx(2.0)
    assert fitted.range_y == pytest.approx(2.0 * 16 / 9)
    assert fitted.center == pytest.approx((1.0, 1.0))


def test_fit_aspect_within_tolerance_is_unchanged():
    viewport = Viewport(-1.0, 1.0, -1.004, 1.0)
    assert fit_aspect(viewport, 500, 500) is viewport


def test_zoom_in_and_out_about_center():
    zoomed = zoom(DEFAULT_VIEWPORT, 2, 300, 300)
    assert zoomed == Viewport(-1.5, 1.5, -1.5, 1.5)
    assert zoom(zoomed, 0.5, 300, 300) == DEFAULT_VIEWPORT


def test_fine_zoom_uses_small_factor():
    zoomed = zoom(DEFAULT_VIEWPORT, 2, 300, 300, fine=True)
    assert zoomed.range_x == pytest.approx(6.0 / 1.2)
    out = zoom(DEFAULT_VIEWPORT, 0.5, 300, 300, fine=True)
    assert out.range_x == pytest.approx(6.0 * 1.2)


def test_zoom_at_recenters_on_clicked_pixel():
    zoomed = zoom_at(DEFAULT_VIEWPORT, 225, 75, 300, 300)
    assert zoomed.center == pytest.approx((1.5, 1.5))
    assert zoomed.range_x == pytest.approx(3.0)
    assert zoomed.range_y == pytest.approx(3.0)


@pytest.mark.parametrize("fine, amount", [(False, 1.5), (True, 0.3)])
def test_pan(fine, amount):
    moved = pan(DEFAULT_VIEWPORT, 1, -1, fine=fine)
    assert moved.min_x == pytest.approx(-3.0 + amount)
    assert moved.max_y == pytest.approx(3.0 - amount)
    assert moved.range_x == pytest.approx(6.0)


def test_pixel_to_complex_matches_render_grid():
    request = RenderRequest("z³ - 1", DEFAULT_VIEWPORT, 300, 300, 1, "rainbow")
    result = render_frame(request)
    assert pixel_to_complex(result.metadata, 0, 0) == (-3.0, 3.0)
    assert pixel_to_complex(result.metadata, 150, 150) == (0.0, 0.0)
    assert pixel_to_complex(result.metadata, 150, 200) == (1.0, 0.0)
