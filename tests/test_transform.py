import pytest

from mandeldive.transform import (
    pixel_delta_to_plane_delta,
    pixel_to_plane,
    plane_delta_to_pixel_delta,
    plane_to_pixel,
)
from mandeldive.viewport import CanvasDimensions, Viewport

CANVAS = CanvasDimensions(800, 600)


def test_canvas_center_maps_to_viewport_center() -> None:
    view = Viewport(center_x=0.25, center_y=-0.4, zoom=37.0)
    assert pixel_to_plane(400, 300, view, CANVAS) == (0.25, -0.4)


def test_corner_uses_aspect_scaled_span() -> None:
    view = Viewport()
    x0, y0 = pixel_to_plane(0, 0, view, CANVAS)
    # 3.5 units tall * 4/3 wide, centered on (-0.5, 0)
    assert x0 == pytest.approx(-0.5 - 3.5 * (4 / 3) / 2)
    assert y0 == pytest.approx(-3.5 / 2)


def test_span_shrinks_with_zoom() -> None:
    near = pixel_to_plane(800, 300, Viewport(zoom=10.0), CANVAS)[0] - (-0.5)
    far = pixel_to_plane(800, 300, Viewport(zoom=1.0), CANVAS)[0] - (-0.5)
    assert near == pytest.approx(far / 10)


def test_zero_delta_round_trip() -> None:
    view = Viewport(center_x=-1.2, center_y=0.3, zoom=1e6)
    assert pixel_delta_to_plane_delta(0, 0, view, CANVAS) == (0.0, 0.0)
    assert plane_delta_to_pixel_delta(0, 0, view, CANVAS) == (0.0, 0.0)
    x0, y0 = pixel_to_plane(123, 456, view, CANVAS)
    dx, dy = pixel_delta_to_plane_delta(0, 0, view, CANVAS)
    assert (x0 + dx, y0 + dy) == (x0, y0)


def test_pixel_delta_formula() -> None:
    dx, dy = pixel_delta_to_plane_delta(10, -20, Viewport(zoom=2.0), CANVAS)
    assert dx == pytest.approx(10 * 1.75 * (4 / 3) / 800)
    assert dy == pytest.approx(-20 * 1.75 / 600)


def test_delta_inverse() -> None:
    view = Viewport(zoom=3.0)
    dx, dy = pixel_delta_to_plane_delta(37, 11, view, CANVAS)
    back = plane_delta_to_pixel_delta(dx, dy, view, CANVAS)
    assert back == pytest.approx((37, 11))


def test_plane_to_pixel_inverts_pixel_to_plane() -> None:
    view = Viewport(center_x=-0.7463, center_y=0.1102, zoom=100.0)
    x, y = pixel_to_plane(612, 77, view, CANVAS)
    assert plane_to_pixel(x, y, view, CANVAS) == pytest.approx((612, 77))
