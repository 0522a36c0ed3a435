"""
Screen pixel <-> complex plane mapping.

At zoom 1 the view spans 3.5 units horizontally (scaled by the aspect
ratio), which frames the classic -2.5..1 window around the default center.
The JIT-compiled helpers are shared with the render kernel in compute.py so
that a rendered pixel and pixel_to_plane() agree bit for bit.
"""

from numba import jit


PLANE_SPAN = 3.5


@jit(nopython=True, cache=True)
def plane_x(px, center_x, zoom, width, height):
    """Real coordinate of pixel column px."""
    scale = PLANE_SPAN / zoom
    aspect = width / height
    return center_x + ((px - width / 2) * scale * aspect) / width


@jit(nopython=True, cache=True)
def plane_y(py, center_y, zoom, height):
    """Imaginary coordinate of pixel row py."""
    scale = PLANE_SPAN / zoom
    return center_y + ((py - height / 2) * scale) / height


def pixel_to_plane(px, py, viewport, canvas):
    """
    Map a canvas pixel to its point in the complex plane.

    Args:
        px, py: Pixel position (may be fractional)
        viewport: Current Viewport
        canvas: CanvasDimensions of the drawing surface

    Returns:
        (x0, y0) plane coordinates
    """
    x0 = plane_x(float(px), float(viewport.center_x), float(viewport.zoom),
                 float(canvas.width), float(canvas.height))
    y0 = plane_y(float(py), float(viewport.center_y), float(viewport.zoom),
                 float(canvas.height))
    return x0, y0


def plane_to_pixel(x, y, viewport, canvas):
    """Inverse of pixel_to_plane: the pixel position showing plane point (x, y)."""
    dx, dy = plane_delta_to_pixel_delta(x - viewport.center_x, y - viewport.center_y,
                                        viewport, canvas)
    return canvas.width / 2 + dx, canvas.height / 2 + dy


def pixel_delta_to_plane_delta(dx_px, dy_px, viewport, canvas):
    """Convert a pointer displacement in pixels to a displacement in the plane."""
    scale = PLANE_SPAN / viewport.zoom
    aspect = canvas.width / canvas.height
    return (dx_px * scale * aspect) / canvas.width, (dy_px * scale) / canvas.height


def plane_delta_to_pixel_delta(dx, dy, viewport, canvas):
    """Convert a plane displacement to the pixel displacement that shows it."""
    scale = PLANE_SPAN / viewport.zoom
    aspect = canvas.width / canvas.height
    return (dx * canvas.width) / (scale * aspect), (dy * canvas.height) / scale
