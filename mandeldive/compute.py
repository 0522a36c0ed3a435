"""
Escape-time computation using Numba JIT compilation.

This module contains the performance-critical functions:
- escape_time: iteration count for a single point of z² + c
- compute_escape_counts: escape counts for every pixel of a frame

Rows of a frame are processed in parallel with prange. Each pixel is
computed independently from its own coordinates, so the result does not
depend on thread scheduling.
"""

import numpy as np
from numba import jit, prange

from .transform import plane_x, plane_y


ESCAPE_RADIUS_SQ = 4.0


@jit(nopython=True, cache=True)
def escape_time(x0, y0, max_iter):
    """
    Number of iterations of z ← z² + c (z₀ = 0, c = x0 + i·y0) before |z|² > 4.

    A point already outside the escape disc is reported as 0. Points that
    never exceed the bound within max_iter iterations return max_iter and
    are treated as members of the set.
    """
    if x0 * x0 + y0 * y0 > ESCAPE_RADIUS_SQ:
        return 0

    x = 0.0
    y = 0.0
    iteration = 0
    while x * x + y * y <= ESCAPE_RADIUS_SQ and iteration < max_iter:
        xtemp = x * x - y * y + x0
        y = 2 * x * y + y0
        x = xtemp
        iteration += 1
    return iteration


@jit(nopython=True, parallel=True, cache=True)
def compute_escape_counts(center_x, center_y, zoom, width, height, max_iter):
    """
    Compute escape counts for a full frame.

    Args:
        center_x, center_y: Plane coordinate shown at the canvas center
        zoom: Magnification (horizontal span is 3.5 / zoom)
        width, height: Frame dimensions in pixels
        max_iter: Iteration cap

    Returns:
        2D int32 array (height, width) of counts in [0, max_iter]
    """
    result = np.zeros((height, width), dtype=np.int32)
    fw = np.float64(width)
    fh = np.float64(height)

    for py in prange(height):
        y0 = plane_y(np.float64(py), center_y, zoom, fh)
        for px in range(width):
            x0 = plane_x(np.float64(px), center_x, zoom, fw, fh)
            result[py, px] = escape_time(x0, y0, max_iter)

    return result


def escape_counts_for(viewport, canvas):
    """Escape counts for a viewport on a canvas (empty array for a 0-sized canvas)."""
    if canvas.is_empty:
        return np.zeros((canvas.height, canvas.width), dtype=np.int32)
    return compute_escape_counts(
        np.float64(viewport.center_x), np.float64(viewport.center_y),
        np.float64(viewport.zoom), canvas.width, canvas.height,
        viewport.max_iterations
    )


def warmup_jit():
    """
    Warm up JIT compilation with a tiny frame.

    Call this once at startup to pre-compile the Numba functions,
    avoiding a delay on the first real frame.
    """
    _ = compute_escape_counts(np.float64(-0.5), np.float64(0.0), np.float64(1.0), 8, 6, 10)
    _ = escape_time(0.0, 0.0, 1)
