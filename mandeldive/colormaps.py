"""
Color scheme definitions for Mandelbrot visualization.

color_for() maps an escape count to an RGB triple for one of the
ColorScheme policies. Points that never escaped are always black.

For rendering, build_palette() evaluates color_for() once for every
possible count of a frame and returns a (max_iter + 1, 3) uint8 array,
so coloring a frame is a single lookup: palette[counts].

The Psychedelic scheme cycles with wall-clock time. Its clock is injectable
(any callable returning seconds) so it can be pinned in tests.

To add a new scheme:
1. Add a member to ColorScheme in viewport.py
2. Give it a rule in _scheme_rgb() if the default HSL ramp does not fit
"""

import math
import time

import numpy as np

from .viewport import ColorScheme


def _to_byte(value):
    """Round half up and clamp to [0, 255]."""
    return int(min(255, max(0, math.floor(value + 0.5))))


def _hue_to_rgb(p, q, t):
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(h, s, l):
    """
    Convert a normalized HSL color to an RGB byte triple.

    Args:
        h: Hue in turns [0, 1]
        s: Saturation [0, 1]
        l: Lightness [0, 1]

    Returns:
        (r, g, b) ints in [0, 255]
    """
    if s == 0:
        r = g = b = l
    else:
        q = l * (1 + s) if l < 0.5 else l + s - l * s
        p = 2 * l - q
        r = _hue_to_rgb(p, q, h + 1 / 3)
        g = _hue_to_rgb(p, q, h)
        b = _hue_to_rgb(p, q, h - 1 / 3)
    return _to_byte(r * 255), _to_byte(g * 255), _to_byte(b * 255)


def _scheme_rgb(t, scheme, phase):
    """Color for escape ratio t; phase is only used by Psychedelic."""
    if scheme is ColorScheme.MATRIX:
        return 0, _to_byte(255 * t * 2), 0

    if scheme is ColorScheme.FIRE:
        # black -> red -> yellow
        r = min(255, t * 510)
        g = min(255, max(0, t * 510 - 255))
        return _to_byte(r), _to_byte(g), 0

    if scheme is ColorScheme.PSYCHEDELIC:
        return hsl_to_rgb((t * 5 + phase) % 1, 0.8, 0.5)

    hue = (scheme.base_hue + t * 360) % 360
    return hsl_to_rgb(hue / 360, 0.7, 0.2 + t * 0.6)


def psychedelic_phase(clock=time.time):
    """Hue offset (in turns) of the Psychedelic scheme at the clock's current time."""
    return clock() / 10


def color_for(iteration, max_iter, scheme, clock=time.time):
    """
    Color of a pixel whose point escaped after `iteration` steps.

    Args:
        iteration: Escape count in [0, max_iter]
        max_iter: Iteration cap of the render
        scheme: ColorScheme (or a name accepted by ColorScheme.from_name)
        clock: Seconds source for the Psychedelic scheme

    Returns:
        (r, g, b) ints in [0, 255]
    """
    if iteration == max_iter:
        return 0, 0, 0
    scheme = ColorScheme.from_name(scheme)
    phase = psychedelic_phase(clock) if scheme is ColorScheme.PSYCHEDELIC else 0.0
    return _scheme_rgb(iteration / max_iter, scheme, phase)


def build_palette(max_iter, scheme, clock=time.time):
    """
    Lookup table of colors for every escape count of a frame.

    The clock is sampled once, so a whole frame shares one Psychedelic phase.

    Returns:
        uint8 array of shape (max_iter + 1, 3); the last row is black
    """
    scheme = ColorScheme.from_name(scheme)
    phase = psychedelic_phase(clock) if scheme is ColorScheme.PSYCHEDELIC else 0.0
    palette = np.zeros((max_iter + 1, 3), dtype=np.uint8)
    for i in range(max_iter):
        palette[i] = _scheme_rgb(i / max_iter, scheme, phase)
    return palette


def is_time_varying(scheme):
    """True for schemes whose colors change with wall-clock time."""
    return ColorScheme.from_name(scheme) is ColorScheme.PSYCHEDELIC


# Registry of all available schemes, keyed by display name.
COLORMAPS = {scheme.display_name: scheme for scheme in ColorScheme}


def get_colormap(name):
    """
    Get a color scheme by key or display name.

    Raises:
        ValueError if name not found
    """
    return ColorScheme.from_name(name)


def list_colormap_names():
    """Get list of available scheme display names."""
    return list(COLORMAPS.keys())


def next_color_scheme(scheme):
    """The scheme after `scheme` in declaration order, wrapping around."""
    schemes = list(ColorScheme)
    return schemes[(schemes.index(ColorScheme.from_name(scheme)) + 1) % len(schemes)]
