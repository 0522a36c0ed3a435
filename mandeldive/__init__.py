"""
Mandelbrot Dive Explorer Package

An interactive Mandelbrot set explorer with click-to-zoom, drag-to-pan and
a continuous "dive" mode that zooms toward the pointer. Computation is
JIT-compiled with Numba; the window is drawn with Pygame.

Quick Start:
    from mandeldive import FrameRenderer, NavigationController, CanvasDimensions

    canvas = CanvasDimensions(800, 600)
    nav = NavigationController(canvas)
    nav.click_zoom(400, 300)
    pixels = FrameRenderer().render(nav.viewport, canvas)

Or from command line:
    python -m mandeldive

Package Structure:
    - viewport.py: Viewport, CanvasDimensions, ZoomTarget, ColorScheme
    - transform.py: Pixel <-> complex plane mapping
    - compute.py: JIT-compiled escape-time functions
    - colormaps.py: Color scheme rules and per-frame palettes
    - renderer.py: Frame rendering, sync and async
    - navigation.py: Zoom / pan / dive state machine
    - config.py: settings.json loading
    - app.py: Pygame window and event loop

Controls:
    - Click: Zoom 2x on the clicked point
    - Drag: Pan around
    - Ctrl/Cmd-click or Space: Toggle dive mode (follows the mouse)
    - Scroll, +/-: Zoom in/out
    - [ / ]: Fewer / more iterations
    - C: Next color scheme
    - 1-6: Jump to a landmark
    - R: Reset to default view
    - ESC: Quit
"""

from .viewport import CanvasDimensions, ColorScheme, DEFAULT_VIEWPORT, Viewport, ZoomTarget
from .transform import (
    pixel_to_plane,
    plane_to_pixel,
    pixel_delta_to_plane_delta,
    plane_delta_to_pixel_delta,
)
from .compute import escape_time, compute_escape_counts
from .colormaps import COLORMAPS, build_palette, color_for, get_colormap, hsl_to_rgb, list_colormap_names
from .renderer import FrameRenderer, render_frame
from .navigation import DiveTicker, NavState, NavigationController

__version__ = "1.0.0"
__all__ = [
    "CanvasDimensions",
    "ColorScheme",
    "DEFAULT_VIEWPORT",
    "Viewport",
    "ZoomTarget",
    "pixel_to_plane",
    "plane_to_pixel",
    "pixel_delta_to_plane_delta",
    "plane_delta_to_pixel_delta",
    "escape_time",
    "compute_escape_counts",
    "COLORMAPS",
    "build_palette",
    "color_for",
    "get_colormap",
    "hsl_to_rgb",
    "list_colormap_names",
    "FrameRenderer",
    "render_frame",
    "DiveTicker",
    "NavState",
    "NavigationController",
]
