"""
Navigation state machine.

The NavigationController owns the current Viewport and replaces it with a
new value in response to commands:
- discrete: zoom in/out, pan, click-to-zoom, jump to a location, reset
- pointer: press / move / release, telling a drag (pan) from a click (zoom)
- continuous: dive ticks that zoom in while easing toward a screen target

Listeners are notified after every change with the new snapshot, and zoom
listeners receive (zoom, max_zoom) for achievement-style consumers.
"""

import enum
import logging
import math

from .transform import pixel_to_plane, pixel_delta_to_plane_delta
from .viewport import CanvasDimensions, ColorScheme, DEFAULT_VIEWPORT, ZoomTarget


logger = logging.getLogger(__name__)


DRAG_THRESHOLD_PX = 5.0
DIVE_INTERVAL_MS = 50
DIVE_ZOOM_RATE = 1.05
DIVE_APPROACH = 0.2
ZOOM_STEP = 2.0
ITERATION_MIN = 50
ITERATION_MAX = 1000


class NavState(enum.Enum):
    IDLE = 'idle'
    DRAGGING = 'dragging'
    DIVING = 'diving'


class NavigationController:
    """
    Holds the viewport and evolves it per command.

    Args:
        canvas: CanvasDimensions used for pixel <-> plane conversions
        viewport: Initial viewport (default view if None)
        default_viewport: Viewport restored by reset()
        drag_threshold: Total pointer travel (px) below which a release is a click
        dive_zoom_rate: Zoom multiplier per dive tick
        dive_approach: Fraction of the remaining distance to the target covered per tick
        iteration_range: (min, max) clamp for set_iteration_cap()
    """

    def __init__(self, canvas, viewport=None, default_viewport=DEFAULT_VIEWPORT,
                 drag_threshold=DRAG_THRESHOLD_PX, dive_zoom_rate=DIVE_ZOOM_RATE,
                 dive_approach=DIVE_APPROACH, iteration_range=(ITERATION_MIN, ITERATION_MAX)):
        self.canvas = canvas
        self.default_viewport = default_viewport
        self._viewport = viewport if viewport is not None else default_viewport
        self.max_zoom = self._viewport.zoom

        self.drag_threshold = drag_threshold
        self.dive_zoom_rate = dive_zoom_rate
        self.dive_approach = dive_approach
        self.iteration_min, self.iteration_max = iteration_range

        # Pointer state
        self.dragging = False
        self.last_pointer = None
        self.drag_distance = 0.0
        self.drag_offset = (0.0, 0.0)

        # Dive state
        self.diving = False
        self.zoom_target = None

        self._view_listeners = []
        self._zoom_listeners = []

    # ------------------------------------------------------------------
    # State and listeners

    @property
    def viewport(self):
        """Current viewport snapshot."""
        return self._viewport

    @property
    def state(self):
        if self.dragging:
            return NavState.DRAGGING
        if self.diving:
            return NavState.DIVING
        return NavState.IDLE

    def add_view_listener(self, callback):
        """Call callback(viewport) after every viewport change."""
        self._view_listeners.append(callback)

    def add_zoom_listener(self, callback):
        """Call callback(zoom, max_zoom) after every viewport change."""
        self._zoom_listeners.append(callback)

    def _publish(self, viewport):
        if viewport == self._viewport:
            return viewport
        self._viewport = viewport
        self.max_zoom = max(self.max_zoom, viewport.zoom)
        for callback in self._view_listeners:
            callback(viewport)
        for callback in self._zoom_listeners:
            callback(viewport.zoom, self.max_zoom)
        return viewport

    def resize(self, width, height):
        self.canvas = CanvasDimensions(width, height)

    # ------------------------------------------------------------------
    # Discrete commands

    def zoom_in(self, factor=ZOOM_STEP):
        if factor <= 0:
            raise ValueError(f"zoom factor must be positive, got {factor!r}")
        return self._publish(self._viewport.evolve(zoom=self._viewport.zoom * factor))

    def zoom_out(self, factor=ZOOM_STEP):
        if factor <= 0:
            raise ValueError(f"zoom factor must be positive, got {factor!r}")
        return self._publish(self._viewport.evolve(zoom=self._viewport.zoom / factor))

    def pan_by(self, dx_px, dy_px):
        """Move the view by a pointer displacement; content follows the pointer."""
        view = self._viewport
        dx, dy = pixel_delta_to_plane_delta(dx_px, dy_px, view, self.canvas)
        return self._publish(view.evolve(center_x=view.center_x - dx,
                                         center_y=view.center_y - dy))

    def click_zoom(self, px, py):
        """Center on the clicked point and double the zoom."""
        view = self._viewport
        x, y = pixel_to_plane(px, py, view, self.canvas)
        return self._publish(view.evolve(center_x=x, center_y=y, zoom=view.zoom * 2))

    def jump_to(self, x, y, zoom):
        logger.info("Jump to (%s, %s) zoom=%s", x, y, zoom)
        self.drag_offset = (0.0, 0.0)
        return self._publish(self._viewport.evolve(center_x=float(x), center_y=float(y),
                                                   zoom=float(zoom)))

    def reset(self):
        self.drag_offset = (0.0, 0.0)
        return self._publish(self.default_viewport)

    def set_color_scheme(self, scheme):
        return self._publish(self._viewport.evolve(color_scheme=ColorScheme.from_name(scheme)))

    def set_iteration_cap(self, n):
        """Set the iteration cap, clamped to the configured range."""
        n = max(self.iteration_min, min(self.iteration_max, int(n)))
        return self._publish(self._viewport.evolve(max_iterations=n))

    # ------------------------------------------------------------------
    # Pointer handling

    def pointer_down(self, x, y):
        self.dragging = True
        self.last_pointer = (x, y)
        self.drag_distance = 0.0
        self.drag_offset = (0.0, 0.0)

    def pointer_move(self, x, y):
        if self.diving:
            self.zoom_target = ZoomTarget(x, y)

        if not self.dragging:
            return self._viewport

        dx = x - self.last_pointer[0]
        dy = y - self.last_pointer[1]
        self.drag_distance += math.hypot(dx, dy)
        self.last_pointer = (x, y)
        # plane shift of this press, reverted if the press ends as a click
        px, py = pixel_delta_to_plane_delta(dx, dy, self._viewport, self.canvas)
        self.drag_offset = (self.drag_offset[0] + px, self.drag_offset[1] + py)
        return self.pan_by(dx, dy)

    def pointer_up(self, x, y, modifier=False):
        """
        Finish a press. Short movements count as a click: the small pan is
        undone, then a modifier click toggles dive mode and a plain click zooms.
        """
        if not self.dragging:
            return self._viewport

        self.dragging = False
        self.last_pointer = None
        if self.drag_distance >= self.drag_threshold:
            return self._viewport

        ox, oy = self.drag_offset
        self.drag_offset = (0.0, 0.0)
        if (ox, oy) != (0.0, 0.0):
            view = self._viewport
            self._publish(view.evolve(center_x=view.center_x + ox, center_y=view.center_y + oy))
        if modifier:
            self.toggle_dive(target=(x, y))
            return self._viewport
        return self.click_zoom(x, y)

    # ------------------------------------------------------------------
    # Dive mode

    def start_dive(self, target=None):
        if target is None:
            target = self.canvas.center
        self.zoom_target = ZoomTarget(*target)
        if not self.diving:
            self.diving = True
            logger.info("Dive started at zoom=%g", self._viewport.zoom)

    def stop_dive(self):
        if self.diving:
            self.diving = False
            logger.info("Dive stopped at zoom=%g", self._viewport.zoom)
        self.zoom_target = None

    def toggle_dive(self, target=None):
        if self.diving:
            self.stop_dive()
        else:
            self.start_dive(target)
        return self.diving

    def set_zoom_target(self, x, y):
        if self.diving:
            self.zoom_target = ZoomTarget(x, y)

    def dive_tick(self):
        """One dive step: ease the center toward the target and zoom in."""
        if not self.diving:
            return self._viewport

        view = self._viewport
        target = self.zoom_target
        tx, ty = pixel_to_plane(target.screen_x, target.screen_y, view, self.canvas)
        return self._publish(view.evolve(
            center_x=view.center_x + (tx - view.center_x) * self.dive_approach,
            center_y=view.center_y + (ty - view.center_y) * self.dive_approach,
            zoom=view.zoom * self.dive_zoom_rate,
        ))


class DiveTicker:
    """
    Fixed-cadence driver for dive ticks.

    The host calls update(now_ms) from its loop; each whole interval that
    has elapsed runs one dive_tick(), in order, on the caller's thread.
    After a stall, at most max_catch_up ticks run and the remaining elapsed
    intervals are skipped.

    Args:
        controller: NavigationController to drive
        interval_ms: Tick cadence
        max_catch_up: Upper bound of ticks run by one update() after a stall
    """

    def __init__(self, controller, interval_ms=DIVE_INTERVAL_MS, max_catch_up=5):
        self.controller = controller
        self.interval_ms = interval_ms
        self.max_catch_up = max_catch_up
        self.next_tick_ms = None

    def update(self, now_ms):
        """Run due ticks. Returns the number of ticks run."""
        if not self.controller.diving:
            self.next_tick_ms = None
            return 0
        if self.next_tick_ms is None:
            self.next_tick_ms = now_ms + self.interval_ms
            return 0

        ticks = 0
        while now_ms >= self.next_tick_ms:
            if ticks < self.max_catch_up:
                self.controller.dive_tick()
                ticks += 1
            self.next_tick_ms += self.interval_ms
        return ticks
