"""
Frame rendering, synchronous or on a background thread.

render_frame() turns a Viewport snapshot into an RGBA pixel buffer:
a numpy uint8 array of shape (height, width, 4), row-major, so
buffer.tobytes() is the raw RGBA byte string a display surface expects.

The FrameRenderer class handles:
- Background (async) computation so the UI stays responsive
- Dropping superseded requests: only the newest pending viewport is drawn
- A rendering-in-progress flag for spinner UI
"""

import logging
import threading
import time

import numpy as np

from .colormaps import build_palette
from .compute import escape_counts_for


logger = logging.getLogger(__name__)


def render_frame(viewport, canvas, clock=time.time):
    """
    Render one frame.

    Args:
        viewport: Viewport to draw (never modified)
        canvas: CanvasDimensions of the target surface
        clock: Seconds source for time-varying color schemes

    Returns:
        uint8 array (height, width, 4); empty if either dimension is 0
    """
    if canvas.is_empty:
        return np.zeros((canvas.height, canvas.width, 4), dtype=np.uint8)

    counts = escape_counts_for(viewport, canvas)
    palette = build_palette(viewport.max_iterations, viewport.color_scheme, clock)

    buffer = np.empty((canvas.height, canvas.width, 4), dtype=np.uint8)
    buffer[:, :, :3] = palette[counts]
    buffer[:, :, 3] = 255
    return buffer


class FrameRenderer:
    """
    Renders viewports, optionally in the background.

    Usage:
        renderer = FrameRenderer()
        renderer.render_async(viewport, canvas)

        # In your game loop:
        buffer, viewport = renderer.get_result()
        if buffer is not None:
            display(buffer)

    Attributes:
        clock: Seconds source passed to the color mapper
        frames_rendered: Number of completed frames
    """

    def __init__(self, clock=time.time):
        self.clock = clock
        self.frames_rendered = 0

        # Async computation state
        self.computing = False
        self.pending = None
        self.result = None
        self.error = None
        self.lock = threading.Lock()
        self.idle = threading.Event()
        self.idle.set()

    @property
    def is_rendering(self):
        with self.lock:
            return self.computing

    def render(self, viewport, canvas):
        """Render synchronously and return the pixel buffer."""
        start = time.perf_counter()
        buffer = render_frame(viewport, canvas, self.clock)
        with self.lock:
            self.frames_rendered += 1
        logger.debug("Rendered %sx%s zoom=%g iter=%s scheme=%s in %.1f ms",
                     canvas.width, canvas.height, viewport.zoom, viewport.max_iterations,
                     viewport.color_scheme.key, (time.perf_counter() - start) * 1000)
        return buffer

    def render_async(self, viewport, canvas):
        """
        Queue a render on the background thread.

        A request that arrives while another frame is being drawn replaces
        any request still waiting; the in-flight frame is finished but the
        skipped one is never drawn.
        """
        with self.lock:
            if self.pending is not None:
                logger.debug("Dropping superseded render request zoom=%g", self.pending[0].zoom)
            self.pending = (viewport, canvas)
            if not self.computing:
                self.computing = True
                self.idle.clear()
                thread = threading.Thread(target=self._compute_thread, name="mandeldive-render")
                thread.daemon = True
                thread.start()

    def _compute_thread(self):
        """Background thread draining pending requests."""
        while True:
            with self.lock:
                request = self.pending
                self.pending = None
                if request is None:
                    self.computing = False
                    self.idle.set()
                    break

            viewport, canvas = request
            try:
                buffer = self.render(viewport, canvas)
            except Exception as exc:
                logger.exception("Render failed for %r", viewport)
                with self.lock:
                    self.error = exc
                    self.pending = None
                    self.computing = False
                    self.idle.set()
                break

            with self.lock:
                self.result = (buffer, viewport)

    def get_result(self):
        """
        Take the latest finished frame.

        Returns:
            (buffer, viewport) once per finished frame, else (None, None)

        Raises:
            The exception of a failed background render
        """
        with self.lock:
            if self.error is not None:
                error, self.error = self.error, None
                raise error
            if self.result is None:
                return None, None
            result, self.result = self.result, None
        return result

    def wait(self, timeout=None):
        """Block until the background thread is idle. Returns False on timeout."""
        return self.idle.wait(timeout)
