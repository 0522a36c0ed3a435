"""
Main application module for the Mandelbrot explorer.

Contains the MandelbrotApp class which handles:
- Window setup and main loop
- Translating pygame input into NavigationController commands
- Driving dive mode at a fixed cadence
- Requesting frames from the FrameRenderer and displaying them
"""

import logging

import pygame

from .colormaps import next_color_scheme
from .compute import warmup_jit
from .config import initial_viewport, load_settings
from .navigation import DiveTicker, NavigationController
from .renderer import FrameRenderer
from .viewport import CanvasDimensions


logger = logging.getLogger(__name__)


class MandelbrotApp:
    """
    Main application class for the Mandelbrot explorer.

    Handles the pygame window and event loop, and hands viewport
    snapshots from the controller to the renderer.
    """

    ITERATION_STEP = 50
    TARGET_COLOR = (255, 255, 255)

    def __init__(self, settings=None):
        """
        Initialize the application.

        Args:
            settings: Normalised settings dict (packaged defaults if None)
        """
        self.settings = settings or load_settings()
        self.width = self.settings["width"]
        self.height = self.settings["height"]
        self.landmarks = self.settings["landmarks"]
        self.zoom_step = self.settings["zoom_step"]

        viewport = initial_viewport(self.settings)
        self.controller = NavigationController(
            CanvasDimensions(self.width, self.height),
            viewport=viewport,
            default_viewport=viewport,
            drag_threshold=self.settings["drag_threshold_px"],
            dive_zoom_rate=self.settings["dive_zoom_rate"],
            dive_approach=self.settings["dive_approach"],
            iteration_range=(self.settings["iteration_min"], self.settings["iteration_max"]),
        )
        self.ticker = DiveTicker(self.controller, self.settings["dive_interval_ms"])
        self.renderer = FrameRenderer()

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None

        # Display state
        self.current_surface = None
        self.pending_render = True

        self.controller.add_view_listener(self._on_view_changed)
        self.running = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        self._initial_render()

        self.running = True
        while self.running:
            current_time = pygame.time.get_ticks()

            self._handle_events()
            self.ticker.update(current_time)
            self._check_render_result()
            self._maybe_start_render()
            self._draw()

            self.clock.tick(60)

        pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create window."""
        pygame.init()
        self.screen = pygame.display.set_mode((self.width, self.height), pygame.DOUBLEBUF)
        self.clock = pygame.time.Clock()

    def _initial_render(self):
        """Warm up JIT and draw the first frame synchronously."""
        pygame.display.set_caption("Compiling (first run only)...")
        warmup_jit()
        buffer = self.renderer.render(self.controller.viewport, self.controller.canvas)
        self._set_surface(buffer)
        self.pending_render = False
        self._update_caption()

    def _on_view_changed(self, viewport):
        self.pending_render = True

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            self.handle_event(event)

    def handle_event(self, event):
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.controller.pointer_down(*event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            mods = pygame.key.get_mods()
            modifier = bool(mods & (pygame.KMOD_CTRL | pygame.KMOD_META))
            self.controller.pointer_up(*event.pos, modifier=modifier)
        elif event.type == pygame.MOUSEMOTION:
            self.controller.pointer_move(*event.pos)
        elif event.type == pygame.MOUSEWHEEL:
            if event.y > 0:
                self.controller.zoom_in(self.zoom_step)
            elif event.y < 0:
                self.controller.zoom_out(self.zoom_step)
        elif event.type == pygame.KEYDOWN:
            self._handle_key(event)

    def _handle_key(self, event):
        """Handle keyboard input."""
        controller = self.controller
        view = controller.viewport
        if event.key == pygame.K_ESCAPE:
            self.running = False
        elif event.key == pygame.K_r:
            controller.reset()
        elif event.key == pygame.K_SPACE:
            controller.toggle_dive(target=pygame.mouse.get_pos() if pygame.mouse.get_focused() else None)
        elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            controller.zoom_in(self.zoom_step)
        elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            controller.zoom_out(self.zoom_step)
        elif event.key == pygame.K_RIGHTBRACKET:
            controller.set_iteration_cap(view.max_iterations + self.ITERATION_STEP)
        elif event.key == pygame.K_LEFTBRACKET:
            controller.set_iteration_cap(view.max_iterations - self.ITERATION_STEP)
        elif event.key == pygame.K_c:
            controller.set_color_scheme(next_color_scheme(view.color_scheme))
        elif pygame.K_1 <= event.key <= pygame.K_9:
            index = event.key - pygame.K_1
            if index < len(self.landmarks):
                landmark = self.landmarks[index]
                logger.info("Landmark %s", landmark["name"])
                controller.jump_to(landmark["x"], landmark["y"], landmark["zoom"])

    def _check_render_result(self):
        """Check if async render has completed."""
        buffer, viewport = self.renderer.get_result()
        if buffer is not None:
            self._set_surface(buffer)

    def _maybe_start_render(self):
        """Start a new render if the view changed."""
        if self.pending_render:
            self.pending_render = False
            self.renderer.render_async(self.controller.viewport, self.controller.canvas)
        self._update_caption()

    def _set_surface(self, buffer):
        # surfarray wants (width, height, 3)
        self.current_surface = pygame.surfarray.make_surface(buffer[:, :, :3].swapaxes(0, 1))

    def _update_caption(self):
        view = self.controller.viewport
        status = "Rendering..." if self.renderer.is_rendering else "Ready"
        dive = " | DIVING" if self.controller.diving else ""
        pygame.display.set_caption(
            f"Mandelbrot - zoom {view.zoom:.3g}x (max {self.controller.max_zoom:.3g}x) | "
            f"{view.max_iterations} iter | {view.color_scheme.display_name}{dive} | {status}"
        )

    def _draw(self):
        """Draw the current frame and the dive target marker."""
        self.screen.fill((0, 0, 0))
        if self.current_surface is not None:
            self.screen.blit(self.current_surface, (0, 0))

        target = self.controller.zoom_target
        if self.controller.diving and target is not None:
            pygame.draw.circle(self.screen, self.TARGET_COLOR,
                               (int(target.screen_x), int(target.screen_y)), 12, 1)

        pygame.display.flip()


def run(settings=None):
    """
    Run the Mandelbrot explorer.

    Args:
        settings: Normalised settings dict (packaged defaults if None)
    """
    app = MandelbrotApp(settings)
    try:
        app.run()
    except KeyboardInterrupt:
        pygame.quit()
