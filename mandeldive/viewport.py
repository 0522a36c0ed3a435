"""
View state value types.

A Viewport describes which region of the complex plane is shown and how it
is colored. Viewports are immutable: navigation produces new values with
dataclasses.replace() and hands snapshots to the renderer.
"""

import enum
import math
from dataclasses import dataclass, replace


class ColorScheme(enum.Enum):
    """Closed set of coloring policies, each keyed to a base hue."""

    CLASSIC = ('classic', 'Classic Blue', 200)
    FIRE = ('fire', 'Inferno', 0)
    OCEAN = ('ocean', 'Abyssal Ocean', 190)
    PURPLE = ('purple', 'Cosmic Purple', 280)
    MATRIX = ('matrix', 'Digital Rain', 120)
    SUNSET = ('sunset', 'Vaporwave Sunset', 330)
    PSYCHEDELIC = ('psychedelic', 'Psychedelic', 60)

    def __init__(self, key, display_name, base_hue):
        self.key = key
        self.display_name = display_name
        self.base_hue = base_hue

    @classmethod
    def from_name(cls, name):
        """
        Look up a scheme by key, enum name or display name (case-insensitive).

        Raises:
            ValueError if no scheme matches
        """
        if isinstance(name, cls):
            return name
        wanted = str(name).strip().lower()
        for scheme in cls:
            if wanted in (scheme.key, scheme.name.lower(), scheme.display_name.lower()):
                return scheme
        raise ValueError(f"Unknown color scheme: {name!r}")


@dataclass(frozen=True)
class Viewport:
    """Center, zoom, iteration cap and color scheme of the current view."""

    center_x: float = -0.5
    center_y: float = 0.0
    zoom: float = 1.0
    max_iterations: int = 120
    color_scheme: ColorScheme = ColorScheme.CLASSIC

    def __post_init__(self):
        if not (math.isfinite(self.zoom) and self.zoom > 0):
            raise ValueError(f"zoom must be a positive finite number, got {self.zoom!r}")
        if int(self.max_iterations) != self.max_iterations or self.max_iterations < 1:
            raise ValueError(f"max_iterations must be an integer >= 1, got {self.max_iterations!r}")
        if not isinstance(self.color_scheme, ColorScheme):
            object.__setattr__(self, 'color_scheme', ColorScheme.from_name(self.color_scheme))
        object.__setattr__(self, 'max_iterations', int(self.max_iterations))

    @property
    def center(self):
        return (self.center_x, self.center_y)

    def evolve(self, **changes):
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


DEFAULT_VIEWPORT = Viewport()


@dataclass(frozen=True)
class CanvasDimensions:
    """Pixel size of the drawing surface."""

    width: int
    height: int

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"canvas dimensions must be >= 0, got {self.width}x{self.height}")

    @property
    def aspect(self):
        return self.width / self.height

    @property
    def is_empty(self):
        return self.width == 0 or self.height == 0

    @property
    def center(self):
        return (self.width / 2, self.height / 2)


@dataclass(frozen=True)
class ZoomTarget:
    """Screen position the dive mode is chasing, in canvas pixels."""

    screen_x: float
    screen_y: float
