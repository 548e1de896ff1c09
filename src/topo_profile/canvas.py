"""Pixel-addressed drawing surface on top of matplotlib's Agg backend."""

import functools
import io
import logging
from dataclasses import dataclass, field

import numpy as np
from matplotlib import font_manager
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.colors import LinearSegmentedColormap
from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.patches import Polygon, Rectangle

from topo_profile.models import ProfileParams

logger = logging.getLogger(__name__)

DEFAULT_DPI = 100
FONT_FAMILY = "sans-serif"


def rgb(r: float, g: float, b: float, a: float = 1.0) -> tuple[float, float, float, float]:
    """Convert 0-255 channel values to a matplotlib RGBA tuple."""
    return (r / 255, g / 255, b / 255, a)


@dataclass(frozen=True)
class Capabilities:
    canvas: bool
    text: bool


@functools.lru_cache(maxsize=1)
def detect_capabilities() -> Capabilities:
    """Probe once whether we can rasterize shapes and text."""
    try:
        probe = Figure(figsize=(0.1, 0.1), dpi=DEFAULT_DPI)
        FigureCanvasAgg(probe).draw()
    except (RuntimeError, OSError, ValueError) as e:
        logger.debug("Agg canvas unavailable: %s", e)
        return Capabilities(canvas=False, text=False)
    try:
        font_manager.findfont(
            font_manager.FontProperties(family=FONT_FAMILY), fallback_to_default=False
        )
        text = True
    except ValueError as e:
        logger.debug("No %s font available, text disabled: %s", FONT_FAMILY, e)
        text = False
    return Capabilities(canvas=True, text=text)


def supports_canvas() -> bool:
    """Whether the profile view can be offered at all."""
    return detect_capabilities().canvas


class Surface:
    """Fixed-size raster with the origin at the top left and y growing down."""

    def __init__(self, width: float, height: float, dpi: int = DEFAULT_DPI, text: bool = True):
        self.width = max(float(width), 1.0)
        self.height = max(float(height), 1.0)
        self.dpi = dpi
        self.text_enabled = text
        self.closed = False

        self.figure = Figure(figsize=(self.width / dpi, self.height / dpi), dpi=dpi)
        FigureCanvasAgg(self.figure)
        self.ax = self.figure.add_axes((0, 0, 1, 1))
        self.ax.set_xlim(0, self.width)
        self.ax.set_ylim(self.height, 0)
        self.ax.set_autoscale_on(False)
        self.ax.set_axis_off()

    def px_to_points(self, px: float) -> float:
        return px * 72 / self.dpi

    def fill_rect(self, x: float, y: float, width: float, height: float, color) -> None:
        self.ax.add_patch(Rectangle((x, y), width, height, facecolor=color,
                                    edgecolor="none", linewidth=0))

    def fill_polygon(self, points: list[tuple[float, float]], color) -> None:
        self.ax.add_patch(Polygon(points, closed=True, facecolor=color,
                                  edgecolor="none", linewidth=0))

    def stroke_polyline(self, points: list[tuple[float, float]], color, width_px: float = 1.0) -> None:
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        self.ax.add_line(Line2D(xs, ys, color=color, linewidth=self.px_to_points(width_px),
                                solid_joinstyle="round"))

    def fill_horizontal_gradient(self, x: float, y: float, width: float, height: float,
                                 start_color, end_color) -> None:
        """Fill a rectangle with a left-to-right linear gradient."""
        if width <= 0 or height <= 0:
            return
        cmap = LinearSegmentedColormap.from_list("gradient", [start_color, end_color])
        ramp = np.linspace(0.0, 1.0, 256).reshape(1, -1)
        self.ax.imshow(ramp, cmap=cmap, extent=(x, x + width, y + height, y),
                       aspect="auto", interpolation="bilinear")

    def fill_text(self, text: str, x: float, y: float, color,
                  size: float = 8, bold: bool = False) -> None:
        """Draw text with its baseline at y; silently skipped without text support."""
        if not self.text_enabled:
            return
        self.ax.text(x, y, text, color=color, fontsize=size, family=FONT_FAMILY,
                     fontweight="bold" if bold else "normal",
                     ha="left", va="baseline", clip_on=True)

    def to_png(self) -> bytes:
        buf = io.BytesIO()
        self.figure.savefig(buf, format="png", dpi=self.dpi)
        buf.seek(0)
        return buf.getvalue()

    def close(self) -> None:
        """Release the figure; drawing on a closed surface raises AttributeError."""
        self.figure.clear()
        self.ax = None
        self.closed = True


class ProfileContainer:
    """Holds the single live surface of a profile panel."""

    def __init__(self, name: str = "topo-profile"):
        self.name = name
        self._surface: Surface | None = None

    @property
    def surface(self) -> Surface | None:
        return self._surface

    @property
    def surfaces(self) -> list[Surface]:
        return [self._surface] if self._surface is not None else []

    def attach(self, surface: Surface) -> None:
        """Replace whatever is attached with `surface`."""
        if self._surface is not None and self._surface is not surface:
            logger.debug("Replacing surface in container %s", self.name)
            self._surface.close()
        self._surface = surface

    def clear(self) -> None:
        if self._surface is not None:
            self._surface.close()
        self._surface = None


@dataclass
class DisplayContext:
    """Everything a draw call needs about where and how to render."""
    container: ProfileContainer
    height: float  # px, full panel height including the scrollbar allowance
    capabilities: Capabilities = field(default_factory=detect_capabilities)
    leg_index: int = 0
    params: ProfileParams = field(default_factory=ProfileParams)
    dpi: int = DEFAULT_DPI
