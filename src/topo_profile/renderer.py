"""Topographic elevation profile rendering for one itinerary leg."""

import logging

from topo_profile.aggregator import aggregate
from topo_profile.canvas import DisplayContext, Surface, rgb
from topo_profile.formatters import format_elevation_label, pretty_distance
from topo_profile.layout import ProfileLayout, compute_layout
from topo_profile.models import Itinerary

logger = logging.getLogger(__name__)

GUTTER_COLOR = rgb(47, 79, 79)
LABEL_FLAG_COLOR = rgb(255, 255, 255)
HEADER_TEXT_COLOR = rgb(255, 255, 255)
HEADER_GRADIENT = (rgb(47, 79, 79), rgb(128, 128, 128))
SKY_COLOR = rgb(135, 206, 255)
# Band colors run from SKY_COLOR at the lowest band to this at the highest.
SKY_HIGH_COLOR = rgb(204, 245, 255)
GROUND_FILL_COLOR = rgb(0, 128, 0, 0.5)
GROUND_LINE_COLOR = rgb(128, 0, 0)
GROUND_LINE_WIDTH = 2
DIVIDER_WIDTH = 2
FLAG_INSET = 5
FLAG_SIZE = 12


def band_color(index: int, band_count: int) -> tuple[float, float, float, float]:
    """Background color for band `index` (0 = lowest) of `band_count` bands."""
    if band_count <= 1:
        return SKY_COLOR
    t = index / (band_count - 1)
    r = round(135 + 69 * t)
    g = round(206 + 39 * t)
    return rgb(r, g, 255)


def draw_axis(surface: Surface, layout: ProfileLayout) -> None:
    """Elevation gutter with a flag and label at every band boundary."""
    axis_width = layout.params.axis_width
    surface.fill_rect(0, 0, axis_width, surface.height, GUTTER_COLOR)
    for d in range(layout.summary.band_count + 1):
        y = layout.band_label_y(d)
        surface.fill_polygon(
            [
                (FLAG_INSET, y),
                (axis_width, y),
                (axis_width - FLAG_SIZE, y - FLAG_SIZE),
                (FLAG_INSET, y - FLAG_SIZE),
            ],
            LABEL_FLAG_COLOR,
        )
        label = format_elevation_label(layout.band_label_value(d))
        surface.fill_text(label, FLAG_INSET + 2, y - 2, GUTTER_COLOR, bold=True)


def draw_bands(surface: Surface, layout: ProfileLayout) -> None:
    """Graduated sky background, one strip per elevation band."""
    params = layout.params
    band_count = layout.summary.band_count
    if band_count == 1:
        surface.fill_rect(params.axis_width, params.top_row_height, layout.profile_width,
                          layout.drawable_height - params.top_row_height, SKY_COLOR)
        return
    for i in range(band_count):
        surface.fill_rect(params.axis_width, layout.band_top(i), layout.profile_width,
                          layout.band_height, band_color(i, band_count))


def draw_step_headers(surface: Surface, layout: ProfileLayout) -> None:
    """Header bar, left divider and labels for every step."""
    top_row_height = layout.params.top_row_height
    for segment in layout.segments:
        surface.fill_horizontal_gradient(segment.left, 0, segment.width, top_row_height,
                                         *HEADER_GRADIENT)
        surface.fill_rect(segment.left, 0, DIVIDER_WIDTH, layout.drawable_height, GUTTER_COLOR)
        surface.fill_text(segment.step.street_name, segment.left + 5, 10,
                          HEADER_TEXT_COLOR, bold=True)
        surface.fill_text(pretty_distance(segment.step.distance), segment.left + 5, 21,
                          HEADER_TEXT_COLOR)


def draw_ground(surface: Surface, layout: ProfileLayout) -> None:
    """Filled terrain polygon under the path plus the traced ground line."""
    vertices = list(layout.vertices)
    if not vertices:
        return
    baseline = layout.baseline
    polygon = vertices + [(vertices[-1][0], baseline), (vertices[0][0], baseline)]
    surface.fill_polygon(polygon, GROUND_FILL_COLOR)
    surface.stroke_polyline(vertices, GROUND_LINE_COLOR, GROUND_LINE_WIDTH)


def render_layout(layout: ProfileLayout, dpi: int, text: bool = True) -> Surface:
    """Paint a computed layout onto a fresh surface."""
    surface = Surface(layout.surface_width, layout.surface_height, dpi=dpi, text=text)
    draw_axis(surface, layout)
    draw_bands(surface, layout)
    draw_step_headers(surface, layout)
    draw_ground(surface, layout)
    return surface


def draw(itinerary: Itinerary, context: DisplayContext) -> None:
    """Render the elevation profile of one itinerary leg into the context's container.

    The leg is chosen by context.leg_index. Does nothing when the context
    reports no canvas capability or the itinerary has no legs.

    Raises:
        IndexError: If leg_index does not name a leg of a non-empty itinerary.
    """
    if not context.capabilities.canvas:
        logger.debug("Canvas unavailable, skipping elevation profile")
        return
    if not itinerary.legs:
        logger.warning("Itinerary has no legs, nothing to profile")
        return

    leg = itinerary.leg(context.leg_index)
    summary = aggregate(leg.steps)
    layout = compute_layout(leg.steps, summary, context.params, context.height)
    surface = render_layout(layout, context.dpi, text=context.capabilities.text)
    context.container.attach(surface)


def render_png(itinerary: Itinerary, context: DisplayContext) -> bytes | None:
    """Draw and return the resulting PNG, or None if nothing was drawn."""
    previous = context.container.surface
    draw(itinerary, context)
    surface = context.container.surface
    if surface is None or surface is previous:
        return None
    return surface.to_png()
