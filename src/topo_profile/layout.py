"""Pixel-space layout of an elevation profile.

Distances run left to right starting after the axis gutter, one segment per
step at a fixed number of feet per pixel. Elevations map into the area below
the header row; y grows downward so higher ground has a smaller y.
"""

from dataclasses import dataclass

from topo_profile.aggregator import BAND_FEET, ElevationSummary
from topo_profile.models import ProfileParams, Step
from topo_profile.units import meters_to_feet_exact


@dataclass(frozen=True)
class StepSegment:
    step: Step
    left: float  # px
    width: float  # px

    @property
    def right(self) -> float:
        return self.left + self.width


@dataclass(frozen=True)
class ProfileLayout:
    summary: ElevationSummary
    params: ProfileParams
    segments: tuple[StepSegment, ...]
    vertices: tuple[tuple[float, float], ...]
    profile_width: float
    drawable_height: float

    @property
    def band_height(self) -> float:
        return (self.drawable_height - self.params.top_row_height) / self.summary.band_count

    @property
    def surface_width(self) -> float:
        return self.params.axis_width + self.profile_width

    @property
    def surface_height(self) -> float:
        return self.drawable_height + self.params.scrollbar_allowance

    @property
    def baseline(self) -> float:
        return self.drawable_height

    def band_top(self, index: int) -> float:
        """Top y of band `index`, counting from the lowest band (0)."""
        return self.drawable_height - (index + 1) * self.band_height

    def band_label_y(self, index: int) -> float:
        """y of band boundary `index` (0 = baseline, band_count = top)."""
        return self.drawable_height - index * self.band_height

    def band_label_value(self, index: int) -> int:
        """Elevation in feet at band boundary `index`."""
        return self.summary.min_band + index * BAND_FEET


def elevation_to_y(elevation_ft: float, summary: ElevationSummary,
                   drawable_height: float, top_row_height: float) -> float:
    """Map an elevation in feet to a y coordinate inside the banded area."""
    span = summary.band_span
    if span <= 0:
        return drawable_height
    return drawable_height - (drawable_height - top_row_height) * (elevation_ft - summary.min_band) / span


def compute_layout(
    steps: list[Step] | tuple[Step, ...],
    summary: ElevationSummary,
    params: ProfileParams,
    surface_height: float,
) -> ProfileLayout:
    """Lay out step segments and ground vertices for one leg.

    Args:
        steps: Ordered steps of the leg being profiled.
        summary: Distance and band summary for the same steps.
        params: Fixed gutter, header and resolution settings.
        surface_height: Height of the display area in pixels, including the
            scrollbar allowance.

    Returns a ProfileLayout. Vertices form one continuous polyline across all
    steps; steps without samples contribute a segment but no vertices.

    Raises:
        ValueError: If the resolution is not positive or the display area
            leaves no room below the header row.
    """
    if params.resolution <= 0:
        raise ValueError(f"Resolution must be positive, got {params.resolution}")
    drawable_height = surface_height - params.scrollbar_allowance
    if drawable_height <= params.top_row_height:
        raise ValueError(
            f"Display height {surface_height}px leaves no room for the profile "
            f"(header {params.top_row_height}px, scrollbar {params.scrollbar_allowance}px)"
        )

    segments = []
    vertices = []
    cursor = params.axis_width
    for step in steps:
        seg_width = meters_to_feet_exact(step.distance) / params.resolution
        segments.append(StepSegment(step=step, left=cursor, width=seg_width))

        step_len = step.length
        for sample in step.elevation:
            ratio = sample.position / step_len if step_len > 0 else 0.0
            x = cursor + ratio * seg_width
            y = elevation_to_y(
                meters_to_feet_exact(sample.elevation), summary,
                drawable_height, params.top_row_height,
            )
            vertices.append((x, y))

        cursor += seg_width

    profile_width = meters_to_feet_exact(summary.total_distance) / params.resolution
    return ProfileLayout(
        summary=summary,
        params=params,
        segments=tuple(segments),
        vertices=tuple(vertices),
        profile_width=profile_width,
        drawable_height=drawable_height,
    )
