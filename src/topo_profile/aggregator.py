"""Distance and elevation-band aggregation over a leg's steps."""

import logging
import math
from dataclasses import dataclass

from topo_profile.models import ElevationRange, Step
from topo_profile.units import meters_to_feet_exact

logger = logging.getLogger(__name__)

BAND_FEET = 100


@dataclass(frozen=True)
class ElevationSummary:
    total_distance: float  # meters
    elevation_range: ElevationRange  # feet
    min_band: int  # feet, multiple of BAND_FEET
    max_band: int  # feet, multiple of BAND_FEET
    band_count: int

    @property
    def has_elevation(self) -> bool:
        return not self.elevation_range.is_empty

    @property
    def band_span(self) -> int:
        """Vertical extent of the banded axis in feet."""
        return self.max_band - self.min_band


def elevation_range(steps: list[Step] | tuple[Step, ...]) -> ElevationRange:
    """Collect the elevation range in feet over every sample of every step."""
    rng = ElevationRange.empty()
    for step in steps:
        for sample in step.elevation:
            rng = rng.include(meters_to_feet_exact(sample.elevation))
    return rng


def quantize_bands(rng: ElevationRange) -> tuple[int, int, int]:
    """Snap an elevation range (feet) outward to whole bands.

    Returns (min_band, max_band, band_count). An empty range becomes a single
    band starting at zero, and a range that snaps to zero height is widened to
    one band so the count is always at least 1.
    """
    if rng.is_empty:
        return 0, BAND_FEET, 1
    min_band = BAND_FEET * math.floor(rng.low / BAND_FEET)
    max_band = BAND_FEET * math.ceil(rng.high / BAND_FEET)
    if max_band <= min_band:
        max_band = min_band + BAND_FEET
    return min_band, max_band, (max_band - min_band) // BAND_FEET


def aggregate(steps: list[Step] | tuple[Step, ...]) -> ElevationSummary:
    """Compute total distance and elevation bands for an ordered list of steps."""
    total_distance = sum(step.distance for step in steps)
    rng = elevation_range(steps)
    if rng.is_empty:
        logger.debug("No elevation samples in %d steps, using a single flat band", len(steps))
    min_band, max_band, band_count = quantize_bands(rng)
    return ElevationSummary(
        total_distance=total_distance,
        elevation_range=rng,
        min_band=min_band,
        max_band=max_band,
        band_count=band_count,
    )
