import math
from dataclasses import dataclass, field
from datetime import datetime

UNNAMED_STREET = "unnamed street"


@dataclass(frozen=True)
class ElevationSample:
    position: float  # meters along the step
    elevation: float  # meters


def parse_elevation(text: str | None) -> tuple[ElevationSample, ...]:
    """Decode a comma-separated "position,elevation,position,elevation,..." string.

    Returns an empty tuple for None or blank input.

    Raises:
        ValueError: If the values are not numeric, do not form at least two
            pairs, are not finite, or positions are negative or decrease.
    """
    if text is None or not text.strip():
        return ()
    try:
        values = [float(v) for v in text.split(",")]
    except ValueError as e:
        raise ValueError(f"Non-numeric elevation value in {text!r}") from e
    return samples_from_values(values)


def samples_from_values(values: list[float]) -> tuple[ElevationSample, ...]:
    """Build samples from a flat alternating position/elevation list."""
    if not values:
        return ()
    if len(values) % 2 != 0:
        raise ValueError(f"Elevation sequence has odd length {len(values)}")
    if len(values) < 4:
        raise ValueError("Elevation sequence needs at least two samples")
    for v in values:
        if not math.isfinite(v):
            raise ValueError(f"Elevation sequence contains non-finite value {v}")
    samples = tuple(
        ElevationSample(position=values[i], elevation=values[i + 1])
        for i in range(0, len(values), 2)
    )
    if samples[0].position < 0:
        raise ValueError(f"Elevation positions must not be negative ({samples[0].position})")
    for prev, cur in zip(samples, samples[1:]):
        if cur.position < prev.position:
            raise ValueError(
                f"Elevation positions must not decrease ({prev.position} -> {cur.position})"
            )
    return samples


@dataclass(frozen=True)
class ElevationRange:
    """Running [low, high] range that knows whether anything was observed."""
    low: float | None = None
    high: float | None = None

    @classmethod
    def empty(cls) -> "ElevationRange":
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.low is None

    def include(self, value: float) -> "ElevationRange":
        if self.is_empty:
            return ElevationRange(low=value, high=value)
        return ElevationRange(low=min(self.low, value), high=max(self.high, value))


@dataclass(frozen=True)
class Step:
    distance: float  # meters
    street_name: str = UNNAMED_STREET
    elevation: tuple[ElevationSample, ...] = ()
    absolute_direction: str | None = None
    relative_direction: str | None = None
    stay_on: bool = False
    becomes: bool = False
    lat: float | None = None
    lon: float | None = None

    def __post_init__(self):
        if not math.isfinite(self.distance) or self.distance < 0:
            raise ValueError(f"Step distance must be finite and >= 0, got {self.distance}")
        if not self.street_name:
            object.__setattr__(self, "street_name", UNNAMED_STREET)

    @property
    def has_elevation(self) -> bool:
        return len(self.elevation) > 0

    @property
    def length(self) -> float:
        """Step length in meters as given by the last elevation sample."""
        if not self.elevation:
            return 0.0
        return self.elevation[-1].position


@dataclass(frozen=True)
class Leg:
    steps: tuple[Step, ...] = ()
    mode: str = "WALK"
    route: str = ""
    distance: float | None = None  # meters
    start_time: datetime | None = None
    end_time: datetime | None = None

    @property
    def duration(self) -> int | None:
        """Leg duration in milliseconds, None unless both times are known."""
        if self.start_time is None or self.end_time is None:
            return None
        return int((self.end_time - self.start_time).total_seconds() * 1000)

    def is_bogus_walk_leg(self) -> bool:
        """A walk leg with zero distance and at most one instruction."""
        return self.mode == "WALK" and len(self.steps) <= 1 and not self.distance


@dataclass(frozen=True)
class Itinerary:
    legs: tuple[Leg, ...] = field(default_factory=tuple)
    duration: int | None = None  # milliseconds
    walk_time: int | None = None  # milliseconds
    transit_time: int | None = None  # milliseconds
    waiting_time: int | None = None  # milliseconds
    walk_distance: float | None = None  # meters
    transfers: int | None = None

    def leg(self, index: int) -> Leg:
        """Return the leg at index.

        Raises:
            IndexError: If the itinerary has no such leg.
        """
        if index < 0 or index >= len(self.legs):
            raise IndexError(f"Leg index {index} out of range for {len(self.legs)} legs")
        return self.legs[index]


@dataclass
class ProfileParams:
    axis_width: float = 45.0  # px reserved for elevation labels
    top_row_height: float = 24.0  # px reserved for step header bars
    resolution: float = 5.0  # feet of distance per px
    scrollbar_allowance: float = 20.0  # px below the drawable area
