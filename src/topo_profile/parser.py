"""Build itineraries from a trip planner JSON response."""

import json
import math
from datetime import datetime, timezone

from topo_profile.models import (
    Itinerary,
    Leg,
    Step,
    UNNAMED_STREET,
    parse_elevation,
    samples_from_values,
)


def load_plan(filepath: str) -> list[Itinerary]:
    """Parse a planner response file and return its itineraries."""
    with open(filepath, "r") as f:
        data = json.load(f)
    return parse_plan(data)


def parse_plan(data: dict) -> list[Itinerary]:
    """Parse a decoded planner response.

    Accepts either the full response ({"plan": {"itineraries": [...]}}) or
    the plan object itself.

    Raises:
        ValueError: If the response is structurally malformed.
    """
    if not isinstance(data, dict):
        raise ValueError("Planner response must be a JSON object")
    plan = data.get("plan", data)
    if not isinstance(plan, dict):
        raise ValueError("'plan' must be a JSON object")
    raw_itineraries = plan.get("itineraries", [])
    if not isinstance(raw_itineraries, list):
        raise ValueError("'itineraries' must be a list")

    itineraries = []
    for i, raw in enumerate(raw_itineraries):
        try:
            itineraries.append(_parse_itinerary(raw))
        except ValueError as e:
            raise ValueError(f"itinerary {i}: {e}") from e
    return itineraries


def _parse_itinerary(raw: dict) -> Itinerary:
    if not isinstance(raw, dict):
        raise ValueError("expected an object")
    legs = []
    for j, raw_leg in enumerate(raw.get("legs", [])):
        try:
            legs.append(_parse_leg(raw_leg))
        except ValueError as e:
            raise ValueError(f"leg {j}: {e}") from e
    return Itinerary(
        legs=tuple(legs),
        duration=_optional_int(raw.get("duration")),
        walk_time=_optional_int(raw.get("walkTime")),
        transit_time=_optional_int(raw.get("transitTime")),
        waiting_time=_optional_int(raw.get("waitingTime")),
        walk_distance=_optional_float(raw.get("walkDistance")),
        transfers=_optional_int(raw.get("transfers")),
    )


def _parse_leg(raw: dict) -> Leg:
    if not isinstance(raw, dict):
        raise ValueError("expected an object")
    raw_steps = raw.get("steps", raw.get("walkSteps", [])) or []
    steps = []
    for k, raw_step in enumerate(raw_steps):
        try:
            steps.append(_parse_step(raw_step))
        except ValueError as e:
            raise ValueError(f"step {k}: {e}") from e
    return Leg(
        steps=tuple(steps),
        mode=raw.get("mode") or "WALK",
        route=raw.get("route") or "",
        distance=_optional_float(raw.get("distance")),
        start_time=_parse_time(raw.get("startTime")),
        end_time=_parse_time(raw.get("endTime")),
    )


def _parse_step(raw: dict) -> Step:
    if not isinstance(raw, dict):
        raise ValueError("expected an object")
    if raw.get("distance") is None:
        raise ValueError("missing distance")
    distance = _optional_float(raw["distance"])
    if distance < 0:
        raise ValueError(f"negative distance {distance}")
    return Step(
        distance=distance,
        street_name=raw.get("streetName") or UNNAMED_STREET,
        elevation=_parse_samples(raw.get("elevation")),
        absolute_direction=raw.get("absoluteDirection"),
        relative_direction=raw.get("relativeDirection"),
        stay_on=_parse_bool(raw.get("stayOn")),
        becomes=_parse_bool(raw.get("becomes")),
        lat=_optional_float(raw.get("lat")),
        lon=_optional_float(raw.get("lon")),
    )


def _parse_samples(value):
    """Elevation arrives as "p,e,p,e" text, a flat number list, or a list of
    {"first": position, "second": elevation} pairs."""
    if value is None or isinstance(value, str):
        return parse_elevation(value)
    if not isinstance(value, list):
        raise ValueError(f"unsupported elevation value {value!r}")
    values: list[float] = []
    for item in value:
        if isinstance(item, dict):
            values.extend([_optional_float(item.get("first")), _optional_float(item.get("second"))])
        else:
            values.append(_optional_float(item))
    if any(v is None for v in values):
        raise ValueError("elevation pair is missing a value")
    return samples_from_values(values)


def _parse_time(value) -> datetime | None:
    """Times are epoch milliseconds or ISO-8601 strings."""
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)):
        millis = _optional_float(value)
        try:
            return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError(f"invalid time {value!r}") from e
    try:
        return datetime.fromisoformat(str(value))
    except ValueError as e:
        raise ValueError(f"invalid time {value!r}") from e


def _parse_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


def _optional_float(value) -> float | None:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"expected a number, got {value!r}") from e
    if not math.isfinite(number):
        raise ValueError(f"expected a finite number, got {value!r}")
    return number


def _optional_int(value) -> int | None:
    if value is None:
        return None
    return int(_optional_float(value))
