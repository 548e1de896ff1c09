"""Unit conversion helpers."""

FEET_PER_METER = 3.2808399
METERS_PER_MILE = 1609.344
MILLIS_PER_MINUTE = 60000


def meters_to_feet(meters: float) -> int:
    """Convert meters to whole feet, truncating toward zero."""
    return int(meters * FEET_PER_METER)


def meters_to_feet_exact(meters: float) -> float:
    """Convert meters to feet without truncation."""
    return meters * FEET_PER_METER


def meters_to_miles(meters: float) -> float:
    """Convert meters to miles with one fractional digit."""
    return round(meters / METERS_PER_MILE, 1)


def millis_to_minutes(millis: float) -> int:
    """Convert milliseconds to whole minutes, truncating toward zero."""
    return int(millis / MILLIS_PER_MINUTE)
