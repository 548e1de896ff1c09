"""Formatting utilities for display."""

from topo_profile.units import meters_to_feet, meters_to_miles


def pretty_distance(meters: float | None) -> str:
    """Format a distance in meters with units.

    Distances under a tenth of a mile are shown in feet:

        582.2 -> "0.4 mi"
        20.62 -> "67 ft"

    Returns an empty string for None.
    """
    if meters is None:
        return ""
    miles = meters_to_miles(meters)
    if miles < 0.1:
        return f"{meters_to_feet(meters)} ft"
    return f"{miles:.1f} mi"


def format_elevation_label(feet: float) -> str:
    """Format an axis elevation value as e.g. 300'."""
    return f"{int(round(feet))}'"


def format_minutes(minutes: int) -> str:
    """Format minutes as Xh YYm string."""
    hours, mins = divmod(int(minutes), 60)
    if hours > 0:
        return f"{hours}h {mins:02d}m"
    return f"{mins}m"
