import argparse
import logging
import sys

from topo_profile.aggregator import aggregate
from topo_profile.canvas import DisplayContext, ProfileContainer, detect_capabilities
from topo_profile.config import DEFAULTS, build_params, get_default, load_config
from topo_profile.formatters import format_minutes, pretty_distance
from topo_profile.parser import load_plan
from topo_profile.renderer import render_png
from topo_profile.units import millis_to_minutes


def build_parser(config: dict | None = None) -> argparse.ArgumentParser:
    """Build argument parser with defaults from config file."""
    parser = argparse.ArgumentParser(
        description="Render the topographic elevation profile of a planned trip."
    )
    parser.add_argument("plan_file", help="Path to a trip planner JSON response")
    parser.add_argument(
        "-o", "--output",
        default="profile.png",
        help="Output PNG path (default: profile.png)",
    )
    parser.add_argument(
        "--itinerary",
        type=int,
        default=0,
        help="Index of the itinerary to profile (default: 0)",
    )
    parser.add_argument(
        "--leg",
        type=int,
        default=0,
        help="Index of the leg to profile (default: 0)",
    )
    parser.add_argument(
        "--height",
        type=float,
        default=get_default(config, "height"),
        help=f"Panel height in pixels (default: {DEFAULTS['height']})",
    )
    parser.add_argument(
        "--resolution",
        type=float,
        default=get_default(config, "resolution"),
        help=f"Horizontal resolution in feet per pixel (default: {DEFAULTS['resolution']})",
    )
    parser.add_argument(
        "--axis-width",
        type=float,
        default=get_default(config, "axis_width"),
        help=f"Width of the elevation label gutter in pixels (default: {DEFAULTS['axis_width']})",
    )
    parser.add_argument(
        "--top-row-height",
        type=float,
        default=get_default(config, "top_row_height"),
        help=f"Height of the step header row in pixels (default: {DEFAULTS['top_row_height']})",
    )
    parser.add_argument(
        "--scrollbar-allowance",
        type=float,
        default=get_default(config, "scrollbar_allowance"),
        help=f"Pixels kept free below the profile (default: {DEFAULTS['scrollbar_allowance']})",
    )
    parser.add_argument(
        "--dpi",
        type=int,
        default=get_default(config, "dpi"),
        help=f"Output image DPI (default: {DEFAULTS['dpi']})",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    config = load_config()
    parser = build_parser(config)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        itineraries = load_plan(args.plan_file)
    except FileNotFoundError:
        print(f"Error: File not found: {args.plan_file}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error parsing plan: {e}", file=sys.stderr)
        sys.exit(1)

    if not 0 <= args.itinerary < len(itineraries):
        print(f"Error: Plan has {len(itineraries)} itineraries, no index {args.itinerary}.", file=sys.stderr)
        sys.exit(1)
    itinerary = itineraries[args.itinerary]
    if not 0 <= args.leg < len(itinerary.legs):
        print(f"Error: Itinerary has {len(itinerary.legs)} legs, no index {args.leg}.", file=sys.stderr)
        sys.exit(1)

    capabilities = detect_capabilities()
    if not capabilities.canvas:
        print("Error: No drawing surface available.", file=sys.stderr)
        sys.exit(1)

    params = build_params(vars(args))
    context = DisplayContext(
        container=ProfileContainer(),
        height=args.height,
        capabilities=capabilities,
        leg_index=args.leg,
        params=params,
        dpi=args.dpi,
    )
    try:
        png = render_png(itinerary, context)
    except ValueError as e:
        print(f"Error rendering profile: {e}", file=sys.stderr)
        sys.exit(1)

    with open(args.output, "wb") as f:
        f.write(png)

    leg = itinerary.leg(args.leg)
    summary = aggregate(leg.steps)
    surface = context.container.surface

    print("=== Elevation Profile ===")
    print(f"Leg:            {args.leg} ({leg.mode}, {len(leg.steps)} steps)")
    if leg.is_bogus_walk_leg():
        print("Note:           zero-distance walk leg, nothing to profile")
    print(f"Distance:       {pretty_distance(summary.total_distance)}")
    if leg.duration is not None:
        print(f"Duration:       {format_minutes(millis_to_minutes(leg.duration))}")
    if summary.has_elevation:
        rng = summary.elevation_range
        print(f"Elevation:      {rng.low:.0f} ft - {rng.high:.0f} ft")
    else:
        print("Elevation:      no data")
    print(f"Bands:          {summary.band_count} ({summary.min_band}' - {summary.max_band}')")
    print(f"Image:          {surface.width:.0f} x {surface.height:.0f} px")
    print(f"Output:         {args.output}")
