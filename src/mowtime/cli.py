"""Command-line interface for mowtime."""

import argparse
import sys
import warnings
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import (
    ConfigError, PlannerConfig, load_config, PATTERNS, EDGE_CHECK_MODES, MAX_DECK_WIDTH_INCHES,
    DEFAULT_MOWING_SPEED_MPH, DEFAULT_TURN_OVERHEAD_SECONDS,
)
from .path_writer import PathWriter, OUTPUT_FORMATS
from .planner import CoveragePlanner
from .request_parser import RequestParser, RequestError, COORDINATE_ORDERS
from .visualizer import visualize_plan

# Settings the CLI reads from a config file in addition to PlannerConfig's
CLI_KEYS = {'deck_width', 'format', 'coordinate_order', 'mowing_speed_mph', 'turn_overhead_seconds', 'visualize'}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mowtime",
        description="Plan a lawn mower coverage path for yard boundaries with obstacles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Plan a spiral path from a service-style request body
  mowtime yard.json -o path.json

  # GeoJSON in, GeoJSON out, 42 inch deck
  mowtime yard.geojson --deck-width 42 --format geojson -o path.geojson

  # Stripes instead of a spiral, with a preview image
  mowtime yard.json --pattern stripes --visualize preview.png
        """
    )

    parser.add_argument(
        "input",
        type=Path,
        help="Request file: service JSON body or GeoJSON polygons",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        help="Output path file (default: mow_path.json)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Config file (JSON or YAML) with settings",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show warnings (iteration limits, ignored config keys)",
    )

    plan_group = parser.add_argument_group('Planning')
    plan_group.add_argument(
        "--deck-width",
        type=float,
        help="Cutting deck width in inches (default: taken from the request)",
    )
    plan_group.add_argument(
        "--pattern",
        type=str,
        choices=PATTERNS,
        help="Coverage pattern (default: spiral)",
    )
    plan_group.add_argument(
        "--edge-check",
        type=str,
        choices=EDGE_CHECK_MODES,
        help="Obstacle test for traced edges: midpoint sample (default) or full segment",
    )
    plan_group.add_argument(
        "--coordinate-order",
        type=str,
        choices=COORDINATE_ORDERS,
        help="Pair order in service JSON requests (default: latlon)",
    )

    output_group = parser.add_argument_group('Output')
    output_group.add_argument(
        "--format",
        type=str,
        choices=OUTPUT_FORMATS,
        help="Output format (default: json)",
    )
    output_group.add_argument(
        "--mowing-speed-mph",
        type=float,
        help="Mower ground speed for the time estimate (default: 3.0)",
    )
    output_group.add_argument(
        "--turn-overhead-seconds",
        type=float,
        help="Seconds added per path vertex for the time estimate (default: 1.0)",
    )
    output_group.add_argument(
        "--visualize",
        type=Path,
        help="Save a preview image of the plan (PNG, SVG, PDF)",
    )

    return parser


def format_minutes(time_minutes: float) -> str:
    hours = int(time_minutes // 60)
    minutes = int(time_minutes % 60)
    seconds = int((time_minutes % 1) * 60)

    if hours > 0:
        return f"{hours}h {minutes}m {seconds}s"
    elif minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    args = build_parser().parse_args(argv)

    # Suppress warnings by default unless verbose is enabled
    if not args.verbose:
        warnings.filterwarnings('ignore')

    config: Dict[str, Any] = {}
    if args.config:
        try:
            config = load_config(args.config)
        except ConfigError as e:
            print(f"Error: {e}")
            return 1
        print(f"Loaded config from: {args.config}")

    # Helper to get value: CLI arg > config > default
    def get_value(arg_name: str, default: Any = None) -> Any:
        arg_val = getattr(args, arg_name, None)
        if arg_val is not None:
            return arg_val
        return config.get(arg_name, default)

    input_path = args.input
    if not input_path.exists():
        print(f"Error: Input path '{input_path}' not found")
        return 1

    output_file = args.output if args.output else Path("mow_path.json")
    output_format = get_value('format', default='json')
    deck_width = get_value('deck_width')
    visualize_path = get_value('visualize')

    if output_format not in OUTPUT_FORMATS:
        print(f"Error: Unsupported output format '{output_format}'. Use one of: {', '.join(OUTPUT_FORMATS)}")
        return 1

    planner_values = {key: value for key, value in config.items() if key not in CLI_KEYS}
    if args.pattern:
        planner_values['pattern'] = args.pattern
    if args.edge_check:
        planner_values['edge_check'] = args.edge_check

    try:
        planner_config = PlannerConfig.from_dict(planner_values)
        parser_obj = RequestParser(
            input_path,
            coordinate_order=get_value('coordinate_order', default='latlon'),
            deck_width_inches=deck_width,
        )
        print(f"Parsing request: {input_path}")
        request = parser_obj.parse()
    except (ConfigError, RequestError) as e:
        print(f"Error: {e}")
        return 1

    if request.deck_width_inches <= 0:
        print(f"Error: Deck width must be greater than zero, got {request.deck_width_inches}")
        return 1
    if request.deck_width_inches > MAX_DECK_WIDTH_INCHES:
        print(f"Warning: Deck width {request.deck_width_inches} in exceeds the supported {MAX_DECK_WIDTH_INCHES:.0f} in")

    print(f"\nSettings:")
    print(f"  Deck width: {request.deck_width_inches} in")
    print(f"  Pattern: {planner_config.pattern}")
    print(f"  Edge check: {planner_config.edge_check}")
    print(f"  Areas: {len(request.areas)} ({sum(len(a.holes) for a in request.areas)} obstacles)")

    print(f"\nPlanning mowing path...")
    response = CoveragePlanner(planner_config).plan(request)
    print(f"  Generated {len(response.path)} path points")

    writer = PathWriter(
        mowing_speed_mph=get_value('mowing_speed_mph', default=DEFAULT_MOWING_SPEED_MPH),
        turn_overhead_seconds=get_value('turn_overhead_seconds', default=DEFAULT_TURN_OVERHEAD_SECONDS),
    )
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, 'w', newline='') as f:
        writer.write(response, f, fmt=output_format)

    print(f"  Total length: {writer.length_meters:.1f} m")
    print(f"\n✓ Path saved to: {output_file}")
    print(f"  Estimated mowing time: {format_minutes(writer.time_estimate_minutes)}")

    if visualize_path:
        visualize_plan(request, response, output_path=visualize_path, title=f"Mowing Plan: {input_path.name}")
        print(f"✓ Preview saved to: {visualize_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
