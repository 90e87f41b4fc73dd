"""
Command line entry point.

Usage:
    py-galaxy --size 120 --layout spiral --players 4 --seed 42 \\
        --output galaxy.json --plot galaxy.png
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from .config import settings
from .core import Layout, generate, validate_territories
from .logging_config import configure_logging

logger = structlog.get_logger()


def _seed(value: str):
    """Numeric seeds stay integers so they match library calls."""
    try:
        return int(value)
    except ValueError:
        return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="py-galaxy",
        description="Generate a connected galaxy map of territories and warp lanes.",
    )
    parser.add_argument("--size", type=int, default=settings.default_map_size,
                        help="Number of territories (default: %(default)s)")
    parser.add_argument("--layout", choices=[layout.value for layout in Layout],
                        default=settings.default_layout,
                        help="Galaxy layout (default: %(default)s)")
    parser.add_argument("--players", type=int, default=settings.default_num_players,
                        help="Number of players (default: %(default)s)")
    parser.add_argument("--seed", type=_seed, default=None,
                        help="Random seed; omitted for a fresh random map")
    parser.add_argument("--output", type=Path, default=None,
                        help="Write the map as JSON to this path (default: stdout)")
    parser.add_argument("--plot", type=Path, default=None,
                        help="Write a PNG preview to this path")
    parser.add_argument("--log-level", default=settings.log_level,
                        help="Logging level (default: %(default)s)")
    parser.add_argument("--log-format", choices=["plain", "json"],
                        default=settings.log_format,
                        help="Logging format (default: %(default)s)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, args.log_format)

    if not 0 <= args.size <= settings.max_map_size:
        logger.error("Map size out of range", size=args.size, max_size=settings.max_map_size)
        return 2
    if args.players < 1:
        logger.error("At least one player is required", players=args.players)
        return 2

    galaxy = generate(args.size, args.layout, args.players, seed=args.seed)
    report = validate_territories(galaxy.territories)

    payload = galaxy.to_json()
    if args.output:
        args.output.write_text(payload)
        logger.info("Galaxy written", path=str(args.output))
    else:
        sys.stdout.write(payload + "\n")

    if args.plot:
        from .visualizer import plot_galaxy

        plot_galaxy(galaxy, args.plot)

    if not report.is_valid:
        logger.error("Generated map failed validation", issues=len(report.issues),
                     components=report.components)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
