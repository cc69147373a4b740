"""Command line entry point for normalizing and inspecting recorded tracks.

Usage:
    python -m pace_tracks normalize --base route.xlsx --record run.gpx
    python -m pace_tracks locate --input run.csv --distance 2500
    python -m pace_tracks bounds --input run.csv
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence

from .alignment import checkpoint_at, compute_boundaries, normalize
from .config import (
    LOG_FORMAT,
    LOG_LEVEL,
    NORMALIZER_SEARCH_STRATEGY,
    OUTPUT_FILE,
    OUTPUT_FILE_TIMESTAMP_ENABLED,
    OUTPUT_FORMAT,
    SEARCH_STRATEGIES,
)
from .errors import TrackContractError, TrackFormatError
from .models import Run, distance_axis
from .track_io import load_record, read_checkpoints, write_checkpoints
from .utils import format_time, resolve_output_path

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 2


def _setup_logging(level: str) -> None:
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pace-tracks",
        description="Normalize runner records against a base route and inspect tracks.",
    )
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=f"Logging verbosity (default: {LOG_LEVEL})",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    normalize_parser = subparsers.add_parser(
        "normalize",
        help="Align a runner record to the distance axis of a base route",
    )
    normalize_parser.add_argument(
        "--base",
        type=Path,
        required=True,
        help="Checkpoint table (.csv/.xlsx) holding the base route or run",
    )
    normalize_parser.add_argument(
        "--record",
        type=Path,
        required=True,
        help="Runner record as GPX or as a checkpoint table",
    )
    normalize_parser.add_argument(
        "--output",
        type=Path,
        help=(
            "Destination table (.csv/.xlsx). Defaults to the configured output "
            "name, optionally timestamped."
        ),
    )
    normalize_parser.add_argument(
        "--runner",
        default="unknown",
        help="Runner identity recorded on the resulting run",
    )
    normalize_parser.add_argument(
        "--route-id",
        help="Identifier of the base route the record was run against",
    )
    normalize_parser.add_argument(
        "--strategy",
        default=NORMALIZER_SEARCH_STRATEGY,
        choices=sorted(SEARCH_STRATEGIES),
        help=f"In-range search strategy (default: {NORMALIZER_SEARCH_STRATEGY})",
    )

    locate_parser = subparsers.add_parser(
        "locate",
        help="Show the interpolated checkpoint at a distance along a track",
    )
    locate_parser.add_argument("--input", type=Path, required=True)
    locate_parser.add_argument(
        "--distance",
        type=float,
        required=True,
        help="Distance completed, in metres",
    )

    bounds_parser = subparsers.add_parser(
        "bounds",
        help="Show the latitude/longitude boundaries of a track",
    )
    bounds_parser.add_argument("--input", type=Path, required=True)
    return parser


def _run_normalize(args: argparse.Namespace) -> int:
    base = read_checkpoints(args.base)
    record = load_record(args.record)
    LOGGER.info(
        "Loaded %d base checkpoints from %s and %d record samples from %s",
        len(base),
        args.base,
        len(record),
        args.record,
    )
    normalized = normalize(base, record, strategy=args.strategy)
    run = Run(runner=args.runner, checkpoints=normalized, route_id=args.route_id)

    output_path: Path = args.output or resolve_output_path(
        OUTPUT_FILE, OUTPUT_FORMAT, OUTPUT_FILE_TIMESTAMP_ENABLED
    )
    write_checkpoints(output_path, run.checkpoints)
    if run.checkpoints:
        bounds = run.boundaries()
        LOGGER.info(
            "Run %s: %d checkpoints, %.1f m in %s, lat %s lon %s",
            run.run_id,
            len(run.checkpoints),
            run.distance,
            format_time(run.time_spent),
            bounds.latitude_range,
            bounds.longitude_range,
        )
    else:
        LOGGER.warning("Normalization produced no checkpoints; wrote an empty table")
    return EXIT_OK


def _run_locate(args: argparse.Namespace) -> int:
    checkpoints = load_record(args.input)
    point = checkpoint_at(args.distance, distance_axis(checkpoints))
    LOGGER.info(
        "At %.1f m: lat=%.6f lon=%.6f route_distance=%.1f time=%s",
        args.distance,
        point.latitude,
        point.longitude,
        point.route_distance,
        format_time(point.time),
    )
    return EXIT_OK


def _run_bounds(args: argparse.Namespace) -> int:
    checkpoints = load_record(args.input)
    bounds = compute_boundaries(point.location for point in checkpoints)
    LOGGER.info(
        "Boundaries: latitude %s longitude %s (center %s)",
        bounds.latitude_range,
        bounds.longitude_range,
        tuple(bounds.center),
    )
    return EXIT_OK


_COMMANDS: Dict[str, Callable[[argparse.Namespace], int]] = {
    "normalize": _run_normalize,
    "locate": _run_locate,
    "bounds": _run_bounds,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    _setup_logging(args.log_level)
    handler = _COMMANDS[args.command]
    try:
        return handler(args)
    except (TrackContractError, TrackFormatError, FileNotFoundError) as exc:
        LOGGER.error("%s failed: %s", args.command, exc)
        return EXIT_INPUT_ERROR


__all__ = ["build_parser", "main"]
