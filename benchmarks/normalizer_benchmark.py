"""Benchmark the in-range normalization strategies with large traces."""

from __future__ import annotations

import argparse
import statistics
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Late imports rely on the adjusted sys.path above.
from pace_tracks.alignment import normalize  # noqa: E402
from pace_tracks.geometry import build_runner_record  # noqa: E402
from pace_tracks.models import CheckPoint  # noqa: E402


@dataclass(slots=True)
class BenchmarkSummary:
    """Aggregated statistics for multiple benchmark iterations."""

    base_points: int
    record_points: int
    iterations: int
    mean_binary_ms: float
    mean_scan_ms: float
    worst_binary_ms: float
    worst_scan_ms: float


def _build_record(point_count: int) -> List[CheckPoint]:
    """Generate a straight northbound record sampled every two seconds."""

    base_lat = 37.0
    base_lon = -122.0
    step_deg = 1.2e-5
    points = [(base_lat + idx * step_deg, base_lon) for idx in range(point_count)]
    timestamps = [float(idx * 2.0) for idx in range(point_count)]
    return build_runner_record(points, timestamps)


def _time_strategy(
    base: List[CheckPoint], record: List[CheckPoint], strategy: str
) -> float:
    start = time.perf_counter()
    result = normalize(base, record, strategy=strategy)
    _ = result  # guard against optimisation stripping the call
    return time.perf_counter() - start


def run_benchmark(point_count: int, iterations: int) -> BenchmarkSummary:
    """Benchmark both strategies and return aggregated timings."""

    if point_count < 1000:
        raise ValueError("point_count must be at least 1,000")
    if iterations <= 0:
        raise ValueError("iterations must be positive")

    record = _build_record(point_count)
    # Base route uses every tenth sample, so the record runs past its end.
    base = record[: int(point_count * 0.9) : 10]

    binary: List[float] = []
    scan: List[float] = []
    for _ in range(iterations):
        binary.append(_time_strategy(base, record, "binary"))
        scan.append(_time_strategy(base, record, "scan"))

    return BenchmarkSummary(
        base_points=len(base),
        record_points=len(record),
        iterations=iterations,
        mean_binary_ms=statistics.fmean(binary) * 1000.0,
        mean_scan_ms=statistics.fmean(scan) * 1000.0,
        worst_binary_ms=max(binary) * 1000.0,
        worst_scan_ms=max(scan) * 1000.0,
    )


def _format_summary(summary: BenchmarkSummary) -> Dict[str, float]:
    """Return a JSON-friendly representation of the benchmark summary."""

    return {
        "base_points": summary.base_points,
        "record_points": summary.record_points,
        "iterations": summary.iterations,
        "mean_binary_ms": summary.mean_binary_ms,
        "mean_scan_ms": summary.mean_scan_ms,
        "worst_binary_ms": summary.worst_binary_ms,
        "worst_scan_ms": summary.worst_scan_ms,
    }


def _parse_args() -> argparse.Namespace:
    """Parse command-line arguments for the benchmark utility."""

    parser = argparse.ArgumentParser(
        description="Compare binary and scan normalization on large traces",
    )
    parser.add_argument(
        "--points",
        type=int,
        default=5000,
        help="Number of samples in the synthetic runner record",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=3,
        help="Number of repetitions for averaging",
    )
    return parser.parse_args()


def main() -> None:
    """Entry point when running the module as a script."""

    args = _parse_args()
    summary = run_benchmark(args.points, args.iterations)
    for key, value in _format_summary(summary).items():
        if key in {"base_points", "record_points", "iterations"}:
            print(f"{key}: {value}")
        else:
            print(f"{key}: {value:.3f}")


if __name__ == "__main__":
    main()
