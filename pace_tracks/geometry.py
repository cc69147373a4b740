"""Helpers for deriving travelled distances from raw GPS samples."""

from __future__ import annotations

from typing import List, Sequence

import numpy as np
from numpy.typing import NDArray

from .models import CheckPoint, Location

MetricArray = NDArray[np.float64]
_EARTH_RADIUS_M = 6_371_000.0


def cumulative_distances_m(points: Sequence[Sequence[float]]) -> MetricArray:
    """Return cumulative haversine distances, starting at zero, for ``points``."""

    if len(points) == 0:
        return np.zeros(0, dtype=float)
    array = np.radians(np.asarray(points, dtype=float))
    if array.ndim != 2 or array.shape[1] != 2:
        raise ValueError("Expected a sequence of (latitude, longitude) pairs")
    lats = array[:, 0]
    lons = array[:, 1]
    sin_half_lat = np.sin(np.diff(lats) / 2.0)
    sin_half_lon = np.sin(np.diff(lons) / 2.0)
    a = sin_half_lat**2 + np.cos(lats[:-1]) * np.cos(lats[1:]) * sin_half_lon**2
    # Rounding can push ``a`` a hair above 1 for antipodal steps.
    a = np.clip(a, 0.0, 1.0)
    steps = _EARTH_RADIUS_M * 2.0 * np.arctan2(np.sqrt(a), np.sqrt(1.0 - a))
    return np.concatenate(([0.0], np.cumsum(steps)))


def build_runner_record(
    points: Sequence[Sequence[float]],
    timestamps_s: Sequence[float],
) -> List[CheckPoint]:
    """Turn raw lat/lon samples and timestamps into a runner record.

    Each checkpoint's route and actual distance is the cumulative haversine
    distance travelled so far, and its time is relative to the first sample.

    Raises:
        ValueError: If the point and timestamp counts differ.
    """

    if len(points) != len(timestamps_s):
        raise ValueError("Activity points and timestamps must be the same length")
    if len(points) == 0:
        return []
    distances = cumulative_distances_m(points)
    start_time = float(timestamps_s[0])
    return [
        CheckPoint(
            location=Location(float(point[0]), float(point[1])),
            route_distance=float(distance),
            time=float(timestamp) - start_time,
            actual_distance=float(distance),
        )
        for point, timestamp, distance in zip(points, timestamps_s, distances)
    ]


__all__ = ["build_runner_record", "cumulative_distances_m"]
