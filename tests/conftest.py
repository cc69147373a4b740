"""Global pytest fixtures & helpers.

Adds project root to path and provides reusable checkpoint sequences for the
locator, normalizer and I/O tests.
"""
from __future__ import annotations

import os
import sys
from typing import List, Optional

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from pace_tracks.models import CheckPoint, Location


# --- Factory helpers -------------------------------------------------
def make_point(
    distance: float,
    time: float,
    lat: Optional[float] = None,
    lon: float = 0.0,
    actual: Optional[float] = None,
) -> CheckPoint:
    """Build a checkpoint whose latitude tracks distance unless given."""

    latitude = distance / 1000.0 if lat is None else lat
    return CheckPoint(
        location=Location(latitude, lon),
        route_distance=distance,
        time=time,
        actual_distance=actual,
    )


def make_record(distances: List[float], times: List[float]) -> List[CheckPoint]:
    """Runner record where route and actual distance coincide."""

    return [make_point(d, t, actual=d) for d, t in zip(distances, times)]


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def base_route() -> List[CheckPoint]:
    return [
        make_point(0.0, 0.0),
        make_point(10.0, 5.0),
        make_point(20.0, 12.0),
    ]


@pytest.fixture
def dense_record() -> List[CheckPoint]:
    """Record matching ``base_route`` 1:1 up to 20 m, then two samples beyond."""

    distances = [float(d) for d in range(0, 21)]
    times = []
    for d in distances:
        if d <= 10:
            times.append(d * 0.5)
        else:
            times.append(5.0 + (d - 10.0) * 0.7)
    distances += [25.0, 30.0]
    times += [15.0, 18.0]
    return make_record(distances, times)


@pytest.fixture
def square_track() -> List[CheckPoint]:
    return [
        make_point(0.0, 0.0, lat=1.0, lon=2.0),
        make_point(100.0, 30.0, lat=3.0, lon=4.0),
        make_point(250.0, 80.0, lat=-1.0, lon=0.0),
        make_point(400.0, 140.0, lat=0.5, lon=1.5),
    ]
