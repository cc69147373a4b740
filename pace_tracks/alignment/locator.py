"""Locate or interpolate the checkpoint at a given cumulative distance."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple, Union

from ..errors import EmptyTrackError
from ..models import CheckPoint, Location

# Either the exact index of a checkpoint at the target distance, or the
# (left, right) indices of the pair bracketing it.
SearchResult = Union[int, Tuple[int, int]]


def bracket_index(checkpoints: Sequence[CheckPoint], distance: float) -> SearchResult:
    """Binary search ``checkpoints`` for ``distance``.

    The caller must ensure there are at least two checkpoints and that
    ``distance`` is below the last checkpoint's route distance. Returns the
    index of an exact match, or the ``(left, right)`` pair whose route
    distances bound ``distance`` once the interval can no longer shrink.
    """

    left_idx = 0
    right_idx = len(checkpoints) - 1
    while left_idx + 1 < right_idx:
        idx = (left_idx + right_idx) // 2
        candidate = checkpoints[idx].route_distance
        if candidate < distance:
            left_idx = idx
        elif candidate > distance:
            right_idx = idx
        else:
            return idx
    return left_idx, right_idx


def interpolate_checkpoint(
    distance: float,
    left: CheckPoint,
    right: CheckPoint,
    anchor: Optional[CheckPoint] = None,
) -> CheckPoint:
    """Linearly interpolate a checkpoint at ``distance`` between two checkpoints.

    Latitude and longitude are blended in degree space, which distorts long
    segments slightly but matches the values stored by existing runs.

    When ``anchor`` is given the result keeps the anchor's location and route
    distance, and only the time and actual distance are taken from the
    ``left``/``right`` pair. This places a runner's timing onto another
    track's geometry.
    """

    span = right.route_distance - left.route_distance
    fraction = 0.0 if span == 0 else (distance - left.route_distance) / span

    time = left.time + fraction * (right.time - left.time)
    actual_distance: Optional[float] = None
    if left.actual_distance is not None and right.actual_distance is not None:
        actual_distance = left.actual_distance + fraction * (
            right.actual_distance - left.actual_distance
        )

    if anchor is not None:
        return CheckPoint(
            location=anchor.location,
            route_distance=anchor.route_distance,
            time=time,
            actual_distance=actual_distance,
        )

    # Weighted form keeps both endpoints exact at fraction 0 and 1.
    latitude = left.latitude * (1.0 - fraction) + right.latitude * fraction
    longitude = left.longitude * (1.0 - fraction) + right.longitude * fraction
    return CheckPoint(
        location=Location(latitude, longitude),
        route_distance=distance,
        time=time,
        actual_distance=actual_distance,
    )


def locate_checkpoint(checkpoints: Sequence[CheckPoint], distance: float) -> CheckPoint:
    """Return the checkpoint at exactly ``distance`` along ``checkpoints``.

    Distances at or beyond the final checkpoint return the final checkpoint
    unchanged; this function never extrapolates past the end of a track.

    Raises:
        EmptyTrackError: If ``checkpoints`` is empty.
    """

    if not checkpoints:
        raise EmptyTrackError("Cannot locate a distance on an empty checkpoint sequence")
    last_point = checkpoints[-1]
    if len(checkpoints) < 2 or distance >= last_point.route_distance:
        return last_point

    found = bracket_index(checkpoints, distance)
    if isinstance(found, int):
        return checkpoints[found]
    left_idx, right_idx = found
    left = checkpoints[left_idx]
    if left.route_distance == distance:
        return left
    return interpolate_checkpoint(distance, left, checkpoints[right_idx])


def checkpoint_at(distance: float, within: Sequence[CheckPoint]) -> CheckPoint:
    """Return the checkpoint after ``distance`` metres of a recorded run."""

    if not within:
        raise EmptyTrackError("The run has no checkpoints")
    total_distance = within[-1].route_distance
    if distance >= total_distance:
        return within[-1]
    return locate_checkpoint(within, distance)


__all__ = [
    "SearchResult",
    "bracket_index",
    "checkpoint_at",
    "interpolate_checkpoint",
    "locate_checkpoint",
]
