"""Normalize a runner record onto the distance axis of a base route."""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .. import config
from ..errors import EmptyTrackError
from ..models import CheckPoint, Route
from .locator import bracket_index, interpolate_checkpoint

_LOG = logging.getLogger(__name__)

# (left, right) record indices around a base distance; equal for exact hits.
_Bracket = Tuple[int, int]
_BracketFinder = Callable[[Sequence[CheckPoint], float], _Bracket]


def _earliest_equal(record: Sequence[CheckPoint], idx: int) -> int:
    """Walk back over samples sharing the same distance (runner standing still)."""

    distance = record[idx].route_distance
    while idx > 0 and record[idx - 1].route_distance == distance:
        idx -= 1
    return idx


def _bracket_binary(record: Sequence[CheckPoint], distance: float) -> _Bracket:
    found = bracket_index(record, distance)
    if isinstance(found, int):
        exact = _earliest_equal(record, found)
        return exact, exact
    left_idx, right_idx = found
    if record[left_idx].route_distance == distance:
        return left_idx, left_idx
    return left_idx, right_idx


def _bracket_scan(record: Sequence[CheckPoint], distance: float) -> _Bracket:
    for idx, point in enumerate(record):
        if point.route_distance == distance:
            return idx, idx
        if point.route_distance > distance:
            return idx - 1, idx
    # Unreachable for distances inside the record's range.
    last_idx = len(record) - 1
    return last_idx, last_idx


_STRATEGIES: Dict[str, _BracketFinder] = {
    "binary": _bracket_binary,
    "scan": _bracket_scan,
}


def extract_normalized_point(
    base_point: CheckPoint,
    record: Sequence[CheckPoint],
    *,
    strategy: Optional[str] = None,
) -> Optional[CheckPoint]:
    """Return the runner's checkpoint at ``base_point``'s position, if recorded.

    The result keeps the base point's location and route distance and takes
    its time (and actual distance) from the record samples around the same
    distance. Returns ``None`` when the record does not cover that distance.
    """

    finder = _resolve_strategy(strategy)
    if not record:
        return None
    distance = base_point.route_distance
    last_point = record[-1]
    if distance < record[0].route_distance or distance > last_point.route_distance:
        return None
    if distance == last_point.route_distance:
        exact = _earliest_equal(record, len(record) - 1)
        return interpolate_checkpoint(distance, record[exact], record[exact], base_point)

    left_idx, right_idx = finder(record, distance)
    return interpolate_checkpoint(
        distance, record[left_idx], record[right_idx], base_point
    )


def normalize(
    base: Sequence[CheckPoint],
    record: Sequence[CheckPoint],
    *,
    strategy: Optional[str] = None,
) -> List[CheckPoint]:
    """Re-express ``record`` on the distance axis of ``base``.

    Args:
        base: Reference checkpoints (an existing run or route), ordered by
            route distance. Must hold at least two checkpoints.
        record: Raw runner checkpoints ordered by route distance.
        strategy: ``"binary"`` or ``"scan"``; defaults to
            ``config.NORMALIZER_SEARCH_STRATEGY``.

    Returns:
        One checkpoint per base checkpoint covered by the record, followed by
        the record samples recorded past the end of the base, re-baselined so
        their route distance starts at zero.

    Raises:
        EmptyTrackError: If ``base`` has fewer than two checkpoints.
        ValueError: If ``strategy`` is not a known strategy name.
    """

    if len(base) < 2:
        raise EmptyTrackError(
            f"The base track needs at least two checkpoints, got {len(base)}"
        )
    resolved = _strategy_name(strategy)

    normalized_points: List[CheckPoint] = []
    skipped = 0
    for base_point in base:
        point = extract_normalized_point(base_point, record, strategy=resolved)
        if point is None:
            skipped += 1
            _LOG.debug(
                "No record coverage at base distance %.2f m; skipping",
                base_point.route_distance,
            )
            continue
        normalized_points.append(point)

    max_base_distance = base[-1].route_distance
    outside_points = [
        point for point in record if point.travelled_distance > max_base_distance
    ]
    if outside_points:
        outside_start = outside_points[0].travelled_distance
        normalized_points.extend(Route.normalize_from(outside_start, outside_points))

    _LOG.info(
        "Normalized %d record samples against %d base checkpoints: "
        "in_range=%d out_of_range=%d skipped=%d strategy=%s",
        len(record),
        len(base),
        len(base) - skipped,
        len(outside_points),
        skipped,
        resolved,
    )
    return normalized_points


def _strategy_name(strategy: Optional[str]) -> str:
    name = (strategy or config.NORMALIZER_SEARCH_STRATEGY).strip().lower()
    if name not in _STRATEGIES:
        raise ValueError(
            f"Unknown search strategy '{strategy}'; expected one of {sorted(_STRATEGIES)}"
        )
    return name


def _resolve_strategy(strategy: Optional[str]) -> _BracketFinder:
    return _STRATEGIES[_strategy_name(strategy)]


__all__ = ["extract_normalized_point", "normalize"]
