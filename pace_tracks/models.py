"""Value types describing routes, runs and the checkpoints they are built from."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import (
    TYPE_CHECKING,
    Callable,
    Iterable,
    List,
    NamedTuple,
    Optional,
    Sequence,
    Tuple,
)
import uuid

from .errors import EmptyTrackError, TrackContractError, UnorderedTrackError

if TYPE_CHECKING:
    from .alignment.boundaries import Boundaries


class Location(NamedTuple):
    """Latitude/longitude pair in signed degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class CheckPoint:
    """A single sample on a route or run."""

    location: Location
    route_distance: float
    time: float
    actual_distance: Optional[float] = None

    @property
    def latitude(self) -> float:
        return self.location.latitude

    @property
    def longitude(self) -> float:
        return self.location.longitude

    @property
    def travelled_distance(self) -> float:
        """Raw travelled distance, falling back to the route distance."""

        if self.actual_distance is None:
            return self.route_distance
        return self.actual_distance


RouteResolver = Callable[[str], Optional["Route"]]


def validate_sequence(
    checkpoints: Sequence[CheckPoint],
    *,
    label: str = "track",
    by_route_distance: bool = False,
) -> None:
    """Raise ``UnorderedTrackError`` if distance or time decreases with index.

    Distance is the travelled distance by default. Normalized runs restart
    their route distance at 0 past the end of the base, but the raw travelled
    distance keeps growing. Routes pass ``by_route_distance=True``.
    """

    axis = "route" if by_route_distance else "travelled"
    for idx in range(1, len(checkpoints)):
        previous = checkpoints[idx - 1]
        current = checkpoints[idx]
        if by_route_distance:
            before, after = previous.route_distance, current.route_distance
        else:
            before, after = previous.travelled_distance, current.travelled_distance
        if after < before:
            raise UnorderedTrackError(
                f"{label}: {axis} distance decreases at index {idx} ({before} -> {after})"
            )
        if current.time < previous.time:
            raise UnorderedTrackError(
                f"{label}: time decreases at index {idx} "
                f"({previous.time} -> {current.time})"
            )


def distance_axis(checkpoints: Sequence[CheckPoint]) -> Sequence[CheckPoint]:
    """Return ``checkpoints`` keyed on a distance that never decreases.

    Normalized output restarts its route distance past the end of the base.
    Such sequences are re-keyed on travelled distance so they can be searched;
    anything else is returned unchanged.
    """

    if all(
        current.route_distance >= previous.route_distance
        for previous, current in zip(checkpoints, checkpoints[1:])
    ):
        return checkpoints
    return [replace(point, route_distance=point.travelled_distance) for point in checkpoints]


@dataclass(eq=False)
class Route:
    """Reference path that runs are normalized against."""

    route_id: str
    checkpoints: Tuple[CheckPoint, ...]
    name: Optional[str] = None

    def __post_init__(self) -> None:
        self.checkpoints = tuple(self.checkpoints)
        if not self.checkpoints:
            raise EmptyTrackError(f"Route {self.route_id} has no checkpoints")
        if self.checkpoints[0].route_distance != 0:
            raise TrackContractError(
                f"Route {self.route_id} must start at route distance 0, "
                f"got {self.checkpoints[0].route_distance}"
            )
        validate_sequence(
            self.checkpoints, label=f"route {self.route_id}", by_route_distance=True
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Route):
            return NotImplemented
        return self.route_id == other.route_id

    def __hash__(self) -> int:
        return hash(self.route_id)

    @property
    def total_distance(self) -> float:
        return self.checkpoints[-1].route_distance

    @staticmethod
    def normalize_from(distance: float, points: Iterable[CheckPoint]) -> List[CheckPoint]:
        """Re-baseline ``points`` so their route distance counts from ``distance``.

        The raw travelled distance is kept, so the points still carry their
        position relative to the start of the recording.
        """

        return [
            replace(point, route_distance=point.travelled_distance - distance)
            for point in points
        ]


@dataclass(eq=False)
class Run:
    """A single recorded traversal, usually holding normalized checkpoints."""

    runner: str
    checkpoints: Tuple[CheckPoint, ...] = ()
    route_id: Optional[str] = None
    run_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    date_created: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    time_spent: float = field(init=False, default=0.0)
    distance: float = field(init=False, default=0.0)

    def __post_init__(self) -> None:
        # Copy so later changes to the caller's list never leak into the run.
        self.checkpoints = tuple(self.checkpoints)
        if self.checkpoints:
            self.time_spent = self.checkpoints[-1].time
            self.distance = distance_axis(self.checkpoints)[-1].route_distance

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Run):
            return NotImplemented
        return self.run_id == other.run_id

    def __hash__(self) -> int:
        return hash(self.run_id)

    # computed properties
    @property
    def start_location(self) -> Optional[Location]:
        return self.checkpoints[0].location if self.checkpoints else None

    @property
    def end_location(self) -> Optional[Location]:
        return self.checkpoints[-1].location if self.checkpoints else None

    @property
    def total_distance(self) -> Optional[float]:
        return self.distance if self.checkpoints else None

    @property
    def locations(self) -> List[Location]:
        return [point.location for point in self.checkpoints]

    def route(self, resolve_route: RouteResolver) -> Optional[Route]:
        """Resolve the route this run was recorded against, if any."""

        if self.route_id is None:
            return None
        return resolve_route(self.route_id)

    def boundaries(self) -> "Boundaries":
        """Return the latitude and longitude ranges covered by this run."""

        from .alignment.boundaries import compute_boundaries

        return compute_boundaries(self.locations)

    def normalize(self, runner_records: Sequence[CheckPoint]) -> List[CheckPoint]:
        """Normalize ``runner_records`` onto this run's checkpoints.

        Precondition: the runner records do not deviate from this run.
        """

        from .alignment.normalizer import normalize

        return normalize(self.checkpoints, runner_records)

    def checkpoint_at(self, distance_completed: float) -> CheckPoint:
        """Return the runner's checkpoint after ``distance_completed`` metres.

        Runs holding normalized output are searched on travelled distance, so
        points past the end of the base stay reachable.
        """

        from .alignment.locator import checkpoint_at

        return checkpoint_at(distance_completed, distance_axis(self.checkpoints))


__all__ = [
    "CheckPoint",
    "Location",
    "Route",
    "RouteResolver",
    "Run",
    "distance_axis",
    "validate_sequence",
]
