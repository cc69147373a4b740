"""Track alignment for recorded runs: normalization, lookup and boundaries."""

from .alignment import Boundaries, boundaries, checkpoint_at, normalize
from .errors import EmptyTrackError, TrackContractError, TrackFormatError
from .models import CheckPoint, Location, Route, Run

__all__ = [
    "Boundaries",
    "boundaries",
    "checkpoint_at",
    "normalize",
    "CheckPoint",
    "Location",
    "Route",
    "Run",
    "EmptyTrackError",
    "TrackContractError",
    "TrackFormatError",
]
