"""Bounding box computation over a set of locations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

import numpy as np

from ..errors import EmptyTrackError
from ..models import Location

Range = Tuple[float, float]


@dataclass(frozen=True, slots=True)
class Boundaries:
    """Closed latitude and longitude ranges covering a trace."""

    latitude_range: Range
    longitude_range: Range

    @property
    def center(self) -> Location:
        lat_min, lat_max = self.latitude_range
        lon_min, lon_max = self.longitude_range
        return Location((lat_min + lat_max) / 2.0, (lon_min + lon_max) / 2.0)

    def contains(self, location: Sequence[float]) -> bool:
        latitude, longitude = location[0], location[1]
        lat_min, lat_max = self.latitude_range
        lon_min, lon_max = self.longitude_range
        return lat_min <= latitude <= lat_max and lon_min <= longitude <= lon_max


def compute_boundaries(locations: Iterable[Sequence[float]]) -> Boundaries:
    """Return the minimal latitude/longitude ranges covering ``locations``.

    Raises:
        EmptyTrackError: If no locations are supplied.
    """

    array = np.asarray(list(locations), dtype=float)
    if array.size == 0:
        raise EmptyTrackError("There should be locations to compute boundaries for")
    if array.ndim != 2 or array.shape[1] != 2:
        raise ValueError("Expected a sequence of (latitude, longitude) pairs")
    latitudes = array[:, 0]
    longitudes = array[:, 1]
    return Boundaries(
        latitude_range=(float(latitudes.min()), float(latitudes.max())),
        longitude_range=(float(longitudes.min()), float(longitudes.max())),
    )


__all__ = ["Boundaries", "Range", "compute_boundaries"]
