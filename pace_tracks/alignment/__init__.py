"""Public entry points for checkpoint location, normalization and boundaries."""

from __future__ import annotations

from .boundaries import Boundaries, compute_boundaries
from .locator import (
    bracket_index,
    checkpoint_at,
    interpolate_checkpoint,
    locate_checkpoint,
)
from .normalizer import extract_normalized_point, normalize

boundaries = compute_boundaries

__all__ = [
    "Boundaries",
    "boundaries",
    "bracket_index",
    "checkpoint_at",
    "compute_boundaries",
    "extract_normalized_point",
    "interpolate_checkpoint",
    "locate_checkpoint",
    "normalize",
]
