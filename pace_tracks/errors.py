"""Central error types used across the application."""

from __future__ import annotations


class TrackContractError(ValueError):
    """Raised when a caller breaks a precondition of a track operation."""


class EmptyTrackError(TrackContractError):
    """Raised when a checkpoint or location sequence is empty (or too short)."""


class UnorderedTrackError(TrackContractError):
    """Raised when distances or times decrease within a single recording."""


class TrackFormatError(RuntimeError):
    """Raised when an input file's structure or required columns are invalid."""


__all__ = [
    "TrackContractError",
    "EmptyTrackError",
    "UnorderedTrackError",
    "TrackFormatError",
]
