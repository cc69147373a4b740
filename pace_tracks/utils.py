"""General utility helpers shared across modules."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path


def format_time(seconds: float) -> str:
    """Format seconds into a ``Xm Ys`` string."""

    mins, sec = divmod(int(round(seconds)), 60)
    return f"{mins}m {sec}s"


def resolve_output_path(base: str, suffix: str, timestamped: bool) -> Path:
    """Return ``base`` with an optional ``_YYYYMMDD_HHMMSS`` stamp and ``suffix``."""

    if timestamped:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return Path(f"{base}_{timestamp}.{suffix}")
    return Path(f"{base}.{suffix}")
