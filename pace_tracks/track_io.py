"""Reading and writing checkpoint tables (CSV/XLSX) and GPX runner records."""

from __future__ import annotations

from datetime import datetime
import logging
from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, cast

from defusedxml import ElementTree as ET
import pandas as pd
from openpyxl.styles import Border, Font, Side
from openpyxl.worksheet.worksheet import Worksheet

from .config import CHECKPOINT_SHEET
from .errors import TrackFormatError, UnorderedTrackError
from .geometry import build_runner_record
from .models import CheckPoint, Location, validate_sequence

LOGGER = logging.getLogger(__name__)

GPX_NS = {"g": "http://www.topografix.com/GPX/1/1"}

LATITUDE_COL = "Latitude"
LONGITUDE_COL = "Longitude"
ROUTE_DISTANCE_COL = "Route Distance (m)"
ACTUAL_DISTANCE_COL = "Actual Distance (m)"
TIME_COL = "Time (s)"
COLUMN_ORDER = [
    LATITUDE_COL,
    LONGITUDE_COL,
    ROUTE_DISTANCE_COL,
    ACTUAL_DISTANCE_COL,
    TIME_COL,
]
_REQUIRED_COLS = {LATITUDE_COL, LONGITUDE_COL, ROUTE_DISTANCE_COL, TIME_COL}
_TABLE_SUFFIXES = {".csv", ".xlsx"}

HEADER_FONT = Font(bold=True)
HEADER_BORDER = Border(
    left=Side(style="thin", color="000000"),
    right=Side(style="thin", color="000000"),
    top=Side(style="thin", color="000000"),
    bottom=Side(style="thin", color="000000"),
)

PathInput = str | Path | PathLike[str]


def _assert_file_exists(path: Path) -> None:
    if not path.is_file():
        raise FileNotFoundError(f"Track file not found: {path}")


def _suffix(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix not in _TABLE_SUFFIXES:
        raise TrackFormatError(
            f"Unsupported checkpoint table '{path.name}'; expected one of {sorted(_TABLE_SUFFIXES)}"
        )
    return suffix


def _is_blank(value: object) -> bool:
    return pd.isna(value) or str(value).strip() == ""


def _required_float(value: object, column: str, row_label: str) -> float:
    if _is_blank(value):
        raise TrackFormatError(f"Missing '{column}' value in {row_label}")
    try:
        return float(cast(float, value))
    except (TypeError, ValueError) as exc:
        raise TrackFormatError(
            f"Invalid '{column}' value '{value}' in {row_label} (expected a number)"
        ) from exc


def _optional_float(value: object, column: str, row_label: str) -> Optional[float]:
    if _is_blank(value):
        return None
    return _required_float(value, column, row_label)


def _validate_columns(df: pd.DataFrame, source: str) -> None:
    missing = _REQUIRED_COLS - set(df.columns)
    if missing:
        raise TrackFormatError(
            f"Missing columns in {source}: {', '.join(sorted(missing))}. Present: {list(df.columns)}"
        )


def _read_frame(path: Path, sheet_name: Optional[str]) -> pd.DataFrame:
    if _suffix(path) == ".csv":
        return pd.read_csv(path)
    sheet = sheet_name or CHECKPOINT_SHEET
    try:
        return pd.read_excel(path, sheet_name=sheet, engine="openpyxl")
    except ValueError as exc:
        raise TrackFormatError(f"Sheet '{sheet}' not found: {exc}") from exc


def read_checkpoints(path: PathInput, sheet_name: Optional[str] = None) -> List[CheckPoint]:
    """Read an ordered checkpoint table from a CSV or Excel file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        TrackFormatError: If columns are missing, required cells are blank or
            non-numeric, or distances/times decrease between rows.
    """

    file_path = Path(path)
    _assert_file_exists(file_path)
    df = _read_frame(file_path, sheet_name)
    _validate_columns(df, file_path.name)
    has_actual = ACTUAL_DISTANCE_COL in df.columns

    checkpoints: List[CheckPoint] = []
    for idx, row in df.iterrows():
        # Header is row 1 in the source file.
        row_label = f"row {int(cast(int, idx)) + 2}"
        checkpoints.append(
            CheckPoint(
                location=Location(
                    _required_float(row[LATITUDE_COL], LATITUDE_COL, row_label),
                    _required_float(row[LONGITUDE_COL], LONGITUDE_COL, row_label),
                ),
                route_distance=_required_float(
                    row[ROUTE_DISTANCE_COL], ROUTE_DISTANCE_COL, row_label
                ),
                time=_required_float(row[TIME_COL], TIME_COL, row_label),
                actual_distance=(
                    _optional_float(row[ACTUAL_DISTANCE_COL], ACTUAL_DISTANCE_COL, row_label)
                    if has_actual
                    else None
                ),
            )
        )
    try:
        validate_sequence(checkpoints, label=file_path.name)
    except UnorderedTrackError as exc:
        raise TrackFormatError(str(exc)) from exc
    LOGGER.debug("Read %d checkpoints from %s", len(checkpoints), file_path)
    return checkpoints


def checkpoints_to_frame(checkpoints: Sequence[CheckPoint]) -> pd.DataFrame:
    """Return a DataFrame with one row per checkpoint in ``COLUMN_ORDER``."""

    rows = [
        {
            LATITUDE_COL: point.latitude,
            LONGITUDE_COL: point.longitude,
            ROUTE_DISTANCE_COL: point.route_distance,
            ACTUAL_DISTANCE_COL: point.actual_distance,
            TIME_COL: point.time,
        }
        for point in checkpoints
    ]
    return pd.DataFrame(rows, columns=COLUMN_ORDER)


def write_checkpoints(path: PathInput, checkpoints: Sequence[CheckPoint]) -> Path:
    """Write ``checkpoints`` to a CSV or Excel file and return its path."""

    file_path = Path(path)
    suffix = _suffix(file_path)
    df = checkpoints_to_frame(checkpoints)
    if suffix == ".csv":
        df.to_csv(file_path, index=False)
    else:
        with pd.ExcelWriter(file_path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=CHECKPOINT_SHEET, index=False)
            _style_header_row(writer.sheets[CHECKPOINT_SHEET], len(COLUMN_ORDER))
    LOGGER.info("Wrote %d checkpoints to %s", len(checkpoints), file_path)
    return file_path


def _style_header_row(ws: Worksheet, max_col: int) -> None:
    for col_idx in range(1, max_col + 1):
        cell = ws.cell(row=1, column=col_idx)
        cell.font = HEADER_FONT
        cell.border = HEADER_BORDER


def parse_iso8601(value: str) -> datetime:
    """Parse ISO timestamps and normalise trailing Z."""

    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise TrackFormatError(f"Invalid ISO timestamp: {value}") from exc


def read_gpx_record(path: PathInput) -> List[CheckPoint]:
    """Read a GPX 1.1 track into a runner record.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        TrackFormatError: If the file has no ``trkseg``/track points, or a
            point lacks coordinates or a timestamp.
    """

    file_path = Path(path)
    _assert_file_exists(file_path)
    try:
        tree = ET.parse(file_path)
    except ET.ParseError as exc:
        raise TrackFormatError(f"GPX file {file_path.name} is not valid XML") from exc
    root = tree.getroot()
    trksegs = root.findall(".//g:trkseg", GPX_NS)
    if not trksegs:
        raise TrackFormatError("GPX file is missing a <trkseg> block")

    points: List[Location] = []
    timestamps: List[float] = []
    # Point indices run across all segments.
    trkpts = [trkpt for trkseg in trksegs for trkpt in trkseg.findall("g:trkpt", GPX_NS)]
    for idx, trkpt in enumerate(trkpts):
        lat = trkpt.get("lat")
        lon = trkpt.get("lon")
        time_el = trkpt.find("g:time", GPX_NS)
        if lat is None or lon is None:
            raise TrackFormatError(f"GPX track point {idx} is missing lat/lon")
        if time_el is None or not (time_el.text or "").strip():
            raise TrackFormatError(f"GPX track point {idx} has no <time>")
        try:
            points.append(Location(float(lat), float(lon)))
        except ValueError as exc:
            raise TrackFormatError(
                f"GPX track point {idx} has invalid coordinates ({lat}, {lon})"
            ) from exc
        timestamps.append(parse_iso8601(cast(str, time_el.text).strip()).timestamp())
    if not points:
        raise TrackFormatError("GPX file contains no track points")

    record = build_runner_record(points, timestamps)
    try:
        validate_sequence(record, label=file_path.name)
    except UnorderedTrackError as exc:
        raise TrackFormatError(str(exc)) from exc
    LOGGER.debug("Read %d GPX track points from %s", len(record), file_path)
    return record


def load_record(path: PathInput, sheet_name: Optional[str] = None) -> List[CheckPoint]:
    """Load a runner record from GPX or from a checkpoint table."""

    file_path = Path(path)
    if file_path.suffix.lower() == ".gpx":
        return read_gpx_record(file_path)
    return read_checkpoints(file_path, sheet_name=sheet_name)


__all__ = [
    "COLUMN_ORDER",
    "checkpoints_to_frame",
    "load_record",
    "parse_iso8601",
    "read_checkpoints",
    "read_gpx_record",
    "write_checkpoints",
]
