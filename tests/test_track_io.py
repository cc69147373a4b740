"""Tests for checkpoint tables and GPX runner records."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest
from openpyxl import load_workbook

from conftest import make_point, make_record
from pace_tracks.alignment import normalize
from pace_tracks.config import CHECKPOINT_SHEET
from pace_tracks.errors import TrackFormatError
from pace_tracks.track_io import (
    COLUMN_ORDER,
    load_record,
    read_checkpoints,
    read_gpx_record,
    write_checkpoints,
)

GPX_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <trk>
    <name>Morning Run</name>
    <trkseg>
{points}
    </trkseg>
  </trk>
</gpx>
"""


def _write_gpx(path: Path, samples: list[tuple[float, float, str | None]]) -> Path:
    rows = []
    for lat, lon, stamp in samples:
        time_el = f"<time>{stamp}</time>" if stamp is not None else ""
        rows.append(f'      <trkpt lat="{lat}" lon="{lon}">{time_el}</trkpt>')
    path.write_text(GPX_TEMPLATE.format(points="\n".join(rows)), encoding="utf-8")
    return path


@pytest.mark.parametrize("suffix", [".csv", ".xlsx"])
def test_write_then_read_preserves_checkpoints(tmp_path: Path, suffix: str) -> None:
    checkpoints = [
        make_point(0.0, 0.0, actual=0.0),
        make_point(12.5, 6.0, actual=13.0),
        make_point(30.0, 15.5),
    ]
    path = write_checkpoints(tmp_path / f"run{suffix}", checkpoints)
    assert read_checkpoints(path) == checkpoints


def test_xlsx_header_is_bold(tmp_path: Path, base_route) -> None:
    path = write_checkpoints(tmp_path / "route.xlsx", base_route)
    ws = load_workbook(path)[CHECKPOINT_SHEET]
    headers = [cell.value for cell in ws[1]]
    assert headers == COLUMN_ORDER
    assert all(cell.font.bold for cell in ws[1])


def test_read_without_actual_distance_column(tmp_path: Path) -> None:
    path = tmp_path / "route.csv"
    pd.DataFrame(
        {
            "Latitude": [51.0, 51.001],
            "Longitude": [-3.0, -3.0],
            "Route Distance (m)": [0, 111],
            "Time (s)": [0, 40],
        }
    ).to_csv(path, index=False)

    checkpoints = read_checkpoints(path)
    assert [p.route_distance for p in checkpoints] == [0.0, 111.0]
    assert all(p.actual_distance is None for p in checkpoints)


def test_missing_columns_are_reported(tmp_path: Path) -> None:
    path = tmp_path / "bad.csv"
    pd.DataFrame({"Latitude": [1.0], "Longitude": [2.0]}).to_csv(path, index=False)
    with pytest.raises(TrackFormatError, match="Missing columns"):
        read_checkpoints(path)


def test_blank_required_cell_is_reported(tmp_path: Path) -> None:
    path = tmp_path / "blank.csv"
    pd.DataFrame(
        {
            "Latitude": [1.0, None],
            "Longitude": [2.0, 2.0],
            "Route Distance (m)": [0.0, 5.0],
            "Time (s)": [0.0, 3.0],
        }
    ).to_csv(path, index=False)
    with pytest.raises(TrackFormatError, match="row 3"):
        read_checkpoints(path)


def test_unordered_table_is_rejected(tmp_path: Path) -> None:
    path = write_checkpoints(
        tmp_path / "unordered.csv",
        make_record([0.0, 10.0, 5.0], [0.0, 5.0, 8.0]),
    )
    with pytest.raises(TrackFormatError, match="travelled distance decreases"):
        read_checkpoints(path)


def test_normalized_output_reads_back(tmp_path: Path, base_route, dense_record) -> None:
    normalized = normalize(base_route, dense_record)
    path = write_checkpoints(tmp_path / "normalized.csv", normalized)

    restored = read_checkpoints(path)
    assert restored == normalized
    assert [p.route_distance for p in restored] == [0.0, 10.0, 20.0, 0.0, 5.0]
    assert [p.actual_distance for p in restored] == pytest.approx([0.0, 10.0, 20.0, 25.0, 30.0])


def test_route_distance_restart_needs_travelled_distance(tmp_path: Path) -> None:
    path = write_checkpoints(
        tmp_path / "restart.csv",
        [make_point(0.0, 0.0), make_point(20.0, 12.0), make_point(0.0, 15.0)],
    )
    with pytest.raises(TrackFormatError, match="travelled distance decreases at index 2"):
        read_checkpoints(path)


def test_unsupported_suffix_and_missing_file(tmp_path: Path) -> None:
    with pytest.raises(TrackFormatError):
        write_checkpoints(tmp_path / "run.json", [])
    with pytest.raises(FileNotFoundError):
        read_checkpoints(tmp_path / "nope.csv")


def test_missing_sheet_is_reported(tmp_path: Path, base_route) -> None:
    path = write_checkpoints(tmp_path / "route.xlsx", base_route)
    with pytest.raises(TrackFormatError, match="Sheet 'Other' not found"):
        read_checkpoints(path, sheet_name="Other")


def test_read_gpx_record(tmp_path: Path) -> None:
    path = _write_gpx(
        tmp_path / "run.gpx",
        [
            (37.0000, -122.0000, "2025-01-05T10:00:00Z"),
            (37.0003, -122.0000, "2025-01-05T10:00:12Z"),
            (37.0006, -122.0000, "2025-01-05T10:00:24+00:00"),
        ],
    )
    record = read_gpx_record(path)

    assert [p.time for p in record] == [0.0, 12.0, 24.0]
    assert record[0].route_distance == 0.0
    assert record[-1].actual_distance == pytest.approx(66.7, abs=0.5)
    assert load_record(path) == record


def test_gpx_point_without_time_is_rejected(tmp_path: Path) -> None:
    path = _write_gpx(
        tmp_path / "run.gpx",
        [(37.0, -122.0, "2025-01-05T10:00:00Z"), (37.0003, -122.0, None)],
    )
    with pytest.raises(TrackFormatError, match="has no <time>"):
        read_gpx_record(path)


def test_gpx_without_points_is_rejected(tmp_path: Path) -> None:
    path = _write_gpx(tmp_path / "empty.gpx", [])
    with pytest.raises(TrackFormatError, match="no track points"):
        read_gpx_record(path)


def test_gpx_with_invalid_timestamp_is_rejected(tmp_path: Path) -> None:
    path = _write_gpx(tmp_path / "run.gpx", [(37.0, -122.0, "yesterday")])
    with pytest.raises(TrackFormatError, match="Invalid ISO timestamp"):
        read_gpx_record(path)


def test_gpx_point_index_runs_across_segments(tmp_path: Path) -> None:
    path = tmp_path / "split.gpx"
    path.write_text(
        """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <trk>
    <trkseg>
      <trkpt lat="37.0" lon="-122.0"><time>2025-01-05T10:00:00Z</time></trkpt>
      <trkpt lat="37.0003" lon="-122.0"><time>2025-01-05T10:00:12Z</time></trkpt>
    </trkseg>
    <trkseg>
      <trkpt lat="37.0006" lon="-122.0"></trkpt>
    </trkseg>
  </trk>
</gpx>
""",
        encoding="utf-8",
    )
    with pytest.raises(TrackFormatError, match="GPX track point 2 has no <time>"):
        read_gpx_record(path)
