from __future__ import annotations

from pathlib import Path

import pytest

from vaketracker.cli import parse_args, run_command
from vaketracker.common.fs import write_json
from vaketracker.pipeline.heatmap import aggregate

ROWS = [
    {"latitude": 14.6, "longitude": -90.5},
    {"latitude": 15.6, "longitude": -91.0},
    {"latitude": 16.9, "longitude": -89.9},
    {"latitude": 14.6, "longitude": -90.5},
    {"latitude": "", "longitude": -90.5},
    {"latitude": 15.0, "longitude": -90.0},
]


def _run_once(tmp_path: Path, run_id: str) -> bytes:
    input_path = tmp_path / "input.json"
    output_path = tmp_path / run_id / "heatmap.json"
    write_json(input_path, {"locations": ROWS})
    args = parse_args(
        [
            "heatmap",
            "--config-dir",
            "config",
            "--input",
            str(input_path),
            "--output",
            str(output_path),
            "--run-id",
            run_id,
        ]
    )
    assert run_command(args) == 10
    return output_path.read_bytes()


@pytest.mark.regression
def test_heatmap_output_is_byte_stable_for_same_inputs(tmp_path: Path):
    assert _run_once(tmp_path, "run-a") == _run_once(tmp_path, "run-b")


@pytest.mark.regression
def test_heatmap_snapshot():
    result = aggregate(ROWS, "Guatemala").to_dict()
    assert result == {
        "country": "Guatemala",
        "buckets": [
            {"region": "Guatemala (Capital)", "count": 2, "intensity": 100.0},
            {"region": "Alta Verapaz", "count": 1, "intensity": 50.0},
            {"region": "Petén", "count": 1, "intensity": 50.0},
            {"region": "Baja Verapaz", "count": 1, "intensity": 50.0},
        ],
        "total_records": 6,
        "matched_records": 5,
        "skipped_records": 1,
    }


@pytest.mark.regression
def test_empty_input_snapshot():
    assert aggregate([], "México").to_dict() == {
        "country": "México",
        "buckets": [],
        "total_records": 0,
        "matched_records": 0,
        "skipped_records": 0,
    }
