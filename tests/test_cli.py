from __future__ import annotations

import json
from pathlib import Path

import pytest

from zwoexport.cli.main import main


def _write_payload(path: Path) -> Path:
    steps = [(300, 50), (60, 100), (60, 80), (60, 100), (60, 80), (300, 50)]
    data = []
    t = 0
    for duration, power in steps:
        for k in range(duration):
            data.append({"seconds": (t + k) * 1000, "ftpPercent": power})
        t += duration
    data.append({"seconds": t * 1000, "ftpPercent": 0})
    payload = {
        "Workout": {
            "Details": {
                "WorkoutName": "Mono",
                "WorkoutDescription": "Over-unders.",
                "GoalDescription": "Threshold.",
                "Zones": [{"Description": "Threshold"}],
            },
            "workoutData": data,
        }
    }
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_cli_converts_saved_payload(tmp_path: Path) -> None:
    payload = _write_payload(tmp_path / "mono.json")
    out_dir = tmp_path / "out"

    code = main(
        [
            "--input", str(payload),
            "--output-dir", str(out_dir),
            "--settings", str(tmp_path / "settings.json"),
        ]
    )

    assert code == 0
    document = (out_dir / "Mono.zwo").read_text(encoding="utf-8")
    assert '<IntervalsT Repeat="2"' in document


def test_cli_flag_overrides_stored_options(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    payload = _write_payload(tmp_path / "mono.json")
    settings = tmp_path / "settings.json"
    assert main(["--settings", str(settings), "--over-under", "loose", "--save-options"]) == 0

    code = main(
        [
            "--input", str(payload),
            "--settings", str(settings),
            "--over-under", "none",
            "--stdout",
            "--show-options",
        ]
    )

    out = capsys.readouterr().out
    assert code == 0
    assert "IntervalsT" not in out
    assert "Over-under conversion: none" in out
    assert json.loads(settings.read_text(encoding="utf-8"))["options"] == {
        "ramp_conversion": "none",
        "over_under_conversion": "loose",
    }


def test_cli_reports_invalid_input(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text(
        json.dumps(
            {
                "Workout": {
                    "Details": {"WorkoutName": "Bad"},
                    "workoutData": [{"seconds": 0, "ftpPercent": 50}],
                }
            }
        ),
        encoding="utf-8",
    )

    code = main(["--input", str(bad), "--settings", str(tmp_path / "settings.json")])

    assert code == 2
    assert "Error:" in capsys.readouterr().err


def test_cli_without_workout_prints_help(tmp_path: Path) -> None:
    assert main(["--settings", str(tmp_path / "settings.json")]) == 1


def test_cli_rejects_workout_without_id(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = main(
        [
            "--workout", "https://www.trainerroad.com/app/cycling/workouts",
            "--settings", str(tmp_path / "settings.json"),
        ]
    )

    assert code == 1
    assert "No workout id found" in capsys.readouterr().err
