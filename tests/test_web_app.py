from __future__ import annotations

import asyncio

import pytest

from zwoexport.source.client import WorkoutSourceError
from zwoexport.ui import web_app
from zwoexport.workout.model import ConversionOptions


def _payload() -> dict:
    data = []
    t = 0
    for duration, power in [(60, 100), (60, 80), (60, 100), (60, 80)]:
        for k in range(duration):
            data.append({"seconds": (t + k) * 1000, "ftpPercent": power})
        t += duration
    data.append({"seconds": t * 1000, "ftpPercent": 0})
    return {
        "Workout": {
            "Details": {"WorkoutName": "Mono ", "Zones": []},
            "workoutData": data,
        }
    }


def test_export_workout_fetches_and_converts(monkeypatch: pytest.MonkeyPatch) -> None:
    requested: list[tuple[str, dict[str, str] | None]] = []

    async def fake_fetch(workout_id: str, *, cookies=None) -> dict:
        requested.append((workout_id, cookies))
        return _payload()

    monkeypatch.setattr(web_app, "fetch_workout_details", fake_fetch)

    zwo = asyncio.run(
        web_app.export_workout(
            "https://www.trainerroad.com/app/cycling/workouts/5516-mono",
            ConversionOptions("none", "strict"),
            {"SharedTrainerRoadAuth": "xyz"},
        )
    )

    assert requested == [("5516", {"SharedTrainerRoadAuth": "xyz"})]
    assert zwo.download_name == "Mono.zwo"
    assert '<IntervalsT Repeat="2"' in zwo.document


def test_export_workout_propagates_source_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    async def failing_fetch(workout_id: str, *, cookies=None) -> dict:
        raise WorkoutSourceError("status: 401")

    monkeypatch.setattr(web_app, "fetch_workout_details", failing_fetch)

    with pytest.raises(WorkoutSourceError):
        asyncio.run(web_app.export_workout("5516", ConversionOptions()))
