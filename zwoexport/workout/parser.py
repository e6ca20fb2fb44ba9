"""TrainerRoad workout-details payload parser."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from zwoexport.workout.model import RawSample, WorkoutMetadata


class WorkoutParseError(ValueError):
    """Raised when a workout payload is invalid."""


@dataclass(frozen=True)
class WorkoutDetails:
    metadata: WorkoutMetadata
    samples: tuple[RawSample, ...]


def load_workout_details(path: str | Path) -> WorkoutDetails:
    file_path = Path(path)
    if file_path.suffix.lower() != ".json":
        raise WorkoutParseError(
            f"Unsupported workout format '{file_path.suffix}'. Use .json"
        )
    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise WorkoutParseError(f"Invalid JSON: {exc}") from exc
    return parse_workout_details(data)


def parse_workout_details(payload: object) -> WorkoutDetails:
    if not isinstance(payload, dict):
        raise WorkoutParseError("Workout payload must be an object")

    # The API wraps everything in "Workout"; saved copies may not.
    workout = payload.get("Workout", payload)
    if not isinstance(workout, dict):
        raise WorkoutParseError("Field 'Workout' must be an object")

    details = workout.get("Details")
    if not isinstance(details, dict):
        raise WorkoutParseError("Field 'Details' must be an object")

    return WorkoutDetails(
        metadata=_build_metadata(details),
        samples=_build_samples(workout.get("workoutData")),
    )


def _build_metadata(details: dict) -> WorkoutMetadata:
    name_obj = details.get("WorkoutName")
    if not isinstance(name_obj, str) or not name_obj.strip():
        raise WorkoutParseError("Field 'WorkoutName' must be a non-empty string")

    zones_obj = details.get("Zones") or []
    if not isinstance(zones_obj, list):
        raise WorkoutParseError("Field 'Zones' must be an array")

    zone_names: list[str] = []
    for zone in zones_obj:
        if not isinstance(zone, dict):
            continue
        description = zone.get("Description")
        zone_names.append(description if isinstance(description, str) else "")

    return WorkoutMetadata(
        name=name_obj,
        description_html=_optional_text(details, "WorkoutDescription"),
        goal_html=_optional_text(details, "GoalDescription"),
        zone_names=tuple(zone_names),
    )


def _build_samples(raw: object) -> tuple[RawSample, ...]:
    if not isinstance(raw, list):
        raise WorkoutParseError("Field 'workoutData' must be an array")

    samples: list[RawSample] = []
    for i, point in enumerate(raw):
        if not isinstance(point, dict):
            raise WorkoutParseError(f"Sample {i + 1}: must be an object")
        offset = point.get("seconds")
        power = point.get("ftpPercent")
        if offset is None or power is None:
            raise WorkoutParseError(
                f"Sample {i + 1}: 'seconds' and 'ftpPercent' are required"
            )
        samples.append(RawSample(offset=offset, power_percent=power))
    return tuple(samples)


def _optional_text(details: dict, field_name: str) -> str:
    value = details.get(field_name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise WorkoutParseError(f"Field '{field_name}' must be a string")
    return value
