"""Validation and time correction of raw target-power samples."""

from __future__ import annotations

import math
from typing import Sequence

from zwoexport.workout.model import RawSample, Sample


class InvalidInputData(ValueError):
    """Raised when a sample series cannot be converted."""


def normalize_samples(
    raw: Sequence[RawSample], *, units_per_second: int = 1000
) -> list[Sample]:
    """Convert raw samples to whole seconds and annotate forward slopes.

    TrainerRoad reports offsets in milliseconds that are always a whole
    number of seconds; ``units_per_second`` is the number of raw offset
    units in one second (``1`` for data already in seconds).
    """
    if units_per_second <= 0:
        raise ValueError("units_per_second must be > 0")
    if len(raw) < 2:
        raise InvalidInputData(
            f"Workout needs at least 2 samples, got {len(raw)}"
        )

    times: list[int] = []
    powers: list[float] = []
    for i, sample in enumerate(raw):
        time_sec = _parse_offset(sample.offset, units_per_second, index=i)
        power = _parse_number(sample.power_percent, field_name="power", index=i)
        if power < 0:
            raise InvalidInputData(f"Sample {i + 1}: power must be >= 0")
        if times and time_sec <= times[-1]:
            raise InvalidInputData(
                f"Sample {i + 1}: time {time_sec}s is not after {times[-1]}s"
            )
        times.append(time_sec)
        powers.append(power)

    out: list[Sample] = []
    for i, (time_sec, power) in enumerate(zip(times, powers)):
        slope: float | None = None
        if i + 1 < len(times):
            slope = (powers[i + 1] - power) / (times[i + 1] - time_sec)
        out.append(Sample(time_sec=time_sec, power=power, slope=slope))
    return out


def _parse_offset(raw: object, units_per_second: int, *, index: int) -> int:
    value = _parse_number(raw, field_name="time", index=index)
    if value < 0:
        raise InvalidInputData(f"Sample {index + 1}: time must be >= 0")
    seconds = value / units_per_second
    if not float(seconds).is_integer():
        raise InvalidInputData(
            f"Sample {index + 1}: time {value} is not a whole number of seconds"
        )
    return int(seconds)


def _parse_number(raw: object, *, field_name: str, index: int) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise InvalidInputData(f"Sample {index + 1}: invalid {field_name}")
    if not math.isfinite(raw):
        raise InvalidInputData(f"Sample {index + 1}: invalid {field_name}")
    return raw
