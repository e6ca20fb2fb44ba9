"""Workout domain models."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Literal


RampConversion = Literal["none", "internal", "all"]
OverUnderConversion = Literal["strict", "loose", "none"]


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going toward +infinity."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class RawSample:
    offset: float
    power_percent: float


@dataclass(frozen=True)
class Sample:
    time_sec: int
    power: float
    slope: float | None = None


@dataclass(frozen=True)
class SteadyState:
    duration_sec: int
    power: float

    def __post_init__(self) -> None:
        if self.duration_sec <= 0:
            raise ValueError("SteadyState duration must be > 0")
        if self.power < 0:
            raise ValueError("SteadyState power must be >= 0")

    @property
    def total_duration_sec(self) -> int:
        return self.duration_sec


@dataclass(frozen=True)
class Ramp:
    duration_sec: int
    power_start: float
    power_end: float

    def __post_init__(self) -> None:
        if self.duration_sec <= 0:
            raise ValueError("Ramp duration must be > 0")
        if self.power_start < 0 or self.power_end < 0:
            raise ValueError("Ramp powers must be >= 0")
        if self.power_start == self.power_end:
            raise ValueError("Ramp start and end power must differ")

    @property
    def total_duration_sec(self) -> int:
        return self.duration_sec

    @property
    def midpoint_power(self) -> int:
        return round_half_up((self.power_start + self.power_end) / 2)


@dataclass(frozen=True)
class OverUnder:
    repeat: int
    on_duration_sec: int
    off_duration_sec: int
    on_power: float
    off_power: float

    def __post_init__(self) -> None:
        if self.repeat < 2:
            raise ValueError("OverUnder repeat must be >= 2")
        if self.on_duration_sec <= 0 or self.off_duration_sec <= 0:
            raise ValueError("OverUnder durations must be > 0")
        if self.on_power < 0 or self.off_power < 0:
            raise ValueError("OverUnder powers must be >= 0")

    @property
    def total_duration_sec(self) -> int:
        return self.repeat * (self.on_duration_sec + self.off_duration_sec)


Interval = SteadyState | Ramp | OverUnder


def total_duration_sec(intervals: Iterable[Interval]) -> int:
    return sum(interval.total_duration_sec for interval in intervals)


@dataclass(frozen=True)
class WorkoutMetadata:
    name: str
    description_html: str = ""
    goal_html: str = ""
    zone_names: tuple[str, ...] = ()


@dataclass(frozen=True)
class ConversionOptions:
    ramp_conversion: RampConversion = "none"
    over_under_conversion: OverUnderConversion = "strict"
