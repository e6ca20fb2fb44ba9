"""Conversion pipeline from raw samples to a .zwo document."""

from __future__ import annotations

from typing import Sequence

from zwoexport.workout.model import ConversionOptions, Interval, RawSample
from zwoexport.workout.over_under import convert_over_unders
from zwoexport.workout.parser import WorkoutDetails
from zwoexport.workout.ramps import convert_ramps, merge_steady_states
from zwoexport.workout.samples import normalize_samples
from zwoexport.workout.segmenter import segment_samples
from zwoexport.workout.zwo import ZwoFile, render_zwo


def build_intervals(
    raw: Sequence[RawSample],
    options: ConversionOptions,
    *,
    units_per_second: int = 1000,
) -> list[Interval]:
    samples = normalize_samples(raw, units_per_second=units_per_second)
    intervals: list[Interval] = list(segment_samples(samples))
    intervals = convert_ramps(intervals, options.ramp_conversion)
    intervals = merge_steady_states(intervals)
    return convert_over_unders(intervals, options.over_under_conversion)


def convert_workout(
    details: WorkoutDetails,
    options: ConversionOptions,
    *,
    units_per_second: int = 1000,
) -> ZwoFile:
    intervals = build_intervals(
        details.samples, options, units_per_second=units_per_second
    )
    return render_zwo(details.metadata, intervals)
