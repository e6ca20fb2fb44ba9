"""Split a normalized sample series into steady-state and ramp intervals."""

from __future__ import annotations

from typing import Sequence

from zwoexport.workout.model import Ramp, Sample, SteadyState, round_half_up


SLOPE_EPSILON = 0.001


def slope_changed(samples: Sequence[Sample], index: int) -> bool:
    """Whether the slope into ``index`` differs from the slope out of it.

    The terminal sample counts as a change so it always closes the last
    interval.
    """
    if index >= len(samples) - 1:
        return True
    if index <= 0:
        return False
    before = samples[index - 1].slope
    after = samples[index].slope
    assert before is not None and after is not None
    return abs(before - after) > SLOPE_EPSILON


def segment_samples(samples: Sequence[Sample]) -> list[SteadyState | Ramp]:
    """Partition ``samples`` into back-to-back intervals.

    Sources record a sharp step one sample late, so a boundary sits at
    ``i`` only when the slope changes at ``i`` and is stable again at
    ``i + 1``. Sparse series hold each target between two points, so a
    segment longer than one second out of ``i`` also confirms the change.
    """
    if len(samples) < 2:
        return []

    intervals: list[SteadyState | Ramp] = []
    start = 0
    for i in range(1, len(samples) - 1):
        if slope_changed(samples, i) and (
            not slope_changed(samples, i + 1) or _is_held(samples, i)
        ):
            _close_interval(samples, start, i, intervals)
            start = i
    _close_interval(samples, start, len(samples) - 1, intervals)
    return intervals


def _is_held(samples: Sequence[Sample], index: int) -> bool:
    return samples[index + 1].time_sec - samples[index].time_sec > 1


def _close_interval(
    samples: Sequence[Sample],
    start: int,
    end: int,
    out: list[SteadyState | Ramp],
) -> None:
    duration = samples[end].time_sec - samples[start].time_sec
    if duration <= 0:
        return

    first = samples[start]
    power_start = first.power
    # Only the post-transition value is recorded, so extrapolate the end.
    power_end = max(0, round_half_up(power_start + duration * (first.slope or 0.0)))
    if round_half_up(power_start) == power_end:
        out.append(SteadyState(duration_sec=duration, power=power_start))
    else:
        out.append(
            Ramp(duration_sec=duration, power_start=power_start, power_end=power_end)
        )
