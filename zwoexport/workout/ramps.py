"""Ramp flattening and steady-state merging."""

from __future__ import annotations

from typing import Sequence

from zwoexport.workout.model import Interval, Ramp, RampConversion, SteadyState


def convert_ramps(
    intervals: Sequence[Interval], mode: RampConversion
) -> list[Interval]:
    """Replace ramps with steady-state intervals at their midpoint power.

    ``internal`` keeps a ramp that opens or closes the workout (warmup and
    cooldown).
    """
    if mode not in ("none", "internal", "all"):
        raise ValueError(f"Unknown ramp conversion '{mode}'")
    if mode == "none":
        return list(intervals)

    last = len(intervals) - 1
    out: list[Interval] = []
    for i, interval in enumerate(intervals):
        keep = mode == "internal" and i in (0, last)
        if isinstance(interval, Ramp) and not keep:
            out.append(
                SteadyState(
                    duration_sec=interval.duration_sec,
                    power=interval.midpoint_power,
                )
            )
        else:
            out.append(interval)
    return out


def merge_steady_states(intervals: Sequence[Interval]) -> list[Interval]:
    """Fuse neighbouring steady-state intervals that hold the same power."""
    out: list[Interval] = []
    for interval in intervals:
        previous = out[-1] if out else None
        if (
            isinstance(interval, SteadyState)
            and isinstance(previous, SteadyState)
            and previous.power == interval.power
        ):
            out[-1] = SteadyState(
                duration_sec=previous.duration_sec + interval.duration_sec,
                power=previous.power,
            )
        else:
            out.append(interval)
    return out
