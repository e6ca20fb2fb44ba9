"""Detection of alternating steady-state blocks (over-unders)."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Sequence

from zwoexport.workout.model import (
    Interval,
    OverUnder,
    OverUnderConversion,
    SteadyState,
    round_half_up,
)


MIN_RUN_LENGTH = 4
MIN_SPLIT_EXCESS_SEC = 10
LOOSE_POWER_EPSILON = 3

_POWER_EPSILON: dict[str, float] = {
    "strict": 0,
    "loose": LOOSE_POWER_EPSILON,
}


@dataclass
class _Run:
    members: list[SteadyState]
    rest: list[Interval] = field(default_factory=list)
    # Seconds left in rest[0] after splitting the last member, else 0.
    tail_excess_sec: int = 0


def convert_over_unders(
    intervals: Sequence[Interval], mode: OverUnderConversion
) -> list[Interval]:
    """Collapse runs of alternating steady-state intervals into over-unders.

    Runs are read left to right. Once a run is replaced, reading resumes
    right after the new ``OverUnder``.
    """
    if mode == "none":
        return list(intervals)
    if mode not in _POWER_EPSILON:
        raise ValueError(f"Unknown over-under conversion '{mode}'")
    epsilon = _POWER_EPSILON[mode]

    out: list[Interval] = []
    items: list[Interval] = list(intervals)
    cursor = 0
    while cursor < len(items):
        run = _collect_run(items, cursor, epsilon)
        if run is not None:
            leading, members, rest = _trim_run(
                run, before=out[-1] if out else None
            )
            if len(members) >= MIN_RUN_LENGTH:
                out.extend(leading)
                out.append(_coalesce(members))
                items = rest
                cursor = 0
                continue
        out.append(items[cursor])
        cursor += 1
    return out


def _matches(candidate: SteadyState, reference: SteadyState, epsilon: float) -> bool:
    return (
        candidate.duration_sec == reference.duration_sec
        and abs(candidate.power - reference.power) <= epsilon
    )


def _can_split(candidate: SteadyState, reference: SteadyState, epsilon: float) -> bool:
    return (
        abs(candidate.power - reference.power) <= epsilon
        and candidate.duration_sec - reference.duration_sec >= MIN_SPLIT_EXCESS_SEC
    )


def _collect_run(items: list[Interval], start: int, epsilon: float) -> _Run | None:
    """Gather the longest alternating run opening at ``start``.

    ``items`` is left untouched; a split member only appears in the
    returned run and its remainder at the front of ``rest``.
    """
    if start + 1 >= len(items):
        return None
    first, second = items[start], items[start + 1]
    if not isinstance(first, SteadyState) or not isinstance(second, SteadyState):
        return None

    pattern = (first, second)
    members: list[SteadyState] = [first, second]
    pending: deque[Interval] = deque(items[start + 2 :])
    tail_excess = 0
    while pending:
        candidate = pending[0]
        if not isinstance(candidate, SteadyState):
            break
        reference = pattern[len(members) % 2]
        if _matches(candidate, reference, epsilon):
            members.append(candidate)
            pending.popleft()
            tail_excess = 0
        elif _can_split(candidate, reference, epsilon):
            pending.popleft()
            tail_excess = candidate.duration_sec - reference.duration_sec
            members.append(
                SteadyState(duration_sec=reference.duration_sec, power=candidate.power)
            )
            pending.appendleft(
                SteadyState(duration_sec=tail_excess, power=candidate.power)
            )
        else:
            break
    return _Run(members=members, rest=list(pending), tail_excess_sec=tail_excess)


def _trim_run(
    run: _Run, *, before: Interval | None
) -> tuple[list[Interval], list[SteadyState], list[Interval]]:
    """Drop one end of an odd-length run.

    Members of a run share their parity's duration exactly, so the end to
    drop is the one sitting beside the larger duration excess; ties drop
    the last member.
    """
    members, rest = run.members, run.rest
    if len(members) % 2 == 0:
        return [], members, rest

    first, last = members[0], members[-1]
    after = rest[0] if rest else None
    head_excess = _excess(before, first)
    tail_excess = _excess(after, last)

    if head_excess > tail_excess:
        return [first], members[1:], rest

    if run.tail_excess_sec > 0:
        # Undo the split: the dropped piece rejoins its remainder.
        assert after is not None
        rejoined = SteadyState(
            duration_sec=last.duration_sec + after.total_duration_sec,
            power=last.power,
        )
        return [], members[:-1], [rejoined, *rest[1:]]
    return [], members[:-1], [last, *rest]


def _excess(neighbour: Interval | None, member: SteadyState) -> int:
    if neighbour is None:
        return 0
    return max(0, neighbour.total_duration_sec - member.duration_sec)


def _mean_power(members: Sequence[SteadyState]) -> float:
    powers = [member.power for member in members]
    if min(powers) == max(powers):
        return powers[0]
    return round_half_up(sum(powers) / len(powers))


def _coalesce(members: Sequence[SteadyState]) -> OverUnder:
    on, off = members[0::2], members[1::2]
    return OverUnder(
        repeat=len(on),
        on_duration_sec=on[0].duration_sec,
        off_duration_sec=off[0].duration_sec,
        on_power=_mean_power(on),
        off_power=_mean_power(off),
    )
