"""Zwift workout (.zwo) rendering."""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence
from xml.sax.saxutils import escape, quoteattr

from zwoexport.workout.model import Interval, OverUnder, Ramp, SteadyState, WorkoutMetadata


ZWO_EXTENSION = ".zwo"
AUTHOR = "TrainerRoad"
SPORT_TYPE = "bike"

_TAG_RE = re.compile(r"<[^>]*>")
_MISSING_SPACE_RE = re.compile(r"([.?!])(?=[A-Z])")
_WHITESPACE_RE = re.compile(r"\s+")
_HUNDREDTHS = Decimal("0.01")


class UnsupportedIntervalVariant(TypeError):
    """Raised when an interval has no .zwo element."""


@dataclass(frozen=True)
class ZwoFile:
    file_name: str
    document: str

    @property
    def download_name(self) -> str:
        return f"{self.file_name}{ZWO_EXTENSION}"


def html_to_text(markup: str) -> str:
    """Flatten rich-text markup into a single line of plain text."""
    text = html.unescape(_TAG_RE.sub("", markup or ""))
    # Paragraph breaks vanish with the tags: "Done.Next" -> "Done. Next".
    text = _MISSING_SPACE_RE.sub(r"\1 ", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def format_power(percent: float) -> str:
    """Fraction of FTP to two places, rounding halves up (75 -> "0.75")."""
    return str(Decimal(percent / 100).quantize(_HUNDREDTHS, rounding=ROUND_HALF_UP))


def render_interval(interval: Interval) -> str:
    if isinstance(interval, SteadyState):
        return (
            f'<SteadyState Duration="{interval.duration_sec}" '
            f'Power="{format_power(interval.power)}"/>'
        )
    if isinstance(interval, Ramp):
        return (
            f'<Ramp Duration="{interval.duration_sec}" '
            f'PowerLow="{format_power(interval.power_start)}" '
            f'PowerHigh="{format_power(interval.power_end)}"/>'
        )
    if isinstance(interval, OverUnder):
        return (
            f'<IntervalsT Repeat="{interval.repeat}" '
            f'OnDuration="{interval.on_duration_sec}" '
            f'OffDuration="{interval.off_duration_sec}" '
            f'OnPower="{format_power(interval.on_power)}" '
            f'OffPower="{format_power(interval.off_power)}"/>'
        )
    raise UnsupportedIntervalVariant(
        f"Cannot render interval of type {type(interval).__name__}"
    )


def render_zwo(metadata: WorkoutMetadata, intervals: Sequence[Interval]) -> ZwoFile:
    name = metadata.name.rstrip()
    description = html_to_text(metadata.description_html)
    goal = html_to_text(metadata.goal_html)
    body = f"{description}\n\n{goal}"
    elements = [render_interval(interval) for interval in intervals]

    tags = "".join(
        f"\n\t\t<tag name={quoteattr(zone)}/>"
        for zone in metadata.zone_names
        if zone.strip()
    )
    lines = [
        "<workout_file>",
        f"\t<author>{AUTHOR}</author>",
        f"\t<name>{escape(name)}</name>",
        f"\t<description>{_cdata(body)}</description>",
        f"\t<sportType>{SPORT_TYPE}</sportType>",
        f"\t<tags>{tags}\n\t</tags>",
        "\t<workout>",
        *(f"\t\t{element}" for element in elements),
        "\t</workout>",
        "</workout_file>",
    ]
    return ZwoFile(file_name=name, document="\n".join(lines))


def _cdata(text: str) -> str:
    return "<![CDATA[" + text.replace("]]>", "]]]]><![CDATA[>") + "]]>"
