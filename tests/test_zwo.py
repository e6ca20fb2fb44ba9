from __future__ import annotations

import pytest

from zwoexport.workout.model import OverUnder, Ramp, SteadyState, WorkoutMetadata
from zwoexport.workout.zwo import (
    UnsupportedIntervalVariant,
    format_power,
    html_to_text,
    render_interval,
    render_zwo,
)


def test_render_steady_state() -> None:
    assert (
        render_interval(SteadyState(300, 75))
        == '<SteadyState Duration="300" Power="0.75"/>'
    )


def test_render_ramp_and_over_under() -> None:
    assert (
        render_interval(Ramp(600, 45, 75))
        == '<Ramp Duration="600" PowerLow="0.45" PowerHigh="0.75"/>'
    )
    assert render_interval(OverUnder(3, 120, 60, 105, 95)) == (
        '<IntervalsT Repeat="3" OnDuration="120" OffDuration="60" '
        'OnPower="1.05" OffPower="0.95"/>'
    )


def test_format_power() -> None:
    assert format_power(100) == "1.00"
    assert format_power(0) == "0.00"
    assert format_power(62) == "0.62"


def test_format_power_rounds_halves_up() -> None:
    assert format_power(62.5) == "0.63"
    assert format_power(12.5) == "0.13"
    assert format_power(87.5) == "0.88"
    assert render_interval(SteadyState(60, 62.5)) == '<SteadyState Duration="60" Power="0.63"/>'


def test_unsupported_variant_is_rejected() -> None:
    with pytest.raises(UnsupportedIntervalVariant):
        render_interval(object())  # type: ignore[arg-type]
    with pytest.raises(UnsupportedIntervalVariant):
        render_zwo(WorkoutMetadata(name="Bad"), [SteadyState(60, 50), "x"])  # type: ignore[list-item]


def test_html_to_text() -> None:
    assert (
        html_to_text("<p>Finish strong.</p><p>Then <b>rest</b>!</p>")
        == "Finish strong. Then rest!"
    )
    assert html_to_text("Ready?Go!Now.\n\n  done") == "Ready? Go! Now. done"
    assert html_to_text("Tom &amp; Jerry") == "Tom & Jerry"
    assert html_to_text("") == ""


def test_render_full_document() -> None:
    metadata = WorkoutMetadata(
        name="Mono  ",
        description_html="<p>Steady work.</p><p>Keep cadence high.</p>",
        goal_html="Build endurance.",
        zone_names=("Sweet Spot", "", "Threshold"),
    )

    zwo = render_zwo(metadata, [SteadyState(300, 75), Ramp(120, 50, 70)])

    assert zwo.file_name == "Mono"
    assert zwo.download_name == "Mono.zwo"
    assert zwo.document == (
        "<workout_file>\n"
        "\t<author>TrainerRoad</author>\n"
        "\t<name>Mono</name>\n"
        "\t<description><![CDATA[Steady work. Keep cadence high.\n\n"
        "Build endurance.]]></description>\n"
        "\t<sportType>bike</sportType>\n"
        "\t<tags>\n"
        '\t\t<tag name="Sweet Spot"/>\n'
        '\t\t<tag name="Threshold"/>\n'
        "\t</tags>\n"
        "\t<workout>\n"
        '\t\t<SteadyState Duration="300" Power="0.75"/>\n'
        '\t\t<Ramp Duration="120" PowerLow="0.50" PowerHigh="0.70"/>\n'
        "\t</workout>\n"
        "</workout_file>"
    )


def test_render_without_zones_or_intervals() -> None:
    zwo = render_zwo(WorkoutMetadata(name="Empty"), [])

    assert "\t<tags>\n\t</tags>\n" in zwo.document
    assert "\t<workout>\n\t</workout>\n" in zwo.document


def test_markup_in_names_is_escaped() -> None:
    zwo = render_zwo(
        WorkoutMetadata(name="Up & Down", zone_names=('VO2 "Max"',)), []
    )

    assert "<name>Up &amp; Down</name>" in zwo.document
    assert "<tag name='VO2 \"Max\"'/>" in zwo.document
    assert zwo.download_name == "Up & Down.zwo"
