"""NiceGUI web UI for exporting TrainerRoad workouts."""

from __future__ import annotations

from pathlib import Path

from nicegui import ui

from zwoexport.source.client import (
    WorkoutSourceError,
    cookies_from_header,
    fetch_workout_details,
    parse_workout_id,
)
from zwoexport.workout.converter import convert_workout
from zwoexport.workout.model import ConversionOptions
from zwoexport.workout.options_store import (
    OVER_UNDER_CONVERSION_DESCRIPTIONS,
    RAMP_CONVERSION_DESCRIPTIONS,
    load_options,
    reset_options,
    save_options,
)
from zwoexport.workout.parser import parse_workout_details
from zwoexport.workout.zwo import ZwoFile


async def export_workout(
    workout_ref: str,
    options: ConversionOptions,
    cookies: dict[str, str] | None = None,
) -> ZwoFile:
    workout_id = parse_workout_id(workout_ref)
    payload = await fetch_workout_details(workout_id, cookies=cookies)
    return convert_workout(parse_workout_details(payload), options)


def run_web_ui(
    host: str = "127.0.0.1",
    port: int = 8088,
    settings_path: Path | None = None,
) -> int:
    options = load_options(settings_path)

    with ui.column().classes("w-full max-w-2xl mx-auto gap-4 p-4"):
        ui.label("TrainerRoad to Zwift").classes("text-2xl font-bold")
        with ui.row().classes("w-full items-end gap-2"):
            workout_input = ui.input(
                "Workout id or URL",
                placeholder="https://www.trainerroad.com/app/cycling/workouts/5516-mono",
            ).classes("grow")
            zwo_btn = ui.button("ZWO").props("color=primary")
        cookie_input = ui.input(
            "Session cookie (optional)", password=True, password_toggle_button=True
        ).classes("w-full")

        ui.separator()
        ramp_select = ui.select(
            list(RAMP_CONVERSION_DESCRIPTIONS),
            value=options.ramp_conversion,
            label="Ramp conversion",
        ).classes("min-w-[200px]")
        ramp_desc = ui.label(RAMP_CONVERSION_DESCRIPTIONS[options.ramp_conversion])
        ou_select = ui.select(
            list(OVER_UNDER_CONVERSION_DESCRIPTIONS),
            value=options.over_under_conversion,
            label="Over-under conversion",
        ).classes("min-w-[200px]")
        ou_desc = ui.label(
            OVER_UNDER_CONVERSION_DESCRIPTIONS[options.over_under_conversion]
        )
        with ui.row().classes("gap-2"):
            save_btn = ui.button("Save")
            defaults_btn = ui.button("Restore defaults").props("outline")

    def current_options() -> ConversionOptions:
        return ConversionOptions(
            ramp_conversion=ramp_select.value,
            over_under_conversion=ou_select.value,
        )

    def show_options(restored: ConversionOptions) -> None:
        ramp_select.value = restored.ramp_conversion
        ou_select.value = restored.over_under_conversion

    def on_ramp_change() -> None:
        ramp_desc.text = RAMP_CONVERSION_DESCRIPTIONS.get(str(ramp_select.value), "")

    def on_ou_change() -> None:
        ou_desc.text = OVER_UNDER_CONVERSION_DESCRIPTIONS.get(str(ou_select.value), "")

    def on_save() -> None:
        save_options(current_options(), settings_path)
        ui.notify("Options saved.", color="positive")

    def on_restore_defaults() -> None:
        show_options(reset_options(settings_path))
        ui.notify("Default options restored.", color="positive")

    async def on_zwo() -> None:
        ref = str(workout_input.value or "").strip()
        if not ref:
            ui.notify("Enter a workout id or URL", color="negative")
            return

        cookies = cookies_from_header(str(cookie_input.value or "").strip())
        zwo_btn.disable()
        try:
            zwo = await export_workout(ref, current_options(), cookies)
        except (WorkoutSourceError, ValueError) as exc:
            ui.notify(f"ZWO export failure: {exc}", color="negative")
            return
        finally:
            zwo_btn.enable()
        ui.download(zwo.document.encode("utf-8"), filename=zwo.download_name)

    ramp_select.on_value_change(lambda _: on_ramp_change())
    ou_select.on_value_change(lambda _: on_ou_change())
    save_btn.on_click(on_save)
    defaults_btn.on_click(on_restore_defaults)
    zwo_btn.on_click(on_zwo)

    ui.run(host=host, port=port, reload=False, title="TrainerRoad to Zwift")
    return 0
