"""Terminal CLI entrypoint for the TrainerRoad to Zwift exporter."""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from dataclasses import replace
from pathlib import Path

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
from zwoexport.workout.parser import (
    WorkoutDetails,
    load_workout_details,
    parse_workout_details,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Export TrainerRoad workouts as Zwift .zwo files"
    )
    parser.add_argument(
        "--workout",
        default=None,
        help="TrainerRoad workout id or workout page URL to download",
    )
    parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Convert a saved workoutdetails JSON payload instead of downloading",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("."),
        help="Directory receiving the .zwo file",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the .zwo document instead of writing a file",
    )
    parser.add_argument(
        "--ramp",
        choices=sorted(RAMP_CONVERSION_DESCRIPTIONS),
        default=None,
        help="Ramp conversion (overrides stored settings)",
    )
    parser.add_argument(
        "--over-under",
        choices=sorted(OVER_UNDER_CONVERSION_DESCRIPTIONS),
        default=None,
        help="Over-under conversion (overrides stored settings)",
    )
    parser.add_argument(
        "--cookie",
        default=os.environ.get("TRAINERROAD_COOKIE"),
        help="Cookie header of a logged-in TrainerRoad session",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Settings file (default: ~/.trainerroad-zwo/settings.json)",
    )
    parser.add_argument(
        "--save-options",
        action="store_true",
        help="Store --ramp/--over-under as the new defaults",
    )
    parser.add_argument(
        "--reset-options",
        action="store_true",
        help="Restore default conversion options",
    )
    parser.add_argument(
        "--show-options",
        action="store_true",
        help="Print the conversion options in effect",
    )
    parser.add_argument(
        "--ui-web",
        action="store_true",
        help="Launch web UI (NiceGUI) with a ZWO download button",
    )
    parser.add_argument(
        "--web-host",
        default="127.0.0.1",
        help="Host bind for --ui-web",
    )
    parser.add_argument(
        "--web-port",
        type=int,
        default=8088,
        help="Port for --ui-web",
    )
    return parser


def resolve_options(
    args: argparse.Namespace, stored: ConversionOptions
) -> ConversionOptions:
    options = stored
    if args.ramp is not None:
        options = replace(options, ramp_conversion=args.ramp)
    if args.over_under is not None:
        options = replace(options, over_under_conversion=args.over_under)
    return options


def print_options(options: ConversionOptions) -> None:
    ramp = options.ramp_conversion
    over_under = options.over_under_conversion
    print(f"Ramp conversion:       {ramp:<8} {RAMP_CONVERSION_DESCRIPTIONS[ramp]}")
    print(
        f"Over-under conversion: {over_under:<8} "
        f"{OVER_UNDER_CONVERSION_DESCRIPTIONS[over_under]}"
    )


async def load_details(
    args: argparse.Namespace, workout_id: str | None
) -> WorkoutDetails:
    if workout_id is None:
        return load_workout_details(args.input)
    payload = await fetch_workout_details(
        workout_id, cookies=cookies_from_header(args.cookie)
    )
    return parse_workout_details(payload)


def run_export(args: argparse.Namespace, options: ConversionOptions) -> int:
    workout_id: str | None = None
    if args.input is None:
        try:
            workout_id = parse_workout_id(args.workout)
        except ValueError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    try:
        details = asyncio.run(load_details(args, workout_id))
        zwo = convert_workout(details, options)
    except (WorkoutSourceError, ValueError, OSError) as exc:
        # WorkoutParseError and InvalidInputData are ValueErrors.
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    if args.stdout:
        print(zwo.document)
        return 0

    args.output_dir.mkdir(parents=True, exist_ok=True)
    out = args.output_dir / zwo.download_name
    out.write_text(zwo.document, encoding="utf-8")
    print(f"Saved {out}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.ui_web:
        from zwoexport.ui.web_app import run_web_ui

        return run_web_ui(host=args.web_host, port=args.web_port, settings_path=args.settings)

    stored = (
        reset_options(args.settings) if args.reset_options else load_options(args.settings)
    )
    options = resolve_options(args, stored)

    if args.reset_options:
        print("Options restored to defaults")

    if args.save_options:
        saved = save_options(options, args.settings)
        print(f"Options saved to {saved}")
    if args.show_options:
        print_options(options)

    if args.workout is None and args.input is None:
        if args.save_options or args.reset_options or args.show_options:
            return 0
        parser.print_help()
        return 1

    return run_export(args, options)


if __name__ == "__main__":
    raise SystemExit(main())
