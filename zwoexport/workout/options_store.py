"""Conversion options stored locally."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import cast

from zwoexport.workout.model import (
    ConversionOptions,
    OverUnderConversion,
    RampConversion,
)


RAMP_CONVERSION_DESCRIPTIONS: dict[str, str] = {
    "none": "Leave the ramps alone.",
    "internal": "Leave only warmup and/or cooldown ramps.",
    "all": "Convert all ramps to steady-state intervals.",
}

OVER_UNDER_CONVERSION_DESCRIPTIONS: dict[str, str] = {
    "strict": "Over-under conversion requires power targets to match exactly.",
    "loose": "Over-under conversion may modify power targets slightly.",
    "none": "No over-under intervals will be created.",
}

DEFAULT_OPTIONS = ConversionOptions()


def _default_settings_path() -> Path:
    return Path.home() / ".trainerroad-zwo" / "settings.json"


def sanitize_options(raw: object) -> ConversionOptions:
    """Build options from stored data, replacing unknown values with defaults."""
    data = raw if isinstance(raw, dict) else {}

    ramp = data.get("ramp_conversion")
    if ramp not in RAMP_CONVERSION_DESCRIPTIONS:
        print(f"Warning: invalid ramp_conversion {ramp!r}, using default")
        ramp = DEFAULT_OPTIONS.ramp_conversion

    over_under = data.get("over_under_conversion")
    if over_under not in OVER_UNDER_CONVERSION_DESCRIPTIONS:
        print(f"Warning: invalid over_under_conversion {over_under!r}, using default")
        over_under = DEFAULT_OPTIONS.over_under_conversion

    return ConversionOptions(
        ramp_conversion=cast(RampConversion, ramp),
        over_under_conversion=cast(OverUnderConversion, over_under),
    )


def load_options(path: Path | None = None) -> ConversionOptions:
    target = path or _default_settings_path()
    if not target.exists():
        return DEFAULT_OPTIONS
    try:
        payload = json.loads(target.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        print(f"Warning: unreadable settings file {target} ({exc}), using defaults")
        return DEFAULT_OPTIONS
    stored = payload.get("options") if isinstance(payload, dict) else None
    if stored is None:
        return DEFAULT_OPTIONS
    return sanitize_options(stored)


def save_options(options: ConversionOptions, path: Path | None = None) -> Path:
    target = path or _default_settings_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    clean = sanitize_options(asdict(options))
    payload = {"options": asdict(clean)}
    target.write_text(json.dumps(payload, ensure_ascii=True, indent=2), encoding="utf-8")
    return target


def reset_options(path: Path | None = None) -> ConversionOptions:
    """Forget stored options and return the defaults."""
    target = path or _default_settings_path()
    if target.exists():
        try:
            payload = json.loads(target.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}
        payload.pop("options", None)
        target.write_text(json.dumps(payload, ensure_ascii=True, indent=2), encoding="utf-8")
    return DEFAULT_OPTIONS
