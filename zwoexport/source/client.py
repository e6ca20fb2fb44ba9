"""TrainerRoad workout-details API client."""

from __future__ import annotations

import re
from typing import Any

import httpx


WORKOUT_DETAILS_URL = "https://www.trainerroad.com/api/workoutdetails/{workout_id}"

_WORKOUT_ID_RE = re.compile(r"^(\d+)")


class WorkoutSourceError(RuntimeError):
    """Raised when workout details cannot be retrieved."""


def parse_workout_id(text: str) -> str:
    """Extract the numeric id from a bare id or a workout page URL.

    ``https://www.trainerroad.com/app/cycling/workouts/5516-mono`` -> ``"5516"``
    """
    path = re.split(r"[?#]", text.strip(), maxsplit=1)[0].rstrip("/")
    last = path.split("/")[-1]
    match = _WORKOUT_ID_RE.match(last)
    if match is None:
        raise ValueError(f"No workout id found in '{text}'")
    return match.group(1)


async def fetch_workout_details(
    workout_id: str,
    *,
    cookies: dict[str, str] | None = None,
    client: httpx.AsyncClient | None = None,
    timeout: float = 10.0,
) -> dict[str, Any]:
    url = WORKOUT_DETAILS_URL.format(workout_id=workout_id)
    if client is None:
        async with httpx.AsyncClient(timeout=timeout, cookies=cookies) as owned:
            return await _get_json(owned, url)
    return await _get_json(client, url)


async def _get_json(client: httpx.AsyncClient, url: str) -> dict[str, Any]:
    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise WorkoutSourceError(
            f"Error fetching {url}; status: {exc.response.status_code}"
        ) from exc
    except httpx.RequestError as exc:
        raise WorkoutSourceError(f"Error fetching {url}: {exc}") from exc

    try:
        data = response.json()
    except ValueError as exc:
        raise WorkoutSourceError(f"Invalid JSON from {url}") from exc
    if not isinstance(data, dict):
        raise WorkoutSourceError(f"Unexpected payload from {url}")
    return data


def cookies_from_header(header: str | None) -> dict[str, str] | None:
    """Turn a ``name=value; other=value`` Cookie header into a dict."""
    if not header:
        return None
    out: dict[str, str] = {}
    for part in header.split(";"):
        name, sep, value = part.strip().partition("=")
        if sep and name:
            out[name] = value
    return out or None
