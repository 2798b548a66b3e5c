import json
from typing import Any, Iterable

from settracker.schemas.logged_set import LoggedSet
from settracker.timeutil import PT_TIMEZONE, to_pt_date_input, to_pt_time_input

EXPORT_SCHEMA_VERSION = "sets_export_v1"


def _export_set(s: LoggedSet) -> dict[str, Any]:
    source_iso = s.performed_at_iso or s.created_at_iso
    return {
        "id": s.id,
        "workout_type": s.workout_type,
        "weight_lb": None if s.weight_is_bodyweight else s.weight_lb,
        "weight_is_bodyweight": s.weight_is_bodyweight,
        "reps": s.reps,
        "rest_seconds": s.rest_seconds,
        "duration_seconds": s.duration_seconds,
        "date_pt": to_pt_date_input(source_iso),
        "time_pt": to_pt_time_input(source_iso),
        "date_source": "performed" if s.performed_at_iso else "created",
        "performed_iso": s.performed_at_iso,
        "created_iso": s.created_at_iso,
    }


def build_sets_export(sets: Iterable[LoggedSet]) -> dict[str, Any]:
    """The clipboard document, with explicit timezone and formats for pasting into other tools."""
    exported = [_export_set(s) for s in sets]
    return {
        "schema_version": EXPORT_SCHEMA_VERSION,
        "timezone": PT_TIMEZONE,
        "date_format": "YYYY-MM-DD",
        "time_format": "HH:mm",
        "count": len(exported),
        "sets": exported,
    }


def format_sets_for_clipboard(sets: Iterable[LoggedSet]) -> str:
    return json.dumps(build_sets_export(sets), ensure_ascii=False)
