# settracker/workouts.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from settracker.schemas.logged_set import LoggedSet


@dataclass(frozen=True, slots=True)
class WorkoutOption:
    value: str
    label: str
    workout_type: str


@dataclass(frozen=True, slots=True)
class WorkoutGroup:
    id: str
    label: str
    emoji: str
    items: tuple[WorkoutOption, ...]


@dataclass(frozen=True, slots=True)
class FieldVisibility:
    show_weight: bool
    show_reps: bool
    show_duration: bool
    show_rest: bool


WORKOUT_GROUPS: tuple[WorkoutGroup, ...] = (
    WorkoutGroup("upper", "Upper", "💪", (
        WorkoutOption("bench press", "Bench press", "bench press"),
        WorkoutOption("should press", "Shoulder press", "should press"),
        WorkoutOption("rear delt fly", "Rear delt fly", "rear delt fly"),
        WorkoutOption("cable face pull", "Cable face pull", "cable face pull"),
    )),
    WorkoutGroup("lower", "Lower", "🦵", (
        WorkoutOption("squat", "Squat", "squat"),
        WorkoutOption("single leg squat", "Single leg squat", "single leg squat"),
        WorkoutOption("good morning", "Good morning", "good morning"),
        WorkoutOption("calf raises", "Calf raises", "calf raises"),
        WorkoutOption("calf raises (seated)", "Calf raises (seated)", "calf raises (seated)"),
    )),
    WorkoutGroup("power", "Power", "⚡️", (
        WorkoutOption("hang clean", "Hang clean", "hang clean"),
        WorkoutOption("clean-power", "Clean", "clean"),
        WorkoutOption("hang snatch", "Hang snatch", "hang snatch"),
        WorkoutOption("snatch", "Snatch", "snatch"),
    )),
    WorkoutGroup("core", "Core", "🧘", (
        WorkoutOption("leg lifts", "Leg lifts", "leg lifts"),
        WorkoutOption("plank", "Plank", "plank"),
        WorkoutOption("toe touches", "Toe touches", "toe touches"),
        WorkoutOption("bicycles", "Bicycles", "bicycles"),
    )),
    WorkoutGroup("bar", "Bar", "🤸", (
        WorkoutOption("pull up", "Pull ups", "pull up"),
        WorkoutOption("true bubka", "True bubka", "true bubka"),
        WorkoutOption("wipers", "Wipers", "wipers"),
        WorkoutOption("down pressure", "Down pressure", "down pressure"),
    )),
    WorkoutGroup("recover", "Recover", "♨️", (
        WorkoutOption("sauna", "Sauna", "sauna"),
    )),
    WorkoutGroup("supplement", "Supplement", "🧪", (
        WorkoutOption("creatine", "Creatine", "creatine"),
        WorkoutOption("protein", "Protein", "protein"),
    )),
)

_VALUE_TO_TYPE: dict[str, str] = {}
_TYPE_TO_VALUE: dict[str, str] = {}
_GROUP_BY_VALUE: dict[str, str] = {}
_GROUP_BY_TYPE: dict[str, str] = {}

for _group in WORKOUT_GROUPS:
    for _item in _group.items:
        _VALUE_TO_TYPE[_item.value] = _item.workout_type
        _TYPE_TO_VALUE[_item.workout_type] = _item.value
        _GROUP_BY_VALUE[_item.value] = _group.id
        _GROUP_BY_TYPE[_item.workout_type] = _group.id

DURATION_WORKOUTS = frozenset({"plank", "sauna"})
WEIGHTLESS_WORKOUTS = frozenset({
    "leg lifts",
    "toe touches",
    "bicycles",
    "true bubka",
    "wipers",
    "down pressure",
})


def workout_value_to_type(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    return _VALUE_TO_TYPE.get(value)


def workout_type_to_value(workout_type: Optional[str]) -> str:
    if not workout_type:
        return ""
    return _TYPE_TO_VALUE.get(workout_type, workout_type)


def get_workout_group_id_for_type(workout_type: Optional[str]) -> Optional[str]:
    if not workout_type:
        return None
    return _GROUP_BY_TYPE.get(workout_type)


def get_workout_group_id_for_value(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    return _GROUP_BY_VALUE.get(value)


def get_workout_group_by_id(group_id: Optional[str]) -> Optional[WorkoutGroup]:
    if not group_id:
        return None
    return next((g for g in WORKOUT_GROUPS if g.id == group_id), None)


def is_recovery_workout(workout_type: Optional[str]) -> bool:
    return get_workout_group_id_for_type(workout_type) == "recover"


def is_supplement_workout(workout_type: Optional[str]) -> bool:
    return get_workout_group_id_for_type(workout_type) == "supplement"


def get_workout_field_visibility(workout_type: Optional[str]) -> FieldVisibility:
    """Which inputs the set form shows for a given workout type."""
    if not workout_type:
        return FieldVisibility(show_weight=True, show_reps=True, show_duration=False, show_rest=True)

    if is_supplement_workout(workout_type):
        return FieldVisibility(show_weight=False, show_reps=False, show_duration=False, show_rest=False)

    show_duration = workout_type in DURATION_WORKOUTS
    return FieldVisibility(
        show_weight=not show_duration and workout_type not in WEIGHTLESS_WORKOUTS,
        show_reps=not show_duration,
        show_duration=show_duration,
        show_rest=not is_recovery_workout(workout_type),
    )


def _format_seconds(value: Optional[float]) -> str:
    if value is None or not math.isfinite(value):
        return ""
    value = int(value) if float(value).is_integer() else value
    if value >= 60 and value % 60 == 0:
        return f"{int(value // 60)} min"
    return f"{value}s"


def format_rest_seconds(value: Optional[float]) -> str:
    return _format_seconds(value)


def format_duration_seconds(value: Optional[float]) -> str:
    return _format_seconds(value)


def _format_weight(weight: float) -> str:
    return f"{int(weight)}" if float(weight).is_integer() else f"{weight:g}"


def build_set_stats(logged_set: "LoggedSet") -> list[str]:
    """Short labels shown on a set card, e.g. ``["BW", "8 reps", "1 min rest"]``."""
    vis = get_workout_field_visibility(logged_set.workout_type)
    stats: list[str] = []

    if vis.show_weight:
        if logged_set.weight_is_bodyweight:
            stats.append("BW")
        elif logged_set.weight_lb is not None:
            stats.append(f"{_format_weight(logged_set.weight_lb)} lb")
    if vis.show_reps and logged_set.reps is not None:
        stats.append(f"{logged_set.reps} reps")
    if vis.show_duration and logged_set.duration_seconds is not None:
        label = format_duration_seconds(logged_set.duration_seconds)
        if label:
            stats.append(f"{label} duration")
    if vis.show_rest and logged_set.rest_seconds is not None:
        label = format_rest_seconds(logged_set.rest_seconds)
        if label:
            stats.append(f"{label} rest")

    return stats


def format_workout_label(value: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in value.split(" "))
