from typing import Literal, get_args

WorkoutType = Literal[
    "bench press",
    "should press",
    "hang clean",
    "clean",
    "squat",
    "snatch",
    "hang snatch",
    "pull up",
    "single leg squat",
    "rear delt fly",
    "cable face pull",
    "good morning",
    "calf raises",
    "calf raises (seated)",
    "leg lifts",
    "plank",
    "toe touches",
    "bicycles",
    "true bubka",
    "wipers",
    "down pressure",
    "sauna",
    "creatine",
    "protein",
]

WORKOUT_TYPES: tuple[str, ...] = get_args(WorkoutType)

# Local store keys
STORAGE_KEY = "sets-tracker:v1"
DEVICE_ID_KEY = "sets-tracker:device-id"
PENDING_SYNC_KEY = "sets-tracker:pending-sync"
PENDING_DELETE_KEY = "sets-tracker:pending-deletes"

# Single-tenant partition written to every row
SHARED_TENANT = "shared"

# Columns added after the first table revision; writes retry without them
OPTIONAL_COLUMNS = ("duration_seconds", "weight_is_bodyweight")
