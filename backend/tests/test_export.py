import json

from settracker.export import format_sets_for_clipboard
from settracker.schemas.logged_set import LoggedSet
from settracker.timeutil import pt_date_to_iso

SETS = [
    LoggedSet(
        id="set-1",
        workout_type="pull up",
        weight_lb=None,
        weight_is_bodyweight=True,
        reps=10,
        rest_seconds=90,
        duration_seconds=None,
        performed_at_iso="2026-01-08T20:35:00.000Z",
        created_at_iso="2026-01-08T20:00:00.000Z",
        updated_at_iso="2026-01-08T20:10:00.000Z",
    ),
    LoggedSet(
        id="set-2",
        workout_type="plank",
        weight_lb=None,
        weight_is_bodyweight=False,
        reps=None,
        rest_seconds=60,
        duration_seconds=120,
        performed_at_iso=None,
        created_at_iso="2026-01-09T15:15:00.000Z",
        updated_at_iso="2026-01-09T15:20:00.000Z",
    ),
]


def test_formats_json_with_pt_date_and_time():
    payload = json.loads(format_sets_for_clipboard(SETS))

    assert payload["schema_version"] == "sets_export_v1"
    assert payload["timezone"] == "America/Los_Angeles"
    assert payload["date_format"] == "YYYY-MM-DD"
    assert payload["time_format"] == "HH:mm"
    assert payload["count"] == 2

    assert payload["sets"][0] == {
        "id": "set-1",
        "workout_type": "pull up",
        "weight_lb": None,
        "weight_is_bodyweight": True,
        "reps": 10,
        "rest_seconds": 90,
        "duration_seconds": None,
        "date_pt": "2026-01-08",
        "time_pt": "12:35",
        "date_source": "performed",
        "performed_iso": "2026-01-08T20:35:00.000Z",
        "created_iso": "2026-01-08T20:00:00.000Z",
    }
    assert payload["sets"][1]["date_pt"] == "2026-01-09"
    assert payload["sets"][1]["time_pt"] == "07:15"
    assert payload["sets"][1]["date_source"] == "created"
    assert payload["sets"][1]["performed_iso"] is None


def test_exported_pt_fields_round_trip():
    payload = json.loads(format_sets_for_clipboard(SETS))
    for exported, original in zip(payload["sets"], SETS):
        source = original.performed_at_iso or original.created_at_iso
        assert pt_date_to_iso(exported["date_pt"], exported["time_pt"]) == source


def test_empty_export():
    payload = json.loads(format_sets_for_clipboard([]))
    assert payload["count"] == 0
    assert payload["sets"] == []
