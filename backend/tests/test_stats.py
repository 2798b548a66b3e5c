from datetime import date

from settracker.schemas.logged_set import LoggedSet
from settracker.stats import (
    DateRange,
    build_daily_counts,
    build_max_weight_trend,
    build_volume_by_workout_type,
    filter_sets_by_range,
    sort_sets,
)


def mk(set_id, performed, **kw):
    return LoggedSet(
        id=set_id,
        performed_at_iso=performed,
        created_at_iso="2026-01-01T00:00:00.000Z",
        updated_at_iso="2026-01-01T00:00:00.000Z",
        **kw,
    )


SETS = [
    mk("a", "2026-01-08T20:00:00.000Z", workout_type="bench press", weight_lb=135, reps=8),
    mk("b", "2026-01-08T21:00:00.000Z", workout_type="bench press", weight_lb=155, reps=5),
    mk("c", "2026-01-10T18:00:00.000Z", workout_type="bench press", weight_lb=145, reps=5),
    mk("d", "2026-01-10T18:30:00.000Z", workout_type="pull up", weight_is_bodyweight=True, reps=10),
    mk("e", "2026-01-09T07:30:00.000Z", workout_type="squat", weight_lb=225, reps=3),  # Jan 8 PT
    mk("f", None, workout_type="squat", weight_lb=315, reps=1),
]

JAN_8_TO_10 = DateRange(start=date(2026, 1, 8), end=date(2026, 1, 10))


def test_sort_sets_newest_first_falls_back_to_created():
    ordered = [s.id for s in sort_sets(SETS)]
    assert ordered[0] == "d"
    assert ordered[-1] == "f"


def test_filter_by_range_uses_pt_days():
    only_8th = filter_sets_by_range(SETS, DateRange(start=date(2026, 1, 8)))
    assert {s.id for s in only_8th} == {"a", "b", "e"}
    assert filter_sets_by_range(SETS, None) is SETS


def test_daily_counts_cover_every_day():
    counts = build_daily_counts(SETS, JAN_8_TO_10)
    assert counts == [
        {"date": "Jan 8", "dayKey": "2026-01-08", "count": 3},
        {"date": "Jan 9", "dayKey": "2026-01-09", "count": 0},
        {"date": "Jan 10", "dayKey": "2026-01-10", "count": 2},
    ]
    assert build_daily_counts(SETS, DateRange()) == []


def test_volume_skips_bodyweight_and_keeps_catalog_order():
    volume = build_volume_by_workout_type(SETS)
    assert volume == [
        {"workoutType": "bench press", "volume": 135 * 8 + 155 * 5 + 145 * 5},
        {"workoutType": "squat", "volume": 225 * 3 + 315 * 1},
    ]


def test_max_weight_trend():
    trend = build_max_weight_trend(SETS, JAN_8_TO_10, "bench press")
    assert [t["maxWeight"] for t in trend] == [155, None, 145]
    assert build_max_weight_trend(SETS, None, "bench press") == []


def test_trends_endpoint(client):
    for s in SETS:
        client.put("/api/sets", json={"sets": [s.model_dump(by_alias=True)]})
    r = client.get("/api/trends", params={"from": "2026-01-08", "to": "2026-01-10", "workoutType": "squat"})
    assert r.status_code == 200, r.text
    body = r.json()
    assert [d["count"] for d in body["dailyCounts"]] == [3, 0, 2]
    assert [t["maxWeight"] for t in body["maxWeightTrend"]] == [225, None, None]
    assert {v["workoutType"] for v in body["volumeByWorkoutType"]} == {"bench press", "squat"}


def test_trends_endpoint_rejects_unknown_workout(client):
    r = client.get("/api/trends", params={"workoutType": "jazzercise"})
    assert r.status_code == 400
