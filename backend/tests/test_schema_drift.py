import pytest
from sqlalchemy import event
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from conftest import make_set_payload
from settracker.repositories.set_repo import SetRepository, missing_optional_column
from settracker.schemas.logged_set import LoggedSet


def count_statements(engine, verb):
    seen = []

    @event.listens_for(engine, "before_cursor_execute")
    def _capture(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith(verb):
            seen.append(statement)

    return seen


@pytest.mark.parametrize("message, expected", [
    ("Could not find the 'duration_seconds' column of 'sets' in the schema cache", "duration_seconds"),
    ('column "weight_is_bodyweight" of relation "sets" does not exist', "weight_is_bodyweight"),
    ("table sets has no column named duration_seconds", "duration_seconds"),
    ("no such column: weight_is_bodyweight", "weight_is_bodyweight"),
    ('column "reps" of relation "sets" does not exist', None),
    ("duplicate key value violates unique constraint on duration_seconds", None),
    ("", None),
])
def test_missing_optional_column(message, expected):
    assert missing_optional_column(message) == expected


def test_post_retries_without_missing_duration_column(legacy_client, legacy_engine):
    inserts = count_statements(legacy_engine, "INSERT")
    r = legacy_client.post("/api/sets", json=make_set_payload(
        workoutType="plank", weightLb=None, reps=None, restSeconds=30, durationSeconds=90,
        performedAtISO="2026-01-09T20:00:00.000Z",
    ))
    assert r.status_code == 201, r.text
    assert len(inserts) == 2
    assert "duration_seconds" not in inserts[-1]
    body = r.json()
    assert body["workoutType"] == "plank"
    assert body["durationSeconds"] is None
    assert body["restSeconds"] == 30


def test_post_strips_each_missing_column_once(first_revision_client):
    r = first_revision_client.post("/api/sets", json=make_set_payload(durationSeconds=60, weightIsBodyweight=True))
    assert r.status_code == 201, r.text
    assert r.json()["weightIsBodyweight"] is False


def test_patch_retries_without_missing_column(legacy_client):
    created = legacy_client.post("/api/sets", json=make_set_payload()).json()
    r = legacy_client.patch("/api/sets", json={"id": created["id"], "reps": 12, "durationSeconds": 45})
    assert r.status_code == 200, r.text
    assert r.json()["reps"] == 12


def test_patch_missing_set_on_legacy_table_is_404(legacy_client):
    r = legacy_client.patch("/api/sets", json={"id": "nope", "durationSeconds": 45})
    assert r.status_code == 404


def test_bulk_sync_on_legacy_table(legacy_client):
    s = {
        "id": "phone-1",
        "workoutType": "sauna",
        "durationSeconds": 900,
        "createdAtISO": "2026-01-09T03:00:00.000Z",
        "updatedAtISO": "2026-01-09T03:00:00.000Z",
    }
    r = legacy_client.put("/api/sets", json={"sets": [s], "deletedIds": []})
    assert r.status_code == 200, r.text
    assert [x["id"] for x in r.json()] == ["phone-1"]


def test_unrelated_store_errors_are_not_retried(engine):
    db = sessionmaker(bind=engine)()
    repo = SetRepository(db)
    logged = LoggedSet(id="dup", created_at_iso="2026-01-01T00:00:00Z", updated_at_iso="2026-01-01T00:00:00Z")
    repo.create(logged)
    inserts = count_statements(engine, "INSERT")
    with pytest.raises(IntegrityError):
        repo.create(logged)
    assert len(inserts) == 1
    db.close()


def test_store_error_surfaces_as_500(client, engine):
    with engine.begin() as conn:
        conn.exec_driver_sql("DROP TABLE sets")
    r = client.get("/api/sets")
    assert r.status_code == 500
    assert "sets" in r.json()["error"]
