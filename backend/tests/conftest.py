"""
Run the API against in-memory SQLite by overriding the get_db dependency.
`legacy_client` points at a `sets` table created before duration_seconds
was added, the way an un-migrated deployment looks.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from settracker import models  # noqa: F401  # registers SetRow on Base.metadata
from settracker.db import Base, get_db
from settracker.main import app

LEGACY_SETS_DDL = """
CREATE TABLE sets (
    id VARCHAR(64) PRIMARY KEY,
    device_id VARCHAR(64) NOT NULL,
    workout_type VARCHAR(64),
    weight_lb FLOAT,
    weight_is_bodyweight BOOLEAN NOT NULL DEFAULT 0,
    reps INTEGER,
    rest_seconds INTEGER,
    performed_at_iso VARCHAR(32),
    created_at_iso VARCHAR(32) NOT NULL,
    updated_at_iso VARCHAR(32) NOT NULL
)
"""

FIRST_REVISION_SETS_DDL = """
CREATE TABLE sets (
    id VARCHAR(64) PRIMARY KEY,
    device_id VARCHAR(64) NOT NULL,
    workout_type VARCHAR(64),
    weight_lb FLOAT,
    reps INTEGER,
    rest_seconds INTEGER,
    performed_at_iso VARCHAR(32),
    created_at_iso VARCHAR(32) NOT NULL,
    updated_at_iso VARCHAR(32) NOT NULL
)
"""


def make_engine(ddl=None):
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    if ddl:
        with engine.begin() as conn:
            conn.exec_driver_sql(ddl)
    else:
        Base.metadata.create_all(engine)
    return engine


def client_for(engine):
    Session = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def override_get_db():
        db = Session()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def engine():
    eng = make_engine()
    yield eng
    eng.dispose()


@pytest.fixture
def db_session(engine):
    db = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    yield db
    db.close()


@pytest.fixture
def client(engine):
    yield client_for(engine)
    app.dependency_overrides.clear()


@pytest.fixture
def legacy_engine():
    eng = make_engine(LEGACY_SETS_DDL)
    yield eng
    eng.dispose()


@pytest.fixture
def legacy_client(legacy_engine):
    yield client_for(legacy_engine)
    app.dependency_overrides.clear()


@pytest.fixture
def first_revision_client():
    eng = make_engine(FIRST_REVISION_SETS_DDL)
    yield client_for(eng)
    app.dependency_overrides.clear()
    eng.dispose()


def make_set_payload(**overrides):
    payload = {
        "workoutType": "bench press",
        "weightLb": 135,
        "reps": 8,
        "restSeconds": 90,
        "performedAtISO": "2026-01-08T20:35:00.000Z",
    }
    payload.update(overrides)
    return payload
