from __future__ import annotations
import logging
from typing import Any, Callable, Iterable, Optional

from sqlalchemy import delete, insert, literal_column, select, update
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session
from sqlalchemy.sql.base import Executable

from settracker.constants import OPTIONAL_COLUMNS, SHARED_TENANT, WORKOUT_TYPES
from settracker.errors import SetNotFoundError
from settracker.models import SetRow
from settracker.schemas.logged_set import LoggedSet
from settracker.timeutil import now_iso

log = logging.getLogger(__name__)

# Fragments of the error text a store produces for a column it does not know
_MISSING_COLUMN_MARKERS = ("schema cache", "does not exist", "no such column", "has no column named")


def missing_optional_column(message: str, candidates: Iterable[str] = OPTIONAL_COLUMNS) -> Optional[str]:
    """Name of the optional column a store error complains about, if any."""
    lowered = (message or "").lower()
    if not any(marker in lowered for marker in _MISSING_COLUMN_MARKERS):
        return None
    for column in candidates:
        if column in lowered:
            return column
    return None


def row_to_set(row: dict[str, Any]) -> LoggedSet:
    workout_type = row.get("workout_type")
    if workout_type not in WORKOUT_TYPES:
        workout_type = None
    return LoggedSet(
        id=row["id"],
        workout_type=workout_type,
        weight_lb=row.get("weight_lb"),
        weight_is_bodyweight=bool(row.get("weight_is_bodyweight") or False),
        reps=row.get("reps"),
        rest_seconds=row.get("rest_seconds"),
        duration_seconds=row.get("duration_seconds"),
        performed_at_iso=row.get("performed_at_iso"),
        created_at_iso=row["created_at_iso"],
        updated_at_iso=row.get("updated_at_iso") or row["created_at_iso"],
    )


def set_to_row(logged: LoggedSet, tenant: str = SHARED_TENANT) -> dict[str, Any]:
    return {
        "id": logged.id,
        "device_id": tenant,
        "workout_type": logged.workout_type,
        "weight_lb": logged.weight_lb,
        "weight_is_bodyweight": logged.weight_is_bodyweight,
        "reps": logged.reps,
        "rest_seconds": logged.rest_seconds,
        "duration_seconds": logged.duration_seconds,
        "performed_at_iso": logged.performed_at_iso,
        "created_at_iso": logged.created_at_iso,
        "updated_at_iso": logged.updated_at_iso,
    }


class SetRepository:
    """Reads and writes the ``sets`` table for one tenant.

    Reads select ``*`` and writes go through ``_write`` so that a table which
    has not yet been migrated to carry the optional columns keeps working.
    """
    table = SetRow.__table__

    def __init__(self, db: Session, tenant: str = SHARED_TENANT):
        self.db = db
        self.tenant = tenant

    # READS
    def _select(self):
        return select(literal_column("*")).select_from(self.table).where(self.table.c.device_id == self.tenant)

    def list(self) -> list[LoggedSet]:
        rows = self.db.execute(self._select()).mappings().all()
        items = [row_to_set(dict(r)) for r in rows]
        items.sort(key=lambda s: s.performed_at_iso or s.created_at_iso, reverse=True)
        return items

    def get(self, set_id: str) -> Optional[LoggedSet]:
        row = self.db.execute(self._select().where(self.table.c.id == set_id)).mappings().first()
        return row_to_set(dict(row)) if row else None

    # WRITES
    def _write(self, build: Callable[[dict[str, Any]], Executable], values: dict[str, Any]) -> int:
        """Execute and commit, returning the rowcount; strips each unknown optional column at most once."""
        values = dict(values)
        stripped: list[str] = []
        while True:
            try:
                rowcount = self.db.execute(build(values)).rowcount
                self.db.commit()
                return rowcount
            except DBAPIError as e:
                self.db.rollback()
                column = missing_optional_column(str(e.orig or e), [c for c in OPTIONAL_COLUMNS if c in values])
                if column is None or column in stripped:
                    raise
                log.warning("sets table is missing column %s; retrying without it", column)
                stripped.append(column)
                values.pop(column)

    def create(self, logged: LoggedSet) -> LoggedSet:
        self._write(lambda v: insert(self.table).values(**v), set_to_row(logged, self.tenant))
        return self.get(logged.id) or logged

    def update(self, set_id: str, changes: dict[str, Any], *, updated_at_iso: Optional[str] = None) -> LoggedSet:
        values = dict(changes)
        if values.get("weight_is_bodyweight"):
            values["weight_lb"] = None
        values["updated_at_iso"] = updated_at_iso or now_iso()
        def stmt(v):
            return (
                update(self.table)
                .where(self.table.c.id == set_id, self.table.c.device_id == self.tenant)
                .values(**v)
            )

        if self._write(stmt, values) == 0:
            raise SetNotFoundError(set_id)
        return self.get(set_id)

    def replace(self, logged: LoggedSet) -> LoggedSet:
        row = set_to_row(logged, self.tenant)
        row.pop("id")
        row.pop("device_id")
        return self.update(logged.id, row, updated_at_iso=logged.updated_at_iso)

    def delete(self, set_id: str) -> None:
        """Idempotent: deleting an unknown id is not an error."""
        self.delete_many([set_id])

    def delete_many(self, set_ids: Iterable[str]) -> int:
        ids = list(set_ids)
        if not ids:
            return 0
        stmt = delete(self.table).where(self.table.c.id.in_(ids), self.table.c.device_id == self.tenant)
        deleted = self.db.execute(stmt).rowcount
        self.db.commit()
        return deleted

    def upsert(self, logged: LoggedSet) -> bool:
        """Insert or overwrite unless the stored copy is newer. Returns True if written."""
        existing = self.get(logged.id)
        if existing is None:
            self.create(logged)
            return True
        if existing.last_modified_iso > logged.last_modified_iso:
            log.info("skipping stale upsert for %s (%s < %s)",
                     logged.id, logged.last_modified_iso, existing.last_modified_iso)
            return False
        self.replace(logged)
        return True

    def bulk_sync(self, sets: Iterable[LoggedSet], deleted_ids: Iterable[str]) -> list[LoggedSet]:
        # deletes then upserts; no transaction spans the two steps
        self.delete_many(deleted_ids)
        for logged in sets:
            self.upsert(logged)
        return self.list()
