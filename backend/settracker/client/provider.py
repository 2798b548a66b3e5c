"""Local-first state container for a device's sets.

Mutations apply to local state immediately, are persisted to the
``LocalStore`` and queue a ``SyncEvent`` in the outbox. ``flush`` drains the
outbox with one bulk push; ``SyncWorker`` calls it in the background and
keeps retrying until the server acknowledges.

Every sync takes a sequence number. A response that comes back after a newer
sync has started is dropped.
"""
from __future__ import annotations

import logging
import threading
import uuid
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Literal, Optional

from settracker.client.api import SetsApiClient, SyncError
from settracker.client.storage import (
    LocalStore,
    load_pending_deletes,
    load_pending_sync,
    load_sets,
    save_pending_deletes,
    save_pending_sync,
    save_sets,
)
from settracker.errors import SetNotFoundError
from settracker.schemas.logged_set import LoggedSet, SetCreate, SetPatch
from settracker.sync import merge_sets
from settracker.timeutil import now_iso

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SyncEvent:
    kind: Literal["upsert", "delete"]
    set_id: str
    at: str = field(default_factory=now_iso)


class SetsProvider:
    def __init__(self, api: SetsApiClient, store: LocalStore):
        self.api = api
        self.store = store
        self.sets: list[LoggedSet] = []
        self.is_loaded = False
        self.error: Optional[str] = None
        self.pending_sync = False
        self.pending_deletes: list[str] = []
        self.outbox: deque[SyncEvent] = deque()
        self._sync_seq = 0
        self._lock = threading.RLock()
        self._listeners: list[Callable[[SyncEvent], None]] = []

    # STATE
    def _persist(self) -> None:
        save_sets(self.store, self.sets)
        save_pending_sync(self.store, self.pending_sync)
        save_pending_deletes(self.store, self.pending_deletes)

    def _without_pending_deletes(self, sets: list[LoggedSet]) -> list[LoggedSet]:
        doomed = set(self.pending_deletes)
        return [s for s in sets if s.id not in doomed]

    def _record(self, event: SyncEvent) -> None:
        """Queue a local change for the server and wake any listener."""
        self.outbox.append(event)
        self.pending_sync = True
        self._persist()
        for listener in list(self._listeners):
            listener(event)

    def subscribe(self, listener: Callable[[SyncEvent], None]) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _begin_sync(self) -> int:
        with self._lock:
            self._sync_seq += 1
            return self._sync_seq

    def _is_stale(self, seq: int) -> bool:
        if seq != self._sync_seq:
            log.debug("discarding stale sync response #%s (latest #%s)", seq, self._sync_seq)
            return True
        return False

    def dismiss_error(self) -> None:
        self.error = None

    # SYNC
    def load(self) -> None:
        """Read local state, then push it if writes are pending, else pull and merge."""
        with self._lock:
            self.sets = load_sets(self.store)
            self.pending_sync = load_pending_sync(self.store)
            self.pending_deletes = load_pending_deletes(self.store)
            self.is_loaded = True
            needs_push = self.pending_sync or bool(self.pending_deletes)

        if needs_push:
            self.flush()
        else:
            self.refresh()

    def refresh(self) -> bool:
        seq = self._begin_sync()
        try:
            remote = self.api.list_sets()
        except SyncError as e:
            log.warning("refresh failed: %s", e)
            self.error = str(e)
            return False

        with self._lock:
            if self._is_stale(seq):
                return False
            self.sets = self._without_pending_deletes(merge_sets(self.sets, remote))
            self.error = None
            self._persist()
        return True

    def flush(self) -> bool:
        """Push full local state and pending deletes. True once the server acknowledged."""
        with self._lock:
            seq = self._begin_sync()
            sent_sets = list(self.sets)
            sent_deletes = list(self.pending_deletes)
            sent_events = len(self.outbox)

        try:
            remote = self.api.sync(sent_sets, sent_deletes)
        except SyncError as e:
            log.warning("sync push failed, keeping %d pending change(s): %s", sent_events, e)
            self.error = str(e)
            return False

        with self._lock:
            if self._is_stale(seq):
                return False
            for _ in range(sent_events):
                self.outbox.popleft()
            acknowledged = set(sent_deletes)
            self.pending_deletes = [i for i in self.pending_deletes if i not in acknowledged]
            self.sets = self._without_pending_deletes(merge_sets(self.sets, remote))
            self.pending_sync = bool(self.outbox) or bool(self.pending_deletes)
            self.error = None
            self._persist()
        return True

    # MUTATIONS
    def add_set(self, **fields) -> LoggedSet:
        data = SetCreate(**fields)
        stamp = now_iso()
        new_set = LoggedSet(id=str(uuid.uuid4()), created_at_iso=stamp, updated_at_iso=stamp, **data.model_dump())
        with self._lock:
            self.sets = [new_set, *self.sets]
            self._record(SyncEvent("upsert", new_set.id))
        return new_set

    def update_set(self, set_id: str, **fields) -> LoggedSet:
        changes = SetPatch(id=set_id, **fields).changes()
        with self._lock:
            existing = next((s for s in self.sets if s.id == set_id), None)
            if existing is None:
                raise SetNotFoundError(set_id)
            # revalidate so the bodyweight rule applies to edits too
            updated = LoggedSet.model_validate({**existing.model_dump(), **changes, "updated_at_iso": now_iso()})
            self.sets = [updated if s.id == set_id else s for s in self.sets]
            self._record(SyncEvent("upsert", set_id))
        return updated

    def delete_set(self, set_id: str) -> None:
        with self._lock:
            self.sets = [s for s in self.sets if s.id != set_id]
            if set_id not in self.pending_deletes:
                self.pending_deletes.append(set_id)
            self._record(SyncEvent("delete", set_id))


class SyncWorker(threading.Thread):
    """Background drain of a provider's outbox, retried until acknowledged."""

    def __init__(self, provider: SetsProvider, retry_seconds: float = 30.0):
        super().__init__(name="settracker-sync", daemon=True)
        self.provider = provider
        self.retry_seconds = retry_seconds
        self._wake = threading.Event()
        self._stopping = threading.Event()
        self._unsubscribe = provider.subscribe(lambda _event: self._wake.set())

    def run(self) -> None:
        while not self._stopping.is_set():
            timeout = self.retry_seconds if self.provider.pending_sync else None
            self._wake.wait(timeout)
            self._wake.clear()
            if self._stopping.is_set():
                break
            if not self.provider.pending_sync:
                continue
            try:
                self.provider.flush()
            except Exception:
                # keep the worker alive; the next wake or retry tries again
                log.exception("background sync failed")

    def stop(self, timeout: Optional[float] = None) -> None:
        self._unsubscribe()
        self._stopping.set()
        self._wake.set()
        self.join(timeout)
