"""Device-local persistence.

A small JSON key/value file standing in for browser local storage. Each key
holds a JSON-encoded string value, the same shape the web client keeps.
Unreadable or malformed values load as empty defaults.
"""
from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from settracker.constants import PENDING_DELETE_KEY, PENDING_SYNC_KEY, STORAGE_KEY
from settracker.schemas.logged_set import LoggedSet

log = logging.getLogger(__name__)


class LocalStore:
    def __init__(self, path: str | os.PathLike | None = None):
        # path=None keeps everything in memory
        self.path = Path(path) if path else None
        self._lock = threading.Lock()
        self._data: dict[str, str] = self._read_file()

    def _read_file(self) -> dict[str, str]:
        if self.path is None or not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            log.warning("ignoring unreadable local store %s: %s", self.path, e)
            return {}
        if not isinstance(raw, dict):
            return {}
        return {k: v for k, v in raw.items() if isinstance(v, str)}

    def _flush(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(self._data), encoding="utf-8")
        os.replace(tmp, self.path)

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value
            self._flush()

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)
            self._flush()


def _load_json_list(store: LocalStore, key: str) -> list:
    raw = store.get_item(key)
    if not raw:
        return []
    try:
        parsed = json.loads(raw)
    except ValueError:
        return []
    return parsed if isinstance(parsed, list) else []


def load_sets(store: LocalStore) -> list[LoggedSet]:
    sets = []
    for item in _load_json_list(store, STORAGE_KEY):
        try:
            sets.append(LoggedSet.model_validate(item))
        except ValidationError:
            log.warning("dropping malformed local set: %r", item)
    return sets


def save_sets(store: LocalStore, sets: list[LoggedSet]) -> None:
    payload = [s.model_dump(by_alias=True) for s in sets]
    store.set_item(STORAGE_KEY, json.dumps(payload))


def load_pending_sync(store: LocalStore) -> bool:
    return store.get_item(PENDING_SYNC_KEY) == "1"


def save_pending_sync(store: LocalStore, pending: bool) -> None:
    store.set_item(PENDING_SYNC_KEY, "1" if pending else "0")


def load_pending_deletes(store: LocalStore) -> list[str]:
    return [i for i in _load_json_list(store, PENDING_DELETE_KEY) if isinstance(i, str)]


def save_pending_deletes(store: LocalStore, ids: list[str]) -> None:
    store.set_item(PENDING_DELETE_KEY, json.dumps(ids))
