# settracker/sync.py
"""Last-write-wins reconciliation between a device's sets and the server's."""
from __future__ import annotations

from typing import Iterable

from settracker.schemas.logged_set import LoggedSet


def merge_sets(local: Iterable[LoggedSet], remote: Iterable[LoggedSet]) -> list[LoggedSet]:
    """
    Union of both sides, one record per id.

    When an id is on both sides the record with the greater
    ``updatedAtISO`` (or ``createdAtISO`` when unset) wins. Exact ties keep
    the remote record so every device settles on the server copy.

    Order: local records first, then remote-only records, each in input order.
    """
    merged: dict[str, LoggedSet] = {}
    for s in local:
        merged[s.id] = s

    for s in remote:
        existing = merged.get(s.id)
        if existing is None or s.last_modified_iso >= existing.last_modified_iso:
            merged[s.id] = s

    return list(merged.values())
