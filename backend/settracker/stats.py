# settracker/stats.py
"""Aggregates behind the trends page.

Days are Pacific-time calendar days keyed ``YYYY-MM-DD``. Sets without a
performed time never land on a day.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from settracker.constants import WORKOUT_TYPES
from settracker.schemas.logged_set import LoggedSet
from settracker.timeutil import format_pt_day_label, to_pt_day_key


@dataclass(slots=True)
class DateRange:
    start: Optional[date] = None
    end: Optional[date] = None

    def bounds(self) -> Optional[tuple[date, date]]:
        """(start, end) with a missing end meaning a single day."""
        start = self.start
        end = self.end or self.start
        if start is None or end is None:
            return None
        return start, end


def _days(start: date, end: date) -> list[date]:
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def sort_sets(sets: Iterable[LoggedSet]) -> list[LoggedSet]:
    """Newest first by performed time, falling back to creation time."""
    return sorted(sets, key=lambda s: s.performed_at_iso or s.created_at_iso, reverse=True)


def filter_sets_by_range(sets: list[LoggedSet], date_range: Optional[DateRange]) -> list[LoggedSet]:
    bounds = date_range.bounds() if date_range else None
    if bounds is None:
        return sets
    from_key, to_key = (d.isoformat() for d in bounds)
    out = []
    for s in sets:
        key = to_pt_day_key(s.performed_at_iso)
        if key and from_key <= key <= to_key:
            out.append(s)
    return out


def build_daily_counts(sets: Iterable[LoggedSet], date_range: Optional[DateRange]) -> list[dict]:
    bounds = date_range.bounds() if date_range else None
    if bounds is None:
        return []
    counts: dict[str, int] = {}
    for s in sets:
        key = to_pt_day_key(s.performed_at_iso)
        if key:
            counts[key] = counts.get(key, 0) + 1

    return [
        {"date": format_pt_day_label(day), "dayKey": day.isoformat(), "count": counts.get(day.isoformat(), 0)}
        for day in _days(*bounds)
    ]


def build_volume_by_workout_type(sets: Iterable[LoggedSet]) -> list[dict]:
    """Total weight x reps per workout type, catalog order, zero totals dropped."""
    totals = {t: 0.0 for t in WORKOUT_TYPES}
    for s in sets:
        if not s.workout_type:
            continue
        if s.weight_is_bodyweight or s.weight_lb is None or s.reps is None:
            continue
        totals[s.workout_type] += s.weight_lb * s.reps

    return [{"workoutType": t, "volume": totals[t]} for t in WORKOUT_TYPES if totals[t] > 0]


def build_max_weight_trend(
    sets: Iterable[LoggedSet],
    date_range: Optional[DateRange],
    workout_type: str,
) -> list[dict]:
    bounds = date_range.bounds() if date_range else None
    if bounds is None:
        return []
    max_by_day: dict[str, float] = {}
    for s in sets:
        if s.workout_type != workout_type:
            continue
        if s.weight_is_bodyweight or s.weight_lb is None:
            continue
        key = to_pt_day_key(s.performed_at_iso)
        if not key:
            continue
        current = max_by_day.get(key)
        if current is None or s.weight_lb > current:
            max_by_day[key] = s.weight_lb

    return [
        {"date": format_pt_day_label(day), "dayKey": day.isoformat(), "maxWeight": max_by_day.get(day.isoformat())}
        for day in _days(*bounds)
    ]
