# settracker/timeutil.py
"""Pacific-time helpers.

Every stored timestamp is UTC ISO-8601 with millisecond precision and a
trailing ``Z`` (``2026-01-08T20:35:00.000Z``). Fixed width keeps string
comparison chronological, which the sync merge relies on. Calendar views and
the clipboard export present those instants in Pacific time.
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

PT_TIMEZONE = "America/Los_Angeles"
PT = ZoneInfo(PT_TIMEZONE)


def to_iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_iso() -> str:
    return to_iso(datetime.now(timezone.utc))


def parse_iso(text: str) -> datetime:
    """
    Parse '2026-01-08T20:35:00.000Z' (or with +00:00) -> aware UTC datetime.
    Naive values are taken as UTC.
    """
    s = (text or "").strip()
    if not s:
        raise ValueError("empty timestamp")
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def normalize_iso(text: str) -> str:
    return to_iso(parse_iso(text))


def iso_to_pt(iso: str | None) -> datetime | None:
    if not iso:
        return None
    return parse_iso(iso).astimezone(PT)


def now_pt() -> datetime:
    return datetime.now(PT)


def pt_date_to_iso(date_str: str, time_str: str) -> str:
    """Combine a PT calendar date and wall time into a UTC ISO string.

    Accepts ``HH:MM`` or ``HH:MM:SS``. Returns "" when either part is
    missing or unparseable.
    """
    if not date_str or not time_str:
        return ""
    parts = time_str.split(":")
    if len(parts) < 2:
        return ""
    if len(parts) == 2:
        parts.append("00")
    try:
        hour, minute, second = (int(p) for p in parts[:3])
        day = date.fromisoformat(date_str)
        local = datetime(day.year, day.month, day.day, hour, minute, second, tzinfo=PT)
    except ValueError:
        return ""
    return to_iso(local)


def to_pt_date_input(iso: str | None) -> str:
    pt = iso_to_pt(iso)
    return pt.strftime("%Y-%m-%d") if pt else ""


def to_pt_time_input(iso: str | None) -> str:
    pt = iso_to_pt(iso)
    return pt.strftime("%H:%M") if pt else ""


def to_pt_day_key(iso: str | None) -> str | None:
    pt = iso_to_pt(iso)
    return pt.strftime("%Y-%m-%d") if pt else None


def _ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return f"{day}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_pt(iso: str | None) -> str:
    pt = iso_to_pt(iso)
    if pt is None:
        return "No performed time"
    hour = pt.hour % 12 or 12
    suffix = "AM" if pt.hour < 12 else "PM"
    return f"{pt:%B} {_ordinal(pt.day)}, {pt.year} · {hour}:{pt:%M} {suffix} PT"


def format_pt_day_label(day: date) -> str:
    """'Jan 8' style label for chart axes."""
    return f"{day:%b} {day.day}"
