from datetime import date

import pytest

from settracker.timeutil import (
    format_pt,
    format_pt_day_label,
    normalize_iso,
    pt_date_to_iso,
    to_pt_date_input,
    to_pt_day_key,
    to_pt_time_input,
)


def test_pt_date_to_iso_normalizes_seconds():
    assert pt_date_to_iso("2026-01-08", "12:35:30") == "2026-01-08T20:35:30.000Z"
    assert pt_date_to_iso("2026-01-08", "12:35") == "2026-01-08T20:35:00.000Z"


def test_pt_date_to_iso_handles_daylight_time():
    assert pt_date_to_iso("2026-07-04", "09:00") == "2026-07-04T16:00:00.000Z"


@pytest.mark.parametrize("d, t", [("", "12:00"), ("2026-01-08", ""), ("2026-01-08", "noon"), ("not-a-date", "12:00")])
def test_pt_date_to_iso_bad_input(d, t):
    assert pt_date_to_iso(d, t) == ""


def test_pt_inputs_from_iso():
    iso = "2026-01-09T07:30:00.000Z"  # still Jan 8 in PT
    assert to_pt_date_input(iso) == "2026-01-08"
    assert to_pt_time_input(iso) == "23:30"
    assert to_pt_day_key(iso) == "2026-01-08"
    assert to_pt_day_key(None) is None
    assert to_pt_date_input(None) == ""


def test_format_pt():
    assert format_pt("2026-01-08T20:35:00.000Z") == "January 8th, 2026 · 12:35 PM PT"
    assert format_pt(None) == "No performed time"


def test_normalize_iso_fixed_width():
    assert normalize_iso("2026-01-08T20:35:00Z") == "2026-01-08T20:35:00.000Z"
    assert normalize_iso("2026-01-08T12:35:00-08:00") == "2026-01-08T20:35:00.000Z"


def test_day_label():
    assert format_pt_day_label(date(2026, 1, 8)) == "Jan 8"
