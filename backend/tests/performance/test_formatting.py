"""Tests for activity and percentage formatting."""

from datetime import datetime, timedelta, timezone

from orthosim.performance.formatting import (
    activity_status,
    days_since,
    describe_last_activity,
    format_percent,
    to_hours,
)

NOW = datetime(2025, 6, 10, 12, 0, tzinfo=timezone.utc)


def test_format_percent():
    assert format_percent(90) == "90%"
    assert format_percent(86.5, decimals=1) == "86.5%"
    assert format_percent(0.0, decimals=1) == "0.0%"


def test_to_hours_rounds():
    assert to_hours(0) == 0
    assert to_hours(5400) == 2  # 1.5h
    assert to_hours(3000) == 1


def test_describe_last_activity():
    assert describe_last_activity(None, NOW) is None
    assert describe_last_activity(NOW - timedelta(hours=3), NOW) == "Today"
    assert describe_last_activity(NOW - timedelta(days=1, hours=1), NOW) == "1 day ago"
    assert describe_last_activity(NOW - timedelta(days=12), NOW) == "12 days ago"


def test_naive_timestamps_are_treated_as_utc():
    naive = (NOW - timedelta(days=2)).replace(tzinfo=None)
    assert days_since(naive, NOW) == 2


def test_future_timestamps_count_as_today():
    assert days_since(NOW + timedelta(days=1), NOW) == 0


def test_activity_status_window():
    assert activity_status(NOW - timedelta(days=7), NOW) == "active"
    assert activity_status(NOW - timedelta(days=8), NOW) == "inactive"
    assert activity_status(NOW - timedelta(days=2), NOW, window_days=1) == "inactive"
