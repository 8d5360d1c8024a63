"""Presentation helpers for performance numbers and activity timestamps."""

from __future__ import annotations

from datetime import datetime, timezone

SECONDS_PER_DAY = 24 * 60 * 60
ACTIVE_WINDOW_DAYS = 7


def format_percent(value: float, decimals: int = 0) -> str:
    if decimals == 0:
        return f"{round(value)}%"
    return f"{value:.{decimals}f}%"


def to_hours(seconds: int) -> int:
    return round(seconds / 3600)


def as_utc(ts: datetime) -> datetime:
    # SQLite hands timezone-aware columns back naive
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def days_since(ts: datetime, now: datetime | None = None) -> int:
    """Whole days elapsed since ``ts``; never negative."""
    current = as_utc(now) if now else datetime.now(timezone.utc)
    elapsed = (current - as_utc(ts)).total_seconds()
    return max(0, int(elapsed // SECONDS_PER_DAY))


def describe_last_activity(ts: datetime | None, now: datetime | None = None) -> str | None:
    if ts is None:
        return None
    days = days_since(ts, now)
    if days == 0:
        return "Today"
    if days == 1:
        return "1 day ago"
    return f"{days} days ago"


def activity_status(
    ts: datetime, now: datetime | None = None, window_days: int = ACTIVE_WINDOW_DAYS
) -> str:
    return "active" if days_since(ts, now) <= window_days else "inactive"
