"""
Centralized utilities for time handling.
Goal: consistent UTC storage regardless of what the database driver hands back.
"""
from datetime import datetime, time, timedelta, timezone
from typing import Optional


def utcnow() -> datetime:
    """
    Get the current timezone-aware UTC datetime.
    Always use this instead of datetime.utcnow() or datetime.now().
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes (SQLite drops tzinfo) as UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def start_of_next_day(now: Optional[datetime] = None) -> datetime:
    """Midnight UTC after ``now``; anything strictly before it is due 'today or earlier'."""
    now = ensure_utc(now) if now else utcnow()
    return datetime.combine(now.date() + timedelta(days=1), time.min, tzinfo=timezone.utc)


def isoformat(dt: Optional[datetime]) -> Optional[str]:
    """Serialize a datetime as an ISO-8601 UTC string (or None)."""
    dt = ensure_utc(dt)
    return dt.isoformat() if dt else None
