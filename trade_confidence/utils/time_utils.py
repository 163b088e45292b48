"""
Time helpers for freshness scoring.

All engine arithmetic happens on timezone-aware UTC datetimes. Naive
datetimes coming from callers are interpreted as UTC, never as local time.
"""

from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return the current UTC datetime with timezone info.

    Prefer this over ``datetime.utcnow()`` (which returns naive datetimes).
    """
    return datetime.now(tz=timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to a naive datetime; convert an aware one to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def hours_between(earlier: datetime, later: datetime) -> float:
    """Return ``later - earlier`` in (possibly negative) fractional hours."""
    return (ensure_utc(later) - ensure_utc(earlier)).total_seconds() / 3600.0


def parse_iso_datetime(text: str) -> datetime:
    """Parse an ISO-8601 timestamp (``Z`` suffix allowed) into aware UTC.

    Raises:
        ValueError: If ``text`` is not a valid ISO-8601 timestamp.
    """
    cleaned = text.strip()
    if cleaned.endswith("Z"):
        cleaned = cleaned[:-1] + "+00:00"
    return ensure_utc(datetime.fromisoformat(cleaned))
