"""Shared utilities for the dashboard service."""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Timezone-aware UTC now. Every timestamp written to the store is aware."""
    return datetime.now(timezone.utc)


def as_utc(moment: datetime) -> datetime:
    """Aware UTC view of a timestamp read back from the store.

    Some backends (SQLite) drop the offset on read; such values are UTC.
    """
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def parse_timestamp(ts: float | None) -> datetime:
    """Convert optional Unix timestamp (seconds) to aware UTC datetime; fallback to now."""
    if ts is None:
        return utcnow()
    return datetime.fromtimestamp(ts, tz=timezone.utc)
