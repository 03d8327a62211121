"""Replay protection: event timestamp freshness."""

from __future__ import annotations

from datetime import datetime, timezone


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def is_fresh(
    event_timestamp: datetime,
    now: datetime | None = None,
    max_age_seconds: float = 300,
    enabled: bool = True,
) -> bool:
    """Check an event timestamp against the accepted age window.

    Valid iff ``0 <= now - event_timestamp <= max_age_seconds``, so both
    stale deliveries and deliveries stamped in the future are rejected.
    Always True when ``enabled`` is False. Naive datetimes are read as UTC.
    """
    if not enabled:
        return True

    if now is None:
        now = datetime.now(timezone.utc)
    age = (_aware(now) - _aware(event_timestamp)).total_seconds()
    return 0 <= age <= max_age_seconds
