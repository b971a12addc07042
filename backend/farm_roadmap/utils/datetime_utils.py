"""
Timezone-aware datetime utilities.

All roadmap dates are stored and compared as UTC. SQLite drops tzinfo on
round-trip, so values read back from the database pass through ensure_utc.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Optional

# UTC timezone constant
UTC = timezone.utc

SECONDS_PER_DAY = 24 * 60 * 60


def now_utc() -> datetime:
    """
    Get current UTC datetime (timezone-aware).

    Replaces datetime.utcnow() which is deprecated in Python 3.12+.

    Returns:
        datetime: Current UTC time with tzinfo set to UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure datetime is timezone-aware and in UTC.

    Args:
        dt: datetime to convert (can be None, naive, or timezone-aware)

    Returns:
        Optional[datetime]: UTC timezone-aware datetime, or None if input is None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Naive datetime - assume UTC
        return dt.replace(tzinfo=UTC)

    # Already timezone-aware - convert to UTC
    return dt.astimezone(UTC)


def to_naive_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Convert to naive UTC for storage in SQLite DateTime columns."""
    if dt is None:
        return None
    return ensure_utc(dt).replace(tzinfo=None)


def add_days(dt: datetime, days: int) -> datetime:
    """Shift a datetime by whole calendar days."""
    return dt + timedelta(days=days)


def days_until(target: datetime, reference: Optional[datetime] = None) -> int:
    """
    Whole days from reference to target, rounded up.

    Negative once the target has passed, e.g. -1 for a target 1.5 days ago.
    """
    reference = ensure_utc(reference) or now_utc()
    delta = ensure_utc(target) - reference
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)
