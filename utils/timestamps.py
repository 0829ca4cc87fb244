# utils/timestamps.py
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current UTC time at the millisecond precision BSON dates store."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Stored dates are UTC; drivers without tz_aware hand them back naive
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
