"""Time helpers; all timestamps in the pipeline are UTC."""

from datetime import datetime

import pytz

UTC = pytz.UTC


def now_utc() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC, treating naive values as UTC."""
    if dt.tzinfo is None:
        return UTC.localize(dt)
    return dt.astimezone(UTC)
