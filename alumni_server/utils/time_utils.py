from datetime import datetime, timezone, timedelta
from typing import Optional


def utc_now() -> datetime:
    """Return the current naive UTC datetime truncated to milliseconds.

    MongoDB stores datetimes with millisecond precision, so truncating here
    keeps a freshly built document equal to the one read back later.
    """
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def minutes_from_now(minutes: int) -> datetime:
    return utc_now() + timedelta(minutes=minutes)


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    """Serialize a stored naive-UTC datetime for API responses with an explicit UTC offset."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()
