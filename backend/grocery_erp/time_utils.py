from __future__ import annotations

from datetime import datetime, time, timedelta, timezone
from typing import Optional


def utcnow() -> datetime:
    """Server-side 'now' in UTC (naive, canonical)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def local_day_bounds_utc(now: Optional[datetime] = None) -> tuple[datetime, datetime]:
    """
    Start and end of the server-local calendar day containing `now`,
    expressed as UTC-naive datetimes so they compare against stored values.

    `now` may be naive (treated as server-local) or aware.
    """
    local_day = (now or datetime.now()).astimezone().date()
    # Each midnight is converted with the UTC offset in force at that midnight
    start = datetime.combine(local_day, time.min).astimezone(timezone.utc).replace(tzinfo=None)
    end = datetime.combine(local_day + timedelta(days=1), time.min).astimezone(timezone.utc).replace(tzinfo=None)
    return start, end


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 datetime string and normalize to UTC-naive datetime.

    - None / "" -> None
    - "YYYY-MM-DDTHH:MM" (naive) is interpreted as UTC
    - "...Z" or "...+/-HH:MM" is converted to UTC and tzinfo is stripped
    """
    if value is None:
        return None
    s = value.strip()
    if not s:
        return None

    # Accept trailing Z
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    dt = datetime.fromisoformat(s)

    if dt.tzinfo is None:
        return dt

    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def to_utc_z(dt: Optional[datetime]) -> Optional[str]:
    """
    Serializes datetime to ISO-8601 with trailing 'Z'.
    If dt is naive, it is treated as UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt_utc = dt.astimezone(timezone.utc).replace(microsecond=0)
    return dt_utc.isoformat().replace("+00:00", "Z")
