from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def utcnow() -> datetime:
    """Server-side 'now' in UTC (naive, which is how every timestamp is stored)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_naive(dt: datetime) -> datetime:
    """Normalize to UTC-naive; naive input is taken to already be UTC."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def to_utc_z(dt: Optional[datetime]) -> Optional[str]:
    """ISO-8601 with a trailing 'Z'. Naive values are treated as UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def get_zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone '{name}'") from e


def local_day_range_utc(start: date, end: date, tz: ZoneInfo) -> Tuple[datetime, datetime]:
    """
    Widen two local calendar dates to a UTC range covering both days entirely.

    The lower bound is local midnight of ``start``; the upper bound is one
    microsecond before local midnight of the day after ``end``.
    """
    lower = datetime.combine(start, time.min, tzinfo=tz)
    next_day = datetime.combine(end + timedelta(days=1), time.min, tzinfo=tz)
    upper = next_day - timedelta(microseconds=1)
    return to_utc_naive(lower), to_utc_naive(upper)
