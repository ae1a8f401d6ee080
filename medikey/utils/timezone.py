from datetime import datetime, date, timezone as dt_timezone
from typing import Optional


def utcnow() -> datetime:
    """Current time as UTC-naive, the form every timestamp column stores"""
    return datetime.now(dt_timezone.utc).replace(tzinfo=None)


def to_utc_naive(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize any datetime to UTC-naive (tzinfo=None) for consistent storage/comparison.
    - Aware datetimes are converted to UTC and tzinfo is stripped
    - Naive datetimes are returned as-is (assumed UTC)
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(dt_timezone.utc).replace(tzinfo=None)


def to_utc_aware(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize any datetime to UTC-aware (tzinfo=UTC) for APIs needing tz-aware values.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=dt_timezone.utc)
    return dt.astimezone(dt_timezone.utc)


def parse_date(value: Optional[str]) -> Optional[date]:
    """Parse an ISO date (or datetime) string; None when missing or malformed"""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.strip()).date()
    except ValueError:
        return None


def calculate_age(date_of_birth: Optional[str], today: Optional[date] = None) -> Optional[int]:
    birth = parse_date(date_of_birth)
    if birth is None:
        return None
    today = today or utcnow().date()
    age = today.year - birth.year
    if (today.month, today.day) < (birth.month, birth.day):
        age -= 1
    return age
