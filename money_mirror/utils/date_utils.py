"""Date manipulation utilities"""

from datetime import date, datetime

DAYS_PER_MONTH = 30


def months_between(start: date, end: date) -> float:
    """Fractional months from start to end using 30-day months (negative if end is earlier)"""
    return (end - start).days / DAYS_PER_MONTH


def as_date(value: date | datetime) -> date:
    """Strip the time component from a datetime; dates pass through"""
    return value.date() if isinstance(value, datetime) else value


def parse_timestamp(value: str) -> datetime:
    """ISO 8601 timestamp; a trailing "Z" (UTC) is accepted on every supported Python"""
    text = str(value)
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)
