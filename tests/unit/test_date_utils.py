"""Unit tests for date helpers"""

from datetime import date, datetime, timedelta, timezone
from money_mirror.utils.date_utils import as_date, months_between, parse_timestamp


def test_months_between_uses_30_day_months():
    start = date(2025, 1, 1)

    assert months_between(start, start + timedelta(days=180)) == 6
    assert months_between(start, start - timedelta(days=15)) == -0.5


def test_as_date():
    assert as_date(datetime(2025, 3, 4, 23, 59)) == date(2025, 3, 4)
    assert as_date(date(2025, 3, 4)) == date(2025, 3, 4)


def test_parse_timestamp_variants():
    utc = datetime(2025, 1, 31, 12, tzinfo=timezone.utc)

    assert parse_timestamp("2025-01-31T12:00:00Z") == utc
    assert parse_timestamp("2025-01-31T12:00:00+00:00") == utc
    assert parse_timestamp("2025-01-31T07:00:00-05:00") == utc
    assert parse_timestamp("2025-01-31T12:00:00").tzinfo is None
